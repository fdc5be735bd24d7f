"""Sample record types and seed data."""

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    email: str
    role: str
    created: str  # ISO date

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True, slots=True)
class Project:
    id: int
    name: str
    description: str
    owner_id: int
    status: str

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


ROLES: tuple[str, ...] = ("admin", "user", "moderator")

SEED_USERS: tuple[User, ...] = (
    User(1, "Alice Johnson", "alice@example.com", "admin", "2024-01-15"),
    User(2, "Bob Smith", "bob@example.com", "user", "2024-02-20"),
    User(3, "Carol Wilson", "carol@example.com", "moderator", "2024-03-10"),
)

SEED_PROJECTS: tuple[Project, ...] = (
    Project(1, "Website Redesign", "Refresh the public marketing site", 1, "active"),
    Project(2, "Mobile App", "Companion app for iOS and Android", 2, "planning"),
    Project(3, "Data Pipeline", "Nightly ingestion of usage metrics", 3, "completed"),
)
