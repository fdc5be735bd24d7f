"""The sample catalog — the demo server's resources, templates, and tools.

``create_app()`` wires an ``App`` to a fresh dataset:

    system://info              server status and record counts
    docs://readme              the configured README
    users://{id:int}/profile   one user's profile
    users://{id:int}           one user
    projects://{id:int}        one project
    data://{collection}        every user or every project
    file:///{path:path}        any file under the configured root

    create_user                add a user (name, email, optional role)

Each handler closes over the ``Catalog`` it was registered with, never
over module globals, so two apps never share state.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from wren.app import App
from wren.config import AppConfig
from wren.content import Content, ToolResult
from wren.data import ROLES, ProjectStore, User, UserStore
from wren.errors import NotFound
from wren.files import FileSystem, guess_mime_type, is_text_type
from wren.routing.resource import Annotations
from wren.tools.schema import Argument

_BOTH = ("user", "assistant")


@dataclass(slots=True)
class Catalog:
    """The state a demo app's handlers read and mutate."""

    users: UserStore
    projects: ProjectStore
    files: FileSystem
    started: float = field(default_factory=time.monotonic)


def create_app(config: AppConfig | None = None) -> App:
    """Build the demo server with its own users, projects, and file root."""
    app = App(config)
    catalog = Catalog(
        users=UserStore(),
        projects=ProjectStore(),
        files=FileSystem(app.config.root, max_size=app.config.max_file_size),
    )
    setup_resources(app, catalog)
    setup_templates(app, catalog)
    setup_tools(app, catalog)
    return app


def setup_resources(app: App, catalog: Catalog) -> None:
    config = app.config

    @app.resource(
        "system://info",
        name="System Information",
        description="Current system information and server status",
        mime_type="application/json",
        annotations=Annotations(audience=_BOTH, priority=0.8),
    )
    def system_info(uri: str) -> dict[str, Any]:
        return {
            "server_name": config.name,
            "version": config.version,
            "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
            "uptime_seconds": round(time.monotonic() - catalog.started, 3),
            "resources": {
                "users": len(catalog.users),
                "projects": len(catalog.projects),
            },
        }

    @app.resource(
        "docs://readme",
        name="README Documentation",
        description="Server documentation and usage instructions",
        mime_type="text/markdown",
        annotations=Annotations(audience=("user",), priority=0.9),
    )
    async def readme(uri: str) -> str:
        with _reported_as(uri):
            return await catalog.files.read_text(config.readme)


def setup_templates(app: App, catalog: Catalog) -> None:
    # Registration order is match order: the more specific profile
    # template goes before the bare users://{id} one.

    @app.template(
        "users://{id:int}/profile",
        name="User Profile",
        description="Returns user profile information",
        mime_type="application/json",
        annotations=Annotations(audience=_BOTH, priority=0.7),
    )
    def user_profile(uri: str, id: str) -> dict[str, Any]:
        return _get_user(catalog, uri, id).to_dict()

    @app.template(
        "users://{id:int}",
        name="User Information",
        description="Individual user information by ID",
        mime_type="application/json",
        annotations=Annotations(audience=_BOTH, priority=0.7),
    )
    def user_info(uri: str, id: str) -> dict[str, Any]:
        return _get_user(catalog, uri, id).to_dict()

    @app.template(
        "projects://{id:int}",
        name="Project Information",
        description="Individual project information by ID",
        mime_type="application/json",
        annotations=Annotations(audience=_BOTH, priority=0.7),
    )
    def project_info(uri: str, id: str) -> dict[str, Any]:
        project = catalog.projects.get(int(id))
        if project is None:
            raise NotFound(uri, f"project not found: {id}")
        return project.to_dict()

    @app.template(
        "data://{collection}",
        name="Data Collections",
        description="Access to data collections (users, projects)",
        mime_type="application/json",
        annotations=Annotations(audience=_BOTH, priority=0.6),
    )
    def data_collection(uri: str, collection: str) -> list[dict[str, Any]]:
        if collection == "users":
            return [u.to_dict() for u in catalog.users.list()]
        if collection == "projects":
            return [p.to_dict() for p in catalog.projects.list()]
        raise NotFound(uri, f"unknown collection: {collection}")

    @app.template(
        "file:///{path:path}",
        name="File System Access",
        description="Access to files in the server's root directory",
        mime_type="text/plain",
        annotations=Annotations(audience=_BOTH, priority=0.5),
    )
    async def file(uri: str, path: str) -> Content:
        with _reported_as(uri):
            data = await catalog.files.read_bytes(path)
        mime_type = guess_mime_type(path)
        if is_text_type(mime_type):
            return Content(uri, mime_type, text=data.decode("utf-8", errors="replace"))
        return Content(uri, mime_type, blob=data)


def setup_tools(app: App, catalog: Catalog) -> None:
    @app.tool(
        "create_user",
        description="Create a new user in the system",
        arguments=(
            Argument("name", description="Full name of the user", required=True),
            Argument("email", description="Email address of the user", required=True),
            Argument(
                "role",
                description="User role (admin, user, moderator)",
                enum=ROLES,
                default="user",
            ),
        ),
    )
    def create_user(name: str, email: str, role: str = "user") -> ToolResult:
        user = catalog.users.create(name=name, email=email, role=role)
        return ToolResult.from_data(user.to_dict(), prefix="User created successfully:\n")


@contextmanager
def _reported_as(uri: str) -> Iterator[None]:
    """Re-raise a file lookup's ``NotFound`` against the requested resource URI."""
    try:
        yield
    except NotFound as exc:
        raise NotFound(uri, exc.detail) from exc


def _get_user(catalog: Catalog, uri: str, user_id: str) -> User:
    user = catalog.users.get(int(user_id))
    if user is None:
        raise NotFound(uri, f"user not found: {user_id}")
    return user
