"""Sample dataset — users and projects held in lock-guarded in-memory stores."""

from wren.data.models import ROLES, Project, User
from wren.data.store import ProjectStore, RecordStore, UserStore

__all__ = [
    "ROLES",
    "Project",
    "ProjectStore",
    "RecordStore",
    "User",
    "UserStore",
]
