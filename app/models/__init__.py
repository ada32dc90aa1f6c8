from .event import Event
from .journal import Journal
from .user import User

__all__ = [
    "Event",
    "Journal",
    "User",
]
