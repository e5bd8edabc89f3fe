from eventhub.models.user import User
from eventhub.models.event import Event, Priority

__all__ = ["User", "Event", "Priority"]
