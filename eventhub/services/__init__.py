"""Service layer: request-scoped operations over the store."""

from eventhub.services.auth_service import AuthService
from eventhub.services.event_service import EventService

__all__ = ["AuthService", "EventService"]
