# eventhub/deps/services.py
from fastapi import Depends

from eventhub.config import Settings, get_settings
from eventhub.services import AuthService, EventService


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(settings)


def get_event_service() -> EventService:
    return EventService()
