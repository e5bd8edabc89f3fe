# eventhub/deps/security.py
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eventhub.auth_token import Identity, SessionVerifier
from eventhub.config import Settings, get_settings

# Missing or non-bearer headers yield None rather than a FastAPI 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_session_verifier(settings: Settings = Depends(get_settings)) -> SessionVerifier:
    return SessionVerifier(settings)


def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: SessionVerifier = Depends(get_session_verifier),
) -> Identity:
    """401 if the bearer token is missing, invalid or expired; the caller's identity otherwise."""
    token = credentials.credentials if credentials else None
    return verifier.authenticate(token)
