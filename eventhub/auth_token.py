import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from eventhub.config import Settings
from eventhub.errors import AuthError

logger = logging.getLogger("auth_token")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, decoded from a session token."""

    user_id: int
    name: str


def create_access_token(identity: Identity, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "userId": identity.user_id,
        "name": identity.name,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expiry_minutes),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


class SessionVerifier:
    """Stateless token check run before every owner-scoped operation."""

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_iat": True},
            )
        except ExpiredSignatureError:
            raise AuthError("Token expired")
        except JWTError:
            raise AuthError("Invalid token")

        user_id = payload.get("userId")
        name = payload.get("name")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(name, str):
            raise AuthError("Invalid token")
        return Identity(user_id=user_id, name=name)

    def authenticate(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthError("Access denied. No token provided.")
        identity = self.verify(token)
        logger.debug("Authenticated user %s", identity.user_id)
        return identity
