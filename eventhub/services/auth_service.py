"""Signup and login."""

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.auth_token import Identity, create_access_token
from eventhub.config import Settings
from eventhub.errors import AuthError, ConflictError, NotFoundError, PolicyError, ValidationError
from eventhub.models.user import User
from eventhub.password_policy import PASSWORD_POLICY_MESSAGE, is_strong_password
from eventhub.schemas import LoginRequest, MessageResponse, SignupRequest, TokenResponse
from eventhub.security import hash_password, verify_password

logger = logging.getLogger("auth")


class AuthService:
    """Registers users and exchanges credentials for session tokens."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def signup(self, db: AsyncSession, payload: SignupRequest) -> MessageResponse:
        """
        Validate ``payload`` and persist a new user with a hashed password.

        Raises:
            ValidationError: a field is missing or the passwords differ.
            PolicyError: the password fails the strength rules.
            ConflictError: the email is already registered.
        """
        if not all(
            (payload.name, payload.email, payload.password, payload.confirm_password)
        ):
            raise ValidationError("All fields are required")
        if payload.password != payload.confirm_password:
            raise ValidationError("Passwords do not match")
        if not is_strong_password(payload.password):
            raise PolicyError(PASSWORD_POLICY_MESSAGE)

        existing = await db.execute(select(User.id).where(User.email == payload.email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Email already registered")

        hashed = await run_in_threadpool(hash_password, payload.password)
        db.add(User(name=payload.name, email=payload.email, password_hash=hashed))
        try:
            await db.commit()
        except IntegrityError:
            # lost a race with a concurrent signup for the same email
            await db.rollback()
            raise ConflictError("Email already registered")

        logger.info("Registered new user %s", payload.email)
        return MessageResponse(message="User created successfully")

    async def login(self, db: AsyncSession, payload: LoginRequest) -> TokenResponse:
        if not payload.email or not payload.password:
            raise ValidationError("Email and password are required")

        result = await db.execute(select(User).where(User.email == payload.email))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found", status_code=400)

        matches = await run_in_threadpool(verify_password, payload.password, user.password_hash)
        if not matches:
            logger.warning("Failed login for user %s", user.id)
            raise AuthError("Incorrect password", status_code=400)

        token = create_access_token(Identity(user_id=user.id, name=user.name), self._settings)
        logger.info("User %s logged in", user.id)
        return TokenResponse(token=token)
