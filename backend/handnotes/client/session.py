from __future__ import annotations

import logging
from dataclasses import dataclass

from handnotes.client.api import NotesApi
from handnotes.errors import AuthError, HandnotesError
from handnotes.models.user import MIN_PASSWORD_LENGTH, UserRead

LOGGER = logging.getLogger("handnotes.client")


@dataclass
class Session:
    access_token: str
    user: UserRead


@dataclass
class PendingConfirmation:
    email: str
    message: str


class SessionManager:
    """Holds the signed-in identity and keeps the API client's token in sync."""

    def __init__(self, api: NotesApi) -> None:
        self.api = api
        self.session: Session | None = None

    async def sign_in(self, email: str, password: str) -> Session:
        validate_credentials(email, password)
        token = await self.api.sign_in(email, password)
        self.api.access_token = token
        try:
            user = await self.api.me()
        except HandnotesError:
            self.api.access_token = None
            raise
        self.session = Session(access_token=token, user=user)
        return self.session

    async def sign_up(self, email: str, password: str) -> PendingConfirmation | Session:
        validate_credentials(email, password)
        result = await self.api.sign_up(email, password)
        if result.confirmation_required:
            return PendingConfirmation(email=email, message=result.msg)
        return await self.sign_in(email, password)

    async def sign_out(self) -> None:
        try:
            if self.session is not None:
                await self.api.sign_out()
        except HandnotesError as e:
            # the token is dropped locally either way
            LOGGER.warning("Sign-out request failed: %s", e)
        finally:
            self.session = None
            self.api.access_token = None

    def current_user(self) -> UserRead | None:
        return self.session.user if self.session else None


def validate_credentials(email: str, password: str) -> None:
    if not email:
        raise AuthError("Email is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
