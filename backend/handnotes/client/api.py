from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, TypeVar

import httpx

from handnotes.errors import (
    HandnotesError,
    MalformedModelOutput,
    UpstreamFailure,
    error_for_status,
)
from handnotes.models.note import MeetingData, NoteCreated, NoteRead, NoteSummary
from handnotes.models.user import SignupResult, UserRead

LOGGER = logging.getLogger("handnotes.client")

T = TypeVar("T")


def _error_message(response: httpx.Response) -> str | None:
    try:
        payload: Any = response.json()
    except ValueError:
        return response.text or None
    if not isinstance(payload, dict):
        return None
    if payload.get("error"):
        return str(payload["error"])
    detail = payload.get("detail")
    if isinstance(detail, list) and detail:
        # FastAPI validation errors
        first = detail[0]
        return str(first.get("msg", first) if isinstance(first, dict) else first)
    return str(detail) if detail else None


def _meeting_data(payload: Any) -> MeetingData:
    if isinstance(payload, dict) and payload.get("error"):
        raise HandnotesError(str(payload["error"]))
    return MeetingData.model_validate(payload)


class NotesApi:
    """
    Async HTTP client for the handnotes API. Error responses are raised as
    the matching HandnotesError subclass.
    """

    def __init__(self, http: httpx.AsyncClient, access_token: str | None = None) -> None:
        self.http = http
        self.access_token = access_token

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        try:
            response = await self.http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            LOGGER.warning("%s %s failed: %s", method, path, e)
            raise UpstreamFailure(f"Network error: {e}") from e
        if response.is_error:
            raise error_for_status(response.status_code, _error_message(response))
        return response

    @staticmethod
    def _parse(
        response: httpx.Response,
        parse: Callable[[Any], T],
        error: type[HandnotesError] = UpstreamFailure,
    ) -> T:
        """Decode a success body; bodies that are not JSON or do not fit raise ``error``."""
        try:
            return parse(response.json())
        except (ValueError, KeyError, TypeError) as e:
            LOGGER.warning("Unexpected response from %s: %s", response.request.url, e)
            raise error() from e

    # ── extraction ──────────────────────────────────────────────────────────
    async def process_notes(self, image_data: str) -> MeetingData:
        response = await self._request("POST", "/api/process-notes", json={"imageBase64": image_data})
        return self._parse(response, _meeting_data, MalformedModelOutput)

    # ── notes ───────────────────────────────────────────────────────────────
    async def create_note(self, data: MeetingData) -> uuid.UUID:
        response = await self._request("POST", "/api/notes", json=data.model_dump())
        return self._parse(response, NoteCreated.model_validate).id

    async def list_notes(self) -> list[NoteSummary]:
        response = await self._request("GET", "/api/notes")
        return self._parse(response, lambda items: [NoteSummary.model_validate(item) for item in items])

    async def get_note(self, note_id: uuid.UUID | str) -> NoteRead:
        response = await self._request("GET", f"/api/notes/{note_id}")
        return self._parse(response, NoteRead.model_validate)

    async def delete_note(self, note_id: uuid.UUID | str) -> None:
        await self._request("DELETE", f"/api/notes/{note_id}")

    # ── auth ────────────────────────────────────────────────────────────────
    async def sign_up(self, email: str, password: str) -> SignupResult:
        response = await self._request(
            "POST", "/api/auth/signup", json={"email": email, "password": password}
        )
        return self._parse(response, SignupResult.model_validate)

    async def sign_in(self, email: str, password: str) -> str:
        response = await self._request(
            "POST", "/api/auth/token", data={"username": email, "password": password}
        )
        return self._parse(response, lambda body: body["access_token"])

    async def sign_out(self) -> None:
        await self._request("POST", "/api/auth/signout")

    async def me(self) -> UserRead:
        response = await self._request("GET", "/api/auth/me")
        return self._parse(response, UserRead.model_validate)
