"""
Screen state for the handnotes client.

Each screen holds its own state and talks to the API through ``NotesApi``.
Feedback goes through a ``Notifier`` (toasts) and a ``Navigator`` (routes);
nothing here renders anything. Screens never raise on API failures: they
toast and fall back to the state they were in before the action.
"""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

from handnotes.client.api import NotesApi
from handnotes.client.formatting import format_notes, format_tasks, is_image, to_data_url
from handnotes.client.session import PendingConfirmation, SessionManager
from handnotes.errors import HandnotesError
from handnotes.models.note import MeetingData, NoteRead, NoteSummary

LOGGER = logging.getLogger("handnotes.client")

LIST_ROUTE = "/"
NEW_ROUTE = "/new"
AUTH_ROUTE = "/auth"


def detail_route(note_id: uuid.UUID | str) -> str:
    return f"/notes/{note_id}"


@dataclass
class Toast:
    title: str
    description: str | None = None
    destructive: bool = False


@dataclass
class Notifier:
    toasts: list[Toast] = field(default_factory=list)

    def toast(self, title: str, description: str | None = None, destructive: bool = False) -> None:
        self.toasts.append(Toast(title, description, destructive))

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None


@dataclass
class Navigator:
    current: str = LIST_ROUTE
    history: list[str] = field(default_factory=list)

    def go(self, route: str) -> None:
        self.history.append(self.current)
        self.current = route


class MemoryClipboard:
    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text


class CheckedTasks:
    """Task indices ticked off on screen. Never sent to the server."""

    def __init__(self) -> None:
        self._checked: set[int] = set()

    def toggle(self, index: int, total: int, checked: bool | None = None) -> None:
        if not 0 <= index < total:
            return
        if checked is None:
            checked = index not in self._checked
        if checked:
            self._checked.add(index)
        else:
            self._checked.discard(index)

    def is_checked(self, index: int) -> bool:
        return index in self._checked

    def clear(self) -> None:
        self._checked.clear()

    def remaining(self, total: int) -> int:
        return total - len(self._checked)

    def __len__(self) -> int:
        return len(self._checked)


class _CopyMixin:
    notifier: Notifier
    clipboard: MemoryClipboard

    def _copy(self, text: str, label: str) -> None:
        self.clipboard.write_text(text)
        self.notifier.toast(f"{label} copied to clipboard")


class UploadState(str, enum.Enum):
    EMPTY = "empty"
    IMAGE_SELECTED = "image_selected"
    PROCESSING = "processing"
    RESULT = "result"


class UploadScreen(_CopyMixin):
    """
    Photo upload and processing.

    With ``persist=True`` a successful extraction is saved and the screen
    navigates to the new note; otherwise the result is kept on screen only.
    """

    def __init__(
        self,
        api: NotesApi,
        notifier: Notifier,
        navigator: Navigator,
        persist: bool = True,
        clipboard: MemoryClipboard | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.navigator = navigator
        self.persist = persist
        self.clipboard = clipboard or MemoryClipboard()
        self.state = UploadState.EMPTY
        self.image: str | None = None
        self.result: MeetingData | None = None
        self.checked = CheckedTasks()

    def select_file(self, content_type: str | None, data: bytes) -> bool:
        """File picker, camera capture and drag-and-drop all end up here."""
        if not is_image(content_type):
            self.notifier.toast("Please upload an image file", destructive=True)
            return False
        self.image = to_data_url(content_type, data)
        self.state = UploadState.IMAGE_SELECTED
        return True

    drop = select_file

    async def process(self) -> None:
        if not self.image or self.state == UploadState.PROCESSING:
            return
        self.state = UploadState.PROCESSING
        try:
            data = await self.api.process_notes(self.image)
            if self.persist:
                note_id = await self.api.create_note(data)
                self.notifier.toast("Notes processed and saved!")
                self.state = UploadState.IMAGE_SELECTED
                self.navigator.go(detail_route(note_id))
                return
            self.result = data
            self.checked.clear()
            self.state = UploadState.RESULT
        except HandnotesError as e:
            LOGGER.info("Processing failed: %s", e.message)
            self.notifier.toast("Failed to process notes", e.message, destructive=True)
            self.state = UploadState.IMAGE_SELECTED

    def change_photo(self) -> None:
        self.image = None
        self.state = UploadState.EMPTY

    def upload_another(self) -> None:
        self.image = None
        self.result = None
        self.checked.clear()
        self.state = UploadState.EMPTY

    def toggle_task(self, index: int, checked: bool | None = None) -> None:
        self.checked.toggle(index, len(self.result.tasks) if self.result else 0, checked)

    @property
    def remaining(self) -> int:
        return self.checked.remaining(len(self.result.tasks)) if self.result else 0

    def copy_notes(self) -> None:
        if self.result:
            self._copy(format_notes(self.result), "Notes")

    def copy_tasks(self) -> None:
        if self.result:
            self._copy(format_tasks(self.result), "Tasks")


class NoteListScreen:
    def __init__(
        self,
        api: NotesApi,
        notifier: Notifier,
        navigator: Navigator,
        sessions: SessionManager,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.navigator = navigator
        self.sessions = sessions
        self.notes: list[NoteSummary] = []
        self.loading = True

    async def load(self) -> None:
        self.loading = True
        try:
            self.notes = await self.api.list_notes()
        except HandnotesError as e:
            LOGGER.info("Loading notes failed: %s", e.message)
            self.notifier.toast("Failed to load notes", destructive=True)
        finally:
            self.loading = False

    async def delete(self, note_id: uuid.UUID) -> None:
        try:
            await self.api.delete_note(note_id)
        except HandnotesError:
            self.notifier.toast("Failed to delete", destructive=True)
            return
        self.notes = [n for n in self.notes if n.id != note_id]
        self.notifier.toast("Note deleted")

    def open(self, note_id: uuid.UUID) -> None:
        self.navigator.go(detail_route(note_id))

    def new_note(self) -> None:
        self.navigator.go(NEW_ROUTE)

    async def sign_out(self) -> None:
        await self.sessions.sign_out()
        self.notes = []
        self.navigator.go(AUTH_ROUTE)


class NoteDetailScreen(_CopyMixin):
    def __init__(
        self,
        api: NotesApi,
        notifier: Notifier,
        navigator: Navigator,
        note_id: uuid.UUID | str,
        clipboard: MemoryClipboard | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.navigator = navigator
        self.note_id = note_id
        self.clipboard = clipboard or MemoryClipboard()
        self.note: NoteRead | None = None
        self.loading = True
        self.checked = CheckedTasks()

    async def load(self) -> None:
        try:
            self.note = await self.api.get_note(self.note_id)
        except HandnotesError as e:
            LOGGER.info("Loading note %s failed: %s", self.note_id, e.message)
            self.notifier.toast("Note not found", destructive=True)
            self.navigator.go(LIST_ROUTE)
            return
        self.checked.clear()
        self.loading = False

    def back(self) -> None:
        self.navigator.go(LIST_ROUTE)

    def toggle_task(self, index: int, checked: bool | None = None) -> None:
        self.checked.toggle(index, len(self.note.tasks) if self.note else 0, checked)

    @property
    def remaining(self) -> int:
        return self.checked.remaining(len(self.note.tasks)) if self.note else 0

    def copy_notes(self) -> None:
        if self.note:
            self._copy(format_notes(self.note), "Notes")

    def copy_tasks(self) -> None:
        if self.note:
            self._copy(format_tasks(self.note), "Tasks")


class AuthScreen:
    def __init__(self, sessions: SessionManager, notifier: Notifier, navigator: Navigator) -> None:
        self.sessions = sessions
        self.notifier = notifier
        self.navigator = navigator
        self.is_login = True
        self.loading = False

    def toggle_mode(self) -> None:
        self.is_login = not self.is_login

    async def submit(self, email: str, password: str) -> None:
        self.loading = True
        try:
            if self.is_login:
                await self.sessions.sign_in(email, password)
                self.navigator.go(LIST_ROUTE)
            else:
                outcome = await self.sessions.sign_up(email, password)
                if isinstance(outcome, PendingConfirmation):
                    self.notifier.toast("Check your email to confirm your account")
                else:
                    self.navigator.go(LIST_ROUTE)
        except HandnotesError as e:
            self.notifier.toast(e.message, destructive=True)
        finally:
            self.loading = False
