from handnotes.models.note import (
    MeetingData,
    MeetingNote,
    NoteCreated,
    NoteRead,
    NoteSummary,
    Task,
)
from handnotes.models.user import (
    ConfirmRequest,
    RevokedToken,
    SignupResult,
    User,
    UserCreate,
    UserRead,
)

__all__ = [
    "ConfirmRequest",
    "MeetingData",
    "MeetingNote",
    "NoteCreated",
    "NoteRead",
    "NoteSummary",
    "RevokedToken",
    "SignupResult",
    "Task",
    "User",
    "UserCreate",
    "UserRead",
]
