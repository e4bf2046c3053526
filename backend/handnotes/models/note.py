import uuid
import datetime as dt
from typing import List

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Task(SQLModel):
    text: str
    assignee: str  # empty string means unassigned


class MeetingData(SQLModel):
    """
    Structured notes as returned by the extraction model.
    Every field is required, mirroring the tool schema sent to the gateway.
    """

    title: str = Field(min_length=1)
    date: str
    attendees: List[str]
    summary: str
    notes: List[str]
    tasks: List[Task]


class MeetingNote(SQLModel, table=True):
    """
    A saved meeting record. Rows are never updated, only created and deleted.
    """

    __tablename__ = "meeting_notes"

    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    title: str
    date: str = ""
    attendees: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    summary: str = ""
    notes: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    tasks: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: dt.datetime = Field(default_factory=utcnow, index=True)


class NoteRead(SQLModel):
    id: uuid.UUID
    title: str
    date: str
    attendees: List[str]
    summary: str
    notes: List[str]
    tasks: List[Task]
    created_at: dt.datetime


class NoteSummary(SQLModel):
    """
    Slimmed-down note for the list view.
    """

    id: uuid.UUID
    title: str
    date: str
    summary: str
    created_at: dt.datetime


class NoteCreated(SQLModel):
    id: uuid.UUID
