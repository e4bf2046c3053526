from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, delete, select

from handnotes.errors import NotFound, PersistenceError
from handnotes.models.note import MeetingData, MeetingNote

LOGGER = logging.getLogger("handnotes.repositories")


class NotesRepository:
    """
    Meeting notes scoped to their owner. Every query filters on user_id so a
    caller can never see or remove somebody else's rows.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, data: MeetingData, owner_id: uuid.UUID) -> uuid.UUID:
        note = MeetingNote(
            user_id=owner_id,
            title=data.title,
            date=data.date,
            attendees=list(data.attendees),
            summary=data.summary,
            notes=list(data.notes),
            tasks=[task.model_dump() for task in data.tasks],
        )
        try:
            self.session.add(note)
            self.session.commit()
            self.session.refresh(note)
        except SQLAlchemyError as e:
            self.session.rollback()
            LOGGER.error("Insert failed for owner %s: %s", owner_id, e)
            raise PersistenceError() from e
        return note.id

    def list_by_owner(self, owner_id: uuid.UUID) -> list[MeetingNote]:
        statement = (
            select(MeetingNote)
            .where(MeetingNote.user_id == owner_id)
            .order_by(MeetingNote.created_at.desc())
        )
        try:
            return list(self.session.exec(statement))
        except SQLAlchemyError as e:
            LOGGER.error("Listing notes failed for owner %s: %s", owner_id, e)
            raise PersistenceError("Failed to load notes") from e

    def get_by_id(self, note_id: uuid.UUID, owner_id: uuid.UUID) -> MeetingNote:
        try:
            note = self.session.get(MeetingNote, note_id)
        except SQLAlchemyError as e:
            LOGGER.error("Reading note %s failed: %s", note_id, e)
            raise PersistenceError("Failed to load note") from e
        if note is None or note.user_id != owner_id:
            raise NotFound()
        return note

    def delete_by_id(self, note_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        # filtered delete; a missing or foreign id matches nothing
        statement = delete(MeetingNote).where(
            MeetingNote.id == note_id, MeetingNote.user_id == owner_id
        )
        try:
            self.session.exec(statement)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            LOGGER.error("Delete of note %s failed: %s", note_id, e)
            raise PersistenceError("Failed to delete") from e
