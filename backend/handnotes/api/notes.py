import uuid
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from handnotes.api.auth import current_user
from handnotes.db import get_db
from handnotes.models.note import MeetingData, NoteCreated, NoteRead, NoteSummary
from handnotes.models.user import User
from handnotes.repositories.notes import NotesRepository

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.post("", response_model=NoteCreated, status_code=201)
def create(body: MeetingData, db: Session = Depends(get_db), user: User = Depends(current_user)):
    note_id = NotesRepository(db).insert(body, owner_id=user.id)
    return NoteCreated(id=note_id)

@router.get("", response_model=List[NoteSummary])
def mine(db: Session = Depends(get_db), user: User = Depends(current_user)):
    return NotesRepository(db).list_by_owner(user.id)

@router.get("/{note_id}", response_model=NoteRead)
def one(note_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(current_user)):
    return NotesRepository(db).get_by_id(note_id, owner_id=user.id)

@router.delete("/{note_id}", status_code=204)
def remove(note_id: uuid.UUID, db: Session = Depends(get_db), user: User = Depends(current_user)):
    NotesRepository(db).delete_by_id(note_id, owner_id=user.id)
    return Response(status_code=204)
