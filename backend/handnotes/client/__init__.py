from handnotes.client.api import NotesApi
from handnotes.client.session import PendingConfirmation, Session, SessionManager

__all__ = ["NotesApi", "PendingConfirmation", "Session", "SessionManager"]
