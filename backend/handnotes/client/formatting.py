"""Clipboard text and data URL helpers used by the screens."""

import base64

from handnotes.models.note import MeetingData, NoteRead


def is_image(content_type: str | None) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def to_data_url(content_type: str, data: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def format_notes(note: MeetingData | NoteRead) -> str:
    text = f"# {note.title}\n"
    if note.date:
        text += f"**Date:** {note.date}\n"
    if note.attendees:
        text += f"**Attendees:** {', '.join(note.attendees)}\n"
    text += f"\n{note.summary or ''}\n\n## Discussion Points\n"
    for point in note.notes:
        text += f"- {point}\n"
    return text


def format_tasks(note: MeetingData | NoteRead) -> str:
    return "\n".join(
        f"- [ ] {t.text}" + (f" (@{t.assignee})" if t.assignee else "")
        for t in note.tasks
    )
