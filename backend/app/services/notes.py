from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from backend.app.models.note import Note
from backend.app.services.audit import log_action


def _get_note(db: Session, note_id: UUID) -> Note:
    note = db.query(Note).filter(Note.id == note_id).first()
    if not note:
        raise ValueError("Note not found")
    return note


def create_note(db: Session, note_text: str) -> Note:
    if not note_text.strip():
        raise ValueError("Note must not be empty")
    note = Note(note_text=note_text.strip())
    db.add(note)
    db.flush()
    log_action(db, action="NOTE_CREATED", resource_type="notes", resource_id=str(note.id))
    db.commit()
    db.refresh(note)
    return note


def update_note(db: Session, note_id: UUID, note_text: str) -> Note:
    if not note_text.strip():
        raise ValueError("Note must not be empty")
    note = _get_note(db, note_id)
    note.note_text = note_text.strip()
    log_action(db, action="NOTE_UPDATED", resource_type="notes", resource_id=str(note.id))
    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, note_id: UUID) -> None:
    note = _get_note(db, note_id)
    log_action(db, action="NOTE_DELETED", resource_type="notes", resource_id=str(note.id))
    db.delete(note)
    db.commit()


def list_notes(db: Session) -> list[Note]:
    return db.query(Note).order_by(Note.created_at.desc()).all()
