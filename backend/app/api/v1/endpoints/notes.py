from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.note import Note
from backend.app.schemas.note import NoteIn, NoteOut
from backend.app.services.notes import create_note, delete_note, list_notes, update_note

router = APIRouter()


@router.get("", response_model=list[NoteOut])
def get_notes(db: Session = Depends(get_db)) -> list[Note]:
    return list_notes(db)


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def post_note(payload: NoteIn, db: Session = Depends(get_db)) -> Note:
    try:
        return create_note(db, payload.note_text)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{note_id}", response_model=NoteOut)
def put_note(note_id: UUID, payload: NoteIn, db: Session = Depends(get_db)) -> Note:
    try:
        return update_note(db, note_id, payload.note_text)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_note(note_id: UUID, db: Session = Depends(get_db)) -> Response:
    try:
        delete_note(db, note_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
