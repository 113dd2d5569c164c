from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator


class NoteIn(BaseModel):
    note_text: str

    @field_validator("note_text")
    @classmethod
    def text_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Note must not be empty")
        return v


class NoteOut(BaseModel):
    id: UUID
    note_text: str
    created_at: datetime | None
    updated_at: datetime | None

    class Config:
        from_attributes = True
