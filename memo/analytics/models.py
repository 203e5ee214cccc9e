"""Pydantic models for collection statistics."""

from pydantic import BaseModel, Field

from memo.notes.models import Note


class NoteStats(BaseModel):
    """Aggregate statistics for a note collection.

    ``average_words``, ``oldest_note`` and ``newest_note`` are None when the
    collection is empty; there is no meaningful value to report then.

    Attributes:
        total_notes: Number of notes
        total_words: Whitespace-separated words across all bodies
        average_words: Words per note, None for an empty collection
        oldest_note: Note with the earliest ``created``
        newest_note: Note with the latest ``created``
        tag_counts: Occurrences per tag, one per note carrying it
    """

    total_notes: int = Field(default=0, ge=0, description="Number of notes")
    total_words: int = Field(default=0, ge=0, description="Total body words")
    average_words: float | None = Field(default=None, ge=0.0, description="Words per note")
    oldest_note: Note | None = Field(default=None, description="Earliest created note")
    newest_note: Note | None = Field(default=None, description="Latest created note")
    tag_counts: dict[str, int] = Field(default_factory=dict, description="Tag frequency")

    @property
    def has_data(self) -> bool:
        return self.total_notes > 0
