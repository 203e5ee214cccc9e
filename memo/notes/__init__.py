"""Note model, front matter codec and directory-backed store."""

from memo.notes.codec import decode_note, encode_note
from memo.notes.models import LoadResult, LoadWarning, Note
from memo.notes.store import NoteStore

__all__ = ["LoadResult", "LoadWarning", "Note", "NoteStore", "decode_note", "encode_note"]
