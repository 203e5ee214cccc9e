"""Shared pytest fixtures."""

import os
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Keep test runs independent of a developer's .env or shell settings
for _key in ("MEMO_NOTES_DIR", "MEMO_NOTE_EXTENSION", "MEMO_PAGE_SIZE"):
    os.environ.pop(_key, None)

from memo.dependencies import NoteFiles  # noqa: E402
from memo.notes.models import Note  # noqa: E402
from memo.notes.store import NoteStore  # noqa: E402
from memo.session import Session  # noqa: E402

VALID_NOTE = """---
title: Test Note
created: 2025-01-01T00:00:00+00:00
modified: 2025-01-02T00:00:00+00:00
tags: [test, example]
---

Body content here.
"""


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created notes directory inside tmp_path."""
    return tmp_path / ".memo-notes"


@pytest.fixture
def store(notes_dir: Path) -> NoteStore:
    """Create a NoteStore over the temporary notes directory."""
    return NoteStore(NoteFiles(notes_dir=notes_dir))


@pytest.fixture
def session(store: NoteStore) -> Session:
    """Create a Session around the temporary store."""
    return Session(store=store, trace_id="test-123")


@pytest.fixture
def write_note_file(notes_dir: Path) -> Callable[[str, str], Path]:
    """Factory writing raw text as ``<name>.note`` in the notes directory."""

    def _write(name: str, text: str) -> Path:
        notes_dir.mkdir(parents=True, exist_ok=True)
        path = notes_dir / f"{name}.note"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_note() -> Callable[..., Note]:
    """Factory for in-memory notes with fixed timestamps.

    ``day`` sets created (and modified) to 2025-01-<day> UTC.
    """

    def _make(title: str = "Note", content: str = "", tags: list[str] | None = None, day: int = 1):
        stamp = datetime(2025, 1, day, tzinfo=UTC)
        return Note(title=title, content=content, tags=tags or [], created=stamp, modified=stamp)

    return _make
