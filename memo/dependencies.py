"""Shared dependencies: NoteFiles, exceptions and structured logger."""

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from memo.config import get_settings

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_RECORD_ATTRS:
                data[key] = value
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    settings = get_settings()
    logger = logging.getLogger("memo")
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.WARNING))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


logger = setup_logging()


class MemoError(Exception):
    """Base exception for note operations."""

    pass


class NoteNotFoundError(MemoError):
    """Raised when no file backs the requested note id."""

    def __init__(self, note_id: str):
        super().__init__(f"note with ID '{note_id}' not found")
        self.note_id = note_id


class NoteSecurityError(MemoError):
    """Raised when a note id would resolve outside the notes directory."""

    pass


class DecodeError(MemoError):
    """Base exception for note files that cannot be decoded."""

    pass


class MalformedFrontMatterError(DecodeError):
    """Raised when the front matter delimiters or YAML block are broken."""

    pass


class InvalidMetadataError(DecodeError):
    """Raised when a metadata key is missing or holds an unusable value."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"invalid metadata '{key}': {reason}")
        self.key = key
        self.reason = reason


class ListingReferenceError(MemoError):
    """Raised when a list number cannot be resolved against the current listing."""

    pass


@dataclass
class NoteFiles:
    """Raw file access for the notes directory.

    Knows nothing about the note format: it maps ids to paths, reads and
    writes text, and enumerates files carrying the note extension.
    """

    notes_dir: Path
    extension: str = ".note"
    _issued: set[str] = field(default_factory=set, init=False, repr=False)

    def ensure_directory(self) -> None:
        """Create the notes directory if it does not exist yet."""
        self.notes_dir.mkdir(parents=True, exist_ok=True)

    def generate_id(self) -> str:
        """Generate an id that is unused on disk and by this instance.

        Ids keep the ``note_<unix-seconds>`` shape; notes created within the
        same second get a ``_2``, ``_3`` ... suffix.

        Returns:
            A fresh note id
        """
        base = f"note_{int(time.time())}"
        candidate = base
        suffix = 1
        while candidate in self._issued or self.path_for(candidate).exists():
            suffix += 1
            candidate = f"{base}_{suffix}"
        self._issued.add(candidate)
        return candidate

    def path_for(self, note_id: str) -> Path:
        """Map a note id to its file path.

        Args:
            note_id: Note id (file name stem)

        Returns:
            Path inside the notes directory

        Raises:
            NoteSecurityError: If the id is empty or escapes the directory
        """
        if not note_id or note_id in (".", "..") or "/" in note_id or "\\" in note_id:
            raise NoteSecurityError(f"Invalid note id: {note_id!r}")
        path = self.notes_dir / f"{note_id}{self.extension}"
        if not path.resolve().is_relative_to(self.notes_dir.resolve()):
            raise NoteSecurityError(f"Path traversal detected: {note_id}")
        return path

    def id_for(self, path: Path) -> str:
        """Return the note id embedded in a file path."""
        name = path.name
        if name.endswith(self.extension):
            return name[: -len(self.extension)]
        return path.stem

    def read_bytes(self, path: Path) -> bytes:
        """Read a note file.

        Raises:
            NoteNotFoundError: If the file does not exist
        """
        if not path.exists():
            raise NoteNotFoundError(self.id_for(path))
        return path.read_bytes()

    def write_text(self, path: Path, content: str) -> None:
        """Replace a file's content atomically.

        The text goes to a temporary file in the same directory which is then
        renamed over the target, so readers see either the old or the new file.

        Args:
            path: Target path
            content: Full file content
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete_file(self, path: Path) -> None:
        """Delete a note file.

        Raises:
            NoteNotFoundError: If the file does not exist
        """
        if not path.exists():
            raise NoteNotFoundError(self.id_for(path))
        path.unlink()

    def list_files(self) -> list[Path]:
        """List note files in name order.

        Returns:
            Paths of files carrying the note extension, empty if the
            directory does not exist
        """
        if not self.notes_dir.is_dir():
            return []
        return sorted(p for p in self.notes_dir.glob(f"*{self.extension}") if p.is_file())
