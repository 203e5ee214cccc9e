"""Pydantic models for notes and bulk load results."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator


def ensure_utc(dt: datetime) -> datetime:
    """Make datetime timezone-aware (UTC).

    Args:
        dt: Datetime object (may be naive or aware)

    Returns:
        The same instant, UTC-aware if it was naive

    Examples:
        >>> ensure_utc(datetime(2025, 1, 1)).tzinfo is not None
        True
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def utc_now() -> datetime:
    return datetime.now(UTC)


class Note(BaseModel):
    """A single note: front matter metadata, body and backing file.

    Attributes:
        title: Display title, never empty
        content: Body text after the front matter
        tags: Tags in stored order and case (duplicates kept)
        created: Creation time, fixed once the note exists
        modified: Last modification time, never before ``created``
        author: Optional author, empty when unset
        status: Optional status, empty when unset
        priority: Optional priority, zero when unset
        file_path: Backing file, assigned once when the note is created
        extra: Front matter keys this model does not know about

    Example on disk:
        ---
        title: Weekly review
        created: '2025-11-25T10:30:00+00:00'
        modified: '2025-11-25T14:45:00+00:00'
        tags: [work, review]
        ---

        Body text...
    """

    title: str = Field(..., min_length=1, description="Note title")
    content: str = Field(default="", description="Body text")
    tags: list[str] = Field(default_factory=list, description="Tags for the note")
    created: datetime = Field(default_factory=utc_now, description="When the note was created")
    modified: datetime = Field(default_factory=utc_now, description="When the note was modified")
    author: str = Field(default="", description="Author name")
    status: str = Field(default="", description="Free-form status")
    priority: int = Field(default=0, description="Priority, 0 when unset")
    file_path: Path | None = Field(default=None, description="Backing file")
    extra: dict[str, Any] = Field(default_factory=dict, description="Unrecognized metadata")
    _note_id: str = PrivateAttr(default="")

    @field_validator("title", "content", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_never_none(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("created", "modified")
    @classmethod
    def _aware_timestamps(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _modified_not_before_created(self) -> "Note":
        if self.modified < self.created:
            raise ValueError("modified must not be earlier than created")
        return self

    @classmethod
    def new(cls, title: str, content: str = "", tags: list[str] | None = None) -> "Note":
        """Build a fresh note whose created and modified times are equal."""
        now = utc_now()
        return cls(title=title, content=content, tags=tags or [], created=now, modified=now)

    @property
    def note_id(self) -> str:
        """Id of the backing file, empty before the note has a path.

        Set by the store through ``bind``. Unbound notes fall back to the
        file name up to its last dot.
        """
        if self._note_id:
            return self._note_id
        if self.file_path is None:
            return ""
        return self.file_path.name.rsplit(".", 1)[0]

    def bind(self, file_path: Path, note_id: str) -> None:
        """Attach the note to its backing file and id."""
        self.file_path = file_path
        self._note_id = note_id

    def touch(self, now: datetime | None = None) -> None:
        """Stamp ``modified`` with the current time (never earlier than ``created``)."""
        now = ensure_utc(now) if now else utc_now()
        self.modified = max(now, self.created)

    def update_content(self, content: str) -> None:
        self.content = content.strip()
        self.touch()

    def update_tags(self, tags: list[str]) -> None:
        self.tags = list(tags)
        self.touch()

    def to_front_matter(self) -> dict[str, Any]:
        """Convert to the ordered mapping written as YAML front matter.

        ``title``, ``created``, ``modified`` and ``tags`` are always present;
        ``author``, ``status`` and ``priority`` only when set. Unrecognized
        keys read from disk follow, unless they shadow a known key.

        Returns:
            Dictionary with ISO-formatted datetime strings
        """
        data: dict[str, Any] = {
            "title": self.title,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
            "tags": list(self.tags),
        }
        if self.author:
            data["author"] = self.author
        if self.status:
            data["status"] = self.status
        if self.priority:
            data["priority"] = self.priority
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


class LoadWarning(BaseModel):
    """A note file that was skipped during a bulk load.

    Attributes:
        path: File that failed to decode
        error: Human-readable reason
    """

    path: Path
    error: str


class LoadResult(BaseModel):
    """Notes decoded from the store plus the files that were skipped."""

    notes: list[Note] = Field(default_factory=list)
    warnings: list[LoadWarning] = Field(default_factory=list)
