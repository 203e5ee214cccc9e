"""Front matter codec: note files <-> Note models.

A note file is a YAML front matter block between ``---`` lines, a blank
line, then the body::

    ---
    title: Weekly review
    created: '2025-11-25T10:30:00+00:00'
    modified: '2025-11-25T14:45:00+00:00'
    tags: [work, review]
    priority: 2
    ---

    Body text...

Files that do not start with the opening delimiter are rejected; there is
no fallback for undelimited legacy notes.
"""

from datetime import UTC, date, datetime, time
from pathlib import Path
from typing import Any

import frontmatter
import yaml
from pydantic import ValidationError

from memo.dependencies import InvalidMetadataError, MalformedFrontMatterError
from memo.notes.models import Note, ensure_utc

DELIMITER = "---"
OPENING = f"{DELIMITER}\n"
CLOSING = f"\n{DELIMITER}\n"

KNOWN_KEYS = ("title", "created", "modified", "tags", "author", "status", "priority")


# =============================================================================
# Helper Functions
# =============================================================================


def split_front_matter(text: str) -> tuple[str, str]:
    """Split note text into the raw YAML block and the body.

    Args:
        text: Full note file content

    Returns:
        Tuple of (yaml_block, body) with the body untrimmed

    Raises:
        MalformedFrontMatterError: If either delimiter is missing

    Examples:
        >>> split_front_matter("---\\ntitle: A\\n---\\n\\nBody")
        ('title: A', '\\nBody')
    """
    if not text.startswith(OPENING):
        raise MalformedFrontMatterError("note file must start with YAML front matter")

    block, separator, body = text[len(OPENING) :].partition(CLOSING)
    if not separator:
        raise MalformedFrontMatterError("missing closing front matter delimiter")
    return block, body


def parse_timestamp(metadata: dict[str, Any], key: str) -> datetime:
    """Read a required timestamp from front matter.

    PyYAML already turns unquoted ISO-8601 values into datetimes; quoted
    values arrive as strings and go through ``datetime.fromisoformat``.

    Raises:
        InvalidMetadataError: If the key is missing or not a timestamp
    """
    value = metadata.get(key)
    if value is None:
        raise InvalidMetadataError(key, "missing required key")

    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.strip()))
        except ValueError as e:
            raise InvalidMetadataError(key, f"unparsable timestamp {value!r}") from e
    raise InvalidMetadataError(key, f"expected a timestamp, got {type(value).__name__}")


def parse_title(metadata: dict[str, Any]) -> str:
    value = metadata.get("title")
    if value is None:
        raise InvalidMetadataError("title", "missing required key")
    if isinstance(value, (list, dict)):
        raise InvalidMetadataError("title", "expected a plain value")
    title = str(value).strip()
    if not title:
        raise InvalidMetadataError("title", "title must not be empty")
    return title


def parse_tags(metadata: dict[str, Any]) -> list[str]:
    """Read tags, accepting null, a single scalar, or a sequence."""
    value = metadata.get("tags")
    if value is None:
        return []
    if isinstance(value, dict):
        raise InvalidMetadataError("tags", "expected a list of tags")
    if not isinstance(value, list):
        value = [value]
    return [str(tag) for tag in value if tag is not None]


def parse_optional_text(metadata: dict[str, Any], key: str) -> str:
    value = metadata.get(key)
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        raise InvalidMetadataError(key, "expected a plain value")
    return str(value)


def parse_priority(metadata: dict[str, Any]) -> int:
    value = metadata.get("priority")
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidMetadataError("priority", f"expected an integer, got {value!r}")
    try:
        return int(value)
    except ValueError as e:
        raise InvalidMetadataError("priority", f"expected an integer, got {value!r}") from e


# =============================================================================
# Codec
# =============================================================================


def decode_note(raw: bytes | str, file_path: Path | None = None) -> Note:
    """Decode a note file into a Note.

    Args:
        raw: File content as UTF-8 bytes or text
        file_path: Path the content was read from, stored on the note

    Returns:
        The decoded note, body trimmed of surrounding whitespace

    Raises:
        MalformedFrontMatterError: Bad encoding, delimiters or YAML syntax
        InvalidMetadataError: A required key is missing or unusable
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFrontMatterError(f"note file is not valid UTF-8: {e}") from e
    else:
        text = raw

    block, body = split_front_matter(text)

    try:
        metadata = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise MalformedFrontMatterError(f"error parsing YAML metadata: {e}") from e
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedFrontMatterError("front matter must be a mapping of keys to values")

    fields = {
        "title": parse_title(metadata),
        "created": parse_timestamp(metadata, "created"),
        "modified": parse_timestamp(metadata, "modified"),
        "tags": parse_tags(metadata),
        "author": parse_optional_text(metadata, "author"),
        "status": parse_optional_text(metadata, "status"),
        "priority": parse_priority(metadata),
    }
    extra = {str(k): v for k, v in metadata.items() if str(k) not in KNOWN_KEYS}

    try:
        return Note(**fields, content=body.strip(), file_path=file_path, extra=extra)
    except ValidationError as e:
        loc = e.errors()[0]["loc"]
        key = str(loc[0]) if loc else "modified"
        raise InvalidMetadataError(key, e.errors()[0]["msg"]) from e


def encode_note(note: Note, now: datetime | None = None) -> str:
    """Serialize a note to file content.

    Encoding always stamps ``modified`` first, so a save means "touched
    now" even when nothing else changed.

    Args:
        note: Note to serialize (its ``modified`` is updated in place)
        now: Time to stamp instead of the current time

    Returns:
        Full file content: front matter, blank line, body
    """
    note.touch(now)

    post = frontmatter.Post(note.content)
    post.metadata = note.to_front_matter()
    text = frontmatter.dumps(post, default_flow_style=None, sort_keys=False, allow_unicode=True)
    return text + "\n"
