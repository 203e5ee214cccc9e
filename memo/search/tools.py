"""Query functions over an in-memory note collection.

These never touch the disk: callers load notes through the store and pass
them in, so every function here is pure and order-preserving.

Example usage:
    matches = search_notes(result.notes, "roadmap")
    work = filter_notes_by_tag(result.notes, "Work")
"""

from collections.abc import Iterable

from memo.notes.models import Note

PREVIEW_LENGTH = 100


def note_matches(note: Note, query: str) -> bool:
    """Check whether a note's title, body or any tag contains the query.

    Args:
        note: Note to test
        query: Search text (compared case-insensitively)

    Returns:
        True if any one field contains the query as a substring

    Examples:
        >>> note_matches(Note(title="API Design"), "api")
        True
    """
    lower_query = query.lower()
    if lower_query in note.title.lower() or lower_query in note.content.lower():
        return True
    return any(lower_query in tag.lower() for tag in note.tags)


def search_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Case-insensitive substring search across title, body and tags.

    Each matching note appears once, in input order. An empty query matches
    nothing; callers decide what an empty search should mean.

    Args:
        notes: Notes to search
        query: Search text

    Returns:
        Matching notes
    """
    if not query:
        return []
    return [note for note in notes if note_matches(note, query)]


def filter_notes_by_tag(notes: Iterable[Note], tag: str) -> list[Note]:
    """Keep notes carrying the tag, compared case-insensitively but exactly.

    ``"work"`` selects notes tagged ``Work`` or ``WORK`` but not ``workshop``.

    Args:
        notes: Notes to filter
        tag: Tag to look for

    Returns:
        Matching notes in input order
    """
    lower_tag = tag.lower()
    return [note for note in notes if any(t.lower() == lower_tag for t in note.tags)]


def make_preview(content: str, limit: int = PREVIEW_LENGTH) -> str:
    """Shorten note content for result listings.

    Examples:
        >>> make_preview("short")
        'short'
        >>> make_preview("abcdef", limit=3)
        'abc...'
    """
    if len(content) <= limit:
        return content
    return f"{content[:limit]}..."
