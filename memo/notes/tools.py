"""Note operations used by the command layer.

Every operation takes the running Session first, loads what it needs
through the session's store and returns models rather than text; the CLI
decides how to render them.

Example usage:
    note = create_note(session, "Standup", "Discussed the release", ["work"])
    listing = list_notes(session, tag="work")
    note = read_note(session, "1")
"""

from memo.analytics.models import NoteStats
from memo.analytics.tools import compute_stats
from memo.dependencies import MemoError, logger
from memo.notes.models import LoadResult, Note
from memo.search.tools import filter_notes_by_tag, search_notes
from memo.session import Session


def parse_tags(raw: str) -> list[str]:
    """Split comma-separated tag input.

    Examples:
        >>> parse_tags("work, urgent")
        ['work', 'urgent']
        >>> parse_tags(" a,,b ,")
        ['a', 'b']
        >>> parse_tags("")
        []
    """
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def create_note(
    session: Session,
    title: str,
    content: str = "",
    tags: list[str] | None = None,
) -> Note:
    """Create and persist a note.

    Raises:
        MemoError: If the title is empty
    """
    title = title.strip()
    if not title:
        raise MemoError("title is required")

    note = session.store.create(title=title, content=content.strip(), tags=tags)
    logger.info("note_created", extra={"note_id": note.note_id, "trace_id": session.trace_id})
    return note


def list_notes(session: Session, tag: str | None = None) -> LoadResult:
    """Load all notes, optionally only those carrying a tag.

    The returned notes become the session's current listing.
    """
    result = session.store.load_all()
    if tag:
        result.notes = filter_notes_by_tag(result.notes, tag)

    session.remember_listing(result.notes)
    logger.info(
        "notes_listed",
        extra={"tag": tag, "count": len(result.notes), "trace_id": session.trace_id},
    )
    return result


def read_note(session: Session, identifier: str) -> Note:
    """Read one note by id or listing number.

    Raises:
        ListingReferenceError: Unusable listing number
        NoteNotFoundError: No such note
        DecodeError: The note file is broken
    """
    return session.store.find_by_id(session.resolve_note_id(identifier))


def edit_note(
    session: Session,
    identifier: str,
    content: str | None = None,
    tags: list[str] | None = None,
) -> Note:
    """Replace a note's content and/or tags and save it.

    ``None`` leaves a field untouched. Saving always refreshes ``modified``.
    """
    note = read_note(session, identifier)

    if content is not None:
        note.update_content(content.strip())
    if tags is not None:
        note.update_tags(tags)

    session.store.save(note)
    logger.info(
        "note_edited",
        extra={
            "note_id": note.note_id,
            "content_changed": content is not None,
            "tags_changed": tags is not None,
            "trace_id": session.trace_id,
        },
    )
    return note


def delete_note(session: Session, identifier: str) -> str:
    """Delete a note by id or listing number.

    The file is removed without being decoded, so broken notes can be
    deleted too. Confirmation is the caller's job.

    Returns:
        The id of the deleted note

    Raises:
        ListingReferenceError: Unusable listing number
        NoteNotFoundError: No such note
    """
    note_id = session.resolve_note_id(identifier)
    session.store.delete(note_id)
    logger.info("note_removed", extra={"note_id": note_id, "trace_id": session.trace_id})
    return note_id


def search_collection(session: Session, query: str) -> LoadResult:
    """Search every note for the query.

    Raises:
        MemoError: If the query is empty
    """
    if not query.strip():
        raise MemoError("search query required")

    result = session.store.load_all()
    result.notes = search_notes(result.notes, query)
    logger.info(
        "notes_searched",
        extra={"query": query, "count": len(result.notes), "trace_id": session.trace_id},
    )
    return result


def collection_stats(session: Session) -> tuple[NoteStats, LoadResult]:
    """Compute statistics over every decodable note.

    Returns:
        Tuple of (stats, load result) so callers can report skipped files
    """
    result = session.store.load_all()
    return compute_stats(result.notes), result
