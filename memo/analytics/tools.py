"""Collection statistics and their text rendering.

Example usage:
    stats = compute_stats(result.notes)
    print(format_stats(stats))
"""

from collections import Counter
from collections.abc import Iterable

from memo.analytics.models import NoteStats
from memo.notes.models import Note

# =============================================================================
# Helper Functions
# =============================================================================


def count_words(text: str) -> int:
    """Count whitespace-separated words.

    Examples:
        >>> count_words("  a b\\n c  ")
        3
        >>> count_words("")
        0
    """
    return len(text.split())


def _average(total: int, count: int) -> float | None:
    if count == 0:
        return None
    return total / count


# =============================================================================
# Statistics
# =============================================================================


def compute_stats(notes: Iterable[Note]) -> NoteStats:
    """Aggregate counts, word totals, tag frequency and age extremes.

    Ties on ``created`` keep the first note encountered.

    Args:
        notes: Notes to summarize

    Returns:
        NoteStats for the collection
    """
    total_notes = 0
    total_words = 0
    tag_counts: Counter[str] = Counter()
    oldest: Note | None = None
    newest: Note | None = None

    for note in notes:
        total_notes += 1
        total_words += count_words(note.content)

        for tag in note.tags:
            tag_counts[tag] += 1

        if oldest is None or note.created < oldest.created:
            oldest = note
        if newest is None or note.created > newest.created:
            newest = note

    return NoteStats(
        total_notes=total_notes,
        total_words=total_words,
        average_words=_average(total_words, total_notes),
        oldest_note=oldest,
        newest_note=newest,
        tag_counts=dict(tag_counts),
    )


# =============================================================================
# Formatting Functions
# =============================================================================


def format_stats(stats: NoteStats) -> str:
    """Format statistics for display.

    Args:
        stats: NoteStats for a collection

    Returns:
        Plain text block, tags sorted by usage
    """
    if not stats.has_data:
        return "No notes found."

    lines = [
        "Note Statistics:",
        f"Total notes: {stats.total_notes}",
        f"Total words: {stats.total_words}",
        f"Average words per note: {stats.average_words:.1f}",
    ]

    if stats.oldest_note:
        oldest_date = stats.oldest_note.created.strftime("%Y-%m-%d")
        lines.append(f"Oldest note: {stats.oldest_note.title} ({oldest_date})")
    if stats.newest_note:
        newest_date = stats.newest_note.created.strftime("%Y-%m-%d")
        lines.append(f"Newest note: {stats.newest_note.title} ({newest_date})")

    if stats.tag_counts:
        lines.extend(["", "Tag usage:"])
        for tag, count in Counter(stats.tag_counts).most_common():
            lines.append(f"  {tag}: {count}")

    return "\n".join(lines)
