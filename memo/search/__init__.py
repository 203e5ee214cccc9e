"""Search and tag filtering over loaded notes."""

from memo.search.tools import filter_notes_by_tag, search_notes

__all__ = ["filter_notes_by_tag", "search_notes"]
