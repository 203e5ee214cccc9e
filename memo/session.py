"""Per-process session state shared by command handlers."""

from dataclasses import dataclass, field
from uuid import uuid4

from memo.dependencies import ListingReferenceError
from memo.notes.models import Note
from memo.notes.store import NoteStore


@dataclass
class Session:
    """Context threaded through every command of one process.

    Holds the store and the most recent listing so that ``read``, ``edit``
    and ``delete`` can refer to notes by their 1-based list number. The
    listing dies with the process.
    """

    store: NoteStore
    trace_id: str = field(default_factory=lambda: uuid4().hex[:8])
    current_listing: list[Note] = field(default_factory=list)
    interactive: bool = False

    def remember_listing(self, notes: list[Note]) -> None:
        self.current_listing = list(notes)

    def resolve_note_id(self, identifier: str) -> str:
        """Turn a note id or a list number into a note id.

        Args:
            identifier: Note id, or a number from the last listing

        Returns:
            The note id

        Raises:
            ListingReferenceError: If a number is given without a listing or
                outside its range
        """
        identifier = identifier.strip()
        if not identifier.isdecimal():
            return identifier

        number = int(identifier)
        if not self.current_listing:
            raise ListingReferenceError(
                "no current note listing. Please run 'memo list' first"
            )
        if number < 1 or number > len(self.current_listing):
            raise ListingReferenceError(
                f"number {number} is out of range. Valid range: 1-{len(self.current_listing)}"
            )
        return self.current_listing[number - 1].note_id
