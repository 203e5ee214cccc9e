"""Directory-backed note store."""

from pathlib import Path

from memo.config import Settings
from memo.dependencies import DecodeError, MemoError, NoteFiles, logger
from memo.notes.codec import decode_note, encode_note
from memo.notes.models import LoadResult, LoadWarning, Note


class NoteStore:
    """Collection of notes kept as one file per note in a directory.

    Bulk loading is resilient (undecodable files become warnings);
    single-note operations raise straight to the caller.
    """

    def __init__(self, files: NoteFiles):
        self.files = files

    @classmethod
    def from_settings(cls, settings: Settings, notes_dir: Path | None = None) -> "NoteStore":
        files = NoteFiles(
            notes_dir=notes_dir or settings.notes_dir,
            extension=settings.note_extension,
        )
        return cls(files)

    @property
    def notes_dir(self) -> Path:
        return self.files.notes_dir

    def ensure_directory(self) -> None:
        self.files.ensure_directory()

    def generate_id(self) -> str:
        return self.files.generate_id()

    def path_for(self, note_id: str) -> Path:
        return self.files.path_for(note_id)

    def create(self, title: str, content: str = "", tags: list[str] | None = None) -> Note:
        """Create and persist a new note under a freshly generated id.

        Args:
            title: Note title (must not be empty)
            content: Body text
            tags: Optional list of tags

        Returns:
            The saved note, bound to its file and id
        """
        note = Note.new(title=title, content=content, tags=tags)
        note_id = self.generate_id()
        note.bind(self.path_for(note_id), note_id)
        self.save(note)
        return note

    def save(self, note: Note) -> None:
        """Encode a note and write it over its file.

        Raises:
            MemoError: If the note has no file path yet
            OSError: If the file cannot be written
        """
        if note.file_path is None:
            raise MemoError(f"Note '{note.title}' has no file path; create it through the store")

        self.ensure_directory()
        self.files.write_text(note.file_path, encode_note(note))
        logger.info("note_saved", extra={"path": str(note.file_path), "title": note.title})

    def load_all(self) -> LoadResult:
        """Decode every note file in the directory.

        Files that cannot be read or decoded are skipped and reported as
        warnings, so the number of notes returned always equals the number
        of readable, decodable files. Notes come back in file name order.

        Returns:
            LoadResult with decoded notes and skipped-file warnings
        """
        result = LoadResult()

        for path in self.files.list_files():
            try:
                note = decode_note(path.read_bytes(), file_path=path)
            except (DecodeError, OSError) as e:
                logger.info("note_load_skipped", extra={"path": str(path), "error": str(e)})
                result.warnings.append(LoadWarning(path=path, error=str(e)))
                continue
            note.bind(path, self.files.id_for(path))
            result.notes.append(note)

        logger.debug(
            "notes_loaded",
            extra={"count": len(result.notes), "skipped": len(result.warnings)},
        )
        return result

    def find_by_id(self, note_id: str) -> Note:
        """Load a single note by id.

        Raises:
            NoteNotFoundError: If no file backs the id
            DecodeError: If the file exists but cannot be decoded
        """
        path = self.path_for(note_id)
        note = decode_note(self.files.read_bytes(path), file_path=path)
        note.bind(path, note_id)
        return note

    def delete(self, note_id: str) -> None:
        """Remove the file backing a note id.

        Raises:
            NoteNotFoundError: If no file backs the id
        """
        path = self.path_for(note_id)
        self.files.delete_file(path)
        logger.info("note_deleted", extra={"path": str(path), "note_id": note_id})
