"""Tests for the command-line interface.

Commands run through Typer's CliRunner against a temporary notes directory.
Assertions check short substrings so Rich line wrapping cannot break them.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from memo.main import app

runner = CliRunner()


@pytest.fixture
def memo(notes_dir: Path):
    """Invoke the memo app against the temporary notes directory."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(app, ["--notes-dir", str(notes_dir), *args], input=input)

    return _invoke


def _only_id(notes_dir: Path) -> str:
    (path,) = sorted(notes_dir.glob("*.note"))
    return path.stem


# =============================================================================
# Create Tests
# =============================================================================


class TestCreateCommand:
    """Tests for memo create."""

    def test_create_with_options(self, memo, notes_dir: Path) -> None:
        """Test creating a note entirely from options."""
        result = memo("create", "--title", "Standup", "--content", "Release", "--tags", "a, b")

        assert result.exit_code == 0
        assert "Note created successfully" in result.output
        note_id = _only_id(notes_dir)
        assert note_id in result.output
        text = (notes_dir / f"{note_id}.note").read_text(encoding="utf-8")
        assert "title: Standup" in text
        assert "Release" in text

    def test_create_prompts(self, memo, notes_dir: Path) -> None:
        """Test that missing values are asked for."""
        result = memo("create", input="Prompted\nSome body\nx,y\n")

        assert result.exit_code == 0
        assert "Note created successfully" in result.output
        assert "Prompted" in (notes_dir / f"{_only_id(notes_dir)}.note").read_text()

    def test_create_blank_title(self, memo, notes_dir: Path) -> None:
        """Test that a blank title fails without writing anything."""
        result = memo("create", "--title", "  ", "--content", "x", "--tags", "")

        assert result.exit_code == 1
        assert "title is required" in result.output
        assert not notes_dir.exists()


# =============================================================================
# List / Read Tests
# =============================================================================


class TestListAndRead:
    """Tests for memo list and memo read."""

    def test_list_empty(self, memo) -> None:
        result = memo("list")

        assert result.exit_code == 0
        assert "No notes found." in result.output

    def test_list_numbers_notes(self, memo) -> None:
        """Test that listings number notes from 1."""
        memo("create", "-t", "Alpha", "-c", "", "--tags", "work")

        result = memo("list")

        assert result.exit_code == 0
        assert "1. Alpha" in result.output
        assert "Tags: work" in result.output
        assert "End of notes." in result.output

    def test_list_by_tag(self, memo) -> None:
        memo("create", "-t", "Tagged", "-c", "", "--tags", "Work")
        memo("create", "-t", "Other", "-c", "", "--tags", "workshop")

        result = memo("list", "--tag", "work")

        assert "Notes with tag 'work':" in result.output
        assert "Tagged" in result.output
        assert "Other" not in result.output

    def test_list_warns_about_broken_files(self, memo, write_note_file) -> None:
        """Test that broken files are reported and valid notes still listed."""
        memo("create", "-t", "Fine", "-c", "", "--tags", "")
        write_note_file("zz_broken", "garbage")

        result = memo("list")

        assert result.exit_code == 0
        assert "Warning: failed to parse note" in result.output
        assert "1. Fine" in result.output

    def test_read_by_id(self, memo, notes_dir: Path) -> None:
        memo("create", "-t", "Readable", "-c", "The body", "--tags", "")

        result = memo("read", _only_id(notes_dir))

        assert result.exit_code == 0
        assert "Title: Readable" in result.output
        assert "The body" in result.output

    def test_read_missing(self, memo) -> None:
        result = memo("read", "note_0")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_read_superscript_digit(self, memo) -> None:
        """Test that digit-like input fails as an unknown id, not a crash."""
        result = memo("read", "²")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_read_number_needs_listing(self, memo) -> None:
        """Test that list numbers do not survive between processes."""
        memo("create", "-t", "A", "-c", "", "--tags", "")

        result = memo("read", "1")

        assert result.exit_code == 1
        assert "run 'memo list' first" in result.output


# =============================================================================
# Edit / Delete Tests
# =============================================================================


class TestEditAndDelete:
    """Tests for memo edit and memo delete."""

    def test_edit_with_options(self, memo, notes_dir: Path) -> None:
        memo("create", "-t", "Draft", "-c", "old", "--tags", "a")
        note_id = _only_id(notes_dir)

        result = memo("edit", note_id, "--content", "new", "--tags", "b,c")

        assert result.exit_code == 0
        assert "Note updated successfully!" in result.output
        shown = memo("read", note_id).output
        assert "new" in shown
        assert "Tags: b, c" in shown

    def test_edit_prompts_and_keeps_tags(self, memo, notes_dir: Path) -> None:
        """Test that an empty tag answer keeps the current tags."""
        memo("create", "-t", "Draft", "-c", "old", "--tags", "keep")
        note_id = _only_id(notes_dir)

        result = memo("edit", note_id, input="Replaced body\n\n")

        assert result.exit_code == 0
        shown = memo("read", note_id).output
        assert "Replaced body" in shown
        assert "Tags: keep" in shown

    def test_delete_confirmed(self, memo, notes_dir: Path) -> None:
        memo("create", "-t", "Doomed", "-c", "", "--tags", "")
        note_id = _only_id(notes_dir)

        result = memo("delete", note_id, input="y\n")

        assert result.exit_code == 0
        assert "Note deleted successfully!" in result.output
        assert list(notes_dir.glob("*.note")) == []

    def test_delete_cancelled(self, memo, notes_dir: Path) -> None:
        memo("create", "-t", "Kept", "-c", "", "--tags", "")
        note_id = _only_id(notes_dir)

        result = memo("delete", note_id, input="n\n")

        assert "Deletion cancelled." in result.output
        assert (notes_dir / f"{note_id}.note").exists()

    def test_delete_broken_note_with_yes(self, memo, write_note_file) -> None:
        """Test that an undecodable note can be removed."""
        path = write_note_file("broken", "garbage")

        result = memo("delete", "broken", "--yes")

        assert result.exit_code == 0
        assert not path.exists()


# =============================================================================
# Search / Stats Tests
# =============================================================================


class TestSearchAndStats:
    """Tests for memo search and memo stats."""

    def test_search(self, memo) -> None:
        memo("create", "-t", "Shopping", "-c", "Buy milk", "--tags", "")
        memo("create", "-t", "Work", "-c", "Ship it", "--tags", "")

        result = memo("search", "MILK")

        assert result.exit_code == 0
        assert "Found 1 note(s) matching 'MILK'" in result.output
        assert "Title: Shopping" in result.output
        assert "Preview: Buy milk" in result.output

    def test_search_no_results(self, memo) -> None:
        result = memo("search", "nothing")

        assert "No notes found matching 'nothing'" in result.output

    def test_stats(self, memo) -> None:
        memo("create", "-t", "One", "-c", "a b c", "--tags", "work")
        memo("create", "-t", "Two", "-c", "d e", "--tags", "work,urgent")

        result = memo("stats")

        assert result.exit_code == 0
        assert "Total notes: 2" in result.output
        assert "Total words: 5" in result.output
        assert "work: 2" in result.output

    def test_stats_empty(self, memo) -> None:
        assert "No notes found." in memo("stats").output


# =============================================================================
# Shell Tests
# =============================================================================


class TestShell:
    """Tests for the interactive shell."""

    def test_list_numbers_persist(self, memo) -> None:
        """Test that numbers from list work for later commands in the shell."""
        memo("create", "-t", "Remembered", "-c", "Shell body", "--tags", "")

        result = memo("shell", input="list\nread 1\nquit\n")

        assert result.exit_code == 0
        assert "1. Remembered" in result.output
        assert "Shell body" in result.output
        assert "Goodbye!" in result.output

    def test_errors_do_not_exit(self, memo) -> None:
        """Test that a failing command leaves the shell running."""
        result = memo("shell", input="read 1\nhelp\nquit\n")

        assert result.exit_code == 0
        assert "Error:" in result.output
        assert "Commands" in result.output

    def test_unknown_command(self, memo) -> None:
        result = memo("shell", input="frobnicate\nquit\n")

        assert "Unknown command: frobnicate" in result.output

    def test_end_of_input_exits(self, memo) -> None:
        result = memo("shell", input="")

        assert result.exit_code == 0
        assert "Goodbye!" in result.output
