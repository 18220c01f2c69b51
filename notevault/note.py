r"""Open, edit and save a single markdown note.

:class:`Note` owns the note's rope (inside a :class:`BufferCell`) and its path
on disk. Every :class:`~notevault.section.Section` obtained from a note shares
that buffer and is only valid while the note is alive.

Example
-------
>>> from notevault.note import Note
>>> note = Note.from_text("# Todo\n- [ ] one\n\n\n# Done\n")
>>> note.trim_end(section="Todo")
>>> str(note)
'# Todo\n- [ ] one\n# Done\n'
>>> note.append("- [ ] two\n", section="Todo")
>>> note.body("Todo")
'- [ ] one\n- [ ] two\n'
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .buffer import BufferCell
from .logging import get_logger
from .rope import Rope
from .section import Section

if typ.TYPE_CHECKING:
    from .markdown import ToMarkdown

logger = get_logger("note")


class NoteError(Exception):
    """Base class for errors raised while working with a note."""


class NoteOpenError(NoteError):
    """Raised when a note file cannot be read."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"failed to open note {str(path)!r}")


class NoteSaveError(NoteError):
    """Raised when a note file cannot be written."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"failed to save note: {str(path)!r}")


class SectionNotFoundError(NoteError):
    """Raised when a named section does not exist in the note."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"section '{section}' not found")


class Note:
    """Low-level wrapper around a markdown note held in a rope."""

    __slots__ = ("_buffer", "path")

    def __init__(self, path: Path, buffer: BufferCell) -> None:
        self.path = path
        self._buffer = buffer

    @classmethod
    def open(cls, path: Path) -> Note:
        """Read the note at ``path`` into memory.

        Raises
        ------
        NoteOpenError
            If the file is missing, unreadable or not valid UTF-8. The
            underlying exception is chained as ``__cause__``.
        """
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteOpenError(path) from exc
        logger.debug("opened note %s (%d chars)", path, len(contents))
        return cls(path, BufferCell(Rope(contents)))

    @classmethod
    def from_text(cls, text: str, path: Path | None = None) -> Note:
        """Build a note from in-memory text, optionally bound to ``path``."""
        return cls(path or Path("untitled.md"), BufferCell(Rope(text)))

    def save(self) -> None:
        """Write pending changes to disk, overwriting the file.

        The file is not checked for external modification since it was opened,
        so a concurrent edit made by another program is silently overwritten.

        Raises
        ------
        NoteSaveError
            If the file cannot be written.
        """
        text = self._buffer.text()
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise NoteSaveError(self.path) from exc
        logger.debug("saved note %s (%d chars)", self.path, len(text))

    def section(self, name: str | None = None) -> Section | None:
        """Return the whole-note section, or the named section when given."""
        root = Section.root(self._buffer)
        if name is None:
            return root
        return root.subsection(name)

    def _require_section(self, name: str | None) -> Section:
        section = self.section(name)
        if section is None:
            raise SectionNotFoundError(typ.cast("str", name))
        return section

    def body(self, section: str | None = None) -> str:
        """Get the body of the note, or of ``section`` when given.

        Raises
        ------
        SectionNotFoundError
            If ``section`` is given and does not exist.
        """
        return self._require_section(section).body()

    def append(self, data: str | ToMarkdown, section: str | None = None) -> None:
        """Append ``data`` to the end of the note, or of ``section`` when given.

        Raises
        ------
        SectionNotFoundError
            If ``section`` is given and does not exist.
        """
        self._require_section(section).append(data)

    def trim_end(self, section: str | None = None) -> None:
        """Trim trailing whitespace from the note, or from ``section``.

        Raises
        ------
        SectionNotFoundError
            If ``section`` is given and does not exist.
        """
        self._require_section(section).trim_end()

    def __str__(self) -> str:
        return self._buffer.text()

    def __repr__(self) -> str:
        return f"Note(path={str(self.path)!r})"


__all__ = [
    "Note",
    "NoteError",
    "NoteOpenError",
    "NoteSaveError",
    "SectionNotFoundError",
]
