r"""Resolve and edit heading-delimited sections of a note in place.

A :class:`Section` is a view over ``[start, end)`` of a note's shared
:class:`~notevault.buffer.BufferCell`, tagged with the heading level it was
found at (``0`` for the whole note). Sub-sections are resolved by scanning
the lines of the parent range for a heading such as ``## Tasks``; the body
runs from the line after that heading up to the next heading of the same or
a shallower level, or to the end of the buffer.

Edits made through a section keep that section's own ``end`` in step with
the buffer. Ranges held by any *other* section over the same buffer are not
adjusted and must not be reused after such an edit.

Example
-------
>>> from notevault.note import Note
>>> note = Note.from_text("# A\n\n## B\ntext b\n\n## C\ntext c\n")
>>> note.section("B").body()
'text b\n\n'
"""

from __future__ import annotations

import typing as typ

from .logging import get_logger
from .markdown import render

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .buffer import BufferCell
    from .markdown import ToMarkdown

HEADING_MARKER = "#"

logger = get_logger("section")


def parse_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, text)`` when ``line`` is a heading, otherwise ``None``.

    A heading is a run of ``#`` markers, a single space and the heading text.
    The line terminator (``\\n`` or ``\\r\\n``) is not part of the text.
    """
    content = line.removesuffix("\n").removesuffix("\r")
    stripped = content.lstrip(HEADING_MARKER)
    level = len(content) - len(stripped)
    if level == 0 or not stripped.startswith(" "):
        return None
    return level, stripped[1:]


def _find_heading(
    lines: cabc.Iterable[tuple[int, str]], *, min_level: int, name: str
) -> tuple[int, str, int] | None:
    """Return ``(offset, line, level)`` for the first heading matching ``name``."""
    wanted = name.lower()
    for offset, line in lines:
        parsed = parse_heading(line)
        if parsed is None:
            continue
        level, text = parsed
        if level >= min_level and text.lower() == wanted:
            return offset, line, level
    return None


def _find_boundary(
    lines: cabc.Iterable[tuple[int, str]], *, max_level: int
) -> int | None:
    """Return the offset of the first heading at ``max_level`` or shallower."""
    for offset, line in lines:
        parsed = parse_heading(line)
        if parsed is not None and parsed[0] <= max_level:
            return offset
    return None


class Section:
    """A heading-delimited range of a note's buffer.

    Parameters
    ----------
    level : int
        Heading depth; ``0`` for the root section spanning the whole note.
    start, end : int
        Half-open offset range of the section body, excluding its heading.
    buffer : BufferCell
        The note's shared buffer. Sections never own it.
    """

    __slots__ = ("_buffer", "end", "level", "start")

    def __init__(self, level: int, start: int, end: int, buffer: BufferCell) -> None:
        if not 0 <= start <= end:
            msg = f"invalid section range {start}..{end}"
            raise ValueError(msg)
        self.level = level
        self.start = start
        self.end = end
        self._buffer = buffer

    @classmethod
    def root(cls, buffer: BufferCell) -> Section:
        """Return the level-0 section covering the whole buffer."""
        with buffer.borrow() as rope:
            return cls(0, 0, len(rope), buffer)

    def __repr__(self) -> str:
        return f"Section(level={self.level}, start={self.start}, end={self.end})"

    def body(self) -> str:
        """Return the verbatim text of the section body."""
        with self._buffer.borrow() as rope:
            return rope.slice(self.start, self.end)

    def subsection(self, name: str) -> Section | None:
        """Find the first heading called ``name`` nested below this section.

        Only headings deeper than ``self.level`` qualify; the child's level is
        the marker count actually found, which may skip levels. Matching is
        literal and case-insensitive. Duplicate names resolve to the first
        occurrence.

        Returns
        -------
        Section or None
            The resolved child, or ``None`` when no such heading exists.
        """
        with self._buffer.borrow() as rope:
            found = _find_heading(
                rope.lines(self.start, self.end),
                min_level=self.level + 1,
                name=name,
            )
            if found is None:
                logger.debug("section %r not found below level %d", name, self.level)
                return None
            offset, _, level = found
            # The clipped range may cut the heading's own line break off.
            _, line = next(rope.lines(offset))
            body_start = offset + len(line)
            body_end = _find_boundary(rope.lines(body_start), max_level=level)
            if body_end is None:
                body_end = len(rope)
        logger.debug(
            "resolved section %r at level %d spanning %d..%d",
            name,
            level,
            body_start,
            body_end,
        )
        return Section(level, body_start, body_end, self._buffer)

    def append(self, data: str | ToMarkdown) -> None:
        """Insert rendered ``data`` at the end of the section body."""
        text = render(data)
        with self._buffer.borrow_mut() as rope:
            rope.insert(self.end, text)
        self.end += len(text)

    def trim_end(self) -> None:
        """Remove trailing whitespace, keeping the section's final line break.

        Whitespace between the last non-whitespace character and ``end`` is
        deleted except for the single character just before ``end``, which
        terminates the section. The body then ends at the last non-whitespace
        character. A body holding only whitespace shrinks to that one kept
        character instead of an empty range. Calling this again is a no-op.
        """
        with self._buffer.borrow_mut() as rope:
            content_end = self.end
            for chunk in reversed(list(rope.chunks(self.start, self.end))):
                kept = len(chunk.rstrip())
                content_end -= len(chunk) - kept
                if kept:
                    break
            if content_end == self.end:
                return
            if content_end > self.start:
                rope.delete(content_end, self.end - 1)
                new_end = content_end
            elif self.end - self.start > 1:
                rope.delete(self.start, self.end - 1)
                new_end = self.start + 1
            else:
                return
        self.end = new_end


__all__ = ["HEADING_MARKER", "Section", "parse_heading"]
