"""Runtime-checked shared ownership of a note's rope.

A :class:`BufferCell` is owned by exactly one :class:`~notevault.note.Note`.
Every :class:`~notevault.section.Section` derived from that note keeps a
reference to the same cell and must go through :meth:`BufferCell.borrow` or
:meth:`BufferCell.borrow_mut` to reach the rope. Overlapping mutable access
is a programming error and raises :class:`BorrowError` immediately instead of
letting two edits interleave.

Example
-------
>>> from notevault.buffer import BufferCell
>>> from notevault.rope import Rope
>>> cell = BufferCell(Rope("abc"))
>>> with cell.borrow() as rope:
...     rope.slice(0, 2)
'ab'
"""

from __future__ import annotations

import contextlib
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .rope import Rope


class BorrowError(RuntimeError):
    """Raised when a borrow would overlap an active mutable borrow."""


class BufferCell:
    """Single-owner container arbitrating read and write access to a rope."""

    __slots__ = ("_readers", "_rope", "_writing")

    def __init__(self, rope: Rope) -> None:
        self._rope = rope
        self._readers = 0
        self._writing = False

    @property
    def readers(self) -> int:
        """Number of read borrows currently held."""
        return self._readers

    @property
    def writing(self) -> bool:
        """Whether a mutable borrow is currently held."""
        return self._writing

    @contextlib.contextmanager
    def borrow(self) -> cabc.Iterator[Rope]:
        """Yield the rope for reading; reads may overlap other reads."""
        if self._writing:
            msg = "buffer already mutably borrowed"
            raise BorrowError(msg)
        self._readers += 1
        try:
            yield self._rope
        finally:
            self._readers -= 1

    @contextlib.contextmanager
    def borrow_mut(self) -> cabc.Iterator[Rope]:
        """Yield the rope for editing; no other borrow may be active."""
        if self._writing:
            msg = "buffer already mutably borrowed"
            raise BorrowError(msg)
        if self._readers:
            msg = f"buffer already borrowed by {self._readers} reader(s)"
            raise BorrowError(msg)
        self._writing = True
        try:
            yield self._rope
        finally:
            self._writing = False

    def text(self) -> str:
        """Return the full buffer contents."""
        with self.borrow() as rope:
            return str(rope)


__all__ = ["BorrowError", "BufferCell"]
