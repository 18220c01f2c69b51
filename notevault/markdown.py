"""Render values to the markdown fragments appended to notes.

Anything offered to :meth:`notevault.section.Section.append` goes through
:func:`render`. Plain strings are inserted verbatim; richer payloads implement
the :class:`ToMarkdown` protocol.

Example
-------
>>> from notevault.markdown import CheckListItem, LocalLink, render
>>> render(CheckListItem("water plants"))
'- [ ] water plants\\n'
>>> render(LocalLink("Some Page"))
'[[Some Page]]'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@typ.runtime_checkable
class ToMarkdown(typ.Protocol):
    """Objects that can serialize themselves to a markdown string."""

    def to_markdown(self) -> str:
        """Return the markdown text for this value."""
        ...


def render(value: str | ToMarkdown) -> str:
    """Return the literal markdown fragment for ``value``.

    Raises
    ------
    TypeError
        If ``value`` is neither a string nor a :class:`ToMarkdown`.
    """
    match value:
        case str():
            return value
        case ToMarkdown():
            return value.to_markdown()
        case _:
            msg = f"cannot render {type(value).__name__!r} as markdown"
            raise TypeError(msg)


@dc.dataclass(slots=True)
class CheckListItem:
    """A single ``- [ ]`` task list entry."""

    text: str
    checked: bool = False

    def set(self, checked: bool) -> None:  # noqa: FBT001 - mirrors checkbox state
        """Set the state of the checkbox."""
        self.checked = checked

    def to_markdown(self) -> str:
        mark = "x" if self.checked else " "
        return f"- [{mark}] {self.text}\n"


@dc.dataclass(slots=True)
class LocalLink:
    """An obsidian-style wiki link, e.g. ``[[Some Page]]``."""

    reference: str

    def to_markdown(self) -> str:
        return f"[[{self.reference}]]"


__all__ = ["CheckListItem", "LocalLink", "ToMarkdown", "render"]
