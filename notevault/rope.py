r"""Height-balanced rope used as the editable text buffer for notes.

Text is stored in leaves of at most ``MAX_LEAF`` characters joined by
branches that record their subtree length and height. Trees are persistent:
``split`` and ``join`` build new spines and share untouched subtrees, so an
edit costs O(log n) plus the size of the inserted text. Offsets are
codepoint offsets, i.e. plain ``str`` indices.

Example
-------
>>> from notevault.rope import Rope
>>> rope = Rope("# Title\nbody\n")
>>> rope.edit(8, 8, "new ")
>>> rope.slice(8, len(rope))
'new body\n'
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

MAX_LEAF = 512


class _Leaf:
    __slots__ = ("text",)

    height = 0

    def __init__(self, text: str) -> None:
        self.text = text

    @property
    def length(self) -> int:
        return len(self.text)


class _Branch:
    __slots__ = ("height", "left", "length", "right")

    def __init__(self, left: _Node, right: _Node) -> None:
        self.left = left
        self.right = right
        self.length = left.length + right.length
        self.height = max(left.height, right.height) + 1


_Node: typ.TypeAlias = "_Leaf | _Branch"


def _rotate_left(node: _Branch) -> _Branch:
    pivot = typ.cast("_Branch", node.right)
    return _Branch(_Branch(node.left, pivot.left), pivot.right)


def _rotate_right(node: _Branch) -> _Branch:
    pivot = typ.cast("_Branch", node.left)
    return _Branch(pivot.left, _Branch(pivot.right, node.right))


def _mergeable(left: _Node, right: _Node) -> bool:
    return (
        isinstance(left, _Leaf)
        and isinstance(right, _Leaf)
        and left.length + right.length <= MAX_LEAF
    )


def _join_right(left: _Branch, right: _Node) -> _Branch:
    """Attach ``right`` along the right spine of the taller ``left`` tree."""
    outer, inner = left.left, left.right
    if _mergeable(inner, right):
        return _Branch(outer, _Leaf(inner.text + right.text))  # type: ignore[union-attr]
    if inner.height <= right.height + 1:
        merged = _Branch(inner, right)
        if merged.height <= outer.height + 1:
            return _Branch(outer, merged)
        return _rotate_left(_Branch(outer, _rotate_right(merged)))
    merged = _join_right(typ.cast("_Branch", inner), right)
    node = _Branch(outer, merged)
    if merged.height <= outer.height + 1:
        return node
    return _rotate_left(node)


def _join_left(left: _Node, right: _Branch) -> _Branch:
    """Attach ``left`` along the left spine of the taller ``right`` tree."""
    inner, outer = right.left, right.right
    if _mergeable(left, inner):
        return _Branch(_Leaf(left.text + inner.text), outer)  # type: ignore[union-attr]
    if inner.height <= left.height + 1:
        merged = _Branch(left, inner)
        if merged.height <= outer.height + 1:
            return _Branch(merged, outer)
        return _rotate_right(_Branch(_rotate_left(merged), outer))
    merged = _join_left(left, typ.cast("_Branch", inner))
    node = _Branch(merged, outer)
    if merged.height <= outer.height + 1:
        return node
    return _rotate_right(node)


def _join(left: _Node | None, right: _Node | None) -> _Node | None:
    """Concatenate two balanced trees into one balanced tree."""
    if left is None or left.length == 0:
        return right
    if right is None or right.length == 0:
        return left
    if _mergeable(left, right):
        return _Leaf(left.text + right.text)  # type: ignore[union-attr]
    if left.height > right.height + 1:
        return _join_right(typ.cast("_Branch", left), right)
    if right.height > left.height + 1:
        return _join_left(left, typ.cast("_Branch", right))
    return _Branch(left, right)


def _split(node: _Node | None, index: int) -> tuple[_Node | None, _Node | None]:
    """Split ``node`` into the trees holding ``[0, index)`` and ``[index, len)``."""
    if node is None:
        return None, None
    if index <= 0:
        return None, node
    if index >= node.length:
        return node, None
    if isinstance(node, _Leaf):
        return _Leaf(node.text[:index]), _Leaf(node.text[index:])
    pivot = node.left.length
    if index < pivot:
        head, tail = _split(node.left, index)
        return head, _join(tail, node.right)
    if index == pivot:
        return node.left, node.right
    head, tail = _split(node.right, index - pivot)
    return _join(node.left, head), tail


def _balanced(leaves: list[_Leaf], lo: int, hi: int) -> _Node:
    if hi - lo == 1:
        return leaves[lo]
    mid = (lo + hi) // 2
    return _Branch(_balanced(leaves, lo, mid), _balanced(leaves, mid, hi))


def _build(text: str) -> _Node | None:
    """Build a balanced tree over ``text``."""
    if not text:
        return None
    leaves = [
        _Leaf(text[offset : offset + MAX_LEAF])
        for offset in range(0, len(text), MAX_LEAF)
    ]
    return _balanced(leaves, 0, len(leaves))


class Rope:
    """Editable text supporting logarithmic slicing, insertion and deletion.

    All offsets are ``str`` indices into the current contents and are only
    meaningful until the next call to :meth:`edit`.
    """

    __slots__ = ("_root",)

    def __init__(self, text: str = "") -> None:
        self._root = _build(text)

    def __len__(self) -> int:
        return 0 if self._root is None else self._root.length

    def __str__(self) -> str:
        return "".join(self.chunks())

    def __repr__(self) -> str:
        return f"Rope(len={len(self)})"

    @property
    def height(self) -> int:
        """Height of the underlying tree; a leaf-only rope has height 0."""
        return 0 if self._root is None else self._root.height

    def _check_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self):
            msg = f"range {start}..{end} out of bounds for rope of length {len(self)}"
            raise IndexError(msg)

    def chunks(self, start: int = 0, end: int | None = None) -> cabc.Iterator[str]:
        """Yield the stored text pieces covering ``[start, end)`` in order."""
        end = len(self) if end is None else end
        self._check_range(start, end)
        if start == end or self._root is None:
            return
        stack: list[tuple[_Node, int]] = [(self._root, 0)]
        while stack:
            node, offset = stack.pop()
            node_end = offset + node.length
            if node_end <= start or offset >= end:
                continue
            if isinstance(node, _Leaf):
                yield node.text[max(start - offset, 0) : min(end, node_end) - offset]
                continue
            stack.append((node.right, offset + node.left.length))
            stack.append((node.left, offset))

    def slice(self, start: int, end: int) -> str:
        """Return the text in ``[start, end)``."""
        return "".join(self.chunks(start, end))

    def lines(
        self, start: int = 0, end: int | None = None
    ) -> cabc.Iterator[tuple[int, str]]:
        """Yield ``(offset, line)`` pairs for the lines inside ``[start, end)``.

        Each ``line`` keeps its terminating ``"\\n"`` when one falls inside
        the range; the final line may be unterminated.
        """
        offset = start
        pending: list[str] = []
        for chunk in self.chunks(start, end):
            cursor = 0
            while True:
                newline = chunk.find("\n", cursor)
                if newline == -1:
                    if cursor < len(chunk):
                        pending.append(chunk[cursor:])
                    break
                pending.append(chunk[cursor : newline + 1])
                line = "".join(pending)
                yield offset, line
                offset += len(line)
                pending = []
                cursor = newline + 1
        if pending:
            yield offset, "".join(pending)

    def edit(self, start: int, end: int, replacement: str) -> None:
        """Replace ``[start, end)`` with ``replacement``."""
        self._check_range(start, end)
        head, rest = _split(self._root, start)
        _, tail = _split(rest, end - start)
        self._root = _join(_join(head, _build(replacement)), tail)

    def insert(self, offset: int, text: str) -> None:
        """Insert ``text`` at ``offset``."""
        self.edit(offset, offset, text)

    def delete(self, start: int, end: int) -> None:
        """Remove the text in ``[start, end)``."""
        self.edit(start, end, "")


__all__ = ["MAX_LEAF", "Rope"]
