"""Unit tests for the balanced rope backing note buffers.

The rope is checked against a plain ``str`` model: every slice and edit must
leave both holding identical text, and the tree must stay shallow after long
runs of edits.
"""

from __future__ import annotations

import random

import pytest

from notevault.rope import MAX_LEAF, Rope


def test_empty_rope() -> None:
    """An empty rope has no length, no chunks and no lines."""
    rope = Rope()
    assert len(rope) == 0
    assert str(rope) == ""
    assert list(rope.lines()) == []


def test_slice_spans_leaves() -> None:
    """Slices crossing leaf boundaries should stitch the pieces together."""
    text = "".join(f"line {idx}\n" for idx in range(500))
    rope = Rope(text)
    start, end = MAX_LEAF - 7, MAX_LEAF * 3 + 11
    assert len(rope) == len(text)
    assert rope.slice(start, end) == text[start:end], (
        "expected slice across several leaves to match the source text"
    )


def test_edit_insert_and_delete() -> None:
    """Insertions and deletions should behave like ``str`` splicing."""
    rope = Rope("hello world")
    rope.insert(5, ",")
    rope.edit(7, 12, "there")
    assert str(rope) == "hello, there"
    rope.delete(0, 7)
    assert str(rope) == "there"


@pytest.mark.parametrize(("start", "end"), [(-1, 2), (3, 2), (0, 99)])
def test_out_of_range_offsets_raise(start: int, end: int) -> None:
    """Offsets outside the rope are rejected rather than clamped."""
    rope = Rope("abcdef")
    with pytest.raises(IndexError):
        rope.slice(start, end)
    with pytest.raises(IndexError):
        rope.edit(start, end, "x")


def test_lines_keep_terminators_and_offsets() -> None:
    """Lines carry their newline and the offset where they begin."""
    rope = Rope("# A\nbody\n\nlast")
    assert list(rope.lines()) == [
        (0, "# A\n"),
        (4, "body\n"),
        (9, "\n"),
        (10, "last"),
    ]
    assert list(rope.lines(4, 9)) == [(4, "body\n")]


def test_lines_across_leaf_boundaries() -> None:
    """A line split across leaves is still yielded whole."""
    text = "x" * (MAX_LEAF - 2) + "\n" + "y" * (MAX_LEAF * 2) + "\nz"
    rope = Rope(text)
    offsets = [offset for offset, _ in rope.lines()]
    lines = [line for _, line in rope.lines()]
    assert lines == text.splitlines(keepends=True)
    assert offsets == [0, MAX_LEAF - 1, MAX_LEAF * 3]


def test_random_edits_match_string_model() -> None:
    """A long run of random edits keeps the rope equal to a str model."""
    rng = random.Random(1234)
    model = "".join(f"## heading {idx}\nbody {idx}\n" for idx in range(200))
    rope = Rope(model)
    for _ in range(600):
        start = rng.randint(0, len(model))
        end = rng.randint(start, min(len(model), start + rng.randint(0, 300)))
        replacement = "".join(rng.choice("ab \n#") for _ in range(rng.randint(0, 80)))
        rope.edit(start, end, replacement)
        model = model[:start] + replacement + model[end:]
        probe = rng.randint(0, len(model))
        assert rope.slice(probe, len(model)) == model[probe:]
    assert str(rope) == model
    assert rope.height <= 24, (
        f"expected a shallow tree, got height {rope.height}"
    )


def test_many_small_appends_stay_balanced() -> None:
    """Appending one character at a time must not degrade into a list."""
    rope = Rope()
    for idx in range(5000):
        rope.insert(len(rope), chr(ord("a") + idx % 26))
    assert len(rope) == 5000
    assert rope.slice(26, 52) == "abcdefghijklmnopqrstuvwxyz"
    assert rope.height <= 20, f"expected a balanced tree, got height {rope.height}"
