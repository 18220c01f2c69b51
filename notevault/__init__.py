"""Read and edit sections of markdown notes in an obsidian-style vault.

Notes are held in a balanced rope so that appending to or trimming one
heading-delimited section edits the buffer in place instead of rewriting the
whole document. The ``notevault`` console script wraps the same operations.

Exports
-------
- ``Note``: a single note file and its section operations.
- ``Vault``: note lookup by name inside a vault directory.
- ``app`` / ``main``: the Cyclopts command line application.

Examples
--------
>>> from notevault import Note
>>> note = Note.from_text("# Tasks\\n- [ ] one\\n\\n")
>>> note.body("Tasks")
'- [ ] one\\n\\n'
"""

from __future__ import annotations

from .cli import app, main
from .note import Note
from .vault import Vault

__all__ = ["Note", "Vault", "app", "main"]
