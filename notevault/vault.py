"""Locate and open notes inside a vault directory.

A vault is a directory tree of ``.md`` notes. Notes are addressed by name,
matching the file name ``<name>.md`` anywhere below the vault root (exactly
or ignoring case). When several files share a name the first one in sorted
walk order is used.

Example
-------
>>> from pathlib import Path
>>> from notevault.vault import Vault
>>> vault = Vault.open(Path("~/Notes").expanduser())  # doctest: +SKIP
>>> note = vault.find_note("Inbox")  # doctest: +SKIP
>>> note.body("Tasks")  # doctest: +SKIP
'- [ ] water plants\\n'
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from .config import VaultConfig
from .logging import get_logger
from .note import Note

if typ.TYPE_CHECKING:
    from .config import SettingsConfig

NOTE_SUFFIX = ".md"

logger = get_logger("vault")


class VaultError(Exception):
    """Base class for vault errors."""


class VaultNotFoundError(VaultError):
    """Raised when the vault directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"vault does not exist: {str(path)!r}")


class VaultListError(VaultError):
    """Raised when the vault tree cannot be listed."""


class NoteNotFoundError(VaultError):
    """Raised when no note in the vault matches a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"note '{name}' not found")


def _raise_list_error(exc: OSError) -> typ.NoReturn:
    msg = f"failed to list vault entries: {exc}"
    raise VaultListError(msg) from exc


class Vault:
    """A directory of markdown notes plus its folder configuration."""

    __slots__ = ("config", "path")

    def __init__(self, path: Path, config: VaultConfig) -> None:
        self.path = path
        self.config = config

    @classmethod
    def open(cls, path: Path, config: VaultConfig | None = None) -> Vault:
        """Open the vault rooted at ``path``.

        Raises
        ------
        VaultNotFoundError
            If ``path`` is not an existing directory.
        """
        if not path.is_dir():
            raise VaultNotFoundError(path)
        return cls(path, config or VaultConfig())

    @classmethod
    def from_settings(cls, settings: SettingsConfig) -> Vault:
        """Open the vault described by loaded settings."""
        return cls.open(settings.vault, settings.vault_config)

    def lookup(self, note_name: str) -> list[Path]:
        """Return the paths of every note whose file name matches ``note_name``.

        Raises
        ------
        VaultListError
            If a directory in the vault cannot be listed.
        """
        exact = f"{note_name}{NOTE_SUFFIX}"
        lowered = exact.lower()
        matches: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(
            self.path, onerror=_raise_list_error
        ):
            dirnames.sort()
            for filename in sorted(filenames):
                if filename == exact or filename.lower() == lowered:
                    matches.append(Path(dirpath) / filename)
        logger.debug("lookup %r matched %d note(s)", note_name, len(matches))
        return matches

    def note(self, path: Path | str) -> Note:
        """Open the note at ``path``, relative to the vault root.

        Raises
        ------
        NoteOpenError
            If the note cannot be read.
        """
        return Note.open(self.path / path)

    def find_note(self, note_name: str) -> Note:
        """Open the first note matching ``note_name``.

        Raises
        ------
        NoteNotFoundError
            If no note matches.
        """
        matches = self.lookup(note_name)
        if not matches:
            raise NoteNotFoundError(note_name)
        if len(matches) > 1:
            logger.warning(
                "%d notes named %r; using %s", len(matches), note_name, matches[0]
            )
        return self.note(matches[0])


__all__ = [
    "NOTE_SUFFIX",
    "NoteNotFoundError",
    "Vault",
    "VaultError",
    "VaultListError",
    "VaultNotFoundError",
]
