"""Typed dataclasses describing notevault configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


class SettingsConfigError(ValueError):
    """Raised when the settings file is invalid or incomplete."""


@dc.dataclass(slots=True)
class VaultConfig:
    """Vault-level folders used when creating notes.

    Nothing in notevault reads these folders itself; they are loaded and
    carried on :class:`~notevault.vault.Vault` for callers that create daily
    or templated notes.

    Attributes
    ----------
    daily : Path or None
        Folder, relative to the vault, where daily notes live.
    templates : Path or None
        Folder, relative to the vault, holding note templates.
    """

    daily: Path | None = None
    templates: Path | None = None


@dc.dataclass(slots=True)
class SettingsConfig:
    """Top-level settings: which vault to use and how it is laid out."""

    vault: Path
    vault_config: VaultConfig = dc.field(default_factory=VaultConfig)
