"""Load notevault settings YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import SettingsConfig, SettingsConfigError, VaultConfig


def load_settings(path: Path) -> SettingsConfig:
    """Load the YAML file describing which vault to use.

    Parameters
    ----------
    path : Path
        Filesystem path to the settings file (for example,
        ``~/.config/notevault/config.yaml``).

    Returns
    -------
    SettingsConfig
        Parsed settings. Relative paths are resolved against the directory
        holding the settings file, except ``daily`` and ``templates`` which
        stay relative to the vault.

    Raises
    ------
    FileNotFoundError
        If the settings file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SettingsConfigError
        If the ``vault`` key is missing or empty.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from notevault.config import load_settings
    >>> settings = load_settings(Path("notevault.yaml"))  # doctest: +SKIP
    >>> settings.vault_config.daily  # doctest: +SKIP
    PosixPath('Journal')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    vault_raw = _optional_path(raw.get("vault"))
    if vault_raw is None:
        msg = f"Configuration file '{path}' is missing 'vault'."
        raise SettingsConfigError(msg)
    vault = vault_raw if vault_raw.is_absolute() else path.parent / vault_raw

    return SettingsConfig(
        vault=vault,
        vault_config=VaultConfig(
            daily=_optional_path(raw.get("daily")),
            templates=_optional_path(raw.get("templates")),
        ),
    )


def _optional_path(value: object | None) -> Path | None:
    """Return a ``Path`` for non-empty values, expanding ``~``."""
    if value is None:
        return None
    text = str(value).strip()
    return Path(text).expanduser() if text else None


__all__ = ["load_settings"]
