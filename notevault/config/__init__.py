"""Load and validate notevault settings.

The settings file is a small YAML mapping naming the vault directory and,
optionally, the vault's daily-notes and templates folders::

    vault: ~/Notes
    daily: Journal
    templates: Templates

:func:`load_settings` returns a :class:`SettingsConfig` ready for
:meth:`notevault.vault.Vault.open`.
"""

from .loader import load_settings
from .models import SettingsConfig, SettingsConfigError, VaultConfig

__all__ = [
    "SettingsConfig",
    "SettingsConfigError",
    "VaultConfig",
    "load_settings",
]
