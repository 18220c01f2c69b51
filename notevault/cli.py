"""Cyclopts CLI entrypoint for reading and editing notes in a vault.

The ``notevault`` console script defined here resolves a note by name inside
a vault, then prints, appends to, or trims one of its sections in place.
The vault comes from ``--vault`` or from the settings file named by
``--config`` (``~/.config/notevault/config.yaml`` by default); both can be
supplied through ``NOTEVAULT_*`` environment variables.

Examples
--------
Append a task to the ``Tasks`` section of the ``Inbox`` note:

>>> from notevault.cli import app
>>> app(
...     ["append", "Inbox", "water plants", "--section", "Tasks", "--checkbox"]
... )  # doctest: +SKIP

Print where a note lives as JSON:

>>> app(["lookup", "Inbox", "--json"])  # doctest: +SKIP
["/home/me/Notes/Inbox.md"]
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json
from cyclopts import App, Parameter

from .config import VaultConfig, load_settings
from .logging import configure_logging
from .markdown import CheckListItem, LocalLink, ToMarkdown
from .vault import Vault

if typ.TYPE_CHECKING:
    from .note import Note

DEFAULT_CONFIG = Path(
    os.getenv(
        "NOTEVAULT_CONFIG",
        Path.home() / ".config" / "notevault" / "config.yaml",
    )
)

app = App(name="notevault", config=cyclopts.config.Env("NOTEVAULT_", command=False))  # type: ignore[unknown-argument]

NoteName = typ.Annotated[str, Parameter(help="Note name, without the .md suffix")]
SectionOption = typ.Annotated[
    str | None, Parameter(help="Heading of the section to work on")
]
VaultOption = typ.Annotated[
    Path | None, Parameter(help="Vault directory", env_var="NOTEVAULT_VAULT")
]
ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to settings file", env_var="NOTEVAULT_CONFIG")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log debug output to stderr")]


def _open_vault(vault: Path | None, config: Path) -> Vault:
    """Open the vault from ``--vault`` or, failing that, the settings file."""
    if config.exists():
        settings = load_settings(config)
        if vault is None:
            return Vault.from_settings(settings)
        return Vault.open(vault, settings.vault_config)
    if vault is None:
        msg = f"No vault given and settings file '{config}' not found."
        raise ValueError(msg)
    return Vault.open(vault, VaultConfig())


def _open_note(name: str, vault: Path | None, config: Path, verbose: bool) -> Note:  # noqa: FBT001
    configure_logging(verbose=verbose)
    return _open_vault(vault, config).find_note(name)


@app.command(help="Print the body of a note or one of its sections.")
def body(
    note: NoteName,
    *,
    section: SectionOption = None,
    vault: VaultOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print the body of ``note``, or of ``section`` within it.

    Raises
    ------
    NoteNotFoundError
        If the vault holds no note called ``note``.
    SectionNotFoundError
        If ``section`` is given and the note has no such heading.
    """
    opened = _open_note(note, vault, config, verbose)
    print(opened.body(section), end="")


@app.command(help="Append text to a note or one of its sections and save it.")
def append(
    note: NoteName,
    text: typ.Annotated[str, Parameter(help="Text to append")],
    *,
    section: SectionOption = None,
    checkbox: typ.Annotated[
        bool, Parameter(help="Append TEXT as an unchecked checklist item")
    ] = False,
    link: typ.Annotated[
        bool, Parameter(help="Append TEXT as a [[local link]]")
    ] = False,
    vault: VaultOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Append ``text`` to ``note`` and write the note back to disk.

    Raises
    ------
    ValueError
        If both ``checkbox`` and ``link`` are requested.
    """
    if checkbox and link:
        msg = "Choose at most one of --checkbox and --link."
        raise ValueError(msg)
    payload: str | ToMarkdown = text
    if checkbox:
        payload = CheckListItem(text)
    elif link:
        payload = LocalLink(text)
    opened = _open_note(note, vault, config, verbose)
    opened.append(payload, section)
    opened.save()
    print(f"updated {opened.path}")


@app.command(help="Trim trailing whitespace from a note or section and save it.")
def trim(
    note: NoteName,
    *,
    section: SectionOption = None,
    vault: VaultOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Trim trailing whitespace in ``note`` and write it back to disk."""
    opened = _open_note(note, vault, config, verbose)
    opened.trim_end(section)
    opened.save()
    print(f"updated {opened.path}")


@app.command(help="List the files matching a note name.")
def lookup(
    name: NoteName,
    *,
    json: typ.Annotated[bool, Parameter(help="Print a JSON array")] = False,
    vault: VaultOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print every path in the vault whose file name matches ``name``."""
    configure_logging(verbose=verbose)
    paths = [str(path) for path in _open_vault(vault, config).lookup(name)]
    if json:
        print(msgspec.json.encode(paths).decode("utf-8"))
        return
    for path in paths:
        print(path)


def main() -> None:
    """Invoke the Cyclopts application behind the ``notevault`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
