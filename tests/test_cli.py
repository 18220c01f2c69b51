"""Tests for the ``notevault`` command line interface.

Commands are invoked as plain functions so the tests exercise vault
resolution, editing and saving without depending on argument parsing
details; ``main`` is checked separately with a mocked application.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from notevault import cli
from notevault.logging import configure_logging
from notevault.note import SectionNotFoundError

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

INBOX = "# Inbox\n\n## Tasks\n- [ ] one\n\n\n## Links\n"


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Create a vault holding a single Inbox note."""
    root = tmp_path / "vault"
    root.mkdir()
    (root / "Inbox.md").write_text(INBOX, encoding="utf-8")
    return root


@pytest.fixture
def no_config(tmp_path: Path) -> Path:
    """Return a settings path that does not exist."""
    return tmp_path / "absent.yaml"


def test_body_prints_section(
    vault_dir: Path, no_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``body`` prints the section text verbatim."""
    cli.body("inbox", section="Tasks", vault=vault_dir, config=no_config)
    assert capsys.readouterr().out == "- [ ] one\n\n\n"


def test_body_missing_section(vault_dir: Path, no_config: Path) -> None:
    """Unknown sections surface SectionNotFoundError."""
    with pytest.raises(SectionNotFoundError):
        cli.body("Inbox", section="Ideas", vault=vault_dir, config=no_config)


def test_append_checkbox_saves(
    vault_dir: Path, no_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``append --checkbox`` writes a checklist item into the section."""
    cli.trim("Inbox", section="Tasks", vault=vault_dir, config=no_config)
    cli.append(
        "Inbox",
        "two",
        section="Tasks",
        checkbox=True,
        vault=vault_dir,
        config=no_config,
    )
    text = (vault_dir / "Inbox.md").read_text(encoding="utf-8")
    assert text == "# Inbox\n\n## Tasks\n- [ ] one\n- [ ] two\n## Links\n"
    assert capsys.readouterr().out.count("updated") == 2


def test_append_link_to_whole_note(vault_dir: Path, no_config: Path) -> None:
    """Without a section the payload lands at the end of the note."""
    cli.append("Inbox", "Projects", link=True, vault=vault_dir, config=no_config)
    text = (vault_dir / "Inbox.md").read_text(encoding="utf-8")
    assert text == INBOX + "[[Projects]]"


def test_append_rejects_conflicting_flags(vault_dir: Path, no_config: Path) -> None:
    """A payload cannot be both a checkbox and a link."""
    with pytest.raises(ValueError, match="at most one"):
        cli.append(
            "Inbox",
            "x",
            checkbox=True,
            link=True,
            vault=vault_dir,
            config=no_config,
        )
    assert (vault_dir / "Inbox.md").read_text(encoding="utf-8") == INBOX


def test_lookup_json(
    vault_dir: Path, no_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``lookup --json`` prints a JSON array of paths."""
    cli.lookup("INBOX", json=True, vault=vault_dir, config=no_config)
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload == [str(vault_dir / "Inbox.md")]


def test_vault_from_settings_file(
    vault_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Without ``--vault`` the settings file names the vault."""
    config = tmp_path / "config.yaml"
    config.write_text(f"vault: {vault_dir}\ndaily: Journal\n", encoding="utf-8")
    cli.lookup("Inbox", config=config)
    assert capsys.readouterr().out == f"{vault_dir / 'Inbox.md'}\n"


def test_missing_vault_and_settings(no_config: Path) -> None:
    """With neither a vault nor a settings file there is nothing to open."""
    with pytest.raises(ValueError, match="No vault given"):
        cli.lookup("Inbox", config=no_config)


def test_main_invokes_app(mocker: MockerFixture) -> None:
    """``main`` delegates to the Cyclopts application."""
    app = mocker.patch.object(cli, "app")
    cli.main()
    app.assert_called_once_with()


def test_configure_logging_levels() -> None:
    """Verbose mode enables debug records; handlers are not duplicated."""
    logger = configure_logging(verbose=True)
    assert logger.level == logging.DEBUG
    logger = configure_logging(verbose=False)
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
