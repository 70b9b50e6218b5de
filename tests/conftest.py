"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from saferm.core.interactive import Prompter

# Environment variables that change saferm's behavior or output
_ENV_OVERRIDES = ("DEBUG", "SAFERM_GNU_MODE", "FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep the user's environment and theme out of every test."""
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def filled_dir(workdir: Path) -> Path:
    """A directory "dir" containing a single file "file"."""
    directory = workdir / "dir"
    directory.mkdir()
    (directory / "file").write_text("content")
    return directory


@pytest.fixture
def make_prompter() -> Callable[..., Prompter]:
    """Factory for a Prompter answering from a script of lines."""

    def _make(*answers: str) -> Prompter:
        reader = io.StringIO("".join(f"{answer}\n" for answer in answers))
        return Prompter(reader=reader, writer=io.StringIO())

    return _make
