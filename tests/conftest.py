"""Fixtures shared by every test module: sample documents, a sandboxed
config directory, output managers and a CLI runner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from specflat.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Forget the installed OutputManager; its consoles hold this test's streams."""
    yield
    reset_output()


# --- documents ---


@pytest.fixture
def person_dino_path() -> Path:
    return FIXTURES_DIR / "person_dino.json"


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.yaml"


@pytest.fixture
def person_dino_raw(person_dino_path: Path) -> dict[str, Any]:
    """Decoded person/dinosaur document (JSON)."""
    return json.loads(person_dino_path.read_text(encoding="utf-8"))


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Decoded petstore document (YAML)."""
    return yaml.safe_load(petstore_path.read_text(encoding="utf-8"))


# --- config sandbox ---


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every config and data lookup at *tmp_path*.

    Forces the XDG layout, clears ``SPECFLAT_*`` variables and runs the test
    from *tmp_path* so no stray ``specflat.json`` is picked up.
    """
    monkeypatch.setattr("specflat.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["SPECFLAT_FORMAT", "SPECFLAT_PATH_STYLE", "SPECFLAT_RESOURCE_STYLE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# --- CLI ---


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
