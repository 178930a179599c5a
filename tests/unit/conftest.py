"""Shared fixtures for unit tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from casy.config import load
from casy.emitters.descriptor import EmitterDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from casy.config.schema import Declarations


@pytest.fixture(autouse=True)
def _clean_casy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove CASY_* env vars so unit tests don't leak host config."""
    for var in list(os.environ):
        if var.startswith("CASY_"):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_declarations(tmp_path: Path) -> Callable[..., Declarations]:
    """Factory fixture: write YAML + optional .env, return loaded Declarations."""

    def _make(yaml_str: str, *, dotenv: str | None = None) -> Declarations:
        (tmp_path / "casy.yaml").write_text(yaml_str)
        if dotenv is not None:
            (tmp_path / ".env").write_text(dotenv)
        return load(tmp_path / "casy.yaml")

    return _make


@pytest.fixture
def example_emitters() -> list[EmitterDescriptor]:
    """A pushes B by trigger, C syncs after B, D stands alone."""
    return [
        EmitterDescriptor(id="A", topics=["push"]),
        EmitterDescriptor(id="B", triggered_by=["A"]),
        EmitterDescriptor(id="C", syncs_after=["B"]),
        EmitterDescriptor(id="D", topics=["other"]),
    ]
