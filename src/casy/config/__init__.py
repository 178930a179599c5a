"""YAML declaration loading and convenience registry API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from casy.config.loader import ConfigError, load_declarations
from casy.config.schema import Declarations
from casy.engine.registry import EmitterRegistry

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "ConfigError",
    "Declarations",
    "build_registry",
    "load",
    "load_declarations",
    "load_registry",
]


def load(path: Path | str) -> Declarations:
    """Load a YAML declaration file."""
    return load_declarations(path)


def build_registry(declarations: Declarations) -> EmitterRegistry:
    """Publish the declared emitters into a fresh registry."""
    return EmitterRegistry(declarations.descriptors, settings=declarations.root)


def load_registry(path: Path | str) -> EmitterRegistry:
    """Load a declaration file and publish it in one step."""
    return build_registry(load(path))
