"""Deterministic synchronization ordering for dependent data emitters."""

from __future__ import annotations

from casy.emitters.descriptor import EmitterDescriptor, Prioritized
from casy.engine.errors import (
    CycleError,
    DependencyCycleError,
    DuplicateIdError,
    EmitterReferenceError,
    EngineError,
    NotBuiltError,
)
from casy.engine.registry import EmitterRegistry, EmitterSnapshot
from casy.engine.settings import RootSettings

__version__ = "0.3.0"

__all__ = [
    "CycleError",
    "DependencyCycleError",
    "DuplicateIdError",
    "EmitterDescriptor",
    "EmitterReferenceError",
    "EmitterRegistry",
    "EmitterSnapshot",
    "EngineError",
    "NotBuiltError",
    "Prioritized",
    "RootSettings",
    "__version__",
]
