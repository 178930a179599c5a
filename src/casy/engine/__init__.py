"""Dependency resolution, priority layering and emitter queries."""

from casy.engine.errors import (
    CycleError,
    DependencyCycleError,
    DuplicateIdError,
    EmitterReferenceError,
    EngineError,
    NotBuiltError,
)
from casy.engine.graph import DependencyGraph, EdgeKind, build_graph
from casy.engine.index import EmitterIndex
from casy.engine.priority import PriorityMap, find_cycle, resolve_priorities
from casy.engine.registry import EmitterRegistry, EmitterSnapshot, build_snapshot
from casy.engine.settings import RootSettings, TopicClosure

__all__ = [
    "CycleError",
    "DependencyCycleError",
    "DependencyGraph",
    "DuplicateIdError",
    "EdgeKind",
    "EmitterIndex",
    "EmitterReferenceError",
    "EmitterRegistry",
    "EmitterSnapshot",
    "EngineError",
    "NotBuiltError",
    "PriorityMap",
    "RootSettings",
    "TopicClosure",
    "build_graph",
    "build_snapshot",
    "find_cycle",
    "resolve_priorities",
]
