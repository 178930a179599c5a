"""Dependency graph over emitter descriptors."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from casy.engine.errors import DuplicateIdError, EmitterReferenceError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from casy.emitters.descriptor import EmitterDescriptor

logger = logging.getLogger(__name__)


class EdgeKind(str, Enum):
    TRIGGER = "trigger"
    ORDER = "order"


class DependencyGraph:
    """A directed graph where emitters precede other emitters.

    Two relations share the node set: ``trigger`` (the target is activated by
    the source) and ``order`` (the target only syncs after the source). Their
    union is the *precedes* relation used for priorities.
    """

    def __init__(self, emitters: dict[str, EmitterDescriptor]) -> None:
        self._emitters = emitters
        self._position = {emitter_id: i for i, emitter_id in enumerate(emitters)}
        # node -> successors, kept in input order
        self._triggers: dict[str, list[str]] = {n: [] for n in emitters}
        self._dependents: dict[str, list[str]] = {n: [] for n in emitters}
        for emitter_id, emitter in emitters.items():
            for dep in emitter.predecessors():
                self._dependents[dep].append(emitter_id)
            for dep in emitter.triggered_by:
                self._triggers[dep].append(emitter_id)
        for successors in (*self._triggers.values(), *self._dependents.values()):
            successors.sort(key=self._position.__getitem__)

    def __len__(self) -> int:
        return len(self._emitters)

    def __contains__(self, emitter_id: object) -> bool:
        return emitter_id in self._emitters

    @property
    def nodes(self) -> list[str]:
        """Emitter ids in input order."""
        return list(self._emitters)

    def emitter(self, emitter_id: str) -> EmitterDescriptor:
        return self._emitters[emitter_id]

    def emitters(self) -> list[EmitterDescriptor]:
        return list(self._emitters.values())

    def position(self, emitter_id: str) -> int:
        """Index of the emitter in the original descriptor sequence."""
        return self._position[emitter_id]

    def predecessors(self, emitter_id: str) -> frozenset[str]:
        return self._emitters[emitter_id].predecessors()

    def dependents(self, emitter_id: str) -> list[str]:
        """Emitters that sync after *emitter_id* through either edge kind."""
        return list(self._dependents[emitter_id])

    def triggered(self, emitter_id: str) -> list[str]:
        """Emitters directly triggered by *emitter_id*."""
        return list(self._triggers[emitter_id])

    def edges(self) -> Iterator[tuple[str, str, EdgeKind]]:
        """Yield ``(source, target, kind)``; a pair declared both ways yields two edges."""
        for emitter_id, emitter in self._emitters.items():
            for dep in sorted(emitter.triggered_by):
                yield dep, emitter_id, EdgeKind.TRIGGER
            for dep in sorted(emitter.syncs_after):
                yield dep, emitter_id, EdgeKind.ORDER


def build_graph(descriptors: Iterable[EmitterDescriptor]) -> DependencyGraph:
    """Validate *descriptors* and return their dependency graph.

    Raises:
        DuplicateIdError: Two descriptors share an id.
        EmitterReferenceError: A ``triggered_by``/``syncs_after`` id is not declared.
    """
    emitters: dict[str, EmitterDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.id in emitters:
            raise DuplicateIdError(descriptor.id)
        emitters[descriptor.id] = descriptor

    for emitter_id, emitter in emitters.items():
        missing = emitter.predecessors() - emitters.keys()
        if missing:
            raise EmitterReferenceError(emitter_id, missing)

    graph = DependencyGraph(emitters)
    logger.debug("Built dependency graph: %d emitters", len(graph))
    return graph
