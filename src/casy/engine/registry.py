"""Published, read-only query surface over resolved emitters."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from casy.emitters.descriptor import EmitterDescriptor, Prioritized
from casy.engine.errors import NotBuiltError
from casy.engine.graph import DependencyGraph, build_graph
from casy.engine.index import EmitterIndex
from casy.engine.priority import PriorityMap, resolve_priorities
from casy.engine.settings import RootSettings

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmitterSnapshot:
    """Everything one successful build -> resolve -> index run produced."""

    graph: DependencyGraph
    priorities: PriorityMap
    index: EmitterIndex
    settings: RootSettings


def build_snapshot(
    descriptors: Iterable[EmitterDescriptor | Mapping[str, Any]],
    settings: RootSettings | None = None,
) -> EmitterSnapshot:
    """Run the whole pipeline; raises on the first invalid stage."""
    settings = settings if settings is not None else RootSettings()
    emitters = [
        d if isinstance(d, EmitterDescriptor) else EmitterDescriptor.model_validate(d)
        for d in descriptors
    ]
    graph = build_graph(emitters)
    priorities = resolve_priorities(graph)
    index = EmitterIndex(graph, priorities, settings)
    return EmitterSnapshot(graph=graph, priorities=priorities, index=index, settings=settings)


class EmitterRegistry:
    """Query facade consumed by the synchronization driver.

    A registry holds at most one published snapshot. ``publish`` builds a new
    snapshot completely before swapping it in, so readers never see partial
    state and a failed publish leaves the previous snapshot in place. Queries
    read the current reference once and need no locking.
    """

    def __init__(
        self,
        descriptors: Iterable[EmitterDescriptor | Mapping[str, Any]] | None = None,
        *,
        settings: RootSettings | None = None,
    ) -> None:
        self._write_lock = threading.Lock()
        self._snapshot: EmitterSnapshot | None = None
        if descriptors is not None:
            self.publish(descriptors, settings=settings)

    def publish(
        self,
        descriptors: Iterable[EmitterDescriptor | Mapping[str, Any]],
        *,
        settings: RootSettings | None = None,
    ) -> EmitterSnapshot:
        """Build and publish a new snapshot, replacing the current one."""
        snapshot = build_snapshot(descriptors, settings)
        with self._write_lock:
            self._snapshot = snapshot
        logger.info(
            "Published %d emitter(s) across %d tier(s)",
            len(snapshot.graph),
            snapshot.priorities.max_priority,
        )
        return snapshot

    @property
    def is_built(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> EmitterSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise NotBuiltError
        return snapshot

    def all_emitters(self) -> list[Prioritized[EmitterDescriptor]]:
        return self.snapshot.index.all()

    def by_topics(self, topics: Iterable[str]) -> list[Prioritized[EmitterDescriptor]]:
        return self.snapshot.index.by_topics(topics)

    def by_group(self, name: str) -> list[Prioritized[EmitterDescriptor]]:
        return self.snapshot.index.by_group(name)

    def non_push_emitters(self) -> list[Prioritized[EmitterDescriptor]]:
        return self.snapshot.index.non_push()

    def priority_of(self, emitter_id: str) -> int:
        """Resolved priority of one emitter; ``KeyError`` if it was never declared."""
        return self.snapshot.priorities[emitter_id]

    def tiers(self) -> dict[int, list[Prioritized[EmitterDescriptor]]]:
        """All emitters grouped by priority tier, lowest tier first."""
        tiers: dict[int, list[Prioritized[EmitterDescriptor]]] = {}
        for item in self.all_emitters():
            tiers.setdefault(item.priority, []).append(item)
        return tiers
