"""Engine error types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class EngineError(Exception):
    """Base exception for engine errors."""


class DuplicateIdError(EngineError):
    """Raised when multiple emitter descriptors share the same id."""

    def __init__(self, emitter_id: str) -> None:
        super().__init__(f"Duplicate emitter id: {emitter_id}")
        self.emitter_id = emitter_id


class EmitterReferenceError(EngineError):
    """Raised when an emitter depends on an id that was never declared."""

    def __init__(self, emitter_id: str, missing: Iterable[str]) -> None:
        self.emitter_id = emitter_id
        self.missing = sorted(missing)
        super().__init__(
            f"Emitter {emitter_id} references unknown emitter(s): {', '.join(self.missing)}"
        )


class DependencyCycleError(EngineError):
    """Raised when the combined trigger/order relation contains a cycle.

    ``cycle`` lists the ids of one offending loop in edge direction: each id
    precedes the next, and the last precedes the first.
    """

    def __init__(self, cycle: list[str]) -> None:
        msg = "Dependency cycle detected"
        if cycle:
            msg += f": {' -> '.join([*cycle, cycle[0]])}"
        super().__init__(msg)
        self.cycle = cycle


CycleError = DependencyCycleError


class NotBuiltError(EngineError):
    """Raised when a registry is queried before a snapshot was published."""

    def __init__(self) -> None:
        super().__init__("Emitter registry has not been built; call publish() first")
