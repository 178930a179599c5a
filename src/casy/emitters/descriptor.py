"""Plain data describing one emitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

T = TypeVar("T")

_Name = Annotated[str, Field(min_length=1)]


class EmitterDescriptor(BaseModel):
    """Declaration of a single emitter.

    Descriptors are pure data - they say which emitters trigger this one,
    which it must sync after, which topics push it and which custom groups
    it belongs to. The engine never mutates them once a graph is built.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: _Name
    triggered_by: frozenset[_Name] = frozenset()
    syncs_after: frozenset[_Name] = frozenset()
    topics: frozenset[_Name] = frozenset()
    groups: frozenset[_Name] = frozenset()

    @model_validator(mode="after")
    def _no_self_reference(self) -> Self:
        if self.id in self.triggered_by or self.id in self.syncs_after:
            msg = f"Emitter {self.id} cannot depend on itself"
            raise ValueError(msg)
        return self

    @computed_field
    @property
    def is_push(self) -> bool:
        """True when at least one topic can externally trigger this emitter."""
        return bool(self.topics)

    def predecessors(self) -> frozenset[str]:
        """Ids that must complete before this emitter, whatever the edge kind."""
        return self.triggered_by | self.syncs_after


@dataclass(frozen=True, slots=True)
class Prioritized(Generic[T]):
    """An emitter tagged with its resolved synchronization priority."""

    emitter: T
    priority: int
