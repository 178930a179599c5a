"""Emitter descriptors and query results."""

from casy.emitters.descriptor import EmitterDescriptor, Prioritized

__all__ = ["EmitterDescriptor", "Prioritized"]
