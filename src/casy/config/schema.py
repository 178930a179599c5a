"""Configuration models for YAML emitter declaration files."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

from casy.emitters.descriptor import (
    EmitterDescriptor,  # noqa: TC001 (pydantic needs this at runtime)
)
from casy.engine.settings import RootSettings


def _none_to_list(v: Any) -> Any:
    return v if v is not None else []


class Declarations(BaseModel):
    """Emitter declaration file: `root`, optional `groups`, and `emitters`."""

    model_config = ConfigDict(extra="forbid")

    root: RootSettings = RootSettings.model_construct()
    groups: list[str] | None = None
    emitters: Annotated[list[EmitterDescriptor], BeforeValidator(_none_to_list)] = []

    @property
    def descriptors(self) -> list[EmitterDescriptor]:
        """Declared emitters in file order."""
        return list(self.emitters)
