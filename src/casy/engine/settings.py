"""Root settings shared by the index and the declaration file."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

TopicClosure = Literal["trigger", "precedes"]


class RootSettings(BaseSettings):
    """Registry-wide options.

    Fields can be set via the declaration file's ``root`` section (constructor
    kwargs) or environment variables with the ``CASY_`` prefix. Constructor
    kwargs take precedence.

    ``all_emitters_topic`` and ``all_non_push_emitters_topic`` name special
    topics: requesting them selects every emitter or every non-push emitter.
    ``topic_closure`` picks which edges topic queries follow: ``trigger``
    edges only, or every ``precedes`` edge.
    """

    model_config = SettingsConfigDict(env_prefix="CASY_", extra="forbid")

    all_emitters_topic: str | None = None
    all_non_push_emitters_topic: str | None = None
    topic_closure: TopicClosure = "trigger"
