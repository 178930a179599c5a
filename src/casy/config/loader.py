"""YAML declaration file loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError
from ruamel.yaml import YAML

from casy.config.schema import Declarations

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised for declaration loading / validation errors."""


# Field name → environment variable.
_ROOT_ENV_MAP: dict[str, str] = {
    "all_emitters_topic": "CASY_ALL_EMITTERS_TOPIC",
    "all_non_push_emitters_topic": "CASY_ALL_NON_PUSH_EMITTERS_TOPIC",
    "topic_closure": "CASY_TOPIC_CLOSURE",
}


def _resolve_root(raw_root: dict[str, Any], config_dir: Path) -> dict[str, Any]:
    """Resolve root fields from YAML, env vars, and ``.env`` file.

    Priority (highest wins): YAML value > env var > ``.env`` file.
    """
    if not isinstance(raw_root, dict):
        raise ConfigError("root: expected a mapping")
    unknown = sorted(set(raw_root) - _ROOT_ENV_MAP.keys())
    if unknown:
        raise ConfigError(f"Unknown root option(s): {', '.join(unknown)}")

    env_file = config_dir / ".env"
    dotenv_vals = dotenv_values(env_file, encoding="utf-8-sig") if env_file.is_file() else {}

    resolved: dict[str, Any] = {}
    for field, env_key in _ROOT_ENV_MAP.items():
        val = raw_root.get(field)
        if val is None:
            val = os.environ.get(env_key)
        if val is None:
            val = dotenv_vals.get(env_key)
        if val is not None:
            resolved[field] = val
    return resolved


def _validate_unique_ids(declarations: Declarations) -> list[str]:
    """Check that no two emitters share an id."""
    seen: dict[str, int] = {}  # id → first position
    errors: list[str] = []
    for pos, emitter in enumerate(declarations.emitters):
        if emitter.id in seen:
            errors.append(
                f"Duplicate emitter id '{emitter.id}': "
                f"declared at positions {seen[emitter.id]} and {pos}"
            )
        else:
            seen[emitter.id] = pos
    return errors


def _validate_groups(declarations: Declarations) -> list[str]:
    """Check emitter group tags against the declared ``groups`` list, if any."""
    if declarations.groups is None:
        return []
    known = set(declarations.groups)
    return [
        f"Emitter '{emitter.id}' uses undeclared group '{group}'"
        for emitter in declarations.emitters
        for group in sorted(emitter.groups - known)
    ]


def load_declarations(path: Path | str) -> Declarations:
    """Load a YAML declaration file and return a ``Declarations`` object.

    Raises:
        ConfigError: On YAML parse errors, unknown options, or validation failures.
    """
    path = Path(path)

    try:
        raw = YAML(typ="safe").load(path)
    except Exception as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    try:
        raw["root"] = _resolve_root(raw.get("root") or {}, path.parent)
        declarations = Declarations.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    errors = _validate_unique_ids(declarations) + _validate_groups(declarations)
    if errors:
        raise ConfigError("\n".join(errors))

    logger.info("Loaded declarations from %s (%d emitters)", path, len(declarations.emitters))
    return declarations
