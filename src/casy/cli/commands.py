"""CLI command implementations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from casy.cli import app
from casy.cli.errors import handle_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from casy.emitters.descriptor import EmitterDescriptor, Prioritized
    from casy.engine.registry import EmitterRegistry

ConfigPath = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to the emitter declaration file."),
]

NoColor = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output."),
]


def _use_color(no_color: bool) -> bool:
    """Determine whether to use color output."""
    return not (no_color or os.environ.get("NO_COLOR"))


def _show(
    config: Path,
    no_color: bool,
    query: Callable[[EmitterRegistry], list[Prioritized[EmitterDescriptor]]],
    *,
    empty_msg: str,
) -> None:
    """Shared flow: load -> publish -> query -> print tiers and summary."""
    from casy.cli.formatting import format_summary, format_tiers
    from casy.config import build_registry, load

    color = _use_color(no_color)
    try:
        registry = build_registry(load(config))
        items = query(registry)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    if not items:
        typer.echo(empty_msg)
        raise typer.Exit(0)

    typer.echo(format_tiers(items, color=color))
    typer.echo()
    typer.echo(format_summary(items))


@app.command()
def tiers(
    config: ConfigPath = Path("casy.yaml"),
    no_color: NoColor = False,
) -> None:
    """Show every emitter grouped by sync tier."""
    _show(config, no_color, lambda r: r.all_emitters(), empty_msg="No emitters declared.")


@app.command()
def topics(
    names: Annotated[list[str], typer.Argument(help="Topics to request.")],
    config: ConfigPath = Path("casy.yaml"),
    no_color: NoColor = False,
) -> None:
    """Show the emitters a push on the given topics would sync."""
    _show(
        config,
        no_color,
        lambda r: r.by_topics(names),
        empty_msg=f"No emitters for topic(s): {', '.join(names)}",
    )


@app.command()
def group(
    name: Annotated[str, typer.Argument(help="Custom group name.")],
    config: ConfigPath = Path("casy.yaml"),
    no_color: NoColor = False,
) -> None:
    """Show the emitters tagged with a custom group."""
    _show(config, no_color, lambda r: r.by_group(name), empty_msg=f"No emitters in group {name}.")


@app.command(name="non-push")
def non_push(
    config: ConfigPath = Path("casy.yaml"),
    no_color: NoColor = False,
) -> None:
    """Show emitters that no topic can trigger, plus everything they trigger."""
    _show(
        config,
        no_color,
        lambda r: r.non_push_emitters(),
        empty_msg="No non-push emitters.",
    )


@app.command()
def validate(
    config: ConfigPath = Path("casy.yaml"),
    no_color: NoColor = False,
) -> None:
    """Validate the declaration file and its dependency graph."""
    from casy.cli.formatting import styler
    from casy.config import build_registry, load

    color = _use_color(no_color)
    try:
        registry = build_registry(load(config))
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    count = len(registry.snapshot.graph)
    tier_count = registry.snapshot.priorities.max_priority
    typer.echo(
        styler(color)(
            f"Declarations are valid: {count} emitter{'s' if count != 1 else ''}, "
            f"{tier_count} tier{'s' if tier_count != 1 else ''}.",
            fg="green",
        )
    )
