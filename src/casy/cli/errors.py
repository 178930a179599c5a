"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer


def _err(msg: str, *, fg: str | None) -> None:
    """Print a styled message to stderr."""
    typer.echo(typer.style(msg, fg=fg), err=True)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print a clean error message to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from casy.config.loader import ConfigError
    from casy.engine.errors import (
        DependencyCycleError,
        DuplicateIdError,
        EmitterReferenceError,
        NotBuiltError,
    )

    fg = typer.colors.RED if color else None

    if isinstance(exc, ConfigError):
        _err(f"Configuration error: {exc}", fg=fg)
    elif isinstance(exc, DependencyCycleError):
        _err("Dependency cycle:", fg=fg)
        _err(f"  {' -> '.join([*exc.cycle, *exc.cycle[:1]])}", fg=fg)
    elif isinstance(exc, EmitterReferenceError):
        _err(f"Unknown reference: {exc}", fg=fg)
    elif isinstance(exc, DuplicateIdError):
        _err(f"Duplicate emitter: {exc.emitter_id}", fg=fg)
    elif isinstance(exc, NotBuiltError):
        _err(f"Not built: {exc}", fg=fg)
    else:
        _err(f"Error: {exc}", fg=fg)

    return 1
