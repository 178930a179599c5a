"""``casy`` command: print sync tiers and query results for a declaration file."""

from __future__ import annotations

import logging
from typing import Literal

import typer
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from casy import __version__

app = typer.Typer(
    name="casy",
    no_args_is_help=True,
    add_completion=False,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_VERBOSITY = {1: logging.INFO, 2: logging.DEBUG}


class CliSettings(BaseSettings):
    """Environment-only options of the command line tool.

    Lives beside :class:`~casy.engine.settings.RootSettings` under the same
    ``CASY_`` prefix; ``CASY_LOG`` names the level of the ``casy`` logger.
    """

    model_config = SettingsConfigDict(env_prefix="CASY_", extra="ignore")

    log: LogLevel | None = None

    @field_validator("log", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper() or None
        return value


def _log_level(verbose: int) -> int | None:
    """``CASY_LOG`` wins over ``-v`` flags; ``None`` leaves logging untouched."""
    try:
        env_level = CliSettings().log
    except ValidationError:
        typer.echo(
            "WARNING: invalid CASY_LOG level, expected one of "
            "DEBUG, INFO, WARNING, ERROR, CRITICAL; defaulting to INFO",
            err=True,
        )
        return logging.INFO
    if env_level is not None:
        return getattr(logging, env_level)
    if verbose:
        return _VERBOSITY.get(verbose, logging.DEBUG)
    return None


def _configure_logging(verbose: int) -> None:
    level = _log_level(verbose)
    if level is None:
        return
    logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, force=True)
    # graph building, priority resolution and loading all log under "casy"
    logging.getLogger("casy").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"casy {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log graph building and tier resolution (-v info, -vv debug).",
    ),
) -> None:
    """Resolve emitter sync tiers from a YAML declaration file.

    Every command loads the file, publishes the emitter graph and prints the
    selected emitters tier by tier, lowest priority first.
    """
    _ = version
    _configure_logging(verbose)


from casy.cli import commands as _commands  # noqa: E402, F401
