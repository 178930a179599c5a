"""Tiered emitter listing output."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from casy.emitters.descriptor import EmitterDescriptor, Prioritized


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def _align(ids: Sequence[str]) -> int:
    return max((len(i) for i in ids), default=0)


def _details(emitter: EmitterDescriptor) -> str:
    parts: list[str] = []
    if emitter.topics:
        parts.append(f"topics: {', '.join(sorted(emitter.topics))}")
    if emitter.triggered_by:
        parts.append(f"triggered by: {', '.join(sorted(emitter.triggered_by))}")
    if emitter.syncs_after:
        parts.append(f"after: {', '.join(sorted(emitter.syncs_after))}")
    if emitter.groups:
        parts.append(f"groups: {', '.join(sorted(emitter.groups))}")
    return "; ".join(parts)


def format_emitter(item: Prioritized[EmitterDescriptor], *, width: int = 0, color: bool = True) -> str:
    """Render one emitter line: ``+`` marks push emitters, ``.`` non-push ones."""
    style = styler(color)
    emitter = item.emitter
    symbol, fg = ("+", "green") if emitter.is_push else (".", "bright_black")
    line = f"  {style(symbol, fg=fg)} {emitter.id.ljust(width)}"
    details = _details(emitter)
    if details:
        line += f"  {style(details, fg='bright_black')}"
    return line.rstrip()


def format_tiers(items: Sequence[Prioritized[EmitterDescriptor]], *, color: bool = True) -> str:
    """Render emitters grouped under ``Tier N`` headers, lowest tier first."""
    if not items:
        return "No emitters."
    style = styler(color)
    width = _align([i.emitter.id for i in items])
    lines: list[str] = []
    current: int | None = None
    for item in items:
        if item.priority != current:
            if current is not None:
                lines.append("")
            current = item.priority
            lines.append(style(f"Tier {current}", bold=True))
        lines.append(format_emitter(item, width=width, color=color))
    return "\n".join(lines)


def format_summary(items: Sequence[Prioritized[EmitterDescriptor]]) -> str:
    """Render ``3 emitters in 2 tiers.``"""
    count = len(items)
    tiers = len({i.priority for i in items})
    return (
        f"{count} emitter{'s' if count != 1 else ''} "
        f"in {tiers} tier{'s' if tiers != 1 else ''}."
    )
