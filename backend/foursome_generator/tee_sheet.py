"""Plain-text tee sheet for printed scorecards and notices."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence, Tuple

from .models import Group, Player

DEFAULT_START = "08:00"
DEFAULT_INTERVAL_MINUTES = 8
NO_HANDICAP = "—"


def assign_tee_times(
    groups: Sequence[Group],
    start: str = DEFAULT_START,
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
) -> List[Tuple[str, Group]]:
    """Pair each group with an HH:MM tee time, in group order; all times fall on the same day."""
    try:
        first = datetime.strptime(start.strip(), "%H:%M")
    except ValueError as exc:
        raise ValueError(f"Tee start must be HH:MM, got {start!r}") from exc
    if interval_minutes < 0:
        raise ValueError("Tee interval must not be negative")
    step = timedelta(minutes=interval_minutes)
    if groups:
        last = first + step * (len(groups) - 1)
        if last.date() != first.date():
            raise ValueError(
                f"{len(groups)} groups starting at {start.strip()} every {interval_minutes} minutes run past midnight"
            )
    return [((first + step * i).strftime("%H:%M"), group) for i, group in enumerate(groups)]


def format_player_line(player: Player) -> str:
    label = player.name
    if player.charity:
        label = f"{label} ({player.charity})"
    handicap = NO_HANDICAP if player.handicap is None else str(player.handicap)
    return f"  {label:<40} {handicap:>3}"


def format_tee_sheet(
    groups: Sequence[Group],
    start: str = DEFAULT_START,
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
) -> str:
    if not groups:
        return "No foursomes generated yet."
    blocks = []
    for tee_time, group in assign_tee_times(groups, start, interval_minutes):
        lines = [f"{tee_time}  {group.label}  [{group.code}]"]
        lines.extend(format_player_line(p) for p in group.players)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
