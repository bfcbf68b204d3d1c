"""Timeline construction: elapsed/delta computation and duration display."""

import math
from dataclasses import dataclass
from typing import Iterable

from src.classifier import Subsystem, classify
from src.extractor import KubeletEvent

# Display granularity: 0.1 ms, expressed as ticks per millisecond.
TICKS_PER_MS = 10
MESSAGE_WIDTH = 90
ELLIPSIS = "..."


@dataclass(frozen=True)
class TimelineRow:
    elapsed_ms: float
    delta_ms: float
    subsystem: Subsystem
    message: str
    event: KubeletEvent


def _round_ticks(ms: float) -> int:
    """Round milliseconds to whole 0.1 ms ticks, halves away from zero."""
    ticks = math.floor(abs(ms) * TICKS_PER_MS + 0.5)
    return -ticks if ms < 0 else ticks


def round_ms(ms: float) -> float:
    return _round_ticks(ms) / TICKS_PER_MS


def _decimal(value: int, places: int) -> str:
    whole, frac = divmod(value, 10 ** places)
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{places}d}".rstrip("0")


def format_duration(ms: float) -> str:
    """Render milliseconds in a compact unit form.

    Examples: 0s, 500µs, 1.5ms, 2.0034s, 1m2.5s, 1h0m0s
    """
    ticks = _round_ticks(ms)
    if ticks == 0:
        return "0s"

    sign = "-" if ticks < 0 else ""
    ticks = abs(ticks)
    if ticks < TICKS_PER_MS:
        return f"{sign}{ticks * 100}µs"
    if ticks < 1000 * TICKS_PER_MS:
        return f"{sign}{_decimal(ticks, 1)}ms"

    hours, rem = divmod(ticks, 3600 * 1000 * TICKS_PER_MS)
    minutes, rem = divmod(rem, 60 * 1000 * TICKS_PER_MS)
    seconds = _decimal(rem, 4) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return sign + seconds


def truncate(message: str, width: int = MESSAGE_WIDTH) -> str:
    """Cut messages longer than width, ending them with an ellipsis."""
    if len(message) <= width:
        return message
    return message[:width - len(ELLIPSIS)] + ELLIPSIS


def build_timeline(
    events: Iterable[KubeletEvent],
    sort: bool = True,
    width: int = MESSAGE_WIDTH,
) -> list[TimelineRow]:
    """Compute one TimelineRow per event.

    With sort=True (the CLI default) events are stable-sorted by timestamp
    first, so elapsed and delta are never negative. With sort=False rows
    follow arrival order and deltas may be negative on out-of-order input.
    The first row always has zero elapsed and zero delta.
    """
    events = list(events)
    if sort:
        events.sort(key=lambda e: e.timestamp)
    if not events:
        return []

    start = events[0].timestamp
    previous = start
    rows = []
    for event in events:
        rows.append(TimelineRow(
            elapsed_ms=event.timestamp - start,
            delta_ms=event.timestamp - previous,
            subsystem=classify(event.caller, event.message),
            message=truncate(event.message, width),
            event=event,
        ))
        previous = event.timestamp
    return rows
