"""Timeline output: ANSI styling of delta and subsystem columns, row layout."""

import os
from typing import Generator, Iterable, Mapping, TextIO

from src.classifier import Subsystem
from src.timeline import TimelineRow, format_duration

# ANSI SGR parameters
BOLD = "1"
RED = "31"
GREEN = "32"
YELLOW = "33"
BLUE = "34"
HI_GREEN = "92"
HI_YELLOW = "93"
HI_BLUE = "94"
RESET = "\033[0m"

Style = tuple[str, ...]
PLAIN: Style = ()

# (threshold in whole ms, style); the last threshold exceeded wins.
DELTA_THRESHOLDS: tuple[tuple[int, Style], ...] = (
    (10, (YELLOW,)),
    (30, (BOLD, YELLOW)),
    (50, (HI_YELLOW,)),
    (100, (BOLD, HI_YELLOW)),
    (300, (RED,)),
    (500, (BOLD, RED)),
)

SUBSYSTEM_STYLES: dict[Subsystem, Style] = {
    Subsystem.VOLUME: (BOLD, GREEN),
    Subsystem.SYNCPOD: (BOLD, BLUE),
    Subsystem.PLEG: (BOLD, RED),
    Subsystem.STATUS: (BOLD, HI_BLUE),
    Subsystem.MOUNT: (BOLD, HI_GREEN),
    Subsystem.PROBE: (BOLD, YELLOW),
    Subsystem.MISC: (BOLD,),
}

COLUMN_WIDTH = 9
HEADER = "ELAPSED\tDIFF\tSYSTEM\tMESSAGE"
COLOR_MODES = ("auto", "always", "never")


def delta_style(delta_ms: float) -> Style:
    """Emphasis for a delta, escalating with its whole-millisecond magnitude."""
    dv = abs(int(delta_ms))
    style = PLAIN
    for threshold, candidate in DELTA_THRESHOLDS:
        if dv > threshold:
            style = candidate
    return style


def subsystem_style(subsystem: Subsystem) -> Style:
    return SUBSYSTEM_STYLES.get(subsystem, (BOLD,))


def paint(text: str, style: Style, color: bool = True) -> str:
    """Wrap text in the ANSI sequence for style, or return it untouched."""
    if not color or not style:
        return text
    return f"\033[{';'.join(style)}m{text}{RESET}"


def color_enabled(
    mode: str = "auto",
    stream: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    """Resolve a color mode against the output stream and NO_COLOR."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    environ = os.environ if environ is None else environ
    if "NO_COLOR" in environ or environ.get("TERM") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def format_row(row: TimelineRow, color: bool = False) -> str:
    elapsed = f"{format_duration(row.elapsed_ms):<{COLUMN_WIDTH}}"
    diff = f"{format_duration(row.delta_ms):<{COLUMN_WIDTH}}"
    return "\t".join((
        elapsed,
        paint(diff, delta_style(row.delta_ms), color),
        paint(row.subsystem.value, subsystem_style(row.subsystem), color),
        row.message,
    ))


def pod_header(pod: str) -> str:
    return f"Pod: {pod}"


def render(rows: Iterable[TimelineRow], color: bool = False) -> Generator[str, None, None]:
    """Yield the output lines of the timeline section."""
    yield ""
    yield "Logs:"
    yield HEADER
    for row in rows:
        yield format_row(row, color)
