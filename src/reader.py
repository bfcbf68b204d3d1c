"""Generator-based line reading from files or standard input."""

import os
import sys
from typing import Generator, Iterable, TextIO

STDIN_MARKER = "-"


def read_stream(stream: TextIO, name: str = "<stdin>") -> Generator[tuple[str, str], None, None]:
    """Yield (line, name) for each line of an already-open text stream."""
    for line in stream:
        yield line, name


def read_lines(filepath: str) -> Generator[tuple[str, str], None, None]:
    """Yield (line, filepath) for each line in a single file."""
    with open(filepath, "r", encoding="utf-8", errors="replace") as f:
        yield from read_stream(f, filepath)


def read_inputs(
    paths: Iterable[str] | None = None,
    stdin: TextIO | None = None,
) -> Generator[tuple[str, str], None, None]:
    """Yield (line, source) from each path in turn, or from stdin when none given.

    A path of "-" reads standard input at that position.
    """
    stdin = stdin if stdin is not None else sys.stdin
    paths = list(paths or [])
    if not paths:
        yield from read_stream(stdin)
        return

    for path in paths:
        if path == STDIN_MARKER:
            yield from read_stream(stdin)
        else:
            yield from read_lines(path)


def check_paths(paths: Iterable[str]) -> list[str]:
    """Validate that every non-stdin path is an existing file.

    Raises FileNotFoundError naming the first missing path.
    """
    checked = []
    for path in paths:
        if path != STDIN_MARKER and not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: {path}")
        checked.append(path)
    return checked
