"""pod-timeline: render a kubelet log as a per-pod, subsystem-classified timeline."""

import logging
import sys
from argparse import ArgumentParser

from src.config import ConfigError, load_config, load_yaml_config
from src.extractor import extract_event
from src.formatter import COLOR_MODES, color_enabled, pod_header, render
from src.reader import check_paths, read_inputs
from src.relevance import RelevanceFilter, select_events
from src.timeline import build_timeline

logger = logging.getLogger(__name__)


class NoEventsError(RuntimeError):
    """Raised when the stream held no events for the target pod."""


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="pod-timeline",
        description="Show the kubelet events for one pod as a timeline.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Kubelet log file(s) to read; standard input when omitted or '-'",
    )
    parser.add_argument(
        "--pod",
        default=None,
        help="The pod to analyze the logs for (name prefix)",
    )
    parser.add_argument(
        "--stop-after-deletion",
        action="store_const",
        const=True,
        default=None,
        help="Stop log analyzing after seeing a deletion",
    )
    parser.add_argument(
        "--message-width",
        type=int,
        default=None,
        help="Truncate messages longer than N characters (default: 90)",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=None,
        help="Colorize DIFF and SYSTEM columns (default: auto)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "-v", "--verbose",
        dest="log_level",
        action="store_const",
        const="DEBUG",
        default=None,
        help="Trace every parsed line on stderr",
    )
    return parser


def run_pipeline(config, stdin=None, stdout=None) -> int:
    """Read, select, and render; returns the number of rows written."""
    stdout = stdout if stdout is not None else sys.stdout
    files = check_paths(config.files)

    print(pod_header(config.pod), file=stdout)

    lines = read_inputs(files, stdin=stdin)
    events = (extract_event(line) for line, _ in lines)
    events = (e for e in events if e is not None)

    flt = RelevanceFilter(config.pod, stop_after_deletion=config.stop_after_deletion)
    rows = build_timeline(select_events(events, flt), sort=True, width=config.message_width)
    if not rows:
        raise NoEventsError("No messages found")

    color = color_enabled(config.color, stdout)
    for line in render(rows, color=color):
        print(line, file=stdout)

    logger.info("Rendered %d of %d events for %s", len(rows), flt.seen, config.pod)
    return len(rows)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level or logging.WARNING,
        format="%(asctime)s [POD-TIMELINE] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args, load_yaml_config(args.config))
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1
    logging.getLogger().setLevel(config.log_level)

    try:
        run_pipeline(config)
    except (FileNotFoundError, NoEventsError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
