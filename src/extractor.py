"""Kubelet log line extractor: frozen dataclass + tolerant JSON decoding."""

import json
import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TRACE_WIDTH = 100


@dataclass(frozen=True)
class KubeletEvent:
    timestamp: float = 0.0       # milliseconds, arbitrary epoch
    message: str = ""
    pod_name: str = ""
    pod_namespace: str = ""
    related_pods: tuple[str, ...] = ()
    caller: str = ""             # origin tag, e.g. "pleg/generic.go:123"


def _as_str(value) -> str:
    return value if isinstance(value, str) else ""


def _as_float(value) -> float:
    # bool is an int subclass but never a valid timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except OverflowError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name}")


def _as_pods(value) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(p for p in value if isinstance(p, str))


def parse_payload(text: str) -> KubeletEvent:
    """Decode a JSON object into a KubeletEvent.

    Malformed JSON yields the zero event. Fields of the wrong type take
    their zero value while the rest of the object is kept.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        logger.debug("Malformed payload (%s): %.80s", exc, text)
        return KubeletEvent()

    if not isinstance(data, dict):
        return KubeletEvent()

    pod = data.get("pod")
    if not isinstance(pod, dict):
        pod = {}

    return KubeletEvent(
        timestamp=_as_float(data.get("ts")),
        message=_as_str(data.get("msg")),
        pod_name=_as_str(pod.get("name")),
        pod_namespace=_as_str(pod.get("namespace")),
        related_pods=_as_pods(data.get("pods")),
        caller=_as_str(data.get("caller")),
    )


def extract_event(line: str) -> KubeletEvent | None:
    """Strip any prefix before the first '{' and parse the rest.

    Returns None for lines without a JSON object (preambles, blank lines).
    """
    start = line.find("{")
    if start == -1:
        return None

    event = parse_payload(line[start:].rstrip("\r\n"))
    if logger.isEnabledFor(logging.DEBUG):
        pod = f"{{{event.pod_name} {event.pod_namespace}}}"
        message = event.message
        if len(message) > TRACE_WIDTH:
            message = message[:TRACE_WIDTH - 3] + "..."
        logger.debug("%s %s", pod, message)
    return event
