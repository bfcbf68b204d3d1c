"""Relevance window: decides which kubelet events belong to the target pod."""

import logging
from enum import Enum
from typing import Generator, Iterable

from src.extractor import KubeletEvent

logger = logging.getLogger(__name__)

PLEG_RELIST = "GenericPLEG: Relisting"
GRACEFUL_DELETION = "Pod is marked for graceful deletion, begin teardown"


class WindowState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    STOPPED = "stopped"


class Decision(Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    STOP = "stop"


class RelevanceFilter:
    """Stateful predicate over the event stream for a single pod.

    The window opens on the first event naming the pod (by name prefix or
    by exact membership in the related pods list) and never closes again.
    Once open, PLEG relist events are accepted regardless of pod fields.
    With stop_after_deletion, the pod's graceful-deletion event halts the
    stream; that event and everything after it is excluded.
    """

    def __init__(self, pod: str, stop_after_deletion: bool = False):
        self.pod = pod
        self.stop_after_deletion = stop_after_deletion
        self.state = WindowState.CLOSED
        self.seen = 0
        self.accepted = 0

    @property
    def window_open(self) -> bool:
        return self.state is WindowState.OPEN

    @property
    def stopped(self) -> bool:
        return self.state is WindowState.STOPPED

    def decide(self, event: KubeletEvent) -> Decision:
        if self.stopped:
            return Decision.STOP
        self.seen += 1

        if self.window_open and event.message == PLEG_RELIST:
            return self._accept()

        if event.pod_name.startswith(self.pod):
            if self.stop_after_deletion and event.message == GRACEFUL_DELETION:
                self.state = WindowState.STOPPED
                logger.info("Graceful deletion of %s seen, stopping", event.pod_name)
                return Decision.STOP
            return self._open_and_accept()

        if self.pod in event.related_pods:
            return self._open_and_accept()

        return Decision.REJECT

    def _open_and_accept(self) -> Decision:
        if self.state is WindowState.CLOSED:
            logger.debug("Relevance window opened for %s", self.pod)
        self.state = WindowState.OPEN
        return self._accept()

    def _accept(self) -> Decision:
        self.accepted += 1
        return Decision.ACCEPT

    def __call__(self, event: KubeletEvent) -> bool:
        return self.decide(event) is Decision.ACCEPT


def select_events(
    events: Iterable[KubeletEvent],
    flt: RelevanceFilter,
) -> Generator[KubeletEvent, None, None]:
    """Yield the events accepted by flt, halting the source on STOP."""
    for event in events:
        decision = flt.decide(event)
        if decision is Decision.STOP:
            break
        if decision is Decision.ACCEPT:
            yield event
    logger.debug("Relevance filter: %d events seen, %d accepted", flt.seen, flt.accepted)
