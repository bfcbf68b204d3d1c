"""Subsystem classification of kubelet events by caller and message."""

from enum import Enum


class Subsystem(str, Enum):
    VOLUME = "VOLUME"
    SYNCPOD = "SYNCPOD"
    PLEG = "PLEG"
    STATUS = "STATUS"
    MOUNT = "MOUNT"
    PROBE = "PROBE"
    MISC = "MISC"


SYNCPOD_MESSAGES = frozenset({"syncPod enter", "syncPod exit"})

# (caller prefixes, category), first match wins.
SUBSYSTEM_RULES: tuple[tuple[tuple[str, ...], Subsystem], ...] = (
    (("volumemanager/", "populator/", "reconciler/", "operationexecutor/"), Subsystem.VOLUME),
    (("kuberuntime/",), Subsystem.SYNCPOD),
    (("pleg/",), Subsystem.PLEG),
    (("status/",), Subsystem.STATUS),
    (("kubelet/kubelet_pods",), Subsystem.MOUNT),
    (("prober",), Subsystem.PROBE),
)


def classify(caller: str, message: str = "") -> Subsystem:
    """Map an event's caller tag (and, for syncPod markers, its message) to a Subsystem."""
    for prefixes, subsystem in SUBSYSTEM_RULES:
        if caller.startswith(prefixes):
            return subsystem
        if subsystem is Subsystem.SYNCPOD and message in SYNCPOD_MESSAGES:
            return subsystem
    return Subsystem.MISC
