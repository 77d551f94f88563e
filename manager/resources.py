# ============================================================================
# RESOURCE LOOKUP
# ============================================================================
# STATUS: Manager - Workload store collaborator
# PURPOSE: Read-only pod listing used by readiness and liveness managers
# CREATED: 12 OCT 2026
# ============================================================================
"""
Resource Lookup

The workload store lives outside the probe core. All the core needs from it
is the list of pods it currently knows; lookups by uid are linear scans.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from core.models import Pod


@runtime_checkable
class PodLister(Protocol):
    """Anything that can list the pods currently known to the node."""

    def get_pods(self) -> Iterable[Pod]:
        ...


def find_pod_by_uid(resource_manager: PodLister, uid: str) -> Optional[Pod]:
    """First pod with the given uid, or None."""
    for pod in resource_manager.get_pods():
        if pod.uid == uid:
            return pod
    return None


__all__ = ["PodLister", "find_pod_by_uid"]
