# ============================================================================
# CONTAINER REFERENCES
# ============================================================================
# STATUS: Manager - Container id -> object reference
# PURPOSE: Let the prober attach events to the right container
# CREATED: 12 OCT 2026
# ============================================================================
"""
Container Reference Manager

The worker scheduler records a reference when it starts probing a container
and clears it when the container goes away. The prober looks references up
to address Warning events; a missing reference only means no event.
"""

import threading
from typing import Dict, Optional

from core.models import Container, ObjectReference, Pod


class ContainerRefManager:
    """Thread-safe container id -> ObjectReference map."""

    def __init__(self):
        self._lock = threading.Lock()
        self._refs: Dict[str, ObjectReference] = {}

    def set_ref(self, container_id: str, ref: ObjectReference) -> None:
        with self._lock:
            self._refs[container_id] = ref

    def clear_ref(self, container_id: str) -> None:
        with self._lock:
            self._refs.pop(container_id, None)

    def get_ref(self, container_id: str) -> Optional[ObjectReference]:
        with self._lock:
            return self._refs.get(container_id)


def container_ref(pod: Pod, container: Container) -> ObjectReference:
    """Reference to a container of a pod, addressed by field path."""
    return ObjectReference(
        kind="Pod",
        namespace=pod.namespace,
        name=pod.name,
        uid=pod.uid,
        field_path=f"spec.containers{{{container.name}}}",
    )


__all__ = ["ContainerRefManager", "container_ref"]
