# ============================================================================
# READINESS MANAGER
# ============================================================================
# STATUS: Manager - Per-container readiness state
# PURPOSE: Record readiness reported by probe workers, serve it by pod name
# CREATED: 12 OCT 2026
# ============================================================================
"""
Readiness Manager

Keeps namespace -> pod -> container -> ready, guarded end to end by one
reader/writer lock (not per key, so the three levels never need lock
ordering).

The probe worker scheduler reports readiness by (pod uid, container id);
callers read it back by (namespace, pod name). Both ids are resolved
against the workload store with linear scans. A pod or container the
store does not know is dropped with a debug log: that happens routinely
while containers start and stop.

The scheduler also expects the status-manager calls (start, set_pod_status,
terminate_pod, remove_orphaned_statuses). Pod status is owned by the
workload store, so these only log.

Entries are never pruned; a deleted pod's readiness stays until restart.
"""

from typing import Dict, Iterable, Optional

from core.logging import ComponentType, get_logger, log_context
from core.models import Pod, PodStatus
from manager.locking import ReadWriteLock
from manager.resources import PodLister, find_pod_by_uid

logger = get_logger(__name__, ComponentType.READINESS)


class ReadinessManager:
    """
    Readiness state for every container probed on this node.

    Instantiated once per process and handed to whoever needs it.
    """

    def __init__(self, resource_manager: PodLister):
        """
        Initialize readiness manager.

        Args:
            resource_manager: Workload store used to resolve uids and container ids
        """
        self.resource_manager = resource_manager
        self._lock = ReadWriteLock()
        self._readiness: Dict[str, Dict[str, Dict[str, bool]]] = {}

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    def set_container_readiness(self, pod_uid: str, container_id: str, ready: bool) -> None:
        """Record readiness for the container with runtime id container_id."""
        with log_context(operation="ReadinessManager.set_container_readiness"):
            logger.debug(
                f"Pod with UID '{pod_uid}', ContainerID '{container_id}', Ready '{ready}'"
            )

            pod = find_pod_by_uid(self.resource_manager, pod_uid)
            if pod is None:
                logger.debug(f"Unable to find pod with UID '{pod_uid}'")
                return

            with log_context(namespace=pod.namespace, pod=pod.name):
                container_status = pod.find_container_status(container_id)
                if container_status is None:
                    logger.debug(f"Unable to find container with ContainerID '{container_id}'")
                    return

                logger.debug(
                    f"Find container '{container_status.name}' with ContainerID '{container_id}'"
                )
                with self._lock.write_locked():
                    pods = self._readiness.setdefault(pod.namespace, {})
                    containers = pods.setdefault(pod.name, {})
                    containers[container_status.name] = ready

                logger.debug("Container readiness is set")

    def get_pod_containers_readiness(self, namespace: str, pod: str) -> Dict[str, bool]:
        """
        Container name -> ready for one pod.

        Returns a copy taken under the shared lock; empty when nothing has
        been recorded for the pod.
        """
        with self._lock.read_locked():
            containers = self._readiness.get(namespace, {}).get(pod)
            if containers is None:
                return {}
            snapshot = dict(containers)

        with log_context(namespace=namespace, pod=pod):
            logger.debug("Find pod containers readiness")
        return snapshot

    # ------------------------------------------------------------------
    # Status provider
    # ------------------------------------------------------------------

    def get_pod_status(self, pod_uid: str) -> Optional[PodStatus]:
        """Status of the pod with the given uid, None when unknown."""
        logger.debug(f"Getting pod status with UID '{pod_uid}'")
        pod = find_pod_by_uid(self.resource_manager, pod_uid)
        if pod is None:
            logger.debug(f"Unable to find pod with UID '{pod_uid}'")
            return None
        return pod.status

    def start(self) -> None:
        logger.debug("Starting")

    def set_pod_status(self, pod: Pod, status: PodStatus) -> None:
        with log_context(namespace=pod.namespace, pod=pod.name):
            logger.debug(f"Setting pod status: {status.phase.value}")

    def terminate_pod(self, pod: Pod) -> None:
        with log_context(namespace=pod.namespace, pod=pod.name):
            logger.debug("Terminate pod")

    def remove_orphaned_statuses(self, pod_uids: Iterable[str]) -> None:
        logger.debug(f"Remove orphaned pods: {sorted(pod_uids)}")


__all__ = ["ReadinessManager"]
