# ============================================================================
# PROBER MANAGER
# ============================================================================
# STATUS: Manager - Composition facade
# PURPOSE: Wire readiness, liveness and the probe worker scheduler together
# CREATED: 12 OCT 2026
# ============================================================================
"""
Prober Manager

Single entry point for the node agent:

    manager = ProberManager(resource_manager, worker_manager_factory)
    await manager.start(stop_event)
    manager.add_pod(pod)

    manager.get_pod_containers_readiness("default", "web")
    update = await manager.get_liveness_updates().get()

The probe worker scheduler is external. The factory receives the pieces it
reports into (readiness as status manager, liveness results, container
references, event recorder) and returns an object with add_pod/remove_pod.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional, Protocol, runtime_checkable

from core.config import Defaults, get_defaults
from core.models import LivenessUpdate, Pod
from manager.events import EventRecorder, new_event_recorder
from manager.liveness import LivenessManager
from manager.readiness import ReadinessManager
from manager.refs import ContainerRefManager
from manager.resources import PodLister
from manager.results import ResultsManager

logger = logging.getLogger(__name__)


@runtime_checkable
class ProbeWorkerManager(Protocol):
    """External scheduler owning per-container probe workers."""

    def add_pod(self, pod: Pod) -> None:
        ...

    def remove_pod(self, pod: Pod) -> None:
        ...


WorkerManagerFactory = Callable[..., ProbeWorkerManager]


class ProberManager:
    """Facade over readiness, liveness and the probe worker scheduler."""

    def __init__(
        self,
        resource_manager: PodLister,
        worker_manager_factory: WorkerManagerFactory,
        recorder: Optional[EventRecorder] = None,
        defaults: Optional[Defaults] = None,
    ):
        """
        Initialize prober manager.

        Args:
            resource_manager: Workload store
            worker_manager_factory: Builds the external probe worker scheduler
            recorder: Event sink (logging recorder by default)
            defaults: Configuration (global defaults if None)
        """
        defaults = defaults or get_defaults()

        self.readiness_manager = ReadinessManager(resource_manager)
        self.liveness_results = ResultsManager(defaults.liveness.results_buffer_size)
        self.liveness_manager = LivenessManager(
            resource_manager,
            self.liveness_results,
            buffer_size=defaults.liveness.update_buffer_size,
        )
        self.ref_manager = ContainerRefManager()
        self.recorder = recorder or new_event_recorder(defaults.events)

        self.worker_manager = worker_manager_factory(
            status_manager=self.readiness_manager,
            liveness_results=self.liveness_results,
            ref_manager=self.ref_manager,
            recorder=self.recorder,
        )

    async def start(self, stop_event: Optional[asyncio.Event] = None) -> asyncio.Task:
        """Start the liveness dispatch loop."""
        return await self.liveness_manager.start(stop_event)

    async def stop(self) -> None:
        await self.liveness_manager.stop()

    def get_liveness_updates(self) -> "asyncio.Queue[LivenessUpdate]":
        return self.liveness_manager.get_liveness_updates()

    def get_pod_containers_readiness(self, namespace: str, pod: str) -> Dict[str, bool]:
        return self.readiness_manager.get_pod_containers_readiness(namespace, pod)

    def add_pod(self, pod: Pod) -> None:
        """Create probe workers for every container probe of pod."""
        logger.debug(f"Adding pod {pod.namespace}/{pod.name} to probe workers")
        self.worker_manager.add_pod(pod)

    def remove_pod(self, pod: Pod) -> None:
        """Stop probe workers for pod and drop their cached results."""
        logger.debug(f"Removing pod {pod.namespace}/{pod.name} from probe workers")
        self.worker_manager.remove_pod(pod)


__all__ = ["ProbeWorkerManager", "WorkerManagerFactory", "ProberManager"]
