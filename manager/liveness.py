# ============================================================================
# LIVENESS MANAGER
# ============================================================================
# STATUS: Manager - Liveness failure dispatch
# PURPOSE: Turn failing liveness results into per-pod restart notifications
# CREATED: 12 OCT 2026
# ============================================================================
"""
Liveness Manager

One background task consumes ResultUpdates from the results stream:

1. Ignore anything but FAILURE
2. Resolve the pod by uid (linear scan); unknown pods are dropped
3. Drop terminated pods (Succeeded/Failed, provider failed, being deleted)
4. Push LivenessUpdate(namespace, pod) onto the bounded outbound queue

The outbound queue blocks the loop when full; that is the intended
backpressure. There is no deduplication: every failing update for a live
pod yields a notification, and consumers must be idempotent.

The loop waits on the next update and the stop signal at the same time.
On stop it exits without draining buffered updates or closing the queue.
An update that raises (e.g. the workload store is briefly unavailable) is
logged and skipped; the loop keeps running.
"""

import asyncio
from typing import Optional

from core.config import get_defaults
from core.contracts import ProbeResult
from core.logging import ComponentType, get_logger, log_context
from core.models import LivenessUpdate, ResultUpdate
from manager.resources import PodLister, find_pod_by_uid
from manager.results import ResultsManager

logger = get_logger(__name__, ComponentType.LIVENESS)


class LivenessManager:
    """
    Dispatches liveness failures for non-terminated pods.

    Exactly one consume loop per instance.
    """

    def __init__(
        self,
        resource_manager: PodLister,
        results_manager: ResultsManager,
        buffer_size: Optional[int] = None,
    ):
        """
        Initialize liveness manager.

        Args:
            resource_manager: Workload store used to resolve pod uids
            results_manager: Source of raw probe result updates
            buffer_size: Outbound queue capacity (20 by default)
        """
        if buffer_size is None:
            buffer_size = get_defaults().liveness.update_buffer_size
        self.resource_manager = resource_manager
        self.results_manager = results_manager
        self._updates: "asyncio.Queue[LivenessUpdate]" = asyncio.Queue(maxsize=buffer_size)

        self._stop_event: Optional[asyncio.Event] = None
        self._loop_task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    def get_liveness_updates(self) -> "asyncio.Queue[LivenessUpdate]":
        """Outbound stream of liveness failure notifications."""
        return self._updates

    async def start(self, stop_event: Optional[asyncio.Event] = None) -> asyncio.Task:
        """
        Start the consume loop as a background task.

        Args:
            stop_event: Cancellation signal; a private one is created if None

        Returns:
            The loop task
        """
        if self.running:
            logger.warning("Liveness manager already running")
            return self._loop_task

        self._stop_event = stop_event or asyncio.Event()
        self._loop_task = asyncio.create_task(
            self._run(self._stop_event),
            name="liveness-manager",
        )
        logger.info("Liveness manager started")
        return self._loop_task

    async def stop(self) -> None:
        """Signal the loop to stop and wait for it to exit."""
        if self._stop_event is not None:
            self._stop_event.set()
        if self._loop_task is not None:
            await self._loop_task
            self._loop_task = None
        logger.info("Liveness manager stopped")

    async def _run(self, stop_event: asyncio.Event) -> None:
        source = self.results_manager.updates()
        stop_wait = asyncio.ensure_future(stop_event.wait())
        try:
            while not stop_event.is_set():
                next_update = asyncio.ensure_future(source.get())
                done, _ = await asyncio.wait(
                    {next_update, stop_wait},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if next_update not in done:
                    next_update.cancel()
                    break
                update = next_update.result()
                try:
                    await self.update_pod_liveness(update)
                except Exception as e:
                    logger.exception(f"Error handling liveness update {update}: {e}")
        finally:
            stop_wait.cancel()

    async def update_pod_liveness(self, update: ResultUpdate) -> None:
        """Handle one raw result update."""
        with log_context(operation="LivenessManager.update_pod_liveness"):
            logger.debug(f"Get update: {update}")

            if update.result is not ProbeResult.FAILURE:
                return

            pod = find_pod_by_uid(self.resource_manager, update.pod_uid)
            if pod is None:
                logger.debug(f"Unable to find pod with UID '{update.pod_uid}'")
                return

            with log_context(namespace=pod.namespace, pod=pod.name):
                if pod.is_terminated():
                    logger.debug("Pod is terminated. No update")
                    return

                logger.debug(f"Find pod with UID '{update.pod_uid}'")
                await self._updates.put(LivenessUpdate(namespace=pod.namespace, pod=pod.name))


__all__ = ["LivenessManager"]
