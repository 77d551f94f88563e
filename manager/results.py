# ============================================================================
# RESULTS MANAGER
# ============================================================================
# STATUS: Manager - Probe result cache and change stream
# PURPOSE: Bridge between the probe worker scheduler and the liveness manager
# CREATED: 12 OCT 2026
# ============================================================================
"""
Results Manager

The worker scheduler writes the latest liveness result of each container
here. A ResultUpdate is published on the updates() queue only when the
cached result for that container changes, so a container that keeps
failing produces one update per transition, not one per probe.
"""

import asyncio
import threading
from typing import Dict, Optional

from core.contracts import ProbeResult
from core.logging import ComponentType, get_logger
from core.models import Pod, ResultUpdate

logger = get_logger(__name__, ComponentType.RESULTS)


class ResultsManager:
    """Cache of the latest probe result per container id."""

    def __init__(self, buffer_size: int = 20):
        """
        Initialize results manager.

        Args:
            buffer_size: Capacity of the update queue; set() blocks when full
        """
        self._cache: Dict[str, ProbeResult] = {}
        self._cache_lock = threading.Lock()
        self._updates: "asyncio.Queue[ResultUpdate]" = asyncio.Queue(maxsize=buffer_size)

    def get(self, container_id: str) -> Optional[ProbeResult]:
        """Cached result for a container, None when never set."""
        with self._cache_lock:
            return self._cache.get(container_id)

    async def set(self, container_id: str, result: ProbeResult, pod: Pod) -> None:
        """Cache result and publish an update when it changed."""
        with self._cache_lock:
            previous = self._cache.get(container_id)
            self._cache[container_id] = result
        if previous is result:
            return

        update = ResultUpdate(pod_uid=pod.uid, container_id=container_id, result=result)
        logger.debug(f"Publishing result update: {update}")
        await self._updates.put(update)

    def remove(self, container_id: str) -> None:
        """Forget a container's cached result."""
        with self._cache_lock:
            self._cache.pop(container_id, None)

    def updates(self) -> "asyncio.Queue[ResultUpdate]":
        """Stream of result changes, consumed by the liveness manager."""
        return self._updates


__all__ = ["ResultsManager"]
