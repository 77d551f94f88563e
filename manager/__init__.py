# ============================================================================
# MANAGER MODULE
# ============================================================================
# STATUS: Manager - Readiness, liveness and composition
# PURPOSE: Export managers and their collaborator protocols
# CREATED: 12 OCT 2026
# ============================================================================

from manager.events import (
    RecordedEvent,
    EventRecorder,
    LoggingEventRecorder,
    new_event_recorder,
)
from manager.liveness import LivenessManager
from manager.locking import ReadWriteLock
from manager.prober_manager import ProbeWorkerManager, WorkerManagerFactory, ProberManager
from manager.readiness import ReadinessManager
from manager.refs import ContainerRefManager, container_ref
from manager.resources import PodLister, find_pod_by_uid
from manager.results import ResultsManager

__all__ = [
    # Events
    "RecordedEvent",
    "EventRecorder",
    "LoggingEventRecorder",
    "new_event_recorder",
    # Managers
    "LivenessManager",
    "ReadinessManager",
    "ResultsManager",
    "ProberManager",
    "ProbeWorkerManager",
    "WorkerManagerFactory",
    # Collaborators
    "ContainerRefManager",
    "container_ref",
    "PodLister",
    "find_pod_by_uid",
    "ReadWriteLock",
]
