# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by prober and managers
# PURPOSE: Probe results, probe kinds, pod phases, event types
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: ProbeResult, ProbeType, PodPhase, EventType
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the node probe core.

These enums cross every boundary in the package:
- Probe primitives report a ProbeResult
- The worker scheduler tags work with a ProbeType
- The workload store reports a PodPhase
- The event recorder classifies events with an EventType
"""

from enum import Enum


# ============================================================================
# PROBE ENUMS
# ============================================================================

class ProbeResult(str, Enum):
    """
    Outcome of a single probe attempt.

    UNKNOWN means the probe could not be attempted (bad port, missing
    backend) and always travels together with an error.
    """
    SUCCESS = "success"
    FAILURE = "failure"
    UNKNOWN = "unknown"

    def is_success(self) -> bool:
        return self is ProbeResult.SUCCESS


class ProbeType(str, Enum):
    """Kinds of probe a container may declare."""
    READINESS = "readiness"
    LIVENESS = "liveness"

    @property
    def label(self) -> str:
        """Capitalized name used in event messages ("Readiness probe failed")."""
        return self.value.capitalize()


# ============================================================================
# POD ENUMS
# ============================================================================

class PodPhase(str, Enum):
    """
    Pod lifecycle phases as reported by the workload store.

    State transitions:
        PENDING -> RUNNING -> SUCCEEDED
                           -> FAILED
    """
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    def is_terminal(self) -> bool:
        """Check if this is a terminal phase (no further transitions)."""
        return self in (PodPhase.SUCCEEDED, PodPhase.FAILED)


class EventType(str, Enum):
    """Event severities understood by the event sink."""
    NORMAL = "Normal"
    WARNING = "Warning"


__all__ = [
    "ProbeResult",
    "ProbeType",
    "PodPhase",
    "EventType",
]
