# ============================================================================
# UPDATE MODELS
# ============================================================================
# STATUS: Core model - Values flowing between prober and managers
# PURPOSE: Probe outcomes, result updates, liveness updates, object refs
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: ProbeOutcome, ResultUpdate, LivenessUpdate, ObjectReference
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Update Models

Small immutable values passed around in-process. They never leave the
process, so they are plain dataclasses rather than pydantic models.
"""

from dataclasses import dataclass
from typing import Optional

from core.contracts import ProbeResult


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Result of one probe attempt or one retry cycle.

    error is set when the probe could not be carried out (transport or
    execution problem); a clean FAILURE has error=None.
    """
    result: ProbeResult
    output: str = ""
    error: Optional[Exception] = None

    @classmethod
    def success(cls, output: str = "") -> "ProbeOutcome":
        return cls(result=ProbeResult.SUCCESS, output=output)

    @classmethod
    def failure(cls, output: str = "", error: Optional[Exception] = None) -> "ProbeOutcome":
        return cls(result=ProbeResult.FAILURE, output=output, error=error)

    @classmethod
    def unknown(cls, error: Exception, output: str = "") -> "ProbeOutcome":
        return cls(result=ProbeResult.UNKNOWN, output=output, error=error)

    @property
    def ok(self) -> bool:
        """Successful and error free."""
        return self.error is None and self.result is ProbeResult.SUCCESS


@dataclass(frozen=True)
class ResultUpdate:
    """A changed probe result for one container, keyed by pod uid."""
    pod_uid: str
    container_id: str
    result: ProbeResult

    def __str__(self) -> str:
        return (
            f"PodUID '{self.pod_uid}' ContainerID '{self.container_id}' "
            f"Result '{self.result.value}'"
        )


@dataclass(frozen=True)
class LivenessUpdate:
    """
    Coarse per-pod liveness failure notification.

    Carries no container detail; the consumer re-evaluates the whole pod.
    """
    namespace: str
    pod: str


@dataclass(frozen=True)
class ObjectReference:
    """Reference to the object an event is about (usually a container)."""
    kind: str
    namespace: str
    name: str
    uid: str = ""
    field_path: str = ""


__all__ = [
    "ProbeOutcome",
    "ResultUpdate",
    "LivenessUpdate",
    "ObjectReference",
]
