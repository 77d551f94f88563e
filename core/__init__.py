# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts and models
# LAST_REVIEWED: 12 OCT 2026
# ============================================================================

from core.contracts import ProbeResult, ProbeType, PodPhase, EventType
from core.models import (
    Pod,
    Container,
    Probe,
    ProbeOutcome,
    ResultUpdate,
    LivenessUpdate,
)

__all__ = [
    # Enums
    "ProbeResult",
    "ProbeType",
    "PodPhase",
    "EventType",
    # Models
    "Pod",
    "Container",
    "Probe",
    "ProbeOutcome",
    "ResultUpdate",
    "LivenessUpdate",
]
