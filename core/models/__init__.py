# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for pod, probe and update models
# LAST_REVIEWED: 12 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models describe manifests (pods, containers, probes).
Frozen dataclasses describe in-process values (outcomes, updates).
"""

from core.models.probe import (
    PortRef,
    Probe,
    ExecAction,
    HTTPGetAction,
    HTTPHeader,
    TCPSocketAction,
)
from core.models.pod import (
    POD_STATUS_REASON_PROVIDER_FAILED,
    Pod,
    PodSpec,
    PodStatus,
    Container,
    ContainerPort,
    ContainerStatus,
    EnvVar,
    format_pod,
)
from core.models.updates import (
    ProbeOutcome,
    ResultUpdate,
    LivenessUpdate,
    ObjectReference,
)

__all__ = [
    # Probe
    "PortRef",
    "Probe",
    "ExecAction",
    "HTTPGetAction",
    "HTTPHeader",
    "TCPSocketAction",
    # Pod
    "POD_STATUS_REASON_PROVIDER_FAILED",
    "Pod",
    "PodSpec",
    "PodStatus",
    "Container",
    "ContainerPort",
    "ContainerStatus",
    "EnvVar",
    "format_pod",
    # Updates
    "ProbeOutcome",
    "ResultUpdate",
    "LivenessUpdate",
    "ObjectReference",
]
