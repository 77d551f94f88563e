# ============================================================================
# POD MODELS
# ============================================================================
# STATUS: Core model - Read-only view of workloads
# PURPOSE: Pods, containers and their reported status
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: Pod, PodSpec, PodStatus, Container, ContainerPort, ContainerStatus, EnvVar
# DEPENDENCIES: pydantic
# ============================================================================
"""
Pod Models

The workload store owns these objects. The probe core only reads them:
- identity: (namespace, name, uid)
- spec: containers with ports, env and probe declarations
- status: phase, reason, pod IP and per-container runtime ids

Container runtime ids (e.g. "docker://4f2a...") are opaque strings. They are
absent until the container has started.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from core.contracts import PodPhase, ProbeType
from core.models.probe import Probe, _ManifestModel

# Status reason a provider sets when it gave up on a pod
POD_STATUS_REASON_PROVIDER_FAILED = "ProviderFailed"


class ContainerPort(_ManifestModel):
    """Port declared by a container."""
    name: Optional[str] = None
    container_port: int = Field(..., ge=0, le=65535)
    protocol: str = "TCP"


class EnvVar(_ManifestModel):
    """
    Environment variable.

    Only literal values take part in probe command expansion; references
    resolved at runtime (secrets, field refs) have value=None here.
    """
    name: str
    value: Optional[str] = None


class Container(_ManifestModel):
    """Container declared in a pod spec."""
    name: str
    image: Optional[str] = None
    ports: List[ContainerPort] = Field(default_factory=list)
    env: List[EnvVar] = Field(default_factory=list)
    readiness_probe: Optional[Probe] = None
    liveness_probe: Optional[Probe] = None

    def probe_for(self, probe_type: ProbeType) -> Optional[Probe]:
        """Return the declared probe of the given kind, if any."""
        if probe_type is ProbeType.READINESS:
            return self.readiness_probe
        if probe_type is ProbeType.LIVENESS:
            return self.liveness_probe
        return None


class ContainerStatus(_ManifestModel):
    """Runtime status of one container as reported by the provider."""
    name: str
    container_id: Optional[str] = Field(default=None, alias="containerID")
    ready: bool = False
    restart_count: int = 0


class PodSpec(_ManifestModel):
    containers: List[Container] = Field(default_factory=list)


class PodStatus(_ManifestModel):
    """Observed pod status."""
    phase: PodPhase = PodPhase.PENDING
    reason: Optional[str] = None
    message: Optional[str] = None
    pod_ip: Optional[str] = Field(default=None, alias="podIP")
    container_statuses: List[ContainerStatus] = Field(default_factory=list)


class Pod(_ManifestModel):
    """
    Workload as seen by the probe core.

    Identity is (namespace, name, uid). The uid is what probe results are
    keyed by; namespace/name is what readiness and liveness are reported by.
    """
    namespace: str = "default"
    name: str
    uid: str
    deletion_timestamp: Optional[datetime] = None
    spec: PodSpec = Field(default_factory=PodSpec)
    status: PodStatus = Field(default_factory=PodStatus)

    def is_terminated(self) -> bool:
        """
        Check whether the pod reached a state after which liveness
        notifications must not be generated.
        """
        return (
            self.status.phase.is_terminal()
            or self.status.reason == POD_STATUS_REASON_PROVIDER_FAILED
            or self.deletion_timestamp is not None
        )

    def find_container_status(self, container_id: str) -> Optional[ContainerStatus]:
        """Linear scan of container statuses by runtime id."""
        for status in self.status.container_statuses:
            if status.container_id == container_id:
                return status
        return None


def format_pod(pod: Pod) -> str:
    """Human readable pod identity for log lines: name_namespace(uid)."""
    return f"{pod.name}_{pod.namespace}({pod.uid})"


__all__ = [
    "POD_STATUS_REASON_PROVIDER_FAILED",
    "Pod",
    "PodSpec",
    "PodStatus",
    "Container",
    "ContainerPort",
    "ContainerStatus",
    "EnvVar",
    "format_pod",
]
