# ============================================================================
# PROBE MODELS
# ============================================================================
# STATUS: Core model - Probe declarations
# PURPOSE: Exec / HTTP / TCP probe specs as declared on a container
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: Probe, ExecAction, HTTPGetAction, TCPSocketAction, HTTPHeader
# DEPENDENCIES: pydantic
# ============================================================================
"""
Probe Models

A Probe is a tagged union: at most one of exec / http_get / tcp_socket is
populated. A probe with none of them populated means "no probe declared";
the prober treats it as healthy without executing anything.

Ports are either a number or the name of a port declared on the container
(IntOrString in manifest terms).

Field names accept both snake_case and the manifest camelCase spelling:

    Probe(http_get=HTTPGetAction(port=8080))
    Probe.model_validate({"httpGet": {"port": "http"}, "timeoutSeconds": 2})
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


PortRef = Union[int, str]


class _ManifestModel(BaseModel):
    """Base for manifest-shaped models (camelCase aliases)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExecAction(_ManifestModel):
    """Run a command inside the container; exit code 0 is healthy."""
    command: List[str] = Field(default_factory=list)


class HTTPHeader(_ManifestModel):
    """Single header name/value pair. Names may repeat."""
    name: str
    value: str


class HTTPGetAction(_ManifestModel):
    """HTTP GET against the container."""
    scheme: str = Field(default="HTTP", description="HTTP or HTTPS, any case")
    host: Optional[str] = Field(
        default=None,
        description="Defaults to the pod IP when unset",
    )
    port: PortRef
    path: str = ""
    http_headers: List[HTTPHeader] = Field(default_factory=list)


class TCPSocketAction(_ManifestModel):
    """Open a TCP connection to the container."""
    host: Optional[str] = None
    port: PortRef


class Probe(_ManifestModel):
    """
    Health check declared on a container.

    Scheduling knobs (period, thresholds) belong to the worker scheduler
    and are carried here only so manifests round-trip.
    """
    exec: Optional[ExecAction] = None
    http_get: Optional[HTTPGetAction] = None
    tcp_socket: Optional[TCPSocketAction] = None

    timeout_seconds: int = Field(default=1, ge=0)
    initial_delay_seconds: int = Field(default=0, ge=0)
    period_seconds: int = Field(default=10, ge=0)
    success_threshold: int = Field(default=1, ge=0)
    failure_threshold: int = Field(default=3, ge=0)

    def has_handler(self) -> bool:
        """True when any probe variant is populated."""
        return (
            self.exec is not None
            or self.http_get is not None
            or self.tcp_socket is not None
        )


__all__ = [
    "PortRef",
    "Probe",
    "ExecAction",
    "HTTPGetAction",
    "HTTPHeader",
    "TCPSocketAction",
]
