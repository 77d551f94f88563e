# ============================================================================
# PROBE ENGINE
# ============================================================================
# STATUS: Prober - Protocol dispatch and retry cycle
# PURPOSE: Run one readiness/liveness probe cycle for a container
# CREATED: 12 OCT 2026
# ============================================================================
"""
Probe Engine

The worker scheduler calls Prober.probe() for a container on its own
cadence. One call is one probe cycle:

1. Pick the container's probe of the requested kind
   (none declared -> SUCCESS, nothing executed)
2. Dispatch on the populated variant: exec, http_get, tcp_socket
3. Retry up to max_probe_retries times, but only while the attempt
   reported an error. A clean FAILURE is trusted on the first read.
4. On anything but SUCCESS, emit a Warning event for the container
   when a reference for it is known

Port resolution:
- int literal is used as is
- a name is looked up among the container's declared ports
- an unmatched name is parsed as an int as a last resort
- the result must satisfy 0 < port < 65536
"""

import ipaddress
import logging
import re
from typing import Dict, List, Optional
from urllib.parse import urlsplit, urlunsplit

from core.config import ProbeDefaults, get_defaults
from core.contracts import EventType, ProbeResult, ProbeType
from core.logging import log_context
from core.models import (
    Container,
    HTTPHeader,
    Pod,
    PodStatus,
    PortRef,
    Probe,
    ProbeOutcome,
    format_pod,
)
from manager.events import EventRecorder
from manager.refs import ContainerRefManager
from prober.expansion import expand_command_only_static
from prober.primitives import (
    ExecProbe,
    HTTPProbe,
    HTTPProber,
    TCPProbe,
    TCPProber,
)

logger = logging.getLogger(__name__)

# Event reason for probe failures
EVENT_REASON_CONTAINER_UNHEALTHY = "Unhealthy"

# Applied when a probe declares timeoutSeconds: 0
DEFAULT_PROBE_TIMEOUT_SECONDS = 1


class MissingProbeHandlerError(Exception):
    """A probe variant is declared but no backend can serve it."""


# ============================================================================
# HELPERS
# ============================================================================

# Optionally signed decimal; no whitespace or digit separators
_DECIMAL = re.compile(r"[+-]?[0-9]+", re.ASCII)


def find_port_by_name(container: Container, port_name: str) -> int:
    """
    Look up a declared container port by name.

    Raises:
        LookupError: If no port has that name
    """
    for port in container.ports:
        if port.name == port_name:
            return port.container_port
    raise LookupError(f"port {port_name} not found")


def extract_port(param: PortRef, container: Container) -> int:
    """
    Resolve a probe port reference to a port number.

    Raises:
        ValueError: If the reference cannot be resolved or is out of range
    """
    if isinstance(param, bool):
        raise ValueError(f"port reference has no kind: {param!r}")
    if isinstance(param, int):
        port = param
    elif isinstance(param, str):
        try:
            port = find_port_by_name(container, param)
        except LookupError:
            # Maybe it was an int stored as a string
            if not _DECIMAL.fullmatch(param):
                raise ValueError(f"port {param} not found and not a number") from None
            port = int(param)
    else:
        raise ValueError(f"port reference has no kind: {param!r}")

    if 0 < port < 65536:
        return port
    raise ValueError(f"invalid port number: {port}")


def _join_host_port(host: str, port: int) -> str:
    try:
        is_v6 = isinstance(ipaddress.ip_address(host), ipaddress.IPv6Address)
    except ValueError:
        is_v6 = ":" in host
    if is_v6:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def format_url(scheme: str, host: str, port: int, path: str) -> str:
    """
    Build the probe URL.

    A path that does not parse is passed along as is rather than
    rejecting the probe.
    """
    netloc = _join_host_port(host, port)
    try:
        parts = urlsplit(path)
    except ValueError:
        return urlunsplit((scheme, netloc, path, "", ""))
    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))


def build_header(header_list: List[HTTPHeader]) -> Dict[str, List[str]]:
    """Flatten name/value pairs into name -> values; repeated names append."""
    headers: Dict[str, List[str]] = {}
    for header in header_list:
        headers.setdefault(header.name, []).append(header.value)
    return headers


# ============================================================================
# PROBER
# ============================================================================

class Prober:
    """
    Executes probe cycles for containers.

    Polymorphic over its primitives: anything satisfying HTTPProbe,
    TCPProbe or ExecProbe can be plugged in. The exec primitive is
    optional; without it exec probes report UNKNOWN.
    """

    def __init__(
        self,
        http: Optional[HTTPProbe] = None,
        tcp: Optional[TCPProbe] = None,
        exec_prober: Optional[ExecProbe] = None,
        recorder: Optional[EventRecorder] = None,
        ref_manager: Optional[ContainerRefManager] = None,
        defaults: Optional[ProbeDefaults] = None,
    ):
        """
        Initialize prober.

        Args:
            http: HTTP primitive (HTTPProber by default)
            tcp: TCP primitive (TCPProber by default)
            exec_prober: Exec primitive, None disables exec probes
            recorder: EventRecorder for Warning events on failure
            ref_manager: ContainerRefManager resolving container references
            defaults: Probe defaults (global defaults if None)
        """
        self.defaults = defaults or get_defaults().probe
        self.http = http or HTTPProber(self.defaults)
        self.tcp = tcp or TCPProber()
        self.exec = exec_prober
        self.recorder = recorder
        self.ref_manager = ref_manager

    async def probe(
        self,
        probe_type: ProbeType,
        pod: Pod,
        status: PodStatus,
        container: Container,
        container_id: str,
    ) -> ProbeOutcome:
        """
        Run one probe cycle and report SUCCESS or FAILURE.

        The returned outcome keeps the output and error of the last
        attempt so the caller can log or record them.
        """
        ctr_name = f"{format_pod(pod)}:{container.name}"
        spec = container.probe_for(probe_type)
        if spec is None or not spec.has_handler():
            logger.warning(f"{probe_type.label} probe for {ctr_name} is not declared")
            return ProbeOutcome.success()

        with log_context(
            namespace=pod.namespace,
            pod=pod.name,
            container=container.name,
            probe_type=probe_type.value,
        ):
            outcome = await self.run_probe_with_retries(
                spec, pod, status, container, container_id
            )
            if outcome.ok:
                logger.debug(f"{probe_type.label} probe for {ctr_name} succeeded")
                return outcome

            ref = None
            if self.ref_manager is not None:
                ref = self.ref_manager.get_ref(container_id)
            if ref is None:
                logger.warning(f"No ref for container {container_id} ({ctr_name})")

            if outcome.error is not None:
                logger.info(f"{probe_type.label} probe for {ctr_name} errored: {outcome.error}")
                message = f"{probe_type.label} probe errored: {outcome.error}"
            else:
                logger.info(
                    f"{probe_type.label} probe for {ctr_name} failed "
                    f"({outcome.result.value}): {outcome.output}"
                )
                message = f"{probe_type.label} probe failed: {outcome.output}"

            if ref is not None and self.recorder is not None:
                self.recorder.event(
                    ref, EventType.WARNING, EVENT_REASON_CONTAINER_UNHEALTHY, message
                )

        return ProbeOutcome(
            result=ProbeResult.FAILURE,
            output=outcome.output,
            error=outcome.error,
        )

    async def run_probe_with_retries(
        self,
        probe: Probe,
        pod: Pod,
        status: PodStatus,
        container: Container,
        container_id: str,
        retries: Optional[int] = None,
    ) -> ProbeOutcome:
        """
        Probe in a finite loop, returning the first error-free outcome.

        If every attempt errors, the last attempt's outcome is returned.
        """
        if retries is None:
            retries = self.defaults.max_probe_retries

        outcome = ProbeOutcome.unknown(error=MissingProbeHandlerError("no probe attempts made"))
        for attempt in range(1, max(retries, 1) + 1):
            outcome = await self.run_probe(probe, pod, status, container, container_id)
            if outcome.error is None:
                return outcome
            logger.debug(f"Probe attempt {attempt}/{retries} errored: {outcome.error}")
        return outcome

    async def run_probe(
        self,
        probe: Probe,
        pod: Pod,
        status: PodStatus,
        container: Container,
        container_id: str,
    ) -> ProbeOutcome:
        """Run a single probe attempt against the first populated variant."""
        timeout = float(probe.timeout_seconds or DEFAULT_PROBE_TIMEOUT_SECONDS)

        if probe.exec is not None:
            if self.exec is None:
                return self._missing_handler(pod, container, "exec")
            logger.debug(
                f"Exec-Probe Pod: {format_pod(pod)}, Container: {container.name}, "
                f"Command: {probe.exec.command}"
            )
            command = expand_command_only_static(probe.exec.command, container.env)
            return await self.exec.probe(container_id, command, timeout)

        if probe.http_get is not None:
            action = probe.http_get
            scheme = action.scheme.lower()
            host = action.host or status.pod_ip or ""
            try:
                port = extract_port(action.port, container)
            except ValueError as e:
                return ProbeOutcome.unknown(error=e)
            logger.debug(f"HTTP-Probe Host: {scheme}://{host}, Port: {port}, Path: {action.path}")
            url = format_url(scheme, host, port, action.path)
            headers = build_header(action.http_headers)
            logger.debug(f"HTTP-Probe Headers: {headers}")
            return await self.http.probe(url, headers, timeout)

        if probe.tcp_socket is not None:
            action = probe.tcp_socket
            try:
                port = extract_port(action.port, container)
            except ValueError as e:
                return ProbeOutcome.unknown(error=e)
            host = action.host or status.pod_ip or ""
            logger.debug(f"TCP-Probe Host: {host}, Port: {port}, Timeout: {timeout}s")
            return await self.tcp.probe(host, port, timeout)

        logger.warning(f"No probe declared for {format_pod(pod)}:{container.name}, assuming healthy")
        return ProbeOutcome.success()

    def _missing_handler(self, pod: Pod, container: Container, kind: str) -> ProbeOutcome:
        logger.warning(f"Failed to find {kind} probe backend for container: {container.name}")
        return ProbeOutcome.unknown(
            error=MissingProbeHandlerError(
                f"Missing probe handler for {format_pod(pod)}:{container.name}"
            )
        )


__all__ = [
    "EVENT_REASON_CONTAINER_UNHEALTHY",
    "DEFAULT_PROBE_TIMEOUT_SECONDS",
    "MissingProbeHandlerError",
    "Prober",
    "extract_port",
    "find_port_by_name",
    "format_url",
    "build_header",
]
