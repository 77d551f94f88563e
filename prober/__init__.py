# ============================================================================
# PROBER MODULE
# ============================================================================
# STATUS: Prober - Probe execution engine
# PURPOSE: Export the engine, its helpers and protocol primitives
# CREATED: 12 OCT 2026
# ============================================================================
"""
Prober Module

Usage:
    from prober import Prober, ExecProber

    prober = Prober(exec_prober=ExecProber(runner), recorder=recorder, ref_manager=refs)
    outcome = await prober.probe(ProbeType.LIVENESS, pod, pod.status, container, container_id)
"""

from prober.engine import (
    EVENT_REASON_CONTAINER_UNHEALTHY,
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    MissingProbeHandlerError,
    Prober,
    extract_port,
    find_port_by_name,
    format_url,
    build_header,
)
from prober.expansion import expand, expand_command_only_static
from prober.primitives import (
    HTTPProbe,
    TCPProbe,
    ExecProbe,
    CommandRunner,
    CommandExitError,
    HTTPProber,
    TCPProber,
    ExecProber,
)

__all__ = [
    # Engine
    "EVENT_REASON_CONTAINER_UNHEALTHY",
    "DEFAULT_PROBE_TIMEOUT_SECONDS",
    "MissingProbeHandlerError",
    "Prober",
    "extract_port",
    "find_port_by_name",
    "format_url",
    "build_header",
    # Expansion
    "expand",
    "expand_command_only_static",
    # Primitives
    "HTTPProbe",
    "TCPProbe",
    "ExecProbe",
    "CommandRunner",
    "CommandExitError",
    "HTTPProber",
    "TCPProber",
    "ExecProber",
]
