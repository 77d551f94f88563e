# ============================================================================
# PROBE PRIMITIVES
# ============================================================================
# STATUS: Prober - Protocol-level probe backends
# PURPOSE: HTTP, TCP and exec probes returning ProbeOutcome values
# CREATED: 12 OCT 2026
# ============================================================================
"""
Probe Primitives

Each primitive performs exactly one attempt and reports a ProbeOutcome:

- HTTPProber: GET a URL (httpx). 2xx/3xx is SUCCESS.
- TCPProber: open a TCP connection (asyncio streams).
- ExecProber: run a command in the container through a CommandRunner.

A target that answered or refused is a FAILURE with error=None; the
engine does not retry those. error is reserved for probes that could
not be carried out, which the engine retries.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Protocol, runtime_checkable

import httpx

from core.config import ProbeDefaults
from core.models import ProbeOutcome

logger = logging.getLogger(__name__)


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class HTTPProbe(Protocol):
    async def probe(
        self,
        url: str,
        headers: Dict[str, List[str]],
        timeout: float,
    ) -> ProbeOutcome:
        ...


@runtime_checkable
class TCPProbe(Protocol):
    async def probe(self, host: str, port: int, timeout: float) -> ProbeOutcome:
        ...


@runtime_checkable
class ExecProbe(Protocol):
    async def probe(
        self,
        container_id: str,
        command: List[str],
        timeout: float,
    ) -> ProbeOutcome:
        ...


@runtime_checkable
class CommandRunner(Protocol):
    """
    Runs a command inside a container. Implemented by the provider.

    Returns combined stdout/stderr. Raises CommandExitError when the
    command ran and exited non-zero; any other exception means the
    command could not be run.
    """

    async def run_in_container(
        self,
        container_id: str,
        command: List[str],
        timeout: float,
    ) -> bytes:
        ...


class CommandExitError(Exception):
    """Command ran inside the container and exited with a non-zero code."""

    def __init__(self, exit_code: int, output: bytes = b""):
        super().__init__(f"command terminated with exit code {exit_code}")
        self.exit_code = exit_code
        self.output = output


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


# ============================================================================
# HTTP
# ============================================================================

class HTTPProber:
    """
    HTTP GET probe.

    TLS certificates are not verified and redirects are followed. The
    response body becomes the probe output, truncated to
    max_body_bytes.
    """

    def __init__(
        self,
        defaults: Optional[ProbeDefaults] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP prober.

        Args:
            defaults: Probe defaults (User-Agent, body limit)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.defaults = defaults or ProbeDefaults()
        self._transport = transport

    def _header_items(self, headers: Dict[str, List[str]]) -> List[tuple]:
        items = [(name, value) for name, values in headers.items() for value in values]
        if not any(name.lower() == "user-agent" for name, _ in items):
            items.append(("User-Agent", self.defaults.user_agent))
        return items

    async def probe(
        self,
        url: str,
        headers: Dict[str, List[str]],
        timeout: float,
    ) -> ProbeOutcome:
        try:
            request = httpx.Request("GET", url, headers=self._header_items(headers))
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            return ProbeOutcome.failure(error=e)

        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                verify=False,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.send(request)
        except httpx.HTTPError as e:
            logger.debug(f"HTTP probe {url} could not connect: {e}")
            return ProbeOutcome.failure(output=str(e) or type(e).__name__)

        body = _decode(response.content[: self.defaults.http_max_body_bytes])
        if 200 <= response.status_code < 400:
            logger.debug(f"HTTP probe {url} succeeded: {response.status_code}")
            return ProbeOutcome.success(output=body)

        logger.debug(f"HTTP probe {url} failed: {response.status_code}")
        return ProbeOutcome.failure(
            output=f"HTTP probe failed with statuscode: {response.status_code}"
        )


# ============================================================================
# TCP
# ============================================================================

class TCPProber:
    """TCP connect probe. A completed connection is SUCCESS."""

    async def probe(self, host: str, port: int, timeout: float) -> ProbeOutcome:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            return ProbeOutcome.failure(output=f"dial tcp {host}:{port}: i/o timeout")
        except OSError as e:
            return ProbeOutcome.failure(output=f"dial tcp {host}:{port}: {e}")

        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Closing TCP probe connection to {host}:{port}: {e}")
        return ProbeOutcome.success()


# ============================================================================
# EXEC
# ============================================================================

class ExecProber:
    """
    Exec probe over a provider CommandRunner.

    Exit code 0 is SUCCESS, non-zero is FAILURE, anything else is UNKNOWN
    with the error attached.
    """

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    async def probe(
        self,
        container_id: str,
        command: List[str],
        timeout: float,
    ) -> ProbeOutcome:
        try:
            data = await self.runner.run_in_container(container_id, command, timeout)
        except CommandExitError as e:
            return ProbeOutcome.failure(output=_decode(e.output))
        except Exception as e:
            return ProbeOutcome.unknown(error=e)
        return ProbeOutcome.success(output=_decode(data))


__all__ = [
    "HTTPProbe",
    "TCPProbe",
    "ExecProbe",
    "CommandRunner",
    "CommandExitError",
    "HTTPProber",
    "TCPProber",
    "ExecProber",
]
