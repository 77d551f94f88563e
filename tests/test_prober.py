# ============================================================================
# PROBE ENGINE TESTS
# ============================================================================
# STATUS: Tests - Prober dispatch, port resolution and retry cycle
# PURPOSE: Verify the engine against recording fake primitives
# CREATED: 13 OCT 2026
# ============================================================================
"""
Probe Engine Tests

Covers:
1. Port resolution (literal, named, numeric string, out of range)
2. URL formatting and header flattening
3. Dispatch to exec / HTTP / TCP primitives
4. Retry only on errors, never on clean failures
5. probe(): undeclared probes, FAILURE mapping, Warning events

Run with:
    pytest tests/test_prober.py -v
"""

import asyncio
from typing import Dict, List, Optional

import pytest

from core.config import ProbeDefaults
from core.contracts import EventType, ProbeResult, ProbeType
from core.models import (
    Container,
    ContainerPort,
    ContainerStatus,
    EnvVar,
    ExecAction,
    HTTPGetAction,
    HTTPHeader,
    Pod,
    PodSpec,
    PodStatus,
    Probe,
    ProbeOutcome,
    TCPSocketAction,
)
from manager.refs import ContainerRefManager, container_ref
from prober import (
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    EVENT_REASON_CONTAINER_UNHEALTHY,
    MissingProbeHandlerError,
    Prober,
    build_header,
    extract_port,
    find_port_by_name,
    format_url,
)


# ============================================================================
# FAKES
# ============================================================================

class RecordingHTTP:
    """HTTP primitive returning queued outcomes and recording calls."""

    def __init__(self, *outcomes: ProbeOutcome):
        self.outcomes = list(outcomes) or [ProbeOutcome.success("ok")]
        self.calls: List[tuple] = []

    async def probe(self, url: str, headers: Dict[str, List[str]], timeout: float) -> ProbeOutcome:
        self.calls.append((url, headers, timeout))
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


class RecordingTCP:
    def __init__(self, *outcomes: ProbeOutcome):
        self.outcomes = list(outcomes) or [ProbeOutcome.success()]
        self.calls: List[tuple] = []

    async def probe(self, host: str, port: int, timeout: float) -> ProbeOutcome:
        self.calls.append((host, port, timeout))
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


class RecordingExec:
    def __init__(self, *outcomes: ProbeOutcome):
        self.outcomes = list(outcomes) or [ProbeOutcome.success()]
        self.calls: List[tuple] = []

    async def probe(self, container_id: str, command: List[str], timeout: float) -> ProbeOutcome:
        self.calls.append((container_id, command, timeout))
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


class RecordingRecorder:
    def __init__(self):
        self.events: List[tuple] = []

    def event(self, ref, event_type, reason, message) -> None:
        self.events.append((ref, event_type, reason, message))


# ============================================================================
# HELPERS
# ============================================================================

def _make_container(probe: Optional[Probe] = None, liveness: Optional[Probe] = None) -> Container:
    return Container(
        name="app",
        ports=[
            ContainerPort(name="http", container_port=8080),
            ContainerPort(name="metrics", container_port=9090),
        ],
        env=[EnvVar(name="TARGET", value="/tmp/healthy")],
        readiness_probe=probe,
        liveness_probe=liveness,
    )


def _make_pod(container: Container) -> Pod:
    return Pod(
        namespace="default",
        name="web",
        uid="u1",
        spec=PodSpec(containers=[container]),
        status=PodStatus(
            pod_ip="10.0.0.5",
            container_statuses=[ContainerStatus(name="app", container_id="c1")],
        ),
    )


def _make_prober(http=None, tcp=None, exec_prober=None, **kwargs) -> Prober:
    return Prober(
        http=http or RecordingHTTP(),
        tcp=tcp or RecordingTCP(),
        exec_prober=exec_prober,
        defaults=ProbeDefaults(),
        **kwargs,
    )


def _run_probe(prober: Prober, probe: Probe) -> ProbeOutcome:
    container = _make_container(probe)
    pod = _make_pod(container)
    return asyncio.run(prober.run_probe(probe, pod, pod.status, container, "c1"))


def _run_with_retries(prober: Prober, probe: Probe) -> ProbeOutcome:
    container = _make_container(probe)
    pod = _make_pod(container)
    return asyncio.run(
        prober.run_probe_with_retries(probe, pod, pod.status, container, "c1")
    )


# ============================================================================
# PORT RESOLUTION
# ============================================================================

class TestExtractPort:
    def test_int_literal(self):
        assert extract_port(80, _make_container()) == 80

    def test_named_port(self):
        assert extract_port("metrics", _make_container()) == 9090

    def test_numeric_string_fallback(self):
        assert extract_port("8443", _make_container()) == 8443

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            extract_port("grpc", _make_container())

    @pytest.mark.parametrize("port", [0, -1, 65536, 70000])
    def test_out_of_range_literal(self, port):
        with pytest.raises(ValueError, match="invalid port number"):
            extract_port(port, _make_container())

    def test_out_of_range_string(self):
        with pytest.raises(ValueError, match="invalid port number"):
            extract_port("0", _make_container())

    @pytest.mark.parametrize("port", [1, 65535])
    def test_bounds_inclusive(self, port):
        assert extract_port(port, _make_container()) == port

    def test_find_port_by_name_miss(self):
        with pytest.raises(LookupError):
            find_port_by_name(_make_container(), "nope")

    @pytest.mark.parametrize("port", [" 80", "80 ", "8_0", "0x50", "\u0668\u0660"])
    def test_loose_numeric_strings_rejected(self, port):
        with pytest.raises(ValueError, match="not found and not a number"):
            extract_port(port, _make_container())

    def test_signed_numeric_string(self):
        assert extract_port("+80", _make_container()) == 80
        with pytest.raises(ValueError, match="invalid port number"):
            extract_port("-80", _make_container())


# ============================================================================
# URL AND HEADERS
# ============================================================================

class TestFormatURL:
    def test_basic(self):
        assert format_url("http", "10.0.0.5", 8080, "/healthz") == "http://10.0.0.5:8080/healthz"

    def test_query_kept(self):
        assert format_url("https", "svc", 443, "/ready?full=1") == "https://svc:443/ready?full=1"

    def test_empty_path(self):
        assert format_url("http", "10.0.0.5", 80, "") == "http://10.0.0.5:80"

    def test_relative_path_gets_slash(self):
        assert format_url("http", "h", 80, "healthz") == "http://h:80/healthz"

    def test_ipv6_host_bracketed(self):
        assert format_url("http", "fd00::1", 80, "/") == "http://[fd00::1]:80/"

    def test_unparsable_path_passed_through(self):
        url = format_url("http", "h", 80, "//[broken/path")
        assert url.startswith("http://h:80")
        assert "[broken/path" in url


class TestBuildHeader:
    def test_repeated_names_append_in_order(self):
        headers = build_header([
            HTTPHeader(name="X-Token", value="a"),
            HTTPHeader(name="Accept", value="text/plain"),
            HTTPHeader(name="X-Token", value="b"),
            HTTPHeader(name="X-Token", value="c"),
        ])
        assert headers == {"X-Token": ["a", "b", "c"], "Accept": ["text/plain"]}

    def test_empty(self):
        assert build_header([]) == {}


# ============================================================================
# DISPATCH
# ============================================================================

class TestRunProbeDispatch:
    def test_http_uses_pod_ip_named_port_and_lowercase_scheme(self):
        http = RecordingHTTP()
        probe = Probe(
            http_get=HTTPGetAction(
                scheme="HTTPS",
                port="http",
                path="/healthz",
                http_headers=[HTTPHeader(name="X-A", value="1"), HTTPHeader(name="X-A", value="2")],
            ),
            timeout_seconds=3,
        )

        outcome = _run_probe(_make_prober(http=http), probe)

        assert outcome.result is ProbeResult.SUCCESS
        assert http.calls == [("https://10.0.0.5:8080/healthz", {"X-A": ["1", "2"]}, 3.0)]

    def test_http_explicit_host(self):
        http = RecordingHTTP()
        probe = Probe(http_get=HTTPGetAction(host="example.internal", port=81, path="/"))

        _run_probe(_make_prober(http=http), probe)

        assert http.calls[0][0] == "http://example.internal:81/"

    def test_http_bad_port_is_unknown_without_calling_primitive(self):
        http = RecordingHTTP()
        probe = Probe(http_get=HTTPGetAction(port=70000))

        outcome = _run_probe(_make_prober(http=http), probe)

        assert outcome.result is ProbeResult.UNKNOWN
        assert isinstance(outcome.error, ValueError)
        assert http.calls == []

    def test_tcp(self):
        tcp = RecordingTCP(ProbeOutcome.failure("refused"))
        probe = Probe(tcp_socket=TCPSocketAction(port="metrics"), timeout_seconds=2)

        outcome = _run_probe(_make_prober(tcp=tcp), probe)

        assert outcome.result is ProbeResult.FAILURE
        assert outcome.output == "refused"
        assert tcp.calls == [("10.0.0.5", 9090, 2.0)]

    def test_tcp_bad_port_is_unknown(self):
        tcp = RecordingTCP()
        probe = Probe(tcp_socket=TCPSocketAction(port="grpc"))

        outcome = _run_probe(_make_prober(tcp=tcp), probe)

        assert outcome.result is ProbeResult.UNKNOWN
        assert outcome.error is not None
        assert tcp.calls == []

    def test_exec_expands_static_env(self):
        exec_prober = RecordingExec()
        probe = Probe(exec=ExecAction(command=["cat", "$(TARGET)", "$(MISSING)", "$$HOME"]))

        _run_probe(_make_prober(exec_prober=exec_prober), probe)

        assert exec_prober.calls == [("c1", ["cat", "/tmp/healthy", "$(MISSING)", "$HOME"], 1.0)]

    def test_exec_without_backend_is_unknown(self):
        probe = Probe(exec=ExecAction(command=["true"]))

        outcome = _run_probe(_make_prober(), probe)

        assert outcome.result is ProbeResult.UNKNOWN
        assert isinstance(outcome.error, MissingProbeHandlerError)

    def test_first_populated_variant_wins(self):
        http = RecordingHTTP()
        tcp = RecordingTCP()
        exec_prober = RecordingExec()
        probe = Probe(
            exec=ExecAction(command=["true"]),
            http_get=HTTPGetAction(port=80),
            tcp_socket=TCPSocketAction(port=80),
        )

        _run_probe(_make_prober(http=http, tcp=tcp, exec_prober=exec_prober), probe)

        assert len(exec_prober.calls) == 1
        assert http.calls == []
        assert tcp.calls == []

    def test_no_variant_is_success(self):
        http = RecordingHTTP()
        tcp = RecordingTCP()

        outcome = _run_probe(_make_prober(http=http, tcp=tcp), Probe())

        assert outcome.result is ProbeResult.SUCCESS
        assert http.calls == [] and tcp.calls == []

    def test_zero_timeout_uses_default(self):
        tcp = RecordingTCP()
        http = RecordingHTTP()
        prober = _make_prober(http=http, tcp=tcp)

        _run_probe(prober, Probe(tcp_socket=TCPSocketAction(port=80), timeout_seconds=0))
        _run_probe(prober, Probe(http_get=HTTPGetAction(port=80), timeout_seconds=0))

        assert tcp.calls[0][2] == float(DEFAULT_PROBE_TIMEOUT_SECONDS)
        assert http.calls[0][2] == float(DEFAULT_PROBE_TIMEOUT_SECONDS)

    def test_zero_timeout_reaches_listening_port(self):
        async def scenario():
            async def handle(reader, writer):
                writer.close()

            server = await asyncio.start_server(handle, "127.0.0.1", 0)
            port = server.sockets[0].getsockname()[1]
            probe = Probe(
                tcp_socket=TCPSocketAction(host="127.0.0.1", port=port),
                timeout_seconds=0,
            )
            container = _make_container(liveness=probe)
            pod = _make_pod(container)
            async with server:
                return await Prober(defaults=ProbeDefaults()).probe(
                    ProbeType.LIVENESS, pod, pod.status, container, "c1"
                )

        outcome = asyncio.run(scenario())

        assert outcome.result is ProbeResult.SUCCESS
        assert outcome.error is None


# ============================================================================
# RETRIES
# ============================================================================

class TestRetries:
    def test_clean_failure_not_retried(self):
        http = RecordingHTTP(ProbeOutcome.failure("HTTP probe failed with statuscode: 500"))
        probe = Probe(http_get=HTTPGetAction(port=80))

        outcome = _run_with_retries(_make_prober(http=http), probe)

        assert outcome.result is ProbeResult.FAILURE
        assert len(http.calls) == 1

    def test_success_not_retried(self):
        http = RecordingHTTP()
        probe = Probe(http_get=HTTPGetAction(port=80))

        _run_with_retries(_make_prober(http=http), probe)

        assert len(http.calls) == 1

    def test_error_retried_until_clean(self):
        http = RecordingHTTP(
            ProbeOutcome.unknown(RuntimeError("transient")),
            ProbeOutcome.success("ok"),
        )
        probe = Probe(http_get=HTTPGetAction(port=80))

        outcome = _run_with_retries(_make_prober(http=http), probe)

        assert outcome.ok
        assert len(http.calls) == 2

    def test_three_errors_return_last_attempt(self):
        last_error = RuntimeError("third")
        exec_prober = RecordingExec(
            ProbeOutcome.unknown(RuntimeError("first"), output="1"),
            ProbeOutcome.unknown(RuntimeError("second"), output="2"),
            ProbeOutcome.unknown(last_error, output="3"),
        )
        probe = Probe(exec=ExecAction(command=["check"]))

        outcome = _run_with_retries(_make_prober(exec_prober=exec_prober), probe)

        assert len(exec_prober.calls) == 3
        assert outcome.error is last_error
        assert outcome.output == "3"
        assert outcome.result is ProbeResult.UNKNOWN

    def test_bad_port_exhausts_retries_without_calling_primitive(self):
        http = RecordingHTTP()
        probe = Probe(http_get=HTTPGetAction(port=0))

        outcome = _run_with_retries(_make_prober(http=http), probe)

        assert outcome.result is ProbeResult.UNKNOWN
        assert http.calls == []

    def test_retries_configurable(self):
        exec_prober = RecordingExec(ProbeOutcome.unknown(RuntimeError("down")))
        prober = Prober(
            tcp=RecordingTCP(),
            http=RecordingHTTP(),
            exec_prober=exec_prober,
            defaults=ProbeDefaults(max_probe_retries=5),
        )
        probe = Probe(exec=ExecAction(command=["check"]))

        _run_with_retries(prober, probe)

        assert len(exec_prober.calls) == 5


# ============================================================================
# PROBE CYCLE
# ============================================================================

class TestProbeCycle:
    def _probe(self, prober: Prober, container: Container, probe_type=ProbeType.READINESS):
        pod = _make_pod(container)
        return asyncio.run(prober.probe(probe_type, pod, pod.status, container, "c1"))

    def test_undeclared_probe_is_success(self):
        http = RecordingHTTP()
        tcp = RecordingTCP()
        prober = _make_prober(http=http, tcp=tcp)

        outcome = self._probe(prober, _make_container(probe=None))

        assert outcome.result is ProbeResult.SUCCESS
        assert http.calls == [] and tcp.calls == []

    def test_empty_probe_is_success(self):
        http = RecordingHTTP()
        prober = _make_prober(http=http)

        outcome = self._probe(prober, _make_container(probe=Probe()))

        assert outcome.result is ProbeResult.SUCCESS
        assert http.calls == []

    def test_picks_probe_by_kind(self):
        http = RecordingHTTP()
        tcp = RecordingTCP()
        container = _make_container(
            probe=Probe(http_get=HTTPGetAction(port=80)),
            liveness=Probe(tcp_socket=TCPSocketAction(port=81)),
        )

        self._probe(_make_prober(http=http, tcp=tcp), container, ProbeType.LIVENESS)

        assert http.calls == []
        assert tcp.calls[0][1] == 81

    def test_failure_emits_warning_event(self):
        recorder = RecordingRecorder()
        refs = ContainerRefManager()
        container = _make_container(probe=Probe(http_get=HTTPGetAction(port=80)))
        pod = _make_pod(container)
        refs.set_ref("c1", container_ref(pod, container))
        http = RecordingHTTP(ProbeOutcome.failure("HTTP probe failed with statuscode: 503"))
        prober = _make_prober(http=http, recorder=recorder, ref_manager=refs)

        outcome = self._probe(prober, container)

        assert outcome.result is ProbeResult.FAILURE
        assert outcome.error is None
        ref, event_type, reason, message = recorder.events[0]
        assert ref.field_path == "spec.containers{app}"
        assert event_type is EventType.WARNING
        assert reason == EVENT_REASON_CONTAINER_UNHEALTHY
        assert message == "Readiness probe failed: HTTP probe failed with statuscode: 503"

    def test_error_maps_to_failure_and_emits_errored_event(self):
        recorder = RecordingRecorder()
        refs = ContainerRefManager()
        container = _make_container(liveness=Probe(http_get=HTTPGetAction(port=0)))
        pod = _make_pod(container)
        refs.set_ref("c1", container_ref(pod, container))
        prober = _make_prober(recorder=recorder, ref_manager=refs)

        outcome = self._probe(prober, container, ProbeType.LIVENESS)

        assert outcome.result is ProbeResult.FAILURE
        assert isinstance(outcome.error, ValueError)
        assert recorder.events[0][3].startswith("Liveness probe errored: invalid port number")

    def test_no_ref_means_no_event(self):
        recorder = RecordingRecorder()
        container = _make_container(probe=Probe(http_get=HTTPGetAction(port=80)))
        http = RecordingHTTP(ProbeOutcome.failure("down"))
        prober = _make_prober(http=http, recorder=recorder, ref_manager=ContainerRefManager())

        outcome = self._probe(prober, container)

        assert outcome.result is ProbeResult.FAILURE
        assert recorder.events == []

    def test_success_emits_nothing(self):
        recorder = RecordingRecorder()
        refs = ContainerRefManager()
        container = _make_container(probe=Probe(http_get=HTTPGetAction(port=80)))
        refs.set_ref("c1", container_ref(_make_pod(container), container))
        prober = _make_prober(recorder=recorder, ref_manager=refs)

        outcome = self._probe(prober, container)

        assert outcome.ok
        assert recorder.events == []
