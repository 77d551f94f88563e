# ============================================================================
# PROVIDER ERRORS
# ============================================================================
# STATUS: Foundation - Error taxonomy for provider failures
# PURPOSE: Classify backend errors as retryable, delay-suggesting or terminal
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: ErrorReason, ErrorDetails, ErrorStatus, OperationError, is_*, new_*
# DEPENDENCIES: dataclasses, enum
# ============================================================================
"""
Provider Errors

Providers raise OperationError so callers can decide what to do next
without knowing the backend:

    try:
        await provider.create_pod(pod)
    except Exception as e:
        delay, ok = suggests_client_delay(e)
        if ok:
            await asyncio.sleep(delay)
        if is_retryable(e):
            ...

Classification is a capability check: any exception exposing a `status`
attribute holding an ErrorStatus is classified by its reason. Everything
else counts as UNKNOWN (not retryable, no delay, not "not found").

Retry policy:
    is_retryable() is True for INTERNAL_SERVER_ERROR only. TOO_MANY_REQUESTS
    and SERVICE_UNAVAILABLE are not retryable through this function; callers
    that want to wait on them use suggests_client_delay(), which reports the
    retry-after hint those reasons carry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable

_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


class ErrorReason(str, Enum):
    """
    Machine-readable failure causes a provider may report.

    Values are the provider wire strings; UNKNOWN is the empty string.
    """
    # Server declined to indicate a specific reason
    UNKNOWN = ""
    # Request understood, credentials required
    UNAUTHORIZED = "Unauthorized"
    # A resource required for the operation could not be found
    NOT_FOUND = "NotFound"
    # Unexpected internal error, outcome unknown (may carry retry_after_seconds)
    INTERNAL_SERVER_ERROR = "InternalServerError"
    # Valid request, service unavailable right now (may carry retry_after_seconds)
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    # Client must wait before trying again (may carry retry_after_seconds)
    TOO_MANY_REQUESTS = "TooManyRequests"
    # Invalid request data; never retry
    BAD_REQUEST = "BadRequest"


RETRYABLE_REASONS = frozenset({ErrorReason.INTERNAL_SERVER_ERROR})


@dataclass(frozen=True)
class ErrorDetails:
    """Extra data a provider MAY attach to a failure."""
    retry_after_seconds: int = 0


@dataclass(frozen=True)
class ErrorStatus:
    """Error status reported by a provider."""
    reason: ErrorReason = ErrorReason.UNKNOWN
    message: str = ""
    details: Optional[ErrorDetails] = None
    orig_err: Optional[BaseException] = None


@runtime_checkable
class ErrorStatusProvider(Protocol):
    """Anything that exposes an ErrorStatus can be classified."""

    @property
    def status(self) -> ErrorStatus:
        ...


class OperationError(Exception):
    """
    Error intended for consumption by the node agent.

    str(err) is the human message; the original error is chained as
    __cause__ so tracebacks show both.
    """

    def __init__(self, status: ErrorStatus):
        super().__init__(status.message)
        self._status = status
        if status.orig_err is not None:
            self.__cause__ = status.orig_err

    @property
    def status(self) -> ErrorStatus:
        return self._status

    @property
    def reason(self) -> ErrorReason:
        return self._status.reason

    def __str__(self) -> str:
        return self._status.message

    def __repr__(self) -> str:
        return f"OperationError(reason={self._status.reason.value!r}, message={self._status.message!r})"


# ============================================================================
# CLASSIFICATION
# ============================================================================

def _status_of(err: Optional[BaseException]) -> Optional[ErrorStatus]:
    if err is None or not isinstance(err, ErrorStatusProvider):
        return None
    status = err.status
    if isinstance(status, ErrorStatus):
        return status
    return None


def reason_for_error(err: Optional[BaseException]) -> ErrorReason:
    """Reason carried by err, UNKNOWN when err does not expose a status."""
    status = _status_of(err)
    if status is None:
        return ErrorReason.UNKNOWN
    return status.reason


def is_not_found(err: Optional[BaseException]) -> bool:
    """True if err reports NOT_FOUND."""
    return reason_for_error(err) is ErrorReason.NOT_FOUND


def is_retryable(err: Optional[BaseException]) -> bool:
    """True if err indicates the request may be retried (see module docstring)."""
    return reason_for_error(err) in RETRYABLE_REASONS


def suggests_client_delay(err: Optional[BaseException]) -> Tuple[int, bool]:
    """
    Suggested wait before the client acts again.

    Returns (seconds, True) if the error carries a wait hint, (0, False)
    otherwise. Says nothing about whether the error should be retried.

    SERVICE_UNAVAILABLE with details always yields its hint, whatever its
    sign. Any other reason yields the hint only when it is positive.
    """
    status = _status_of(err)
    if status is None or status.details is None:
        return 0, False

    retry_after = status.details.retry_after_seconds
    if status.reason is ErrorReason.SERVICE_UNAVAILABLE:
        return retry_after, True
    if retry_after > 0:
        return retry_after, True
    return 0, False


# ============================================================================
# CONSTRUCTORS
# ============================================================================

def _int32(value: int) -> int:
    return max(_INT32_MIN, min(_INT32_MAX, int(value)))


def _new(
    reason: ErrorReason,
    message: str,
    err: Optional[BaseException],
    retry_after_seconds: Optional[int] = None,
) -> OperationError:
    details = None
    if retry_after_seconds is not None:
        details = ErrorDetails(retry_after_seconds=_int32(retry_after_seconds))
    return OperationError(
        ErrorStatus(reason=reason, message=message, details=details, orig_err=err)
    )


def new_not_found(message: str, err: Optional[BaseException] = None) -> OperationError:
    """The resource was not found."""
    return _new(ErrorReason.NOT_FOUND, message, err)


def new_unauthorized(message: str, err: Optional[BaseException] = None) -> OperationError:
    """The client is not authorized to perform the requested action."""
    return _new(ErrorReason.UNAUTHORIZED, message, err)


def new_bad_request(message: str, err: Optional[BaseException] = None) -> OperationError:
    """The request is invalid and can not be processed."""
    return _new(ErrorReason.BAD_REQUEST, message, err)


def new_too_many_requests(
    message: str,
    retry_after_seconds: int,
    err: Optional[BaseException] = None,
) -> OperationError:
    """The endpoint is not accepting requests; try again later."""
    return _new(ErrorReason.TOO_MANY_REQUESTS, message, err, retry_after_seconds)


def new_internal_server_error(
    message: str,
    retry_after_seconds: int,
    err: Optional[BaseException] = None,
) -> OperationError:
    """An unexpected internal error occurred; the outcome is unknown."""
    return _new(ErrorReason.INTERNAL_SERVER_ERROR, message, err, retry_after_seconds)


def new_service_unavailable(
    message: str,
    retry_after_seconds: int,
    err: Optional[BaseException] = None,
) -> OperationError:
    """The requested service is unavailable at this time."""
    return _new(ErrorReason.SERVICE_UNAVAILABLE, message, err, retry_after_seconds)


def new_unknown_error(message: str, err: Optional[BaseException] = None) -> OperationError:
    """The provider could not say why the operation failed."""
    return _new(ErrorReason.UNKNOWN, message, err)


__all__ = [
    "ErrorReason",
    "ErrorDetails",
    "ErrorStatus",
    "ErrorStatusProvider",
    "OperationError",
    "RETRYABLE_REASONS",
    "reason_for_error",
    "is_not_found",
    "is_retryable",
    "suggests_client_delay",
    "new_not_found",
    "new_unauthorized",
    "new_bad_request",
    "new_too_many_requests",
    "new_internal_server_error",
    "new_service_unavailable",
    "new_unknown_error",
]
