# ============================================================================
# PROVIDERS MODULE
# ============================================================================
# STATUS: Provider-facing contracts
# PURPOSE: Export the provider error taxonomy
# LAST_REVIEWED: 12 OCT 2026
# ============================================================================

from providers.errors import (
    ErrorReason,
    ErrorDetails,
    ErrorStatus,
    ErrorStatusProvider,
    OperationError,
    reason_for_error,
    is_not_found,
    is_retryable,
    suggests_client_delay,
    new_not_found,
    new_unauthorized,
    new_bad_request,
    new_too_many_requests,
    new_internal_server_error,
    new_service_unavailable,
    new_unknown_error,
)

__all__ = [
    "ErrorReason",
    "ErrorDetails",
    "ErrorStatus",
    "ErrorStatusProvider",
    "OperationError",
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
