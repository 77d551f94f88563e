# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for probing, liveness dispatch and events
# CREATED: 12 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for the probe core.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from __version__ import __version__, COMPONENT


@dataclass(frozen=True)
class ProbeDefaults:
    """
    Defaults for probe execution.

    Controls the retry cycle and HTTP probe behaviour.
    """
    # Attempts per probe cycle (retried only on transport/execution errors)
    max_probe_retries: int = 3

    # HTTP probe response body is truncated to this many bytes
    http_max_body_bytes: int = 10 * 1024

    # Sent unless the probe declares its own User-Agent header
    user_agent: str = f"{COMPONENT}-probe/{__version__}"

    @classmethod
    def from_env(cls) -> "ProbeDefaults":
        """Create from environment variables."""
        return cls(
            max_probe_retries=int(os.getenv("PROBE_MAX_RETRIES", 3)),
            http_max_body_bytes=int(os.getenv("PROBE_HTTP_MAX_BODY_BYTES", 10 * 1024)),
            user_agent=os.getenv("PROBE_USER_AGENT", f"{COMPONENT}-probe/{__version__}"),
        )


@dataclass(frozen=True)
class LivenessDefaults:
    """
    Defaults for the liveness dispatcher.

    The outbound queue is bounded; a full queue blocks the dispatch loop.
    """
    update_buffer_size: int = 20

    # Capacity of the raw result stream fed by the worker scheduler
    results_buffer_size: int = 20

    @classmethod
    def from_env(cls) -> "LivenessDefaults":
        """Create from environment variables."""
        return cls(
            update_buffer_size=int(os.getenv("LIVENESS_UPDATE_BUFFER", 20)),
            results_buffer_size=int(os.getenv("LIVENESS_RESULTS_BUFFER", 20)),
        )


@dataclass(frozen=True)
class EventDefaults:
    """Defaults for the event recorder."""
    component: str = COMPONENT
    max_recent_events: int = 100

    @classmethod
    def from_env(cls) -> "EventDefaults":
        """Create from environment variables."""
        return cls(
            component=os.getenv("EVENT_COMPONENT", COMPONENT),
            max_recent_events=int(os.getenv("EVENT_HISTORY_SIZE", 100)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    probe: ProbeDefaults = field(default_factory=ProbeDefaults)
    liveness: LivenessDefaults = field(default_factory=LivenessDefaults)
    events: EventDefaults = field(default_factory=EventDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            probe=ProbeDefaults.from_env(),
            liveness=LivenessDefaults.from_env(),
            events=EventDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeDefaults",
    "LivenessDefaults",
    "EventDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
