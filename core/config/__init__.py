# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 12 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the probe core.
"""

from core.config.defaults import (
    ProbeDefaults,
    LivenessDefaults,
    EventDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "ProbeDefaults",
    "LivenessDefaults",
    "EventDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
