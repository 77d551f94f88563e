# ============================================================================
# VERSION - NODE PROBE CORE
# ============================================================================
"""
Version information for the node probe core.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
__version__ = "0.3.1"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-12"

# Identity used for events and the HTTP probe User-Agent
COMPONENT = "virtual-kubelet"
