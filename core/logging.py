# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across prober and managers
# CREATED: 12 OCT 2026
# ============================================================================
"""
Structured Logging

Provides structured, JSON-formatted logging for the probe core.

Features:
- Component-based loggers
- Contextual fields (namespace, pod, container, probe_type)
- JSON output for log aggregation
- Human-readable output for development

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("manager.liveness")

    with log_context(namespace="default", pod="web"):
        logger.debug("Pod is terminated. No update")
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union
from enum import Enum


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    PROBER = "prober"
    READINESS = "readiness"
    LIVENESS = "liveness"
    RESULTS = "results"
    EVENTS = "events"
    PROVIDER = "provider"


@dataclass
class LogContext:
    """
    Context for structured logging.

    Stored per asyncio task (and per thread) via contextvars.
    """
    namespace: Optional[str] = None
    pod: Optional[str] = None
    container: Optional[str] = None
    probe_type: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Per-task context storage; each asyncio task sees its own stack
_context_stack: ContextVar[Tuple[LogContext, ...]] = ContextVar("log_context_stack", default=())

_CONTEXT_FIELDS = (
    "namespace",
    "pod",
    "container",
    "probe_type",
    "component",
    "operation",
)


def _get_context_stack() -> Tuple[LogContext, ...]:
    """Get the current task's context stack."""
    return _context_stack.get()


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(namespace="default", pod="web", container="app"):
            logger.debug("Setting readiness")
    """
    # Merge with parent context
    parent = get_current_context()
    merged = {
        name: kwargs.get(name, getattr(parent, name))
        for name in _CONTEXT_FIELDS
    }
    new_context = LogContext(
        **merged,
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    token = _context_stack.set(_get_context_stack() + (new_context,))
    try:
        yield new_context
    finally:
        _context_stack.reset(token)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One object per line. Probe context (namespace, pod, container,
    probe_type) lands under "context" so log queries can filter on it.
    """

    def __init__(self, include_source: bool = True):
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": _utcnow().isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        component = getattr(record, "component", None)
        if component:
            log_data["component"] = component

        context_dict = get_current_context().to_dict()
        if context_dict:
            log_data["context"] = context_dict

        # Fields passed by callers through ContextLogger
        data = getattr(record, "data", None)
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self.include_source:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Renders the probe context inline:
        2026-10-12 09:14:02 DEBUG    manager.readiness [namespace=default, pod=web]: ...
    """

    _FIELDS = (
        ("namespace", "namespace"),
        ("pod", "pod"),
        ("container", "container"),
        ("probe_type", "probe"),
        ("operation", "method"),
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        timestamp = _utcnow().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = [
            f"{label}={getattr(context, name)}"
            for name, label in self._FIELDS
            if getattr(context, name)
        ]
        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        data = getattr(record, "data", None)
        data_str = f" {data}" if data else ""

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}{data_str}"
        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter stamping records with the component they came from.

    Keyword fields passed as extra={...} are kept apart from the log
    context and rendered under "data".
    """

    def process(self, msg, kwargs):
        data = kwargs.pop("extra", None) or {}
        kwargs["extra"] = {"component": self.extra.get("component"), "data": data}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "manager.readiness")
        component: Optional component type for categorization

    Returns:
        ContextLogger instance
    """
    value = component.value if component is not None else None
    return ContextLogger(logging.getLogger(name), {"component": value})


# httpx logs every request at INFO; one line per HTTP probe is noise
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (LOG_FORMAT=json forces it)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
