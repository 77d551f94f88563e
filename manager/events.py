# ============================================================================
# EVENT RECORDER
# ============================================================================
# STATUS: Manager - Event sink adapter
# PURPOSE: Emit human-readable events about containers
# CREATED: 12 OCT 2026
# ============================================================================
"""
Event Recorder

Events are observational only; nothing in the probe core depends on them
being delivered. LoggingEventRecorder writes them to the log stream and
keeps the most recent ones in memory for inspection.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, List, Optional, Protocol, runtime_checkable

from core.config import EventDefaults, get_defaults
from core.contracts import EventType
from core.logging import ComponentType, get_logger, log_context
from core.models import ObjectReference

logger = get_logger(__name__, ComponentType.EVENTS)


@dataclass(frozen=True)
class RecordedEvent:
    """An event as handed to the sink."""
    ref: ObjectReference
    event_type: EventType
    reason: str
    message: str
    source: str
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@runtime_checkable
class EventRecorder(Protocol):
    def event(
        self,
        ref: ObjectReference,
        event_type: EventType,
        reason: str,
        message: str,
    ) -> None:
        ...


class LoggingEventRecorder:
    """
    EventRecorder that logs events.

    Warning events log at WARNING, everything else at INFO.
    """

    def __init__(self, defaults: Optional[EventDefaults] = None):
        self.defaults = defaults or get_defaults().events
        self.component = self.defaults.component
        self._recent: Deque[RecordedEvent] = deque(maxlen=self.defaults.max_recent_events)

    def event(
        self,
        ref: ObjectReference,
        event_type: EventType,
        reason: str,
        message: str,
    ) -> None:
        recorded = RecordedEvent(
            ref=ref,
            event_type=event_type,
            reason=reason,
            message=message,
            source=self.component,
        )
        self._recent.append(recorded)

        level = logging.WARNING if event_type is EventType.WARNING else logging.INFO
        with log_context(namespace=ref.namespace, pod=ref.name):
            logger.log(
                level,
                f"Event({ref.kind} {ref.field_path}) {event_type.value} {reason}: {message}",
            )

    def recent(self) -> List[RecordedEvent]:
        """Most recent events, oldest first."""
        return list(self._recent)


def new_event_recorder(defaults: Optional[EventDefaults] = None) -> LoggingEventRecorder:
    """Create the default event recorder."""
    return LoggingEventRecorder(defaults)


__all__ = [
    "RecordedEvent",
    "EventRecorder",
    "LoggingEventRecorder",
    "new_event_recorder",
]
