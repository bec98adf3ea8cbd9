"""
Presentation sinks: consumers of the events the orchestrator emits.

The orchestrator never renders anything itself. It calls the methods of a
PresentationSink, which is a pure event consumer with no write access to the
session. Clients of the HTTP API poll an EventLogSink for new events.
"""

import itertools
import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Deque, Iterable, List, Optional

logger = logging.getLogger("PresentationSink")


class PresentationSink:
    """Base sink; every hook is a no-op."""

    def on_typing_start(self, participant_id: str) -> None:
        pass

    def on_typing_stop(self, participant_id: str) -> None:
        pass

    def on_user_message_appended(self, content: str) -> None:
        pass

    def on_message_delivered(self, participant_id: str, text: str) -> None:
        pass

    def on_error(self, participant_id: str, message: str) -> None:
        pass

    def on_cleared(self) -> None:
        pass

    def on_system_notice(self, text: str) -> None:
        pass

    def on_generation_started(self, can_stop: bool) -> None:
        """Submission disabled, busy placeholder shown; stop shown only when can_stop."""

    def on_generation_finished(self) -> None:
        """Submission re-enabled, placeholders restored, stop hidden."""

    def on_stop_available(self, visible: bool) -> None:
        pass


class LoggingSink(PresentationSink):
    """Writes every event to the log; handy for headless runs."""

    def on_typing_start(self, participant_id: str) -> None:
        logger.debug(f"⌨️  {participant_id} is typing")

    def on_user_message_appended(self, content: str) -> None:
        logger.info(f"👤 USER: {content[:80]}")

    def on_message_delivered(self, participant_id: str, text: str) -> None:
        logger.info(f"💬 {participant_id}: {text[:80]}")

    def on_error(self, participant_id: str, message: str) -> None:
        logger.warning(f"⚠️ {participant_id}: {message}")

    def on_cleared(self) -> None:
        logger.info("🧹 Transcript cleared")

    def on_system_notice(self, text: str) -> None:
        logger.info(f"ℹ️  {text}")


@dataclass
class RoundtableEvent:
    """One event as exposed to polling clients."""

    seq: int
    type: str
    participant_id: Optional[str] = None
    text: Optional[str] = None
    visible: Optional[bool] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return asdict(self)


class EventLogSink(PresentationSink):
    """
    Bounded, sequence-numbered event buffer.

    Clients remember the last seq they saw and ask for everything after it.
    Old events are dropped once max_events is exceeded.
    """

    def __init__(self, max_events: int = 500):
        self._events: Deque[RoundtableEvent] = deque(maxlen=max_events)
        self._seq = itertools.count(1)
        self._lock = threading.Lock()

    def _record(self, event_type: str, **fields) -> None:
        with self._lock:
            self._events.append(RoundtableEvent(seq=next(self._seq), type=event_type, **fields))

    def events_after(self, seq: int = 0) -> List[RoundtableEvent]:
        with self._lock:
            return [event for event in self._events if event.seq > seq]

    @property
    def last_seq(self) -> int:
        with self._lock:
            return self._events[-1].seq if self._events else 0

    def on_typing_start(self, participant_id: str) -> None:
        self._record("typing_start", participant_id=participant_id)

    def on_typing_stop(self, participant_id: str) -> None:
        self._record("typing_stop", participant_id=participant_id)

    def on_user_message_appended(self, content: str) -> None:
        self._record("user_message", text=content)

    def on_message_delivered(self, participant_id: str, text: str) -> None:
        self._record("message_delivered", participant_id=participant_id, text=text)

    def on_error(self, participant_id: str, message: str) -> None:
        self._record("error", participant_id=participant_id, text=message)

    def on_cleared(self) -> None:
        self._record("cleared")

    def on_system_notice(self, text: str) -> None:
        self._record("system_notice", text=text)

    def on_generation_started(self, can_stop: bool) -> None:
        self._record("generation_started", visible=can_stop)

    def on_generation_finished(self) -> None:
        self._record("generation_finished")

    def on_stop_available(self, visible: bool) -> None:
        self._record("stop_available", visible=visible)


class CompositeSink(PresentationSink):
    """Fans every event out to several sinks; a failing sink does not starve the others."""

    def __init__(self, sinks: Iterable[PresentationSink]):
        self.sinks = list(sinks)

    def _dispatch(self, method: str, *args) -> None:
        for sink in self.sinks:
            try:
                getattr(sink, method)(*args)
            except Exception as e:
                logger.error(f"❌ Sink {type(sink).__name__}.{method} failed: {e}")

    def on_typing_start(self, participant_id: str) -> None:
        self._dispatch("on_typing_start", participant_id)

    def on_typing_stop(self, participant_id: str) -> None:
        self._dispatch("on_typing_stop", participant_id)

    def on_user_message_appended(self, content: str) -> None:
        self._dispatch("on_user_message_appended", content)

    def on_message_delivered(self, participant_id: str, text: str) -> None:
        self._dispatch("on_message_delivered", participant_id, text)

    def on_error(self, participant_id: str, message: str) -> None:
        self._dispatch("on_error", participant_id, message)

    def on_cleared(self) -> None:
        self._dispatch("on_cleared")

    def on_system_notice(self, text: str) -> None:
        self._dispatch("on_system_notice", text)

    def on_generation_started(self, can_stop: bool) -> None:
        self._dispatch("on_generation_started", can_stop)

    def on_generation_finished(self) -> None:
        self._dispatch("on_generation_finished")

    def on_stop_available(self, visible: bool) -> None:
        self._dispatch("on_stop_available", visible)
