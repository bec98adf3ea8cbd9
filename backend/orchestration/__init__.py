"""
Roundtable orchestration module for multi-agent conversations.

This module provides the shared history, the participant registry, the
cooperative cancellation and pacing utilities, presentation sinks and the
orchestrator that sequences participant turns.
"""

from .cancellation import CancellationToken
from .history import ConversationHistory
from .pacing import PacingPolicy
from .registry import ParticipantRegistry
from .session import RoundtableSession
from .sinks import CompositeSink, EventLogSink, LoggingSink, PresentationSink, RoundtableEvent
from .orchestrator import RoundtableOrchestrator, compose_turn_content

__all__ = [
    "CancellationToken",
    "CompositeSink",
    "ConversationHistory",
    "EventLogSink",
    "LoggingSink",
    "PacingPolicy",
    "ParticipantRegistry",
    "PresentationSink",
    "RoundtableEvent",
    "RoundtableOrchestrator",
    "RoundtableSession",
    "compose_turn_content",
]
