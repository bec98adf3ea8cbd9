"""
Exception hierarchy for the roundtable backend.

ProviderError is recovered per turn by the orchestrator. ConfigurationError
signals a defect in the participant set and aborts only the lookup that hit it.
"""

from typing import Optional


class RoundtableError(Exception):
    """Base class for all roundtable errors."""


class ProviderError(RoundtableError):
    """A response provider failed to produce a reply (transport, status or payload)."""

    def __init__(self, message: str, participant_id: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.participant_id = participant_id
        self.status_code = status_code


class ConfigurationError(RoundtableError):
    """The static roundtable configuration is invalid."""


class ParticipantNotFoundError(ConfigurationError):
    """A participant id is absent from the registry."""

    def __init__(self, participant_id: str):
        super().__init__(f"Participant '{participant_id}' is not registered")
        self.participant_id = participant_id
