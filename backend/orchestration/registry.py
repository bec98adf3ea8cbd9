"""
Static, ordered set of roundtable participants.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Tuple

from domain import RESERVED_SPEAKERS, Participant
from exceptions import ConfigurationError, ParticipantNotFoundError

logger = logging.getLogger("ParticipantRegistry")


class ParticipantRegistry:
    """
    Closed registry of participants in seating order.

    The set is fixed at construction; lookups for unknown ids indicate a
    configuration bug and raise ParticipantNotFoundError.
    """

    def __init__(self, participants: Iterable[Participant]):
        ordered = tuple(participants)
        if not ordered:
            raise ConfigurationError("A roundtable needs at least one participant")

        by_id: Dict[str, Participant] = {}
        for participant in ordered:
            if participant.id in RESERVED_SPEAKERS:
                raise ConfigurationError(f"Participant id '{participant.id}' is reserved")
            if participant.id in by_id:
                raise ConfigurationError(f"Duplicate participant id '{participant.id}'")
            by_id[participant.id] = participant

        self._ordered: Tuple[Participant, ...] = ordered
        self._by_id: Mapping[str, Participant] = by_id

    @classmethod
    def from_config(cls, entries: Iterable[Mapping[str, Any]]) -> "ParticipantRegistry":
        """
        Build a registry from roundtable.yaml participant entries.

        Args:
            entries: Mappings with 'id', 'name' and 'model' keys

        Raises:
            ConfigurationError: If an entry is incomplete or the set is invalid
        """
        participants = []
        for index, entry in enumerate(entries):
            try:
                participants.append(
                    Participant(
                        id=str(entry["id"]),
                        display_name=str(entry["name"]),
                        backend_model_ref=str(entry["model"]),
                    )
                )
            except (KeyError, TypeError) as e:
                raise ConfigurationError(f"Participant entry #{index + 1} is incomplete: {e}") from e

        registry = cls(participants)
        logger.info(f"Registered {len(registry)} participant(s): {', '.join(registry.ids())}")
        return registry

    def list(self) -> Tuple[Participant, ...]:
        return self._ordered

    def ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self._ordered)

    def lookup(self, participant_id: str) -> Participant:
        try:
            return self._by_id[participant_id]
        except KeyError:
            raise ParticipantNotFoundError(participant_id) from None

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._by_id

    def __len__(self) -> int:
        return len(self._ordered)
