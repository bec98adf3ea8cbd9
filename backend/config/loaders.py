"""
Configuration file loaders.

The roundtable is configured by a single YAML file (roundtable.yaml by default,
overridable with ROUNDTABLE_CONFIG_FILE). Loaders below return plain dicts and
domain objects; building the registry itself lives in orchestration.registry.
"""

import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.settings import DEFAULT_PERSONA_PROMPT, get_settings
from domain import MockReplies

from .cache import get_cached_config

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent
ROUNDTABLE_CONFIG = CONFIG_DIR / "roundtable.yaml"


def get_roundtable_config_path() -> Path:
    """Return the active roundtable.yaml path (settings override wins)."""
    return get_settings().roundtable_config_path


def get_roundtable_config() -> Dict[str, Any]:
    """
    Load the roundtable configuration.

    Returns:
        Dictionary with 'participants', 'persona_prompt' and 'topics' sections
    """
    return get_cached_config(get_roundtable_config_path())


def get_participant_entries() -> List[Dict[str, Any]]:
    """Return the raw participant entries in seating order."""
    return list(get_roundtable_config().get("participants") or [])


def get_mock_replies() -> Dict[str, MockReplies]:
    """
    Collect canned mock replies keyed by participant id.

    Participants without a 'mock_replies' section are omitted; the mock
    provider falls back to a generic line for them.
    """
    replies = {}
    for entry in get_participant_entries():
        section = entry.get("mock_replies")
        if not section or "id" not in entry:
            continue
        replies[entry["id"]] = MockReplies(
            opening=str(section.get("opening", "")),
            follow_up=str(section.get("follow_up", "")),
        )
    return replies


def get_persona_prompt_template() -> str:
    """Return the persona system prompt template ('{name}' is substituted)."""
    return get_roundtable_config().get("persona_prompt") or DEFAULT_PERSONA_PROMPT


def get_topics() -> List[str]:
    """Return the canned debate topics."""
    return [str(t) for t in (get_roundtable_config().get("topics") or [])]


def pick_random_topic(rng: Optional[random.Random] = None) -> Optional[str]:
    """
    Pick one canned debate topic.

    Returns:
        A topic string, or None if no topics are configured
    """
    topics = get_topics()
    if not topics:
        return None
    return (rng or random).choice(topics)
