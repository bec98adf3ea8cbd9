"""
Roundtable configuration module.

Loads participants, persona prompts, mock replies and debate topics from
roundtable.yaml with mtime-based caching.
"""

from .cache import clear_cache, get_cached_config
from .loaders import (
    ROUNDTABLE_CONFIG,
    get_mock_replies,
    get_participant_entries,
    get_persona_prompt_template,
    get_roundtable_config,
    get_topics,
    pick_random_topic,
)
from .validation import log_config_validation, validate_config_schema

__all__ = [
    "ROUNDTABLE_CONFIG",
    "clear_cache",
    "get_cached_config",
    "get_mock_replies",
    "get_participant_entries",
    "get_persona_prompt_template",
    "get_roundtable_config",
    "get_topics",
    "log_config_validation",
    "pick_random_topic",
    "validate_config_schema",
]
