"""
Configuration validation and logging.

Provides functions for validating configuration schema and startup logging.
"""

import logging

from domain import RESERVED_SPEAKERS

from .loaders import get_participant_entries, get_roundtable_config, get_roundtable_config_path, get_topics

logger = logging.getLogger(__name__)

REQUIRED_PARTICIPANT_FIELDS = ("id", "name", "model")


def validate_config_schema() -> list[str]:
    """
    Validate the roundtable configuration has required keys and structure.

    Returns:
        List of validation errors (empty if all valid)
    """
    errors = []

    config = get_roundtable_config()
    if not config:
        return ["roundtable.yaml is empty or missing"]

    entries = get_participant_entries()
    if not entries:
        errors.append("roundtable.yaml missing 'participants' section")

    seen = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"participant #{index + 1} is not a mapping")
            continue
        for field_name in REQUIRED_PARTICIPANT_FIELDS:
            if not entry.get(field_name):
                errors.append(f"participant #{index + 1} missing '{field_name}' field")
        participant_id = entry.get("id")
        if participant_id in RESERVED_SPEAKERS:
            errors.append(f"participant id '{participant_id}' is reserved")
        if participant_id in seen:
            errors.append(f"duplicate participant id '{participant_id}'")
        seen.add(participant_id)

    template = config.get("persona_prompt")
    if template is not None:
        if "{name}" not in template:
            errors.append("persona_prompt must contain a '{name}' placeholder")
        try:
            template.format(name="Participant")
        except (KeyError, IndexError, ValueError) as e:
            # Literal braces must be doubled ({{ and }})
            errors.append(f"persona_prompt is not a valid template: {e!r}")

    return errors


def log_config_validation():
    """
    Validate and log configuration status at startup.

    This should be called once during application initialization.
    """
    logger.info("Validating roundtable configuration...")

    errors = validate_config_schema()

    if errors:
        logger.error("Configuration validation failed:")
        for error in errors:
            logger.error(f"   - {error}")
        logger.error(f"Fix configuration file {get_roundtable_config_path()}")
    else:
        logger.info("Roundtable configuration validated successfully")

    names = [entry.get("name", "?") for entry in get_participant_entries() if isinstance(entry, dict)]
    logger.info(f"Seating order: {', '.join(names)}")
    logger.info(f"Random topics available: {len(get_topics())}")


__all__ = [
    "validate_config_schema",
    "log_config_validation",
]
