"""
Response providers: where participant replies come from.
"""

from .base import ResponseProvider, conversational_turns, is_opening_turn
from .mock import MockResponseProvider
from .remote import RemoteResponseProvider, extract_reply, history_to_messages
from .routing import CredentialRoutedProvider

__all__ = [
    "CredentialRoutedProvider",
    "MockResponseProvider",
    "RemoteResponseProvider",
    "ResponseProvider",
    "conversational_turns",
    "extract_reply",
    "history_to_messages",
    "is_opening_turn",
]
