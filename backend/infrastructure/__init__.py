"""
Infrastructure adapters (persistent storage).
"""

from .credentials import CredentialStore

__all__ = ["CredentialStore"]
