"""
Mutable state of one roundtable, owned by the orchestrator.
"""

from dataclasses import dataclass, field

from .cancellation import CancellationToken
from .history import ConversationHistory


@dataclass
class RoundtableSession:
    """
    Attributes:
        history: Shared transcript
        generating: True for the whole lifetime of a sweep chain
        auto_continue: Start another sweep when one completes
        cancel_token: Token of the current (or most recent) sweep chain
    """

    history: ConversationHistory = field(default_factory=ConversationHistory)
    generating: bool = False
    auto_continue: bool = False
    cancel_token: CancellationToken = field(default_factory=CancellationToken)

    @property
    def cancel_requested(self) -> bool:
        return self.cancel_token.is_cancelled

    def begin_chain(self) -> CancellationToken:
        """Mark the session busy and issue a fresh token (clears any old stop request)."""
        self.generating = True
        self.cancel_token = CancellationToken()
        return self.cancel_token
