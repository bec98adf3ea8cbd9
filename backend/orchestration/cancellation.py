"""
Cooperative cancellation for sweep chains.
"""


class CancellationToken:
    """
    One-way stop signal for a single sweep chain.

    The orchestrator samples it before each participant step and before each
    new sweep; it never interrupts an in-flight provider call. A fresh token
    is issued for every accepted submission.
    """

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
