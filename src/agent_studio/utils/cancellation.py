"""Cooperative cancellation for agent and pipeline runs.

A run never gets interrupted in the middle of a call to the text generator
or a tool. The engines poll a token at cycle and node boundaries, and after
every suspension point. Once the token is cancelled, they abort with
``RunCancelledError``.
"""

from typing import Optional


class RunCancelledError(Exception):
    """Raised when a run observes that its cancellation token was cancelled."""

    def __init__(self, message: str = "Execution cancelled.") -> None:
        super().__init__(message)


class CancellationToken:
    """One-shot cancellation flag shared between a run and its owner.

    Example:
        token = CancellationToken()
        token.cancel("user pressed stop")
        token.raise_if_cancelled()  # raises RunCancelledError
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        """Reason given to ``cancel``, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Calling it again keeps the first reason.

        Args:
            reason: Optional human-readable reason
        """
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``RunCancelledError`` if cancellation was requested.

        Raises:
            RunCancelledError: If the token is cancelled
        """
        if self._cancelled:
            raise RunCancelledError(self._reason or "Execution cancelled.")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
