"""Backend resolution errors."""

from __future__ import annotations

from ephemeral_agents.errors.exceptions import AgentError


class BackendResolutionError(AgentError):
    """Raised when no backend can be resolved for a delegation.

    Covers unknown tier tokens, tiers with nothing registered, and
    classifier failures.

    Attributes from details: tier.
    """

    def __init__(
        self,
        message: str,
        *,
        tier: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause, tier=tier)
