"""Tier-keyed backend registry."""

from __future__ import annotations

import logging
from enum import Enum

from ephemeral_agents.backends.base import Backend
from ephemeral_agents.backends.errors import BackendResolutionError
from ephemeral_agents.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Tier(str, Enum):
    """Coarse complexity class used to pick a backend.

    Members are declared from cheapest to most capable; ``order`` exposes
    that ranking for fallback walks.
    """

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    REASONING = "reasoning"

    @property
    def order(self) -> int:
        return list(Tier).index(self)

    @classmethod
    def parse(cls, token: str | Tier) -> Tier:
        """Resolve a tier token, case-insensitively.

        Args:
            token: A tier name such as ``"reasoning"``.

        Returns:
            The matching ``Tier``.

        Raises:
            BackendResolutionError: If the token is not a known tier.
        """
        if isinstance(token, Tier):
            return token
        normalized = str(token).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise BackendResolutionError(
                f"Unknown tier '{token}'. Expected one of: {valid}",
                tier=str(token),
            ) from None


class BackendRegistry:
    """Maps tiers to backends and tracks backend health.

    Registration happens during setup; delegations only read from the
    registry. Health marks are advisory and only consulted by the router's
    auto-classification path.

    Example::

        registry = BackendRegistry()
        registry.register("simple", fast_backend)
        registry.register(Tier.REASONING, strong_backend)
        backend = registry.get_for_tier("reasoning")
    """

    def __init__(self, backends: dict[Tier | str, Backend] | None = None) -> None:
        self._backends: dict[Tier, Backend] = {}
        self._unhealthy: set[str] = set()
        for tier, backend in (backends or {}).items():
            self.register(tier, backend)

    def register(self, tier: Tier | str, backend: Backend) -> None:
        """Register ``backend`` for ``tier``, replacing any existing entry.

        Raises:
            ConfigurationError: If ``tier`` is not a known tier token.
        """
        try:
            resolved = Tier.parse(tier)
        except BackendResolutionError as exc:
            raise ConfigurationError(
                str(exc),
                config_key="tier",
                actual=str(tier),
            ) from exc
        self._backends[resolved] = backend
        logger.debug("Registered backend '%s' for tier '%s'", backend.id, resolved.value)

    def get_for_tier(self, tier: Tier | str) -> Backend:
        """Look up the backend registered for a tier.

        Raises:
            BackendResolutionError: If the token is unknown or nothing is
                registered for the tier.
        """
        resolved = Tier.parse(tier)
        backend = self._backends.get(resolved)
        if backend is None:
            raise BackendResolutionError(
                f"No backend registered for tier '{resolved.value}'",
                tier=resolved.value,
            )
        return backend

    def tiers(self) -> list[Tier]:
        """Registered tiers, cheapest first."""
        return sorted(self._backends, key=lambda t: t.order)

    def mark_unhealthy(self, backend_id: str) -> None:
        self._unhealthy.add(backend_id)
        logger.info("Backend '%s' marked unhealthy", backend_id)

    def mark_healthy(self, backend_id: str) -> None:
        self._unhealthy.discard(backend_id)

    def is_healthy(self, backend_id: str) -> bool:
        return backend_id not in self._unhealthy

    def __len__(self) -> int:
        return len(self._backends)
