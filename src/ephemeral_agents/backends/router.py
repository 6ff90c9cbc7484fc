"""Content-based backend routing."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ephemeral_agents.backends.base import Backend
from ephemeral_agents.backends.classifier import Classification, TierClassifier
from ephemeral_agents.backends.errors import BackendResolutionError
from ephemeral_agents.backends.registry import BackendRegistry, Tier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteResult:
    """A resolved backend plus the classification that selected it.

    Attributes:
        backend: The backend to use.
        classification: How the task text was classified.
        tier: Tier the backend was actually taken from. Differs from
            ``classification.tier`` when a fallback was used.
    """

    backend: Backend
    classification: Classification
    tier: Tier

    @property
    def fell_back(self) -> bool:
        return self.tier is not self.classification.tier


class BackendRouter:
    """Resolve backends by explicit tier or by classifying task text.

    Args:
        registry: Tier-to-backend registry.
        classifier: Task classifier. Defaults to ``TierClassifier()``.
    """

    def __init__(
        self,
        registry: BackendRegistry,
        classifier: TierClassifier | None = None,
    ) -> None:
        self._registry = registry
        self._classifier = classifier or TierClassifier()

    @property
    def registry(self) -> BackendRegistry:
        return self._registry

    def get_for_tier(self, tier: Tier | str) -> Backend:
        """Direct lookup, bypassing classification and health checks."""
        return self._registry.get_for_tier(tier)

    def route(self, text: str) -> RouteResult:
        """Classify ``text`` and resolve a healthy backend for it.

        The classified tier is preferred. If its backend is missing or
        unhealthy, the nearest registered healthy tier is used, trying more
        capable tiers before cheaper ones. If every backend is unhealthy the
        classified tier's backend (or the nearest registered one) is
        returned anyway.

        Raises:
            BackendResolutionError: If classification fails or no backend is
                registered at all.
        """
        try:
            classification = self._classifier.classify(text)
        except Exception as exc:
            raise BackendResolutionError(
                f"Task classification failed: {exc}",
                cause=exc,
            ) from exc

        candidates = self._candidates(classification.tier)
        if not candidates:
            raise BackendResolutionError("No backends registered", tier=classification.tier.value)

        chosen = candidates[0]
        for tier in candidates:
            if self._registry.is_healthy(self._registry.get_for_tier(tier).id):
                chosen = tier
                break
        backend = self._registry.get_for_tier(chosen)
        result = RouteResult(backend=backend, classification=classification, tier=chosen)

        if result.fell_back:
            logger.info(
                "Routed to fallback tier",
                extra={
                    "classified_tier": classification.tier.value,
                    "tier": chosen.value,
                    "backend": backend.id,
                },
            )
        return result

    def _candidates(self, preferred: Tier) -> list[Tier]:
        registered = self._registry.tiers()
        upward = [t for t in registered if t.order >= preferred.order]
        downward = [t for t in reversed(registered) if t.order < preferred.order]
        return upward + downward
