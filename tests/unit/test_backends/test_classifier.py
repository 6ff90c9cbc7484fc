"""Tests for heuristic task classification."""

from __future__ import annotations

import pytest

from ephemeral_agents.backends import Tier, TierClassifier


@pytest.fixture
def classifier() -> TierClassifier:
    return TierClassifier()


class TestTierClassifier:
    """Tests for TierClassifier.classify."""

    @pytest.mark.parametrize(
        "text",
        [
            "Explain step by step how the cache invalidation works",
            "Prove that the schedule never double-books a room",
            "What are the trade-offs between these two vendors?",
            "Find the root cause of last night's outage",
        ],
    )
    def test_reasoning(self, classifier: TierClassifier, text: str) -> None:
        """Test explicit reasoning cues map to the reasoning tier."""
        assert classifier.classify(text).tier is Tier.REASONING

    @pytest.mark.parametrize(
        "text",
        [
            "Refactor the parser module",
            "Debug why main.py crashes on startup",
            "Implement a retry helper",
            "```\nprint('hi')\n```",
        ],
    )
    def test_code(self, classifier: TierClassifier, text: str) -> None:
        """Test code cues map to the complex tier."""
        assert classifier.classify(text).tier is Tier.COMPLEX

    def test_long_task_is_complex(self, classifier: TierClassifier) -> None:
        """Test very long tasks map to the complex tier."""
        text = " ".join(["word"] * 130)

        result = classifier.classify(text)

        assert result.tier is Tier.COMPLEX
        assert "130 words" in result.reason

    def test_multi_part_task_is_complex(self, classifier: TierClassifier) -> None:
        """Test several enumerated parts map to the complex tier."""
        text = "Please do the following:\n1. Gather notes\n2. Group them\n3. Write a memo"

        assert classifier.classify(text).tier is Tier.COMPLEX

    @pytest.mark.parametrize(
        "text",
        ["Summarize doc", "Explain the onboarding flow", "Compare the two plans"],
    )
    def test_moderate(self, classifier: TierClassifier, text: str) -> None:
        """Test analysis cues map to the moderate tier."""
        assert classifier.classify(text).tier is Tier.MODERATE

    def test_short_task_is_simple(self, classifier: TierClassifier) -> None:
        """Test short tasks without cues map to the simple tier."""
        result = classifier.classify("What time is it in Tokyo?")

        assert result.tier is Tier.SIMPLE
        assert result.reason == "short task (6 words)"

    def test_default_is_moderate(self, classifier: TierClassifier) -> None:
        """Test medium tasks without cues default to moderate."""
        text = "Look through my notes from the trip and tell me which restaurants I liked most"

        result = classifier.classify(text)

        assert result.tier is Tier.MODERATE
        assert result.reason == "default"

    def test_reasoning_wins_over_code(self, classifier: TierClassifier) -> None:
        """Test reasoning cues take priority over code cues."""
        text = "Derive the complexity of this function step by step"

        assert classifier.classify(text).tier is Tier.REASONING
