"""Tests for sub-agent seed history."""

from __future__ import annotations

from ephemeral_agents.messages import MessageRole
from ephemeral_agents.subagents.prompts import build_seed_history, render_system_prompt


class TestRenderSystemPrompt:
    """Tests for render_system_prompt."""

    def test_embeds_role(self) -> None:
        """Test the role appears in the opening line."""
        prompt = render_system_prompt("Research Specialist")

        assert prompt.startswith("You are a focused sub-agent with the role: Research Specialist.")

    def test_forbids_follow_up_questions(self) -> None:
        """Test the prompt tells the sub-agent not to ask questions."""
        assert "Do not ask follow-up questions" in render_system_prompt("Analyst")

    def test_role_not_escaped(self) -> None:
        """Test roles with markup characters are rendered verbatim."""
        assert "R&D <lead>" in render_system_prompt("R&D <lead>")


class TestBuildSeedHistory:
    """Tests for build_seed_history."""

    def test_two_messages(self) -> None:
        """Test the history is exactly a system and a user message."""
        history = build_seed_history("Summarizer", "Summarize doc")

        assert [m.role for m in history] == [MessageRole.SYSTEM, MessageRole.USER]

    def test_task_verbatim(self) -> None:
        """Test the task is passed through unchanged."""
        task = "  Summarize {this} doc\nwith {{ braces }}  "

        history = build_seed_history("Summarizer", task)

        assert history[1].content == task

    def test_fresh_history_each_call(self) -> None:
        """Test each call returns an independent list."""
        first = build_seed_history("A", "t")
        second = build_seed_history("A", "t")

        first.append(first[0])

        assert len(second) == 2
