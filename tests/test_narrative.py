"""Narrative agent tests with a mocked model; no AWS credentials needed."""

from unittest.mock import MagicMock, patch

import pytest

from recoverytrack.agent.narrative import MAX_NARRATIVE_CHARS, _call_llm, generate_narrative
from recoverytrack.agent.prompt import build_narrative_prompt, build_system_prompt
from recoverytrack.engine.adaptive import compute_adaptive_metrics
from recoverytrack.engine.pipeline import build_recovery_plan
from tests.conftest import TODAY


@pytest.fixture
def results(backlog_subjects, moderate_profile):
    return build_recovery_plan(backlog_subjects, moderate_profile, today=TODAY)


class TestPrompt:
    def test_system_prompt_forbids_changing_numbers(self):
        prompt = build_system_prompt()
        assert "Do NOT change" in prompt
        assert "Plain text only" in prompt

    def test_lists_subjects_in_priority_order(self, results):
        prompt = build_narrative_prompt(results)
        chem = prompt.index("#1 Organic Chemistry")
        algebra = prompt.index("#2 Linear Algebra")
        history = prompt.index("#3 World History")
        assert chem < algebra < history

    def test_includes_every_day(self, results):
        prompt = build_narrative_prompt(results)
        for day in results.plan.days:
            assert day.date.isoformat() in prompt

    def test_progress_only_after_tracking(self, results, moderate_profile, empty_history):
        assert "Progress so far" not in build_narrative_prompt(results)
        adaptive = compute_adaptive_metrics(results.plan, results.subjects, moderate_profile, empty_history)
        tracked = results.model_copy(update={"adaptive": adaptive})
        assert "Completion rate: 0.0%" in build_narrative_prompt(tracked)


class TestCallLlm:
    def test_returns_stripped_text(self):
        agent = MagicMock(return_value="  Focus on chemistry first.  ")
        assert _call_llm(agent, "prompt") == "Focus on chemistry first."

    def test_truncates_long_text(self):
        agent = MagicMock(return_value="x" * (MAX_NARRATIVE_CHARS + 100))
        assert len(_call_llm(agent, "prompt")) == MAX_NARRATIVE_CHARS

    def test_empty_text_is_none(self):
        agent = MagicMock(return_value="   ")
        assert _call_llm(agent, "prompt") is None

    def test_exception_is_none(self):
        agent = MagicMock(side_effect=RuntimeError("throttled"))
        assert _call_llm(agent, "prompt") is None


class TestGenerateNarrative:
    @patch("recoverytrack.agent.narrative._call_llm")
    @patch("recoverytrack.agent.narrative.Agent")
    @patch("recoverytrack.agent.narrative.BedrockModel")
    def test_uses_model_text(self, mock_bedrock_cls, mock_agent_cls, mock_call_llm, results):
        mock_call_llm.return_value = "Start with Organic Chemistry."
        text = generate_narrative(results, model_id="test-model", region="eu-west-1", temperature=0.1)
        assert text == "Start with Organic Chemistry."
        mock_bedrock_cls.assert_called_once()
        assert mock_bedrock_cls.call_args.kwargs["model_id"] == "test-model"
        assert mock_bedrock_cls.call_args.kwargs["region_name"] == "eu-west-1"
        assert mock_agent_cls.call_args.kwargs["system_prompt"] == build_system_prompt()

    @patch("recoverytrack.agent.narrative._call_llm")
    @patch("recoverytrack.agent.narrative.Agent")
    @patch("recoverytrack.agent.narrative.BedrockModel")
    def test_falls_back_to_advisory(self, mock_bedrock_cls, mock_agent_cls, mock_call_llm, results):
        mock_call_llm.return_value = None
        assert generate_narrative(results) == results.recovery.message

    @patch("recoverytrack.agent.narrative.Agent")
    @patch("recoverytrack.agent.narrative.BedrockModel")
    def test_agent_failure_falls_back(self, mock_bedrock_cls, mock_agent_cls, results):
        mock_agent_cls.return_value.side_effect = RuntimeError("no credentials")
        assert generate_narrative(results) == results.recovery.message
