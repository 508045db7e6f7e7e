"""Coaching narrative for a computed plan: LLM writes, engine numbers stay fixed."""

from __future__ import annotations

import logging

from strands import Agent
from strands.models import BedrockModel

from recoverytrack.agent.prompt import build_narrative_prompt, build_system_prompt
from recoverytrack.models.plan import RecoveryResults

logger = logging.getLogger(__name__)

MAX_NARRATIVE_CHARS = 1500


def _call_llm(agent: Agent, user_prompt: str) -> str | None:
    """Single agent call; returns stripped text or None on any failure."""
    try:
        result = agent(user_prompt)
        text = str(result).strip()
        logger.debug("Raw narrative response (first 500 chars):\n%.500s", text)
        if text:
            return text[:MAX_NARRATIVE_CHARS]
        logger.warning("Narrative agent returned empty text")
    except Exception as e:
        logger.warning("Narrative call failed: %s", e)

    return None


def generate_narrative(
    results: RecoveryResults,
    model_id: str = "us.amazon.nova-2-lite-v1:0",
    region: str = "us-east-1",
    temperature: float = 0.3,
) -> str:
    """Return a short coaching summary, or the advisory message on failure."""
    bedrock_model = BedrockModel(
        model_id=model_id,
        region_name=region,
        temperature=temperature,
        max_tokens=512,
    )
    agent = Agent(
        model=bedrock_model,
        system_prompt=build_system_prompt(),
        callback_handler=None,
    )

    text = _call_llm(agent, build_narrative_prompt(results))
    if text is None:
        logger.info("Falling back to advisory message for narrative")
        return results.recovery.message
    return text
