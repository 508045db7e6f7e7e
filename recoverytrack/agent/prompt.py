"""Prompt construction for the plan narrative agent."""

from __future__ import annotations

from recoverytrack.models.plan import RecoveryResults


def build_system_prompt() -> str:
    """Static system prompt: role, constraints, output format."""
    return """You are RecoveryTrack, a calm and practical study coach. A student has fallen behind and a deterministic engine has already built their 7-day recovery plan.

## Role
Explain the plan to the student in plain language: what to focus on first, why, and how to use the buffer time. Encourage without promising outcomes.

## Constraints
- Do NOT change, add or remove any numbers, subjects, hours or days. Refer only to what is given.
- Keep it under 150 words, in 2-3 short paragraphs.
- If burnout risk or high stress is mentioned, recommend rest and lighter days explicitly.

## Output Format
Plain text only. No markdown headings, no lists, no JSON."""


def build_narrative_prompt(results: RecoveryResults) -> str:
    """User prompt summarizing the computed plan for the narrative agent."""
    lines = [
        "## Recovery overview",
        f"- Difficulty: {results.recovery.difficulty_score}/100 ({results.recovery.category.value})",
        f"- Total pressure {results.recovery.total_pressure} vs weekly capacity {results.recovery.weekly_capacity}h",
        f"- Advisory: {results.recovery.message}",
        "",
        "## Subjects (priority order)",
    ]
    for sub in results.subjects:
        lines.append(
            f"- #{sub.priority_rank} {sub.name}: {sub.backlog_chapters} chapters, "
            f"{sub.days_remaining} days left, {sub.priority_tier.value if sub.priority_tier else 'unranked'}, "
            f"{sub.allocated_hours}h/day. {sub.priority_explanation or ''}".rstrip()
        )

    lines += [
        "",
        "## Daily allocation",
        f"- Allocated {results.allocation.total_allocated}h/day, buffer {results.allocation.buffer_time}h/day",
        f"- Balanced: {'yes' if results.allocation.is_balanced else 'no'}",
        "",
        "## Week",
    ]
    for day in results.plan.days:
        subjects = sorted({t.subject_name for t in day.tasks if t.subject_name})
        lines.append(
            f"- {day.day_name} {day.date.isoformat()} ({day.intensity.value}): "
            f"{day.study_minutes} min study, {day.buffer_minutes} min buffer"
            + (f", subjects: {', '.join(subjects)}" if subjects else "")
        )

    if results.adaptive is not None:
        lines += [
            "",
            "## Progress so far",
            f"- Completion rate: {results.adaptive.completion_rate}%",
            f"- Stress trend: {results.adaptive.stress_trend.value}",
            f"- Burnout risk: {'yes' if results.adaptive.burnout_risk else 'no'}",
        ]

    lines += ["", "Write the coaching summary now."]
    return "\n".join(lines)
