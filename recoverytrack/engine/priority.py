from recoverytrack.kb import (
    BACKLOG_HIGH_THRESHOLD,
    PRIORITY_EXPLANATIONS,
    TIER_BANDS,
    URGENCY_HIGH_THRESHOLD,
)
from recoverytrack.models.enums import PriorityTier
from recoverytrack.models.subject import Subject


def tier_for_percentile(percentile: float) -> PriorityTier:
    for band in TIER_BANDS:
        if percentile < band.upper_percentile:
            return band.tier
    return PriorityTier.LOW


def explain_priority(subject: Subject, tier: PriorityTier) -> str:
    urgency_high = (subject.urgency_score or 0.0) >= URGENCY_HIGH_THRESHOLD
    backlog_high = subject.backlog_chapters >= BACKLOG_HIGH_THRESHOLD
    return PRIORITY_EXPLANATIONS[(tier, urgency_high, backlog_high)]


def prioritize(subjects: list[Subject]) -> list[Subject]:
    """Rank subjects by pressure score, descending. Ties keep insertion order."""
    ordered = sorted(subjects, key=lambda s: s.pressure_score or 0.0, reverse=True)
    count = len(ordered)
    results: list[Subject] = []
    for i, sub in enumerate(ordered):
        tier = tier_for_percentile(i / count)
        results.append(
            sub.model_copy(
                update={
                    "priority_rank": i + 1,
                    "priority_tier": tier,
                    "priority_explanation": explain_priority(sub, tier),
                }
            )
        )
    return results
