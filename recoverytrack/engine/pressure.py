from recoverytrack.kb import (
    DIFFICULTY_WEIGHTS,
    LOW_URGENCY_SCORE,
    PACE_MULTIPLIERS,
    PRESSURE_BANDS,
    PRESSURE_FLOOR,
    STRESS_MULTIPLIERS,
)
from recoverytrack.models.enums import PressureCategory
from recoverytrack.models.subject import StudentProfile, Subject


def compute_pressure_score(subject: Subject, profile: StudentProfile) -> float:
    """pressure = max(1, round(chapters * difficulty * urgency * stress * pace, 2))."""
    urgency = subject.urgency_score if subject.urgency_score is not None else LOW_URGENCY_SCORE
    backlog_weight = subject.backlog_chapters * DIFFICULTY_WEIGHTS[subject.difficulty]
    base = backlog_weight * urgency
    adjusted = base * STRESS_MULTIPLIERS[profile.stress_level] * PACE_MULTIPLIERS[profile.learning_pace]
    return max(PRESSURE_FLOOR, round(adjusted, 2))


def categorize_percentile(percentile: float) -> PressureCategory:
    for band in PRESSURE_BANDS:
        if percentile < band.upper_percentile:
            return band.category
    return PressureCategory.LOW


def compute_pressure(subjects: list[Subject], profile: StudentProfile) -> list[Subject]:
    """Score every subject, then bucket by rank relative to the whole set.

    Categories are relative: adding or removing a subject can move another
    subject's category even when its own score is unchanged. Output keeps
    input order.
    """
    scored = [
        sub.model_copy(update={"pressure_score": compute_pressure_score(sub, profile)})
        for sub in subjects
    ]
    if not scored:
        return scored

    count = len(scored)
    order = sorted(range(count), key=lambda i: scored[i].pressure_score, reverse=True)
    categories: dict[int, PressureCategory] = {}
    for rank, idx in enumerate(order):
        categories[idx] = categorize_percentile(rank / count)

    return [
        sub.model_copy(update={"pressure_category": categories[i]})
        for i, sub in enumerate(scored)
    ]
