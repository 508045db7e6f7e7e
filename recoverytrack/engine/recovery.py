import math

from recoverytrack.kb import LOW_RECOVERY_MESSAGE, RECOVERY_BANDS
from recoverytrack.models.enums import RecoveryCategory
from recoverytrack.models.plan import RecoveryMetrics
from recoverytrack.models.subject import StudentProfile, Subject


def compute_difficulty_score(load_ratio: float) -> int:
    """Half-up rounded load ratio × 50, capped at 100."""
    return min(int(math.floor(load_ratio * 50 + 0.5)), 100)


def classify_recovery(score: int) -> tuple[RecoveryCategory, str]:
    for band in RECOVERY_BANDS:
        if score > band.min_score:
            return band.category, band.message
    return RecoveryCategory.LOW, LOW_RECOVERY_MESSAGE


def compute_recovery_metrics(subjects: list[Subject], profile: StudentProfile) -> RecoveryMetrics:
    """Reduce all pressure scores and weekly capacity to one 0-100 index.

    Callers must not pass an empty subject set.
    """
    total_pressure = round(sum(s.pressure_score or 0.0 for s in subjects), 2)
    weekly_capacity = profile.daily_hours * 7
    load_ratio = total_pressure / weekly_capacity
    score = compute_difficulty_score(load_ratio)
    category, message = classify_recovery(score)
    return RecoveryMetrics(
        total_pressure=total_pressure,
        weekly_capacity=weekly_capacity,
        load_ratio=round(load_ratio, 4),
        difficulty_score=score,
        category=category,
        message=message,
    )
