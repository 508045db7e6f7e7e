from datetime import date

from recoverytrack.kb import DEFAULT_DAYS_REMAINING, LOW_URGENCY_SCORE, URGENCY_BANDS
from recoverytrack.models.enums import UrgencyLabel
from recoverytrack.models.subject import Subject


def compute_days_remaining(deadline: date | None, today: date) -> int:
    """Whole days until the deadline, floored at 0. None → 30."""
    if deadline is None:
        return DEFAULT_DAYS_REMAINING
    return max(0, (deadline - today).days)


def classify_urgency(days_remaining: int) -> tuple[UrgencyLabel, float]:
    for band in URGENCY_BANDS:
        if days_remaining <= band.max_days:
            return band.label, band.score
    return UrgencyLabel.LOW, LOW_URGENCY_SCORE


def compute_urgency(subjects: list[Subject], today: date) -> list[Subject]:
    """Annotate each subject with days remaining and urgency label/score."""
    results: list[Subject] = []
    for sub in subjects:
        days = compute_days_remaining(sub.deadline, today)
        label, score = classify_urgency(days)
        results.append(
            sub.model_copy(
                update={
                    "days_remaining": days,
                    "urgency_label": label,
                    "urgency_score": score,
                }
            )
        )
    return results
