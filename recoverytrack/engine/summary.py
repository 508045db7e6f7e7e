import math

from recoverytrack.models.plan import DeadlineSummary
from recoverytrack.models.subject import Subject

DUE_SOON_DAYS = 7


def summarize_deadlines(subjects: list[Subject]) -> DeadlineSummary | None:
    """Most urgent subject, average days left, and how many are due within a week.

    Expects urgency-annotated subjects. Returns None for an empty set.
    """
    if not subjects:
        return None
    days = [s.days_remaining or 0 for s in subjects]
    most_urgent = min(subjects, key=lambda s: s.days_remaining or 0)
    return DeadlineSummary(
        most_urgent=most_urgent.name,
        most_urgent_days=most_urgent.days_remaining or 0,
        average_days=int(math.floor(sum(days) / len(days) + 0.5)),
        due_within_week=sum(1 for d in days if d <= DUE_SOON_DAYS),
    )
