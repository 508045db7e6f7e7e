import logging
import math
from datetime import date, timedelta

from recoverytrack.kb import (
    BUFFER_TITLE,
    DAY_RHYTHM,
    DEEP_WORK_SHARE,
    EFFECTIVE_VELOCITY,
    HOURS_PER_CHAPTER,
    LOW_TIER_SESSIONS,
    MIN_BUFFER_MINUTES,
    MIN_SESSION_MINUTES,
    MIN_SESSIONS_PER_WEEK,
    PLAN_DAYS,
    PRACTICE_THRESHOLD_MINUTES,
    SESSION_DAY_INDICES,
    SPLIT_THRESHOLD_MINUTES,
    TIER_BANDS,
)
from recoverytrack.models.enums import PriorityTier, StressLevel, TaskType
from recoverytrack.models.plan import DayPlan, PlanTask, WeeklyPlan
from recoverytrack.models.subject import StudentProfile, Subject

logger = logging.getLogger(__name__)

_TIER_SESSIONS = {band.tier: band.sessions_per_week for band in TIER_BANDS}


def sessions_per_week(tier: PriorityTier | None, stress: StressLevel) -> int:
    """Session frequency from priority tier, one fewer under high stress (min 3)."""
    freq = _TIER_SESSIONS.get(tier, LOW_TIER_SESSIONS)
    if stress == StressLevel.HIGH:
        freq = max(MIN_SESSIONS_PER_WEEK, freq - 1)
    return freq


def day_capacity_minutes(daily_hours: float, multiplier: float) -> int:
    return int(round(daily_hours * multiplier * 60))


def split_session(minutes: int) -> list[tuple[TaskType, int]]:
    """Long sessions become Deep Work + Revision; short ones a single block."""
    if minutes > SPLIT_THRESHOLD_MINUTES:
        deep = int(math.floor(minutes * DEEP_WORK_SHARE))
        return [(TaskType.DEEP_WORK, deep), (TaskType.REVISION, minutes - deep)]
    if minutes < PRACTICE_THRESHOLD_MINUTES:
        return [(TaskType.PRACTICE, minutes)]
    return [(TaskType.DEEP_WORK, minutes)]


def _empty_days(start: date, daily_hours: float) -> list[DayPlan]:
    days: list[DayPlan] = []
    for i in range(PLAN_DAYS):
        d = start + timedelta(days=i)
        rhythm = DAY_RHYTHM[d.weekday()]
        days.append(
            DayPlan(
                day_id=f"day-{i + 1}",
                date=d,
                day_name=d.strftime("%A"),
                intensity=rhythm.intensity,
                intensity_multiplier=rhythm.multiplier,
                capacity_minutes=day_capacity_minutes(daily_hours, rhythm.multiplier),
            )
        )
    return days


def estimate_recovery_days(subjects: list[Subject], days: list[DayPlan]) -> int | None:
    """Rough forecast: backlog hours at 60% of the scheduled weekly pace."""
    backlog_hours = sum(s.backlog_chapters for s in subjects) * HOURS_PER_CHAPTER
    weekly_hours = sum(d.study_minutes for d in days) / 60
    per_day = weekly_hours * EFFECTIVE_VELOCITY / PLAN_DAYS
    if per_day <= 0:
        return None
    return math.ceil(backlog_hours / per_day)


def generate_weekly_plan(
    subjects: list[Subject],
    profile: StudentProfile,
    today: date,
) -> WeeklyPlan:
    """Expand allocated hours into a 7-day schedule starting tomorrow.

    Subjects are placed in priority order, so lower-ranked subjects see
    whatever capacity is left on each day. Sessions past a subject's
    deadline, or shorter than 15 minutes after capping, are skipped.
    Each day then gets a trailing Buffer block for leftover time.
    """
    start = today + timedelta(days=1)
    days = _empty_days(start, profile.daily_hours)
    used = [0] * PLAN_DAYS
    seq = [0] * PLAN_DAYS

    ordered = sorted(
        subjects,
        key=lambda s: s.priority_rank if s.priority_rank is not None else len(subjects) + 1,
    )

    for sub in ordered:
        hours = sub.allocated_hours or 0.0
        if hours <= 0:
            continue
        freq = sessions_per_week(sub.priority_tier, profile.stress_level)
        session_minutes = int(math.floor(hours * 7 * 60 / freq))

        for idx in SESSION_DAY_INDICES[freq]:
            day = days[idx]
            if sub.deadline is not None and day.date > sub.deadline:
                continue
            remaining = day.capacity_minutes - used[idx]
            if remaining < MIN_SESSION_MINUTES:
                continue
            duration = min(session_minutes, remaining)
            if duration < MIN_SESSION_MINUTES:
                continue

            for task_type, minutes in split_session(duration):
                seq[idx] += 1
                day.tasks.append(
                    PlanTask(
                        task_id=f"{day.day_id}-task-{seq[idx]}",
                        subject_id=sub.subject_id,
                        subject_name=sub.name,
                        title=f"{task_type.value}: {sub.name}",
                        task_type=task_type,
                        duration_minutes=minutes,
                    )
                )
            used[idx] += duration

    for idx, day in enumerate(days):
        leftover = day.capacity_minutes - used[idx]
        if leftover > MIN_BUFFER_MINUTES:
            seq[idx] += 1
            day.tasks.append(
                PlanTask(
                    task_id=f"{day.day_id}-task-{seq[idx]}",
                    title=BUFFER_TITLE,
                    task_type=TaskType.BUFFER,
                    duration_minutes=leftover,
                )
            )
            day.buffer_minutes = leftover
        day.total_minutes = used[idx] + day.buffer_minutes

    plan = WeeklyPlan(
        reference_date=today,
        start_date=start,
        days=days,
        estimated_recovery_days=estimate_recovery_days(subjects, days),
    )
    logger.info(
        "Weekly plan from %s: %d study tasks, %d buffer minutes",
        start.isoformat(),
        len(plan.study_tasks()),
        sum(d.buffer_minutes for d in days),
    )
    return plan
