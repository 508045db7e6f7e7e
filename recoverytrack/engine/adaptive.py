import logging
import math
from collections import Counter
from datetime import date, timedelta

from recoverytrack.engine.recovery import compute_recovery_metrics
from recoverytrack.exceptions import TaskNotFoundError
from recoverytrack.kb import (
    BURNOUT_COMPLETION_THRESHOLD,
    BURNOUT_DIFFICULTY_THRESHOLD,
    HIGH_COMPLETION_THRESHOLD,
    HOURS_PER_CHAPTER,
    LOAD_FACTOR_BURNOUT,
    LOAD_FACTOR_HIGH_COMPLETION,
    LOAD_FACTOR_LOW_COMPLETION,
    LOW_COMPLETION_THRESHOLD,
    RESCHEDULED_PREFIX,
    STRESS_NUMERIC,
    ZERO_COMPLETION_CAPACITY_FACTOR,
)
from recoverytrack.models.enums import StressLevel, StressTrend, TaskStatus
from recoverytrack.models.plan import AdaptiveMetrics, PlanTask, WeeklyPlan
from recoverytrack.models.subject import History, StudentProfile, Subject

logger = logging.getLogger(__name__)

NEXT_STATUS: dict[TaskStatus, TaskStatus] = {
    TaskStatus.PENDING: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.MISSED,
    TaskStatus.MISSED: TaskStatus.PARTIALLY_COMPLETED,
    TaskStatus.PARTIALLY_COMPLETED: TaskStatus.PENDING,
}

_STRUGGLE_STATUSES = {TaskStatus.MISSED, TaskStatus.PARTIALLY_COMPLETED}


def _has_missed(plan: WeeklyPlan) -> bool:
    return any(
        t.status == TaskStatus.MISSED and not t.is_buffer
        for d in plan.days
        for t in d.tasks
    )


def toggle_task_status(plan: WeeklyPlan, day_id: str, task_id: str) -> WeeklyPlan:
    """Advance one task through Pending → Completed → Missed → Partial → Pending.

    Buffer blocks are not tracked; toggling one leaves the plan unchanged.
    """
    updated = plan.model_copy(deep=True)
    for day in updated.days:
        if day.day_id != day_id:
            continue
        for task in day.tasks:
            if task.task_id == task_id:
                if task.is_buffer:
                    logger.debug("Ignoring status toggle on buffer %s", task_id)
                    return updated
                task.status = NEXT_STATUS[task.status]
                updated.rebalance_available = _has_missed(updated)
                return updated
    raise TaskNotFoundError(day_id, task_id)


def _completion_percent(plan: WeeklyPlan) -> float:
    tasks = plan.study_tasks()
    if not tasks:
        return 0.0
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    return completed / len(tasks) * 100


def compute_completion_rate(plan: WeeklyPlan) -> float:
    return round(_completion_percent(plan), 1)


def compute_stress_trend(current: StressLevel, history: History) -> StressTrend:
    if not history.stress_levels:
        return StressTrend.STABLE
    now = STRESS_NUMERIC[current]
    before = STRESS_NUMERIC[history.stress_levels[-1]]
    if now > before:
        return StressTrend.INCREASING
    if now < before:
        return StressTrend.DECREASING
    return StressTrend.STABLE


def compute_load_factor(completion_rate: float, burnout_risk: bool) -> float:
    """Burnout overrides the completion-rate rule."""
    if burnout_risk:
        return LOAD_FACTOR_BURNOUT
    if completion_rate > HIGH_COMPLETION_THRESHOLD:
        return LOAD_FACTOR_HIGH_COMPLETION
    if completion_rate < LOW_COMPLETION_THRESHOLD:
        return LOAD_FACTOR_LOW_COMPLETION
    return 1.0


def project_recovery_date(
    plan: WeeklyPlan,
    subjects: list[Subject],
    profile: StudentProfile,
    completion_rate: float,
    today: date,
) -> date:
    """Remaining backlog hours at the observed completion pace.

    Completed study time converts to chapters at 1.5 h/chapter. A zero
    completion rate assumes 80% of daily capacity.
    """
    completed_hours = sum(
        t.duration_minutes for t in plan.study_tasks() if t.status == TaskStatus.COMPLETED
    ) / 60
    total_chapters = sum(s.backlog_chapters for s in subjects)
    remaining_chapters = max(0.0, total_chapters - completed_hours / HOURS_PER_CHAPTER)
    remaining_hours = remaining_chapters * HOURS_PER_CHAPTER

    rate = completion_rate / 100 if completion_rate > 0 else ZERO_COMPLETION_CAPACITY_FACTOR
    capacity = profile.daily_hours * rate
    return today + timedelta(days=math.ceil(remaining_hours / capacity))


def find_most_challenging(plan: WeeklyPlan, subjects: list[Subject]) -> str | None:
    """Subject with the most missed or partial tasks, else the highest pressure."""
    struggles = Counter(
        t.subject_name
        for t in plan.study_tasks()
        if t.status in _STRUGGLE_STATUSES and t.subject_name
    )
    if struggles:
        return struggles.most_common(1)[0][0]
    if not subjects:
        return None
    return max(subjects, key=lambda s: s.pressure_score or 0.0).name


def compute_adaptive_metrics(
    plan: WeeklyPlan,
    subjects: list[Subject],
    profile: StudentProfile,
    history: History,
    today: date | None = None,
) -> AdaptiveMetrics:
    """Recompute all adaptive signals from the current plan state.

    `history` holds the previous cycles' completion rates and stress
    levels; `today` defaults to the plan's reference date. Thresholds see
    the unrounded completion rate; only the reported value is rounded.
    """
    if today is None:
        today = plan.reference_date

    percent = _completion_percent(plan)
    difficulty = compute_recovery_metrics(subjects, profile).difficulty_score if subjects else 0
    burnout_risk = (
        profile.stress_level == StressLevel.HIGH
        and percent < BURNOUT_COMPLETION_THRESHOLD
        and difficulty > BURNOUT_DIFFICULTY_THRESHOLD
    )

    return AdaptiveMetrics(
        completion_rate=round(percent, 1),
        stress_trend=compute_stress_trend(profile.stress_level, history),
        burnout_risk=burnout_risk,
        projected_recovery_date=project_recovery_date(
            plan, subjects, profile, percent, today
        ),
        load_adjustment_factor=compute_load_factor(percent, burnout_risk),
        most_challenging_subject=find_most_challenging(plan, subjects),
    )


def _reschedule(task: PlanTask) -> PlanTask:
    return PlanTask(
        subject_id=task.subject_id,
        subject_name=task.subject_name,
        title=f"{RESCHEDULED_PREFIX} {task.title}",
        task_type=task.task_type,
        duration_minutes=task.duration_minutes,
    )


def rebalance(plan: WeeklyPlan) -> WeeklyPlan:
    """Move every missed task into later days as a fresh pending copy.

    Originals are lifted into `archived_missed` and stay Missed. Copies are
    placed round robin from the second day onwards, ahead of the day's
    buffer block. Target day capacity is not re-checked, so a day can end
    up over its nominal capacity.
    """
    updated = plan.model_copy(deep=True)
    missed: list[PlanTask] = []
    for day in updated.days:
        kept = []
        for task in day.tasks:
            if task.status == TaskStatus.MISSED and not task.is_buffer:
                missed.append(task)
                day.total_minutes -= task.duration_minutes
            else:
                kept.append(task)
        day.tasks = kept

    targets = list(range(1, len(updated.days))) or [0]
    for i, task in enumerate(missed):
        day = updated.days[targets[i % len(targets)]]
        clone = _reschedule(task)
        if day.tasks and day.tasks[-1].is_buffer:
            day.tasks.insert(len(day.tasks) - 1, clone)
        else:
            day.tasks.append(clone)
        day.total_minutes += clone.duration_minutes

    updated.archived_missed.extend(missed)
    updated.rebalance_available = False
    logger.info("Rebalanced %d missed tasks", len(missed))
    return updated
