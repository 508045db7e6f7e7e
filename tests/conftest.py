from datetime import date, timedelta

import pytest

from recoverytrack.models.enums import (
    DayIntensity,
    Difficulty,
    LearningPace,
    StressLevel,
    TaskStatus,
    TaskType,
)
from recoverytrack.models.plan import DayPlan, PlanTask, WeeklyPlan
from recoverytrack.models.subject import History, StudentProfile, Subject

# Sunday; plans start on Monday 2026-03-02
TODAY = date(2026, 3, 1)


# ── Dates ────────────────────────────────────────────────────────────


@pytest.fixture
def today() -> date:
    return TODAY


# ── Profiles ─────────────────────────────────────────────────────────


@pytest.fixture
def moderate_profile() -> StudentProfile:
    return StudentProfile(
        daily_hours=4,
        learning_pace=LearningPace.MODERATE,
        stress_level=StressLevel.MODERATE,
    )


@pytest.fixture
def stressed_profile() -> StudentProfile:
    return StudentProfile(
        daily_hours=4,
        learning_pace=LearningPace.FAST,
        stress_level=StressLevel.HIGH,
    )


@pytest.fixture
def empty_history() -> History:
    return History()


# ── Subjects ─────────────────────────────────────────────────────────


@pytest.fixture
def backlog_subjects() -> list[Subject]:
    """Three subjects due in 3, 7 and 30 days."""
    return [
        Subject(
            subject_id="chem",
            name="Organic Chemistry",
            backlog_chapters=10,
            difficulty=Difficulty.HIGH,
            deadline=TODAY + timedelta(days=3),
        ),
        Subject(
            subject_id="algebra",
            name="Linear Algebra",
            backlog_chapters=6,
            difficulty=Difficulty.MODERATE,
            deadline=TODAY + timedelta(days=7),
        ),
        Subject(
            subject_id="history",
            name="World History",
            backlog_chapters=4,
            difficulty=Difficulty.LOW,
            deadline=TODAY + timedelta(days=30),
        ),
    ]


# ── Helpers to build plans ───────────────────────────────────────────


def make_subject(
    name: str = "Physics",
    chapters: int = 5,
    difficulty: Difficulty = Difficulty.MODERATE,
    deadline: date | None = None,
    **derived,
) -> Subject:
    return Subject(
        subject_id=name.lower().replace(" ", "-"),
        name=name,
        backlog_chapters=chapters,
        difficulty=difficulty,
        deadline=deadline,
        **derived,
    )


def make_task(
    task_id: str,
    subject: str | None = "Physics",
    minutes: int = 60,
    task_type: TaskType = TaskType.DEEP_WORK,
    status: TaskStatus = TaskStatus.PENDING,
) -> PlanTask:
    title = f"{task_type.value}: {subject}" if subject else "Catch-up / flexible time"
    return PlanTask(
        task_id=task_id,
        subject_id=subject.lower() if subject else None,
        subject_name=subject,
        title=title,
        task_type=task_type,
        duration_minutes=minutes,
        status=status,
    )


def make_buffer(task_id: str, minutes: int = 30) -> PlanTask:
    return make_task(task_id, subject=None, minutes=minutes, task_type=TaskType.BUFFER)


def make_day(index: int, tasks: list[PlanTask], capacity: int = 240) -> DayPlan:
    d = TODAY + timedelta(days=index + 1)
    return DayPlan(
        day_id=f"day-{index + 1}",
        date=d,
        day_name=d.strftime("%A"),
        intensity=DayIntensity.MODERATE,
        intensity_multiplier=1.0,
        capacity_minutes=capacity,
        tasks=tasks,
        total_minutes=sum(t.duration_minutes for t in tasks),
        buffer_minutes=sum(t.duration_minutes for t in tasks if t.task_type == TaskType.BUFFER),
    )


def make_plan(days: list[DayPlan]) -> WeeklyPlan:
    return WeeklyPlan(
        reference_date=TODAY,
        start_date=TODAY + timedelta(days=1),
        days=days,
    )
