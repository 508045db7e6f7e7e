from datetime import date
from uuid import uuid4

from pydantic import BaseModel, Field

from recoverytrack.models.enums import (
    DayIntensity,
    RecoveryCategory,
    StressTrend,
    TaskStatus,
    TaskType,
)
from recoverytrack.models.subject import StudentProfile, Subject


class PlanTask(BaseModel):
    task_id: str = Field(default_factory=lambda: str(uuid4()))
    subject_id: str | None = None  # None for buffer blocks
    subject_name: str | None = None
    title: str
    task_type: TaskType
    duration_minutes: int = Field(gt=0)
    status: TaskStatus = TaskStatus.PENDING

    @property
    def is_buffer(self) -> bool:
        return self.task_type == TaskType.BUFFER


class DayPlan(BaseModel):
    day_id: str
    date: date
    day_name: str
    intensity: DayIntensity
    intensity_multiplier: float = Field(gt=0)
    capacity_minutes: int = Field(ge=0)
    tasks: list[PlanTask] = Field(default_factory=list)
    total_minutes: int = 0
    buffer_minutes: int = 0

    @property
    def study_minutes(self) -> int:
        return sum(t.duration_minutes for t in self.tasks if not t.is_buffer)


class WeeklyPlan(BaseModel):
    reference_date: date  # the "today" the plan was generated for
    start_date: date
    days: list[DayPlan] = Field(default_factory=list)
    estimated_recovery_days: int | None = None
    rebalance_available: bool = False
    archived_missed: list[PlanTask] = Field(default_factory=list)

    def study_tasks(self) -> list[PlanTask]:
        """All non-buffer tasks, including missed tasks lifted out by rebalance."""
        tasks = [t for d in self.days for t in d.tasks if not t.is_buffer]
        return tasks + [t for t in self.archived_missed if not t.is_buffer]


class RecoveryMetrics(BaseModel):
    total_pressure: float
    weekly_capacity: float
    load_ratio: float
    difficulty_score: int = Field(ge=0, le=100)
    category: RecoveryCategory
    message: str


class AllocationMetrics(BaseModel):
    adjusted_capacity: float
    load_factor: float
    total_allocated: float
    buffer_time: float
    remaining_time: float
    most_time_heavy: str | None = None
    is_balanced: bool = True


class AdaptiveMetrics(BaseModel):
    completion_rate: float = Field(ge=0, le=100)
    stress_trend: StressTrend = StressTrend.STABLE
    burnout_risk: bool = False
    projected_recovery_date: date | None = None
    load_adjustment_factor: float = Field(default=1.0, ge=0.85, le=1.05)
    most_challenging_subject: str | None = None


class DeadlineSummary(BaseModel):
    most_urgent: str
    most_urgent_days: int
    average_days: int
    due_within_week: int


class ValidationViolation(BaseModel):
    rule_id: str
    message: str
    subject_id: str | None = None


class ValidationResult(BaseModel):
    valid: bool
    violations: list[ValidationViolation] = Field(default_factory=list)


class RecoveryResults(BaseModel):
    subjects: list[Subject]  # in priority order
    profile: StudentProfile  # snapshot the plan was built for
    recovery: RecoveryMetrics
    allocation: AllocationMetrics
    plan: WeeklyPlan
    adaptive: AdaptiveMetrics | None = None
    deadlines: DeadlineSummary | None = None
    narrative: str = ""
