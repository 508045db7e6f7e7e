from datetime import date
from uuid import uuid4

from pydantic import BaseModel, Field

from recoverytrack.models.enums import (
    Difficulty,
    LearningPace,
    PressureCategory,
    PriorityTier,
    StressLevel,
    UrgencyLabel,
)


class Subject(BaseModel):
    subject_id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    backlog_chapters: int = Field(ge=1)
    difficulty: Difficulty = Difficulty.MODERATE
    deadline: date | None = None

    # Derived by the pipeline, never user-supplied
    days_remaining: int | None = None
    urgency_score: float | None = None
    urgency_label: UrgencyLabel | None = None
    pressure_score: float | None = None
    pressure_category: PressureCategory | None = None
    priority_rank: int | None = None
    priority_tier: PriorityTier | None = None
    priority_explanation: str | None = None
    allocated_hours: float | None = None
    allocation_percentage: int | None = None


class StudentProfile(BaseModel):
    daily_hours: float = Field(default=4.0, ge=1, le=24)
    learning_pace: LearningPace = LearningPace.MODERATE
    stress_level: StressLevel = StressLevel.MODERATE


class History(BaseModel):
    """Completion-rate and stress-level sequences across planning cycles."""

    completion_rates: list[float] = Field(default_factory=list)
    stress_levels: list[StressLevel] = Field(default_factory=list)
