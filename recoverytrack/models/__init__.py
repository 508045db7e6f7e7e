from recoverytrack.models.enums import (
    DayIntensity,
    Difficulty,
    LearningPace,
    PressureCategory,
    PriorityTier,
    RecoveryCategory,
    StressLevel,
    StressTrend,
    TaskStatus,
    TaskType,
    UrgencyLabel,
)
from recoverytrack.models.kb import (
    DayRhythm,
    PressureBand,
    RecoveryBand,
    TierBand,
    UrgencyBand,
)
from recoverytrack.models.subject import (
    History,
    StudentProfile,
    Subject,
)
from recoverytrack.models.plan import (
    AdaptiveMetrics,
    AllocationMetrics,
    DayPlan,
    DeadlineSummary,
    PlanTask,
    RecoveryMetrics,
    RecoveryResults,
    ValidationResult,
    ValidationViolation,
    WeeklyPlan,
)
from recoverytrack.models.session import Session
