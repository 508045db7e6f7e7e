"""Fixed heuristic tables for the recovery planning engine."""

from recoverytrack.models.enums import (
    DayIntensity,
    Difficulty,
    LearningPace,
    PressureCategory,
    PriorityTier,
    RecoveryCategory,
    StressLevel,
    UrgencyLabel,
)
from recoverytrack.models.kb import (
    DayRhythm,
    PressureBand,
    RecoveryBand,
    TierBand,
    UrgencyBand,
)

# ── Urgency ──────────────────────────────────────────────────────────

DEFAULT_DAYS_REMAINING = 30

URGENCY_BANDS: list[UrgencyBand] = [
    UrgencyBand(max_days=3, label=UrgencyLabel.CRITICAL, score=1.0),
    UrgencyBand(max_days=7, label=UrgencyLabel.HIGH, score=0.8),
    UrgencyBand(max_days=14, label=UrgencyLabel.MODERATE, score=0.5),
]
LOW_URGENCY_SCORE = 0.2

# ── Pressure ─────────────────────────────────────────────────────────

DIFFICULTY_WEIGHTS: dict[Difficulty, float] = {
    Difficulty.LOW: 1.0,
    Difficulty.MODERATE: 1.5,
    Difficulty.HIGH: 2.0,
}

STRESS_MULTIPLIERS: dict[StressLevel, float] = {
    StressLevel.LOW: 0.9,
    StressLevel.MODERATE: 1.0,
    StressLevel.HIGH: 1.2,
}

# Slower pace perceives more effort per chapter
PACE_MULTIPLIERS: dict[LearningPace, float] = {
    LearningPace.SLOW: 1.2,
    LearningPace.MODERATE: 1.0,
    LearningPace.FAST: 0.85,
}

PRESSURE_FLOOR = 1.0

PRESSURE_BANDS: list[PressureBand] = [
    PressureBand(upper_percentile=0.25, category=PressureCategory.CRITICAL),
    PressureBand(upper_percentile=0.50, category=PressureCategory.HIGH),
    PressureBand(upper_percentile=0.75, category=PressureCategory.MODERATE),
]

# ── Recovery difficulty ──────────────────────────────────────────────

RECOVERY_BANDS: list[RecoveryBand] = [
    RecoveryBand(
        min_score=80,
        category=RecoveryCategory.CRITICAL,
        message="Backlog far exceeds weekly capacity. Cut scope, protect sleep and focus only on what is due first.",
    ),
    RecoveryBand(
        min_score=60,
        category=RecoveryCategory.HIGH,
        message="Heavy recovery ahead. Stick to the plan daily and use buffer time to catch up, not to get ahead.",
    ),
    RecoveryBand(
        min_score=30,
        category=RecoveryCategory.MODERATE,
        message="Recoverable with steady effort. Keep sessions consistent and review progress mid-week.",
    ),
]
LOW_RECOVERY_MESSAGE = "Backlog is well within capacity. Maintain the rhythm and bank extra revision time."

# ── Priority ─────────────────────────────────────────────────────────

TIER_BANDS: list[TierBand] = [
    TierBand(upper_percentile=0.30, tier=PriorityTier.CRITICAL, sessions_per_week=6),
    TierBand(upper_percentile=0.60, tier=PriorityTier.HIGH, sessions_per_week=5),
    TierBand(upper_percentile=0.85, tier=PriorityTier.MEDIUM, sessions_per_week=4),
]
LOW_TIER_SESSIONS = 3

URGENCY_HIGH_THRESHOLD = 0.8
BACKLOG_HIGH_THRESHOLD = 8

# (tier, urgency_high, backlog_high) -> rationale
PRIORITY_EXPLANATIONS: dict[tuple[PriorityTier, bool, bool], str] = {
    (PriorityTier.CRITICAL, True, True): "Deadline is close and the backlog is large. Start every day here.",
    (PriorityTier.CRITICAL, True, False): "Deadline is close. Clear the remaining chapters before anything else.",
    (PriorityTier.CRITICAL, False, True): "Backlog size dominates your load. Chip away daily before it compounds.",
    (PriorityTier.CRITICAL, False, False): "Highest relative pressure in your set. Keep it at the front of each day.",
    (PriorityTier.HIGH, True, True): "Urgent with a heavy backlog. Give it long, focused blocks.",
    (PriorityTier.HIGH, True, False): "Deadline is approaching. Schedule it right after your top subject.",
    (PriorityTier.HIGH, False, True): "Large backlog with some breathing room. Steady daily progress is enough.",
    (PriorityTier.HIGH, False, False): "Significant pressure. Keep it in rotation most days.",
    (PriorityTier.MEDIUM, True, True): "Deadline is near but other subjects weigh more. Do not let it slip.",
    (PriorityTier.MEDIUM, True, False): "Short deadline, small backlog. A few focused sessions will close it out.",
    (PriorityTier.MEDIUM, False, True): "Plenty of chapters left but time to cover them. Pace it through the week.",
    (PriorityTier.MEDIUM, False, False): "Moderate pressure. Regular sessions keep it under control.",
    (PriorityTier.LOW, True, True): "Lower relative pressure despite the deadline. Watch it as other subjects clear.",
    (PriorityTier.LOW, True, False): "Small and due soon. Quick practice sessions should be enough.",
    (PriorityTier.LOW, False, True): "Large but not pressing. Light touch this week, ramp up later.",
    (PriorityTier.LOW, False, False): "Lowest pressure. Maintain with light practice.",
}

# ── Allocation ───────────────────────────────────────────────────────

HIGH_STRESS_BUFFER_RATE = 0.15
DEFAULT_BUFFER_RATE = 0.10

MIN_HOURS_PER_SUBJECT: dict[LearningPace, float] = {
    LearningPace.FAST: 0.25,
    LearningPace.MODERATE: 0.5,
    LearningPace.SLOW: 0.75,
}

MAX_SHARE_PER_SUBJECT = 0.5
BALANCE_SHARE_LIMIT = 0.4
ALLOCATION_STEP_HOURS = 0.25

# ── Weekly rhythm ────────────────────────────────────────────────────

DAY_RHYTHM: dict[int, DayRhythm] = {
    0: DayRhythm(weekday=0, intensity=DayIntensity.MODERATE, multiplier=1.0),
    1: DayRhythm(weekday=1, intensity=DayIntensity.MODERATE, multiplier=1.0),
    2: DayRhythm(weekday=2, intensity=DayIntensity.HIGH, multiplier=1.1),
    3: DayRhythm(weekday=3, intensity=DayIntensity.HIGH, multiplier=1.1),
    4: DayRhythm(weekday=4, intensity=DayIntensity.MODERATE, multiplier=1.0),
    5: DayRhythm(weekday=5, intensity=DayIntensity.LIGHT, multiplier=0.7),
    6: DayRhythm(weekday=6, intensity=DayIntensity.RECOVERY, multiplier=0.5),
}

PLAN_DAYS = 7
MIN_SESSIONS_PER_WEEK = 3

# sessions per week -> plan day indices
SESSION_DAY_INDICES: dict[int, list[int]] = {
    3: [0, 2, 4],
    4: [0, 1, 3, 5],
    5: [0, 1, 2, 4, 5],
    6: [0, 1, 2, 3, 4, 5],
    7: [0, 1, 2, 3, 4, 5, 6],
}

MIN_SESSION_MINUTES = 15
SPLIT_THRESHOLD_MINUTES = 90
DEEP_WORK_SHARE = 0.6
PRACTICE_THRESHOLD_MINUTES = 40
MIN_BUFFER_MINUTES = 20
BUFFER_TITLE = "Catch-up / flexible time"

# ── Forecasting and adaptation ───────────────────────────────────────

HOURS_PER_CHAPTER = 1.5
EFFECTIVE_VELOCITY = 0.6
ZERO_COMPLETION_CAPACITY_FACTOR = 0.8

STRESS_NUMERIC: dict[StressLevel, int] = {
    StressLevel.LOW: 1,
    StressLevel.MODERATE: 2,
    StressLevel.HIGH: 3,
}

BURNOUT_COMPLETION_THRESHOLD = 50.0
BURNOUT_DIFFICULTY_THRESHOLD = 70
HIGH_COMPLETION_THRESHOLD = 90.0
LOW_COMPLETION_THRESHOLD = 60.0

LOAD_FACTOR_BURNOUT = 0.85
LOAD_FACTOR_LOW_COMPLETION = 0.90
LOAD_FACTOR_HIGH_COMPLETION = 1.05
LOAD_FACTOR_REBALANCED = 0.95

RESCHEDULED_PREFIX = "(Rescheduled)"
