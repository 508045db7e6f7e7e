from enum import Enum


class Difficulty(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class StressLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class LearningPace(str, Enum):
    SLOW = "Slow"
    MODERATE = "Moderate"
    FAST = "Fast"


class UrgencyLabel(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class PressureCategory(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class RecoveryCategory(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class PriorityTier(str, Enum):
    CRITICAL = "Critical Priority"
    HIGH = "High Priority"
    MEDIUM = "Medium Priority"
    LOW = "Low Priority"


class DayIntensity(str, Enum):
    RECOVERY = "Recovery"
    LIGHT = "Light"
    MODERATE = "Moderate"
    HIGH = "High"


class TaskType(str, Enum):
    DEEP_WORK = "Deep Work"
    REVISION = "Revision"
    PRACTICE = "Practice"
    BUFFER = "Buffer"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    MISSED = "Missed"
    PARTIALLY_COMPLETED = "Partially Completed"


class StressTrend(str, Enum):
    INCREASING = "Increasing"
    STABLE = "Stable"
    DECREASING = "Decreasing"
