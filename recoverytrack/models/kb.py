from pydantic import BaseModel, Field

from recoverytrack.models.enums import (
    DayIntensity,
    PressureCategory,
    PriorityTier,
    RecoveryCategory,
    UrgencyLabel,
)


class UrgencyBand(BaseModel):
    max_days: int = Field(ge=0)
    label: UrgencyLabel
    score: float = Field(gt=0, le=1.0)


class PressureBand(BaseModel):
    upper_percentile: float = Field(gt=0, le=1.0)  # exclusive
    category: PressureCategory


class TierBand(BaseModel):
    upper_percentile: float = Field(gt=0, le=1.0)  # exclusive
    tier: PriorityTier
    sessions_per_week: int = Field(ge=3, le=7)


class RecoveryBand(BaseModel):
    min_score: int = Field(ge=0, le=100)  # exclusive
    category: RecoveryCategory
    message: str


class DayRhythm(BaseModel):
    weekday: int = Field(ge=0, le=6)  # 0=Mon ... 6=Sun
    intensity: DayIntensity
    multiplier: float = Field(gt=0)
