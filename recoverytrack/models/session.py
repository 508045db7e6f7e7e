from typing import Any

from pydantic import BaseModel, Field

from recoverytrack.models.plan import RecoveryResults
from recoverytrack.models.subject import History, StudentProfile, Subject


class Session(BaseModel):
    subjects: list[Subject] = Field(default_factory=list)
    profile: StudentProfile = Field(default_factory=StudentProfile)
    results: RecoveryResults | None = None
    history: History = Field(default_factory=History)
    load_factor: float = Field(default=1.0, ge=0.85, le=1.05)  # fed into the next allocation
    materials: list[dict[str, Any]] = Field(default_factory=list)  # opaque to the engine
