import math

from recoverytrack.kb import (
    ALLOCATION_STEP_HOURS,
    BALANCE_SHARE_LIMIT,
    DEFAULT_BUFFER_RATE,
    HIGH_STRESS_BUFFER_RATE,
    MAX_SHARE_PER_SUBJECT,
    MIN_HOURS_PER_SUBJECT,
)
from recoverytrack.models.enums import StressLevel
from recoverytrack.models.plan import AllocationMetrics
from recoverytrack.models.subject import StudentProfile, Subject


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def round_to_step(hours: float, step: float = ALLOCATION_STEP_HOURS) -> float:
    """Round to the nearest step; a non-zero share never rounds to zero."""
    rounded = _round_half_up(hours / step) * step
    if rounded == 0 and hours > 0:
        return step
    return rounded


def compute_buffer_rate(stress: StressLevel) -> float:
    return HIGH_STRESS_BUFFER_RATE if stress == StressLevel.HIGH else DEFAULT_BUFFER_RATE


def allocate(
    subjects: list[Subject],
    profile: StudentProfile,
    load_factor: float = 1.0,
) -> tuple[list[Subject], AllocationMetrics]:
    """Distribute adjusted daily capacity across subjects by pressure score.

    Reserves a buffer first, clamps each proportional share to the pace
    floor and half of adjusted capacity, then scales everything down once
    if the clamped total overflows usable hours (no re-clamp afterwards).
    Shares are rounded to quarter hours. Percentages are relative to the
    nominal daily hours so runs with different load factors compare.
    """
    adjusted = profile.daily_hours * load_factor
    buffer_time = adjusted * compute_buffer_rate(profile.stress_level)
    usable = adjusted - buffer_time
    min_hours = MIN_HOURS_PER_SUBJECT[profile.learning_pace]
    max_hours = adjusted * MAX_SHARE_PER_SUBJECT

    total_pressure = sum(s.pressure_score or 0.0 for s in subjects)

    if total_pressure <= 0:
        shares = [0.0 for _ in subjects]
    else:
        raw = [usable * ((s.pressure_score or 0.0) / total_pressure) for s in subjects]
        clamped = [max(min_hours, min(max_hours, r)) for r in raw]
        clamped_sum = sum(clamped)
        if clamped_sum > usable:
            scale = usable / clamped_sum
            clamped = [c * scale for c in clamped]
        shares = [round_to_step(c) for c in clamped]

    allocated: list[Subject] = []
    for sub, hours in zip(subjects, shares):
        allocated.append(
            sub.model_copy(
                update={
                    "allocated_hours": hours,
                    "allocation_percentage": _round_half_up(hours / profile.daily_hours * 100),
                }
            )
        )

    total_allocated = sum(shares)
    heaviest = None
    if allocated and total_allocated > 0:
        heaviest = max(allocated, key=lambda s: s.allocated_hours).name

    metrics = AllocationMetrics(
        adjusted_capacity=round(adjusted, 2),
        load_factor=load_factor,
        total_allocated=round(total_allocated, 2),
        buffer_time=round(buffer_time, 2),
        remaining_time=max(0.0, round(usable - total_allocated, 2)),
        most_time_heavy=heaviest,
        is_balanced=all(h <= profile.daily_hours * BALANCE_SHARE_LIMIT for h in shares),
    )
    return allocated, metrics
