"""One-shot recovery planning: urgency → pressure → difficulty → priority → allocation → plan."""

from __future__ import annotations

import logging
from datetime import date

from recoverytrack.engine.allocator import allocate
from recoverytrack.engine.pressure import compute_pressure
from recoverytrack.engine.priority import prioritize
from recoverytrack.engine.recovery import compute_recovery_metrics
from recoverytrack.engine.summary import summarize_deadlines
from recoverytrack.engine.urgency import compute_urgency
from recoverytrack.engine.validator import validate_inputs
from recoverytrack.engine.weekly import generate_weekly_plan
from recoverytrack.exceptions import PlanGenerationError
from recoverytrack.models.plan import RecoveryResults
from recoverytrack.models.subject import StudentProfile, Subject

logger = logging.getLogger(__name__)


def build_recovery_plan(
    subjects: list[Subject],
    profile: StudentProfile,
    today: date | None = None,
    load_factor: float = 1.0,
) -> RecoveryResults:
    """Run stages 1-6 as a single batch over an immutable snapshot.

    Raises PlanGenerationError (with the violations attached) when the
    input is not generatable; nothing is computed in that case.
    """
    if today is None:
        today = date.today()

    validation = validate_inputs(subjects, profile)
    if not validation.valid:
        raise PlanGenerationError(
            f"Cannot generate a plan: {[v.message for v in validation.violations]}",
            violations=validation.violations,
        )

    urgent = compute_urgency(subjects, today)
    scored = compute_pressure(urgent, profile)
    recovery = compute_recovery_metrics(scored, profile)
    logger.info(
        "Recovery difficulty %d (%s), load ratio %.2f",
        recovery.difficulty_score,
        recovery.category.value,
        recovery.load_ratio,
    )

    ranked = prioritize(scored)
    logger.info(
        "Subject priorities: %s",
        [(s.name, s.pressure_score, s.priority_tier.value) for s in ranked],
    )

    allocated, allocation = allocate(ranked, profile, load_factor)
    logger.info(
        "Allocated %.2fh of %.2fh adjusted capacity (load factor %.2f)",
        allocation.total_allocated,
        allocation.adjusted_capacity,
        load_factor,
    )

    plan = generate_weekly_plan(allocated, profile, today)

    return RecoveryResults(
        subjects=allocated,
        profile=profile,
        recovery=recovery,
        allocation=allocation,
        plan=plan,
        deadlines=summarize_deadlines(urgent),
        narrative=recovery.message,
    )
