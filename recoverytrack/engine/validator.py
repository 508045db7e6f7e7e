from recoverytrack.models.plan import ValidationResult, ValidationViolation
from recoverytrack.models.subject import StudentProfile, Subject


def _validate_v01(subjects: list[Subject]) -> list[ValidationViolation]:
    """V01: At least one subject is required."""
    if subjects:
        return []
    return [ValidationViolation(rule_id="V01", message="Add at least one subject")]


def _validate_v02(subjects: list[Subject]) -> list[ValidationViolation]:
    """V02: Every subject needs a non-blank name."""
    return [
        ValidationViolation(
            rule_id="V02",
            message="Subject name is required",
            subject_id=sub.subject_id,
        )
        for sub in subjects
        if not sub.name.strip()
    ]


def _validate_v03(subjects: list[Subject]) -> list[ValidationViolation]:
    """V03: Backlog must be at least one chapter."""
    return [
        ValidationViolation(
            rule_id="V03",
            message=f"Backlog for {sub.name or 'subject'} must be positive (got {sub.backlog_chapters})",
            subject_id=sub.subject_id,
        )
        for sub in subjects
        if sub.backlog_chapters <= 0
    ]


def _validate_v04(subjects: list[Subject]) -> list[ValidationViolation]:
    """V04: Every subject needs a deadline."""
    return [
        ValidationViolation(
            rule_id="V04",
            message=f"Deadline missing for {sub.name or 'subject'}",
            subject_id=sub.subject_id,
        )
        for sub in subjects
        if sub.deadline is None
    ]


def _validate_v05(profile: StudentProfile) -> list[ValidationViolation]:
    """V05: Daily hours must be positive."""
    if profile.daily_hours > 0:
        return []
    return [
        ValidationViolation(
            rule_id="V05",
            message=f"Daily hours must be positive (got {profile.daily_hours})",
        )
    ]


def validate_inputs(subjects: list[Subject], profile: StudentProfile) -> ValidationResult:
    """Run all input checks that gate plan generation."""
    violations: list[ValidationViolation] = []
    violations.extend(_validate_v01(subjects))
    violations.extend(_validate_v02(subjects))
    violations.extend(_validate_v03(subjects))
    violations.extend(_validate_v04(subjects))
    violations.extend(_validate_v05(profile))
    return ValidationResult(valid=len(violations) == 0, violations=violations)
