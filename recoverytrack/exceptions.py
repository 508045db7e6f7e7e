from __future__ import annotations

from recoverytrack.models.plan import ValidationViolation


class PlanGenerationError(Exception):
    """Raised when the pipeline refuses to run on invalid input."""

    def __init__(
        self, message: str, violations: list[ValidationViolation] | None = None
    ):
        super().__init__(message)
        self.violations = violations or []


class TaskNotFoundError(KeyError):
    """Raised when a day/task id pair does not exist in the plan."""

    def __init__(self, day_id: str, task_id: str):
        super().__init__(f"No task {task_id!r} on day {day_id!r}")
        self.day_id = day_id
        self.task_id = task_id


class NoActivePlanError(RuntimeError):
    """Raised when plan tracking is requested before a plan was generated."""
