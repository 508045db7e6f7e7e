"""Interactive shell around the pure engine: edits, generation, tracking, persistence."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from recoverytrack.agent.narrative import generate_narrative
from recoverytrack.config import get_settings
from recoverytrack.engine.adaptive import (
    compute_adaptive_metrics,
    rebalance,
    toggle_task_status,
)
from recoverytrack.engine.pipeline import build_recovery_plan
from recoverytrack.engine.validator import validate_inputs
from recoverytrack.exceptions import NoActivePlanError
from recoverytrack.kb import LOAD_FACTOR_REBALANCED
from recoverytrack.models.enums import Difficulty
from recoverytrack.models.plan import AdaptiveMetrics, RecoveryResults, ValidationResult
from recoverytrack.models.session import Session
from recoverytrack.models.subject import StudentProfile, Subject
from recoverytrack.storage.base import SessionStore
from recoverytrack.storage.factory import get_session_store

logger = logging.getLogger(__name__)

MIN_DAILY_HOURS = 1
MAX_DAILY_HOURS = 24

_SUBJECT_FIELDS = {"name", "backlog_chapters", "difficulty", "deadline"}
_PROFILE_FIELDS = {"daily_hours", "learning_pace", "stress_level"}


def clamp_daily_hours(hours: float) -> float:
    return max(MIN_DAILY_HOURS, min(MAX_DAILY_HOURS, hours))


def clamp_backlog(chapters: int) -> int:
    return max(1, chapters)


class RecoverySession:
    """One user's planning session. Loaded once, saved after every mutation.

    Editing subjects or the profile closes the current planning cycle and
    drops the plan; a new plan only exists after an explicit `generate`.
    """

    def __init__(self, store: SessionStore | None = None, key: str | None = None):
        self._store = store if store is not None else get_session_store()
        self._key = key or get_settings().session_key
        loaded = self._store.load(self._key)
        if loaded is None:
            logger.info("Starting empty session %r", self._key)
            loaded = Session()
        self.state = loaded

    # --- Accessors ---

    @property
    def subjects(self) -> list[Subject]:
        return list(self.state.subjects)

    @property
    def profile(self) -> StudentProfile:
        return self.state.profile

    @property
    def results(self) -> RecoveryResults | None:
        return self.state.results

    @property
    def is_ready(self) -> bool:
        return validate_inputs(self.state.subjects, self.state.profile).valid

    def _save(self) -> None:
        self._store.save(self._key, self.state)

    def _close_cycle(self) -> None:
        """Record the finished cycle in history and carry its load factor forward."""
        results = self.state.results
        if results is None:
            return
        history = self.state.history
        history.stress_levels.append(results.profile.stress_level)
        if results.adaptive is not None:
            history.completion_rates.append(results.adaptive.completion_rate)
            self.state.load_factor = results.adaptive.load_adjustment_factor
        self.state.results = None

    # --- Subjects ---

    def add_subject(
        self,
        name: str,
        backlog_chapters: int = 5,
        difficulty: Difficulty = Difficulty.MODERATE,
        deadline: date | None = None,
    ) -> Subject:
        subject = Subject(
            name=name,
            backlog_chapters=clamp_backlog(backlog_chapters),
            difficulty=difficulty,
            deadline=deadline,
        )
        self.state.subjects.append(subject)
        self._close_cycle()
        self._save()
        return subject

    def update_subject(self, subject_id: str, **changes: Any) -> Subject:
        unknown = set(changes) - _SUBJECT_FIELDS
        if unknown:
            raise ValueError(f"Cannot update subject fields: {sorted(unknown)}")
        if "backlog_chapters" in changes:
            changes["backlog_chapters"] = clamp_backlog(changes["backlog_chapters"])

        for i, sub in enumerate(self.state.subjects):
            if sub.subject_id == subject_id:
                data = sub.model_dump(include=_SUBJECT_FIELDS | {"subject_id"})
                updated = Subject.model_validate({**data, **changes})
                self.state.subjects[i] = updated
                self._close_cycle()
                self._save()
                return updated
        raise KeyError(subject_id)

    def remove_subject(self, subject_id: str) -> None:
        remaining = [s for s in self.state.subjects if s.subject_id != subject_id]
        if len(remaining) == len(self.state.subjects):
            raise KeyError(subject_id)
        self.state.subjects = remaining
        self._close_cycle()
        self._save()

    # --- Profile ---

    def update_profile(self, **changes: Any) -> StudentProfile:
        unknown = set(changes) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update profile fields: {sorted(unknown)}")
        if "daily_hours" in changes:
            changes["daily_hours"] = clamp_daily_hours(changes["daily_hours"])
        self.state.profile = StudentProfile.model_validate(
            {**self.state.profile.model_dump(), **changes}
        )
        self._close_cycle()
        self._save()
        return self.state.profile

    # --- Planning ---

    def generate(self, today: date | None = None, narrate: bool | None = None) -> ValidationResult:
        """Run the full pipeline. Invalid input leaves previous results untouched."""
        validation = validate_inputs(self.state.subjects, self.state.profile)
        if not validation.valid:
            logger.warning(
                "Generation refused: %s", [v.message for v in validation.violations]
            )
            return validation

        self._close_cycle()
        results = build_recovery_plan(
            self.state.subjects,
            self.state.profile,
            today=today,
            load_factor=self.state.load_factor,
        )

        settings = get_settings()
        if narrate is None:
            narrate = settings.narrative_enabled
        if narrate:
            results.narrative = generate_narrative(
                results,
                model_id=settings.narrative_model_id,
                region=settings.narrative_region,
                temperature=settings.narrative_temperature,
            )

        self.state.results = results
        self._save()
        return validation

    def _require_results(self) -> RecoveryResults:
        if self.state.results is None:
            raise NoActivePlanError("Generate a plan before tracking tasks")
        return self.state.results

    def toggle_task(self, day_id: str, task_id: str) -> AdaptiveMetrics:
        results = self._require_results()
        plan = toggle_task_status(results.plan, day_id, task_id)
        adaptive = compute_adaptive_metrics(
            plan, results.subjects, results.profile, self.state.history
        )
        self.state.results = results.model_copy(update={"plan": plan, "adaptive": adaptive})
        self._save()
        return adaptive

    def rebalance(self) -> AdaptiveMetrics:
        """Reschedule missed tasks and apply the mild post-rebalance load penalty.

        Without a missed task there is nothing to reschedule: the plan and
        its metrics are left as they are.
        """
        results = self._require_results()
        if not results.plan.rebalance_available:
            logger.info("Rebalance skipped: no missed tasks")
            if results.adaptive is not None:
                return results.adaptive
            return compute_adaptive_metrics(
                results.plan, results.subjects, results.profile, self.state.history
            )
        plan = rebalance(results.plan)
        adaptive = compute_adaptive_metrics(
            plan, results.subjects, results.profile, self.state.history
        ).model_copy(update={"load_adjustment_factor": LOAD_FACTOR_REBALANCED})
        self.state.results = results.model_copy(update={"plan": plan, "adaptive": adaptive})
        self._save()
        return adaptive
