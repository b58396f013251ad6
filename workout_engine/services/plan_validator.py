"""Advisory checks for externally generated (LLM) workout plans.

Validation never rejects a plan. Each check contributes at most one warning
and the caller decides whether to log, display or ignore them.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Iterable, Optional, Sequence

from workout_engine.config import get_settings
from workout_engine.models import CandidateExercise, ExperienceLevel, FitnessGoal, TrainingFormat
from workout_engine.services.time_estimator import SessionTimeBudget, average_exercise_seconds

logger = logging.getLogger(__name__)

AverageSecondsFn = Callable[[FitnessGoal, ExperienceLevel, Optional[TrainingFormat]], float]


def _duplicate_ids(plan: Sequence[CandidateExercise]) -> list[int]:
    counts = Counter(item.exercise_id for item in plan)
    return sorted(exercise_id for exercise_id, n in counts.items() if n > 1)


def _unknown_ids(plan: Sequence[CandidateExercise], candidate_ids: set[int], limit: int) -> list[int]:
    unknown: list[int] = []
    for item in plan:
        if item.exercise_id not in candidate_ids and item.exercise_id not in unknown:
            unknown.append(item.exercise_id)
    return unknown[:limit]


def _first_invalid_volume(plan: Sequence[CandidateExercise]) -> Optional[CandidateExercise]:
    for item in plan:
        if item.sets <= 0 or item.reps <= 0:
            return item
    return None


def _missing_muscles(plan: Sequence[CandidateExercise], requested_muscles: Iterable[str]) -> list[str]:
    covered = {(item.muscle_group or "").strip().lower() for item in plan}
    missing: list[str] = []
    for muscle in requested_muscles:
        key = (muscle or "").strip().lower()
        if key and key not in covered and muscle not in missing:
            missing.append(muscle)
    return missing


def _join(values: Iterable[object]) -> str:
    return ", ".join(str(v) for v in values)


def validate_candidate_plan(
    plan: Sequence[CandidateExercise],
    candidate_ids: Iterable[int],
    requested_muscles: Sequence[str],
    goal: FitnessGoal,
    experience_level: ExperienceLevel,
    session_budget: Optional[SessionTimeBudget] = None,
    average_seconds: Optional[AverageSecondsFn] = None,
) -> list[str]:
    """Return warnings for a candidate plan, in check order. An empty list means nothing looked off."""
    settings = get_settings()
    allowed = set(candidate_ids)
    warnings: list[str] = []

    duplicates = _duplicate_ids(plan)
    if duplicates:
        warnings.append(f"Candidate plan contains duplicate exercise ids: {_join(duplicates)}")

    unknown = _unknown_ids(plan, allowed, settings.plan_max_reported_ids)
    if unknown:
        warnings.append(f"Candidate plan references exercise ids not in candidate set: {_join(unknown)}")

    invalid = _first_invalid_volume(plan)
    if invalid is not None:
        warnings.append(
            f"Exercise {invalid.exercise_id} has non-positive sets or reps (sets={invalid.sets}, reps={invalid.reps})"
        )

    if requested_muscles:
        missing = _missing_muscles(plan, requested_muscles)
        if missing:
            warnings.append(f"Missing requested muscles: {_join(missing)}")

    if session_budget is not None:
        estimator = average_seconds or average_exercise_seconds
        per_exercise = estimator(goal, experience_level, session_budget.format)
        estimated = len(plan) * per_exercise
        underfill_floor = session_budget.available_work_seconds * settings.plan_underfill_ratio
        if estimated > session_budget.max_work_seconds:
            warnings.append(
                f"Estimated session time {estimated:.0f}s exceeds budgeted work time {session_budget.max_work_seconds}s"
            )
        elif estimated < underfill_floor:
            warnings.append(
                f"Estimated session time {estimated:.0f}s under-fills the session "
                f"(less than {int(settings.plan_underfill_ratio * 100)}% of {session_budget.available_work_seconds}s available)"
            )

    if warnings:
        logger.warning(
            "Candidate plan produced %d warning(s)",
            len(warnings),
            extra={"ctx_goal": goal.value, "ctx_exercises": len(plan), "ctx_warnings": warnings},
        )
    return warnings
