"""Exercise role classification: primary compound, secondary compound or isolation.

Curated labels from the exercise catalog win. Otherwise the name is matched
against three keyword tables in a fixed order, then the synergist count
decides between secondary compound and isolation.
"""

from __future__ import annotations

import logging
from typing import Optional

from workout_engine.models import Exercise, ExerciseRole

logger = logging.getLogger(__name__)

PRIMARY_COMPOUND_PATTERNS: tuple[str, ...] = (
    # Pressing
    "bench press", "flat press", "overhead press", "military press",
    "shoulder press", "push press",
    # Pulling
    "barbell row", "bent over row", "pendlay row",
    "pull-up", "pull up", "chin-up", "chin up",
    # Lower body
    "squat", "back squat", "front squat", "goblet squat",
    "deadlift", "conventional deadlift", "sumo deadlift",
    "romanian deadlift", "rdl", "stiff leg deadlift",
    "hip thrust", "barbell hip thrust",
    "leg press",
    # Full body
    "clean", "snatch", "clean and jerk", "power clean",
    # Bodyweight
    "dip", "chest dip", "tricep dip",
)

SECONDARY_COMPOUND_PATTERNS: tuple[str, ...] = (
    # Pressing variations
    "incline press", "incline bench", "decline press", "decline bench",
    "dumbbell press", "close grip bench",
    "arnold press", "push-up", "push up", "pushup",
    # Pulling variations
    "cable row", "seated row", "machine row",
    "lat pulldown", "pulldown", "pull down",
    "t-bar row", "t bar row", "one arm row", "single arm row",
    "face pull", "upright row",
    # Lower body variations
    "lunge", "walking lunge", "reverse lunge", "split lunge",
    "split squat", "bulgarian split squat",
    "step-up", "step up",
    "hack squat", "hack machine",
    "leg curl", "leg extension",
    "glute bridge",
    # Core
    "plank", "side plank", "ab wheel", "hanging leg raise",
)

ISOLATION_PATTERNS: tuple[str, ...] = (
    # Arms
    "curl", "bicep curl", "hammer curl", "preacher curl",
    "tricep extension", "tricep pushdown", "skull crusher",
    "kickback", "overhead extension",
    # Shoulders
    "lateral raise", "side raise", "front raise",
    "rear delt", "reverse fly", "face pull",
    "shrug",
    # Chest
    "fly", "flye", "chest fly", "cable crossover", "pec deck",
    # Back
    "pullover", "straight arm pulldown",
    # Lower body
    "calf raise", "calf press",
    "leg curl", "hamstring curl",
    "leg extension", "quad extension",
    "hip abduction", "hip adduction",
    "glute kickback",
    # Core
    "crunch", "sit-up", "situp",
    "russian twist", "cable twist",
    "leg raise", "knee raise",
)

_PATTERN_TABLES: tuple[tuple[ExerciseRole, tuple[str, ...]], ...] = (
    (ExerciseRole.PRIMARY_COMPOUND, PRIMARY_COMPOUND_PATTERNS),
    (ExerciseRole.SECONDARY_COMPOUND, SECONDARY_COMPOUND_PATTERNS),
    (ExerciseRole.ISOLATION, ISOLATION_PATTERNS),
)

COMPOUND_SYNERGIST_THRESHOLD = 2


def keyword_overlaps() -> dict[str, list[ExerciseRole]]:
    """Keywords listed under more than one role. The earliest role in check order wins for these."""
    seen: dict[str, list[ExerciseRole]] = {}
    for role, patterns in _PATTERN_TABLES:
        for pattern in patterns:
            roles = seen.setdefault(pattern, [])
            if role not in roles:
                roles.append(role)
    return {pattern: roles for pattern, roles in seen.items() if len(roles) > 1}


def synergist_count(synergist: str) -> int:
    return len([part for part in (synergist or "").split(",") if part.strip()])


def _match_patterns(name: str) -> Optional[ExerciseRole]:
    lowered = (name or "").lower()
    for role, patterns in _PATTERN_TABLES:
        if any(pattern in lowered for pattern in patterns):
            return role
    return None


def classify_name(name: str, synergist: str = "") -> ExerciseRole:
    """Classify from a bare name and comma-separated synergist string."""
    role = _match_patterns(name)
    if role is not None:
        return role
    if synergist_count(synergist) >= COMPOUND_SYNERGIST_THRESHOLD:
        return ExerciseRole.SECONDARY_COMPOUND
    return ExerciseRole.ISOLATION


def classify(exercise: Exercise) -> ExerciseRole:
    """Classify a catalog exercise. A valid precomputed ``exercise_role`` label short-circuits matching."""
    curated = ExerciseRole.parse(exercise.exercise_role)
    if curated is not None:
        return curated
    if exercise.exercise_role:
        logger.debug("Ignoring unknown role label %r on exercise %s", exercise.exercise_role, exercise.id)
    return classify_name(exercise.name, exercise.synergist)


_overlaps = keyword_overlaps()
if _overlaps:
    logger.debug("Role keyword tables overlap on: %s", ", ".join(sorted(_overlaps)))
