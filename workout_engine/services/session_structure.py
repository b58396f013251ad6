"""Goal-based session structure: how many exercises of each role, at which rep range.

- Strength: heavy compounds dominate (50% primary, 30% secondary, 20% isolation)
- Hypertrophy: 35% primary, 30% secondary, 35% isolation
- Endurance: heavy strength maintenance plus metabolic isolation work (35/15/50)
- Balanced: strength and hypertrophy blend (35/30/35)
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from workout_engine.models import ExerciseRole, ExerciseSlot, FitnessGoal

logger = logging.getLogger(__name__)

DEFAULT_REP_RANGE = "8-12"
DEFAULT_REP_BOUNDS = (8, 12)
_REP_RANGE_RE = re.compile(r"([0-9]+)(?:-([0-9]+))?")


@dataclass(frozen=True)
class RoleAllocation:
    role: ExerciseRole
    percentage: float
    rep_range: str


SESSION_STRUCTURES: dict[FitnessGoal, tuple[RoleAllocation, ...]] = {
    FitnessGoal.STRENGTH: (
        RoleAllocation(ExerciseRole.PRIMARY_COMPOUND, 0.50, "4-6"),
        RoleAllocation(ExerciseRole.SECONDARY_COMPOUND, 0.30, "6-8"),
        RoleAllocation(ExerciseRole.ISOLATION, 0.20, "8-12"),
    ),
    FitnessGoal.HYPERTROPHY: (
        RoleAllocation(ExerciseRole.PRIMARY_COMPOUND, 0.35, "6-8"),
        RoleAllocation(ExerciseRole.SECONDARY_COMPOUND, 0.30, "8-10"),
        RoleAllocation(ExerciseRole.ISOLATION, 0.35, "10-15"),
    ),
    FitnessGoal.ENDURANCE: (
        RoleAllocation(ExerciseRole.PRIMARY_COMPOUND, 0.35, "5-8"),
        RoleAllocation(ExerciseRole.SECONDARY_COMPOUND, 0.15, "6-10"),
        RoleAllocation(ExerciseRole.ISOLATION, 0.50, "15-25"),
    ),
    FitnessGoal.BALANCED: (
        RoleAllocation(ExerciseRole.PRIMARY_COMPOUND, 0.35, "5-8"),
        RoleAllocation(ExerciseRole.SECONDARY_COMPOUND, 0.30, "8-10"),
        RoleAllocation(ExerciseRole.ISOLATION, 0.35, "10-12"),
    ),
}

GOAL_DESCRIPTIONS: dict[FitnessGoal, str] = {
    FitnessGoal.STRENGTH: "Heavy compounds dominate for maximal strength development",
    FitnessGoal.HYPERTROPHY: "Balanced compounds + isolation for muscle growth",
    FitnessGoal.ENDURANCE: "Heavy strength maintenance + metabolic conditioning for endurance athletes",
    FitnessGoal.BALANCED: "Strength + hypertrophy blend for general fitness",
}

REP_RANGE_DESCRIPTIONS: dict[str, str] = {
    "4-6": "Strength (4-6 reps)",
    "5-8": "Strength-Hypertrophy (5-8 reps)",
    "6-8": "Hypertrophy (6-8 reps)",
    "8-10": "Hypertrophy (8-10 reps)",
    "8-12": "Hypertrophy-Endurance (8-12 reps)",
    "10-12": "Hypertrophy (10-12 reps)",
    "10-15": "Metabolic (10-15 reps)",
    "12-15": "Endurance (12-15 reps)",
    "15-20": "High Endurance (15-20 reps)",
    "15-25": "Muscular Endurance (15-25 reps)",
}


def _distribution(goal: FitnessGoal) -> tuple[RoleAllocation, ...]:
    return SESSION_STRUCTURES.get(goal, SESSION_STRUCTURES[FitnessGoal.BALANCED])


def round_half_up(value: float) -> int:
    """Round halves away from zero on the exact float value (0.35 * 10 stays 3)."""
    if value < 0:
        return -round_half_up(-value)
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def get_exercise_slots(goal: FitnessGoal, total_exercises: int) -> list[ExerciseSlot]:
    """Expand a goal's role distribution into exactly ``total_exercises`` slots.

    Every listed role asks for at least one slot; roles later in the table lose
    out first when the count is too small to cover them all.
    """
    if total_exercises <= 0:
        return []
    distribution = _distribution(goal)
    slots: list[ExerciseSlot] = []

    for allocation in distribution:
        count = max(1, round_half_up(total_exercises * allocation.percentage))
        for _ in range(count):
            if len(slots) >= total_exercises:
                break
            slots.append(ExerciseSlot(role=allocation.role, rep_range=allocation.rep_range))

    pad_rep_range = distribution[-1].rep_range if distribution else "10-12"
    while len(slots) < total_exercises:
        slots.append(ExerciseSlot(role=ExerciseRole.ISOLATION, rep_range=pad_rep_range))

    return slots[:total_exercises]


def get_role_counts(goal: FitnessGoal, total_exercises: int) -> dict[ExerciseRole, int]:
    counts = {role: 0 for role in ExerciseRole}
    for slot in get_exercise_slots(goal, total_exercises):
        counts[slot.role] += 1
    return counts


def parse_rep_range(rep_range: str) -> tuple[int, int]:
    """Parse "6-8" into (6, 8) and "10" into (10, 10). Anything else, or min > max, yields (8, 12)."""
    match = _REP_RANGE_RE.fullmatch(rep_range or "")
    if match is None:
        logger.debug("Unparseable rep range %r, using default", rep_range)
        return DEFAULT_REP_BOUNDS
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) is not None else low
    if low > high:
        return DEFAULT_REP_BOUNDS
    return low, high


def get_target_reps(rep_range: str) -> int:
    low, high = parse_rep_range(rep_range)
    return (low + high) // 2


def get_description(goal: FitnessGoal) -> str:
    return GOAL_DESCRIPTIONS.get(goal, "General fitness training")


def get_default_rep_range(goal: FitnessGoal, role: ExerciseRole) -> str:
    for allocation in _distribution(goal):
        if allocation.role == role:
            return allocation.rep_range
    return DEFAULT_REP_RANGE


def get_rep_range_description(rep_range: str) -> str:
    return REP_RANGE_DESCRIPTIONS.get(rep_range, rep_range)
