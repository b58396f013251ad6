"""Role-aware equipment scoring.

Equipment preference depends on the role an exercise plays, not just the goal:
barbells lead heavy compounds, while isolation work favours dumbbells and
cables (hypertrophy) or kettlebells, bodyweight and bands (endurance). The
values are curated judgement and are not derived from any formula.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from workout_engine.models import ExerciseRole, FitnessGoal

logger = logging.getLogger(__name__)

PRIMARY = ExerciseRole.PRIMARY_COMPOUND
SECONDARY = ExerciseRole.SECONDARY_COMPOUND
ISOLATION = ExerciseRole.ISOLATION

DEFAULT_EQUIPMENT_TIER = 5

EQUIPMENT_SCORES: dict[FitnessGoal, dict[ExerciseRole, dict[str, int]]] = {
    FitnessGoal.STRENGTH: {
        PRIMARY: {
            "Barbell": 5,
            "Dumbbell": 3,
            "Leverage machine": 2,
            "Machine": 1,
            "Cable": 0,
            "Body weight": -2,
        },
        SECONDARY: {
            "Barbell": 4,
            "Dumbbell": 3,
            "Leverage machine": 2,
            "Machine": 2,
            "Cable": 1,
            "Body weight": 0,
        },
        ISOLATION: {
            "Dumbbell": 3,
            "Cable": 2,
            "Machine": 2,
            "Leverage machine": 2,
            "Barbell": 1,
            "Body weight": 1,
        },
    },
    FitnessGoal.HYPERTROPHY: {
        PRIMARY: {
            "Barbell": 5,
            "Dumbbell": 4,
            "Leverage machine": 2,
            "Machine": 2,
            "Cable": 1,
            "Body weight": 0,
        },
        SECONDARY: {
            "Barbell": 4,
            "Dumbbell": 4,
            "Leverage machine": 3,
            "Machine": 3,
            "Cable": 2,
            "Body weight": 1,
        },
        ISOLATION: {
            "Dumbbell": 5,
            "Cable": 4,
            "Machine": 3,
            "Leverage machine": 3,
            "Body weight": 2,
            "Barbell": -2,  # awkward movement paths for single-joint work
        },
    },
    FitnessGoal.ENDURANCE: {
        PRIMARY: {
            "Barbell": 5,
            "Dumbbell": 4,
            "Leverage machine": 3,
            "Machine": 2,
            "Kettlebell": 2,
            "Body weight": 1,
            "Cable": 0,
        },
        SECONDARY: {
            "Barbell": 4,
            "Dumbbell": 4,
            "Kettlebell": 4,
            "Leverage machine": 3,
            "Body weight": 3,
            "Machine": 2,
            "Cable": 2,
        },
        ISOLATION: {
            "Kettlebell": 5,
            "Body weight": 5,
            "Band": 4,
            "Dumbbell": 4,
            "Cable": 3,
            "Machine": 2,
            "Leverage machine": 2,
            "Barbell": 0,  # high-rep metabolic work
        },
    },
    FitnessGoal.BALANCED: {
        PRIMARY: {
            "Barbell": 5,
            "Dumbbell": 4,
            "Leverage machine": 2,
            "Machine": 2,
            "Cable": 1,
            "Body weight": 0,
        },
        SECONDARY: {
            "Barbell": 4,
            "Dumbbell": 4,
            "Leverage machine": 3,
            "Machine": 3,
            "Cable": 2,
            "Body weight": 1,
        },
        ISOLATION: {
            "Dumbbell": 4,
            "Cable": 3,
            "Machine": 2,
            "Leverage machine": 2,
            "Body weight": 1,
            "Barbell": 0,
        },
    },
}

# General quality independent of goal and role; only breaks ties.
EQUIPMENT_TIERS: dict[str, int] = {
    "Barbell": 10,
    "Dumbbell": 9,
    "Cable": 8,
    "Leverage machine": 7,
    "Machine": 6,
    "Kettlebell": 6,
    "Body weight": 5,
    "Band": 4,
    "Smith machine": 4,
    "EZ bar": 5,
    "Trap bar": 6,
    "Suspension": 3,
    "Medicine ball": 3,
    "Stability ball": 2,
}


def normalize_equipment(equipment: str) -> str:
    """"Barbell/Flat Bench" -> "Barbell"."""
    return (equipment or "").split("/", 1)[0].strip()


def _role_scores(goal: FitnessGoal, role: ExerciseRole) -> Mapping[str, int]:
    return EQUIPMENT_SCORES.get(goal, {}).get(role, {})


def get_score(goal: FitnessGoal, role: ExerciseRole, equipment: str) -> int:
    """Desirability of ``equipment`` for the goal/role pair; 0 when anything is unlisted."""
    return _role_scores(goal, role).get(normalize_equipment(equipment), 0)


def get_all_scores(goal: FitnessGoal, role: ExerciseRole) -> Mapping[str, int]:
    return MappingProxyType(dict(_role_scores(goal, role)))


def get_top_equipment(goal: FitnessGoal, role: ExerciseRole, count: int = 3) -> list[str]:
    ranked = sorted(_role_scores(goal, role).items(), key=lambda item: item[1], reverse=True)
    return [name for name, _ in ranked[: max(0, count)]]


def get_equipment_tier(equipment: str) -> int:
    return EQUIPMENT_TIERS.get(normalize_equipment(equipment), DEFAULT_EQUIPMENT_TIER)


def equipment_sort_key(goal: FitnessGoal, role: ExerciseRole, equipment: str) -> tuple[int, int]:
    """(role score, tier) so that the tier only matters when role scores tie."""
    return get_score(goal, role, equipment), get_equipment_tier(equipment)


def rank_equipment(goal: FitnessGoal, role: ExerciseRole, equipment: Iterable[str]) -> list[str]:
    """Order equipment strings best-first for the goal/role pair."""
    ranked = sorted(equipment, key=lambda item: equipment_sort_key(goal, role, item), reverse=True)
    logger.debug("Ranked equipment for %s/%s: %s", goal.value, role.value, ranked)
    return ranked
