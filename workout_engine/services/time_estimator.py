"""Session time budgets and per-exercise time estimates.

All figures come from a time cost model: rep tempos, rest intervals, setup
costs and density-format multipliers. The embedded default can be replaced
with a JSON file via ``TIME_COST_MODEL_PATH``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from workout_engine.config import get_settings
from workout_engine.models import (
    Exercise,
    ExperienceLevel,
    FitnessGoal,
    TrackingType,
    TrainingFormat,
    WorkoutDuration,
    WorkoutExercise,
)

logger = logging.getLogger(__name__)

COMPOUND = "compound"
ISOLATION = "isolation"

_COMPOUND_NAME_KEYWORDS = ("squat", "deadlift", "press", "row", "pull", "lunge", "clean", "snatch", "thrust", "swing")
_DEFAULT_ARCHETYPE = {COMPOUND: "barbell", ISOLATION: "dumbbell"}

# Fallbacks used when a duration key is missing from the model.
_LEGACY_OVERHEAD = {"15m": (3, 2), "30m": (4, 3), "45m": (5, 3), "1h": (6, 4), "1.5h": (7, 5), "2h": (8, 6)}
_LEGACY_BUFFER = {"15m": 60, "30m": 60, "45m": 90, "1h": 120, "1.5h": 180, "2h": 240}
_LEGACY_CAP = {"15m": 4, "30m": 6, "45m": 8, "1h": 10, "1.5h": 12, "2h": 14}
_LEGACY_MINIMUM = {"15m": 3, "30m": 4, "45m": 5, "1h": 6, "1.5h": 8, "2h": 8}

DEFAULT_TIME_COST_MODEL: dict = {
    "session_overhead": {
        "15m": {"warmup": 3, "cooldown": 2},
        "30m": {"warmup": 4, "cooldown": 3},
        "45m": {"warmup": 5, "cooldown": 3},
        "1h": {"warmup": 6, "cooldown": 4},
        "1.5h": {"warmup": 7, "cooldown": 5},
        "2h": {"warmup": 8, "cooldown": 6},
    },
    "buffer_seconds": {"15m": 60, "30m": 60, "45m": 90, "1h": 120, "1.5h": 180, "2h": 240},
    "exercise_caps": {"15m": 4, "30m": 6, "45m": 8, "1h": 10, "1.5h": 12, "2h": 14},
    "minimum_exercises": {"15m": 3, "30m": 4, "45m": 5, "1h": 6, "1.5h": 8, "2h": 8},
    "rep_tempos": {
        "compound": {"1-5": 2.8, "6-8": 3.2, "8-12": 3.0, "12-20": 2.8},
        "isolation": {"6-8": 2.8, "8-12": 3.2, "12-20": 2.5},
    },
    "rest_intervals": {
        "strength": {"compound": 240, "isolation": 120},
        "powerlifting": {"compound": 270, "isolation": 150},
        "olympic_weightlifting": {"compound": 270, "isolation": 150},
        "hypertrophy": {"compound": 90, "isolation": 60},
        "general": {"compound": 75, "isolation": 60},
        "circuit_training": {"compound": 45, "isolation": 30},
    },
    "setup_seconds": {
        "barbell": 35,
        "dumbbell": 15,
        "machine": 12,
        "cable": 12,
        "kettlebell": 18,
        "band": 8,
        "bodyweight": 5,
        "sled": 25,
        "specialty": 20,
        "default": 15,
    },
    "transition_seconds": 15,
    "warmup_set_seconds": 45,
    "density_formats": {
        "straight_sets": {"time_multiplier": 1.0, "rest_compression": 0.0},
        "superset": {"time_multiplier": 0.63, "rest_compression": 0.37},
        "circuit_3": {"time_multiplier": 0.65, "rest_compression": 0.35},
        "circuit_4": {"time_multiplier": 0.70, "rest_compression": 0.30},
        "emom": {"time_multiplier": 0.75, "rest_compression": 0.25},
    },
    "experience_adjustments": {
        "beginner": {"rest_multiplier": 1.25, "setup_multiplier": 1.3, "tempo_factor": 0.8},
        "intermediate": {"rest_multiplier": 1.0, "setup_multiplier": 1.0, "tempo_factor": 0.95},
        "advanced": {"rest_multiplier": 0.85, "setup_multiplier": 0.85, "tempo_factor": 1.0},
    },
    "compound_share": {
        "strength": 0.8,
        "powerlifting": 0.85,
        "olympic_weightlifting": 0.85,
        "hypertrophy": 0.65,
        "general": 0.6,
        "circuit_training": 0.5,
    },
    "default_sets": {
        "strength": 4,
        "powerlifting": 4,
        "olympic_weightlifting": 4,
        "hypertrophy": 4,
        "general": 3,
        "circuit_training": 3,
    },
    "default_reps": {
        "strength": 4,
        "powerlifting": 3,
        "olympic_weightlifting": 3,
        "hypertrophy": 10,
        "general": 10,
        "circuit_training": 12,
    },
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SessionOverhead(_Frozen):
    warmup: int
    cooldown: int


class MovementRest(_Frozen):
    compound: int
    isolation: int


class DensityFormat(_Frozen):
    time_multiplier: float
    rest_compression: float


class ExperienceAdjustment(_Frozen):
    rest_multiplier: float = 1.0
    setup_multiplier: float = 1.0
    tempo_factor: float = 1.0


class TimeCostModel(_Frozen):
    session_overhead: dict[str, SessionOverhead] = {}
    buffer_seconds: dict[str, int] = {}
    exercise_caps: dict[str, int] = {}
    minimum_exercises: dict[str, int] = {}
    rep_tempos: dict[str, dict[str, float]] = {}
    rest_intervals: dict[str, MovementRest] = {}
    setup_seconds: dict[str, float] = {}
    transition_seconds: int = 0
    warmup_set_seconds: int = 0
    density_formats: dict[str, DensityFormat] = {}
    experience_adjustments: dict[str, ExperienceAdjustment] = {}
    compound_share: dict[str, float] = {}
    default_sets: dict[str, int] = {}
    default_reps: dict[str, int] = {}


@dataclass(frozen=True)
class FormatParameters:
    time_multiplier: float = 1.0
    rest_factor: float = 1.0


@dataclass
class SessionTimeBudget:
    duration: WorkoutDuration
    fitness_goal: FitnessGoal
    experience_level: ExperienceLevel
    format: TrainingFormat
    warmup_seconds: int
    cooldown_seconds: int
    buffer_seconds: int
    available_work_seconds: int
    max_work_seconds: int
    consumed_work_seconds: int = 0

    def try_consume(self, seconds: int) -> bool:
        if seconds <= 0:
            return True
        updated = self.consumed_work_seconds + seconds
        if updated > self.max_work_seconds:
            return False
        self.consumed_work_seconds = updated
        return True

    def sync_actual_exercise_seconds(self, seconds: int) -> None:
        self.consumed_work_seconds = min(seconds, self.max_work_seconds)

    @property
    def remaining_work_seconds(self) -> int:
        return max(0, self.available_work_seconds - self.consumed_work_seconds)

    @property
    def is_depleted(self) -> bool:
        return self.consumed_work_seconds >= self.available_work_seconds

    @property
    def is_out_of_time(self) -> bool:
        return self.consumed_work_seconds >= self.max_work_seconds

    @property
    def warmup_minutes(self) -> int:
        return _rounded_minutes(self.warmup_seconds)

    @property
    def cooldown_minutes(self) -> int:
        return _rounded_minutes(self.cooldown_seconds)

    @property
    def exercise_minutes(self) -> int:
        return _rounded_minutes(self.consumed_work_seconds)

    @property
    def total_minutes(self) -> int:
        return _rounded_minutes(
            self.warmup_seconds + self.cooldown_seconds + self.buffer_seconds + self.consumed_work_seconds
        )


def _rounded_minutes(seconds: int) -> int:
    if seconds <= 0:
        return 0
    return math.ceil(seconds / 60.0)


def load_time_cost_model(path: Optional[str] = None) -> TimeCostModel:
    """Read a model file, falling back to the embedded default when it is missing or invalid."""
    if path:
        try:
            return TimeCostModel.model_validate_json(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            logger.warning("Failed to load time cost model from %s, using embedded default: %s", path, exc)
    return TimeCostModel.model_validate(DEFAULT_TIME_COST_MODEL)


@lru_cache(maxsize=1)
def get_time_cost_model() -> TimeCostModel:
    return load_time_cost_model(get_settings().time_cost_model_path)


def _model(model: Optional[TimeCostModel]) -> TimeCostModel:
    return model if model is not None else get_time_cost_model()


# -- Session level --

def session_overhead(
    duration: WorkoutDuration,
    warm_up_enabled: bool = True,
    cool_down_enabled: bool = True,
    model: Optional[TimeCostModel] = None,
) -> tuple[int, int]:
    """(warmup minutes, cooldown minutes) for a session length."""
    entry = _model(model).session_overhead.get(duration.value)
    legacy = _LEGACY_OVERHEAD[duration.value]
    warmup = entry.warmup if entry else legacy[0]
    cooldown = entry.cooldown if entry else legacy[1]
    if not warm_up_enabled:
        warmup = 0
    if not cool_down_enabled:
        cooldown = 0
    return warmup, cooldown


def buffer_seconds(duration: WorkoutDuration, model: Optional[TimeCostModel] = None) -> int:
    return _model(model).buffer_seconds.get(duration.value, _LEGACY_BUFFER[duration.value])


def exercise_cap(duration: WorkoutDuration, model: Optional[TimeCostModel] = None) -> int:
    return _model(model).exercise_caps.get(duration.value, _LEGACY_CAP[duration.value])


def minimum_exercises(duration: WorkoutDuration, muscle_group_count: int, model: Optional[TimeCostModel] = None) -> int:
    base = _model(model).minimum_exercises.get(duration.value, _LEGACY_MINIMUM[duration.value])
    return min(base, max(1, muscle_group_count))


def preferred_format(duration: WorkoutDuration, goal: FitnessGoal) -> TrainingFormat:
    normalized = goal.normalized
    if normalized == FitnessGoal.CIRCUIT_TRAINING:
        return TrainingFormat.CIRCUIT_3
    if duration == WorkoutDuration.FIFTEEN_MINUTES:
        return TrainingFormat.CIRCUIT_3
    if duration == WorkoutDuration.THIRTY_MINUTES:
        return TrainingFormat.SUPERSET if normalized == FitnessGoal.HYPERTROPHY else TrainingFormat.CIRCUIT_3
    if duration == WorkoutDuration.FORTY_FIVE_MINUTES:
        return TrainingFormat.SUPERSET
    if duration == WorkoutDuration.ONE_HOUR:
        heavy = {FitnessGoal.STRENGTH, FitnessGoal.POWERLIFTING, FitnessGoal.OLYMPIC_WEIGHTLIFTING}
        return TrainingFormat.STRAIGHT_SETS if normalized in heavy else TrainingFormat.SUPERSET
    return TrainingFormat.STRAIGHT_SETS


def make_session_budget(
    duration: WorkoutDuration,
    fitness_goal: FitnessGoal,
    experience_level: ExperienceLevel,
    warm_up_enabled: bool = True,
    cool_down_enabled: bool = True,
    model: Optional[TimeCostModel] = None,
) -> SessionTimeBudget:
    warmup_min, cooldown_min = session_overhead(duration, warm_up_enabled, cool_down_enabled, model)
    warmup = warmup_min * 60
    cooldown = cooldown_min * 60
    buffer = buffer_seconds(duration, model)
    available = max(0, duration.minutes * 60 - warmup - cooldown - buffer)
    overrun_allowance = max(45, int(available * 0.05))
    return SessionTimeBudget(
        duration=duration,
        fitness_goal=fitness_goal,
        experience_level=experience_level,
        format=preferred_format(duration, fitness_goal),
        warmup_seconds=warmup,
        cooldown_seconds=cooldown,
        buffer_seconds=buffer,
        available_work_seconds=available,
        max_work_seconds=available + overrun_allowance,
    )


def average_exercise_seconds(
    goal: FitnessGoal,
    experience_level: ExperienceLevel,
    format: Optional[TrainingFormat] = None,
    model: Optional[TimeCostModel] = None,
) -> float:
    """Blended compound/isolation estimate for a typical exercise of this goal."""
    cost = _model(model)
    normalized = goal.normalized
    sets = cost.default_sets.get(normalized.value, 4)
    reps = cost.default_reps.get(normalized.value, 10)
    share = cost.compound_share.get(normalized.value, 0.6)
    adjustment = _experience_adjustment(cost, experience_level)
    params = _format_parameters(cost, format or preferred_format(WorkoutDuration.ONE_HOUR, normalized))

    compound = _per_movement_estimate(cost, normalized, COMPOUND, sets, reps, adjustment, params)
    isolation = _per_movement_estimate(cost, normalized, ISOLATION, max(3, sets - 1), max(8, reps + 2), adjustment, params)
    return share * compound + (1 - share) * isolation


# -- Exercise level --

def estimate_exercise_seconds(
    item: WorkoutExercise,
    goal: FitnessGoal,
    experience_level: ExperienceLevel,
    format: TrainingFormat,
    model: Optional[TimeCostModel] = None,
) -> int:
    if item.sets <= 0:
        return 0
    cost = _model(model)
    adjustment = _experience_adjustment(cost, experience_level)
    params = _format_parameters(cost, format)
    tracking = item.tracking_type or TrackingType.REPS_WEIGHT
    if tracking in (TrackingType.REPS_WEIGHT, TrackingType.REPS_ONLY):
        return _estimate_repetition_exercise(cost, item, goal, adjustment, params)
    return _estimate_time_tracked_exercise(cost, item, goal, adjustment, params)


def total_seconds(
    items: Sequence[WorkoutExercise],
    goal: FitnessGoal,
    experience_level: ExperienceLevel,
    format: TrainingFormat,
    model: Optional[TimeCostModel] = None,
) -> int:
    return sum(estimate_exercise_seconds(item, goal, experience_level, format, model) for item in items)


def _estimate_repetition_exercise(
    cost: TimeCostModel,
    item: WorkoutExercise,
    goal: FitnessGoal,
    adjustment: ExperienceAdjustment,
    params: FormatParameters,
) -> int:
    movement = movement_type(item.exercise)
    sets = max(1, item.sets)
    reps = max(1, item.reps)
    tempo = _rep_tempo(cost, movement, reps) / max(0.5, adjustment.tempo_factor)
    working = sets * reps * tempo
    rest = max(0, sets - 1) * _rest_interval(cost, goal, movement) * adjustment.rest_multiplier * params.rest_factor
    setup = _setup_seconds(cost, equipment_archetype(item.exercise)) * adjustment.setup_multiplier
    warmup = 0.0
    if item.warmup_set_count > 0 and movement == COMPOUND:
        warmup = float(item.warmup_set_count * cost.warmup_set_seconds)
    total = (working + rest + setup + warmup + cost.transition_seconds) * params.time_multiplier
    return math.ceil(total)


def _estimate_time_tracked_exercise(
    cost: TimeCostModel,
    item: WorkoutExercise,
    goal: FitnessGoal,
    adjustment: ExperienceAdjustment,
    params: FormatParameters,
) -> int:
    working = _time_tracked_working_seconds(item)
    sets = max(1, len(item.flexible_sets) if item.flexible_sets else item.sets)
    rest_per_set = item.rest_time if item.rest_time > 0 else _rest_interval(cost, goal, ISOLATION)
    rest = max(0, sets - 1) * rest_per_set * adjustment.rest_multiplier * params.rest_factor
    setup = _setup_seconds(cost, equipment_archetype(item.exercise)) * adjustment.setup_multiplier
    total = (working + rest + setup + cost.transition_seconds) * params.time_multiplier
    return math.ceil(total)


def _time_tracked_working_seconds(item: WorkoutExercise) -> int:
    if not item.flexible_sets:
        per_set = 180 if item.tracking_type == TrackingType.ROUNDS else 60
        return max(1, item.sets) * per_set
    total = 0
    for flexible in item.flexible_sets:
        if flexible.duration is None:
            continue
        total += int(flexible.duration) * (flexible.rounds if flexible.rounds is not None else 1)
    return max(total, 45)


def movement_type(exercise: Exercise) -> str:
    name = exercise.name.lower()
    body_part = exercise.body_part.lower()
    if any(keyword in name for keyword in _COMPOUND_NAME_KEYWORDS):
        return COMPOUND
    if ("back" in body_part or "legs" in body_part) and any(k in name for k in ("press", "row", "squat")):
        return COMPOUND
    if "compound" in exercise.exercise_type.lower():
        return COMPOUND
    return ISOLATION


def equipment_archetype(exercise: Exercise) -> str:
    equipment = exercise.equipment.lower()
    if any(k in equipment for k in ("barbell", "smith", "leverage", "ez bar")):
        return "barbell"
    if "dumbbell" in equipment:
        return "dumbbell"
    if "kettlebell" in equipment:
        return "kettlebell"
    if "cable" in equipment or "pulldown" in equipment:
        return "cable"
    if any(k in equipment for k in ("machine", "leg press", "hammerstrength")):
        return "machine"
    if "band" in equipment:
        return "band"
    if "sled" in equipment:
        return "sled"
    if any(k in equipment for k in ("body weight", "bodyweight", "weighted", "suspension", "rings")):
        return "bodyweight"
    if any(k in equipment for k in ("medicine", "battle rope", "bosu")):
        return "specialty"
    return "bodyweight"


def _rep_bucket(reps: int) -> str:
    if reps <= 5:
        return "1-5"
    if reps <= 8:
        return "6-8"
    if reps <= 12:
        return "8-12"
    return "12-20"


def _rep_tempo(cost: TimeCostModel, movement: str, reps: int) -> float:
    tempo = cost.rep_tempos.get(movement, {}).get(_rep_bucket(reps))
    if tempo is not None:
        return tempo
    return 3.0 if movement == COMPOUND else 2.8


def _rest_interval(cost: TimeCostModel, goal: FitnessGoal, movement: str) -> int:
    entry = cost.rest_intervals.get(goal.normalized.value) or cost.rest_intervals.get(FitnessGoal.GENERAL.value)
    if entry is not None:
        return entry.compound if movement == COMPOUND else entry.isolation
    return 90 if movement == COMPOUND else 60


def _setup_seconds(cost: TimeCostModel, archetype: str) -> float:
    if archetype in cost.setup_seconds:
        return cost.setup_seconds[archetype]
    return cost.setup_seconds.get("default", 15.0)


def _experience_adjustment(cost: TimeCostModel, level: ExperienceLevel) -> ExperienceAdjustment:
    return cost.experience_adjustments.get(level.value) or ExperienceAdjustment()


def _format_parameters(cost: TimeCostModel, format: TrainingFormat) -> FormatParameters:
    entry = cost.density_formats.get(format.value)
    if entry is None:
        return FormatParameters()
    return FormatParameters(time_multiplier=entry.time_multiplier, rest_factor=max(0.2, 1.0 - entry.rest_compression))


def _per_movement_estimate(
    cost: TimeCostModel,
    goal: FitnessGoal,
    movement: str,
    sets: int,
    reps: int,
    adjustment: ExperienceAdjustment,
    params: FormatParameters,
) -> float:
    tempo = _rep_tempo(cost, movement, reps) / max(0.5, adjustment.tempo_factor)
    working = sets * reps * tempo
    rest = max(0, sets - 1) * _rest_interval(cost, goal, movement) * adjustment.rest_multiplier * params.rest_factor
    setup = _setup_seconds(cost, _DEFAULT_ARCHETYPE[movement]) * adjustment.setup_multiplier
    warmup = cost.warmup_set_seconds if movement == COMPOUND else 0
    return (working + rest + setup + warmup + cost.transition_seconds) * params.time_multiplier
