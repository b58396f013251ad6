"""Domain types for session structuring, block assembly and plan validation.

Everything here is an immutable value. Services build new values instead of
mutating the ones they receive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from uuid import uuid4


class ExerciseRole(str, Enum):
    PRIMARY_COMPOUND = "primary_compound"
    SECONDARY_COMPOUND = "secondary_compound"
    ISOLATION = "isolation"

    @property
    def display_name(self) -> str:
        return {
            ExerciseRole.PRIMARY_COMPOUND: "Primary Compound",
            ExerciseRole.SECONDARY_COMPOUND: "Secondary Compound",
            ExerciseRole.ISOLATION: "Isolation",
        }[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ExerciseRole"]:
        """Return the role for a stored label, or None when the label is missing or unknown."""
        if not value:
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class FitnessGoal(str, Enum):
    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    ENDURANCE = "endurance"
    BALANCED = "balanced"
    POWER = "power"
    GENERAL = "general"
    TONE = "tone"
    POWERLIFTING = "powerlifting"
    SPORT = "sport"
    OLYMPIC_WEIGHTLIFTING = "olympic_weightlifting"
    CIRCUIT_TRAINING = "circuit_training"

    @property
    def normalized(self) -> "FitnessGoal":
        """Collapse goals onto the keys used by the time cost model."""
        return _GOAL_NORMALIZATION.get(self, self)


_GOAL_NORMALIZATION = {
    FitnessGoal.POWER: FitnessGoal.STRENGTH,
    FitnessGoal.TONE: FitnessGoal.HYPERTROPHY,
    FitnessGoal.BALANCED: FitnessGoal.GENERAL,
    FitnessGoal.SPORT: FitnessGoal.GENERAL,
    FitnessGoal.ENDURANCE: FitnessGoal.CIRCUIT_TRAINING,
}


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WorkoutDuration(str, Enum):
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    FORTY_FIVE_MINUTES = "45m"
    ONE_HOUR = "1h"
    ONE_AND_HALF_HOURS = "1.5h"
    TWO_HOURS = "2h"

    @property
    def minutes(self) -> int:
        return {
            WorkoutDuration.FIFTEEN_MINUTES: 15,
            WorkoutDuration.THIRTY_MINUTES: 30,
            WorkoutDuration.FORTY_FIVE_MINUTES: 45,
            WorkoutDuration.ONE_HOUR: 60,
            WorkoutDuration.ONE_AND_HALF_HOURS: 90,
            WorkoutDuration.TWO_HOURS: 120,
        }[self]


class TrainingFormat(str, Enum):
    STRAIGHT_SETS = "straight_sets"
    SUPERSET = "superset"
    CIRCUIT_3 = "circuit_3"
    CIRCUIT_4 = "circuit_4"
    EMOM = "emom"


class TrackingType(str, Enum):
    REPS_WEIGHT = "reps_weight"
    REPS_ONLY = "reps_only"
    TIME_ONLY = "time_only"
    HOLD_TIME = "hold_time"
    TIME_DISTANCE = "time_distance"
    ROUNDS = "rounds"


class BlockType(str, Enum):
    STANDARD = "standard"
    SUPERSET = "superset"
    CIRCUIT = "circuit"


class SchemeType(str, Enum):
    REP = "rep"
    INTERVAL = "interval"


@dataclass(frozen=True)
class Exercise:
    id: int
    name: str
    equipment: str = ""
    synergist: str = ""
    exercise_role: Optional[str] = None
    exercise_type: str = ""
    body_part: str = ""
    target: str = ""


@dataclass(frozen=True)
class ExerciseSlot:
    role: ExerciseRole
    rep_range: str


@dataclass(frozen=True)
class FlexibleSet:
    duration: Optional[float] = None
    rounds: Optional[int] = None


@dataclass(frozen=True)
class WorkoutExercise:
    """One entry of a workout's flat exercise list."""

    exercise: Exercise
    sets: int
    reps: int
    rest_time: int
    weight: Optional[float] = None
    tracking_type: Optional[TrackingType] = None
    flexible_sets: tuple[FlexibleSet, ...] = ()
    warmup_set_count: int = 0


@dataclass(frozen=True)
class RepScheme:
    sets: int
    reps: Optional[int] = None
    rir: Optional[int] = None
    rest_sec: Optional[int] = None


@dataclass(frozen=True)
class IntervalScheme:
    work_sec: int
    rest_sec: int
    target_reps: Optional[int] = None


@dataclass(frozen=True)
class BlockExercise:
    exercise: Exercise
    scheme_type: SchemeType
    rep_scheme: Optional[RepScheme] = None
    interval_scheme: Optional[IntervalScheme] = None


@dataclass(frozen=True)
class WorkoutBlock:
    type: BlockType
    exercises: tuple[BlockExercise, ...]
    rounds: int = 1
    rest_between_exercises: Optional[int] = None
    rest_between_rounds: Optional[int] = None
    id: str = field(default_factory=lambda: uuid4().hex)


@dataclass(frozen=True)
class Workout:
    """A flat exercise list plus an optional block grouping over the same exercises."""

    exercises: tuple[WorkoutExercise, ...]
    blocks: Optional[tuple[WorkoutBlock, ...]] = None
    title: str = ""
    fitness_goal: Optional[FitnessGoal] = None
    estimated_duration: Optional[int] = None
    id: str = field(default_factory=lambda: uuid4().hex)


@dataclass(frozen=True)
class CandidateExercise:
    """One entry of an externally generated plan."""

    exercise_id: int
    sets: int
    reps: int
    muscle_group: str = ""
