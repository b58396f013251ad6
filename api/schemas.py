from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from workout_engine.models import (
    BlockType,
    ExerciseRole,
    ExperienceLevel,
    FitnessGoal,
    SchemeType,
    TrainingFormat,
    WorkoutDuration,
)


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SimpleStatusResponse(BaseModel):
    status: str


class ClassificationOut(BaseModel):
    role: ExerciseRole
    display_name: str


class SlotOut(_FromDomain):
    role: ExerciseRole
    rep_range: str
    target_reps: int = 0


class SessionStructureOut(BaseModel):
    goal: FitnessGoal
    total: int
    description: str
    slots: list[SlotOut]
    role_counts: dict[ExerciseRole, int]


class EquipmentScoresOut(BaseModel):
    goal: FitnessGoal
    role: ExerciseRole
    scores: dict[str, int]
    top_equipment: list[str]


class EquipmentScoreOut(BaseModel):
    equipment: str
    normalized: str
    score: int
    tier: int


class ExerciseOut(_FromDomain):
    id: int
    name: str
    equipment: str
    exercise_role: Optional[str] = None


class RepSchemeOut(_FromDomain):
    sets: int
    reps: Optional[int] = None
    rir: Optional[int] = None
    rest_sec: Optional[int] = None


class IntervalSchemeOut(_FromDomain):
    work_sec: int
    rest_sec: int
    target_reps: Optional[int] = None


class BlockExerciseOut(_FromDomain):
    exercise: ExerciseOut
    scheme_type: SchemeType
    rep_scheme: Optional[RepSchemeOut] = None
    interval_scheme: Optional[IntervalSchemeOut] = None


class WorkoutBlockOut(_FromDomain):
    id: str
    type: BlockType
    exercises: list[BlockExerciseOut]
    rounds: int
    rest_between_exercises: Optional[int] = None
    rest_between_rounds: Optional[int] = None


class BlockCreationOut(BaseModel):
    workout_id: str
    blocks: list[WorkoutBlockOut]
    created_block: WorkoutBlockOut


class SessionBudgetOut(_FromDomain):
    duration: WorkoutDuration
    fitness_goal: FitnessGoal
    experience_level: ExperienceLevel
    format: TrainingFormat
    warmup_seconds: int
    cooldown_seconds: int
    buffer_seconds: int
    available_work_seconds: int
    max_work_seconds: int


class PlanValidationOut(BaseModel):
    valid: bool
    warnings: list[str]
