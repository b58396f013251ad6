"""Pydantic validation models for all external data entry points."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from workout_engine.models import (
    BlockType,
    CandidateExercise,
    Exercise,
    ExperienceLevel,
    FitnessGoal,
    FlexibleSet,
    TrackingType,
    Workout,
    WorkoutBlock,
    WorkoutDuration,
    WorkoutExercise,
)
from workout_engine.services.block_assembler import to_block_exercise


class ExerciseInput(BaseModel):
    id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=200)
    equipment: str = ""
    synergist: str = ""
    exercise_role: Optional[str] = None
    exercise_type: str = ""
    body_part: str = ""
    target: str = ""

    def to_domain(self) -> Exercise:
        return Exercise(**self.model_dump())


class ClassifyInput(BaseModel):
    """Either a full catalog exercise or a bare name (plus synergists)."""

    exercise: Optional[ExerciseInput] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    synergist: str = ""

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def exercise_or_name(self):
        if self.exercise is None and not self.name:
            raise ValueError("either exercise or name is required")
        return self


class FlexibleSetInput(BaseModel):
    duration: Optional[float] = Field(default=None, ge=0)
    rounds: Optional[int] = Field(default=None, ge=0)


class WorkoutExerciseInput(BaseModel):
    exercise: ExerciseInput
    sets: int = Field(ge=0)
    reps: int = Field(ge=0)
    rest_time: int = Field(ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    tracking_type: Optional[TrackingType] = None
    flexible_sets: list[FlexibleSetInput] = Field(default_factory=list)
    warmup_set_count: int = Field(default=0, ge=0)

    def to_domain(self) -> WorkoutExercise:
        return WorkoutExercise(
            exercise=self.exercise.to_domain(),
            sets=self.sets,
            reps=self.reps,
            rest_time=self.rest_time,
            weight=self.weight,
            tracking_type=self.tracking_type,
            flexible_sets=tuple(FlexibleSet(duration=s.duration, rounds=s.rounds) for s in self.flexible_sets),
            warmup_set_count=self.warmup_set_count,
        )


class WorkoutInput(BaseModel):
    title: str = Field(default="", max_length=200)
    exercises: list[WorkoutExerciseInput] = Field(min_length=1)
    fitness_goal: Optional[FitnessGoal] = None
    estimated_duration: Optional[int] = Field(default=None, ge=0)

    def to_domain(self, blocks: Optional[tuple[WorkoutBlock, ...]] = None) -> Workout:
        return Workout(
            exercises=tuple(item.to_domain() for item in self.exercises),
            blocks=blocks,
            title=self.title,
            fitness_goal=self.fitness_goal,
            estimated_duration=self.estimated_duration,
        )


class CandidateExerciseInput(BaseModel):
    exercise_id: int
    sets: int
    reps: int
    muscle_group: str = ""

    def to_domain(self) -> CandidateExercise:
        return CandidateExercise(**self.model_dump())


class SessionBudgetInput(BaseModel):
    duration: WorkoutDuration
    fitness_goal: FitnessGoal
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    warm_up_enabled: bool = True
    cool_down_enabled: bool = True


class PlanValidationInput(BaseModel):
    plan: list[CandidateExerciseInput]
    candidate_ids: list[int]
    requested_muscles: list[str] = Field(default_factory=list)
    fitness_goal: FitnessGoal
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    duration: Optional[WorkoutDuration] = None

    @field_validator("requested_muscles")
    @classmethod
    def drop_blank_muscles(cls, v):
        return [m.strip() for m in v if m and m.strip()]


class BlockGroupInput(BaseModel):
    """An existing block, given as positions into the workout's flat exercise list."""

    type: BlockType = BlockType.STANDARD
    exercise_indices: list[int] = Field(min_length=1)
    rounds: int = Field(default=1, ge=1)
    rest_between_exercises: Optional[int] = Field(default=None, ge=0)
    rest_between_rounds: Optional[int] = Field(default=None, ge=0)


class CreateBlockInput(BaseModel):
    workout: WorkoutInput
    blocks: Optional[list[BlockGroupInput]] = None
    selected_indices: list[int]

    @model_validator(mode="after")
    def block_indices_in_range(self):
        size = len(self.workout.exercises)
        for group in self.blocks or []:
            if any(idx < 0 or idx >= size for idx in group.exercise_indices):
                raise ValueError("block exercise_indices must address the workout's exercises")
        # Block entries are matched back to the flat list by occurrence, so
        # positions must follow flat-list order across all blocks.
        ordered = [idx for group in self.blocks or [] for idx in group.exercise_indices]
        if any(later <= earlier for earlier, later in zip(ordered, ordered[1:])):
            raise ValueError("block exercise_indices must be strictly increasing across blocks")
        return self

    def to_domain(self) -> Workout:
        if self.blocks is None:
            return self.workout.to_domain()
        flat = [item.to_domain() for item in self.workout.exercises]
        blocks = tuple(
            WorkoutBlock(
                type=group.type,
                exercises=tuple(to_block_exercise(flat[idx]) for idx in group.exercise_indices),
                rounds=group.rounds,
                rest_between_exercises=group.rest_between_exercises,
                rest_between_rounds=group.rest_between_rounds,
            )
            for group in self.blocks
        )
        return self.workout.to_domain(blocks=blocks)
