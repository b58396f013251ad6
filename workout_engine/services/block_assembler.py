"""Manual superset/circuit creation over a workout's block list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from workout_engine.models import (
    BlockExercise,
    BlockType,
    IntervalScheme,
    RepScheme,
    SchemeType,
    TrackingType,
    Workout,
    WorkoutBlock,
    WorkoutExercise,
)

logger = logging.getLogger(__name__)

CIRCUIT_MIN_EXERCISES = 3


class BlockCreationError(ValueError):
    pass


class InvalidSelection(BlockCreationError):
    def __init__(self, message: str = "Select at least two exercises to build a superset or circuit."):
        super().__init__(message)


class IndexOutOfRange(BlockCreationError):
    def __init__(self, message: str = "One or more selected exercises is no longer available."):
        super().__init__(message)


@dataclass(frozen=True)
class BlockCreationResult:
    workout: Workout
    created_block: WorkoutBlock


def blocks_from_exercises(workout: Workout) -> tuple[WorkoutBlock, ...]:
    """Group a legacy flat workout into a single standard block."""
    exercises = tuple(
        BlockExercise(
            exercise=item.exercise,
            scheme_type=SchemeType.REP,
            rep_scheme=RepScheme(sets=item.sets, reps=item.reps, rest_sec=item.rest_time),
        )
        for item in workout.exercises
    )
    return (WorkoutBlock(type=BlockType.STANDARD, exercises=exercises),)


def block_program(workout: Workout) -> tuple[WorkoutBlock, ...]:
    if workout.blocks is not None:
        return workout.blocks
    return blocks_from_exercises(workout)


def to_block_exercise(item: WorkoutExercise) -> BlockExercise:
    if item.tracking_type == TrackingType.TIME_ONLY and item.flexible_sets:
        duration = item.flexible_sets[0].duration
        if duration is not None:
            return BlockExercise(
                exercise=item.exercise,
                scheme_type=SchemeType.INTERVAL,
                interval_scheme=IntervalScheme(work_sec=int(duration), rest_sec=item.rest_time),
            )
    return BlockExercise(
        exercise=item.exercise,
        scheme_type=SchemeType.REP,
        rep_scheme=RepScheme(sets=item.sets, reps=item.reps, rest_sec=item.rest_time),
    )


def _occurrence_positions(workout: Workout) -> dict[int, list[int]]:
    positions: dict[int, list[int]] = {}
    for idx, item in enumerate(workout.exercises):
        positions.setdefault(item.exercise.id, []).append(idx)
    return positions


def create_block(workout: Workout, selected_indices: Iterable[int]) -> BlockCreationResult:
    """Turn the selected flat-list positions into a superset (2) or circuit (3+).

    The selected exercises are pulled out of whichever blocks held them; blocks
    left empty are dropped and the new block takes the place of the first block
    that lost an exercise, or goes last when none did. The flat exercise list is
    returned unchanged.
    """
    indices = sorted(set(selected_indices))
    if len(indices) < 2:
        raise InvalidSelection()
    if any(idx < 0 or idx >= len(workout.exercises) for idx in indices):
        raise IndexOutOfRange()

    selected = [workout.exercises[idx] for idx in indices]
    rest_values = [item.rest_time for item in selected]
    new_block = WorkoutBlock(
        type=BlockType.CIRCUIT if len(indices) >= CIRCUIT_MIN_EXERCISES else BlockType.SUPERSET,
        exercises=tuple(to_block_exercise(item) for item in selected),
        rounds=1,
        rest_between_exercises=min(rest_values),
        rest_between_rounds=max(rest_values),
    )

    selected_set = set(indices)
    positions = _occurrence_positions(workout)
    cursor: dict[int, int] = {}
    processed: list[WorkoutBlock] = []
    insertion_index: Optional[int] = None

    for block in block_program(workout):
        kept: list[BlockExercise] = []
        removed = False
        for block_exercise in block.exercises:
            exercise_id = block_exercise.exercise.id
            used = cursor.get(exercise_id, 0)
            occurrences = positions.get(exercise_id, [])
            mapped = occurrences[used] if used < len(occurrences) else None
            cursor[exercise_id] = used + 1
            if mapped is not None and mapped in selected_set:
                removed = True
                continue
            kept.append(block_exercise)

        if insertion_index is None and removed:
            insertion_index = len(processed)
        if kept:
            processed.append(replace(block, exercises=tuple(kept)) if removed else block)

    target = insertion_index if insertion_index is not None else len(processed)
    processed.insert(target, new_block)
    logger.info(
        "Created %s block from %d exercises at position %d",
        new_block.type.value,
        len(indices),
        target,
        extra={"ctx_workout_id": workout.id, "ctx_block_id": new_block.id},
    )
    return BlockCreationResult(workout=replace(workout, blocks=tuple(processed)), created_block=new_block)
