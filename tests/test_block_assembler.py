"""Tests for manual superset/circuit creation."""

from __future__ import annotations

import pytest

from workout_engine.models import (
    BlockExercise,
    BlockType,
    Exercise,
    FlexibleSet,
    RepScheme,
    SchemeType,
    TrackingType,
    Workout,
    WorkoutBlock,
    WorkoutExercise,
)
from workout_engine.services.block_assembler import (
    IndexOutOfRange,
    InvalidSelection,
    block_program,
    create_block,
    to_block_exercise,
)


def _item(exercise_id: int, rest: int = 60, name: str = "") -> WorkoutExercise:
    exercise = Exercise(id=exercise_id, name=name or f"Exercise {exercise_id}", equipment="Dumbbell")
    return WorkoutExercise(exercise=exercise, sets=3, reps=10, rest_time=rest)


def _block(*items: WorkoutExercise) -> WorkoutBlock:
    return WorkoutBlock(
        type=BlockType.STANDARD,
        exercises=tuple(
            BlockExercise(
                exercise=item.exercise,
                scheme_type=SchemeType.REP,
                rep_scheme=RepScheme(sets=item.sets, reps=item.reps, rest_sec=item.rest_time),
            )
            for item in items
        ),
    )


def _ids(block: WorkoutBlock) -> list[int]:
    return [entry.exercise.id for entry in block.exercises]


# --- Selection validation ---

@pytest.mark.parametrize("selection", [[], [1], [1, 1]])
def test_fewer_than_two_distinct_indices_rejected(selection):
    workout = Workout(exercises=(_item(1), _item(2), _item(3)))
    with pytest.raises(InvalidSelection):
        create_block(workout, selection)


@pytest.mark.parametrize("selection", [[0, 5], [-1, 0]])
def test_out_of_range_indices_rejected(selection):
    workout = Workout(exercises=(_item(1), _item(2), _item(3)))
    with pytest.raises(IndexOutOfRange):
        create_block(workout, selection)


def test_error_messages_are_user_facing():
    assert "at least two" in str(InvalidSelection())
    assert "no longer available" in str(IndexOutOfRange())


# --- Legacy flat workouts ---

def test_legacy_workout_gets_superset_and_remainder_block():
    workout = Workout(exercises=(_item(1), _item(2, rest=45), _item(3, rest=90), _item(4)))
    result = create_block(workout, [2, 1])

    blocks = result.workout.blocks
    assert len(blocks) == 2
    assert blocks[0] is result.created_block
    assert blocks[0].type == BlockType.SUPERSET
    assert _ids(blocks[0]) == [2, 3]
    assert blocks[0].rest_between_exercises == 45
    assert blocks[0].rest_between_rounds == 90
    assert blocks[0].rounds == 1
    assert blocks[1].type == BlockType.STANDARD
    assert _ids(blocks[1]) == [1, 4]


def test_three_selections_make_a_circuit():
    workout = Workout(exercises=(_item(1), _item(2), _item(3)))
    result = create_block(workout, [0, 1, 2])
    assert result.created_block.type == BlockType.CIRCUIT
    # the only block was emptied and dropped
    assert result.workout.blocks == (result.created_block,)


def test_flat_list_and_input_are_unchanged():
    workout = Workout(exercises=(_item(1), _item(2), _item(3)))
    result = create_block(workout, [0, 1])
    assert workout.blocks is None
    assert result.workout.exercises == workout.exercises
    assert result.workout.id == workout.id


def test_block_program_falls_back_to_single_standard_block():
    workout = Workout(exercises=(_item(1), _item(2)))
    blocks = block_program(workout)
    assert len(blocks) == 1
    assert blocks[0].type == BlockType.STANDARD
    assert blocks[0].exercises[0].rep_scheme == RepScheme(sets=3, reps=10, rest_sec=60)


# --- Existing blocks ---

def test_repeated_exercise_matched_by_occurrence():
    a1, b, a2, c = _item(1), _item(2), _item(1), _item(3)
    workout = Workout(exercises=(a1, b, a2, c), blocks=(_block(a1, b), _block(a2, c)))

    result = create_block(workout, [1, 2])

    blocks = result.workout.blocks
    assert blocks[0] is result.created_block
    assert _ids(blocks[0]) == [2, 1]
    assert _ids(blocks[1]) == [1]
    assert _ids(blocks[2]) == [3]


def test_untouched_blocks_keep_identity_and_emptied_blocks_drop():
    a1, b, a2, c = _item(1), _item(2), _item(1), _item(3)
    first, second = _block(a1, b), _block(a2, c)
    workout = Workout(exercises=(a1, b, a2, c), blocks=(first, second))

    result = create_block(workout, [2, 3])

    blocks = result.workout.blocks
    assert len(blocks) == 2
    assert blocks[0] is first
    assert blocks[1] is result.created_block


def test_new_block_appended_when_no_block_loses_an_exercise():
    a, b, c = _item(1), _item(2), _item(3)
    existing = _block(a)
    workout = Workout(exercises=(a, b, c), blocks=(existing,))

    result = create_block(workout, [1, 2])

    assert result.workout.blocks == (existing, result.created_block)


# --- Schemes ---

def test_timed_exercise_becomes_interval_scheme():
    plank = WorkoutExercise(
        exercise=Exercise(id=9, name="Plank"),
        sets=3,
        reps=0,
        rest_time=15,
        tracking_type=TrackingType.TIME_ONLY,
        flexible_sets=(FlexibleSet(duration=30),),
    )
    entry = to_block_exercise(plank)
    assert entry.scheme_type == SchemeType.INTERVAL
    assert entry.interval_scheme.work_sec == 30
    assert entry.interval_scheme.rest_sec == 15
    assert entry.rep_scheme is None


def test_timed_exercise_without_duration_keeps_rep_scheme():
    plank = WorkoutExercise(
        exercise=Exercise(id=9, name="Plank"),
        sets=3,
        reps=0,
        rest_time=15,
        tracking_type=TrackingType.TIME_ONLY,
    )
    entry = to_block_exercise(plank)
    assert entry.scheme_type == SchemeType.REP
    assert entry.rep_scheme == RepScheme(sets=3, reps=0, rest_sec=15)
