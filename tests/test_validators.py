"""Tests for Pydantic input validation models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from workout_engine.models import BlockType, SchemeType, TrackingType
from workout_engine.validators import (
    ClassifyInput,
    CreateBlockInput,
    ExerciseInput,
    PlanValidationInput,
    SessionBudgetInput,
    WorkoutExerciseInput,
)


def _exercise(exercise_id=1, name="Bench Press"):
    return {"id": exercise_id, "name": name, "equipment": "Barbell"}


def _workout_exercise(exercise_id=1, **overrides):
    data = {"exercise": _exercise(exercise_id), "sets": 3, "reps": 10, "rest_time": 60}
    data.update(overrides)
    return data


# --- ExerciseInput ---

def test_exercise_valid():
    exercise = ExerciseInput(**_exercise()).to_domain()
    assert exercise.name == "Bench Press"
    assert exercise.exercise_role is None


def test_exercise_invalid_id():
    with pytest.raises(ValidationError):
        ExerciseInput(id=0, name="Bench Press")


def test_exercise_empty_name():
    with pytest.raises(ValidationError):
        ExerciseInput(id=1, name="")


# --- ClassifyInput ---

def test_classify_by_name():
    body = ClassifyInput(name="  Lat Pulldown ")
    assert body.name == "Lat Pulldown"


def test_classify_requires_exercise_or_name():
    with pytest.raises(ValidationError):
        ClassifyInput()


# --- WorkoutExerciseInput ---

def test_workout_exercise_negative_sets():
    with pytest.raises(ValidationError):
        WorkoutExerciseInput(**_workout_exercise(sets=-1))


def test_workout_exercise_flexible_sets():
    item = WorkoutExerciseInput(
        **_workout_exercise(tracking_type="time_only", flexible_sets=[{"duration": 30}])
    ).to_domain()
    assert item.tracking_type == TrackingType.TIME_ONLY
    assert item.flexible_sets[0].duration == 30
    assert item.flexible_sets[0].rounds is None


# --- CreateBlockInput ---

def test_create_block_without_blocks_is_legacy():
    body = CreateBlockInput(workout={"exercises": [_workout_exercise(1), _workout_exercise(2)]}, selected_indices=[0, 1])
    assert body.to_domain().blocks is None


def test_create_block_builds_existing_blocks():
    body = CreateBlockInput(
        workout={
            "exercises": [
                _workout_exercise(1),
                _workout_exercise(2, tracking_type="time_only", flexible_sets=[{"duration": 40}]),
            ]
        },
        blocks=[{"type": "superset", "exercise_indices": [0, 1], "rest_between_rounds": 90}],
        selected_indices=[0, 1],
    )
    workout = body.to_domain()
    assert len(workout.blocks) == 1
    block = workout.blocks[0]
    assert block.type == BlockType.SUPERSET
    assert block.rest_between_rounds == 90
    assert [entry.scheme_type for entry in block.exercises] == [SchemeType.REP, SchemeType.INTERVAL]


def test_create_block_rejects_block_index_out_of_range():
    with pytest.raises(ValidationError):
        CreateBlockInput(
            workout={"exercises": [_workout_exercise(1)]},
            blocks=[{"exercise_indices": [0, 3]}],
            selected_indices=[0],
        )


def _repeated_squat_workout():
    return {
        "exercises": [
            _workout_exercise(1),
            _workout_exercise(2),
            _workout_exercise(1),
            _workout_exercise(3),
        ]
    }


def test_create_block_rejects_blocks_out_of_flat_order():
    with pytest.raises(ValidationError):
        CreateBlockInput(
            workout=_repeated_squat_workout(),
            blocks=[{"exercise_indices": [2]}, {"exercise_indices": [0, 1, 3]}],
            selected_indices=[0, 1],
        )


def test_create_block_rejects_repeated_block_position():
    with pytest.raises(ValidationError):
        CreateBlockInput(
            workout=_repeated_squat_workout(),
            blocks=[{"exercise_indices": [0, 0, 1, 2]}],
            selected_indices=[1, 2],
        )


def test_create_block_accepts_ordered_blocks_with_gaps():
    body = CreateBlockInput(
        workout=_repeated_squat_workout(),
        blocks=[{"exercise_indices": [0, 1]}, {"exercise_indices": [3]}],
        selected_indices=[0, 1],
    )
    assert [len(block.exercises) for block in body.to_domain().blocks] == [2, 1]


def test_create_block_requires_exercises():
    with pytest.raises(ValidationError):
        CreateBlockInput(workout={"exercises": []}, selected_indices=[0, 1])


# --- Plans and budgets ---

def test_plan_validation_drops_blank_muscles():
    body = PlanValidationInput(
        plan=[{"exercise_id": 1, "sets": 3, "reps": 10}],
        candidate_ids=[1],
        requested_muscles=["Chest", " ", "", " Back "],
        fitness_goal="hypertrophy",
    )
    assert body.requested_muscles == ["Chest", "Back"]
    assert body.duration is None


def test_plan_validation_unknown_goal():
    with pytest.raises(ValidationError):
        PlanValidationInput(plan=[], candidate_ids=[], fitness_goal="yoga")


def test_budget_input_defaults():
    body = SessionBudgetInput(duration="45m", fitness_goal="strength")
    assert body.experience_level.value == "intermediate"
    assert body.warm_up_enabled is True


def test_budget_input_invalid_duration():
    with pytest.raises(ValidationError):
        SessionBudgetInput(duration="20m", fitness_goal="strength")


def test_plan_validation_requires_candidate_ids():
    with pytest.raises(ValidationError):
        PlanValidationInput(plan=[{"exercise_id": 1, "sets": 3, "reps": 10}], fitness_goal="hypertrophy")


def test_plan_validation_accepts_empty_candidate_ids():
    body = PlanValidationInput(plan=[], candidate_ids=[], fitness_goal="strength")
    assert body.candidate_ids == []
