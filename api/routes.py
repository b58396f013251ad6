from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from api.schemas import (
    BlockCreationOut,
    ClassificationOut,
    EquipmentScoreOut,
    EquipmentScoresOut,
    PlanValidationOut,
    SessionBudgetOut,
    SessionStructureOut,
    SimpleStatusResponse,
    SlotOut,
    WorkoutBlockOut,
)
from workout_engine.config import get_settings
from workout_engine.models import ExerciseRole, FitnessGoal
from workout_engine.services import equipment_scoring, session_structure
from workout_engine.services.block_assembler import BlockCreationError, create_block
from workout_engine.services.plan_validator import validate_candidate_plan
from workout_engine.services.role_classifier import classify, classify_name
from workout_engine.services.time_estimator import make_session_budget
from workout_engine.validators import ClassifyInput, CreateBlockInput, PlanValidationInput, SessionBudgetInput

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1")


@router.get("/health", response_model=SimpleStatusResponse, tags=["system"])
def health():
    return SimpleStatusResponse(status="ok")


@router.post("/exercises/classify", response_model=ClassificationOut, tags=["exercises"])
def classify_exercise(body: ClassifyInput):
    if body.exercise is not None:
        role = classify(body.exercise.to_domain())
    else:
        role = classify_name(body.name or "", body.synergist)
    return ClassificationOut(role=role, display_name=role.display_name)


@router.get("/structure/{goal}/slots", response_model=SessionStructureOut, tags=["structure"])
def session_slots(goal: FitnessGoal, total: int = Query(..., ge=0, le=50)):
    slots = session_structure.get_exercise_slots(goal, total)
    return SessionStructureOut(
        goal=goal,
        total=total,
        description=session_structure.get_description(goal),
        slots=[
            SlotOut(role=slot.role, rep_range=slot.rep_range, target_reps=session_structure.get_target_reps(slot.rep_range))
            for slot in slots
        ],
        role_counts=session_structure.get_role_counts(goal, total),
    )


@router.get("/equipment/score", response_model=EquipmentScoreOut, tags=["equipment"])
def equipment_score(goal: FitnessGoal, role: ExerciseRole, equipment: str = Query(..., min_length=1)):
    return EquipmentScoreOut(
        equipment=equipment,
        normalized=equipment_scoring.normalize_equipment(equipment),
        score=equipment_scoring.get_score(goal, role, equipment),
        tier=equipment_scoring.get_equipment_tier(equipment),
    )


@router.get("/equipment/{goal}/{role}", response_model=EquipmentScoresOut, tags=["equipment"])
def equipment_scores(goal: FitnessGoal, role: ExerciseRole, count: Optional[int] = Query(None, ge=0, le=20)):
    top = count if count is not None else get_settings().default_top_equipment
    return EquipmentScoresOut(
        goal=goal,
        role=role,
        scores=dict(equipment_scoring.get_all_scores(goal, role)),
        top_equipment=equipment_scoring.get_top_equipment(goal, role, top),
    )


@router.post("/workouts/blocks", response_model=BlockCreationOut, status_code=201, tags=["workouts"])
def create_workout_block(body: CreateBlockInput):
    try:
        result = create_block(body.to_domain(), body.selected_indices)
    except BlockCreationError as exc:
        logger.info("Block creation rejected: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BlockCreationOut(
        workout_id=result.workout.id,
        blocks=[WorkoutBlockOut.model_validate(block) for block in result.workout.blocks or ()],
        created_block=WorkoutBlockOut.model_validate(result.created_block),
    )


@router.post("/budget", response_model=SessionBudgetOut, tags=["plans"])
def session_budget(body: SessionBudgetInput):
    budget = make_session_budget(
        body.duration,
        body.fitness_goal,
        body.experience_level,
        warm_up_enabled=body.warm_up_enabled,
        cool_down_enabled=body.cool_down_enabled,
    )
    return SessionBudgetOut.model_validate(budget)


@router.post("/plans/validate", response_model=PlanValidationOut, tags=["plans"])
def validate_plan(body: PlanValidationInput):
    budget = None
    if body.duration is not None:
        budget = make_session_budget(body.duration, body.fitness_goal, body.experience_level)
    warnings = validate_candidate_plan(
        [item.to_domain() for item in body.plan],
        body.candidate_ids,
        body.requested_muscles,
        body.fitness_goal,
        body.experience_level,
        session_budget=budget,
    )
    return PlanValidationOut(valid=not warnings, warnings=warnings)
