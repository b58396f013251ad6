from workout_engine.models import Exercise, ExerciseRole
from workout_engine.services.role_classifier import (
    classify,
    classify_name,
    keyword_overlaps,
    synergist_count,
)


def _exercise(name: str, role_label=None, synergist: str = "") -> Exercise:
    return Exercise(id=1, name=name, equipment="Barbell", synergist=synergist, exercise_role=role_label)


# --- Precomputed labels ---

def test_precomputed_label_wins_over_name():
    assert classify(_exercise("Toe Touch", role_label="primary_compound")) == ExerciseRole.PRIMARY_COMPOUND


def test_precomputed_isolation_label_wins_over_compound_name():
    assert classify(_exercise("Barbell Back Squat", role_label="isolation")) == ExerciseRole.ISOLATION


def test_unknown_label_falls_back_to_patterns():
    assert classify(_exercise("Lat Pulldown", role_label="heavy")) == ExerciseRole.SECONDARY_COMPOUND


# --- Name patterns ---

def test_back_squat_is_primary_compound():
    assert classify_name("Barbell Back Squat") == ExerciseRole.PRIMARY_COMPOUND


def test_cable_lateral_raise_is_isolation():
    assert classify_name("Cable Lateral Raise") == ExerciseRole.ISOLATION


def test_walking_lunge_is_secondary_compound():
    assert classify_name("Walking Lunge") == ExerciseRole.SECONDARY_COMPOUND


def test_matching_is_case_insensitive():
    assert classify_name("ROMANIAN DEADLIFT") == ExerciseRole.PRIMARY_COMPOUND


def test_overlapping_keyword_resolves_to_secondary():
    # "leg curl" is listed as both secondary compound and isolation
    assert classify_name("Lying Leg Curl") == ExerciseRole.SECONDARY_COMPOUND


def test_keyword_overlaps_are_reported():
    overlaps = keyword_overlaps()
    assert set(overlaps) == {"face pull", "leg curl", "leg extension"}
    assert overlaps["face pull"] == [ExerciseRole.SECONDARY_COMPOUND, ExerciseRole.ISOLATION]


# --- Synergist fallback ---

def test_two_synergists_make_secondary_compound():
    assert classify_name("Mystery Move", "Glutes, Hamstrings") == ExerciseRole.SECONDARY_COMPOUND


def test_blank_synergist_tokens_are_ignored():
    assert synergist_count("Glutes, , ") == 1
    assert classify_name("Mystery Move", "Glutes, , ") == ExerciseRole.ISOLATION


def test_unclassifiable_defaults_to_isolation():
    assert classify_name("Wrist Roller") == ExerciseRole.ISOLATION
    assert classify(_exercise("Wrist Roller")) == ExerciseRole.ISOLATION


def test_role_display_names():
    assert ExerciseRole.PRIMARY_COMPOUND.display_name == "Primary Compound"
    assert ExerciseRole.parse("secondary_compound") == ExerciseRole.SECONDARY_COMPOUND
    assert ExerciseRole.parse("") is None
