from datetime import date, datetime

import pytest
from pydantic import ValidationError

from ddr.example import build_example
from ddr.schemas import (
    Biome,
    DreadnoughtKind as D,
    EventSchedule,
    MissionWarning,
    PrimaryObjective,
    PrimaryObjectiveKind as P,
    ScheduleWindow,
    SecondaryObjective,
    SecondaryObjectiveKind as S,
)


def test_enum_sizes():
    assert len(Biome) == 10
    assert len(P) == 14
    assert len(S) == 5
    assert len(D) == 3
    assert len(MissionWarning) == 12


def test_window_from_dates_is_at_reset_time():
    window = ScheduleWindow(start=date(2023, 7, 6), end="2023-07-13")
    assert window.start == datetime(2023, 7, 6, 11, 0)
    assert window.end == datetime(2023, 7, 13, 11, 0)


def test_window_keeps_explicit_datetime():
    window = ScheduleWindow(start=datetime(2023, 7, 6, 9, 15), end=datetime(2023, 7, 13, 9, 15))
    assert window.start.hour == 9


def test_start_after_end_is_accepted():
    window = ScheduleWindow(start="2023-07-13", end="2023-07-06")
    assert window.start > window.end


def test_primary_arity_checked_on_construction():
    with pytest.raises(ValidationError):
        PrimaryObjective.of(P.DREADNOUGHT_2, D.CLASSIC)
    with pytest.raises(ValidationError):
        PrimaryObjective.of(P.ESCORT_DUTY, D.CLASSIC)


def test_secondary_arity_checked_on_construction():
    with pytest.raises(ValidationError):
        SecondaryObjective.of(S.DREADNOUGHT)
    with pytest.raises(ValidationError):
        SecondaryObjective.of(S.BLACK_BOX, D.TWINS)


def test_tagged_string_accepted_on_construction():
    assert PrimaryObjective.model_validate("Escort Duty") == PrimaryObjective.of(P.ESCORT_DUTY)


def test_models_are_frozen_and_hashable():
    info = build_example()
    with pytest.raises(ValidationError):
        info.deep_dive.codename = "Other"
    assert hash(info) == hash(build_example())
    assert info == build_example()


def test_stage_count_enforced():
    dive = build_example().deep_dive
    with pytest.raises(ValidationError):
        EventSchedule(codename="x", biome=Biome.SALT_PITS, seed=1, stages=dive.stages[:2])


def test_objective_serializes_to_tag():
    assert PrimaryObjective.of(P.EGG_4).model_dump() == "4 Eggs"
    assert PrimaryObjective.of(P.DREADNOUGHT_2, D.CLASSIC, D.TWINS).model_dump() == {
        "2 Dreadnoughts": ["Classic", "Twins"],
    }
    assert SecondaryObjective.of(S.DREADNOUGHT, D.TWINS).model_dump() == {"Dreadnought": "Twins"}


@pytest.mark.parametrize("value", ["2023-07-06\n", "２０２３-０７-０６", " 2023-07-06"])
def test_date_format_is_strict_ascii(value):
    with pytest.raises(ValidationError) as ei:
        ScheduleWindow(start=value, end="2023-07-13")
    assert ei.value.errors()[0]["type"] == "malformed_date"
