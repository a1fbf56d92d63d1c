from __future__ import annotations

from datetime import date, datetime

from .schemas import (
    RESET_TIME,
    Biome,
    DreadnoughtKind,
    EventSchedule,
    MissionWarning,
    PrimaryObjective,
    PrimaryObjectiveKind as P,
    ReportInput,
    ScheduleWindow,
    SecondaryObjective,
    SecondaryObjectiveKind as S,
    Stage,
)


def build_example() -> ReportInput:
    """
    Canonical example input (week of 2023-07-06).

    Written to the example file on first run so users have a template
    to copy into the real input file.
    """
    return ReportInput(
        window=ScheduleWindow(
            start=datetime.combine(date(2023, 7, 6), RESET_TIME),
            end=datetime.combine(date(2023, 7, 13), RESET_TIME),
        ),
        deep_dive=EventSchedule(
            codename="High Contact",
            biome=Biome.GLACIAL_STRATA,
            seed=3116029769,
            stages=(
                Stage(
                    primary_objective=PrimaryObjective.of(P.ON_SITE_REFINING),
                    secondary_objective=SecondaryObjective.of(S.MINING_150),
                ),
                Stage(
                    primary_objective=PrimaryObjective.of(P.MINING_EXPEDITION_200),
                    secondary_objective=SecondaryObjective.of(S.EGG),
                    warning=MissionWarning.REGENERATIVE_BUGS,
                ),
                Stage(
                    primary_objective=PrimaryObjective.of(P.INDUSTRIAL_SABOTAGE),
                    secondary_objective=SecondaryObjective.of(S.MINI_MULES),
                    warning=MissionWarning.EXPLODER_INFESTATION,
                ),
            ),
        ),
        elite_deep_dive=EventSchedule(
            codename="Uncovered Arm",
            biome=Biome.MAGMA_CORE,
            seed=1688014532,
            stages=(
                Stage(
                    primary_objective=PrimaryObjective.of(P.MINING_EXPEDITION_200),
                    secondary_objective=SecondaryObjective.of(S.BLACK_BOX),
                ),
                Stage(
                    primary_objective=PrimaryObjective.of(P.POINT_EXTRACTION_10),
                    secondary_objective=SecondaryObjective.of(S.BLACK_BOX),
                    warning=MissionWarning.SHIELD_DISRUPTION,
                ),
                Stage(
                    primary_objective=PrimaryObjective.of(P.MINI_MULES_3),
                    secondary_objective=SecondaryObjective.of(S.DREADNOUGHT, DreadnoughtKind.HIVEGUARD),
                    warning=MissionWarning.MACTERA_PLAGUE,
                ),
            ),
        ),
    )
