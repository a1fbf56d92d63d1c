from __future__ import annotations

# enumerations and objective variants
from .variants import (
    TAGGED_CONTEXT,
    Anomaly,
    Biome,
    DreadnoughtKind,
    MissionWarning,
    PrimaryObjective,
    PrimaryObjectiveKind,
    SecondaryObjective,
    SecondaryObjectiveKind,
)

# report models
from .core import (
    DATE_FORMAT,
    RESET_TIME,
    STAGE_COUNT,
    EventSchedule,
    ReportInput,
    ScheduleWindow,
    Stage,
)

# run bookkeeping
from .run_status import RunStatus, StageStatus

__all__ = [
    "TAGGED_CONTEXT",
    "Anomaly",
    "Biome",
    "DreadnoughtKind",
    "MissionWarning",
    "PrimaryObjective",
    "PrimaryObjectiveKind",
    "SecondaryObjective",
    "SecondaryObjectiveKind",
    "DATE_FORMAT",
    "RESET_TIME",
    "STAGE_COUNT",
    "EventSchedule",
    "ReportInput",
    "ScheduleWindow",
    "Stage",
    "RunStatus",
    "StageStatus",
]
