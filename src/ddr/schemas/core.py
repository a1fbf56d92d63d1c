from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .variants import Anomaly, Biome, MissionWarning, PrimaryObjective, SecondaryObjective

# Deep Dives rotate at 11:00 UTC; dates in the document carry no time.
RESET_TIME = time(11, 0, 0)
DATE_FORMAT = "%Y-%m-%d"
STAGE_COUNT = 3
SEED_LIMIT = 2 ** 64

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------- Date range ----------
class ScheduleWindow(_Model):
    start: datetime
    end: datetime

    @field_validator("start", "end", mode="before")
    @classmethod
    def _at_reset_time(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, RESET_TIME)
        if isinstance(value, str) and _DATE_RE.fullmatch(value):
            try:
                return datetime.combine(datetime.strptime(value, DATE_FORMAT).date(), RESET_TIME)
            except ValueError:
                pass
        raise PydanticCustomError(
            "malformed_date",
            "expected a YYYY-MM-DD date, got '{value}'",
            {"value": value},
        )

    @field_serializer("start", "end", when_used="json")
    def _date_only(self, value: datetime) -> str:
        return value.date().isoformat()


# ---------- Stage ----------
class Stage(_Model):
    primary_objective: PrimaryObjective
    secondary_objective: SecondaryObjective
    anomaly: Optional[Anomaly] = None
    warning: Optional[MissionWarning] = None


# ---------- Deep Dive ----------
class EventSchedule(_Model):
    """One Deep Dive (regular or elite): a region and three stages."""
    codename: StrictStr
    biome: Biome
    seed: StrictInt
    stages: Tuple[Stage, Stage, Stage]

    @field_validator("seed")
    @classmethod
    def _unsigned_64(cls, value: int) -> int:
        if not 0 <= value < SEED_LIMIT:
            raise PydanticCustomError(
                "seed_out_of_range",
                "seed must be an unsigned 64-bit integer",
            )
        return value

    @field_validator("stages", mode="before")
    @classmethod
    def _three_stages(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and len(value) != STAGE_COUNT:
            raise PydanticCustomError(
                "arity_mismatch",
                "expected {expected} stages, got {actual}",
                {"expected": STAGE_COUNT, "actual": len(value), "subpath": ""},
            )
        return value


# ---------- Report input ----------
class ReportInput(_Model):
    window: ScheduleWindow
    deep_dive: EventSchedule
    elite_deep_dive: EventSchedule
