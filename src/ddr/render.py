from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Tuple

from .schemas import EventSchedule, ReportInput, Stage

DEEP_DIVE_TITLE = "DEEP DIVE"
ELITE_DEEP_DIVE_TITLE = "ELITE DEEP DIVE"
NO_MUTATOR = "No Mutator"


def reset_timestamp(end: datetime) -> int:
    """
    Unix timestamp of the reset instant.

    Naive datetimes are read as UTC so the marker does not depend on the
    host timezone.
    """
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    return int(end.timestamp())


def objectives_line(stage: Stage) -> str:
    primary = stage.primary_objective.emoji_repr()
    secondary = stage.secondary_objective.emoji_repr()
    return f"**{primary}** + **{secondary}**"


def mutator_line(stage: Stage) -> str:
    parts: List[str] = []
    if stage.anomaly is not None:
        parts.append(f"**{stage.anomaly.emoji_repr()}**")
    if stage.warning is not None:
        parts.append(f"**{stage.warning.emoji_repr()}**")
    if not parts:
        return f"**{NO_MUTATOR}**"
    return " ".join(parts)


def region_line(dive: EventSchedule) -> str:
    return f"Region: **{dive.biome.as_str()}** | Code Name: **{dive.codename}**"


def stages_lines(stages: Tuple[Stage, ...]) -> List[str]:
    return [
        f"Stage {n}: {objectives_line(stage)} | {mutator_line(stage)}"
        for n, stage in enumerate(stages, 1)
    ]


def schedule_block(title: str, dive: EventSchedule) -> str:
    lines = [f":Deep_Dive: **{title}** :Deep_Dive:", region_line(dive)]
    lines.extend(stages_lines(dive.stages))
    return "\n".join(lines) + "\n"


def render(report: ReportInput) -> str:
    """
    Discord-formatted weekly report.

    Layout:
      header (date range), reset countdown, blank line,
      DEEP DIVE block, blank line, ELITE DEEP DIVE block, blank line

    The header and countdown wording ("Weekly Deep Dives information
    for ...", "Deep Dives will reset in ...") is the text already posted
    to the channel each week; keep it unchanged.
    """
    start = report.window.start.date().isoformat()
    end = report.window.end.date().isoformat()
    ts = reset_timestamp(report.window.end)

    header = (
        f"Weekly Deep Dives information for **{start} to {end}**.\n"
        f"Deep Dives will reset in **<t:{ts}:R>**\n"
    )
    dd = schedule_block(DEEP_DIVE_TITLE, report.deep_dive)
    edd = schedule_block(ELITE_DEEP_DIVE_TITLE, report.elite_deep_dive)

    return f"{header}\n{dd}\n{edd}\n"
