from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_serializer, model_validator
from pydantic_core import PydanticCustomError


# Validation context flag set by the codec: objectives arrive in their
# tagged document form ("200 Morkite" / {"2 Dreadnoughts": [...]}).
TAGGED_CONTEXT = "tagged"


def _check_table(enum_cls: Type[Enum], table: Mapping[Any, str]) -> None:
    missing = [m.name for m in enum_cls if m not in table]
    if missing:
        raise RuntimeError(f"{enum_cls.__name__} has no label for: {', '.join(missing)}")


# ---------- Plain enumerations ----------
class DreadnoughtKind(str, Enum):
    CLASSIC = "Classic"
    TWINS = "Twins"
    HIVEGUARD = "Hiveguard"

    def as_str(self) -> str:
        return self.value


class Biome(str, Enum):
    SANDBLASTED_CORRIDORS = "Sandblasted Corridors"
    CRYSTALLINE_CAVERNS = "Crystalline Caverns"
    SALT_PITS = "Salt Pits"
    FUNGUS_BOGS = "Fungus Bogs"
    RADIOACTIVE_EXCLUSION_ZONE = "Radioactive Exclusion Zone"
    DENSE_BIOZONE = "Dense Biozone"
    GLACIAL_STRATA = "Glacial Strata"
    HOLLOW_BOUGH = "Hollow Bough"
    AZURE_WEALD = "Azure Weald"
    MAGMA_CORE = "Magma Core"

    def as_str(self) -> str:
        return self.value


class Anomaly(str, Enum):
    """Positive stage modifier."""
    CRITICAL_WEAKNESS = "Critical Weakness"
    LOW_GRAVITY = "Low Gravity"
    RICH_ATMOSPHERE = "Rich Atmosphere"
    VOLATILE_GUTS = "Volatile Guts"

    def emoji_repr(self) -> str:
        return f":rocknstone: {self.value}"


class MissionWarning(str, Enum):
    """Negative stage modifier (shown as "Warning" in game)."""
    CAVE_LEECH_CLUSTER = "Cave Leech Cluster"
    ELITE_THREAT = "Elite Threat"
    EXPLODER_INFESTATION = "Exploder Infestation"
    HAUNTED_CAVE = "Haunted Cave"
    LETHAL_ENEMIES = "Lethal Enemies"
    LOW_OXYGEN = "Low Oxygen"
    MACTERA_PLAGUE = "Mactera Plague"
    PARASITES = "Parasites"
    REGENERATIVE_BUGS = "Regenerative Bugs"
    RIVAL_PRESENCE = "Rival Presence"
    SHIELD_DISRUPTION = "Shield Disruption"
    SWARMAGEDDON = "Swarmageddon"

    def emoji_repr(self) -> str:
        return f":tothebone: {self.value}"


# ---------- Objective tags ----------
class PrimaryObjectiveKind(str, Enum):
    MINING_EXPEDITION_200 = "200 Morkite"
    MINING_EXPEDITION_225 = "225 Morkite"
    MINING_EXPEDITION_250 = "250 Morkite"
    EGG_4 = "4 Eggs"
    EGG_6 = "6 Eggs"
    ON_SITE_REFINING = "On-Site Refining"
    MINI_MULES_2 = "2 Mini-mules"
    MINI_MULES_3 = "3 Mini-mules"
    POINT_EXTRACTION_7 = "7 Aquarqs"
    POINT_EXTRACTION_10 = "10 Aquarqs"
    ESCORT_DUTY = "Escort Duty"
    DREADNOUGHT_2 = "2 Dreadnoughts"
    DREADNOUGHT_3 = "3 Dreadnoughts"
    INDUSTRIAL_SABOTAGE = "Industrial Sabotage"


class SecondaryObjectiveKind(str, Enum):
    MINING_150 = "150 Morkite"
    EGG = "2 Eggs"
    MINI_MULES = "2 Mini-mules"
    DREADNOUGHT = "Dreadnought"
    BLACK_BOX = "Black Box"


# number of DreadnoughtKind values each tag carries; absent = unit variant
PRIMARY_ARITY: Dict[PrimaryObjectiveKind, int] = {
    PrimaryObjectiveKind.DREADNOUGHT_2: 2,
    PrimaryObjectiveKind.DREADNOUGHT_3: 3,
}

SECONDARY_ARITY: Dict[SecondaryObjectiveKind, int] = {
    SecondaryObjectiveKind.DREADNOUGHT: 1,
}

_PRIMARY_LABELS: Dict[PrimaryObjectiveKind, str] = {
    PrimaryObjectiveKind.MINING_EXPEDITION_200: ":morkite: 200 Morkite",
    PrimaryObjectiveKind.MINING_EXPEDITION_225: ":morkite: 225 Morkite",
    PrimaryObjectiveKind.MINING_EXPEDITION_250: ":morkite: 250 Morkite",
    PrimaryObjectiveKind.EGG_4: ":gegg: 4 Eggs",
    PrimaryObjectiveKind.EGG_6: ":gegg: 6 Eggs",
    PrimaryObjectiveKind.ON_SITE_REFINING: ":refinerywell: On-Site Refinery",
    PrimaryObjectiveKind.MINI_MULES_2: ":molly: 2 Mini-mules",
    PrimaryObjectiveKind.MINI_MULES_3: ":molly: 3 Mini-mules",
    PrimaryObjectiveKind.POINT_EXTRACTION_7: ":aquarq: 7 Aquarqs",
    PrimaryObjectiveKind.POINT_EXTRACTION_10: ":aquarq: 10 Aquarqs",
    PrimaryObjectiveKind.ESCORT_DUTY: ":drill: Escort Duty",
    PrimaryObjectiveKind.DREADNOUGHT_2: ":dreadegg: 2 Dreadnoughts",
    PrimaryObjectiveKind.DREADNOUGHT_3: ":dreadegg: 3 Dreadnoughts",
    PrimaryObjectiveKind.INDUSTRIAL_SABOTAGE: ":caretaker: Industrial Sabotage",
}

_SECONDARY_LABELS: Dict[SecondaryObjectiveKind, str] = {
    SecondaryObjectiveKind.MINING_150: ":morkite: 150 Morkite",
    SecondaryObjectiveKind.EGG: ":gegg: 2 Eggs",
    SecondaryObjectiveKind.MINI_MULES: ":molly: 2 Mini-mules",
    SecondaryObjectiveKind.DREADNOUGHT: ":dreadegg:",
    SecondaryObjectiveKind.BLACK_BOX: ":uplink: Black Box",
}

_check_table(PrimaryObjectiveKind, _PRIMARY_LABELS)
_check_table(SecondaryObjectiveKind, _SECONDARY_LABELS)


# ---------- Tagged document form ----------
def _split_tag(data: Any) -> Tuple[Any, Any]:
    if isinstance(data, str):
        return data, None
    if isinstance(data, dict):
        if len(data) != 1:
            raise PydanticCustomError(
                "invalid_variant",
                "expected a single-key object naming the variant, got {count} keys",
                {"count": len(data)},
            )
        ((tag, payload),) = data.items()
        return tag, payload
    raise PydanticCustomError(
        "invalid_variant",
        "expected a variant tag string or a single-key object",
    )


def _lookup(enum_cls: Type[Enum], value: Any, subpath: str = "") -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        raise PydanticCustomError(
            "unknown_variant",
            "unknown {enum} variant '{value}'",
            {"enum": enum_cls.__name__, "value": value, "subpath": subpath},
        ) from None


def _arity_error(expected: int, actual: int, subpath: str = "") -> PydanticCustomError:
    return PydanticCustomError(
        "arity_mismatch",
        "expected {expected} payload values, got {actual}",
        {"expected": expected, "actual": actual, "subpath": subpath},
    )


def _is_tagged(data: Any, info: ValidationInfo) -> bool:
    if isinstance(data, str):
        return True
    return bool(info.context and info.context.get(TAGGED_CONTEXT))


# ---------- Objectives ----------
class PrimaryObjective(BaseModel):
    """
    Stage main goal.

    Unit variants carry no payload; "2 Dreadnoughts" / "3 Dreadnoughts"
    carry an ordered tuple of exactly 2 / 3 DreadnoughtKind values.
    """
    model_config = ConfigDict(frozen=True)

    kind: PrimaryObjectiveKind
    dreadnoughts: Tuple[DreadnoughtKind, ...] = ()

    @classmethod
    def of(cls, kind: PrimaryObjectiveKind, *dreadnoughts: DreadnoughtKind) -> "PrimaryObjective":
        return cls(kind=kind, dreadnoughts=dreadnoughts)

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, cls) or not _is_tagged(data, info):
            return data

        tag, payload = _split_tag(data)
        kind = _lookup(PrimaryObjectiveKind, tag)
        expected = PRIMARY_ARITY.get(kind, 0)

        if payload is None:
            payload = []
        if not isinstance(payload, list):
            raise PydanticCustomError(
                "invalid_variant",
                "payload of '{tag}' must be a list",
                {"tag": tag, "subpath": tag},
            )
        if len(payload) != expected:
            raise _arity_error(expected, len(payload), tag)

        kinds = tuple(
            _lookup(DreadnoughtKind, item, f"{tag}.{i}") for i, item in enumerate(payload)
        )
        return {"kind": kind, "dreadnoughts": kinds}

    @model_validator(mode="after")
    def _check_arity(self) -> "PrimaryObjective":
        expected = PRIMARY_ARITY.get(self.kind, 0)
        if len(self.dreadnoughts) != expected:
            raise _arity_error(expected, len(self.dreadnoughts))
        return self

    @model_serializer(mode="plain")
    def _to_tagged(self) -> Any:
        if self.kind not in PRIMARY_ARITY:
            return self.kind.value
        return {self.kind.value: [d.value for d in self.dreadnoughts]}

    def emoji_repr(self) -> str:
        label = _PRIMARY_LABELS[self.kind]
        if not self.dreadnoughts:
            return label
        names = " + ".join(d.as_str() for d in self.dreadnoughts)
        return f"{label} ({names})"


class SecondaryObjective(BaseModel):
    """Stage bonus goal; the "Dreadnought" variant names one DreadnoughtKind."""
    model_config = ConfigDict(frozen=True)

    kind: SecondaryObjectiveKind
    dreadnought: Optional[DreadnoughtKind] = None

    @classmethod
    def of(
        cls, kind: SecondaryObjectiveKind, dreadnought: Optional[DreadnoughtKind] = None
    ) -> "SecondaryObjective":
        return cls(kind=kind, dreadnought=dreadnought)

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, cls) or not _is_tagged(data, info):
            return data

        tag, payload = _split_tag(data)
        kind = _lookup(SecondaryObjectiveKind, tag)
        expected = SECONDARY_ARITY.get(kind, 0)

        if payload is None:
            if expected:
                raise _arity_error(expected, 0, tag)
            return {"kind": kind}
        if not expected:
            actual = len(payload) if isinstance(payload, list) else 1
            if actual:
                raise _arity_error(0, actual, tag)
            return {"kind": kind}
        if not isinstance(payload, str):
            raise PydanticCustomError(
                "invalid_variant",
                "payload of '{tag}' must be a single dreadnought name",
                {"tag": tag, "subpath": tag},
            )
        return {"kind": kind, "dreadnought": _lookup(DreadnoughtKind, payload, tag)}

    @model_validator(mode="after")
    def _check_arity(self) -> "SecondaryObjective":
        expected = SECONDARY_ARITY.get(self.kind, 0)
        actual = 0 if self.dreadnought is None else 1
        if actual != expected:
            raise _arity_error(expected, actual)
        return self

    @model_serializer(mode="plain")
    def _to_tagged(self) -> Any:
        if self.dreadnought is None:
            return self.kind.value
        return {self.kind.value: self.dreadnought.value}

    def emoji_repr(self) -> str:
        label = _SECONDARY_LABELS[self.kind]
        if self.dreadnought is None:
            return label
        return f"{label} {self.dreadnought.as_str()}"
