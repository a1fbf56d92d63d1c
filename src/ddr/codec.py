"""
JSON codec for the weekly Deep Dive document.

Document shape:
- "start" / "end": YYYY-MM-DD (time-of-day is fixed at the 11:00 reset)
- "deepDive" / "eliteDeepDive": codename, biome, seed, three stages
- objectives: unit variants as a bare tag ("200 Morkite"), payload variants
  as a single-key object ({"2 Dreadnoughts": ["Classic", "Twins"]})

Validation is done by the pydantic models; this module translates
pydantic errors into the SchemaError hierarchy so callers never see
pydantic internals.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Sequence, Union

from pydantic import ValidationError

from .schemas import TAGGED_CONTEXT, ReportInput

logger = logging.getLogger(__name__)

_WINDOW_KEYS = ("start", "end")
DEFAULT_INDENT = 4


# ---------- Errors ----------
class SchemaError(ValueError):
    """Base class for every decode failure. `path` is a dot-joined document path."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path or '<root>'}: {message}")


class MissingFieldError(SchemaError):
    def __init__(self, path: str):
        super().__init__(path, "required field is missing")


class UnknownVariantError(SchemaError):
    def __init__(self, path: str, value: Any):
        self.value = value
        super().__init__(path, f"unknown variant {value!r}")


class ArityMismatchError(SchemaError):
    def __init__(self, path: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(path, f"expected {expected} values, got {actual}")


class MalformedDateError(SchemaError):
    def __init__(self, path: str, value: Any):
        self.value = value
        super().__init__(path, f"expected a YYYY-MM-DD date, got {value!r}")


class InvalidValueError(SchemaError):
    def __init__(self, path: str, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(path, f"{reason} (got {value!r})")


class MalformedDocumentError(SchemaError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("", f"not a JSON document: {reason}")


# ---------- Error translation ----------
def _document_path(loc: Sequence[Union[str, int]], subpath: Optional[str] = None) -> str:
    parts = [str(p) for p in loc]
    # the date range is flattened into the top-level object
    if parts and parts[0] == "window":
        parts = parts[1:]
    if subpath:
        parts.append(subpath)
    return ".".join(parts)


def _translate(err: Dict[str, Any]) -> SchemaError:
    kind = err["type"]
    ctx = err.get("ctx") or {}
    path = _document_path(err["loc"], ctx.get("subpath"))

    if kind == "missing":
        return MissingFieldError(path)
    if kind == "enum":
        return UnknownVariantError(path, err.get("input"))
    if kind == "unknown_variant":
        return UnknownVariantError(path, ctx.get("value"))
    if kind == "arity_mismatch":
        return ArityMismatchError(path, int(ctx["expected"]), int(ctx["actual"]))
    if kind == "malformed_date":
        return MalformedDateError(path, ctx.get("value", err.get("input")))
    return InvalidValueError(path, err.get("input"), err.get("msg", kind))


# ---------- Public API ----------
def from_document(doc: Any) -> ReportInput:
    """Validate an already-parsed JSON value. Raises the first SchemaError found."""
    if isinstance(doc, dict):
        doc = dict(doc)
        window = {k: doc.pop(k) for k in _WINDOW_KEYS if k in doc}
        doc["window"] = window

    try:
        return ReportInput.model_validate(doc, context={TAGGED_CONTEXT: True})
    except ValidationError as e:
        errors = e.errors()
        logger.debug(f"Validation failed with {len(errors)} error(s); reporting the first.")
        raise _translate(errors[0]) from None


def to_document(report: ReportInput) -> Dict[str, Any]:
    doc = report.model_dump(mode="json", by_alias=True)
    window = doc.pop("window")
    return {**{k: window[k] for k in _WINDOW_KEYS}, **doc}


def decode(text: Union[str, bytes]) -> ReportInput:
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(str(e)) from None
    return from_document(doc)


def encode(report: ReportInput, indent: int = DEFAULT_INDENT) -> str:
    return json.dumps(to_document(report), ensure_ascii=False, indent=indent)
