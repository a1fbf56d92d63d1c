from __future__ import annotations

import json
import re
import time
from pathlib import Path
from typing import Any

from .config import DDRConfig
from .schemas import RunStatus, StageStatus


def _slugify(text: str, max_len: int = 32) -> str:
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9\-_ ]+", "", text)
    text = re.sub(r"\s+", "-", text)
    return text[:max_len] if len(text) > max_len else text


def new_run_dir(cfg: DDRConfig, label: str) -> Path:
    """
    Create a new run directory.

    Convention:
    YYYY-MM-DD_HHMMSS_<slug of the input file name>
    A numeric suffix is appended when two runs land in the same second.
    """
    ts = time.strftime("%Y-%m-%d_%H%M%S", time.localtime())
    run_id = f"{ts}_{_slugify(label) or 'run'}"
    run_dir = Path(cfg.runs_dir) / run_id
    n = 1
    while run_dir.exists():
        n += 1
        run_dir = Path(cfg.runs_dir) / f"{run_id}-{n}"
    run_dir.mkdir(parents=True)
    return run_dir


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def read_input(path: Path) -> bytes:
    # raw bytes; the codec reports bad encodings. FileNotFoundError propagates
    return path.read_bytes()


def init_status(run_dir: Path) -> RunStatus:
    status = RunStatus(run_id=run_dir.name, stages=StageStatus())
    write_json(run_dir / "status.json", status.model_dump())
    return status


def update_status(run_dir: Path, status: RunStatus) -> None:
    write_json(run_dir / "status.json", status.model_dump())


def write_report_md(run_dir: Path, report_md: str) -> None:
    write_text(run_dir / "report.md", report_md)
