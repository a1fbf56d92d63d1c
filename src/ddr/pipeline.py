from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from .codec import encode, decode, to_document
from .config import DDRConfig
from .example import build_example
from .logger import EventLogger
from .render import render
from .run_manager import (
    new_run_dir,
    read_input,
    write_json,
    write_text,
    init_status,
    update_status,
    write_report_md,
)
from .schemas import ReportInput, RunStatus

logger = logging.getLogger(__name__)


def write_example(path: Path, force: bool = False) -> bool:
    """
    Write the canonical example input to `path`.

    Returns False (and leaves the file alone) when it already exists and
    `force` is not set.
    """
    if path.exists() and not force:
        return False
    write_text(path, encode(build_example()))
    logger.info(f"Wrote example input to {path}")
    return True


def _fail(run_dir: Path, status: RunStatus, events: EventLogger, stage: str, e: Exception) -> None:
    setattr(status.stages, stage, "fail")
    status.error = {"stage": stage, "type": type(e).__name__, "message": str(e)}
    events.log(stage, "fail", {"error": str(e)})
    update_status(run_dir, status)


def run_pipeline(cfg: DDRConfig) -> Tuple[str, Path, str]:
    """
    Produce the weekly report with run artifacts persisted.

    Stages:
      bootstrap) write the example input if it does not exist yet
      decode)    read + validate the input document
      render)    build the Discord-formatted text
      write)     write the report to the configured output path
    """
    input_path = Path(cfg.input_path)
    run_dir = new_run_dir(cfg, input_path.stem)
    events = EventLogger(log_path=run_dir / "logs.jsonl", run_id=run_dir.name)

    status = init_status(run_dir)
    write_json(run_dir / "config.json", cfg.model_dump())

    # ---- Bootstrap ----
    try:
        created = write_example(Path(cfg.example_path))
        status.stages.bootstrap = "ok"
        events.log("bootstrap", "done", {"example_path": cfg.example_path, "created": created})
    except Exception as e:
        _fail(run_dir, status, events, "bootstrap", e)
        raise

    update_status(run_dir, status)

    # ---- Decode ----
    try:
        events.log("decode", "start", {"input_path": str(input_path)})
        info: ReportInput = decode(read_input(input_path))
        write_json(run_dir / "input.json", to_document(info))
        status.stages.decode = "ok"
        events.log("decode", "done", {
            "deep_dive": info.deep_dive.codename,
            "elite_deep_dive": info.elite_deep_dive.codename,
        })
    except Exception as e:
        _fail(run_dir, status, events, "decode", e)
        raise

    logger.debug(f"info_json:\n{encode(info)}")
    update_status(run_dir, status)

    # ---- Render ----
    report = render(info)
    status.stages.render = "ok"
    events.log("render", "done", {"chars": len(report)})
    logger.debug(f"dives_info:\n{report}")
    update_status(run_dir, status)

    # ---- Write ----
    try:
        write_text(Path(cfg.output_path), report)
        write_report_md(run_dir, report)
        status.stages.write = "ok"
        events.log("write", "done", {"output_path": cfg.output_path})
    except Exception as e:
        _fail(run_dir, status, events, "write", e)
        raise

    update_status(run_dir, status)
    events.log("pipeline", "done", {"run_id": run_dir.name})

    return run_dir.name, run_dir, report
