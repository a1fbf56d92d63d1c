import json
import shutil

import pytest

from ddr.codec import SchemaError, decode, encode
from ddr.config import DDRConfig
from ddr.example import build_example
from ddr.logger import EventLogger
from ddr.pipeline import run_pipeline, write_example
from ddr.render import render


@pytest.fixture
def cfg(tmp_path):
    return DDRConfig(
        input_path=str(tmp_path / "input" / "info.json"),
        example_path=str(tmp_path / "input" / "info.example.json"),
        output_path=str(tmp_path / "output" / "formatted.md"),
        runs_dir=str(tmp_path / "runs"),
    )


def _status(run_dir):
    return json.loads((run_dir / "status.json").read_text(encoding="utf-8"))


def test_config_reads_env(monkeypatch):
    monkeypatch.setenv("DDR_INPUT_PATH", "elsewhere/week.json")
    monkeypatch.setenv("DDR_LOG_LEVEL", "DEBUG")
    cfg = DDRConfig()
    assert cfg.input_path == "elsewhere/week.json"
    assert cfg.log_level == "DEBUG"
    assert cfg.output_path == "output/formatted.md"


def test_write_example_creates_once(tmp_path):
    path = tmp_path / "input" / "info.example.json"
    assert write_example(path) is True
    assert decode(path.read_text(encoding="utf-8")) == build_example()

    path.write_text("edited", encoding="utf-8")
    assert write_example(path) is False
    assert path.read_text(encoding="utf-8") == "edited"
    assert write_example(path, force=True) is True
    assert path.read_text(encoding="utf-8") == encode(build_example())


def test_first_run_bootstraps_example_then_fails(cfg, tmp_path):
    with pytest.raises(FileNotFoundError):
        run_pipeline(cfg)

    assert (tmp_path / "input" / "info.example.json").exists()
    (run_dir,) = list((tmp_path / "runs").iterdir())
    status = _status(run_dir)
    assert status["stages"]["bootstrap"] == "ok"
    assert status["stages"]["decode"] == "fail"
    assert status["error"]["stage"] == "decode"


def test_run_writes_report_and_artifacts(cfg, tmp_path):
    write_example(tmp_path / "input" / "info.example.json")
    shutil.copy(tmp_path / "input" / "info.example.json", tmp_path / "input" / "info.json")

    run_id, run_dir, report = run_pipeline(cfg)

    assert report == render(build_example())
    assert (tmp_path / "output" / "formatted.md").read_text(encoding="utf-8") == report
    assert (run_dir / "report.md").read_text(encoding="utf-8") == report
    assert run_dir.name == run_id
    assert run_id.endswith("_info")

    status = _status(run_dir)
    assert set(status["stages"].values()) == {"ok"}
    assert status["error"] is None

    events = EventLogger(log_path=run_dir / "logs.jsonl").read()
    assert [(e["stage"], e["event"]) for e in events] == [
        ("bootstrap", "done"),
        ("decode", "start"),
        ("decode", "done"),
        ("render", "done"),
        ("write", "done"),
        ("pipeline", "done"),
    ]
    assert all(e["run"] == run_id for e in events)

    recorded = json.loads((run_dir / "input.json").read_text(encoding="utf-8"))
    assert recorded["deepDive"]["codename"] == "High Contact"


def test_invalid_input_is_recorded(cfg, tmp_path):
    doc = json.loads(encode(build_example()))
    doc["eliteDeepDive"]["biome"] = "Nonexistent Place"
    (tmp_path / "input").mkdir()
    (tmp_path / "input" / "info.json").write_text(json.dumps(doc), encoding="utf-8")

    with pytest.raises(SchemaError):
        run_pipeline(cfg)

    (run_dir,) = list((tmp_path / "runs").iterdir())
    status = _status(run_dir)
    assert status["stages"]["decode"] == "fail"
    assert status["error"]["type"] == "UnknownVariantError"
    assert "eliteDeepDive.biome" in status["error"]["message"]
    assert not (tmp_path / "output" / "formatted.md").exists()


def test_two_runs_get_distinct_dirs(cfg, tmp_path):
    write_example(tmp_path / "input" / "info.json")
    _, first, _ = run_pipeline(cfg)
    _, second, _ = run_pipeline(cfg)
    assert first != second
