import pytest
from typer.testing import CliRunner

from ddr.cli import app
from ddr.codec import encode
from ddr.example import build_example


runner = CliRunner()


@pytest.fixture
def paths(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return {
        "input": tmp_path / "info.json",
        "output": tmp_path / "out" / "formatted.md",
        "example": tmp_path / "info.example.json",
    }


def _run_args(paths, *extra):
    return [
        "run",
        "--input", str(paths["input"]),
        "--output", str(paths["output"]),
        "--example", str(paths["example"]),
        *extra,
    ]


def test_run_prints_report(paths):
    paths["input"].write_text(encode(build_example()), encoding="utf-8")
    result = runner.invoke(app, _run_args(paths, "--print"))
    assert result.exit_code == 0, result.output
    assert "Region: **Glacial Strata** | Code Name: **High Contact**" in result.output
    assert paths["output"].exists()
    assert paths["example"].exists()


def test_run_missing_input_exits_1(paths):
    result = runner.invoke(app, _run_args(paths))
    assert result.exit_code == 1
    assert "input not found" in result.output
    assert paths["example"].exists()


def test_run_invalid_input_exits_1(paths):
    paths["input"].write_text(encode(build_example()).replace("Magma Core", "Magma Mantle"), encoding="utf-8")
    result = runner.invoke(app, _run_args(paths))
    assert result.exit_code == 1
    assert "eliteDeepDive.biome" in result.output
    assert "Magma Mantle" in result.output


def test_check_valid(paths):
    paths["input"].write_text(encode(build_example()), encoding="utf-8")
    result = runner.invoke(app, ["check", "--input", str(paths["input"])])
    assert result.exit_code == 0, result.output
    assert "2023-07-06 to 2023-07-13" in result.output
    assert "High Contact / Uncovered Arm" in result.output


def test_check_malformed_date(paths):
    paths["input"].write_text(encode(build_example()).replace("2023-07-06", "06.07.2023"), encoding="utf-8")
    result = runner.invoke(app, ["check", "--input", str(paths["input"])])
    assert result.exit_code == 1
    assert "start" in result.output


def test_example_command(paths):
    result = runner.invoke(app, ["example", "--path", str(paths["example"])])
    assert result.exit_code == 0
    assert paths["example"].read_text(encoding="utf-8") == encode(build_example())

    result = runner.invoke(app, ["example", "--path", str(paths["example"])])
    assert "use --force" in result.output


def test_run_non_utf8_input_exits_1(paths):
    data = encode(build_example()).encode("utf-8").replace(b"High Contact", b"High \xff Contact")
    paths["input"].write_bytes(data)
    result = runner.invoke(app, _run_args(paths))
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert "[ERR] invalid input" in result.output


def test_check_non_utf8_input_exits_1(paths):
    paths["input"].write_bytes(b'{"start": "2023-07-06", "codename": "High \xff Contact"}')
    result = runner.invoke(app, ["check", "--input", str(paths["input"])])
    assert result.exit_code == 1
    assert "[ERR] invalid input" in result.output
