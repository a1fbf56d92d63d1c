from __future__ import annotations

# ---- Environment bootstrap (MUST be first) ----
from dotenv import load_dotenv

# Load .env once at process start, before DEFAULT_CONFIG reads env
load_dotenv()

# ---- CLI / Pipeline imports ----
import logging
from pathlib import Path
from typing import Optional

import typer

from .codec import SchemaError, decode
from .config import DEFAULT_CONFIG, DDRConfig
from .pipeline import run_pipeline, write_example
from .run_manager import read_input


app = typer.Typer(add_completion=False, help="Weekly Deep Dive report formatter")


def _setup_logging(cfg: DDRConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _config(
    input_path: Optional[Path] = None,
    output_path: Optional[Path] = None,
    example_path: Optional[Path] = None,
) -> DDRConfig:
    update = {}
    if input_path is not None:
        update["input_path"] = str(input_path)
    if output_path is not None:
        update["output_path"] = str(output_path)
    if example_path is not None:
        update["example_path"] = str(example_path)
    return DEFAULT_CONFIG.model_copy(update=update)


def _run(cfg: DDRConfig, echo: bool) -> None:
    try:
        run_id, run_dir, report = run_pipeline(cfg)
    except FileNotFoundError as e:
        typer.echo(f"[ERR] input not found: {e.filename}", err=True)
        typer.echo(f"[ERR] copy {cfg.example_path} to {cfg.input_path} and fill it in", err=True)
        raise typer.Exit(code=1)
    except SchemaError as e:
        typer.echo(f"[ERR] invalid input {cfg.input_path}: {e}", err=True)
        raise typer.Exit(code=1)

    if echo:
        typer.echo(report, nl=False)
    typer.echo(f"[OK] run_id={run_id}")
    typer.echo(f"[OK] report at: {cfg.output_path}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Turn the weekly Deep Dive JSON into a Discord post.
    """
    _setup_logging(DEFAULT_CONFIG, verbose)
    if ctx.invoked_subcommand is None:
        _run(DEFAULT_CONFIG, echo=False)


@app.command()
def run(
    input_path: Optional[Path] = typer.Option(None, "--input", help="Input JSON file"),
    output_path: Optional[Path] = typer.Option(None, "--output", help="Report output file"),
    example_path: Optional[Path] = typer.Option(None, "--example", help="Example file to create if missing"),
    echo: bool = typer.Option(False, "--print", help="Also print the report"),
):
    """Render the report from the input file."""
    _run(_config(input_path, output_path, example_path), echo)


@app.command()
def example(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write the example"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write the example input file."""
    target = path or Path(DEFAULT_CONFIG.example_path)
    if write_example(target, force=force):
        typer.echo(f"[OK] wrote {target}")
    else:
        typer.echo(f"[WARN] {target} exists, use --force to overwrite")


@app.command()
def check(
    input_path: Optional[Path] = typer.Option(None, "--input", help="Input JSON file"),
):
    """Validate the input file without writing anything."""
    target = input_path or Path(DEFAULT_CONFIG.input_path)
    try:
        info = decode(read_input(target))
    except FileNotFoundError:
        typer.echo(f"[ERR] input not found: {target}", err=True)
        raise typer.Exit(code=1)
    except SchemaError as e:
        typer.echo(f"[ERR] invalid input {target}: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(
        f"[OK] {info.window.start.date()} to {info.window.end.date()}: "
        f"{info.deep_dive.codename} / {info.elite_deep_dive.codename}"
    )


if __name__ == "__main__":
    app()
