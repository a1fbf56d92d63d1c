from __future__ import annotations

from pydantic import BaseModel, Field
import os


class DDRConfig(BaseModel):
    """
    File locations and log level for a report run.

    Notes:
    - Resolved once at startup and passed down; the core never reads env.
    - Keep config serializable (JSON) so each run records what it used.
    """
    input_path: str = Field(default_factory=lambda: os.getenv("DDR_INPUT_PATH", "input/info.json"))
    example_path: str = Field(default_factory=lambda: os.getenv("DDR_EXAMPLE_PATH", "input/info.example.json"))
    output_path: str = Field(default_factory=lambda: os.getenv("DDR_OUTPUT_PATH", "output/formatted.md"))
    runs_dir: str = Field(default_factory=lambda: os.getenv("DDR_RUNS_DIR", "runs"))

    log_level: str = Field(default_factory=lambda: os.getenv("DDR_LOG_LEVEL", "WARNING"))


DEFAULT_CONFIG = DDRConfig()
