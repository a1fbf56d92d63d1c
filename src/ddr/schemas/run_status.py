from __future__ import annotations
from typing import Dict, Optional, Literal
from pydantic import BaseModel, Field


StageState = Literal["pending", "ok", "fail"]


class StageStatus(BaseModel):
    bootstrap: StageState = "pending"
    decode: StageState = "pending"
    render: StageState = "pending"
    write: StageState = "pending"


class RunStatus(BaseModel):
    run_id: str
    stages: StageStatus = Field(default_factory=StageStatus)
    error: Optional[Dict[str, str]] = None
