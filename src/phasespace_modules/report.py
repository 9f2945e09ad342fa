from __future__ import annotations

from pydantic import BaseModel, Field

from .config import InputPaths


class ModuleSummary(BaseModel):
    name: str
    type: str
    dimensions: int = Field(..., ge=0)
    outputs: list[str] = Field(default_factory=list)


class PointRecord(BaseModel):
    ps_point: list[float]
    outputs: dict[str, float]


class EvaluationReport(BaseModel):
    generated_at: str
    dimensions: int = Field(..., ge=0)
    paths: InputPaths | None = None
    modules: list[ModuleSummary]
    points: list[PointRecord]
    notes: list[str] = Field(default_factory=list)
