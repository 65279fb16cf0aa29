"""Per-run reports returned by the normalizer and the build pipeline."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class NormalizeOutcome(str, enum.Enum):
    INJECTED = "injected"
    SKIPPED = "skipped"
    FAILED = "failed"


class NormalizeResult(BaseModel):
    path: str
    outcome: NormalizeOutcome
    # "group" or "root" when a background was injected
    anchor: str | None = None
    error: str = ""


class NormalizeReport(BaseModel):
    directory: str
    results: list[NormalizeResult] = Field(default_factory=list)

    def count(self, outcome: NormalizeOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def injected(self) -> int:
        return self.count(NormalizeOutcome.INJECTED)

    @property
    def skipped(self) -> int:
        return self.count(NormalizeOutcome.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(NormalizeOutcome.FAILED)


class SkippedAsset(BaseModel):
    path: str
    reason: str


class BuildReport(BaseModel):
    """Summary of one pipeline run."""

    # set key -> number of shapes extracted
    sets: dict[str, int] = Field(default_factory=dict)
    skipped: list[SkippedAsset] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    normalize: list[NormalizeReport] = Field(default_factory=list)
    # shape name -> set keys it appears in, when more than one
    collisions: dict[str, list[str]] = Field(default_factory=dict)
    output: str = ""
    elapsed_ms: float = 0.0

    @property
    def total_shapes(self) -> int:
        return sum(self.sets.values())
