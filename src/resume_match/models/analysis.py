"""Pydantic models for Match Analyst output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

SkillStatus = Literal["strong", "partial", "missing"]


class SkillMatch(BaseModel):
    skill: str
    status: SkillStatus
    note: str = ""


class AnalysisResult(BaseModel):
    match_score: int = Field(alias="matchScore", ge=0, le=100)
    summary: str = ""
    strengths: list[str] = []
    weaknesses: list[str] = []
    missing_keywords: list[str] = Field(default=[], alias="missingKeywords")
    suggestions: list[str] = []
    key_skills_match: list[SkillMatch] = Field(default=[], alias="keySkillsMatch")

    model_config = {"populate_by_name": True}

    def to_response(self) -> dict:
        """Serialize with the camelCase field names clients expect."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class StructuredResult:
    """The model's output parsed cleanly."""

    result: AnalysisResult
    recovered: bool = False


@dataclass(frozen=True)
class FallbackResult:
    """The model's output could not be parsed; ``result`` is the default object."""

    result: AnalysisResult
    recovered: bool = True


ParseOutcome = StructuredResult | FallbackResult
