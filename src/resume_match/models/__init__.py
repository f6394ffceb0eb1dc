"""Data models for the resume match gateway."""

from resume_match.models.analysis import (
    AnalysisResult,
    FallbackResult,
    ParseOutcome,
    SkillMatch,
    StructuredResult,
)
from resume_match.models.request import AnalysisRequest, ExtractedText

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "ExtractedText",
    "FallbackResult",
    "ParseOutcome",
    "SkillMatch",
    "StructuredResult",
]
