"""Mode B: resume-to-job-description match analysis with response repair."""

from __future__ import annotations

import logging
import math

from resume_match.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_match.errors import UpstreamError, ValidationError
from resume_match.models.analysis import (
    AnalysisResult,
    FallbackResult,
    ParseOutcome,
    SkillMatch,
    StructuredResult,
)
from resume_match.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert career advisor and resume analyst. Analyze the provided resume against the job description and provide a detailed match analysis.

Return a JSON object with the following structure:
{
  "matchScore": <number 0-100>,
  "summary": "<brief 1-2 sentence summary of the match>",
  "strengths": ["<strength 1>", "<strength 2>", ...],
  "weaknesses": ["<missing skill or gap 1>", "<gap 2>", ...],
  "missingKeywords": ["<keyword 1>", "<keyword 2>", ...],
  "suggestions": ["<actionable suggestion 1>", "<suggestion 2>", ...],
  "keySkillsMatch": [
    {"skill": "<skill name>", "status": "strong" | "partial" | "missing", "note": "<brief explanation>"}
  ]
}

Be specific and actionable. Focus on the most important skills and qualifications from the job description."""

FALLBACK_SCORE = 50
FALLBACK_SUMMARY_CHARS = 200
FALLBACK_SUGGESTION = "Unable to parse detailed analysis. Please try again."

_LIST_FIELDS = ("strengths", "weaknesses", "missingKeywords", "suggestions")
_SKILL_STATUSES = ("strong", "partial", "missing")


def build_user_prompt(resume_text: str, job_description: str) -> str:
    return f"## Resume:\n{resume_text}\n\n## Job Description:\n{job_description}"


def coerce_score(value: object) -> int | None:
    """Convert a model-supplied score to an int clamped into 0-100.

    Returns None when the value is not numeric at all.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    if isinstance(value, int):
        return max(0, min(100, value))
    if not isinstance(value, float) or not math.isfinite(value):
        return None
    return max(0, min(100, int(round(value))))


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _skill_matches(value: object) -> list[SkillMatch]:
    if not isinstance(value, list):
        return []
    skills = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        skill = str(entry.get("skill") or "").strip()
        status = str(entry.get("status") or "").strip().lower()
        if not skill or status not in _SKILL_STATUSES:
            continue
        skills.append(SkillMatch(skill=skill, status=status, note=str(entry.get("note") or "")))
    return skills


def normalize_analysis(data: dict) -> AnalysisResult | None:
    """Validate and sanitize a parsed analysis object.

    Missing list fields become empty lists. Returns None when there is no
    usable score, since the result could not honour its score invariant.
    """
    score = coerce_score(data.get("matchScore"))
    if score is None:
        return None
    fields = {name: _string_list(data.get(name)) for name in _LIST_FIELDS}
    summary = data.get("summary")
    return AnalysisResult(
        matchScore=score,
        summary=str(summary).strip() if summary is not None else "",
        keySkillsMatch=_skill_matches(data.get("keySkillsMatch")),
        **fields,
    )


def fallback_result(content: str) -> AnalysisResult:
    """Default result used when the model's output cannot be parsed."""
    return AnalysisResult(
        matchScore=FALLBACK_SCORE,
        summary=content[:FALLBACK_SUMMARY_CHARS],
        suggestions=[FALLBACK_SUGGESTION],
    )


def parse_analysis(content: str) -> ParseOutcome:
    """Repair the raw model response into an AnalysisResult. Never raises."""
    try:
        data = extract_json(content)
    except ValueError as e:
        logger.error("Failed to parse AI response as JSON: %s", e)
        return FallbackResult(fallback_result(content))

    if not isinstance(data, dict):
        logger.error("AI response JSON is a %s, expected an object", type(data).__name__)
        return FallbackResult(fallback_result(content))

    result = normalize_analysis(data)
    if result is None:
        logger.error("AI response JSON has no usable matchScore")
        return FallbackResult(fallback_result(content))
    return StructuredResult(result)


class MatchAnalyst:
    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL):
        self.llm = llm
        self.model = model

    async def analyze(self, resume_text: str, job_description: str) -> AnalysisResult:
        """Analyze a resume against a job description."""
        if not (resume_text and resume_text.strip() and job_description and job_description.strip()):
            raise ValidationError("Resume text and job description are required")

        logger.info("Analyzing resume against job description...")
        response = await self.llm.generate(
            prompt=build_user_prompt(resume_text, job_description),
            system=SYSTEM_PROMPT,
            model=self.model,
        )
        if not response.text:
            logger.error("No content in AI response")
            raise UpstreamError(
                "Upstream response had no content",
                public_message="Failed to generate analysis",
            )

        outcome = parse_analysis(response.text)
        logger.info(
            "Resume analysis complete, match score: %d%s",
            outcome.result.match_score,
            " (fallback)" if outcome.recovered else "",
        )
        return outcome.result
