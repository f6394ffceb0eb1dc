"""Tests for the match analyst and its response repair."""

import json

import pytest

from resume_match.clients.llm_client import LLMResponse
from resume_match.errors import RateLimitedError, UpstreamError, ValidationError, upstream_error
from resume_match.models.analysis import AnalysisResult, FallbackResult, StructuredResult
from resume_match.pipeline.match_analyst import (
    FALLBACK_SUGGESTION,
    SYSTEM_PROMPT,
    MatchAnalyst,
    coerce_score,
    parse_analysis,
)


def _response(text):
    return LLMResponse(text=text, input_tokens=500, output_tokens=200)


class TestParseAnalysis:
    def test_plain_json(self, sample_analysis_json, sample_analysis):
        outcome = parse_analysis(sample_analysis_json)
        assert isinstance(outcome, StructuredResult)
        assert outcome.result.to_response() == sample_analysis

    def test_fenced_json_equals_interior(self, sample_analysis_json):
        fenced = parse_analysis(f"```json\n{sample_analysis_json}\n```")
        direct = parse_analysis(sample_analysis_json)
        assert fenced.result == direct.result

    def test_generic_fence(self, sample_analysis_json):
        outcome = parse_analysis(f"Sure!\n```\n{sample_analysis_json}\n```")
        assert isinstance(outcome, StructuredResult)
        assert outcome.result.match_score == 42

    @pytest.mark.parametrize(
        "garbage",
        [
            "I'm sorry, I can't help with that.",
            "",
            "{not json",
            "```json\nstill not json\n```",
            "null",
            '"just a string"',
            "[1, 2, 3]",
            "x" * 5000,
        ],
    )
    def test_garbage_falls_back(self, garbage):
        outcome = parse_analysis(garbage)
        assert isinstance(outcome, FallbackResult)
        result = outcome.result
        assert isinstance(result, AnalysisResult)
        assert result.match_score == 50
        assert result.suggestions == [FALLBACK_SUGGESTION]
        assert result.strengths == []
        assert result.weaknesses == []
        assert result.missing_keywords == []
        assert result.key_skills_match == []

    def test_fallback_summary_truncated(self):
        content = "The candidate looks promising. " * 20
        outcome = parse_analysis(content)
        assert outcome.result.summary == content[:200]

    def test_missing_score_falls_back(self):
        outcome = parse_analysis('{"summary": "no score here"}')
        assert isinstance(outcome, FallbackResult)

    def test_huge_integer_score_clamped(self):
        outcome = parse_analysis(json.dumps({"matchScore": 10**400}))
        assert isinstance(outcome, StructuredResult)
        assert outcome.result.match_score == 100

    def test_missing_lists_default_empty(self):
        outcome = parse_analysis('{"matchScore": 77}')
        assert isinstance(outcome, StructuredResult)
        data = outcome.result.to_response()
        assert data["matchScore"] == 77
        assert data["summary"] == ""
        for key in ("strengths", "weaknesses", "missingKeywords", "suggestions", "keySkillsMatch"):
            assert data[key] == []

    def test_non_list_fields_become_empty(self):
        outcome = parse_analysis('{"matchScore": 60, "strengths": "lots", "keySkillsMatch": {}}')
        assert outcome.result.strengths == []
        assert outcome.result.key_skills_match == []

    def test_invalid_skill_entries_dropped(self):
        payload = {
            "matchScore": 60,
            "keySkillsMatch": [
                {"skill": "SQL", "status": "Missing", "note": "absent"},
                {"skill": "AWS", "status": "excellent"},
                {"status": "strong"},
                "Docker",
            ],
        }
        outcome = parse_analysis(json.dumps(payload))
        skills = outcome.result.key_skills_match
        assert len(skills) == 1
        assert skills[0].skill == "SQL"
        assert skills[0].status == "missing"

    @pytest.mark.parametrize("raw, expected", [(150, 100), (-5, 0), (100, 100), (0, 0)])
    def test_score_clamped(self, raw, expected):
        outcome = parse_analysis(json.dumps({"matchScore": raw}))
        assert outcome.result.match_score == expected


class TestCoerceScore:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (85, 85),
            (85.6, 86),
            ("72", 72),
            ("90%", 90),
            (1e9, 100),
            (-0.4, 0),
            (10**400, 100),
            (-(10**400), 0),
        ],
    )
    def test_numeric_values(self, value, expected):
        assert coerce_score(value) == expected

    @pytest.mark.parametrize("value", [None, True, "high", [], {}, float("nan"), float("inf")])
    def test_non_numeric_values(self, value):
        assert coerce_score(value) is None


class TestMatchAnalyst:
    @pytest.mark.asyncio
    async def test_analyze(self, mock_llm_client, sample_resume_text, sample_jd_text, sample_analysis_json):
        mock_llm_client.generate.return_value = _response(f"```json\n{sample_analysis_json}\n```")
        analyst = MatchAnalyst(mock_llm_client)
        result = await analyst.analyze(sample_resume_text, sample_jd_text)

        assert result.match_score == 42
        assert "Docker" in result.missing_keywords

    @pytest.mark.asyncio
    async def test_prompt_includes_both_texts(self, mock_llm_client):
        mock_llm_client.generate.return_value = _response('{"matchScore": 10}')
        analyst = MatchAnalyst(mock_llm_client, model="some/model")
        await analyst.analyze("Built REST APIs in Node.js", "Seeking intern skilled in Docker")

        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["prompt"] == (
            "## Resume:\nBuilt REST APIs in Node.js\n\n"
            "## Job Description:\nSeeking intern skilled in Docker"
        )
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["model"] == "some/model"

    @pytest.mark.asyncio
    async def test_garbage_never_raises(self, mock_llm_client):
        mock_llm_client.generate.return_value = _response("<html>502 Bad Gateway</html>")
        result = await MatchAnalyst(mock_llm_client).analyze("resume", "jd")
        assert result.match_score == 50
        assert result.suggestions == [FALLBACK_SUGGESTION]

    @pytest.mark.parametrize("resume, jd", [("", "jd"), ("resume", "   "), (None, "jd")])
    @pytest.mark.asyncio
    async def test_blank_inputs_rejected(self, mock_llm_client, resume, jd):
        with pytest.raises(ValidationError):
            await MatchAnalyst(mock_llm_client).analyze(resume, jd)
        mock_llm_client.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_content_is_upstream_error(self, mock_llm_client):
        mock_llm_client.generate.return_value = _response(None)
        with pytest.raises(UpstreamError) as exc_info:
            await MatchAnalyst(mock_llm_client).analyze("resume", "jd")
        assert exc_info.value.public_message == "Failed to generate analysis"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self, mock_llm_client):
        mock_llm_client.generate.side_effect = upstream_error(429)
        with pytest.raises(RateLimitedError):
            await MatchAnalyst(mock_llm_client).analyze("resume", "jd")
