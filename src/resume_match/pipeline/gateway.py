"""Analysis gateway - selects the request mode and runs one linear pass."""

from __future__ import annotations

import logging

import pydantic

from resume_match.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_match.errors import ValidationError
from resume_match.models.analysis import AnalysisResult
from resume_match.models.request import AnalysisRequest, ExtractedText
from resume_match.pipeline.match_analyst import MatchAnalyst
from resume_match.pipeline.pdf_extractor import PdfTextExtractor

logger = logging.getLogger(__name__)


class AnalysisGateway:
    """Stateless per call: validate, build prompt, call upstream, repair or classify."""

    def __init__(self, llm: LLMClient, *, model: str = DEFAULT_MODEL):
        self.extractor = PdfTextExtractor(llm, model=model)
        self.analyst = MatchAnalyst(llm, model=model)

    @staticmethod
    def parse_request(payload: object) -> AnalysisRequest:
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        try:
            return AnalysisRequest.model_validate(payload)
        except pydantic.ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            raise ValidationError(f"Invalid request fields: {fields}") from e

    async def extract_text(self, pdf_base64: str) -> ExtractedText:
        return await self.extractor.extract(pdf_base64)

    async def analyze_match(self, resume_text: str, job_description: str) -> AnalysisResult:
        return await self.analyst.analyze(resume_text, job_description)

    async def handle(self, payload: object) -> dict:
        """Dispatch a raw JSON body and return the response body.

        PDF extraction takes precedence when both modes are present.
        """
        request = self.parse_request(payload)

        if request.is_pdf_extraction:
            extracted = await self.extract_text(request.pdf_base64)
            return extracted.model_dump()

        if not request.has_match_inputs:
            raise ValidationError("Resume text and job description are required")

        result = await self.analyze_match(request.resume_text, request.job_description)
        return result.to_response()
