"""Pydantic models for gateway requests and the PDF extraction payload."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

PARSE_PDF_ACTION = "parse-pdf"

MATCH_FIELDS = ("resumeText", "jobDescription", "resume_text", "job_description")


class AnalysisRequest(BaseModel):
    resume_text: str | None = Field(default=None, alias="resumeText")
    job_description: str | None = Field(default=None, alias="jobDescription")
    pdf_base64: str | None = Field(default=None, alias="pdfBase64")
    action: str | None = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def drop_match_fields_for_pdf(cls, data: object) -> object:
        """A PDF extraction request is validated on its PDF fields only."""
        if (
            isinstance(data, dict)
            and data.get("action") == PARSE_PDF_ACTION
            and (data.get("pdfBase64") or data.get("pdf_base64"))
        ):
            return {k: v for k, v in data.items() if k not in MATCH_FIELDS}
        return data

    @property
    def is_pdf_extraction(self) -> bool:
        """PDF extraction wins whenever it is requested with a payload."""
        return self.action == PARSE_PDF_ACTION and bool(self.pdf_base64)

    @property
    def has_match_inputs(self) -> bool:
        return bool(
            self.resume_text and self.resume_text.strip()
            and self.job_description and self.job_description.strip()
        )


class ExtractedText(BaseModel):
    text: str
