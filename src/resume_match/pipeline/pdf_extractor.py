"""Mode A: extract resume text from a PDF by delegating to a multimodal model."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging

from resume_match.clients.llm_client import DEFAULT_MODEL, LLMClient
from resume_match.errors import (
    EmptyExtractionError,
    UpstreamError,
    UpstreamErrorKind,
    ValidationError,
)
from resume_match.models.request import ExtractedText

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = (
    "Extract ALL text content from this resume PDF. "
    "Return ONLY the raw text content, preserving the structure "
    "(sections, bullet points, etc). Do not add any commentary or "
    "formatting - just the extracted text."
)

PDF_SIGNATURE = b"%PDF-"


def decode_pdf_payload(pdf_base64: str) -> bytes:
    """Decode a base64 PDF payload, rejecting anything that is not a readable PDF."""
    import fitz  # PyMuPDF

    try:
        data = base64.b64decode(pdf_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("pdfBase64 is not valid base64") from e
    if not data.startswith(PDF_SIGNATURE):
        raise ValidationError("pdfBase64 does not contain a PDF document")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except RuntimeError as e:
        raise ValidationError("pdfBase64 is not a readable PDF document") from e
    try:
        page_count = doc.page_count
    finally:
        doc.close()
    if page_count == 0:
        raise ValidationError("PDF document has no pages")
    return data


class PdfTextExtractor:
    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL):
        self.llm = llm
        self.model = model

    async def extract(self, pdf_base64: str) -> ExtractedText:
        """Return the model's transcription of the PDF verbatim."""
        await asyncio.to_thread(decode_pdf_payload, pdf_base64)
        logger.info("Extracting text from PDF...")

        try:
            response = await self.llm.extract_text_from_document(
                pdf_base64,
                instruction=EXTRACTION_PROMPT,
                model=self.model,
            )
        except UpstreamError as e:
            if e.kind is UpstreamErrorKind.UPSTREAM_FAILURE:
                e.public_message = "Failed to extract text from PDF"
            raise

        if not response.text:
            raise EmptyExtractionError()

        logger.info("PDF text extracted successfully, length: %d", len(response.text))
        return ExtractedText(text=response.text)
