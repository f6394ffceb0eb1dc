"""Shared test fixtures."""

from __future__ import annotations

import base64
import json
from unittest.mock import AsyncMock

import pytest

from resume_match.clients.llm_client import LLMClient, LLMResponse
from resume_match.config import AppConfig


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.edu | github.com/janedoe

Education:
- State University, B.S. Computer Science (expected 2026)

Experience:
- Campus IT Help Desk (2023 - present)
  - Built REST APIs in Node.js for ticket tracking
  - Automated weekly reports with Python

Skills:
- JavaScript, Node.js, Express, Python, Git
"""


@pytest.fixture
def sample_jd_text() -> str:
    return """Software Engineering Intern - Summer 2026

We are seeking an intern skilled in Docker, SQL, and AWS.

Responsibilities:
- Build and deploy containerized services
- Write and optimize SQL queries
- Work with AWS Lambda and S3
"""


@pytest.fixture
def sample_analysis() -> dict:
    return {
        "matchScore": 42,
        "summary": "Solid API experience but no exposure to the required infrastructure stack.",
        "strengths": ["REST API development in Node.js"],
        "weaknesses": ["No Docker experience", "No SQL experience", "No AWS experience"],
        "missingKeywords": ["Docker", "SQL", "AWS"],
        "suggestions": ["Containerize an existing Node.js project with Docker"],
        "keySkillsMatch": [
            {"skill": "Docker", "status": "missing", "note": "Not mentioned"},
            {"skill": "REST APIs", "status": "strong", "note": "Built in Node.js"},
        ],
    }


@pytest.fixture
def sample_analysis_json(sample_analysis) -> str:
    return json.dumps(sample_analysis)


@pytest.fixture
def pdf_bytes() -> bytes:
    """A one-page PDF generated with PyMuPDF."""
    import fitz

    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Jane Doe - Software Engineering Intern")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_base64(pdf_bytes) -> str:
    return base64.b64encode(pdf_bytes).decode("ascii")


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(api_key="test-key")


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.extract_text_from_document = AsyncMock(
        return_value=LLMResponse(text="Jane Doe\nExperience", input_tokens=900, output_tokens=40)
    )
    return client
