"""
FastAPI Resume Match Gateway - HTTP surface
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from resume_match.clients.llm_client import LLMClient
from resume_match.config import AppConfig, load_config
from resume_match.errors import GatewayError
from resume_match.pipeline.gateway import AnalysisGateway

logger = logging.getLogger(__name__)

SERVICE_NAME = "Resume Match Gateway"
VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

ANALYZE_PATHS = ("/", "/analyze-resume")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(config: AppConfig | None = None, llm: LLMClient | None = None) -> FastAPI:
    """Build the app. Fails fast with ConfigurationError when no credential is set."""
    config = config or load_config()
    if llm is None:
        llm = LLMClient(
            api_key=config.require_api_key(),
            base_url=config.llm.base_url,
            timeout=config.llm.timeout,
        )
    gateway = AnalysisGateway(llm, model=config.llm.model)

    app = FastAPI(
        title=SERVICE_NAME,
        version=VERSION,
        description="Resume text extraction and resume-to-job match analysis",
    )
    app.state.gateway = gateway

    # CORS headers on every response, including errors
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    async def preflight() -> Response:
        return Response(status_code=200)

    async def analyze(request: Request) -> JSONResponse:
        """Run PDF extraction or match analysis depending on the body."""
        try:
            try:
                payload = await request.json()
            except ValueError:
                return _error_response(400, "Request body must be valid JSON")
            body = await gateway.handle(payload)
            return JSONResponse(status_code=200, content=body)
        except GatewayError as e:
            if e.status_code >= 500:
                logger.error("Error in analyze-resume: %s", e)
            else:
                logger.warning("Rejected analyze-resume request: %s", e)
            return _error_response(e.status_code, e.public_message)
        except Exception as e:
            logger.error("Error in analyze-resume function: %s", e, exc_info=True)
            return _error_response(500, str(e) or "Unknown error")

    for path in ANALYZE_PATHS:
        app.add_api_route(path, analyze, methods=["POST"], tags=["Analysis"])
        app.add_api_route(path, preflight, methods=["OPTIONS"], include_in_schema=False)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": SERVICE_NAME, "version": VERSION}

    return app
