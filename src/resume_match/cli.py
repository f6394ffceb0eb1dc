"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel

from resume_match.clients.llm_client import LLMClient
from resume_match.config import AppConfig, load_config
from resume_match.errors import GatewayError
from resume_match.models.analysis import AnalysisResult
from resume_match.parsers.document_loader import (
    document_kind,
    encode_pdf,
    read_text_document,
)
from resume_match.pipeline.gateway import AnalysisGateway

app = typer.Typer(
    name="resume-match",
    help="Resume text extraction and resume-to-job match analysis",
    no_args_is_help=True,
)
console = Console()

STATUS_COLORS = {"strong": "green", "partial": "yellow", "missing": "red"}


def _build_gateway(config: AppConfig) -> AnalysisGateway:
    try:
        llm = LLMClient(
            api_key=config.require_api_key(),
            base_url=config.llm.base_url,
            timeout=config.llm.timeout,
        )
    except GatewayError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return AnalysisGateway(llm, model=config.llm.model)


def _require_file(path: Path, label: str) -> None:
    if not path.exists():
        console.print(f"[red]{label} file not found: {path}[/red]")
        raise typer.Exit(1)


def _print_result(result: AnalysisResult) -> None:
    score = result.match_score
    score_color = "green" if score >= 75 else "yellow" if score >= 50 else "red"
    console.print(
        Panel(
            f"[bold {score_color}]Match score: {score}[/bold {score_color}]\n{result.summary}",
            title="Resume Match",
        )
    )
    for label, items in (
        ("Strengths", result.strengths),
        ("Weaknesses", result.weaknesses),
        ("Missing keywords", result.missing_keywords),
        ("Suggestions", result.suggestions),
    ):
        if items:
            console.print(f"\n[bold]{label}:[/bold]")
            for item in items:
                console.print(f"  - {item}")
    if result.key_skills_match:
        console.print("\n[bold]Key skills:[/bold]")
        for skill in result.key_skills_match:
            color = STATUS_COLORS[skill.status]
            console.print(f"  [{color}]{skill.status:<8}[/{color}] {skill.skill} [dim]{skill.note}[/dim]")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", help="Port (default from config)"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Run the HTTP gateway."""
    import uvicorn

    from resume_match.server import create_app

    config = load_config(config_path)
    logging.basicConfig(
        level=getattr(logging, config.server.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        api = create_app(config)
    except GatewayError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    uvicorn.run(api, host=host or config.server.host, port=port or config.server.port)


@app.command()
def analyze(
    resume: Path = typer.Option(..., "--resume", help="Resume file (.pdf or .txt)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result"),
) -> None:
    """Analyze how well a resume matches a job description."""
    _require_file(resume, "Resume")
    _require_file(jd, "Job description")
    try:
        kind = document_kind(resume)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    gateway = _build_gateway(load_config())
    jd_text = read_text_document(jd)

    async def _run() -> AnalysisResult:
        if kind == "pdf":
            extracted = await gateway.extract_text(encode_pdf(resume))
            resume_text = extracted.text
        else:
            resume_text = read_text_document(resume)
        return await gateway.analyze_match(resume_text, jd_text)

    try:
        with console.status("Analyzing resume..."):
            result = asyncio.run(_run())
    except GatewayError as e:
        console.print(f"[red]{e.public_message}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(result.to_response()))
    else:
        _print_result(result)


@app.command()
def extract(
    file: Path = typer.Argument(help="Resume PDF"),
) -> None:
    """Extract the text of a resume PDF."""
    _require_file(file, "PDF")
    if file.suffix.lower() != ".pdf":
        console.print("[red]extract only accepts .pdf files[/red]")
        raise typer.Exit(1)

    gateway = _build_gateway(load_config())
    try:
        with console.status("Extracting text from PDF..."):
            extracted = asyncio.run(gateway.extract_text(encode_pdf(file)))
    except GatewayError as e:
        console.print(f"[red]{e.public_message}[/red]")
        raise typer.Exit(1)
    console.print(extracted.text, markup=False, highlight=False)


if __name__ == "__main__":
    app()
