"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from resume_match.errors import ConfigurationError


@dataclass(frozen=True)
class LLMConfig:
    base_url: str = "https://ai.gateway.lovable.dev/v1"
    model: str = "google/gemini-2.5-flash"
    api_key_env: str = "LOVABLE_API_KEY"
    timeout: float | None = None  # None keeps the SDK default

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("llm.base_url must not be empty")
        if not self.model:
            raise ValueError("llm.model must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"llm.timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise ValueError(f"server.port must be between 1 and 65535, got {self.port}")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    api_key: str | None = field(default=None, repr=False)

    def require_api_key(self) -> str:
        """Return the upstream credential or fail fast when it is missing."""
        if not self.api_key:
            raise ConfigurationError(f"{self.llm.api_key_env} is not configured")
        return self.api_key


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    The upstream credential is never read from YAML; it comes from the
    environment variable named by ``llm.api_key_env``.
    """
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    llm = LLMConfig(**raw.get("llm", {}))
    return AppConfig(
        llm=llm,
        server=ServerConfig(**raw.get("server", {})),
        api_key=os.environ.get(llm.api_key_env) or None,
    )
