"""Chat-completions gateway wrapper (OpenAI-compatible API) with async support."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import openai

from resume_match.errors import ConfigurationError, upstream_error

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "google/gemini-2.5-flash"


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str | None
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async client for an OpenAI-compatible chat-completions endpoint.

    Retries are disabled: every failure is surfaced to the caller as a typed
    upstream error on the first attempt.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        if not api_key:
            raise ConfigurationError("LLM API key is not configured")
        kwargs: dict = {"api_key": api_key, "max_retries": 0}
        if base_url is not None:
            kwargs["base_url"] = base_url
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = openai.AsyncOpenAI(**kwargs)

    async def _call_api(self, messages: list[dict], model: str):
        """Make the API call, converting SDK failures into gateway errors."""
        try:
            return await self.client.chat.completions.create(
                model=model,
                messages=messages,
            )
        except openai.APIStatusError as e:
            detail = e.response.text if e.response is not None else str(e)
            logger.error("LLM gateway error: status=%s body=%s", e.status_code, detail)
            raise upstream_error(e.status_code, detail) from e
        except openai.APIConnectionError as e:
            logger.error("LLM gateway unreachable: %s", e)
            raise upstream_error(None, str(e)) from e

    async def chat(self, messages: list[dict], model: str = DEFAULT_MODEL) -> LLMResponse:
        """Send a message list and return the first choice's content with usage."""
        logger.debug("LLM call: model=%s messages=%d", model, len(messages))
        completion = await self._call_api(messages, model)

        message = completion.choices[0].message if completion.choices else None
        text = message.content if message is not None else None
        usage = completion.usage
        input_tokens = usage.prompt_tokens if usage else 0
        output_tokens = usage.completion_tokens if usage else 0
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        return LLMResponse(text=text, input_tokens=input_tokens, output_tokens=output_tokens)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
    ) -> LLMResponse:
        """Send a user prompt, optionally preceded by a system instruction."""
        messages: list[dict] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return await self.chat(messages, model=model)

    async def extract_text_from_document(
        self,
        document_b64: str,
        instruction: str,
        media_type: str = "application/pdf",
        model: str = DEFAULT_MODEL,
    ) -> LLMResponse:
        """Send an instruction plus an embedded base64 document as one user message.

        Args:
            document_b64: Base64 payload of the document (no data-URL prefix).
            instruction: Text part telling the model what to return.
            media_type: MIME type used in the data URL.
            model: Model identifier understood by the gateway.
        """
        messages = [{
            "role": "user",
            "content": [
                {"type": "text", "text": instruction},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{media_type};base64,{document_b64}"},
                },
            ],
        }]
        return await self.chat(messages, model=model)
