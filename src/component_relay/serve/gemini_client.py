"""Gemini text generation through the google-genai SDK."""
from __future__ import annotations
import logging
import time
from typing import Any, Protocol

import httpx
from google import genai
from google.genai import errors, types

from component_relay.common.config import Settings

LOGGER = logging.getLogger("component_relay.serve.gemini")


class GenerationError(RuntimeError):
    """Raised when the generation backend cannot produce text."""


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class GeminiClient:
    """Single-shot, non-streaming text generation against Gemini."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "",
        timeout: float = 120.0,
        client: Any | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        # no SDK client without a key; generate() reports the missing key instead
        if client is None and api_key:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(
                    base_url=base_url or None,
                    timeout=int(timeout * 1000),
                ),
            )
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.gemini_timeout,
        )

    def generate(self, prompt: str) -> str:
        """
        Send one prompt and return the generated text.

        Args:
            prompt: Full prompt text.

        Raises:
            GenerationError: On missing credentials, API errors, transport
                errors, blocked prompts or empty candidates.
        """
        if self._client is None:
            raise GenerationError("GEMINI_API_KEY is not set")

        start = time.time()
        try:
            response = self._client.models.generate_content(model=self.model, contents=prompt)
        except errors.APIError as e:
            raise GenerationError(f"[{e.code}] {e.message}") from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        text = _response_text(response)
        LOGGER.info(
            "Gemini %s responded in %sms | prompt_chars=%s text_chars=%s",
            self.model,
            int((time.time() - start) * 1000),
            len(prompt),
            len(text),
        )
        return text


def _reason(value: Any) -> str:
    return str(getattr(value, "value", value))


def _response_text(response: types.GenerateContentResponse) -> str:
    text = response.text
    if text:
        return text

    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        raise GenerationError(f"Prompt was blocked due to {_reason(feedback.block_reason)}")

    if not response.candidates:
        raise GenerationError("Gemini returned no candidates")

    reason = response.candidates[0].finish_reason
    if reason and _reason(reason) not in ("STOP", "MAX_TOKENS"):
        raise GenerationError(f"Candidate was blocked due to {_reason(reason)}")
    raise GenerationError("Gemini returned a candidate without text")
