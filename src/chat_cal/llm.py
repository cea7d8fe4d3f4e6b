"""Language-model capability used by the event extractor.

The core only depends on the :class:`LanguageModel` protocol -- a single
``complete(prompt, max_tokens) -> str`` call.  :class:`GeminiLanguageModel`
implements it on top of the Google ``google-genai`` SDK.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from chat_cal.exceptions import ExtractionCallError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"


class LanguageModel(Protocol):
    """A request/response text-completion capability."""

    def complete(self, prompt: str, max_tokens: int) -> str:
        """Return the model's text reply to *prompt*.

        Raises:
            ExtractionCallError: If the call fails.
        """
        ...


class GeminiLanguageModel:
    """Text completion via Google Gemini.

    Args:
        api_key: Google Gemini API key.
        model: Model identifier to use for generation.  Defaults to
            ``"gemini-2.0-flash"``.
        json_output: When ``True`` (the default) the response MIME type
            is set to ``application/json`` so Gemini returns bare JSON
            without markdown fences.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        json_output: bool = True,
    ) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._json_output = json_output

    def complete(self, prompt: str, max_tokens: int) -> str:
        """Call Gemini and return the raw response text.

        Args:
            prompt: The full prompt content.
            max_tokens: Upper bound on output tokens.

        Returns:
            The response text, or ``""`` if Gemini returned no text.

        Raises:
            ExtractionCallError: On API errors (auth, rate limits) and on
                transport failures (connection refused, timeouts).
        """
        config = genai_types.GenerateContentConfig(
            max_output_tokens=max_tokens,
            response_mime_type="application/json" if self._json_output else None,
        )

        logger.debug("Prompt sent to %s:\n%s", self._model, prompt)
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.error("Gemini API error: %s", exc)
            raise ExtractionCallError(f"Gemini API call failed: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed: %s", exc)
            raise ExtractionCallError(f"Gemini request failed: {exc}") from exc

        text = response.text or ""
        logger.debug("Raw response from %s:\n%s", self._model, text)
        return text
