"""
LLM providers for AI search.

Each provider turns a prompt into completion text through ``generate``:
- GeminiProvider: Gemini ``generateContent`` REST API (default)
- OpenRouterProvider: OpenAI-compatible chat completions via OpenRouter

Both use a low temperature and a bounded output budget so the answer stays
short, structured and near-deterministic.
"""

import logging
from typing import Any, Optional

import requests
from openai import APIConnectionError, APIStatusError, OpenAI

from core.config import Settings
from core.constants import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENROUTER_MODEL,
    GEMINI_API_BASE,
    OPENROUTER_BASE_URL,
    TRANSLATION_MAX_OUTPUT_TOKENS,
    TRANSLATION_TEMPERATURE,
)
from core.errors import ConfigurationError, EmptyResponseError, UpstreamError

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Calls Gemini's generateContent endpoint.

    The response envelope is a list of candidates, each with nested text
    parts; the first candidate's first text part is the completion.

    Example:
        provider = GeminiProvider(api_key="...")
        text = provider.generate("Return {} as JSON")
    """

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_GEMINI_MODEL,
        temperature: float = TRANSLATION_TEMPERATURE,
        max_output_tokens: int = TRANSLATION_MAX_OUTPUT_TOKENS,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{GEMINI_API_BASE}/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }

    @staticmethod
    def extract_text(data: Any) -> str:
        """Pull ``candidates[0].content.parts[0].text`` out of the envelope.

        Raises:
            EmptyResponseError: If any level is missing or the text is empty
        """
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None
        if not isinstance(text, str) or not text:
            raise EmptyResponseError("No response from Gemini API")
        return text

    def generate(self, prompt: str) -> str:
        """Send the prompt and return the completion text.

        Raises:
            ConfigurationError: GEMINI_API_KEY is not configured
            UpstreamError: Non-200 status, transport failure or non-JSON body
            EmptyResponseError: No completion text in the envelope
        """
        if not self.api_key:
            raise ConfigurationError("Gemini API key not configured")

        try:
            response = requests.post(
                self.url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=self.build_payload(prompt),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(None, str(e)) from e

        logger.info("Gemini response status: %s", response.status_code)
        if response.status_code != 200:
            logger.error("Gemini API error: %s %s", response.status_code, response.text)
            raise UpstreamError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(response.status_code, response.text) from e

        return self.extract_text(data)


class OpenRouterProvider:
    """Calls an OpenAI-compatible chat completions endpoint (OpenRouter by default)."""

    name = "openrouter"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_OPENROUTER_MODEL,
        base_url: str = OPENROUTER_BASE_URL,
        temperature: float = TRANSLATION_TEMPERATURE,
        max_output_tokens: int = TRANSLATION_MAX_OUTPUT_TOKENS,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout)
        return self._client

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise ConfigurationError("OpenRouter API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_output_tokens,
            )
        except APIStatusError as e:
            logger.error("OpenRouter API error: %s %s", e.status_code, e.response.text)
            raise UpstreamError(e.status_code, e.response.text) from e
        except APIConnectionError as e:
            raise UpstreamError(None, str(e)) from e

        if not response.choices:
            raise EmptyResponseError("No response from OpenRouter API")
        text = response.choices[0].message.content
        if not text:
            raise EmptyResponseError("No response from OpenRouter API")
        return text


def build_provider(settings: Settings):
    """Create the provider named by ``settings.search_provider``."""
    if settings.search_provider == "openrouter":
        return OpenRouterProvider(
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            timeout=settings.request_timeout,
        )
    return GeminiProvider(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.request_timeout,
    )
