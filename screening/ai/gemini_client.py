"""
screening.ai.gemini_client - Gemini text-generation client

Features:
- API key and model settings from the environment
- Retry with backoff on rate/quota/unavailable errors
- Minimum interval between requests
- Transport failures reported as GeminiNetworkError, service-side
  failures as GeminiError
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import google.generativeai as genai

from ..utils.env import get_gemini_api_key, get_env_str, get_env_int, get_env_float
from ..utils.exceptions import GeminiError, GeminiNetworkError

LOG = logging.getLogger(__name__)

RETRYABLE_MARKERS = ("rate", "quota", "resource", "429", "503", "unavailable")
NETWORK_MARKERS = ("timeout", "timed out", "deadline", "connection", "network", "dns")


@dataclass
class GeminiConfig:
    """Configuration for Gemini client."""

    model_name: str = "gemini-2.0-flash"
    temperature: float = 0.7
    max_output_tokens: int = 2048
    timeout_seconds: int = 60

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_backoff: float = 2.0

    # Rate limiting
    min_request_interval: float = 0.1

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        """Create config from environment variables."""
        return cls(
            model_name=get_env_str("GEMINI_MODEL", "gemini-2.0-flash"),
            temperature=get_env_float("GEMINI_TEMPERATURE", 0.7),
            max_output_tokens=get_env_int("GEMINI_MAX_TOKENS", 2048),
            timeout_seconds=get_env_int("GEMINI_TIMEOUT", 60),
            max_retries=max(1, get_env_int("GEMINI_MAX_RETRIES", 3)),
            retry_delay=get_env_float("GEMINI_RETRY_DELAY", 1.0),
        )


def _is_network_error(exc: Exception) -> bool:
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return True
    text = str(exc).lower()
    return any(x in text for x in NETWORK_MARKERS)


class GeminiClient:
    """
    Gemini AI client with retry logic and rate limiting.

    Usage:
        client = GeminiClient()  # Uses GEMINI_API_KEY from environment
        text = client.generate("Summarize ...")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        config: Optional[GeminiConfig] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (default: from environment)
            model: Model name (default: from config)
            config: Full configuration object

        Raises:
            GeminiError: No API key available
        """
        self.config = config or GeminiConfig.from_env()

        self.api_key = api_key or get_gemini_api_key()
        if not self.api_key:
            raise GeminiError(
                "GEMINI_API_KEY not found. "
                "Set it in .env file or pass to constructor."
            )

        genai.configure(api_key=self.api_key)

        self.model_name = model or self.config.model_name
        self.model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={
                "temperature": self.config.temperature,
                "max_output_tokens": self.config.max_output_tokens,
            },
        )

        self._last_request_time = 0.0

        LOG.info("GeminiClient initialized with model: %s", self.model_name)

    def _wait_for_rate_limit(self) -> None:
        """Wait if needed to respect the minimum request interval."""
        elapsed = time.time() - self._last_request_time
        min_interval = self.config.min_request_interval
        if elapsed < min_interval:
            time.sleep(min_interval - elapsed)
        self._last_request_time = time.time()

    @staticmethod
    def _extract_text(response) -> str:
        parts = getattr(response, "parts", None)
        if parts:
            return "".join(getattr(part, "text", "") for part in parts)
        return ""

    def generate(self, prompt: str) -> str:
        """
        Generate text from prompt.

        Args:
            prompt: Input prompt text

        Returns:
            Generated text string (may be empty if the model returned nothing)

        Raises:
            GeminiNetworkError: Service unreachable after retries
            GeminiError: Service returned an error
        """
        if not prompt or not prompt.strip():
            raise GeminiError("Empty prompt provided")

        last_error: Optional[Exception] = None
        delay = self.config.retry_delay

        for attempt in range(self.config.max_retries):
            try:
                self._wait_for_rate_limit()
                response = self.model.generate_content(
                    prompt,
                    request_options={"timeout": self.config.timeout_seconds},
                )
                return self._extract_text(response)

            except Exception as e:
                last_error = e
                error_str = str(e).lower()
                network = _is_network_error(e)

                if network or any(x in error_str for x in RETRYABLE_MARKERS):
                    LOG.warning("Gemini API error (attempt %d): %s", attempt + 1, e)
                    if attempt + 1 < self.config.max_retries:
                        time.sleep(delay)
                        delay *= self.config.retry_backoff
                    continue

                raise GeminiError(str(e) or "Gemini API error", details=type(e).__name__) from e

        if last_error is not None and _is_network_error(last_error):
            raise GeminiNetworkError(
                f"Gemini unreachable after {self.config.max_retries} attempts",
                details=str(last_error),
            ) from last_error

        raise GeminiError(
            str(last_error) if last_error else "Gemini API failed",
            details=f"{self.config.max_retries} attempts",
        ) from last_error
