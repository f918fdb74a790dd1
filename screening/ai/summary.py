"""
screening.ai.summary - Natural-language summary of the session markers

summarize() never raises for collaborator failures: whatever goes wrong
is turned into the text shown in place of the summary. The call is made
once, retries belong to the client.
"""

import logging
from typing import Callable, Optional, Sequence

from ..data.models import Marker
from ..export.formatter import build_summary_text
from ..utils.env import get_gemini_api_key
from ..utils.exceptions import GeminiError, GeminiNetworkError

LOG = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Summarize the following comments from a video screening session:\n{markers}"

NETWORK_ERROR_TEXT = "Network error while calling Gemini."
GENERATION_FAILED_TEXT = "Error during generation."


def build_prompt(ordered: Sequence[Marker], fps: int) -> str:
    return PROMPT_TEMPLATE.format(markers=build_summary_text(ordered, fps))


def _default_client_factory(api_key: str):
    from .gemini_client import GeminiClient

    return GeminiClient(api_key=api_key)


class SummaryService:
    """
    Request/response wrapper around the text-generation client.

    Args:
        notify: notify(title, message) for user-visible notices
        client_factory: Builds a client from an API key; the client must
            expose generate(prompt) -> str
        api_key_provider: Returns the API key or None
    """

    def __init__(
        self,
        notify: Optional[Callable[[str, str], None]] = None,
        client_factory: Callable[[str], object] = _default_client_factory,
        api_key_provider: Callable[[], Optional[str]] = get_gemini_api_key,
    ):
        self.notify = notify or (lambda title, message: LOG.info("%s: %s", title, message))
        self.client_factory = client_factory
        self.api_key_provider = api_key_provider
        self._client = None

    def _get_client(self, api_key: str):
        if self._client is None:
            self._client = self.client_factory(api_key)
        return self._client

    def precheck(self, ordered: Sequence[Marker]) -> bool:
        """
        Check that a request can be sent, notifying when it cannot.

        Returns:
            False for an empty ledger or a missing API key
        """
        if not ordered:
            self.notify("Summary", "No markers available.")
            return False

        if not self.api_key_provider():
            self.notify(
                "Gemini API key missing",
                "Set GEMINI_API_KEY in the .env file and restart.",
            )
            return False
        return True

    def summarize(self, ordered: Sequence[Marker], fps: int) -> Optional[str]:
        """
        Summarize markers already in display order.

        Returns:
            Summary or error text; None when nothing was sent (see
            precheck()), in which case a notice was shown instead
        """
        if not self.precheck(ordered):
            return None

        api_key = self.api_key_provider()
        prompt = build_prompt(ordered, fps)
        LOG.info("Requesting summary for %d marker(s)", len(ordered))

        try:
            text = self._get_client(api_key).generate(prompt)
        except GeminiNetworkError as e:
            LOG.warning("Summary failed (network): %s", e)
            return NETWORK_ERROR_TEXT
        except GeminiError as e:
            LOG.warning("Summary failed: %s", e)
            return e.message or GENERATION_FAILED_TEXT
        except (ConnectionError, TimeoutError) as e:
            LOG.warning("Summary failed (network): %s", e)
            return NETWORK_ERROR_TEXT

        return text or GENERATION_FAILED_TEXT
