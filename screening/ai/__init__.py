"""
screening.ai - Remote summary of session markers
"""

from .summary import SummaryService, build_prompt, NETWORK_ERROR_TEXT, GENERATION_FAILED_TEXT

__all__ = [
    "SummaryService",
    "build_prompt",
    "NETWORK_ERROR_TEXT",
    "GENERATION_FAILED_TEXT",
]
