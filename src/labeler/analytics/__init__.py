"""Text Analytics integration.

Submits issue bodies to the Azure Text Analytics key-phrase endpoint and
returns the extracted phrases for the key-phrase labeling rule.
"""

from src.labeler.analytics.client import (
    KEY_PHRASES_PATH,
    TextAnalyticsClient,
    TextAnalyticsError,
)

__all__ = [
    "KEY_PHRASES_PATH",
    "TextAnalyticsClient",
    "TextAnalyticsError",
]
