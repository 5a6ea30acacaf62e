"""Azure Text Analytics client for key-phrase extraction.

This module provides an async wrapper around the Text Analytics v2.1
``keyPhrases`` operation. One issue body is submitted as a single English
document and the extracted phrases are returned.

The client performs exactly one request per call with a bounded timeout.
Failures of any kind surface as TextAnalyticsError so callers can decide
whether to carry on without key phrases.

Source:
- src/labeler/config.py (text_analytics_endpoint, text_analytics_key)
"""

import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import httpx


logger = logging.getLogger(__name__)


KEY_PHRASES_PATH = "/text/analytics/v2.1/keyPhrases"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class TextAnalyticsError(Exception):
    """Raised when key-phrase extraction fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response if applicable.
        response_body: Response body from the service if applicable.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class TextAnalyticsClient:
    """Async client for the Text Analytics key-phrase endpoint.

    Attributes:
        endpoint: Base URL of the Text Analytics resource.
        subscription_key: Cognitive Services subscription key.
        timeout: Request timeout in seconds.

    Example:
        >>> client = TextAnalyticsClient(
        ...     endpoint="https://westus2.api.cognitive.microsoft.com",
        ...     subscription_key="xxx",
        ... )
        >>> async with client:
        ...     phrases = await client.extract_key_phrases("Resource Manager fails")
    """

    def __init__(
        self,
        endpoint: str,
        subscription_key: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Text Analytics client.

        Args:
            endpoint: Base URL of the Text Analytics resource. The
                      key-phrase path replaces any path it carries.
            subscription_key: Subscription key sent with every request.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used in tests.
        """
        self.endpoint = endpoint
        self.subscription_key = subscription_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def url(self) -> str:
        return urljoin(self.endpoint, KEY_PHRASES_PATH)

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary.

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={SUBSCRIPTION_KEY_HEADER: self.subscription_key},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TextAnalyticsClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close the client."""
        await self.close()

    @staticmethod
    def _build_document_request(text: str) -> Dict[str, Any]:
        return {
            "documents": [
                {
                    "language": "en",
                    "id": str(int(time.time() * 1000)),
                    "text": text,
                }
            ]
        }

    async def extract_key_phrases(self, text: str) -> List[str]:
        """Extract key phrases from a single English document.

        Args:
            text: The document text (an issue body).

        Returns:
            Key phrases in the order the service returned them.

        Raises:
            TextAnalyticsError: On timeouts, connection errors, non-200
                responses or an unexpected response payload.
        """
        try:
            response = await self.client.post(
                self.url,
                json=self._build_document_request(text),
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "Text Analytics request timed out",
                extra={"timeout": self.timeout},
            )
            raise TextAnalyticsError(
                message=f"Text Analytics request timed out: {e}",
            ) from e
        except httpx.RequestError as e:
            logger.warning(
                "Text Analytics request failed",
                extra={"error": str(e)},
            )
            raise TextAnalyticsError(
                message=f"Text Analytics request failed: {e}",
            ) from e

        if response.status_code != 200:
            logger.warning(
                "Text Analytics error",
                extra={
                    "status_code": response.status_code,
                    "response": response.text[:500],
                },
            )
            raise TextAnalyticsError(
                message=f"Text Analytics error: {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            key_phrases = response.json()["documents"][0]["keyPhrases"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TextAnalyticsError(
                message=f"Unexpected Text Analytics response: {e}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        if not isinstance(key_phrases, list):
            raise TextAnalyticsError(
                message="Unexpected Text Analytics response: keyPhrases is not a list",
                status_code=response.status_code,
                response_body=response.text,
            )

        phrases = [str(p) for p in key_phrases]
        logger.info(
            "Key phrases found in issue body",
            extra={"key_phrases": phrases},
        )
        return phrases
