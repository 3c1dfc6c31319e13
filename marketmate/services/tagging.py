"""
Tag Suggestion Client

HTTP client for the external AI service that suggests product tags
from a free-text description.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 1000


class TagSuggestionError(Exception):
    """Raised when the tagging service cannot produce suggestions"""
    pass


class TagSuggestionClient:
    """
    Client for the tag suggestion service.

    Usage:
        client = TagSuggestionClient("http://localhost:8100")
        tags = await client.suggest_tags("A stylish vintage leather jacket...")
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize tag suggestion client.

        Args:
            base_url: Base URL of the tagging service
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def suggest_tags(self, description: str) -> list[str]:
        """
        Suggest tags for a product description.

        Raises:
            ValueError: description shorter than 20 or longer than 1000 characters
            TagSuggestionError: service unreachable or bad response
        """
        length = len(description.strip())
        if length < MIN_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long."
            )
        if length > MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less."
            )

        url = f"{self.base_url}/suggest-tags"
        try:
            response = await self._http_client.post(
                url,
                json={"description": description.strip()},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Tag suggestion request failed: {e}")
            raise TagSuggestionError(str(e)) from e
        except ValueError as e:
            logger.error(f"Tag suggestion response was not JSON: {e}")
            raise TagSuggestionError("Invalid response from tagging service") from e

        tags = data.get("tags") if isinstance(data, dict) else None
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise TagSuggestionError("Tagging service response has no tag list")

        return [t.strip() for t in tags if t.strip()]
