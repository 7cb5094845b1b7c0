"""Sales-description collaborator.

Never raises: a missing key, an empty answer or any failure turns into a
fixed fallback sentence, so listing creation is never blocked on it.
"""

import logging

import httpx

from src.mk_assist.infrastructure.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

MISSING_KEY_TEXT = "Please provide more details about your item."
EMPTY_TEXT = "Could not generate description."
ERROR_TEXT = "Error generating description. Please try again."

_PROMPT = """
You are an expert copywriter for an online classifieds marketplace.
Write a compelling, short, and professional sales description (approx 50-70 words) for a product.

Product Title: {title}
Category: {category}
Key Features/Condition: {features}

Do not use markdown formatting like bolding or headers. Just plain text.
Focus on benefits and condition.
"""


class DescriptionGenerator:
    def __init__(self, client: GeminiClient | None = None) -> None:
        self._client = client or GeminiClient()

    async def generate(self, title: str, category: str, features: str) -> str:
        if not self._client.enabled:
            logger.warning("Gemini API key missing, description generation disabled")
            return MISSING_KEY_TEXT
        prompt = _PROMPT.format(title=title, category=category, features=features)
        try:
            text = await self._client.generate(prompt)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError):
            logger.exception("Description generation failed for %r", title)
            return ERROR_TEXT
        return text.strip() or EMPTY_TEXT
