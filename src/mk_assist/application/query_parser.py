"""Natural-language search -> SmartFilter collaborator.

Best effort throughout: no key, a blank query, a transport error or an
unparseable answer all yield None ("change nothing"). Individual fields of
the wrong type are dropped rather than failing the whole answer.
"""

import json
import logging
import math
from typing import Any

import httpx

from src.mk_assist.infrastructure.gemini_client import GeminiClient
from src.mk_common.enums import Category
from src.mk_discovery.domain.models import SmartFilter

logger = logging.getLogger(__name__)

_PARSER_SORTS = ("price_asc", "price_desc", "date_desc")

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "category": {"type": "STRING"},
        "location": {"type": "STRING"},
        "minPrice": {"type": "NUMBER"},
        "maxPrice": {"type": "NUMBER"},
        "sortBy": {"type": "STRING", "enum": list(_PARSER_SORTS)},
    },
}

_PROMPT = """Extract search filters from this query: "{query}".
If a category is mentioned (like 'phone', 'car'), map it to one of these: {categories}. If unsure, ignore category.
Map 'cheap' to price sort asc, 'expensive' to price sort desc.
Extract locations (cities, areas).
"""


def _text_field(payload: dict[str, Any], name: str) -> str | None:
    value = payload.get(name)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _number_field(payload: dict[str, Any], name: str) -> float | None:
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def smart_filter_from_payload(payload: Any) -> SmartFilter | None:
    if not isinstance(payload, dict):
        return None
    sort_by = _text_field(payload, "sortBy")
    return SmartFilter(
        category=_text_field(payload, "category"),
        location=_text_field(payload, "location"),
        min_price=_number_field(payload, "minPrice"),
        max_price=_number_field(payload, "maxPrice"),
        sort_by=sort_by if sort_by in _PARSER_SORTS else None,
    )


class QueryParser:
    def __init__(self, client: GeminiClient | None = None) -> None:
        self._client = client or GeminiClient()

    async def parse(self, query: str) -> SmartFilter | None:
        if not self._client.enabled or not query.strip():
            return None
        prompt = _PROMPT.format(
            query=query.strip(),
            categories=", ".join(c.value for c in Category if c is not Category.OTHER),
        )
        try:
            text = await self._client.generate(prompt, response_schema=RESPONSE_SCHEMA)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError):
            logger.exception("Search query parsing failed")
            return None
        if not text.strip():
            return None
        try:
            payload = json.loads(text)
        except ValueError:
            logger.error("Query parser returned non-JSON: %r", text[:200])
            return None
        return smart_filter_from_payload(payload)
