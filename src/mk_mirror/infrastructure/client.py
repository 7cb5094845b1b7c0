"""MirrorApiClient — talks to a remote mirror's /api/products endpoints.

Failures never raise: list reads degrade to [], single reads to None, and
creation to None. `images` may arrive JSON-encoded as a string; it is
decoded before mapping.
"""

import json
import logging
from typing import Any

import httpx

from config.settings import settings
from src.mk_catalog.domain.models import Product
from src.mk_catalog.infrastructure.persistence import document_to_product

logger = logging.getLogger(__name__)


def _normalize(doc: dict[str, Any]) -> dict[str, Any]:
    images = doc.get("images")
    if isinstance(images, str):
        try:
            images = json.loads(images)
        except ValueError:
            images = []
        return {**doc, "images": images if isinstance(images, list) else []}
    return doc


class MirrorApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.MIRROR_API_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        )

    async def fetch_products(self) -> list[Product]:
        try:
            async with self._client() as client:
                response = await client.get("/products")
                response.raise_for_status()
                docs = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch products: %s", exc)
            return []
        if not isinstance(docs, list):
            logger.error("Unexpected products payload: %r", type(docs))
            return []
        products: list[Product] = []
        for doc in docs:
            try:
                products.append(document_to_product(_normalize(doc)))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed mirror product: %r", doc)
        return products

    async def fetch_product(self, product_id: str) -> Product | None:
        try:
            async with self._client() as client:
                response = await client.get(f"/products/{product_id}")
                if response.status_code != httpx.codes.OK:
                    return None
                return document_to_product(_normalize(response.json()))
        except (httpx.HTTPError, KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Failed to fetch product %s: %s", product_id, exc)
            return None

    async def create_product(self, payload: dict[str, Any]) -> str | None:
        """POST a listing without id/createdAt/status; returns the new id."""
        body = {k: v for k, v in payload.items() if k not in ("id", "createdAt", "status")}
        try:
            async with self._client() as client:
                response = await client.post("/products", json=body)
                result = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to create product: %s", exc)
            return None
        new_id = result.get("id") if isinstance(result, dict) else None
        return str(new_id) if new_id is not None else None
