"""
Wikipedia knowledge source.

Wraps the MediaWiki Action API: search, title resolution, intro extracts
and page images. This is the transport layer; selection logic lives in
SelectionOrchestrator.
"""

import asyncio
from typing import Any

import httpx

from app.config import settings
from app.errors import NetworkFailure
from app.logging import get_logger
from app.models import WikiImage

logger = get_logger('services.knowledge_source')


def _first_page(data: dict[str, Any]) -> dict[str, Any]:
    pages = (data.get("query") or {}).get("pages") or {}
    if not pages:
        return {}
    return next(iter(pages.values())) or {}


class KnowledgeSourceService:
    """Knowledge source backed by Wikipedia."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = settings.WIKIPEDIA_API_URL,
        max_images: int = settings.WIKIPEDIA_MAX_IMAGES,
    ):
        self.client = client
        self.api_url = api_url
        self.max_images = max_images

    async def _query(self, operation_name: str, **params: Any) -> dict[str, Any]:
        params = {"action": "query", "format": "json", **params}
        try:
            response = await self.client.get(
                self.api_url,
                params=params,
                headers={"User-Agent": settings.WIKIPEDIA_USER_AGENT},
            )
        except httpx.HTTPError as e:
            logger.error(f"Wikipedia {operation_name} failed: {e}")
            raise NetworkFailure(f"Wikipedia {operation_name} failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "Wikipedia %s returned status %d", operation_name, response.status_code
            )
            raise NetworkFailure(
                f"Wikipedia {operation_name} returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkFailure(f"Wikipedia {operation_name} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise NetworkFailure(f"Wikipedia {operation_name} returned an unexpected payload")
        return data

    async def search(self, query: str = settings.WIKIPEDIA_DEFAULT_QUERY) -> list[str]:
        data = await self._query("search", list="search", srsearch=query)
        results = (data.get("query") or {}).get("search") or []
        return [str(item["title"]) for item in results if isinstance(item, dict) and item.get("title")]

    async def resolve(self, name: str) -> str:
        cleaned = " ".join(name.strip().split())
        data = await self._query("resolve", titles=cleaned, redirects=1)
        page = _first_page(data)
        if not page or "missing" in page or "invalid" in page:
            return cleaned
        return str(page.get("title") or cleaned)

    async def summary(self, place_name: str) -> str:
        data = await self._query(
            "summary",
            prop="extracts",
            exintro=1,
            explaintext=1,
            titles=place_name,
        )
        return str(_first_page(data).get("extract") or "")

    async def images(self, place_name: str) -> list[WikiImage]:
        data = await self._query("images", prop="images", titles=place_name)
        candidates = (_first_page(data).get("images") or [])[: self.max_images]
        titles = [str(img["title"]) for img in candidates if isinstance(img, dict) and img.get("title")]

        urls = await asyncio.gather(*(self._image_url(title) for title in titles))

        images: list[WikiImage] = []
        for title, url in zip(titles, urls):
            if url and not url.lower().endswith(".svg"):
                images.append(WikiImage(url=url, caption=title.removeprefix("File:")))
        logger.debug("Resolved %d/%d images for %s", len(images), len(titles), place_name)
        return images

    async def _image_url(self, file_title: str) -> str | None:
        data = await self._query("imageinfo", titles=file_title, prop="imageinfo", iiprop="url")
        info = _first_page(data).get("imageinfo") or []
        if not info:
            return None
        url = info[0].get("url")
        return str(url) if url else None
