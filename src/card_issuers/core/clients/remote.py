"""HTTP source for the issuers dataset.

Lets a deployment serve a dataset published elsewhere (a raw file in a
repository, an object store URL) instead of the copy on local disk.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import CatalogLoadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


async def fetch_catalog_document(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """Fetch and decode the JSON issuers document at url."""
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=10.0), follow_redirects=True) as client:
        try:
            response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Issuers dataset request to %s failed: %s", url, exc)
            raise CatalogLoadError(f"Cannot fetch {url}: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise CatalogLoadError(f"Invalid JSON from {url}: {exc}") from exc
