"""
Resolves a user input into a product-page address and retrieves its markup
through the scraping proxy.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .extractor import extract
from .models import FailureReason, FetchOutcome, PipelineFailure

logger = logging.getLogger(__name__)

CATALOG_IDENTIFIER = re.compile(r"^[A-Z0-9]{10}$")
PRODUCT_PAGE_TEMPLATE = "https://www.amazon.com/dp/{identifier}"

INVALID_INPUT_MESSAGE = "Please provide a valid product URL or catalog identifier"
EXTRACTION_FAILED_MESSAGE = "Failed to extract product data from the page"


def resolve_address(raw: str) -> str:
    """ASIN -> canonical product page; anything else is taken as an address.

    Surrounding whitespace is stripped before the exact ten-character check,
    so an identifier pasted with a trailing newline still resolves. Inner
    characters are not touched.
    """
    value = (raw or "").strip()
    if len(value) == 10 and CATALOG_IDENTIFIER.match(value):
        return PRODUCT_PAGE_TEMPLATE.format(identifier=value)
    return value


def _upstream_message(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        msg = payload.get("message") or payload.get("error")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return None


class ListingFetcher:
    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = http_client

    def proxy_params(self, address: str) -> Dict[str, Any]:
        return {
            "api_key": self.settings.scraping_api_key,
            "url": address,
            "render_js": "false",
            "country_code": self.settings.country_code,
            "premium_proxy": "true",
        }

    async def _get(self, address: str) -> httpx.Response:
        params = self.proxy_params(address)
        timeout = self.settings.fetch_timeout
        if self._client is not None:
            return await self._client.get(self.settings.scraping_base_url, params=params, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.get(self.settings.scraping_base_url, params=params)

    async def fetch(self, raw: str) -> FetchOutcome:
        address = resolve_address(raw)
        if self.settings.marketplace_domain not in address:
            logger.warning("Rejected input %r: not a %s address", raw, self.settings.marketplace_domain)
            return PipelineFailure(FailureReason.INVALID_INPUT, INVALID_INPUT_MESSAGE)

        logger.debug("Fetching %s through scraping proxy", address)
        try:
            # httpx timeouts bound each phase; wait_for bounds the whole exchange.
            response = await asyncio.wait_for(self._get(address), timeout=self.settings.fetch_timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning("Fetch timed out for %s", address)
            return PipelineFailure(
                FailureReason.FETCH_FAILED,
                f"Fetching the product page timed out after {self.settings.fetch_timeout:g} seconds",
            )
        except httpx.HTTPError as exc:
            logger.warning("Fetch transport error for %s: %s", address, exc)
            return PipelineFailure(FailureReason.FETCH_FAILED, str(exc) or "Scraping failed")

        if not response.is_success:
            status = response.status_code
            message = _upstream_message(response) or f"Scraping failed with status: {status}"
            logger.warning("Scraping proxy returned %s for %s", status, address)
            return PipelineFailure(FailureReason.FETCH_FAILED, message, status_code=status)

        record = extract(response.text, address)
        if record is None:
            logger.warning("No product data could be extracted from %s", address)
            return PipelineFailure(
                FailureReason.EXTRACTION_FAILED, EXTRACTION_FAILED_MESSAGE, status_code=response.status_code
            )
        return record
