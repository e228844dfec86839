"""
Shared fixtures: settings, a recorded product page, and fake collaborators.

Both remote services are replaced with `httpx.MockTransport`, so no test
touches the network.
"""

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest
from openai import AsyncOpenAI

from listing_ally.config import Settings

PRODUCT_PAGE = """
<html>
  <head><title>Amazon.com: Echo Dot</title></head>
  <body>
    <div id="wayfinding-breadcrumbs_feature_div">
      <ul><li><a href="/electronics">Electronics</a></li><li><a href="/speakers">Speakers</a></li></ul>
    </div>
    <span id="productTitle">
        Echo Dot (4th Gen) | Smart speaker with Alexa | Charcoal
    </span>
    <a id="bylineInfo" href="/stores/Amazon">Visit the Amazon Store</a>
    <span id="acrPopover" title="4.7 out of 5 stars"><span class="a-icon-alt">4.7 out of 5 stars</span></span>
    <span id="acrCustomerReviewText">125,000 ratings</span>
    <span class="a-price"><span class="a-price-whole">49.</span><span class="a-price-fraction">99</span></span>
    <div id="imgTagWrapperId">
      <img id="landingImage" src="https://m.media-amazon.com/images/I/small.jpg"
           data-old-hires="https://m.media-amazon.com/images/I/large.jpg">
    </div>
    <div id="altImages">
      <img src="https://m.media-amazon.com/images/I/alt1.jpg">
      <img src="https://m.media-amazon.com/images/I/alt2.jpg">
    </div>
    <div id="feature-bullets">
      <ul>
        <li><span class="a-list-item"> Meet the Echo Dot - Our most popular smart speaker with Alexa </span></li>
        <li><span class="a-list-item">Voice control your music</span></li>
        <li><span class="a-list-item">   </span></li>
      </ul>
    </div>
    <div id="productDescription">
      <p>  Meet the Echo Dot.&nbsp;The sleek, compact design delivers crisp vocals. </p>
    </div>
    <table id="productDetails_detailBullets_sections1">
      <tr><th>Best Sellers Rank</th><td>#15 in Electronics (See Top 100 in Electronics)</td></tr>
    </table>
  </body>
</html>
"""

WELL_FORMED_REPLY = """Here is my analysis.
---
TYPE: brand-voice
CURRENT: Meet the Echo Dot - Our most popular smart speaker with Alexa.
SUGGESTED: Experience the Echo Dot - Amazon's #1 smart speaker.
REASONING: More authoritative.
---
- SEO Score (1-100): 78
- BSR Potential Improvement: 25%
- Top Keyword Opportunities: smart speaker, alexa speaker
"""


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        scraping_api_key="scrape-key",
        generation_api_key="gen-key",
        scraping_base_url="https://scraper.test/api/v1/",
        generation_base_url="https://gen.test/v1",
    )


@pytest.fixture()
def product_page() -> str:
    return PRODUCT_PAGE


def chat_completion(content: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class Recorder:
    """Wraps a handler and keeps every request it saw."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def mock_http_client(recorder: Recorder) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder))


def mock_openai_client(recorder: Recorder) -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key="gen-key",
        base_url="https://gen.test/v1",
        max_retries=0,
        http_client=mock_http_client(recorder),
    )
