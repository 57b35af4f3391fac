from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from business_faq_chat.exception.custom_exception import ScrapeFailedError
from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.utils.thread_pool import run_sync

# Page chrome that never carries business content
NOISE_SELECTORS = "script, style, nav, header, footer, .nav, .navigation, .sidebar"

# Tried in order; first one with enough text wins
CONTENT_SELECTORS = [
    "main",
    '[role="main"]',
    ".main-content",
    ".content",
    "article",
    ".article",
    ".post-content",
    "#content",
]

MIN_MAIN_CONTENT_CHARS = 100

_WHITESPACE = re.compile(r"\s+")


@dataclass
class ScrapedPage:
    url: str
    title: Optional[str]
    text: str


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(strip=True)

    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return h1.get_text(strip=True)

    og_title = soup.find("meta", attrs={"property": "og:title"})
    if og_title and og_title.get("content"):
        return og_title["content"].strip() or None

    return None


def extract_main_text(soup: BeautifulSoup, max_chars: int) -> str:
    for element in soup.select(NOISE_SELECTORS):
        element.decompose()

    text = ""
    for selector in CONTENT_SELECTORS:
        content = " ".join(el.get_text(" ") for el in soup.select(selector))
        if content and len(content) > MIN_MAIN_CONTENT_CHARS:
            text = content
            break

    if not text:
        # html.parser gives no body element when the tag is omitted
        text = (soup.body or soup).get_text(" ")

    return _WHITESPACE.sub(" ", text).strip()[:max_chars]


class WebScraper:
    """
    Fetches a page with requests and reduces it to (title, text)
    with BeautifulSoup.
    """

    def __init__(self, scraper_config: Optional[dict] = None):
        cfg = scraper_config or {}
        self.timeout = cfg.get("timeout", 15)
        self.max_content_chars = cfg.get("max_content_chars", 8000)
        self.user_agent = cfg.get("user_agent", "BusinessFAQBot/1.0")

    def _fetch(self, url: str) -> str:
        response = requests.get(
            url,
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            allow_redirects=True,
        )
        if not response.ok:
            raise ScrapeFailedError(url, f"HTTP {response.status_code}")
        return response.text

    async def scrape(self, url: str) -> ScrapedPage:
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise ScrapeFailedError(url, "invalid URL", e) from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ScrapeFailedError(url, "only http(s) URLs are supported")

        try:
            html = await run_sync(self._fetch, url)
        except ScrapeFailedError:
            raise
        except requests.RequestException as e:
            log.error("Website fetch failed | url=%s | error=%s", url, str(e))
            raise ScrapeFailedError(url, str(e), e) from e
        except Exception as e:
            log.error("Website fetch failed | url=%s | error=%s", url, str(e))
            raise ScrapeFailedError(url, f"unexpected error: {e}", e) from e

        try:
            soup = BeautifulSoup(html, "html.parser")
            title = extract_title(soup)
            text = extract_main_text(soup, self.max_content_chars)
        except Exception as e:
            log.error("Website parse failed | url=%s | error=%s", url, str(e))
            raise ScrapeFailedError(url, f"could not parse page: {e}", e) from e

        log.info("Website scraped | url=%s | title=%s | chars=%d", url, title, len(text))
        return ScrapedPage(url=url, title=title, text=text)
