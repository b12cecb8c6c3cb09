"""
Page title resolution.

Fetches the wiki page named by the request, pulls the text out of its
page-title container and splits SCP article titles into number and name.
"""
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.config import settings
from ..core.errors import TitleExtractionFailed, UpstreamFetchFailed
from ..utils.debug import print_step
from ..utils.security import build_page_url, escape_html

PAGE_TITLE_RE = re.compile(r'<div id="page-title">\s*([^<]+)\s*</div>')
# "SCP-1048-JP - The Clockwork Heart" -> ("SCP-1048-JP", "The Clockwork Heart")
SCP_TITLE_RE = re.compile(r"^(SCP-\d{3,4}-JP) - (.+)")


@dataclass(frozen=True)
class TitlePair:
    title: str
    subtitle: Optional[str] = None


def extract_page_title(document: str) -> str:
    """Return the stripped text of the page-title container."""
    match = PAGE_TITLE_RE.search(document)
    if not match:
        raise TitleExtractionFailed()
    title = match.group(1).strip()
    if not title:
        raise TitleExtractionFailed()
    return title


def classify_title(raw_title: str, subtitle: Optional[str] = None) -> TitlePair:
    """
    Turn a raw page title into a (title, subtitle) pair.

    The title is HTML-escaped first. SCP article titles are split on their
    " - " separator; any other title keeps the caller-supplied subtitle.
    """
    escaped = escape_html(raw_title)
    match = SCP_TITLE_RE.match(escaped)
    if match:
        return TitlePair(title=match.group(1), subtitle=match.group(2))
    return TitlePair(title=escaped, subtitle=subtitle)


class TitleSource:
    """Fetches page documents from the wiki the titles come from."""

    def __init__(self, base_url: str = None, timeout: float = None, transport: httpx.AsyncBaseTransport = None):
        self.base_url = base_url or settings.TITLE_SOURCE_BASE_URL
        self.timeout = timeout if timeout is not None else settings.TITLE_FETCH_TIMEOUT_S
        self.transport = transport

    async def fetch_document(self, page: str) -> str:
        url = build_page_url(self.base_url, page)
        print_step("Title Fetch", {"url": url}, "input")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport, follow_redirects=True) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            print_step("Title Fetch Error", {"url": url, "error": str(e)}, "error")
            raise UpstreamFetchFailed(url) from e
        if not response.is_success:
            print_step("Title Fetch Error", {"url": url, "status": response.status_code}, "error")
            raise UpstreamFetchFailed(url, status_code=response.status_code)
        return response.text

    async def resolve(self, page: str, subtitle: Optional[str] = None) -> TitlePair:
        document = await self.fetch_document(page)
        raw_title = extract_page_title(document)
        pair = classify_title(raw_title, subtitle)
        print_step("Title Resolved", {"title": pair.title, "subtitle": pair.subtitle}, "output")
        return pair
