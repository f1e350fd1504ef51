"""Source for charts published on the web.

URL pattern: any ``http://`` or ``https://`` URL.

Payload handling:

    text/html             chart text is taken from the page's code blocks:
                          <code class="language-song"> first (Markdown
                          renderers emit these for ```song fences), then
                          every <pre> block
    anything else         treated as plain text / Markdown (raw gists,
                          pastebins), ```song fences honoured
"""

import logging

import httpx
from bs4 import BeautifulSoup

from ..exceptions import FetchError, SourceError
from .base import ChartSource
from .utils import extract_song_blocks

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 15

_FETCH_HEADERS = {
    "Accept": "text/html,text/plain,text/markdown;q=0.9,*/*;q=0.8",
}


class WebSource(ChartSource):
    """Source for charts fetched over HTTP(S)."""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return location.startswith(("http://", "https://"))

    def fetch(self, location: str) -> str:
        try:
            resp = httpx.get(
                location, headers=_FETCH_HEADERS, follow_redirects=True, timeout=FETCH_TIMEOUT
            )
        except httpx.RequestError as exc:
            raise FetchError(location, 0) from exc
        if resp.status_code != 200:
            raise FetchError(location, resp.status_code)
        logger.debug("Fetched %s (%s)", location, resp.headers.get("content-type", "unknown type"))
        return resp.text

    def extract(self, raw: str, location: str) -> str:
        if not _looks_like_html(raw):
            return extract_song_blocks(raw)

        soup = BeautifulSoup(raw, "html.parser")
        blocks = soup.find_all("code", class_="language-song") or soup.find_all("pre")
        texts = [block.get_text() for block in blocks]
        texts = [text.strip("\n") for text in texts if text.strip()]
        if not texts:
            raise SourceError(location, "no <pre> or song code block in page")
        return "\n\n".join(texts)


def _looks_like_html(text: str) -> bool:
    head = text.lstrip()[:512].lower()
    return head.startswith(("<!doctype html", "<html")) or "<body" in head or "<pre" in head
