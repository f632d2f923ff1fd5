"""Pagination cursor extraction from Link headers.

A Mastodon list response carries entries like

    <https://mastodon.social/api/v1/timelines/home?max_id=109>; rel="next",
    <https://mastodon.social/api/v1/timelines/home?min_id=120>; rel="prev"

Every URL-shaped substring is considered, whatever its rel says.
"""

import logging
import re
from urllib.parse import unquote

import httpx

from .models import PageInfo

logger = logging.getLogger(__name__)

CURSOR_NAMES = ("max_id", "min_id", "since_id")

_URL_RE = re.compile(r"""<\s*(https?://[^>]*?)\s*>|(https?://[^\s<>"]+)""", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".,;:!?)"


def find_urls(value: str) -> list[str]:
    """URL-shaped substrings of ``value``, in order of appearance.

    URLs inside <...> are taken verbatim; bare URLs lose trailing punctuation.
    """
    urls = []
    for m in _URL_RE.finditer(value):
        bracketed, bare = m.groups()
        urls.append(bracketed if bracketed is not None else bare.rstrip(_TRAILING_PUNCTUATION))
    return urls


def query_pairs(url: str) -> list[tuple[str, str]]:
    """Query parameters of ``url`` in order; empty if the URL does not parse.

    Values are percent-decoded only; "+" stays "+".
    """
    try:
        query = httpx.URL(url).query.decode("ascii")
    except (httpx.InvalidURL, ValueError):
        logger.debug("Ignoring unparseable URL in Link header: %r", url)
        return []

    pairs = []
    for part in query.split("&"):
        if not part:
            continue
        name, _, value = part.partition("=")
        pairs.append((unquote(name), unquote(value)))
    return pairs


def parse_link_header(value: str | None) -> PageInfo:
    """Recover max_id/min_id/since_id from a Link header value.

    Each cursor takes the first value found across all URLs, independently
    of the others. Never raises; anything unusable yields no cursor.
    """
    if not value:
        return PageInfo()

    pairs = [pair for url in find_urls(value) for pair in query_pairs(url)]

    cursors = {}
    for name in CURSOR_NAMES:
        cursors[name] = next((v for k, v in pairs if k == name), None)

    return PageInfo(**cursors)
