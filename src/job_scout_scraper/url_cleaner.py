"""Search-engine redirect-wrapper removal."""

from __future__ import annotations

import re
from urllib.parse import unquote, urljoin

# (wrapper detector, parameter carrying the real destination)
_REDIRECT_WRAPPERS: tuple[tuple[re.Pattern[str], re.Pattern[str]], ...] = (
    # Google relative form: /url?q=https://...&sa=U
    (
        re.compile(r"^/url\?"),
        re.compile(r"[?&]q=(https?(?::|%3[aA])[^&]+)"),
    ),
    # Google absolute form: https://www.google.com/url?...&url=https://...
    (
        re.compile(r"google\.[a-z.]+/url\?", re.IGNORECASE),
        re.compile(r"[?&](?:url|q)=(https?(?::|%3[aA])[^&]+)"),
    ),
    # DuckDuckGo HTML form: //duckduckgo.com/l/?uddg=https%3A...&rut=...
    (
        re.compile(r"duckduckgo\.com/l/\?", re.IGNORECASE),
        re.compile(r"[?&]uddg=(https?(?::|%3[aA])[^&]+)"),
    ),
)


def clean_url(url: str) -> str:
    """Strip a known redirect wrapper and return the embedded destination.

    Returns the input unchanged when no wrapper matches. If the captured
    value cannot be percent-decoded, the raw captured substring is returned.
    """
    if not url:
        return ""

    for detector, param in _REDIRECT_WRAPPERS:
        if not detector.search(url):
            continue
        match = param.search(url)
        if not match:
            continue
        captured = match.group(1)
        try:
            return unquote(captured, errors="strict")
        except UnicodeDecodeError:
            return captured

    return url


def absolutize_url(url: str, base_url: str) -> str:
    """Resolve protocol-relative and relative hrefs against the page URL."""
    if not url:
        return ""
    if url.startswith("//"):
        return f"https:{url}"
    if url.startswith(("http://", "https://")):
        return url
    if not base_url:
        return url
    return urljoin(base_url, url)


def is_http_url(url: str) -> bool:
    """True for absolute http(s) URLs."""
    return url.startswith(("http://", "https://"))
