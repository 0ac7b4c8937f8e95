"""Best-effort company/location extraction from result titles and snippets."""

from __future__ import annotations

import re

# "Backend Engineer - Acme" / "Backend Engineer | Acme" -> last segment
_COMPANY_SUFFIX_RE = re.compile(r"\s[-–|]\s([^-–|]+?)\s*$")
# "Backend Engineer at Acme Corp"
_COMPANY_AT_RE = re.compile(r"\bat\s+([A-Z][\w&.]*(?:\s+[A-Z][\w&.]*){0,3})")

# "San Francisco, CA" / "Berlin, Germany" / "New York, New York"
_LOCATION_RE = re.compile(
    r"\b([A-Z][a-zA-Z.]+(?:\s[A-Z][a-zA-Z.]+){0,2},\s(?:[A-Z]{2}\b|[A-Z][a-z]+(?:\s[A-Z][a-z]+)?))"
)
_REMOTE_RE = re.compile(r"\b(Remote|Hybrid)\b")

# Site names that engines append to titles; never a company
_SITE_SUFFIXES = frozenset(
    {
        "lever",
        "greenhouse",
        "workable",
        "smartrecruiters",
        "icims",
        "workday",
        "ashby",
        "jobs",
        "careers",
    }
)


def parse_job_info(title: str, snippet: str) -> tuple[str | None, str | None]:
    """Guess (company, location) from a result's title and snippet.

    Low-confidence heuristic; either element may be None. Never raises.
    """
    return _guess_company(title or ""), _guess_location(snippet or "", title or "")


def _guess_company(title: str) -> str | None:
    match = _COMPANY_SUFFIX_RE.search(title)
    if match:
        candidate = match.group(1).strip()
        if candidate and candidate.lower() not in _SITE_SUFFIXES:
            return candidate
    match = _COMPANY_AT_RE.search(title)
    if match:
        return match.group(1).strip()
    return None


def _guess_location(snippet: str, title: str) -> str | None:
    for text in (snippet, title):
        match = _LOCATION_RE.search(text) or _REMOTE_RE.search(text)
        if match:
            return match.group(1).strip()
    return None
