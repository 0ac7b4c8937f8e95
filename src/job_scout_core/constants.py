"""Shared constants for job-scout."""

from __future__ import annotations

# Chromium flags that hide the most obvious automation fingerprints
BROWSER_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
)

# Extra headers sent by the general-search context to look like a real browser
GENERAL_SEARCH_HEADERS: dict[str, str] = {
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate, br",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# Cookie-consent buttons, tried in order; first visible wins
COOKIE_CONSENT_SELECTORS: tuple[str, ...] = (
    'button:has-text("Accept")',
    'button:has-text("I agree")',
    "#L2AGLb",
    'button[id*="accept"]',
    'div[role="button"]:has-text("Accept")',
)

# Case-sensitive markers of an anti-bot challenge or rejection page
BLOCK_TITLE_MARKERS: tuple[str, ...] = (
    "Sorry",
    "CAPTCHA",
    "captcha",
    "Just a moment",
    "Attention Required",
)
BLOCK_BODY_MARKERS: tuple[str, ...] = (
    "unusual traffic",
    "automated queries",
    "Our systems have detected",
    "solve the CAPTCHA",
    "are not a robot",
    # DuckDuckGo anomaly page
    "bots use DuckDuckGo too",
    "confirm this search was made by a human",
)
# Challenge widgets that live in markup only (iframes, hidden inputs)
BLOCK_HTML_MARKERS: tuple[str, ...] = (
    "g-recaptcha",
    "www.google.com/recaptcha/",
    "challenges.cloudflare.com",
    "hcaptcha.com",
    "anomaly-modal",
)

# Pointer moves per simulated human interaction
HUMAN_MOVE_COUNT_RANGE: tuple[int, int] = (2, 3)
# Vertical scroll offset range (pixels) while settling
HUMAN_SCROLL_MAX_PX = 500

DEFAULT_MAX_RESULTS = 50

# Longest query bound into the per-run log context
RUN_CONTEXT_QUERY_MAX_CHARS = 80
