"""
Shared pytest fixtures for the webaudit test suite.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from webaudit.core.logging_config import reset_logging
from webaudit.fetcher import FetchedPage

TIMESTAMP = "2026-10-19T08:00:00.000Z"

BARE_HTML = "<html><body><p>short text</p></body></html>"

IDEAL_DESCRIPTION = (
    "Acme Plumbing repairs leaks, clears blocked drains and installs water heaters "
    "for homes and small businesses across Springfield, seven days a week."
)
IDEAL_BODY_TEXT = " ".join(
    ["Our licensed plumbers repair leaking pipes quickly and keep every drain flowing."] * 30
)

IDEAL_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Acme Plumbing - Reliable Plumbers in Springfield</title>
<meta name="description" content="{IDEAL_DESCRIPTION}">
<meta name="keywords" content="plumbing, plumber, drains">
<meta name="robots" content="index, follow">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<link rel="canonical" href="https://acme-plumbing.com/">
<link rel="icon" href="/favicon.ico">
<link rel="apple-touch-icon" href="/apple-touch-icon.png">
<link rel="preconnect" href="https://fonts.example.com">
<meta property="og:title" content="Acme Plumbing">
<meta property="og:description" content="Reliable plumbers in Springfield">
<meta property="og:image" content="https://acme-plumbing.com/og.png">
<meta property="og:type" content="website">
<meta name="twitter:card" content="summary_large_image">
<meta name="twitter:image" content="https://acme-plumbing.com/tw.png">
<script type="application/ld+json">
{{"@context": "https://schema.org", "@graph": [
  {{"@type": "Organization"}}, {{"@type": "WebSite"}}, {{"@type": "FAQPage"}}
]}}
</script>
<script src="/app.js" defer></script>
<style>body {{ -webkit-text-size-adjust: 100%; }} @media (max-width: 600px) {{ nav {{ display: flex; }} }}</style>
</head>
<body>
<header role="banner">
  <nav aria-label="Main">
    <ul>
      <li><a href="/">Home page</a></li>
      <li><a href="/services">Our services</a></li>
      <li><a href="/blog">Plumbing blog</a></li>
      <li><a href="/contact">Contact us</a></li>
    </ul>
  </nav>
</header>
<main>
  <h1>Reliable Plumbers in Springfield</h1>
  <section><h2>Drain cleaning</h2><p>{IDEAL_BODY_TEXT}</p></section>
  <section><h2>Water heaters</h2><p>Fast installation of efficient water heaters.</p></section>
  <img src="/van.jpg" alt="Acme van" loading="lazy">
  <form>
    <label for="email">Email</label>
    <input id="email" type="email">
    <button type="submit">Send</button>
  </form>
  <p>Partners:
    <a href="https://example.org/a">Plumbing association</a>
    <a href="https://example.net/b" rel="nofollow">Local chamber</a>
    <a href="https://example.com/c">Water council</a>
  </p>
  <div class="share-buttons"></div>
</main>
<footer role="contentinfo">Acme Plumbing</footer>
</body>
</html>
"""

IDEAL_HEADERS = {
    "content-encoding": "gzip",
    "strict-transport-security": "max-age=31536000",
    "x-content-type-options": "nosniff",
    "x-frame-options": "DENY",
    "content-security-policy": "default-src 'self'",
}


def make_page(
    html: str,
    url: str = "https://example.com/",
    headers: dict[str, str] | None = None,
    response_time_ms: int = 200,
) -> FetchedPage:
    return FetchedPage(
        requested_url=url,
        final_url=url,
        status_code=200,
        html=html,
        headers=headers or {},
        response_time_ms=response_time_ms,
    )


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ── Logging isolation ─────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _reset_logging():
    """Tear down webaudit logging handlers between tests.

    Prevents handler accumulation when multiple tests call
    setup_pipeline_logging().
    """
    yield
    reset_logging()


# ── Pages ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def bare_page():
    """HTTP page with no title, meta, headings or security headers."""
    return make_page(BARE_HTML, url="http://bare.example/")


@pytest.fixture
def ideal_page():
    """HTTPS page that satisfies every rule check."""
    return make_page(IDEAL_HTML, url="https://acme-plumbing.com/", headers=IDEAL_HEADERS)


# ── Audit results ─────────────────────────────────────────────────────────────

@pytest.fixture
def bare_audit(bare_page):
    from webaudit.auditor import audit_page
    return audit_page(bare_page, timestamp=TIMESTAMP)


@pytest.fixture
def ideal_audit(ideal_page):
    from webaudit.auditor import audit_page
    return audit_page(ideal_page, timestamp=TIMESTAMP)
