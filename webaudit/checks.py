"""
Rule checks: seven categories of independent heuristics over one parsed page.

Each ``audit_*`` function is pure: it reads DOM and header facts from a
:class:`~webaudit.fetcher.FetchedPage` and its parsed soup, classifies each
check as pass / warning / fail, and returns an
:class:`~webaudit.core.schemas.AuditCategory`.  Points come from
:data:`CHECK_POINTS`; a category's ``max_score`` is the sum of the best
outcome of each of its checks.
"""

from __future__ import annotations

import json
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

from webaudit.core.logging_config import get_logger
from webaudit.core.schemas import AuditCategory, AuditItem, Status, round_half_up
from webaudit.fetcher import FetchedPage

logger = get_logger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

# Category declaration order is also the report and recommendation order.
CATEGORY_ICONS: dict[str, str] = {
    "SEO":                 "search",
    "Performance":         "zap",
    "Mobile Friendliness": "smartphone",
    "Security":            "shield",
    "Accessibility":       "eye",
    "Social Media":        "share2",
    "Content Quality":     "fileText",
}

# Points per (category, check label, status).  Hand-tuned; client-facing
# grades depend on these exact values.
CHECK_POINTS: dict[str, dict[str, dict[Status, float]]] = {
    "SEO": {
        "Page Title":        {"pass": 2, "warning": 1},
        "Meta Description":  {"pass": 2, "warning": 1},
        "H1 Heading":        {"pass": 2, "warning": 1},
        "Canonical URL":     {"pass": 1},
        "Structured Data":   {"pass": 1, "warning": 0.5},
        "Meta Keywords":     {"pass": 1},
        "Robots Meta":       {"pass": 1},
        "Heading Hierarchy": {"pass": 1, "warning": 0.5},
        "Internal Links":    {"pass": 1, "warning": 0.5},
        "URL Structure":     {"pass": 1, "warning": 0.5},
        "Favicon":           {"pass": 1},
    },
    "Performance": {
        "Server Response Time": {"pass": 2, "warning": 1},
        "Page Size (HTML)":     {"pass": 1, "warning": 0.5},
        "Image Lazy Loading":   {"pass": 1, "warning": 0.5},
        "Script Loading":       {"pass": 1},
        "Compression":          {"pass": 1},
        "Resource Hints":       {"pass": 1},
        "Inline Styles":        {"pass": 1},
    },
    "Mobile Friendliness": {
        "Viewport Meta Tag":            {"pass": 2, "warning": 1},
        "Responsive Design Indicators": {"pass": 1},
        "Touch Targets":                {"pass": 1},
        "Text Size Adjust":             {"pass": 1},
        "Apple Touch Icon":             {"pass": 1},
    },
    "Security": {
        "HTTPS/SSL":               {"pass": 2},
        "HSTS Header":             {"pass": 1},
        "X-Content-Type-Options":  {"pass": 1},
        "Clickjacking Protection": {"pass": 1},
        "Content Security Policy": {"pass": 1},
    },
    "Accessibility": {
        "Language Attribute": {"pass": 1},
        "Image Alt Text":     {"pass": 2},
        "ARIA Attributes":    {"pass": 1, "warning": 0.5},
        "Semantic HTML":      {"pass": 1},
        "Form Labels":        {"pass": 1},
    },
    "Social Media": {
        "Open Graph Title":       {"pass": 1},
        "Open Graph Description": {"pass": 1},
        "Open Graph Image":       {"pass": 1},
        "Twitter Card":           {"pass": 1},
        "Twitter Image":          {"pass": 1},
        "OG Type":                {"pass": 1},
    },
    "Content Quality": {
        "Heading Structure":  {"pass": 2, "warning": 1},
        "Content Length":     {"pass": 2, "warning": 1},
        "Internal Links":     {"pass": 1},
        "Favicon":            {"pass": 1},
        "Content Formatting": {"pass": 1},
        "Character Encoding": {"pass": 1},
    },
}

_HIDDEN_TEXT_TAGS = ["script", "style", "noscript", "template"]
_SEMANTIC_TAGS = ["header", "nav", "main", "article", "section", "aside", "footer"]
_NON_LABELLED_INPUT_TYPES = {"hidden", "submit", "button"}
_RESPONSIVE_MARKERS = ("@media", "responsive", "flex", "grid")


# ============================================================================
# HELPERS
# ============================================================================

def parse_html(html: str) -> BeautifulSoup:
    """Parse raw HTML with the stdlib-backed parser."""
    return BeautifulSoup(html, "html.parser")


def visible_text(soup: BeautifulSoup) -> str:
    """Return whitespace-collapsed visible text of ``<body>`` (or the document).

    Text inside script, style, noscript and template elements is ignored.
    The soup is not mutated.
    """
    root = soup.body or soup
    texts = [
        el.strip()
        for el in root.find_all(string=True)
        if not isinstance(el, PreformattedString)
        and el.find_parent(_HIDDEN_TEXT_TAGS) is None
        and el.strip()
    ]
    return " ".join(" ".join(texts).split())


def meta_content(soup: BeautifulSoup, name: str | None = None, prop: str | None = None) -> str | None:
    """Return the stripped ``content`` of a ``<meta>`` matched by name or property."""
    if name is not None:
        tag = soup.find("meta", attrs={"name": re.compile(rf"^{re.escape(name)}$", re.I)})
    else:
        tag = soup.find("meta", attrs={"property": re.compile(rf"^{re.escape(prop or '')}$", re.I)})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def _has_link_rel(soup: BeautifulSoup, *rels: str) -> int:
    """Count ``<link>`` tags whose rel attribute contains any of ``rels``."""
    wanted = {r.lower() for r in rels}
    return sum(
        1
        for link in soup.find_all("link", rel=True)
        if wanted.intersection(v.lower() for v in link.get("rel", []))
    )


def extract_schema_types(soup: BeautifulSoup) -> tuple[int, list[str]]:
    """Collect unique JSON-LD ``@type`` values (``@graph`` included).

    Malformed blocks are skipped one by one.

    Returns:
        ``(block_count, unique_types)`` in first-seen order.
    """
    blocks = soup.find_all("script", attrs={"type": "application/ld+json"})
    types: list[str] = []

    def _walk(node: object) -> None:
        if isinstance(node, list):
            for child in node:
                _walk(child)
            return
        if not isinstance(node, dict):
            return
        node_type = node.get("@type")
        if isinstance(node_type, str):
            types.append(node_type)
        elif isinstance(node_type, list):
            types.extend(t for t in node_type if isinstance(t, str))
        graph = node.get("@graph")
        if isinstance(graph, list):
            _walk(graph)

    for block in blocks:
        try:
            _walk(json.loads(block.get_text()))
        except ValueError as exc:
            logger.debug("Skipping malformed JSON-LD block: %s", exc)

    return len(blocks), list(dict.fromkeys(types))


def _pass(label: str, detail: str) -> AuditItem:
    return AuditItem(label=label, status="pass", detail=detail)


def _warn(label: str, detail: str, recommendation: str) -> AuditItem:
    return AuditItem(label=label, status="warning", detail=detail, recommendation=recommendation)


def _fail(label: str, detail: str, recommendation: str) -> AuditItem:
    return AuditItem(label=label, status="fail", detail=detail, recommendation=recommendation)


def category_max_score(name: str) -> float:
    """Sum of the best outcome of every check in a category."""
    return float(sum(max(points.values()) for points in CHECK_POINTS[name].values()))


def _build_category(
    name: str,
    items: list[AuditItem],
    overrides: dict[str, float] | None = None,
) -> AuditCategory:
    """Score ``items`` from :data:`CHECK_POINTS` and wrap them in a category.

    Args:
        name:      Category name (key of :data:`CHECK_POINTS`).
        items:     Check results in display order.
        overrides: Label → points for checks with partial or zero credit that
                   the status alone does not determine.
    """
    overrides = overrides or {}
    table = CHECK_POINTS[name]
    score = 0.0
    for item in items:
        if item.label in overrides:
            score += overrides[item.label]
        else:
            score += table[item.label].get(item.status, 0)
    max_score = category_max_score(name)
    logger.debug("  %s: %.2f/%.0f (%d checks)", name, score, max_score, len(items))
    return AuditCategory(
        name=name,
        icon=CATEGORY_ICONS[name],
        score=round(score, 2),
        max_score=max_score,
        items=items,
    )


# ============================================================================
# SEO
# ============================================================================

def audit_seo(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    """On-page SEO fundamentals: title, meta, headings, schema, links, URL."""
    items: list[AuditItem] = []
    overrides: dict[str, float] = {}
    url = page.final_url

    # ── Title ─────────────────────────────────────────────────────────────────
    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""
    if title and 30 <= len(title) <= 60:
        items.append(_pass("Page Title", f'"{title}" ({len(title)} chars - ideal length)'))
    elif title:
        items.append(_warn(
            "Page Title", f'"{title}" ({len(title)} chars)',
            f"Title should be 30-60 characters for best results. Currently {len(title)} chars.",
        ))
    else:
        items.append(_fail(
            "Page Title", "No title tag found",
            "Add a unique, descriptive <title> tag to every page. This is the most "
            "important on-page SEO element.",
        ))

    # ── Meta description ──────────────────────────────────────────────────────
    meta_desc = meta_content(soup, name="description")
    if meta_desc and 120 <= len(meta_desc) <= 160:
        items.append(_pass("Meta Description", f"{len(meta_desc)} chars - ideal length"))
    elif meta_desc:
        items.append(_warn(
            "Meta Description", f"{len(meta_desc)} chars",
            f"Meta description should be 120-160 characters. Currently {len(meta_desc)} chars.",
        ))
    else:
        items.append(_fail(
            "Meta Description", "No meta description found",
            "Add a compelling meta description that summarizes your page content and "
            "includes target keywords.",
        ))

    # ── H1 ────────────────────────────────────────────────────────────────────
    h1s = soup.find_all("h1")
    if len(h1s) == 1:
        items.append(_pass("H1 Heading", f'"{h1s[0].get_text(strip=True)[:60]}"'))
    elif len(h1s) > 1:
        items.append(_warn(
            "H1 Heading", f"{len(h1s)} H1 tags found",
            "Use only one H1 tag per page. Multiple H1s dilute your primary keyword focus.",
        ))
    else:
        items.append(_fail(
            "H1 Heading", "No H1 heading found",
            "Add a single H1 heading that includes your primary keyword. This tells "
            "search engines what your page is about.",
        ))

    # ── Canonical ─────────────────────────────────────────────────────────────
    canonical = soup.find("link", rel="canonical")
    canonical_href = (canonical.get("href") or "").strip() if canonical else ""
    if canonical_href:
        items.append(_pass("Canonical URL", canonical_href[:60]))
    else:
        items.append(_warn(
            "Canonical URL", "No canonical tag found",
            "Add a canonical URL to prevent duplicate content issues and consolidate link equity.",
        ))

    # ── Structured data ───────────────────────────────────────────────────────
    block_count, schema_types = extract_schema_types(soup)
    if block_count and len(schema_types) >= 3:
        items.append(_pass(
            "Structured Data",
            f"{block_count} schema(s) with {len(schema_types)} types: {', '.join(schema_types[:5])}",
        ))
    elif schema_types:
        items.append(_warn(
            "Structured Data",
            f"{len(schema_types)} schema type(s): {', '.join(schema_types)}",
            "Consider adding more structured data types (Organization, FAQPage, "
            "BreadcrumbList, Review) to enable rich search results.",
        ))
    elif block_count:
        items.append(_warn(
            "Structured Data",
            f"{block_count} JSON-LD block(s) found but could not parse types",
            "Ensure your JSON-LD structured data is valid. Test it at "
            "search.google.com/test/rich-results.",
        ))
    else:
        items.append(_fail(
            "Structured Data", "No structured data found",
            "Add JSON-LD structured data (Organization, FAQPage, etc.) to enable rich "
            "search results with star ratings, FAQs, and more.",
        ))

    # ── Meta keywords ─────────────────────────────────────────────────────────
    meta_keywords = meta_content(soup, name="keywords")
    if meta_keywords:
        items.append(_pass("Meta Keywords", f"{len(meta_keywords.split(','))} keywords defined"))
    else:
        items.append(_warn(
            "Meta Keywords", "No meta keywords tag",
            "While Google doesn't use meta keywords for ranking, other search engines "
            "may. Add relevant keywords for broader coverage.",
        ))

    # ── Robots meta ───────────────────────────────────────────────────────────
    robots = meta_content(soup, name="robots")
    if robots is None:
        items.append(_pass("Robots Meta", "Default (indexable)"))
    elif "noindex" not in robots.lower() and "index" in robots.lower():
        items.append(_pass("Robots Meta", robots))
    else:
        items.append(_warn(
            "Robots Meta", robots,
            "Your robots meta tag may be preventing search engines from indexing this page.",
        ))

    # ── Heading hierarchy ─────────────────────────────────────────────────────
    h2s = soup.find_all("h2")
    h3s = soup.find_all("h3")
    counts = f"H1: {len(h1s)}, H2: {len(h2s)}, H3: {len(h3s)}"
    if h1s and len(h2s) >= 2:
        items.append(_pass("Heading Hierarchy", f"{counts} - good structure"))
    elif h2s:
        items.append(_warn(
            "Heading Hierarchy", counts,
            "Use a clear heading hierarchy (H1 -> H2 -> H3) to help search engines "
            "understand your content structure.",
        ))
    else:
        items.append(_fail(
            "Heading Hierarchy", "Missing heading structure",
            "Add H2 subheadings to organize your content. Search engines use heading "
            "hierarchy to understand page topics.",
        ))

    # ── Internal links ────────────────────────────────────────────────────────
    internal = [
        a for a in soup.find_all("a", href=True)
        if (a["href"].startswith("/") and not a["href"].startswith("//"))
        or a["href"].startswith(url)
    ]
    if len(internal) >= 3:
        items.append(_pass("Internal Links", f"{len(internal)} internal links found"))
    elif internal:
        items.append(_warn(
            "Internal Links", f"Only {len(internal)} internal link(s)",
            "Add more internal links to help search engines discover your pages and "
            "distribute link equity across your site.",
        ))
    else:
        overrides["Internal Links"] = 0
        items.append(_warn(
            "Internal Links", "No internal links detected",
            "Internal linking is crucial for SEO. Link to your other pages to help "
            "search engines crawl and index your site.",
        ))

    # ── URL structure ─────────────────────────────────────────────────────────
    if "?" not in url and not re.search(r"[A-Z]", url) and "_" not in url:
        items.append(_pass("URL Structure", "Clean, lowercase URL with no special characters"))
    else:
        items.append(_warn(
            "URL Structure", "URL could be cleaner",
            "Use lowercase, hyphen-separated URLs without query parameters for better SEO signals.",
        ))

    # ── Favicon ───────────────────────────────────────────────────────────────
    if _has_link_rel(soup, "icon"):
        items.append(_pass("Favicon", "Favicon configured"))
    else:
        items.append(_warn(
            "Favicon", "No favicon found",
            "Add a favicon for brand recognition in browser tabs and search results.",
        ))

    return _build_category("SEO", items, overrides)


# ============================================================================
# PERFORMANCE
# ============================================================================

def audit_performance(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    """Server timing, document weight and render-blocking resources."""
    items: list[AuditItem] = []
    response_ms = page.response_time_ms
    headers = page.headers

    # ── Response time ─────────────────────────────────────────────────────────
    if response_ms < 1000:
        items.append(_pass("Server Response Time", f"{response_ms}ms - fast"))
    elif response_ms < 3000:
        items.append(_warn(
            "Server Response Time", f"{response_ms}ms",
            f"Server response time is {response_ms}ms. Aim for under 1 second for best "
            "user experience.",
        ))
    else:
        items.append(_fail(
            "Server Response Time", f"{response_ms}ms - slow",
            f"Server took {response_ms}ms to respond. This hurts both SEO and user "
            "experience. Consider a CDN, better hosting, or server-side caching.",
        ))

    # ── HTML weight ───────────────────────────────────────────────────────────
    html_kb = round_half_up(len(page.html) / 1024)
    if html_kb < 100:
        items.append(_pass("Page Size (HTML)", f"{html_kb}KB"))
    elif html_kb < 300:
        items.append(_warn(
            "Page Size (HTML)", f"{html_kb}KB",
            "HTML is getting large. Consider code splitting, lazy loading, or reducing "
            "inline styles/scripts.",
        ))
    else:
        items.append(_fail(
            "Page Size (HTML)", f"{html_kb}KB - heavy",
            f"HTML document is {html_kb}KB. Large pages load slowly on mobile. Minimize "
            "inline CSS/JS and use code splitting.",
        ))

    # ── Lazy images ───────────────────────────────────────────────────────────
    images = soup.find_all("img")
    lazy = [img for img in images if (img.get("loading") or "").lower() == "lazy"]
    if not images:
        items.append(_pass("Image Lazy Loading", "No images to optimize"))
    elif len(lazy) >= len(images) * 0.5:
        items.append(_pass("Image Lazy Loading", f"{len(lazy)}/{len(images)} images use lazy loading"))
    else:
        items.append(_warn(
            "Image Lazy Loading", f"Only {len(lazy)}/{len(images)} images use lazy loading",
            'Add loading="lazy" to images below the fold to improve initial page load speed.',
        ))

    # ── Script loading ────────────────────────────────────────────────────────
    scripts = soup.find_all("script", src=True)
    deferred = soup.select("script[async], script[defer]")
    if not scripts:
        items.append(_pass("Script Loading", "No external scripts"))
    elif len(deferred) >= len(scripts) * 0.5:
        items.append(_pass("Script Loading", f"{len(deferred)}/{len(scripts)} scripts use async/defer"))
    else:
        items.append(_warn(
            "Script Loading", f"{len(scripts)} render-blocking scripts found",
            "Add async or defer attributes to non-critical scripts to prevent them from "
            "blocking page rendering.",
        ))

    # ── Compression ───────────────────────────────────────────────────────────
    encoding = headers.get("content-encoding", "").lower()
    if encoding in ("gzip", "br"):
        items.append(_pass("Compression", f"{encoding} compression enabled"))
    else:
        items.append(_warn(
            "Compression", "No compression detected",
            "Enable Gzip or Brotli compression on your server to reduce transfer sizes by 60-80%.",
        ))

    # ── Resource hints ────────────────────────────────────────────────────────
    preconnects = _has_link_rel(soup, "preconnect")
    if preconnects:
        items.append(_pass("Resource Hints", f"{preconnects} preconnect hints found"))
    else:
        items.append(_warn(
            "Resource Hints", "No preconnect hints",
            'Add <link rel="preconnect"> for third-party domains (fonts, CDNs) to speed '
            "up resource loading.",
        ))

    # ── Inline styles ─────────────────────────────────────────────────────────
    inline_styles = soup.find_all(style=True)
    if len(inline_styles) < 5:
        items.append(_pass("Inline Styles", f"{len(inline_styles)} inline styles"))
    else:
        items.append(_warn(
            "Inline Styles", f"{len(inline_styles)} inline styles found",
            "Move inline styles to CSS classes for better caching and smaller HTML size.",
        ))

    return _build_category("Performance", items)


# ============================================================================
# MOBILE
# ============================================================================

def audit_mobile(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    items: list[AuditItem] = []
    overrides: dict[str, float] = {}
    html = page.html

    # ── Viewport ──────────────────────────────────────────────────────────────
    viewport = meta_content(soup, name="viewport")
    if viewport and "width=device-width" in viewport.replace(" ", ""):
        items.append(_pass("Viewport Meta Tag", "Properly configured"))
    elif viewport:
        items.append(_warn(
            "Viewport Meta Tag", viewport,
            'Set viewport to "width=device-width, initial-scale=1.0" for proper mobile scaling.',
        ))
    else:
        items.append(_fail(
            "Viewport Meta Tag", "No viewport meta tag found",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1.0"> '
            "to make your site mobile-friendly. This is critical for mobile SEO.",
        ))

    # ── Responsive CSS ────────────────────────────────────────────────────────
    if any(marker in html for marker in _RESPONSIVE_MARKERS):
        items.append(_pass("Responsive Design Indicators", "Responsive CSS patterns detected"))
    else:
        items.append(_warn(
            "Responsive Design Indicators", "No responsive CSS patterns detected",
            "Use CSS media queries, flexbox, or grid layouts to ensure your site adapts "
            "to all screen sizes.",
        ))

    # ── Touch targets ─────────────────────────────────────────────────────────
    touch_targets = len(soup.find_all(["a", "button"]))
    if touch_targets:
        items.append(_pass("Touch Targets", f"{touch_targets} interactive elements found"))
    else:
        overrides["Touch Targets"] = 0
        items.append(_warn(
            "Touch Targets", "No interactive elements found",
            "Give visitors clear links and buttons to act on; mobile users navigate by tapping.",
        ))

    # ── Text size adjust ──────────────────────────────────────────────────────
    if "text-size-adjust" in html:
        items.append(_pass("Text Size Adjust", "Text size adjustment configured"))
    else:
        items.append(_warn(
            "Text Size Adjust", "No text-size-adjust found",
            "Add -webkit-text-size-adjust CSS property to prevent unexpected text "
            "scaling on mobile devices.",
        ))

    # ── Apple touch icon ──────────────────────────────────────────────────────
    if _has_link_rel(soup, "apple-touch-icon"):
        items.append(_pass("Apple Touch Icon", "Apple touch icon configured"))
    else:
        items.append(_warn(
            "Apple Touch Icon", "No apple-touch-icon",
            "Add an apple-touch-icon for a polished experience when users save your "
            "site to their home screen.",
        ))

    return _build_category("Mobile Friendliness", items, overrides)


# ============================================================================
# SECURITY
# ============================================================================

def audit_security(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    """Transport security and protective response headers."""
    items: list[AuditItem] = []
    headers = page.headers
    csp = headers.get("content-security-policy", "")

    if page.is_https:
        items.append(_pass("HTTPS/SSL", "Site is served over HTTPS"))
    else:
        items.append(_fail(
            "HTTPS/SSL", "Site is not using HTTPS",
            'Switch to HTTPS immediately. Google penalizes non-HTTPS sites, and browsers '
            'show "Not Secure" warnings that scare away visitors.',
        ))

    if headers.get("strict-transport-security"):
        items.append(_pass("HSTS Header", "HSTS enabled"))
    else:
        items.append(_warn(
            "HSTS Header", "No HSTS header",
            "Add Strict-Transport-Security header to force HTTPS connections and "
            "prevent downgrade attacks.",
        ))

    if headers.get("x-content-type-options"):
        items.append(_pass("X-Content-Type-Options", headers["x-content-type-options"]))
    else:
        items.append(_warn(
            "X-Content-Type-Options", "Not set",
            "Add X-Content-Type-Options: nosniff header to prevent MIME type sniffing attacks.",
        ))

    if headers.get("x-frame-options") or "frame-ancestors" in csp:
        items.append(_pass("Clickjacking Protection", "Frame protection enabled"))
    else:
        items.append(_warn(
            "Clickjacking Protection", "No frame protection",
            "Add X-Frame-Options or CSP frame-ancestors header to prevent your site from "
            "being embedded in malicious iframes.",
        ))

    if csp:
        items.append(_pass("Content Security Policy", "CSP header present"))
    else:
        items.append(_warn(
            "Content Security Policy", "No CSP header",
            "Add a Content-Security-Policy header to control which resources browsers "
            "are allowed to load on your pages.",
        ))

    return _build_category("Security", items)


# ============================================================================
# ACCESSIBILITY
# ============================================================================

def audit_accessibility(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    items: list[AuditItem] = []
    overrides: dict[str, float] = {}

    # ── Language ──────────────────────────────────────────────────────────────
    html_tag = soup.find("html")
    lang = (html_tag.get("lang") or "").strip() if html_tag else ""
    if lang:
        items.append(_pass("Language Attribute", f'lang="{lang}"'))
    else:
        items.append(_fail(
            "Language Attribute", "No lang attribute on <html>",
            'Add a lang attribute to your <html> tag (e.g., lang="en"). This helps '
            "screen readers and search engines understand your content language.",
        ))

    # ── Alt text (proportional credit) ────────────────────────────────────────
    images = soup.find_all("img")
    with_alt = soup.find_all("img", alt=True)
    if not images:
        items.append(_pass("Image Alt Text", "No images found"))
    elif len(with_alt) >= len(images) * 0.9:
        items.append(_pass("Image Alt Text", f"{len(with_alt)}/{len(images)} images have alt text"))
    else:
        overrides["Image Alt Text"] = round(len(with_alt) / len(images) * 2, 2)
        items.append(_fail(
            "Image Alt Text", f"Only {len(with_alt)}/{len(images)} images have alt text",
            "Add descriptive alt text to all images. This improves accessibility for "
            "screen readers AND helps Google understand your images for Image Search.",
        ))

    # ── ARIA ──────────────────────────────────────────────────────────────────
    aria = soup.select("[aria-label], [aria-labelledby], [role]")
    if len(aria) >= 3:
        items.append(_pass("ARIA Attributes", f"{len(aria)} ARIA attributes found"))
    elif aria:
        items.append(_warn(
            "ARIA Attributes", f"Only {len(aria)} ARIA attribute(s)",
            "Add ARIA labels to interactive elements like navigation, buttons, and form "
            "inputs for better screen reader support.",
        ))
    else:
        overrides["ARIA Attributes"] = 0
        items.append(_warn(
            "ARIA Attributes", "No ARIA attributes found",
            "Add ARIA labels and roles to make your site accessible to users with "
            "disabilities. This also signals quality to search engines.",
        ))

    # ── Semantic landmarks ────────────────────────────────────────────────────
    semantic = soup.find_all(_SEMANTIC_TAGS)
    if len(semantic) >= 3:
        items.append(_pass("Semantic HTML", f"{len(semantic)} semantic elements found"))
    else:
        items.append(_warn(
            "Semantic HTML", f"Only {len(semantic)} semantic element(s)",
            "Use semantic HTML5 elements (header, nav, main, article, section, footer) "
            "instead of generic divs. This helps both accessibility and SEO.",
        ))

    # ── Form labels ───────────────────────────────────────────────────────────
    labels = soup.find_all("label")
    inputs = [
        i for i in soup.find_all("input")
        if (i.get("type") or "text").lower() not in _NON_LABELLED_INPUT_TYPES
    ]
    if not inputs:
        items.append(_pass("Form Labels", "No form inputs to label"))
    elif len(labels) >= len(inputs) * 0.8:
        items.append(_pass("Form Labels", f"{len(labels)} labels for {len(inputs)} inputs"))
    else:
        items.append(_warn(
            "Form Labels", f"{len(labels)} labels for {len(inputs)} inputs",
            "Associate labels with all form inputs using the for attribute or wrapping "
            "inputs in label tags.",
        ))

    return _build_category("Accessibility", items, overrides)


# ============================================================================
# SOCIAL
# ============================================================================

def audit_social(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    items: list[AuditItem] = []

    og_title = meta_content(soup, prop="og:title")
    og_desc = meta_content(soup, prop="og:description")
    og_image = meta_content(soup, prop="og:image")
    og_type = meta_content(soup, prop="og:type")
    twitter_card = meta_content(soup, name="twitter:card")
    twitter_image = meta_content(soup, name="twitter:image")

    if og_title:
        items.append(_pass("Open Graph Title", og_title[:50]))
    else:
        items.append(_fail(
            "Open Graph Title", "No og:title",
            "Add an og:title meta tag so your page looks great when shared on Facebook, "
            "LinkedIn, and other platforms.",
        ))

    if og_desc:
        items.append(_pass("Open Graph Description", f"{len(og_desc)} chars"))
    else:
        items.append(_fail(
            "Open Graph Description", "No og:description",
            "Add an og:description meta tag for compelling social media previews.",
        ))

    if og_image:
        items.append(_pass("Open Graph Image", "Social share image set"))
    else:
        items.append(_fail(
            "Open Graph Image", "No og:image",
            "Add an og:image meta tag with a 1200x630px image for eye-catching social "
            "media shares. Posts with images get 2-3x more engagement.",
        ))

    if twitter_card:
        items.append(_pass("Twitter Card", f"Type: {twitter_card}"))
    else:
        items.append(_warn(
            "Twitter Card", "No Twitter Card",
            "Add Twitter Card meta tags for better appearance when shared on Twitter/X.",
        ))

    if twitter_image:
        items.append(_pass("Twitter Image", "Twitter share image set"))
    else:
        items.append(_warn(
            "Twitter Image", "No twitter:image",
            "Add a twitter:image meta tag for better visual appearance in Twitter/X shares.",
        ))

    if og_type:
        items.append(_pass("OG Type", og_type))
    else:
        items.append(_warn(
            "OG Type", "No og:type",
            'Add an og:type meta tag (e.g., "website" or "article") for proper social '
            "media categorization.",
        ))

    return _build_category("Social Media", items)


# ============================================================================
# CONTENT
# ============================================================================

def count_words(soup: BeautifulSoup) -> int:
    """Words longer than one character in the visible body text."""
    return sum(1 for w in visible_text(soup).split(" ") if len(w) > 1)


def audit_content(soup: BeautifulSoup, page: FetchedPage) -> AuditCategory:
    """Content volume, structure and formatting."""
    items: list[AuditItem] = []

    # ── Headings ──────────────────────────────────────────────────────────────
    h1, h2, h3 = (len(soup.find_all(tag)) for tag in ("h1", "h2", "h3"))
    heading_count = h1 + h2 + h3
    if heading_count >= 3:
        items.append(_pass("Heading Structure", f"{h1} H1, {h2} H2, {h3} H3"))
    elif heading_count:
        items.append(_warn(
            "Heading Structure", f"Only {heading_count} heading(s)",
            "Use a clear heading hierarchy (H1 -> H2 -> H3) to organize your content. "
            "This helps both users and search engines understand your page structure.",
        ))
    else:
        items.append(_fail(
            "Heading Structure", "No headings found",
            "Add headings (H1, H2, H3) to structure your content. Headings are one of "
            "the strongest on-page SEO signals.",
        ))

    # ── Word count ────────────────────────────────────────────────────────────
    word_count = count_words(soup)
    if word_count >= 300:
        items.append(_pass("Content Length", f"~{word_count} words"))
    elif word_count >= 100:
        items.append(_warn(
            "Content Length", f"~{word_count} words",
            f"Only ~{word_count} words on the page. Aim for 300+ words of quality "
            "content to give search engines more to work with.",
        ))
    else:
        items.append(_fail(
            "Content Length", f"~{word_count} words - very thin",
            "Very little content for search engines to index. Add detailed, "
            "keyword-rich content to improve rankings.",
        ))

    # ── Internal links ────────────────────────────────────────────────────────
    internal = [
        a for a in soup.find_all("a", href=True)
        if a["href"].startswith(("/", "./", "#")) and not a["href"].startswith("//")
    ]
    if len(internal) >= 3:
        items.append(_pass("Internal Links", f"{len(internal)} internal links"))
    else:
        items.append(_warn(
            "Internal Links", f"Only {len(internal)} internal link(s)",
            "Add more internal links to help search engines discover and understand the "
            "relationships between your pages.",
        ))

    # ── Favicon ───────────────────────────────────────────────────────────────
    if _has_link_rel(soup, "icon"):
        items.append(_pass("Favicon", "Favicon configured"))
    else:
        items.append(_warn(
            "Favicon", "No favicon",
            "Add a favicon for brand recognition in browser tabs and bookmarks.",
        ))

    # ── Lists ─────────────────────────────────────────────────────────────────
    lists = soup.find_all(["ul", "ol"])
    if lists:
        items.append(_pass("Content Formatting", f"{len(lists)} list(s) used for readability"))
    else:
        items.append(_warn(
            "Content Formatting", "No lists found",
            "Use bullet points and numbered lists to improve readability and increase "
            "chances of appearing in featured snippets.",
        ))

    # ── Charset ───────────────────────────────────────────────────────────────
    charset = soup.find("meta", charset=True)
    if charset is not None:
        items.append(_pass("Character Encoding", f'charset="{charset.get("charset")}"'))
    else:
        items.append(_warn(
            "Character Encoding", "No charset declared",
            'Add <meta charset="UTF-8"> to ensure proper text rendering across all browsers.',
        ))

    return _build_category("Content Quality", items)


# ============================================================================
# ALL CATEGORIES
# ============================================================================

CATEGORY_AUDITS = (
    audit_seo,
    audit_performance,
    audit_mobile,
    audit_security,
    audit_accessibility,
    audit_social,
    audit_content,
)


def run_all_checks(soup: BeautifulSoup, page: FetchedPage) -> list[AuditCategory]:
    """Run every category in declaration order."""
    return [audit(soup, page) for audit in CATEGORY_AUDITS]


def page_hostname(url: str) -> str:
    """Hostname of ``url`` without a leading ``www.`` (empty when absent)."""
    host = (urlparse(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host
