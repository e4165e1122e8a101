"""
Link-profile heuristics over the audited document.

Purely advisory: each rule yields one :class:`BacklinkInsight` and nothing
here affects the overall score.
"""

from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup

from webaudit.checks import page_hostname
from webaudit.core.logging_config import get_logger
from webaudit.core.schemas import BacklinkInsight, round_half_up

logger = get_logger(__name__)

_IGNORED_SCHEMES = ("mailto:", "tel:", "javascript:")
GENERIC_ANCHORS = frozenset({"click here", "read more", "learn more"})
MAX_ANCHOR_LENGTH = 60
_HUB_MARKERS = ("blog", "article", "news", "post")
_SHARE_SELECTORS = "[class*=share], [class*=social], [data-share], [data-social]"


def classify_links(soup: BeautifulSoup, page_url: str) -> tuple[list, list]:
    """Split anchors into ``(internal, external)``.

    ``mailto:``, ``tel:`` and ``javascript:`` anchors belong to neither.
    Fragment-only and relative hrefs are internal; absolute hrefs are
    internal when their host matches the page host (``www.`` ignored).
    """
    own_host = page_hostname(page_url)
    internal, external = [], []
    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if not href or href.lower().startswith(_IGNORED_SCHEMES):
            continue
        if href.startswith("#"):
            internal.append(a)
            continue
        host = page_hostname(urljoin(page_url, href))
        if not host or host == own_host:
            internal.append(a)
        else:
            external.append(a)
    return internal, external


def _outbound_links(external: list) -> BacklinkInsight:
    n = len(external)
    if n >= 3:
        return BacklinkInsight(
            label="Outbound Links", status="pass",
            detail=f"{n} external links to other sites",
        )
    if n:
        return BacklinkInsight(
            label="Outbound Links", status="warning",
            detail=f"Only {n} external link(s)",
            recommendation="Link out to a few authoritative sources. Relevant outbound "
                           "links signal trust and help search engines place your content.",
        )
    return BacklinkInsight(
        label="Outbound Links", status="fail",
        detail="No external links found",
        recommendation="Reference reputable partners, directories or sources. Pages that "
                       "link nowhere look isolated to search engines.",
    )


def _internal_structure(internal: list) -> BacklinkInsight:
    n = len(internal)
    if n >= 10:
        return BacklinkInsight(
            label="Internal Link Structure", status="pass",
            detail=f"{n} internal links help crawlers discover your pages",
        )
    if n >= 3:
        return BacklinkInsight(
            label="Internal Link Structure", status="warning",
            detail=f"{n} internal links",
            recommendation="Add contextual links between related pages so authority "
                           "flows through the whole site.",
        )
    return BacklinkInsight(
        label="Internal Link Structure", status="fail",
        detail=f"Only {n} internal link(s)",
        recommendation="Build a navigation and in-content linking structure. Pages with "
                       "no internal links pointing to them rarely rank.",
    )


def _anchor_quality(anchors: list) -> BacklinkInsight:
    texts = [a.get_text(" ", strip=True) for a in anchors]
    texts = [t for t in texts if t]
    if not texts:
        return BacklinkInsight(
            label="Anchor Text Quality", status="warning",
            detail="No anchor text found",
            recommendation="Use descriptive link text so visitors and search engines know "
                           "what each link points to.",
        )
    good = [
        t for t in texts
        if t.lower() not in GENERIC_ANCHORS and len(t) < MAX_ANCHOR_LENGTH
    ]
    ratio = len(good) / len(texts)
    if ratio >= 0.7:
        return BacklinkInsight(
            label="Anchor Text Quality", status="pass",
            detail=f"{round_half_up(ratio * 100)}% of links use descriptive anchor text",
        )
    return BacklinkInsight(
        label="Anchor Text Quality", status="warning",
        detail=f"Only {round_half_up(ratio * 100)}% of links use descriptive anchor text",
        recommendation='Replace generic phrases like "click here" or "read more" with '
                       "short, keyword-rich descriptions of the destination.",
    )


def _social_sharing(soup: BeautifulSoup, html: str) -> BacklinkInsight:
    lowered = html.lower()
    if "share" in lowered or "social" in lowered or soup.select(_SHARE_SELECTORS):
        return BacklinkInsight(
            label="Social Sharing", status="pass",
            detail="Social sharing features detected",
        )
    return BacklinkInsight(
        label="Social Sharing", status="warning",
        detail="No social sharing features found",
        recommendation="Add share buttons so visitors can spread your content. Every "
                       "share is a chance to earn a natural backlink.",
    )


def _content_hub(soup: BeautifulSoup) -> BacklinkInsight:
    for a in soup.find_all("a", href=True):
        href = a["href"].lower()
        if any(marker in href for marker in _HUB_MARKERS):
            return BacklinkInsight(
                label="Content Hub", status="pass",
                detail="Blog or article section detected",
            )
    return BacklinkInsight(
        label="Content Hub", status="warning",
        detail="No blog or news section found",
        recommendation="Publish a blog or resources section. Useful articles are the most "
                       "reliable way to attract links from other websites.",
    )


def analyze_backlinks(soup: BeautifulSoup, html: str, page_url: str) -> list[BacklinkInsight]:
    """Run every link-profile rule in display order.

    Args:
        soup:     Parsed document.
        html:     Raw HTML (share markers are searched in it too).
        page_url: Final URL of the page; defines what counts as internal.

    Returns:
        Insights for Outbound Links, Internal Link Structure, Anchor Text
        Quality, Nofollow Usage (only when present), Social Sharing and
        Content Hub.
    """
    internal, external = classify_links(soup, page_url)
    insights = [
        _outbound_links(external),
        _internal_structure(internal),
        _anchor_quality(internal + external),
    ]

    nofollow = [a for a in soup.find_all("a", rel=True) if "nofollow" in [r.lower() for r in a["rel"]]]
    if nofollow:
        insights.append(BacklinkInsight(
            label="Nofollow Usage", status="pass",
            detail=f"{len(nofollow)} link(s) marked nofollow",
        ))

    insights.append(_social_sharing(soup, html))
    insights.append(_content_hub(soup))

    logger.debug(
        "  Links: %d internal, %d external, %d insights",
        len(internal), len(external), len(insights),
    )
    return insights
