"""
Keyword analysis: unigram/bigram frequency over visible text, a density
figure for the dominant term, and a fixed set of suggestion templates.
"""

from __future__ import annotations

import re
from collections import Counter

from bs4 import BeautifulSoup

from webaudit.checks import meta_content, page_hostname, visible_text
from webaudit.core.logging_config import get_logger
from webaudit.core.schemas import KeywordAnalysis, KeywordSuggestion, Priority

logger = get_logger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

MAX_KEYWORDS = 8
TOP_BIGRAMS = 5
TOP_UNIGRAMS = 5
MIN_TOKEN_LENGTH = 4
MIN_BIGRAM_COUNT = 2

STOP_WORDS: frozenset[str] = frozenset("""
    about above after again against also among another because been before being
    below between both came come could does doing down during each even every from
    further gets give goes going have having here hers herself himself into itself
    just keep know like made make many more most much must myself need next once
    only other ours ourselves over same should some still such take than that their
    theirs them themselves then there these they this those through under until upon
    very want were what when where which while whom whose will with within without
    would your yours yourself yourselves http https www com html page home click
    here read learn menu skip content
""".split())

_TOKEN_SPLIT_RE = re.compile(r"[\W_]+")

# (condition keyword, suggestion template, reason, priority).  A suggestion is
# only offered when its condition keyword is absent from title/meta/headings.
_CONDITIONAL_SUGGESTIONS: tuple[tuple[str, str, str, Priority], ...] = (
    ("consultation", "free consultation",
     "High-intent phrase that captures visitors ready to talk to you", "high"),
    ("professional", "professional {topic} services",
     "Signals expertise and matches commercial search queries", "medium"),
    ("custom", "custom solutions",
     "Attracts prospects looking for tailored offers rather than templates", "low"),
)


# ============================================================================
# HELPERS
# ============================================================================

def tokenize(text: str) -> list[str]:
    """Lower-case ``text`` and split it on non-word characters."""
    return [t for t in _TOKEN_SPLIT_RE.split(text.lower()) if t]


def is_qualifying(token: str) -> bool:
    return len(token) >= MIN_TOKEN_LENGTH and not token.isdigit() and token not in STOP_WORDS


def brand_from_domain(domain: str) -> str:
    """``www.acme-plumbing.co.uk`` → ``acme plumbing``."""
    host = page_hostname(domain if "://" in domain else f"https://{domain}")
    return host.split(".")[0].replace("-", " ").strip()


def _texts(soup: BeautifulSoup, tags: list[str]) -> str:
    return " ".join(el.get_text(" ", strip=True) for el in soup.find_all(tags))


def _title_text(soup: BeautifulSoup) -> str:
    title = soup.find("title")
    return title.get_text(strip=True) if title else ""


# ============================================================================
# PUBLIC API
# ============================================================================

def count_terms(text: str) -> tuple[Counter, Counter, int]:
    """Count qualifying unigrams and repeated bigrams of ``text``.

    Returns:
        ``(unigrams, bigrams, qualifying_token_total)``.  Counter insertion
        order is first-seen order, so ``most_common`` breaks ties by it.
    """
    tokens = tokenize(text)
    unigrams: Counter = Counter(t for t in tokens if is_qualifying(t))
    bigrams: Counter = Counter(
        f"{a} {b}" for a, b in zip(tokens, tokens[1:]) if is_qualifying(a) and is_qualifying(b)
    )
    bigrams = Counter({k: v for k, v in bigrams.items() if v >= MIN_BIGRAM_COUNT})
    return unigrams, bigrams, sum(unigrams.values())


def suggest_keywords(
    soup: BeautifulSoup,
    domain: str,
    year: int,
    top_unigram: str | None,
) -> list[KeywordSuggestion]:
    """Build suggestion templates and drop those the page already covers."""
    brand = brand_from_domain(domain)
    topic = top_unigram or brand or "website"

    title = _title_text(soup)
    meta_desc = meta_content(soup, name="description") or ""
    headings = _texts(soup, ["h1", "h2", "h3"])
    gate_text = " ".join((title, meta_desc, headings)).lower()
    page_text = " ".join(
        (title, meta_desc, _texts(soup, ["h1", "h2"]), visible_text(soup))
    ).lower()

    candidates: list[tuple[str, str, Priority]] = [
        (f"{brand} services", "Branded service searches convert best; own them", "high"),
        (f"{topic} near me", "Local-intent searches are among the highest converting", "high"),
        (f"{topic} best practices", "Informational content builds authority and backlinks", "medium"),
        (f"how to {topic}", "Question-style queries feed featured snippets", "medium"),
        (f"affordable {topic}", "Price-conscious buyers search with this modifier", "medium"),
        (f"{brand} reviews", "Prospects check reviews before contacting a business", "low"),
        (f"{topic} guide {year}", "Fresh, year-stamped guides attract recurring traffic", "low"),
    ]
    for condition, template, reason, priority in _CONDITIONAL_SUGGESTIONS:
        if condition not in gate_text:
            candidates.append((template.format(topic=topic), reason, priority))

    suggestions: list[KeywordSuggestion] = []
    seen: set[str] = set()
    for keyword, reason, priority in candidates:
        keyword = " ".join(keyword.split())
        key = keyword.lower()
        if not keyword or key in seen or key in page_text:
            continue
        seen.add(key)
        suggestions.append(KeywordSuggestion(keyword=keyword, reason=reason, priority=priority))
        if len(suggestions) == MAX_KEYWORDS:
            break
    return suggestions


def analyze_keywords(soup: BeautifulSoup, domain: str, year: int) -> KeywordAnalysis:
    """Extract the page's dominant terms and suggest missing ones.

    Args:
        soup:   Parsed document.
        domain: Audited URL or hostname; drives the branded suggestions.
        year:   Year stamped into the guide suggestion.

    Returns:
        A :class:`KeywordAnalysis` with at most 8 found and 8 suggested keywords.
    """
    unigrams, bigrams, total = count_terms(visible_text(soup))

    found = [kw for kw, _ in bigrams.most_common(TOP_BIGRAMS)]
    found += [kw for kw, _ in unigrams.most_common(TOP_UNIGRAMS)]
    found = found[:MAX_KEYWORDS]

    top_unigram = unigrams.most_common(1)[0][0] if unigrams else None
    if top_unigram is not None and total:
        density = f"{top_unigram}: {unigrams[top_unigram] / total * 100:.1f}%"
    else:
        density = "Unable to calculate"

    suggestions = suggest_keywords(soup, domain, year, top_unigram)
    logger.debug(
        "  Keywords: %d found, %d suggested (%s)", len(found), len(suggestions), density,
    )
    return KeywordAnalysis(
        found_keywords=found,
        suggested_keywords=suggestions,
        density=density,
    )
