"""
Narrative enrichment for the PDF report.

Asks a chat-completion model for business-oriented copy about one audit
(``businessImpact`` per check, three summary cards, a quick-wins paragraph
and an intro sentence).  Whatever goes wrong (no key, network or SDK error,
empty or invalid JSON, schema mismatch), a static narrative with the same
shape is returned instead: enrichment never fails an audit.

Usage:
    outcome = generate_insights_outcome(audit)
    if outcome.source == "fallback":
        ...
    insights = outcome.insights
"""

from __future__ import annotations

import json
from urllib.parse import urlparse

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from webaudit.core.logging_config import get_logger
from webaudit.core.schemas import (
    AIAuditInsights,
    AuditResult,
    BusinessSummaryItem,
    InsightsOutcome,
)
from webaudit.core.settings import AISettings, get_ai_settings

logger = get_logger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

TEMPERATURE = 0.7
MAX_TOKENS = 3000

QUICK_WINS_FALLBACK = (
    'The items marked "Critical" in this report are your biggest opportunities. '
    "Fixing just the top 3 issues typically improves your overall score by 15-25 "
    "points and can noticeably increase traffic within weeks."
)
RECOMMENDATIONS_INTRO_FALLBACK = (
    "Fix these first for the biggest impact on your traffic and conversions"
)

GENERIC_IMPACT = (
    "This check affects how search engines and visitors perceive your site. "
    "Addressing it strengthens your overall online presence."
)

# One entry per check label produced by webaudit.checks.
STATIC_IMPACT: dict[str, str] = {
    # SEO
    "Page Title": "A strong title tag is the #1 factor for click-through rates in search results. "
                  "Businesses with optimized titles see 20-30% more organic traffic.",
    "Meta Description": 'Your meta description is your "ad copy" in Google results. A compelling '
                        "description can double your click-through rate from search.",
    "H1 Heading": "Search engines use H1 tags to understand your page topic. A clear H1 helps Google "
                  "rank you for the right keywords, driving qualified leads.",
    "Canonical URL": "Without a canonical tag, search engines may split your ranking power across "
                     "duplicate URLs, weakening your position in results.",
    "Structured Data": "Structured data enables rich snippets (stars, FAQs, prices) in Google results. "
                       "Sites with rich snippets get up to 58% more clicks.",
    "Meta Keywords": "While Google ignores meta keywords, other search engines like Bing still consider "
                     "them. Every bit of visibility helps.",
    "Robots Meta": "A misconfigured robots tag can hide your page from Google entirely. Making sure "
                   "you are indexable is the foundation of every other SEO effort.",
    "Heading Hierarchy": "A clear heading structure helps both users and search engines scan your "
                         "content. Well-organized pages keep visitors 2-3x longer.",
    "Internal Links": "Internal linking spreads ranking power across your site and helps Google "
                      "discover all your pages.",
    "URL Structure": "Clean, readable URLs are easier to share and earn more clicks in search results "
                     "than cryptic ones.",
    "Favicon": "A favicon makes your brand recognizable in browser tabs, bookmarks and mobile search "
               "results, which builds trust at a glance.",
    # Performance
    "Server Response Time": "Every second of load time costs you 7% in conversions. Speed is a direct "
                            "Google ranking factor.",
    "Page Size (HTML)": "Lean HTML loads faster on mobile networks. Fast-loading pages rank higher and "
                        "convert better.",
    "Image Lazy Loading": "Unoptimized images are the #1 cause of slow websites. Lazy loading lets "
                          "visitors see your content first and can cut initial load time in half.",
    "Script Loading": "Render-blocking scripts leave visitors staring at a blank screen. Deferring "
                      "them gets your message in front of customers sooner.",
    "Compression": "Gzip/Brotli compression reduces file sizes by 70-90%. This means faster loads and "
                   "better search rankings.",
    "Resource Hints": "Preconnecting to fonts and CDNs shaves hundreds of milliseconds off every page "
                      "view, which visitors feel immediately.",
    "Inline Styles": "Styles kept in cached stylesheets make repeat visits nearly instant and keep your "
                     "pages lighter.",
    # Mobile
    "Viewport Meta Tag": "Without a viewport tag, your site looks broken on mobile. Google penalizes "
                         "sites that aren't mobile-friendly.",
    "Responsive Design Indicators": "Over 60% of web traffic is mobile. A responsive design ensures "
                                    "you're not losing half your potential customers.",
    "Touch Targets": "Mobile users need clear tap targets. Small or missing buttons cause frustration "
                     "and abandonment.",
    "Text Size Adjust": "If text is too small or scales unpredictably on mobile, users bounce "
                        "immediately. Readable text keeps visitors engaged.",
    "Apple Touch Icon": "When customers save your site to their home screen, a proper icon keeps your "
                        "brand front and center.",
    # Security
    "HTTPS/SSL": 'Google marks non-HTTPS sites as "Not Secure" in Chrome, which scares away 85% of '
                 "visitors.",
    "HSTS Header": "HSTS guarantees visitors always reach the secure version of your site, protecting "
                   "them and your reputation.",
    "X-Content-Type-Options": "This header blocks a class of content-sniffing attacks and signals to "
                              "browsers that your site is carefully configured.",
    "Clickjacking Protection": "Frame protection stops attackers from embedding your site in a "
                               "malicious page and tricking your customers.",
    "Content Security Policy": "A content security policy protects your visitors from injected "
                               "scripts and signals that your site is trustworthy.",
    # Accessibility
    "Language Attribute": "The lang attribute helps screen readers pronounce content correctly and "
                          "helps search engines serve your site to the right audience.",
    "Image Alt Text": "Alt text makes images accessible to screen readers and helps Google understand "
                      "your images.",
    "ARIA Attributes": "ARIA labels improve navigation for assistive technology users. Accessible sites "
                       "also tend to have better SEO.",
    "Semantic HTML": "Semantic elements help search engines and screen readers understand which parts "
                     "of your page matter most.",
    "Form Labels": "Labelled forms are easier to complete for everyone. Every confusing field is a "
                   "lead that never reaches you.",
    # Social
    "Open Graph Title": "When someone shares your site on social media, OG tags control how it looks. "
                        "Good previews get 2-3x more clicks.",
    "Open Graph Description": "A tailored share description turns social posts about your business "
                              "into an invitation to visit.",
    "Open Graph Image": "Posts with images get 2-3x more engagement. Without an og:image, platforms "
                        "pick a random picture or none at all.",
    "Twitter Card": "Twitter Cards make your links stand out in feeds with images and descriptions.",
    "Twitter Image": "A dedicated share image keeps your links eye-catching on Twitter/X.",
    "OG Type": "The og:type tag tells social platforms how to present your page, keeping previews "
               "consistent.",
    # Content
    "Heading Structure": "Headings let visitors skim to what they need. Pages that are easy to scan "
                         "keep people reading and convert better.",
    "Content Length": "Pages with 1,000+ words rank significantly better in Google. Comprehensive "
                      "content establishes authority.",
    "Content Formatting": "Lists and short sections improve readability and raise your chances of "
                          "winning featured snippets.",
    "Character Encoding": "A declared charset prevents garbled characters that make a business look "
                          "careless.",
}


# ============================================================================
# PROMPT
# ============================================================================

def _domain(audit: AuditResult) -> str:
    return urlparse(audit.url).hostname or audit.url


def build_prompt(audit: AuditResult) -> str:
    """Render the user prompt for one audit."""
    domain = _domain(audit)
    failing = [
        {"label": item.label, "status": item.status, "detail": item.detail, "category": cat.name}
        for cat, item in audit.iter_items()
        if item.status != "pass"
    ]
    passing = [item.label for _, item in audit.iter_items() if item.status == "pass"]
    percentages = "\n".join(f"{c.name}: {c.percent}%" for c in audit.categories)
    labels = ", ".join([f["label"] for f in failing] + passing)

    return f"""You are a web audit expert writing a personalized PDF report for {domain} (score: {audit.overall_score}/100, grade: {audit.grade}).

FAILING/WARNING items:
{json.dumps(failing, indent=1)}

PASSING items:
{json.dumps(passing, indent=1)}

Categories with scores:
{percentages}

Generate personalized content for the PDF report. Be specific to {domain} and reference their actual results. Write in a professional but approachable tone that conveys urgency without being pushy.

Return a JSON object with these exact fields:

1. "businessImpact": an object mapping each audit item label (both failing AND passing) to a 1-2 sentence "Why This Matters" explanation personalized to {domain}. For failing items, explain what they're losing. For passing items, give a brief positive acknowledgment. Use these exact item labels as keys: {labels}

2. "businessSummaryItems": an array of exactly 3 objects with "title" and "detail" fields for the "What This Means for Your Business" page:
   - First: visitor/customer impact based on their specific failing items
   - Second: search engine visibility based on their SEO/performance scores
   - Third: revenue opportunity with concrete improvement estimates

3. "quickWins": a 2-3 sentence paragraph identifying the top 3 easiest fixes for {domain} and their expected impact.

4. "topRecommendationsIntro": a one-sentence personalized intro for the priority action items page.

Return ONLY valid JSON, no markdown fences."""


# ============================================================================
# FALLBACK
# ============================================================================

def static_fallback(audit: AuditResult) -> AIAuditInsights:
    """Deterministic narrative with the same shape as the model output."""
    fail_count = audit.count("fail")
    score = audit.overall_score

    if fail_count > 3:
        first = BusinessSummaryItem(
            title="You're Losing Potential Customers",
            detail=f"With {fail_count} critical issues, your website is likely turning away "
                   "visitors before they convert.",
        )
    elif fail_count > 0:
        first = BusinessSummaryItem(
            title="Some Visitors May Be Leaving",
            detail=f"You have {fail_count} issue(s) that could be costing you leads. Fixing these "
                   "is often the fastest path to more conversions.",
        )
    else:
        first = BusinessSummaryItem(
            title="Your Site is Retaining Visitors Well",
            detail="Your site has a solid foundation. Small optimizations can still yield "
                   "meaningful improvements.",
        )

    if score >= 75:
        visibility = f"With a score of {score}/100, search engines can effectively crawl and rank your site."
    else:
        visibility = (
            f"A score of {score}/100 means search engines are having trouble understanding "
            "your site. This is fixable."
        )

    return AIAuditInsights(
        business_impact=dict(STATIC_IMPACT),
        business_summary_items=[
            first,
            BusinessSummaryItem(title="Search Engine Visibility", detail=visibility),
            BusinessSummaryItem(
                title="Revenue Impact",
                detail="Every 1-second improvement in page speed increases conversions by 7%. "
                       "Proper SEO can increase organic traffic by 50-100% within 6 months.",
            ),
        ],
        quick_wins=QUICK_WINS_FALLBACK,
        top_recommendations_intro=RECOMMENDATIONS_INTRO_FALLBACK,
    )


def impact_for(insights: AIAuditInsights, label: str) -> str:
    """Business-impact text for ``label``, falling back to the static copy."""
    return (
        insights.business_impact.get(label)
        or STATIC_IMPACT.get(label)
        or GENERIC_IMPACT
    )


def _complete_impact(insights: AIAuditInsights, audit: AuditResult) -> AIAuditInsights:
    """Fill labels the model skipped so every audited check has impact copy."""
    impact = dict(insights.business_impact)
    missing = [item.label for _, item in audit.iter_items() if not impact.get(item.label)]
    if not missing:
        return insights
    logger.debug("  Model omitted %d label(s); using static copy for them.", len(missing))
    for label in missing:
        impact[label] = STATIC_IMPACT.get(label, GENERIC_IMPACT)
    return insights.model_copy(update={"business_impact": impact})


# ============================================================================
# MODEL CALL
# ============================================================================

def _strip_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def _build_client(settings: AISettings) -> OpenAI:
    return OpenAI(api_key=settings.api_key, base_url=settings.base_url, timeout=settings.timeout)


def _request_insights(client: OpenAI, settings: AISettings, audit: AuditResult) -> AIAuditInsights:
    """Call the model and validate its JSON.

    Raises:
        OpenAIError:     SDK / transport failure.
        ValueError:      Empty response.
        ValidationError: JSON invalid or not matching :class:`AIAuditInsights`.
    """
    response = client.chat.completions.create(
        model=settings.model,
        messages=[{"role": "user", "content": build_prompt(audit)}],
        temperature=TEMPERATURE,
        max_tokens=MAX_TOKENS,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ValueError("Empty model response")
    return AIAuditInsights.model_validate_json(_strip_fences(content))


def generate_insights_outcome(
    audit: AuditResult,
    client: OpenAI | None = None,
    settings: AISettings | None = None,
) -> InsightsOutcome:
    """Produce narrative for ``audit`` and record which path produced it.

    Args:
        audit:    Completed audit.
        client:   Pre-built OpenAI-compatible client (tests inject a mock).
                  Built from ``settings`` when omitted.
        settings: Model settings; resolved from the environment when omitted.

    Returns:
        :class:`InsightsOutcome` with ``source`` ``"model"`` or ``"fallback"``.
    """
    try:
        settings = settings or get_ai_settings()
    except ValidationError as exc:
        logger.warning("Invalid LLM settings, using static fallback: %s", exc)
        return InsightsOutcome(source="fallback", insights=static_fallback(audit))

    if client is None and not settings.enabled:
        logger.info("No LLM API key configured, using static fallback for audit insights")
        return InsightsOutcome(source="fallback", insights=static_fallback(audit))

    try:
        client = client or _build_client(settings)
        insights = _request_insights(client, settings, audit)
    except (OpenAIError, ValidationError, ValueError) as exc:
        logger.warning("AI audit insights generation failed, using fallback: %s", exc)
        return InsightsOutcome(source="fallback", insights=static_fallback(audit))

    logger.info("AI insights generated for %s (%s)", _domain(audit), settings.model)
    return InsightsOutcome(source="model", insights=_complete_impact(insights, audit))


def generate_ai_insights(
    audit: AuditResult,
    client: OpenAI | None = None,
    settings: AISettings | None = None,
) -> AIAuditInsights:
    """Like :func:`generate_insights_outcome` but returns only the narrative."""
    return generate_insights_outcome(audit, client=client, settings=settings).insights
