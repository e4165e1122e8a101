"""
Multi-page PDF report for one audit.

Pages, in order:
  1. Cover            : grade circle, summary, pass/warn/fail counters, category bars
  2. Business impact  : three narrative cards and the quick-wins paragraph
  3. Category details : one card per check, as many pages as needed per category
  4. Priority actions : numbered top recommendations (only when there are any)
  5. Keyword analysis : found keywords, density, suggestions
  6. Link profile     : backlink insights
  7. Call to action

Layout is drawn directly on a reportlab canvas.  Coordinates are handled
top-down by :class:`PageCursor`; every text block is wrapped to its width and
measured before its card is drawn, and a new page is started whenever the
next block would cross the bottom margin.
"""

from __future__ import annotations

import io
from datetime import datetime
from typing import NamedTuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as pdf_canvas
from reportlab.platypus import Paragraph

from webaudit.ai_insights import impact_for, static_fallback
from webaudit.core.exceptions import ReportRenderError
from webaudit.core.logging_config import get_logger
from webaudit.core.schemas import AIAuditInsights, AuditCategory, AuditResult, Status

logger = get_logger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

MARGIN = 50
BOTTOM_LIMIT = 60
PAGE_TOP = 50
CARD_GAP = 8
CARD_PADDING = 10
# Smallest card slice worth starting at the bottom of a page
MIN_CARD_SLICE = 80

BRAND_NAME = "AI POWERED SITES"
BRAND_SITE = "aipoweredsites.com"
BRAND_EMAIL = "hello@aipoweredsites.com"

DARK_BG = colors.HexColor("#0f172a")
DARK_CARD = colors.HexColor("#1e293b")
BRAND_BLUE = colors.HexColor("#3b82f6")
WHITE = colors.HexColor("#ffffff")
GRAY = colors.HexColor("#94a3b8")
LIGHT_GRAY = colors.HexColor("#cbd5e1")
FOOTER_GRAY = colors.HexColor("#475569")
GREEN = colors.HexColor("#22c55e")
YELLOW = colors.HexColor("#eab308")
RED = colors.HexColor("#ef4444")


class StatusStyle(NamedTuple):
    color: colors.Color
    background: colors.Color
    label: str


# Single source for status colours: icon, badge, accent bar and counters.
STATUS_STYLES: dict[str, StatusStyle] = {
    "pass":    StatusStyle(GREEN, colors.HexColor("#0f291a"), "PASS"),
    "warning": StatusStyle(YELLOW, colors.HexColor("#291f0a"), "NEEDS ATTENTION"),
    "fail":    StatusStyle(RED, colors.HexColor("#2d0f0f"), "CRITICAL"),
}

PRIORITY_STATUS: dict[str, Status] = {
    "high": "fail",
    "medium": "warning",
    "low": "pass",
}


def _style(name: str, size: float, color: colors.Color, bold: bool = False,
           align: int = TA_LEFT, leading: float | None = None) -> ParagraphStyle:
    return ParagraphStyle(
        name,
        fontName="Helvetica-Bold" if bold else "Helvetica",
        fontSize=size,
        leading=leading or size * 1.3,
        textColor=color,
        alignment=align,
    )


STYLES: dict[str, ParagraphStyle] = {
    "title":       _style("title", 20, WHITE, bold=True),
    "subtitle":    _style("subtitle", 10, GRAY),
    "summary":     _style("summary", 10, LIGHT_GRAY),
    "card_title":  _style("card_title", 10, WHITE, bold=True),
    "biz_title":   _style("biz_title", 12, WHITE, bold=True),
    "card_body":   _style("card_body", 9, GRAY),
    "card_note":   _style("card_note", 8, LIGHT_GRAY),
    "rec_body":    _style("rec_body", 9, LIGHT_GRAY),
    "big_title":   _style("big_title", 26, WHITE, bold=True, align=TA_CENTER, leading=32),
    "big_accent":  _style("big_accent", 26, BRAND_BLUE, bold=True, align=TA_CENTER, leading=32),
    "centered":    _style("centered", 12, GRAY, align=TA_CENTER),
    "footer":      _style("footer", 7, FOOTER_GRAY, align=TA_CENTER),
}


def score_color(percent: float) -> colors.Color:
    if percent >= 75:
        return GREEN
    if percent >= 50:
        return YELLOW
    return RED


def grade_color(grade: str) -> colors.Color:
    if grade.startswith("A"):
        return GREEN
    if grade.startswith("B"):
        return BRAND_BLUE
    if grade.startswith("C"):
        return YELLOW
    return RED


def format_report_date(timestamp: str) -> str:
    """``2026-10-19T08:00:00Z`` → ``October 19, 2026`` (raw string if unparsable)."""
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return f"{dt:%B} {dt.day}, {dt.year}"


# ============================================================================
# PAGE CURSOR
# ============================================================================

class PageCursor:
    """Canvas wrapper tracking a top-down ``y`` and the page count.

    All public drawing helpers take top-down coordinates (``y`` grows toward
    the bottom of the page) and convert them for reportlab.
    """

    def __init__(self, canvas: pdf_canvas.Canvas, pagesize: tuple[float, float] = A4,
                 margin: float = MARGIN) -> None:
        self.canvas = canvas
        self.width, self.height = pagesize
        self.margin = margin
        self.content_width = self.width - 2 * margin
        self.y: float = PAGE_TOP
        self.page_count = 0

    # ── Pages ────────────────────────────────────────────────────────────────

    def new_page(self, accent_height: float = 4) -> None:
        """Finish the current page (if any) and paint a fresh background."""
        if self.page_count:
            self.canvas.showPage()
        self.page_count += 1
        self.rect(0, 0, self.width, self.height, DARK_BG)
        if accent_height:
            self.rect(0, 0, self.width, accent_height, BRAND_BLUE)
        self.y = PAGE_TOP

    def ensure_space(self, needed: float) -> bool:
        """Start a new page when ``needed`` points would cross the bottom margin.

        Returns:
            ``True`` when a page break happened.
        """
        if self.y + needed > self.height - BOTTOM_LIMIT:
            self.new_page()
            return True
        return False

    # ── Primitives ───────────────────────────────────────────────────────────

    def _flip(self, y: float, h: float = 0) -> float:
        return self.height - y - h

    def rect(self, x: float, y: float, w: float, h: float, color: colors.Color,
             radius: float = 0) -> None:
        c = self.canvas
        c.setFillColor(color)
        if radius:
            c.roundRect(x, self._flip(y, h), w, h, radius, stroke=0, fill=1)
        else:
            c.rect(x, self._flip(y, h), w, h, stroke=0, fill=1)

    def circle(self, cx: float, cy: float, r: float, color: colors.Color) -> None:
        self.canvas.setFillColor(color)
        self.canvas.circle(cx, self._flip(cy), r, stroke=0, fill=1)

    def line(self, x1: float, y1: float, x2: float, y2: float, color: colors.Color,
             width: float = 1) -> None:
        c = self.canvas
        c.setStrokeColor(color)
        c.setLineWidth(width)
        c.line(x1, self._flip(y1), x2, self._flip(y2))

    def string(self, text: str, x: float, y: float, size: float, color: colors.Color,
               bold: bool = False, align: str = "left", width: float = 0) -> None:
        """Single-line text whose top edge sits at ``y``."""
        c = self.canvas
        font = "Helvetica-Bold" if bold else "Helvetica"
        c.setFont(font, size)
        c.setFillColor(color)
        baseline = self._flip(y) - size * 0.8
        if align == "center":
            c.drawCentredString(x + width / 2, baseline, text)
        elif align == "right":
            c.drawRightString(x + width, baseline, text)
        else:
            c.drawString(x, baseline, text)

    @staticmethod
    def paragraph(text: str, style: ParagraphStyle, width: float) -> tuple[Paragraph, float]:
        """Build and measure a wrapped paragraph; returns ``(paragraph, height)``."""
        para = Paragraph(escape(text), style)
        _, height = para.wrap(width, 10_000)
        return para, height

    def draw(self, para: Paragraph, x: float, y: float, height: float) -> None:
        para.drawOn(self.canvas, x, self._flip(y, height))

    def text(self, text: str, style: ParagraphStyle, x: float, y: float, width: float) -> float:
        """Draw wrapped text with its top at ``y``; returns the height used."""
        para, height = self.paragraph(text, style, width)
        self.draw(para, x, y, height)
        return height


# ============================================================================
# SHARED BLOCKS
# ============================================================================

def _status_icon(cur: PageCursor, cx: float, cy: float, status: str) -> None:
    style = STATUS_STYLES[status]
    cur.circle(cx, cy, 8, style.background)
    if status == "pass":
        cur.line(cx - 4, cy, cx - 1, cy + 3, style.color, 1.8)
        cur.line(cx - 1, cy + 3, cx + 4, cy - 3, style.color, 1.8)
    elif status == "warning":
        cur.string("!", cx - 5, cy - 5, 11, style.color, bold=True, align="center", width=10)
    else:
        cur.line(cx - 3, cy - 3, cx + 3, cy + 3, style.color, 1.8)
        cur.line(cx - 3, cy + 3, cx + 3, cy - 3, style.color, 1.8)


def _badge(cur: PageCursor, right: float, y: float, text: str, status: str) -> None:
    style = STATUS_STYLES[status]
    width = stringWidth(text, "Helvetica-Bold", 7) + 12
    cur.rect(right - width, y, width, 16, style.background, radius=3)
    cur.string(text, right - width + 6, y + 4.5, 7, style.color, bold=True)


def _page_header(cur: PageCursor, title: str, subtitle: str | None = None) -> None:
    cur.y = 40
    cur.y += cur.text(title, STYLES["title"], cur.margin, cur.y, cur.content_width) + 4
    if subtitle:
        cur.y += cur.text(subtitle, STYLES["subtitle"], cur.margin, cur.y, cur.content_width)
    cur.y += 18


class _CardPiece(NamedTuple):
    """A paragraph or a small heading stacked inside a check card."""

    gap: float
    width: float
    para: Paragraph | None = None
    height: float = 11
    heading: str | None = None
    color: colors.Color | None = None


def _check_card(
    cur: PageCursor,
    label: str,
    status: str,
    detail: str,
    recommendation: str | None = None,
    impact: str | None = None,
    badge: str | None = None,
) -> None:
    """One status card: icon, badge, label, detail, recommendation, impact.

    A card taller than a page is continued on the following pages: the
    paragraph that reaches the bottom margin is split and every page gets
    its own card background.
    """
    style = STATUS_STYLES[status]
    x, cw = cur.margin, cur.content_width
    text_x = x + 38
    text_w = cw - 55

    pieces: list[_CardPiece] = []
    label_p, label_h = cur.paragraph(label, STYLES["card_title"], cw - 140)
    pieces.append(_CardPiece(0, cw - 140, label_p, label_h))
    detail_p, detail_h = cur.paragraph(detail, STYLES["card_body"], text_w)
    pieces.append(_CardPiece(4, text_w, detail_p, detail_h))
    if recommendation and status != "pass":
        para, h = cur.paragraph(recommendation, STYLES["card_note"], text_w)
        pieces.append(_CardPiece(6, text_w, heading="RECOMMENDATION:", color=style.color))
        pieces.append(_CardPiece(0, text_w, para, h))
    if impact:
        para, h = cur.paragraph(impact, STYLES["card_note"], text_w)
        pieces.append(_CardPiece(6, text_w, heading="WHY THIS MATTERS:", color=BRAND_BLUE))
        pieces.append(_CardPiece(0, text_w, para, h))

    height = max(48, sum(p.gap + p.height for p in pieces) + 2 * CARD_PADDING)
    if height <= cur.height - BOTTOM_LIMIT - PAGE_TOP:
        cur.ensure_space(height)
    else:
        cur.ensure_space(MIN_CARD_SLICE)

    limit = cur.height - BOTTOM_LIMIT - CARD_PADDING
    top = cur.y
    y = top + CARD_PADDING
    placed: list[tuple[_CardPiece, float]] = []
    first = True

    def close(bottom: float) -> None:
        nonlocal first
        card_h = max(48, bottom - top) if first else bottom - top
        cur.rect(x, top, cw, card_h, DARK_CARD, radius=6)
        cur.rect(x, top, 4, card_h, style.color, radius=2)
        if first:
            _status_icon(cur, x + 22, top + 16, status)
            _badge(cur, x + cw - 10, top + 8, badge or style.label, status)
        for piece, py in placed:
            if piece.heading:
                cur.string(piece.heading, text_x, py, 8, piece.color, bold=True)
            else:
                cur.draw(piece.para, text_x, py, piece.height)
        placed.clear()
        first = False
        cur.y = top + card_h + CARD_GAP

    for piece in pieces:
        y += piece.gap
        while y + piece.height > limit:
            parts = piece.para.split(piece.width, limit - y) if piece.para else []
            if not parts and not placed and top == PAGE_TOP:
                break
            if len(parts) >= 2:
                _, head_h = parts[0].wrap(piece.width, limit - y)
                placed.append((piece._replace(para=parts[0], height=head_h), y))
                y += head_h
                _, rest_h = parts[1].wrap(piece.width, 10_000)
                piece = piece._replace(gap=0, para=parts[1], height=rest_h)
            close(y + CARD_PADDING)
            logger.debug("Card '%s' continued on page %d", label, cur.page_count + 1)
            cur.new_page()
            top = cur.y
            y = top + CARD_PADDING
        placed.append((piece, y))
        y += piece.height

    close(y + CARD_PADDING)


# ============================================================================
# PAGES
# ============================================================================

def _cover_page(cur: PageCursor, audit: AuditResult) -> None:
    cur.new_page(accent_height=6)
    x, cw, pw = cur.margin, cur.content_width, cur.width

    cur.string(BRAND_NAME, x, 40, 11, BRAND_BLUE, bold=True)
    cur.string(BRAND_SITE, x, 56, 8, GRAY)

    cover_y = 160
    cur.string("Website Audit", x, cover_y, 32, WHITE, bold=True)
    cur.string("Report", x, cover_y + 42, 32, BRAND_BLUE, bold=True)
    cur.line(x, cover_y + 90, x + 80, cover_y + 90, BRAND_BLUE, 3)
    url_h = cur.text(audit.url, STYLES["summary"], x, cover_y + 108, cw - 180)
    cur.string(f"Generated: {format_report_date(audit.timestamp)}", x, cover_y + 114 + url_h, 10, GRAY)

    # Grade circle
    gx, gy = pw - 160, cover_y + 30
    gc = grade_color(audit.grade)
    cur.circle(gx + 40, gy + 40, 48, gc)
    cur.circle(gx + 40, gy + 40, 42, DARK_BG)
    cur.string(audit.grade, gx, gy + 16, 30, gc, bold=True, align="center", width=80)
    cur.string(f"{audit.overall_score}/100", gx, gy + 52, 11, GRAY, align="center", width=80)
    cur.string(audit.grade_label, gx - 20, gy + 96, 10, gc, bold=True, align="center", width=120)

    # Summary box, sized to its text
    summary_y = cover_y + 180
    text = f"{audit.summary} {audit.grade_summary}"
    para, h = cur.paragraph(text, STYLES["summary"], cw - 32)
    box_h = max(55, h + 30)
    cur.rect(x, summary_y, cw, box_h, DARK_CARD, radius=6)
    cur.rect(x, summary_y, 4, box_h, BRAND_BLUE, radius=2)
    cur.draw(para, x + 16, summary_y + 15, h)

    # Counters
    stats_y = summary_y + box_h + 20
    box_w = (cw - 20) / 3
    counters = (
        ("Passing", audit.count("pass"), "pass"),
        ("Needs Attention", audit.count("warning"), "warning"),
        ("Critical Issues", audit.count("fail"), "fail"),
    )
    for i, (label, count, status) in enumerate(counters):
        style = STATUS_STYLES[status]
        sx = x + i * (box_w + 10)
        cur.rect(sx, stats_y, box_w, 50, style.background, radius=6)
        cur.string(str(count), sx + 12, stats_y + 8, 22, style.color, bold=True)
        cur.string(label, sx + 12, stats_y + 34, 9, GRAY)

    # Category bars
    bars_y = stats_y + 70
    cur.string("Category Scores", x, bars_y, 13, WHITE, bold=True)
    by = bars_y + 25
    bar_w = cw - 165
    for cat in audit.categories:
        pct = cat.percent
        cur.string(cat.name, x, by + 1, 9, LIGHT_GRAY)
        cur.rect(x + 125, by + 2, bar_w, 10, DARK_CARD, radius=3)
        cur.rect(x + 125, by + 2, max(4.0, pct / 100 * bar_w), 10, score_color(pct), radius=3)
        cur.string(f"{pct}%", x + 125 + bar_w + 8, by + 1, 9, WHITE, bold=True)
        by += 22


def _business_page(cur: PageCursor, audit: AuditResult, insights: AIAuditInsights) -> None:
    cur.new_page()
    _page_header(
        cur, "What This Means for Your Business",
        f"How your score of {audit.overall_score}/100 translates into visitors, visibility and revenue",
    )
    x, cw = cur.margin, cur.content_width

    for i, item in enumerate(insights.business_summary_items, start=1):
        title_p, title_h = cur.paragraph(item.title, STYLES["biz_title"], cw - 70)
        detail_p, detail_h = cur.paragraph(item.detail, STYLES["summary"], cw - 70)
        height = max(60, 14 + title_h + 6 + detail_h + 14)
        cur.ensure_space(height)
        top = cur.y
        cur.rect(x, top, cw, height, DARK_CARD, radius=6)
        cur.rect(x, top, 4, height, BRAND_BLUE, radius=2)
        cur.circle(x + 30, top + 24, 12, DARK_BG)
        cur.string(str(i), x + 24, top + 18, 11, BRAND_BLUE, bold=True, align="center", width=12)
        cur.draw(title_p, x + 55, top + 14, title_h)
        cur.draw(detail_p, x + 55, top + 14 + title_h + 6, detail_h)
        cur.y = top + height + 12

    para, h = cur.paragraph(insights.quick_wins, STYLES["summary"], cw - 32)
    height = 16 + 16 + h + 16
    cur.ensure_space(height + 10)
    top = cur.y + 10
    cur.rect(x, top, cw, height, colors.HexColor("#172554"), radius=6)
    cur.string("QUICK WINS", x + 16, top + 14, 9, BRAND_BLUE, bold=True)
    cur.draw(para, x + 16, top + 32, h)
    cur.y = top + height + CARD_GAP


def _category_pages(cur: PageCursor, cat: AuditCategory, insights: AIAuditInsights) -> None:
    cur.new_page()
    x, cw, pw = cur.margin, cur.content_width, cur.width
    pct = cat.percent

    cur.rect(x, 30, cw, 60, DARK_CARD, radius=8)
    cur.string(cat.name, x + 15, 42, 18, WHITE, bold=True)
    cur.string(f"{cat.count('pass')}/{len(cat.items)} checks passed", x + 15, 66, 10, GRAY)
    cur.rect(pw - 130, 40, 70, 40, score_color(pct), radius=6)
    cur.string(f"{pct}%", pw - 130, 50, 18, WHITE, bold=True, align="center", width=70)
    cur.y = 110

    for item in cat.items:
        _check_card(
            cur,
            label=item.label,
            status=item.status,
            detail=item.detail,
            recommendation=item.recommendation,
            impact=impact_for(insights, item.label),
        )


def _priority_page(cur: PageCursor, audit: AuditResult, insights: AIAuditInsights) -> None:
    cur.new_page()
    _page_header(cur, "Priority Action Items", insights.top_recommendations_intro)
    x, cw = cur.margin, cur.content_width

    for i, rec in enumerate(audit.top_recommendations):
        style = STATUS_STYLES["fail" if i < 3 else "warning"]
        para, h = cur.paragraph(rec, STYLES["rec_body"], cw - 60)
        height = max(40, h + 16)
        cur.ensure_space(height)
        top = cur.y
        cur.rect(x, top, cw, height, DARK_CARD, radius=6)
        cur.rect(x, top, 4, height, style.color, radius=2)
        cur.circle(x + 25, top + 20, 12, style.background)
        cur.string(str(i + 1), x + 19, top + 15, 10, style.color, bold=True, align="center", width=12)
        cur.draw(para, x + 45, top + 8, h)
        cur.y = top + height + CARD_GAP


def _keyword_page(cur: PageCursor, audit: AuditResult) -> None:
    cur.new_page()
    kw = audit.keyword_analysis
    _page_header(cur, "Keyword Analysis", "What your page is about today, and what it could rank for")
    x, cw = cur.margin, cur.content_width

    cur.string("KEYWORDS FOUND ON YOUR PAGE", x, cur.y, 9, BRAND_BLUE, bold=True)
    cur.y += 18
    if kw.found_keywords:
        chip_x = x
        for keyword in kw.found_keywords:
            w = stringWidth(keyword, "Helvetica", 9) + 20
            if chip_x + w > x + cw:
                chip_x = x
                cur.y += 28
            cur.rect(chip_x, cur.y, w, 20, DARK_CARD, radius=10)
            cur.string(keyword, chip_x + 10, cur.y + 6, 9, LIGHT_GRAY)
            chip_x += w + 8
        cur.y += 34
    else:
        cur.y += cur.text("No recurring keywords detected.", STYLES["card_body"], x, cur.y, cw) + 12

    cur.rect(x, cur.y, cw, 40, DARK_CARD, radius=6)
    cur.string("TOP KEYWORD DENSITY", x + 16, cur.y + 8, 8, GRAY, bold=True)
    cur.string(kw.density, x + 16, cur.y + 21, 11, WHITE, bold=True)
    cur.y += 56

    if kw.suggested_keywords:
        cur.ensure_space(30)
        cur.string("SUGGESTED KEYWORDS", x, cur.y, 9, BRAND_BLUE, bold=True)
        cur.y += 18
        for suggestion in kw.suggested_keywords:
            _check_card(
                cur,
                label=suggestion.keyword,
                status=PRIORITY_STATUS[suggestion.priority],
                detail=suggestion.reason,
                badge=f"{suggestion.priority.upper()} PRIORITY",
            )


def _backlink_page(cur: PageCursor, audit: AuditResult) -> None:
    cur.new_page()
    _page_header(cur, "Link Profile", "How your page connects to the rest of the web")
    if not audit.backlink_insights:
        cur.text("No link data available.", STYLES["card_body"], cur.margin, cur.y, cur.content_width)
        return
    for insight in audit.backlink_insights:
        _check_card(
            cur,
            label=insight.label,
            status=insight.status,
            detail=insight.detail,
            recommendation=insight.recommendation,
        )


def _cta_page(cur: PageCursor) -> None:
    cur.new_page(accent_height=0)
    x, cw, pw = cur.margin, cur.content_width, cur.width
    cta_y = cur.height / 2 - 120

    cur.circle(pw / 2, cta_y, 30, BRAND_BLUE)
    cur.line(pw / 2 - 12, cta_y, pw / 2 + 12, cta_y, WHITE, 3)
    cur.line(pw / 2 + 3, cta_y - 9, pw / 2 + 12, cta_y, WHITE, 3)
    cur.line(pw / 2 + 3, cta_y + 9, pw / 2 + 12, cta_y, WHITE, 3)

    cur.text("Ready to Improve", STYLES["big_title"], x, cta_y + 50, cw)
    cur.text("Your Score?", STYLES["big_accent"], x, cta_y + 82, cw)
    cur.text("Our team specializes in fixing exactly these kinds of issues.",
             STYLES["centered"], x, cta_y + 125, cw)
    cur.text("We can turn your website into a high-performing asset.",
             STYLES["centered"], x, cta_y + 142, cw)

    cur.rect(pw / 2 - 110, cta_y + 180, 220, 44, BRAND_BLUE, radius=8)
    cur.string("Get a Free Consultation", pw / 2 - 110, cta_y + 195, 14, WHITE,
               bold=True, align="center", width=220)
    cur.string(BRAND_SITE, x, cta_y + 245, 11, BRAND_BLUE, align="center", width=cw)
    cur.string(BRAND_EMAIL, x, cta_y + 262, 10, GRAY, align="center", width=cw)

    cur.text(
        "(c) AI Powered Sites. This report was generated automatically. Results are based "
        "on publicly accessible page data at the time of analysis.",
        STYLES["footer"], x, cur.height - 50, cw,
    )


# ============================================================================
# PUBLIC API
# ============================================================================

def render_audit_pdf(
    audit: AuditResult,
    output: io.BufferedIOBase | io.BytesIO,
    insights: AIAuditInsights | None = None,
) -> int:
    """Draw the full report into ``output``.

    Args:
        audit:    Completed audit.
        output:   Binary file-like object receiving the PDF.
        insights: Narrative copy; the static fallback is used when omitted.

    Returns:
        Number of pages written.

    Raises:
        ReportRenderError: If any page fails to lay out.
    """
    insights = insights or static_fallback(audit)
    try:
        canvas = pdf_canvas.Canvas(output, pagesize=A4)
        canvas.setTitle(f"Website Audit Report - {audit.url}")
        canvas.setAuthor(BRAND_NAME.title())
        cur = PageCursor(canvas)

        _cover_page(cur, audit)
        _business_page(cur, audit, insights)
        for cat in audit.categories:
            _category_pages(cur, cat, insights)
        if audit.top_recommendations:
            _priority_page(cur, audit, insights)
        _keyword_page(cur, audit)
        _backlink_page(cur, audit)
        _cta_page(cur)

        canvas.save()
    except Exception as exc:
        logger.error("PDF rendering failed for %s: %s", audit.url, exc)
        raise ReportRenderError(f"Could not render the PDF report: {exc}") from exc

    logger.info("PDF report rendered for %s (%d pages)", audit.url, cur.page_count)
    return cur.page_count


def generate_audit_pdf(audit: AuditResult, insights: AIAuditInsights | None = None) -> bytes:
    """Render the report and return the PDF bytes."""
    buffer = io.BytesIO()
    render_audit_pdf(audit, buffer, insights)
    return buffer.getvalue()
