"""
Unit tests for webaudit/checks.py.

Every check runs on in-memory HTML; no network access.
"""

from __future__ import annotations

import pytest

from conftest import make_page, soup_of
from webaudit.checks import (
    CATEGORY_ICONS,
    CHECK_POINTS,
    audit_accessibility,
    audit_content,
    audit_mobile,
    audit_performance,
    audit_security,
    audit_seo,
    audit_social,
    category_max_score,
    count_words,
    extract_schema_types,
    run_all_checks,
    visible_text,
)
from webaudit.core.schemas import AuditCategory


def _item(category: AuditCategory, label: str):
    return next(i for i in category.items if i.label == label)


def _run(audit, html: str, **page_kwargs) -> AuditCategory:
    return audit(soup_of(html), make_page(html, **page_kwargs))


# ============================================================================
# Point table
# ============================================================================

class TestPointTable:
    @pytest.mark.parametrize("name,expected", [
        ("SEO", 14),
        ("Performance", 8),
        ("Mobile Friendliness", 6),
        ("Security", 6),
        ("Accessibility", 6),
        ("Social Media", 6),
        ("Content Quality", 8),
    ])
    def test_category_max_scores(self, name, expected):
        assert category_max_score(name) == expected

    def test_total_max_is_54(self):
        assert sum(category_max_score(n) for n in CHECK_POINTS) == 54

    def test_every_category_has_an_icon(self):
        assert list(CHECK_POINTS) == list(CATEGORY_ICONS)

    def test_run_all_checks_order(self, bare_page):
        cats = run_all_checks(soup_of(bare_page.html), bare_page)
        assert [c.name for c in cats] == list(CATEGORY_ICONS)
        assert [c.icon for c in cats] == list(CATEGORY_ICONS.values())

    def test_item_labels_match_point_table(self, ideal_page, bare_page):
        for page in (ideal_page, bare_page):
            for cat in run_all_checks(soup_of(page.html), page):
                assert [i.label for i in cat.items] == list(CHECK_POINTS[cat.name])


# ============================================================================
# Helpers
# ============================================================================

class TestVisibleText:
    def test_ignores_script_style_noscript(self):
        html = (
            "<html><body><p>Hello world</p><script>var x = 1;</script>"
            "<style>p{}</style><noscript>Enable JS</noscript></body></html>"
        )
        assert visible_text(soup_of(html)) == "Hello world"

    def test_ignores_comments(self):
        html = "<html><body><!-- hidden note --><p>Shown</p></body></html>"
        assert visible_text(soup_of(html)) == "Shown"

    def test_collapses_whitespace(self):
        html = "<body><p>one\n\n   two</p><p>three</p></body>"
        assert visible_text(soup_of(html)) == "one two three"

    def test_count_words_skips_single_chars(self):
        html = "<body><p>a big cat is here</p></body>"
        assert count_words(soup_of(html)) == 4


class TestExtractSchemaTypes:
    def test_graph_types_are_collected(self):
        html = (
            '<script type="application/ld+json">'
            '{"@graph": [{"@type": "Organization"}, {"@type": "WebSite"}]}</script>'
        )
        assert extract_schema_types(soup_of(html)) == (1, ["Organization", "WebSite"])

    def test_list_type_and_duplicates(self):
        html = (
            '<script type="application/ld+json">{"@type": ["LocalBusiness", "Plumber"]}</script>'
            '<script type="application/ld+json">{"@type": "Plumber"}</script>'
        )
        assert extract_schema_types(soup_of(html)) == (2, ["LocalBusiness", "Plumber"])

    def test_malformed_block_is_skipped(self):
        html = (
            '<script type="application/ld+json">{not json</script>'
            '<script type="application/ld+json">{"@type": "Organization"}</script>'
        )
        assert extract_schema_types(soup_of(html)) == (2, ["Organization"])


# ============================================================================
# SEO
# ============================================================================

class TestAuditSeo:
    def test_ideal_page_scores_full(self, ideal_page):
        cat = audit_seo(soup_of(ideal_page.html), ideal_page)
        assert cat.score == 14
        assert cat.count("pass") == len(cat.items)

    def test_bare_page(self, bare_page):
        cat = audit_seo(soup_of(bare_page.html), bare_page)
        assert _item(cat, "Page Title").status == "fail"
        assert _item(cat, "Meta Description").status == "fail"
        assert _item(cat, "H1 Heading").status == "fail"
        # Robots default + clean URL are the only points
        assert cat.score == 2

    @pytest.mark.parametrize("length,status", [(29, "warning"), (30, "pass"), (60, "pass"), (61, "warning")])
    def test_title_length_boundaries(self, length, status):
        html = f"<html><head><title>{'t' * length}</title></head><body></body></html>"
        assert _item(_run(audit_seo, html), "Page Title").status == status

    def test_several_h1_is_warning(self):
        html = "<body><h1>One</h1><h1>Two</h1></body>"
        item = _item(_run(audit_seo, html), "H1 Heading")
        assert item.status == "warning"
        assert item.detail == "2 H1 tags found"

    def test_structured_data_partial_credit(self):
        html = '<script type="application/ld+json">{"@type": "Organization"}</script>'
        cat = _run(audit_seo, html)
        assert _item(cat, "Structured Data").status == "warning"

    def test_unparseable_structured_data_is_warning(self):
        html = '<script type="application/ld+json">{broken</script>'
        item = _item(_run(audit_seo, html), "Structured Data")
        assert item.status == "warning"
        assert "could not parse" in item.detail

    def test_robots_noindex_is_warning(self):
        html = '<head><meta name="robots" content="noindex, nofollow"></head>'
        assert _item(_run(audit_seo, html), "Robots Meta").status == "warning"

    def test_internal_links_none_is_zero_point_warning(self):
        base = _run(audit_seo, "<body></body>")
        one = _run(audit_seo, '<body><a href="/about">About</a></body>')
        assert _item(base, "Internal Links").status == "warning"
        assert _item(one, "Internal Links").status == "warning"
        assert one.score - base.score == pytest.approx(0.5)

    def test_url_with_query_string_is_warning(self):
        cat = _run(audit_seo, "<body></body>", url="https://example.com/page?id=3")
        assert _item(cat, "URL Structure").status == "warning"


# ============================================================================
# Performance
# ============================================================================

class TestAuditPerformance:
    @pytest.mark.parametrize("ms,status", [(999, "pass"), (1000, "warning"), (2999, "warning"), (3000, "fail")])
    def test_response_time_bands(self, ms, status):
        cat = _run(audit_performance, "<body></body>", response_time_ms=ms)
        assert _item(cat, "Server Response Time").status == status

    def test_large_html_is_warning(self):
        html = "<body>" + "a" * (150 * 1024) + "</body>"
        assert _item(_run(audit_performance, html), "Page Size (HTML)").status == "warning"

    def test_render_blocking_scripts(self):
        html = '<script src="/a.js"></script><script src="/b.js"></script><script src="/c.js" async></script>'
        assert _item(_run(audit_performance, html), "Script Loading").status == "warning"

    def test_compression_header(self):
        cat = _run(audit_performance, "<body></body>", headers={"content-encoding": "br"})
        assert _item(cat, "Compression").status == "pass"

    def test_lazy_images_half_is_enough(self):
        html = '<img src="a.png" loading="lazy"><img src="b.png">'
        assert _item(_run(audit_performance, html), "Image Lazy Loading").status == "pass"


# ============================================================================
# Mobile
# ============================================================================

class TestAuditMobile:
    def test_viewport_without_device_width_is_warning(self):
        html = '<head><meta name="viewport" content="initial-scale=1"></head>'
        assert _item(_run(audit_mobile, html), "Viewport Meta Tag").status == "warning"

    def test_no_touch_targets_is_zero_point_warning(self):
        cat = _run(audit_mobile, "<body><p>plain</p></body>")
        assert _item(cat, "Touch Targets").status == "warning"
        assert cat.score == 0

    def test_ideal_page_scores_full(self, ideal_page):
        assert audit_mobile(soup_of(ideal_page.html), ideal_page).score == 6


# ============================================================================
# Security
# ============================================================================

class TestAuditSecurity:
    def test_http_fails_https_check(self):
        cat = _run(audit_security, "<body></body>", url="http://example.com/")
        assert _item(cat, "HTTPS/SSL").status == "fail"
        assert cat.score == 0

    def test_csp_frame_ancestors_counts_as_clickjacking_protection(self):
        headers = {"content-security-policy": "frame-ancestors 'none'"}
        cat = _run(audit_security, "<body></body>", headers=headers)
        assert _item(cat, "Clickjacking Protection").status == "pass"
        assert _item(cat, "Content Security Policy").status == "pass"
        assert cat.score == 4


# ============================================================================
# Accessibility
# ============================================================================

class TestAuditAccessibility:
    def test_alt_text_partial_credit(self):
        html = '<body><img src="a" alt="A"><img src="b"><img src="c"><img src="d"></body>'
        cat = _run(audit_accessibility, html)
        assert _item(cat, "Image Alt Text").status == "fail"
        # lang 0 + alt 0.5 + aria 0 + semantic 0 + forms 1
        assert cat.score == pytest.approx(1.5)

    def test_empty_alt_counts_as_present(self):
        html = '<body><img src="a" alt=""></body>'
        assert _item(_run(audit_accessibility, html), "Image Alt Text").status == "pass"

    def test_hidden_and_submit_inputs_need_no_label(self):
        html = '<form><input type="hidden"><input type="submit"></form>'
        assert _item(_run(audit_accessibility, html), "Form Labels").status == "pass"

    def test_unlabelled_inputs_warn(self):
        html = '<form><input type="text"><input type="email"></form>'
        assert _item(_run(audit_accessibility, html), "Form Labels").status == "warning"


# ============================================================================
# Social & content
# ============================================================================

class TestAuditSocial:
    def test_missing_open_graph_fails(self):
        cat = _run(audit_social, "<head></head>")
        assert _item(cat, "Open Graph Title").status == "fail"
        assert _item(cat, "Twitter Card").status == "warning"
        assert cat.score == 0

    def test_ideal_page_scores_full(self, ideal_page):
        assert audit_social(soup_of(ideal_page.html), ideal_page).score == 6


class TestAuditContent:
    def test_word_count_bands(self):
        thin = _run(audit_content, "<body><p>" + "word " * 50 + "</p></body>")
        medium = _run(audit_content, "<body><p>" + "word " * 150 + "</p></body>")
        assert _item(thin, "Content Length").status == "fail"
        assert _item(medium, "Content Length").status == "warning"

    def test_charset_and_lists(self):
        html = '<head><meta charset="utf-8"></head><body><ul><li>x</li></ul></body>'
        cat = _run(audit_content, html)
        assert _item(cat, "Character Encoding").status == "pass"
        assert _item(cat, "Content Formatting").status == "pass"

    def test_ideal_page_scores_full(self, ideal_page):
        assert audit_content(soup_of(ideal_page.html), ideal_page).score == 8


class TestScoreClamp:
    def test_score_never_exceeds_max(self):
        cat = AuditCategory(name="SEO", icon="search", score=20, max_score=14)
        assert cat.score == 14
        assert cat.percent == 100

    def test_negative_score_clamped_to_zero(self):
        cat = AuditCategory(name="SEO", icon="search", score=-3, max_score=14)
        assert cat.score == 0
