"""
Unit tests for webaudit/backlinks.py.
"""

from __future__ import annotations

import pytest

from conftest import soup_of
from webaudit.backlinks import analyze_backlinks, classify_links

PAGE_URL = "https://www.example.com/"


def _insights(html: str, url: str = PAGE_URL) -> dict:
    return {i.label: i for i in analyze_backlinks(soup_of(html), html, url)}


class TestClassifyLinks:
    def test_internal_vs_external(self):
        html = (
            '<a href="/about">About</a>'
            '<a href="#top">Top</a>'
            '<a href="contact.html">Contact</a>'
            '<a href="https://example.com/pricing">Pricing</a>'
            '<a href="https://other.org/">Other</a>'
        )
        internal, external = classify_links(soup_of(html), PAGE_URL)
        assert len(internal) == 4
        assert [a["href"] for a in external] == ["https://other.org/"]

    def test_mailto_tel_javascript_are_ignored(self):
        html = (
            '<a href="mailto:hi@example.com">Mail</a>'
            '<a href="tel:+123">Call</a>'
            '<a href="javascript:void(0)">JS</a>'
        )
        internal, external = classify_links(soup_of(html), PAGE_URL)
        assert internal == [] and external == []


class TestAnalyzeBacklinks:
    def test_order_without_nofollow(self):
        labels = [i.label for i in analyze_backlinks(soup_of("<body></body>"), "<body></body>", PAGE_URL)]
        assert labels == [
            "Outbound Links", "Internal Link Structure", "Anchor Text Quality",
            "Social Sharing", "Content Hub",
        ]

    def test_nofollow_only_when_present(self):
        html = '<a href="https://other.org/" rel="nofollow">Partner</a>'
        insights = _insights(html)
        assert insights["Nofollow Usage"].status == "pass"

    @pytest.mark.parametrize("count,status", [(0, "fail"), (1, "warning"), (2, "warning"), (3, "pass")])
    def test_outbound_bands(self, count, status):
        html = "".join(f'<a href="https://site{i}.org/">Partner {i}</a>' for i in range(count))
        assert _insights(html)["Outbound Links"].status == status

    @pytest.mark.parametrize("count,status", [(2, "fail"), (3, "warning"), (9, "warning"), (10, "pass")])
    def test_internal_bands(self, count, status):
        html = "".join(f'<a href="/page-{i}">Page {i}</a>' for i in range(count))
        assert _insights(html)["Internal Link Structure"].status == status

    def test_generic_anchor_text_warns(self):
        html = (
            '<a href="/a">click here</a><a href="/b">Read more</a>'
            '<a href="/c">learn more</a><a href="/d">Our services</a>'
        )
        assert _insights(html)["Anchor Text Quality"].status == "warning"

    def test_no_anchor_text_is_warning(self):
        html = '<a href="/a"><img src="x.png"></a>'
        insight = _insights(html)["Anchor Text Quality"]
        assert insight.status == "warning"
        assert insight.detail == "No anchor text found"

    def test_social_sharing_by_selector(self):
        html = '<div data-share="twitter"></div>'
        assert _insights(html)["Social Sharing"].status == "pass"

    def test_content_hub(self):
        assert _insights('<a href="/news/2026">News</a>')["Content Hub"].status == "pass"
        assert _insights('<a href="/about">About</a>')["Content Hub"].status == "warning"

    def test_ideal_page_profile(self, ideal_page):
        insights = {
            i.label: i
            for i in analyze_backlinks(soup_of(ideal_page.html), ideal_page.html, ideal_page.final_url)
        }
        assert insights["Outbound Links"].status == "pass"
        assert insights["Internal Link Structure"].status == "warning"
        assert insights["Anchor Text Quality"].status == "pass"
        assert insights["Nofollow Usage"].status == "pass"
        assert insights["Social Sharing"].status == "pass"
        assert insights["Content Hub"].status == "pass"
