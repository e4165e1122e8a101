"""
Unit tests for webaudit/keywords.py.
"""

from __future__ import annotations

from conftest import soup_of
from webaudit.keywords import (
    MAX_KEYWORDS,
    analyze_keywords,
    brand_from_domain,
    count_terms,
    is_qualifying,
    tokenize,
)

GARDEN_HTML = (
    "<html><body><p>Garden design garden design garden design "
    "lawn care lawn care tips</p></body></html>"
)


class TestTokenize:
    def test_lowercases_and_splits_on_non_word(self):
        assert tokenize("Hello, World! Foo_bar-baz") == ["hello", "world", "foo", "bar", "baz"]

    def test_qualifying_rules(self):
        assert is_qualifying("garden")
        assert not is_qualifying("cat")      # too short
        assert not is_qualifying("2026")     # digits
        assert not is_qualifying("about")    # stop-word


class TestCountTerms:
    def test_bigrams_need_two_occurrences(self):
        unigrams, bigrams, total = count_terms(
            "garden design garden design lawn care"
        )
        assert dict(bigrams) == {"garden design": 2}
        assert unigrams["garden"] == 2
        assert total == 6

    def test_bigram_not_formed_across_stop_word(self):
        _, bigrams, _ = count_terms("garden with design garden with design")
        assert "garden with" not in bigrams
        assert "with design" not in bigrams


class TestAnalyzeKeywords:
    def test_found_keywords_bigrams_first(self):
        result = analyze_keywords(soup_of(GARDEN_HTML), "https://green-thumb.com/", 2026)
        assert result.found_keywords == [
            "garden design", "design garden", "lawn care",
            "garden", "design", "lawn", "care", "tips",
        ]

    def test_density_of_top_unigram(self):
        result = analyze_keywords(soup_of(GARDEN_HTML), "https://green-thumb.com/", 2026)
        # garden: 3 of 11 qualifying tokens
        assert result.density == "garden: 27.3%"

    def test_no_text_cannot_calculate(self):
        result = analyze_keywords(soup_of("<html><body></body></html>"), "example.com", 2026)
        assert result.found_keywords == []
        assert result.density == "Unable to calculate"

    def test_suggestions_in_generation_order(self):
        result = analyze_keywords(soup_of(GARDEN_HTML), "https://www.green-thumb.co.uk/", 2026)
        keywords = [s.keyword for s in result.suggested_keywords]
        assert keywords == [
            "green thumb services",
            "garden near me",
            "garden best practices",
            "how to garden",
            "affordable garden",
            "green thumb reviews",
            "garden guide 2026",
            "free consultation",
        ]
        assert result.suggested_keywords[0].priority == "high"

    def test_conditional_suggestion_gated_on_headings(self):
        html = (
            "<html><head><title>Free Consultation and Custom Solutions</title></head>"
            "<body><h2>Professional gardeners</h2><p>Garden design garden design</p></body></html>"
        )
        keywords = [s.keyword for s in analyze_keywords(soup_of(html), "green.com", 2026).suggested_keywords]
        assert "free consultation" not in keywords
        assert "custom solutions" not in keywords
        assert not any(k.startswith("professional") for k in keywords)

    def test_suggestion_already_on_page_is_dropped(self):
        html = "<html><body><h1>Garden near me</h1><p>garden garden garden</p></body></html>"
        keywords = [s.keyword for s in analyze_keywords(soup_of(html), "green.com", 2026).suggested_keywords]
        assert "garden near me" not in keywords

    def test_suggestions_never_appear_in_page_text(self, ideal_page):
        soup = soup_of(ideal_page.html)
        text = soup.get_text(" ").lower()
        result = analyze_keywords(soup, ideal_page.final_url, 2026)
        assert len(result.suggested_keywords) <= MAX_KEYWORDS
        assert len(result.found_keywords) <= MAX_KEYWORDS
        for s in result.suggested_keywords:
            assert s.keyword.lower() not in text


class TestBrandFromDomain:
    def test_strips_www_and_tld(self):
        assert brand_from_domain("https://www.acme-plumbing.com/") == "acme plumbing"

    def test_bare_hostname(self):
        assert brand_from_domain("example.org") == "example"
