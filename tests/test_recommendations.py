"""
Tests for recommendation generation, keyword extraction and structure validation.
"""

import pytest

from seo_scorer.models import SeoMetrics, KeywordStat
from seo_scorer.recommendations import (
    generate_recommendations, extract_keywords, validate_html_structure, build_report
)
from seo_scorer.scorer import SeoScorer


def make_metrics(**overrides) -> SeoMetrics:
    """Metrics for a page that needs no recommendations, with selected fields overridden."""
    values = dict(
        title="x" * 45,
        title_count=1,
        title_length=45,
        meta_description="y" * 140,
        meta_description_length=140,
        h1_count=1,
        image_count=2,
        images_with_alt=2,
        viewport="width=device-width",
        has_viewport=True,
        has_doctype=True,
        has_lang=True,
        has_charset=True,
        word_count=100,
        top_keywords=[KeywordStat(word="widgets", count=3, density=0.03)],
    )
    values.update(overrides)
    return SeoMetrics(**values)


def types_and_severities(recommendations):
    return [(rec.type, rec.severity) for rec in recommendations]


def test_clean_metrics_produce_no_recommendations():
    assert generate_recommendations(make_metrics()) == []


def test_optimized_document_produces_no_recommendations(optimized_html):
    report = build_report(optimized_html)
    assert report.recommendations == []
    assert report.structure.errors == []

# --- Title ---

@pytest.mark.parametrize("length,severity,fragment", [
    (0, "error", "Missing title"),
    (12, "warning", "too short"),
    (75, "warning", "too long"),
])
def test_title_length_bands(length, severity, fragment):
    recs = generate_recommendations(make_metrics(title="t" * length, title_length=length, title_count=1 if length else 0))
    assert len(recs) == 1
    assert recs[0].type == "title"
    assert recs[0].severity == severity
    assert fragment in recs[0].message


@pytest.mark.parametrize("length", [30, 60])
def test_title_band_edges_are_fine(length):
    assert generate_recommendations(make_metrics(title_length=length)) == []


def test_multiple_titles_recommendation():
    recs = generate_recommendations(make_metrics(title_count=2))
    assert types_and_severities(recs) == [("title", "error")]


def test_short_title_is_advised_but_still_scored_in_full():
    html = "<title>Hi</title>"
    scorer = SeoScorer()
    title_check = scorer.analyze(html).checks[0]
    assert title_check.score == 15

    report = build_report(html, scorer=scorer)
    title_recs = [rec for rec in report.recommendations if rec.type == "title"]
    assert len(title_recs) == 1
    assert title_recs[0].severity == "warning"

# --- Meta description ---

@pytest.mark.parametrize("length,severity", [(0, "error"), (80, "warning"), (200, "warning")])
def test_meta_description_length_bands(length, severity):
    recs = generate_recommendations(make_metrics(meta_description_length=length))
    assert types_and_severities(recs) == [("meta", severity)]


@pytest.mark.parametrize("length", [120, 160])
def test_meta_description_band_edges_are_fine(length):
    assert generate_recommendations(make_metrics(meta_description_length=length)) == []

# --- Headings, images, viewport ---

@pytest.mark.parametrize("count,severity", [(0, "error"), (3, "warning")])
def test_h1_recommendations(count, severity):
    recs = generate_recommendations(make_metrics(h1_count=count))
    assert types_and_severities(recs) == [("h1", severity)]


def test_missing_alt_recommendation_counts_images():
    recs = generate_recommendations(make_metrics(image_count=5, images_with_alt=3))
    assert types_and_severities(recs) == [("images", "warning")]
    assert "2 remaining images" in recs[0].suggestion


def test_no_images_needs_no_alt_recommendation():
    assert generate_recommendations(make_metrics(image_count=0, images_with_alt=0)) == []


def test_missing_viewport_recommendation():
    recs = generate_recommendations(make_metrics(viewport=None, has_viewport=False))
    assert types_and_severities(recs) == [("viewport", "error")]

# --- Keywords ---

def test_no_text_recommendation():
    recs = generate_recommendations(make_metrics(word_count=0, top_keywords=[]))
    assert types_and_severities(recs) == [("keywords", "error")]


def test_keyword_stuffing_uses_scoring_threshold():
    stuffed = make_metrics(top_keywords=[KeywordStat(word="widgets", count=5, density=0.05)])
    recs = generate_recommendations(stuffed)
    assert types_and_severities(recs) == [("keywords", "warning")]
    assert "5.0%" in recs[0].message

    fine = make_metrics(top_keywords=[KeywordStat(word="widgets", count=4, density=0.049)])
    assert generate_recommendations(fine) == []

# --- Structure ---

def test_structure_recommendations_for_each_missing_piece():
    recs = generate_recommendations(make_metrics(has_doctype=False, has_lang=False, has_charset=False))
    assert types_and_severities(recs) == [("structure", "warning")] * 3
    messages = " ".join(rec.message for rec in recs)
    assert "DOCTYPE" in messages
    assert "language" in messages
    assert "charset" in messages


def test_recommendation_order_for_empty_document():
    report = build_report("<div></div>")
    assert [rec.type for rec in report.recommendations] == [
        "title", "meta", "h1", "viewport", "keywords", "structure", "structure", "structure"
    ]

# --- Keyword extraction ---

def test_extract_keywords_uses_scoring_tokenizer():
    stats = extract_keywords("Apple apple banana cherry. apple fig", limit=2)
    assert [(stat.word, stat.count) for stat in stats] == [("apple", 3), ("banana", 1)]
    assert stats[0].density == pytest.approx(3 / 5)


def test_extract_keywords_empty_text():
    assert extract_keywords("") == []


def test_extract_keywords_default_limit():
    text = " ".join(f"word{i:02d}" for i in range(15))
    assert len(extract_keywords(text)) == 10

# --- Structure validation ---

def test_validate_complete_structure(optimized_html):
    result = validate_html_structure(optimized_html)
    assert result.has_doctype is True
    assert result.has_html_tag is True
    assert result.has_head_tag is True
    assert result.has_body_tag is True
    assert result.errors == []


def test_validate_fragment_structure():
    result = validate_html_structure("<header>Site</header><p>text</p>")
    assert result.has_doctype is False
    assert result.has_head_tag is False
    assert result.errors == [
        "Missing DOCTYPE declaration",
        "Missing HTML tag",
        "Missing HEAD tag",
        "Missing BODY tag",
    ]


def test_validate_tags_with_attributes():
    result = validate_html_structure('<HTML lang="en"><Head data-x="1"></Head><BODY class="home"></BODY></HTML>')
    assert result.has_html_tag is True
    assert result.has_head_tag is True
    assert result.has_body_tag is True


def test_validate_structure_ignores_bom(optimized_html):
    result = validate_html_structure("\ufeff" + optimized_html)
    assert result.has_doctype is True
    assert result.errors == []

# --- Report ---

def test_report_metrics_match_scorer(optimized_html):
    scorer = SeoScorer()
    report = build_report(optimized_html, scorer=scorer)
    assert report.metrics == scorer.measure(optimized_html)


def test_report_serializes_with_camel_case_keys(optimized_html):
    data = build_report(optimized_html).model_dump(by_alias=True)
    assert set(data) == {"metrics", "recommendations", "structure"}
    assert data["metrics"]["titleLength"] == 40
    assert data["metrics"]["topKeywords"][0]["word"] == "example"
    assert data["structure"]["hasDoctype"] is True
