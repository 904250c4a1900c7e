"""
Recommendation generation for the SEO Scorer.

Advice is derived from the same SeoMetrics snapshot the scoring rules use.
Length bands for the title and meta description only shape the advice; they
never change the score.
"""

import logging
import re
from typing import List, Optional

from seo_scorer.document import starts_with_doctype
from seo_scorer.models import (
    KeywordStat, SeoMetrics, Recommendation, StructureValidation, RecommendationReport
)
from seo_scorer.scorer import SeoScorer, tokenize, keyword_frequencies, MAX_KEYWORD_DENSITY

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MIN_LENGTH = 120
META_DESCRIPTION_MAX_LENGTH = 160

_HTML_TAG = re.compile(r"<html(\s[^>]*)?>", re.IGNORECASE)
_HEAD_TAG = re.compile(r"<head(\s[^>]*)?>", re.IGNORECASE)
_BODY_TAG = re.compile(r"<body(\s[^>]*)?>", re.IGNORECASE)


def _title_recommendations(metrics: SeoMetrics) -> List[Recommendation]:
    length = metrics.title_length
    if length == 0:
        return [Recommendation(
            type="title",
            severity="error",
            message="Missing title tag",
            suggestion=f"Add a descriptive title tag between {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters"
        )]
    if metrics.title_count > 1:
        return [Recommendation(
            type="title",
            severity="error",
            message=f"Found {metrics.title_count} title tags",
            suggestion="Keep a single title tag in the document head"
        )]
    if length < TITLE_MIN_LENGTH:
        return [Recommendation(
            type="title",
            severity="warning",
            message=f"Title tag is too short ({length} characters)",
            suggestion=f"Expand your title to at least {TITLE_MIN_LENGTH} characters for better SEO"
        )]
    if length > TITLE_MAX_LENGTH:
        return [Recommendation(
            type="title",
            severity="warning",
            message=f"Title tag is too long ({length} characters)",
            suggestion=f"Shorten your title to under {TITLE_MAX_LENGTH} characters to avoid truncation"
        )]
    return []


def _meta_description_recommendations(metrics: SeoMetrics) -> List[Recommendation]:
    length = metrics.meta_description_length
    if length == 0:
        return [Recommendation(
            type="meta",
            severity="error",
            message="Missing meta description",
            suggestion=(
                f"Add a meta description between "
                f"{META_DESCRIPTION_MIN_LENGTH}-{META_DESCRIPTION_MAX_LENGTH} characters"
            )
        )]
    if length < META_DESCRIPTION_MIN_LENGTH:
        return [Recommendation(
            type="meta",
            severity="warning",
            message=f"Meta description is too short ({length} characters)",
            suggestion=f"Expand your meta description to at least {META_DESCRIPTION_MIN_LENGTH} characters"
        )]
    if length > META_DESCRIPTION_MAX_LENGTH:
        return [Recommendation(
            type="meta",
            severity="warning",
            message=f"Meta description is too long ({length} characters)",
            suggestion=f"Shorten your meta description to under {META_DESCRIPTION_MAX_LENGTH} characters"
        )]
    return []


def _keyword_recommendations(metrics: SeoMetrics) -> List[Recommendation]:
    if not metrics.top_keywords:
        return [Recommendation(
            type="keywords",
            severity="error",
            message="No text content found",
            suggestion="Add descriptive body copy so search engines can understand the page"
        )]
    top = metrics.top_keywords[0]
    if top.density >= MAX_KEYWORD_DENSITY:
        return [Recommendation(
            type="keywords",
            severity="warning",
            message=f'"{top.word}" makes up {top.density * 100:.1f}% of the text',
            suggestion=(
                f"Keep every word under {MAX_KEYWORD_DENSITY * 100:.0f}% of the text; "
                "use synonyms and related terms instead of repeating it"
            )
        )]
    return []


def generate_recommendations(metrics: SeoMetrics) -> List[Recommendation]:
    """
    Turn a metrics snapshot into a list of recommendations.

    Args:
        metrics: SeoMetrics measured by SeoScorer.measure

    Returns:
        Recommendations ordered title, meta, h1, images, viewport, keywords, structure
    """
    recommendations: List[Recommendation] = []

    recommendations.extend(_title_recommendations(metrics))
    recommendations.extend(_meta_description_recommendations(metrics))

    # H1
    if metrics.h1_count == 0:
        recommendations.append(Recommendation(
            type="h1",
            severity="error",
            message="Missing H1 tag",
            suggestion="Add exactly one H1 tag as your main heading"
        ))
    elif metrics.h1_count > 1:
        recommendations.append(Recommendation(
            type="h1",
            severity="warning",
            message=f"Multiple H1 tags found ({metrics.h1_count})",
            suggestion="Use only one H1 tag per page for better SEO structure"
        ))

    # Images
    missing_alt = metrics.image_count - metrics.images_with_alt
    if metrics.image_count > 0 and missing_alt > 0:
        recommendations.append(Recommendation(
            type="images",
            severity="warning",
            message="Some images missing alt attributes",
            suggestion=f"Add alt text to {missing_alt} remaining images"
        ))

    # Viewport
    if not metrics.has_viewport:
        recommendations.append(Recommendation(
            type="viewport",
            severity="error",
            message="Missing viewport meta tag",
            suggestion='Add <meta name="viewport" content="width=device-width, initial-scale=1.0"> for mobile optimization'
        ))

    recommendations.extend(_keyword_recommendations(metrics))

    # Document structure
    if not metrics.has_doctype:
        recommendations.append(Recommendation(
            type="structure",
            severity="warning",
            message="Missing DOCTYPE declaration",
            suggestion="Add <!DOCTYPE html> at the beginning of your document"
        ))
    if not metrics.has_lang:
        recommendations.append(Recommendation(
            type="structure",
            severity="warning",
            message="Missing language attribute",
            suggestion='Add lang attribute to your HTML tag (e.g., <html lang="en">)'
        ))
    if not metrics.has_charset:
        recommendations.append(Recommendation(
            type="structure",
            severity="warning",
            message="Missing charset declaration",
            suggestion='Add <meta charset="UTF-8"> in your head section'
        ))

    logger.debug(f"Generated {len(recommendations)} recommendations")
    return recommendations


def extract_keywords(text: str, limit: int = 10) -> List[KeywordStat]:
    """Most frequent words in a piece of text, tokenized the same way as the keyword density rule."""
    return keyword_frequencies(tokenize(text), limit=limit)


def validate_html_structure(html: str) -> StructureValidation:
    """Check the raw markup for the doctype and the html, head and body tags."""
    html = html or ""
    has_doctype = starts_with_doctype(html)
    has_html_tag = bool(_HTML_TAG.search(html))
    has_head_tag = bool(_HEAD_TAG.search(html))
    has_body_tag = bool(_BODY_TAG.search(html))

    errors = []
    if not has_doctype:
        errors.append("Missing DOCTYPE declaration")
    if not has_html_tag:
        errors.append("Missing HTML tag")
    if not has_head_tag:
        errors.append("Missing HEAD tag")
    if not has_body_tag:
        errors.append("Missing BODY tag")

    return StructureValidation(
        has_doctype=has_doctype,
        has_html_tag=has_html_tag,
        has_head_tag=has_head_tag,
        has_body_tag=has_body_tag,
        errors=errors,
    )


def build_report(html: str, scorer: Optional[SeoScorer] = None) -> RecommendationReport:
    """Metrics snapshot, recommendations and structure validation for an HTML document."""
    scorer = scorer or SeoScorer()
    metrics = scorer.measure(html)
    return RecommendationReport(
        metrics=metrics,
        recommendations=generate_recommendations(metrics),
        structure=validate_html_structure(html),
    )
