"""
Core scoring functionality for the SEO Scorer.

The scorer works in two steps: the parsed document is measured once into a
SeoMetrics snapshot, then each rule turns the snapshot into a SeoCheck. The
recommendation generator reads the same snapshot.
"""

import logging
import math
from collections import Counter
from typing import List, Tuple

from seo_scorer.document import HtmlDocument
from seo_scorer.models import (
    SeoCheck, AnalyzeResponse, KeywordStat, SeoMetrics
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100

# Rule weights, in evaluation order
TITLE_POINTS = 15
META_DESCRIPTION_POINTS = 15
H1_POINTS = 10
IMAGE_ALT_POINTS = 15
VIEWPORT_POINTS = 10
KEYWORD_DENSITY_POINTS = 20
KEYWORD_DENSITY_PARTIAL_POINTS = 10
STRUCTURE_POINTS_EACH = 5

# Tokens must be longer than this to count towards keyword density
MIN_TOKEN_LENGTH = 3
TOP_KEYWORDS = 5
# The most frequent token must stay below this share of all tokens
MAX_KEYWORD_DENSITY = 0.05
# Above this ratio of images with alt text a partial score is a warning, not an error
ALT_RATIO_WARNING = 0.5
TITLE_PREVIEW_LENGTH = 50

GRADE_THRESHOLDS: List[Tuple[int, str]] = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up."""
    return int(math.floor(value + 0.5))


def tokenize(text: str) -> List[str]:
    """Split lower-cased text on whitespace and keep tokens longer than MIN_TOKEN_LENGTH."""
    return [word for word in text.lower().split() if len(word) > MIN_TOKEN_LENGTH]


def keyword_frequencies(words: List[str], limit: int = TOP_KEYWORDS) -> List[KeywordStat]:
    """Most frequent tokens by descending count; ties keep first-seen order."""
    if not words:
        return []
    total = len(words)
    return [
        KeywordStat(word=word, count=count, density=count / total)
        for word, count in Counter(words).most_common(limit)
    ]


def get_grade(score: int) -> str:
    """Letter grade for a score."""
    for threshold, letter in GRADE_THRESHOLDS:
        if score >= threshold:
            return letter
    return "F"


def format_grade(score: int) -> str:
    return f"{get_grade(score)} ({score}/{MAX_SCORE})"


def _mark(present: bool) -> str:
    return "✓" if present else "✗"


class SeoScorer:
    """
    Rule-based SEO scorer.

    Evaluates a fixed, ordered set of checks against an HTML document and
    reduces them into a score, a grade and summary counts. Instances hold no
    per-request state and can be shared.
    """

    def measure(self, html: str) -> SeoMetrics:
        """Parse the HTML and take every measurement the rules need."""
        doc = HtmlDocument(html)

        title = doc.document_title()
        meta_description = (doc.attr('meta[name="description"]', "content") or "").strip()
        viewport = doc.attr('meta[name="viewport"]', "content")
        words = tokenize(doc.all_text())

        return SeoMetrics(
            title=title,
            title_count=doc.document_title_count(),
            title_length=len(title),
            meta_description=meta_description,
            meta_description_length=len(meta_description),
            h1_count=doc.count("h1"),
            image_count=doc.count("img"),
            images_with_alt=doc.elements_with_non_empty_attr("img", "alt"),
            viewport=viewport,
            has_viewport=bool(viewport),
            has_doctype=doc.has_doctype(),
            has_lang=doc.count("html[lang]") > 0,
            has_charset=doc.count("meta[charset]") > 0,
            word_count=len(words),
            top_keywords=keyword_frequencies(words),
        )

    def _check_title(self, metrics: SeoMetrics) -> SeoCheck:
        passed = metrics.title_count == 1 and metrics.title_length > 0
        if passed:
            preview = metrics.title[:TITLE_PREVIEW_LENGTH]
            if metrics.title_length > TITLE_PREVIEW_LENGTH:
                preview += "..."
            description = f'Found title tag with {metrics.title_length} characters: "{preview}"'
        elif metrics.title_count > 1:
            description = f"Found {metrics.title_count} title tags. Use a single title tag per page."
        else:
            description = "No title tag found. Add a descriptive title tag to improve search rankings."
        return SeoCheck(
            name="Title Tag",
            description=description,
            passed=passed,
            score=TITLE_POINTS if passed else 0,
            max_score=TITLE_POINTS,
            status="success" if passed else "error",
        )

    def _check_meta_description(self, metrics: SeoMetrics) -> SeoCheck:
        passed = metrics.meta_description_length > 0
        return SeoCheck(
            name="Meta Description",
            description=(
                f"Found meta description with {metrics.meta_description_length} characters"
                if passed
                else "No meta description found. Add one to improve search snippets."
            ),
            passed=passed,
            score=META_DESCRIPTION_POINTS if passed else 0,
            max_score=META_DESCRIPTION_POINTS,
            status="success" if passed else "error",
        )

    def _check_h1(self, metrics: SeoMetrics) -> SeoCheck:
        passed = metrics.h1_count == 1
        if passed:
            description = "Found exactly one H1 tag"
        elif metrics.h1_count == 0:
            description = "No H1 tag found. Add a main heading for better structure."
        else:
            description = f"Found {metrics.h1_count} H1 tags. Use only one H1 tag per page."
        return SeoCheck(
            name="H1 Tag",
            description=description,
            passed=passed,
            score=H1_POINTS if passed else 0,
            max_score=H1_POINTS,
            status="success" if passed else "error",
        )

    def _check_image_alts(self, metrics: SeoMetrics) -> SeoCheck:
        images = metrics.image_count
        with_alt = metrics.images_with_alt
        ratio = with_alt / images if images else 1.0
        passed = images == 0 or with_alt == images

        if images == 0:
            description = "No images found"
        elif passed:
            description = f"All {images} images have alt attributes"
        else:
            description = (
                f"{with_alt} out of {images} images have alt attributes. "
                "Add alt text to remaining images."
            )

        if passed:
            status = "success"
        elif ratio > ALT_RATIO_WARNING:
            status = "warning"
        else:
            status = "error"

        return SeoCheck(
            name="Image Alt Attributes",
            description=description,
            passed=passed,
            score=round_half_up(IMAGE_ALT_POINTS * ratio),
            max_score=IMAGE_ALT_POINTS,
            status=status,
        )

    def _check_viewport(self, metrics: SeoMetrics) -> SeoCheck:
        passed = metrics.has_viewport
        return SeoCheck(
            name="Mobile Viewport Tag",
            description=(
                f'Mobile viewport meta tag is configured: "{metrics.viewport}"'
                if passed
                else "No viewport meta tag found. Add one for mobile optimization."
            ),
            passed=passed,
            score=VIEWPORT_POINTS if passed else 0,
            max_score=VIEWPORT_POINTS,
            status="success" if passed else "error",
        )

    def _check_keyword_density(self, metrics: SeoMetrics) -> SeoCheck:
        if not metrics.top_keywords:
            return SeoCheck(
                name="Keyword Density",
                description="No text content found for analysis",
                passed=False,
                score=0,
                max_score=KEYWORD_DENSITY_POINTS,
                status="error",
            )

        top = metrics.top_keywords[0]
        share = f'"{top.word}" ({top.density * 100:.1f}%)'
        if top.density < MAX_KEYWORD_DENSITY:
            return SeoCheck(
                name="Keyword Density",
                description=f"Good keyword distribution. Most frequent: {share}",
                passed=True,
                score=KEYWORD_DENSITY_POINTS,
                max_score=KEYWORD_DENSITY_POINTS,
                status="success",
            )
        return SeoCheck(
            name="Keyword Density",
            description=f"Keyword density may be too high. Most frequent: {share}",
            passed=False,
            score=KEYWORD_DENSITY_PARTIAL_POINTS,
            max_score=KEYWORD_DENSITY_POINTS,
            status="warning",
        )

    def _check_structure(self, metrics: SeoMetrics) -> SeoCheck:
        present = [metrics.has_doctype, metrics.has_lang, metrics.has_charset]
        score = STRUCTURE_POINTS_EACH * sum(present)
        max_score = STRUCTURE_POINTS_EACH * len(present)

        if score == max_score:
            status = "success"
        elif score > STRUCTURE_POINTS_EACH:
            status = "warning"
        else:
            status = "error"

        return SeoCheck(
            name="General Improvements",
            description=(
                f"Document structure: {_mark(metrics.has_doctype)} DOCTYPE, "
                f"{_mark(metrics.has_lang)} Lang attribute, "
                f"{_mark(metrics.has_charset)} Charset"
            ),
            passed=score == max_score,
            score=score,
            max_score=max_score,
            status=status,
        )

    def evaluate(self, metrics: SeoMetrics) -> List[SeoCheck]:
        """Run every rule, in order, against a metrics snapshot."""
        return [
            self._check_title(metrics),
            self._check_meta_description(metrics),
            self._check_h1(metrics),
            self._check_image_alts(metrics),
            self._check_viewport(metrics),
            self._check_keyword_density(metrics),
            self._check_structure(metrics),
        ]

    def analyze(self, html: str) -> AnalyzeResponse:
        """
        Score an HTML document.

        Args:
            html: Raw HTML text; malformed markup is tolerated

        Returns:
            AnalyzeResponse with the total score, grade and individual checks
        """
        checks = self.evaluate(self.measure(html))
        total = sum(check.score for check in checks)

        response = AnalyzeResponse(
            score=total,
            max_score=MAX_SCORE,
            grade=format_grade(total),
            checks=checks,
            issues_count=sum(1 for check in checks if not check.passed),
            passed_count=sum(1 for check in checks if check.passed),
            warning_count=sum(1 for check in checks if check.status == "warning"),
        )
        logger.debug(f"Scored document ({len(html)} chars): {response.grade}")
        return response


def analyze_seo(html: str) -> AnalyzeResponse:
    """Score an HTML document with a default SeoScorer."""
    return SeoScorer().analyze(html)
