"""
SEO Scorer
Rule-based SEO scoring for HTML documents: seven fixed checks, a 0-100 score, a letter grade and recommendations.
"""

__version__ = "1.0.0"

from .models import (
    SeoCheck, AnalyzeResponse, KeywordStat, SeoMetrics,
    Recommendation, StructureValidation, RecommendationReport,
    AnalyzeRequest, AnalyzeUrlRequest
)
from .document import HtmlDocument
from .scorer import SeoScorer, analyze_seo, get_grade, format_grade
from .recommendations import generate_recommendations, extract_keywords, validate_html_structure, build_report
from .fetcher import PageFetcher, FetchError, FetchTimeoutError, normalize_url
