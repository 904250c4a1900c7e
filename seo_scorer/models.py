"""
Pydantic models for the SEO Scorer.
Defines the data structures for API requests, responses, and scoring results.
"""
from pydantic import BaseModel, HttpUrl, Field, field_validator
from typing import List, Optional, Literal

from seo_scorer.fetcher import normalize_url

CheckStatus = Literal["success", "warning", "error"]

# --- Scoring Models ---

class SeoCheck(BaseModel):
    """One evaluated SEO rule."""
    name: str
    description: str
    passed: bool
    score: int = Field(..., ge=0)
    max_score: int = Field(..., alias="maxScore", ge=0)
    status: CheckStatus

    class Config:
        populate_by_name = True
        frozen = True


class AnalyzeResponse(BaseModel):
    """Scoring report returned for one HTML document."""
    score: int = Field(..., ge=0, le=100)
    max_score: int = Field(100, alias="maxScore")
    grade: str
    checks: List[SeoCheck] = []
    issues_count: int = Field(0, alias="issuesCount")
    passed_count: int = Field(0, alias="passedCount")
    warning_count: int = Field(0, alias="warningCount")

    class Config:
        populate_by_name = True
        frozen = True
        json_schema_extra = {
            "example": {
                "score": 85,
                "maxScore": 100,
                "grade": "A (85/100)",
                "checks": [
                    {
                        "name": "Title Tag",
                        "description": "Found title tag with 18 characters: \"Example Page Title\"",
                        "passed": True,
                        "score": 15,
                        "maxScore": 15,
                        "status": "success"
                    }
                ],
                "issuesCount": 1,
                "passedCount": 6,
                "warningCount": 1
            }
        }

# --- Metrics Snapshot ---

class KeywordStat(BaseModel):
    """Frequency of a single token in the visible text."""
    word: str
    count: int
    density: float

    class Config:
        frozen = True


class SeoMetrics(BaseModel):
    """
    Measurements taken from a parsed document.

    Both the scoring rules and the recommendation generator read from this
    snapshot, so the score and the advice are always derived from the same
    numbers.
    """
    title: str = ""
    title_count: int = Field(0, alias="titleCount")
    title_length: int = Field(0, alias="titleLength")
    meta_description: str = Field("", alias="metaDescription")
    meta_description_length: int = Field(0, alias="metaDescriptionLength")
    h1_count: int = Field(0, alias="h1Count")
    image_count: int = Field(0, alias="imageCount")
    images_with_alt: int = Field(0, alias="imagesWithAlt")
    viewport: Optional[str] = None
    has_viewport: bool = Field(False, alias="hasViewport")
    has_doctype: bool = Field(False, alias="hasDoctype")
    has_lang: bool = Field(False, alias="hasLang")
    has_charset: bool = Field(False, alias="hasCharset")
    word_count: int = Field(0, alias="wordCount")
    top_keywords: List[KeywordStat] = Field([], alias="topKeywords")

    class Config:
        populate_by_name = True
        frozen = True

# --- Recommendation Models ---

class Recommendation(BaseModel):
    """A single piece of advice derived from the metrics snapshot."""
    type: Literal["title", "meta", "h1", "images", "viewport", "keywords", "structure"]
    severity: CheckStatus
    message: str
    suggestion: Optional[str] = None

    class Config:
        frozen = True


class StructureValidation(BaseModel):
    """Presence of the basic document skeleton in the raw markup."""
    has_doctype: bool = Field(False, alias="hasDoctype")
    has_html_tag: bool = Field(False, alias="hasHtmlTag")
    has_head_tag: bool = Field(False, alias="hasHeadTag")
    has_body_tag: bool = Field(False, alias="hasBodyTag")
    errors: List[str] = []

    class Config:
        populate_by_name = True
        frozen = True


class RecommendationReport(BaseModel):
    """Metrics, advice and structure validation for one HTML document."""
    metrics: SeoMetrics
    recommendations: List[Recommendation] = []
    structure: StructureValidation

    class Config:
        populate_by_name = True
        frozen = True

# --- API Request Models ---

class AnalyzeRequest(BaseModel):
    """Request model for scoring raw HTML."""
    html_code: str = Field(..., alias="htmlCode", min_length=1, description="The HTML source to analyze")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "htmlCode": "<!DOCTYPE html><html lang=\"en\"><head><title>Example</title></head><body></body></html>"
            }
        }


class AnalyzeUrlRequest(BaseModel):
    """Request model for fetching a page and scoring it."""
    url: HttpUrl = Field(..., description="The URL of the page to analyze; https:// is assumed when no scheme is given")

    @field_validator("url", mode="before")
    @classmethod
    def add_scheme(cls, value):
        if isinstance(value, str):
            return normalize_url(value)
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "url": "example.com"
            }
        }
