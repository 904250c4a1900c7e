"""
FastAPI application for the SEO Scorer.
Provides endpoints for scoring HTML documents and generating SEO recommendations.
"""
import logging
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from seo_scorer import __version__, config
from seo_scorer.fetcher import PageFetcher, FetchError, FetchTimeoutError
from seo_scorer.models import AnalyzeRequest, AnalyzeUrlRequest, AnalyzeResponse, RecommendationReport
from seo_scorer.recommendations import build_report
from seo_scorer.scorer import SeoScorer

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SEO Scorer",
    description="""
    Rule-based SEO scoring for HTML documents.

    ## Features
    * Score submitted HTML against seven on-page SEO checks
    * Fetch a URL and score the returned page
    * Recommendations derived from the same measurements as the score

    ## Usage
    1. POST HTML to /api/analyze (or a URL to /api/analyze-url)
    2. Read the score, grade and individual checks
    3. POST the same HTML to /api/recommendations for actionable advice
    """,
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600
)

scorer = SeoScorer()
fetcher = PageFetcher()


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 with the validator's detail."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        messages.append(f"{field}: {error.get('msg')}")
    detail = "; ".join(messages)
    logger.info(f"Rejected request to {request.url.path}: {detail}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "error": detail}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {message} or {message, error}."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.post("/api/analyze", response_model=AnalyzeResponse)
def analyze_html(
    request: AnalyzeRequest,
    request_id: Optional[str] = Header(None)
):
    """
    Score an HTML document.

    Args:
        request: AnalyzeRequest containing the HTML source
        request_id: Optional request ID from header

    Returns:
        AnalyzeResponse with the score, grade and checks

    Raises:
        HTTPException: 500 if scoring fails unexpectedly
    """
    request_id = request_id or str(uuid.uuid4())
    logger.info(f"[{request_id}] Received analysis request ({len(request.html_code)} chars)")

    try:
        result = scorer.analyze(request.html_code)
    except Exception as e:
        logger.error(f"[{request_id}] Unexpected error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info(f"[{request_id}] Analysis complete: {result.grade}")
    return result


@app.post("/api/analyze-url", response_model=AnalyzeResponse)
async def analyze_url(
    request: AnalyzeUrlRequest,
    request_id: Optional[str] = Header(None)
):
    """
    Fetch a page and score its HTML.

    Args:
        request: AnalyzeUrlRequest containing the page URL
        request_id: Optional request ID from header

    Returns:
        AnalyzeResponse with the score, grade and checks

    Raises:
        HTTPException: 504 on fetch timeout, 502 on other fetch failures, 500 on unexpected errors
    """
    request_id = request_id or str(uuid.uuid4())
    url = str(request.url)
    logger.info(f"[{request_id}] Received URL analysis request for {url}")

    try:
        html = await fetcher.fetch(url)
    except FetchTimeoutError as e:
        logger.error(f"[{request_id}] Fetch timed out: {e}")
        raise HTTPException(
            status_code=504,
            detail={"message": "Timed out fetching the page", "error": str(e)}
        )
    except FetchError as e:
        logger.error(f"[{request_id}] Fetch failed: {e}")
        raise HTTPException(
            status_code=502,
            detail={"message": "Could not fetch the page", "error": str(e)}
        )
    except Exception as e:
        logger.error(f"[{request_id}] Unexpected error fetching {url}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    try:
        result = await run_in_threadpool(scorer.analyze, html)
    except Exception as e:
        logger.error(f"[{request_id}] Unexpected error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info(f"[{request_id}] Analysis of {url} complete: {result.grade}")
    return result


@app.post("/api/recommendations", response_model=RecommendationReport)
def recommend(
    request: AnalyzeRequest,
    request_id: Optional[str] = Header(None)
):
    """
    Recommendations, metrics and structure validation for an HTML document.

    Args:
        request: AnalyzeRequest containing the HTML source
        request_id: Optional request ID from header

    Returns:
        RecommendationReport built from the same measurements as the score
    """
    request_id = request_id or str(uuid.uuid4())
    logger.info(f"[{request_id}] Received recommendations request ({len(request.html_code)} chars)")

    try:
        report = build_report(request.html_code, scorer=scorer)
    except Exception as e:
        logger.error(f"[{request_id}] Unexpected error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info(f"[{request_id}] Generated {len(report.recommendations)} recommendations")
    return report


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Dict containing status and version of the API
    """
    return {
        "status": "healthy",
        "version": __version__
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
