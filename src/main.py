"""
Czech Search - FastAPI service for Czech token normalization

Exposes the same normalization a search index uses, so that indexing
workers and query frontends can share one implementation:
- Trimming of non-word characters
- Czech stop-word removal
- Hunspell-based stemming (inflected form -> dictionary base form)

Architecture:
- Language data (.aff/.dic) is loaded once at startup into an immutable
  StemmerContext
- One Stemmer (with LRU cache) is shared by the index and query pipelines,
  so index-time and query-time stemming are identical
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Literal

# Load environment variables from .env.local (local dev) or .env (production)
from dotenv import load_dotenv

# Load .env.local first (highest priority), then .env as fallback
env_local = Path(__file__).parent.parent / ".env.local"
env_file = Path(__file__).parent.parent / ".env"

if env_local.exists():
    print(f"Loading environment from: {env_local}")
    load_dotenv(env_local, override=True)
elif env_file.exists():
    print(f"Loading environment from: {env_file}")
    load_dotenv(env_file, override=True)

# Configure logging: console (brief) + file (detailed)
from src.logging_config import setup_logging

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
console_level = getattr(logging, log_level, logging.INFO)
setup_logging(
    log_file=os.getenv("LOG_FILE", "logs/czech-search.log"),
    console_level=console_level,
    file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
)

logger = logging.getLogger(__name__)


from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .czech import (
    LanguageDataError,
    Stemmer,
    build_index_pipeline,
    build_query_pipeline,
    load_context,
)

PORT = int(os.getenv("PORT", "8080"))

# Version tracking
APP_VERSION = "0.1.0"
APP_START_TIME = datetime.utcnow().isoformat() + "Z"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load Czech language data and build the shared pipelines"""
    aff_path = os.getenv("CS_AFFIX_PATH")
    if not aff_path:
        raise ValueError("CS_AFFIX_PATH environment variable is required")
    dic_path = os.getenv("CS_DICTIONARY_PATH")
    if not dic_path:
        raise ValueError("CS_DICTIONARY_PATH environment variable is required")
    cache_size = int(os.getenv("STEMMER_CACHE_SIZE", "10000"))

    # Every stemming decision is a DEBUG line; keep them out of the file log unless asked
    if os.getenv("LOG_STEM_DECISIONS", "false").lower() != "true":
        logging.getLogger("src.czech.stemmer").setLevel(logging.INFO)

    logger.info(f"Loading Czech language data (aff={aff_path}, dic={dic_path})...")
    try:
        context = load_context(aff_path, dic_path)
    except (OSError, LanguageDataError) as e:
        logger.error(f"Failed to load Czech language data: {e}")
        raise

    stemmer = Stemmer(context, cache_size=cache_size)
    app.state.context = context
    app.state.stemmer = stemmer
    app.state.pipelines = {
        "index": build_index_pipeline(stemmer),
        "query": build_query_pipeline(stemmer),
    }
    logger.info(f"Stemmer ready: {stemmer}")

    yield

    logger.info("Shutting down...")
    if stemmer.cache_info() is not None:
        logger.info(f"Stemmer cache: {stemmer.cache_info()}")
    app.state.pipelines = None
    app.state.stemmer = None
    app.state.context = None


app = FastAPI(
    title="Czech Search API",
    description="Czech token normalization (trimming, stop words, Hunspell stemming) for search indexing",
    version=APP_VERSION,
    lifespan=lifespan,
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    started_at: str
    uptime_seconds: float
    affix_rules: int
    dictionary_entries: int


class StemRequest(BaseModel):
    words: List[str] = Field(..., description="Words to stem", min_length=1, max_length=1000)


class StemItem(BaseModel):
    word: str
    stem: str
    stemmed: bool = Field(..., description="False when the word came back unchanged because no stem validated")
    flags: List[str] = Field(default_factory=list, description="Affix flags applied (empty for dictionary words)")


class StemResponse(BaseModel):
    results: List[StemItem]
    total: int


class AnalyzeRequest(BaseModel):
    text: str = Field(..., description="Text to normalize")
    mode: Literal["index", "query"] = Field(
        default="index",
        description="index: trim + stop words + stem; query: stem only",
    )


class AnalyzeResponse(BaseModel):
    mode: str
    tokens: List[str]
    total: int


def _get_stemmer(request: Request) -> Stemmer:
    stemmer = getattr(request.app.state, "stemmer", None)
    if stemmer is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Czech language data not loaded",
        )
    return stemmer


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "Czech Search API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """Health check endpoint"""
    stemmer = _get_stemmer(request)
    start_time = datetime.fromisoformat(APP_START_TIME.rstrip('Z'))
    uptime = (datetime.utcnow() - start_time).total_seconds()

    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        started_at=APP_START_TIME,
        uptime_seconds=round(uptime, 2),
        affix_rules=len(stemmer.context.rules),
        dictionary_entries=len(stemmer.context.dictionary),
    )


@app.post("/v1/stem", response_model=StemResponse)
def stem_words(request: Request, body: StemRequest):
    """
    Stem individual words

    Example:
        POST /v1/stem
        {
            "words": ["hradech", "xyzzy"]
        }
        ->
        {
            "results": [
                {"word": "hradech", "stem": "hrad", "stemmed": true, "flags": ["H"]},
                {"word": "xyzzy", "stem": "xyzzy", "stemmed": false, "flags": []}
            ],
            "total": 2
        }
    """
    stemmer = _get_stemmer(request)

    results = []
    for word in body.words:
        result = stemmer.analyze(word)
        results.append(StemItem(
            word=word,
            stem=result.text,
            stemmed=result.stemmed,
            flags=list(result.stem.flags) if result.stemmed else [],
        ))

    return StemResponse(results=results, total=len(results))


@app.post("/v1/analyze", response_model=AnalyzeResponse)
def analyze_text(request: Request, body: AnalyzeRequest):
    """
    Normalize text exactly as the index (or query) side of the search does

    Example:
        POST /v1/analyze
        {
            "text": "Hrady a zámky",
            "mode": "index"
        }
        -> {"mode": "index", "tokens": ["hrad", "zámek"], "total": 2}
    """
    _get_stemmer(request)
    pipeline = request.app.state.pipelines[body.mode]
    tokens = pipeline.run_string(body.text)

    logger.debug(f"Analyzed {len(body.text)} chars in {body.mode} mode -> {len(tokens)} tokens")

    return AnalyzeResponse(mode=body.mode, tokens=tokens, total=len(tokens))


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,  # Development only
    )
