"""
CareerLens API - Main FastAPI application.

Entry point for the career assessment backend. Every AI endpoint follows
the same pipeline: Prompt → Gemini → Extractor → Normalizer → Response.
"""

import logging
import platform
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from careerlens import __version__
from careerlens.config import get_settings
from careerlens.core.debug import DebugDumpObserver
from careerlens.core.errors import ExtractionError
from careerlens.core.shapes import COMPARISON, EXPLORE, MATCHES, OVERVIEW, PING, PROFILE, PROFILE_PLACEHOLDER
from careerlens.engine import CareerGenerator
from careerlens.middleware import RequestLoggingMiddleware
from careerlens.prompts import (
    PING_PROMPT,
    comparison_prompt,
    explore_prompt,
    matches_prompt,
    overview_prompt,
    profile_prompt,
)
from careerlens.providers import ElevenLabsAdapter, GeminiAdapter, ProviderError, SpeechError

logger = logging.getLogger(__name__)

SOURCE = "gemini-ai"
STARTED_AT = time.monotonic()

# Global instances
generator: CareerGenerator | None = None
speech: ElevenLabsAdapter | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - setup and teardown."""
    global generator, speech

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    provider = GeminiAdapter(
        api_key=settings.generative_api_key,
        base_url=settings.gemini_base_url,
        timeout=settings.generation_timeout,
    )
    observer = DebugDumpObserver(settings.debug_dump_dir) if settings.debug_dump_dir else None
    generator = CareerGenerator(provider, settings.gemini_model, observer=observer)

    speech = ElevenLabsAdapter(
        api_key=settings.elevenlabs_api_key,
        voice_id=settings.elevenlabs_voice_id,
        model_id=settings.elevenlabs_model,
        base_url=settings.elevenlabs_base_url,
    )

    logger.info(f"Gemini API: {'configured' if provider.configured else 'NOT configured'} ({settings.gemini_model})")
    logger.info(f"ElevenLabs API: {'configured' if speech.configured else 'NOT configured'}")
    if observer:
        logger.info(f"Debug dumps enabled: {settings.debug_dump_dir}")

    yield

    # Cleanup
    await provider.close()
    await speech.close()
    generator = None
    speech = None


app = FastAPI(
    title=f"{get_settings().app_name} API",
    description="AI-assisted career assessment backend",
    version=__version__,
    lifespan=lifespan,
    debug=get_settings().debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)
app.add_middleware(RequestLoggingMiddleware)


def get_generator() -> CareerGenerator:
    if generator is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return generator


def get_speech() -> ElevenLabsAdapter:
    if speech is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return speech


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Request Models
# =============================================================================


class AssessmentRequest(BaseModel):
    """Request body for the assessment-driven endpoints."""
    username: str | None = None
    answers: dict[str, Any] | None = None


class CompareRequest(BaseModel):
    """Request body for /api/explore/compare."""
    careerIds: Any = None


class SpeechRequest(BaseModel):
    """Request body for /api/text-to-speech."""
    text: str | None = None


# =============================================================================
# Error Handling
# =============================================================================

TROUBLESHOOTING: dict[str, list[str]] = {
    "NO_JSON_FOUND": [
        "Gemini answered without any JSON",
        "Try request again (AI responses can vary)",
        "Enable DEBUG_DUMP_DIR to capture the raw response",
    ],
    "PARSE_ERROR": [
        "Gemini returned malformed JSON",
        "Try request again (AI responses can vary)",
        "Enable DEBUG_DUMP_DIR to capture the failing JSON",
    ],
    "RATE_LIMIT": [
        "Too many requests to Gemini API",
        "Wait a few minutes before retrying",
        "Check API quota limits",
    ],
    "AUTH_ERROR": [
        "API key is invalid or expired",
        "Get a new key from https://aistudio.google.com/apikey",
        "Ensure Gemini API is enabled for the key's project",
    ],
    "NOT_CONFIGURED": [
        "Add GENERATIVE_API_KEY to the .env file",
        "Restart the server after adding the key",
    ],
}

DEFAULT_TROUBLESHOOTING = [
    "Check server logs for detailed error information",
    "Try the /api/test-gemini endpoint first",
]


def _failure(error_type: str, message: str, retryable: bool = True) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": message,
            "errorType": error_type,
            "retryable": retryable,
            "troubleshooting": TROUBLESHOOTING.get(error_type, DEFAULT_TROUBLESHOOTING),
            "timestamp": _timestamp(),
        },
    )


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    logger.error(f"{request.url.path}: {exc.error_type} - {exc}")
    return _failure(exc.error_type, str(exc))


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    logger.error(f"{request.url.path}: {exc.error_type} from {exc.provider} - {exc}")
    return _failure(exc.error_type, str(exc), retryable=exc.recoverable)


@app.exception_handler(SpeechError)
async def speech_error_handler(request: Request, exc: SpeechError) -> JSONResponse:
    logger.error(f"{request.url.path}: speech error {exc.status_code} - {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc), "details": exc.details},
    )


AVAILABLE_ENDPOINTS = [
    "GET /api/hello",
    "GET /api/health",
    "GET /api/test-gemini",
    "GET /api/test-elevenlabs",
    "POST /api/text-to-speech",
    "POST /api/answers",
    "POST /api/overview",
    "POST /api/matches",
    "GET /api/explore",
    "POST /api/explore/compare",
    "POST /api/profile",
]


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": "Endpoint not found",
            "path": request.url.path,
            "method": request.method,
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
    )


# =============================================================================
# Health & Status Endpoints
# =============================================================================


@app.get("/api/hello")
async def hello() -> dict[str, str]:
    """Basic liveness check."""
    return {
        "message": "Career Assessment API - Ready!",
        "timestamp": _timestamp(),
        "version": __version__,
    }


@app.get("/api/health")
async def health() -> dict[str, Any]:
    """Report which upstream APIs are configured."""
    settings = get_settings()
    return {
        "status": "ok",
        "timestamp": _timestamp(),
        "apis": {
            "gemini": "configured" if settings.generative_api_key else "not-configured",
            "elevenlabs": "configured" if settings.elevenlabs_api_key else "not-configured",
        },
        "server": {
            "port": settings.api_port,
            "pythonVersion": platform.python_version(),
            "uptime": round(time.monotonic() - STARTED_AT, 2),
        },
    }


@app.get("/api/test-gemini")
async def test_gemini(gen: CareerGenerator = Depends(get_generator)) -> Any:
    """Round-trip a tiny prompt through Gemini and the extraction pipeline."""
    settings = get_settings()
    if not settings.generative_api_key:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Gemini API key not configured",
                "message": "Add GENERATIVE_API_KEY to .env file",
                "troubleshooting": TROUBLESHOOTING["NOT_CONFIGURED"],
            },
        )

    result = await gen.generate(PING_PROMPT, PING, max_tokens=100)
    return {
        "success": True,
        "message": "Gemini API is working!",
        "response": result.data,
        "model": result.model,
        "latencyMs": result.latency_ms,
        "usage": result.usage,
    }


@app.get("/api/test-elevenlabs")
async def test_elevenlabs(tts: ElevenLabsAdapter = Depends(get_speech)) -> Any:
    """Check the ElevenLabs key by listing voices."""
    if not tts.configured:
        return JSONResponse(
            status_code=400,
            content={"status": "Error", "error": "ElevenLabs API key not configured"},
        )

    try:
        voices = await tts.count_voices()
    except SpeechError as e:
        return JSONResponse(
            status_code=500,
            content={"status": "Error", "error": str(e), "hint": "Check API key validity"},
        )

    return {"status": "Connected", "voicesCount": voices, "apiKeyPresent": True}


# =============================================================================
# Speech
# =============================================================================


@app.post("/api/text-to-speech")
async def text_to_speech(
    request: SpeechRequest, tts: ElevenLabsAdapter = Depends(get_speech)
) -> Response:
    """Convert text to MPEG audio."""
    if not request.text:
        return JSONResponse(status_code=400, content={"error": "Text is required"})

    audio = await tts.synthesize(request.text)
    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Cache-Control": "no-cache"},
    )


# =============================================================================
# Assessment Endpoints
# =============================================================================


@app.post("/api/answers")
async def answers(payload: dict[str, Any] = Body(default_factory=dict)) -> dict[str, Any]:
    """Acknowledge submitted answers. Nothing is stored."""
    logger.info(f"Assessment answers received: {len(payload)} items")
    return {
        "success": True,
        "message": "Assessment answers received",
        "timestamp": _timestamp(),
    }


@app.post("/api/overview")
async def overview(
    request: AssessmentRequest, gen: CareerGenerator = Depends(get_generator)
) -> dict[str, Any]:
    """Top matches, profile snapshot and a next step."""
    answers = request.answers or {}
    logger.info(f"Overview request: user={request.username or 'anonymous'} answers={len(answers)}")

    result = await gen.generate(overview_prompt(answers), OVERVIEW)
    return {
        "success": True,
        "data": result.data,
        "source": SOURCE,
        "timestamp": _timestamp(),
    }


@app.post("/api/matches")
async def matches(
    request: AssessmentRequest, gen: CareerGenerator = Depends(get_generator)
) -> dict[str, Any]:
    """Six detailed career recommendations."""
    answers = request.answers or {}
    logger.info(f"Matches request: user={request.username or 'anonymous'} answers={len(answers)}")

    result = await gen.generate(matches_prompt(answers), MATCHES, max_tokens=8192)
    return {
        "success": True,
        "matches": result.data,
        "source": SOURCE,
        "timestamp": _timestamp(),
    }


@app.get("/api/explore")
async def explore(
    industry: str | None = Query(default=None),
    educationLevel: str | None = Query(default=None),
    salaryMin: str | None = Query(default=None),
    salaryMax: str | None = Query(default=None),
    workEnvironment: str | None = Query(default=None),
    gen: CareerGenerator = Depends(get_generator),
) -> dict[str, Any]:
    """Browse a generated catalogue of careers."""
    filters = {
        "industry": industry,
        "educationLevel": educationLevel,
        "salaryMin": salaryMin,
        "salaryMax": salaryMax,
        "workEnvironment": workEnvironment,
    }
    logger.info(f"Explore request: filters={filters}")

    result = await gen.generate(explore_prompt(filters), EXPLORE, max_tokens=8192)
    return {
        "success": True,
        "careers": result.data,
        "totalCount": len(result.data),
        "filters": filters,
        "source": SOURCE,
        "timestamp": _timestamp(),
    }


@app.post("/api/explore/compare")
async def compare(
    request: CompareRequest, gen: CareerGenerator = Depends(get_generator)
) -> Any:
    """Side-by-side comparison of the given careers."""
    career_ids = request.careerIds
    if not isinstance(career_ids, list) or not career_ids:
        return JSONResponse(status_code=400, content={"error": "careerIds array required"})

    career_ids = [str(career) for career in career_ids]
    logger.info(f"Compare request: {', '.join(career_ids)}")

    result = await gen.generate(comparison_prompt(career_ids), COMPARISON)
    return {
        "success": True,
        "comparison": result.data,
        "source": SOURCE,
        "timestamp": _timestamp(),
    }


@app.post("/api/profile")
async def profile(
    request: AssessmentRequest, gen: CareerGenerator = Depends(get_generator)
) -> dict[str, Any]:
    """
    Full career profile.

    Without answers there is nothing to analyze, so a placeholder profile
    is returned and the model is not called.
    """
    answers = request.answers or {}
    logger.info(f"Profile request: user={request.username or 'anonymous'} answers={len(answers)}")

    if not answers:
        logger.warning("No assessment answers provided - returning placeholder profile")
        return {
            "success": True,
            "profile": PROFILE_PLACEHOLDER,
            "source": "no-assessment-data",
            "message": "Complete assessment to receive AI-generated profile",
            "timestamp": _timestamp(),
        }

    result = await gen.generate(profile_prompt(answers), PROFILE, max_tokens=8192)
    generated_at = _timestamp()
    return {
        "success": True,
        "profile": result.data,
        "answers": answers,
        "source": SOURCE,
        "timestamp": generated_at,
        "metadata": {
            "username": request.username,
            "answersCount": len(answers),
            "generatedAt": generated_at,
        },
    }


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("careerlens.main:app", host=settings.api_host, port=settings.api_port)
