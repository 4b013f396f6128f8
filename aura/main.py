# aura/main.py
"""
Aura API entry point.
Registers every module through its router.

Architecture: near-autonomous vertical modules + pure engine.
Process-wide helpers (AI client, question cache, performance tracker) are
built once in the lifespan and kept on app.state.
"""
import logging
from contextlib import asynccontextmanager

from cachetools import TTLCache
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aura.core.config import settings
from aura.core.logging import setup_logging
from aura.infra.ai_client import AIClient
from aura.infra.telemetry import PerformanceTracker, SampleBuffer
from aura.shared.errors import AuraError

from aura.modules.auth.router       import router as auth_router
from aura.modules.assessment.router import router as assessment_router
from aura.modules.assessment.supply import QuestionSupply
from aura.modules.insights.router   import router as insights_router
from aura.modules.mood.router       import router as mood_router
from aura.modules.progress.router   import router as progress_router
from aura.modules.share.router      import router as share_router
from aura.modules.telemetry.router  import router as telemetry_router
from aura.modules.telemetry.service import store_samples

logger = logging.getLogger(__name__)

VERSION = "2.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)

    tracker = PerformanceTracker(
        SampleBuffer(settings.PERFORMANCE_BUFFER_SIZE),
        threshold_ms=settings.SLOW_OPERATION_MS,
        sink=store_samples,
    )
    ai_client = AIClient.from_settings(settings, tracker=tracker)

    app.state.tracker = tracker
    app.state.ai_client = ai_client
    app.state.question_supply = QuestionSupply(
        ai_client,
        TTLCache(maxsize=settings.QUESTION_CACHE_MAX_ENTRIES, ttl=settings.QUESTION_CACHE_TTL_SECONDS),
    )

    if not ai_client.enabled:
        logger.warning("DEEPSEEK_API_KEY not set: serving static questions and local insights only")
    logger.info("%s %s started", settings.PROJECT_NAME, VERSION)

    yield

    await tracker.flush()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuraError)
async def aura_error_handler(request: Request, exc: AuraError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.detail},
    )


app.include_router(auth_router)
app.include_router(assessment_router)
app.include_router(insights_router)
app.include_router(mood_router)
app.include_router(progress_router)
app.include_router(share_router)
app.include_router(telemetry_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
