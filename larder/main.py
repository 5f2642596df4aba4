"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from time import perf_counter

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from larder.api.error_handlers import register_exception_handlers
from larder.api.v1 import router as v1_router
from larder.core.config import settings
from larder.core.database import SessionLocal
from larder.core.logging import configure_logging
from larder.services.token_sweep import token_sweep_loop

configure_logging()
logger = logging.getLogger("larder.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the expired-token sweep with the app and cancel it on shutdown."""
    sweep_task: asyncio.Task | None = None
    if settings.TOKEN_SWEEP_ENABLED:
        sweep_task = asyncio.create_task(
            token_sweep_loop(SessionLocal, settings.TOKEN_SWEEP_INTERVAL_SECONDS)
        )
    yield
    if sweep_task is not None:
        sweep_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweep_task


app = FastAPI(
    title="Larder API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.middleware("http")
async def access_log(request: Request, call_next):
    """One log line per request: method, path, status and duration."""
    started = perf_counter()
    response = await call_next(request)
    elapsed_ms = round((perf_counter() - started) * 1000, 2)
    logger.info(
        "%s %s %s %sms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


register_exception_handlers(app)
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Larder API"}
