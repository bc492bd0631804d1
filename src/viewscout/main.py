"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from viewscout.api.dependencies import get_services
from viewscout.api.routes import router
from viewscout.config import Settings, settings

logger = structlog.get_logger()

# Local dashboard dev servers
LOCAL_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


def cors_origins(config: Settings) -> list[str]:
    """Local dev origins plus the comma separated ``ALLOWED_ORIGINS`` setting."""
    extra = [o.strip() for o in config.allowed_origins.split(",") if o.strip()]
    return sorted(set(LOCAL_ORIGINS).union(extra))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log which providers are configured; close the shared HTTP client on exit."""
    logger.info(
        "app.startup",
        youtube=settings.youtube_enabled,
        naver=settings.naver_enabled,
        supadata=settings.supadata_enabled,
        llm=settings.llm_enabled,
        cache_file=settings.cache_file,
        cache_ttl_hours=settings.cache_ttl_hours,
    )
    yield
    # Services are built lazily; only close them if a request created them
    if get_services.cache_info().currsize:
        await get_services().aclose()
    logger.info("app.shutdown")


app = FastAPI(
    title="ViewScout",
    description="YouTube keyword market analysis and video diagnosis",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(settings),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
