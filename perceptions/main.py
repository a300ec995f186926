"""Perceptions Cruising - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from perceptions.core.config import get_settings
from perceptions.core.exceptions import PerceptionsAPIException
from perceptions.core.logging import setup_logging
from perceptions.db.base import Base
from perceptions.db.session import engine, AsyncSessionLocal
from perceptions.routers import api
from perceptions.services.catalog import find_catalog_gaps
from perceptions.services.seeding import seed_scenarios

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        if settings.seed_on_startup:
            await seed_scenarios(db)
        for gap in await find_catalog_gaps(db):
            logger.warning(
                "Catalog gap: scenario=%s answer_choice=%r problem=%s",
                gap.scenario_id,
                gap.answer_choice,
                gap.problem,
            )

    logger.info("%s ready; diagnostic feedback system online", settings.service_name)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Diagnostic scenarios with misconception-specific feedback",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PerceptionsAPIException)
async def perceptions_exception_handler(request: Request, exc: PerceptionsAPIException):
    logger.info(
        "%s %s -> %s %s %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.error_code,
        exc.extra,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
    )


app.include_router(api.router)
