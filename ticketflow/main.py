"""ticketflow — FastAPI application factory (intake and lookup endpoints).

The API only stores tickets and enqueues them; enrichment happens in
``ticketflow.worker``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ticketflow.adapters.persistence.database import engine
from ticketflow.config import settings
from ticketflow.infrastructure.api.routes_health import router as health_router
from ticketflow.infrastructure.api.routes_tickets import router as tickets_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        async with engine.begin():
            pass
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    logger.info("%s API started (stage %s)", settings.service_name, settings.stage_name)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="ticketflow",
        description="Support ticket intake with asynchronous AI enrichment",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.include_router(health_router, prefix="/api")
    app.include_router(tickets_router, prefix="/api")
    return app


app = create_app()
