"""
FastAPI application entrypoint.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routes import router
from moodverse.config import Settings
from moodverse.context import MoodVerseContext

settings = Settings()
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ctx = getattr(app.state, "context", None)
    if ctx is None:
        ctx = MoodVerseContext(settings)
        app.state.context = ctx
    ctx.start()
    logger.info("[api] context started")
    try:
        yield
    finally:
        ctx.close()
        logger.info("[api] context closed")


app = FastAPI(title="Mood Verse API", version="1.0.0", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
def health() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Simple status payload.
    """
    return {"status": "ok"}
