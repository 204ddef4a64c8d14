import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from digesttrack.api import (
    analysis,
    export,
    food,
    ingredients,
    meals,
    saved_dishes,
    symptoms,
)
from digesttrack.config import settings
from digesttrack.database import init_db

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("DigestTrack started")
    yield


app = FastAPI(title="DigestTrack", version="0.1.0", lifespan=lifespan)

app.include_router(meals.router)
app.include_router(symptoms.router)
app.include_router(food.router)
app.include_router(saved_dishes.router)
app.include_router(ingredients.router)
app.include_router(analysis.router)
app.include_router(export.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
