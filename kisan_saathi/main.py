import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from kisan_saathi.api.rest_routes.chat import router as chat_router
from kisan_saathi.api.rest_routes.market import router as market_router
from kisan_saathi.api.rest_routes.weather import router as weather_router
from kisan_saathi.api.websocket.endpoints import router as websocket_router
from kisan_saathi.core.config import settings

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.LOG_LEVEL)
    logging.getLogger(__name__).info(
        "Starting with weather source '%s' and market source '%s'",
        settings.WEATHER_SOURCE,
        settings.MARKET_SOURCE,
    )
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(websocket_router, tags=["websocket"])
app.include_router(chat_router)
app.include_router(weather_router)
app.include_router(market_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Kisan Saathi, your AI Crop Advisor!"}
