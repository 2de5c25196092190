from dotenv import load_dotenv
from fastapi import FastAPI
import logging

from pebbles.api.routes import router
from pebbles.config import settings_from_env

# Pick up REDIS_URL / PEBBLES_* from a local .env before reading settings.
load_dotenv(override=False)

app = FastAPI(title="pebbles-game", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=settings_from_env().log_level)
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "pebbles-game", "version": "0.1.0"}
