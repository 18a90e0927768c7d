"""
FastAPI Web Application - PixelPhraser Event Receiver
======================================================

Receives Pub/Sub push messages for commercetools product changes and
generates product descriptions from product images.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.infrastructure.config import get_settings
from src.application.event_controller import EventError, handle_event, INVALID_DATA_MESSAGE

logging.basicConfig(
    level=get_settings().log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ── Lifespan ───────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    for issue in get_settings().validate():
        logger.warning(issue)
    logger.info("PixelPhraser ready")
    yield


app = FastAPI(
    title="PixelPhraser",
    description="Product description generation from product images",
    lifespan=lifespan,
)


# ── Events ─────────────────────────────────────────────────────────

@app.post("/event")
@app.post("/")
async def receive_event(request: Request):
    """Pub/Sub push endpoint for product change events."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(status_code=400, content={"error": INVALID_DATA_MESSAGE})

    try:
        # Downstream calls are blocking; keep them off the event loop
        result = await run_in_threadpool(handle_event, body)
        return JSONResponse(status_code=200, content=result)
    except EventError as e:
        logger.warning(f"Rejected event: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.exception(f"Error processing event: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ── Health ─────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok"}
