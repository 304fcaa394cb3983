# src/app/main.py
from __future__ import annotations
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.config import settings
from src.app.deps import get_brew_service, get_store
from src.app.routers.messages import router as messages_router
from src.app.routers.recipes import router as recipes_router
from src.app.routers.welcome import router as welcome_router
from src.services.auto_brew import AutoBrewWorker

# Logging simples no stdout (bom para dev e containers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Neural Brew API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(messages_router)
app.include_router(recipes_router)
app.include_router(welcome_router)

_auto_brew: Optional[AutoBrewWorker] = None


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request data"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
async def startup() -> None:
    global _auto_brew
    if settings.AUTO_BREW_INTERVAL_SECONDS > 0:
        _auto_brew = AutoBrewWorker(get_store, get_brew_service, settings.AUTO_BREW_INTERVAL_SECONDS)
        await _auto_brew.start()


@app.on_event("shutdown")
async def shutdown() -> None:
    if _auto_brew is not None:
        await _auto_brew.stop()


@app.get("/health")
def health():
    return {"ok": True}
