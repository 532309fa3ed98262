"""
Voice PO Backend: FastAPI application entry point.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINTS = (
    "POST /upload - Upload audio and extract PO data",
    "GET /purchase-orders - View all purchase orders",
    "GET /purchase-orders/{id} - Get specific purchase order",
    "DELETE /purchase-orders/{id} - Delete purchase order",
    "GET /export/purchase-orders.csv - Download CSV export",
    "GET /costs - View cost summary",
    "GET /health - Health check",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ensure data dirs and tables exist
    os.makedirs(settings.DATA_DIR, exist_ok=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    init_db()
    for line in ENDPOINTS:
        logger.info("Endpoint: %s", line)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Voice PO",
    description="Voice memo → transcription → purchase order extraction",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "services": {
            "elevenlabs": "connected",
            "openai": "connected",
            "database": "connected",
        },
    }


# ── Register API routers ─────────────────────────────────────────────────
from app.routers.upload import router as upload_router  # noqa: E402
from app.routers.purchase_orders import router as purchase_orders_router  # noqa: E402
from app.routers.costs import router as costs_router  # noqa: E402

app.include_router(upload_router, tags=["Upload"])
app.include_router(purchase_orders_router, tags=["Purchase Orders"])
app.include_router(costs_router, tags=["Costs"])

# Recorder front-end, served last so API routes take precedence
if os.path.isdir(settings.PUBLIC_DIR):
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")
