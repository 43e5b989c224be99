"""
OrderDesk - Backend API
Customers, product catalog with stock, and the order workflow

Run:
    cd backend && uvicorn orderdesk.main:app --port 3000
"""
import logging
import time
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before settings are read
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orderdesk.api import customers, orders, products
from orderdesk.api.errors import register_exception_handlers
from orderdesk.core.config import settings
from orderdesk.core.database import CONNECTION_TIMEOUT, check_connection

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    debug=settings.API_DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routers
app.include_router(customers.router, prefix="/customer", tags=["Customer"])
app.include_router(products.router, prefix="/product", tags=["Product"])
app.include_router(orders.router, prefix="/order", tags=["Order"])

logger.info(f"{settings.API_TITLE} {settings.API_VERSION} using {settings.STORAGE_BACKEND} storage")


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": "OrderDesk API",
        "status": "online",
        "version": settings.API_VERSION,
    }


@app.get("/health")
def health():
    """Health check endpoint - tests storage connectivity"""
    start_time = time.time()

    storage = {"backend": settings.STORAGE_BACKEND, "status": "connected", "latency_ms": None, "error": None}

    if settings.STORAGE_BACKEND.lower() == "postgres":
        storage["connection_timeout_s"] = CONNECTION_TIMEOUT
        try:
            storage["latency_ms"] = check_connection()
        except Exception as e:
            storage["status"] = "disconnected"
            storage["error"] = str(e)

    return {
        "status": "healthy" if storage["status"] == "connected" else "degraded",
        "service": "orderdesk-api",
        "version": settings.API_VERSION,
        "storage": storage,
        "total_latency_ms": round((time.time() - start_time) * 1000, 2)
    }
