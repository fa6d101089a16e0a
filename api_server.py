"""
FastAPI server for the market dashboard
Serves market data endpoints to the frontend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config.config import validate_config, ENVIRONMENT, PRIORITY_COIN_ID, WEBAPP_URL
from config.logging import setup_logging
from src.api.market import router as market_router

# Setup logging at module level (must run before app creation)
# This ensures logging works when uvicorn imports the module
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events
    """
    validate_config()
    logger.info(f"Starting market data API server (priority coin: {PRIORITY_COIN_ID})")

    yield

    logger.info("Shutting down market data API server...")


app = FastAPI(
    title="Crypto Dashboard Market API",
    description="Market data for the crypto dashboard",
    version="1.0.0",
    lifespan=lifespan,
)


allowed_origins = [
    "http://localhost:3000",  # Local development
    "http://127.0.0.1:3000",
]

if WEBAPP_URL and WEBAPP_URL not in allowed_origins:
    allowed_origins.append(WEBAPP_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(market_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": ENVIRONMENT}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api_server:app",
        host="0.0.0.0",
        port=8000,
        reload=ENVIRONMENT == "development",
    )
