"""FastAPI application entry point."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.api.routes import portfolio, wallets

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Multi-chain wallet balance and valuation API"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(portfolio.router, prefix=f"{settings.api_prefix}/portfolio", tags=["portfolio"])
app.include_router(wallets.router, prefix=f"{settings.api_prefix}/wallets", tags=["wallets"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Multi-Chain Portfolio Tracker API",
        "version": settings.api_version,
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
