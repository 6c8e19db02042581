"""Main FastAPI application entry point."""

from fastapi import FastAPI

from goldfish.api import sim
from goldfish.middleware.logging_middleware import RequestLoggingMiddleware

app = FastAPI(
    title="Goldfish Simulator API",
    description="Goldfish a deck list and measure how reliably key cards are drawn",
    version="0.1.0",
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(sim.router, prefix="/sim", tags=["simulation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Goldfish Simulator API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
