"""
FastAPI Application Entry Point.
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import router
from .config import Settings, settings
from .errors import NotFoundError, StoreError, TripPlannerError, ValidationError
from .services import RecordStore, build_services, create_record_store

logger = logging.getLogger(__name__)


def _status_for(error: TripPlannerError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 422
    if isinstance(error, StoreError):
        return 502
    return 500


async def handle_trip_planner_error(request: Request, exc: TripPlannerError):
    """Surface service errors as JSON with the error's message."""
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def create_app(
    store: Optional[RecordStore] = None,
    config: Optional[Settings] = None
) -> FastAPI:
    """Build the app around a record store (configured one when omitted)."""
    config = config or settings
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    store = store or create_record_store(config)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await store.close()
    
    app = FastAPI(
        title="Trip Planner",
        description="Trips, day-by-day timelines, packing lists and trip statistics",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.services = build_services(store, config)
    
    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.add_exception_handler(TripPlannerError, handle_trip_planner_error)
    
    # Include API routes
    app.include_router(router)
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "record_store": type(store).__name__
        }
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "trip_planner.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
