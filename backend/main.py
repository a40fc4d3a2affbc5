"""Underfloor Heating API

FastAPI backend computing underfloor-heating installation parameters and a
materials budget.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core.config import settings
from backend.api.routes import calculation, health
from underfloor.budget import ManifoldCapacityError
from underfloor.catalog import CatalogError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    try:
        calculation.service.load_catalog()
    except CatalogError as e:
        # Requests will keep failing with 500 until the catalog is fixed
        logger.error("Catalog unavailable: %s", e)
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Underfloor heating calculation, advisory and budget service",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


# ── Error envelopes ───────────────────────────────────────────


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation Error", "details": details},
    )


@app.exception_handler(ManifoldCapacityError)
async def manifold_capacity_handler(request: Request, exc: ManifoldCapacityError):
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": "Manifold Capacity Exceeded", "message": str(exc)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        message = f"Endpoint {request.method} {request.url.path} not found"
        error = "Not Found"
    else:
        message = str(exc.detail)
        error = "HTTP Error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": error, "message": message},
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.DEBUG else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal Server Error", "message": message},
    )


# Routes
app.include_router(health.router, tags=["health"])
app.include_router(
    calculation.router,
    prefix=f"{settings.API_V1_STR}/underfloor",
    tags=["underfloor"],
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend.main:app", host=settings.HOST, port=settings.PORT,
                reload=settings.RELOAD)
