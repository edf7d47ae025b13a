"""
SnackSmart storefront API: catalog, cart, coupons, accounts and
preference-based recommendations over a relational store.
Deployment-ready: CORS, configurable host/port via env.

Usage
-----
uvicorn main:app --host 0.0.0.0 --port 4000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snacksmart.core.config import get_settings
from snacksmart.core.errors import StorefrontError
from snacksmart.core.logger import Logger
from snacksmart.db.session import create_all
from snacksmart.routers import auth, cart, coupons, preferences, products

settings = get_settings()
_logger = Logger(name="snacksmart.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.is_sqlite:
        # Local dev / tests; Postgres schema comes from migrations/
        create_all()
    _logger.info("Starting Application...")
    yield
    _logger.info("Shutting Down Application...")


app = FastAPI(
    title="SnackSmart API",
    description="Storefront catalog, cart, coupons and preference-based recommendations.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    _logger.exception("unhandled error", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


app.include_router(auth.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(cart.router, prefix="/api")
app.include_router(coupons.router, prefix="/api")
app.include_router(preferences.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
