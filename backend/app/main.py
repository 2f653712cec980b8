import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

from app.core.config import settings
from app.routers import coupons, packages, redemptions
from app.services.main_backend_client import MainBackendError

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Packages", "description": "Browse packages, quote and redeem them."},
    {"name": "Coupons", "description": "Manage coupons and check their eligibility."},
    {"name": "Redemptions", "description": "Inspect redemptions, All Access usage and friend passes."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Tenant backend for the Spin8 Studio dashboard. "
        "Proxies packages, coupons and redemptions to the main backend "
        "and prices package redemptions."
    ),
    openapi_tags=OPENAPI_TAGS,
)

CORS_ALLOWED_ORIGINS = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    # Preflights from unlisted origins fall through to CORSMiddleware, which rejects them.
    origin = request.headers.get("origin")
    if request.method == "OPTIONS" and origin in CORS_ALLOWED_ORIGINS:
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


@app.exception_handler(MainBackendError)
async def main_backend_error_handler(request: Request, exc: MainBackendError) -> JSONResponse:
    """Pass main backend client errors through; server errors become 502."""
    if 400 <= exc.status_code < 500:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
    logger.error("Main backend error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=502, content={"detail": "Main backend unavailable"})


app.include_router(packages.router, prefix="/v1/packages", tags=["Packages"])
app.include_router(coupons.router, prefix="/v1/coupons", tags=["Coupons"])
app.include_router(redemptions.router, prefix="/v1/redemptions", tags=["Redemptions"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
