from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from flatmate.api.api import api_router
from flatmate.core.config import get_settings
from flatmate.core.database import Base, engine
from flatmate.core.errors import FlatmateError
from flatmate.core.logging import get_logger
from flatmate.core.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from flatmate.core.rate_limit import limiter
from flatmate.models import audit, contact_message, listing, profile, saved_listing  # noqa: F401

settings = get_settings()
LOGGER = get_logger("app")

app = FastAPI(
    title=settings.PROJECT_NAME,
    docs_url="/docs" if settings.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if settings.ENABLE_API_DOCS else None,
    openapi_url="/openapi.json" if settings.ENABLE_API_DOCS else None,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    # Bearer tokens travel in headers, never cookies.
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "x-request-id"],
)


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(bind=engine)
    LOGGER.info("startup environment=%s", settings.ENVIRONMENT)


@app.exception_handler(FlatmateError)
async def domain_error_handler(request: Request, exc: FlatmateError):
    LOGGER.info("domain_error path=%s code=%s detail=%s", request.url.path, exc.code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


@app.get("/health")
@limiter.limit("60/minute")
def health(request: Request):
    return {"status": "ok"}


@app.get("/api", include_in_schema=False)
def api_root():
    return {
        "name": settings.PROJECT_NAME,
        "version": "v1",
        "base": settings.API_V1_STR,
        "health": "/health",
    }


app.include_router(api_router, prefix=settings.API_V1_STR)
