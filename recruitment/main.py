import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from recruitment.config import settings
from recruitment.core.rate_limiter import limit_for, rate_limiter
from recruitment.database import engine, init_db
from recruitment.logging_config import setup_logging
from recruitment.routers import (
    applicants,
    applications,
    auth,
    configuration,
    dashboard,
    jobs,
    notifications,
    profile,
    reference,
    users,
)

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"
PLACEHOLDER_DB_CREDENTIALS = "username:password@"

app = FastAPI(
    title="Recruitment Portal API",
    description="Job postings, applicant profiles, applications and the HR review pipeline.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(jobs.router)
app.include_router(applicants.router)
app.include_router(applications.router)
app.include_router(profile.router)
app.include_router(reference.router)
app.include_router(configuration.router)
app.include_router(notifications.router)
app.include_router(dashboard.router)

app.mount(
    settings.upload_url_prefix.rstrip("/") or "/uploads",
    StaticFiles(directory=Path(settings.upload_dir), check_dir=False),
    name="uploads",
)


def error_body(message: str, **extra) -> dict:
    return {"success": False, "error": message, **extra}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    detail = exc.detail
    if isinstance(detail, dict):
        extra = {k: v for k, v in detail.items() if k != "message"}
        content = error_body(str(detail.get("message", "")), **extra)
    else:
        content = error_body(str(detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        message = str(first.get("msg", message))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        elif first.get("loc"):
            field = ".".join(str(p) for p in first["loc"] if p not in ("body", "query", "path", "form"))
            if field:
                message = f"{field}: {message}"
    return JSONResponse(status_code=400, content=error_body(message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    if request.method == "OPTIONS":
        return await call_next(request)

    path = request.url.path
    limit = limit_for(request.method, path, settings)
    if limit is not None and limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = rate_limiter.allow(f"{client_ip}:{path}", limit=limit, window_seconds=60)
        if not allowed:
            return JSONResponse(
                status_code=429,
                content=error_body("Too many requests. Please retry shortly."),
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


def check_production_settings() -> None:
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if PLACEHOLDER_DB_CREDENTIALS in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if PLACEHOLDER_DB_CREDENTIALS in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")


@app.on_event("startup")
def on_startup():
    logger.info("Starting Recruitment Portal API")
    check_production_settings()
    init_db()


@app.get("/")
def root():
    return {"message": "Recruitment Portal API. See /docs for the endpoint reference."}
