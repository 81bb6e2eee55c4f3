from app.database.database import create_db_and_tables
from app.utils.logger import setup_logging
from contextlib import asynccontextmanager
from app.core.config import get_settings, parse_comma_separated_origins
from app.core.error_handlers import register_exception_handlers
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routers import admin_verification, auth, notification, verification
from app.services.storage import storage_service
from app.core.telemetry import setup_telemetry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Perform application startup tasks before the FastAPI app begins serving requests.

    Sets up logging, creates the database tables, makes sure the verification
    bucket exists and initializes telemetry. An unreachable object store is
    logged but does not prevent startup; uploads fail until it comes back.
    """
    logger = setup_logging()
    create_db_and_tables()
    try:
        storage_service.ensure_bucket_exists()
    except Exception as e:
        logger.error(f"Could not prepare verification bucket: {e}")
    setup_telemetry(app)
    yield


app = FastAPI(
    title="Job Board API",
    description="RESTful API for the job board: accounts, employer verification and notifications",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        str(origin).rstrip("/")
        for origin in parse_comma_separated_origins(get_settings().BACKEND_CORS_ORIGINS)
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", include_in_schema=False)
def health_check():
    """
    Provide the application's liveness state for health checks.

    Returns:
        dict: A mapping with key "status" and value "ok" indicating the service is healthy.
    """
    return {"status": "ok"}


app.include_router(auth.router)
app.include_router(verification.router)
app.include_router(admin_verification.router)
app.include_router(notification.router)
