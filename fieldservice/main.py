import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import all models to ensure they're registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import ADMIN_PASSWORD, ADMIN_USERNAME, ALLOWED_ORIGINS
from .database import Base, SessionLocal, engine
from .domain.activities import router as activities_router
from .domain.calendar import router as calendar_router
from .domain.clients import router as clients_router
from .domain.collaborators import router as collaborators_router
from .domain.collaborators.service import CollaboratorService
from .domain.dashboard import router as dashboard_router
from .domain.jobs import router as jobs_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    if ADMIN_USERNAME and ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            CollaboratorService(db).ensure_admin(ADMIN_USERNAME, ADMIN_PASSWORD)
        finally:
            db.close()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Field Service API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422, content={"detail": jsonable_errors(exc.errors())}
    )


def jsonable_errors(errors: list) -> list:
    """Pydantic error contexts may hold exception objects; keep them printable"""
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        cleaned.append(error)
    return cleaned


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(collaborators_router)
app.include_router(clients_router)
app.include_router(jobs_router)
app.include_router(activities_router)
app.include_router(calendar_router)
app.include_router(dashboard_router)


@app.get("/")
def root():
    return {"message": "Field Service API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
