import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./fieldservice.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Bearer session lifetime in seconds (default one day)
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", "86400"))

# Frontend base URL (mobile and desktop clients)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")

# Calendar working hours shown as hourly rows in day/week views (inclusive)
WORK_DAY_START_HOUR = int(os.getenv("WORK_DAY_START_HOUR", "8"))
WORK_DAY_END_HOUR = int(os.getenv("WORK_DAY_END_HOUR", "19"))

# Display name used when a job's client cannot be resolved
UNKNOWN_CLIENT_LABEL = os.getenv("UNKNOWN_CLIENT_LABEL", "Unknown Client")

# Default API base URL for the calendar CLI
FIELDSERVICE_API_URL = os.getenv("FIELDSERVICE_API_URL", "http://localhost:8000")

# Bootstrap owner account, created on startup when no collaborator exists yet
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
