import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./quick_accounting.db")

# All resource routers are mounted below this prefix
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")

# Comma-separated list of origins allowed to call the API from a browser
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:5173,http://localhost:3000",
    ).split(",")
    if origin.strip()
]

SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"

# Pagination bounds for list endpoints that accept ?take=
CALCULATIONS_DEFAULT_TAKE = 50
CALCULATIONS_MAX_TAKE = 200
ACTIVITIES_DEFAULT_TAKE = 100
ACTIVITIES_MAX_TAKE = 500

# Dashboard window sizes
DASHBOARD_RECENT_CALCULATIONS = 100
DASHBOARD_RECENT_ACTIVITIES = 20
DASHBOARD_MAX_APPOINTMENTS = 20
DASHBOARD_MAX_TASKS = 100

# Enables Strict-Transport-Security on responses
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development").lower() == "production"
