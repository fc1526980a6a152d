"""
Runtime configuration read from the environment (and a local .env file).

Values are looked up on every call so tests and the server entry point can
adjust the environment before the first request.
"""

import os
from typing import List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

REQUIRED_ENV_VARS = ["DATABASE_URL", "DATABASE_NAME", "JWT_SECRET"]

PRODUCTION_ORIGIN = "https://jeep-booking-frontend.vercel.app"
DEVELOPMENT_ORIGIN = "http://localhost:3000"


def is_production() -> bool:
    return os.getenv("APP_ENV", "development").lower() == "production"


def get_jwt_secret() -> Optional[str]:
    return os.getenv("JWT_SECRET")


def get_allowed_origins() -> List[str]:
    override = os.getenv("FRONTEND_ORIGIN")
    if override:
        return [o.strip() for o in override.split(",") if o.strip()]
    return [PRODUCTION_ORIGIN if is_production() else DEVELOPMENT_ORIGIN]


def get_uploads_dir() -> str:
    override = os.getenv("UPLOADS_DIR")
    if override:
        return override
    if is_production():
        return "/tmp/Uploads"
    return os.path.join(os.getcwd(), "Uploads")


def get_port() -> int:
    return int(os.getenv("PORT", 8000))


def validate_environment() -> List[str]:
    """Return the names of required variables that are not set."""
    return [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]


def get_seed_admin() -> Tuple[Optional[str], Optional[str]]:
    return os.getenv("ADMIN_USERNAME"), os.getenv("ADMIN_PASSWORD")
