"""Application configuration module."""

import os
from datetime import timedelta


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    APP_ENV = os.getenv("APP_ENV", "development")
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///clinic.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Session cookie
    AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "session_token")
    AUTH_COOKIE_SECURE = _env_flag("AUTH_COOKIE_SECURE", APP_ENV == "production")
    SESSION_LIFETIME = timedelta(days=7)

    # Route gate
    LOGIN_PATH = "/login"
    LANDING_PATH = "/dashboard"
    PUBLIC_PATH_PREFIXES = ("/login", "/signup")
    GATE_EXEMPT_PREFIXES = ("/static", "/api", "/health", "/favicon.ico")

    # Accounts
    MIN_PASSWORD_LENGTH = 6
    ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
