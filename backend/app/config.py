"""
FitTrack Configuration
======================
All environment variables in one place. Pydantic Settings validates
types at startup so a bad value fails fast instead of on the first request.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- Supabase ---
    supabase_url: str = "http://localhost:54321"
    supabase_service_key: str = ""  # service_role key for backend operations

    # --- Tables ---
    exercises_table: str = "exercises"
    users_table: str = "users"
    contacts_table: str = "contacts"

    # --- Sessions ---
    # Signs the session cookie. Override in every deployed environment.
    session_secret: str = "change-this-secret"
    session_cookie_name: str = "sessionId"
    session_max_age_seconds: int = 60 * 60 * 24  # 1 day
    session_cookie_secure: bool = False  # True only behind HTTPS

    # --- App settings ---
    project_name: str = "FitTrack"
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # --- Startup seeding ---
    # Inserts the default exercises into an empty table and makes sure an
    # admin account exists. Clear the password to skip the admin seed.
    seed_on_startup: bool = True
    bootstrap_admin_username: str = "admin"
    bootstrap_admin_password: str = "adminpass"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
