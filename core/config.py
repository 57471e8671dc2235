from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "School E-Voting Console API"
    ENV: str = "development"

    # -------------------------------------------------
    # Console Frontend Domains
    # -------------------------------------------------
    CONSOLE_DOMAIN: Optional[str] = Field(None, env="CONSOLE_DOMAIN")

    CONSOLE_DEV_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # E-Voting REST Backend
    # -------------------------------------------------
    BACKEND_API_URL: Optional[str] = Field("http://localhost:5000", env="BACKEND_API_URL")
    BACKEND_TIMEOUT_SECONDS: int = Field(15, env="BACKEND_TIMEOUT_SECONDS")
    BACKEND_SESSION_PATH: str = "/api/auth/me"
    BACKEND_ELECTION_STATUS_PATH: str = "/api/election/status"

    # -------------------------------------------------
    # Election Clock
    # -------------------------------------------------
    # Ghana time is UTC+0; civil fields are mapped straight onto UTC.
    ELECTION_DISPLAY_TIMEZONE: str = "Africa/Accra"
    DEFAULT_START_TIME: str = "08:00"
    DEFAULT_END_TIME: str = "16:00"

    COUNTDOWN_TICK_SECONDS: int = Field(1, env="COUNTDOWN_TICK_SECONDS", description="Countdown recompute cadence (default: 1)")
    ELECTION_REFRESH_SECONDS: int = Field(30, env="ELECTION_REFRESH_SECONDS", description="Election record re-fetch cadence (default: 30)")
    ELECTION_MONITOR_ENABLED: bool = Field(True, env="ELECTION_MONITOR_ENABLED")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

# 1) add the console's own domain
if settings.CONSOLE_DOMAIN:
    domain = settings.CONSOLE_DOMAIN
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

# 2) local dev servers outside production
if settings.ENV != "production":
    cors_origins.extend([d.rstrip("/") for d in settings.CONSOLE_DEV_ORIGINS])

# 3) remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
