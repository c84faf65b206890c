"""
Application configuration with environment-specific secrets management.

Supported environment files (loaded in order of precedence):
1. .env.{ENVIRONMENT} (e.g., .env.production, .env.development)
2. .env (fallback)

Provider credentials:
- CFBD_API_KEY (schedule provider, bearer header)
- ODDS_API_KEY (odds provider, query-param key)
- REDDIT_CLIENT_ID / REDDIT_CLIENT_SECRET (discussion provider, client credentials)
"""
import os
import logging
from pathlib import Path
from typing import Literal, List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root is two levels up from this file (betbuzz/core/config.py)
PROJECT_ROOT = Path(__file__).parent.parent.parent

logger = logging.getLogger(__name__)


def _load_env_file() -> Path:
    """
    Pick the environment file for the current ENVIRONMENT.

    Loads in order of precedence:
    1. .env.{ENVIRONMENT}
    2. .env (fallback, may not exist)
    """
    environment = os.getenv("ENVIRONMENT", "development")

    env_file = PROJECT_ROOT / f".env.{environment}"
    if env_file.exists():
        logger.info(f"Loading environment from {env_file.name}")
        return env_file

    default_env = PROJECT_ROOT / ".env"
    if default_env.exists():
        logger.info(f"Loading environment from .env (environment: {environment})")
    return default_env


class Settings(BaseSettings):
    """Application settings with environment-specific configuration."""

    model_config = SettingsConfigDict(
        env_file=str(_load_env_file()),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Application
    APP_NAME: str = "Bet Buzz API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8787

    # Schedule provider (CollegeFootballData)
    CFBD_API_KEY: str = ""
    CFBD_API_BASE: str = "https://api.collegefootballdata.com"
    DEFAULT_SEASON_YEAR: int = 2025
    DEFAULT_SEASON_WEEK: int = 1
    SEASON_TYPE: str = "regular"

    # Odds provider (The Odds API)
    ODDS_API_KEY: str = ""
    ODDS_API_BASE: str = "https://api.the-odds-api.com/v4"
    ODDS_SPORT_KEY: str = "americanfootball_ncaaf"
    ODDS_API_REGIONS: str = "us"
    ODDS_API_MARKETS: str = "h2h,spreads,totals"
    ODDS_API_BOOKMAKERS: str = "draftkings,fanduel,betmgm,pointsbetus"
    ODDS_API_MONTHLY_QUOTA: int = 20000

    # Discussion provider (Reddit)
    REDDIT_CLIENT_ID: str = ""
    REDDIT_CLIENT_SECRET: str = ""
    REDDIT_TOKEN_URL: str = "https://www.reddit.com/api/v1/access_token"
    REDDIT_API_BASE: str = "https://oauth.reddit.com"
    REDDIT_USER_AGENT: str = "bet-buzz/0.1"
    REDDIT_SEARCH_LIMIT: int = 10
    CHATTER_DEFAULT_QUERY: str = "college football betting"
    SNIPPET_MAX_CHARS: int = 300
    TOKEN_REFRESH_MARGIN_SECONDS: int = 60

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # CORS - comma-separated string for env var parsing
    CORS_ORIGINS_STR: str = ""

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Get CORS origins with environment-aware defaults."""
        if self.CORS_ORIGINS_STR:
            origins = [o.strip() for o in self.CORS_ORIGINS_STR.split(",") if o.strip()]
            if origins:
                if self.is_production() and "*" in origins:
                    logger.warning(
                        "Wildcard CORS origins (*) are not allowed in production. "
                        "Set explicit origins in CORS_ORIGINS_STR."
                    )
                    return []
                return origins

        if self.is_production():
            logger.warning("CORS_ORIGINS_STR not set in production; cross-origin requests are blocked.")
            return []
        # The browser front end is served from arbitrary local ports during development
        return ["*"]

    @property
    def odds_bookmakers(self) -> List[str]:
        return [b.strip() for b in self.ODDS_API_BOOKMAKERS.split(",") if b.strip()]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    def validate_required_secrets(self) -> List[str]:
        """
        Validate that provider credentials are set.

        Returns:
            List of missing secret names (empty if all present)
        """
        missing = []
        if not self.CFBD_API_KEY:
            missing.append("CFBD_API_KEY")
        if not self.ODDS_API_KEY:
            missing.append("ODDS_API_KEY")
        if not self.REDDIT_CLIENT_ID or not self.REDDIT_CLIENT_SECRET:
            missing.append("REDDIT_CLIENT_ID/REDDIT_CLIENT_SECRET")
        return missing


settings = Settings()

# Validate secrets on startup
missing_secrets = settings.validate_required_secrets()
if missing_secrets:
    logger.warning(f"Missing provider secrets for {settings.ENVIRONMENT}: {', '.join(missing_secrets)}")
    if settings.is_production():
        raise ValueError(
            f"Cannot start in production with missing secrets: {', '.join(missing_secrets)}. "
            f"Set these environment variables in .env.production"
        )
