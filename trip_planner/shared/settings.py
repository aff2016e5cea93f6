"""
Environment-backed settings.

Reads provider credentials and service options from the environment
(after loading a local .env file) and validates them at startup.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = (
    "OPENAI_API_KEY",
    "GOOGLE_MAPS_API_KEY",
    "AIRBNB_MCP_ENDPOINT",
)


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings.

    Attributes:
        openai_api_key: Key for the LLM provider (POIs, transport mode)
        openai_model: Chat model used by the LLM advisors
        google_maps_api_key: Key for geocoding and directions
        airbnb_mcp_endpoint: HTTP endpoint of the lodging search server
        mongodb_uri: Optional Mongo URI; in-memory trip storage when unset
        mongodb_db: Mongo database name
        app_env: Deployment environment ("development", "production", ...)
        agent_timeout_ms: Overall planning timeout in milliseconds
    """

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    google_maps_api_key: Optional[str] = None
    airbnb_mcp_endpoint: Optional[str] = None
    mongodb_uri: Optional[str] = None
    mongodb_db: str = "trip_planner"
    app_env: str = "development"
    agent_timeout_ms: int = 60000

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        openai_api_key=os.environ.get("OPENAI_API_KEY"),
        openai_model=os.environ.get("OPENAI_MODEL", "gpt-4.1-mini"),
        google_maps_api_key=os.environ.get("GOOGLE_MAPS_API_KEY"),
        airbnb_mcp_endpoint=os.environ.get("AIRBNB_MCP_ENDPOINT"),
        mongodb_uri=os.environ.get("MONGODB_URI") or None,
        mongodb_db=os.environ.get("MONGODB_DB", "trip_planner"),
        app_env=os.environ.get("APP_ENV", "development"),
        agent_timeout_ms=int(os.environ.get("AGENT_TIMEOUT_MS", "60000")),
    )


def missing_variables() -> List[str]:
    return [name for name in REQUIRED_VARIABLES if not os.environ.get(name)]


def validate_environment(settings: Optional[Settings] = None) -> None:
    """
    Fail fast when required configuration is incomplete.

    In production a missing variable raises RuntimeError; elsewhere it is
    logged as a warning so local runs with fake providers still start.

    Args:
        settings: Settings to check the environment for. Defaults to
            load_settings().

    Raises:
        RuntimeError: If variables are missing and app_env is production.
    """
    if settings is None:
        settings = load_settings()

    missing = missing_variables()
    if not missing:
        logger.info("All required environment variables are configured")
        return

    message = (
        f"Missing required environment variables: {', '.join(missing)}. "
        f"Please check your .env file."
    )
    if settings.is_production:
        raise RuntimeError(message)
    logger.warning(message)
