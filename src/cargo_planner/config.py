# src/cargo_planner/config.py

"""Configuration loader for the cargo planner."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

AMADEUS_TEST_URL = "https://test.api.amadeus.com"
AMADEUS_PRODUCTION_URL = "https://api.amadeus.com"


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str = ""
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_env: str = "test"  # "test" | "production"
    http_timeout_seconds: int = 20
    airport_search_radius_miles: float = 50.0
    flight_search_days: int = 3
    log_level: str = "INFO"

    @property
    def amadeus_base_url(self) -> str:
        return AMADEUS_TEST_URL if self.amadeus_env == "test" else AMADEUS_PRODUCTION_URL

    def missing(self) -> List[str]:
        """Names of credentials that are not configured."""
        missing = []
        if not self.google_maps_api_key:
            missing.append("GOOGLE_MAPS_API_KEY")
        if not self.amadeus_client_id:
            missing.append("AMADEUS_CLIENT_ID")
        if not self.amadeus_client_secret:
            missing.append("AMADEUS_CLIENT_SECRET")
        return missing


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv(env_file)

    return Settings(
        google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY", "").strip(),
        amadeus_client_id=os.getenv("AMADEUS_CLIENT_ID", "").strip(),
        amadeus_client_secret=os.getenv("AMADEUS_CLIENT_SECRET", "").strip(),
        amadeus_env=os.getenv("AMADEUS_ENV", "test").strip().lower(),
        http_timeout_seconds=int(os.getenv("HTTP_TIMEOUT_SECONDS", "20")),
        airport_search_radius_miles=float(os.getenv("AIRPORT_SEARCH_RADIUS_MILES", "50")),
        flight_search_days=int(os.getenv("FLIGHT_SEARCH_DAYS", "3")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
