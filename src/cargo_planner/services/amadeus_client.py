# src/cargo_planner/services/amadeus_client.py

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from cargo_planner.config import Settings
from cargo_planner.services.token_provider import ClientCredentialsTokenProvider, TokenProvider

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"


class AmadeusClient:
    """
    Minimal Amadeus REST client. Authentication is delegated to an injected
    TokenProvider; an unexpected 401 invalidates the token and retries once.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        base_url: str,
        timeout_seconds: int = 20,
        session: Optional[requests.Session] = None,
    ):
        self.token_provider = token_provider
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._http = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AmadeusClient":
        base_url = settings.amadeus_base_url
        token_provider = ClientCredentialsTokenProvider(
            token_url=f"{base_url}{TOKEN_PATH}",
            client_id=settings.amadeus_client_id,
            client_secret=settings.amadeus_client_secret,
            timeout_seconds=settings.http_timeout_seconds,
        )
        return cls(token_provider, base_url, timeout_seconds=settings.http_timeout_seconds)

    def _auth_header(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token_provider.get_token().value}"}

    def get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        resp = self._http.get(url, params=params,
                              headers=self._auth_header(), timeout=self.timeout_seconds)

        # If token expired unexpectedly, refresh once and retry
        if resp.status_code == 401:
            logger.warning(f"Amadeus 401 on GET {path}, refreshing token and retrying")
            self.token_provider.invalidate()
            resp = self._http.get(url, params=params,
                                  headers=self._auth_header(), timeout=self.timeout_seconds)

        if resp.status_code >= 400:
            logger.error(f"Amadeus {resp.status_code} on GET {path}: {resp.text[:500]}")
        resp.raise_for_status()
        return resp.json()
