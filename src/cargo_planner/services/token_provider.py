# src/cargo_planner/services/token_provider.py

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float  # seconds since epoch


class TokenProvider(ABC):

    @abstractmethod
    def get_token(self) -> AccessToken:
        ...

    def invalidate(self) -> None:
        """Forget any cached token so the next get_token() fetches a new one."""


class ClientCredentialsTokenProvider(TokenProvider):
    """
    OAuth2 client-credentials token provider with in-memory caching.

    The cached token is reused until `refresh_margin_seconds` before it expires.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        timeout_seconds: int = 20,
        refresh_margin_seconds: int = 300,
        clock: Callable[[], float] = time.time,
        session: Optional[requests.Session] = None,
    ):
        self.token_url = token_url
        self.client_id = (client_id or "").strip()
        self.client_secret = (client_secret or "").strip()
        self.timeout_seconds = timeout_seconds
        self.refresh_margin_seconds = refresh_margin_seconds
        self._clock = clock
        self._http = session or requests.Session()

        if not self.client_id or not self.client_secret:
            raise ValueError(
                "Missing Amadeus credentials. Set AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET."
            )

        self._token: Optional[AccessToken] = None

    def _is_valid(self) -> bool:
        return self._token is not None and (
            self._clock() < self._token.expires_at - self.refresh_margin_seconds
        )

    def _fetch(self) -> AccessToken:
        resp = self._http.post(
            self.token_url,
            data={"grant_type": "client_credentials"},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            auth=(self.client_id, self.client_secret),
            timeout=self.timeout_seconds,
        )

        # Helpful error detail without leaking secrets
        if resp.status_code != 200:
            raise requests.HTTPError(
                f"Token request failed: {resp.status_code} {resp.text}",
                response=resp,
            )

        payload = resp.json()
        expires_in = int(payload.get("expires_in", 1800))
        logger.info(f"Access token refreshed (expires in {expires_in}s)")
        return AccessToken(
            value=payload["access_token"],
            expires_at=self._clock() + expires_in,
        )

    def get_token(self) -> AccessToken:
        if not self._is_valid():
            self._token = self._fetch()
        return self._token

    def invalidate(self) -> None:
        self._token = None
