"""
commercetools API Client - Thin HTTP Wrapper
=============================================

ARCHITECTURAL DECISION:
- Plain `requests` calls against the commercetools HTTP API
- OAuth client-credentials token fetched lazily and reused until it expires
- Only the custom-object endpoints this service needs are exposed
- No retries: failures surface to the caller unchanged

USAGE:
    client = get_api_client()
    client.post_custom_object({"container": "c", "key": "k", "value": {}})
    response = client.get_custom_object("c", "k")
    print(response.body)
"""

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from urllib.parse import quote

import requests

from ..config import CommercetoolsSettings, get_settings

logger = logging.getLogger(__name__)


class CommercetoolsApiError(Exception):
    """Raised when the commercetools API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass
class ApiResponse:
    """Response of a read call. `body` is None when the resource does not exist."""
    status_code: int
    body: Optional[dict]


class CommercetoolsClient:
    """
    Minimal commercetools client for custom objects.

    The token is requested on first use and refreshed shortly before it
    expires. A session is kept per client so connections are reused.
    """

    # Refresh the token this many seconds before it actually expires
    TOKEN_EXPIRY_MARGIN = 60

    def __init__(self, settings: CommercetoolsSettings, session: Optional[requests.Session] = None):
        self._settings = settings
        self._session = session or requests.Session()
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    @property
    def project_url(self) -> str:
        return f"{self._settings.api_url.rstrip('/')}/{self._settings.project_key}"

    # ── Auth ───────────────────────────────────────────────────────

    def _get_token(self) -> str:
        """Return a valid bearer token, requesting a new one when needed."""
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        data = {"grant_type": "client_credentials"}
        if self._settings.scope:
            data["scope"] = self._settings.scope

        response = self._session.post(
            f"{self._settings.auth_url.rstrip('/')}/oauth/token",
            auth=(self._settings.client_id, self._settings.client_secret),
            data=data,
            timeout=self._settings.timeout_seconds,
        )
        if not response.ok:
            raise CommercetoolsApiError(response.status_code, self._error_message(response))

        payload = response.json()
        self._token = payload["access_token"]
        expires_in = int(payload.get("expires_in", 0))
        self._token_expires_at = time.monotonic() + max(expires_in - self.TOKEN_EXPIRY_MARGIN, 0)
        logger.debug("Obtained commercetools access token")
        return self._token

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._get_token()}",
            "Content-Type": "application/json",
        }

    # ── Custom objects ─────────────────────────────────────────────

    def post_custom_object(self, body: dict) -> dict:
        """
        Create or update a custom object.

        Including `version` in the body makes the write conditional on the
        stored version (optimistic concurrency).
        """
        response = self._session.post(
            f"{self.project_url}/custom-objects",
            headers=self._headers(),
            json=body,
            timeout=self._settings.timeout_seconds,
        )
        if not response.ok:
            raise CommercetoolsApiError(response.status_code, self._error_message(response))
        return response.json()

    def get_custom_object(self, container: str, key: str) -> ApiResponse:
        """Fetch a custom object by container and key."""
        response = self._session.get(
            f"{self.project_url}/custom-objects/{quote(container, safe='')}/{quote(key, safe='')}",
            headers=self._headers(),
            timeout=self._settings.timeout_seconds,
        )
        if response.status_code == 404:
            return ApiResponse(status_code=404, body=None)
        if not response.ok:
            raise CommercetoolsApiError(response.status_code, self._error_message(response))
        return ApiResponse(status_code=response.status_code, body=response.json())

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the API error message, falling back to the raw body."""
        try:
            data = response.json()
            if isinstance(data, dict):
                message = data.get("message") or data.get("error_description") or data.get("error")
                if message:
                    return str(message)
        except ValueError:
            pass
        return response.text or f"HTTP {response.status_code}"


@lru_cache(maxsize=1)
def get_api_client() -> CommercetoolsClient:
    """Get the shared API client built from settings."""
    return CommercetoolsClient(get_settings().commercetools)
