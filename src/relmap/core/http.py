"""HTTP client for the platform API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from relmap.core.config import ApiSettings
from relmap.exceptions import ApiConnectionError, ApiRequestError, ApiResponseError

logger = logging.getLogger(__name__)


class ApiClient:
    """Sends JSON requests to the platform API.

    A ``requests.Session`` is created on first use so cookies set by the API
    (session authentication) are carried across calls.
    """

    def __init__(
        self,
        settings: ApiSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection settings (defaults to ApiSettings.from_env())
            session: Pre-configured session to use instead of creating one
        """
        self._settings = settings or ApiSettings.from_env()
        self._session = session
        self._owns_session = session is None

    @property
    def settings(self) -> ApiSettings:
        """Connection settings in use."""
        return self._settings

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers["Accept"] = "application/json"
            if self._settings.token:
                self._session.headers["Authorization"] = f"Bearer {self._settings.token}"
        return self._session

    def url_for(self, path: str) -> str:
        """Absolute URL for an API path."""
        return f"{self._settings.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP method
            path: API path (e.g. "/api/invoices")
            json: Optional JSON body
            params: Optional query-string parameters

        Returns:
            Decoded JSON body, or None when the body is empty

        Raises:
            ApiConnectionError: If the API cannot be reached
            ApiRequestError: If the API answers with a non-success status
            ApiResponseError: If the body is not valid JSON
        """
        method = method.upper()
        logger.debug(f"{method} {path} params={params or {}}")
        try:
            response = self.session.request(
                method,
                self.url_for(path),
                json=json,
                params=params or None,
                timeout=self._settings.timeout,
            )
        except requests.RequestException as e:
            raise ApiConnectionError(method, path, str(e)) from e

        if not response.ok:
            body = response.text or response.reason or ""
            raise ApiRequestError(method, path, response.status_code, body)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(method, path, str(e)) from e

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Send a GET request."""
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        """Send a POST request with a JSON body."""
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        """Send a PATCH request with a JSON body."""
        return self.request("PATCH", path, json=json)

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None

    def __enter__(self) -> ApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
