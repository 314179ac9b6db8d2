"""
Thin client for the monitoring API's v1 resource endpoints.

Only the two calls the importer needs are provided:
    - list(resource, **filters): GET /api/v1/<resource>
    - show(resource, id): GET /api/v1/<resource>/<id>

Usage:
    api = Api.from_env()
    monitors = api.list("monitor", with_downtimes=False, monitor_tags=["team:core"])
    dash = api.show("dash", 42)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Union

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.datadoghq.com"


class ApiError(Exception):
    """Raised for any non-successful API response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class Api:
    """
    Read-only API client backed by a requests.Session.

    Authentication headers are set once on the session and reused for every
    request.
    """

    def __init__(
        self,
        api_key: str,
        app_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key
            app_key: Application key
            api_url: Base URL of the API host
            timeout: Seconds to wait for each response
            session: Optional pre-configured session (e.g., for proxies)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "DD-API-KEY": api_key,
                "DD-APPLICATION-KEY": app_key,
                "Content-Type": "application/json",
            }
        )

    @classmethod
    def from_env(cls) -> "Api":
        """
        Create a client from DATADOG_API_KEY, DATADOG_APP_KEY and DATADOG_API_URL.

        Raises:
            ValueError: If a key is not set
        """
        api_key = os.getenv("DATADOG_API_KEY", "")
        app_key = os.getenv("DATADOG_APP_KEY", "")
        if not api_key:
            raise ValueError("DATADOG_API_KEY is not set")
        if not app_key:
            raise ValueError("DATADOG_APP_KEY is not set")
        return cls(api_key, app_key, api_url=os.getenv("DATADOG_API_URL", DEFAULT_API_URL))

    def list(
        self,
        resource: str,
        with_downtimes: bool = True,
        name: Optional[str] = None,
        monitor_tags: Optional[List[str]] = None,
    ) -> Union[List[Dict[str, Any]], Dict[str, List[Dict[str, Any]]]]:
        """
        List all resources of a type.

        Monitors come back as a list; legacy dashboards come back wrapped in a
        single-key mapping (e.g., {"dashes": [...]}).
        """
        params: Dict[str, Any] = {"with_downtimes": str(with_downtimes).lower()}
        if name:
            params["name"] = name
        if monitor_tags:
            params["monitor_tags"] = ",".join(monitor_tags)
        return self._request("GET", f"/api/v1/{resource}", params=params)

    def show(self, resource: str, id: Union[int, str]) -> Dict[str, Any]:
        """Fetch a single resource by id."""
        return self._request("GET", f"/api/v1/{resource}/{id}")

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug(f"{method} {path} {params or ''}")
        response = self._session.request(method, f"{self.api_url}{path}", params=params, timeout=self.timeout)
        if not response.ok:
            raise ApiError(
                f"Error {response.status_code} during {method} {path}\n{response.text}",
                status_code=response.status_code,
            )
        return response.json()
