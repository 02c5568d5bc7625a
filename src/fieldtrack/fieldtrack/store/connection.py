from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_BUCKET_NAME, DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import StoreError

NETWORK_ERROR_MESSAGE = (
    "Network error: Connection to database failed. "
    "Please check your internet or Supabase configuration."
)


@dataclass
class StoreConfig:
    url: str
    api_key: str
    bucket: str = DEFAULT_BUCKET_NAME
    timeout: float = DEFAULT_REQUEST_TIMEOUT


def error_message(resp: requests.Response) -> str:
    """Pull a human-readable message out of an error response."""
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error_description", "msg", "error"):
            value = body.get(key)
            if value and isinstance(value, str):
                return value

    text = (resp.text or "").strip()
    return text or f"Request failed with status {resp.status_code}"


class StoreConnection:
    """Singleton-like HTTP session to the hosted store.

    Note: One `requests.Session` is reused for every call; no retries, no caching.
    """

    _instance: Optional["StoreConnection"] = None

    def __init__(self, config: StoreConfig, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @classmethod
    def get_instance(cls, config: StoreConfig) -> "StoreConnection":
        if cls._instance is None:
            cls._instance = StoreConnection(config)
        return cls._instance

    @property
    def config(self) -> StoreConfig:
        return self._config

    def rest_url(self, table: str) -> str:
        return f"{self._config.url.rstrip('/')}/rest/v1/{table}"

    def storage_url(self, *parts: str) -> str:
        return "/".join([f"{self._config.url.rstrip('/')}/storage/v1/object", *parts])

    def headers(self, extra: Optional[dict] = None) -> dict:
        h = {
            "apikey": self._config.api_key,
            "Authorization": f"Bearer {self._config.api_key}",
        }
        if extra:
            h.update(extra)
        return h

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        data: Any = None,
        headers: Optional[dict] = None,
    ) -> requests.Response:
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                headers=self.headers(headers),
                timeout=self._config.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise StoreError(NETWORK_ERROR_MESSAGE) from e
        except requests.RequestException as e:
            raise StoreError(str(e) or NETWORK_ERROR_MESSAGE) from e

        if resp.status_code >= 400:
            raise StoreError(error_message(resp), status_code=resp.status_code)
        return resp
