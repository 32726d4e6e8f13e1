import json
from typing import Any

import httpx

from raptor.exceptions import APIError, MalformedResponseError, NetworkError
from raptor.logging.logger import Log
from raptor.transport.base import BaseTransport


class HttpTransport(BaseTransport):
    """Transport adapter built on a shared httpx.Client."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: float,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout_seconds)
        self._headers = {"Authorization": f"Bearer {api_key}"}

    def send(
        self,
        method: str,
        path: str,
        *,
        context: str,
        data: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        json_body: dict[str, Any] | None = None,
        query: dict[str, str] | None = None,
        expect_body: bool = True,
    ) -> Any:
        Log.debug(f"{method} {path} ({context})")
        try:
            response = self._client.request(
                method,
                path,
                headers=self._headers,
                params=query or None,
                data=data or None,
                files=files or None,
                json=json_body,
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            Log.warning(f"Network error during {context}: {exc}")
            raise NetworkError(f"Network error during {context}: {exc}") from exc

        if not response.is_success:
            raise self._api_error(response, context)

        if not expect_body:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedResponseError(
                f"Failed to parse {context} response: {exc}"
            ) from exc

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _api_error(response: httpx.Response, context: str) -> APIError:
        try:
            body: Any = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = {}
        detail = body.get("detail") if isinstance(body, dict) else None
        reason = detail if detail else (response.reason_phrase or str(response.status_code))
        Log.warning(f"{context} failed with HTTP {response.status_code}: {reason}")
        return APIError(f"{context} failed: {reason}", response.status_code, body)
