"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

from typing import Any

import httpx

from getui_rest.kernel.errors import (
    ExternalServiceError,
    SerializationError,
    TimeoutError as AppTimeoutError,
)


class HttpxHttpClient:
    """Thin async httpx wrapper returning decoded JSON objects.

    Transport failures are mapped to infrastructure errors; nothing is
    retried here.
    """

    def __init__(self, base_url: str = "", timeout: float = 10.0, **kwargs: Any) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        response = await self._send(method, url, **kwargs)
        try:
            payload = response.json()
        except ValueError as exc:
            raise SerializationError(
                f"Non-JSON response from {method} {url}", payload_type="json", cause=exc
            ) from exc
        if not isinstance(payload, dict):
            raise SerializationError(
                f"Expected a JSON object from {method} {url}, got {type(payload).__name__}",
                payload_type="json",
            )
        return payload

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.TimeoutException as exc:
            raise AppTimeoutError(f"HTTP request timed out: {method} {url}") from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                service=url,
                message=f"HTTP {exc.response.status_code} from {method} {url}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc)) from exc


__all__ = ["HttpxHttpClient"]
