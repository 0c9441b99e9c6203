from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.identity import USER_ID_HEADER

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Raised when a call to the content service fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContentApiClient:
    """Async HTTP client the views use to reach the content service."""

    def __init__(
        self,
        base_url: str,
        user_id: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_id = user_id
        self._timeout = timeout
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={USER_ID_HEADER: self._user_id},
            ) as client:
                response = await client.request(method, path, json=json, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ApiError(
                f"{method} {path} failed: {_error_detail(exc.response)}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {path} failed: {exc}") from exc
        return response

    async def generate(self, payload: dict[str, Any]) -> str:
        response = await self._request("POST", "/generate-marketing-content", json=payload)
        generated_text = response.json().get("generatedText")
        if not isinstance(generated_text, str):
            raise ApiError("Generation response missing generatedText.")
        return generated_text

    async def save_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._request("POST", "/content", json=payload)
        return response.json()

    async def list_content(self, limit: int | None = None) -> list[dict[str, Any]]:
        params = {"limit": limit} if limit is not None else None
        response = await self._request("GET", "/content", params=params)
        return response.json()["items"]

    async def set_favorite(self, content_id: str, is_favorite: bool) -> dict[str, Any]:
        response = await self._request(
            "PATCH",
            f"/content/{content_id}",
            json={"is_favorite": is_favorite},
        )
        return response.json()

    async def delete_content(self, content_id: str) -> None:
        await self._request("DELETE", f"/content/{content_id}")

    async def get_dashboard(self) -> dict[str, Any]:
        response = await self._request("GET", "/dashboard")
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or str(response.status_code)
    if isinstance(payload, dict):
        detail = payload.get("details") or payload.get("detail") or payload.get("error")
        if detail:
            return str(detail)
    return str(response.status_code)
