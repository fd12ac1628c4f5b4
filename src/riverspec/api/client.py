"""ApiClient: synchronous JSON client for the CDN management API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import ConflictError, ConversionError, NotFoundError, RemoteError, TransientError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://manage.ioriver.io/api/v1/"
DEFAULT_USER_AGENT = "riverspec"


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if key in body:
                return str(body[key])
    return str(body)


def raise_for_status(response: httpx.Response) -> None:
    """Map an unsuccessful response to the matching RemoteError subclass."""
    if response.is_success:
        return

    request = response.request
    status = response.status_code
    message = f"{request.method} {request.url}: {status} {response.reason_phrase}"
    detail = _error_detail(response)
    if detail:
        message = f"{message}: {detail}"

    if status == 404:
        raise NotFoundError(message, status_code=status)
    if status == 409:
        raise ConflictError(message, status_code=status)
    if status == 429 or status >= 500:
        raise TransientError(message, status_code=status)
    raise RemoteError(message, status_code=status)


class ApiClient:
    """Thin wrapper over httpx.Client speaking the management API's JSON.

    Every failure surfaces as a RemoteError subclass; transport failures and
    timeouts become TransientError. Nothing is retried here.
    """

    def __init__(
        self,
        token: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._client = httpx.Client(
            base_url=endpoint,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Token {token}",
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
        )

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, json=payload)
        except httpx.TransportError as exc:
            raise TransientError(f"{method} {path}: {exc}") from exc

        raise_for_status(response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _decode[W: BaseModel](data: Any, wire_type: type[W]) -> W:
        try:
            return wire_type.model_validate(data)
        except ValidationError as exc:
            raise ConversionError(f"unexpected {wire_type.__name__} payload: {exc}") from exc

    def get[W: BaseModel](self, path: str, wire_type: type[W]) -> W:
        return self._decode(self._request("GET", path), wire_type)

    def create[W: BaseModel](self, path: str, obj: W, *, exclude: set[str] | None = None) -> W:
        payload = obj.model_dump(mode="json", exclude={"id"} | (exclude or set()))
        return self._decode(self._request("POST", path, payload), type(obj))

    def update[W: BaseModel](self, path: str, obj: W, *, exclude: set[str] | None = None) -> W:
        payload = obj.model_dump(mode="json", exclude=exclude)
        return self._decode(self._request("PUT", path, payload), type(obj))

    def delete(self, path: str) -> None:
        self._request("DELETE", path)
