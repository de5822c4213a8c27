# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authenticated JSON transport used by every endpoint group."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from billing_client.shared.config import ApiConfig, load_config
from billing_client.shared.errors import RequestFailed
from billing_client.shared.logging import logger, new_request_id

TokenProvider = Callable[[], str | None]


def _no_token() -> str | None:
    return None


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


class ApiClient:
    def __init__(
        self,
        config: ApiConfig | None = None,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or load_config().api
        self._token_provider = token_provider or _no_token
        self._client = httpx.AsyncClient(
            base_url=self._config.root,
            timeout=self._config.timeout,
            transport=transport,
        )

    @property
    def config(self) -> ApiConfig:
        return self._config

    def bind_token_provider(self, provider: TokenProvider) -> None:
        self._token_provider = provider

    def current_token(self) -> str | None:
        return self._token_provider()

    def url(self, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        query = urlencode(clean_params(params))
        base = f"{self._config.root}{endpoint}"
        return f"{base}?{query}" if query else base

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        authenticated: bool = True,
    ) -> Any:
        """Send one call and return the decoded JSON body.

        Raises ``RequestFailed`` for any non-2xx status or transport failure.
        """

        request_id = new_request_id()
        request_headers = httpx.Headers(headers or {})
        request_headers["Content-Type"] = "application/json"
        request_headers["X-Request-ID"] = request_id
        token = self._token_provider() if authenticated else None
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        started = time.perf_counter()
        try:
            response = await self._client.request(
                method.upper(),
                endpoint,
                params=clean_params(params) or None,
                headers=request_headers,
                json=body,
            )
        except httpx.HTTPError as exc:
            logger.warning(f"api: {method.upper()} {endpoint} transport error {type(exc).__name__}")
            raise RequestFailed(context={"reason": type(exc).__name__}) from exc

        elapsed = (time.perf_counter() - started) * 1000.0
        payload = self._decode(response)
        logger.info(
            f"api: {method.upper()} {endpoint} -> {response.status_code} in {elapsed:.1f} ms"
        )

        if not response.is_success:
            raise RequestFailed.from_response(response.status_code, payload)
        return payload

    async def get(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request(endpoint, "GET", **kwargs)

    async def post(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, "POST", body=body, **kwargs)

    async def put(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, "PUT", body=body, **kwargs)

    async def patch(self, endpoint: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, "PATCH", body=body, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request(endpoint, "DELETE", **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug(f"api: non-json body status={response.status_code}")
            return None


__all__ = ["ApiClient", "TokenProvider", "clean_params"]
