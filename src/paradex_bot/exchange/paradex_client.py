"""Paradex REST client implementation via aiohttp.

Thin transport: it sends headers and bodies produced by RequestComposer,
validates JSON responses against the schemas in exchange/types.py and
raises RemoteError for anything that is not a usable 2xx response.
No retries -- retry policy belongs to the caller.
"""

import asyncio
import json
from typing import Any

import aiohttp
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from paradex_bot.exceptions import RemoteError
from paradex_bot.exchange.client import ExchangeClient
from paradex_bot.exchange.types import (
    AccountSummary,
    AuthResponse,
    ErrorResponse,
    MarketInfo,
    MarketSummary,
    OrderInfo,
    PositionInfo,
)
from paradex_bot.logging import get_logger
from paradex_bot.models import AuthSession, SystemConfig

logger = get_logger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}


def _error_message(status: int, text: str) -> str:
    """Best-effort extraction of the server's error text."""
    try:
        return ErrorResponse.model_validate_json(text).describe()
    except SchemaValidationError:
        return text.strip() or f"HTTP {status}"


class ParadexClient(ExchangeClient):
    """Concrete Paradex REST client.

    Args:
        config: API base URL.
        timeout_seconds: Total timeout per request.
        session: Optional pre-built aiohttp session (owned by the caller).
    """

    def __init__(
        self,
        config: SystemConfig,
        timeout_seconds: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = config.api_base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    async def connect(self) -> None:
        """Open the HTTP session if one was not injected."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
            logger.info("paradex_session_opened", base_url=self._base_url)

    async def close(self) -> None:
        """Close the HTTP session. CRITICAL: must be called to avoid resource leaks."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.info("paradex_session_closed")
        self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        if self._session is None:
            await self.connect()
        assert self._session is not None

        url = f"{self._base_url}{path}"
        request_headers = {**_JSON_HEADERS, **(headers or {})}
        try:
            async with self._session.request(
                method, url, headers=request_headers, params=params, json=json_body
            ) as response:
                status = response.status
                text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise RemoteError(0, f"Transport failure: {exc!r}", path) from exc

        if not 200 <= status < 300:
            message = _error_message(status, text)
            logger.warning(
                "paradex_request_failed",
                method=method,
                path=path,
                status=status,
                error=message,
            )
            raise RemoteError(status, message, path)

        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as exc:
            raise RemoteError(status, "Response body is not valid JSON", path) from exc

    @staticmethod
    def _parse(schema: type[BaseModel], payload: Any, path: str) -> Any:
        try:
            return schema.model_validate(payload)
        except SchemaValidationError as exc:
            raise RemoteError(0, f"Unexpected response shape: {exc}", path) from exc

    def _parse_results(
        self, schema: type[BaseModel], payload: Any, path: str
    ) -> list[Any]:
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise RemoteError(0, "No results found in response", path)
        return [self._parse(schema, item, path) for item in payload["results"]]

    async def authenticate(self, auth_headers: dict[str, str]) -> AuthResponse:
        """POST /auth with the signed challenge headers and an empty JSON body."""
        payload = await self._request(
            "POST", "/auth", headers=auth_headers, json_body={}
        )
        return self._parse(AuthResponse, payload, "/auth")

    async def fetch_account(self, session: AuthSession) -> AccountSummary:
        payload = await self._request(
            "GET", "/account", headers=session.authorization_header()
        )
        return self._parse(AccountSummary, payload, "/account")

    async def fetch_positions(self, session: AuthSession) -> list[PositionInfo]:
        payload = await self._request(
            "GET", "/positions", headers=session.authorization_header()
        )
        return self._parse_results(PositionInfo, payload, "/positions")

    async def fetch_open_orders(self, session: AuthSession) -> list[OrderInfo]:
        payload = await self._request(
            "GET", "/orders", headers=session.authorization_header()
        )
        return self._parse_results(OrderInfo, payload, "/orders")

    async def fetch_markets(self, market: str | None = None) -> list[MarketInfo]:
        """GET /markets (public). Filters to one symbol when market is given."""
        params = {"market": market} if market else None
        payload = await self._request("GET", "/markets", params=params)
        markets = self._parse_results(MarketInfo, payload, "/markets")
        logger.debug("fetched_markets", count=len(markets), market=market)
        return markets

    async def fetch_market_summary(self, market: str) -> MarketSummary:
        """GET /markets/summary (public) for a single market."""
        payload = await self._request(
            "GET", "/markets/summary", params={"market": market}
        )
        summaries = self._parse_results(MarketSummary, payload, "/markets/summary")
        if not summaries:
            raise RemoteError(0, f"No summary for market {market}", "/markets/summary")
        return summaries[0]

    async def create_order(
        self, session: AuthSession, body: dict[str, Any]
    ) -> OrderInfo:
        """POST /orders with a signed body."""
        logger.info(
            "creating_order",
            market=body.get("market"),
            side=body.get("side"),
            order_type=body.get("type"),
            size=body.get("size"),
        )
        payload = await self._request(
            "POST",
            "/orders",
            headers={
                **session.authorization_header(),
                "Content-Type": "application/json",
            },
            json_body=body,
        )
        return self._parse(OrderInfo, payload, "/orders")

    async def cancel_order(self, session: AuthSession, order_id: str) -> bool:
        """DELETE /orders/{id}."""
        logger.info("cancelling_order", order_id=order_id)
        await self._request(
            "DELETE", f"/orders/{order_id}", headers=session.authorization_header()
        )
        return True
