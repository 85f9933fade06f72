"""Abstract exchange client interface.

Defines the contract for the Paradex transport. Signing happens before
these methods are called: they receive ready-made auth headers, signed
order bodies and AuthSession values, and never retry.
"""

from abc import ABC, abstractmethod
from typing import Any

from paradex_bot.exchange.types import (
    AccountSummary,
    AuthResponse,
    MarketInfo,
    MarketSummary,
    OrderInfo,
    PositionInfo,
)
from paradex_bot.models import AuthSession


class ExchangeClient(ABC):
    """Abstract base class for exchange API clients."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying HTTP session."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP session."""
        ...

    @abstractmethod
    async def authenticate(self, auth_headers: dict[str, str]) -> AuthResponse:
        """Exchange a signed auth challenge for a JWT."""
        ...

    @abstractmethod
    async def fetch_account(self, session: AuthSession) -> AccountSummary:
        """Fetch account value, collateral and margin figures."""
        ...

    @abstractmethod
    async def fetch_positions(self, session: AuthSession) -> list[PositionInfo]:
        """Fetch all positions for the account."""
        ...

    @abstractmethod
    async def fetch_open_orders(self, session: AuthSession) -> list[OrderInfo]:
        """Fetch all open orders for the account."""
        ...

    @abstractmethod
    async def fetch_markets(self, market: str | None = None) -> list[MarketInfo]:
        """Fetch market definitions, optionally for a single symbol."""
        ...

    @abstractmethod
    async def fetch_market_summary(self, market: str) -> MarketSummary:
        """Fetch mark/index/last price, 24h change and funding for a market."""
        ...

    @abstractmethod
    async def create_order(
        self, session: AuthSession, body: dict[str, Any]
    ) -> OrderInfo:
        """Submit a signed order body."""
        ...

    @abstractmethod
    async def cancel_order(self, session: AuthSession, order_id: str) -> bool:
        """Cancel an open order by id."""
        ...
