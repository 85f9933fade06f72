"""Exchange client layer -- Paradex REST API integration via aiohttp."""

from paradex_bot.exchange.client import ExchangeClient
from paradex_bot.exchange.paradex_client import ParadexClient
from paradex_bot.exchange.types import (
    AccountSummary,
    AuthResponse,
    MarketInfo,
    MarketSummary,
    OrderInfo,
    PositionInfo,
)

__all__ = [
    "AccountSummary",
    "AuthResponse",
    "ExchangeClient",
    "MarketInfo",
    "MarketSummary",
    "OrderInfo",
    "ParadexClient",
    "PositionInfo",
]
