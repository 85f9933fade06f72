"""Response schemas for the Paradex REST API.

Every JSON payload is validated here before it reaches the rest of the
bot. Numeric fields are parsed straight from Paradex's decimal strings
into Decimal. Unknown fields are kept (extra="allow") so callers that
need them can still read model_extra.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class _ParadexModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class AuthResponse(_ParadexModel):
    """POST /auth."""

    jwt_token: str


class AccountSummary(_ParadexModel):
    """GET /account."""

    account: str = ""
    status: str = ""
    account_value: Decimal = Decimal("0")
    total_collateral: Decimal = Decimal("0")
    free_collateral: Decimal = Decimal("0")
    initial_margin_requirement: Decimal = Decimal("0")
    maintenance_margin_requirement: Decimal = Decimal("0")

    @property
    def pnl(self) -> Decimal:
        """Unrealized P&L: account value minus deposited collateral."""
        return self.account_value - self.total_collateral


class PositionInfo(_ParadexModel):
    """Entry of GET /positions results."""

    market: str
    side: str = ""
    status: str = ""
    size: Decimal = Decimal("0")
    average_entry_price: Decimal | None = None
    unrealized_pnl: Decimal | None = None
    liquidation_price: Decimal | None = None


class OrderInfo(_ParadexModel):
    """Entry of GET /orders results and the POST /orders response."""

    id: str
    market: str
    side: str
    type: str
    size: Decimal
    price: Decimal | None = None
    status: str = ""
    instruction: str = ""
    client_id: str = ""
    remaining_size: Decimal | None = None
    created_at: int | None = None


class MarketInfo(_ParadexModel):
    """Entry of GET /markets results."""

    symbol: str
    base_currency: str = ""
    quote_currency: str = ""
    asset_kind: str = ""
    order_size_increment: Decimal | None = None
    price_tick_size: Decimal | None = None
    min_notional: Decimal | None = None
    max_order_size: Decimal | None = None


class MarketSummary(_ParadexModel):
    """Entry of GET /markets/summary results.

    underlying_price is the index price; price_change_rate_24h is a
    fraction (0.05 == +5%).
    """

    symbol: str
    mark_price: Decimal | None = None
    underlying_price: Decimal | None = None
    last_traded_price: Decimal | None = None
    price_change_rate_24h: Decimal | None = None
    funding_rate: Decimal | None = None
    volume_24h: Decimal | None = None
    open_interest: Decimal | None = None
    created_at: int | None = None


class ErrorResponse(_ParadexModel):
    """Error body returned with non-2xx responses."""

    error: str | None = None
    message: str | None = None

    def describe(self) -> str:
        parts = [p for p in (self.error, self.message) if p]
        return ": ".join(parts) if parts else "unknown error"
