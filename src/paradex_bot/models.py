"""Shared data models for the Paradex trading bot.

CRITICAL: All monetary values use Decimal. Never use float for prices, sizes, or ratios.
"""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Order type."""

    MARKET = "MARKET"
    LIMIT = "LIMIT"


class TimeInForce(str, Enum):
    """Paradex order instruction."""

    GTC = "GTC"
    IOC = "IOC"
    POST_ONLY = "POST_ONLY"


class RiskLevel(str, Enum):
    """Volatility risk tier."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TradeAction(str, Enum):
    """Recommended trade direction."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class OrderStatus(str, Enum):
    """Per-order outcome in a batch submission."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class SystemConfig:
    """Immutable API target: base URL and the chain id short string.

    chain_id is the raw short string (e.g. PRIVATE_SN_POTC_SEPOLIA); it is
    felt-encoded when the signing domain is built.
    """

    api_base_url: str
    chain_id: str


@dataclass(frozen=True)
class Account:
    """StarkNet account used to sign Paradex requests.

    The private key is excluded from repr so it cannot leak through logs
    or tracebacks.
    """

    address: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class AuthSession:
    """A bearer token obtained from POST /auth.

    Sessions are replaced wholesale on refresh, never mutated.
    """

    jwt_token: str = field(repr=False)
    account_address: str
    issued_at: float = field(default_factory=time.time)

    def authorization_header(self) -> dict[str, str]:
        """Return the Authorization header for bearer-authenticated endpoints."""
        return {"Authorization": f"Bearer {self.jwt_token}"}

    def age(self, now: float | None = None) -> float:
        """Seconds elapsed since the token was issued."""
        return (time.time() if now is None else now) - self.issued_at


@dataclass
class OrderDetails:
    """Order parameters as entered by the caller, before quantization.

    size and price stay as human-readable decimal strings; they are
    transmitted as-is and quantized separately for the signed message.
    """

    market: str
    side: OrderSide
    order_type: OrderType
    size: str
    price: str | None = None
    instruction: TimeInForce | None = None
    client_id: str | None = None


@dataclass(frozen=True)
class Signature:
    """STARK curve ECDSA signature."""

    r: int
    s: int


@dataclass
class MarketSnapshot:
    """Market telemetry consumed by the risk engine."""

    market: str
    mark_price: Decimal
    index_price: Decimal
    last_price: Decimal
    price_change_24h: Decimal  # absolute, in quote currency
    funding_rate: Decimal
    volume_trend: Decimal = Decimal("0")  # fractional change vs prior window


@dataclass(frozen=True)
class RiskBand:
    """Position cap and stop loss for a volatility tier."""

    level: RiskLevel
    max_position_size: Decimal
    stop_loss_percent: Decimal


@dataclass(frozen=True)
class PositionLimits:
    """Derived sizing snapshot. Recomputed on every analysis, never persisted."""

    volatility: Decimal
    max_leverage: Decimal
    max_position_value: Decimal
    recommended_position_size: Decimal
    risk_band: RiskBand


@dataclass
class TradeSignal:
    """BUY/SELL/HOLD recommendation with a confidence in [0, 1]."""

    market: str
    action: TradeAction
    confidence: Decimal
    momentum: Decimal
    funding_rate: Decimal
    reasons: list[str] = field(default_factory=list)


@dataclass
class OrderOutcome:
    """Result of a single order within a batch submission."""

    index: int
    order: OrderDetails
    status: OrderStatus
    order_id: str | None = None
    response: dict[str, Any] | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OrderStatus.SUCCESS
