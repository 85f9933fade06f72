"""Market analysis: Paradex market summary -> risk limits and trade signal.

Fetches /markets/summary (and /account when a session is available),
converts the summary into a MarketSnapshot and runs the RiskEngine.
The last seen 24h volume per market is cached so subsequent analyses
can report a volume trend.
"""

from dataclasses import dataclass
from decimal import Decimal

from paradex_bot.auth.session import SessionHolder
from paradex_bot.exceptions import ValidationError
from paradex_bot.exchange.client import ExchangeClient
from paradex_bot.exchange.types import MarketSummary
from paradex_bot.logging import get_logger
from paradex_bot.models import MarketSnapshot, PositionLimits, TradeSignal
from paradex_bot.risk.engine import RiskEngine

logger = get_logger(__name__)


@dataclass
class MarketAnalysis:
    """Result of one analysis call."""

    snapshot: MarketSnapshot
    limits: PositionLimits
    signal: TradeSignal
    account_value: Decimal | None


def compute_volume_trend(current: Decimal | None, previous: Decimal | None) -> Decimal:
    """Fractional volume change vs the previous observation (0 when unknown)."""
    if current is None or previous is None or previous <= 0:
        return Decimal("0")
    return (current - previous) / previous


def snapshot_from_summary(
    summary: MarketSummary, previous_volume: Decimal | None = None
) -> MarketSnapshot:
    """Convert a Paradex market summary into a MarketSnapshot.

    Raises:
        ValidationError: If mark or index price is missing.
    """
    if summary.mark_price is None or summary.underlying_price is None:
        raise ValidationError(f"Summary for {summary.symbol} lacks mark/index price")

    last_price = summary.last_traded_price or summary.mark_price
    change_rate = summary.price_change_rate_24h or Decimal("0")

    return MarketSnapshot(
        market=summary.symbol,
        mark_price=summary.mark_price,
        index_price=summary.underlying_price,
        last_price=last_price,
        price_change_24h=last_price * change_rate,
        funding_rate=summary.funding_rate or Decimal("0"),
        volume_trend=compute_volume_trend(summary.volume_24h, previous_volume),
    )


class MarketAnalyzer:
    """Runs the risk engine on live Paradex market data.

    Args:
        client: Exchange client for market summaries and account data.
        risk_engine: Sizing and scoring engine.
        sessions: Optional; when a session is present and no equity is
            passed, account_value is read from GET /account.
    """

    def __init__(
        self,
        client: ExchangeClient,
        risk_engine: RiskEngine,
        sessions: SessionHolder | None = None,
    ) -> None:
        self._client = client
        self._risk_engine = risk_engine
        self._sessions = sessions
        self._last_volume: dict[str, Decimal] = {}

    async def analyze(
        self, market: str, account_value: Decimal | None = None
    ) -> MarketAnalysis:
        """Fetch market data and compute limits plus a trade signal."""
        summary = await self._client.fetch_market_summary(market)

        if account_value is None and self._sessions is not None:
            session = self._sessions.current
            if session is not None:
                account = await self._client.fetch_account(session)
                account_value = account.account_value

        snapshot = snapshot_from_summary(summary, self._last_volume.get(market))
        if summary.volume_24h is not None:
            self._last_volume[market] = summary.volume_24h

        limits = self._risk_engine.compute_limits(snapshot, account_value)
        signal = self._risk_engine.score_signal(snapshot, limits)

        logger.info(
            "market_analyzed",
            market=market,
            volatility=str(limits.volatility),
            leverage=str(limits.max_leverage),
            risk_level=limits.risk_band.level.value,
            action=signal.action.value,
            confidence=str(signal.confidence),
        )
        return MarketAnalysis(
            snapshot=snapshot,
            limits=limits,
            signal=signal,
            account_value=account_value,
        )
