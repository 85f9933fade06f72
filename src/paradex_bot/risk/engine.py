"""Volatility-based position sizing, risk banding and trade scoring.

Pure computations over a MarketSnapshot and account equity:

  volatility  = |mark - index| / index
  leverage    = clamp(max_leverage * (1 - volatility * decay), 0, max_leverage)
  max value   = equity * leverage
  band        = LOW (<2%) / MEDIUM (<5%) / HIGH
  recommended = min(band cap, max value * 0.25)

The literal formula goes negative above 20% volatility; leverage is
clamped at zero instead.

CRITICAL: All computations use Decimal. Never use float for risk values.
"""

from decimal import Decimal

from paradex_bot.config import RiskSettings
from paradex_bot.exceptions import ValidationError
from paradex_bot.logging import get_logger
from paradex_bot.models import (
    MarketSnapshot,
    PositionLimits,
    RiskBand,
    RiskLevel,
    TradeAction,
    TradeSignal,
)

logger = get_logger(__name__)

_ZERO = Decimal("0")
_ONE = Decimal("1")


def compute_volatility(mark_price: Decimal, index_price: Decimal) -> Decimal:
    """Relative mark/index divergence.

    Raises:
        ValidationError: If the index price is not positive.
    """
    if index_price <= _ZERO:
        raise ValidationError(f"Index price must be positive, got {index_price}")
    return abs(mark_price - index_price) / index_price


def compute_momentum(price_change_24h: Decimal, last_price: Decimal) -> Decimal:
    """24h price change relative to the last price. Zero when last price is unknown."""
    if last_price <= _ZERO:
        return _ZERO
    return price_change_24h / last_price


class RiskEngine:
    """Maps market telemetry and equity to position limits and trade signals.

    Args:
        settings: Risk constants (leverage cap, band thresholds, scoring).
    """

    def __init__(self, settings: RiskSettings | None = None) -> None:
        self._settings = settings or RiskSettings()

    def compute_leverage(self, volatility: Decimal) -> Decimal:
        """Leverage cap decaying linearly with volatility, floored at zero."""
        s = self._settings
        raw = s.max_leverage * (_ONE - volatility * s.leverage_decay_factor)
        leverage = min(s.max_leverage, raw)
        if leverage < _ZERO:
            logger.debug(
                "leverage_clamped_to_zero",
                volatility=str(volatility),
                raw_leverage=str(raw),
            )
            return _ZERO
        return leverage

    def classify_risk_band(self, volatility: Decimal, account_value: Decimal) -> RiskBand:
        """Select the volatility tier and size its equity cap."""
        s = self._settings
        if volatility < s.low_volatility_threshold:
            level, fraction, stop = (
                RiskLevel.LOW,
                s.low_max_position_fraction,
                s.low_stop_loss_percent,
            )
        elif volatility < s.medium_volatility_threshold:
            level, fraction, stop = (
                RiskLevel.MEDIUM,
                s.medium_max_position_fraction,
                s.medium_stop_loss_percent,
            )
        else:
            level, fraction, stop = (
                RiskLevel.HIGH,
                s.high_max_position_fraction,
                s.high_stop_loss_percent,
            )
        return RiskBand(
            level=level,
            max_position_size=account_value * fraction,
            stop_loss_percent=stop,
        )

    def compute_limits(
        self, snapshot: MarketSnapshot, account_value: Decimal | None = None
    ) -> PositionLimits:
        """Compute leverage, position caps and the risk band for a market.

        Args:
            snapshot: Mark/index prices for the market.
            account_value: Account equity in quote currency. None means the
                account is unknown; caps are computed against zero equity.

        Returns:
            PositionLimits for this snapshot.
        """
        equity = account_value if account_value is not None else _ZERO
        volatility = compute_volatility(snapshot.mark_price, snapshot.index_price)
        leverage = self.compute_leverage(volatility)
        max_position_value = equity * leverage
        band = self.classify_risk_band(volatility, equity)
        recommended = min(
            band.max_position_size,
            max_position_value * self._settings.recommended_value_fraction,
        )

        return PositionLimits(
            volatility=volatility,
            max_leverage=leverage,
            max_position_value=max_position_value,
            recommended_position_size=recommended,
            risk_band=band,
        )

    def score_signal(
        self, snapshot: MarketSnapshot, limits: PositionLimits
    ) -> TradeSignal:
        """Derive a BUY/SELL/HOLD recommendation with confidence in [0, 1].

        Base: BUY when momentum > 2% and funding < 0.1%; SELL when momentum
        < -2% and funding > -0.1%; confidence = min(0.8, |momentum| * 5).
        Otherwise HOLD at 0.5.

        Adjustments, in order: +0.1 when volume trend > 10%, -0.2 when
        volatility > 2%, x0.8 in the HIGH risk band. Clamped to [0, 1].
        """
        s = self._settings
        momentum = compute_momentum(snapshot.price_change_24h, snapshot.last_price)
        funding = snapshot.funding_rate
        reasons: list[str] = []

        if momentum > s.momentum_threshold and funding < s.funding_rate_threshold:
            action = TradeAction.BUY
            confidence = min(
                s.max_signal_confidence, abs(momentum) * s.momentum_confidence_multiplier
            )
            reasons.append(f"positive momentum {momentum:.4f} with funding {funding}")
        elif momentum < -s.momentum_threshold and funding > -s.funding_rate_threshold:
            action = TradeAction.SELL
            confidence = min(
                s.max_signal_confidence, abs(momentum) * s.momentum_confidence_multiplier
            )
            reasons.append(f"negative momentum {momentum:.4f} with funding {funding}")
        else:
            action = TradeAction.HOLD
            confidence = s.hold_confidence
            reasons.append("no momentum/funding edge")

        if snapshot.volume_trend > s.volume_trend_threshold:
            confidence += s.volume_trend_bonus
            reasons.append("rising volume")
        if limits.volatility > s.volatility_penalty_threshold:
            confidence -= s.volatility_penalty
            reasons.append("elevated volatility")
        if limits.risk_band.level is RiskLevel.HIGH:
            confidence *= s.high_risk_confidence_multiplier
            reasons.append("high risk band")

        confidence = max(_ZERO, min(_ONE, confidence))

        return TradeSignal(
            market=snapshot.market,
            action=action,
            confidence=confidence,
            momentum=momentum,
            funding_rate=funding,
            reasons=reasons,
        )
