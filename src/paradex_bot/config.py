"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParadexSettings(BaseSettings):
    """Paradex account and API connection settings."""

    model_config = SettingsConfigDict(env_prefix="PARADEX_")

    account_address: str = ""
    private_key: SecretStr = SecretStr("")
    base_url: str = "https://api.testnet.paradex.trade/v1"
    chain_id: str = "PRIVATE_SN_POTC_SEPOLIA"  # short string, felt-encoded at startup
    request_timeout_seconds: float = 10.0


class AuthSettings(BaseSettings):
    """JWT lifecycle policy.

    Paradex tokens expire server-side after a few minutes, so the refresher
    re-authenticates slightly before the 3 minute mark.
    """

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    refresh_interval_seconds: float = 177.0  # 3 min - 3 s
    refresh_debounce_seconds: float = 1.0
    signature_expiry_seconds: int = 7 * 24 * 60 * 60


class OrderSettings(BaseSettings):
    """Order signing parameters."""

    model_config = SettingsConfigDict(env_prefix="ORDER_")

    quantum_precision: int = 8
    default_instruction: Literal["GTC", "IOC", "POST_ONLY"] = "GTC"


class RiskSettings(BaseSettings):
    """Position sizing and risk banding constants.

    Volatility is measured as the mark/index divergence. Leverage decays
    linearly from max_leverage to 0 as volatility approaches
    1 / leverage_decay_factor (20% with the defaults).
    """

    model_config = SettingsConfigDict(env_prefix="RISK_")

    max_leverage: Decimal = Decimal("20")
    leverage_decay_factor: Decimal = Decimal("5")
    recommended_value_fraction: Decimal = Decimal("0.25")  # of max position value

    # Risk band thresholds (volatility upper bounds)
    low_volatility_threshold: Decimal = Decimal("0.02")
    medium_volatility_threshold: Decimal = Decimal("0.05")

    # Band equity fractions and stop losses
    low_max_position_fraction: Decimal = Decimal("0.5")
    low_stop_loss_percent: Decimal = Decimal("2")
    medium_max_position_fraction: Decimal = Decimal("0.3")
    medium_stop_loss_percent: Decimal = Decimal("5")
    high_max_position_fraction: Decimal = Decimal("0.1")
    high_stop_loss_percent: Decimal = Decimal("10")

    # Signal scoring
    momentum_threshold: Decimal = Decimal("0.02")
    funding_rate_threshold: Decimal = Decimal("0.001")
    momentum_confidence_multiplier: Decimal = Decimal("5")
    max_signal_confidence: Decimal = Decimal("0.8")
    hold_confidence: Decimal = Decimal("0.5")
    volume_trend_threshold: Decimal = Decimal("0.1")
    volume_trend_bonus: Decimal = Decimal("0.1")
    volatility_penalty_threshold: Decimal = Decimal("0.02")
    volatility_penalty: Decimal = Decimal("0.2")
    high_risk_confidence_multiplier: Decimal = Decimal("0.8")


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    paradex: ParadexSettings = ParadexSettings()
    auth: AuthSettings = AuthSettings()
    orders: OrderSettings = OrderSettings()
    risk: RiskSettings = RiskSettings()
