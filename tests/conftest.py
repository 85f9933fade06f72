"""Shared test fixtures for the Paradex bot."""

import pytest

from paradex_bot.config import AppSettings, AuthSettings, OrderSettings, ParadexSettings
from paradex_bot.models import Account, AuthSession, SystemConfig
from paradex_bot.signing.composer import RequestComposer

# Throwaway StarkNet credentials; never funded.
TEST_ACCOUNT_ADDRESS = "0x0129f9a1b4fb7b1d8ec1b7b3e6a1a2b5c4d3e2f1a0b9c8d7e6f5a4b3c2d1e0f9"
TEST_PRIVATE_KEY = "0x04a1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f"
TEST_CHAIN_ID = "PRIVATE_SN_POTC_SEPOLIA"
TEST_BASE_URL = "https://api.testnet.paradex.trade/v1"

# 2023-11-14T22:13:20.5Z
FIXED_NOW = 1_700_000_000.5


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test credentials."""
    return AppSettings(
        log_level="DEBUG",
        paradex=ParadexSettings(
            account_address=TEST_ACCOUNT_ADDRESS,
            private_key=TEST_PRIVATE_KEY,  # type: ignore[arg-type]
            base_url=TEST_BASE_URL,
            chain_id=TEST_CHAIN_ID,
        ),
        auth=AuthSettings(),
        orders=OrderSettings(),
    )


@pytest.fixture
def system_config() -> SystemConfig:
    return SystemConfig(api_base_url=TEST_BASE_URL, chain_id=TEST_CHAIN_ID)


@pytest.fixture
def account() -> Account:
    return Account(address=TEST_ACCOUNT_ADDRESS, private_key=TEST_PRIVATE_KEY)


@pytest.fixture
def composer(system_config: SystemConfig, account: Account) -> RequestComposer:
    """RequestComposer with a frozen clock."""
    return RequestComposer(system_config, account, clock=lambda: FIXED_NOW)


@pytest.fixture
def auth_session() -> AuthSession:
    return AuthSession(
        jwt_token="test-jwt",
        account_address=TEST_ACCOUNT_ADDRESS,
        issued_at=FIXED_NOW,
    )


@pytest.fixture
def fixed_now() -> float:
    """The frozen clock value used by the composer fixture."""
    return FIXED_NOW
