"""Entry point for the Paradex trading bot.

Wires the signing pipeline, the Paradex client and the JWT refresher,
authenticates, logs an account summary and then keeps the session fresh
until SIGINT/SIGTERM.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. SystemConfig + Account (injected credentials)
4. RequestComposer (quantize, typed data, hash, sign)
5. ParadexClient (HTTP transport)
6. SessionHolder (current AuthSession)
7. TokenRefresher (periodic + debounced re-auth)
8. OrderService (single and batch order placement)
9. MarketAnalyzer (risk engine on live market data)
"""

import asyncio
import signal
from typing import Any

from paradex_bot.auth.refresher import TokenRefresher
from paradex_bot.auth.session import SessionHolder
from paradex_bot.config import AppSettings
from paradex_bot.exchange.paradex_client import ParadexClient
from paradex_bot.execution.order_service import OrderService
from paradex_bot.logging import get_logger, setup_logging
from paradex_bot.market_data.analyzer import MarketAnalyzer
from paradex_bot.models import Account, SystemConfig
from paradex_bot.risk.engine import RiskEngine
from paradex_bot.signing.composer import RequestComposer


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all bot components from settings.

    Does NOT open the HTTP session or authenticate -- that happens in run().
    """
    config = SystemConfig(
        api_base_url=settings.paradex.base_url,
        chain_id=settings.paradex.chain_id,
    )
    account = Account(
        address=settings.paradex.account_address,
        private_key=settings.paradex.private_key.get_secret_value(),
    )

    composer = RequestComposer(
        config,
        account,
        auth_settings=settings.auth,
        order_settings=settings.orders,
    )
    client = ParadexClient(
        config, timeout_seconds=settings.paradex.request_timeout_seconds
    )
    sessions = SessionHolder()
    refresher = TokenRefresher(
        composer=composer,
        client=client,
        settings=settings.auth,
        on_session=sessions.publish,
    )
    order_service = OrderService(composer, client, sessions, refresher)
    analyzer = MarketAnalyzer(client, RiskEngine(settings.risk), sessions)

    return {
        "config": config,
        "composer": composer,
        "client": client,
        "sessions": sessions,
        "refresher": refresher,
        "order_service": order_service,
        "analyzer": analyzer,
    }


def _setup_signal_handlers(stop_event: asyncio.Event) -> None:
    """Register SIGINT/SIGTERM to trigger graceful shutdown.

    Must be called after the asyncio event loop is running.
    """
    logger = get_logger("paradex_bot.main")
    loop = asyncio.get_running_loop()

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler)


async def run() -> None:
    """Authenticate, report the account and keep the JWT fresh until stopped."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("paradex_bot.main")

    if not settings.paradex.account_address:
        logger.error("missing_account_address", env="PARADEX_ACCOUNT_ADDRESS")
        return

    components = _build_components(settings)
    client: ParadexClient = components["client"]
    refresher: TokenRefresher = components["refresher"]
    sessions: SessionHolder = components["sessions"]

    stop_event = asyncio.Event()
    _setup_signal_handlers(stop_event)

    try:
        await client.connect()
        logger.info("authenticating", account=settings.paradex.account_address)
        await refresher.refresh_now()
        await refresher.start()

        account = await client.fetch_account(sessions.require())
        logger.info(
            "account_summary",
            status=account.status,
            account_value=str(account.account_value),
            pnl=str(account.pnl),
            free_collateral=str(account.free_collateral),
        )

        await stop_event.wait()
    finally:
        await refresher.stop()
        await client.close()
        logger.info("paradex_bot_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
