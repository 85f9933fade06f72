"""Background JWT refresh with debounce.

Paradex JWTs are short-lived. TokenRefresher re-runs the sign -> POST /auth
flow every refresh_interval_seconds and publishes each new AuthSession
through the on_session callback.

request_refresh() lets callers (e.g. order placement after a 401) ask for
an early refresh. Requests arriving within refresh_debounce_seconds of each
other collapse into one refresh, and an asyncio.Lock keeps at most one
re-authentication in flight.
"""

import asyncio
from collections.abc import Callable

from paradex_bot.auth.session import authenticate
from paradex_bot.config import AuthSettings
from paradex_bot.exchange.client import ExchangeClient
from paradex_bot.logging import get_logger
from paradex_bot.models import AuthSession
from paradex_bot.signing.composer import RequestComposer

logger = get_logger(__name__)


class TokenRefresher:
    """Periodic and on-demand JWT refresh.

    Args:
        composer: Signs the auth challenge.
        client: Exchange client used for POST /auth.
        settings: Refresh interval and debounce window.
        on_session: Called with every newly issued session.
    """

    def __init__(
        self,
        composer: RequestComposer,
        client: ExchangeClient,
        settings: AuthSettings,
        on_session: Callable[[AuthSession], None],
    ) -> None:
        self._composer = composer
        self._client = client
        self._settings = settings
        self._on_session = on_session
        self._lock = asyncio.Lock()
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]
        self._debounce_task: asyncio.Task | None = None  # type: ignore[type-arg]
        self._inflight: set[asyncio.Task] = set()  # type: ignore[type-arg]

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Begin the periodic refresh loop in the background."""
        if self.is_running:
            logger.warning("token_refresher_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._refresh_loop())
        logger.info(
            "token_refresher_started",
            interval=self._settings.refresh_interval_seconds,
            debounce=self._settings.refresh_debounce_seconds,
        )

    async def stop(self) -> None:
        """Cancel the loop, any pending debounce and any in-flight refresh."""
        self._running = False
        tasks = [t for t in (self._task, self._debounce_task) if t is not None]
        tasks.extend(self._inflight)
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._task = None
        self._debounce_task = None
        self._inflight.clear()
        logger.info("token_refresher_stopped")

    async def refresh_now(self) -> AuthSession:
        """Re-authenticate immediately and publish the new session.

        Errors propagate to the caller; the previously published session
        stays in place.
        """
        async with self._lock:
            session = await authenticate(self._composer, self._client)
            self._on_session(session)
            return session

    def request_refresh(self) -> None:
        """Schedule a refresh after the settling window, replacing any pending one."""
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
            logger.debug("token_refresh_request_coalesced")
        self._debounce_task = asyncio.create_task(self._debounced_refresh())

    async def _debounced_refresh(self) -> None:
        await asyncio.sleep(self._settings.refresh_debounce_seconds)
        # Settled: hand off to a tracked task so later requests cannot cancel it.
        self._debounce_task = None
        task = asyncio.create_task(self._refresh_logged("requested"))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        await asyncio.shield(task)

    async def _refresh_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._settings.refresh_interval_seconds)
            if self._running:
                await self._refresh_logged("scheduled")

    async def _refresh_logged(self, trigger: str) -> None:
        try:
            await self.refresh_now()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.error("token_refresh_failed", trigger=trigger, exc_info=True)
        else:
            logger.debug("token_refreshed", trigger=trigger)
