"""Order placement through the signing pipeline.

Every order is validated and signed by RequestComposer before it touches
the network. Batch submission runs orders concurrently with
asyncio.gather(return_exceptions=True): each order gets its own
OrderOutcome and one failure never aborts its siblings.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from paradex_bot.exceptions import RemoteError
from paradex_bot.logging import get_logger
from paradex_bot.models import AuthSession, OrderDetails, OrderOutcome, OrderStatus

if TYPE_CHECKING:
    from paradex_bot.auth.refresher import TokenRefresher
    from paradex_bot.auth.session import SessionHolder
    from paradex_bot.exchange.client import ExchangeClient
    from paradex_bot.exchange.types import OrderInfo
    from paradex_bot.signing.composer import RequestComposer

logger = get_logger(__name__)

_UNAUTHORIZED = 401


class OrderService:
    """Signs and submits orders for one account.

    Args:
        composer: Validates, quantizes and signs order bodies.
        client: Exchange transport.
        sessions: Source of the current AuthSession.
        refresher: Optional; asked for an early refresh when Paradex
            answers 401. The failing order is not resubmitted.
    """

    def __init__(
        self,
        composer: RequestComposer,
        client: ExchangeClient,
        sessions: SessionHolder,
        refresher: TokenRefresher | None = None,
    ) -> None:
        self._composer = composer
        self._client = client
        self._sessions = sessions
        self._refresher = refresher

    async def place_order(self, details: OrderDetails) -> OrderInfo:
        """Validate, sign and submit a single order.

        Raises:
            ValidationError: Bad order; nothing was signed or sent.
            NotAuthenticatedError: No session published yet.
            RemoteError: Paradex rejected the order.
        """
        body = self._composer.compose_order(details)
        session = self._sessions.require()
        try:
            order = await self._client.create_order(session, body)
        except RemoteError as exc:
            self._handle_remote_error(session, exc)
            raise
        logger.info(
            "order_placed",
            order_id=order.id,
            market=order.market,
            side=order.side,
            status=order.status,
        )
        return order

    async def place_orders(self, orders: list[OrderDetails]) -> list[OrderOutcome]:
        """Submit orders concurrently, reporting each outcome individually.

        Returns:
            One OrderOutcome per input order, in input order. Never raises
            for per-order failures.
        """
        results = await asyncio.gather(
            *(self.place_order(details) for details in orders),
            return_exceptions=True,
        )

        outcomes: list[OrderOutcome] = []
        for index, (details, result) in enumerate(zip(orders, results)):
            if isinstance(result, BaseException):
                logger.warning(
                    "batch_order_failed",
                    index=index,
                    market=details.market,
                    error=str(result),
                    error_type=type(result).__name__,
                )
                outcomes.append(
                    OrderOutcome(
                        index=index,
                        order=details,
                        status=OrderStatus.FAILED,
                        error=str(result) or type(result).__name__,
                    )
                )
            else:
                outcomes.append(
                    OrderOutcome(
                        index=index,
                        order=details,
                        status=OrderStatus.SUCCESS,
                        order_id=result.id,
                        response=result.model_dump(mode="json"),
                    )
                )

        logger.info(
            "batch_orders_complete",
            total=len(outcomes),
            failed=sum(1 for o in outcomes if not o.succeeded),
        )
        return outcomes

    async def cancel_order(self, order_id: str) -> bool:
        """Cancel an open order by id."""
        session = self._sessions.require()
        try:
            return await self._client.cancel_order(session, order_id)
        except RemoteError as exc:
            self._handle_remote_error(session, exc)
            raise

    def _handle_remote_error(self, session: AuthSession, exc: RemoteError) -> None:
        """Ask for an early token refresh when Paradex rejects the bearer token."""
        if exc.status != _UNAUTHORIZED:
            return
        logger.warning(
            "session_rejected",
            path=exc.path,
            session_age_seconds=round(session.age(), 3),
        )
        if self._refresher is not None:
            self._refresher.request_refresh()
