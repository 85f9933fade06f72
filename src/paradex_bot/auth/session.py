"""JWT session acquisition and the holder that publishes the current session.

A session is an immutable AuthSession value. Refreshes replace the value
held by SessionHolder; readers take whatever session is current at call
time and never observe a half-updated token.
"""

from paradex_bot.exceptions import NotAuthenticatedError
from paradex_bot.exchange.client import ExchangeClient
from paradex_bot.logging import get_logger
from paradex_bot.models import AuthSession
from paradex_bot.signing.composer import RequestComposer

logger = get_logger(__name__)


async def authenticate(
    composer: RequestComposer, client: ExchangeClient
) -> AuthSession:
    """Sign the auth challenge and exchange it for a JWT.

    Raises:
        CryptoError: If the account key cannot sign.
        RemoteError: If Paradex rejects the challenge.
    """
    headers = composer.compose_auth_headers()
    response = await client.authenticate(headers.as_dict())
    session = AuthSession(
        jwt_token=response.jwt_token,
        account_address=composer.account_address,
        issued_at=float(headers.timestamp),
    )
    logger.info(
        "paradex_authenticated",
        account=composer.account_address,
        signature_expiration=headers.expiration,
    )
    return session


class SessionHolder:
    """Holds the latest AuthSession. publish() is the refresher's callback."""

    def __init__(self, session: AuthSession | None = None) -> None:
        self._session = session

    def publish(self, session: AuthSession) -> None:
        self._session = session

    @property
    def current(self) -> AuthSession | None:
        return self._session

    def require(self) -> AuthSession:
        """Return the current session or raise if none has been published."""
        if self._session is None:
            raise NotAuthenticatedError("No Paradex session; authenticate first")
        return self._session
