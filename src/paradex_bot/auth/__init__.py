"""Authentication lifecycle -- JWT sessions and background refresh."""

from paradex_bot.auth.refresher import TokenRefresher
from paradex_bot.auth.session import SessionHolder, authenticate

__all__ = ["SessionHolder", "TokenRefresher", "authenticate"]
