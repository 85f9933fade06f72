"""Custom exceptions for the Paradex trading bot.

Signing, validation and transport errors live here so the signing
pipeline, the exchange client and the order service can share them
without circular imports.
"""


class ParadexBotError(Exception):
    """Base exception for all bot errors."""


class ValidationError(ParadexBotError):
    """Raised for a bad input shape or value, before any signing or network work."""


class ParseError(ParadexBotError):
    """Raised when a numeric string cannot be parsed."""


class CryptoError(ParadexBotError):
    """Raised when a private key is not a valid STARK scalar or signing fails."""


class RemoteError(ParadexBotError):
    """Raised on a non-2xx response or a response that fails schema validation.

    Args:
        status: HTTP status code (0 when the response body was unusable).
        message: Server-provided message, or a description of the failure.
        path: Request path relative to the API base URL.
    """

    def __init__(self, status: int, message: str, path: str = "") -> None:
        self.status = status
        self.message = message
        self.path = path
        super().__init__(f"HTTP {status} on {path or '?'}: {message}")


class NotAuthenticatedError(ParadexBotError):
    """Raised when a bearer-authenticated call is made before any session exists."""
