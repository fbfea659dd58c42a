"""Errors raised while validating pairs and looking up reserves."""

from typing import Any, Optional


class ApiError(Exception):
    """Base exception for pair validation and reserve lookups.

    ``message`` keeps the bare detail; ``str()`` adds the class prefix.
    """

    prefix = "Reserve lookup failed"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"{self.prefix}: {message}")


class HttpError(ApiError):
    """Subgraph unreachable: connection failure or timeout."""

    prefix = "Subgraph unreachable"


class NotFoundError(ApiError):
    """Subgraph endpoint answered 404."""

    prefix = "Subgraph not found"


class PairNotFoundError(NotFoundError):
    """The subgraph has no pair for the two tokens."""

    prefix = "Pair not found"

    def __init__(self, token_a: str, token_b: str):
        self.token_a = token_a
        self.token_b = token_b
        super().__init__(f"no pair for tokens {token_a} and {token_b}")


class BadRequestError(ApiError):
    """Subgraph rejected the query (400)."""

    prefix = "Query rejected"


class RateLimitedError(ApiError):
    """Subgraph gateway throttled the request (429)."""

    prefix = "Rate limited"


class ServerError(ApiError):
    """Subgraph failed: a 5xx status or GraphQL ``errors`` in the body."""

    prefix = "Subgraph error"


class DeserializeError(ApiError):
    """Subgraph body is not JSON or lacks the pair fields."""

    prefix = "Malformed subgraph response"


class InvalidParameterError(ApiError):
    """Caller-supplied pair or address is invalid."""

    prefix = "Invalid parameter"


class InvalidPairError(InvalidParameterError):
    """Pair identifier is not of the form tokenAddress_tokenAddress."""


class InvalidAddressError(InvalidParameterError):
    """Token address fails hex or checksum validation."""


class UnexpectedStatusError(ApiError):
    """Subgraph answered with a status no other error covers."""

    prefix = "Unexpected status"

    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(f"{status} {message}")
        self.message = message


def extract_error_message(body: Any) -> Optional[str]:
    """Pull an error message out of a decoded subgraph body.

    Understands GraphQL ``{"errors": [{"message": ...}]}`` and the plain
    ``{"error": ...}`` / ``{"message": ...}`` bodies hosted gateways send.
    Returns None when the body carries no message.
    """
    if not isinstance(body, dict):
        return None

    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return "; ".join(
            str(err.get("message", err)) if isinstance(err, dict) else str(err)
            for err in errors
        )

    message = body.get("error") or body.get("message")
    return str(message) if message else None
