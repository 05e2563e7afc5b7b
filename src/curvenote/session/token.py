"""Early sanity checks for API bearer tokens.

The token signature is *not* verified here -- only the API can do that.
Decoding the claims locally gives quick feedback for the two common
mistakes: pasting something that is not a token at all, and using a token
that has already expired.
"""

from __future__ import annotations

import time
from typing import Any

from jose import JWTError, jwt

from curvenote.exceptions import TokenExpiredError, TokenInvalidError
from curvenote.output import OutputManager

EXPIRY_WARNING_SECONDS = 5 * 60


def decode_claims(token: str) -> dict[str, Any]:
    """Return the unverified claims of *token*.

    Raises:
        TokenInvalidError: If the token cannot be decoded, or its claims
            carry no numeric ``exp``.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise TokenInvalidError(
            "Could not decode session token. Please ensure that the API token is valid."
        ) from exc
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise TokenInvalidError("The API token does not carry an expiry ('exp') claim.")
    return claims


def assert_token_will_work(token: str, log: OutputManager, now: float | None = None) -> float:
    """Check that *token* decodes and has not expired.

    A token with less than five minutes left only produces a warning.

    Args:
        token: The raw bearer token.
        log: Where to send the near-expiry warning.
        now: Current time in epoch seconds; defaults to :func:`time.time`.

    Returns:
        Seconds of validity left.

    Raises:
        TokenInvalidError: If the token cannot be decoded.
        TokenExpiredError: If the ``exp`` claim lies in the past.
    """
    claims = decode_claims(token)
    if now is None:
        now = time.time()
    time_left = float(claims["exp"]) - now
    if time_left < 0:
        raise TokenExpiredError("The API token has expired.")
    if time_left < EXPIRY_WARNING_SECONDS:
        log.warning("The API token has less than five minutes remaining.")
    return time_left
