"""Expiry policy for decoded token payloads."""

import time
from typing import Any, Dict, Optional

from .codec import decode_token


def is_expired(payload: Optional[Dict[str, Any]], now: Optional[float] = None) -> bool:
    """
    Check whether a decoded payload has expired.

    Args:
        payload: Decoded token payload (None means undecodable)
        now: Current time in seconds since epoch (defaults to wall clock)

    Returns:
        True if expired or undecodable. Payloads without ``exp`` never expire.
    """
    if payload is None:
        return True

    exp = payload.get("exp")
    if not exp:
        return False

    try:
        exp_ms = float(exp) * 1000
    except OverflowError:
        # Past any representable time
        return False
    except (TypeError, ValueError):
        # Not comparable to a timestamp, so it can never be "in the past"
        return False

    now_ms = (time.time() if now is None else now) * 1000
    return exp_ms < now_ms


def is_token_expired(token: Optional[str], now: Optional[float] = None) -> bool:
    """Decode a token and apply is_expired() to its payload."""
    return is_expired(decode_token(token), now=now)
