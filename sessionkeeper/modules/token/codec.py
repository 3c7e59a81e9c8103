"""
Bearer token decoding.

Tokens are compact ``header.payload.signature`` strings. Only the payload is
read; the signature is never checked.
"""

import json
import logging
from typing import Any, Dict, Optional

from jwt.utils import base64url_decode

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    """NaN and Infinity are not JSON."""
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Decode the payload of a bearer token without verification.

    Args:
        token: Token string

    Returns:
        Payload dict, or None if the token is missing or malformed
    """
    if not token:
        return None

    parts = token.split(".")
    if len(parts) != 3:
        return None

    try:
        payload = json.loads(
            base64url_decode(parts[1]).decode("utf-8"),
            parse_constant=_reject_constant,
        )
    except (TypeError, ValueError, RecursionError) as e:
        # binascii.Error, JSONDecodeError and UnicodeDecodeError are all ValueErrors;
        # RecursionError comes from deeply nested payloads
        logger.debug(f"Error decoding token: {e}")
        return None

    if not isinstance(payload, dict):
        logger.debug("Token payload is not a JSON object")
        return None

    return payload


def get_role(token: Optional[str]) -> Optional[str]:
    """Get the ``role`` claim from a token, or None."""
    decoded = decode_token(token)
    if not decoded:
        return None
    return decoded.get("role") or None


def get_user_id(token: Optional[str]) -> Optional[str]:
    """Get the user identifier from a token (``userId``, falling back to ``id``)."""
    decoded = decode_token(token)
    if not decoded:
        return None
    return decoded.get("userId") or decoded.get("id") or None
