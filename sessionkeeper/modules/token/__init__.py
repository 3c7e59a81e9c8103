"""
Token Module - Black Box Interface

Purpose: Read claims out of bearer tokens and decide whether they expired
Interface: decode_token(), get_role(), get_user_id(), is_expired(), is_token_expired()
Hidden: Segment layout, base64url handling, clock source

Decoding is a read-only convenience. Nothing here verifies a signature.
"""

from .codec import decode_token, get_role, get_user_id
from .expiry import is_expired, is_token_expired

__all__ = ["decode_token", "get_role", "get_user_id", "is_expired", "is_token_expired"]
