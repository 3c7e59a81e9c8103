"""
HTTP Module - Black Box Interface

Purpose: Carry a module's session on outgoing HTTP requests
Interface: ModuleTokenAuth
Hidden: Header format, token lookup
"""

from .auth import ModuleTokenAuth

__all__ = ["ModuleTokenAuth"]
