"""Errors raised by sessionkeeper modules."""


class SessionKeeperError(Exception):
    """Base class for all sessionkeeper errors."""


class PreconditionViolation(SessionKeeperError, ValueError):
    """Login called without a usable module or token."""


class StorageError(SessionKeeperError):
    """Base class for storage failures."""


class StorageUnavailable(StorageError):
    """Backend cannot be reached at all. Never retried."""


class StorageQuotaExceeded(StorageError):
    """Backend refused a write because it is out of capacity."""


class VerificationFailure(StorageError):
    """A written token did not read back identical to what was written."""
