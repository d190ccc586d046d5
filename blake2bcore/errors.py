"""Exceptions raised by :mod:`blake2bcore`.

Both concrete errors are raised at the call boundary before any state is
touched, so a failed call leaves its context exactly as it was.
"""

from __future__ import annotations


class Blake2bError(Exception):
    """Base error for the hash engine."""


class InvalidParameter(Blake2bError, ValueError):
    """Raised when the digest size, key length or an F input is out of range."""


class InvalidUsage(Blake2bError, RuntimeError):
    """Raised when a streaming context is used after it was finalized."""
