"""Exceptions raised by gfshare.

Every error is a ValueError so callers can catch bad input uniformly.
"""

from __future__ import annotations


class SharingError(ValueError):
    """Base class for all gfshare errors."""


class InvalidParametersError(SharingError):
    """Threshold or share count outside [1, 255], k > n, or an empty secret."""


class FieldDivisionError(SharingError, ZeroDivisionError):
    """Division by zero or inversion of zero in GF(256)."""


class DuplicateShareError(SharingError):
    """Two shares passed to recovery carry the same x-coordinate."""


class InconsistentSharesError(SharingError):
    """Shares passed to recovery cannot belong to the same secret."""


class InsufficientSharesError(InconsistentSharesError):
    """Too few shares to run interpolation."""


class MalformedShareError(SharingError):
    """An encoded share is empty or truncated, or a Share has invalid fields."""
