"""Exception types shared across the package."""

from __future__ import annotations


class ItemRebirthError(Exception):
    """Base class for item registry errors."""


class StoreWriteError(ItemRebirthError):
    """The data file could not be rewritten."""
