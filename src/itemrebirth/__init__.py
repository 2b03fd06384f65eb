"""ItemRebirth — a personal lost-and-found item registry."""

__version__ = "0.1.0"
