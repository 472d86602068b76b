"""Free-to-read article recommendations that fit a reading-time budget."""

__version__ = "1.0.0"
