"""
Error taxonomy for roster and grouping operations.

Every failure leaves the caller in its previous, valid state; callers decide
how to surface the message (HTTP response, CLI output).
"""

from __future__ import annotations


class FoursomeError(Exception):
    """Base class for all roster/grouping failures."""


class ValidationFailure(FoursomeError):
    """Input rejected locally before any store call."""


class ImportFormatError(ValidationFailure):
    """Spreadsheet is missing required columns."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}")


class StoreFailure(FoursomeError):
    """The record store returned an error or could not be reached."""


class InsufficientPlayers(FoursomeError):
    """Grouping needs at least two players."""

    def __init__(self, count: int, minimum: int = 2):
        self.count = count
        self.minimum = minimum
        super().__init__(f"Need at least {minimum} players to generate foursomes, got {count}")
