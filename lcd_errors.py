# lcd_errors.py
#
# Exception hierarchy for the LCD asset code tools.
# Every failure is terminal for the whole run: nothing here is retried.

from __future__ import annotations


class AssetCodeError(Exception):
    """Base exception for all asset code failures."""


class AssetConfigError(AssetCodeError):
    """Raised for invalid runtime configuration."""


class RowLengthError(AssetCodeError):
    """Raised when an input row is not exactly 4 characters long."""

    def __init__(self, row_number: int, row: str) -> None:
        self.row_number = row_number
        self.row = row
        super().__init__(f"Incorrect Asset ID length found on row {row_number}")


class DigitParseError(AssetCodeError):
    """Raised when an input row holds a character that is not a decimal digit."""

    def __init__(self, row_number: int, token: str) -> None:
        self.row_number = row_number
        self.token = token
        super().__init__(f'Invalid digit "{token}" on row {row_number}')


class UnsupportedDigitError(AssetCodeError):
    """Raised when a value has no entry in the digit encoding table."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"No encoding for given digit: {value}")


class AssetIOError(AssetCodeError):
    """Raised for source reads, output directory/file creation and PNG writes."""
