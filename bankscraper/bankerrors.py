"""
bankscraper.bankerrors
=================================

Exception hierarchy shared by the scraper runtime.

Every error raised on purpose by the package derives from
:class:`BankScraperError` so callers can catch the whole family at once.
Parsing errors also derive from :class:`ValueError`.
"""


class BankScraperError(Exception):
    """Base class for all scraper errors."""


class ExecutionError(BankScraperError):
    """
    A driver or in-page script failed.

    Raised for transport failures and script exceptions alike. The
    underlying browser error, when there is one, is chained as
    ``__cause__``. The scraper never retries these.
    """


class NoAlertPresentError(BankScraperError):
    """No blocking alert was showing when dismissal was attempted."""


class MalformedRowError(BankScraperError, ValueError):
    """A table row did not contain exactly the expected cells."""

    def __init__(self, row: object, expected: int = 3) -> None:
        self.row = row
        self.expected = expected
        super().__init__(f"Expected {expected} cells, got row {row!r}")


class AmountParseError(BankScraperError, ValueError):
    """The amount cell holds no leading integer once its currency is removed."""

    def __init__(self, cell: str) -> None:
        self.cell = cell
        super().__init__(f"No integer amount in cell {cell!r}")


class ConfigError(BankScraperError, ValueError):
    """The loaded configuration holds an unsupported value."""
