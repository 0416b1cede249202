"""
bankscraper.bankscraper
=================================

Core extraction runtime: the driver capability, row parsing and the
pagination loop.

The target page renders a fixed-size window of a transaction list inside
its first ``<table>``. A page-side variable (``start``) selects the window
and ``doGenerate()`` re-renders it. :class:`PageScraper` walks the list by
advancing that offset until a render comes back empty.

The public contract:

- PageScraper(driver).extract_all() -> list[TransactionRecord]
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .bankerrors import AmountParseError, MalformedRowError, NoAlertPresentError

logger = logging.getLogger(__name__)

ROW_CELLS = 3

# JS parseInt semantics: optional whitespace and sign, then ASCII digits.
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


# ----------------------------
# Page scripts
# ----------------------------

# Bare names: globals declared with let are not window properties.
SET_OFFSET_JS = "([offset]) => { start = offset; }"
DISABLE_AUTOGENERATE_JS = "() => { generate = function () {}; }"
DISABLE_MODES_JS = "() => { failmode = false; slowmode = false; hasiframe = false; }"
REGENERATE_JS = "async () => { await doGenerate(); }"

# Header row is skipped; an empty result means the list is exhausted.
EXTRACT_ROWS_JS = """
() => {
    const table = document.getElementsByTagName("table")[0];
    if (!table) {
        return [];
    }
    const rows = [];
    const rowElements = table.getElementsByTagName("tr");
    for (let i = 1; i < rowElements.length; i++) {
        const cells = rowElements[i].children;
        const texts = [];
        for (let j = 0; j < cells.length; j++) {
            texts.push(cells[j].innerText);
        }
        rows.push(texts);
    }
    return rows;
}
"""


# ----------------------------
# Driver capability
# ----------------------------


class PageDriver:
    """
    Abstract capability over a remote browser page.

    Implementations wrap a concrete automation backend (see
    :class:`bankscraper.banksession.PlaywrightDriver`). Both operations are
    coroutines; the scraper awaits each one before issuing the next.
    """

    async def dismiss_alert_if_present(self) -> bool:  # pragma: no cover
        """
        Accept a blocking alert if one is showing.

        Returns True when an alert was accepted and False when there was
        none. Implementations that cannot tell may raise
        :class:`NoAlertPresentError` instead of returning False.
        """
        raise NotImplementedError

    async def run_script(self, source: str, *args: Any) -> Any:  # pragma: no cover
        """
        Execute ``source`` in the page and return its result.

        Failures must surface as :class:`bankscraper.bankerrors.ExecutionError`.
        """
        raise NotImplementedError


async def dismiss_alert_if_needed(driver: PageDriver) -> bool:
    """
    Best-effort dismissal of the alert the page may show on load.

    Only the "no alert present" outcome is silenced; any other failure
    raised by the driver propagates.
    """
    try:
        dismissed = await driver.dismiss_alert_if_present()
    except NoAlertPresentError:
        dismissed = False
    logger.debug("dismiss_alert_if_needed: alert dismissed=%s", dismissed)
    return dismissed


# ----------------------------
# Row parsing
# ----------------------------


@dataclass(frozen=True)
class TransactionRecord:
    account: str
    description: str
    amount: int
    currency: str

    def to_dict(self) -> dict[str, Any]:
        """Return the record in its published ``Account/Transaction/...`` shape."""
        return {
            "Account": self.account,
            "Transaction": self.description,
            "Amount": self.amount,
            "Currency": self.currency,
        }


def parse_leading_int(text: str) -> int | None:
    """Parse the integer prefix of ``text``; None when there is none."""
    m = _LEADING_INT.match(text)
    if m is None:
        return None
    return int(m.group(1))


class RowExtractor:
    """
    Convert raw table rows into :class:`TransactionRecord` objects.

    A row is ``[account, description, amount_with_currency]``. The currency
    is the last character of the amount cell; the amount is the integer
    prefix of what remains.
    """

    def parse(self, row: Sequence[str]) -> TransactionRecord:
        if isinstance(row, str) or len(row) != ROW_CELLS:
            raise MalformedRowError(row, ROW_CELLS)

        account, description, amount_cell = row
        currency = amount_cell[-1:]
        amount = parse_leading_int(amount_cell[:-1])
        if amount is None:
            raise AmountParseError(amount_cell)

        return TransactionRecord(
            account=account,
            description=description,
            amount=amount,
            currency=currency,
        )

    def parse_rows(self, rows: Sequence[Sequence[str]]) -> list[TransactionRecord]:
        return [self.parse(r) for r in rows]


# ----------------------------
# Pagination loop
# ----------------------------


@dataclass
class ScrapeSession:
    """State of one extraction run."""

    cursor: int = 0
    cycles: int = 0
    transactions: list[TransactionRecord] = field(default_factory=list)


class PageScraper:
    """
    Walk the paginated transaction table to completion.

    Note: once a driver is handed to a scraper nothing can be assumed about
    its page any more (globals, rendered content, alert state). Do not
    reuse it for anything else afterwards, and never share it between two
    running sessions.
    """

    def __init__(self, driver: PageDriver, extractor: RowExtractor | None = None) -> None:
        self.driver = driver
        self.extractor = extractor or RowExtractor()
        self.cursor = 0
        self.cycles = 0

    async def extract_all(self) -> list[TransactionRecord]:
        """
        Extract every transaction rendered by the page.

        Dismisses the startup alert once, then renders and reads the table
        window by window until a render yields no rows. Records are
        returned in render order. Any driver or parsing error aborts the
        run; nothing collected so far is returned.
        """
        await dismiss_alert_if_needed(self.driver)

        session = ScrapeSession()
        while True:
            rows = await self._render_window(session.cursor)
            session.cycles += 1
            logger.debug(
                "PageScraper: cycle %d offset=%d rows=%d",
                session.cycles,
                session.cursor,
                len(rows),
            )
            if not rows:
                break

            session.transactions.extend(self.extractor.parse_rows(rows))
            session.cursor += len(rows)

        self.cursor = session.cursor
        self.cycles = session.cycles
        logger.info(
            "PageScraper: extracted %d transactions in %d render cycles",
            len(session.transactions),
            session.cycles,
        )
        return session.transactions

    async def _render_window(self, offset: int) -> list[list[str]]:
        """Prepare the page, re-render the table at ``offset`` and read it."""
        run = self.driver.run_script
        # Order matters: the offset must be set before regeneration.
        await run(SET_OFFSET_JS, offset)
        await run(DISABLE_AUTOGENERATE_JS)
        await run(DISABLE_MODES_JS)
        await run(REGENERATE_JS)
        rows = await run(EXTRACT_ROWS_JS)
        return list(rows or [])


async def extract_all(driver: PageDriver) -> list[TransactionRecord]:
    """Shorthand for ``PageScraper(driver).extract_all()``."""
    return await PageScraper(driver).extract_all()
