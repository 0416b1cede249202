"""
bankscraper.bankresults
=================================

Output and statistics over already-extracted transactions.

Records are converted to a :class:`pandas.DataFrame` with the published
column names (``Account``, ``Transaction``, ``Amount``, ``Currency``) and
written as JSON or CSV. :func:`summarize` aggregates a run for logging.
"""

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from .bankscraper import TransactionRecord

logger = logging.getLogger(__name__)

COLUMNS = ["Account", "Transaction", "Amount", "Currency"]
JSON_FILE_MODE = 0o644


@dataclass
class ScrapeStats:
    """Totals for one run: record count, amount per currency, rows per account."""

    count: int = 0
    totals_by_currency: dict[str, int] = field(default_factory=dict)
    count_by_account: dict[str, int] = field(default_factory=dict)


def to_dataframe(records: Iterable[TransactionRecord]) -> pd.DataFrame:
    rows = [r.to_dict() for r in records]
    if not rows:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(records: Iterable[TransactionRecord]) -> ScrapeStats:
    dframe = to_dataframe(records)
    if dframe.empty:
        return ScrapeStats()
    totals = dframe.groupby("Currency", sort=True)["Amount"].sum()
    counts = dframe.groupby("Account", sort=True).size()
    return ScrapeStats(
        count=len(dframe),
        totals_by_currency={str(k): int(v) for k, v in totals.items()},
        count_by_account={str(k): int(v) for k, v in counts.items()},
    )


def write_json(
    records: Iterable[TransactionRecord], path: str | Path, indent: int = 2,
) -> Path:
    """
    Write records as a JSON array of objects, atomically.

    The payload is written to a temporary file next to ``path`` and then
    moved into place so an interrupted run never leaves a partial file.
    Currency symbols are kept as-is (no ASCII escaping).
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    payload = [r.to_dict() for r in records]
    tmp_fd, tmp_path = tempfile.mkstemp(dir=out.parent)
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=indent)
        # mkstemp creates the file owner-only
        Path(tmp_path).chmod(JSON_FILE_MODE)
    except BaseException:
        with contextlib.suppress(OSError):
            Path(tmp_path).unlink()
        raise
    Path(tmp_path).replace(out)
    logger.info("Saved JSON to: %s (%d records)", out, len(payload))
    return out


def write_csv(records: Iterable[TransactionRecord], path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    dframe = to_dataframe(records)
    dframe.to_csv(out, index=False, encoding="utf-8")
    logger.info("Saved CSV to: %s (%d records)", out, len(dframe))
    return out
