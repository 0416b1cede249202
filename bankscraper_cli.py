import argparse
import asyncio
import logging
from pathlib import Path

from bankscraper import (
    Config,
    ConfigError,
    PageScraper,
    TransactionRecord,
    load_config,
    open_page,
    summarize,
    to_dataframe,
    write_csv,
    write_json,
)
from bankscraper.bankconfig import validate_config

logger = logging.getLogger(__name__)


async def scrape(cfg: Config) -> list[TransactionRecord]:
    async with open_page(cfg) as driver:
        return await PageScraper(driver).extract_all()


def build_config(args: argparse.Namespace) -> Config:
    cfg = load_config(args.cfg) if args.cfg else Config()
    if args.url:
        cfg.base_url = args.url
    if args.headed:
        cfg.headless = False
    if args.json:
        cfg.output.json_path = Path(args.json)
    if args.csv:
        cfg.output.csv_path = Path(args.csv)
    if args.log_level:
        cfg.log_level = args.log_level
    return validate_config(cfg)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Extract paginated transactions from a page")
    ap.add_argument("--cfg", type=str, default="", help="Optional path to config JSON")
    ap.add_argument("--url", type=str, default="", help="Page URL (overrides config)")
    ap.add_argument("--json", type=str, default="", help="Optional path to export JSON")
    ap.add_argument("--csv", type=str, default="", help="Optional path to export CSV")
    ap.add_argument("--headed", action="store_true", help="Show the browser window")
    ap.add_argument("--log-level", type=str, default="")
    args = ap.parse_args(argv)

    try:
        cfg = build_config(args)
    except ConfigError as e:
        ap.error(str(e))
    logging.basicConfig(level=cfg.log_level)
    if not cfg.base_url:
        ap.error("a page URL is required (--url or base_url in --cfg)")

    records = asyncio.run(scrape(cfg))

    stats = summarize(records)
    logger.info(
        "Transactions: %s | Totals: %s | Accounts: %s",
        stats.count,
        stats.totals_by_currency,
        len(stats.count_by_account),
    )
    logger.info("\n%s", to_dataframe(records).head(10).to_string(index=False))

    if cfg.output.json_path:
        write_json(records, cfg.output.json_path, indent=cfg.output.indent)
    if cfg.output.csv_path:
        write_csv(records, cfg.output.csv_path)


if __name__ == "__main__":
    main()
