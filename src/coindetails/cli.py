"""Command-line entry point that renders a saved snapshot in a display currency.

Usage:
    coindetails SNAPSHOT.json [--currency EUR] [--rank 3] \
        [--ma120-all FILE] [--vol120-all FILE] \
        [--ma120-venue FILE] [--vol120-venue FILE]

The chosen currency is stored as the last selection and used when
`--currency` is omitted next time.
"""

import argparse
import asyncio
import json
import math
import sys
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

from loguru import logger

from coindetails import __version__
from coindetails.config import Settings
from coindetails.logging_config import setup_logging
from coindetails.models import CoinSnapshot
from coindetails.preferences import Preferences, PreferenceStore
from coindetails.series import ChartPayloads
from coindetails.session import CoinDetailsSession


def _read_json(path: Path | None) -> Any:
    if path is None:
        return None
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def to_json_safe(value: Any) -> Any:
    """Replaces NaN and infinities with None so the output is strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_json_safe(item) for item in value]
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coindetails",
        description="Convert and format a coin snapshot for display.",
    )
    parser.add_argument("snapshot", type=Path, help="Symbol lookup JSON file.")
    parser.add_argument("--currency", help="Display currency code (e.g. EUR).")
    parser.add_argument("--rank", type=int, help="Market-cap rank to display.")
    parser.add_argument("--ma120-all", type=Path, dest="ma120_all")
    parser.add_argument("--vol120-all", type=Path, dest="vol120_all")
    parser.add_argument("--ma120-venue", type=Path, dest="ma120_venue")
    parser.add_argument("--vol120-venue", type=Path, dest="vol120_venue")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


async def main_async(argv: Sequence[str] | None = None) -> int:
    """Loads inputs, assembles the view and prints it as JSON."""
    args = build_parser().parse_args(argv)
    settings = Settings.get_instance()
    log_dir = (
        Path(settings.general.log_directory)
        if settings.general.log_directory
        else None
    )
    setup_logging(
        console_level=settings.general.log_level_console,
        file_level=settings.general.log_level_file,
        log_dir=log_dir,
    )

    store = PreferenceStore(Path(settings.preferences.preferences_file))
    stored = await store.load()
    currency = args.currency or stored.selected_currency
    rank = args.rank if args.rank is not None else stored.rank

    session = CoinDetailsSession(settings.display, currency=currency, rank=rank)
    try:
        snapshot = CoinSnapshot.from_payload(_read_json(args.snapshot))
        charts = ChartPayloads(
            ma120_all=_read_json(args.ma120_all),
            vol120_all=_read_json(args.vol120_all),
            ma120_venue=_read_json(args.ma120_venue),
            vol120_venue=_read_json(args.vol120_venue),
        )
        session.set_snapshot(snapshot)
        view = session.set_charts(charts)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logger.error(f"Could not load input data: {e}")
        return 1

    print(
        json.dumps(
            to_json_safe(asdict(view)),
            indent=2,
            ensure_ascii=False,
            allow_nan=False,
            default=str,
        )
    )

    await store.save(Preferences(selected_currency=session.currency, rank=rank))
    return 0


def main() -> None:
    """The synchronous entry point for the console script."""
    try:
        sys.exit(asyncio.run(main_async()))
    except Exception:
        logger.exception("An unhandled exception reached the top-level entry point.")
        sys.exit(1)


if __name__ == "__main__":
    main()
