#!/usr/bin/env python3
"""Console view of the live game day metrics.

Connects to the realtime broker, fetches forecasts and the historical
series once, then prints a summary line whenever a metric changes.
Configuration is read from ``GAMEDAY_*`` environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pygameday import (  # noqa: E402
    ConnectionState,
    GameDayClient,
    GameDayConfig,
    GameDayError,
    MetricState,
    format_currency,
    format_number,
)

_LOG = logging.getLogger("live_dashboard")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print live game day metrics.")
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Skip the historical series fetch.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


def _print_summary(client: GameDayClient) -> None:
    summary = client.summary()
    utilization = "N/A" if summary.utilization is None else f"{summary.utilization}%"
    anomaly = " [parking anomaly]" if summary.parking_anomaly else ""
    as_of = summary.forecast_fetched_at.strftime("%H:%M:%S") if summary.forecast_fetched_at else "none"
    print(
        f"[live] attendance {format_number(summary.attendance)}"
        f" / {format_number(summary.attendance_target)} ({summary.attendance_status.label})"
        f" | sales {format_currency(summary.sales)}"
        f" avg {format_currency(summary.average_per_person)}"
        f" items {format_number(summary.items_sold)}"
        f" | parking {utilization} of {format_number(summary.total_capacity)}{anomaly}"
        f" | forecast {as_of}"
    )


async def _run(args: argparse.Namespace) -> int:
    config = GameDayConfig.from_env()
    async with GameDayClient(config) as client:

        def on_update(_state: MetricState) -> None:
            _print_summary(client)

        def on_state(state: ConnectionState) -> None:
            print(f"[live] connection {state}")

        client.store.subscribe(on_update)
        client.bridge.add_state_listener(on_state)

        try:
            await client.fetch_forecasts()
        except GameDayError as exc:
            _LOG.warning("Forecast fetch failed: %s", exc)

        if not args.no_history:
            points = await client.refresh_historical()
            print(f"[live] historical points: {len(points)}")

        _print_summary(client)
        await client.start_realtime()
        try:
            if args.duration > 0:
                await asyncio.sleep(args.duration)
            else:
                await asyncio.Event().wait()
        finally:
            await client.stop_realtime()
    return 0


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(_main())
