#!/usr/bin/env python3
"""Terminal dashboard for a SmartFarmer edge node.

Usage
-----
Point the script at the node (or set ``SMARTFARMER_BASE_URL``)::

    python scripts/dashboard.py --base-url http://192.168.4.1 watch
    python scripts/dashboard.py status
    python scripts/dashboard.py toggle

Commands::

    watch     Poll continuously and print the dashboard on every update
    status    Poll once and print the dashboard
    toggle    Poll once, flip the pump and print the reconciled dashboard

Options::

    --base-url URL       Node root URL
    --interval SECONDS   Poll interval (watch only)
    --timeout SECONDS    Per-request timeout
    --discard-stale      Drop out-of-order responses
    --duration SECONDS   Stop watching after this long
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysmartfarmer import DashboardPanel, DashboardView, NodeConfig, render_text  # noqa: E402
from pysmartfarmer.exceptions import SmartFarmerError  # noqa: E402
from pysmartfarmer.state.events import RequestChannel  # noqa: E402


def _print_view(view: DashboardView) -> None:
    print(render_text(view))
    print()


def _build_config(args: argparse.Namespace) -> NodeConfig:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.discard_stale:
        overrides["discard_stale_responses"] = True
    return NodeConfig.from_env(**overrides)


async def _watch(config: NodeConfig, duration: float | None) -> int:
    def _on_error(channel: RequestChannel, exc: SmartFarmerError) -> None:
        if channel is RequestChannel.TELEMETRY and panel.state.link_stale:
            failures = panel.state.consecutive_poll_failures
            age = panel.state.snapshot_age()
            since = "no data yet" if age is None else f"last update {age:.0f}s ago"
            print(f"! node unreachable ({failures} failed polls, {since}), values may be stale", file=sys.stderr)

    async with DashboardPanel(config, on_render=_print_view, on_error=_on_error) as panel:
        panel.start()
        with contextlib.suppress(asyncio.CancelledError):
            if duration is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(duration)
    return 0


async def _status(config: NodeConfig) -> int:
    async with DashboardPanel(config) as panel:
        snapshot = await panel.refresh()
        if snapshot is None:
            print("Node did not return telemetry", file=sys.stderr)
            return 1
        _print_view(panel.view)
    return 0


async def _toggle(config: NodeConfig) -> int:
    async with DashboardPanel(config) as panel:
        if await panel.refresh() is None:
            print("Node did not return telemetry; toggling from unknown state", file=sys.stderr)
        request = panel.toggle_pump()
        print("Requested:")
        _print_view(panel.view)
        confirmed = await request
        if confirmed is None:
            print("Pump request failed; next poll will show the real state", file=sys.stderr)
            return 1
        print("Confirmed by node:")
        _print_view(panel.view)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Monitor and control a SmartFarmer edge node.")
    parser.add_argument("command", choices=("watch", "status", "toggle"))
    parser.add_argument("--base-url", help="Node root URL (default: SMARTFARMER_BASE_URL or http://192.168.4.1)")
    parser.add_argument("--interval", type=float, help="Seconds between polls")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--discard-stale", action="store_true", help="Drop responses older than the last applied one")
    parser.add_argument("--duration", type=float, help="Stop watching after this many seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = _build_config(args)
    except SmartFarmerError as exc:
        parser.error(str(exc))

    if args.command == "watch":
        coro = _watch(config, args.duration)
    elif args.command == "status":
        coro = _status(config)
    else:
        coro = _toggle(config)

    try:
        sys.exit(asyncio.run(coro))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
