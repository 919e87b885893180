"""Command line interface for the Delhi bus tracker."""

import argparse
import asyncio
import json
import sys

import aiohttp

from delhi_bus_tracker.adapters.web.serializers import stats_payload, vehicles_payload
from delhi_bus_tracker.main import build_pipeline, configure_logging, load_config, main


async def run_once(as_json: bool = False) -> int:
    """Run a single pipeline cycle and print the result.

    Returns:
        Process exit code: 0 if a snapshot was published, 1 otherwise.
    """
    config = load_config()

    async with aiohttp.ClientSession() as session:
        pipeline = build_pipeline(config, session)
        snapshot = await pipeline.publisher.run_cycle()

    if snapshot is None:
        failure = pipeline.publisher.status.last_failure
        reason = f"{failure.kind}: {failure.reason}" if failure else "no snapshot published"
        print(f"Cycle failed ({reason})", file=sys.stderr)
        return 1

    if as_json:
        payload = vehicles_payload(snapshot, snapshot.vehicles)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    stats = stats_payload(pipeline.query.fleet_stats())
    print(f"\nSnapshot at {snapshot.captured_at.isoformat()}")
    if snapshot.feed_timestamp is not None:
        print(f"Feed timestamp: {snapshot.feed_timestamp.isoformat()}")
    print("=" * 40)
    for category, count in stats["categories"].items():
        print(f"  {category:<10} {count:>6}")
    print("-" * 40)
    print(f"  {'TOTAL':<10} {stats['total']:>6}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Delhi realtime bus tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Poll the feed and serve the vehicle API
  delhi-bus-tracker serve

  # Fetch one snapshot and print fleet counts
  delhi-bus-tracker once

  # Fetch one snapshot and dump every vehicle
  delhi-bus-tracker once --json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    subparsers.add_parser("serve", help="Poll the feed and serve the HTTP API (default)")
    once_parser = subparsers.add_parser("once", help="Run one cycle and print the result")
    once_parser.add_argument("--json", action="store_true", help="Output vehicles as JSON")
    return parser


def cli_main(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the CLI command."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        if args.command == "once":
            sys.exit(asyncio.run(run_once(as_json=args.json)))
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
