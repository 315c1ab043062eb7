#!/usr/bin/env python3
"""
vlive-notify: get told when new VLive videos go up.

Usage:
    python main.py watch                # Poll forever, print each new video
    python main.py watch --interval 5   # Custom poll interval (seconds)
    python main.py watch --email        # Also email each new video
    python main.py check                # Fetch the listing once and print it
"""

import argparse
import logging
import sys

from collectors import TransientFetchError, VLiveFetcher, build_feed_url, parse_snapshot
from config import load_config
from delivery import EmailSink, deliver_cli, format_record
from models import Record
from notifier import Notifier


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def cmd_watch(config, args):
    """Run the notifier in the foreground until Ctrl-C."""
    sinks = [deliver_cli]
    if args.email:
        if not config.smtp_host:
            print("Error: --email needs VLIVE_SMTP_HOST and VLIVE_EMAIL_TO.", file=sys.stderr)
            sys.exit(1)
        sinks.append(EmailSink(config).on_new)

    def on_new(record: Record):
        for sink in sinks:
            sink(record)

    notifier = Notifier(on_new, poll_interval=args.interval, config=config)
    print(f"Watching {notifier.url} every {notifier.poll_interval}s (Ctrl-C to stop)")
    notifier.run()


def cmd_check(config) -> int:
    """Fetch one snapshot and print it, freshest first."""
    fetcher = VLiveFetcher(config)
    url = build_feed_url(config)
    try:
        raw = fetcher.fetch(url)
    except TransientFetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        fetcher.close()

    records = parse_snapshot(raw)
    if not records:
        print("No videos found.")
        return 0

    for record in records:
        print(format_record(record))
    return len(records)


def cli():
    parser = argparse.ArgumentParser(
        prog="vlive-notify",
        description="Watch the VLive recent-videos listing and report new uploads",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    watch_parser = sub.add_parser("watch", parents=[common], help="Poll and report new videos")
    watch_parser.add_argument(
        "--interval", type=float, default=None,
        help="Seconds between polls (default VLIVE_POLL_INTERVAL or 10)",
    )
    watch_parser.add_argument("--email", action="store_true", help="Also email each new video")

    sub.add_parser("check", parents=[common], help="Fetch the listing once and print it")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)
    config = load_config()

    match args.command:
        case "watch":
            cmd_watch(config, args)
        case "check":
            cmd_check(config)
        case _:
            parser.print_help()


if __name__ == "__main__":
    cli()
