#!/usr/bin/env python3
"""
Send a single test ping using analytics_config.py

Usage:
    python -m usage_analytics --action just-a-test --metadata foo=bar
"""

import argparse
import logging
import sys
import urllib.parse

from .config import configure_debug_logging, load_settings
from .dispatcher import PingDispatcher
from .encoder import EventEncoder


def parse_metadata(items):
    """Turn KEY=VALUE arguments into a dict"""
    metadata = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Metadata must be KEY=VALUE, got {item!r}")
        metadata[key] = value
    return metadata


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Send a usage analytics test ping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Send a test event:
    python3 -m usage_analytics --action just-a-test

  Show the encoded form body without sending:
    python3 -m usage_analytics --metadata foo=bar --dry-run
        """
    )
    parser.add_argument('--action', '-a', default='just-a-test', help='Event action')
    parser.add_argument('--metadata', '-m', nargs='*', metavar='KEY=VALUE', help='Event metadata')
    parser.add_argument('--dry-run', action='store_true', help='Print the form body instead of sending')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log transport details to stderr')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    configure_debug_logging()

    try:
        metadata = parse_metadata(args.metadata)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    settings = load_settings()
    if settings is None:
        print("analytics_config.py not found - copy analytics_config.example.py and fill it in", file=sys.stderr)
        return 1

    encoder = EventEncoder(settings)
    payload = encoder.build_payload(settings.plugin_name, args.action, metadata or None)

    if args.dry_run:
        print(urllib.parse.urlencode(payload))
        return 0

    if not settings.is_tracking_enabled():
        print("Usage tracking disabled (TELEMETRY_ENABLED = False)")
        return 0

    PingDispatcher(settings.user_agent).send(payload, background=False)
    print(f"Ping dispatched: /virtual/{settings.plugin_name}/{args.action}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
