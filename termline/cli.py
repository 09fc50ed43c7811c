# cli.py

import argparse
import sys
from typing import List, Optional

from .config import ClientConfig, MATH_MODES
from .errors import ConfigError
from .interface import Interface


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termline",
        description="Terminal client for a remote interactive program"
    )
    parser.add_argument('-e', '--endpoint',
        help='Base URL of the remote terminal (default: $TERMLINE_ENDPOINT or http://127.0.0.1:8080)')
    parser.add_argument('--poll-interval', type=float,
        help='Seconds between transcript polls (default: 0.3)')
    parser.add_argument('--timeout', type=float,
        help='HTTP request timeout in seconds (default: 30)')
    parser.add_argument('--state-path', help='Transcript endpoint path (default: /api/state)')
    parser.add_argument('--validate-path', help='Validation endpoint path (default: /api/validate)')
    parser.add_argument('--submit-path', help='Submission endpoint path (default: /api/input)')
    parser.add_argument('--math', choices=MATH_MODES,
        help='Math rendering mode (default: unicode)')
    parser.add_argument('--exit-when-finished', dest='stop_when_finished',
        action='store_true', default=None,
        help='Stop polling once the remote program has finished')
    parser.add_argument('--enable-logging', dest='logging_enabled',
        action='store_true', default=None,
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stdout)')
    return parser


def config_from_args(args: argparse.Namespace) -> ClientConfig:
    return ClientConfig.from_dict(vars(args)).validate()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
    except ConfigError as e:
        print(f"termline: {e}", file=sys.stderr)
        return 2

    Interface(config=config).start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
