# main.py
import argparse
import json
import logging
import sys

from api.api import build_report
from config import get_settings
from history import load_history


def print_json(obj):
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive phishing risk check for URLs.")
    parser.add_argument("--history", help="Browsing-history export (.json, .jsonl, .csv)")
    parser.add_argument("--page", action="store_true", help="Also fetch and analyze page content")
    parser.add_argument("--log-level", default=None, help="Logging level (default from PHISH_LOG_LEVEL)")
    return parser


def main_loop(visits=(), include_page=False):
    print("PhishGuard - URL risk check\n")
    while True:
        try:
            url = input("Enter URL to analyze (press Enter to exit): ").strip()
            if url == "":
                break
            print_json(build_report(url, visits, include_page=include_page))
        except (KeyboardInterrupt, EOFError):
            break


def main() -> None:
    args = build_parser().parse_args()
    configure_logging(args.log_level or get_settings().log_level)

    visits = []
    if args.history:
        try:
            visits = load_history(args.history)
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Could not read history file {args.history}: {exc}", file=sys.stderr)
            sys.exit(1)

    main_loop(visits, include_page=args.page)


if __name__ == "__main__":
    main()
