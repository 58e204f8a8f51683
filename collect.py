"""Batch scoring of URL lists."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from api.api import build_report
from config import get_settings
from history import load_history
from models import HistoryVisit

logger = logging.getLogger(__name__)

# Columns serialized as JSON strings in CSV output
NESTED_COLUMNS = ("issues", "familiarity", "page_issues")


def _detect_format(path: Path, explicit: Optional[str], known: Dict[str, str], default: str) -> str:
    if explicit:
        return explicit.lower()
    return known.get(path.suffix.lower(), default)


def _read_urls(path: Path, input_format: str) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        if input_format == "csv":
            for row in csv.DictReader(handle):
                url = (row.get("url") or row.get("URL") or "").strip()
                if url:
                    yield {"url": url, "label": row.get("label") or None}
            return

        for line in handle:
            raw = line.strip()
            if not raw or raw.startswith("#"):
                continue
            if input_format == "txt":
                yield {"url": raw, "label": None}
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Skipping unparseable line: %r", raw)
                continue
            if isinstance(data, str):
                data = {"url": data}
            if isinstance(data, dict) and str(data.get("url", "")).strip():
                yield {"url": str(data["url"]).strip(), "label": data.get("label")}


def summarize(report: Dict, label: Optional[str]) -> Dict:
    """Flatten one report into an output row."""
    assessment = report.get("assessment") or {}
    page = report.get("page") or {}
    page_issues: List[str] = []
    for part in ("form", "content"):
        page_issues.extend((page.get(part) or {}).get("issues", []))

    return {
        "url": report.get("url"),
        "label": label,
        "internal": report.get("internal", False),
        "risk_level": assessment.get("risk_level"),
        "score": assessment.get("score"),
        "warn": report.get("warn", False),
        "issues": assessment.get("issues", []),
        "familiarity": assessment.get("familiarity"),
        "page_issues": page_issues,
        "page_error": page.get("error"),
    }


def _write_jsonl(rows: Iterable[Dict], path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        for row in rows:
            handle.write(json.dumps(row, ensure_ascii=False))
            handle.write("\n")


def _write_csv(rows: Sequence[Dict], path: Path) -> None:
    if not rows:
        return
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        for row in rows:
            row = dict(row)
            for column in NESTED_COLUMNS:
                row[column] = json.dumps(row[column], ensure_ascii=False)
            writer.writerow(row)


def run_collect(
    input_path: Path,
    output_path: Path,
    input_format: str,
    output_format: str,
    visits: Sequence[HistoryVisit] = (),
    include_page: bool = False,
) -> List[Dict]:
    outputs = []
    for entry in _read_urls(input_path, input_format):
        report = build_report(entry["url"], visits, include_page=include_page)
        outputs.append(summarize(report, entry["label"]))

    if output_format == "csv":
        _write_csv(outputs, output_path)
    else:
        _write_jsonl(outputs, output_path)
    logger.info("Wrote %d results to %s", len(outputs), output_path)
    return outputs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score a list of URLs for phishing risk.")
    parser.add_argument("input", help="Path to input list (.txt, .csv, .jsonl)")
    parser.add_argument("output", help="Path to output file (.jsonl or .csv)")
    parser.add_argument("--input-format", choices=["txt", "csv", "jsonl"], help="Override input format detection")
    parser.add_argument("--output-format", choices=["jsonl", "csv"], help="Override output format detection")
    parser.add_argument("--history", help="Browsing-history export used for familiarity")
    parser.add_argument("--page", action="store_true", help="Also fetch and analyze page content")
    parser.add_argument("--log-level", default=None, help="Logging level (default from PHISH_LOG_LEVEL)")
    return parser


def main() -> None:
    args = build_parser().parse_args()
    level = args.log_level or get_settings().log_level
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING))

    input_path = Path(args.input)
    output_path = Path(args.output)
    if not input_path.exists():
        print(f"Input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    visits: List[HistoryVisit] = []
    if args.history:
        try:
            visits = load_history(args.history)
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Could not read history file {args.history}: {exc}", file=sys.stderr)
            sys.exit(1)

    input_format = _detect_format(input_path, args.input_format, {".txt": "txt", ".list": "txt", ".jsonl": "jsonl"}, "csv")
    output_format = _detect_format(output_path, args.output_format, {".csv": "csv"}, "jsonl")
    run_collect(input_path, output_path, input_format, output_format, visits, include_page=args.page)


if __name__ == "__main__":
    main()
