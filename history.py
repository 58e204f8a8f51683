"""Load browsing-history exports into HistoryVisit records."""

from __future__ import annotations

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from models import HistoryVisit

logger = logging.getLogger(__name__)

TIME_KEYS = ("lastVisitTime", "last_visit_time")


def parse_visit_time(value: Union[str, int, float]) -> datetime:
    """Epoch milliseconds (number or numeric string) or an ISO-8601 timestamp."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    text = str(value).strip()
    try:
        return datetime.fromtimestamp(float(text) / 1000.0, tz=timezone.utc)
    except ValueError:
        pass
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_visit(row: Dict) -> Optional[HistoryVisit]:
    url = str(row.get("url") or "").strip()
    raw_time = next((row[k] for k in TIME_KEYS if row.get(k) not in (None, "")), None)
    if not url or raw_time is None:
        return None
    try:
        return HistoryVisit(url=url, last_visit_time=parse_visit_time(raw_time))
    except (ValueError, OverflowError, OSError):
        logger.debug("Skipping history row with bad time: %r", row)
        return None


def _read_json(path: Path) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        data = data.get("history") or data.get("items") or []
    if not isinstance(data, list):
        logger.warning("History file %s does not hold a list of visits", path)
        return
    for item in data:
        if isinstance(item, dict):
            yield item


def _read_jsonl(path: Path) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            raw = line.strip()
            if not raw or raw.startswith("#"):
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Skipping unparseable history line: %r", raw)
                continue
            if isinstance(data, dict):
                yield data


def _read_csv(path: Path) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        for row in csv.DictReader(handle):
            if row:
                yield row


def load_history(path: Union[str, Path]) -> List[HistoryVisit]:
    """Read a .json, .jsonl or .csv history export; rows that do not parse are skipped."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        rows = _read_jsonl(path)
    elif suffix == ".csv":
        rows = _read_csv(path)
    else:
        rows = _read_json(path)

    visits = [visit for visit in map(_to_visit, rows) if visit is not None]
    logger.info("Loaded %d history visits from %s", len(visits), path)
    return visits
