"""Domain familiarity from prior browsing history."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from config import Settings, get_settings
from models import FamiliaritySnapshot, HistoryVisit

logger = logging.getLogger(__name__)

MAX_COUNTED_VISITS = 20
POINTS_PER_VISIT = 2
MAX_RECENCY_POINTS = 60
RECENCY_DECAY_PER_DAY = 2

UNFAMILIAR = FamiliaritySnapshot(
    familiar=False,
    first_visit=True,
    visit_count=0,
    days_since_last_visit=0,
    familiarity_score=0,
)

LOOKUP_FAILED = FamiliaritySnapshot(
    familiar=False,
    first_visit=True,
    visit_count=0,
    days_since_last_visit=None,
    familiarity_score=0,
    error=True,
)


def domain_for(url: str) -> str:
    """Hostname used as the history lookup key; raises ValueError if there is none."""
    host = urlparse(url.strip()).hostname
    if not host:
        raise ValueError(f"no hostname in {url!r}")
    return host


def same_domain(candidate: str, domain: str) -> bool:
    """Exact host match, or either host is a dot-delimited suffix of the other.

    Deliberately loose: ``a.example.com`` and ``example.com`` match in both
    directions, ``notexample.com`` does not match ``example.com``.
    """
    return candidate == domain or candidate.endswith("." + domain) or domain.endswith("." + candidate)


def _visit_host(visit: HistoryVisit) -> Optional[str]:
    try:
        return urlparse(visit.url).hostname
    except ValueError:
        return None


def familiarity_score(visit_count: int, days_since_last_visit: int) -> int:
    """Up to 40 points for frequency and up to 60 for recency."""
    frequency = min(visit_count, MAX_COUNTED_VISITS) * POINTS_PER_VISIT
    recency = max(MAX_RECENCY_POINTS - days_since_last_visit * RECENCY_DECAY_PER_DAY, 0)
    return frequency + recency


def evaluate_familiarity(
    domain: str,
    raw_visits: Iterable[HistoryVisit],
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> FamiliaritySnapshot:
    """Summarize how well-known ``domain`` is from the visit history.

    Only visits inside the lookback window count, and visits from the last few
    seconds are ignored so the navigation being scored does not match itself.
    Failures are logged and reported as an error snapshot, never raised.
    """
    settings = settings or get_settings()
    now = now or datetime.now(timezone.utc)
    try:
        domain = domain.lower()
        start = now - timedelta(days=settings.history_lookback_days)
        end = now - timedelta(seconds=settings.recent_visit_grace_seconds)

        matches: List[datetime] = []
        for visit in raw_visits:
            if not start <= visit.last_visit_time <= end:
                continue
            host = _visit_host(visit)
            if host and same_domain(host, domain):
                logger.debug("Matched history item: %s", visit.url)
                matches.append(visit.last_visit_time)

        if not matches:
            return UNFAMILIAR

        days = int((now - max(matches)) // timedelta(days=1))
        return FamiliaritySnapshot(
            familiar=True,
            first_visit=False,
            visit_count=len(matches),
            days_since_last_visit=days,
            familiarity_score=familiarity_score(len(matches), days),
        )
    except Exception:
        logger.warning("History lookup failed for %r", domain, exc_info=True)
        return LOOKUP_FAILED
