"""Programmatic API entrypoint for the phishing risk engine."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, Optional
from urllib.parse import quote

from familiarity import LOOKUP_FAILED, domain_for, evaluate_familiarity
from heuristic_scorer import aggregate_risk, should_warn, summary_for
from html_parser import analyze_page
from models import HistoryVisit, RiskAssessment
from url_features import analyze_url

logger = logging.getLogger(__name__)

INTERNAL_SCHEMES = (
    "chrome://",
    "chrome-extension://",
    "edge://",
    "about:",
    "moz-extension://",
)

UNKNOWN_LOOKUP = "Unknown (API integration required)"
REPORT_ENDPOINT = "https://www.phishtank.com/report.php?url="


def is_internal_page(url: str) -> bool:
    """Browser-internal pages are never scored."""
    return url.strip().lower().startswith(INTERNAL_SCHEMES)


def analyze_url_with_history(
    url: str,
    raw_visits: Iterable[HistoryVisit] = (),
    now: Optional[datetime] = None,
) -> RiskAssessment:
    """Score a URL and adjust the result for how familiar its domain is."""
    base = analyze_url(url)
    try:
        domain = domain_for(url)
    except (ValueError, AttributeError):
        logger.debug("No domain to look up for %r", url)
        familiarity = LOOKUP_FAILED
    else:
        familiarity = evaluate_familiarity(domain, raw_visits, now=now)

    assessment = aggregate_risk(base, familiarity)
    logger.info("Analysis of %s: %s (%d)", url, assessment.risk_level.value, assessment.score)
    return assessment


def analyze_navigation(url: str, raw_visits: Iterable[HistoryVisit] = ()) -> Optional[RiskAssessment]:
    """Assessment for a top-level navigation, or None for internal pages."""
    if is_internal_page(url):
        return None
    return analyze_url_with_history(url, raw_visits)


def report_url(url: str) -> str:
    """Link for reporting a suspected phishing page to PhishTank."""
    return REPORT_ENDPOINT + quote(url, safe="")


def detailed_check(url: str) -> Dict:
    """Structural analysis plus the reputation lookups this build does not perform."""
    return {
        "analysis": analyze_url(url).to_dict(),
        "additional_info": {
            "domain_age": UNKNOWN_LOOKUP,
            "ssl_valid": UNKNOWN_LOOKUP,
            "in_phishing_database": UNKNOWN_LOOKUP,
        },
    }


def build_report(
    url: str,
    raw_visits: Iterable[HistoryVisit] = (),
    include_page: bool = False,
) -> Dict:
    """Run the analysis pipeline and return a structured response."""
    if is_internal_page(url):
        return {
            "url": url,
            "internal": True,
            "summary": "This is a browser internal page which cannot be analyzed.",
        }

    assessment = analyze_url_with_history(url, raw_visits)
    return {
        "url": url,
        "internal": False,
        "assessment": assessment.to_dict(),
        "summary": summary_for(assessment.risk_level),
        "warn": should_warn(assessment),
        "report_url": report_url(url),
        "page": analyze_page(url).to_dict() if include_page else None,
    }
