# url_features.py
# Structural URL analysis: parse a URL and score it against the signal catalog

import logging
from typing import List
from urllib.parse import unquote, urlparse

import idna

from models import ScoreResult
import signal_catalog as catalog

logger = logging.getLogger(__name__)

# Schemes that cannot be parsed without a host
HOST_REQUIRED_SCHEMES = ("http", "https", "ftp", "ws", "wss")
FORBIDDEN_HOST_CHARS = set('<>^|\\"`{}%')


def _canonical_host(raw_host: str) -> str:
    """Percent-decode and punycode a hostname the way browsers report it."""
    host = unquote(raw_host).lower()
    if any(ch.isspace() or ch in FORBIDDEN_HOST_CHARS for ch in host):
        raise ValueError(f"invalid host: {raw_host!r}")
    if not host.isascii():
        try:
            host = idna.encode(host, uts46=True).decode("ascii")
        except (idna.IDNAError, UnicodeError) as exc:
            raise ValueError(f"invalid IDN host: {raw_host!r}") from exc
    return host


def parse_url(url: str) -> dict:
    """Parse a URL strictly, raising ValueError when it is not a usable URL."""
    url = url.strip()
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if not scheme:
        raise ValueError(f"missing scheme: {url!r}")

    host = _canonical_host(parsed.hostname or "")
    if scheme in HOST_REQUIRED_SCHEMES and not host:
        raise ValueError(f"missing host: {url!r}")
    # raises ValueError on a non-numeric or out-of-range port
    parsed.port

    path = parsed.path
    if not path and scheme in HOST_REQUIRED_SCHEMES:
        path = "/"
    return {
        "normalized": url,
        "parsed": parsed,
        "path": path,
        "query": parsed.query or "",
        "host": host,
        "scheme": scheme,
    }


def extract_features(url: str) -> dict:
    """Return the structural facts the scorer looks at."""
    p = parse_url(url)
    host = p["host"]

    return {
        "url": p["normalized"],
        "scheme": p["scheme"],
        "host": host,
        "path": p["path"],
        "tld": host.split(".")[-1].lower(),
        "has_ip": catalog.IP_HOSTNAME.matches(host),
        "domain_length": len(host),
        "subdomain_count": max(len(host.split(".")) - 2, 0),
        "hyphen_count": host.count("-"),
        "has_encoded_chars": catalog.ENCODED_CHARACTERS.matches(url),
    }


def analyze_url(url: str) -> ScoreResult:
    """Score a URL on structure alone. Never raises; bad input scores as malformed."""
    try:
        features = extract_features(url)
    except (ValueError, TypeError, AttributeError) as exc:
        logger.debug("Malformed URL %r: %s", url, exc)
        return ScoreResult(catalog.MALFORMED_URL.weight, (catalog.MALFORMED_URL.describe(),))

    score = 0
    issues: List[str] = []
    host = features["host"]
    path = features["path"]

    def _hit(weight: int, issue: str) -> None:
        nonlocal score
        score += weight
        issues.append(issue)

    if features["has_ip"]:
        _hit(catalog.IP_HOSTNAME.weight, catalog.IP_HOSTNAME.describe())

    for tld in catalog.SUSPICIOUS_TLDS:
        if tld.matches(features["tld"]):
            _hit(tld.weight, tld.describe(features["tld"]))

    for rule, value in (
        (catalog.LONG_DOMAIN, features["domain_length"]),
        (catalog.EXCESSIVE_SUBDOMAINS, features["subdomain_count"]),
        (catalog.MULTIPLE_HYPHENS, features["hyphen_count"]),
    ):
        if rule.exceeded(value):
            _hit(rule.weight, rule.label)

    # every matching pattern counts, no short-circuit
    for pattern in catalog.SUSPICIOUS_PATTERNS:
        if pattern.matches(host) or pattern.matches(path):
            _hit(pattern.weight, pattern.describe())

    for term in catalog.SECURITY_TERMS:
        if term.matches(host):
            _hit(term.weight, term.describe())

    if features["has_encoded_chars"]:
        _hit(catalog.ENCODED_CHARACTERS.weight, catalog.ENCODED_CHARACTERS.describe())

    return ScoreResult(score, tuple(issues))
