# signal_catalog.py
# Indicator tables and weights used by the URL and page analyzers

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

EXACT = "exact"
SUBSTRING = "substring"
REGEX = "regex"


@lru_cache(maxsize=None)
def _compile(pattern: str) -> "re.Pattern[str]":
    return re.compile(pattern)


@dataclass(frozen=True)
class Indicator:
    """A single pattern/weight rule.

    ``exact`` and ``substring`` compare case-insensitively; ``regex`` is a
    case-sensitive ``re.search``.
    """

    pattern: str
    weight: int
    label: str
    kind: str = SUBSTRING

    def matches(self, value: str) -> bool:
        if not value:
            return False
        if self.kind == REGEX:
            return _compile(self.pattern).search(value) is not None
        if self.kind == EXACT:
            return value.lower() == self.pattern.lower()
        return self.pattern.lower() in value.lower()

    def describe(self, value: Optional[str] = None) -> str:
        return self.label.format(pattern=self.pattern, value=value if value is not None else self.pattern)


@dataclass(frozen=True)
class Threshold:
    """Numeric structural rule: fires when the measured value exceeds ``limit``."""

    limit: int
    weight: int
    label: str

    def exceeded(self, value: int) -> bool:
        return value > self.limit


def _table(kind: str, weight: int, label: str, *patterns: str):
    return tuple(Indicator(p, weight, label, kind) for p in patterns)


# URL structure
MALFORMED_URL = Indicator("", 20, "Malformed URL")
IP_HOSTNAME = Indicator(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$", 40, "IP address used as hostname", REGEX)
LONG_DOMAIN = Threshold(30, 15, "Unusually long domain name")
EXCESSIVE_SUBDOMAINS = Threshold(3, 15, "Excessive number of subdomains")
MULTIPLE_HYPHENS = Threshold(1, 10, "Multiple hyphens in domain")
ENCODED_CHARACTERS = Indicator("%", 10, "URL contains encoded characters")

SUSPICIOUS_TLDS = _table(
    EXACT, 15, "Suspicious TLD: .{value}",
    "xyz", "top", "tk", "ml", "ga", "cf", "gq", "info", "online", "site", "club", "xin",
)

SUSPICIOUS_PATTERNS = _table(
    REGEX, 10, "Suspicious pattern detected: {pattern}",
    "secure", "login", "signin", "verify", "account", "update", "confirm", "banking",
    "paypal", "apple", "microsoft", "google", "facebook", "amazon", "netflix",
    r"\d{5,}",  # long digit runs
    r"^[a-zA-Z0-9]{25,}$",  # long alphanumeric blobs
)

SECURITY_TERMS = _table(
    SUBSTRING, 5, 'Security term in domain: "{pattern}"',
    "secure", "security", "authenticate", "verification", "confirm", "validate", "wallet",
)

# Page content: informational only, never added to the aggregate score
SENSITIVE_FORM_FIELDS = _table(
    SUBSTRING, 0, "Sensitive form field: {value}",
    "password", "pass", "pwd", "ssn", "credit", "card", "cvv", "pin", "social",
)

URGENCY_PHRASES = _table(
    SUBSTRING, 0, 'Urgency language: "{pattern}"',
    "act now", "urgent", "immediately", "alert", "attention", "important",
    "limited time", "expire", "suspended", "verify now", "verify your account",
    "unusual activity", "suspicious activity", "security alert",
)

IMPERSONATED_BRANDS = _table(
    SUBSTRING, 0, "Brand reference: {pattern}",
    "paypal", "apple", "microsoft", "google", "facebook", "amazon",
    "bank of america", "chase", "wells fargo", "citi", "netflix",
)

FOREIGN_FORM_ACTION = "Form submits to different domain: {host}"
INVALID_FORM_ACTION = "Form has invalid submission URL"
INSECURE_PASSWORD_FIELD = "Password field on non-HTTPS connection"
BRAND_IMPERSONATION = "Potential impersonation of: {brands}"

FIRST_VISIT = "First visit to this domain"
FREQUENT_VISITS = "Frequently visited site ({count} visits)"
