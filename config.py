"""Configuration for the phishing risk engine."""

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class Settings:
    request_timeout: float = 6.0
    user_agent: str = "PhishGuard/1.0 (+https://example.com)"
    # Provisional new-domain penalty, tune against real traffic.
    first_visit_penalty: int = 90
    history_lookback_days: int = 90
    recent_visit_grace_seconds: float = 5.0
    log_level: str = "WARNING"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_settings() -> Settings:
    """Load settings from environment variables with safe defaults."""
    return Settings(
        request_timeout=_env_float("PHISH_REQUEST_TIMEOUT", Settings.request_timeout),
        user_agent=os.getenv("PHISH_USER_AGENT", Settings.user_agent),
        first_visit_penalty=_env_int("PHISH_FIRST_VISIT_PENALTY", Settings.first_visit_penalty),
        history_lookback_days=_env_int("PHISH_HISTORY_LOOKBACK_DAYS", Settings.history_lookback_days),
        recent_visit_grace_seconds=_env_float(
            "PHISH_RECENT_VISIT_GRACE_SECONDS", Settings.recent_visit_grace_seconds
        ),
        log_level=os.getenv("PHISH_LOG_LEVEL", Settings.log_level).upper(),
    )
