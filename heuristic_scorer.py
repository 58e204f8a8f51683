# heuristic_scorer.py
# Combine the structural URL score with browsing familiarity into a risk verdict

from typing import Dict, Optional

from config import get_settings
from models import FamiliaritySnapshot, RiskAssessment, RiskLevel, ScoreResult
import signal_catalog as catalog

# inclusive lower bound of each band
RISK_THRESHOLDS = {
    RiskLevel.HIGH: 80,
    RiskLevel.MEDIUM: 60,
    RiskLevel.LOW: 30,
}

SUMMARIES: Dict[RiskLevel, str] = {
    RiskLevel.SAFE: "This site appears to be safe. No phishing indicators detected.",
    RiskLevel.LOW: "This site has some minor suspicious characteristics, but is likely safe.",
    RiskLevel.MEDIUM: "This site has multiple suspicious characteristics. Be careful with sensitive information.",
    RiskLevel.HIGH: "WARNING: This site has strong phishing indicators. Avoid entering personal information.",
}

FREQUENT_VISIT_SCORE = 70
FAMILIARITY_DIVISOR = 4


def risk_level_for(score: int) -> RiskLevel:
    """Map a score to its risk band; depends on nothing but the number."""
    for level, floor in RISK_THRESHOLDS.items():
        if score >= floor:
            return level
    return RiskLevel.SAFE


def summary_for(level: RiskLevel) -> str:
    return SUMMARIES[level]


def should_warn(assessment: RiskAssessment) -> bool:
    """Whether the result is serious enough for an in-page warning."""
    return assessment.risk_level in (RiskLevel.MEDIUM, RiskLevel.HIGH)


def aggregate_risk(
    base: ScoreResult,
    familiarity: FamiliaritySnapshot,
    first_visit_penalty: Optional[int] = None,
) -> RiskAssessment:
    """Adjust the structural score for familiarity and assign a risk level.

    A first visit adds ``first_visit_penalty`` (settings default). A known
    domain earns a reduction of a quarter of its familiarity score, floored
    at zero.
    """
    if first_visit_penalty is None:
        first_visit_penalty = get_settings().first_visit_penalty

    score = base.score
    issues = list(base.issues)

    if familiarity.first_visit:
        score += first_visit_penalty
        issues.append(catalog.FIRST_VISIT)
    else:
        reduction = familiarity.familiarity_score // FAMILIARITY_DIVISOR
        score = max(score - reduction, 0)
        if familiarity.familiarity_score > FREQUENT_VISIT_SCORE:
            issues.append(catalog.FREQUENT_VISITS.format(count=familiarity.visit_count))

    return RiskAssessment(
        score=score,
        issues=tuple(issues),
        risk_level=risk_level_for(score),
        familiarity=familiarity,
    )
