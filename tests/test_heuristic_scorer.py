"""Tests for risk aggregation and level mapping."""

import pytest

from familiarity import LOOKUP_FAILED, UNFAMILIAR
from heuristic_scorer import aggregate_risk, risk_level_for, should_warn, summary_for
from models import FamiliaritySnapshot, RiskLevel, ScoreResult

ORDER = [RiskLevel.SAFE, RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]


def _familiar(score, visits=10, days=0):
    return FamiliaritySnapshot(
        familiar=True,
        first_visit=False,
        visit_count=visits,
        days_since_last_visit=days,
        familiarity_score=score,
    )


class TestRiskLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (0, RiskLevel.SAFE),
            (29, RiskLevel.SAFE),
            (30, RiskLevel.LOW),
            (59, RiskLevel.LOW),
            (60, RiskLevel.MEDIUM),
            (79, RiskLevel.MEDIUM),
            (80, RiskLevel.HIGH),
            (1000, RiskLevel.HIGH),
        ],
    )
    def test_bands(self, score, level):
        assert risk_level_for(score) is level

    def test_mapping_is_non_decreasing(self):
        ranks = [ORDER.index(risk_level_for(s)) for s in range(0, 300)]
        assert ranks == sorted(ranks)

    def test_summaries_cover_every_level(self):
        for level in RiskLevel:
            assert summary_for(level)


class TestAggregateRisk:
    def test_first_visit_penalty(self):
        base = ScoreResult(50, ("IP address used as hostname", "Suspicious pattern detected: login"))
        assessment = aggregate_risk(base, UNFAMILIAR)
        assert assessment.score == 140
        assert assessment.risk_level is RiskLevel.HIGH
        assert assessment.issues[-1] == "First visit to this domain"
        assert assessment.issues[:2] == base.issues

    def test_penalty_override(self):
        assessment = aggregate_risk(ScoreResult(), UNFAMILIAR, first_visit_penalty=10)
        assert assessment.score == 10
        assert assessment.risk_level is RiskLevel.SAFE

    def test_penalty_from_environment(self, monkeypatch):
        monkeypatch.setenv("PHISH_FIRST_VISIT_PENALTY", "35")
        assert aggregate_risk(ScoreResult(), UNFAMILIAR).score == 35

    def test_lookup_failure_counts_as_first_visit(self):
        assessment = aggregate_risk(ScoreResult(), LOOKUP_FAILED)
        assert assessment.score == 90
        assert assessment.familiarity.error

    def test_very_familiar_site(self):
        assessment = aggregate_risk(ScoreResult(), _familiar(100, visits=20))
        assert assessment.score == 0
        assert assessment.risk_level is RiskLevel.SAFE
        assert assessment.issues == ("Frequently visited site (20 visits)",)

    def test_reduction_is_a_quarter_of_familiarity(self):
        assessment = aggregate_risk(ScoreResult(50, ("x",)), _familiar(70))
        assert assessment.score == 33
        assert assessment.risk_level is RiskLevel.LOW
        assert assessment.issues == ("x",)

    def test_frequent_issue_needs_more_than_seventy(self):
        assessment = aggregate_risk(ScoreResult(50), _familiar(71, visits=12))
        assert assessment.issues == ("Frequently visited site (12 visits)",)

    def test_score_never_negative(self):
        assert aggregate_risk(ScoreResult(3), _familiar(60)).score == 0

    def test_idempotent(self):
        base = ScoreResult(65, ("a", "b"))
        snapshot = _familiar(40)
        assert aggregate_risk(base, snapshot) == aggregate_risk(base, snapshot)

    def test_base_is_untouched(self):
        base = ScoreResult(10, ("a",))
        aggregate_risk(base, UNFAMILIAR)
        assert base == ScoreResult(10, ("a",))

    def test_should_warn(self):
        assert should_warn(aggregate_risk(ScoreResult(60), UNFAMILIAR, first_visit_penalty=0))
        assert not should_warn(aggregate_risk(ScoreResult(59), UNFAMILIAR, first_visit_penalty=0))
