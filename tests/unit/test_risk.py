"""
Unit Tests for Overall Risk Aggregation
"""
import pytest

from vitalpath.core.clinical import ConditionAssessment, ConditionName, Confidence, RiskLevel
from vitalpath.core.clinical.risk import (
    ATTENTION_MESSAGE,
    MULTIPLE_HIGH_MESSAGE,
    MULTIPLE_MEDIUM_MESSAGE,
    NO_RISK_MESSAGE,
    SINGLE_HIGH_MESSAGE,
    calculate_overall_risk,
)

H, M, L = Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW


def _conditions(*tiers):
    names = list(ConditionName)
    return [
        ConditionAssessment(names[i], 3, tier, ("factor",), "reasoning")
        for i, tier in enumerate(tiers)
    ]


@pytest.mark.parametrize("tiers,level,message", [
    ((), RiskLevel.LOW, NO_RISK_MESSAGE),
    ((H, H), RiskLevel.HIGH, MULTIPLE_HIGH_MESSAGE),
    ((H, H, M, L), RiskLevel.HIGH, MULTIPLE_HIGH_MESSAGE),
    ((H,), RiskLevel.HIGH, SINGLE_HIGH_MESSAGE),
    ((H, M, M), RiskLevel.HIGH, SINGLE_HIGH_MESSAGE),
    ((M, M), RiskLevel.MEDIUM, MULTIPLE_MEDIUM_MESSAGE),
    ((M, M, L, L), RiskLevel.MEDIUM, MULTIPLE_MEDIUM_MESSAGE),
    ((M,), RiskLevel.LOW, ATTENTION_MESSAGE),
    ((M, L, L), RiskLevel.LOW, ATTENTION_MESSAGE),
    ((L, L, L, L), RiskLevel.LOW, ATTENTION_MESSAGE),
])
def test_branch_selection(tiers, level, message):
    risk = calculate_overall_risk(_conditions(*tiers))
    assert risk.level == level
    assert risk.message == message


def test_to_dict():
    assert calculate_overall_risk([]).to_dict() == {"level": "Low", "message": NO_RISK_MESSAGE}
