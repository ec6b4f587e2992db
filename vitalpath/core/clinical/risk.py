"""
Overall risk aggregation.

Rolls the ranked condition list up into one level and message. Branches
are checked in order and the first match wins:

    no conditions        → Low
    ≥2 High confidence   → High
    ≥1 High confidence   → High
    ≥2 Medium confidence → Medium
    otherwise            → Low
"""
from __future__ import annotations

from typing import Sequence

from .base import ConditionAssessment, Confidence, OverallRisk, RiskLevel

NO_RISK_MESSAGE = (
    "No significant health risks identified based on current data. Patient presents "
    "with stable metabolic and cardiovascular parameters within acceptable clinical ranges."
)
MULTIPLE_HIGH_MESSAGE = (
    "Multiple high-confidence conditions detected requiring immediate clinical attention. "
    "Comprehensive evaluation and coordinated multidisciplinary management strategy "
    "recommended to address compounding risk factors and prevent disease progression."
)
SINGLE_HIGH_MESSAGE = (
    "At least one high-priority condition identified meeting diagnostic criteria. Urgent "
    "clinical assessment, confirmatory testing, and initiation of evidence-based treatment "
    "protocol strongly recommended."
)
MULTIPLE_MEDIUM_MESSAGE = (
    "Multiple moderate-risk conditions identified. Follow-up diagnostic testing recommended "
    "within 1-2 weeks to confirm findings. Early intervention with lifestyle modifications "
    "and possible pharmacotherapy may prevent progression to more severe disease states."
)
ATTENTION_MESSAGE = (
    "Some health indicators warrant clinical attention and monitoring. Preventive measures "
    "including lifestyle modifications, regular follow-up, and risk factor management "
    "recommended to maintain optimal health status."
)


def calculate_overall_risk(conditions: Sequence[ConditionAssessment]) -> OverallRisk:
    if not conditions:
        return OverallRisk(RiskLevel.LOW, NO_RISK_MESSAGE)

    high = sum(1 for c in conditions if c.confidence == Confidence.HIGH)
    medium = sum(1 for c in conditions if c.confidence == Confidence.MEDIUM)

    if high >= 2:
        return OverallRisk(RiskLevel.HIGH, MULTIPLE_HIGH_MESSAGE)
    if high >= 1:
        return OverallRisk(RiskLevel.HIGH, SINGLE_HIGH_MESSAGE)
    if medium >= 2:
        return OverallRisk(RiskLevel.MEDIUM, MULTIPLE_MEDIUM_MESSAGE)
    return OverallRisk(RiskLevel.LOW, ATTENTION_MESSAGE)
