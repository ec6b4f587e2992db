"""
Clinical Decision Engine

Central dispatcher. Runs every registered condition assessor against a
PatientRecord, ranks what they flag, and attaches diagnostic tests, care
pathways and the overall risk level.

Usage:
    from vitalpath.core.clinical import ClinicalDecisionEngine

    engine = ClinicalDecisionEngine()
    result = engine.analyze(record)
    for c in result.conditions:
        print(c.name.value, c.confidence.value, c.score)

Adding a new condition:
    1. Add a member to ConditionName (its position sets the tie-break order)
    2. Implement assess_<condition>(PatientRecord, ClinicalThresholds)
       -> Optional[ConditionAssessment]
    3. Register it in _CONDITION_ASSESSORS below and add its tests and
       pathway to the knowledge base.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from vitalpath.utils.logging import get_logger
from .base import (
    AnalysisResult,
    ConditionAssessment,
    ConditionName,
    PatientRecord,
)
from .categories import categorize_record
from .knowledge import (
    DEFAULT_KNOWLEDGE_BASE,
    KnowledgeBase,
    group_tests_by_priority,
    resolve_pathways,
    resolve_tests,
)
from .risk import calculate_overall_risk
from .rules_cardiovascular import assess_cardiovascular_risk, assess_hypertension
from .rules_metabolic import assess_diabetes_risk, assess_dyslipidemia
from .thresholds import DEFAULT_THRESHOLDS, ClinicalThresholds

logger = get_logger(__name__)

Assessor = Callable[[PatientRecord, ClinicalThresholds], Optional[ConditionAssessment]]

# ── Registry: condition → assessor ───────────────────────────────────────────
# Iteration order is the canonical evaluation order.
_CONDITION_ASSESSORS: Mapping[ConditionName, Assessor] = {
    ConditionName.DIABETES_RISK:       assess_diabetes_risk,
    ConditionName.HYPERTENSION:        assess_hypertension,
    ConditionName.DYSLIPIDEMIA:        assess_dyslipidemia,
    ConditionName.CARDIOVASCULAR_RISK: assess_cardiovascular_risk,
}


def prioritize(conditions: Sequence[ConditionAssessment]) -> Tuple[ConditionAssessment, ...]:
    """
    Rank assessments: higher confidence first, then higher score.

    ``sorted`` is stable, so exact ties keep the order they arrived in,
    which callers must make the canonical evaluation order.
    """
    return tuple(sorted(conditions, key=lambda c: (-c.confidence.weight, -c.score)))


class ClinicalDecisionEngine:
    """
    Turns a PatientRecord into an AnalysisResult.

    Stateless — safe to share across threads / concurrent requests. The
    threshold table and knowledge base are fixed at construction.
    """

    def __init__(
        self,
        thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
        knowledge_base: KnowledgeBase = DEFAULT_KNOWLEDGE_BASE,
    ):
        self.thresholds = thresholds
        self.knowledge_base = knowledge_base

    def assess(self, record: PatientRecord) -> List[ConditionAssessment]:
        """
        Run every assessor and return the non-null assessments in
        canonical evaluation order (unranked).
        """
        assessments: List[ConditionAssessment] = []
        for condition, assessor in _CONDITION_ASSESSORS.items():
            assessment = assessor(record, self.thresholds)
            if assessment is None:
                logger.debug(f"ClinicalDecisionEngine [{condition.value}]: not flagged")
                continue
            logger.debug(
                f"ClinicalDecisionEngine [{condition.value}]: "
                f"score={assessment.score} confidence={assessment.confidence.value}"
            )
            assessments.append(assessment)
        return assessments

    def analyze(self, record: PatientRecord) -> AnalysisResult:
        """
        Evaluate all registered assessors against one record.

        Returns:
            AnalysisResult with conditions ranked by priority. A record
            with nothing abnormal yields empty sequences and a Low overall
            risk, which is the expected result for a healthy patient.
        """
        conditions = prioritize(self.assess(record))
        overall = calculate_overall_risk(conditions)

        result = AnalysisResult(
            conditions=conditions,
            diagnostic_tests=resolve_tests(conditions, self.knowledge_base),
            care_pathways=resolve_pathways(conditions, self.knowledge_base),
            overall_risk=overall,
            threshold_version=self.thresholds.version,
        )

        if conditions:
            logger.info(
                f"ClinicalDecisionEngine: {len(conditions)} condition(s) — "
                + ", ".join(f"{c.name.value} ({c.confidence.value})" for c in conditions)
                + f"; overall risk {overall.level.value}"
            )
        else:
            logger.info("ClinicalDecisionEngine: no conditions flagged")
        return result

    def assess_condition(
        self,
        condition: ConditionName,
        record: PatientRecord,
    ) -> Optional[ConditionAssessment]:
        """
        Run a single assessor. Useful for unit-testing one rule without
        running the full pipeline.
        """
        return _CONDITION_ASSESSORS[condition](record, self.thresholds)

    def categorize(self, record: PatientRecord) -> Dict:
        """Descriptive reading categories for the record."""
        return categorize_record(record, self.thresholds)

    @staticmethod
    def registered_conditions() -> List[ConditionName]:
        """Return the conditions with active assessors, in evaluation order."""
        return list(_CONDITION_ASSESSORS.keys())

    @staticmethod
    def summarise(result: AnalysisResult) -> Dict:
        """
        Build a compact summary dict suitable for JSON API responses.

        Example output:
        {
            "total_conditions": 2,
            "high_count": 1,
            "medium_count": 1,
            "low_count": 0,
            "overall_risk": "High",
            "tests_by_priority": {"urgent": 7, "routine": 0, "followup": 3},
            "pathways": ["Hypertension Management", ...]
        }
        """
        counts = {"High": 0, "Medium": 0, "Low": 0}
        for c in result.conditions:
            counts[c.confidence.value] += 1

        grouped = group_tests_by_priority(result.diagnostic_tests)

        return {
            "total_conditions": len(result.conditions),
            "high_count":       counts["High"],
            "medium_count":     counts["Medium"],
            "low_count":        counts["Low"],
            "overall_risk":     result.overall_risk.level.value,
            "tests_by_priority": {tier: len(tests) for tier, tests in grouped.items()},
            "pathways":         [p.condition for p in result.care_pathways],
        }


_default_engine = ClinicalDecisionEngine()


def analyze(record: PatientRecord) -> AnalysisResult:
    """Analyze a record with the default thresholds and knowledge base."""
    return _default_engine.analyze(record)
