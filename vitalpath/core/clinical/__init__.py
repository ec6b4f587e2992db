"""
Clinical Decision Layer

Scores a patient record against four cardiometabolic condition rules and
returns ranked conditions with diagnostic tests and care pathways.

Usage:
    from vitalpath.core.clinical import ClinicalDecisionEngine, PatientRecord

    engine = ClinicalDecisionEngine()
    result = engine.analyze(record)   # AnalysisResult
"""
from .base import (
    AnalysisResult,
    CarePathway,
    ConditionAssessment,
    ConditionName,
    ConditionProfile,
    Confidence,
    DiagnosticTest,
    Gender,
    OverallRisk,
    PatientRecord,
    RiskLevel,
    Symptom,
    TestPriority,
)
from .engine import ClinicalDecisionEngine, analyze, prioritize
from .knowledge import DEFAULT_KNOWLEDGE_BASE, KnowledgeBase, find_condition
from .thresholds import DEFAULT_THRESHOLDS, ClinicalThresholds

__all__ = [
    "AnalysisResult",
    "CarePathway",
    "ClinicalDecisionEngine",
    "ClinicalThresholds",
    "ConditionAssessment",
    "ConditionName",
    "ConditionProfile",
    "Confidence",
    "DEFAULT_KNOWLEDGE_BASE",
    "DEFAULT_THRESHOLDS",
    "DiagnosticTest",
    "Gender",
    "KnowledgeBase",
    "OverallRisk",
    "PatientRecord",
    "RiskLevel",
    "Symptom",
    "TestPriority",
    "analyze",
    "find_condition",
    "prioritize",
]
