"""API request / response models."""
from .screening import (
    PatientRecordInput,
    ConditionResponse,
    DiagnosticTestResponse,
    CarePathwayResponse,
    OverallRiskResponse,
    AnalysisResponse,
    HealthResponse,
)

__all__ = [
    "PatientRecordInput",
    "ConditionResponse",
    "DiagnosticTestResponse",
    "CarePathwayResponse",
    "OverallRiskResponse",
    "AnalysisResponse",
    "HealthResponse",
]
