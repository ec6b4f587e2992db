"""
Pydantic models for the analysis API.

``PatientRecordInput`` is where field presence and clinical ranges are
enforced; the engine itself assumes a well-formed record.
"""
from datetime import datetime
from typing import Dict, List, Literal, Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vitalpath.core.clinical import Gender, PatientRecord


class PatientRecordInput(BaseModel):
    """One patient's vitals, lipid panel and symptoms."""
    model_config = ConfigDict(populate_by_name=True)

    age: int = Field(..., ge=18, le=120, description="Age in years")
    gender: Literal["male", "female"]
    bmi: float = Field(..., ge=10, le=60, description="Body mass index (kg/m²)")
    systolic: int = Field(..., ge=70, le=250, description="Systolic BP (mmHg)")
    diastolic: int = Field(..., ge=40, le=150, description="Diastolic BP (mmHg)")
    glucose: int = Field(..., ge=50, le=400, description="Fasting glucose (mg/dL)")
    total_cholesterol: int = Field(
        ..., ge=100, le=400, alias="totalCholesterol", description="Total cholesterol (mg/dL)"
    )
    ldl: int = Field(..., gt=0, description="LDL cholesterol (mg/dL)")
    hdl: int = Field(..., gt=0, description="HDL cholesterol (mg/dL)")
    triglycerides: int = Field(..., gt=0, description="Triglycerides (mg/dL)")
    symptoms: List[str] = Field(
        default_factory=list,
        description="Symptom codes; codes outside the known vocabulary are ignored",
    )

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        # same spelling rules as PatientRecord.from_dict
        return v.strip().lower() if isinstance(v, str) else v

    def to_record(self) -> PatientRecord:
        return PatientRecord(
            age=self.age,
            gender=Gender(self.gender),
            bmi=self.bmi,
            systolic=self.systolic,
            diastolic=self.diastolic,
            glucose=self.glucose,
            total_cholesterol=self.total_cholesterol,
            ldl=self.ldl,
            hdl=self.hdl,
            triglycerides=self.triglycerides,
            symptoms=frozenset(self.symptoms),
        )


class ConditionResponse(BaseModel):
    name: str
    score: int
    confidence: str
    factors: List[str]
    reasoning: str


class DiagnosticTestResponse(BaseModel):
    name: str
    purpose: str
    priority: str


class CarePathwayResponse(BaseModel):
    condition: str
    steps: List[str]


class OverallRiskResponse(BaseModel):
    level: str
    message: str


class AnalysisResponse(BaseModel):
    """Result of one analysis."""
    analysis_id: str
    timestamp: datetime
    conditions: List[ConditionResponse]
    diagnostic_tests: List[DiagnosticTestResponse]
    tests_by_priority: Dict[str, List[DiagnosticTestResponse]]
    care_pathways: List[CarePathwayResponse]
    overall_risk: OverallRiskResponse
    readings: Dict[str, Any]
    summary: Dict[str, Any]
    threshold_version: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
    threshold_version: str
    uptime_seconds: float
