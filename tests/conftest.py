"""
Pytest Configuration and Fixtures

Shared patient records for the clinical engine tests.
"""
import pytest

from vitalpath.core.clinical import ClinicalDecisionEngine, Gender, PatientRecord

# Every reading comfortably inside the normal range
NORMAL_VALUES = dict(
    age=30,
    gender=Gender.FEMALE,
    bmi=22.0,
    systolic=110,
    diastolic=70,
    glucose=85,
    total_cholesterol=170,
    ldl=90,
    hdl=60,
    triglycerides=100,
    symptoms=frozenset(),
)


@pytest.fixture
def make_record():
    """Factory: a normal record with selected fields overridden."""
    def _make(**overrides) -> PatientRecord:
        values = {**NORMAL_VALUES, **overrides}
        if "symptoms" in overrides:
            values["symptoms"] = frozenset(overrides["symptoms"])
        return PatientRecord(**values)
    return _make


@pytest.fixture
def normal_record(make_record) -> PatientRecord:
    return make_record()


@pytest.fixture
def high_risk_record(make_record) -> PatientRecord:
    """50-year-old man with obesity, stage 2 BP, diabetic glucose and a poor lipid panel."""
    return make_record(
        age=50,
        gender=Gender.MALE,
        bmi=31.0,
        systolic=145,
        diastolic=92,
        glucose=130,
        total_cholesterol=250,
        ldl=170,
        hdl=35,
        triglycerides=220,
        symptoms=[],
    )


@pytest.fixture
def engine() -> ClinicalDecisionEngine:
    return ClinicalDecisionEngine()
