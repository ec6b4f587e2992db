"""
Reading categories.

Labels individual readings against the threshold table (e.g. "Stage 1
Hypertension", "Prediabetes"). These are descriptive only and take no part
in condition scoring.
"""
from __future__ import annotations

from typing import Dict, Tuple

from .base import PatientRecord, Symptom
from .thresholds import ClinicalThresholds, DEFAULT_THRESHOLDS

URGENT_SYMPTOMS = (Symptom.CHEST_PAIN, Symptom.SHORTNESS_OF_BREATH)

# abnormality count -> (assessment, recommendation); 2 covers every higher count
LIPID_SUMMARIES = {
    0: ("Favorable lipid profile",
        "Continue healthy lifestyle. Repeat in 5 years."),
    1: ("Single lipid abnormality",
        "Lifestyle changes recommended. Recheck in 3-6 months."),
    2: ("Multiple lipid abnormalities",
        "Comprehensive management required. Consider statin therapy."),
}


def categorize_bmi(bmi: float, thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS) -> str:
    t = thresholds.bmi
    if bmi < t.underweight:
        return "Underweight"
    if bmi < t.overweight:
        return "Normal"
    if bmi < t.obese:
        return "Overweight"
    if bmi < t.obese_class2:
        return "Obese Class I"
    return "Obese Class II+"


def categorize_blood_pressure(
    systolic: int,
    diastolic: int,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
) -> str:
    t = thresholds.blood_pressure
    if systolic >= t.crisis_systolic or diastolic >= t.crisis_diastolic:
        return "Hypertensive Crisis"
    if systolic >= t.stage2_systolic or diastolic >= t.stage2_diastolic:
        return "Stage 2 Hypertension"
    if systolic >= t.stage1_systolic or diastolic >= t.stage1_diastolic:
        return "Stage 1 Hypertension"
    if systolic >= t.normal_systolic:
        return "Elevated"
    return "Normal"


def categorize_glucose(glucose: int, thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS) -> str:
    if glucose >= thresholds.glucose.diabetes:
        return "Diabetes Range"
    if glucose >= thresholds.glucose.prediabetes:
        return "Prediabetes"
    return "Normal"


def _banded(value: int, bands: Tuple[Tuple[int, str], ...], default: str) -> str:
    # bands are (cut-point, label), most severe first
    for cut, label in bands:
        if value >= cut:
            return label
    return default


def categorize_lipids(
    record: PatientRecord,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
) -> Dict[str, object]:
    """
    Per-analyte lipid status plus a count of major abnormalities
    (total ≥240, LDL ≥160, low HDL, triglycerides ≥200) and the overall
    assessment and recommendation that count implies.
    """
    t = thresholds.lipids
    hdl_low = thresholds.hdl_low(record.gender)

    if record.hdl < hdl_low:
        hdl_status = "Low"
    elif record.hdl >= t.hdl_protective:
        hdl_status = "High"
    else:
        hdl_status = "Acceptable"

    abnormalities = sum((
        record.total_cholesterol >= t.total_high,
        record.ldl >= t.ldl_high,
        record.hdl < hdl_low,
        record.triglycerides >= t.triglycerides_high,
    ))
    assessment, recommendation = LIPID_SUMMARIES[min(abnormalities, 2)]

    return {
        "total_cholesterol": _banded(
            record.total_cholesterol,
            ((t.total_high, "High"), (t.total_borderline, "Borderline")),
            "Desirable",
        ),
        "ldl": _banded(
            record.ldl,
            ((t.ldl_very_high, "Very High"), (t.ldl_high, "High"),
             (t.ldl_borderline, "Borderline High"), (t.ldl_optimal, "Near Optimal")),
            "Optimal",
        ),
        "hdl": hdl_status,
        "triglycerides": _banded(
            record.triglycerides,
            ((t.triglycerides_very_high, "Very High"), (t.triglycerides_high, "High"),
             (t.triglycerides_borderline, "Borderline")),
            "Normal",
        ),
        "abnormality_count": abnormalities,
        "overall_assessment": assessment,
        "clinical_recommendation": recommendation,
    }


def urgent_symptoms(record: PatientRecord) -> Tuple[str, ...]:
    """Reported symptoms that call for same-day cardiac evaluation."""
    return tuple(s.value for s in record.has_symptoms(URGENT_SYMPTOMS))


def categorize_record(
    record: PatientRecord,
    thresholds: ClinicalThresholds = DEFAULT_THRESHOLDS,
) -> Dict[str, object]:
    return {
        "bmi": categorize_bmi(record.bmi, thresholds),
        "blood_pressure": categorize_blood_pressure(record.systolic, record.diastolic, thresholds),
        "glucose": categorize_glucose(record.glucose, thresholds),
        "lipids": categorize_lipids(record, thresholds),
        "urgent_symptoms": list(urgent_symptoms(record)),
    }
