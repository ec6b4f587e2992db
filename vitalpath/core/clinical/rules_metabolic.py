"""
Metabolic Clinical Decision Rules

Assessors for the glucose / lipid side of the record.

Rules:
    1. Type 2 Diabetes Risk — fasting glucose band, BMI band, age,
       triglycerides, low HDL, classic hyperglycaemia symptoms
    2. Dyslipidemia         — total cholesterol, LDL, HDL and
       triglyceride bands (NCEP ATP III)

Within a banded criterion the bands are checked from the most severe down
and only the first match contributes.
"""
from __future__ import annotations

from typing import List, Optional

from .base import (
    ConditionAssessment,
    ConditionName,
    Confidence,
    PatientRecord,
    Symptom,
    grade_confidence,
)
from .thresholds import ClinicalThresholds

# ── Diabetes scoring ──────────────────────────────────────────────────────────

DIABETES_SYMPTOMS = (
    Symptom.FREQUENT_URINATION,
    Symptom.INCREASED_THIRST,
    Symptom.BLURRED_VISION,
    Symptom.FATIGUE,
)
DIABETES_MIN_SYMPTOMS = 2

DIABETES_HIGH_AT   = 5
DIABETES_MEDIUM_AT = 3

DIABETES_REASONING = {
    Confidence.HIGH: (
        "Multiple strong clinical indicators present, including glucose levels "
        "meeting diagnostic criteria. Clinical evaluation recommended urgently."
    ),
    Confidence.MEDIUM: (
        "Several risk factors identified suggesting elevated diabetes risk. Further "
        "diagnostic testing recommended to confirm or rule out diabetes."
    ),
    Confidence.LOW: (
        "Some risk factors present. Consider screening and lifestyle "
        "modification counseling."
    ),
}

# ── Dyslipidemia scoring ──────────────────────────────────────────────────────

DYSLIPIDEMIA_HIGH_AT   = 5
DYSLIPIDEMIA_MEDIUM_AT = 3

DYSLIPIDEMIA_REASONING = {
    Confidence.HIGH: (
        "Multiple lipid abnormalities present indicating significant dyslipidemia. "
        "Requires therapeutic lifestyle changes and possible pharmacotherapy."
    ),
    Confidence.MEDIUM: (
        "Lipid panel shows abnormalities requiring attention. Lifestyle "
        "modifications and follow-up testing recommended."
    ),
    Confidence.LOW: (
        "Mild lipid abnormalities detected. Consider dietary counseling and "
        "repeat testing."
    ),
}


def fmt_bmi(bmi: float) -> str:
    return f"{bmi:g}"


# ── Rule 1: Type 2 Diabetes Risk ─────────────────────────────────────────────

def assess_diabetes_risk(
    record: PatientRecord,
    thresholds: ClinicalThresholds,
) -> Optional[ConditionAssessment]:
    """
    Type 2 diabetes risk (ADA screening criteria).

    Weights: glucose ≥126 +3 (else 100–125 +2); BMI ≥30 +2 (else ≥25 +1);
    age ≥45 +1; triglycerides ≥200 +1; low HDL +1; two or more classic
    symptoms +1.
    """
    glucose = thresholds.glucose
    bmi = thresholds.bmi
    factors: List[str] = []
    score = 0

    if record.glucose >= glucose.diabetes:
        factors.append(
            f"Fasting glucose {record.glucose} mg/dL meets diagnostic criteria "
            f"for diabetes (≥{glucose.diabetes} mg/dL)"
        )
        score += 3
    elif record.glucose >= glucose.prediabetes:
        factors.append(
            f"Fasting glucose {record.glucose} mg/dL indicates prediabetes "
            f"({glucose.prediabetes}-{glucose.diabetes - 1} mg/dL)"
        )
        score += 2

    if record.bmi >= bmi.obese:
        factors.append(
            f"BMI {fmt_bmi(record.bmi)} indicates obesity (≥{fmt_bmi(bmi.obese)}), "
            "a major risk factor for type 2 diabetes"
        )
        score += 2
    elif record.bmi >= bmi.overweight:
        factors.append(
            f"BMI {fmt_bmi(record.bmi)} indicates overweight status "
            f"({fmt_bmi(bmi.overweight)}-{bmi.obese - 0.1:g}), increasing diabetes risk"
        )
        score += 1

    if record.age >= thresholds.age.diabetes_risk:
        factors.append(
            f"Age {record.age} years increases diabetes risk "
            f"(≥{thresholds.age.diabetes_risk} years)"
        )
        score += 1

    if record.triglycerides >= thresholds.lipids.triglycerides_high:
        factors.append(
            f"Elevated triglycerides {record.triglycerides} mg/dL suggest insulin "
            f"resistance (≥{thresholds.lipids.triglycerides_high} mg/dL)"
        )
        score += 1

    if record.hdl < thresholds.hdl_low(record.gender):
        factors.append(f"Low HDL {record.hdl} mg/dL associated with metabolic syndrome")
        score += 1

    present = record.has_symptoms(DIABETES_SYMPTOMS)
    if len(present) >= DIABETES_MIN_SYMPTOMS:
        factors.append(
            f"Classic diabetes symptoms present: {len(present)} of "
            f"{len(DIABETES_SYMPTOMS)} cardinal symptoms"
        )
        score += 1

    if score == 0:
        return None

    confidence = grade_confidence(score, DIABETES_HIGH_AT, DIABETES_MEDIUM_AT)
    return ConditionAssessment(
        name=ConditionName.DIABETES_RISK,
        score=score,
        confidence=confidence,
        factors=tuple(factors),
        reasoning=DIABETES_REASONING[confidence],
    )


# ── Rule 2: Dyslipidemia ──────────────────────────────────────────────────────

def assess_dyslipidemia(
    record: PatientRecord,
    thresholds: ClinicalThresholds,
) -> Optional[ConditionAssessment]:
    """
    Dyslipidemia (NCEP ATP III).

    Weights: total cholesterol ≥240 +2 (else ≥200 +1); LDL ≥190 +3
    (else ≥160 +2, else ≥130 +1); low HDL +2; triglycerides ≥500 +2
    (else ≥200 +1, else ≥150 +1).
    """
    lipids = thresholds.lipids
    factors: List[str] = []
    score = 0

    if record.total_cholesterol >= lipids.total_high:
        factors.append(
            f"Total cholesterol {record.total_cholesterol} mg/dL is high "
            f"(≥{lipids.total_high} mg/dL)"
        )
        score += 2
    elif record.total_cholesterol >= lipids.total_borderline:
        factors.append(
            f"Total cholesterol {record.total_cholesterol} mg/dL is borderline high "
            f"({lipids.total_borderline}-{lipids.total_high - 1} mg/dL)"
        )
        score += 1

    if record.ldl >= lipids.ldl_very_high:
        factors.append(
            f"LDL cholesterol {record.ldl} mg/dL is very high (≥{lipids.ldl_very_high} mg/dL)"
        )
        score += 3
    elif record.ldl >= lipids.ldl_high:
        factors.append(
            f"LDL cholesterol {record.ldl} mg/dL is high "
            f"({lipids.ldl_high}-{lipids.ldl_very_high - 1} mg/dL)"
        )
        score += 2
    elif record.ldl >= lipids.ldl_borderline:
        factors.append(
            f"LDL cholesterol {record.ldl} mg/dL is borderline high "
            f"({lipids.ldl_borderline}-{lipids.ldl_high - 1} mg/dL)"
        )
        score += 1

    if record.hdl < thresholds.hdl_low(record.gender):
        factors.append(
            f"HDL cholesterol {record.hdl} mg/dL is low (cardiovascular risk factor)"
        )
        score += 2

    if record.triglycerides >= lipids.triglycerides_very_high:
        factors.append(
            f"Triglycerides {record.triglycerides} mg/dL are very high "
            f"(≥{lipids.triglycerides_very_high} mg/dL, pancreatitis risk)"
        )
        score += 2
    elif record.triglycerides >= lipids.triglycerides_high:
        factors.append(
            f"Triglycerides {record.triglycerides} mg/dL are high "
            f"(≥{lipids.triglycerides_high} mg/dL)"
        )
        score += 1
    elif record.triglycerides >= lipids.triglycerides_borderline:
        factors.append(
            f"Triglycerides {record.triglycerides} mg/dL are borderline high "
            f"({lipids.triglycerides_borderline}-{lipids.triglycerides_high - 1} mg/dL)"
        )
        score += 1

    if score == 0:
        return None

    confidence = grade_confidence(score, DYSLIPIDEMIA_HIGH_AT, DYSLIPIDEMIA_MEDIUM_AT)
    return ConditionAssessment(
        name=ConditionName.DYSLIPIDEMIA,
        score=score,
        confidence=confidence,
        factors=tuple(factors),
        reasoning=DYSLIPIDEMIA_REASONING[confidence],
    )
