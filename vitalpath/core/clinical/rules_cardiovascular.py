"""
Cardiovascular Clinical Decision Rules

Assessors for blood pressure and for clustered cardiovascular risk.

Rules:
    1. Hypertension                 — BP band (crisis / stage 2 / stage 1,
                                      first match wins), age, obesity,
                                      pressure-related symptoms
    2. Combined Cardiovascular Risk — counts independent major risk
                                      domains; only reported when at least
                                      two are present
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
from .rules_metabolic import fmt_bmi
from .thresholds import ClinicalThresholds

# ── Hypertension scoring ──────────────────────────────────────────────────────

HTN_SYMPTOMS = (Symptom.HEADACHE, Symptom.DIZZINESS, Symptom.CHEST_PAIN)

HTN_HIGH_AT   = 4
HTN_MEDIUM_AT = 2

HTN_REASONING = {
    Confidence.HIGH: (
        "Blood pressure readings meet diagnostic criteria with additional risk "
        "factors. Requires clinical management and possible pharmacotherapy."
    ),
    Confidence.MEDIUM: (
        "Elevated blood pressure with risk factors present. Repeat measurements "
        "and lifestyle modifications recommended."
    ),
    Confidence.LOW: (
        "Borderline blood pressure elevation. Monitor regularly and address "
        "modifiable risk factors."
    ),
}

# ── Combined cardiovascular risk scoring ─────────────────────────────────────

CV_SYMPTOMS = (Symptom.CHEST_PAIN, Symptom.SHORTNESS_OF_BREATH)

# Reported only when this many major risk domains are present
CV_MIN_RISK_FACTORS = 2

CV_HIGH_AT   = 6
CV_MEDIUM_AT = 4

CV_REASONING = {
    Confidence.HIGH: (
        "Multiple major cardiovascular risk factors present indicating elevated "
        "10-year ASCVD risk. Comprehensive risk reduction strategy recommended "
        "including lifestyle modification and possible pharmacotherapy."
    ),
    Confidence.MEDIUM: (
        "Several cardiovascular risk factors identified. Calculate formal ASCVD "
        "risk score and implement preventive measures."
    ),
    Confidence.LOW: (
        "Some cardiovascular risk factors present. Address modifiable factors "
        "through lifestyle changes."
    ),
}


# ── Rule 1: Hypertension ──────────────────────────────────────────────────────

def assess_hypertension(
    record: PatientRecord,
    thresholds: ClinicalThresholds,
) -> Optional[ConditionAssessment]:
    """
    Hypertension (AHA/ACC 2017 staging).

    At most one BP band contributes: ≥180/120 +3, else ≥140/90 +2,
    else systolic ≥130 +1. Then age ≥55 +1, BMI ≥30 +1, and any of
    headache / dizziness / chest pain +1.
    """
    bp = thresholds.blood_pressure
    reading = f"{record.systolic}/{record.diastolic} mmHg"
    factors: List[str] = []
    score = 0

    if record.systolic >= bp.crisis_systolic or record.diastolic >= bp.crisis_diastolic:
        factors.append(
            f"Blood pressure {reading} is in the hypertensive crisis range "
            f"(≥{bp.crisis_systolic}/{bp.crisis_diastolic})"
        )
        score += 3
    elif record.systolic >= bp.stage2_systolic or record.diastolic >= bp.stage2_diastolic:
        factors.append(
            f"Blood pressure {reading} indicates Stage 2 Hypertension "
            f"(≥{bp.stage2_systolic}/{bp.stage2_diastolic})"
        )
        score += 2
    elif record.systolic >= bp.stage1_systolic:
        factors.append(
            f"Blood pressure {reading} indicates Stage 1 Hypertension "
            f"(systolic {bp.stage1_systolic}-{bp.stage2_systolic - 1})"
        )
        score += 1

    if record.age >= thresholds.age.hypertension_risk:
        factors.append(f"Age {record.age} years is a significant risk factor for hypertension")
        score += 1

    if record.bmi >= thresholds.bmi.obese:
        factors.append(f"Obesity (BMI {fmt_bmi(record.bmi)}) strongly associated with hypertension")
        score += 1

    if record.has_symptoms(HTN_SYMPTOMS):
        factors.append("Symptoms consistent with hypertension present")
        score += 1

    if score == 0:
        return None

    confidence = grade_confidence(score, HTN_HIGH_AT, HTN_MEDIUM_AT)
    return ConditionAssessment(
        name=ConditionName.HYPERTENSION,
        score=score,
        confidence=confidence,
        factors=tuple(factors),
        reasoning=HTN_REASONING[confidence],
    )


# ── Rule 2: Combined Cardiovascular Risk ─────────────────────────────────────

def assess_cardiovascular_risk(
    record: PatientRecord,
    thresholds: ClinicalThresholds,
) -> Optional[ConditionAssessment]:
    """
    Clustered cardiovascular risk.

    Major risk domains (each counted once): hypertension ≥130/80 +2,
    dyslipidemia (LDL ≥160 or total ≥240) +2, glucose ≥100 +2,
    BMI ≥30 +1. Male ≥55 / female ≥65 +1; chest pain or shortness of
    breath +2.

    Returns None when fewer than two major domains are present, whatever
    the score.
    """
    bp = thresholds.blood_pressure
    lipids = thresholds.lipids
    factors: List[str] = []
    score = 0
    risk_factor_count = 0

    has_htn = record.systolic >= bp.stage1_systolic or record.diastolic >= bp.stage1_diastolic
    has_dyslipidemia = record.ldl >= lipids.ldl_high or record.total_cholesterol >= lipids.total_high
    has_diabetes = record.glucose >= thresholds.glucose.prediabetes
    is_obese = record.bmi >= thresholds.bmi.obese

    if has_htn:
        factors.append("Hypertension present")
        risk_factor_count += 1
        score += 2

    if has_dyslipidemia:
        factors.append("Dyslipidemia present")
        risk_factor_count += 1
        score += 2

    if has_diabetes:
        factors.append("Diabetes or prediabetes present")
        risk_factor_count += 1
        score += 2

    if is_obese:
        factors.append(f"Obesity present (BMI ≥{fmt_bmi(thresholds.bmi.obese)})")
        risk_factor_count += 1
        score += 1

    if record.age >= thresholds.cardiovascular_age(record.gender):
        sex = "Male" if record.is_male else "Female"
        factors.append(f"{sex} age ≥{thresholds.cardiovascular_age(record.gender)} years")
        score += 1

    if record.has_symptoms(CV_SYMPTOMS):
        factors.append("Cardiovascular symptoms present")
        score += 2

    if risk_factor_count < CV_MIN_RISK_FACTORS:
        return None

    confidence = grade_confidence(score, CV_HIGH_AT, CV_MEDIUM_AT)
    return ConditionAssessment(
        name=ConditionName.CARDIOVASCULAR_RISK,
        score=score,
        confidence=confidence,
        factors=tuple(factors),
        reasoning=CV_REASONING[confidence],
    )
