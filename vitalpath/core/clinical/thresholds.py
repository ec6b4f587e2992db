"""
Clinical cut-points used by the condition assessors.

Sources: AHA/ACC 2017 blood-pressure staging, ADA fasting-glucose
criteria, NCEP ATP III lipid bands, WHO BMI classes.

Every comparison in the rules is ``value >= cut-point`` except HDL,
where a value *below* the sex-specific cut-point is the risk factor.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field

from .base import Gender

THRESHOLD_VERSION = "AHA-2017/ADA-2023/NCEP-ATPIII"


@dataclass(frozen=True)
class BloodPressureThresholds:
    normal_systolic: int = 120
    stage1_systolic: int = 130
    stage1_diastolic: int = 80
    stage2_systolic: int = 140
    stage2_diastolic: int = 90
    crisis_systolic: int = 180
    crisis_diastolic: int = 120


@dataclass(frozen=True)
class GlucoseThresholds:
    prediabetes: int = 100           # fasting, mg/dL
    diabetes: int = 126


@dataclass(frozen=True)
class LipidThresholds:
    total_borderline: int = 200
    total_high: int = 240
    ldl_optimal: int = 100
    ldl_borderline: int = 130
    ldl_high: int = 160
    ldl_very_high: int = 190
    hdl_low_male: int = 40
    hdl_low_female: int = 50
    hdl_protective: int = 60
    triglycerides_borderline: int = 150
    triglycerides_high: int = 200
    triglycerides_very_high: int = 500


@dataclass(frozen=True)
class BmiThresholds:
    underweight: float = 18.5
    overweight: float = 25.0
    obese: float = 30.0
    obese_class2: float = 35.0


@dataclass(frozen=True)
class AgeThresholds:
    diabetes_risk: int = 45
    hypertension_risk: int = 55
    cardiovascular_male: int = 55
    cardiovascular_female: int = 65


@dataclass(frozen=True)
class ClinicalThresholds:
    """The full, versioned threshold table injected into every assessor."""
    version: str = THRESHOLD_VERSION
    blood_pressure: BloodPressureThresholds = field(default_factory=BloodPressureThresholds)
    glucose: GlucoseThresholds = field(default_factory=GlucoseThresholds)
    lipids: LipidThresholds = field(default_factory=LipidThresholds)
    bmi: BmiThresholds = field(default_factory=BmiThresholds)
    age: AgeThresholds = field(default_factory=AgeThresholds)

    def hdl_low(self, gender: Gender) -> int:
        """Sex-specific HDL cut-point; below it counts as low HDL."""
        if gender == Gender.MALE:
            return self.lipids.hdl_low_male
        return self.lipids.hdl_low_female

    def cardiovascular_age(self, gender: Gender) -> int:
        if gender == Gender.MALE:
            return self.age.cardiovascular_male
        return self.age.cardiovascular_female

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_THRESHOLDS = ClinicalThresholds()
