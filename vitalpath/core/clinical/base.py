"""
Clinical Decision Layer — Base Types

Defines the input record and the data contracts that the condition
assessors, the knowledge-base resolver and the risk aggregator produce.
All types are immutable; the rendering layer consumes them through
``to_dict()``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from vitalpath.utils.exceptions import RecordValidationError


class Gender(str, Enum):
    MALE   = "male"
    FEMALE = "female"


class Symptom(str, Enum):
    """Fixed vocabulary of reportable symptom codes."""
    CHEST_PAIN          = "chest_pain"
    SHORTNESS_OF_BREATH = "shortness_of_breath"
    HEADACHE            = "headache"
    DIZZINESS           = "dizziness"
    BLURRED_VISION      = "blurred_vision"
    FREQUENT_URINATION  = "frequent_urination"
    INCREASED_THIRST    = "increased_thirst"
    FATIGUE             = "fatigue"


class ConditionName(str, Enum):
    """
    The closed set of conditions the engine can report.

    Member order is the canonical evaluation order; the prioritizer's
    tie-break relies on it.
    """
    DIABETES_RISK      = "Type 2 Diabetes Risk"
    HYPERTENSION       = "Hypertension"
    DYSLIPIDEMIA       = "Dyslipidemia"
    CARDIOVASCULAR_RISK = "Combined Cardiovascular Risk"


class Confidence(str, Enum):
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"

    @property
    def weight(self) -> int:
        return _CONFIDENCE_WEIGHTS[self]


_CONFIDENCE_WEIGHTS = {
    Confidence.HIGH:   3,
    Confidence.MEDIUM: 2,
    Confidence.LOW:    1,
}


class TestPriority(str, Enum):
    """
    Recommended timing of a diagnostic test.

    URGENT   – order now, before the next visit
    ROUTINE  – order as part of the standard work-up
    FOLLOWUP – order at a follow-up visit if still indicated
    """
    __test__ = False  # not a pytest test class

    URGENT   = "urgent"
    ROUTINE  = "routine"
    FOLLOWUP = "followup"


class RiskLevel(str, Enum):
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"


# ── Input ─────────────────────────────────────────────────────────────────────

# camelCase aliases used by the original browser form payloads
_FIELD_ALIASES = {
    "totalCholesterol": "total_cholesterol",
    "sex": "gender",
}

_INT_FIELDS = ("age", "systolic", "diastolic", "glucose",
               "total_cholesterol", "ldl", "hdl", "triglycerides")


@dataclass(frozen=True)
class PatientRecord:
    """
    One patient's vitals, lipid panel and reported symptoms.

    Ranges are guaranteed by the caller (the API's request model); the
    engine never re-checks them.
    """
    age: int
    gender: Gender
    bmi: float
    systolic: int                   # mmHg
    diastolic: int                  # mmHg
    glucose: int                    # fasting, mg/dL
    total_cholesterol: int          # mg/dL
    ldl: int                        # mg/dL
    hdl: int                        # mg/dL
    triglycerides: int              # mg/dL
    symptoms: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "symptoms", frozenset(_enum_value(s) for s in self.symptoms))

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE

    def has_symptoms(self, codes: Iterable[Symptom]) -> Tuple[Symptom, ...]:
        """Return the given symptom codes that are present, in the order given."""
        return tuple(s for s in codes if s.value in self.symptoms)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PatientRecord":
        """
        Build a record from a loosely-typed mapping (JSON file, form payload).

        Converts types only; it does not range-check values.

        Raises:
            RecordValidationError: the payload is not a mapping, a field is
                missing, not numeric, not finite, or fractional where an
                integer is expected, the gender is not one of male/female,
                or symptoms is not a list of codes.
        """
        if not isinstance(data, Mapping):
            raise RecordValidationError(
                f"record must be a JSON object, got {type(data).__name__}",
                field="record",
            )
        values = {_FIELD_ALIASES.get(k, k): v for k, v in data.items()}

        kwargs: Dict[str, Any] = {}
        for name in _INT_FIELDS:
            kwargs[name] = _coerce(values, name, int)
        kwargs["bmi"] = _coerce(values, "bmi", float)

        raw_gender = values.get("gender")
        try:
            kwargs["gender"] = Gender(_enum_value(raw_gender).strip().lower())
        except ValueError:
            raise RecordValidationError(
                f"gender must be 'male' or 'female', got {raw_gender!r}",
                field="gender",
            ) from None

        symptoms = values.get("symptoms") or ()
        if isinstance(symptoms, str):
            symptoms = [symptoms]
        if not isinstance(symptoms, (list, tuple)) or not all(
            isinstance(s, (str, Symptom)) for s in symptoms
        ):
            raise RecordValidationError(
                f"symptoms must be a list of symptom codes, got {symptoms!r}",
                field="symptoms",
            )
        kwargs["symptoms"] = frozenset(symptoms)

        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {
            "age": self.age,
            "gender": self.gender.value,
            "bmi": self.bmi,
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "glucose": self.glucose,
            "total_cholesterol": self.total_cholesterol,
            "ldl": self.ldl,
            "hdl": self.hdl,
            "triglycerides": self.triglycerides,
            "symptoms": sorted(self.symptoms),
        }


def _enum_value(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _coerce(values: Mapping[str, Any], name: str, kind: type):
    raw = values.get(name)
    if raw is None or raw == "":
        raise RecordValidationError(f"missing required field '{name}'", field=name)
    try:
        number = float(raw)
    except (TypeError, ValueError, OverflowError):
        raise RecordValidationError(
            f"field '{name}' must be numeric, got {raw!r}", field=name
        ) from None
    if not math.isfinite(number):
        raise RecordValidationError(f"field '{name}' must be finite, got {raw!r}", field=name)
    if kind is int:
        if not number.is_integer():
            raise RecordValidationError(
                f"field '{name}' must be a whole number, got {raw!r}", field=name
            )
        return int(number)
    return number


# ── Outputs ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConditionAssessment:
    """
    One condition flagged by an assessor.

    ``factors`` lists one sentence per triggered criterion, in the
    assessor's fixed checklist order.
    """
    name: ConditionName
    score: int
    confidence: Confidence
    factors: Tuple[str, ...]
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "name": self.name.value,
            "score": self.score,
            "confidence": self.confidence.value,
            "factors": list(self.factors),
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class DiagnosticTest:
    """A single recommended test."""
    name: str
    purpose: str
    priority: TestPriority

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "purpose": self.purpose,
            "priority": self.priority.value,
        }


@dataclass(frozen=True)
class CarePathway:
    """Ordered management steps for one condition."""
    condition: str               # pathway label, e.g. "Hypertension Management"
    steps: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"condition": self.condition, "steps": list(self.steps)}


@dataclass(frozen=True)
class ConditionProfile:
    """Background clinical knowledge for one condition."""
    mechanism: str
    pathophysiology: str
    complications: str
    timeline: str
    prognosis: str

    def to_dict(self) -> dict:
        return {
            "mechanism": self.mechanism,
            "pathophysiology": self.pathophysiology,
            "complications": self.complications,
            "timeline": self.timeline,
            "prognosis": self.prognosis,
        }


@dataclass(frozen=True)
class OverallRisk:
    level: RiskLevel
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "message": self.message}


@dataclass(frozen=True)
class AnalysisResult:
    """
    Everything one analysis produces.

    Sequences are empty, never None, when nothing was flagged.
    """
    conditions: Tuple[ConditionAssessment, ...]
    diagnostic_tests: Tuple[DiagnosticTest, ...]
    care_pathways: Tuple[CarePathway, ...]
    overall_risk: OverallRisk
    threshold_version: Optional[str] = None

    @property
    def has_high_confidence(self) -> bool:
        return any(c.confidence == Confidence.HIGH for c in self.conditions)

    def to_dict(self) -> dict:
        return {
            "conditions": [c.to_dict() for c in self.conditions],
            "diagnostic_tests": [t.to_dict() for t in self.diagnostic_tests],
            "care_pathways": [p.to_dict() for p in self.care_pathways],
            "overall_risk": self.overall_risk.to_dict(),
            "threshold_version": self.threshold_version,
        }


def grade_confidence(score: int, high_at: int, medium_at: int) -> Confidence:
    """Map a positive rule score onto a confidence tier."""
    if score >= high_at:
        return Confidence.HIGH
    if score >= medium_at:
        return Confidence.MEDIUM
    return Confidence.LOW
