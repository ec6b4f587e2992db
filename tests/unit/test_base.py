"""
Unit Tests for Record Conversion, Reading Categories and Utilities
"""
import logging
import math

import pytest

from vitalpath.core.clinical import ClinicalThresholds, Gender, PatientRecord, Symptom
from vitalpath.core.clinical.categories import (
    categorize_blood_pressure,
    categorize_bmi,
    categorize_glucose,
    categorize_lipids,
    categorize_record,
    urgent_symptoms,
)
from vitalpath.core.clinical.thresholds import BloodPressureThresholds
from vitalpath.utils import RecordValidationError, VitalPathError, get_logger, setup_logging
from vitalpath.utils.logging import StructuredFormatter


FORM_PAYLOAD = {
    "age": "52",
    "gender": "Male",
    "bmi": "28.4",
    "systolic": 138,
    "diastolic": 86,
    "glucose": 104,
    "totalCholesterol": 215,
    "ldl": 142,
    "hdl": 41,
    "triglycerides": 180,
    "symptoms": ["headache", "fatigue"],
}


class TestPatientRecordFromDict:

    def test_form_payload(self):
        record = PatientRecord.from_dict(FORM_PAYLOAD)

        assert record.age == 52
        assert record.gender == Gender.MALE
        assert record.bmi == pytest.approx(28.4)
        assert record.total_cholesterol == 215
        assert record.symptoms == frozenset({"headache", "fatigue"})

    def test_snake_case_keys(self):
        data = dict(FORM_PAYLOAD)
        data["total_cholesterol"] = data.pop("totalCholesterol")
        assert PatientRecord.from_dict(data).total_cholesterol == 215

    def test_missing_field(self):
        data = {k: v for k, v in FORM_PAYLOAD.items() if k != "ldl"}
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict(data)
        assert exc_info.value.field == "ldl"
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_non_numeric_field(self):
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict({**FORM_PAYLOAD, "glucose": "high"})
        assert exc_info.value.field == "glucose"

    @pytest.mark.parametrize("field,value", [
        ("bmi", math.nan),
        ("age", "inf"),
        ("glucose", math.inf),
        ("systolic", 10 ** 400),
    ])
    def test_non_finite_rejected(self, field, value):
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict({**FORM_PAYLOAD, field: value})
        assert exc_info.value.field == field

    def test_fractional_integer_field_rejected(self):
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict({**FORM_PAYLOAD, "glucose": 125.9})
        assert exc_info.value.field == "glucose"

    def test_whole_float_accepted_for_integer_field(self):
        assert PatientRecord.from_dict({**FORM_PAYLOAD, "glucose": 126.0}).glucose == 126

    @pytest.mark.parametrize("payload", [[FORM_PAYLOAD], "record", 42, None])
    def test_non_mapping_rejected(self, payload):
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict(payload)
        assert exc_info.value.field == "record"

    @pytest.mark.parametrize("symptoms", [5, {"fatigue": True}, ["fatigue", 3]])
    def test_malformed_symptoms_rejected(self, symptoms):
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict({**FORM_PAYLOAD, "symptoms": symptoms})
        assert exc_info.value.field == "symptoms"

    def test_single_symptom_string(self):
        record = PatientRecord.from_dict({**FORM_PAYLOAD, "symptoms": "fatigue"})
        assert record.symptoms == frozenset({"fatigue"})

    @pytest.mark.parametrize("gender", ["MALE", " male ", "Male"])
    def test_gender_spelling_normalized(self, gender):
        assert PatientRecord.from_dict({**FORM_PAYLOAD, "gender": gender}).gender == Gender.MALE

    def test_unknown_gender(self):
        with pytest.raises(RecordValidationError) as exc_info:
            PatientRecord.from_dict({**FORM_PAYLOAD, "gender": "other"})
        assert exc_info.value.details["field"] == "gender"

    def test_symptoms_optional(self):
        data = {k: v for k, v in FORM_PAYLOAD.items() if k != "symptoms"}
        assert PatientRecord.from_dict(data).symptoms == frozenset()

    def test_enum_symptoms_normalized(self, make_record):
        record = make_record(symptoms=[Symptom.CHEST_PAIN, "dizziness"])
        assert record.symptoms == frozenset({"chest_pain", "dizziness"})
        assert record.has_symptoms([Symptom.DIZZINESS, Symptom.CHEST_PAIN]) == (
            Symptom.DIZZINESS, Symptom.CHEST_PAIN,
        )

    def test_round_trip_to_dict(self, high_risk_record):
        assert PatientRecord.from_dict(high_risk_record.to_dict()) == high_risk_record

    def test_record_is_immutable(self, normal_record):
        with pytest.raises(AttributeError):
            normal_record.glucose = 200


class TestCategories:

    @pytest.mark.parametrize("bmi,label", [
        (18.4, "Underweight"), (18.5, "Normal"), (24.9, "Normal"), (25.0, "Overweight"),
        (29.9, "Overweight"), (30.0, "Obese Class I"), (35.0, "Obese Class II+"),
    ])
    def test_bmi(self, bmi, label):
        assert categorize_bmi(bmi) == label

    @pytest.mark.parametrize("systolic,diastolic,label", [
        (115, 75, "Normal"),
        (125, 75, "Elevated"),
        (125, 82, "Stage 1 Hypertension"),
        (140, 89, "Stage 2 Hypertension"),
        (170, 120, "Hypertensive Crisis"),
    ])
    def test_blood_pressure(self, systolic, diastolic, label):
        assert categorize_blood_pressure(systolic, diastolic) == label

    @pytest.mark.parametrize("glucose,label", [(99, "Normal"), (100, "Prediabetes"), (126, "Diabetes Range")])
    def test_glucose(self, glucose, label):
        assert categorize_glucose(glucose) == label

    def test_lipids(self, high_risk_record):
        lipids = categorize_lipids(high_risk_record)
        assert lipids == {
            "total_cholesterol": "High",
            "ldl": "High",
            "hdl": "Low",
            "triglycerides": "High",
            "abnormality_count": 4,
            "overall_assessment": "Multiple lipid abnormalities",
            "clinical_recommendation": (
                "Comprehensive management required. Consider statin therapy."
            ),
        }

    def test_lipids_normal(self, normal_record):
        lipids = categorize_lipids(normal_record)
        assert lipids["hdl"] == "High"
        assert lipids["ldl"] == "Optimal"
        assert lipids["abnormality_count"] == 0
        assert lipids["overall_assessment"] == "Favorable lipid profile"
        assert lipids["clinical_recommendation"].endswith("Repeat in 5 years.")

    @pytest.mark.parametrize("overrides,count,assessment", [
        ({}, 0, "Favorable lipid profile"),
        ({"ldl": 165}, 1, "Single lipid abnormality"),
        ({"triglycerides": 210}, 1, "Single lipid abnormality"),
        ({"ldl": 165, "hdl": 45}, 2, "Multiple lipid abnormalities"),
        ({"total_cholesterol": 260, "ldl": 200, "triglycerides": 600}, 3,
         "Multiple lipid abnormalities"),
    ])
    def test_lipid_overall_assessment(self, make_record, overrides, count, assessment):
        lipids = categorize_lipids(make_record(**overrides))
        assert lipids["abnormality_count"] == count
        assert lipids["overall_assessment"] == assessment

    def test_urgent_symptoms(self, make_record):
        record = make_record(symptoms=["headache", "shortness_of_breath", "chest_pain"])
        assert urgent_symptoms(record) == ("chest_pain", "shortness_of_breath")

    def test_custom_thresholds(self, make_record):
        strict = ClinicalThresholds(blood_pressure=BloodPressureThresholds(normal_systolic=105))
        categories = categorize_record(make_record(), strict)
        assert categories["blood_pressure"] == "Elevated"
        assert categories["urgent_symptoms"] == []


class TestThresholds:

    def test_to_dict_is_versioned(self):
        table = ClinicalThresholds().to_dict()
        assert table["version"]
        assert table["glucose"] == {"prediabetes": 100, "diabetes": 126}
        assert table["blood_pressure"]["stage2_systolic"] == 140

    def test_hdl_cut_points(self):
        t = ClinicalThresholds()
        assert t.hdl_low(Gender.MALE) == 40
        assert t.hdl_low(Gender.FEMALE) == 50


class TestUtilities:

    @pytest.fixture
    def restore_logging(self):
        root = logging.getLogger()
        uvicorn_access = logging.getLogger("uvicorn.access")
        saved = (list(root.handlers), root.level, uvicorn_access.propagate)
        yield
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
        uvicorn_access.propagate = saved[2]

    def test_error_to_dict(self):
        err = VitalPathError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}

    def test_structured_formatter(self):
        record = logging.LogRecord("vitalpath.test", logging.INFO, __file__, 1, "hello", None, None)
        line = StructuredFormatter(use_color=False).format(record)
        assert "INFO" in line
        assert "[vitalpath.test] hello" in line

    def test_formatter_shows_analysis_id(self):
        record = logging.LogRecord("vitalpath.main", logging.INFO, __file__, 1, "done", None, None)
        record.analysis_id = "ANL-1234ABCD"
        line = StructuredFormatter(use_color=False).format(record)
        assert "[vitalpath.main] [ANL-1234ABCD] done" in line

    def test_get_logger(self):
        assert get_logger("vitalpath.x").name == "vitalpath.x"
        assert get_logger("__main__").name == "vitalpath.cli"

    def test_setup_logging_routes_server_loggers(self, restore_logging):
        logging.getLogger("uvicorn.access").propagate = False
        setup_logging("debug")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("uvicorn.access").propagate is True

    def test_setup_logging_rejects_unknown_level(self, restore_logging):
        with pytest.raises(ValueError):
            setup_logging("LOUD")
