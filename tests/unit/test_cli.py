"""
Unit Tests for the command-line entry point
"""
import json
import logging

import pytest

from vitalpath.__main__ import main


HIGH_RISK = {
    "age": 50,
    "gender": "male",
    "bmi": 31,
    "systolic": 145,
    "diastolic": 92,
    "glucose": 130,
    "totalCholesterol": 250,
    "ldl": 170,
    "hdl": 35,
    "triglycerides": 220,
    "symptoms": [],
}


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def record_file(tmp_path):
    def _write(data) -> str:
        path = tmp_path / "record.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


def test_json_output(record_file, capsys):
    code = main([record_file(HIGH_RISK), "--json", "--log-level", "WARNING"])
    assert code == 0

    result = json.loads(capsys.readouterr().out)
    assert [c["name"] for c in result["conditions"]] == [
        "Type 2 Diabetes Risk",
        "Dyslipidemia",
        "Combined Cardiovascular Risk",
        "Hypertension",
    ]
    assert result["overall_risk"]["level"] == "High"
    assert result["threshold_version"]


def test_text_report(record_file, capsys):
    assert main([record_file(HIGH_RISK), "--log-level", "WARNING"]) == 0

    out = capsys.readouterr().out
    assert "Overall risk: High" in out
    assert "1. Type 2 Diabetes Risk" in out
    assert "routine tests escalated to urgent" in out
    assert "Type 2 Diabetes Management" in out


def test_text_report_for_normal_record(record_file, capsys):
    normal = {**HIGH_RISK, "age": 30, "bmi": 22, "systolic": 110, "diastolic": 70,
              "glucose": 85, "totalCholesterol": 170, "ldl": 90, "hdl": 60,
              "triglycerides": 100}
    assert main([record_file(normal), "--log-level", "WARNING"]) == 0
    assert "No conditions flagged." in capsys.readouterr().out


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "absent.json"), "--log-level", "CRITICAL"]) == 2


def test_malformed_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path), "--log-level", "CRITICAL"]) == 2


def test_invalid_record(record_file):
    assert main([record_file({**HIGH_RISK, "gender": "x"}), "--log-level", "CRITICAL"]) == 2


@pytest.mark.parametrize("overrides", [
    {"age": "inf"},
    {"glucose": 125.9},
    {"symptoms": 5},
    {"ldl": None},
])
def test_malformed_record_fields(record_file, overrides):
    assert main([record_file({**HIGH_RISK, **overrides}), "--log-level", "CRITICAL"]) == 2


def test_overflowing_number(tmp_path):
    path = tmp_path / "record.json"
    path.write_text(json.dumps(HIGH_RISK).replace('"age": 50', '"age": 1e999'), encoding="utf-8")
    assert main([str(path), "--log-level", "CRITICAL"]) == 2


def test_top_level_list(record_file):
    assert main([record_file([HIGH_RISK]), "--log-level", "CRITICAL"]) == 2
