"""
Medical Knowledge Base

Diagnostic tests, care pathways and condition profiles keyed by
condition, plus the resolver that turns a ranked condition list into a
deduplicated test list and the matching pathways.

Escalation rule: when any ranked condition has High confidence, every
``routine`` test in the output is promoted to ``urgent``. This applies to
all tests, including those contributed by lower-confidence conditions.
``urgent`` and ``followup`` tests are never changed.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from vitalpath.utils.exceptions import KnowledgeBaseError
from vitalpath.utils.logging import get_logger
from .base import (
    CarePathway,
    ConditionAssessment,
    ConditionName,
    ConditionProfile,
    Confidence,
    DiagnosticTest,
    TestPriority,
)

logger = get_logger(__name__)

_U = TestPriority.URGENT
_R = TestPriority.ROUTINE
_F = TestPriority.FOLLOWUP


# ── Diagnostic tests ──────────────────────────────────────────────────────────
# Listed in recommendation order within each condition.

DIAGNOSTIC_TESTS: Mapping[ConditionName, Tuple[DiagnosticTest, ...]] = MappingProxyType({
    ConditionName.DIABETES_RISK: (
        DiagnosticTest("Hemoglobin A1C (HbA1c) - 3-month average glucose",
                       "Gold standard for diabetes diagnosis and glycemic control", _U),
        DiagnosticTest("Oral Glucose Tolerance Test (OGTT)",
                       "Confirms impaired glucose tolerance and diabetes", _R),
        DiagnosticTest("Random plasma glucose test",
                       "Quick screening for hyperglycemia", _R),
        DiagnosticTest("Lipid panel (comprehensive metabolic assessment)",
                       "Comprehensive cholesterol and triglyceride analysis", _R),
        DiagnosticTest("Urinalysis for glycosuria and microalbuminuria",
                       "Screen for diabetic kidney disease", _F),
    ),
    ConditionName.HYPERTENSION: (
        DiagnosticTest("Ambulatory Blood Pressure Monitoring (24-hour)",
                       "Confirms hypertension diagnosis", _U),
        DiagnosticTest("Electrocardiogram (ECG) to assess cardiac effects",
                       "Detects hypertensive heart disease or ischemia", _U),
        DiagnosticTest("Echocardiogram if end-organ damage suspected",
                       "Cardiac structure and function assessment", _R),
        DiagnosticTest("Basic metabolic panel (electrolytes, creatinine)",
                       "Assess kidney function before medications", _R),
        DiagnosticTest("Urinalysis to assess renal function",
                       "Screen for proteinuria", _F),
        DiagnosticTest("Lipid panel for cardiovascular risk assessment",
                       "Standard dyslipidemia screening", _R),
    ),
    ConditionName.DYSLIPIDEMIA: (
        DiagnosticTest("Comprehensive lipid panel (fasting)",
                       "Complete cholesterol analysis", _R),
        DiagnosticTest("Apolipoprotein B (ApoB) levels",
                       "Advanced marker of atherogenic particles", _F),
        DiagnosticTest("Lipoprotein(a) [Lp(a)] if family history present",
                       "Genetic cardiovascular risk factor", _F),
        DiagnosticTest("High-sensitivity C-reactive protein (hs-CRP)",
                       "Inflammatory biomarker for CV risk", _F),
        DiagnosticTest("Thyroid function tests (TSH) to rule out secondary causes",
                       "Exclude thyroid disorders", _R),
        DiagnosticTest("Liver function tests before considering statin therapy",
                       "Baseline hepatic function", _R),
    ),
    ConditionName.CARDIOVASCULAR_RISK: (
        DiagnosticTest("Coronary artery calcium (CAC) score",
                       "Quantify coronary atherosclerosis", _R),
        DiagnosticTest("Carotid intima-media thickness (CIMT)",
                       "Measure subclinical atherosclerosis", _F),
        DiagnosticTest("Ankle-brachial index (ABI)",
                       "Screen for peripheral artery disease", _F),
        DiagnosticTest("High-sensitivity troponin if symptoms present",
                       "Rule out acute coronary syndrome", _U),
        DiagnosticTest("Exercise stress test or stress echocardiography",
                       "Assess for inducible myocardial ischemia", _R),
        DiagnosticTest("Comprehensive metabolic panel",
                       "Broad organ function screening", _R),
    ),
})


# ── Care pathways ─────────────────────────────────────────────────────────────

CARE_PATHWAYS: Mapping[ConditionName, CarePathway] = MappingProxyType({
    ConditionName.DIABETES_RISK: CarePathway(
        condition="Type 2 Diabetes Management",
        steps=(
            "Lifestyle Modification: Medical nutrition therapy with registered dietitian, "
            "target weight loss of 5-10% if overweight",
            "Physical Activity: Recommend 150 minutes/week of moderate-intensity aerobic "
            "activity plus resistance training",
            "Self-Monitoring: Blood glucose monitoring education and log review",
            "Diabetes Self-Management Education and Support (DSMES) program enrollment",
            "Regular follow-up: HbA1c monitoring every 3 months if above target, "
            "assess for complications",
            "Consider referral to endocrinology if glucose remains uncontrolled or complex case",
        ),
    ),
    ConditionName.HYPERTENSION: CarePathway(
        condition="Hypertension Management",
        steps=(
            "Lifestyle Modifications: DASH diet, sodium restriction (<2300mg/day), "
            "weight loss if BMI ≥25",
            "Home Blood Pressure Monitoring: Train patient on proper technique, "
            "target <130/80 mmHg",
            "Physical Activity: Aerobic exercise 90-150 minutes/week, resistance "
            "training 2-3 days/week",
            "Limit alcohol intake: ≤2 drinks/day for men, ≤1 drink/day for women",
            "Stress management and adequate sleep (7-9 hours/night)",
            "Follow-up schedule: Monthly until BP controlled, then every 3-6 months",
            "Consider cardiovascular risk calculator and assess for end-organ damage",
        ),
    ),
    ConditionName.DYSLIPIDEMIA: CarePathway(
        condition="Dyslipidemia Management",
        steps=(
            "Therapeutic Lifestyle Changes (TLC): Reduce saturated fat (<7% of calories), "
            "eliminate trans fats",
            "Increase dietary fiber (10-25g soluble fiber daily) and plant stanols/sterols",
            "Weight management if overweight: 5-10% weight reduction improves lipid profile",
            "Regular aerobic exercise: 30-40 minutes of moderate-high intensity, 3-4 days/week",
            "Calculate 10-year ASCVD risk score to guide treatment intensity",
            "Follow-up lipid panel in 4-12 weeks after lifestyle changes or therapy initiation",
            "Consider referral to lipid specialist if LDL ≥190 mg/dL or familial "
            "hyperlipidemia suspected",
        ),
    ),
    ConditionName.CARDIOVASCULAR_RISK: CarePathway(
        condition="Comprehensive Cardiovascular Risk Reduction",
        steps=(
            "Calculate formal 10-year ASCVD risk score using pooled cohort equations",
            "Multi-faceted risk factor management: Address all identified modifiable "
            "risk factors simultaneously",
            "Consider low-dose aspirin for primary prevention in select high-risk "
            "patients (discuss benefits/risks)",
            "Smoking cessation counseling if applicable (single most important "
            "modifiable risk factor)",
            "Comprehensive dietary intervention: Mediterranean or DASH diet pattern",
            "Structured exercise program with cardiac rehabilitation referral if appropriate",
            "Regular monitoring: Follow-up every 3-6 months with reassessment of all "
            "risk factors",
            "Consider cardiology referral if symptoms present or very high risk "
            "(≥20% 10-year ASCVD risk)",
        ),
    ),
})


# ── Condition profiles ────────────────────────────────────────────────────────

CONDITION_PROFILES: Mapping[ConditionName, ConditionProfile] = MappingProxyType({
    ConditionName.DIABETES_RISK: ConditionProfile(
        mechanism=(
            "Chronic hyperglycemia results from insulin resistance and/or beta-cell "
            "dysfunction, leading to impaired glucose uptake by peripheral tissues."
        ),
        pathophysiology=(
            "Progressive deterioration of pancreatic beta-cell function combined with "
            "peripheral insulin resistance leads to sustained hyperglycemia."
        ),
        complications=(
            "Microvascular (retinopathy, nephropathy, neuropathy) and macrovascular "
            "(coronary artery disease, stroke, peripheral artery disease) complications. "
            "Risk of diabetic ketoacidosis in uncontrolled cases."
        ),
        timeline=(
            "Initiate diagnostic workup within 1-2 weeks. Early intervention critical to "
            "prevent progression and complications."
        ),
        prognosis=(
            "With proper management including lifestyle modification, glucose monitoring, "
            "and pharmacotherapy: HbA1c reduction of 1-2% achievable, 25-40% reduction in "
            "microvascular complications, improved quality of life and life expectancy."
        ),
    ),
    ConditionName.HYPERTENSION: ConditionProfile(
        mechanism=(
            "Sustained elevation in arterial blood pressure increases cardiac workload and "
            "vascular stress, promoting atherosclerosis and end-organ damage."
        ),
        pathophysiology=(
            "Multifactorial etiology including increased peripheral vascular resistance, "
            "sodium retention, sympathetic nervous system activation, and "
            "renin-angiotensin-aldosterone system dysregulation."
        ),
        complications=(
            "Left ventricular hypertrophy, heart failure, stroke, chronic kidney disease, "
            "retinopathy, aortic dissection, and increased cardiovascular mortality."
        ),
        timeline=(
            "Repeat measurements to confirm diagnosis. If confirmed Stage 2 HTN, initiate "
            "treatment within 1 month. Hypertensive crisis requires immediate intervention."
        ),
        prognosis=(
            "Target BP <130/80 achievable in 80-90% of patients with appropriate therapy. "
            "Each 10 mmHg reduction in systolic BP reduces cardiovascular events by 20%, "
            "stroke by 27%, heart failure by 28%."
        ),
    ),
    ConditionName.DYSLIPIDEMIA: ConditionProfile(
        mechanism=(
            "Elevated atherogenic lipoproteins (LDL, VLDL) and/or reduced protective HDL "
            "cholesterol accelerate atherosclerotic plaque formation in arterial walls."
        ),
        pathophysiology=(
            "Imbalance between lipid production, transport, and clearance leads to lipid "
            "accumulation in arterial intima, inflammatory response, and plaque development."
        ),
        complications=(
            "Atherosclerotic cardiovascular disease including myocardial infarction, "
            "ischemic stroke, peripheral artery disease. Very high triglycerides "
            "(>500 mg/dL) increase acute pancreatitis risk."
        ),
        timeline=(
            "Confirm with fasting lipid panel. If LDL ≥190 mg/dL or multiple risk factors "
            "present, initiate therapy within 1-2 months."
        ),
        prognosis=(
            "Each 39 mg/dL (1 mmol/L) LDL reduction decreases major cardiovascular events "
            "by 22%. High-intensity statins achieve 30-50% LDL reduction. Benefits increase "
            "with duration of therapy."
        ),
    ),
    ConditionName.CARDIOVASCULAR_RISK: ConditionProfile(
        mechanism=(
            "Multiple concurrent cardiovascular risk factors have synergistic effects, "
            "exponentially increasing risk of major adverse cardiovascular events (MACE)."
        ),
        pathophysiology=(
            "Clustering of metabolic abnormalities (hypertension, dyslipidemia, insulin "
            "resistance, obesity) creates pro-inflammatory, pro-thrombotic state "
            "accelerating atherosclerosis."
        ),
        complications=(
            "Coronary artery disease, myocardial infarction, stroke, heart failure, chronic "
            "kidney disease, peripheral artery disease, and premature cardiovascular mortality."
        ),
        timeline=(
            "Calculate formal 10-year ASCVD risk score. High-risk patients (≥20%) require "
            "aggressive multi-factorial intervention within 1 month."
        ),
        prognosis=(
            "Comprehensive risk factor management reduces cardiovascular events by 30-50%. "
            "Early intervention and sustained treatment adherence critical for optimal "
            "outcomes. Lifestyle modifications provide additive benefit to pharmacotherapy."
        ),
    ),
})


@dataclass(frozen=True)
class KnowledgeBase:
    """
    Read-only test, pathway and condition-profile tables.

    Must cover every ConditionName; construction fails otherwise.
    """
    tests: Mapping[ConditionName, Tuple[DiagnosticTest, ...]] = field(default_factory=lambda: DIAGNOSTIC_TESTS)
    pathways: Mapping[ConditionName, CarePathway] = field(default_factory=lambda: CARE_PATHWAYS)
    profiles: Mapping[ConditionName, ConditionProfile] = field(
        default_factory=lambda: CONDITION_PROFILES
    )

    def __post_init__(self):
        for condition in ConditionName:
            if any(condition not in table for table in (self.tests, self.pathways, self.profiles)):
                raise KnowledgeBaseError(
                    f"knowledge base has no entry for '{condition.value}'",
                    condition=condition.value,
                )

    def tests_for(self, condition: ConditionName) -> Tuple[DiagnosticTest, ...]:
        return self.tests[condition]

    def pathway_for(self, condition: ConditionName) -> CarePathway:
        return self.pathways[condition]

    def profile_for(self, condition: ConditionName) -> ConditionProfile:
        return self.profiles[condition]

    def entry(self, condition: ConditionName) -> Dict:
        """Tests, pathway and clinical profile for one condition, as a JSON-ready dict."""
        return {
            "condition": condition.value,
            "diagnostic_tests": [t.to_dict() for t in self.tests_for(condition)],
            "care_pathway": self.pathway_for(condition).to_dict(),
            "clinical_profile": self.profile_for(condition).to_dict(),
        }


DEFAULT_KNOWLEDGE_BASE = KnowledgeBase()


def find_condition(key: str) -> ConditionName:
    """
    Resolve a user-supplied condition key.

    Accepts the display label ("Hypertension"), the member name
    ("CARDIOVASCULAR_RISK") or a slug ("cardiovascular-risk").

    Raises:
        KnowledgeBaseError: no condition matches.
    """
    normalized = key.strip().lower().replace("-", "_").replace(" ", "_")
    for condition in ConditionName:
        if normalized in (condition.name.lower(), condition.value.lower().replace(" ", "_")):
            return condition
    raise KnowledgeBaseError(f"unknown condition '{key}'", condition=key)


# ── Resolver ──────────────────────────────────────────────────────────────────

def resolve_tests(
    conditions: Sequence[ConditionAssessment],
    knowledge_base: KnowledgeBase = DEFAULT_KNOWLEDGE_BASE,
) -> Tuple[DiagnosticTest, ...]:
    """
    Collect the tests for the ranked conditions.

    Tests are taken in condition priority order; a test name already seen
    is skipped, so the first occurrence wins.
    """
    escalate = any(c.confidence == Confidence.HIGH for c in conditions)

    seen_names = set()
    tests: List[DiagnosticTest] = []
    for condition in conditions:
        for test in knowledge_base.tests_for(condition.name):
            if test.name in seen_names:
                continue
            seen_names.add(test.name)
            if escalate and test.priority == TestPriority.ROUTINE:
                test = replace(test, priority=TestPriority.URGENT)
            tests.append(test)

    if escalate:
        logger.debug("resolve_tests: high-confidence condition present, routine tests escalated")
    return tuple(tests)


def resolve_pathways(
    conditions: Sequence[ConditionAssessment],
    knowledge_base: KnowledgeBase = DEFAULT_KNOWLEDGE_BASE,
) -> Tuple[CarePathway, ...]:
    """One pathway per ranked condition, in the same order."""
    return tuple(knowledge_base.pathway_for(c.name) for c in conditions)


def group_tests_by_priority(tests: Sequence[DiagnosticTest]) -> Dict[str, List[DiagnosticTest]]:
    """Bucket tests by priority tier, keeping their order within each tier."""
    groups: Dict[str, List[DiagnosticTest]] = {p.value: [] for p in TestPriority}
    for test in tests:
        groups[test.priority.value].append(test)
    return groups
