"""
Care planning.
Builds treatment goals, clinical strategies, patient considerations,
barriers to healing and the follow-up plan from the questionnaire,
clinical context and the per-axis assessments.

Goal and strategy order is the order in which rules append them; goal
priority numbers are assigned from that order and never re-sorted.
"""
from typing import List, Optional

from ..models.assessment import (
    AbiCategory,
    BarrierSeverity,
    ClinicalContext,
    ClinicalStrategy,
    CompressionSafety,
    Etiology,
    ExudateLevel,
    FollowUpPlan,
    HealingBarrier,
    InfectionAssessment,
    InfectionSeverity,
    PatientConsideration,
    PerfusionStatus,
    PeriwoundSkin,
    QuestionnaireInput,
    StrategyCategory,
    StrategyPriority,
    TissueType,
    TreatmentGoal,
    WoundBedAssessment,
)
from .wound_assessment import infection_severity


class _GoalList:
    """Ordered goal builder; priority is the 1-based position of each goal."""

    def __init__(self):
        self._goals: List[TreatmentGoal] = []

    def add(self, goal: str, rationale: str) -> None:
        self._goals.append(
            TreatmentGoal(priority=len(self._goals) + 1, goal=goal, rationale=rationale)
        )

    def build(self) -> List[TreatmentGoal]:
        return list(self._goals)


_ETIOLOGY_GOALS = {
    Etiology.VENOUS: (
        "Restore venous return and reduce edema",
        "Venous hypertension is primary cause - compression essential for healing",
    ),
    Etiology.ARTERIAL: (
        "Optimize tissue perfusion",
        "Inadequate blood supply prevents healing - revascularization may be needed",
    ),
    Etiology.DIABETIC_FOOT: (
        "Achieve complete offloading and glycemic control",
        "Pressure and hyperglycemia are major barriers to diabetic foot ulcer healing",
    ),
    Etiology.PRESSURE: (
        "Eliminate pressure and shear forces",
        "Sustained pressure caused the wound - must be completely relieved for healing",
    ),
}


def build_goals(
    q: QuestionnaireInput, context: ClinicalContext, etiology: Etiology
) -> List[TreatmentGoal]:
    goals = _GoalList()

    if infection_severity(q) == InfectionSeverity.SYSTEMIC:
        goals.add(
            "Control systemic infection",
            "Life-threatening infection requires immediate systemic antibiotics and urgent medical review",
        )

    if q.bone_involvement_suspected:
        goals.add(
            "Rule out osteomyelitis",
            "Bone involvement significantly impacts treatment approach and healing timeline",
        )

    if q.has_tissue(TissueType.NECROSIS) or q.has_tissue(TissueType.SLOUGH):
        goals.add(
            "Achieve clean, vascularized wound bed",
            "Remove devitalized tissue to enable granulation and reduce infection risk",
        )

    # Mixed and unclassified wounds get no etiology-specific goal
    if etiology in _ETIOLOGY_GOALS:
        goals.add(*_ETIOLOGY_GOALS[etiology])

    goals.add(
        "Maintain optimal wound healing environment",
        "Balance moisture, control bioburden, protect periwound skin to enable healing",
    )
    return goals.build()


def _moisture_strategy(exudate: ExudateLevel) -> ClinicalStrategy:
    if exudate == ExudateLevel.DRY:
        strategy = "Rehydrate and maintain moist wound environment"
        rationale = "Dry wounds heal slowly - moisture promotes cell migration"
    elif exudate == ExudateLevel.HIGH:
        strategy = "High absorbency exudate management"
        rationale = "Excess exudate causes maceration and prolongs inflammation"
    else:
        strategy = "Balance moisture levels"
        rationale = "Maintain optimal moisture for cellular activity"
    return ClinicalStrategy(
        category=StrategyCategory.MOISTURE_BALANCE,
        strategy=strategy,
        rationale=rationale,
        priority=StrategyPriority.STANDARD,
    )


def _compression_strategy(perfusion: PerfusionStatus) -> ClinicalStrategy:
    if perfusion.compression_safe == CompressionSafety.FULL:
        return ClinicalStrategy(
            category=StrategyCategory.COMPRESSION,
            strategy="Full compression therapy (30-40mmHg)",
            rationale="Compression reverses venous hypertension - essential for venous ulcer healing",
            priority=StrategyPriority.CRITICAL,
        )
    if perfusion.compression_safe == CompressionSafety.REDUCED:
        return ClinicalStrategy(
            category=StrategyCategory.COMPRESSION,
            strategy="Modified compression (20-30mmHg) with close monitoring",
            rationale=(
                "Reduced perfusion allows only lower compression - "
                "balance venous return with arterial supply"
            ),
            priority=StrategyPriority.HIGH,
        )
    return ClinicalStrategy(
        category=StrategyCategory.COMPRESSION,
        strategy="NO COMPRESSION - perfusion inadequate",
        rationale="Compression would further compromise arterial blood flow - address perfusion first",
        priority=StrategyPriority.CRITICAL,
    )


def build_strategies(
    q: QuestionnaireInput,
    context: ClinicalContext,
    etiology: Etiology,
    wound_bed: WoundBedAssessment,
    infection: InfectionAssessment,
    perfusion: Optional[PerfusionStatus],
) -> List[ClinicalStrategy]:
    strategies: List[ClinicalStrategy] = []

    # Debridement: necrosis takes precedence over slough
    if q.has_tissue(TissueType.NECROSIS):
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.DEBRIDEMENT,
            strategy="Surgical/sharp debridement of necrotic tissue",
            rationale="Eschar and necrotic tissue must be removed to expose viable tissue and enable healing",
            priority=StrategyPriority.HIGH,
        ))
    elif q.has_tissue(TissueType.SLOUGH):
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.DEBRIDEMENT,
            strategy="Promote autolytic debridement",
            rationale="Devitalized tissue can be softened and removed by body's natural enzymes in moist environment",
            priority=StrategyPriority.STANDARD,
        ))

    strategies.append(_moisture_strategy(q.exudate))

    if infection.severity == InfectionSeverity.SYSTEMIC:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.INFECTION_CONTROL,
            strategy="Urgent systemic antibiotic therapy",
            rationale="Systemic infection requires IV antibiotics per local guidelines",
            priority=StrategyPriority.CRITICAL,
        ))
    elif infection.severity == InfectionSeverity.LOCAL:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.INFECTION_CONTROL,
            strategy="Topical antimicrobial therapy and bioburden reduction",
            rationale="Reduce bacterial load to enable healing progression",
            priority=StrategyPriority.HIGH,
        ))

    if etiology == Etiology.VENOUS:
        # Compression advice needs a perfusion grading; none exists off the lower limb
        if perfusion is not None:
            strategies.append(_compression_strategy(perfusion))
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.PATIENT_EDUCATION,
            strategy="Leg elevation and ankle exercises",
            rationale="Reduces venous pooling and edema between dressing changes",
            priority=StrategyPriority.STANDARD,
        ))
    elif etiology == Etiology.ARTERIAL:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.PERFUSION,
            strategy="URGENT vascular surgery referral",
            rationale="Arterial ulcers will not heal without restoring blood flow",
            priority=StrategyPriority.CRITICAL,
        ))
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.DEBRIDEMENT,
            strategy="Avoid aggressive debridement until perfusion optimized",
            rationale="Ischemic tissue cannot heal - debridement without blood flow causes extension",
            priority=StrategyPriority.CRITICAL,
        ))
    elif etiology == Etiology.DIABETIC_FOOT:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.OFFLOADING,
            strategy="Complete offloading with total contact cast or equivalent",
            rationale="Pressure at wound site prevents healing - must be eliminated entirely",
            priority=StrategyPriority.CRITICAL,
        ))
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.PATIENT_EDUCATION,
            strategy="Optimize glycemic control (target HbA1c <7%)",
            rationale="Hyperglycemia impairs immune function and wound healing",
            priority=StrategyPriority.HIGH,
        ))
        if q.bone_involvement_suspected:
            strategies.append(ClinicalStrategy(
                category=StrategyCategory.INFECTION_CONTROL,
                strategy="Imaging (X-ray/MRI) to confirm osteomyelitis",
                rationale="Bone infection requires prolonged antibiotics or surgical resection",
                priority=StrategyPriority.CRITICAL,
            ))
    elif etiology == Etiology.PRESSURE:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.OFFLOADING,
            strategy="Complete pressure redistribution",
            rationale="Sustained pressure caused wound - must be eliminated for healing",
            priority=StrategyPriority.CRITICAL,
        ))
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.PATIENT_EDUCATION,
            strategy="Reposition every 2 hours and use pressure-redistributing surfaces",
            rationale="Prevention of extension and new ulcer formation",
            priority=StrategyPriority.HIGH,
        ))

    if q.has_deep_spaces:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.WOUND_PROTECTION,
            strategy="Loosely pack cavities and undermined areas",
            rationale="Dead space allows abscess formation - must be obliterated while allowing drainage",
            priority=StrategyPriority.HIGH,
        ))

    if q.periwound_skin == PeriwoundSkin.MACERATED or q.exudate == ExudateLevel.HIGH:
        strategies.append(ClinicalStrategy(
            category=StrategyCategory.WOUND_PROTECTION,
            strategy="Protect periwound skin with barrier products",
            rationale="Maceration extends wound size and delays healing",
            priority=StrategyPriority.STANDARD,
        ))

    return strategies


# (context attribute, factor, impact, action) in report order
_CONSIDERATIONS = (
    (
        "has_diabetes",
        "Diabetes mellitus",
        "Impaired immune function, neuropathy, delayed healing",
        "Optimize glucose control (HbA1c <7%), daily foot inspection, appropriate footwear",
    ),
    (
        "has_pad",
        "Peripheral arterial disease",
        "Reduced tissue perfusion limits healing potential",
        "Vascular assessment, consider revascularization, avoid vasoconstrictors",
    ),
    (
        "has_venous_disease",
        "Chronic venous insufficiency",
        "Venous hypertension drives ulcer formation and recurrence",
        "Compression therapy essential, leg elevation, calf muscle pump exercises",
    ),
    (
        "is_immunosuppressed",
        "Immunosuppression",
        "Increased infection risk, slower healing response",
        "Lower threshold for antimicrobial therapy, closer monitoring",
    ),
    (
        "has_mobility_impairment",
        "Mobility impairment",
        "Difficulty with offloading and pressure relief",
        "Assistive devices, pressure-redistributing surfaces, caregiver education",
    ),
    (
        "is_on_anticoagulants",
        "Anticoagulation therapy",
        "Increased bleeding risk during debridement",
        "Gentle debridement technique, hemostatic dressings if needed",
    ),
)


def build_patient_considerations(context: ClinicalContext) -> List[PatientConsideration]:
    """One entry per comorbidity explicitly recorded as present."""
    return [
        PatientConsideration(factor=factor, impact=impact, action=action)
        for attr, factor, impact, action in _CONSIDERATIONS
        if getattr(context, attr) is True
    ]


def identify_barriers(
    q: QuestionnaireInput, context: ClinicalContext, etiology: Etiology
) -> List[HealingBarrier]:
    barriers: List[HealingBarrier] = []
    severity = infection_severity(q)

    if severity == InfectionSeverity.SYSTEMIC:
        barriers.append(HealingBarrier(
            barrier="Systemic wound infection",
            severity=BarrierSeverity.CRITICAL,
            mitigation="IV antibiotics per protocol, source control, urgent medical review",
        ))
    elif severity == InfectionSeverity.LOCAL:
        barriers.append(HealingBarrier(
            barrier="Local wound infection",
            severity=BarrierSeverity.MAJOR,
            mitigation="Antimicrobial therapy, bioburden reduction, monitor for progression",
        ))

    if q.has_tissue(TissueType.NECROSIS):
        barriers.append(HealingBarrier(
            barrier="Necrotic tissue",
            severity=BarrierSeverity.MAJOR,
            mitigation="Debridement required before healing can progress",
        ))

    if q.abi == AbiCategory.LT_0_5 or q.pedal_pulses_palpable is False:
        barriers.append(HealingBarrier(
            barrier="Critical limb ischemia",
            severity=BarrierSeverity.CRITICAL,
            mitigation="Vascular surgery consultation for revascularization",
        ))

    if q.bone_involvement_suspected:
        barriers.append(HealingBarrier(
            barrier="Possible osteomyelitis",
            severity=BarrierSeverity.CRITICAL,
            mitigation="Imaging, bone biopsy, prolonged antibiotics or surgical debridement",
        ))

    if context.has_venous_disease is True and etiology == Etiology.VENOUS:
        barriers.append(HealingBarrier(
            barrier="Venous hypertension",
            severity=BarrierSeverity.MAJOR,
            mitigation="Compression therapy (if arterial supply adequate) is mandatory",
        ))

    if q.exudate == ExudateLevel.HIGH:
        barriers.append(HealingBarrier(
            barrier="High exudate burden",
            severity=BarrierSeverity.MODERATE,
            mitigation="High absorbency management, frequent changes, periwound protection",
        ))

    if q.has_deep_spaces:
        barriers.append(HealingBarrier(
            barrier="Dead space (cavities/undermining)",
            severity=BarrierSeverity.MODERATE,
            mitigation="Loose packing to obliterate dead space and prevent abscess",
        ))

    return barriers


PROGRESS_INDICATORS = (
    "Wound bed improving (increasing granulation, decreasing slough/necrosis)",
    "Reducing wound dimensions (length, width, depth)",
    "Decreasing exudate levels",
    "Improving periwound skin integrity",
    "Resolution of infection signs",
    "Pain reduction (if initially present)",
)

ESCALATION_CRITERIA = (
    "Wound enlargement or deepening",
    "New or worsening infection signs",
    "Exposed bone or tendon",
    "Sudden increase in pain",
    "Loss of perfusion (cold, pale limb)",
    "Crepitus or gas formation",
    "No progress after 2-4 weeks",
)


def build_follow_up_plan(
    q: QuestionnaireInput, etiology: Etiology, infection: InfectionAssessment
) -> FollowUpPlan:
    if infection.requires_urgent_action or q.has_exposed_bone or q.abi == AbiCategory.LT_0_5:
        initial_review = "24-48 hours (URGENT)"
        ongoing = "Every 2-3 days until stabilized, then weekly"
    elif infection.severity == InfectionSeverity.LOCAL or etiology == Etiology.ARTERIAL:
        initial_review = "3-5 days"
        ongoing = "Weekly until healing trajectory established"
    else:
        initial_review = "7 days"
        ongoing = "Every 1-2 weeks depending on progress"

    return FollowUpPlan(
        initial_review=initial_review,
        ongoing_frequency=ongoing,
        progress_indicators=PROGRESS_INDICATORS,
        escalation_criteria=ESCALATION_CRITERIA,
    )
