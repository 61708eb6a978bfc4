"""
Red-flag detection and diagnosis synthesis.
Each red-flag rule is checked independently; several can fire for the
same wound.
"""
import logging
from typing import List, Optional, Tuple

from ..models.assessment import (
    AbiCategory,
    BoneStatus,
    ClinicalContext,
    CompressionSafety,
    Etiology,
    InfectionAssessment,
    InfectionSeverity,
    PerfusionStatus,
    QuestionnaireInput,
    RedFlag,
    TissueType,
    UrgentAction,
    WoundBedAssessment,
)
from .wound_assessment import infection_severity

logger = logging.getLogger(__name__)

SYSTEMIC_INFECTION = "systemic_infection"
OSTEOMYELITIS = "suspected_osteomyelitis"
CRITICAL_LIMB_ISCHEMIA = "critical_limb_ischemia"
NECROTIZING_INFECTION = "necrotizing_infection"


def identify_urgent(
    q: QuestionnaireInput,
    context: ClinicalContext,
    infection: InfectionAssessment,
    perfusion: Optional[PerfusionStatus],
    bone: Optional[BoneStatus],
) -> Tuple[List[RedFlag], List[UrgentAction]]:
    """Return (red_flags, urgent_actions); each fired rule adds one of each."""
    red_flags: List[RedFlag] = []
    actions: List[UrgentAction] = []

    # ── Rule 1: Systemic infection ─────────────────────────────────────────
    if infection.requires_urgent_action:
        red_flags.append(RedFlag(
            SYSTEMIC_INFECTION,
            f"Systemic infection with {', '.join(infection.signs)}",
        ))
        actions.append(UrgentAction(
            SYSTEMIC_INFECTION, "Immediate medical evaluation for IV antibiotics"
        ))

    # ── Rule 2: Suspected osteomyelitis ────────────────────────────────────
    if bone is not None and bone.requires_imaging:
        red_flags.append(RedFlag(OSTEOMYELITIS, "Suspected osteomyelitis"))
        actions.append(UrgentAction(
            OSTEOMYELITIS, "Urgent imaging (X-ray/MRI) and specialist referral"
        ))

    # ── Rule 3: Critical limb ischaemia ────────────────────────────────────
    # Contraindicated compression alone is not enough: an unmeasured ABI
    # with no clinical signs must not raise this flag.
    if (
        perfusion is not None
        and perfusion.compression_safe == CompressionSafety.CONTRAINDICATED
        and (perfusion.abi == AbiCategory.LT_0_5 or perfusion.pulses is False)
    ):
        red_flags.append(RedFlag(CRITICAL_LIMB_ISCHEMIA, "Critical limb ischemia"))
        actions.append(UrgentAction(
            CRITICAL_LIMB_ISCHEMIA, "Emergency vascular surgery referral within 24 hours"
        ))

    # ── Rule 4: Crepitus ───────────────────────────────────────────────────
    if q.crepitus:
        red_flags.append(RedFlag(
            NECROTIZING_INFECTION, "Crepitus - possible necrotizing infection"
        ))
        actions.append(UrgentAction(NECROTIZING_INFECTION, "IMMEDIATE surgical evaluation"))

    for flag in red_flags:
        logger.warning("Red flag %s raised for patient %s", flag.code, context.patient_id)

    return red_flags, actions


def urgent_banner(q: QuestionnaireInput) -> Optional[str]:
    """Single most urgent warning to show while the questionnaire is being filled."""
    if infection_severity(q) == InfectionSeverity.SYSTEMIC:
        return "URGENT: Systemic infection - immediate medical evaluation required"
    if q.bone_involvement_suspected:
        return "URGENT: Possible osteomyelitis - imaging and specialist referral needed"
    if q.pedal_pulses_palpable is False or q.abi == AbiCategory.LT_0_5:
        return "URGENT: Severe ischemia - vascular assessment required"
    return None


_HEALING_PHASES = {
    TissueType.NECROSIS.value: "Necrotic (non-healing)",
    TissueType.SLOUGH.value: "Inflammatory",
    TissueType.GRANULATION.value: "Proliferative (healing)",
    TissueType.EPITHELIALIZING.value: "Maturation (final healing)",
}


def map_healing_phase(tissue: str) -> str:
    return _HEALING_PHASES.get(tissue, "Undetermined")


_DIAGNOSIS_BASES = {
    Etiology.VENOUS: "chronic venous leg ulcer",
    Etiology.ARTERIAL: "arterial insufficiency ulcer",
    Etiology.DIABETIC_FOOT: "diabetic foot ulcer",
    Etiology.PRESSURE: "pressure ulcer",
    Etiology.MIXED: "mixed etiology chronic wound",
}

_INFECTION_PREFIXES = {
    InfectionSeverity.SYSTEMIC: "Infected ",
    InfectionSeverity.LOCAL: "Locally infected ",
}


def generate_diagnosis(
    etiology: Etiology,
    infection: InfectionAssessment,
    perfusion: Optional[PerfusionStatus],
    wound_bed: WoundBedAssessment,
) -> str:
    prefix = _INFECTION_PREFIXES.get(infection.severity, "")

    if (
        etiology == Etiology.ARTERIAL
        and perfusion is not None
        and perfusion.abi == AbiCategory.LT_0_5
    ):
        base = "arterial ulcer with critical limb ischemia"
    else:
        base = _DIAGNOSIS_BASES.get(etiology, "chronic wound")

    phase = map_healing_phase(wound_bed.dominant_tissue).lower()
    return f"{prefix}{base} in {phase} phase"
