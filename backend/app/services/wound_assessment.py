"""
Per-axis wound assessments.
Wound bed, exudate, infection, periwound, perfusion and bone involvement,
each derived from the questionnaire alone.
"""
from typing import List

from ..models.assessment import (
    TISSUE_PRIORITY,
    UNKNOWN_TISSUE,
    AbiCategory,
    BoneStatus,
    CompressionSafety,
    ConcernLevel,
    ExudateAssessment,
    ExudateLevel,
    InfectionAssessment,
    InfectionSeverity,
    PerfusionStatus,
    PeriwoundAssessment,
    PeriwoundSkin,
    QuestionnaireInput,
    TissueType,
    WoundBedAssessment,
)


_EXUDATE_TABLE = {
    ExudateLevel.DRY: (
        "Dry wound bed - insufficient moisture for optimal healing",
        "Rehydrate wound bed and maintain moist healing environment",
    ),
    ExudateLevel.LOW: (
        "Minimal exudate - wound environment adequate",
        "Maintain moisture balance with appropriate dressing absorbency",
    ),
    ExudateLevel.MODERATE: (
        "Moderate exudate levels - requires balanced moisture management",
        "Balance moisture - absorb excess while maintaining moist interface",
    ),
    ExudateLevel.HIGH: (
        "High exudate burden - risk of maceration and delayed healing",
        "High absorbency management essential to protect periwound skin",
    ),
}
_EXUDATE_UNASSESSED = (
    "Exudate level not assessed",
    "Assess and manage moisture balance",
)

_PERIWOUND_TABLE = {
    PeriwoundSkin.NORMAL: ("Periwound skin intact and healthy", None),
    PeriwoundSkin.MACERATED: (
        "Periwound maceration - excessive moisture damage to surrounding skin",
        "Apply barrier protection and optimize exudate management",
    ),
    PeriwoundSkin.FRAGILE: (
        "Fragile periwound skin - increased risk of extension and trauma",
        "Gentle handling, atraumatic dressing removal, protective barrier",
    ),
}
_PERIWOUND_UNASSESSED = (
    "Periwound status requires assessment",
    "Assess and protect surrounding skin",
)

_INFECTION_SUMMARIES = {
    InfectionSeverity.NONE: "No signs of wound infection - maintain vigilance",
    InfectionSeverity.LOCAL: (
        "Local infection present. Requires antimicrobial management and close "
        "monitoring for progression."
    ),
    InfectionSeverity.SYSTEMIC: (
        "SYSTEMIC INFECTION - spreading infection with systemic involvement. "
        "Requires urgent medical intervention."
    ),
}


def dominant_tissue(q: QuestionnaireInput) -> str:
    """Return the highest-concern tissue present, or "unknown" for an empty bed."""
    for tissue in TISSUE_PRIORITY:
        if q.has_tissue(tissue):
            return tissue.value
    return UNKNOWN_TISSUE


def assess_wound_bed(q: QuestionnaireInput) -> WoundBedAssessment:
    dominant = dominant_tissue(q)
    types = q.wound_bed_types

    if dominant == TissueType.NECROSIS.value:
        summary = (
            "Wound bed contains necrotic tissue requiring debridement. "
            "Non-viable tissue prevents healing and increases infection risk."
        )
        concern = ConcernLevel.HIGH
    elif dominant == TissueType.SLOUGH.value:
        summary = (
            "Sloughy wound bed indicates devitalized tissue. "
            "Autolytic or sharp debridement needed to progress healing."
        )
        concern = ConcernLevel.MODERATE
    elif dominant == TissueType.GRANULATION.value:
        if len(types) == 1:
            summary = "Healthy granulation tissue present - wound is in active healing phase."
            concern = ConcernLevel.LOW
        else:
            summary = (
                "Mixed wound bed with granulation tissue. "
                "Address barriers to optimize healing environment."
            )
            concern = ConcernLevel.MODERATE
    elif dominant == TissueType.EPITHELIALIZING.value:
        summary = "Epithelialization occurring - wound in final healing stage. Protect new tissue."
        concern = ConcernLevel.LOW
    else:
        summary = "Wound bed assessment incomplete."
        concern = ConcernLevel.MODERATE

    return WoundBedAssessment(
        tissue_types=tuple(t for t in TISSUE_PRIORITY if t in types),
        dominant_tissue=dominant,
        summary=summary,
        concern_level=concern,
    )


def assess_exudate(q: QuestionnaireInput) -> ExudateAssessment:
    description, strategy = _EXUDATE_TABLE.get(q.exudate, _EXUDATE_UNASSESSED)
    return ExudateAssessment(
        level=q.exudate,
        description=description,
        management_strategy=strategy,
    )


def assess_periwound(q: QuestionnaireInput) -> PeriwoundAssessment:
    description, intervention = _PERIWOUND_TABLE.get(q.periwound_skin, _PERIWOUND_UNASSESSED)
    return PeriwoundAssessment(
        status=q.periwound_skin,
        description=description,
        intervention=intervention,
    )


def infection_severity(q: QuestionnaireInput) -> InfectionSeverity:
    """Systemic signs dominate; any remaining sign means local infection."""
    if q.fever or q.crepitus or q.spreading_redness:
        return InfectionSeverity.SYSTEMIC
    if q.warmth or q.purulent_discharge or q.odor or q.erythema_gt_2cm:
        return InfectionSeverity.LOCAL
    return InfectionSeverity.NONE


def infection_signs(q: QuestionnaireInput) -> List[str]:
    signs = []
    if q.warmth:
        signs.append("Local warmth")
    if q.purulent_discharge:
        signs.append("Purulent discharge")
    if q.odor:
        signs.append("Foul odor")
    if q.spreading_redness:
        signs.append("Spreading erythema")
    if q.erythema_gt_2cm:
        signs.append("Erythema >2cm from wound edge")
    if q.fever:
        signs.append("Systemic fever")
    if q.crepitus:
        signs.append("Crepitus (gas formation)")
    return signs


def assess_infection(q: QuestionnaireInput) -> InfectionAssessment:
    severity = infection_severity(q)
    return InfectionAssessment(
        severity=severity,
        signs=tuple(infection_signs(q)),
        summary=_INFECTION_SUMMARIES[severity],
        requires_urgent_action=severity == InfectionSeverity.SYSTEMIC,
    )


def assess_perfusion(q: QuestionnaireInput) -> PerfusionStatus:
    """
    Grade arterial perfusion of a lower-limb wound.

    Clinical signs of ischaemia override a reassuring ABI: a wound with
    ABI >= 0.8 but absent pedal pulses is still treated as critical.
    An unknown ABI with no other signal defaults to compression being
    contraindicated until measured.
    """
    abi = q.abi
    pulses = q.pedal_pulses_palpable

    clinical_signs = []
    if q.cold_pale_foot:
        clinical_signs.append("Cold, pale foot")
    if q.rest_pain_relieved_by_hanging:
        clinical_signs.append("Rest pain (relieved by dependency)")
    if pulses is False:
        clinical_signs.append("Absent pedal pulses")

    if abi == AbiCategory.LT_0_5 or pulses is False or clinical_signs:
        summary = (
            "CRITICAL LIMB ISCHEMIA - severely impaired arterial perfusion. "
            "Urgent vascular assessment required."
        )
        compression = CompressionSafety.CONTRAINDICATED
    elif abi == AbiCategory.P0_5_TO_0_79:
        summary = (
            "Reduced arterial perfusion (ABI 0.5-0.79). Vascular assessment recommended. "
            "Compression only with caution."
        )
        compression = CompressionSafety.REDUCED
    elif abi == AbiCategory.GE_0_8:
        summary = "Adequate arterial perfusion (ABI ≥0.8). Compression therapy safe if indicated."
        compression = CompressionSafety.FULL
    else:
        summary = "Perfusion status unknown - ABI measurement recommended before compression therapy."
        compression = CompressionSafety.CONTRAINDICATED

    return PerfusionStatus(
        abi=abi,
        pulses=pulses,
        clinical_signs=tuple(clinical_signs),
        summary=summary,
        compression_safe=compression,
    )


def assess_bone(q: QuestionnaireInput) -> BoneStatus:
    if q.bone_involvement_suspected:
        summary = (
            "BONE INVOLVEMENT DETECTED - high risk of osteomyelitis. "
            "Requires imaging (X-ray/MRI) and possible bone biopsy."
        )
    else:
        summary = "No evidence of bone involvement on clinical examination."

    return BoneStatus(
        exposed_bone=q.has_exposed_bone,
        probe_to_bone=q.probe_to_bone_positive,
        summary=summary,
        requires_imaging=q.bone_involvement_suspected,
    )
