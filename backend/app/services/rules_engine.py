"""
Wound Assessment Rules Engine.
Deterministic clinical decision support: turns a completed wound
questionnaire plus patient/location context into a structured clinical
report (diagnosis, goals, strategies, barriers, follow-up, red flags).

The engine performs no I/O and holds no state between calls.
"""
import logging

from ..models.assessment import (
    ClinicalContext,
    ClinicalReport,
    DeepSpaceType,
    Etiology,
    QuestionnaireInput,
    TissueType,
)
from .care_planning import (
    build_follow_up_plan,
    build_goals,
    build_patient_considerations,
    build_strategies,
    identify_barriers,
)
from .urgent_issues import generate_diagnosis, identify_urgent, map_healing_phase
from .wound_assessment import (
    assess_bone,
    assess_exudate,
    assess_infection,
    assess_perfusion,
    assess_periwound,
    assess_wound_bed,
)

logger = logging.getLogger(__name__)


def resolve_etiology(context: ClinicalContext) -> Etiology:
    """
    Pick the wound etiology: an explicit suggestion wins, otherwise the
    first matching comorbidity in priority order, falling back to mixed.
    """
    if context.suggested_etiology is not None:
        return context.suggested_etiology
    if context.has_diabetes is True and context.is_foot_location:
        return Etiology.DIABETIC_FOOT
    if context.has_pad is True:
        return Etiology.ARTERIAL
    if context.has_venous_disease is True:
        return Etiology.VENOUS
    if context.has_mobility_impairment is True:
        return Etiology.PRESSURE
    return Etiology.MIXED


def should_ask_perfusion(context: ClinicalContext) -> bool:
    return context.is_lower_limb


def should_ask_bone_questions(context: ClinicalContext, q: QuestionnaireInput) -> bool:
    """Bone involvement is assessed for diabetic feet and any necrotic wound."""
    return (context.has_diabetes is True and context.is_foot_location) or q.has_tissue(
        TissueType.NECROSIS
    )


def analyze(q: QuestionnaireInput, context: ClinicalContext) -> ClinicalReport:
    """
    Run every assessment and planning rule for one wound.

    Args:
        q: Parsed questionnaire answers
        context: Patient comorbidities and body-location facts

    Returns:
        ClinicalReport; perfusion_status is only set for lower-limb wounds
        and bone_status only when bone questions apply.
    """
    etiology = resolve_etiology(context)

    wound_bed = assess_wound_bed(q)
    exudate = assess_exudate(q)
    infection = assess_infection(q)
    periwound = assess_periwound(q)
    perfusion = assess_perfusion(q) if should_ask_perfusion(context) else None
    bone = assess_bone(q) if should_ask_bone_questions(context, q) else None

    goals = build_goals(q, context, etiology)
    strategies = build_strategies(q, context, etiology, wound_bed, infection, perfusion)
    considerations = build_patient_considerations(context)
    barriers = identify_barriers(q, context, etiology)
    follow_up = build_follow_up_plan(q, etiology, infection)
    red_flags, urgent_actions = identify_urgent(q, context, infection, perfusion, bone)

    logger.debug(
        "Analyzed wound for patient %s: etiology=%s infection=%s red_flags=%d",
        context.patient_id, etiology.value, infection.severity.value, len(red_flags),
    )

    return ClinicalReport(
        diagnosis=generate_diagnosis(etiology, infection, perfusion, wound_bed),
        etiology=etiology,
        healing_phase=map_healing_phase(wound_bed.dominant_tissue),
        wound_bed_assessment=wound_bed,
        exudate_assessment=exudate,
        infection_assessment=infection,
        periwound_assessment=periwound,
        follow_up_plan=follow_up,
        deep_spaces_present=q.has_deep_spaces,
        deep_space_types=tuple(t for t in DeepSpaceType if t in q.deep_space_types),
        perfusion_status=perfusion,
        bone_status=bone,
        treatment_goals=tuple(goals),
        clinical_strategies=tuple(strategies),
        patient_considerations=tuple(considerations),
        healing_barriers=tuple(barriers),
        red_flags=tuple(red_flags),
        urgent_actions=tuple(urgent_actions),
    )
