from fastapi import APIRouter, HTTPException
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
import logging
from ..models.assessment import (
    AbiCategory,
    BarrierSeverity,
    CompressionSafety,
    ConcernLevel,
    DeepSpaceType,
    Etiology,
    ExudateLevel,
    InfectionSeverity,
    PeriwoundSkin,
    StrategyCategory,
    StrategyPriority,
    TissueType,
)
from ..models.body_location import AnatomicalLocation
from ..services.context_builder import PatientProfile, build_context
from ..services.dressing_engine import ProductPriority, dressing_engine
from ..services.questionnaire_parser import (
    QuestionnaireParseError,
    parse_etiology,
    parse_questionnaire,
)
from ..services.rules_engine import (
    analyze,
    resolve_etiology,
    should_ask_bone_questions,
    should_ask_perfusion,
)
from ..services.urgent_issues import urgent_banner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assessments", tags=["assessments"])


# ── Request schemas ────────────────────────────────────────────────────────

class ContextIn(BaseModel):
    patient_id: str
    has_diabetes: Optional[bool] = None
    has_pad: Optional[bool] = None
    has_venous_disease: Optional[bool] = None
    is_immunosuppressed: Optional[bool] = None
    has_mobility_impairment: Optional[bool] = None
    is_on_anticoagulants: Optional[bool] = None
    body_region_code: Optional[str] = None
    suggested_etiology: Optional[str] = None
    infer_etiology: bool = True


class AssessmentRequest(BaseModel):
    questionnaire: Dict[str, Any] = Field(default_factory=dict)
    context: ContextIn


class DressingRequest(BaseModel):
    questionnaire: Dict[str, Any] = Field(default_factory=dict)
    context: ContextIn
    length_cm: Optional[float] = None
    width_cm: Optional[float] = None


# ── Response schemas ───────────────────────────────────────────────────────

class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class WoundBedAssessmentResponse(_FromAttributes):
    tissue_types: List[TissueType]
    dominant_tissue: str
    summary: str
    concern_level: ConcernLevel


class ExudateAssessmentResponse(_FromAttributes):
    level: ExudateLevel
    description: str
    management_strategy: str


class InfectionAssessmentResponse(_FromAttributes):
    severity: InfectionSeverity
    signs: List[str]
    summary: str
    requires_urgent_action: bool


class PeriwoundAssessmentResponse(_FromAttributes):
    status: PeriwoundSkin
    description: str
    intervention: Optional[str]


class PerfusionStatusResponse(_FromAttributes):
    abi: AbiCategory
    pulses: Optional[bool]
    clinical_signs: List[str]
    summary: str
    compression_safe: CompressionSafety


class BoneStatusResponse(_FromAttributes):
    exposed_bone: bool
    probe_to_bone: bool
    summary: str
    requires_imaging: bool


class TreatmentGoalResponse(_FromAttributes):
    priority: int
    goal: str
    rationale: str


class ClinicalStrategyResponse(_FromAttributes):
    category: StrategyCategory
    strategy: str
    rationale: str
    priority: StrategyPriority


class PatientConsiderationResponse(_FromAttributes):
    factor: str
    impact: str
    action: str


class HealingBarrierResponse(_FromAttributes):
    barrier: str
    severity: BarrierSeverity
    mitigation: str


class FollowUpPlanResponse(_FromAttributes):
    initial_review: str
    ongoing_frequency: str
    progress_indicators: List[str]
    escalation_criteria: List[str]


class RedFlagResponse(_FromAttributes):
    code: str
    message: str


class UrgentActionResponse(_FromAttributes):
    code: str
    action: str


class ClinicalReportResponse(_FromAttributes):
    diagnosis: str
    etiology: Etiology
    healing_phase: str
    wound_bed_assessment: WoundBedAssessmentResponse
    exudate_assessment: ExudateAssessmentResponse
    infection_assessment: InfectionAssessmentResponse
    periwound_assessment: PeriwoundAssessmentResponse
    deep_spaces_present: bool
    deep_space_types: List[DeepSpaceType]
    perfusion_status: Optional[PerfusionStatusResponse]
    bone_status: Optional[BoneStatusResponse]
    treatment_goals: List[TreatmentGoalResponse]
    clinical_strategies: List[ClinicalStrategyResponse]
    patient_considerations: List[PatientConsiderationResponse]
    healing_barriers: List[HealingBarrierResponse]
    follow_up_plan: FollowUpPlanResponse
    red_flags: List[RedFlagResponse]
    urgent_actions: List[UrgentActionResponse]


class QuestionnairePreviewResponse(BaseModel):
    ask_perfusion: bool
    ask_bone_questions: bool
    etiology: Etiology
    banner: Optional[str]


class DressingProductResponse(_FromAttributes):
    name: str
    rationale: str
    examples: List[str]
    priority: ProductPriority


class DressingPlanResponse(_FromAttributes):
    wound_size: str
    primary_size: str
    secondary_size: str
    border_size: str
    primary: List[DressingProductResponse]
    secondary: List[DressingProductResponse]
    border: List[DressingProductResponse]


# ── Helpers ────────────────────────────────────────────────────────────────

def _parse_request(questionnaire: Dict[str, Any], context_in: ContextIn):
    try:
        q = parse_questionnaire(questionnaire)
        suggested = parse_etiology(context_in.suggested_etiology)
    except QuestionnaireParseError as exc:
        logger.info("Rejected questionnaire for patient %s: %s", context_in.patient_id, exc)
        raise HTTPException(status_code=422, detail=str(exc))
    if context_in.body_region_code and context_in.body_region_code not in AnatomicalLocation.ALL:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid anatomical location. Choose from: {AnatomicalLocation.ALL}",
        )

    profile = PatientProfile(
        patient_id=context_in.patient_id,
        has_diabetes=context_in.has_diabetes,
        has_pad=context_in.has_pad,
        has_venous_disease=context_in.has_venous_disease,
        is_immunosuppressed=context_in.is_immunosuppressed,
        has_mobility_impairment=context_in.has_mobility_impairment,
        is_on_anticoagulants=context_in.is_on_anticoagulants,
    )
    context = build_context(
        profile,
        context_in.body_region_code,
        suggested_etiology=suggested,
        infer_suggestion=context_in.infer_etiology,
    )
    return q, context


# ── Routes ─────────────────────────────────────────────────────────────────

@router.post("/analyze", response_model=ClinicalReportResponse)
def analyze_wound(request: AssessmentRequest):
    """Run the wound assessment rules engine on a completed questionnaire."""
    q, context = _parse_request(request.questionnaire, request.context)
    report = analyze(q, context)
    return ClinicalReportResponse.model_validate(report)


@router.post("/preview", response_model=QuestionnairePreviewResponse)
def preview_questionnaire(request: AssessmentRequest):
    """Which optional questionnaire sections apply, plus the live urgent banner."""
    q, context = _parse_request(request.questionnaire, request.context)
    return QuestionnairePreviewResponse(
        ask_perfusion=should_ask_perfusion(context),
        ask_bone_questions=should_ask_bone_questions(context, q),
        etiology=resolve_etiology(context),
        banner=urgent_banner(q),
    )


@router.post("/dressings", response_model=DressingPlanResponse)
def recommend_dressings(request: DressingRequest):
    """Dressing selection and sizing for a measured wound."""
    q, context = _parse_request(request.questionnaire, request.context)
    try:
        plan = dressing_engine.recommend(
            request.length_cm, request.width_cm, q, resolve_etiology(context)
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return DressingPlanResponse.model_validate(plan)
