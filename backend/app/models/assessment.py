"""
Wound assessment data model.
Questionnaire answers, clinical context and the structured clinical report
produced by the rules engine. All values are immutable.
"""
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class TissueType(str, Enum):
    NECROSIS = "necrosis"
    SLOUGH = "slough"
    GRANULATION = "granulation"
    EPITHELIALIZING = "epithelializing"


# Highest concern first
TISSUE_PRIORITY: Tuple[TissueType, ...] = (
    TissueType.NECROSIS,
    TissueType.SLOUGH,
    TissueType.GRANULATION,
    TissueType.EPITHELIALIZING,
)

UNKNOWN_TISSUE = "unknown"


class ExudateLevel(str, Enum):
    DRY = "dry"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    UNKNOWN = "unknown"


class DeepSpaceType(str, Enum):
    CAVITY = "cavity"
    TUNNEL = "tunnel"
    UNDERMINING = "undermining"


class PeriwoundSkin(str, Enum):
    NORMAL = "normal"
    MACERATED = "macerated"
    FRAGILE = "fragile"
    UNKNOWN = "unknown"


class AbiCategory(str, Enum):
    """Ankle-brachial index band, as recorded by the questionnaire."""
    GE_0_8 = "ge0_8"
    P0_5_TO_0_79 = "p0_5to0_79"
    LT_0_5 = "lt0_5"
    UNKNOWN = "unknown"


class Etiology(str, Enum):
    VENOUS = "venous"
    ARTERIAL = "arterial"
    DIABETIC_FOOT = "diabeticFoot"
    PRESSURE = "pressure"
    MIXED = "mixed"
    OTHER = "other"


class InfectionSeverity(str, Enum):
    NONE = "none"
    LOCAL = "local"
    SYSTEMIC = "systemic"


class ConcernLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class CompressionSafety(str, Enum):
    FULL = "full"
    REDUCED = "reduced"
    CONTRAINDICATED = "contraindicated"


class StrategyCategory(str, Enum):
    DEBRIDEMENT = "debridement"
    MOISTURE_BALANCE = "moistureBalance"
    INFECTION_CONTROL = "infectionControl"
    PERFUSION = "perfusion"
    OFFLOADING = "offloading"
    COMPRESSION = "compression"
    WOUND_PROTECTION = "woundProtection"
    PATIENT_EDUCATION = "patientEducation"


class StrategyPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    STANDARD = "standard"


class BarrierSeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    CRITICAL = "critical"


@dataclass(frozen=True)
class QuestionnaireInput:
    """Normalized clinical questionnaire answers for one wound assessment."""
    wound_bed_types: FrozenSet[TissueType] = frozenset()
    exudate: ExudateLevel = ExudateLevel.UNKNOWN
    has_deep_spaces: bool = False
    deep_space_types: FrozenSet[DeepSpaceType] = frozenset()  # only meaningful if has_deep_spaces
    periwound_skin: PeriwoundSkin = PeriwoundSkin.UNKNOWN

    # Infection signs
    warmth: bool = False
    purulent_discharge: bool = False
    odor: bool = False
    spreading_redness: bool = False
    erythema_gt_2cm: bool = False
    fever: bool = False
    crepitus: bool = False

    # Bone involvement
    has_exposed_bone: bool = False
    probe_to_bone_positive: bool = False

    # Perfusion
    pedal_pulses_palpable: Optional[bool] = None  # None = not assessed
    cold_pale_foot: bool = False
    rest_pain_relieved_by_hanging: bool = False
    abi: AbiCategory = AbiCategory.UNKNOWN

    def has_tissue(self, tissue: TissueType) -> bool:
        return tissue in self.wound_bed_types

    @property
    def bone_involvement_suspected(self) -> bool:
        return self.has_exposed_bone or self.probe_to_bone_positive


@dataclass(frozen=True)
class ClinicalContext:
    """
    Patient and location facts supplied alongside the questionnaire.
    Location flags are derived from the body region code when the context
    is built and are treated as fixed for the whole analysis.
    """
    patient_id: str
    has_diabetes: Optional[bool] = None
    has_pad: Optional[bool] = None
    has_venous_disease: Optional[bool] = None
    is_immunosuppressed: Optional[bool] = None
    has_mobility_impairment: Optional[bool] = None
    is_on_anticoagulants: Optional[bool] = None
    is_lower_limb: bool = False
    is_foot_location: bool = False
    suggested_etiology: Optional[Etiology] = None


# ── Report components ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class WoundBedAssessment:
    tissue_types: Tuple[TissueType, ...]
    dominant_tissue: str  # TissueType value or "unknown"
    summary: str
    concern_level: ConcernLevel


@dataclass(frozen=True)
class ExudateAssessment:
    level: ExudateLevel
    description: str
    management_strategy: str


@dataclass(frozen=True)
class InfectionAssessment:
    severity: InfectionSeverity
    signs: Tuple[str, ...]
    summary: str
    requires_urgent_action: bool


@dataclass(frozen=True)
class PeriwoundAssessment:
    status: PeriwoundSkin
    description: str
    intervention: Optional[str]


@dataclass(frozen=True)
class PerfusionStatus:
    abi: AbiCategory
    pulses: Optional[bool]
    clinical_signs: Tuple[str, ...]
    summary: str
    compression_safe: CompressionSafety


@dataclass(frozen=True)
class BoneStatus:
    exposed_bone: bool
    probe_to_bone: bool
    summary: str
    requires_imaging: bool


@dataclass(frozen=True)
class TreatmentGoal:
    priority: int
    goal: str
    rationale: str


@dataclass(frozen=True)
class ClinicalStrategy:
    category: StrategyCategory
    strategy: str
    rationale: str
    priority: StrategyPriority


@dataclass(frozen=True)
class PatientConsideration:
    factor: str
    impact: str
    action: str


@dataclass(frozen=True)
class HealingBarrier:
    barrier: str
    severity: BarrierSeverity
    mitigation: str


@dataclass(frozen=True)
class FollowUpPlan:
    initial_review: str
    ongoing_frequency: str
    progress_indicators: Tuple[str, ...]
    escalation_criteria: Tuple[str, ...]


@dataclass(frozen=True)
class RedFlag:
    code: str  # e.g. "systemic_infection", "critical_limb_ischemia"
    message: str


@dataclass(frozen=True)
class UrgentAction:
    code: str  # matches the RedFlag that raised it
    action: str


@dataclass(frozen=True)
class ClinicalReport:
    diagnosis: str
    etiology: Etiology
    healing_phase: str

    wound_bed_assessment: WoundBedAssessment
    exudate_assessment: ExudateAssessment
    infection_assessment: InfectionAssessment
    periwound_assessment: PeriwoundAssessment
    follow_up_plan: FollowUpPlan

    deep_spaces_present: bool = False
    deep_space_types: Tuple[DeepSpaceType, ...] = ()

    perfusion_status: Optional[PerfusionStatus] = None  # lower-limb wounds only
    bone_status: Optional[BoneStatus] = None

    treatment_goals: Tuple[TreatmentGoal, ...] = ()
    clinical_strategies: Tuple[ClinicalStrategy, ...] = ()
    patient_considerations: Tuple[PatientConsideration, ...] = ()
    healing_barriers: Tuple[HealingBarrier, ...] = ()
    red_flags: Tuple[RedFlag, ...] = ()
    urgent_actions: Tuple[UrgentAction, ...] = ()
