"""
Clinical context construction.
Combines the patient profile with the body-map location so that the
location facts are derived once, before analysis starts.
"""
from dataclasses import dataclass
from typing import Optional

from ..models.assessment import ClinicalContext, Etiology
from ..models.body_location import (
    is_foot_region,
    is_lower_leg_region,
    is_lower_limb_region,
    is_pressure_prone_region,
)


@dataclass(frozen=True)
class PatientProfile:
    """Comorbidities recorded on the patient profile (None = not recorded)."""
    patient_id: str
    has_diabetes: Optional[bool] = None
    has_pad: Optional[bool] = None
    has_venous_disease: Optional[bool] = None
    is_immunosuppressed: Optional[bool] = None
    has_mobility_impairment: Optional[bool] = None
    is_on_anticoagulants: Optional[bool] = None


def suggest_etiology(profile: PatientProfile, region_code: Optional[str]) -> Optional[Etiology]:
    """Location-aware etiology pre-fill; None when nothing points to one cause."""
    if profile.has_diabetes is True and is_foot_region(region_code):
        return Etiology.DIABETIC_FOOT
    if profile.has_mobility_impairment is True and is_pressure_prone_region(region_code):
        return Etiology.PRESSURE
    if profile.has_venous_disease is True and is_lower_leg_region(region_code):
        return Etiology.VENOUS
    if profile.has_pad is True and is_foot_region(region_code):
        return Etiology.ARTERIAL
    return None


def build_context(
    profile: PatientProfile,
    body_region_code: Optional[str],
    suggested_etiology: Optional[Etiology] = None,
    infer_suggestion: bool = True,
) -> ClinicalContext:
    """
    Build the ClinicalContext for one wound.

    An explicit suggested_etiology always wins; otherwise the location-aware
    suggestion is used when infer_suggestion is set, and the engine's own
    comorbidity ordering applies when neither yields a value.
    """
    if suggested_etiology is None and infer_suggestion:
        suggested_etiology = suggest_etiology(profile, body_region_code)

    return ClinicalContext(
        patient_id=profile.patient_id,
        has_diabetes=profile.has_diabetes,
        has_pad=profile.has_pad,
        has_venous_disease=profile.has_venous_disease,
        is_immunosuppressed=profile.is_immunosuppressed,
        has_mobility_impairment=profile.has_mobility_impairment,
        is_on_anticoagulants=profile.is_on_anticoagulants,
        is_lower_limb=is_lower_limb_region(body_region_code),
        is_foot_location=is_foot_region(body_region_code),
        suggested_etiology=suggested_etiology,
    )
