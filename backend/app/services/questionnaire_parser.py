"""
Questionnaire document parser.
Converts the questionnaire document saved by the mobile form into a
QuestionnaireInput. Unknown or missing answers fall back to each field's
"unknown" default; structurally malformed documents are rejected here so
the rules engine only ever sees well-typed input.
"""
import logging
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional, Type, TypeVar

from ..models.assessment import (
    AbiCategory,
    DeepSpaceType,
    Etiology,
    ExudateLevel,
    PeriwoundSkin,
    QuestionnaireInput,
    TissueType,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# Persisted key -> QuestionnaireInput field, inside "infectionSigns"
INFECTION_SIGN_KEYS = {
    "warmth": "warmth",
    "purulentDischarge": "purulent_discharge",
    "odor": "odor",
    "spreadingRedness": "spreading_redness",
    "erythemaGt2cm": "erythema_gt_2cm",
    "fever": "fever",
    "crepitus": "crepitus",
}


class QuestionnaireParseError(ValueError):
    """Raised when a stored questionnaire document has the wrong shape."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def _enum_value(raw: Any, enum_cls: Type[E], default: E) -> E:
    if raw is None:
        return default
    if not isinstance(raw, str):
        logger.debug("Non-string %s answer %r treated as unknown", enum_cls.__name__, raw)
        return default
    try:
        return enum_cls(raw.strip())
    except ValueError:
        return default


def _flag(doc: Mapping[str, Any], key: str) -> bool:
    raw = doc.get(key)
    if raw is None:
        return False
    if not isinstance(raw, bool):
        raise QuestionnaireParseError(f"'{key}' must be a boolean, got {type(raw).__name__}", key)
    return raw


def _tag_set(doc: Mapping[str, Any], key: str, enum_cls: Type[E]) -> FrozenSet[E]:
    raw = doc.get(key)
    if raw is None:
        return frozenset()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple, set, frozenset)):
        raise QuestionnaireParseError(f"'{key}' must be a list of tags", key)
    tags = set()
    for item in raw:
        if not isinstance(item, str):
            continue
        try:
            tags.add(enum_cls(item.strip()))
        except ValueError:
            logger.debug("Dropping unknown %s tag %r", enum_cls.__name__, item)
    return frozenset(tags)


def parse_questionnaire(doc: Mapping[str, Any]) -> QuestionnaireInput:
    """
    Parse a stored questionnaire document.

    Args:
        doc: Questionnaire mapping as saved by the form (camelCase keys,
             infection signs nested under "infectionSigns")

    Returns:
        QuestionnaireInput with every unanswered field at its default

    Raises:
        QuestionnaireParseError: if the document or one of its fields has
            the wrong structure
    """
    if not isinstance(doc, Mapping):
        raise QuestionnaireParseError("Questionnaire document must be a mapping")

    signs_doc = doc.get("infectionSigns")
    if signs_doc is None:
        signs_doc = {}
    if not isinstance(signs_doc, Mapping):
        raise QuestionnaireParseError("'infectionSigns' must be a mapping", "infectionSigns")
    signs = {field: _flag(signs_doc, key) for key, field in INFECTION_SIGN_KEYS.items()}

    pulses = doc.get("pedalPulsesPalpable")
    if not isinstance(pulses, bool):
        pulses = None

    return QuestionnaireInput(
        wound_bed_types=_tag_set(doc, "woundBedTypes", TissueType),
        exudate=_enum_value(doc.get("exudate"), ExudateLevel, ExudateLevel.UNKNOWN),
        has_deep_spaces=_flag(doc, "hasDeepSpaces"),
        deep_space_types=_tag_set(doc, "deepSpaceType", DeepSpaceType),
        periwound_skin=_enum_value(doc.get("periwoundSkin"), PeriwoundSkin, PeriwoundSkin.UNKNOWN),
        has_exposed_bone=_flag(doc, "hasExposedBone"),
        probe_to_bone_positive=_flag(doc, "probeToBonePositive"),
        pedal_pulses_palpable=pulses,
        cold_pale_foot=_flag(doc, "coldPaleFoot"),
        rest_pain_relieved_by_hanging=_flag(doc, "restPainRelievedByHanging"),
        abi=_enum_value(doc.get("abi"), AbiCategory, AbiCategory.UNKNOWN),
        **signs,
    )


def parse_etiology(raw: Optional[str]) -> Optional[Etiology]:
    """Map a stored etiology tag to Etiology; None stays None, unknown tags become OTHER."""
    if raw is None or not str(raw).strip():
        return None
    return _enum_value(str(raw), Etiology, Etiology.OTHER)
