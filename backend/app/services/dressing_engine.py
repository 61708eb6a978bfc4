"""
Dressing Recommendation Engine.
Logic-based system that suggests primary, secondary and border dressings
and their sizes from wound dimensions and questionnaire answers.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..models.assessment import (
    AbiCategory,
    Etiology,
    ExudateLevel,
    InfectionSeverity,
    QuestionnaireInput,
    TissueType,
)
from .wound_assessment import dominant_tissue, infection_severity

# Margin added to each wound dimension, in cm
PRIMARY_MARGIN_CM = 4
SECONDARY_MARGIN_CM = 6
BORDER_MARGIN_CM = 8


class ProductPriority(str, Enum):
    PREFERRED = "preferred"
    ALTERNATIVE = "alternative"


@dataclass(frozen=True)
class DressingProduct:
    name: str
    rationale: str
    examples: Tuple[str, ...]
    priority: ProductPriority = ProductPriority.PREFERRED
    antimicrobial: bool = False


@dataclass(frozen=True)
class DressingPlan:
    wound_size: str
    primary_size: str
    secondary_size: str
    border_size: str
    primary: Tuple[DressingProduct, ...]
    secondary: Tuple[DressingProduct, ...]
    border: Tuple[DressingProduct, ...]


_GRANULATION_BY_EXUDATE = {
    ExudateLevel.DRY: DressingProduct(
        name="Hydrogel sheet",
        rationale="Donates moisture to a dry granulating bed",
        examples=("IntraSite Gel", "Nu-Gel"),
    ),
    ExudateLevel.LOW: DressingProduct(
        name="Thin foam or hydrocolloid",
        rationale="Maintains moisture with low absorbency; protects granulation tissue",
        examples=("Mepilex Lite", "DuoDERM Extra Thin"),
    ),
    ExudateLevel.MODERATE: DressingProduct(
        name="Foam dressing",
        rationale="Absorbs moderate exudate while keeping the wound interface moist",
        examples=("Mepilex Border", "Allevyn Gentle"),
    ),
    ExudateLevel.HIGH: DressingProduct(
        name="Superabsorbent or alginate dressing",
        rationale="High fluid handling to prevent maceration",
        examples=("Zetuvit Plus", "Kaltostat", "Aquacel Foam Extra"),
    ),
}


class DressingEngine:
    """
    Rules-based dressing selection.
    Primary dressing follows the dominant tissue, then infection and
    exudate; secondary and border layers follow etiology and exudate.
    """

    def recommend(
        self,
        length_cm: Optional[float],
        width_cm: Optional[float],
        q: QuestionnaireInput,
        etiology: Etiology,
    ) -> DressingPlan:
        """
        Generate dressing recommendation for one wound.

        Raises:
            ValueError: if either dimension is missing or not positive
        """
        self._validate_dimensions(length_cm, width_cm)

        infected = infection_severity(q) != InfectionSeverity.NONE
        primary = self._primary_dressings(q, infected)
        secondary: List[DressingProduct] = []
        border: List[DressingProduct] = []

        if etiology == Etiology.VENOUS and q.abi == AbiCategory.GE_0_8:
            secondary.append(DressingProduct(
                name="Compression bandage system",
                rationale="Arterial supply adequate (ABI >= 0.8); compression treats venous hypertension",
                examples=("4-layer bandage system", "Short-stretch bandage"),
            ))
        if q.exudate == ExudateLevel.HIGH:
            secondary.append(DressingProduct(
                name="Absorbent secondary pad",
                rationale="Extra fluid capacity over the primary layer",
                examples=("Zetuvit", "Melolin"),
            ))

        border.append(DressingProduct(
            name="Film or silicone border",
            rationale="Secures dressings while protecting periwound skin",
            examples=("Tegaderm", "Mepilex Border", "Opsite Flexigrid"),
        ))
        if etiology == Etiology.DIABETIC_FOOT:
            border.append(DressingProduct(
                name="Offloading device",
                rationale="Removes pressure from the ulcer site",
                examples=("Total contact cast", "Removable cast boot", "Felted foam"),
            ))

        return DressingPlan(
            wound_size=f"{length_cm:.1f} × {width_cm:.1f} cm",
            primary_size=self._size_with_margin(length_cm, width_cm, PRIMARY_MARGIN_CM),
            secondary_size=self._size_with_margin(length_cm, width_cm, SECONDARY_MARGIN_CM),
            border_size=self._size_with_margin(length_cm, width_cm, BORDER_MARGIN_CM),
            primary=tuple(primary),
            secondary=tuple(secondary),
            border=tuple(border),
        )

    def _primary_dressings(self, q: QuestionnaireInput, infected: bool) -> List[DressingProduct]:
        tissue = dominant_tissue(q)
        primary: List[DressingProduct] = []

        if tissue == TissueType.NECROSIS.value:
            primary.append(DressingProduct(
                name="Hydrogel",
                rationale="Softens eschar and supports autolytic debridement",
                examples=("IntraSite Gel", "Purilon Gel", "DuoDERM Hydroactive"),
            ))
        elif tissue == TissueType.SLOUGH.value:
            if q.exudate == ExudateLevel.HIGH:
                primary.append(DressingProduct(
                    name="Alginate dressing",
                    rationale="Absorbs heavy exudate while promoting slough removal",
                    examples=("Kaltostat", "Sorbsan", "Algisite M"),
                ))
            else:
                primary.append(DressingProduct(
                    name="Hydrocolloid or hydrofiber dressing",
                    rationale="Moist environment for autolytic debridement of slough",
                    examples=("DuoDERM Extra Thin", "Aquacel Foam"),
                ))
        elif tissue == TissueType.GRANULATION.value:
            if infected:
                primary.append(DressingProduct(
                    name="Silver foam dressing",
                    rationale="Antimicrobial cover for an infected granulating wound",
                    examples=("Mepilex Ag", "Aquacel Ag Foam", "Acticoat"),
                    antimicrobial=True,
                ))
            else:
                primary.append(_GRANULATION_BY_EXUDATE.get(
                    q.exudate,
                    DressingProduct(
                        name="Foam dressing",
                        rationale="General-purpose moisture management until exudate is assessed",
                        examples=("Mepilex", "Allevyn"),
                    ),
                ))

        if infected and not any(p.antimicrobial for p in primary):
            primary.append(DressingProduct(
                name="Antimicrobial dressing",
                rationale="Reduces bioburden while infection signs are present",
                examples=("Acticoat", "Aquacel Ag"),
                priority=ProductPriority.ALTERNATIVE,
                antimicrobial=True,
            ))

        return primary

    def _validate_dimensions(self, length_cm: Optional[float], width_cm: Optional[float]) -> None:
        if length_cm is None or width_cm is None:
            raise ValueError("Wound length and width are required for dressing sizing")
        # NaN compares false against everything, so check finiteness first
        if not (math.isfinite(length_cm) and math.isfinite(width_cm)):
            raise ValueError(
                f"Wound dimensions must be finite, got {length_cm} × {width_cm} cm"
            )
        if length_cm <= 0 or width_cm <= 0:
            raise ValueError(
                f"Wound dimensions must be positive, got {length_cm} × {width_cm} cm"
            )

    def _size_with_margin(self, length_cm: float, width_cm: float, margin_cm: int) -> str:
        return f"{math.ceil(length_cm + margin_cm)} × {math.ceil(width_cm + margin_cm)} cm"


dressing_engine = DressingEngine()
