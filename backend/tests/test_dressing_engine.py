import pytest
from app.models.assessment import AbiCategory, Etiology, ExudateLevel, QuestionnaireInput, TissueType
from app.services.dressing_engine import DressingEngine, ProductPriority


def _q(*tissues, **kwargs):
    return QuestionnaireInput(wound_bed_types=frozenset(tissues), **kwargs)


class TestDressingEngine:
    def setup_method(self):
        self.engine = DressingEngine()

    def test_high_exudate_slough_recommends_alginate(self):
        """High exudate with slough should recommend alginate dressing."""
        plan = self.engine.recommend(
            4.0, 3.0, _q(TissueType.SLOUGH, exudate=ExudateLevel.HIGH), Etiology.VENOUS
        )
        assert "Alginate" in plan.primary[0].name
        assert any(p.name == "Absorbent secondary pad" for p in plan.secondary)

    def test_necrosis_recommends_hydrogel(self):
        plan = self.engine.recommend(2.0, 2.0, _q(TissueType.NECROSIS), Etiology.PRESSURE)
        assert plan.primary[0].name == "Hydrogel"

    def test_diabetic_foot_adds_offloading(self):
        """Diabetic foot ulcer should always include an offloading device."""
        plan = self.engine.recommend(
            3.0, 2.0, _q(TissueType.GRANULATION, exudate=ExudateLevel.MODERATE), Etiology.DIABETIC_FOOT
        )
        assert [p.name for p in plan.border] == ["Film or silicone border", "Offloading device"]

    def test_infected_granulation_uses_silver(self):
        plan = self.engine.recommend(3.0, 2.0, _q(TissueType.GRANULATION, warmth=True), Etiology.MIXED)
        assert [p.name for p in plan.primary] == ["Silver foam dressing"]
        assert plan.primary[0].antimicrobial is True

    def test_infected_slough_adds_antimicrobial_alternative(self):
        plan = self.engine.recommend(3.0, 2.0, _q(TissueType.SLOUGH, odor=True), Etiology.MIXED)
        assert plan.primary[-1].name == "Antimicrobial dressing"
        assert plan.primary[-1].priority == ProductPriority.ALTERNATIVE

    def test_compression_only_for_venous_with_adequate_abi(self):
        adequate = self.engine.recommend(
            5.0, 4.0, _q(TissueType.GRANULATION, abi=AbiCategory.GE_0_8), Etiology.VENOUS
        )
        reduced = self.engine.recommend(
            5.0, 4.0, _q(TissueType.GRANULATION, abi=AbiCategory.P0_5_TO_0_79), Etiology.VENOUS
        )
        assert "Compression bandage system" in [p.name for p in adequate.secondary]
        assert "Compression bandage system" not in [p.name for p in reduced.secondary]

    def test_sizes_include_margins(self):
        plan = self.engine.recommend(3.2, 2.5, _q(TissueType.GRANULATION), Etiology.MIXED)
        assert plan.wound_size == "3.2 × 2.5 cm"
        assert plan.primary_size == "8 × 7 cm"
        assert plan.secondary_size == "10 × 9 cm"
        assert plan.border_size == "12 × 11 cm"

    def test_missing_dimensions_rejected(self):
        with pytest.raises(ValueError):
            self.engine.recommend(None, 2.0, _q(), Etiology.MIXED)

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(ValueError):
            self.engine.recommend(0, 2.0, _q(), Etiology.MIXED)

    def test_non_finite_dimensions_rejected(self):
        """Infinite or NaN dimensions are rejected before sizing."""
        for length, width in ((float("inf"), 2.0), (3.0, float("nan")), (float("-inf"), 1.0)):
            with pytest.raises(ValueError, match="finite"):
                self.engine.recommend(length, width, _q(), Etiology.MIXED)

    def test_plans_do_not_share_mutable_state(self):
        q = _q(TissueType.GRANULATION, exudate=ExudateLevel.DRY)
        first = self.engine.recommend(2.0, 2.0, q, Etiology.MIXED)
        assert isinstance(first.primary, tuple)
        assert isinstance(first.primary[0].examples, tuple)
        with pytest.raises(AttributeError):
            first.primary[0].examples.append("Other gel")
        second = self.engine.recommend(2.0, 2.0, q, Etiology.MIXED)
        assert second.primary[0].examples == ("IntraSite Gel", "Nu-Gel")
