import itertools

import pytest
from app.models.assessment import (
    AbiCategory,
    ClinicalContext,
    CompressionSafety,
    ConcernLevel,
    DeepSpaceType,
    Etiology,
    ExudateLevel,
    InfectionSeverity,
    PeriwoundSkin,
    QuestionnaireInput,
    TissueType,
)
from app.services.rules_engine import (
    analyze,
    resolve_etiology,
    should_ask_bone_questions,
    should_ask_perfusion,
)
from app.services.urgent_issues import (
    CRITICAL_LIMB_ISCHEMIA,
    NECROTIZING_INFECTION,
    OSTEOMYELITIS,
    SYSTEMIC_INFECTION,
)


def _context(**kwargs) -> ClinicalContext:
    kwargs.setdefault("patient_id", "patient-1")
    return ClinicalContext(**kwargs)


def _codes(report):
    return [f.code for f in report.red_flags]


class TestResolveEtiology:
    def test_suggestion_overrides_comorbidities(self):
        ctx = _context(has_diabetes=True, is_foot_location=True, suggested_etiology=Etiology.VENOUS)
        assert resolve_etiology(ctx) == Etiology.VENOUS

    def test_diabetes_on_foot_is_diabetic_foot(self):
        ctx = _context(has_diabetes=True, has_pad=True, is_foot_location=True)
        assert resolve_etiology(ctx) == Etiology.DIABETIC_FOOT

    def test_diabetes_off_foot_falls_through_to_pad(self):
        ctx = _context(has_diabetes=True, has_pad=True, is_foot_location=False)
        assert resolve_etiology(ctx) == Etiology.ARTERIAL

    def test_priority_order(self):
        assert resolve_etiology(_context(has_pad=True, has_venous_disease=True)) == Etiology.ARTERIAL
        assert resolve_etiology(
            _context(has_venous_disease=True, has_mobility_impairment=True)
        ) == Etiology.VENOUS
        assert resolve_etiology(_context(has_mobility_impairment=True)) == Etiology.PRESSURE

    def test_no_flags_is_mixed(self):
        """Unknown (None) and False comorbidities both fall back to mixed."""
        assert resolve_etiology(_context()) == Etiology.MIXED
        assert resolve_etiology(_context(has_pad=False, has_diabetes=False)) == Etiology.MIXED


class TestQuestionnaireGating:
    def test_perfusion_only_for_lower_limb(self):
        assert should_ask_perfusion(_context(is_lower_limb=True)) is True
        assert should_ask_perfusion(_context(is_lower_limb=False)) is False

    def test_bone_questions_for_diabetic_foot_or_necrosis(self):
        q = QuestionnaireInput()
        assert should_ask_bone_questions(_context(has_diabetes=True, is_foot_location=True), q)
        assert not should_ask_bone_questions(_context(has_diabetes=True), q)
        necrotic = QuestionnaireInput(wound_bed_types=frozenset({TissueType.NECROSIS}))
        assert should_ask_bone_questions(_context(), necrotic)


class TestAnalyzeScenarios:
    def test_healthy_granulating_wound(self):
        """Granulation only, no infection, not lower limb: low concern, nothing urgent."""
        q = QuestionnaireInput(
            wound_bed_types=frozenset({TissueType.GRANULATION}),
            exudate=ExudateLevel.MODERATE,
            periwound_skin=PeriwoundSkin.NORMAL,
        )
        report = analyze(q, _context(is_lower_limb=False))

        assert report.wound_bed_assessment.concern_level == ConcernLevel.LOW
        assert report.infection_assessment.severity == InfectionSeverity.NONE
        assert report.perfusion_status is None
        assert report.bone_status is None
        assert report.urgent_actions == ()
        assert report.red_flags == ()
        assert report.etiology == Etiology.MIXED
        assert report.diagnosis == "mixed etiology chronic wound in proliferative (healing) phase"
        assert report.follow_up_plan.initial_review == "7 days"

    def test_fever_and_crepitus_raise_two_separate_flags(self):
        q = QuestionnaireInput(fever=True, crepitus=True)
        report = analyze(q, _context())

        assert report.infection_assessment.severity == InfectionSeverity.SYSTEMIC
        assert report.infection_assessment.requires_urgent_action is True
        assert _codes(report) == [SYSTEMIC_INFECTION, NECROTIZING_INFECTION]
        assert "Systemic fever, Crepitus (gas formation)" in report.red_flags[0].message
        assert [a.action for a in report.urgent_actions] == [
            "Immediate medical evaluation for IV antibiotics",
            "IMMEDIATE surgical evaluation",
        ]
        assert report.diagnosis.startswith("Infected ")
        assert report.follow_up_plan.initial_review == "24-48 hours (URGENT)"

    def test_diabetic_foot_probe_to_bone(self):
        q = QuestionnaireInput(probe_to_bone_positive=True)
        ctx = _context(has_diabetes=True, is_foot_location=True)
        report = analyze(q, ctx)

        assert report.etiology == Etiology.DIABETIC_FOOT
        assert report.bone_status is not None
        assert report.bone_status.requires_imaging is True
        assert OSTEOMYELITIS in _codes(report)
        assert "Rule out osteomyelitis" in [g.goal for g in report.treatment_goals]
        assert "Imaging (X-ray/MRI) to confirm osteomyelitis" in [
            s.strategy for s in report.clinical_strategies
        ]

    def test_critical_limb_ischemia(self):
        q = QuestionnaireInput(abi=AbiCategory.LT_0_5, pedal_pulses_palpable=False)
        report = analyze(q, _context(is_lower_limb=True))

        assert report.perfusion_status.compression_safe == CompressionSafety.CONTRAINDICATED
        assert CRITICAL_LIMB_ISCHEMIA in _codes(report)
        assert "Emergency vascular surgery referral within 24 hours" in [
            a.action for a in report.urgent_actions
        ]

    def test_empty_wound_bed(self):
        report = analyze(QuestionnaireInput(wound_bed_types=frozenset()), _context())

        assert report.wound_bed_assessment.dominant_tissue == "unknown"
        assert report.wound_bed_assessment.concern_level == ConcernLevel.MODERATE
        assert report.healing_phase == "Undetermined"
        assert report.diagnosis.endswith("in undetermined phase")

    def test_arterial_with_critical_abi_diagnosis(self):
        q = QuestionnaireInput(abi=AbiCategory.LT_0_5, wound_bed_types=frozenset({TissueType.NECROSIS}))
        report = analyze(q, _context(has_pad=True, is_lower_limb=True, is_foot_location=True))

        assert report.etiology == Etiology.ARTERIAL
        assert report.diagnosis == (
            "arterial ulcer with critical limb ischemia in necrotic (non-healing) phase"
        )

    def test_arterial_off_lower_limb_uses_generic_phrase(self):
        """Without a perfusion grading the critical-ischemia diagnosis cannot apply."""
        q = QuestionnaireInput(abi=AbiCategory.LT_0_5, warmth=True)
        report = analyze(q, _context(has_pad=True, is_lower_limb=False))
        assert report.diagnosis.startswith("Locally infected arterial insufficiency ulcer")


class TestConditionalFields:
    def test_perfusion_status_follows_lower_limb_flag(self):
        q = QuestionnaireInput()
        assert analyze(q, _context(is_lower_limb=False)).perfusion_status is None
        assert analyze(q, _context(is_lower_limb=True)).perfusion_status is not None

    def test_bone_status_presence(self):
        plain = QuestionnaireInput()
        necrotic = QuestionnaireInput(wound_bed_types=frozenset({TissueType.NECROSIS}))
        diabetic_foot = _context(has_diabetes=True, is_foot_location=True)

        assert analyze(plain, _context()).bone_status is None
        assert analyze(plain, _context(has_diabetes=True)).bone_status is None
        assert analyze(plain, diabetic_foot).bone_status is not None
        assert analyze(necrotic, _context()).bone_status is not None

    def test_probe_positive_without_bone_assessment_has_no_bone_flag(self):
        """Bone red flag needs a bone assessment; the goal still appears."""
        report = analyze(QuestionnaireInput(probe_to_bone_positive=True), _context())
        assert report.bone_status is None
        assert OSTEOMYELITIS not in _codes(report)
        assert "Rule out osteomyelitis" in [g.goal for g in report.treatment_goals]

    def test_deep_space_types_reported_in_fixed_order(self):
        q = QuestionnaireInput(
            has_deep_spaces=True,
            deep_space_types=frozenset({DeepSpaceType.UNDERMINING, DeepSpaceType.CAVITY}),
        )
        report = analyze(q, _context())
        assert report.deep_spaces_present is True
        assert report.deep_space_types == (DeepSpaceType.CAVITY, DeepSpaceType.UNDERMINING)


class TestPerfusionOverride:
    def test_absent_pulses_override_normal_abi(self):
        q = QuestionnaireInput(abi=AbiCategory.GE_0_8, pedal_pulses_palpable=False)
        report = analyze(q, _context(is_lower_limb=True))
        assert report.perfusion_status.compression_safe == CompressionSafety.CONTRAINDICATED
        assert CRITICAL_LIMB_ISCHEMIA in _codes(report)

    def test_unknown_abi_contraindicates_without_ischemia_flag(self):
        report = analyze(QuestionnaireInput(), _context(is_lower_limb=True))
        assert report.perfusion_status.compression_safe == CompressionSafety.CONTRAINDICATED
        assert CRITICAL_LIMB_ISCHEMIA not in _codes(report)

    def test_cold_foot_with_normal_abi_does_not_flag_ischemia(self):
        """Clinical signs alone contraindicate compression but the red flag needs ABI or pulses."""
        q = QuestionnaireInput(abi=AbiCategory.GE_0_8, cold_pale_foot=True)
        report = analyze(q, _context(is_lower_limb=True))
        assert report.perfusion_status.compression_safe == CompressionSafety.CONTRAINDICATED
        assert CRITICAL_LIMB_ISCHEMIA not in _codes(report)


class TestEngineProperties:
    def test_fever_always_systemic(self):
        for warmth, odor, crepitus in itertools.product([False, True], repeat=3):
            q = QuestionnaireInput(fever=True, warmth=warmth, odor=odor, crepitus=crepitus)
            assert analyze(q, _context()).infection_assessment.severity == InfectionSeverity.SYSTEMIC

    def test_deterministic(self):
        q = QuestionnaireInput(
            wound_bed_types=frozenset({TissueType.SLOUGH, TissueType.GRANULATION, TissueType.NECROSIS}),
            exudate=ExudateLevel.HIGH,
            has_deep_spaces=True,
            deep_space_types=frozenset({DeepSpaceType.TUNNEL, DeepSpaceType.CAVITY}),
            warmth=True,
            fever=True,
            abi=AbiCategory.P0_5_TO_0_79,
        )
        ctx = _context(has_venous_disease=True, is_lower_limb=True, is_on_anticoagulants=True)
        assert analyze(q, ctx) == analyze(q, ctx)
        assert repr(analyze(q, ctx)) == repr(analyze(q, ctx))

    @pytest.mark.parametrize("etiology", list(Etiology) + [None])
    def test_total_over_enum_combinations(self, etiology):
        """Every enum and tri-state combination yields a complete report."""
        for exudate, periwound, abi, pulses, lower_limb in itertools.product(
            ExudateLevel, PeriwoundSkin, AbiCategory, [None, False, True], [False, True]
        ):
            q = QuestionnaireInput(
                wound_bed_types=frozenset({TissueType.SLOUGH}),
                exudate=exudate,
                periwound_skin=periwound,
                abi=abi,
                pedal_pulses_palpable=pulses,
            )
            ctx = _context(is_lower_limb=lower_limb, suggested_etiology=etiology)
            report = analyze(q, ctx)
            for seq in (
                report.treatment_goals,
                report.clinical_strategies,
                report.patient_considerations,
                report.healing_barriers,
                report.red_flags,
                report.urgent_actions,
            ):
                assert seq is not None
            assert len(report.red_flags) == len(report.urgent_actions)
            assert report.treatment_goals[-1].goal == "Maintain optimal wound healing environment"
            assert [g.priority for g in report.treatment_goals] == list(
                range(1, len(report.treatment_goals) + 1)
            )
