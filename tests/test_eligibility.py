"""Tests for the AASB S2 applicability classifier.

Covers: the Chapter 2M hard gate, the two-of-three size test, group
assignment by bracket intensity, NGER / large asset owner escalation, the
reasoning trail, and the applicability profile derived from a result.
"""

from __future__ import annotations

import itertools

import pytest

from climate_readiness.schemas.eligibility import EligibilityResult, EntityProfile
from climate_readiness.schemas.questionnaire import QuestionDefinition
from climate_readiness.services.eligibility import (
    ASSETS_BRACKETS,
    DEFAULT_START_DATES,
    EMPLOYEE_BRACKETS,
    REVENUE_BRACKETS,
    adjusted_weight,
    bracket_index,
    classify_entity,
    derive_applicability_profile,
    group_multiplier,
    threshold_met,
)


# ─── Test 1: Chapter 2M hard gate ────────────────────────────────────────────

class TestHardGate:
    """An entity outside Chapter 2M is never in mandatory scope."""

    @pytest.mark.parametrize("revenue,assets,employees", [
        ("gte-500m", "gte-1b", "gte-500"),
        ("lt-50m", "lt-25m", "lt-100"),
        (None, None, None),
    ])
    def test_no_chapter_2m_is_voluntary_whatever_the_size(self, revenue, assets, employees):
        result = classify_entity(EntityProfile(
            chapter_2m="no", revenue=revenue, gross_assets=assets, employees=employees,
        ))
        assert result.in_scope is False
        assert result.tier == "voluntary"
        assert result.mandatory_start_date == ""

    def test_gate_overrides_nger_and_aum(self):
        """NGER and AUM flags do not bypass the gate."""
        result = classify_entity(EntityProfile(chapter_2m="no", nger_reporter="yes", aum_over_5b="yes"))
        assert result.in_scope is False
        assert result.tier == "voluntary"

    def test_gate_has_single_reasoning_line(self):
        result = classify_entity(EntityProfile(chapter_2m="no"))
        assert len(result.reasoning) == 1
        assert "Chapter 2M" in result.reasoning[0]

    def test_unsure_does_not_trigger_gate(self):
        """Only an explicit 'no' closes the gate."""
        result = classify_entity(EntityProfile(
            chapter_2m="unsure", revenue="gte-500m", gross_assets="gte-1b",
        ))
        assert result.in_scope is True
        assert result.tier == 1

    def test_gate_answer_is_case_insensitive(self):
        result = classify_entity(EntityProfile(chapter_2m=" No ", revenue="gte-500m", employees="gte-500"))
        assert result.tier == "voluntary"


# ─── Test 2: Size thresholds ─────────────────────────────────────────────────

class TestSizeThresholds:
    """Two of three size thresholds place an entity in scope."""

    def test_lowest_bracket_does_not_meet_threshold(self):
        assert threshold_met("lt-50m", REVENUE_BRACKETS) is False
        assert threshold_met("50m-199999999", REVENUE_BRACKETS) is True

    def test_missing_value_does_not_meet_threshold(self):
        assert threshold_met(None, EMPLOYEE_BRACKETS) is False

    def test_unknown_bracket_does_not_meet_threshold(self):
        assert threshold_met("around 300m", REVENUE_BRACKETS) is False
        assert bracket_index("around 300m", REVENUE_BRACKETS) == 0

    def test_two_thresholds_in_scope(self):
        result = classify_entity(EntityProfile(
            chapter_2m="unsure", revenue="50m-199999999", employees="100-249",
        ))
        assert result.in_scope is True
        assert result.size_thresholds_met == 2

    def test_one_threshold_not_in_scope(self):
        result = classify_entity(EntityProfile(chapter_2m="unsure", revenue="gte-500m"))
        assert result.in_scope is False
        assert result.tier == "voluntary"
        assert result.size_thresholds_met == 1

    def test_unknown_brackets_count_as_not_met(self):
        result = classify_entity(EntityProfile(
            chapter_2m="unsure", revenue="about 300m", gross_assets="big", employees="lots",
        ))
        assert result.size_thresholds_met == 0
        assert result.in_scope is False

    def test_reasoning_names_met_thresholds(self):
        result = classify_entity(EntityProfile(
            chapter_2m="yes", revenue="gte-500m", employees="gte-500",
        ))
        assert "2 of 3 size thresholds met (revenue, employees)." in result.reasoning


# ─── Test 3: Group assignment ────────────────────────────────────────────────

class TestGroupAssignment:
    """Group follows the largest bracket reached on any dimension."""

    def test_top_brackets_are_group_1(self, large_entity):
        result = classify_entity(large_entity)
        assert result.in_scope is True
        assert result.tier == 1
        assert result.mandatory_start_date == DEFAULT_START_DATES[1]
        assert result.size_thresholds_met == 3

    def test_middle_bracket_is_group_2(self):
        result = classify_entity(EntityProfile(
            chapter_2m="yes", revenue="200m-499999999", employees="250-499",
        ))
        assert result.tier == 2
        assert result.mandatory_start_date == "2026-07-01"

    def test_lower_bracket_is_group_3(self):
        result = classify_entity(EntityProfile(
            chapter_2m="yes", revenue="50m-199999999", gross_assets="25m-99999999",
        ))
        assert result.tier == 3
        assert result.mandatory_start_date == "2027-07-01"

    def test_group_never_weakens_as_intensity_grows(self):
        """Across all in-scope bracket combinations, higher intensity never yields a later group."""
        tiers_by_intensity: dict[int, set[int]] = {}
        for revenue, assets, employees in itertools.product(
            REVENUE_BRACKETS, ASSETS_BRACKETS, EMPLOYEE_BRACKETS,
        ):
            entity = EntityProfile(chapter_2m="unsure", revenue=revenue, gross_assets=assets, employees=employees)
            result = classify_entity(entity)
            if result.size_thresholds_met < 2:
                continue
            assert result.in_scope is True
            intensity = max(
                bracket_index(revenue, REVENUE_BRACKETS),
                bracket_index(assets, ASSETS_BRACKETS),
                bracket_index(employees, EMPLOYEE_BRACKETS),
            )
            tiers_by_intensity.setdefault(intensity, set()).add(result.tier)

        ordered = sorted(tiers_by_intensity)
        for lower, higher in zip(ordered, ordered[1:]):
            assert max(tiers_by_intensity[higher]) <= min(tiers_by_intensity[lower])

    def test_custom_start_dates(self, large_entity):
        result = classify_entity(large_entity, start_dates={1: "2025-07-01"})
        assert result.mandatory_start_date == "2025-07-01"

    def test_final_reasoning_line_names_group_and_date(self, large_entity):
        result = classify_entity(large_entity)
        assert result.reasoning[-1] == "Assigned Group 1; mandatory reporting starts 2025-01-01."


# ─── Test 4: Reporter escalation ─────────────────────────────────────────────

class TestReporterEscalation:
    """NGER reporters and large asset owners are always Group 1."""

    def test_nger_reporter_small_entity_is_group_1(self):
        result = classify_entity(EntityProfile(chapter_2m="unsure", nger_reporter="yes"))
        assert result.in_scope is True
        assert result.tier == 1
        assert any("NGER" in line for line in result.reasoning)

    def test_large_asset_owner_is_group_1(self):
        result = classify_entity(EntityProfile(
            chapter_2m="yes", entity_type="super-or-financial", aum_over_5b="yes",
        ))
        assert result.tier == 1
        assert any("assets under management" in line for line in result.reasoning)


# ─── Test 5: Chapter 2M on its own ───────────────────────────────────────────

class TestChapter2MAlone:
    """A confirmed Chapter 2M reporter is in scope even below every threshold."""

    def test_small_chapter_2m_reporter_in_scope(self):
        result = classify_entity(EntityProfile(
            chapter_2m="yes", revenue="lt-50m", gross_assets="lt-25m", employees="lt-100",
        ))
        assert result.in_scope is True
        assert result.tier == 3
        assert "Meets in-scope conditions (Chapter 2M reporting alone)." in result.reasoning

    def test_empty_profile_is_voluntary(self):
        result = classify_entity(EntityProfile())
        assert result.in_scope is False
        assert result.tier == "voluntary"
        assert result.reasoning


# ─── Test 6: Applicability profile ───────────────────────────────────────────

class TestApplicabilityProfile:
    """Derived profile and group multipliers."""

    def test_in_scope_profile(self, large_entity):
        profile = derive_applicability_profile(classify_entity(large_entity))
        assert profile.entity_group == 1
        assert profile.first_reporting_period == "2025-01-01"
        assert set(profile.assurance_profile.values()) == {"none"}

    def test_voluntary_profile(self):
        profile = derive_applicability_profile(classify_entity(EntityProfile(chapter_2m="no")))
        assert profile.entity_group == "voluntary"
        assert profile.first_reporting_period == ""

    def test_assurance_required_marks_limited_topics(self, large_entity):
        profile = derive_applicability_profile(classify_entity(large_entity), assurance_required=True)
        assert profile.assurance_profile == {
            "governance": "limited",
            "strategy": "none",
            "risk": "none",
            "metrics": "limited",
        }

    def test_out_of_scope_result_maps_to_voluntary(self):
        result = EligibilityResult(in_scope=False, tier="voluntary")
        assert derive_applicability_profile(result).entity_group == "voluntary"

    @pytest.mark.parametrize("group,multiplier", [(1, 1.5), (2, 1.2), (3, 1.0), ("voluntary", 0.6)])
    def test_group_multipliers(self, group, multiplier):
        assert group_multiplier(group) == multiplier

    def test_adjusted_weight(self, group1_profile):
        question = QuestionDefinition(id="G3", section="Governance", question="?", weight=7)
        assert adjusted_weight(question, group1_profile) == 10.5
