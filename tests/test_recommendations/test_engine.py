"""
Tests for resilience_planner/recommendations/engine.py.

What we test
------------
format_template():
  - Known tokens replaced; missing or empty values leave the token intact.

add_recommendation():
  - Rejects a duplicate title OR a duplicate description.

generate_recommendations():
  - Single critical asset: one quick win, a medium-term template plus the
    diversification and weakest-category strategies, default long-term.
  - Risk > 8.5 adds a long-term template.
  - Industry entries are added; no high-risk assets needed.
  - Every bucket has at least one entry, even for empty asset lists;
    empty buckets only when assets or dependencies are absent.
  - Same seed -> same output; stub random source picks the first template.
  - Placeholders substituted with the asset name and category.
  - Assets with no dependency never produce asset-specific advice.

add_category_recommendations():
  - Fires only below 50; first category wins ties.
"""

from __future__ import annotations

import random

from resilience_planner.models.assessment import (
    Assessment,
    Asset,
    Dependency,
    OrganizationProfile,
    Recommendation,
)
from resilience_planner.recommendations.catalog import (
    DEFAULT_RECOMMENDATIONS,
    DIVERSIFICATION_STRATEGY,
    LONG_TERM_TEMPLATES,
    MEDIUM_TERM_TEMPLATES,
    QUICK_WIN_TEMPLATES,
)
from resilience_planner.recommendations.engine import (
    add_category_recommendations,
    add_recommendation,
    ensure_minimum_recommendations,
    format_template,
    generate_recommendations,
)
from resilience_planner.scoring.metrics import CategoryMetrics
from resilience_planner.taxonomy.asset_taxonomy import AssetCategory, Horizon


# ── Helpers ────────────────────────────────────────────────────────────────────

def _titles(bucket: list[Recommendation]) -> list[str]:
    return [r.title for r in bucket]


def _empty_buckets() -> dict[Horizon, list[Recommendation]]:
    return {Horizon.QUICK_WINS: [], Horizon.MEDIUM_TERM: [], Horizon.LONG_TERM: []}


def _metrics(resilience: float) -> CategoryMetrics:
    return CategoryMetrics(
        asset_count=1, avg_risk_score=0.0, avg_contingency_score=0.0,
        resilience_score=resilience,
    )


# ── format_template ───────────────────────────────────────────────────────────

class TestFormatTemplate:
    def test_replaces_tokens(self):
        text = format_template(
            "Protect {assetName} ({assetCategory})",
            {"assetName": "Payroll", "assetCategory": "systems"},
        )
        assert text == "Protect Payroll (systems)"

    def test_missing_value_leaves_token(self):
        text = format_template("Reduce reliance on {assetCategory}", {"assetCategory": None})
        assert text == "Reduce reliance on {assetCategory}"

    def test_unknown_key_leaves_token(self):
        assert format_template("{other}", {"assetName": "X"}) == "{other}"


# ── add_recommendation ────────────────────────────────────────────────────────

class TestAddRecommendation:
    def test_adds_new(self):
        bucket: list[Recommendation] = []
        assert add_recommendation(bucket, Recommendation(title="A", description="a"))
        assert len(bucket) == 1

    def test_rejects_duplicate_title(self):
        bucket = [Recommendation(title="A", description="a")]
        assert not add_recommendation(bucket, Recommendation(title="A", description="b"))
        assert len(bucket) == 1

    def test_rejects_duplicate_description(self):
        bucket = [Recommendation(title="A", description="a")]
        assert not add_recommendation(bucket, Recommendation(title="B", description="a"))
        assert len(bucket) == 1


# ── generate_recommendations ──────────────────────────────────────────────────

class TestGenerateRecommendations:
    def test_single_critical_asset(self, single_asset_assessment, first_choice_rng):
        recs = generate_recommendations(single_asset_assessment, rng=first_choice_rng)

        assert _titles(recs.quick_wins) == [QUICK_WIN_TEMPLATES[0].title]
        assert "Core Platform" in recs.quick_wins[0].description
        assert _titles(recs.medium_term) == [
            MEDIUM_TERM_TEMPLATES[0].title,
            DIVERSIFICATION_STRATEGY.title,
            "Systems & Technology Resilience Strategy",
        ]
        # 7.29 is not above 8.5 -> only the default long-term entry
        assert recs.long_term == [DEFAULT_RECOMMENDATIONS[Horizon.LONG_TERM]]

    def test_very_high_risk_adds_long_term(self, first_choice_rng):
        assessment = Assessment(
            assets=[Asset(id=1, name="Founder", category=AssetCategory.PEOPLE)],
            dependencies=[Dependency(asset_id=1, importance=10, replaceability=10, concentration=9)],
        )
        recs = generate_recommendations(assessment, rng=first_choice_rng)
        assert _titles(recs.long_term) == [LONG_TERM_TEMPLATES[0].title]

    def test_category_placeholder_substituted(self):
        # The long-term template at index 1 uses {assetCategory}
        class PickSecond:
            def choice(self, seq):
                return seq[1]

        assessment = Assessment(
            assets=[Asset(id=1, name="Founder", category=AssetCategory.PEOPLE)],
            dependencies=[Dependency(asset_id=1, importance=10, replaceability=10, concentration=10)],
        )
        recs = generate_recommendations(assessment, rng=PickSecond())
        assert recs.long_term[0].description == (
            "Develop a long-term diversification plan to reduce overall dependency "
            "on people resources like Founder."
        )

    def test_missing_category_leaves_placeholder(self):
        class PickSecond:
            def choice(self, seq):
                return seq[1]

        assessment = Assessment(
            assets=[Asset(id=1, name="Founder")],
            dependencies=[Dependency(asset_id=1, importance=10, replaceability=10, concentration=10)],
        )
        recs = generate_recommendations(assessment, rng=PickSecond())
        assert "{assetCategory}" in recs.long_term[0].description

    def test_industry_without_high_risk(self, mixed_assessment):
        recs = generate_recommendations(mixed_assessment, rng=random.Random(1))
        assert _titles(recs.quick_wins) == ["Implement Player Wellness Monitoring"]
        assert _titles(recs.medium_term) == [
            "Develop Bench Strength",
            DIVERSIFICATION_STRATEGY.title,
            "Partnerships & Relationships Resilience Strategy",
        ]
        assert _titles(recs.long_term) == ["Build Team-First Culture"]

    def test_weakest_category_description(self, mixed_assessment):
        recs = generate_recommendations(mixed_assessment)
        strategy = recs.medium_term[-1]
        assert strategy.description == (
            "Develop a focused resilience strategy for your partnerships & "
            "relationships assets, which currently represent your most "
            "vulnerable category."
        )

    def test_every_bucket_populated(self):
        assessment = Assessment(
            assets=[Asset(id=1, name="Desk")],
            dependencies=[Dependency(asset_id=1, importance=1, replaceability=1, concentration=1)],
        )
        recs = generate_recommendations(assessment)
        assert recs.quick_wins == [DEFAULT_RECOMMENDATIONS[Horizon.QUICK_WINS]]
        assert recs.medium_term == [DEFAULT_RECOMMENDATIONS[Horizon.MEDIUM_TERM]]
        assert recs.long_term == [DEFAULT_RECOMMENDATIONS[Horizon.LONG_TERM]]

    def test_empty_lists_get_defaults(self):
        recs = generate_recommendations(Assessment(assets=[], dependencies=[]))
        assert recs.quick_wins == [DEFAULT_RECOMMENDATIONS[Horizon.QUICK_WINS]]
        assert recs.medium_term == [DEFAULT_RECOMMENDATIONS[Horizon.MEDIUM_TERM]]
        assert recs.long_term == [DEFAULT_RECOMMENDATIONS[Horizon.LONG_TERM]]

    def test_unscorable_gives_empty_buckets(self):
        recs = generate_recommendations(Assessment(assets=None, dependencies=None))
        assert recs.total() == 0
        assert generate_recommendations(None).total() == 0

    def test_seeded_runs_identical(self, single_asset_assessment):
        a = generate_recommendations(single_asset_assessment, rng=random.Random(42))
        b = generate_recommendations(single_asset_assessment, rng=random.Random(42))
        assert a == b

    def test_random_choice_stays_in_catalog(self, single_asset_assessment):
        quick_titles = {t.title for t in QUICK_WIN_TEMPLATES}
        for seed in range(10):
            recs = generate_recommendations(single_asset_assessment, rng=random.Random(seed))
            assert recs.quick_wins[0].title in quick_titles

    def test_duplicate_templates_not_repeated(self, first_choice_rng):
        assessment = Assessment(
            assets=[
                Asset(id=1, name="Alpha", category=AssetCategory.SYSTEMS),
                Asset(id=2, name="Beta", category=AssetCategory.SYSTEMS),
            ],
            dependencies=[
                Dependency(asset_id=1, importance=9, replaceability=9, concentration=9),
                Dependency(asset_id=2, importance=9, replaceability=9, concentration=9),
            ],
        )
        recs = generate_recommendations(assessment, rng=first_choice_rng)
        # Same title chosen twice: second is rejected by title dedup
        assert _titles(recs.quick_wins) == [QUICK_WIN_TEMPLATES[0].title]

    def test_unmatched_asset_no_specific_advice(self, first_choice_rng):
        assessment = Assessment(
            assets=[Asset(id=1, name="Orphan")],
            dependencies=[Dependency(asset_id=99, importance=10, replaceability=10, concentration=10)],
        )
        recs = generate_recommendations(assessment, rng=first_choice_rng)
        assert all("Orphan" not in r.description for r in recs.quick_wins)

    def test_threshold_parameter(self, mixed_assessment, first_choice_rng):
        recs = generate_recommendations(
            mixed_assessment, rng=first_choice_rng, high_risk_threshold=5.0,
        )
        # a3 (5.67) and a1 (5.04) both qualify; the repeated title is dropped
        assert _titles(recs.quick_wins) == [
            QUICK_WIN_TEMPLATES[0].title,
            "Implement Player Wellness Monitoring",
        ]
        assert "Main Sponsor" in recs.quick_wins[0].description

    def test_input_not_mutated(self, mixed_assessment):
        before = mixed_assessment.model_dump()
        generate_recommendations(mixed_assessment)
        assert mixed_assessment.model_dump() == before

    def test_technology_industry(self, single_asset_assessment, first_choice_rng):
        assessment = single_asset_assessment.model_copy(
            update={"organization_profile": OrganizationProfile(industry="technology")},
        )
        recs = generate_recommendations(assessment, rng=first_choice_rng)
        assert "Document System Architecture" in _titles(recs.quick_wins)
        assert "Implement Service Redundancy" in _titles(recs.medium_term)
        assert _titles(recs.long_term) == ["Adopt Microservices Architecture"]


# ── Category rule and minimum population ──────────────────────────────────────

class TestCategoryRecommendations:
    def test_no_trigger_at_50(self):
        buckets = _empty_buckets()
        assert add_category_recommendations(buckets, {"people": _metrics(50.0)}) is None
        assert buckets[Horizon.MEDIUM_TERM] == []

    def test_first_lowest_wins_ties(self):
        buckets = _empty_buckets()
        chosen = add_category_recommendations(
            buckets,
            {"market": _metrics(30.0), "knowledge": _metrics(30.0), "people": _metrics(45.0)},
        )
        assert chosen == "market"
        assert _titles(buckets[Horizon.MEDIUM_TERM]) == ["Market Access Resilience Strategy"]

    def test_empty_metrics(self):
        assert add_category_recommendations(_empty_buckets(), {}) is None


class TestMinimumRecommendations:
    def test_only_empty_buckets_filled(self):
        buckets = _empty_buckets()
        existing = Recommendation(title="X", description="x")
        buckets[Horizon.QUICK_WINS].append(existing)
        ensure_minimum_recommendations(buckets)
        assert buckets[Horizon.QUICK_WINS] == [existing]
        assert buckets[Horizon.MEDIUM_TERM] == [DEFAULT_RECOMMENDATIONS[Horizon.MEDIUM_TERM]]
        assert buckets[Horizon.LONG_TERM] == [DEFAULT_RECOMMENDATIONS[Horizon.LONG_TERM]]
