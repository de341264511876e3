"""
Tests for resilience_planner/models/assessment.py and models/record.py.

What we test
------------
  - camelCase wire JSON parses (browser export shape) and round-trips.
  - Blank select values become None; unknown enum values are rejected.
  - Ratings outside 1..10 are rejected; empty asset names are rejected.
  - Contingency.score is the mean of its three ratings.
  - Sub-models are frozen.
  - remove_asset() cascades to dependencies and contingencies.
  - AssessmentRecord.to_wire() nests the assessment payload.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from resilience_planner.models.assessment import (
    Assessment,
    Asset,
    Contingency,
    Dependency,
    OrganizationProfile,
)
from resilience_planner.models.record import AssessmentRecord
from resilience_planner.taxonomy.asset_taxonomy import (
    AssetCategory,
    Industry,
    TimeToReplace,
)

BROWSER_EXPORT = {
    "name": "Imported",
    "assets": [
        {"id": 1718000000000, "name": "Star Striker", "category": "people", "description": ""},
    ],
    "dependencies": [
        {
            "assetId": 1718000000000, "importance": 9, "replaceability": 9,
            "timeToReplace": "months", "concentration": 8,
        },
    ],
    "contingencies": [
        {"assetId": 1718000000000, "backup": 2, "knowledgeSharing": 4, "documentation": 3},
    ],
    "organizationProfile": {
        "name": "City FC", "industry": "sports", "size": "", "objectives": "Win",
    },
}


class TestWireFormat:
    def test_parses_browser_export(self):
        assessment = Assessment.model_validate(BROWSER_EXPORT)
        assert assessment.assets[0].category == AssetCategory.PEOPLE
        assert assessment.dependencies[0].time_to_replace == TimeToReplace.MONTHS
        assert assessment.contingencies[0].knowledge_sharing == 4
        assert assessment.organization_profile.industry == Industry.SPORTS
        assert assessment.organization_profile.size is None

    def test_to_wire_uses_camel_case(self, mixed_assessment):
        wire = mixed_assessment.to_wire()
        assert "organizationProfile" in wire
        assert "assetId" in wire["dependencies"][0]
        assert "knowledgeSharing" in wire["contingencies"][0]
        assert "resilienceScore" not in wire

    def test_round_trip(self, mixed_assessment):
        assert Assessment.model_validate(mixed_assessment.to_wire()) == mixed_assessment

    def test_numeric_asset_ids_preserved(self):
        assessment = Assessment.model_validate(BROWSER_EXPORT)
        assert assessment.find_dependency(1718000000000) is not None


class TestValidation:
    def test_blank_category_is_none(self):
        assert Asset(id=1, name="A", category="").category is None

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            Asset(id=1, name="A", category="spaceships")

    def test_unknown_industry_rejected(self):
        with pytest.raises(ValidationError):
            OrganizationProfile(industry="aerospace")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Asset(id=1, name="   ")

    def test_name_stripped(self):
        assert Asset(id=1, name="  Coach ").name == "Coach"

    @pytest.mark.parametrize("value", [0, 11])
    def test_rating_out_of_range(self, value):
        with pytest.raises(ValidationError):
            Dependency(asset_id=1, importance=value)

    def test_contingency_requires_all_ratings(self):
        with pytest.raises(ValidationError):
            Contingency(asset_id=1, backup=5, knowledge_sharing=5)

    def test_resilience_score_range(self):
        with pytest.raises(ValidationError):
            Assessment(resilience_score=101.0)

    def test_sub_models_frozen(self):
        asset = Asset(id=1, name="A")
        with pytest.raises(ValidationError):
            asset.name = "B"  # type: ignore[misc]


class TestContingencyScore:
    def test_mean(self):
        c = Contingency(asset_id=1, backup=2, knowledge_sharing=4, documentation=9)
        assert c.score == pytest.approx(5.0)


class TestAssessmentHelpers:
    def test_find_helpers(self, mixed_assessment):
        assert mixed_assessment.find_asset("a2").name == "Ticketing Platform"
        assert mixed_assessment.find_dependency("a4") is None
        assert mixed_assessment.find_contingency("a3") is None
        assert mixed_assessment.find_contingency("a1").backup == 3

    def test_remove_asset_cascades(self, mixed_assessment):
        assert mixed_assessment.remove_asset("a1")
        assert mixed_assessment.find_asset("a1") is None
        assert mixed_assessment.find_dependency("a1") is None
        assert mixed_assessment.find_contingency("a1") is None
        assert len(mixed_assessment.assets) == 3

    def test_remove_unknown_asset(self, mixed_assessment):
        assert not mixed_assessment.remove_asset("nope")
        assert len(mixed_assessment.assets) == 4


class TestRecord:
    def test_to_wire(self, single_asset_assessment):
        record = AssessmentRecord(
            id="abc", name="Platform check", timestamp=1_700_000_000_000,
            data=single_asset_assessment,
        )
        wire = record.to_wire()
        assert wire["id"] == "abc"
        assert wire["timestamp"] == 1_700_000_000_000
        assert wire["data"]["assets"][0]["name"] == "Core Platform"
