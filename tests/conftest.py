"""
Shared pytest fixtures for the Strategic Resilience Planner test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the schema
    applied. Created anew for each test that requests it.
  - ``single_asset_assessment``: one critical system, no contingency, no profile.
  - ``mixed_assessment``: four assets across four categories with partial
    contingencies and a sports / small organization profile.
  - ``first_choice_rng``: a random source that always picks the first template.
"""

from __future__ import annotations

import sqlite3
from typing import Generator, Sequence

import pytest

from resilience_planner.db.schema import apply_schema
from resilience_planner.models.assessment import (
    Assessment,
    Asset,
    Contingency,
    Dependency,
    OrganizationProfile,
)
from resilience_planner.taxonomy.asset_taxonomy import (
    AssetCategory,
    Industry,
    OrganizationSize,
    TimeToReplace,
)


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the schema applied."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    apply_schema(conn)
    yield conn
    conn.close()


# ── Random source stubs ───────────────────────────────────────────────────────

class FirstChoice:
    """Deterministic random source: always returns the first element."""

    def choice(self, seq: Sequence):
        return seq[0]


@pytest.fixture
def first_choice_rng() -> FirstChoice:
    return FirstChoice()


# ── Sample assessments ────────────────────────────────────────────────────────

@pytest.fixture
def single_asset_assessment() -> Assessment:
    """Risk 7.29, resilience 27.1."""
    return Assessment(
        name="Platform check",
        assets=[Asset(id=1, name="Core Platform", category=AssetCategory.SYSTEMS)],
        dependencies=[
            Dependency(asset_id=1, importance=9, replaceability=9, concentration=9),
        ],
    )


@pytest.fixture
def mixed_assessment() -> Assessment:
    """Four assets; risks 5.04 / 1.2 / 5.67 / unscored; resilience ~68.3.

    Nothing reaches the 6.0 high-risk threshold, so recommendations come from
    the industry, diversification and weakest-category rules only.
    """
    return Assessment(
        name="Club review",
        assets=[
            Asset(id="a1", name="Head Coach", category=AssetCategory.PEOPLE),
            Asset(id="a2", name="Ticketing Platform", category=AssetCategory.SYSTEMS),
            Asset(id="a3", name="Main Sponsor", category=AssetCategory.RELATIONSHIPS),
            Asset(id="a4", name="Training Ground", category=AssetCategory.FACILITIES),
        ],
        dependencies=[
            Dependency(
                asset_id="a1", importance=9, replaceability=8, concentration=7,
                time_to_replace=TimeToReplace.MONTHS,
            ),
            Dependency(
                asset_id="a2", importance=6, replaceability=5, concentration=4,
                time_to_replace=TimeToReplace.WEEKS,
            ),
            Dependency(
                asset_id="a3", importance=7, replaceability=9, concentration=9,
                time_to_replace=TimeToReplace.YEARS,
            ),
        ],
        contingencies=[
            Contingency(asset_id="a1", backup=3, knowledge_sharing=3, documentation=3),
            Contingency(asset_id="a2", backup=9, knowledge_sharing=8, documentation=7),
        ],
        organization_profile=OrganizationProfile(
            name="Riverside FC",
            industry=Industry.SPORTS,
            size=OrganizationSize.SMALL,
        ),
    )
