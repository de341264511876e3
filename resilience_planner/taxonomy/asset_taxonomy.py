"""
Asset and organization taxonomy for resilience assessments.

Four orthogonal dimensions describe an assessment's inputs:
  - ``AssetCategory``    — the *what*: which kind of organizational asset?
  - ``TimeToReplace``    — the *how long*: effort to replace a lost asset.
  - ``Industry``         — the *where*: sector of the organization.
  - ``OrganizationSize`` — the *how big*: headcount bracket.

``Horizon`` names the three recommendation buckets.

Usage example::

    from resilience_planner.taxonomy.asset_taxonomy import AssetCategory, Industry

    category = AssetCategory.SYSTEMS
    industry = Industry.FINANCE

This module has NO imports from any other ``resilience_planner`` package.
"""

from enum import StrEnum


class AssetCategory(StrEnum):
    """Top-level grouping for organizational assets."""

    PEOPLE = "people"
    """Key individuals: founders, star performers, single-role specialists."""

    SYSTEMS = "systems"
    """Software platforms, infrastructure, and technology services."""

    RELATIONSHIPS = "relationships"
    """Suppliers, partners, anchor customers, funders."""

    FACILITIES = "facilities"
    """Buildings, sites, equipment, and physical plant."""

    KNOWLEDGE = "knowledge"
    """Intellectual property, proprietary methods, institutional know-how."""

    MARKET = "market"
    """Distribution channels, licences, and market access."""

    OTHER = "other"
    """Anything that does not fit the categories above."""


class TimeToReplace(StrEnum):
    """Rough time needed to replace an asset if it were lost."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class Industry(StrEnum):
    """Industry sector of the assessed organization."""

    SPORTS = "sports"
    TECHNOLOGY = "technology"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    RETAIL = "retail"
    MANUFACTURING = "manufacturing"
    EDUCATION = "education"
    PROFESSIONAL = "professional"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


class OrganizationSize(StrEnum):
    """Headcount bracket of the assessed organization."""

    MICRO = "micro"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Horizon(StrEnum):
    """Time horizon of a recommendation bucket."""

    QUICK_WINS = "quick_wins"
    """Immediate actions."""

    MEDIUM_TERM = "medium_term"
    """Plans for the next 3-6 months."""

    LONG_TERM = "long_term"
    """Strategy beyond 6 months."""


# Display names used in reports and generated recommendation text.
CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    AssetCategory.PEOPLE:        "People",
    AssetCategory.SYSTEMS:       "Systems & Technology",
    AssetCategory.RELATIONSHIPS: "Partnerships & Relationships",
    AssetCategory.FACILITIES:    "Facilities & Equipment",
    AssetCategory.KNOWLEDGE:     "Intellectual Property",
    AssetCategory.MARKET:        "Market Access",
    AssetCategory.OTHER:         "Other",
}

HORIZON_DISPLAY_NAMES: dict[str, str] = {
    Horizon.QUICK_WINS:  "Quick Wins",
    Horizon.MEDIUM_TERM: "Medium-Term Plans",
    Horizon.LONG_TERM:   "Long-Term Strategy",
}
