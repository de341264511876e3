"""
Assessment domain models.

``Assessment`` is the aggregate root: it owns the asset inventory, one
``Dependency`` rating per asset, zero or one ``Contingency`` rating per asset,
and an optional ``OrganizationProfile``. After a scoring pass the
``resilience_score`` and ``recommendations`` fields are filled in.

Input records (``Asset``, ``Dependency``, ``Contingency``,
``OrganizationProfile``) are frozen — once the wizard hands them to the
engine they are treated as values. ``Assessment`` is NOT frozen because the
results of a scoring pass are attached to it.

Wire format
-----------
JSON keys are camelCase (``assetId``, ``knowledgeSharing``, ``timeToReplace``,
``organizationProfile``, ``quickWins`` ...) so records exported by the browser
version of the planner load unchanged. Python code uses the snake_case field
names; both spellings are accepted on input.

Rating fields on ``Dependency`` are optional. The scoring engine substitutes
5 for any missing rating instead of failing.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from resilience_planner.taxonomy.asset_taxonomy import (
    AssetCategory,
    Industry,
    OrganizationSize,
    TimeToReplace,
)

AssetId = Union[int, str]

DEFAULT_RATING = 5


def _blank_to_none(v: object) -> object:
    # Unselected <select> values arrive as empty strings.
    if isinstance(v, str) and not v.strip():
        return None
    return v


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Asset(_WireModel):
    """An organizational asset the organization depends on.

    Attributes:
        id: Identifier unique within the assessment (browser exports use
            millisecond timestamps, the CLI uses strings).
        name: Human-readable asset name.
        category: Asset category; ``None`` is scored as ``"other"``.
        description: Free-text notes.
    """

    id: AssetId
    name: str
    category: Optional[AssetCategory] = None
    description: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def blank_category(cls, v: object) -> object:
        return _blank_to_none(v)

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Asset name must not be empty.")
        return v.strip()


class Dependency(_WireModel):
    """How strongly the organization depends on one asset.

    Attributes:
        asset_id: FK to ``Asset.id``.
        importance: 1 (peripheral) to 10 (mission critical).
        replaceability: 1 (trivial to replace) to 10 (irreplaceable).
        time_to_replace: Rough replacement lead time.
        concentration: 1 (spread across many sources) to 10 (single source).
    """

    asset_id: AssetId
    importance: Optional[int] = Field(default=None, ge=1, le=10)
    replaceability: Optional[int] = Field(default=None, ge=1, le=10)
    time_to_replace: Optional[TimeToReplace] = None
    concentration: Optional[int] = Field(default=None, ge=1, le=10)

    @field_validator("time_to_replace", mode="before")
    @classmethod
    def blank_time_to_replace(cls, v: object) -> object:
        return _blank_to_none(v)


class Contingency(_WireModel):
    """Readiness of the fallback measures for one asset.

    Attributes:
        asset_id: FK to ``Asset.id``.
        backup: Quality of backup / redundancy, 1-10.
        knowledge_sharing: How widely the asset's know-how is shared, 1-10.
        documentation: Completeness of documentation, 1-10.
    """

    asset_id: AssetId
    backup: int = Field(ge=1, le=10)
    knowledge_sharing: int = Field(ge=1, le=10)
    documentation: int = Field(ge=1, le=10)

    @property
    def score(self) -> float:
        """Mean of the three readiness ratings."""
        return (self.backup + self.knowledge_sharing + self.documentation) / 3


class OrganizationProfile(_WireModel):
    """Optional context used for industry and size adjustments."""

    name: str = ""
    industry: Optional[Industry] = None
    size: Optional[OrganizationSize] = None
    objectives: str = ""

    @field_validator("industry", "size", mode="before")
    @classmethod
    def blank_enum(cls, v: object) -> object:
        return _blank_to_none(v)


class Recommendation(_WireModel):
    """A single recommended action."""

    title: str
    description: str


class RecommendationSet(BaseModel):
    """Recommendations grouped by time horizon.

    Mutable: the recommendation engine appends to the buckets while it runs.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quick_wins: list[Recommendation] = []
    medium_term: list[Recommendation] = []
    long_term: list[Recommendation] = []

    def buckets(self) -> dict[str, list[Recommendation]]:
        """Return the three buckets keyed by ``Horizon`` value, in display order."""
        return {
            "quick_wins": self.quick_wins,
            "medium_term": self.medium_term,
            "long_term": self.long_term,
        }

    def total(self) -> int:
        return len(self.quick_wins) + len(self.medium_term) + len(self.long_term)


class Assessment(BaseModel):
    """Aggregate root for one self-assessment.

    ``assets`` and ``dependencies`` are ``None`` only for malformed or
    partially loaded records; every engine entry point returns its empty
    result for such an assessment.

    Attributes:
        name: Label shown in the saved-assessment list.
        assets: Asset inventory.
        dependencies: One rating per asset, keyed by ``asset_id``.
        contingencies: Zero or one rating per asset, keyed by ``asset_id``.
        organization_profile: Optional organization context.
        resilience_score: Set after a scoring pass, 0-100.
        recommendations: Set after a scoring pass.
        timestamp: Milliseconds since epoch of the last save, if any.
    """

    # Not frozen — resilience_score and recommendations are attached after scoring
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    assets: Optional[list[Asset]] = []
    dependencies: Optional[list[Dependency]] = []
    contingencies: Optional[list[Contingency]] = []
    organization_profile: Optional[OrganizationProfile] = None
    resilience_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    recommendations: Optional[RecommendationSet] = None
    timestamp: Optional[int] = None

    def find_asset(self, asset_id: AssetId) -> Optional[Asset]:
        for asset in self.assets or []:
            if asset.id == asset_id:
                return asset
        return None

    def find_dependency(self, asset_id: AssetId) -> Optional[Dependency]:
        """Return the first dependency rating for ``asset_id``, or ``None``."""
        for dep in self.dependencies or []:
            if dep.asset_id == asset_id:
                return dep
        return None

    def find_contingency(self, asset_id: AssetId) -> Optional[Contingency]:
        """Return the first contingency rating for ``asset_id``, or ``None``."""
        for cont in self.contingencies or []:
            if cont.asset_id == asset_id:
                return cont
        return None

    def remove_asset(self, asset_id: AssetId) -> bool:
        """Delete an asset together with its dependency and contingency ratings.

        Returns:
            ``True`` if the asset existed.
        """
        if self.find_asset(asset_id) is None:
            return False
        self.assets = [a for a in self.assets or [] if a.id != asset_id]
        self.dependencies = [d for d in self.dependencies or [] if d.asset_id != asset_id]
        self.contingencies = [c for c in self.contingencies or [] if c.asset_id != asset_id]
        return True

    def to_wire(self) -> dict:
        """Serialise to the camelCase JSON-compatible dict used for storage/export."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
