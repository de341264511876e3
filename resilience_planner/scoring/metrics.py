"""
Category breakdown and diversification rating.

Category metrics
----------------
Assets are grouped by category (``"other"`` when unset). Per category::

    avg_risk         = mean risk score of assets with a dependency rating (0 if none)
    avg_contingency  = mean contingency score of assets with a contingency (0 if none)
    resilience_score = clamp(100 - avg_risk * 10 + avg_contingency * 2, 0, 100)

Only categories that contain at least one asset appear in the result.

Diversification
---------------
    avg_concentration     = mean concentration over every dependency (5 if none)
    diversification_score = 11 - avg_concentration          (range 1-10)

Levels (score thresholds, first match wins)::

    < 3  Very Low    < 5  Low    < 7  Moderate    < 9  High    else  Very High

Each level carries three fixed advisory strings (``DIVERSIFICATION_ADVICE``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from resilience_planner.models.assessment import DEFAULT_RATING, Assessment
from resilience_planner.scoring.scorer import is_scorable, risk_score
from resilience_planner.taxonomy.asset_taxonomy import (
    CATEGORY_DISPLAY_NAMES,
    AssetCategory,
)

logger = logging.getLogger(__name__)

LEVEL_UNKNOWN = "Unknown"

DIVERSIFICATION_ADVICE: dict[str, tuple[str, str, str]] = {
    "Very Low": (
        "Urgent action needed to reduce dependency concentration",
        "Identify alternative suppliers/partners for key dependencies",
        "Develop backup systems for critical assets",
    ),
    "Low": (
        "Develop formal diversification strategy",
        "Cross-train personnel for key roles",
        "Explore redundancy options for critical systems",
    ),
    "Moderate": (
        "Continue improving diversification efforts",
        "Document knowledge to reduce personnel dependencies",
        "Regularly test contingency measures",
    ),
    "High": (
        "Maintain current diversification practices",
        "Periodically review for new concentration risks",
        "Share best practices across the organization",
    ),
    "Very High": (
        "Maintain excellent diversification practices",
        "Consider optimizing for efficiency where appropriate",
        "Document your approach for organizational knowledge",
    ),
}

# (exclusive upper bound, level); anything >= the last bound is "Very High"
_LEVEL_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (3.0, "Very Low"),
    (5.0, "Low"),
    (7.0, "Moderate"),
    (9.0, "High"),
)


@dataclass(frozen=True)
class CategoryMetrics:
    """Aggregated scores for one asset category.

    Attributes:
        asset_count:           Assets in the category (scored or not).
        avg_risk_score:        Mean risk over assets with a dependency rating.
        avg_contingency_score: Mean contingency score over assets with one.
        resilience_score:      Category resilience, clamped to 0-100.
    """

    asset_count:           int
    avg_risk_score:        float
    avg_contingency_score: float
    resilience_score:      float


@dataclass(frozen=True)
class DiversificationResult:
    """Diversification rating of an assessment."""

    score:           float
    level:           str
    recommendations: list[str] = field(default_factory=list)


def calculate_category_metrics(
    assessment: Optional[Assessment],
) -> dict[str, CategoryMetrics]:
    """Group assets by category and compute per-category resilience.

    Args:
        assessment: Assessment to inspect.

    Returns:
        Dict mapping category slug -> ``CategoryMetrics``, in order of first
        appearance. Empty when the assessment lacks assets or dependencies.
    """
    if not is_scorable(assessment):
        return {}

    counts: dict[str, int] = {}
    risks: dict[str, list[float]] = {}
    contingencies: dict[str, list[float]] = {}

    for asset in assessment.assets:
        category = str(asset.category or AssetCategory.OTHER)
        counts[category] = counts.get(category, 0) + 1
        risks.setdefault(category, [])
        contingencies.setdefault(category, [])

        dep = assessment.find_dependency(asset.id)
        if dep is not None:
            risks[category].append(risk_score(dep))

        cont = assessment.find_contingency(asset.id)
        if cont is not None:
            contingencies[category].append(cont.score)

    result: dict[str, CategoryMetrics] = {}
    for category, count in counts.items():
        avg_risk = _mean(risks[category])
        avg_cont = _mean(contingencies[category])
        result[category] = CategoryMetrics(
            asset_count=count,
            avg_risk_score=avg_risk,
            avg_contingency_score=avg_cont,
            resilience_score=_clamp(100 - avg_risk * 10 + avg_cont * 2, 0.0, 100.0),
        )

    logger.debug("Category metrics computed for %d categories.", len(result))
    return result


def diversification_level(score: float) -> str:
    """Map a diversification score to its level label."""
    for upper, level in _LEVEL_THRESHOLDS:
        if score < upper:
            return level
    return "Very High"


def evaluate_diversification(assessment: Optional[Assessment]) -> DiversificationResult:
    """Rate how diversified the organization's dependencies are.

    Returns:
        ``DiversificationResult``; score 0 / level ``"Unknown"`` / no advice
        when the assessment lacks assets or dependencies.
    """
    if not is_scorable(assessment):
        return DiversificationResult(score=0.0, level=LEVEL_UNKNOWN, recommendations=[])

    concentrations = [
        d.concentration or DEFAULT_RATING for d in assessment.dependencies
    ]
    avg_concentration = _mean(concentrations) if concentrations else float(DEFAULT_RATING)

    score = 11 - avg_concentration
    level = diversification_level(score)
    return DiversificationResult(
        score=score,
        level=level,
        recommendations=list(DIVERSIFICATION_ADVICE[level]),
    )


def format_category_name(category: AssetCategory | str) -> str:
    """Display name for a category slug; unknown slugs are returned unchanged."""
    return CATEGORY_DISPLAY_NAMES.get(category, str(category))


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
