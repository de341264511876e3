"""
Recommendation engine: maps risk findings and category metrics to
recommendations grouped into quick wins, medium-term plans, and long-term
strategy.

Generation order
----------------
    1. Per high-risk asset (risk >= threshold, riskiest first):
         always       -> one random quick-win template
         risk > 7     -> one random medium-term template
         risk > 8.5   -> one random long-term template
    2. Curated industry entries (only industries listed in the catalog).
    3. Diversification score < 5 -> formal diversification strategy (medium).
    4. Weakest category with resilience < 50 -> category strategy (medium).
    5. Every bucket left empty gets its fixed default.

Every insertion goes through ``add_recommendation()``: an entry is skipped
when its title OR its description already appears in the target bucket.

Template choice is uniform random. The random source is injected (``rng``)
so tests can pass a seeded ``random.Random`` or any object with ``choice()``.
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Mapping, Sequence
from typing import Optional, Protocol, TypeVar

from resilience_planner.models.assessment import (
    Assessment,
    Recommendation,
    RecommendationSet,
)
from resilience_planner.recommendations.catalog import (
    DEFAULT_RECOMMENDATIONS,
    DIVERSIFICATION_STRATEGY,
    INDUSTRY_RECOMMENDATIONS,
    TEMPLATES_BY_HORIZON,
)
from resilience_planner.scoring.metrics import (
    CategoryMetrics,
    calculate_category_metrics,
    evaluate_diversification,
    format_category_name,
)
from resilience_planner.scoring.scorer import identify_high_risk_assets, is_scorable
from resilience_planner.taxonomy.asset_taxonomy import Horizon, Industry

logger = logging.getLogger(__name__)

MEDIUM_TERM_RISK = 7.0
LONG_TERM_RISK = 8.5
DIVERSIFICATION_FLOOR = 5.0
CATEGORY_RESILIENCE_FLOOR = 50.0

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can pick one element of a sequence (``random.Random`` does)."""

    def choice(self, seq: Sequence[T]) -> T: ...


def format_template(template: str, values: Mapping[str, Optional[str]]) -> str:
    """Replace ``{key}`` tokens with ``values[key]``.

    Tokens whose key is missing or whose value is empty are left as-is.
    """
    def _sub(match: re.Match[str]) -> str:
        return values.get(match.group(1)) or match.group(0)

    return _PLACEHOLDER.sub(_sub, template)


def select_recommendation(
    templates: Sequence[Recommendation],
    values: Mapping[str, Optional[str]],
    rng: RandomSource,
) -> Recommendation:
    """Pick one template uniformly at random and fill in its placeholders."""
    template = rng.choice(templates)
    return Recommendation(
        title=template.title,
        description=format_template(template.description, values),
    )


def add_recommendation(bucket: list[Recommendation], rec: Recommendation) -> bool:
    """Append ``rec`` unless the bucket already has its title or description.

    Returns:
        ``True`` if the recommendation was added.
    """
    for existing in bucket:
        if existing.title == rec.title or existing.description == rec.description:
            return False
    bucket.append(rec)
    return True


def generate_recommendations(
    assessment: Optional[Assessment],
    rng: Optional[RandomSource] = None,
    high_risk_threshold: float = 6.0,
) -> RecommendationSet:
    """Build the recommendation set for an assessment.

    Args:
        assessment:          Assessment to advise on.
        rng:                 Random source for template choice. Defaults to a
                             fresh ``random.Random()``.
        high_risk_threshold: Minimum risk score for asset-specific advice.

    Returns:
        ``RecommendationSet`` with at least one entry per bucket, or three
        empty buckets when the assessment lacks assets or dependencies.
    """
    recs = RecommendationSet()
    if not is_scorable(assessment):
        return recs

    if rng is None:
        rng = random.Random()

    buckets = _bucket_map(recs)

    # ── 1. Asset-specific advice ──────────────────────────────────────────────
    high_risk = identify_high_risk_assets(assessment, threshold=high_risk_threshold)
    for finding in high_risk:
        asset = assessment.find_asset(finding.asset_id)
        if asset is None:
            continue

        values = {
            "assetName": asset.name,
            "assetCategory": str(asset.category) if asset.category else None,
        }

        add_recommendation(
            recs.quick_wins,
            select_recommendation(TEMPLATES_BY_HORIZON[Horizon.QUICK_WINS], values, rng),
        )
        if finding.risk_score > MEDIUM_TERM_RISK:
            add_recommendation(
                recs.medium_term,
                select_recommendation(TEMPLATES_BY_HORIZON[Horizon.MEDIUM_TERM], values, rng),
            )
            if finding.risk_score > LONG_TERM_RISK:
                add_recommendation(
                    recs.long_term,
                    select_recommendation(TEMPLATES_BY_HORIZON[Horizon.LONG_TERM], values, rng),
                )

    # ── 2. Industry advice ────────────────────────────────────────────────────
    profile = assessment.organization_profile
    if profile is not None and profile.industry:
        add_industry_recommendations(buckets, profile.industry)

    # ── 3. Diversification ────────────────────────────────────────────────────
    diversification = evaluate_diversification(assessment)
    if diversification.score < DIVERSIFICATION_FLOOR:
        add_recommendation(recs.medium_term, DIVERSIFICATION_STRATEGY)

    # ── 4. Weakest category ───────────────────────────────────────────────────
    add_category_recommendations(buckets, calculate_category_metrics(assessment))

    # ── 5. Minimum population ─────────────────────────────────────────────────
    ensure_minimum_recommendations(buckets)

    logger.debug(
        "Recommendations: %d high-risk assets -> %d quick / %d medium / %d long",
        len(high_risk), len(recs.quick_wins), len(recs.medium_term), len(recs.long_term),
    )
    return recs


def add_industry_recommendations(
    buckets: Mapping[Horizon, list[Recommendation]],
    industry: Industry | str,
) -> int:
    """Add the curated entries for ``industry``; returns how many were added."""
    added = 0
    for horizon, rec in INDUSTRY_RECOMMENDATIONS.get(industry, ()):
        if add_recommendation(buckets[horizon], rec):
            added += 1
    return added


def add_category_recommendations(
    buckets: Mapping[Horizon, list[Recommendation]],
    category_metrics: Mapping[str, CategoryMetrics],
) -> Optional[str]:
    """Add a medium-term strategy for the weakest category if it scores below 50.

    The first category with the strictly lowest resilience score wins ties.

    Returns:
        The category slug that triggered the recommendation, or ``None``.
    """
    lowest_category: Optional[str] = None
    lowest_score = 100.0
    for category, metrics in category_metrics.items():
        if metrics.resilience_score < lowest_score:
            lowest_score = metrics.resilience_score
            lowest_category = category

    if lowest_category is None or lowest_score >= CATEGORY_RESILIENCE_FLOOR:
        return None

    display = format_category_name(lowest_category)
    add_recommendation(
        buckets[Horizon.MEDIUM_TERM],
        Recommendation(
            title=f"{display} Resilience Strategy",
            description=(
                f"Develop a focused resilience strategy for your {display.lower()} "
                "assets, which currently represent your most vulnerable category."
            ),
        ),
    )
    return lowest_category


def ensure_minimum_recommendations(
    buckets: Mapping[Horizon, list[Recommendation]],
) -> None:
    """Give every empty bucket its fixed default recommendation."""
    for horizon, default in DEFAULT_RECOMMENDATIONS.items():
        if not buckets[horizon]:
            buckets[horizon].append(default)


def _bucket_map(recs: RecommendationSet) -> dict[Horizon, list[Recommendation]]:
    return {
        Horizon.QUICK_WINS:  recs.quick_wins,
        Horizon.MEDIUM_TERM: recs.medium_term,
        Horizon.LONG_TERM:   recs.long_term,
    }
