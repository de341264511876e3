"""
Single scoring pass over a completed assessment.

``evaluate_assessment()`` is what the results step calls: it runs the scoring
engine and the recommendation engine once and bundles every output, plus a
copy of the assessment with ``resilience_score`` and ``recommendations``
attached (ready to hand to the repository).

The input assessment is never mutated and no state is kept between calls:
scores, risks, metrics and diversification are identical for identical
input; recommendation wording may differ only through the random template
choice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from resilience_planner.models.assessment import Assessment, AssetId, RecommendationSet
from resilience_planner.recommendations.engine import (
    RandomSource,
    generate_recommendations,
)
from resilience_planner.scoring.metrics import (
    CategoryMetrics,
    DiversificationResult,
    calculate_category_metrics,
    evaluate_diversification,
)
from resilience_planner.scoring.scorer import (
    RiskFinding,
    calculate_resilience_score,
    identify_top_risks,
)

logger = logging.getLogger(__name__)


@dataclass
class AssessmentResults:
    """Everything the results view needs for one assessment.

    Attributes:
        assessment:       Copy of the input with score + recommendations attached.
        resilience_score: Overall score, 0-100.
        top_risks:        Riskiest assets with reasons, riskiest first.
        category_metrics: Per-category breakdown keyed by category slug.
        diversification:  Diversification rating and fixed advice.
        recommendations:  Recommendations grouped by horizon.
    """

    assessment:       Assessment
    resilience_score: float
    top_risks:        list[RiskFinding]
    category_metrics: dict[str, CategoryMetrics]
    diversification:  DiversificationResult
    recommendations:  RecommendationSet

    def asset_name(self, asset_id: AssetId) -> str:
        """Name of an asset in the evaluated assessment (id as text if unknown)."""
        asset = self.assessment.find_asset(asset_id)
        return asset.name if asset is not None else str(asset_id)


def evaluate_assessment(
    assessment: Assessment,
    rng: Optional[RandomSource] = None,
    top_risk_limit: int = 3,
    high_risk_threshold: float = 6.0,
) -> AssessmentResults:
    """Score an assessment and generate its recommendations.

    Args:
        assessment:          Completed assessment.
        rng:                 Random source for recommendation template choice.
        top_risk_limit:      Number of top risks to report.
        high_risk_threshold: Risk score at which an asset gets specific advice.

    Returns:
        ``AssessmentResults`` bundling all outputs.
    """
    score = calculate_resilience_score(assessment)
    top_risks = identify_top_risks(assessment, limit=top_risk_limit)
    category_metrics = calculate_category_metrics(assessment)
    diversification = evaluate_diversification(assessment)
    recommendations = generate_recommendations(
        assessment, rng=rng, high_risk_threshold=high_risk_threshold,
    )

    scored = assessment.model_copy(
        update={"resilience_score": score, "recommendations": recommendations},
        deep=True,
    )

    logger.info(
        "Evaluated assessment '%s': score=%.1f, assets=%d, recommendations=%d",
        assessment.name or "unnamed",
        score,
        len(assessment.assets or []),
        recommendations.total(),
    )

    return AssessmentResults(
        assessment=scored,
        resilience_score=score,
        top_risks=top_risks,
        category_metrics=category_metrics,
        diversification=diversification,
        recommendations=recommendations,
    )
