"""
Risk and resilience scoring: converts an ``Assessment`` into per-asset risk
scores, an overall resilience score, and ranked risk findings.

Risk score (per asset, range 0.1-10)
------------------------------------
    risk = importance * replaceability * concentration / 100

Missing ratings default to 5. Assets without a dependency rating are not
scored and are excluded from every aggregate.

Resilience score (range 0-100)
------------------------------
    base        = 100 - mean(risk) * 10
    contingency = 2 * mean((backup + knowledge_sharing + documentation) / 3)
    score       = clamp(base + contingency + industry_adj + size_adj, 0, 100)

The contingency mean runs over every contingency record, matched or not.
An assessment with no scored assets has a resilience score of exactly 0.

Risk reason (priority order, first match wins)
----------------------------------------------
    1. importance >= 8 AND replaceability >= 8
    2. importance >= 8
    3. replaceability >= 8
    4. concentration >= 8
    5. time_to_replace == "years"
    6. time_to_replace == "months"
    7. fallback: moderate overall risk

All functions here are pure: no database access and no randomness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from resilience_planner.models.assessment import (
    DEFAULT_RATING,
    Assessment,
    AssetId,
    Dependency,
)
from resilience_planner.taxonomy.asset_taxonomy import (
    Industry,
    OrganizationSize,
    TimeToReplace,
)

logger = logging.getLogger(__name__)

# Baseline resilience characteristics per sector.
INDUSTRY_ADJUSTMENTS: dict[str, int] = {
    Industry.SPORTS:        -2,   # star player dependency
    Industry.TECHNOLOGY:    -1,   # key system dependencies
    Industry.FINANCE:        2,   # regulated redundancy
    Industry.HEALTHCARE:     1,   # mandated backup requirements
    Industry.RETAIL:         0,
    Industry.MANUFACTURING: -1,   # facility dependencies
    Industry.EDUCATION:      1,   # distributed knowledge
    Industry.PROFESSIONAL:  -1,   # key people dependencies
    Industry.ENTERTAINMENT: -3,   # star talent dependency
    Industry.OTHER:          0,
}

SIZE_ADJUSTMENTS: dict[str, int] = {
    OrganizationSize.MICRO:  -3,
    OrganizationSize.SMALL:  -1,
    OrganizationSize.MEDIUM:  1,
    OrganizationSize.LARGE:   3,
}

REASON_CRITICAL        = "Critical asset with very difficult replaceability."
REASON_IMPORTANT       = "Highly important to operations."
REASON_IRREPLACEABLE   = "Extremely difficult to replace."
REASON_CONCENTRATED    = "Highly concentrated dependency."
REASON_YEARS           = "Would take years to replace."
REASON_MONTHS          = "Would take months to replace."
REASON_MODERATE        = "Moderate overall risk."

_HIGH_RATING = 8


@dataclass(frozen=True)
class RiskFinding:
    """One scored asset.

    Attributes:
        asset_id:   FK to ``Asset.id``.
        risk_score: importance * replaceability * concentration / 100.
        reason:     Explanation chosen by the priority rules (empty for
                    high-risk screening where no reason is needed).
    """

    asset_id:   AssetId
    risk_score: float
    reason:     str = ""


def risk_score(dependency: Dependency) -> float:
    """Return the risk score for one dependency rating (defaults applied)."""
    importance, replaceability, concentration = _ratings(dependency)
    return importance * replaceability * concentration / 100


def calculate_risk_scores(assessment: Optional[Assessment]) -> list[float]:
    """Risk score of every asset with a matched dependency, in asset order."""
    if not is_scorable(assessment):
        return []
    scores: list[float] = []
    for asset in assessment.assets:
        dep = assessment.find_dependency(asset.id)
        if dep is not None:
            scores.append(risk_score(dep))
    return scores


def get_industry_adjustment(industry: Industry | str | None) -> int:
    """Fixed score adjustment for an industry; unknown or missing → 0."""
    if industry is None:
        return 0
    return INDUSTRY_ADJUSTMENTS.get(industry, 0)


def get_size_adjustment(size: OrganizationSize | str | None) -> int:
    """Fixed score adjustment for an organization size; unknown or missing → 0."""
    if size is None:
        return 0
    return SIZE_ADJUSTMENTS.get(size, 0)


def calculate_resilience_score(assessment: Optional[Assessment]) -> float:
    """Compute the overall resilience score (0-100) for an assessment.

    Args:
        assessment: Assessment to score. ``None`` or an assessment without
            assets/dependencies scores 0.

    Returns:
        Clamped resilience score.
    """
    scores = calculate_risk_scores(assessment)
    if not scores:
        return 0.0

    avg_risk = sum(scores) / len(scores)
    base = 100 - avg_risk * 10

    contingency_bonus = 0.0
    if assessment.contingencies:
        cont_scores = [c.score for c in assessment.contingencies]
        contingency_bonus = sum(cont_scores) / len(cont_scores) * 2

    score = base + contingency_bonus

    profile = assessment.organization_profile
    if profile is not None:
        score += get_industry_adjustment(profile.industry)
        score += get_size_adjustment(profile.size)

    logger.debug(
        "Resilience score: %d scored assets, avg_risk=%.3f, bonus=%.3f, raw=%.3f",
        len(scores), avg_risk, contingency_bonus, score,
    )
    return _clamp(score, 0.0, 100.0)


def determine_reason(dependency: Dependency) -> str:
    """Pick the risk explanation for one dependency (first matching rule wins)."""
    importance, replaceability, concentration = _ratings(dependency)
    time_to_replace = dependency.time_to_replace or TimeToReplace.WEEKS

    if importance >= _HIGH_RATING and replaceability >= _HIGH_RATING:
        return REASON_CRITICAL
    if importance >= _HIGH_RATING:
        return REASON_IMPORTANT
    if replaceability >= _HIGH_RATING:
        return REASON_IRREPLACEABLE
    if concentration >= _HIGH_RATING:
        return REASON_CONCENTRATED
    if time_to_replace == TimeToReplace.YEARS:
        return REASON_YEARS
    if time_to_replace == TimeToReplace.MONTHS:
        return REASON_MONTHS
    return REASON_MODERATE


def identify_top_risks(
    assessment: Optional[Assessment],
    limit: int = 3,
) -> list[RiskFinding]:
    """Return the ``limit`` riskiest assets with an explanation each.

    Sorted by risk score descending. Ties keep the original asset order
    (``sorted`` is stable).

    Args:
        assessment: Assessment to inspect.
        limit:      Maximum number of findings (default 3).

    Returns:
        At most ``limit`` ``RiskFinding`` objects.
    """
    if not is_scorable(assessment) or limit <= 0:
        return []

    findings: list[RiskFinding] = []
    for asset in assessment.assets:
        dep = assessment.find_dependency(asset.id)
        if dep is None:
            continue
        findings.append(
            RiskFinding(
                asset_id=asset.id,
                risk_score=risk_score(dep),
                reason=determine_reason(dep),
            )
        )

    ranked = sorted(findings, key=lambda f: -f.risk_score)
    return ranked[:limit]


def identify_high_risk_assets(
    assessment: Optional[Assessment],
    threshold: float = 6.0,
) -> list[RiskFinding]:
    """Return every asset whose risk score is >= ``threshold``, riskiest first."""
    if not is_scorable(assessment):
        return []

    high: list[RiskFinding] = []
    for asset in assessment.assets:
        dep = assessment.find_dependency(asset.id)
        if dep is None:
            continue
        score = risk_score(dep)
        if score >= threshold:
            high.append(RiskFinding(asset_id=asset.id, risk_score=score))

    return sorted(high, key=lambda f: -f.risk_score)


def risk_level(score: float) -> str:
    """Label a risk score for display: High (> 7), Medium (> 4), else Low."""
    if score > 7:
        return "High"
    if score > 4:
        return "Medium"
    return "Low"


def resilience_band(score: float) -> tuple[str, str]:
    """Return ``(band, description)`` for a resilience score.

    Bands: Critical (< 40), Moderate (< 70), Strong (>= 70).
    """
    if score < 40:
        return (
            "Critical",
            "Your organization has significant vulnerabilities. "
            "Immediate action is recommended.",
        )
    if score < 70:
        return (
            "Moderate",
            "Your organization has moderate resilience. "
            "There are opportunities for improvement.",
        )
    return (
        "Strong",
        "Your organization demonstrates strong resilience. "
        "Continue monitoring and enhancing your strategies.",
    )


# ── Helpers ───────────────────────────────────────────────────────────────────

def is_scorable(assessment: Optional[Assessment]) -> bool:
    """True when the assessment carries both an asset and a dependency list."""
    return (
        assessment is not None
        and assessment.assets is not None
        and assessment.dependencies is not None
    )


def _ratings(dependency: Dependency) -> tuple[int, int, int]:
    return (
        dependency.importance or DEFAULT_RATING,
        dependency.replaceability or DEFAULT_RATING,
        dependency.concentration or DEFAULT_RATING,
    )


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
