"""
ASCII terminal formatters for the results view.

Every formatter takes already-computed engine output and returns a plain
multi-line string suitable for ``typer.echo()``. Nothing here scores
anything; the numbers come from ``evaluate_assessment()``.

Risk labels
-----------
Top risks are tagged by ``risk_level()``::

  [High Risk]    score > 7
  [Medium Risk]  score > 4
  [Low Risk]     otherwise
"""

from __future__ import annotations

from datetime import datetime, timezone

from resilience_planner.evaluation import AssessmentResults
from resilience_planner.models.assessment import RecommendationSet
from resilience_planner.models.record import AssessmentSummary
from resilience_planner.scoring.metrics import (
    CategoryMetrics,
    DiversificationResult,
    format_category_name,
)
from resilience_planner.scoring.scorer import resilience_band, risk_level
from resilience_planner.taxonomy.asset_taxonomy import HORIZON_DISPLAY_NAMES

NO_RISKS_MESSAGE = "No significant risks identified."
NO_CATEGORIES_MESSAGE = "No category data available."
NO_RECOMMENDATIONS_MESSAGE = "No recommendations in this category."


# ── Score banner ─────────────────────────────────────────────────────────────


def format_score_banner(score: float) -> str:
    """Return the overall score line plus its band description."""
    band, description = resilience_band(score)
    return "\n".join([
        f"  Resilience score: {score:.0f} / 100  [{band.upper()}]",
        f"  {description}",
    ])


# ── Top risks ─────────────────────────────────────────────────────────────────


def format_top_risks(results: AssessmentResults) -> str:
    """Format the top-risk list, riskiest first::

        1. [High Risk] Head Coach  (8.2)
           Critical asset with very difficult replaceability.
    """
    lines = ["", "=== Top Risks ==="]
    if not results.top_risks:
        lines.append(f"  {NO_RISKS_MESSAGE}")
        return "\n".join(lines)

    for i, finding in enumerate(results.top_risks, start=1):
        label = f"[{risk_level(finding.risk_score)} Risk]"
        lines.append(
            f"  {i}. {label} {results.asset_name(finding.asset_id)}"
            f"  ({finding.risk_score:.1f})"
        )
        if finding.reason:
            lines.append(f"     {finding.reason}")
    return "\n".join(lines)


# ── Category breakdown ───────────────────────────────────────────────────────


def format_category_table(category_metrics: dict[str, CategoryMetrics]) -> str:
    """Format per-category metrics as an ASCII table in insertion order."""
    lines = ["", "=== Category Breakdown ==="]
    if not category_metrics:
        lines.append(f"  {NO_CATEGORIES_MESSAGE}")
        return "\n".join(lines)

    header = (
        f"    {'Category':<30}  {'Assets':>6}  {'Avg Risk':>8}  "
        f"{'Contingency':>11}  {'Resilience':>10}"
    )
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for category, m in category_metrics.items():
        name = format_category_name(category)[:30]
        lines.append(
            f"    {name:<30}  {m.asset_count:>6}  {m.avg_risk_score:>8.1f}  "
            f"{m.avg_contingency_score:>11.1f}  {m.resilience_score:>10.0f}"
        )
    return "\n".join(lines)


# ── Diversification ──────────────────────────────────────────────────────────


def format_diversification(result: DiversificationResult) -> str:
    lines = [
        "",
        "=== Diversification ===",
        f"  Score: {result.score:.1f} / 10  ({result.level})",
    ]
    for advice in result.recommendations:
        lines.append(f"    - {advice}")
    return "\n".join(lines)


# ── Recommendations ──────────────────────────────────────────────────────────


def format_recommendations(recs: RecommendationSet) -> str:
    """Format the three recommendation buckets in horizon order."""
    lines = ["", "=== Recommendations ==="]
    for horizon, bucket in recs.buckets().items():
        lines.append("")
        lines.append(f"  [{HORIZON_DISPLAY_NAMES[horizon].upper()}]")
        if not bucket:
            lines.append(f"    {NO_RECOMMENDATIONS_MESSAGE}")
            continue
        for rank, rec in enumerate(bucket, start=1):
            lines.append(f"    {rank}. {rec.title}")
            lines.append(f"       {rec.description}")
    return "\n".join(lines)


# ── Full report ──────────────────────────────────────────────────────────────


def format_results(results: AssessmentResults) -> str:
    """Assemble the complete results view for one evaluated assessment."""
    name = results.assessment.name or "Unnamed Assessment"
    parts = [
        "",
        f"=== Resilience Assessment: {name} ===",
        format_score_banner(results.resilience_score),
        format_top_risks(results),
        format_category_table(results.category_metrics),
        format_diversification(results.diversification),
        format_recommendations(results.recommendations),
    ]
    return "\n".join(parts)


def format_saved_list(summaries: list[AssessmentSummary]) -> str:
    """Format the saved-assessment list (id, name, saved-at in UTC)."""
    lines = ["", "=== Saved Assessments ==="]
    if not summaries:
        lines.append("  (no saved assessments)")
        return "\n".join(lines)

    header = f"    {'ID':<16}  {'Name':<32}  {'Saved (UTC)':<19}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for s in summaries:
        saved = datetime.fromtimestamp(s.timestamp / 1000, tz=timezone.utc)
        lines.append(
            f"    {s.id:<16}  {s.name[:32]:<32}  {saved:%Y-%m-%d %H:%M:%S}"
        )
    return "\n".join(lines)
