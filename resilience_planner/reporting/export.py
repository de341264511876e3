"""
Export helpers for assessments and their results.

File writers (``export_to_json``, ``export_to_csv``) create parent
directories and return the written ``Path``. CSV output is flat so it opens
directly in a spreadsheet.

``export_assessment_json()`` / ``import_assessment_json()`` round-trip a single
assessment through the camelCase JSON shape the browser version used for its
"Export" and "Import" buttons, so files move freely between the two.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from resilience_planner.evaluation import AssessmentResults
from resilience_planner.models.assessment import Assessment, RecommendationSet

logger = logging.getLogger(__name__)

RECOMMENDATION_FIELDS = ["horizon", "rank", "title", "description"]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    An empty ``records`` list writes a header-only file when ``fieldnames``
    is given, otherwise an empty file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    cols = fieldnames or (list(records[0].keys()) if records else [])
    with path.open("w", newline="", encoding="utf-8") as f:
        if not cols:
            return path
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_recommendations_for_export(recs: RecommendationSet) -> list[dict]:
    """One row per recommendation: ``horizon``, ``rank`` (1-based), ``title``, ``description``."""
    rows: list[dict] = []
    for horizon, bucket in recs.buckets().items():
        for rank, rec in enumerate(bucket, start=1):
            rows.append({
                "horizon":     horizon,
                "rank":        rank,
                "title":       rec.title,
                "description": rec.description,
            })
    return rows


def results_to_dict(results: AssessmentResults) -> dict:
    """Serialise a full evaluation to a JSON-compatible dict."""
    return {
        "assessment":      results.assessment.to_wire(),
        "resilienceScore": results.resilience_score,
        "topRisks": [
            {
                "assetId":   f.asset_id,
                "assetName": results.asset_name(f.asset_id),
                "riskScore": f.risk_score,
                "reason":    f.reason,
            }
            for f in results.top_risks
        ],
        "categoryMetrics": {
            category: {
                "assetCount":          m.asset_count,
                "avgRiskScore":        m.avg_risk_score,
                "avgContingencyScore": m.avg_contingency_score,
                "resilienceScore":     m.resilience_score,
            }
            for category, m in results.category_metrics.items()
        },
        "diversification": {
            "score":           results.diversification.score,
            "level":           results.diversification.level,
            "recommendations": list(results.diversification.recommendations),
        },
    }


def export_assessment_json(assessment: Assessment) -> str:
    """Return the assessment as indented camelCase JSON text."""
    return json.dumps(assessment.to_wire(), indent=2)


def import_assessment_json(text: str) -> Optional[Assessment]:
    """Parse assessment JSON text.

    Returns:
        The parsed ``Assessment``, or ``None`` if the text is not valid JSON
        or does not describe an assessment. The failure is logged.
    """
    try:
        return Assessment.model_validate(json.loads(text))
    except json.JSONDecodeError as exc:
        logger.error("Assessment import failed: invalid JSON (%s)", exc)
    except ValidationError as exc:
        logger.error(
            "Assessment import failed: %d validation error(s)\n%s",
            exc.error_count(), exc,
        )
    return None
