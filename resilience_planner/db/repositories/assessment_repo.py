"""
Repository for saved assessments (the local key-value store).

Contract used by the CLI:
  - ``save(assessment, assessment_id=None) -> id``   (insert or replace)
  - ``get(id) -> Assessment | None``
  - ``list() -> list[AssessmentSummary]``       (newest first)
  - ``delete(id) -> bool``

Payloads that no longer parse (hand-edited DB, schema drift) are logged and
treated as missing; they never reach the scoring engine.
"""

from __future__ import annotations

import json
import logging
import random
import string
import time
from typing import Optional

from pydantic import ValidationError

from resilience_planner.db.repositories.base import BaseRepository
from resilience_planner.models.assessment import Assessment
from resilience_planner.models.record import (
    UNNAMED_ASSESSMENT,
    AssessmentRecord,
    AssessmentSummary,
)

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_assessment_id(now_ms: Optional[int] = None) -> str:
    """Return a short unique id: base-36 millisecond clock + 5 random chars."""
    if now_ms is None:
        now_ms = _now_ms()
    return _to_base36(now_ms) + "".join(random.choices(_BASE36, k=5))


class AssessmentRepository(BaseRepository):
    """Read/write access to the ``assessments`` table."""

    def save(self, assessment: Assessment, assessment_id: Optional[str] = None) -> str:
        """Insert a new assessment or replace an existing one.

        Args:
            assessment:    Assessment to persist (scored or not).
            assessment_id: Existing id to overwrite; a new id is generated
                           when omitted.

        Returns:
            The id under which the assessment was stored.
        """
        record_id = assessment_id or generate_assessment_id()
        name = assessment.name or UNNAMED_ASSESSMENT
        timestamp = assessment.timestamp or _now_ms()

        self.execute(
            """
            INSERT INTO assessments (assessment_id, name, timestamp_ms, payload_json)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(assessment_id) DO UPDATE SET
                name         = excluded.name,
                timestamp_ms = excluded.timestamp_ms,
                payload_json = excluded.payload_json,
                updated_at   = strftime('%Y-%m-%dT%H:%M:%SZ', 'now');
            """,
            (record_id, name, timestamp, json.dumps(assessment.to_wire())),
        )
        logger.info("Saved assessment %s ('%s').", record_id, name)
        return record_id

    def get(self, assessment_id: str) -> Optional[Assessment]:
        """Return the stored assessment, or ``None`` if missing or unreadable."""
        record = self.get_record(assessment_id)
        return record.data if record is not None else None

    def get_record(self, assessment_id: str) -> Optional[AssessmentRecord]:
        """Return the full stored record, or ``None`` if missing or unreadable."""
        row = self.fetchone(
            "SELECT * FROM assessments WHERE assessment_id = ?;",
            (assessment_id,),
        )
        if row is None:
            return None
        return _row_to_record(row)

    def list(self) -> list[AssessmentSummary]:
        """Return id/name/timestamp of every saved assessment, newest first."""
        rows = self.fetchall(
            """
            SELECT assessment_id, name, timestamp_ms FROM assessments
            ORDER BY timestamp_ms DESC, assessment_id;
            """
        )
        return [
            AssessmentSummary(
                id=r["assessment_id"], name=r["name"], timestamp=r["timestamp_ms"],
            )
            for r in rows
        ]

    def list_records(self) -> list[AssessmentRecord]:
        """Return every readable stored record, newest first."""
        rows = self.fetchall(
            "SELECT * FROM assessments ORDER BY timestamp_ms DESC, assessment_id;"
        )
        records: list[AssessmentRecord] = []
        for row in rows:
            record = _row_to_record(row)
            if record is not None:
                records.append(record)
        return records

    def delete(self, assessment_id: str) -> bool:
        """Delete one assessment. Returns ``True`` if a row was removed."""
        cur = self.execute(
            "DELETE FROM assessments WHERE assessment_id = ?;",
            (assessment_id,),
        )
        deleted = cur.rowcount > 0
        if deleted:
            logger.info("Deleted assessment %s.", assessment_id)
        return deleted

    def clear_all(self) -> int:
        """Delete every saved assessment. Returns the number of rows removed."""
        cur = self.execute("DELETE FROM assessments;")
        logger.info("Cleared %d saved assessment(s).", cur.rowcount)
        return cur.rowcount


# ── Row mapping ───────────────────────────────────────────────────────────────

def _row_to_record(row) -> Optional[AssessmentRecord]:
    try:
        data = Assessment.model_validate(json.loads(row["payload_json"]))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning(
            "Skipping unreadable assessment %s: %s", row["assessment_id"], exc,
        )
        return None
    return AssessmentRecord(
        id=row["assessment_id"],
        name=row["name"],
        timestamp=row["timestamp_ms"],
        data=data,
    )


def _now_ms() -> int:
    return int(time.time() * 1000)


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))
