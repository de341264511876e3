"""
Persisted assessment records.

A saved assessment is stored as ``{id, name, timestamp, data}`` where
``timestamp`` is milliseconds since the Unix epoch and ``data`` is the full
assessment payload. There is no versioned or binary framing: the record is
plain JSON, identical to what the browser version kept in localStorage.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from resilience_planner.models.assessment import Assessment

UNNAMED_ASSESSMENT = "Unnamed Assessment"


class AssessmentSummary(BaseModel):
    """Row of the saved-assessment list."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    timestamp: int


class AssessmentRecord(AssessmentSummary):
    """A saved assessment including its payload."""

    data: Assessment

    def to_wire(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "timestamp": self.timestamp,
            "data": self.data.to_wire(),
        }
