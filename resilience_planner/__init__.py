"""Strategic Resilience Planner — dependency risk self-assessment and scoring."""

__version__ = "0.1.0"
