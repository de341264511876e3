"""
resilience_planner.reporting — Results formatting and file export.

Modules:
  formatters — ASCII terminal formatters for the results view.
  export     — JSON/CSV export and JSON import of assessments.
"""
