"""
Recommendation engine: converts risk findings, category metrics, and the
organization profile into recommendations grouped by time horizon.

Modules
-------
catalog  : Immutable template tables, curated industry entries, defaults.
engine   : generate_recommendations() + select_recommendation()
           + add_recommendation() dedup rule — pure apart from the injected
           random source used for template choice.
"""
