"""
Scoring engine: turns an Assessment into risk scores, a resilience score,
category breakdowns, and a diversification rating.

Modules
-------
scorer  : risk_score() + calculate_resilience_score() + identify_top_risks()
          + identify_high_risk_assets() + industry/size adjustment tables.
metrics : calculate_category_metrics() + evaluate_diversification()
          + DIVERSIFICATION_ADVICE catalog.

Everything in this package is pure: no database access and no randomness.
"""
