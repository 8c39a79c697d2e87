"""Core (UI-agnostic) exhibition database logic.

This package contains:
- record loading (CSV -> pandas)
- filter facets (region -> prefecture groups, year bounds)
- search criteria normalization and matching
- sorting / pagination into page views
- about-page aggregates and chart helpers (Altair -> Vega-Lite spec dict)
- the controller that owns application state
"""
