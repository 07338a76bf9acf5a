"""
Prefect flows for the effort pipeline.

Flows:
- fetch: Fill the caches (OBIS occurrences, HAB region shapefile)
- build: Compute effort.csv (and the optional grid-cell plot)

Usage (local):
    python -m hab_effort.flows.fetch
    python -m hab_effort.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m hab_effort.flows.build
"""
