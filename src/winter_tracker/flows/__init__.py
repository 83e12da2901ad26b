"""
Prefect flows for offline maintenance.

Flows:
- seed: Download immutable historical years into the static cache
- build: Render a static copy of the tracker page and JSON payload

Usage (local):
    python -m winter_tracker.flows.seed
    python -m winter_tracker.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'seed-cache/default'
"""
