"""
Prefect flows for the occurrence pipeline.

Flows:
- pipeline: Download GBIF records, simulate covariates, integrate, clean, export
- reports: Run the pipeline per species and render one HTML report each

Usage (local):
    python -m occurrence_pipeline.flows.pipeline
    python -m occurrence_pipeline.flows.reports

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m occurrence_pipeline.flows.reports
"""
