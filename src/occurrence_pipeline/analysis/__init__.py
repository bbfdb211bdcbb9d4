"""Pure table logic: covariates, integration, cleaning, audit, quality.

Every function takes pandas DataFrames in and returns new DataFrames (or
plain dicts) out. Nothing here fetches data, touches the filesystem or
produces HTML.

Modules:
  - covariates: unique coordinates -> seeded synthetic covariate table
  - integration: occurrences + covariates -> left join on rounded coordinates
  - cleaning: ordered, audited cleaning stages
  - audit: AuditEntry / AuditTrail row-count ledger
  - quality: completeness and coverage summaries for reports
"""

from occurrence_pipeline.analysis.audit import AuditEntry, AuditTrail
from occurrence_pipeline.analysis.cleaning import clean
from occurrence_pipeline.analysis.covariates import simulate_covariates, unique_coordinates
from occurrence_pipeline.analysis.integration import (
    IntegrationResult,
    JoinKeyCollisionError,
    integrate,
)

__all__ = [
    "AuditEntry",
    "AuditTrail",
    "IntegrationResult",
    "JoinKeyCollisionError",
    "clean",
    "integrate",
    "simulate_covariates",
    "unique_coordinates",
]
