"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helper
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Fetch functions return plain dicts or pandas DataFrames; they never clean or
filter records. Cleaning belongs to ``analysis/``.
"""
