"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, session
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Fetch functions raise on failure; swallowing errors is the job of the
caller (see ``yearly.YearlyFetcher``), which decides what a failed call
means for the data it serves.
"""
