"""HTTP API for the winter tracker.

- create_app: Factory function to create the FastAPI application
- build_store: Cache store for the configured environment
"""

from winter_tracker.api.app import build_store, create_app

__all__ = ["build_store", "create_app"]
