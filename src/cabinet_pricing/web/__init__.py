"""FastAPI REST API for cabinet pricing.

This module provides a REST API for pricing cabinet configurations,
generating price tables, and validating catalog snapshots.

Usage:
    uvicorn cabinet_pricing.web:app --reload
"""

from cabinet_pricing.web.app import app, create_app

__all__ = ["app", "create_app"]
