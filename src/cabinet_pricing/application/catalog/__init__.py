"""Catalog snapshot loading, conversion and validation."""

from cabinet_pricing.application.catalog.adapter import snapshot_to_catalog
from cabinet_pricing.application.catalog.loader import (
    CatalogError,
    load_catalog,
    load_catalog_from_dict,
)
from cabinet_pricing.application.catalog.schemas import (
    SUPPORTED_VERSIONS,
    CatalogSnapshot,
)
from cabinet_pricing.application.catalog.validation import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_catalog,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "CatalogError",
    "CatalogSnapshot",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "load_catalog",
    "load_catalog_from_dict",
    "snapshot_to_catalog",
    "validate_catalog",
]
