"""Catalog snapshot loader.

Loads a JSON catalog snapshot exported from the data store and validates
it against the catalog schemas. File system, JSON and validation problems
are all reported as :class:`CatalogError` with an ``error_type`` so the CLI
and API can render them consistently.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabinet_pricing.application.catalog.schemas import CatalogSnapshot

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Exception raised when a catalog snapshot cannot be loaded.

    Attributes:
        message: The primary error message
        error_type: One of file_not_found, permission_denied, file_read_error,
            json_parse, validation
        path: Path to the snapshot file (if loaded from disk)
        details: Per-problem details (line/column for JSON, field paths for
            validation)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_location(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a dotted path.

    Examples:
        >>> _format_location(("cabinet_types", 0, "default_width_mm"))
        'cabinet_types[0].default_width_mm'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_location(err["loc"]),
            "message": err["msg"],
            "value": err.get("input") if not isinstance(err.get("input"), dict) else None,
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Catalog validation failed:"]
    for detail in details:
        if detail.get("value") is not None:
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {detail['value']!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_catalog_from_dict(
    data: dict[str, Any], path: Path | None = None
) -> CatalogSnapshot:
    """Validate a catalog snapshot held in memory.

    Raises:
        CatalogError: With error_type "validation" if the data does not
            match the snapshot schema.
    """
    try:
        return CatalogSnapshot.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise CatalogError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_catalog(path: Path) -> CatalogSnapshot:
    """Load and validate a catalog snapshot from a JSON file.

    Args:
        path: Path to the JSON snapshot.

    Returns:
        The validated CatalogSnapshot.

    Raises:
        CatalogError: If the file is missing, unreadable, not valid JSON, or
            fails schema validation.
    """
    if not path.exists():
        raise CatalogError(
            message=f"Catalog file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise CatalogError(
            message=f"Permission denied reading catalog file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise CatalogError(
            message=f"Error reading catalog file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CatalogError(
            message=(
                f"Invalid JSON in catalog file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    if not isinstance(data, dict):
        raise CatalogError(
            message=f"Catalog file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
        )

    snapshot = load_catalog_from_dict(data, path=path)
    logger.info(
        "Loaded catalog %s: %d cabinet types, %d door styles",
        path,
        len(snapshot.cabinet_types),
        len(snapshot.door_styles),
    )
    return snapshot
