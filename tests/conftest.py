"""Pytest configuration and shared fixtures for cabinet pricing tests."""

from __future__ import annotations

import copy
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from cabinet_pricing.application.catalog import load_catalog_from_dict, snapshot_to_catalog
from cabinet_pricing.domain import (
    CabinetPart,
    CabinetType,
    Catalog,
    Color,
    DoorStyle,
    Finish,
)

CATALOGS_PATH = Path(__file__).parent / "fixtures" / "catalogs"

_VALID_CATALOG: dict[str, Any] = json.loads(
    (CATALOGS_PATH / "valid_catalog.json").read_text(encoding="utf-8")
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that exercise the CLI or HTTP API end to end"
    )


@pytest.fixture(autouse=True)
def _reset_service_factory():
    """Give each test a fresh default ServiceFactory."""
    from cabinet_pricing.application.factory import reset_factory

    reset_factory()
    yield
    reset_factory()


# =============================================================================
# Catalog snapshot fixtures
# =============================================================================


@pytest.fixture
def catalogs_path() -> Path:
    return CATALOGS_PATH


@pytest.fixture
def catalog_data() -> dict[str, Any]:
    """Raw valid catalog snapshot; safe to mutate per test."""
    return copy.deepcopy(_VALID_CATALOG)


@pytest.fixture
def catalog(catalog_data: dict[str, Any]) -> Catalog:
    """Domain catalog built from valid_catalog.json."""
    return snapshot_to_catalog(load_catalog_from_dict(catalog_data))


# =============================================================================
# Domain entity fixtures
# =============================================================================


@pytest.fixture
def base_cabinet() -> CabinetType:
    """600 x 720 x 560 base cabinet with width bounds 300-1200."""
    return CabinetType(
        id="base",
        name="Base Cabinet",
        default_width_mm=Decimal(600),
        default_height_mm=Decimal(720),
        default_depth_mm=Decimal(560),
        min_width_mm=Decimal(300),
        max_width_mm=Decimal(1200),
        door_count=2,
    )


@pytest.fixture
def door_part() -> CabinetPart:
    """Two full-size doors."""
    return CabinetPart(
        id="door",
        cabinet_type_id="base",
        part_name="Door",
        quantity=2,
        width_formula="width",
        height_formula="height",
        is_door=True,
    )


@pytest.fixture
def side_part() -> CabinetPart:
    return CabinetPart(
        id="side",
        cabinet_type_id="base",
        part_name="Side",
        quantity=2,
        width_formula="depth",
        height_formula="height",
    )


@pytest.fixture
def shaker() -> DoorStyle:
    return DoorStyle(id="shaker", name="Shaker", base_rate_per_sqm=Decimal(150))


@pytest.fixture
def white() -> Color:
    return Color(
        id="white", door_style_id="shaker", name="White", surcharge_rate_per_sqm=Decimal(20)
    )


@pytest.fixture
def hmr_finish() -> Finish:
    return Finish(id="hmr", brand_id="polytec", name="HMR", rate_per_sqm=Decimal(50))
