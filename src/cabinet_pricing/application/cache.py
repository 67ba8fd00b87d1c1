"""In-process cache of generated price tables.

Price tables are expensive to build (one engine call per cell) and change
only when catalog rows change. Entries are keyed by cabinet type and
hardware brand and are dropped by :class:`CatalogChangeEvent` notifications
sent whenever a catalog table is written.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass

from cabinet_pricing.domain.entities import Catalog
from cabinet_pricing.domain.services import PriceTable, PriceTableGenerator

logger = logging.getLogger(__name__)

# Tables whose rows belong to a single cabinet type. A change to any other
# table can affect every cabinet type's prices.
CABINET_SCOPED_TABLES = frozenset(
    {
        "cabinet_types",
        "cabinet_parts",
        "price_ranges",
        "cabinet_type_finishes",
        "hardware_requirements",
    }
)

_CacheKey = tuple[str, str | None]


@dataclass(frozen=True)
class CatalogChangeEvent:
    """Notification that rows of a catalog table changed.

    Attributes:
        table: Name of the changed table, e.g. "door_styles".
        cabinet_type_id: Cabinet type the changed rows belong to, for
            cabinet-scoped tables. None means the change is not scoped.
    """

    table: str
    cabinet_type_id: str | None = None


class PriceTableCache:
    """LRU cache of price tables, safe to share between threads."""

    def __init__(
        self,
        generator: PriceTableGenerator | None = None,
        max_entries: int = 128,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.generator = generator or PriceTableGenerator()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._tables: OrderedDict[_CacheKey, PriceTable] = OrderedDict()
        self._lock = threading.Lock()
        # Incremented by invalidate() and clear().
        self._epoch = 0

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, key: object) -> bool:
        return key in self._tables

    def get(self, cabinet_type_id: str, hardware_brand_id: str | None = None) -> PriceTable | None:
        key = (cabinet_type_id, hardware_brand_id)
        with self._lock:
            table = self._tables.get(key)
            if table is not None:
                self._tables.move_to_end(key)
            return table

    def get_or_generate(
        self,
        catalog: Catalog,
        cabinet_type_id: str,
        hardware_brand_id: str | None = None,
    ) -> PriceTable:
        """Return the cached table, generating and storing it on a miss.

        Raises:
            KeyError: If the cabinet type does not exist in the catalog.
        """
        key = (cabinet_type_id, hardware_brand_id)
        with self._lock:
            table = self._tables.get(key)
            if table is not None:
                self.hits += 1
                self._tables.move_to_end(key)
                logger.debug("Price table cache hit: %s", key)
                return table
            self.misses += 1
            epoch = self._epoch

        logger.debug("Price table cache miss: %s", key)
        table = self.generator.generate_for_catalog(catalog, cabinet_type_id, hardware_brand_id)
        with self._lock:
            if epoch != self._epoch:
                logger.debug("Catalog changed while generating %s; not caching", key)
                return table
            self._tables[key] = table
            self._tables.move_to_end(key)
            while len(self._tables) > self.max_entries:
                self._tables.popitem(last=False)
        return table

    def invalidate(self, event: CatalogChangeEvent) -> int:
        """Drop the entries a catalog change can affect.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            self._epoch += 1
            if event.table in CABINET_SCOPED_TABLES and event.cabinet_type_id is not None:
                stale = [k for k in self._tables if k[0] == event.cabinet_type_id]
            else:
                stale = list(self._tables)
            for key in stale:
                del self._tables[key]
        logger.info(
            "Invalidated %d price table(s) after change to %s%s",
            len(stale),
            event.table,
            f" ({event.cabinet_type_id})" if event.cabinet_type_id else "",
        )
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._tables.clear()
