"""Price table exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cabinet_pricing.domain.services import PriceTable


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for price table exporters.

    Attributes:
        format_name: Name the format is registered under (e.g., "csv").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export_string(self, table: PriceTable) -> str:
        """Render a price table in this format."""
        ...

    def export(self, table: PriceTable, path: Path) -> None:
        """Write a price table to a file."""
        ...


class BaseExporter:
    """Shared file-writing behaviour for text exporters."""

    format_name: ClassVar[str] = ""
    file_extension: ClassVar[str] = ""

    def export_string(self, table: PriceTable) -> str:
        raise NotImplementedError

    def export(self, table: PriceTable, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps csv's \r\n line endings intact
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(self.export_string(table))
        logger.info("Exported %s price table to %s", self.format_name, path)


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves using the @ExporterRegistry.register
    decorator.

    Example:
        @ExporterRegistry.register("csv")
        class CsvPriceTableExporter(BaseExporter):
            format_name = "csv"
            file_extension = "csv"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Decorator to register an exporter class under a format name."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning("Overwriting existing exporter for format '%s'", format_name)
            cls._exporters[format_name] = exporter_class
            logger.debug("Registered exporter '%s': %s", format_name, exporter_class.__name__)
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Exports price tables to one or more formats in an output directory.

    Attributes:
        output_dir: Directory where exported files will be saved.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(self, formats: list[str], table: PriceTable) -> dict[str, Path]:
        """Export a price table to several formats.

        Files are named ``{cabinet_type_id}_prices.{ext}``.

        Returns:
            Dictionary mapping format names to output file paths.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, Path] = {}
        for format_name in formats:
            exporter = ExporterRegistry.get(format_name)()
            filepath = self.output_dir / f"{table.cabinet_type_id}_prices.{exporter.file_extension}"
            exporter.export(table, filepath)
            results[format_name] = filepath
        return results

    def export_single(self, format_name: str, table: PriceTable) -> Path:
        return self.export_all([format_name], table)[format_name]
