"""Formatter for Google Ads Editor CSV files."""

import csv
import io
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ads_editor_mcp.models.editor_rows import BaseEditorRow
from ads_editor_mcp.models.google_ads_formats import (
    GoogleAdsEditorFormat,
    GoogleAdsFileRequirements,
)

logger = logging.getLogger(__name__)


class EditorCSVFormatter:
    """Serializes editor rows in the fixed Google Ads Editor column order."""

    def format_to_csv(self, rows: Sequence[BaseEditorRow | Mapping[str, Any]]) -> str:
        """
        Format rows to a CSV string.

        Args:
            rows: Typed rows or column mappings; missing columns are written empty

        Returns:
            CSV text with BOM and CRLF line endings
        """
        output = io.StringIO()

        # Write BOM for Google Ads Editor
        if GoogleAdsFileRequirements.INCLUDE_BOM:
            output.write(GoogleAdsFileRequirements.BOM)

        writer = csv.writer(
            output,
            delimiter=GoogleAdsFileRequirements.DELIMITER,
            quotechar=GoogleAdsFileRequirements.QUOTE_CHAR,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=GoogleAdsFileRequirements.LINE_TERMINATOR,
        )

        # Write headers
        writer.writerow(GoogleAdsEditorFormat.HEADERS)

        # Write data rows
        for row in rows:
            writer.writerow(self._format_row(row))

        logger.debug(f"Formatted {len(rows)} rows to CSV")
        return output.getvalue()

    def format_to_bytes(self, rows: Sequence[BaseEditorRow | Mapping[str, Any]]) -> bytes:
        """Format rows to UTF-8 encoded CSV bytes."""
        return self.format_to_csv(rows).encode(GoogleAdsFileRequirements.ENCODING)

    def _format_row(self, row: BaseEditorRow | Mapping[str, Any]) -> list[str]:
        """Format a single row as values in header order."""
        columns = row.to_columns() if isinstance(row, BaseEditorRow) else row
        values = []
        for header in GoogleAdsEditorFormat.HEADERS:
            value = columns.get(header)
            values.append("" if value is None else str(value))
        return values
