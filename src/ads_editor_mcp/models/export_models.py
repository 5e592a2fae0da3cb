"""Report and result models produced by the export pipeline."""

from enum import Enum

from pydantic import Field, computed_field

from ads_editor_mcp.models.base import BaseExportModel


class AdStrength(str, Enum):
    """Responsive search ad strength ratings."""

    INCOMPLETE = "Incomplete"
    POOR = "Poor"
    AVERAGE = "Average"
    GOOD = "Good"
    EXCELLENT = "Excellent"


class DKIValidationResult(BaseExportModel):
    """Result of checking dynamic keyword insertion syntax in one text field."""

    valid: bool = Field(..., description="True when no errors were found")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    default_text_valid: bool = Field(default=True)
    syntax_valid: bool = Field(default=True)


class AdReport(BaseExportModel):
    """What the ad validator changed or flagged on a single ad."""

    ad_index: int = Field(..., description="Position of the ad in its input list")
    ad_type: str = Field(default="unknown")
    fixes: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    ad_strength: AdStrength | None = Field(None)


class ValidationReport(BaseExportModel):
    """Summary of ad validation across a list of ads."""

    fixed: int = Field(default=0, description="Number of ads with at least one fix")
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    details: list[AdReport] = Field(default_factory=list)


class CSVValidationResult(BaseExportModel):
    """Result of validating editor rows before serialization."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    rows: list[dict[str, str]] = Field(
        default_factory=list, description="Rows projected onto the column layout"
    )

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.errors


class ExportResult(BaseExportModel):
    """A validated Google Ads Editor export."""

    csv_content: str = Field(..., description="CSV text including the BOM")
    row_count: int = Field(..., description="Data rows, excluding the header")
    row_type_counts: dict[str, int] = Field(default_factory=dict)
    validation: CSVValidationResult
    ad_reports: list[ValidationReport] = Field(
        default_factory=list, description="Ad validation report per ad group"
    )
    output_path: str | None = Field(None, description="Where the file was written")

    def to_bytes(self) -> bytes:
        """CSV content encoded for writing to disk."""
        return self.csv_content.encode("utf-8")
