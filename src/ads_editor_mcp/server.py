"""FastMCP server for Google Ads Editor CSV exports."""

import logging
import re
from enum import Enum
from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel, Field

from ads_editor_mcp import __version__
from ads_editor_mcp.core.config import get_settings, setup_logging
from ads_editor_mcp.core.exceptions import (
    AdsEditorError,
    ConfigurationError,
    CSVValidationError,
)
from ads_editor_mcp.exporters.ad_validator import (
    format_validation_report,
    validate_and_fix_ads,
)
from ads_editor_mcp.exporters.google_ads_editor_exporter import (
    GoogleAdsEditorExporter,
)
from ads_editor_mcp.models.campaign import Ad, Campaign, CampaignStructure
from ads_editor_mcp.models.export_models import ExportResult
from ads_editor_mcp.models.google_ads_formats import (
    GoogleAdsEditorFormat,
    GoogleAdsFileRequirements,
    RowType,
)
from ads_editor_mcp.models.keyword import KeywordSpec

logger = logging.getLogger(__name__)


# ============================================================================
# Error Codes
# ============================================================================


class ErrorCode(str, Enum):
    """Error codes for programmatic error handling."""

    INVALID_INPUT = "INVALID_INPUT"
    CSV_VALIDATION_FAILED = "CSV_VALIDATION_FAILED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    EXPORT_ERROR = "EXPORT_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Initialize MCP server
mcp = FastMCP("Ads Editor MCP Server")

TOOLS_AVAILABLE = [
    "export_campaign_csv",
    "export_keywords_csv",
    "export_negative_keywords_csv",
    "validate_ads",
]


# ============================================================================
# Helper Functions
# ============================================================================


def sanitize_error_message(msg: str) -> str:
    """Remove potential credentials from error messages.

    Args:
        msg: Original error message

    Returns:
        Sanitized error message with credentials redacted

    Examples:
        >>> sanitize_error_message("user@example.com export failed")
        "[EMAIL_REDACTED] export failed"
    """
    # Remove anything that looks like a token (20+ alphanumeric/dash/underscore)
    msg = re.sub(r"[A-Za-z0-9_-]{20,}", "[REDACTED]", msg)

    # Remove anything that looks like an email address
    msg = re.sub(r"\b[\w.-]+@[\w.-]+\.\w+\b", "[EMAIL_REDACTED]", msg)

    # Remove anything that looks like an account ID (10 digits)
    msg = re.sub(r"\b\d{10}\b", "[CUSTOMER_ID_REDACTED]", msg)

    # Remove anything that looks like an API key pattern
    msg = re.sub(
        r"(api[_-]?key|token|secret|password|credential)[\"']?\s*[:=]\s*[\"']?[^\s\"']+",
        r"\1=[REDACTED]",
        msg,
        flags=re.IGNORECASE,
    )

    return msg


def _get_exporter() -> GoogleAdsEditorExporter:
    """Build an exporter from the current export settings."""
    return GoogleAdsEditorExporter(get_settings().export)


def _success_response(
    result: ExportResult, include_csv: bool, message: str
) -> dict[str, Any]:
    return {
        "status": "success",
        "message": message,
        "metadata": {
            "row_count": result.row_count,
            "row_type_counts": result.row_type_counts,
            "output_path": result.output_path,
            "column_count": GoogleAdsEditorFormat.COLUMN_COUNT,
        },
        "data": {
            "csv_content": result.csv_content if include_csv else None,
            "ad_validation": [
                format_validation_report(report)
                for report in result.ad_reports
                if report.fixed or report.warnings or report.errors
            ],
        },
    }


def _error_response(error: Exception, operation: str) -> dict[str, Any]:
    """Convert an export failure into the error envelope."""
    if isinstance(error, CSVValidationError):
        logger.warning(
            f"{operation} rejected: {len(error.issues)} validation error(s)"
        )
        return {
            "status": "error",
            "error_code": ErrorCode.CSV_VALIDATION_FAILED,
            "error_type": "CSVValidationError",
            "message": sanitize_error_message(str(error)),
            "errors": [sanitize_error_message(issue) for issue in error.issues],
            "suggestions": error.suggestions,
            "details": {"error_type": "validation", "retry_allowed": False},
        }
    if isinstance(error, ConfigurationError):
        logger.error(
            f"Configuration error: {sanitize_error_message(str(error))}",
            exc_info=True,
        )
        return {
            "status": "error",
            "error_code": ErrorCode.CONFIGURATION_ERROR,
            "error_type": "ConfigurationError",
            "message": "Server configuration is invalid. Check ADS_EDITOR_* settings.",
            "details": {"error_type": "configuration", "retry_allowed": False},
        }
    if isinstance(error, AdsEditorError):
        logger.error(
            f"{operation} failed: {sanitize_error_message(str(error))}",
            exc_info=True,
        )
        return {
            "status": "error",
            "error_code": ErrorCode.EXPORT_ERROR,
            "error_type": type(error).__name__,
            "message": sanitize_error_message(str(error)),
            "details": {"error_type": "export", "retry_allowed": False},
        }
    if isinstance(error, OSError):
        logger.error(
            f"Failed to write export: {sanitize_error_message(str(error))}",
            exc_info=True,
        )
        return {
            "status": "error",
            "error_code": ErrorCode.FILE_WRITE_ERROR,
            "error_type": type(error).__name__,
            "message": f"Could not write output file: {sanitize_error_message(str(error))}",
            "details": {"error_type": "io", "retry_allowed": True},
        }
    if isinstance(error, ValueError):
        logger.error(
            f"Invalid input: {sanitize_error_message(str(error))}", exc_info=True
        )
        return {
            "status": "error",
            "error_code": ErrorCode.INVALID_INPUT,
            "error_type": "validation",
            "message": f"Invalid input: {sanitize_error_message(str(error))}",
            "details": {"error_type": "validation", "retry_allowed": False},
        }

    logger.error(
        f"Unexpected error: {sanitize_error_message(str(error))}", exc_info=True
    )
    return {
        "status": "error",
        "error_code": ErrorCode.INTERNAL_ERROR,
        "error_type": "unexpected",
        "message": "An unexpected error occurred. Please contact support if this persists.",
        "details": {"error_type": "unexpected"},
    }


# ============================================================================
# Models
# ============================================================================


class ExportCampaignRequest(BaseModel):
    """Request model for exporting a full campaign structure."""

    campaigns: list[Campaign] = Field(
        ..., description="Campaigns with ad groups, keywords, ads and negatives"
    )
    output_path: str | None = Field(
        None, description="Optional file path to write the CSV to"
    )
    include_csv: bool = Field(
        True, description="Return the CSV content in the response"
    )


class ExportKeywordsRequest(BaseModel):
    """Request model for exporting a flat keyword list."""

    keywords: list[KeywordSpec | str] = Field(
        ..., description='Keywords, e.g. "plumber", "[emergency plumber]"'
    )
    campaign_name: str | None = Field(
        None, description='Campaign name (default "Keyword Campaign")'
    )
    ad_group_name: str | None = Field(
        None, description='Ad group name (default "All Keywords")'
    )
    output_path: str | None = Field(
        None, description="Optional file path to write the CSV to"
    )
    include_csv: bool = Field(True)


class ExportNegativeKeywordsRequest(BaseModel):
    """Request model for exporting a flat negative keyword list."""

    negative_keywords: list[KeywordSpec | str] = Field(
        ..., description='Negative keywords, e.g. "free", "-[diy]"'
    )
    campaign_name: str | None = Field(
        None, description='Campaign name (default "Negative Keywords Campaign")'
    )
    ad_group_name: str | None = Field(
        None, description='Ad group name (default "All Ad Groups")'
    )
    output_path: str | None = Field(
        None, description="Optional file path to write the CSV to"
    )
    include_csv: bool = Field(True)


class ValidateAdsRequest(BaseModel):
    """Request model for validating and repairing ads without exporting."""

    ads: list[Ad] = Field(..., description="Ads to validate")


# ============================================================================
# Tools - Export
# ============================================================================


@mcp.tool()
async def export_campaign_csv(request: ExportCampaignRequest) -> dict[str, Any]:
    """
    Export campaigns to a Google Ads Editor CSV import file.

    Ads are repaired before export (formatting characters stripped, text
    truncated, missing headlines and descriptions filled in). Keywords are
    cleaned and deduplicated per campaign. Every row is validated and the
    export is refused with the full error list when any row is invalid.
    """
    try:
        structure = CampaignStructure(campaigns=request.campaigns)
        result = _get_exporter().export_campaign(structure, request.output_path)
        return _success_response(
            result,
            request.include_csv,
            f"Exported {result.row_count} rows for {len(request.campaigns)} campaign(s)",
        )
    except Exception as e:
        return _error_response(e, "Campaign export")


@mcp.tool()
async def export_keywords_csv(request: ExportKeywordsRequest) -> dict[str, Any]:
    """
    Export a keyword list to a Google Ads Editor CSV import file.

    Match types are read from the keyword notation: [exact], "phrase" or
    plain broad. Keywords are placed in a single campaign and ad group.
    """
    try:
        result = _get_exporter().export_keywords(
            request.keywords,
            campaign_name=request.campaign_name,
            ad_group_name=request.ad_group_name,
            output_path=request.output_path,
        )
        return _success_response(
            result,
            request.include_csv,
            f"Exported {result.row_type_counts.get(RowType.KEYWORD.value, 0)} keywords",
        )
    except Exception as e:
        return _error_response(e, "Keyword export")


@mcp.tool()
async def export_negative_keywords_csv(
    request: ExportNegativeKeywordsRequest,
) -> dict[str, Any]:
    """
    Export a negative keyword list to a Google Ads Editor CSV import file.

    A leading "-" is accepted and ignored. Criterion types are written as
    Negative Broad, Negative Phrase or Negative Exact.
    """
    try:
        result = _get_exporter().export_negative_keywords(
            request.negative_keywords,
            campaign_name=request.campaign_name,
            ad_group_name=request.ad_group_name,
            output_path=request.output_path,
        )
        negatives = result.row_type_counts.get(RowType.NEGATIVE_KEYWORD.value, 0)
        return _success_response(
            result, request.include_csv, f"Exported {negatives} negative keywords"
        )
    except Exception as e:
        return _error_response(e, "Negative keyword export")


@mcp.tool()
async def validate_ads(request: ValidateAdsRequest) -> dict[str, Any]:
    """
    Validate and repair responsive search ads without exporting them.

    Returns the repaired ads together with the fixes applied, copy
    warnings and an ad strength rating for each ad.
    """
    try:
        fixed_ads, report = validate_and_fix_ads(request.ads)
        return {
            "status": "success",
            "message": f"Validated {len(fixed_ads)} ad(s), auto-fixed {report.fixed}",
            "metadata": {
                "ad_count": len(fixed_ads),
                "fixed_count": report.fixed,
                "warning_count": len(report.warnings),
            },
            "data": {
                "ads": [
                    ad.model_dump(exclude_none=True, exclude_defaults=True)
                    for ad in fixed_ads
                ],
                "report": report.model_dump(),
                "summary": format_validation_report(report),
            },
        }
    except Exception as e:
        return _error_response(e, "Ad validation")


# ============================================================================
# Resources
# ============================================================================


@mcp.resource("resource://health")
def health_check() -> dict[str, Any]:
    """
    Provides server health status.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "server": "Ads Editor MCP Server",
        "tools_available": TOOLS_AVAILABLE,
    }


@mcp.resource("resource://config")
def get_config() -> dict[str, Any]:
    """
    Provides the server's export defaults and logging configuration.
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error(
            f"Configuration error: {sanitize_error_message(str(e))}", exc_info=True
        )
        return {
            "status": "error",
            "error_type": "ConfigurationError",
            "message": sanitize_error_message(str(e)),
        }
    return {"server_version": __version__, **settings.to_public_dict()}


@mcp.resource("resource://format/headers")
def get_format_headers() -> dict[str, Any]:
    """
    Provides the Google Ads Editor column layout and file requirements.
    """
    return {
        "headers": list(GoogleAdsEditorFormat.HEADERS),
        "column_count": GoogleAdsEditorFormat.COLUMN_COUNT,
        "row_types": [row_type.value for row_type in RowType],
        "encoding": GoogleAdsFileRequirements.ENCODING,
        "line_terminator": "CRLF",
        "byte_order_mark": GoogleAdsFileRequirements.INCLUDE_BOM,
        "max_rows_per_file": GoogleAdsFileRequirements.MAX_ROWS_PER_FILE,
    }


# ============================================================================
# Server Factory
# ============================================================================


def create_mcp_server() -> FastMCP:
    """
    Create and return the configured MCP server instance.

    Returns:
        FastMCP: The configured server instance ready to run.
    """
    return mcp


# ============================================================================
# Entry Point
# ============================================================================


def main() -> None:
    """Configure logging and run the MCP server over stdio."""
    setup_logging(get_settings())
    logger.info(f"Starting Ads Editor MCP Server v{__version__}")
    mcp.run()


if __name__ == "__main__":
    main()
