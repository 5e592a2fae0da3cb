"""Tests for MCP server functionality."""

import pytest

from ads_editor_mcp.models.google_ads_formats import GoogleAdsEditorFormat


def test_create_mcp_server():
    """Test that the MCP server can be created."""
    from ads_editor_mcp.server import create_mcp_server

    server = create_mcp_server()
    assert server is not None
    assert server.name == "Ads Editor MCP Server"


def test_mcp_server_has_tools():
    """Test that the MCP server has the expected tools registered."""
    from ads_editor_mcp.server import create_mcp_server

    server = create_mcp_server()

    # FastMCP uses an internal registry
    assert hasattr(server, "_tool_manager")


def test_mcp_server_has_resources():
    """Test that the MCP server has resources registered."""
    from ads_editor_mcp.server import create_mcp_server

    server = create_mcp_server()

    assert hasattr(server, "_resource_manager")


def test_package_exports_server_factory():
    """Test that the package root exposes the server factory."""
    import ads_editor_mcp

    assert ads_editor_mcp.__version__ == "1.0.0"
    assert ads_editor_mcp.create_mcp_server().name == "Ads Editor MCP Server"


# ============================================================================
# Request Models
# ============================================================================


def test_export_campaign_request_model():
    """Test ExportCampaignRequest parses nested campaign data."""
    from ads_editor_mcp.server import ExportCampaignRequest

    request = ExportCampaignRequest.model_validate(
        {
            "campaigns": [
                {
                    "campaignName": "Plumbing",
                    "adGroups": [{"name": "Drains", "keywords": ["drain cleaning"]}],
                }
            ]
        }
    )

    assert request.campaigns[0].name == "Plumbing"
    assert request.campaigns[0].ad_groups[0].keywords == ["drain cleaning"]
    assert request.output_path is None
    assert request.include_csv is True


def test_keyword_request_models():
    """Test keyword request models accept strings and structured keywords."""
    from ads_editor_mcp.server import (
        ExportKeywordsRequest,
        ExportNegativeKeywordsRequest,
    )

    request = ExportKeywordsRequest(
        keywords=["plumber", {"text": "drain cleaning", "match_type": "Exact"}]
    )
    assert request.keywords[0] == "plumber"
    assert request.keywords[1].match_type == "Exact"
    assert request.campaign_name is None

    negatives = ExportNegativeKeywordsRequest(negative_keywords=["free"])
    assert negatives.negative_keywords == ["free"]
    assert negatives.ad_group_name is None


def test_validate_ads_request_model():
    """Test ValidateAdsRequest parses ads."""
    from ads_editor_mcp.server import ValidateAdsRequest

    request = ValidateAdsRequest(ads=[{"headline1": "Fix It Fast"}])
    assert request.ads[0].headline1 == "Fix It Fast"


# ============================================================================
# Helpers
# ============================================================================


def test_error_code_enum():
    """Test that ErrorCode enum is properly defined."""
    from ads_editor_mcp.server import ErrorCode

    assert ErrorCode.CSV_VALIDATION_FAILED == "CSV_VALIDATION_FAILED"
    assert hasattr(ErrorCode, "INVALID_INPUT")
    assert hasattr(ErrorCode, "INTERNAL_ERROR")


@pytest.mark.parametrize(
    "message,expected",
    [
        ("user@example.com export failed", "[EMAIL_REDACTED] export failed"),
        ("account 1234567890 missing", "account [CUSTOMER_ID_REDACTED] missing"),
        ("token=abc123 rejected", "token=[REDACTED] rejected"),
        ("key ABCDEFGHIJKLMNOPQRSTUVWXYZ leaked", "key [REDACTED] leaked"),
        ("Row 3: Final URL is required", "Row 3: Final URL is required"),
    ],
)
def test_sanitize_error_message(message, expected):
    """Test credential redaction in error messages."""
    from ads_editor_mcp.server import sanitize_error_message

    assert sanitize_error_message(message) == expected


# ============================================================================
# Resources
# ============================================================================


def test_health_check():
    """Test health check resource content."""
    from ads_editor_mcp.server import TOOLS_AVAILABLE, health_check

    health = health_check.fn()

    assert health["status"] == "healthy"
    assert health["version"] == "1.0.0"
    assert health["tools_available"] == TOOLS_AVAILABLE


def test_get_config(monkeypatch):
    """Test configuration resource exposes export defaults."""
    from ads_editor_mcp.server import get_config

    monkeypatch.setenv("ADS_EDITOR_EXPORT__DEFAULT_BUDGET", "300")

    config = get_config.fn()

    assert config["server_version"] == "1.0.0"
    assert config["export"]["default_budget"] == "300"


def test_get_config_with_invalid_settings(monkeypatch):
    """Test configuration resource reports invalid settings."""
    from ads_editor_mcp.server import get_config

    monkeypatch.setenv("ADS_EDITOR_EXPORT__DEFAULT_BUDGET", "plenty")

    config = get_config.fn()

    assert config["status"] == "error"
    assert config["error_type"] == "ConfigurationError"


def test_format_headers():
    """Test header layout resource."""
    from ads_editor_mcp.server import get_format_headers

    layout = get_format_headers.fn()

    assert layout["headers"][:3] == ["Row Type", "Action", "Campaign"]
    assert layout["column_count"] == GoogleAdsEditorFormat.COLUMN_COUNT
    assert len(layout["headers"]) == layout["column_count"]
    assert "Responsive search ad" in layout["row_types"]
    assert layout["line_terminator"] == "CRLF"
