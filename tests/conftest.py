"""Pytest configuration and shared fixtures."""

import pytest

from ads_editor_mcp.core.config import ExportConfig, get_settings
from ads_editor_mcp.models.campaign import CampaignStructure


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment changes apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def export_config() -> ExportConfig:
    return ExportConfig()


@pytest.fixture
def plumber_campaign_data() -> dict:
    """Campaign with a duplicate keyword and a one-headline ad."""
    return {
        "campaigns": [
            {
                "name": "Test Campaign",
                "ad_groups": [
                    {
                        "name": "Group A",
                        "keywords": ["plumber", "[emergency plumber]", "plumber"],
                        "ads": [
                            {"headline1": "Fix It Fast", "final_url": "example.com"}
                        ],
                    }
                ],
            }
        ]
    }


@pytest.fixture
def plumber_structure(plumber_campaign_data) -> CampaignStructure:
    return CampaignStructure.model_validate(plumber_campaign_data)


@pytest.fixture
def full_ad_data() -> dict:
    """A complete responsive search ad."""
    return {
        "type": "rsa",
        "headlines": [
            "Licensed Local Plumbers",
            "Same Day Drain Repair",
            "Call For A Free Quote",
        ],
        "descriptions": [
            "Fast, friendly plumbing repairs from licensed technicians.",
            "Upfront pricing on water heaters, drains and leak detection.",
        ],
        "final_url": "https://example.com/plumbing",
        "path1": "plumbing",
        "path2": "repair",
    }
