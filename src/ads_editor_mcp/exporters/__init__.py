"""Google Ads Editor export pipeline."""

from .ad_validator import (
    format_validation_report,
    validate_and_fix_ad,
    validate_and_fix_ads,
)
from .google_ads_editor_exporter import (
    GoogleAdsEditorExporter,
    export_campaign,
    export_keywords,
    export_negative_keywords,
)
from .row_mapper import CampaignRowMapper, campaign_structure_to_rows
from .validators import validate_csv_rows

__all__ = [
    "CampaignRowMapper",
    "GoogleAdsEditorExporter",
    "campaign_structure_to_rows",
    "export_campaign",
    "export_keywords",
    "export_negative_keywords",
    "format_validation_report",
    "validate_and_fix_ad",
    "validate_and_fix_ads",
    "validate_csv_rows",
]
