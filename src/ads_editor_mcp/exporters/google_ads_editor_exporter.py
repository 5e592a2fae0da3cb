"""Google Ads Editor export service.

Every export runs the same pipeline: map the campaign structure to rows,
validate all rows, then serialize. Nothing is serialized or written when
validation finds an error.
"""

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from ads_editor_mcp.core.config import ExportConfig
from ads_editor_mcp.core.exceptions import CSVValidationError, ExportError
from ads_editor_mcp.exporters.formatters import EditorCSVFormatter
from ads_editor_mcp.exporters.row_mapper import CampaignRowMapper
from ads_editor_mcp.exporters.validators import validate_csv_rows
from ads_editor_mcp.models.campaign import AdGroup, Campaign, CampaignStructure
from ads_editor_mcp.models.export_models import ExportResult
from ads_editor_mcp.models.google_ads_formats import GoogleAdsFileRequirements
from ads_editor_mcp.models.keyword import KeywordInput, KeywordSpec

logger = logging.getLogger(__name__)

KeywordList = Sequence[KeywordInput | Mapping[str, Any]]


class GoogleAdsEditorExporter:
    """Produces validated Google Ads Editor CSV files."""

    def __init__(self, config: ExportConfig | None = None):
        """
        Initialize the exporter.

        Args:
            config: Export defaults; library defaults when not given
        """
        self.config = config or ExportConfig()
        self.formatter = EditorCSVFormatter()

    def export_campaign(
        self,
        structure: CampaignStructure | Mapping[str, Any],
        output_path: str | Path | None = None,
    ) -> ExportResult:
        """
        Export a full campaign structure.

        Args:
            structure: Campaigns with ad groups, keywords, ads and negatives
            output_path: Optional file to write the CSV bytes to

        Returns:
            ExportResult with the CSV content and validation details

        Raises:
            CSVValidationError: If any row fails validation
        """
        if not isinstance(structure, CampaignStructure):
            structure = CampaignStructure.model_validate(structure)
        return self._export(structure, output_path)

    def export_keywords(
        self,
        keywords: KeywordList,
        campaign_name: str | None = None,
        ad_group_name: str | None = None,
        output_path: str | Path | None = None,
    ) -> ExportResult:
        """
        Export a flat keyword list under a single campaign and ad group.

        Args:
            keywords: Keyword strings or keyword specs
            campaign_name: Defaults to "Keyword Campaign"
            ad_group_name: Defaults to "All Keywords"
            output_path: Optional file to write the CSV bytes to
        """
        ad_group = AdGroup(
            name=ad_group_name or self.config.keyword_ad_group_name,
            keywords=_keyword_inputs(keywords),
        )
        structure = CampaignStructure(
            campaigns=[
                Campaign(
                    name=campaign_name or self.config.keyword_campaign_name,
                    ad_groups=[ad_group],
                )
            ]
        )
        return self._export(structure, output_path)

    def export_negative_keywords(
        self,
        negative_keywords: KeywordList,
        campaign_name: str | None = None,
        ad_group_name: str | None = None,
        output_path: str | Path | None = None,
    ) -> ExportResult:
        """
        Export a flat negative keyword list under a single campaign and ad group.

        Args:
            negative_keywords: Negative keyword strings or keyword specs
            campaign_name: Defaults to "Negative Keywords Campaign"
            ad_group_name: Defaults to "All Ad Groups"
            output_path: Optional file to write the CSV bytes to
        """
        ad_group = AdGroup(
            name=ad_group_name or self.config.negative_ad_group_name,
            negative_keywords=_keyword_inputs(negative_keywords),
        )
        structure = CampaignStructure(
            campaigns=[
                Campaign(
                    name=campaign_name or self.config.negative_campaign_name,
                    ad_groups=[ad_group],
                )
            ]
        )
        return self._export(structure, output_path)

    def _export(
        self, structure: CampaignStructure, output_path: str | Path | None
    ) -> ExportResult:
        mapper = CampaignRowMapper(self.config)
        rows = mapper.map(structure)

        validation = validate_csv_rows(rows)
        if not validation.is_valid:
            logger.error(
                f"Export refused: {len(validation.errors)} validation error(s)"
            )
            raise CSVValidationError.from_errors(validation.errors)

        if len(rows) > GoogleAdsFileRequirements.MAX_ROWS_PER_FILE:
            raise ExportError(
                f"Export has {len(rows)} rows, more than the "
                f"{GoogleAdsFileRequirements.MAX_ROWS_PER_FILE} allowed per file"
            )

        csv_content = self.formatter.format_to_csv(rows)
        result = ExportResult(
            csv_content=csv_content,
            row_count=len(rows),
            row_type_counts=dict(Counter(row.row_type for row in rows)),
            validation=validation,
            ad_reports=mapper.last_ad_reports,
        )

        if output_path is not None:
            path = Path(output_path)
            path.write_bytes(result.to_bytes())
            result.output_path = str(path)
            logger.info(f"Wrote {len(rows)} rows to {path}")
        else:
            logger.info(f"Exported {len(rows)} rows")

        return result


def _keyword_inputs(keywords: KeywordList) -> list[KeywordInput]:
    """Accept plain dicts alongside strings and KeywordSpec objects."""
    return [
        KeywordSpec.model_validate(k) if isinstance(k, Mapping) else k
        for k in keywords
    ]


def export_campaign(
    structure: CampaignStructure | Mapping[str, Any],
    output_path: str | Path | None = None,
    config: ExportConfig | None = None,
) -> ExportResult:
    """Export a full campaign structure with a fresh exporter."""
    return GoogleAdsEditorExporter(config).export_campaign(structure, output_path)


def export_keywords(
    keywords: KeywordList,
    campaign_name: str = "Keyword Campaign",
    ad_group_name: str = "All Keywords",
    output_path: str | Path | None = None,
    config: ExportConfig | None = None,
) -> ExportResult:
    """Export a flat keyword list with a fresh exporter."""
    return GoogleAdsEditorExporter(config).export_keywords(
        keywords, campaign_name, ad_group_name, output_path
    )


def export_negative_keywords(
    negative_keywords: KeywordList,
    campaign_name: str = "Negative Keywords Campaign",
    ad_group_name: str = "All Ad Groups",
    output_path: str | Path | None = None,
    config: ExportConfig | None = None,
) -> ExportResult:
    """Export a flat negative keyword list with a fresh exporter."""
    return GoogleAdsEditorExporter(config).export_negative_keywords(
        negative_keywords, campaign_name, ad_group_name, output_path
    )
