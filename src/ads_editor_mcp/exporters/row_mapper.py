"""Flatten a campaign structure into Google Ads Editor rows.

Row order matters to Google Ads Editor, which resolves parents by name:
every campaign row is followed by its location rows, then each ad group
with its keywords, ads and negative keywords, then the campaign's
sitelinks.
"""

import logging
import re
from dataclasses import dataclass, field

from ads_editor_mcp.core.config import ExportConfig
from ads_editor_mcp.exporters.ad_validator import (
    normalize_final_url,
    strip_formatting_artifacts,
    validate_and_fix_ads,
)
from ads_editor_mcp.models.campaign import Ad, AdGroup, Campaign, CampaignStructure
from ads_editor_mcp.models.editor_rows import (
    AdGroupRow,
    BaseEditorRow,
    CampaignRow,
    KeywordRow,
    LocationRow,
    NegativeKeywordRow,
    ResponsiveSearchAdRow,
    SitelinkRow,
)
from ads_editor_mcp.models.export_models import ValidationReport
from ads_editor_mcp.models.google_ads_formats import GoogleAdsFieldLimits
from ads_editor_mcp.models.keyword import (
    KeywordInput,
    KeywordSpec,
    clean_keyword_text,
    criterion_type,
    is_low_quality_keyword,
    keyword_text,
    resolve_keyword,
)

logger = logging.getLogger(__name__)

_WRAPPING_QUOTES = re.compile(r"^[\"']+|[\"']+$")
_BRACKETS = re.compile(r"[\[\]]")


def clean_ad_group_name(name: str | None) -> str:
    """Strip wrapping quotes and every bracket from an ad group name."""
    cleaned = (name or "").strip()
    cleaned = _WRAPPING_QUOTES.sub("", cleaned).strip()
    cleaned = _BRACKETS.sub("", cleaned)
    return " ".join(cleaned.split())


@dataclass
class _MappingState:
    """Dedup state for one ``map()`` call, keyed by campaign name."""

    seen_keywords: dict[str, set[str]] = field(default_factory=dict)
    ad_reports: list[ValidationReport] = field(default_factory=list)

    def keywords_for(self, campaign_name: str) -> set[str]:
        return self.seen_keywords.setdefault(campaign_name, set())


class CampaignRowMapper:
    """Builds typed editor rows from a CampaignStructure."""

    def __init__(self, config: ExportConfig | None = None):
        """
        Initialize the mapper.

        Args:
            config: Defaults for budgets, bids and campaign settings
        """
        self.config = config or ExportConfig()
        self.last_ad_reports: list[ValidationReport] = []

    def map(self, structure: CampaignStructure) -> list[BaseEditorRow]:
        """
        Convert a campaign structure to rows in editor order.

        Each call starts from empty dedup state.

        Args:
            structure: Campaigns to export

        Returns:
            Typed rows; ad validation reports are kept in ``last_ad_reports``
        """
        state = _MappingState()
        rows: list[BaseEditorRow] = []

        for campaign in structure.campaigns:
            name = (campaign.name or "").strip()
            if not name:
                logger.warning("Skipping campaign with empty name")
                continue
            rows.extend(self._map_campaign(campaign, name, state))

        self.last_ad_reports = state.ad_reports
        logger.info(
            f"Mapped {len(structure.campaigns)} campaign(s) to {len(rows)} row(s)"
        )
        return rows

    def _map_campaign(
        self, campaign: Campaign, name: str, state: _MappingState
    ) -> list[BaseEditorRow]:
        rows: list[BaseEditorRow] = [self._campaign_row(campaign, name)]
        rows.extend(self._location_rows(campaign, name))

        fallback_url = self._campaign_fallback_url(campaign)
        seen_keywords = state.keywords_for(name)
        ad_group_names: list[tuple[AdGroup, str]] = []

        for ad_group in campaign.ad_groups:
            ad_group_name = clean_ad_group_name(ad_group.name)
            if not ad_group_name:
                logger.warning(f"Skipping ad group with empty name in campaign '{name}'")
                continue
            ad_group_names.append((ad_group, ad_group_name))

            rows.append(
                AdGroupRow(
                    campaign=name,
                    ad_group=ad_group_name,
                    max_cpc=ad_group.default_max_cpc or self.config.default_max_cpc,
                )
            )
            rows.extend(
                self._keyword_rows(ad_group.keywords, name, ad_group_name, seen_keywords)
            )
            rows.extend(
                self._ad_rows(ad_group.ads, name, ad_group_name, fallback_url, state)
            )
            rows.extend(
                self._negative_keyword_rows(
                    ad_group.negative_keywords, name, ad_group_name, seen_keywords
                )
            )

        # Sitelinks go after all ad groups of the campaign
        for ad_group, ad_group_name in ad_group_names:
            rows.extend(
                self._sitelink_rows(ad_group.ads, name, ad_group_name, fallback_url)
            )

        return rows

    def _campaign_row(self, campaign: Campaign, name: str) -> CampaignRow:
        return CampaignRow(
            campaign=name,
            budget=campaign.budget or self.config.default_budget,
            budget_type=campaign.budget_type or self.config.default_budget_type,
            bid_strategy_type=campaign.bidding_strategy or self.config.default_bid_strategy,
            start_date=(campaign.start_date or "").strip(),
            end_date=(campaign.end_date or "").strip(),
            networks=self.config.networks,
            eu_political_ads=self.config.eu_political_ads,
            desktop_bid_adjustment=self.config.desktop_bid_adjustment,
            mobile_bid_adjustment=self.config.mobile_bid_adjustment,
            tablet_bid_adjustment=self.config.tablet_bid_adjustment,
            language=self.config.language,
        )

    def _location_rows(self, campaign: Campaign, name: str) -> list[LocationRow]:
        """One row per geo target: country, then states, cities and zip codes."""
        targets = [campaign.target_country or ""]
        targets.extend(campaign.states)
        targets.extend(campaign.cities)
        targets.extend(campaign.zip_codes)

        rows = []
        seen = set()
        for target in targets:
            location = target.strip()
            if not location or location.lower() in seen:
                continue
            seen.add(location.lower())
            rows.append(LocationRow(campaign=name, location=location))

        if campaign.regions:
            logger.debug(
                f"Campaign '{name}' has region targets, which have no location row"
            )
        return rows

    @staticmethod
    def _campaign_fallback_url(campaign: Campaign) -> str:
        """First final URL of any ad in the campaign."""
        for ad_group in campaign.ad_groups:
            for ad in ad_group.ads:
                url = normalize_final_url(ad.final_url)
                if url:
                    return url
        return ""

    def _keyword_rows(
        self,
        keywords: list[KeywordInput],
        campaign_name: str,
        ad_group_name: str,
        seen_keywords: set[str],
    ) -> list[KeywordRow]:
        rows = []
        for keyword in keywords:
            raw = keyword_text(keyword)
            # Match type comes from the raw text; cleaning removes the punctuation
            match_type, _ = resolve_keyword(keyword)
            text = clean_keyword_text(raw)

            if len(text) < GoogleAdsFieldLimits.KEYWORD_MIN:
                logger.debug(f"Skipping keyword too short to export: '{raw}'")
                continue
            if is_low_quality_keyword(text):
                logger.warning(f"Skipping low-quality keyword: '{text}'")
                continue
            text = text[: GoogleAdsFieldLimits.KEYWORD_MAX].strip()

            criterion = criterion_type(match_type)
            key = f"{text.lower()}::{criterion}"
            if key in seen_keywords:
                logger.warning(f"Skipping duplicate keyword: '{text}' ({criterion})")
                continue
            seen_keywords.add(key)

            spec = keyword if isinstance(keyword, KeywordSpec) else None
            rows.append(
                KeywordRow(
                    campaign=campaign_name,
                    ad_group=ad_group_name,
                    keyword=text,
                    criterion_type=criterion,
                    max_cpc=(spec.max_cpc or "") if spec else "",
                    final_url=(spec.final_url or "").strip() if spec else "",
                )
            )
        return rows

    def _negative_keyword_rows(
        self,
        negatives: list[KeywordInput],
        campaign_name: str,
        ad_group_name: str,
        seen_keywords: set[str],
    ) -> list[NegativeKeywordRow]:
        rows = []
        for negative in negatives:
            raw = keyword_text(negative)
            match_type, _ = resolve_keyword(negative)
            text = clean_keyword_text(raw)

            if len(text) < GoogleAdsFieldLimits.NEGATIVE_KEYWORD_MIN:
                logger.debug(f"Skipping negative keyword too short to export: '{raw}'")
                continue
            text = text[: GoogleAdsFieldLimits.KEYWORD_MAX].strip()

            criterion = criterion_type(match_type, negative=True)
            key = f"NEG::{text.lower()}::{criterion}"
            if key in seen_keywords:
                logger.warning(
                    f"Skipping duplicate negative keyword: '{text}' ({criterion})"
                )
                continue
            seen_keywords.add(key)

            rows.append(
                NegativeKeywordRow(
                    campaign=campaign_name,
                    ad_group=ad_group_name,
                    keyword=text,
                    criterion_type=criterion,
                )
            )
        return rows

    def _ad_rows(
        self,
        ads: list[Ad],
        campaign_name: str,
        ad_group_name: str,
        fallback_url: str,
        state: _MappingState,
    ) -> list[ResponsiveSearchAdRow]:
        if not ads:
            return []

        validated_ads, report = validate_and_fix_ads(ads)
        state.ad_reports.append(report)
        if report.fixed:
            logger.info(f"Auto-fixed {report.fixed} ad(s) in ad group '{ad_group_name}'")
            for detail in report.details:
                if detail.fixes:
                    logger.debug(f"  Ad {detail.ad_index + 1}: {', '.join(detail.fixes)}")

        group_url = next((ad.final_url for ad in validated_ads if ad.final_url), "")

        rows = []
        seen_content = set()
        for ad in validated_ads:
            if len(rows) >= GoogleAdsFieldLimits.MAX_ADS_PER_AD_GROUP:
                logger.warning(
                    f"Ad group '{ad_group_name}' has more than "
                    f"{GoogleAdsFieldLimits.MAX_ADS_PER_AD_GROUP} ads; extra ads skipped"
                )
                break

            headlines = ad.get_headlines()[: GoogleAdsFieldLimits.HEADLINE_SLOTS]
            descriptions = ad.get_descriptions()[: GoogleAdsFieldLimits.DESCRIPTION_SLOTS]
            final_url = ad.final_url or group_url or fallback_url

            content_key = "::".join(
                [*headlines[:3], *descriptions[:2], final_url]
            ).lower()
            if content_key in seen_content:
                logger.warning(f"Skipping duplicate ad content in ad group '{ad_group_name}'")
                continue
            seen_content.add(content_key)

            rows.append(
                ResponsiveSearchAdRow(
                    campaign=campaign_name,
                    ad_group=ad_group_name,
                    final_url=final_url,
                    final_mobile_url=(ad.final_mobile_url or "").strip(),
                    tracking_template=(ad.tracking_template or "").strip(),
                    custom_parameter=(ad.custom_parameters or "").strip(),
                    headlines=headlines,
                    descriptions=descriptions,
                    business_name=(ad.business_name or "").strip(),
                    path1=ad.path1 or "",
                    path2=ad.path2 or "",
                    phone=(ad.phone_number or "").strip(),
                    callouts=[c for c in ad.callouts if c][
                        : GoogleAdsFieldLimits.CALLOUT_SLOTS
                    ],
                )
            )
        return rows

    def _sitelink_rows(
        self,
        ads: list[Ad],
        campaign_name: str,
        ad_group_name: str,
        fallback_url: str,
    ) -> list[SitelinkRow]:
        rows = []
        for ad in ads:
            ad_url = normalize_final_url(ad.final_url)
            for slot, sitelink in enumerate(
                ad.sitelinks[: GoogleAdsFieldLimits.SITELINK_SLOTS], start=1
            ):
                text = strip_formatting_artifacts(sitelink.text)
                if not text:
                    continue
                rows.append(
                    SitelinkRow(
                        campaign=campaign_name,
                        ad_group=ad_group_name,
                        slot=slot,
                        text=text,
                        final_url=normalize_final_url(sitelink.url) or ad_url or fallback_url,
                        description1=(sitelink.description or "").strip(),
                        description2=(sitelink.description2 or "").strip(),
                    )
                )
        return rows


def campaign_structure_to_rows(
    structure: CampaignStructure, config: ExportConfig | None = None
) -> list[BaseEditorRow]:
    """Convert a campaign structure to editor rows with a fresh mapper."""
    return CampaignRowMapper(config).map(structure)
