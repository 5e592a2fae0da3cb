"""Typed Google Ads Editor rows.

Each row type is its own model holding only the fields that row type
populates. ``to_columns()`` projects a row onto the full column layout,
starting from a blank row so unrelated columns are always present and
empty.
"""

from typing import Annotated, Literal, Union

from pydantic import Field

from ads_editor_mcp.models.base import BaseExportModel
from ads_editor_mcp.models.google_ads_formats import (
    GoogleAdsEditorFormat,
    GoogleAdsFieldLimits,
    GoogleAdsStatus,
)


class BaseEditorRow(BaseExportModel):
    """Fields shared by every row type."""

    row_type: str
    action: str = GoogleAdsEditorFormat.ACTION_ADD
    campaign: str

    def to_columns(self) -> dict[str, str]:
        """Project this row onto every column of the editor layout."""
        columns = GoogleAdsEditorFormat.blank_row()
        columns["Row Type"] = self.row_type
        columns["Action"] = self.action
        columns["Campaign"] = self.campaign
        self._fill_columns(columns)
        return columns

    def _fill_columns(self, columns: dict[str, str]) -> None:
        raise NotImplementedError


class CampaignRow(BaseEditorRow):
    row_type: Literal["Campaign"] = "Campaign"
    status: str = GoogleAdsStatus.ENABLED.value
    campaign_type: str = GoogleAdsEditorFormat.CAMPAIGN_TYPE_SEARCH
    budget: str = ""
    budget_type: str = ""
    bid_strategy_type: str = ""
    start_date: str = ""
    end_date: str = ""
    networks: str = ""
    eu_political_ads: str = ""
    desktop_bid_adjustment: str = ""
    mobile_bid_adjustment: str = ""
    tablet_bid_adjustment: str = ""
    language: str = ""

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Campaign status"] = self.status
        columns["Campaign type"] = self.campaign_type
        columns["Budget"] = self.budget
        columns["Budget type"] = self.budget_type
        columns["Bid Strategy Type"] = self.bid_strategy_type
        columns["Start date"] = self.start_date
        columns["End date"] = self.end_date
        columns["Networks"] = self.networks
        columns["EU political ads"] = self.eu_political_ads
        columns["Desktop Bid adj."] = self.desktop_bid_adjustment
        columns["Mobile Bid adj."] = self.mobile_bid_adjustment
        columns["Tablet Bid adj."] = self.tablet_bid_adjustment
        columns["Language"] = self.language


class LocationRow(BaseEditorRow):
    row_type: Literal["Location"] = "Location"
    location: str

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Location"] = self.location


class AdGroupRow(BaseEditorRow):
    row_type: Literal["Ad group"] = "Ad group"
    ad_group: str
    status: str = GoogleAdsStatus.ENABLED.value
    max_cpc: str = ""

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Ad group"] = self.ad_group
        columns["Ad group status"] = self.status
        columns["Max CPC"] = self.max_cpc


class KeywordRow(BaseEditorRow):
    row_type: Literal["Keyword"] = "Keyword"
    ad_group: str
    keyword: str
    criterion_type: str
    max_cpc: str = ""
    final_url: str = ""

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Ad group"] = self.ad_group
        columns["Keyword"] = self.keyword
        columns["Criterion Type"] = self.criterion_type
        columns["Max CPC"] = self.max_cpc
        columns["Final URL"] = self.final_url


class ResponsiveSearchAdRow(BaseEditorRow):
    row_type: Literal["Responsive search ad"] = "Responsive search ad"
    ad_group: str
    ad_type: str = GoogleAdsEditorFormat.AD_TYPE_RSA
    final_url: str = ""
    final_mobile_url: str = ""
    tracking_template: str = ""
    custom_parameter: str = ""
    headlines: list[str] = Field(
        default_factory=list, max_length=GoogleAdsFieldLimits.HEADLINE_SLOTS
    )
    descriptions: list[str] = Field(
        default_factory=list, max_length=GoogleAdsFieldLimits.DESCRIPTION_SLOTS
    )
    business_name: str = ""
    path1: str = ""
    path2: str = ""
    phone: str = ""
    callouts: list[str] = Field(
        default_factory=list, max_length=GoogleAdsFieldLimits.CALLOUT_SLOTS
    )

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Ad group"] = self.ad_group
        columns["Ad Type"] = self.ad_type
        columns["Final URL"] = self.final_url
        columns["Final mobile URL"] = self.final_mobile_url
        columns["Tracking template"] = self.tracking_template
        columns["Custom parameter"] = self.custom_parameter
        for slot, headline in enumerate(self.headlines, start=1):
            columns[f"Headline {slot}"] = headline
        for slot, description in enumerate(self.descriptions, start=1):
            columns[f"Description {slot}"] = description
        columns["Business name"] = self.business_name
        columns["Path 1"] = self.path1
        columns["Path 2"] = self.path2
        columns["Phone"] = self.phone
        for slot, callout in enumerate(self.callouts, start=1):
            columns[f"Callout {slot}"] = callout


class NegativeKeywordRow(BaseEditorRow):
    row_type: Literal["Negative keyword"] = "Negative keyword"
    ad_group: str = ""
    keyword: str
    criterion_type: str

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Ad group"] = self.ad_group
        columns["Keyword"] = self.keyword
        columns["Criterion Type"] = self.criterion_type


class SitelinkRow(BaseEditorRow):
    row_type: Literal["Sitelink"] = "Sitelink"
    ad_group: str = ""
    slot: int = Field(default=1, ge=1, le=GoogleAdsFieldLimits.SITELINK_SLOTS)
    text: str
    final_url: str = ""
    description1: str = ""
    description2: str = ""

    def _fill_columns(self, columns: dict[str, str]) -> None:
        columns["Ad group"] = self.ad_group
        columns[f"Sitelink text {self.slot}"] = self.text
        columns[f"Sitelink final URL {self.slot}"] = self.final_url
        # Only the first slot has description columns
        if self.slot == 1:
            columns["Sitelink description 1"] = self.description1
            columns["Sitelink description 2"] = self.description2


EditorRow = Annotated[
    Union[
        CampaignRow,
        LocationRow,
        AdGroupRow,
        KeywordRow,
        ResponsiveSearchAdRow,
        NegativeKeywordRow,
        SitelinkRow,
    ],
    Field(discriminator="row_type"),
]
