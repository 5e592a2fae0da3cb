"""Campaign structure models accepted by the exporter."""

from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from ads_editor_mcp.models.base import BaseExportModel, coerce_to_str
from ads_editor_mcp.models.google_ads_formats import (
    AdType,
    BudgetType,
    GoogleAdsFieldLimits,
)
from ads_editor_mcp.models.keyword import KeywordInput


class Sitelink(BaseExportModel):
    """Sitelink asset attached to an ad."""

    text: str = Field(default="", description="Link text")
    url: str | None = Field(
        None,
        validation_alias=AliasChoices("url", "final_url", "finalUrl", "finalURL"),
        description="Link destination; falls back to the ad's final URL",
    )
    description: str | None = Field(
        None, validation_alias=AliasChoices("description", "description1")
    )
    description2: str | None = Field(None)


class Ad(BaseExportModel):
    """Ad as produced by upstream ad builders.

    Headlines and descriptions arrive either as numbered fields
    (``headline1`` .. ``headline15``, ``description1`` .. ``description4``)
    or as ``headlines`` / ``descriptions`` arrays. A non-empty array takes
    precedence over the numbered fields.
    """

    type: AdType | None = Field(None, description="Ad format (rsa, dki, callonly)")

    headline1: str | None = None
    headline2: str | None = None
    headline3: str | None = None
    headline4: str | None = None
    headline5: str | None = None
    headline6: str | None = None
    headline7: str | None = None
    headline8: str | None = None
    headline9: str | None = None
    headline10: str | None = None
    headline11: str | None = None
    headline12: str | None = None
    headline13: str | None = None
    headline14: str | None = None
    headline15: str | None = None

    description1: str | None = None
    description2: str | None = None
    description3: str | None = None
    description4: str | None = None

    headlines: list[str] | None = None
    descriptions: list[str] | None = None

    final_url: str | None = Field(
        None, validation_alias=AliasChoices("final_url", "finalUrl", "finalURL")
    )
    final_mobile_url: str | None = Field(
        None, validation_alias=AliasChoices("final_mobile_url", "finalMobileUrl")
    )
    tracking_template: str | None = Field(
        None, validation_alias=AliasChoices("tracking_template", "trackingTemplate")
    )
    custom_parameters: str | None = Field(
        None, validation_alias=AliasChoices("custom_parameters", "customParameters")
    )
    path1: str | None = None
    path2: str | None = None
    business_name: str | None = Field(
        None, validation_alias=AliasChoices("business_name", "businessName")
    )
    phone_number: str | None = Field(
        None, validation_alias=AliasChoices("phone_number", "phoneNumber", "phone")
    )

    sitelinks: list[Sitelink] = Field(default_factory=list)
    callouts: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fold_extensions(cls, data: Any) -> Any:
        """Fold the legacy ``extensions`` list into sitelinks and callouts."""
        if not isinstance(data, dict) or not data.get("extensions"):
            return data

        data = dict(data)
        sitelinks = list(data.get("sitelinks") or [])
        callouts = list(data.get("callouts") or [])
        for extension in data.pop("extensions"):
            if not isinstance(extension, dict):
                continue
            extension_type = str(
                extension.get("extensionType") or extension.get("extension_type") or ""
            ).lower()
            if extension_type == "sitelink":
                sitelinks.extend(extension.get("sitelinks") or [])
            elif extension_type == "callout":
                if extension.get("text"):
                    callouts.append(extension["text"])
                callouts.extend(extension.get("callouts") or [])

        data["sitelinks"] = sitelinks
        data["callouts"] = callouts
        return data

    @field_validator("callouts", mode="before")
    @classmethod
    def drop_empty_callouts(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [c for c in v if isinstance(c, str) and c.strip()]
        return v

    def numbered_headlines(self) -> list[str | None]:
        return [
            getattr(self, f"headline{slot}")
            for slot in range(1, GoogleAdsFieldLimits.HEADLINE_SLOTS + 1)
        ]

    def numbered_descriptions(self) -> list[str | None]:
        return [
            getattr(self, f"description{slot}")
            for slot in range(1, GoogleAdsFieldLimits.DESCRIPTION_SLOTS + 1)
        ]

    def get_headlines(self) -> list[str]:
        """Non-empty headlines, from the array when present."""
        source = self.headlines if self.headlines else self.numbered_headlines()
        return [h.strip() for h in source if h and h.strip()]

    def get_descriptions(self) -> list[str]:
        """Non-empty descriptions, from the array when present."""
        source = self.descriptions if self.descriptions else self.numbered_descriptions()
        return [d.strip() for d in source if d and d.strip()]

    def set_headlines(self, values: list[str]) -> None:
        """Write headlines back in the form the ad arrived in.

        Numbered fields are re-packed from slot 1 and unused slots cleared.
        """
        if self.headlines:
            self.headlines = list(values)
            return
        for slot in range(1, GoogleAdsFieldLimits.HEADLINE_SLOTS + 1):
            value = values[slot - 1] if slot <= len(values) else None
            setattr(self, f"headline{slot}", value)

    def set_descriptions(self, values: list[str]) -> None:
        """Write descriptions back in the form the ad arrived in."""
        if self.descriptions:
            self.descriptions = list(values)
            return
        for slot in range(1, GoogleAdsFieldLimits.DESCRIPTION_SLOTS + 1):
            value = values[slot - 1] if slot <= len(values) else None
            setattr(self, f"description{slot}", value)


class AdGroup(BaseExportModel):
    """Ad group with its keywords, ads and negative keywords."""

    name: str = Field(
        default="",
        validation_alias=AliasChoices(
            "name", "adgroup_name", "ad_group_name", "adGroupName"
        ),
    )
    default_max_cpc: str | None = Field(
        None,
        validation_alias=AliasChoices(
            "default_max_cpc", "defaultMaxCpc", "max_cpc", "maxCPC"
        ),
    )
    keywords: list[KeywordInput] = Field(default_factory=list)
    ads: list[Ad] = Field(default_factory=list)
    negative_keywords: list[KeywordInput] = Field(
        default_factory=list,
        validation_alias=AliasChoices("negative_keywords", "negativeKeywords"),
    )

    @field_validator("default_max_cpc", mode="before")
    @classmethod
    def coerce_max_cpc(cls, v: Any) -> Any:
        return coerce_to_str(v)


class Campaign(BaseExportModel):
    """Search campaign with budget, bidding, geo targets and ad groups."""

    name: str = Field(
        default="",
        validation_alias=AliasChoices("name", "campaign_name", "campaignName"),
    )
    budget: str | None = Field(None, description="Budget amount; config default when empty")
    budget_type: BudgetType | None = Field(
        None, validation_alias=AliasChoices("budget_type", "budgetType")
    )
    bidding_strategy: str | None = Field(
        None, validation_alias=AliasChoices("bidding_strategy", "biddingStrategy")
    )
    start_date: str | None = Field(
        None,
        validation_alias=AliasChoices("start_date", "startDate"),
        description="YYYY-MM-DD",
    )
    end_date: str | None = Field(
        None,
        validation_alias=AliasChoices("end_date", "endDate"),
        description="YYYY-MM-DD",
    )

    target_country: str | None = Field(
        None, validation_alias=AliasChoices("target_country", "targetCountry")
    )
    zip_codes: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("zip_codes", "zipCodes"),
    )
    cities: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    regions: list[str] = Field(default_factory=list)

    ad_groups: list[AdGroup] = Field(
        default_factory=list,
        validation_alias=AliasChoices("ad_groups", "adgroups", "adGroups"),
    )

    @field_validator("budget", mode="before")
    @classmethod
    def coerce_budget(cls, v: Any) -> Any:
        return coerce_to_str(v)

    @field_validator("budget_type", mode="before")
    @classmethod
    def normalize_budget_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().capitalize() or None
        return v

    @field_validator("zip_codes", "cities", "states", "regions", mode="before")
    @classmethod
    def listify_geo_targets(cls, v: Any) -> Any:
        """Accept a single value where a list is expected."""
        if v is None:
            return []
        if isinstance(v, (str, int)):
            return [str(v)]
        if isinstance(v, list):
            return [str(item) for item in v if item is not None]
        return v


class CampaignStructure(BaseExportModel):
    """Root of an export: campaigns in output order."""

    campaigns: list[Campaign] = Field(default_factory=list)
