"""Google Ads Editor import format specifications."""

from enum import Enum


class GoogleAdsFieldLimits:
    """Field length and count limits for Google Ads Editor imports."""

    KEYWORD_MAX = 80  # Keyword text max length
    KEYWORD_MIN = 3
    NEGATIVE_KEYWORD_MIN = 2
    HEADLINE_MAX = 30
    DESCRIPTION_MAX = 90
    PATH_MAX = 15
    CALLOUT_MAX = 25
    URL_MAX = 2048

    HEADLINE_SLOTS = 15
    DESCRIPTION_SLOTS = 4
    CALLOUT_SLOTS = 4
    SITELINK_SLOTS = 4

    HEADLINE_MIN_COUNT = 3
    DESCRIPTION_MIN_COUNT = 2
    MAX_ADS_PER_AD_GROUP = 3


class RowType(str, Enum):
    """Valid values of the Row Type column."""

    CAMPAIGN = "Campaign"
    LOCATION = "Location"
    AD_GROUP = "Ad group"
    KEYWORD = "Keyword"
    RESPONSIVE_SEARCH_AD = "Responsive search ad"
    NEGATIVE_KEYWORD = "Negative keyword"
    SITELINK = "Sitelink"
    CALLOUT = "Callout"
    STRUCTURED_SNIPPET = "Structured snippet"
    CALL = "Call"


class MatchType(str, Enum):
    """Keyword match types."""

    BROAD = "Broad"
    PHRASE = "Phrase"
    EXACT = "Exact"


class CriterionType(str, Enum):
    """Valid values of the Criterion Type column."""

    BROAD = "Broad"
    PHRASE = "Phrase"
    EXACT = "Exact"
    NEGATIVE_BROAD = "Negative Broad"
    NEGATIVE_PHRASE = "Negative Phrase"
    NEGATIVE_EXACT = "Negative Exact"


POSITIVE_CRITERION_TYPES = (
    CriterionType.BROAD,
    CriterionType.PHRASE,
    CriterionType.EXACT,
)

NEGATIVE_CRITERION_TYPES = (
    CriterionType.NEGATIVE_BROAD,
    CriterionType.NEGATIVE_PHRASE,
    CriterionType.NEGATIVE_EXACT,
)


class AdType(str, Enum):
    """Ad formats accepted from upstream ad builders."""

    RSA = "rsa"
    DKI = "dki"
    CALL_ONLY = "callonly"


class BudgetType(str, Enum):
    """Campaign budget periods."""

    DAILY = "Daily"


class GoogleAdsStatus(str, Enum):
    """Valid statuses for Google Ads entities."""

    ENABLED = "Enabled"
    PAUSED = "Paused"
    REMOVED = "Removed"


class GoogleAdsEditorFormat:
    """Column layout and fixed values of the Google Ads Editor CSV."""

    ACTION_ADD = "Add"
    CAMPAIGN_TYPE_SEARCH = "Search"
    AD_TYPE_RSA = "Responsive search ad"

    HEADERS = (
        "Row Type",
        "Action",
        "Campaign",
        "Campaign ID",
        "Campaign status",
        "Campaign type",
        "Budget",
        "Budget ID",
        "Budget type",
        "Bid Strategy Type",
        "Start date",
        "End date",
        "Networks",
        "EU political ads",
        "Desktop Bid adj.",
        "Mobile Bid adj.",
        "Tablet Bid adj.",
        "Location",
        "Location ID",
        "Language",
        "Ad group",
        "Ad group ID",
        "Ad group status",
        "Ad Type",
        "Max CPC",
        "Max CPM",
        "Max CPV",
        "Bid Strategy",
        "Keyword",
        "Criterion Type",
        "Final URL",
        "Final mobile URL",
        "Tracking template",
        "Custom parameter",
        "Final URL suffix",
        *(f"Headline {i}" for i in range(1, 16)),
        *(f"Description {i}" for i in range(1, 5)),
        "Business name",
        "Path 1",
        "Path 2",
        "Display URL",
        "Phone",
        "Phone country code",
        "Call tracked",
        "Call conversion action",
        "Image asset ID",
        "Image URL",
        "Image asset name",
        "Video asset ID",
        "Video URL",
        "Video asset name",
        *(f"Callout {i}" for i in range(1, 5)),
        "Structured snippet header",
        *(f"Structured snippet value {i}" for i in range(1, 7)),
        "Price asset name",
        *(f"Price table header {i}" for i in range(1, 4)),
        *(f"Price table row1 col{i}" for i in range(1, 4)),
        "Promotion ID",
        "Promotion final URL",
        "Promotion percent off",
        "Promotion money amount off",
        "Promotion currency code",
        "Promotion start date",
        "Promotion end date",
        "Lead form asset ID",
        "Lead form name",
        "Lead form final URL",
        "Sitelink text 1",
        "Sitelink final URL 1",
        "Sitelink description 1",
        "Sitelink description 2",
        "Sitelink text 2",
        "Sitelink final URL 2",
        "Sitelink text 3",
        "Sitelink final URL 3",
        "Sitelink text 4",
        "Sitelink final URL 4",
        "Sitelink tracking template",
        "Sitelink final mobile URL",
        "Audience list",
        "Audience list action",
        "Label",
        "Tracking ID",
        "Customer ID",
        "Device preference",
    )
    COLUMN_COUNT = len(HEADERS)

    @staticmethod
    def blank_row() -> dict[str, str]:
        """Every column of the layout, in order, set to an empty string."""
        return dict.fromkeys(GoogleAdsEditorFormat.HEADERS, "")

    @staticmethod
    def headline_column(slot: int) -> str:
        return f"Headline {slot}"

    @staticmethod
    def description_column(slot: int) -> str:
        return f"Description {slot}"


class GoogleAdsFileRequirements:
    """File requirements for Google Ads Editor imports."""

    MAX_ROWS_PER_FILE = 100000
    ENCODING = "utf-8"
    DELIMITER = ","
    QUOTE_CHAR = '"'
    LINE_TERMINATOR = "\r\n"  # Windows-style for Google Ads Editor
    INCLUDE_BOM = True
    BOM = "\ufeff"
