"""Unit tests for mapping campaign structures to editor rows."""

from ads_editor_mcp.core.config import ExportConfig
from ads_editor_mcp.exporters.row_mapper import (
    CampaignRowMapper,
    campaign_structure_to_rows,
    clean_ad_group_name,
)
from ads_editor_mcp.models.campaign import CampaignStructure
from ads_editor_mcp.models.editor_rows import (
    AdGroupRow,
    CampaignRow,
    KeywordRow,
    LocationRow,
    NegativeKeywordRow,
    ResponsiveSearchAdRow,
    SitelinkRow,
)
from ads_editor_mcp.models.google_ads_formats import GoogleAdsEditorFormat


def _structure(*ad_groups, **campaign_fields) -> CampaignStructure:
    campaign = {"name": "Test Campaign", "ad_groups": list(ad_groups), **campaign_fields}
    return CampaignStructure.model_validate({"campaigns": [campaign]})


def _ad(headline: str, url: str | None = "https://example.com") -> dict:
    return {
        "headlines": [headline, "Licensed Technicians", "Call For A Free Quote"],
        "descriptions": [
            "Fast, friendly plumbing repairs.",
            "Upfront pricing on every job.",
        ],
        "final_url": url,
    }


def _of_type(rows, row_class):
    return [row for row in rows if isinstance(row, row_class)]


class TestRoundTrip:
    """Test the full mapping of a small campaign."""

    def test_plumber_campaign(self, plumber_structure):
        rows = campaign_structure_to_rows(plumber_structure)

        assert [type(row) for row in rows] == [
            CampaignRow,
            AdGroupRow,
            KeywordRow,
            KeywordRow,
            ResponsiveSearchAdRow,
        ]

        keywords = _of_type(rows, KeywordRow)
        assert [(k.keyword, k.criterion_type) for k in keywords] == [
            ("plumber", "Broad"),
            ("emergency plumber", "Exact"),
        ]

        ad = _of_type(rows, ResponsiveSearchAdRow)[0]
        assert ad.headlines == ["Fix It Fast", "Expert Solutions", "Quality Guaranteed"]
        assert ad.descriptions == [
            "Get professional service you can trust.",
            "Contact us today for expert assistance.",
        ]
        assert ad.final_url == "https://example.com"
        assert ad.campaign == "Test Campaign"
        assert ad.ad_group == "Group A"

    def test_campaign_row_defaults(self, plumber_structure):
        campaign_row = campaign_structure_to_rows(plumber_structure)[0]

        assert campaign_row.budget == "100"
        assert campaign_row.budget_type == "Daily"
        assert campaign_row.bid_strategy_type == "Manual CPC"
        assert campaign_row.language == "en"
        assert campaign_row.networks == "Google search"

    def test_config_overrides_defaults(self, plumber_structure):
        config = ExportConfig(default_budget="250", default_max_cpc="3.00")
        rows = campaign_structure_to_rows(plumber_structure, config)

        assert rows[0].budget == "250"
        assert _of_type(rows, AdGroupRow)[0].max_cpc == "3.00"

    def test_every_row_projects_to_full_layout(self, plumber_structure):
        for row in campaign_structure_to_rows(plumber_structure):
            assert len(row.to_columns()) == GoogleAdsEditorFormat.COLUMN_COUNT


class TestKeywords:
    """Test keyword cleaning, filtering and deduplication."""

    def test_unique_per_campaign_across_ad_groups(self):
        structure = _structure(
            {"name": "Group A", "keywords": ["plumber", "drain cleaning"]},
            {"name": "Group B", "keywords": ["Plumber", "[plumber]"]},
        )

        keywords = _of_type(campaign_structure_to_rows(structure), KeywordRow)

        assert [(k.ad_group, k.keyword, k.criterion_type) for k in keywords] == [
            ("Group A", "plumber", "Broad"),
            ("Group A", "drain cleaning", "Broad"),
            ("Group B", "plumber", "Exact"),
        ]

    def test_same_keyword_allowed_in_other_campaign(self):
        structure = CampaignStructure.model_validate(
            {
                "campaigns": [
                    {"name": "One", "ad_groups": [{"name": "G", "keywords": ["plumber"]}]},
                    {"name": "Two", "ad_groups": [{"name": "G", "keywords": ["plumber"]}]},
                ]
            }
        )

        keywords = _of_type(campaign_structure_to_rows(structure), KeywordRow)
        assert [k.campaign for k in keywords] == ["One", "Two"]

    def test_low_quality_and_short_keywords_dropped(self):
        structure = _structure(
            {"name": "G", "keywords": ["ab", "services services", "[emergency]", "water heater"]}
        )

        keywords = _of_type(campaign_structure_to_rows(structure), KeywordRow)
        assert [k.keyword for k in keywords] == ["water heater"]

    def test_long_keyword_truncated(self):
        structure = _structure({"name": "G", "keywords": ["x" * 90]})

        keyword = _of_type(campaign_structure_to_rows(structure), KeywordRow)[0]
        assert len(keyword.keyword) == 80

    def test_keyword_spec_fields(self):
        structure = _structure(
            {
                "name": "G",
                "keywords": [
                    {
                        "text": "tankless water heater",
                        "match_type": "PHRASE",
                        "max_cpc": 2.75,
                        "final_url": "https://example.com/tankless",
                    }
                ],
            }
        )

        keyword = _of_type(campaign_structure_to_rows(structure), KeywordRow)[0]
        assert keyword.criterion_type == "Phrase"
        assert keyword.max_cpc == "2.75"
        assert keyword.final_url == "https://example.com/tankless"

    def test_unknown_match_type_exported_as_broad(self):
        structure = _structure(
            {
                "name": "G",
                "keywords": [{"keyword": "drain repair", "matchType": "BROAD_MATCH_MODIFIER"}],
                "negative_keywords": [{"keyword": "diy", "matchType": "SOMETIMES"}],
            }
        )

        rows = campaign_structure_to_rows(structure)

        keyword = _of_type(rows, KeywordRow)[0]
        assert keyword.keyword == "drain repair"
        assert keyword.criterion_type == "Broad"
        negative = _of_type(rows, NegativeKeywordRow)[0]
        assert negative.criterion_type == "Negative Broad"


class TestNegativeKeywords:
    """Test negative keyword rows."""

    def test_negative_exact_formatting(self):
        structure = _structure({"name": "G", "negative_keywords": ["-[no service]"]})

        negative = _of_type(campaign_structure_to_rows(structure), NegativeKeywordRow)[0]
        assert negative.keyword == "no service"
        assert negative.criterion_type == "Negative Exact"

    def test_match_types_and_dedup(self):
        structure = _structure(
            {"name": "G", "negative_keywords": ["free", '"diy"', "-free", "x"]},
            {"name": "H", "negative_keywords": ["FREE"]},
        )

        negatives = _of_type(campaign_structure_to_rows(structure), NegativeKeywordRow)
        assert [(n.keyword, n.criterion_type) for n in negatives] == [
            ("free", "Negative Broad"),
            ("diy", "Negative Phrase"),
        ]

    def test_negative_does_not_block_positive(self):
        structure = _structure(
            {"name": "G", "keywords": ["plumber"], "negative_keywords": ["plumber"]}
        )

        rows = campaign_structure_to_rows(structure)
        assert len(_of_type(rows, KeywordRow)) == 1
        assert len(_of_type(rows, NegativeKeywordRow)) == 1


class TestAds:
    """Test ad rows."""

    def test_at_most_three_ads(self):
        headlines = [
            "Licensed Plumbers",
            "Free Estimates Today",
            "Drain Cleaning Pros",
            "Water Heater Experts",
            "Family Owned Since 1990",
        ]
        structure = _structure({"name": "G", "ads": [_ad(h) for h in headlines]})

        ads = _of_type(campaign_structure_to_rows(structure), ResponsiveSearchAdRow)
        assert len(ads) == 3

    def test_duplicate_ads_dropped(self):
        structure = _structure(
            {"name": "G", "ads": [_ad("Licensed Plumbers"), _ad("Licensed Plumbers")]}
        )

        ads = _of_type(campaign_structure_to_rows(structure), ResponsiveSearchAdRow)
        assert len(ads) == 1

    def test_url_falls_back_to_group_then_campaign(self):
        structure = _structure(
            {"name": "G", "ads": [_ad("First Ad", None), _ad("Second Ad", "example.com/g")]},
            {"name": "H", "ads": [_ad("Third Ad", None)]},
        )

        ads = _of_type(campaign_structure_to_rows(structure), ResponsiveSearchAdRow)
        assert [ad.final_url for ad in ads] == [
            "https://example.com/g",
            "https://example.com/g",
            "https://example.com/g",
        ]

    def test_ad_reports_per_ad_group(self, plumber_structure):
        mapper = CampaignRowMapper()
        mapper.map(plumber_structure)

        assert len(mapper.last_ad_reports) == 1
        assert mapper.last_ad_reports[0].fixed == 1


class TestStructure:
    """Test campaign and ad group level behavior."""

    def test_locations(self):
        structure = _structure(
            {"name": "G"},
            target_country="United States",
            states=["CA", "ca"],
            cities="Los Angeles",
            zip_codes=[90210],
            regions=["West Coast"],
        )

        locations = _of_type(campaign_structure_to_rows(structure), LocationRow)
        assert [loc.location for loc in locations] == [
            "United States",
            "CA",
            "Los Angeles",
            "90210",
        ]

    def test_empty_names_skipped(self):
        structure = CampaignStructure.model_validate(
            {
                "campaigns": [
                    {"name": "  ", "ad_groups": [{"name": "G", "keywords": ["plumber"]}]},
                    {
                        "name": "Real",
                        "ad_groups": [
                            {"name": "[]", "keywords": ["plumber"]},
                            {"name": "G", "keywords": ["drain cleaning"]},
                        ],
                    },
                ]
            }
        )

        rows = campaign_structure_to_rows(structure)

        assert {row.campaign for row in rows} == {"Real"}
        assert [row.ad_group for row in _of_type(rows, AdGroupRow)] == ["G"]
        assert [k.keyword for k in _of_type(rows, KeywordRow)] == ["drain cleaning"]

    def test_row_order(self):
        ad = {**_ad("Licensed Plumbers"), "sitelinks": [{"text": "Contact Us"}]}
        structure = _structure(
            {"name": "G", "keywords": ["plumber"], "ads": [ad], "negative_keywords": ["free"]},
            {"name": "H", "keywords": ["drain cleaning"]},
            target_country="United States",
        )

        row_types = [row.row_type for row in campaign_structure_to_rows(structure)]
        assert row_types == [
            "Campaign",
            "Location",
            "Ad group",
            "Keyword",
            "Responsive search ad",
            "Negative keyword",
            "Ad group",
            "Keyword",
            "Sitelink",
        ]

    def test_sitelinks(self):
        ad = {
            **_ad("Licensed Plumbers", "example.com"),
            "sitelinks": [
                {"text": "[Contact Us]", "description1": "Talk to a plumber"},
                {"text": "Pricing", "url": "example.com/pricing"},
                {"text": ""},
                {"text": "Reviews"},
                {"text": "Careers"},
            ],
        }
        structure = _structure({"name": "G", "ads": [ad]})

        sitelinks = _of_type(campaign_structure_to_rows(structure), SitelinkRow)

        assert [(s.slot, s.text) for s in sitelinks] == [
            (1, "Contact Us"),
            (2, "Pricing"),
            (4, "Reviews"),
        ]
        assert sitelinks[0].final_url == "https://example.com"
        assert sitelinks[0].description1 == "Talk to a plumber"
        assert sitelinks[1].final_url == "https://example.com/pricing"

    def test_each_call_starts_fresh(self, plumber_structure):
        mapper = CampaignRowMapper()

        first = mapper.map(plumber_structure)
        second = mapper.map(plumber_structure)

        assert len(_of_type(first, KeywordRow)) == 2
        assert len(_of_type(second, KeywordRow)) == 2


def test_clean_ad_group_name():
    assert clean_ad_group_name('"[Emergency] Plumbing"') == "Emergency Plumbing"
    assert clean_ad_group_name("  Drains  ") == "Drains"
    assert clean_ad_group_name(None) == ""
