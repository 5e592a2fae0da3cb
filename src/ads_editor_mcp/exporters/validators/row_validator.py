"""Field-level validation of Google Ads Editor rows before serialization."""

import logging
import math
import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ads_editor_mcp.exporters.ad_rules import display_length
from ads_editor_mcp.models.editor_rows import BaseEditorRow
from ads_editor_mcp.models.export_models import CSVValidationResult
from ads_editor_mcp.models.google_ads_formats import (
    NEGATIVE_CRITERION_TYPES,
    POSITIVE_CRITERION_TYPES,
    GoogleAdsEditorFormat,
    GoogleAdsFieldLimits,
    RowType,
)

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_NUMBER_PATTERN = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)
_URL_ADAPTER = TypeAdapter(AnyHttpUrl)

_ROW_TYPES_BY_UPPER = {row_type.value.upper(): row_type for row_type in RowType}
_POSITIVE_CRITERIA = {c.value for c in POSITIVE_CRITERION_TYPES}
_NEGATIVE_CRITERIA_UPPER = {c.value.upper() for c in NEGATIVE_CRITERION_TYPES}


def is_valid_date(value: str) -> bool:
    """True for a calendar-valid ``YYYY-MM-DD`` date."""
    if not _DATE_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def is_number(value: str) -> bool:
    """True for a plain ASCII decimal such as ``100``, ``1.25`` or ``-0.5``."""
    if not _NUMBER_PATTERN.fullmatch(value):
        return False
    return math.isfinite(float(value))


def is_valid_url(value: str) -> bool:
    """True for an absolute http or https URL with a host."""
    if not value.lower().startswith(("http://", "https://")):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _as_columns(row: BaseEditorRow | Mapping[str, Any]) -> dict[str, str]:
    if isinstance(row, BaseEditorRow):
        return row.to_columns()
    columns = GoogleAdsEditorFormat.blank_row()
    for key, value in row.items():
        columns[key] = "" if value is None else str(value)
    return columns


def _validate_campaign(row: dict[str, str], row_num: int, errors: list[str]) -> None:
    if not row["Campaign"].strip():
        errors.append(f"Row {row_num}: Campaign name is required")

    start_date = row["Start date"].strip()
    if start_date and not is_valid_date(start_date):
        errors.append(f"Row {row_num}: Start date must be in YYYY-MM-DD format")

    end_date = row["End date"].strip()
    if end_date and not is_valid_date(end_date):
        errors.append(f"Row {row_num}: End date must be in YYYY-MM-DD format")

    budget = row["Budget"].strip()
    if budget and not is_number(budget):
        errors.append(f"Row {row_num}: Budget must be a number")


def _validate_ad_group(row: dict[str, str], row_num: int, errors: list[str]) -> None:
    if not row["Campaign"].strip():
        errors.append(f"Row {row_num}: Campaign name is required for Ad Group")
    if not row["Ad group"].strip():
        errors.append(f"Row {row_num}: Ad Group name is required")

    max_cpc = row["Max CPC"].strip()
    if max_cpc and not is_number(max_cpc):
        errors.append(f"Row {row_num}: Max CPC must be a number")


def _validate_keyword(row: dict[str, str], row_num: int, errors: list[str]) -> None:
    if not row["Campaign"].strip():
        errors.append(f"Row {row_num}: Campaign name is required for Keyword")
    if not row["Ad group"].strip():
        errors.append(f"Row {row_num}: Ad Group name is required for Keyword")
    if not row["Keyword"].strip():
        errors.append(f"Row {row_num}: Keyword text is required")

    match_type = row["Criterion Type"].strip()
    if match_type.capitalize() not in _POSITIVE_CRITERIA:
        errors.append(
            f'Row {row_num}: Invalid Criterion Type "{match_type}". '
            'Expected: "Broad", "Phrase", or "Exact"'
        )

    max_cpc = row["Max CPC"].strip()
    if max_cpc and not is_number(max_cpc):
        errors.append(f"Row {row_num}: Max CPC must be a number")

    final_url = row["Final URL"].strip()
    if final_url and not is_valid_url(final_url):
        errors.append(f"Row {row_num}: Keyword Final URL must be a valid URL")


def _validate_responsive_search_ad(
    row: dict[str, str], row_num: int, errors: list[str]
) -> None:
    if not row["Campaign"].strip():
        errors.append(f"Row {row_num}: Campaign name is required for Ad")
    if not row["Ad group"].strip():
        errors.append(f"Row {row_num}: Ad Group name is required for Ad")

    final_url = row["Final URL"].strip()
    if not final_url:
        errors.append(f"Row {row_num}: Final URL is required for Responsive search ad")
    elif not is_valid_url(final_url):
        errors.append(f"Row {row_num}: Final URL must be a valid URL (https://)")
    elif not final_url.lower().startswith("https://"):
        errors.append(f"Row {row_num}: Final URL must start with https://")

    headlines = [
        row[GoogleAdsEditorFormat.headline_column(slot)]
        for slot in range(1, GoogleAdsFieldLimits.HEADLINE_SLOTS + 1)
    ]
    present = [h for h in headlines if h.strip()]
    if len(present) < GoogleAdsFieldLimits.HEADLINE_MIN_COUNT:
        logger.debug(f"Row {row_num}: headlines {headlines[:3]}")
        errors.append(
            f"Row {row_num}: Responsive Search Ads require at least "
            f"{GoogleAdsFieldLimits.HEADLINE_MIN_COUNT} headlines (found {len(present)})"
        )
    for slot, headline in enumerate(headlines, start=1):
        length = display_length(headline)
        if length > GoogleAdsFieldLimits.HEADLINE_MAX:
            errors.append(
                f"Row {row_num}: Headline {slot} exceeds "
                f"{GoogleAdsFieldLimits.HEADLINE_MAX} characters ({length} chars)"
            )

    descriptions = [
        row[GoogleAdsEditorFormat.description_column(slot)]
        for slot in range(1, GoogleAdsFieldLimits.DESCRIPTION_SLOTS + 1)
    ]
    present = [d for d in descriptions if d.strip()]
    if len(present) < GoogleAdsFieldLimits.DESCRIPTION_MIN_COUNT:
        errors.append(
            f"Row {row_num}: Responsive Search Ads require at least "
            f"{GoogleAdsFieldLimits.DESCRIPTION_MIN_COUNT} descriptions "
            f"(found {len(present)})"
        )
    for slot, description in enumerate(descriptions, start=1):
        length = display_length(description)
        if length > GoogleAdsFieldLimits.DESCRIPTION_MAX:
            errors.append(
                f"Row {row_num}: Description {slot} exceeds "
                f"{GoogleAdsFieldLimits.DESCRIPTION_MAX} characters "
                f"({length} chars)"
            )


def _validate_negative_keyword(
    row: dict[str, str], row_num: int, errors: list[str]
) -> None:
    if not row["Campaign"].strip():
        errors.append(f"Row {row_num}: Campaign name is required for Negative Keyword")
    if not row["Keyword"].strip():
        errors.append(f"Row {row_num}: Negative Keyword text is required")

    match_type = row["Criterion Type"].strip()
    normalized = " ".join(match_type.replace("_", " ").upper().split())
    if normalized not in _NEGATIVE_CRITERIA_UPPER:
        errors.append(
            f'Row {row_num}: Invalid Criterion Type for Negative Keyword "{match_type}". '
            'Expected: "Negative Broad", "Negative Phrase", or "Negative Exact"'
        )


_ROW_VALIDATORS = {
    RowType.CAMPAIGN: _validate_campaign,
    RowType.AD_GROUP: _validate_ad_group,
    RowType.KEYWORD: _validate_keyword,
    RowType.RESPONSIVE_SEARCH_AD: _validate_responsive_search_ad,
    RowType.NEGATIVE_KEYWORD: _validate_negative_keyword,
}


def validate_csv_rows(
    rows: Sequence[BaseEditorRow | Mapping[str, Any]],
) -> CSVValidationResult:
    """
    Check every row against the Google Ads Editor field rules.

    All violations are collected; validation never stops at the first one.

    Args:
        rows: Typed editor rows or column mappings keyed by header

    Returns:
        CSVValidationResult with the projected rows and every error found
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not rows:
        return CSVValidationResult(errors=["No rows to export"], warnings=warnings)

    projected = [_as_columns(row) for row in rows]

    for row_num, row in enumerate(projected, start=1):
        raw_type = row["Row Type"].strip()
        if not raw_type:
            errors.append(f"Row {row_num}: Missing Row Type")
            continue

        row_type = _ROW_TYPES_BY_UPPER.get(raw_type.upper())
        if row_type is None:
            errors.append(f'Row {row_num}: Invalid Row Type "{raw_type}"')
            continue

        validator = _ROW_VALIDATORS.get(row_type)
        if validator:
            validator(row, row_num, errors)

    if errors:
        logger.warning(f"Row validation found {len(errors)} error(s)")

    return CSVValidationResult(errors=errors, warnings=warnings, rows=projected)
