"""Validators for Google Ads Editor rows."""

from .row_validator import is_number, is_valid_date, is_valid_url, validate_csv_rows

__all__ = ["is_number", "is_valid_date", "is_valid_url", "validate_csv_rows"]
