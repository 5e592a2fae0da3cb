"""CSV formatters for Google Ads Editor exports."""

from .editor_csv_formatter import EditorCSVFormatter

__all__ = ["EditorCSVFormatter"]
