"""Custom exceptions for the Ads Editor export service."""


class AdsEditorError(Exception):
    """Base exception for all Ads Editor export errors."""

    pass


class ValidationError(AdsEditorError):
    """Raised when data validation fails."""

    pass


class ConfigurationError(AdsEditorError):
    """Raised when configuration is invalid."""

    pass


class ExportError(AdsEditorError):
    """Raised when an export cannot be produced or written."""

    pass


class CSVValidationError(ValidationError):
    """Raised when generated CSV rows fail Google Ads Editor validation."""

    def __init__(self, message: str, issues: list = None, suggestions: list = None):
        """Initialize CSV validation error.

        Args:
            message: Error message
            issues: List of validation issues found
            suggestions: List of suggested fixes
        """
        super().__init__(message)
        self.issues = issues or []
        self.suggestions = suggestions or []

    @classmethod
    def from_errors(cls, errors: list[str]) -> "CSVValidationError":
        """Build the error raised by the exporter from a list of row errors."""
        suggestions = []
        if any("Final URL" in error for error in errors):
            suggestions.append(
                "Give every ad a final URL that starts with https://"
            )
        if any("Criterion Type" in error for error in errors):
            suggestions.append(
                "Use Broad, Phrase or Exact (Negative Broad, Negative Phrase or "
                "Negative Exact for negatives)"
            )
        return cls(
            "CSV validation failed:\n" + "\n".join(errors),
            issues=list(errors),
            suggestions=suggestions,
        )
