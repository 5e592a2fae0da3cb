"""Ad validation and auto-repair before export.

Ads coming from upstream builders can be partial or carry formatting left
over from keyword mixing. Everything here repairs what it can and reports
what it changed; nothing raises for bad ad data. Inputs are never mutated,
each function works on a deep copy.
"""

import logging
import re

from ads_editor_mcp.exporters.ad_rules import (
    calculate_ad_strength,
    display_length,
    find_similar_headlines,
    truncate_ad_text,
    validate_dki_syntax,
)
from ads_editor_mcp.models.campaign import Ad
from ads_editor_mcp.models.export_models import AdReport, ValidationReport
from ads_editor_mcp.models.google_ads_formats import GoogleAdsFieldLimits

logger = logging.getLogger(__name__)

DEFAULT_HEADLINES = (
    "Professional Service",
    "Expert Solutions",
    "Quality Guaranteed",
)

DEFAULT_DESCRIPTIONS = (
    "Get professional service you can trust.",
    "Contact us today for expert assistance.",
)

MISSING_FINAL_URL_WARNING = "Missing final URL - will use default"

_DKI_TOKEN = r"\{(?:keyword|Keyword|KeyWord|KEYWord):[^}]+\}"
_QUOTED_DKI = re.compile(rf'"({_DKI_TOKEN})"')
_SINGLE_QUOTED_DKI = re.compile(rf"'({_DKI_TOKEN})'")
_EDGE_DOUBLE_QUOTES = re.compile(r'^"+|"+$')
_EDGE_SINGLE_QUOTES = re.compile(r"^'+|'+$")
_SPACED_DOUBLE_QUOTES = re.compile(r'\s"+|"+\s')
# A quote with no word character before it, or a closing quote that is
# not a plural possessive ("plumbers' tools")
_STRAY_SINGLE_QUOTES = re.compile(r"(?<!\w)'|(?<!s)'(?!\w)")
_BRACKETS = re.compile(r"[\[\]]")


def strip_formatting_artifacts(text: str | None) -> str:
    """Remove match type and quoting artifacts from ad text.

    Quotes wrapped tightly around a ``{KeyWord:Default}`` placeholder are
    removed and the placeholder kept. Leading and trailing quotes, double
    quotes anywhere, stray single quotes and all brackets are removed.
    Apostrophes inside words survive.

    Examples:
        >>> strip_formatting_artifacts('"{KeyWord:Plumbing Co}"')
        '{KeyWord:Plumbing Co}'
        >>> strip_formatting_artifacts("[Joe's Plumbing]")
        "Joe's Plumbing"
    """
    if not text:
        return ""

    cleaned = text.strip()
    cleaned = _QUOTED_DKI.sub(r"\1", cleaned)
    cleaned = _SINGLE_QUOTED_DKI.sub(r"\1", cleaned)
    cleaned = _EDGE_DOUBLE_QUOTES.sub("", cleaned).strip()
    cleaned = _EDGE_SINGLE_QUOTES.sub("", cleaned).strip()
    cleaned = _SPACED_DOUBLE_QUOTES.sub(" ", cleaned)
    cleaned = cleaned.replace('"', "")
    cleaned = _STRAY_SINGLE_QUOTES.sub("", cleaned)
    cleaned = _BRACKETS.sub("", cleaned)
    return " ".join(cleaned.split())


def normalize_final_url(url: str | None) -> str:
    """Prepend ``https://`` to a URL without an http or https scheme."""
    url = (url or "").strip()
    if not url:
        return ""
    if not url.lower().startswith(("http://", "https://")):
        return f"https://{url}"
    return url


def _clean_text(value: str, label: str, slot: int, limit: int, fixes: list[str]) -> str:
    cleaned = strip_formatting_artifacts(value)
    if cleaned != " ".join(value.split()):
        fixes.append(f"Removed formatting characters from {label} {slot}")
    length = display_length(cleaned)
    if length > limit:
        fixes.append(f"Truncated {label} {slot} from {length} to {limit} characters")
        cleaned = truncate_ad_text(cleaned, limit)
    return cleaned


def _clean_text_fields(ad: Ad, fixes: list[str]) -> None:
    """Strip artifacts from and truncate every headline, description and path."""
    for slot in range(1, GoogleAdsFieldLimits.HEADLINE_SLOTS + 1):
        value = getattr(ad, f"headline{slot}")
        if value:
            setattr(
                ad,
                f"headline{slot}",
                _clean_text(value, "headline", slot, GoogleAdsFieldLimits.HEADLINE_MAX, fixes),
            )

    for slot in range(1, GoogleAdsFieldLimits.DESCRIPTION_SLOTS + 1):
        value = getattr(ad, f"description{slot}")
        if value:
            setattr(
                ad,
                f"description{slot}",
                _clean_text(
                    value, "description", slot, GoogleAdsFieldLimits.DESCRIPTION_MAX, fixes
                ),
            )

    if ad.headlines:
        ad.headlines = [
            _clean_text(h, "headline", i, GoogleAdsFieldLimits.HEADLINE_MAX, fixes)
            if h
            else ""
            for i, h in enumerate(ad.headlines, start=1)
        ]

    if ad.descriptions:
        ad.descriptions = [
            _clean_text(d, "description", i, GoogleAdsFieldLimits.DESCRIPTION_MAX, fixes)
            if d
            else ""
            for i, d in enumerate(ad.descriptions, start=1)
        ]

    if ad.callouts:
        ad.callouts = [
            _clean_text(c, "callout", i, GoogleAdsFieldLimits.CALLOUT_MAX, fixes)
            for i, c in enumerate(ad.callouts, start=1)
        ]

    for field in ("path1", "path2"):
        value = (getattr(ad, field) or "").strip()
        if len(value) > GoogleAdsFieldLimits.PATH_MAX:
            fixes.append(
                f"Truncated {field} from {len(value)} to "
                f"{GoogleAdsFieldLimits.PATH_MAX} characters"
            )
            value = value[: GoogleAdsFieldLimits.PATH_MAX].rstrip()
        setattr(ad, field, value or None)


def _normalize_url_field(ad: Ad, fixes: list[str], warnings: list[str]) -> None:
    if ad.final_url and ad.final_url.strip():
        normalized = normalize_final_url(ad.final_url)
        if normalized != ad.final_url.strip():
            fixes.append("Added https:// prefix to final URL")
        ad.final_url = normalized
    else:
        ad.final_url = None
        warnings.append(MISSING_FINAL_URL_WARNING)


def normalize_ad(ad: Ad) -> tuple[Ad, list[str]]:
    """Clean and truncate ad text and give the final URL a scheme.

    Args:
        ad: Ad to normalize

    Returns:
        Tuple of (normalized copy of the ad, fix messages)
    """
    ad = ad.model_copy(deep=True)
    fixes: list[str] = []
    _clean_text_fields(ad, fixes)
    _normalize_url_field(ad, fixes, [])
    return ad, fixes


def _fill_from_defaults(
    values: list[str], defaults: tuple[str, ...], minimum: int, label: str
) -> list[str]:
    """Append defaults to ``values`` until it holds ``minimum`` entries.

    Defaults are taken in order starting at the position of the next
    missing entry, skipping any the ad already uses.
    """
    fixes = []
    present = {v.lower() for v in values}
    start = len(values)
    for offset in range(len(defaults)):
        if len(values) >= minimum:
            break
        candidate = defaults[(start + offset) % len(defaults)]
        if candidate.lower() in present:
            continue
        values.append(candidate)
        present.add(candidate.lower())
        fixes.append(f'Added default {label} {len(values)}: "{candidate}"')
    return fixes


def ensure_minimum_headlines(ad: Ad) -> tuple[Ad, bool, list[str]]:
    """Make sure the ad has at least three headlines.

    Returns:
        Tuple of (ad copy, whether anything was added, fix messages)
    """
    ad = ad.model_copy(deep=True)
    headlines = [
        truncate_ad_text(h, GoogleAdsFieldLimits.HEADLINE_MAX) for h in ad.get_headlines()
    ]
    fixes = _fill_from_defaults(
        headlines,
        DEFAULT_HEADLINES,
        GoogleAdsFieldLimits.HEADLINE_MIN_COUNT,
        "headline",
    )
    ad.set_headlines(headlines)
    return ad, bool(fixes), fixes


def ensure_minimum_descriptions(ad: Ad) -> tuple[Ad, bool, list[str]]:
    """Make sure the ad has at least two descriptions."""
    ad = ad.model_copy(deep=True)
    descriptions = [
        truncate_ad_text(d, GoogleAdsFieldLimits.DESCRIPTION_MAX)
        for d in ad.get_descriptions()
    ]
    fixes = _fill_from_defaults(
        descriptions,
        DEFAULT_DESCRIPTIONS,
        GoogleAdsFieldLimits.DESCRIPTION_MIN_COUNT,
        "description",
    )
    ad.set_descriptions(descriptions)
    return ad, bool(fixes), fixes


def _copy_warnings(headlines: list[str], descriptions: list[str]) -> list[str]:
    """Non-blocking warnings about placeholder syntax and repeated headlines."""
    warnings = []
    for label, texts, limit in (
        ("Headline", headlines, GoogleAdsFieldLimits.HEADLINE_MAX),
        ("Description", descriptions, GoogleAdsFieldLimits.DESCRIPTION_MAX),
    ):
        for index, text in enumerate(texts, start=1):
            if "{" not in text:
                continue
            result = validate_dki_syntax(text, max_length=limit)
            warnings.extend(f"{label} {index}: {error}" for error in result.errors)

    for first, second in find_similar_headlines(headlines):
        warnings.append(f"Headlines {first} and {second} are very similar")
    return warnings


def validate_and_fix_ad(ad: Ad, ad_index: int = 0) -> tuple[Ad, AdReport]:
    """Repair a single ad so it can be exported as a responsive search ad.

    Strips formatting artifacts, truncates text to its limits, fills missing
    headlines and descriptions from defaults and normalizes the final URL.

    Args:
        ad: Ad to validate
        ad_index: Position of the ad in its list, used in the report

    Returns:
        Tuple of (repaired copy of the ad, AdReport)
    """
    ad = ad.model_copy(deep=True)
    ad_type = ad.type or ("rsa" if ad.get_headlines() else "unknown")
    fixes: list[str] = []
    warnings: list[str] = []

    _clean_text_fields(ad, fixes)

    ad, _, headline_fixes = ensure_minimum_headlines(ad)
    fixes.extend(headline_fixes)
    ad, _, description_fixes = ensure_minimum_descriptions(ad)
    fixes.extend(description_fixes)

    _normalize_url_field(ad, fixes, warnings)

    headlines = ad.get_headlines()
    descriptions = ad.get_descriptions()
    warnings.extend(_copy_warnings(headlines, descriptions))

    report = AdReport(
        ad_index=ad_index,
        ad_type=ad_type,
        fixes=fixes,
        warnings=warnings,
        ad_strength=calculate_ad_strength(headlines, descriptions),
    )
    if fixes:
        logger.debug(f"Ad {ad_index + 1}: {', '.join(fixes)}")
    return ad, report


def validate_and_fix_ads(ads: list[Ad]) -> tuple[list[Ad], ValidationReport]:
    """Validate and repair a list of ads.

    Returns:
        Tuple of (repaired ads in input order, ValidationReport)
    """
    report = ValidationReport()
    fixed_ads = []

    for index, ad in enumerate(ads):
        fixed_ad, ad_report = validate_and_fix_ad(ad, index)
        if ad_report.fixes:
            report.fixed += 1
        if ad_report.warnings:
            report.warnings.append(f"Ad {index + 1}: {', '.join(ad_report.warnings)}")
        report.details.append(ad_report)
        fixed_ads.append(fixed_ad)

    return fixed_ads, report


def format_validation_report(report: ValidationReport) -> str:
    """Render a validation report as readable text for logs and tool output."""
    lines = []

    if report.fixed > 0:
        lines.append(f"Auto-fixed {report.fixed} ad(s)")

    if report.warnings:
        lines.append(f"{len(report.warnings)} warning(s):")
        lines.extend(f"  - {warning}" for warning in report.warnings)

    if report.errors:
        lines.append(f"{len(report.errors)} error(s):")
        lines.extend(f"  - {error}" for error in report.errors)

    changed = [d for d in report.details if d.fixes or d.warnings]
    if changed:
        lines.append("")
        lines.append("Details:")
        for detail in changed:
            lines.append(f"  Ad {detail.ad_index + 1} ({detail.ad_type}):")
            lines.extend(f"    fixed: {fix}" for fix in detail.fixes)
            lines.extend(f"    warning: {warning}" for warning in detail.warnings)

    return "\n".join(lines)
