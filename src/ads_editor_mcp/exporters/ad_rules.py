"""Google Ads copy rules: dynamic keyword insertion, near duplicates, ad strength."""

import difflib
import re

from ads_editor_mcp.models.export_models import AdStrength, DKIValidationResult
from ads_editor_mcp.models.google_ads_formats import GoogleAdsFieldLimits

DKI_CAPITALIZATIONS = ("keyword", "Keyword", "KeyWord", "KEYWord")

DKI_PATTERN = re.compile(r"\{(keyword|Keyword|KeyWord|KEYWord):([^}]*)\}")
PLACEHOLDER_PATTERN = re.compile(r"\{([^}:]+):([^}]*)\}")

# Texts this long or shorter are checked against the headline limit
HEADLINE_LENGTH_CUTOFF = 50

SIMILARITY_THRESHOLD = 0.75


def display_length(text: str) -> int:
    """Length of ad text as served, each placeholder counted as its default text."""
    return len(DKI_PATTERN.sub(lambda m: m.group(2), text))


def truncate_ad_text(text: str, limit: int) -> str:
    """Shorten ad text to ``limit`` served characters.

    A ``{KeyWord:Default}`` placeholder is never cut through. When the text is
    too long the default inside the braces is shortened; only when nothing of
    the default would remain is the placeholder unwrapped and the text sliced.

    Examples:
        >>> truncate_ad_text("{KeyWord:Emergency Plumbing Help}", 30)
        '{KeyWord:Emergency Plumbing Help}'
        >>> truncate_ad_text("Call Now {KeyWord:Emergency Plumbing Help}", 30)
        'Call Now {KeyWord:Emergency Plumbing He}'
    """
    while display_length(text) > limit:
        matches = list(DKI_PATTERN.finditer(text))
        if not matches:
            return text[:limit].rstrip()

        match = matches[-1]
        default_text = match.group(2)
        keep = len(default_text) - (display_length(text) - limit)
        shortened = default_text[: max(keep, 0)].rstrip()
        if shortened:
            return text[: match.start(2)] + shortened + text[match.end(2) :]
        text = text[: match.start()] + default_text + text[match.end() :]
    return text


def validate_dki_syntax(text: str, max_length: int | None = None) -> DKIValidationResult:
    """Validate ``{KeyWord:Default}`` placeholders in a headline or description.

    Args:
        text: Ad text to check
        max_length: Character limit of the field; guessed from the text length
            (headline or description) when not given

    Returns:
        DKIValidationResult with errors and warnings
    """
    errors: list[str] = []
    warnings: list[str] = []
    default_text_valid = True

    matches = list(DKI_PATTERN.finditer(text))
    if len(matches) > 1:
        errors.append("Only one DKI insertion allowed per text field")

    for match in PLACEHOLDER_PATTERN.finditer(text):
        if match.group(1) not in DKI_CAPITALIZATIONS:
            errors.append(
                f"Invalid DKI syntax: {match.group(0)}. "
                "Use {keyword:}, {Keyword:}, {KeyWord:}, or {KEYWord:}"
            )

    if text.count("{") != text.count("}"):
        errors.append("Unclosed DKI placeholder: every { needs a matching }")

    if max_length is None:
        max_length = (
            GoogleAdsFieldLimits.HEADLINE_MAX
            if len(text) <= HEADLINE_LENGTH_CUTOFF
            else GoogleAdsFieldLimits.DESCRIPTION_MAX
        )

    for match in matches:
        default_text = match.group(2)
        if not default_text.strip():
            errors.append("DKI default text cannot be empty")
            default_text_valid = False

        with_default = text.replace(match.group(0), default_text, 1)
        if len(with_default) > max_length:
            errors.append(
                f"With default text, exceeds {max_length} character limit "
                f"({len(with_default)} chars)"
            )
            default_text_valid = False

        if " " not in default_text and "Getting " in text:
            warnings.append(
                'Watch grammar: "Getting [keyword]" may not work with all '
                "keyword variations"
            )

    return DKIValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        default_text_valid=default_text_valid,
        syntax_valid=bool(matches) or "{" not in text,
    )


def _normalize_for_comparison(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


def are_texts_similar(first: str, second: str) -> bool:
    """Check whether two ad texts are near duplicates.

    Texts are compared lowercased with punctuation and spaces removed. They
    count as similar when equal, when one is the plural of the other, or when
    their similarity ratio reaches 0.75.
    """
    a = _normalize_for_comparison(first)
    b = _normalize_for_comparison(second)

    if a == b:
        return True
    if not a or not b:
        return False

    # Plural and singular forms of the same text
    if a + "s" == b or b + "s" == a:
        return True

    return difflib.SequenceMatcher(None, a, b).ratio() >= SIMILARITY_THRESHOLD


def _similar_pairs(texts: list[str]) -> list[tuple[int, int]]:
    pairs = []
    for i in range(len(texts)):
        for j in range(i + 1, len(texts)):
            if are_texts_similar(texts[i], texts[j]):
                pairs.append((i + 1, j + 1))
    return pairs


def find_similar_headlines(headlines: list[str]) -> list[tuple[int, int]]:
    """1-based index pairs of headlines that are near duplicates."""
    return _similar_pairs(headlines)


def _texts_are_well_formed(texts: list[str], max_length: int) -> bool:
    return all(
        t.strip() and display_length(t) <= max_length for t in texts
    ) and not _similar_pairs(
        texts
    )


def calculate_ad_strength(
    headlines: list[str],
    descriptions: list[str],
    has_keywords_in_headlines: bool = True,
) -> AdStrength:
    """Score a responsive search ad the way the Google Ads UI rates it.

    Points come from headline count (up to 40), description count (up to
    30), keyword use in headlines (15) and variety (15, when every text is
    non-empty, within its limit and distinct from its siblings).
    """
    score = 0

    if len(headlines) >= 15:
        score += 40
    elif len(headlines) >= 10:
        score += 30
    elif len(headlines) >= 5:
        score += 20
    elif len(headlines) >= GoogleAdsFieldLimits.HEADLINE_MIN_COUNT:
        score += 10

    if len(descriptions) >= 4:
        score += 30
    elif len(descriptions) >= 3:
        score += 20
    elif len(descriptions) >= GoogleAdsFieldLimits.DESCRIPTION_MIN_COUNT:
        score += 10

    if has_keywords_in_headlines:
        score += 15

    counts_ok = (
        GoogleAdsFieldLimits.HEADLINE_MIN_COUNT
        <= len(headlines)
        <= GoogleAdsFieldLimits.HEADLINE_SLOTS
        and GoogleAdsFieldLimits.DESCRIPTION_MIN_COUNT
        <= len(descriptions)
        <= GoogleAdsFieldLimits.DESCRIPTION_SLOTS
    )
    if (
        counts_ok
        and _texts_are_well_formed(headlines, GoogleAdsFieldLimits.HEADLINE_MAX)
        and _texts_are_well_formed(descriptions, GoogleAdsFieldLimits.DESCRIPTION_MAX)
    ):
        score += 15

    if score >= 85:
        return AdStrength.EXCELLENT
    if score >= 65:
        return AdStrength.GOOD
    if score >= 45:
        return AdStrength.AVERAGE
    if score >= 25:
        return AdStrength.POOR
    return AdStrength.INCOMPLETE
