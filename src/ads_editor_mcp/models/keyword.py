"""Keyword data models and match type helpers."""

import logging
import re
from typing import Any, Union

from pydantic import AliasChoices, Field, field_validator, model_validator

from ads_editor_mcp.models.base import BaseExportModel, coerce_to_str
from ads_editor_mcp.models.google_ads_formats import CriterionType, MatchType

logger = logging.getLogger(__name__)

QUESTION_WORDS = frozenset(
    {"what", "where", "when", "why", "how", "does", "can", "is"}
)

LOW_QUALITY_PATTERNS = [
    re.compile(r"\b(near me)\s+\1", re.IGNORECASE),  # "near me near me"
    re.compile(r"\b(services?)\s+\1", re.IGNORECASE),  # "services services"
    re.compile(r"\b(price)\s+near\s+me", re.IGNORECASE),
    re.compile(r"\b(me)\s+price", re.IGNORECASE),
    re.compile(r"\b(24/7)\s+me\b", re.IGNORECASE),
    re.compile(r"\b(near)\s+(repair|price|services?)\b", re.IGNORECASE),
    re.compile(r"\b(services?)\s+(repair|price)\b", re.IGNORECASE),
    re.compile(r"\b(top|best)\s+(services?|roofing|plumbing)\b$", re.IGNORECASE),
    re.compile(r"\b(24/7)\s+(services?|roofing|plumbing)\b$", re.IGNORECASE),
    re.compile(r"^emergency$|\bemergency\s+near\s+me$", re.IGNORECASE),
]

_QUOTES_AND_BRACKETS = re.compile(r"[\[\]\"']")
_LEADING_DASHES = re.compile(r"^[-\s]+")


def parse_match_type(raw: str) -> tuple[MatchType, bool]:
    """Infer the match type of a keyword from its wrapping punctuation.

    Must run on the raw text, before cleaning removes the punctuation.

    Args:
        raw: Keyword as typed, e.g. ``[plumber]``, ``"plumber"`` or ``-plumber``

    Returns:
        Tuple of (match type, is_negative)
    """
    text = (raw or "").strip()
    if text.startswith("[") and text.endswith("]"):
        return MatchType.EXACT, False
    if text.startswith('"') and text.endswith('"'):
        return MatchType.PHRASE, False
    if text.startswith("-[") and text.endswith("]"):
        return MatchType.EXACT, True
    if text.startswith('-"') and text.endswith('"'):
        return MatchType.PHRASE, True
    if text.startswith("-"):
        return MatchType.BROAD, True
    return MatchType.BROAD, False


def parse_match_type_name(value: str) -> tuple[MatchType, bool]:
    """Parse an explicit match type name such as ``EXACT`` or ``Negative Phrase``.

    Raises:
        ValueError: If the name is not a known match type
    """
    normalized = " ".join(value.replace("_", " ").lower().split())
    negative = normalized.startswith("negative ")
    if negative:
        normalized = normalized[len("negative ") :]

    for match_type in MatchType:
        if match_type.value.lower() == normalized:
            return match_type, negative

    raise ValueError(f"Unknown match type '{value}'")


def criterion_type(match_type: MatchType | str, negative: bool = False) -> str:
    """Criterion Type column value, e.g. ``Exact`` or ``Negative Exact``."""
    base = MatchType(match_type).value
    if negative:
        return CriterionType(f"Negative {base}").value
    return CriterionType(base).value


def clean_keyword_text(text: str) -> str:
    """Strip match type punctuation from a keyword.

    Removes every bracket and quote, collapses whitespace and drops a
    leading negative marker. Applying it twice gives the same result as
    applying it once.
    """
    cleaned = _QUOTES_AND_BRACKETS.sub("", text or "")
    cleaned = " ".join(cleaned.split())
    return _LEADING_DASHES.sub("", cleaned).strip()


def is_low_quality_keyword(text: str) -> bool:
    """Check whether a cleaned keyword is too vague or malformed to export."""
    if not text or len(text) < 3:
        return True

    lowered = text.lower()
    words = lowered.split()

    # Repeated words, e.g. "services services"
    if any(first == second for first, second in zip(words, words[1:])):
        return True

    if any(pattern.search(lowered) for pattern in LOW_QUALITY_PATTERNS):
        return True

    # Short fragments starting with a question word are usually incomplete
    if words and words[0] in QUESTION_WORDS and len(words) < 4:
        return True

    return False


class KeywordSpec(BaseExportModel):
    """Keyword with an explicit match type and optional bid and URL."""

    text: str = Field(
        ...,
        validation_alias=AliasChoices("text", "keyword"),
        description="Keyword text, optionally wrapped in match type punctuation",
    )
    match_type: MatchType | None = Field(
        None,
        validation_alias=AliasChoices("match_type", "matchType"),
        description="Explicit match type; inferred from the text when omitted",
    )
    negative: bool = Field(
        default=False, description="Whether an explicit match type was negative"
    )
    max_cpc: str | None = Field(
        None, validation_alias=AliasChoices("max_cpc", "maxCPC", "maxCpc")
    )
    final_url: str | None = Field(
        None, validation_alias=AliasChoices("final_url", "finalURL", "finalUrl")
    )

    @model_validator(mode="before")
    @classmethod
    def split_negative_match_type(cls, data: Any) -> Any:
        """Accept names like ``NEGATIVE_EXACT`` by splitting off the negative flag.

        Unknown names are logged and dropped so the match type falls back to
        the keyword punctuation.
        """
        if not isinstance(data, dict):
            return data
        for key in ("match_type", "matchType"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                try:
                    match_type, negative = parse_match_type_name(value)
                except ValueError:
                    logger.warning(
                        f"Unknown match type '{value}' for keyword "
                        f"'{data.get('text') or data.get('keyword')}', "
                        "inferring from keyword text"
                    )
                    data = {**data, key: None}
                    continue
                data = {**data, key: match_type}
                if negative:
                    data["negative"] = True
            elif value == "":
                data = {**data, key: None}
        return data

    @field_validator("max_cpc", mode="before")
    @classmethod
    def coerce_max_cpc(cls, v: Any) -> Any:
        return coerce_to_str(v)

    def resolve_match_type(self) -> tuple[MatchType, bool]:
        """Explicit match type when given, otherwise inferred from the text."""
        if self.match_type:
            return MatchType(self.match_type), self.negative
        return parse_match_type(self.text)


KeywordInput = Union[KeywordSpec, str]


def keyword_text(keyword: KeywordInput) -> str:
    """Raw text of a keyword given either as a string or a KeywordSpec."""
    return keyword if isinstance(keyword, str) else keyword.text


def resolve_keyword(keyword: KeywordInput) -> tuple[MatchType, bool]:
    """Match type and negative flag for either keyword form."""
    if isinstance(keyword, str):
        return parse_match_type(keyword)
    return keyword.resolve_match_type()
