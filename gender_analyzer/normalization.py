"""Name normalization utilities for gender prediction.

This module reduces a full personal name ("Dr. Alexander Bethke-Jaenicke")
to the first name a predictor should look at ("Alexander"), skipping
honorifics, ranks, degree and generation suffixes, and initials.
"""
import re
import unicodedata
from dataclasses import dataclass, field
from typing import List, Optional


# Titles, ranks, degrees and generation suffixes, compared after
# lowercasing and removing "." and ","
TITLES = frozenset({
    "dr", "prof", "professor",
    "mr", "mrs", "ms", "miss",
    "sir", "lord", "lady", "duke", "duchess",
    "rev", "reverend", "father", "fr",
    "capt", "captain", "col", "colonel",
    "maj", "major", "lt", "lieutenant",
    "gen", "general", "admiral", "adm",
    "phd", "md", "dds",
    "esq", "jr", "sr",
    "i", "ii", "iii", "iv", "v", "vi",
})

_PUNCTUATION_RE = re.compile(r"[.,]")


@dataclass
class ParsedName:
    """Container for a parsed full name.

    Attributes:
        raw_str: Original input string
        tokens: Whitespace-separated tokens of the trimmed input
        first_name: Extracted first name (punctuation stripped)
        skipped: Tokens skipped as titles, suffixes or initials
    """
    raw_str: str
    tokens: List[str]
    first_name: str
    skipped: List[str] = field(default_factory=list)


def strip_diacritics(text: str) -> str:
    """Remove diacritical marks from text.

    Args:
        text: Input text with potential diacritics

    Returns:
        Text with diacritics removed (e.g., 'José' -> 'Jose')
    """
    # Normalize to NFD (decomposed form) then filter out combining marks
    nfd = unicodedata.normalize('NFD', text)
    return ''.join(char for char in nfd if unicodedata.category(char) != 'Mn')


def strip_name_punctuation(token: str) -> str:
    """Remove periods and commas from a name token."""
    return _PUNCTUATION_RE.sub('', token)


def is_title(token: str) -> bool:
    """Check whether a token is an honorific, rank, degree or generation suffix."""
    return strip_name_punctuation(token).lower() in TITLES


def is_initial(token: str) -> bool:
    """Check whether a token is a single letter, optionally followed by a period."""
    return len(strip_name_punctuation(token)) == 1


def parse_name(full_name: Optional[str]) -> ParsedName:
    """Parse a full name and pick the token usable as a first name.

    Tokens are scanned left to right. Titles and initials are skipped; the
    first remaining token is the first name. If every token is skipped, the
    first token is used instead.

    Args:
        full_name: Full name, possibly with titles and suffixes

    Returns:
        ParsedName with the tokens, extracted first name and skipped tokens

    Example:
        >>> parse_name("Mr. John Smith Jr.").first_name
        'John'
        >>> parse_name("Mr. John Smith Jr.").skipped
        ['Mr.']
    """
    raw_str = "" if full_name is None else str(full_name)
    tokens = raw_str.split()

    if not tokens:
        return ParsedName(raw_str=raw_str, tokens=[], first_name="")

    skipped = []
    for token in tokens:
        # Tokens made only of "." or "," are skipped too
        if not strip_name_punctuation(token) or is_title(token) or is_initial(token):
            skipped.append(token)
            continue
        return ParsedName(
            raw_str=raw_str,
            tokens=tokens,
            first_name=strip_name_punctuation(token),
            skipped=skipped,
        )

    # Everything looked like a title or initial
    return ParsedName(
        raw_str=raw_str,
        tokens=tokens,
        first_name=strip_name_punctuation(tokens[0]),
        skipped=skipped,
    )


def extract_first_name(full_name: Optional[str]) -> str:
    """Extract the first name from a full name.

    Args:
        full_name: Full name to parse

    Returns:
        The first token that is not a title, suffix or initial. Empty string
        for empty input.

    Example:
        >>> extract_first_name("Dr. Alexander Bethke-Jaenicke")
        'Alexander'
        >>> extract_first_name("J. K. Rowling")
        'Rowling'
    """
    return parse_name(full_name).first_name
