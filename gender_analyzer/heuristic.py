"""Rule-based gender guessing from first names.

A fixed table of common English first names is checked first; names not in
the table fall back to ending-based rules. This is the offline predictor and
the fallback for every remote provider.
"""
from typing import Tuple

from gender_analyzer.normalization import extract_first_name, strip_diacritics


MALE_NAMES = frozenset({
    "john", "michael", "david", "james", "robert", "william", "richard", "charles",
    "joseph", "thomas", "christopher", "daniel", "paul", "mark", "donald", "steven",
    "andrew", "joshua", "kenneth", "matthew", "alexander", "patrick", "jack", "ryan",
    "benjamin", "jacob", "edward", "lucas", "mason", "ethan", "noah", "alex",
})

FEMALE_NAMES = frozenset({
    "mary", "patricia", "jennifer", "linda", "elizabeth", "barbara", "susan", "jessica",
    "sarah", "karen", "nancy", "lisa", "betty", "helen", "sandra", "donna", "carol",
    "ruth", "sharon", "michelle", "laura", "kimberly", "deborah", "dorothy",
    "amy", "angela", "ashley", "brenda", "emma", "olivia", "sophia", "isabella", "anna",
    "maria",
})

FEMALE_ENDINGS = ("a", "ia", "ine", "elle", "ette")
MALE_ENDINGS = ("er", "on", "us", "ander", "ovich")

KNOWN_NAME_CONFIDENCE = 85
ENDING_CONFIDENCE = 60
UNKNOWN_CONFIDENCE = 50


def heuristic_gender(first_name: str) -> Tuple[str, int]:
    """Guess gender and confidence for a single first name.

    Args:
        first_name: First name (case and accents are ignored)

    Returns:
        Tuple of (gender, confidence) where gender is "male", "female" or
        "unknown" and confidence is 85 for a table hit, 60 for an ending
        rule and 50 otherwise.

    Example:
        >>> heuristic_gender("Mary")
        ('female', 85)
        >>> heuristic_gender("Anastasia")
        ('female', 60)
    """
    key = strip_diacritics((first_name or "").strip().lower())

    if key in MALE_NAMES:
        return "male", KNOWN_NAME_CONFIDENCE
    if key in FEMALE_NAMES:
        return "female", KNOWN_NAME_CONFIDENCE

    if not key:
        return "unknown", UNKNOWN_CONFIDENCE

    if key.endswith(FEMALE_ENDINGS):
        return "female", ENDING_CONFIDENCE
    if key.endswith(MALE_ENDINGS):
        return "male", ENDING_CONFIDENCE

    return "unknown", UNKNOWN_CONFIDENCE


def predict_gender_simple(name: str) -> Tuple[str, int]:
    """Guess gender for a full or first name.

    Titles and initials are stripped before the lookup, so both
    "Dr. Maria Rodriguez" and "Maria" give the same answer.
    """
    return heuristic_gender(extract_first_name(name))
