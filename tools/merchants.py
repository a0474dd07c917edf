"""Friendly merchant names from raw bank descriptions."""

import re

_PREFIXES = re.compile(
    r"^(PURCHASE AUTHORIZED ON |DEBIT CARD PURCHASE - |VISA PURCHASE - |CARD PURCHASE - )",
    re.IGNORECASE,
)
_DATES = re.compile(r"\b\d{1,4}[-/]\d{1,2}[-/]\d{1,4}\b")
_REFERENCE_IDS = re.compile(r"\b[A-Z0-9]{10,}\b")
_HASH_NUMBERS = re.compile(r"#\d+")
_STAR_NUMBERS = re.compile(r"\*\d+")
_LOCATION_CODES = re.compile(r"\b[A-Z]{2}\*")
_TRAILING = re.compile(r"[-/\s]+$")

_MERCHANT_PATTERNS = [
    (re.compile(r"AMZN MKTP", re.IGNORECASE), "Amazon"),
    (re.compile(r"AMAZON\.COM", re.IGNORECASE), "Amazon"),
    (re.compile(r"WM SUPERCENTER", re.IGNORECASE), "Walmart"),
    (re.compile(r"WALMART\.COM", re.IGNORECASE), "Walmart"),
    (re.compile(r"TARGET\.COM", re.IGNORECASE), "Target"),
    (re.compile(r"COSTCO WHSE", re.IGNORECASE), "Costco"),
    (re.compile(r"SHELL OIL", re.IGNORECASE), "Shell"),
    (re.compile(r"CHEVRON", re.IGNORECASE), "Chevron"),
    (re.compile(r"STARBUCKS", re.IGNORECASE), "Starbucks"),
    (re.compile(r"MCDONALD'S", re.IGNORECASE), "McDonald's"),
    (re.compile(r"SQ \*", re.IGNORECASE), ""),
    (re.compile(r"TST\* ", re.IGNORECASE), ""),
    (re.compile(r"PAYPAL \*", re.IGNORECASE), "PayPal - "),
]


def _capitalize(word: str) -> str:
    if len(word) <= 2:
        return word.upper()
    return word[0].upper() + word[1:].lower()


def generate_merchant_name(description: str) -> str:
    """Turn a raw description into a readable merchant name.

    >>> generate_merchant_name("DEBIT CARD PURCHASE - STARBUCKS STORE #1234")
    'Starbucks Store'

    Returns the description unchanged when nothing is left after cleanup.
    """
    if not description:
        return ""

    friendly = _PREFIXES.sub("", description.strip())
    friendly = _DATES.sub("", friendly)
    friendly = _REFERENCE_IDS.sub("", friendly)
    friendly = _HASH_NUMBERS.sub("", friendly)
    friendly = _STAR_NUMBERS.sub("", friendly)
    friendly = _LOCATION_CODES.sub("", friendly)

    for pattern, replacement in _MERCHANT_PATTERNS:
        friendly = pattern.sub(replacement, friendly)

    friendly = " ".join(friendly.split())
    friendly = _TRAILING.sub("", friendly)

    friendly = " ".join(_capitalize(word) for word in friendly.split(" ") if word)
    return friendly or description
