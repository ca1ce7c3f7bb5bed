"""
Address normalization for the geocode cache key.

Two raw strings with the same normalized form are treated as the same location.
Punctuation is stripped before abbreviation so the result is a fixed point:
normalize_address(normalize_address(x)) == normalize_address(x).
"""
import re

# Whole-word rewrites, applied in order. Targets never appear as sources.
ADDRESS_ABBREVIATIONS: tuple[tuple[str, str], ...] = (
    ("street", "st"),
    ("boulevard", "blvd"),
    ("avenue", "ave"),
    ("drive", "dr"),
    ("road", "rd"),
    ("lane", "ln"),
    ("court", "ct"),
    ("saint", "st"),
    ("san francisco", "sf"),
)

_PUNCTUATION_RE = re.compile(r"[,.]")
_ABBREVIATION_RES = tuple(
    (re.compile(rf"\b{re.escape(word)}\b"), abbr) for word, abbr in ADDRESS_ABBREVIATIONS
)


def _collapse_whitespace(s: str) -> str:
    return " ".join(s.split())


def normalize_address(address: str | None) -> str:
    """Lower-case, trim, collapse whitespace, drop commas/periods, abbreviate street suffixes and cities."""
    s = _collapse_whitespace((address or "").lower())
    s = _collapse_whitespace(_PUNCTUATION_RE.sub("", s))
    for pattern, abbr in _ABBREVIATION_RES:
        s = pattern.sub(abbr, s)
    return s
