import json
import re
from typing import Any, List

BOM = "\ufeff"
KEY_SEPARATOR = "-"

FULLWIDTH_ZERO = 0xFF10
FULLWIDTH_NINE = 0xFF19

_SINGLE_CHOICE_RE = re.compile(r"[1-3]")
_RANK_DIGIT_RE = re.compile(r"[1-9]")
_BRACKETED_RE = re.compile(r"\[.*\]")


def to_ascii_digits(text: Any) -> str:
    """Purpose: Replace full-width numerals with their ASCII digit equivalents.
    Inputs/Outputs: Input is any value (None becomes ""); output is a string where
        U+FF10..U+FF19 are mapped to "0".."9" and every other character is kept.
    Side Effects / State: None; pure function.
    Dependencies: Used by every normalize_* helper and by table loading.
    Failure Modes: None; non-string input is stringified.
    Testing Notes: "１２３" -> "123"; mixed text keeps non-digit characters in place.
    """
    # Shift full-width code points down to the ASCII digit block.
    if text is None:
        return ""
    return "".join(
        chr(ord(ch) - FULLWIDTH_ZERO + ord("0")) if FULLWIDTH_ZERO <= ord(ch) <= FULLWIDTH_NINE else ch
        for ch in str(text)
    )


def _clean(text: Any) -> str:
    return to_ascii_digits(text).lstrip(BOM).strip()


def normalize_single_digit(text: Any) -> str:
    """Purpose: Reduce a free-text answer to the first expressed choice in {1,2,3}.
    Inputs/Outputs: Input is raw text; output is "1", "2", "3" or "" when none is present.
    Side Effects / State: None; pure function.
    Dependencies: Uses to_ascii_digits; called for Q1-1, Q1-2, Q2-1 and table columns.
    Failure Modes: Returns "" for empty input or when no 1-3 digit appears.
    Testing Notes: "  2장" -> "2"; "4" -> ""; "31" -> "3" (first match wins).
    """
    # Only the first matching character counts.
    match = _SINGLE_CHOICE_RE.search(_clean(text))
    return match.group(0) if match else ""


def extract_choice_digits(text: Any) -> List[str]:
    """Return every 1-9 digit of ``text`` in order, duplicates included."""
    return _RANK_DIGIT_RE.findall("" if text is None else str(text))


def _triple_from_bracketed(text: str) -> str:
    # Tolerate python-style quotes; a parse failure falls through to the raw path.
    # Deeply nested brackets exhaust the decoder's recursion limit.
    try:
        parsed = json.loads(text.replace("'", '"'))
    except (ValueError, RecursionError):
        return ""
    values = parsed if isinstance(parsed, list) else []
    digits = extract_choice_digits(" ".join(to_ascii_digits(value) for value in values))
    if len(digits) < 3:
        return ""
    return KEY_SEPARATOR.join(digits[:3])


def normalize_ordered_triple(text: Any) -> str:
    """Purpose: Canonicalize a ranked pick of three options into "a-b-c".
    Inputs/Outputs: Input is raw text such as "1 5 9", "[1, 5, 9]" or "['1','5','9']";
        output is the first three 1-9 digits joined by "-" in the order given, or "".
    Side Effects / State: None; pure function.
    Dependencies: Uses json for bracketed lists, extract_choice_digits otherwise.
    Failure Modes: Malformed bracket content never raises; it falls back to raw digit
        extraction. Fewer than three digits yields "".
    Testing Notes: "1 5 9" and "[1, 5, 9]" -> "1-5-9"; "5" -> ""; "9 9 9" -> "9-9-9".
    """
    cleaned = _clean(text)
    if _BRACKETED_RE.fullmatch(cleaned):
        triple = _triple_from_bracketed(cleaned)
        if triple:
            return triple

    digits = extract_choice_digits(cleaned)
    if len(digits) < 3:
        return ""
    return KEY_SEPARATOR.join(digits[:3])


def composite_key(key1: str, key2: str, key3: str, triple: str) -> str:
    """Purpose: Build the lookup key for a normalized answer combination.
    Inputs/Outputs: Inputs are three single-digit answers and an "a-b-c" triple;
        output is e.g. "1-2-1-1-2-3".
    Side Effects / State: None; pure function.
    Failure Modes: None. Single-digit fields never contain the separator and the triple
        always has exactly three digit positions, so distinct valid tuples never collide.
    Testing Notes: composite_key("1", "2", "1", "1-2-3") == "1-2-1-1-2-3".
    """
    return KEY_SEPARATOR.join((key1, key2, key3, triple))
