import pytest

from enneagram_bot.normalizer import (
    composite_key,
    extract_choice_digits,
    normalize_ordered_triple,
    normalize_single_digit,
    to_ascii_digits,
)


def test_to_ascii_digits_maps_every_fullwidth_numeral():
    fullwidth = "".join(chr(0xFF10 + i) for i in range(10))
    assert to_ascii_digits(fullwidth) == "0123456789"


def test_to_ascii_digits_keeps_other_characters_in_place():
    assert to_ascii_digits("답：１번, ２ and 3") == "답：1번, 2 and 3"
    assert to_ascii_digits(None) == ""
    assert to_ascii_digits(7) == "7"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  2장", "2"),
        ("4", ""),
        ("", ""),
        (None, ""),
        ("\ufeff 3 ", "3"),
        ("３", "3"),
        ("31", "3"),
        ("답은 9 아니고 1", "1"),
    ],
)
def test_normalize_single_digit(raw, expected):
    assert normalize_single_digit(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1 5 9", "1-5-9"),
        ("[1, 5, 9]", "1-5-9"),
        ("['1', '5', '9']", "1-5-9"),
        ('["9","2","7"]', "9-2-7"),
        ("１ ５ ９", "1-5-9"),
        ("5", ""),
        ("9 9", ""),
        ("9 9 9", "9-9-9"),
        ("1 2 3 4", "1-2-3"),
        ("3,1,2", "3-1-2"),
        ("\ufeff 2-8-3 ", "2-8-3"),
    ],
)
def test_normalize_ordered_triple(raw, expected):
    assert normalize_ordered_triple(raw) == expected


def test_malformed_brackets_fall_back_to_raw_digits():
    assert normalize_ordered_triple("[1, 5, 9") == "1-5-9"
    assert normalize_ordered_triple("[1 5 9]") == "1-5-9"
    assert normalize_ordered_triple("[{]") == ""


def test_bracketed_elements_are_scanned_for_digits():
    assert normalize_ordered_triple('["123"]') == "1-2-3"
    assert normalize_ordered_triple("[0, 0, 0]") == ""


def test_extract_choice_digits_keeps_order_and_duplicates():
    assert extract_choice_digits("9 0 9 1") == ["9", "9", "1"]
    assert extract_choice_digits(None) == []


def test_composite_key():
    assert composite_key("1", "2", "1", "1-2-3") == "1-2-1-1-2-3"
    assert composite_key("1", "2", "1", "1-2-3") != composite_key("1", "2", "1", "1-3-2")


def test_deeply_nested_brackets_fall_back_to_raw_digits():
    nested = "[" * 5000 + "1, 2, 3" + "]" * 5000
    assert normalize_ordered_triple(nested) == "1-2-3"
    assert normalize_ordered_triple("[" * 5000 + "]" * 5000) == ""
