"""Unit tests for digit encoding, checksum and pattern assembly."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from itertools import product

import pytest

from lcd_digits import (
    DIGIT_ENCODINGS,
    assemble_encoding,
    build_asset,
    checksum_digits,
    compute_checksum,
    encode_digit,
    encoding_pattern,
    split_checksum,
)
from lcd_errors import UnsupportedDigitError

PATTERN_1337 = (
    "11010101"  # 5
    "11110101"  # 6
    "01000010"  # 1
    "11010110"  # 3
    "11010110"  # 3
    "01000110"  # 7
)


def test_digit_table_has_ten_distinct_8bit_entries() -> None:
    """Every digit 0..9 maps to its own 8-character bit string."""
    assert sorted(DIGIT_ENCODINGS) == list(range(10))
    assert len(set(DIGIT_ENCODINGS.values())) == 10
    for enc in DIGIT_ENCODINGS.values():
        assert len(enc) == 8
        assert set(enc) <= {"0", "1"}


def test_digit_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        DIGIT_ENCODINGS[0] = "00000000"  # type: ignore[index]


def test_encode_digit_is_stable() -> None:
    assert encode_digit(5) == "11010101"
    assert encode_digit(5) == encode_digit(5)
    assert encode_digit(0) == "01110111"


@pytest.mark.parametrize("value", [-1, 10, 42, "3", 1.0, None, True])
def test_encode_digit_rejects_values_outside_table(value: object) -> None:
    with pytest.raises(UnsupportedDigitError) as excinfo:
        encode_digit(value)  # type: ignore[arg-type]

    assert excinfo.value.value == value
    assert str(excinfo.value) == f"No encoding for given digit: {value}"


def test_compute_checksum_matches_weighted_sum_mod_97() -> None:
    assert compute_checksum([1, 3, 3, 7]) == 56
    assert compute_checksum([2, 6, 7, 4]) == 9
    assert compute_checksum([0, 0, 0, 0]) == 0


def test_compute_checksum_range_over_all_identifiers() -> None:
    """Checksum stays in 0..96 for all 10^4 identifiers."""
    for d0, d1, d2, d3 in product(range(10), repeat=4):
        value = compute_checksum([d0, d1, d2, d3])
        assert value == (d0 + 10 * d1 + 100 * d2 + 1000 * d3) % 97
        assert 0 <= value <= 96


def test_compute_checksum_requires_four_digits() -> None:
    with pytest.raises(ValueError):
        compute_checksum([1, 2, 3])


@pytest.mark.parametrize(
    ("value", "expected"),
    [(56, (5, 6)), (9, (0, 9)), (0, (0, 0)), (10, (1, 0)), (96, (9, 6))],
)
def test_split_checksum_uses_text_width(value: int, expected: tuple) -> None:
    assert split_checksum(value) == expected


def test_checksum_digits_for_known_identifiers() -> None:
    assert checksum_digits([1, 3, 3, 7]) == (5, 6)
    assert checksum_digits([2, 6, 7, 4]) == (0, 9)


def test_assemble_encoding_orders_checksum_then_identifier() -> None:
    table = assemble_encoding((5, 6), (1, 3, 3, 7))

    assert sorted(table) == [1, 2, 3, 4, 5, 6]
    assert table[1] == DIGIT_ENCODINGS[5]
    assert table[2] == DIGIT_ENCODINGS[6]
    assert table[3] == DIGIT_ENCODINGS[1]
    assert table[6] == DIGIT_ENCODINGS[7]


def test_assemble_encoding_propagates_unsupported_digit() -> None:
    with pytest.raises(UnsupportedDigitError):
        assemble_encoding((5, 6), (1, 3, 12, 7))


def test_encoding_pattern_ignores_insertion_order() -> None:
    table = assemble_encoding((5, 6), (1, 3, 3, 7))
    reversed_table = {k: table[k] for k in sorted(table, reverse=True)}

    assert encoding_pattern(reversed_table) == PATTERN_1337
    assert encoding_pattern(table) == PATTERN_1337
    assert len(PATTERN_1337) == 48


def test_encoding_pattern_rejects_missing_position() -> None:
    table = assemble_encoding((5, 6), (1, 3, 3, 7))
    del table[4]

    with pytest.raises(ValueError):
        encoding_pattern(table)


def test_encoding_pattern_rejects_malformed_entry() -> None:
    table = assemble_encoding((5, 6), (1, 3, 3, 7))
    table[2] = "1101"

    with pytest.raises(ValueError):
        encoding_pattern(table)


def test_build_asset_collects_checksum_pattern_and_meta() -> None:
    asset, meta = build_asset([1, 3, 3, 7])

    assert asset.identifier == (1, 3, 3, 7)
    assert asset.checksum == (5, 6)
    assert asset.id_str == "1337"
    assert asset.pattern == PATTERN_1337
    assert meta["checksum_value"] == 56
    assert meta["checksum_digits"] == "56"
    assert meta["pattern"] == PATTERN_1337


def test_build_asset_single_digit_checksum_gets_leading_zero() -> None:
    asset, meta = build_asset([2, 6, 7, 4])

    assert asset.checksum == (0, 9)
    assert meta["checksum_digits"] == "09"
    assert asset.pattern.startswith(DIGIT_ENCODINGS[0] + DIGIT_ENCODINGS[9])


def test_asset_is_immutable() -> None:
    asset, _ = build_asset([1, 3, 3, 7])

    with pytest.raises(FrozenInstanceError):
        asset.checksum = (0, 0)  # type: ignore[misc]
    with pytest.raises(TypeError):
        asset.encoding[1] = "00000000"  # type: ignore[index]
