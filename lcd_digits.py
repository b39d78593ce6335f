# lcd_digits.py
#
# ============================================================
# LCD Asset Code: digit encoding, checksum and pattern assembly
# ============================================================
#
# INPUT : a 4-digit asset identifier, e.g. (1, 3, 3, 7)
# OUTPUT: a 48-character bit pattern ("0"/"1") for the 6-character LCD display
#
# ---------------------------
# Display layout
# ---------------------------
# The display shows six characters, each driven by one 8-bit segment pattern:
#
#   position 1..2 : checksum digits (tens, units)
#   position 3..6 : identifier digits, in input order
#
# 6 characters * 8 bits = 48 bits. The renderer places these 48 bits at
# pixels 8..55 of a 256-pixel row (see lcd_render.py).
#
# ============================================================
# Checksum
# ============================================================
# For identifier digits d0 d1 d2 d3 (in the order they are read):
#
#   checksum = (d0 + 10*d1 + 100*d2 + 1000*d3) mod 97
#
# The value is in 0..96. It is split into two display digits by its DECIMAL
# TEXT WIDTH:
#   "56" -> (5, 6)
#   "9"  -> (0, 9)
#
# ============================================================

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from lcd_errors import UnsupportedDigitError

SCHEME_NAME = "LCD-6 asset code"

ID_LENGTH = 4
CHECKSUM_LENGTH = 2
DIGIT_BITS = 8
CHECKSUM_MODULUS = 97
PATTERN_LENGTH = (ID_LENGTH + CHECKSUM_LENGTH) * DIGIT_BITS  # 48


# ============================================================
# Digit -> 8-bit segment pattern
# ============================================================

DIGIT_ENCODINGS: Mapping[int, str] = MappingProxyType({
    0: "01110111",
    1: "01000010",
    2: "10110101",
    3: "11010110",
    4: "11000011",
    5: "11010101",
    6: "11110101",
    7: "01000110",
    8: "11110111",
    9: "11010111",
})


def encode_digit(digit: int) -> str:
    """
    Return the 8-bit segment pattern of one decimal digit.

    Raises:
      UnsupportedDigitError: if digit is not one of 0..9.
    """
    if isinstance(digit, bool) or not isinstance(digit, int):
        raise UnsupportedDigitError(digit)
    try:
        return DIGIT_ENCODINGS[digit]
    except KeyError:
        raise UnsupportedDigitError(digit) from None


# ============================================================
# Checksum
# ============================================================

def compute_checksum(identifier: Sequence[int]) -> int:
    """(d0 + 10*d1 + 100*d2 + 1000*d3) mod 97, always in 0..96."""
    if len(identifier) != ID_LENGTH:
        raise ValueError(f"compute_checksum expects exactly {ID_LENGTH} digits")
    d0, d1, d2, d3 = identifier
    return (d0 + 10 * d1 + 100 * d2 + 1000 * d3) % CHECKSUM_MODULUS


def split_checksum(value: int) -> Tuple[int, int]:
    """
    Split a checksum value into its two display digits.

    The split follows the width of the decimal text, so single-digit values
    get a leading zero digit:
      56 -> (5, 6)
      9  -> (0, 9)
    """
    text = str(value)
    if len(text) == 2:
        return int(text[0]), int(text[1])
    return 0, int(text)


def checksum_digits(identifier: Sequence[int]) -> Tuple[int, int]:
    return split_checksum(compute_checksum(identifier))


# ============================================================
# Encoding table and pattern
# ============================================================

def assemble_encoding(checksum: Sequence[int], identifier: Sequence[int]) -> Dict[int, str]:
    """
    Build the encoding table {position: 8-bit pattern}.

    Positions 1..2 hold the checksum digits, 3..6 the identifier digits.
    Any unsupported digit aborts the whole table.
    """
    if len(checksum) != CHECKSUM_LENGTH or len(identifier) != ID_LENGTH:
        raise ValueError("assemble_encoding expects 2 checksum digits and 4 identifier digits")

    table: Dict[int, str] = {}
    for i, digit in enumerate(checksum):
        table[i + 1] = encode_digit(digit)
    for i, digit in enumerate(identifier):
        table[i + 1 + CHECKSUM_LENGTH] = encode_digit(digit)
    return table


def encoding_pattern(table: Mapping[int, str]) -> str:
    """
    Concatenate the table entries by ascending position into the 48-bit pattern.

    The table must hold exactly positions 1..6, each an 8-character bit string.
    """
    expected = list(range(1, ID_LENGTH + CHECKSUM_LENGTH + 1))
    keys = sorted(table)
    if keys != expected:
        raise ValueError(f"encoding table must hold positions {expected}, got {keys}")

    values: List[str] = []
    for k in keys:
        enc = table[k]
        if len(enc) != DIGIT_BITS or set(enc) - {"0", "1"}:
            raise ValueError(f"encoding at position {k} is not an 8-bit pattern: {enc!r}")
        values.append(enc)

    pattern = "".join(values)
    assert len(pattern) == PATTERN_LENGTH
    return pattern


# ============================================================
# Asset
# ============================================================

@dataclass(frozen=True)
class Asset:
    """
    One display: the identifier read from input, plus its checksum digits and
    the encoding table derived from both.
    """
    identifier: Tuple[int, ...]
    checksum: Tuple[int, int]
    encoding: Mapping[int, str] = field(repr=False)

    @property
    def id_str(self) -> str:
        return "".join(str(d) for d in self.identifier)

    @property
    def pattern(self) -> str:
        return encoding_pattern(self.encoding)


def build_asset(identifier: Sequence[int]) -> Tuple[Asset, Dict[str, Any]]:
    """
    Identifier -> Asset.

    Pipeline:
      1) checksum value = weighted digit sum mod 97
      2) checksum digits = text-width split of the value
      3) encoding table  = checksum digits then identifier digits

    Returns:
      asset: the assembled asset
      meta : debug metadata (safe to print/log)
    """
    ident = tuple(identifier)
    value = compute_checksum(ident)
    checksum = split_checksum(value)
    table = assemble_encoding(checksum, ident)
    asset = Asset(identifier=ident, checksum=checksum, encoding=MappingProxyType(table))

    meta = {
        "scheme_name": SCHEME_NAME,
        "identifier": asset.id_str,
        "checksum_value": value,
        "checksum_digits": "%d%d" % checksum,
        "pattern": asset.pattern,
    }
    return asset, meta
