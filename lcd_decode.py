# lcd_decode.py
#
# ============================================================
# LCD Asset Code: fail-closed row reader
# ============================================================
#
# Reads a 256x1 row produced by lcd_render.py back into its 4-digit identifier.
#
# OUTPUT: the identifier if and only if all checks pass, otherwise REJECT.
#
# ---------------------------
# Fail-closed contract
# ---------------------------
#   1) Image must be exactly 256 x 1.
#   2) Pixels are binarized with an Otsu threshold (dark = mark).
#   3) Reserved zones [0, 8) and [56, 256) must be blank.
#   4) Each of the six 8-bit groups must be a known digit pattern.
#   5) The two checksum digits must equal the checksum recomputed from the
#      four identifier digits.
# If any step fails -> REJECT (no identifier).
#
# ============================================================
# Dependencies
# ============================================================
# pip install numpy pillow
#
# ============================================================

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from PIL import Image

from lcd_digits import (
    CHECKSUM_LENGTH,
    DIGIT_BITS,
    DIGIT_ENCODINGS,
    PATTERN_LENGTH,
    checksum_digits,
)
from lcd_render import DATA_END, DATA_OFFSET, ROW_HEIGHT, ROW_WIDTH

# 8-bit pattern -> digit
PATTERN_DIGITS: Dict[str, int] = {enc: digit for digit, enc in DIGIT_ENCODINGS.items()}


@dataclass
class DecodeResult:
    ok: bool
    identifier: Optional[str]
    reason: str
    debug: Dict[str, Any] = field(default_factory=dict)


# ============================================================
# Pixel row -> 48-bit pattern
# ============================================================

def otsu_threshold(values: np.ndarray) -> float:
    """
    Otsu threshold over grayscale samples (0..255).

    Samples <= threshold belong to the dark class. A row of one single value
    has no dark class and yields the mid-gray default 127.
    """
    v8 = np.clip(values.reshape(-1), 0, 255).astype(np.uint8)
    hist = np.bincount(v8, minlength=256).astype(np.float64)

    # candidate cut t: dark = samples <= t, light = samples > t
    w_dark = np.cumsum(hist)
    w_light = hist.sum() - w_dark
    sum_dark = np.cumsum(hist * np.arange(256))
    sum_light = sum_dark[-1] - sum_dark

    cuts = np.flatnonzero((w_dark > 0) & (w_light > 0))
    if cuts.size == 0:
        return 127.0

    mean_dark = sum_dark[cuts] / w_dark[cuts]
    mean_light = sum_light[cuts] / w_light[cuts]
    between = w_dark[cuts] * w_light[cuts] * (mean_dark - mean_light) ** 2
    return float(cuts[int(np.argmax(between))])


def extract_pattern(image: Image.Image) -> Tuple[Optional[str], Dict[str, Any]]:
    """
    Binarize the row and read the 48 data pixels.

    Returns:
      pattern: 48-character bit string, or None if the row is rejected
      stats  : diagnostics (size, threshold, reserved-zone marks, reason)
    """
    if image.size != (ROW_WIDTH, ROW_HEIGHT):
        return None, {"reason": f"image size {image.size} != ({ROW_WIDTH}, {ROW_HEIGHT})"}

    gray = np.asarray(image.convert("L"), dtype=np.uint8)[0]
    thr = otsu_threshold(gray)
    marks = gray <= thr

    reserved_marks = int(marks[:DATA_OFFSET].sum() + marks[DATA_END:].sum())
    stats: Dict[str, Any] = {
        "threshold": thr,
        "reserved_marks": reserved_marks,
    }
    if reserved_marks:
        stats["reason"] = f"{reserved_marks} marked pixel(s) in reserved zones"
        return None, stats

    pattern = "".join("1" if m else "0" for m in marks[DATA_OFFSET:DATA_END])
    return pattern, stats


# ============================================================
# 48-bit pattern -> identifier
# ============================================================

def decode_pattern(pattern: str) -> DecodeResult:
    """
    Pure bit-level fail-closed decoding: groups -> digits -> checksum gate.
    """
    if len(pattern) != PATTERN_LENGTH:
        return DecodeResult(False, None, f"REJECT: pattern length {len(pattern)} != {PATTERN_LENGTH}")

    digits: List[int] = []
    for i in range(0, PATTERN_LENGTH, DIGIT_BITS):
        group = pattern[i:i + DIGIT_BITS]
        digit = PATTERN_DIGITS.get(group)
        if digit is None:
            return DecodeResult(
                False, None,
                f"REJECT: unknown digit pattern {group} at position {i // DIGIT_BITS + 1}",
                {"pattern": pattern},
            )
        digits.append(digit)

    stored = tuple(digits[:CHECKSUM_LENGTH])
    identifier = digits[CHECKSUM_LENGTH:]
    expected = checksum_digits(identifier)
    if stored != expected:
        return DecodeResult(
            False, None,
            "REJECT: checksum mismatch (fail-closed)",
            {"stored_checksum": "%d%d" % stored, "calc_checksum": "%d%d" % expected},
        )

    return DecodeResult(
        True, "".join(str(d) for d in identifier), "OK",
        {"checksum": "%d%d" % expected, "pattern": pattern},
    )


def decode_row_image(image: Image.Image) -> DecodeResult:
    pattern, stats = extract_pattern(image)
    if pattern is None:
        return DecodeResult(False, None, f"REJECT: {stats['reason']}", {"vision": stats})

    res = decode_pattern(pattern)
    res.debug["vision"] = stats
    return res


def decode_image(image_path: str) -> DecodeResult:
    """End-to-end fail-closed decode from an image file."""
    try:
        with Image.open(Path(image_path)) as img:
            img.load()
            return decode_row_image(img)
    except OSError as e:
        return DecodeResult(False, None, f"REJECT: cannot read image ({e})", {"path": str(image_path)})
