# ==============================================
# FieldClassifier
# ==============================================
#
# PURPOSE:
#   Map the text of one CSV field to the narrowest ColumnType
#   that can represent it.
#
# RULES (in order):
# -----------------
#   1. Empty text                        → unknown
#   2. true/false (TRUE_FALSE_BOOL flag) → boolean
#      yes/no     (YES_NO_BOOL flag)     → boolean
#   3. 0x / 0X prefix                    → uint8 / uint16 / uint32 / uint64
#                                          (string if the rest is not hex)
#   4. optional single leading "+", then
#      decimal integer                   → int8 / int16 / int32 / int64
#   5. decimal float (exponent allowed)  → float64
#   6. anything else                     → string
#
#   A parse only counts when it consumes the whole text: "12abc" is a
#   string, not a partially parsed int. The classifier does not trim;
#   whitespace must already be removed by the caller.
#
# CLASS: FieldClassifier
# ----------------------
#   Stateless, classmethods only.
#   - classify(text, flags, start=0, end=None) -> ColumnType
#
# FUNCTION:
# ---------
#   - classify_field(text, flags=DEFAULT_FLAGS, span=None) -> ColumnType
#
# ==============================================

import re
from typing import Optional, Tuple

from .column_type import ColumnType, DetectionFlags, DEFAULT_FLAGS, INT_RANGES


def decimal_value(digits: str) -> int:
    """
    int() of an optionally negative run of ASCII digits, ignoring leading
    zeros so they do not count toward the interpreter's digit limit.
    """
    negative = digits.startswith("-")
    significant = digits.lstrip("-").lstrip("0") or "0"
    return -int(significant) if negative else int(significant)


class FieldClassifier:
    TRUE_FALSE_VARIANTS = {"true", "false"}
    YES_NO_VARIANTS = {"yes", "no"}

    HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")
    INT_PATTERN = re.compile(r"-?[0-9]+")
    FLOAT_PATTERN = re.compile(
        r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
        r"|-?(?:inf|infinity|nan)",
        re.IGNORECASE,
    )

    MAX_INT64_DIGITS = 19

    SIGNED_CANDIDATES = (
        ColumnType.INT8,
        ColumnType.INT16,
        ColumnType.INT32,
        ColumnType.INT64,
    )
    UNSIGNED_CANDIDATES = (
        ColumnType.UINT8,
        ColumnType.UINT16,
        ColumnType.UINT32,
        ColumnType.UINT64,
    )

    @classmethod
    def classify(
        cls,
        text: str,
        flags: DetectionFlags = DEFAULT_FLAGS,
        start: int = 0,
        end: Optional[int] = None,
    ) -> ColumnType:
        """
        Classify text[start:end] as one ColumnType.

        Args:
            text: The line (or field) holding the characters to classify
            flags: Which boolean spellings are recognized
            start: First index of the field within text
            end: One past the last index of the field (default: len(text))

        Returns:
            The narrowest type that can hold the field. Never raises.
        """
        if end is None:
            end = len(text)
        if end <= start:
            return ColumnType.UNKNOWN

        length = end - start

        if length in (4, 5) and flags & DetectionFlags.TRUE_FALSE_BOOL:
            if text[start:end].lower() in cls.TRUE_FALSE_VARIANTS:
                return ColumnType.BOOLEAN

        if length in (2, 3) and flags & DetectionFlags.YES_NO_BOOL:
            if text[start:end].lower() in cls.YES_NO_VARIANTS:
                return ColumnType.BOOLEAN

        if text.startswith(("0x", "0X"), start, end):
            return cls._classify_hex(text, start + 2, end)

        if text[start] == "+":
            start += 1
            if start == end:
                # isolated '+'
                return ColumnType.STRING

        if cls.INT_PATTERN.fullmatch(text, start, end):
            int_type = cls._classify_decimal(text[start:end])
            if int_type is not None:
                return int_type

        # Integers past int64 fall through and are kept as float64.
        if cls.FLOAT_PATTERN.fullmatch(text, start, end):
            return ColumnType.FLOAT64

        return ColumnType.STRING

    @classmethod
    def _classify_hex(cls, text: str, start: int, end: int) -> ColumnType:
        # "0x" on its own is not a number
        if start == end or not cls.HEX_PATTERN.fullmatch(text, start, end):
            return ColumnType.STRING
        uint_type = cls._smallest_type(int(text[start:end], 16), cls.UNSIGNED_CANDIDATES)
        return uint_type if uint_type is not None else ColumnType.STRING

    @classmethod
    def _classify_decimal(cls, digits: str) -> Optional[ColumnType]:
        # int64 needs at most 19 significant digits; skip int() on longer
        # runs, which may exceed the interpreter's str-to-int digit limit.
        if len(digits.lstrip("-").lstrip("0")) > cls.MAX_INT64_DIGITS:
            return None
        return cls._smallest_type(decimal_value(digits), cls.SIGNED_CANDIDATES)

    @staticmethod
    def _smallest_type(value: int, candidates: Tuple[ColumnType, ...]) -> Optional[ColumnType]:
        for candidate in candidates:
            low, high = INT_RANGES[candidate]
            if low <= value <= high:
                return candidate
        return None


def classify_field(
    text: str,
    flags: DetectionFlags = DEFAULT_FLAGS,
    span: Optional[Tuple[int, int]] = None,
) -> ColumnType:
    """
    Classify one field.

    Args:
        text: Field text, or the whole line when span is given
        flags: Detection flags
        span: Optional (start, end) of the field inside text

    Returns:
        ColumnType of the field
    """
    if span is None:
        return FieldClassifier.classify(text, flags)
    start, end = span
    return FieldClassifier.classify(text, flags, start, end)
