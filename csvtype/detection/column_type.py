# ==============================================
# Column Types & Detection Flags
# ==============================================
#
# PURPOSE:
#   The closed set of types a CSV column can resolve to, and the
#   flag set that controls what the detector is allowed to recognize.
#
# ENUMS:
# ------
# - ColumnType(Enum)
#     boolean, int8, uint8, int16, uint16, int32, uint32,
#     int64, uint64, float64, string, unknown
#
#     unknown is the bottom of the promotion lattice (no information),
#     string is the top (absorbing, never demoted).
#
# - DetectionFlags(IntFlag)
#     Independent toggles, combinable with "|":
#       header:      HAS_HEADER_ROW | NO_HEADER_ROW | (neither = detect)
#       empty lines: SKIP_EMPTY_LINES (unset = include)
#       row width:   FIXED_COLUMN_COUNT (unset = variable)
#       integers:    SIGNED_INT, UNSIGNED_INT, ANY_INT
#       booleans:    TRUE_FALSE_BOOL, YES_NO_BOOL, INTEGER_BOOL, ANY_BOOL
#
# HELPERS:
# --------
# - signed_bits(t) / unsigned_bits(t) / int_bits(t) -> int
# - is_signed_int / is_unsigned_int / is_int / is_float -> bool
# - make_signed(bits) / make_unsigned(bits) -> ColumnType
# - promotion_rank(t) -> int     (position in the lattice)
#
# ==============================================

from enum import Enum, IntFlag


class ColumnType(Enum):
    """
    Type of a single field or of a whole column.

    Values are the lower-case names, which is also how schemas are
    stored on disk.
    """
    BOOLEAN = "boolean"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT64 = "float64"
    STRING = "string"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class DetectionFlags(IntFlag):
    """
    Hints describing the CSV contents and which types may be detected.
    """
    NONE = 0x0000

    # Header row. Neither bit set means "detect".
    HAS_HEADER_ROW = 0x0001
    NO_HEADER_ROW = 0x0002
    HEADER_MASK = HAS_HEADER_ROW | NO_HEADER_ROW

    SKIP_EMPTY_LINES = 0x0004
    FIXED_COLUMN_COUNT = 0x0008

    SIGNED_INT = 0x0010      # decimal digits, optional leading + or -
    UNSIGNED_INT = 0x0020    # hex digits with a leading 0x or 0X
    ANY_INT = SIGNED_INT | UNSIGNED_INT

    TRUE_FALSE_BOOL = 0x0040  # true/false, case-insensitive
    YES_NO_BOOL = 0x0080      # yes/no, case-insensitive
    INTEGER_BOOL = 0x0100     # integers accepted as booleans when reading rows
    ANY_BOOL = TRUE_FALSE_BOOL | YES_NO_BOOL | INTEGER_BOOL

    HEADER_DEFAULT = HAS_HEADER_ROW | SKIP_EMPTY_LINES | ANY_INT | ANY_BOOL
    NO_HEADER_DEFAULT = NO_HEADER_ROW | SKIP_EMPTY_LINES | ANY_INT | ANY_BOOL


# Detection-only default: every type is recognizable, header is detected.
DEFAULT_FLAGS = DetectionFlags.SKIP_EMPTY_LINES | DetectionFlags.ANY_INT | DetectionFlags.ANY_BOOL


_SIGNED_BITS = {
    ColumnType.INT8: 8,
    ColumnType.INT16: 16,
    ColumnType.INT32: 32,
    ColumnType.INT64: 64,
}

_UNSIGNED_BITS = {
    ColumnType.UINT8: 8,
    ColumnType.UINT16: 16,
    ColumnType.UINT32: 32,
    ColumnType.UINT64: 64,
}

_SIGNED_BY_BITS = {bits: t for t, bits in _SIGNED_BITS.items()}
_UNSIGNED_BY_BITS = {bits: t for t, bits in _UNSIGNED_BITS.items()}

# Inclusive value ranges, used when classifying and when reading rows.
INT_RANGES = {
    ColumnType.INT8: (-(2 ** 7), 2 ** 7 - 1),
    ColumnType.INT16: (-(2 ** 15), 2 ** 15 - 1),
    ColumnType.INT32: (-(2 ** 31), 2 ** 31 - 1),
    ColumnType.INT64: (-(2 ** 63), 2 ** 63 - 1),
    ColumnType.UINT8: (0, 2 ** 8 - 1),
    ColumnType.UINT16: (0, 2 ** 16 - 1),
    ColumnType.UINT32: (0, 2 ** 32 - 1),
    ColumnType.UINT64: (0, 2 ** 64 - 1),
}


def signed_bits(column_type: ColumnType) -> int:
    """Bit-width of a signed integer type, 0 for anything else."""
    return _SIGNED_BITS.get(column_type, 0)


def unsigned_bits(column_type: ColumnType) -> int:
    """Bit-width of an unsigned integer type, 0 for anything else."""
    return _UNSIGNED_BITS.get(column_type, 0)


def int_bits(column_type: ColumnType) -> int:
    return max(signed_bits(column_type), unsigned_bits(column_type))


def is_signed_int(column_type: ColumnType) -> bool:
    return column_type in _SIGNED_BITS


def is_unsigned_int(column_type: ColumnType) -> bool:
    return column_type in _UNSIGNED_BITS


def is_int(column_type: ColumnType) -> bool:
    return is_signed_int(column_type) or is_unsigned_int(column_type)


def is_float(column_type: ColumnType) -> bool:
    return column_type is ColumnType.FLOAT64


def make_signed(bits: int) -> ColumnType:
    """
    Signed integer type with exactly the given bit-width.

    Raises:
        ValueError: If bits is not one of 8, 16, 32, 64
    """
    try:
        return _SIGNED_BY_BITS[bits]
    except KeyError:
        raise ValueError(f"No signed integer type with {bits} bits") from None


def make_unsigned(bits: int) -> ColumnType:
    """
    Unsigned integer type with exactly the given bit-width.

    Raises:
        ValueError: If bits is not one of 8, 16, 32, 64
    """
    try:
        return _UNSIGNED_BY_BITS[bits]
    except KeyError:
        raise ValueError(f"No unsigned integer type with {bits} bits") from None


def promotion_rank(column_type: ColumnType) -> int:
    """
    Level of a type in the promotion lattice.

    unknown (0) < boolean, float64, integers by width (1..5) < string (6).
    Types on the same level in different branches are not ordered
    against each other; merging them always moves up.
    """
    if column_type is ColumnType.UNKNOWN:
        return 0
    if column_type is ColumnType.STRING:
        return 6
    if is_int(column_type):
        # int8/uint8 -> 1 ... int64/uint64 -> 4
        return {8: 1, 16: 2, 32: 3, 64: 4}[int_bits(column_type)]
    if is_float(column_type):
        return 5
    return 1
