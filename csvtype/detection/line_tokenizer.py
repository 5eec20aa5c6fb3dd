# ==============================================
# LineTokenizer
# ==============================================
#
# PURPOSE:
#   Split one line of delimited text into field spans, honoring
#   quoting, separators and whitespace trimming, and classify
#   each field with the FieldClassifier.
#
# SCANNING RULES (per field, left to right):
# ------------------------------------------
#   1. Skip leading whitespace.
#   2. Only whitespace left → one blank field, stop.
#   3. Quoted field: the text strictly between quote_lead and the
#      next quote_trail (inner whitespace kept). Anything between the
#      closing quote and the next separator is ignored. A missing
#      closing quote makes the field run to the end of the line and
#      ends the scan.
#   4. Unquoted field: up to the next separator, with trailing
#      whitespace trimmed.
#
#   An empty line is one blank field: [unknown], not [].
#   An empty field between two separators ("a,,b") is a blank field
#   and scanning continues. A separator right before the end of the
#   line ("a,") does not produce an extra field.
#
# CLASS: LineTokenizer
# --------------------
#   Holds the dialect (separators, quote symbols, whitespace).
#   - split(line) -> list[tuple[int, int]]      field spans
#   - fields(line) -> list[str]                 field texts
#   - classify(line, flags) -> list[ColumnType]
#
# FUNCTIONS:
# ----------
#   - split_fields(line, separators, quote_lead, quote_trail, whitespace)
#   - classify_line(line, separators, quote_lead, quote_trail, whitespace, flags)
#
# ==============================================

import logging
from typing import List, Tuple

from .column_type import ColumnType, DetectionFlags, DEFAULT_FLAGS
from .field_classifier import FieldClassifier

logger = logging.getLogger(__name__)

Span = Tuple[int, int]


class LineTokenizer:
    """
    Splits lines into field spans for one CSV dialect.

    Separators and whitespace are sets of single characters; the quote
    symbols are matched as whole character sequences.
    """

    def __init__(
        self,
        separators: str = ",",
        quote_lead: str = '"',
        quote_trail: str = '"',
        whitespace: str = " \t",
    ):
        """
        Args:
            separators: Characters that end a field
            quote_lead: Sequence that opens a quoted field ("" disables quoting)
            quote_trail: Sequence that closes a quoted field ("" = same as quote_lead)
            whitespace: Characters trimmed around unquoted fields
        """
        self.separators = frozenset(separators)
        self.quote_lead = quote_lead
        self.quote_trail = quote_trail or quote_lead
        self.whitespace = frozenset(whitespace)

    def split(self, line: str) -> List[Span]:
        """
        Find the (start, end) span of every field in a line.

        Args:
            line: One line of text, without its line terminator

        Returns:
            Field spans in column order; at least one span.
        """
        if not line:
            return [(0, 0)]

        spans: List[Span] = []
        length = len(line)
        pos = 0

        while pos < length:
            # Step 1: leading whitespace
            while pos < length and line[pos] in self.whitespace:
                pos += 1

            # Step 2: blank tail
            if pos == length:
                spans.append((pos, pos))
                break

            # Step 3: quoted value
            if self.quote_lead and line.startswith(self.quote_lead, pos):
                first = pos + len(self.quote_lead)
                close = line.find(self.quote_trail, first)
                if close == -1:
                    logger.debug("Unterminated quote at column %d: %r", len(spans), line)
                    spans.append((first, length))
                    break
                spans.append((first, close))
                pos = close + len(self.quote_trail)
                while pos < length and line[pos] not in self.separators:
                    pos += 1
                pos += 1
                continue

            # Step 4: unquoted value
            first = pos
            last = pos
            while pos < length and line[pos] not in self.separators:
                if line[pos] not in self.whitespace:
                    last = pos + 1
                pos += 1
            spans.append((first, last))
            pos += 1

        return spans

    def fields(self, line: str) -> List[str]:
        """
        Field texts of a line, with quotes removed and whitespace trimmed.
        """
        return [line[start:end] for start, end in self.split(line)]

    def classify(self, line: str, flags: DetectionFlags = DEFAULT_FLAGS) -> List[ColumnType]:
        """
        Type of every field in a line.

        Args:
            line: One line of text
            flags: Detection flags passed to the FieldClassifier

        Returns:
            One ColumnType per field, in column order
        """
        return [
            FieldClassifier.classify(line, flags, start, end)
            for start, end in self.split(line)
        ]


def split_fields(
    line: str,
    separators: str = ",",
    quote_lead: str = '"',
    quote_trail: str = '"',
    whitespace: str = " \t",
) -> List[Span]:
    """Field spans of one line. See LineTokenizer.split."""
    return LineTokenizer(separators, quote_lead, quote_trail, whitespace).split(line)


def classify_line(
    line: str,
    separators: str = ",",
    quote_lead: str = '"',
    quote_trail: str = '"',
    whitespace: str = " \t",
    flags: DetectionFlags = DEFAULT_FLAGS,
) -> List[ColumnType]:
    """
    Classify every field of one line.

    Args:
        line: The line to scan
        separators: Set of separator characters
        quote_lead: Opening quote sequence
        quote_trail: Closing quote sequence
        whitespace: Set of whitespace characters
        flags: Detection flags

    Returns:
        Per-line type vector (one entry per field)
    """
    return LineTokenizer(separators, quote_lead, quote_trail, whitespace).classify(line, flags)
