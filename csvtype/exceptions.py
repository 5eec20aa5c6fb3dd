# ==============================================
# Exceptions
# ==============================================
#
# The detection core (classifier, tokenizer, accumulator) never
# raises. These exceptions belong to the layers around it:
# sampling, row reading, schema storage and configuration.
#
# ==============================================


class CsvTypeError(Exception):
    """
    Base exception for all csvtype errors
    """
    pass


class ConfigError(CsvTypeError):
    """
    Raised when an environment setting has an invalid value
    """
    pass


class SchemaError(CsvTypeError):
    """
    Raised when a schema cannot be built, overridden or loaded
    """
    pass


class ColumnCountError(CsvTypeError):
    """
    Raised when a line's field count differs from the first line
    while a fixed column count is required
    """

    def __init__(self, line_number: int, expected: int, found: int):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(
            f"Line {line_number}: expected {expected} columns, found {found}"
        )


class ValueConversionError(CsvTypeError):
    """
    Raised when a field cannot be converted to its column's type
    while reading rows
    """

    def __init__(self, line_number: int, column: str, text: str, column_type: str):
        self.line_number = line_number
        self.column = column
        self.text = text
        self.column_type = column_type
        super().__init__(
            f"Line {line_number}, column '{column}': cannot read {text!r} as {column_type}"
        )
