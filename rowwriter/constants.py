"""
Purpose: Constants for the rowwriter package.
Description: Centralizes simple immutable values to avoid magic strings across the codebase.
Key Constants: DEFAULT_FLOAT_PRECISION, DEFAULT_FILE_PATH, COLUMN_SEPARATOR, LINE_TERMINATOR.
"""

# AIDEV-NOTE: These literals are the on-disk format; changing any of them breaks existing files.
DEFAULT_FLOAT_PRECISION: int = 2
DEFAULT_FILE_PATH: str = "result.csv"
COLUMN_SEPARATOR: str = ","
LINE_TERMINATOR: str = "\n"
TRUE_LITERAL: str = "true"
FALSE_LITERAL: str = "false"

ENV_HEADER: str = "ROWWRITER_HEADER"
ENV_DESTINATION: str = "ROWWRITER_DESTINATION"
ENV_FILE: str = "ROWWRITER_FILE"
ENV_FLOAT_PRECISION: str = "ROWWRITER_FLOAT_PRECISION"
ENV_LOG_LEVEL: str = "ROWWRITER_LOG_LEVEL"
