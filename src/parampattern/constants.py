"""
parampattern.constants
======================

Single place for default delimiters, source labels and diagnostic codes, so
compiler, matcher and reporting never duplicate strings like "{".
"""

from __future__ import annotations

# ---- delimiters -----------------------------------------------------------------

DEFAULT_OPEN_BRACKET = "{"
DEFAULT_CLOSE_BRACKET = "}"

# separates a placeholder name from its format hint: "{DATE, mmm dd, yyyy}"
FORMAT_SEPARATOR = ","

# ---- source labels --------------------------------------------------------------

PATTERN_LABEL = "<pattern>"
INPUT_LABEL = "<input>"

# ---- diagnostic codes -----------------------------------------------------------

# compile time
ADJACENT_PLACEHOLDERS = "PP101"
BLANK_FORMAT = "PP102"
UNTERMINATED_PLACEHOLDER = "PP104"

# value access
UNKNOWN_PARAMETER = "PP201"

# matching
SEGMENT_NOT_FOUND = "PP301"
CONFLICTING_VALUES = "PP302"
