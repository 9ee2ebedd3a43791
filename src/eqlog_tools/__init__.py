"""
EQ Log Tools - Python package for EverQuest client log analysis

This package classifies the lines of an EverQuest log file into structured
records and provides command line tools for exporting them to CSV, counting
line types and listing lines no rule recognizes.
"""

__version__ = '0.2.0'

from .log import (
    InvalidLineTypeError,
    all_line_types,
    all_possible_fields,
    classify,
    classify_as,
    parse_currency,
    parse_timestamp,
)
