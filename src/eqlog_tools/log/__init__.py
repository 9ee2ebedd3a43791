"""
EverQuest Log Line Parsing

This package classifies lines from an EverQuest client log (eqlog_<name>_<server>.txt)
into structured records. Shared sub-parsers handle the leading timestamp and
compound currency amounts.
"""

from .currency import CurrencyAmount, parse_currency
from .line_parser import (
    InvalidLineTypeError,
    LineParser,
    all_line_types,
    all_possible_fields,
    classify,
    classify_as,
)
from .line_types import LINE_TYPE_RULES, LineTypeRule
from .timestamp import TimestampParts, parse_timestamp

__all__ = [
    'CurrencyAmount',
    'InvalidLineTypeError',
    'LINE_TYPE_RULES',
    'LineParser',
    'LineTypeRule',
    'TimestampParts',
    'all_line_types',
    'all_possible_fields',
    'classify',
    'classify_as',
    'parse_currency',
    'parse_timestamp',
]
