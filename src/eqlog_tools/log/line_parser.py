"""
EverQuest log line classification.

``classify`` turns one raw log line into a flat record:

    classify("[Mon Oct 13 00:42:36 2003] You have slain a Bloodguard crypt sentry!\\n")
    # {'slayee': 'a Bloodguard crypt sentry', 'line_type': 'SLAIN_BY_YOU',
    #  'time_stamp': '[Mon Oct 13 00:42:36 2003] '}

Lines that match no rule (or are too short to carry a timestamp and content)
give None. That is the normal outcome for the many line formats the rule
table does not know about, so it is not logged.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .line_types import LINE_TYPE_RULES, LineTypeRule
from .timestamp import TIMESTAMP_LENGTH

__all__ = [
    'InvalidLineTypeError', 'LineParser', 'UNIVERSAL_FIELDS',
    'classify', 'classify_as', 'all_line_types', 'all_possible_fields',
]

logger = logging.getLogger(__name__)

# Fields present on every classified record
UNIVERSAL_FIELDS = ('line_type', 'time_stamp')

# Lines no longer than this cannot hold a timestamp and some content
MAX_SHORT_LINE_LENGTH = TIMESTAMP_LENGTH + 1

LINE_TERMINATORS = '\r\n'


class InvalidLineTypeError(ValueError):
    """Raised when a line type name is not part of the rule table."""

    def __init__(self, line_type: str):
        super().__init__(f"Unknown line type: {line_type!r}")
        self.line_type = line_type


class LineParser:
    """
    Classifies log lines against an ordered rule table.

    Rules are evaluated in the order given and the first full match wins.
    The parser holds no per-call state, so one instance can be shared freely.

    Attributes:
        rules (tuple): The ordered rules.
    """

    def __init__(self, rules: Iterable[LineTypeRule] = LINE_TYPE_RULES) -> None:
        """
        Initialize the parser.

        Args:
            rules: Ordered line type rules. Defaults to the full EverQuest table.

        Raises:
            ValueError: If two rules share a name.
        """
        self.rules = tuple(rules)
        self._rules_by_name = {}
        for rule in self.rules:
            if rule.name in self._rules_by_name:
                raise ValueError(f"Duplicate line type: {rule.name}")
            self._rules_by_name[rule.name] = rule

    @staticmethod
    def _split_line(line: str):
        """Return (time_stamp, content), or None when the line is too short."""
        if line is None or len(line) <= MAX_SHORT_LINE_LENGTH:
            return None
        return line[:TIMESTAMP_LENGTH], line[TIMESTAMP_LENGTH:].rstrip(LINE_TERMINATORS)

    @staticmethod
    def _build_record(rule: LineTypeRule, fields: Dict[str, Any], time_stamp: str) -> Dict[str, Any]:
        fields['line_type'] = rule.name
        fields['time_stamp'] = time_stamp
        return fields

    def classify(self, line: str) -> Optional[Dict[str, Any]]:
        """
        Classify a raw log line.

        Args:
            line: One line from the log, timestamp included. A trailing newline is allowed.

        Returns:
            The record for the first matching rule, or None if the line is unrecognized.
        """
        parts = self._split_line(line)
        if parts is None:
            return None
        time_stamp, content = parts

        for rule in self.rules:
            fields = rule.match(content)
            if fields is not None:
                logger.debug(f"Matched {rule.name}: {content}")
                return self._build_record(rule, fields, time_stamp)

        return None

    def classify_as(self, line_type: str, line: str) -> Optional[Dict[str, Any]]:
        """
        Classify a raw log line against a single named rule.

        Args:
            line_type: Name of the rule to try.
            line: One line from the log, timestamp included.

        Returns:
            The record if the line matches that rule, else None.

        Raises:
            InvalidLineTypeError: If line_type is not in the rule table.
        """
        rule = self.get_rule(line_type)

        parts = self._split_line(line)
        if parts is None:
            return None
        time_stamp, content = parts

        fields = rule.match(content)
        if fields is None:
            return None
        return self._build_record(rule, fields, time_stamp)

    def get_rule(self, line_type: str) -> LineTypeRule:
        """
        Look up a rule by name.

        Raises:
            InvalidLineTypeError: If line_type is not in the rule table.
        """
        try:
            return self._rules_by_name[line_type]
        except KeyError:
            raise InvalidLineTypeError(line_type) from None

    def all_line_types(self) -> List[str]:
        """Names of every rule, in evaluation order."""
        return [rule.name for rule in self.rules]

    def all_possible_fields(self) -> List[str]:
        """
        Every field name any record can carry.

        Returns:
            Sorted, duplicate-free list including line_type and time_stamp.
        """
        fields = set(UNIVERSAL_FIELDS)
        for rule in self.rules:
            fields.update(rule.fields)
        return sorted(fields)


# Shared parser over the full rule table
default_parser = LineParser()


def classify(line: str) -> Optional[Dict[str, Any]]:
    """Classify a raw log line with the default rule table."""
    return default_parser.classify(line)


def classify_as(line_type: str, line: str) -> Optional[Dict[str, Any]]:
    """Classify a raw log line against one named rule of the default table."""
    return default_parser.classify_as(line_type, line)


def all_line_types() -> List[str]:
    return default_parser.all_line_types()


def all_possible_fields() -> List[str]:
    return default_parser.all_possible_fields()
