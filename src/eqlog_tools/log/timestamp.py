"""
Timestamp parsing for EverQuest log lines.

Every line written by the client starts with a fixed-width stamp such as
``[Mon Oct 13 00:42:36 2003] `` (27 characters including the trailing space).
"""

from dataclasses import dataclass, astuple
from datetime import datetime
from typing import Optional

__all__ = ['TIMESTAMP_LENGTH', 'TIMESTAMP_FORMAT', 'TimestampParts', 'parse_timestamp']

# Width of the bracketed stamp plus its trailing space
TIMESTAMP_LENGTH = 27

# strptime layout of the stamp once brackets are removed
TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Y"

_SEPARATORS = str.maketrans('[]:', '   ')


@dataclass(frozen=True)
class TimestampParts:
    """Decomposed log timestamp. Components are raw text tokens, or None when missing."""
    day: Optional[str] = None
    month: Optional[str] = None
    date: Optional[str] = None
    hour: Optional[str] = None
    minute: Optional[str] = None
    second: Optional[str] = None
    year: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True when all seven components were present."""
        return all(part is not None for part in astuple(self))

    def to_datetime(self) -> datetime:
        """
        Convert the components to a datetime.

        Returns:
            The datetime the stamp describes.

        Raises:
            ValueError: If a component is missing or not a valid date/time value.
        """
        if not self.is_complete:
            raise ValueError(f"Incomplete timestamp: {self}")
        text = f"{self.day} {self.month} {self.date} {self.hour}:{self.minute}:{self.second} {self.year}"
        return datetime.strptime(text, TIMESTAMP_FORMAT)


def parse_timestamp(raw: str) -> TimestampParts:
    """
    Split a raw log timestamp into its seven components.

    ``[Mon Oct 13 00:42:36 2003] `` becomes day='Mon', month='Oct', date='13',
    hour='00', minute='42', second='36', year='2003'. No validation is done;
    short input leaves the trailing components as None.

    Args:
        raw: The bracketed timestamp substring.

    Returns:
        TimestampParts with the tokens in fixed order.
    """
    tokens = (raw or '').translate(_SEPARATORS).split()[:7]
    return TimestampParts(*tokens)
