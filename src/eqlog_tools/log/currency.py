"""
Compound currency parsing.

Money shows up in several kinds of log lines as free text like
``67 platinum, 16 gold, 20 silver and 36 copper``. Any subset of the four
denominations may appear, in any order.
"""

import re
from dataclasses import dataclass, asdict
from typing import Dict, Optional

__all__ = ['DENOMINATIONS', 'CurrencyAmount', 'parse_currency']

DENOMINATIONS = ('platinum', 'gold', 'silver', 'copper')

# Copper value of one coin of each denomination
COPPER_VALUES = {'platinum': 1000, 'gold': 100, 'silver': 10, 'copper': 1}

AND_PATTERN = re.compile(r'\band\b')
TOKEN_SPLIT_PATTERN = re.compile(r'[\s,]+')


@dataclass(frozen=True)
class CurrencyAmount:
    """An amount of money split into the four coin denominations."""
    platinum: int = 0
    gold: int = 0
    silver: int = 0
    copper: int = 0

    @property
    def total_copper(self) -> int:
        """The whole amount expressed in copper pieces."""
        return sum(getattr(self, name) * COPPER_VALUES[name] for name in DENOMINATIONS)

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def parse_currency(text: Optional[str]) -> CurrencyAmount:
    """
    Parse a free-text money mention into a CurrencyAmount.

    The word "and" is removed first so it is never read as a denomination.
    The remaining tokens are read as amount/denomination pairs; a repeated
    denomination keeps its last amount. Unknown denominations and non-numeric
    amounts are ignored.

    Args:
        text: Money text, e.g. "1 gold 2 silver 5 copper". None is treated as "".

    Returns:
        CurrencyAmount with unmentioned denominations set to 0.
    """
    cleaned = AND_PATTERN.sub(' ', text or '')
    tokens = [token for token in TOKEN_SPLIT_PATTERN.split(cleaned) if token]

    coins = {}
    for amount, denomination in zip(tokens[0::2], tokens[1::2]):
        denomination = denomination.lower()
        if denomination in COPPER_VALUES and amount.isdigit():
            coins[denomination] = int(amount)

    return CurrencyAmount(**coins)
