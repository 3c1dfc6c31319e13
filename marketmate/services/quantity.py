"""Parsing of raw quantity input from bag controls"""

import re
from dataclasses import dataclass
from typing import Any, Union

_INTEGER_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class ValidQuantity:
    """Input that parsed to an integer"""
    value: int


@dataclass(frozen=True)
class InvalidQuantity:
    """Input that is not an integer; callers fall back instead of failing"""
    raw: Any


ParsedQuantity = Union[ValidQuantity, InvalidQuantity]


def parse_quantity(raw: Any) -> ParsedQuantity:
    """
    Parse a quantity from an int or integer text.

    Whitespace around text is ignored and a sign is allowed. Booleans,
    decimals, empty text and anything else are invalid.
    """
    if isinstance(raw, bool):
        return InvalidQuantity(raw)
    if isinstance(raw, int):
        return ValidQuantity(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if _INTEGER_RE.fullmatch(text):
            return ValidQuantity(int(text))
    return InvalidQuantity(raw)
