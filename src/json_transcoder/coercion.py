"""Conversion of element text and attribute values to JSON scalars."""

import math
import re
from typing import Union

from .types import DiagnosticType, JSONScalar, ScalarType

LONG_MIN = -2 ** 63
LONG_MAX = 2 ** 63 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class CoercionError(ValueError):
    """Raised when a value cannot be read as its declared type."""

    def __init__(self, message: str, diagnostic_type: DiagnosticType):
        super().__init__(message)
        self.diagnostic_type = diagnostic_type


def coerce_number(text: str) -> Union[int, float]:
    """
    Read text as a 64-bit float if it contains a dot, else a 64-bit integer.

    Args:
        text: Raw value

    Returns:
        The parsed number

    Raises:
        CoercionError: If the text is not a number, does not fit in a signed
            64-bit integer, or is not a finite float
    """
    if '.' in text:
        candidate = text.strip()
        if _DECIMAL_PATTERN.fullmatch(candidate):
            number = float(candidate)
            if math.isfinite(number):
                return number
    elif _INTEGER_PATTERN.fullmatch(text):
        number = int(text)
        if LONG_MIN <= number <= LONG_MAX:
            return number
    raise CoercionError(f"'{text}' is not a number", DiagnosticType.NUMBER_COERCION)


def coerce_boolean(text: str) -> bool:
    """
    Read text as a boolean; only the exact literals are accepted.

    Raises:
        CoercionError: For anything other than ``true`` or ``false``
    """
    if text == "true":
        return True
    if text == "false":
        return False
    raise CoercionError(f"'{text}' is not a boolean", DiagnosticType.BOOLEAN_COERCION)


def coerce_scalar(text: str, scalar_type: ScalarType) -> JSONScalar:
    """
    Convert raw text according to its declared scalar type.

    Null discards the text; string and default keep it unchanged.

    Raises:
        CoercionError: If a number or boolean cannot be read
    """
    if scalar_type is ScalarType.NUMBER:
        return coerce_number(text)
    if scalar_type is ScalarType.BOOLEAN:
        return coerce_boolean(text)
    if scalar_type is ScalarType.NULL:
        return None
    return text
