"""Data conversion utilities for the JVM Memory Calculator.

This module provides conversion functions used across the engine:
- camelCase initialisation of dataclasses (form / JSON field names)
- Exact-decimal rounding helpers for the sizing formulas
- Megabyte formatting for JVM flag values
"""
import math
import re
from decimal import Decimal
from typing import Any
from typing import Type
from typing import TypeVar
from typing import Union

T = TypeVar("T")

Number = Union[int, float, Decimal]


def camelcase(cls: Type[T]) -> Type[T]:
    """
    Decorator to allow a dataclass to be initialized from camelCase keys.
    Must be placed above the @dataclass decorator.
    """

    def _camel_to_snake(name: str) -> str:
        """
        Converts a camelCase string to snake_case, correctly handling acronyms.
        """
        name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name)
        name = re.sub(r"([A-Z])([A-Z][a-z])", r"\1_\2", name)
        return name.lower()

    original_init = cls.__init__

    def __init__(self, *args, **kwargs: Any):
        if args:
            raise TypeError(
                f"{cls.__name__} only supports keyword arguments for initialization."
            )

        snake_case_kwargs = {_camel_to_snake(k): v for k, v in kwargs.items()}
        original_init(self, **snake_case_kwargs)

    cls.__init__ = __init__
    return cls


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal through its shortest repr, so 0.005 stays 0.005."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def ceil_mb(value: Number, ratio: Number = 1) -> int:
    """Round ``value * ratio`` up to the next whole megabyte.

    The product is evaluated in decimal arithmetic: ``30000 * 0.005`` is 150, not
    150.00000000000003 as binary floats would have it.
    """
    return math.ceil(to_decimal(value) * to_decimal(ratio))


def floor_mb(value: Number, ratio: Number = 1) -> int:
    """Round ``value * ratio`` down to a whole megabyte."""
    return math.floor(to_decimal(value) * to_decimal(ratio))


def round_up_to_multiple(value: int, multiple: int) -> int:
    """Round value up to the next multiple (value itself when already aligned)."""
    if multiple <= 0:
        return value
    return -(-value // multiple) * multiple


def format_mb(value: Number, suffix: str = "m") -> str:
    """Render a megabyte amount as a JVM size literal.

    Whole values keep the megabyte suffix (``384m``); fractional values are
    rendered in kilobytes, rounded up (``0.5`` -> ``512k``).
    """
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return f"{int(amount)}{suffix}"
    return f"{math.ceil(amount * 1024)}k"
