"""
Auction input validation: amount coercion and identifier rules.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

Amount = Union[Decimal, int, str, float]


def to_amount(value: Amount) -> Decimal:
    """
    Coerce a monetary value to Decimal.

    Floats go through their string form so 0.1 stays 0.1.
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool):
        raise ValueError(f"Amount must be numeric, got {type(value)}")
    elif isinstance(value, (int, str, float)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Amount is not a number: {value!r}")
    else:
        raise ValueError(f"Amount must be numeric, got {type(value)}")

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount


def validate_price(name: str, amount: Decimal) -> None:
    """Validate that a price is not negative"""
    if amount < 0:
        raise ValueError(f"{name} cannot be negative, got {amount}")


def validate_increment(amount: Decimal) -> None:
    """Validate that the minimum bid increment is positive"""
    if amount <= 0:
        raise ValueError(f"Minimum bid increment must be positive, got {amount}")


def validate_duration(minutes: int) -> None:
    """Validate an auction duration in minutes"""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise ValueError(f"Duration must be integer minutes, got {type(minutes)}")
    if minutes < 0:
        raise ValueError(f"Duration cannot be negative, got {minutes}")


def validate_username(username: str) -> None:
    """Validate username format"""
    if not isinstance(username, str):
        raise ValueError(f"Username must be string, got {type(username)}")
    if not username or not username.strip():
        raise ValueError("Username cannot be empty")


def validate_item_name(name: str) -> None:
    """Validate item name format"""
    if not isinstance(name, str):
        raise ValueError(f"Item name must be string, got {type(name)}")
    if not name or not name.strip():
        raise ValueError("Item name cannot be empty")
