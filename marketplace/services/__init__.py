"""Shared service helpers."""
from .money import format_money, round_money, to_decimal, to_float

__all__ = [
    "format_money",
    "round_money",
    "to_decimal",
    "to_float",
]
