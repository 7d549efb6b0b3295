"""The operators understood by expressions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


class OperatorType(enum.Enum):
    UNARY = "unary"
    BINARY = "binary"


class Associativity(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Operator:
    """An operator; unary operators are keyed by their ``u``-prefixed symbol."""

    name: str
    symbol: str
    type: OperatorType
    precedence: int
    associativity: Associativity
    asm_call_name: str


_OPERATOR_SYMBOLS: tuple[str, ...] = (
    "+", "-", "*", "/", "=", "+=", "-=", "*=", "/=", "%", "%=",
)


def get_operator_symbols() -> tuple[str, ...]:
    """Return the operator symbols as written in source, before unary marking."""
    return _OPERATOR_SYMBOLS


def _create_operator_map() -> Mapping[str, Operator]:
    # Lower precedence numbers bind tighter.
    operators = {
        "=": Operator("Assignment", "=", OperatorType.BINARY, 3,
                      Associativity.RIGHT, "_operator_assignment"),
        "+": Operator("Addition", "+", OperatorType.BINARY, 2,
                      Associativity.LEFT, "_operator_addition"),
        "-": Operator("Subtraction", "-", OperatorType.BINARY, 2,
                      Associativity.LEFT, "_operator_subtraction"),
        "*": Operator("Multiplication", "*", OperatorType.BINARY, 1,
                      Associativity.LEFT, "_operator_multiplication"),
        "/": Operator("Division", "/", OperatorType.BINARY, 1,
                      Associativity.LEFT, "_operator_division"),
        "%": Operator("Modulus", "%", OperatorType.BINARY, 1,
                      Associativity.LEFT, "_operator_modulus"),
        "u-": Operator("Negation", "-", OperatorType.UNARY, 0,
                       Associativity.RIGHT, "_operator_negation"),
    }
    return MappingProxyType(dict(sorted(operators.items())))


_OPERATOR_MAP = _create_operator_map()


def get_operator_map() -> Mapping[str, Operator]:
    """Return the read-only operator table, ordered by key."""
    return _OPERATOR_MAP