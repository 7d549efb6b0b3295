"""Classification of expression tokens and conversion of infix to postfix."""

from __future__ import annotations

import enum
from typing import Iterable, Optional

from .build_log import BuildLog
from .operators import Associativity, OperatorType, get_operator_map, get_operator_symbols

_DIGITS = frozenset("0123456789")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_IDENT_CHARS = _LETTERS | _DIGITS
_BRACKETS = ("(", ")")


class TokenType(enum.Enum):
    NUMBER = "Number"
    VARIABLE = "Variable"
    BRACKET = "Bracket"
    BINARY_OPERATOR = "BinaryOp"
    UNARY_OPERATOR = "UnaryOp"
    UNKNOWN = "Unknown"


def _require_token(token: str) -> None:
    if not token:
        raise ValueError("empty token")


def is_number(token: str) -> bool:
    """A number consists only of the digits 0 to 9."""
    _require_token(token)
    return all(ch in _DIGITS for ch in token)


def is_variable(token: str) -> bool:
    """A variable starts with a letter or underscore, then letters, digits or underscores."""
    _require_token(token)
    return token[0] in _LETTERS and all(ch in _IDENT_CHARS for ch in token[1:])


def _operator_of_type(token: str, op_type: OperatorType) -> bool:
    op = get_operator_map().get(token)
    return op is not None and op.type is op_type


def is_binary_operator(token: str) -> bool:
    """Return whether ``token`` names a binary operator."""
    return _operator_of_type(token, OperatorType.BINARY)


def is_unary_operator(token: str) -> bool:
    """Return whether ``token`` names a (prefixed) unary operator."""
    return _operator_of_type(token, OperatorType.UNARY)


def is_bracket(token: str) -> bool:
    """Return whether ``token`` is a round bracket."""
    return token in _BRACKETS


def get_token_type(token: str) -> TokenType:
    """Classify ``token``."""
    if is_number(token):
        return TokenType.NUMBER
    if is_variable(token):
        return TokenType.VARIABLE
    if is_binary_operator(token):
        return TokenType.BINARY_OPERATOR
    if is_unary_operator(token):
        return TokenType.UNARY_OPERATOR
    if is_bracket(token):
        return TokenType.BRACKET
    return TokenType.UNKNOWN


def token_type_to_string(token_type: TokenType) -> str:
    """Return the display name of ``token_type``."""
    return token_type.value


def is_operator_noprefix(token: str) -> bool:
    """Return whether ``token`` is an operator symbol as written in source."""
    return token in get_operator_symbols()


def prefix_unary(
    expression: Iterable[str],
    log: BuildLog,
    statement_index: Optional[int] = None,
) -> list[str]:
    """Return ``expression`` with unary operators marked by a ``u`` prefix.

    An operator is unary when it starts the expression or follows another
    operator, brackets being ignored. If no such unary operator exists an
    error is logged and the remaining tokens are left untouched.
    """
    tokens = list(expression)
    operator_map = get_operator_map()
    after_operator = True
    for position, token in enumerate(tokens):
        if is_bracket(token):
            continue
        if is_operator_noprefix(token):
            if after_operator:
                prefixed = "u" + token
                if prefixed not in operator_map:
                    log.log_error(
                        f'Operator "{token}" is being interpreted as unary operator '
                        "but no such unary operator exists",
                        statement_index,
                    )
                    return tokens
                tokens[position] = prefixed
            after_operator = True
        else:
            after_operator = False
    return tokens


def is_valid_operator_placement(expression: Iterable[str]) -> bool:
    """Check that every operator has operands where it needs them.

    Brackets are ignored, so ``2 + 3`` passes while ``2 3 +`` does not.
    """
    types = [t for t in map(get_token_type, expression) if t is not TokenType.BRACKET]
    operands = (TokenType.NUMBER, TokenType.VARIABLE)
    last = len(types) - 1
    for position, current in enumerate(types):
        if current is TokenType.BINARY_OPERATOR:
            if position == 0 or position == last:
                return False
            if types[position - 1] not in operands:
                return False
        elif current is TokenType.UNARY_OPERATOR:
            if position == last:
                return False
            if types[position + 1] not in (*operands, TokenType.UNARY_OPERATOR):
                return False
    return True


def infix_to_postfix(
    expression: Iterable[str],
    log: BuildLog,
    statement_index: Optional[int] = None,
) -> list[str]:
    """Convert an infix token list to postfix with the shunting-yard algorithm.

    Problems are logged to ``log``; an expression with misplaced operators
    yields an empty list.
    """
    tokens = prefix_unary(expression, log, statement_index)
    if not is_valid_operator_placement(tokens):
        log.log_error(
            "Invalid expression, not enough operands for an operator", statement_index
        )
        return []

    operator_map = get_operator_map()
    output: list[str] = []
    stack: list[str] = []

    for token in tokens:
        if token == ")":
            while True:
                if not stack:
                    log.log_error("Mismatched parentheses", statement_index)
                    break
                top = stack.pop()
                if top == "(":
                    break
                output.append(top)
        elif token in operator_map:
            current = operator_map[token]
            while stack and stack[-1] != "(":
                other = operator_map[stack[-1]]
                if other.precedence < current.precedence or (
                    other.precedence == current.precedence
                    and current.associativity is Associativity.LEFT
                ):
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)
        elif token == "(":
            stack.append(token)
        else:
            output.append(token)

    while stack:
        top = stack.pop()
        if top == "(":
            log.log_error("Mismatched parentheses", statement_index)
        output.append(top)
    return output