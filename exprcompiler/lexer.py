"""Splitting of source text into tokens grouped by statement."""

from __future__ import annotations

import enum
import os
from typing import Union

from .build_log import BuildLog
from .operator_trie import Trie
from .operators import get_operator_symbols

_WHITESPACE = frozenset(" \t\n\v\f\r")
_SINGLETONS = frozenset("(){}[]?;")
_OPERATOR_CHARS = frozenset("+-*/><=!%")
_DIGITS = frozenset("0123456789")
_REGULAR = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")


class CharType(enum.Enum):
    WHITESPACE = "whitespace"
    REGULAR = "regular"
    DIGIT = "digit"
    OPERATOR = "operator"
    SINGLETON = "singleton"
    NONE = "none"


def is_singleton(ch: str) -> bool:
    """A singleton character never belongs to a longer token."""
    return ch in _SINGLETONS


def is_operator(ch: str) -> bool:
    """Return whether ``ch`` may appear in an operator."""
    return ch in _OPERATOR_CHARS


def is_regular(ch: str) -> bool:
    """Regular characters are ASCII letters and the underscore."""
    return ch in _REGULAR


def is_digit(ch: str) -> bool:
    """Return whether ``ch`` is a decimal digit."""
    return ch in _DIGITS


def get_type(ch: str) -> CharType:
    """Classify a single character."""
    if ch in _WHITESPACE:
        return CharType.WHITESPACE
    if is_regular(ch):
        return CharType.REGULAR
    if is_digit(ch):
        return CharType.DIGIT
    if is_operator(ch):
        return CharType.OPERATOR
    if is_singleton(ch):
        return CharType.SINGLETON
    return CharType.NONE


class _Tokenizer:
    def __init__(self, log: BuildLog) -> None:
        self.log = log
        self.trie = Trie(words=get_operator_symbols())
        self.statements: list[list[str]] = []
        self.statement: list[str] = []
        self.token: list[str] = []
        self.kind = CharType.NONE
        self.statement_index = 1

    def finish_token(self) -> None:
        if not self.token:
            return
        text = "".join(self.token)
        if self.kind is CharType.OPERATOR:
            # Runs of operator characters are split into known operators.
            self.statement.extend(self.trie.split_string(text))
        else:
            self.statement.append(text)
        self.token.clear()
        self.kind = CharType.NONE

    def finish_statement(self) -> None:
        self.finish_token()
        if not self.statement:
            return
        self.statement_index += 1
        self.statements.append(self.statement)
        self.statement = []

    def feed(self, ch: str) -> None:
        kind = get_type(ch)
        if kind is CharType.WHITESPACE:
            self.finish_token()
        elif kind is CharType.REGULAR or kind is CharType.OPERATOR:
            if self.kind is not kind:
                self.finish_token()
            self.kind = kind
            self.token.append(ch)
        elif kind is CharType.DIGIT:
            # Digits continue names; otherwise they start a number literal.
            if self.kind not in (CharType.DIGIT, CharType.REGULAR):
                self.finish_token()
                self.kind = CharType.DIGIT
            self.token.append(ch)
        elif kind is CharType.SINGLETON:
            self.finish_token()
            if ch == ";":
                self.finish_statement()
            else:
                self.token.append(ch)
                self.finish_token()
        else:
            self.log.log_error(f'Unknown character "{ch}"', self.statement_index)

    def run(self, text: str) -> list[list[str]]:
        for ch in text:
            self.feed(ch)
        self.finish_token()
        if self.statement:
            self.log.log_error("No semicolon at the end of last statement")
        return self.statements


def tokenize(text: str, log: BuildLog) -> list[list[str]]:
    """Split ``text`` into statements, each a list of tokens.

    Statements end with ``;``, which is not kept. Problems are logged.
    """
    return _Tokenizer(log).run(text)


def tokenize_file(filename: Union[str, os.PathLike], log: BuildLog) -> list[list[str]]:
    """Tokenize the file named ``filename``; a missing file is logged as an error."""
    try:
        with open(filename, encoding="utf-8") as handle:
            text = handle.read()
    except OSError:
        log.log_error(f'File "{os.fspath(filename)}" does not exist')
        return []
    return tokenize(text, log)