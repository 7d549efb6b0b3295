"""Generation of x86-64 assembly from tokenized statements."""

from __future__ import annotations

import os
import sys
from typing import Iterable, Optional, Sequence, TextIO, Union

from .build_log import BuildLog
from .lexer import tokenize_file
from .operators import OperatorType, get_operator_map
from .shunting_yard import infix_to_postfix, is_number, is_variable

_RVALUE = "#"


class Compiler:
    """Compiles statements of a small expression language into NASM assembly.

    Diagnostics are collected in ``log`` and written to the diagnostic
    stream, which defaults to standard output.
    """

    def __init__(self, diagnostic_stream: Optional[TextIO] = None) -> None:
        self._stream = diagnostic_stream
        self.log = BuildLog()
        self._stack_ptr = 0
        self._statement_index = 0
        self._variables: dict[str, int] = {}

    @property
    def diagnostic_stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _register_variable(self, name: str) -> None:
        if name in self._variables:
            self.log.log_error(
                f'Variable "{name}" is already registered', self._statement_index
            )
        self._stack_ptr += 1
        self._variables[name] = self._stack_ptr

    def _push_variable_to_stack(self, name: str) -> str:
        offset = 8 * self._variables[name]
        return f"\tmov rax, rbp\n\tsub rax, {offset}\n\tpush rax\n"

    def _declare(self, name: str) -> str:
        self._register_variable(name)
        return "\tsub rsp, 8\n"

    def _dereference(self, variable_name: str, index: int) -> str:
        if variable_name not in self._variables:
            self.log.log_error(
                f'Attempt to dereference nonexistent variable "{variable_name}"',
                self._statement_index,
            )
        offset = index * 8
        return (
            f"\tmov rax, [rsp+{offset}]\n\tmov rax, [rax]\n"
            f"\tmov [rsp+{offset}], rax\n"
        )

    @staticmethod
    def _base_template() -> str:
        externs = "".join(
            f"extern {op.asm_call_name}\n" for op in get_operator_map().values()
        )
        return (
            "section .text\n\nextern _print\n"
            + externs
            + "global _start\n\n_start:\n\tpush rbp\n\tmov rbp, rsp\n"
        )

    @staticmethod
    def _end_program() -> str:
        return "\tmov rax, 60\n\tmov rdi, 1\n\tsyscall\n"

    def _expression_eval(self, expression: Sequence[str]) -> str:
        operator_map = get_operator_map()
        postfix = infix_to_postfix(expression, self.log, self._statement_index)
        code: list[str] = []
        values: list[str] = []

        for token in postfix:
            if is_number(token):
                values.append(_RVALUE)
                code.append(f"\tmov rax, {token}\n\tpush rax\n")
            elif is_variable(token):
                if token not in self._variables:
                    self.log.log_error(f'Invalid token "{token}"', self._statement_index)
                    continue
                values.append(token)
                code.append(self._push_variable_to_stack(token))
            else:
                op = operator_map.get(token)
                if op is None:
                    self.log.log_error(f'Invalid token "{token}"', self._statement_index)
                    continue
                if op.type is OperatorType.UNARY:
                    if not values:
                        self.log.log_error(
                            "Not enough operands for unary operator",
                            self._statement_index,
                        )
                        return ""
                    values.pop()
                    code.append(f"\tcall {op.asm_call_name}\n")
                    values.append(_RVALUE)
                else:
                    if len(values) < 2:
                        self.log.log_error(
                            "Not enough operands for binary operator",
                            self._statement_index,
                        )
                        return ""
                    right = values.pop()
                    left = values.pop()
                    if op.symbol == "=":
                        if left == _RVALUE:
                            self.log.log_error(
                                "Cannot assign to an rvalue", self._statement_index
                            )
                            return ""
                        if right != _RVALUE:
                            code.append(self._dereference(right, 1))
                    else:
                        if left != _RVALUE:
                            code.append(self._dereference(left, 1))
                        if right != _RVALUE:
                            code.append(self._dereference(right, 0))
                    code.append(f"\tcall {op.asm_call_name}\n")
                    values.append(_RVALUE)

        if len(values) != 1:
            self.log.log_error(
                "Expression does not evaluate to a single value", self._statement_index
            )
            return ""
        return "".join(code)

    def _declaration(self, statement: Sequence[str]) -> str:
        if len(statement) < 2:
            self.log.log_error(
                "expected variable name after 'decl'", self._statement_index
            )
            return ""
        name = statement[1]
        if not is_variable(name):
            self.log.log_error(f'Invalid variable name: "{name}"', self._statement_index)
        code = self._declare(name)
        if len(statement) > 2:
            code += self._expression_eval(statement[1:])
        return code

    def _print(self, statement: Sequence[str]) -> str:
        if len(statement) < 2:
            self.log.log_error(
                "expected variable name after 'print'", self._statement_index
            )
            return ""
        name = statement[1]
        if not is_variable(name):
            self.log.log_error(f'invalid variable name "{name}"')
        slot = self._variables.setdefault(name, 0)
        return f"\tpush qword [rbp-{8 * slot}]\n\tcall _print\n\tadd rsp, 8\n"

    def generate(self, statements: Iterable[Sequence[str]]) -> str:
        """Return the assembly for ``statements``; problems go to ``log``."""
        parts = [self._base_template()]
        self._statement_index = 0
        for statement in statements:
            self._statement_index += 1
            if not statement:
                raise ValueError("statements must not be empty")
            keyword = statement[0]
            if keyword == "decl":
                parts.append(self._declaration(statement))
            elif keyword == "print":
                parts.append(self._print(statement))
            else:
                parts.append(self._expression_eval(statement))
        parts.append(self._end_program())
        return "".join(parts)

    def compile(
        self,
        input_filename: Union[str, os.PathLike],
        output_filename: Union[str, os.PathLike],
    ) -> bool:
        """Compile one source file into an assembly file.

        The output is written only when no errors occurred. The build summary
        is written to the diagnostic stream. Returns whether the build succeeded.
        """
        statements = tokenize_file(input_filename, self.log)
        if not self.log.is_successful():
            self.log.dump(self.diagnostic_stream)
            return False

        assembly = self.generate(statements)
        if not self.log.is_successful():
            self.log.dump(self.diagnostic_stream)
            return False

        with open(output_filename, "w", encoding="utf-8") as output:
            output.write(assembly)
        self.log.log_message(
            f'The contents have been written to "{os.fspath(output_filename)}"'
        )
        self.log.dump(self.diagnostic_stream)
        return True