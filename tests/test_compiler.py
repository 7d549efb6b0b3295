import io

import pytest

from exprcompiler.build_log import BuildLog
from exprcompiler.compiler import Compiler
from exprcompiler.lexer import tokenize
from exprcompiler.operators import get_operator_map

END = "\tmov rax, 60\n\tmov rdi, 1\n\tsyscall\n"


def _generate(source):
    compiler = Compiler(io.StringIO())
    statements = tokenize(source, BuildLog())
    return compiler, compiler.generate(statements)


def test_empty_program_has_template_and_exit():
    compiler, asm = _generate("")
    assert asm.startswith("section .text\n\nextern _print\n")
    assert "global _start\n\n_start:\n\tpush rbp\n\tmov rbp, rsp\n" in asm
    assert asm.endswith(END)
    assert compiler.log.is_successful()


def test_externs_follow_operator_map_order():
    _, asm = _generate("")
    externs = [line for line in asm.splitlines() if line.startswith("extern ")]
    expected = ["extern _print"] + [
        "extern " + op.asm_call_name for op in get_operator_map().values()
    ]
    assert externs == expected


def test_declaration_with_assignment():
    compiler, asm = _generate("decl x = 5;")
    assert compiler.log.is_successful()
    assert "\tsub rsp, 8\n" in asm
    assert "\tmov rax, 5\n\tpush rax\n" in asm
    assert "\tcall _operator_assignment\n" in asm
    assert asm.index("\tsub rsp, 8\n") < asm.index("\tcall _operator_assignment\n")


def test_duplicate_declaration_is_error():
    compiler, _ = _generate("decl x; decl x;")
    assert compiler.log.errors == (
        'Error in statement 2: Variable "x" is already registered',
    )


def test_undeclared_variable_is_invalid_token():
    compiler, _ = _generate("y = 3;")
    assert not compiler.log.is_successful()
    assert 'Error in statement 1: Invalid token "y"' in compiler.log.errors


def test_assignment_to_rvalue():
    compiler, _ = _generate("decl x; 3 = x;")
    assert "Error in statement 2: Cannot assign to an rvalue" in compiler.log.errors


def test_print_declared_variable():
    compiler, asm = _generate("decl a; decl b; print b;")
    assert compiler.log.is_successful()
    assert "\tpush qword [rbp-16]\n\tcall _print\n\tadd rsp, 8\n" in asm


def test_binary_operator_dereferences_both_variables():
    compiler, asm = _generate("decl a = 1; decl b = 2; a + b;")
    assert compiler.log.is_successful()
    assert "\tmov rax, [rsp+8]\n\tmov rax, [rax]\n\tmov [rsp+8], rax\n" in asm
    assert "\tmov rax, [rsp+0]\n\tmov rax, [rax]\n\tmov [rsp+0], rax\n" in asm
    assert "\tcall _operator_addition\n" in asm


def test_decl_without_name():
    compiler = Compiler(io.StringIO())
    compiler.generate([["decl"]])
    assert compiler.log.errors == (
        "Error in statement 1: expected variable name after 'decl'",
    )


def test_invalid_declared_name():
    compiler, _ = _generate("decl 5;")
    assert 'Error in statement 1: Invalid variable name: "5"' in compiler.log.errors


def test_expression_without_single_value():
    compiler, asm = _generate("1 2;")
    assert (
        "Error in statement 1: Expression does not evaluate to a single value"
        in compiler.log.errors
    )
    assert "\tmov rax, 1\n" not in asm


def test_empty_statement_rejected():
    compiler = Compiler(io.StringIO())
    with pytest.raises(ValueError):
        compiler.generate([[]])


def test_compile_writes_output(tmp_path):
    source = tmp_path / "prog.txt"
    source.write_text("decl x = 2 * 3; print x;\n")
    output = tmp_path / "prog.asm"
    stream = io.StringIO()
    compiler = Compiler(stream)
    assert compiler.compile(source, output) is True

    _, expected = _generate(source.read_text())
    assert output.read_text() == expected
    report = stream.getvalue()
    assert report.startswith("Compilation finished with no errors and 0 warnings\n")
    assert f'The contents have been written to "{output}"' in report


def test_compile_missing_input(tmp_path):
    stream = io.StringIO()
    output = tmp_path / "out.asm"
    compiler = Compiler(stream)
    assert compiler.compile(tmp_path / "missing.txt", output) is False
    assert "does not exist" in stream.getvalue()
    assert not output.exists()


def test_compile_with_errors_writes_nothing(tmp_path):
    source = tmp_path / "bad.txt"
    source.write_text("decl x; decl x;")
    output = tmp_path / "bad.asm"
    stream = io.StringIO()
    assert Compiler(stream).compile(source, output) is False
    assert stream.getvalue().startswith(
        "Compilation halted due to the following 1 errors: \n"
    )
    assert not output.exists()