# exprcompiler

A small compiler for a tiny statement language. It turns source text into
x86-64 assembly in NASM syntax.

## The language

A program is a sequence of statements. Each statement ends with `;`.

```
decl x = 5;
decl y = x * 2 + -3;
y = y % 4;
print y;
```

- `decl name` reserves a stack slot for a variable. It may be followed by an
  initialising expression such as `decl name = expr`.
- `print name` prints the value of a variable.
- Any other statement is evaluated as an expression.

Expressions support `=`, `+`, `-`, `*`, `/`, `%`, unary `-` and parentheses.
They are converted to postfix with the shunting-yard algorithm. The generated
code calls external routines such as `_operator_addition` and `_print`.

## Installation

```
pip install .
```

## Command line

```
exprcompiler [INPUT] [OUTPUT]
```

`INPUT` is the source file and `OUTPUT` is the assembly file to write. If
either name is left out, the command asks for it. When the command finishes,
it prints a build report to standard output.

- If compilation succeeds, the report gives the number of warnings, lists
  them, and says where the assembly was written. The exit status is 0.
- If compilation fails, the report lists every error, with the number of the
  statement it came from when that is known. No output file is written, and
  the exit status is 1.

## Library use

```python
from exprcompiler.compiler import Compiler

compiler = Compiler()
ok = compiler.compile("program.txt", "program.asm")
print(ok, compiler.log.errors)
```

`Compiler(diagnostic_stream)` sends the build report to another text stream.
`Compiler.generate(statements)` returns the assembly for statements that are
already tokenized, and records any problems in `compiler.log`.

The building blocks can also be used on their own:

- `exprcompiler.lexer.tokenize(text, log)` splits text into statements made
  of tokens. `tokenize_file(filename, log)` does the same for a file.
- `exprcompiler.shunting_yard.infix_to_postfix(expression, log)` reorders an
  expression into postfix form. Unary operators come out with a `u` prefix,
  for example `u-`.
- `exprcompiler.operator_trie.Trie` splits runs of operator characters into
  known operators. For example, `+=-` becomes `+=` and `-`.
- `exprcompiler.operators.get_operator_map()` returns the operator table with
  precedence, associativity and routine names.
- `exprcompiler.build_log.BuildLog` collects errors, warnings and messages and
  writes a summary with `dump(stream)`.

## What it does not do

The package only writes assembly text. It does not assemble or link that
text. It also does not provide the `_print` and `_operator_*` routines that
the generated code calls, so you must supply them when you link.

## Running the tests

```
pip install .[test]
pytest
```