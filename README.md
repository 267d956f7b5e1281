# kaori

A front end for the Kaori programming language, with a small stack-based
bytecode virtual machine.

The front end tokenizes source text, parses it into a syntax tree and
resolves names into a high-level intermediate representation (HIR). Any
problem is raised as a `KaoriError` that carries the offending source
`span` and `message`, and whose `report(source)` prints the message with
the source line underlined.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The language

A program is a sequence of top-level `def` functions and `struct`
declarations:

```
struct Point { x: number, y: number }

def add(a: number, b: number) -> number {
    return a + b;
}

def main() {
    total: number = 0;
    for i: number = 0; i < 10; i = i + 1 {
        total = total + i;
    }
    while total > 0 {
        total = total - 1;
    }
    if total == 0 {
        print(total);
    } else {
        print(false);
    }
}
```

Comments are written `// ...` and `/* ... */`.

## Library use

```python
from kaori.errors import KaoriError
from kaori.parser import parse_source
from kaori.resolver import Resolver

source = "def main() { x: number = 1 + 2; print(x); }"
try:
    hir = Resolver().generate_hir(parse_source(source))
except KaoriError as error:
    error.report(source)
```

The stages:

- `kaori.lexer.tokenize(source)` (or `Lexer(source).tokenize()`) returns
  the list of `Token`s, each with a `TokenKind` and a `Span`, ending with an
  end-of-file token. Unknown characters and unterminated strings raise
  `KaoriError`.
- `kaori.token_stream.TokenStream` is the cursor the parser walks over the
  tokens.
- `kaori.parser.parse_source(source)` returns the top-level declarations
  as `kaori.syntax_tree` nodes (`FunctionDecl`, `StructDecl`, ...);
  `kaori.parser.Parser` exposes the individual parsing methods.
- `kaori.resolver.Resolver().generate_hir(declarations)` binds every name
  to its declaration, assigns local variable offsets and returns
  `kaori.hir` nodes. Duplicate declarations, undeclared names, `break` or
  `continue` outside a loop, and names used as the wrong kind of thing
  raise `KaoriError`.
- `kaori.symbols.SymbolTable` is the scoped table the resolver uses.
- `kaori.type_defs` defines `PrimitiveType`, `FunctionType` and
  `StructType`.

### Virtual machine

`kaori.interpreter.Interpreter` executes a list of
`kaori.instruction.Instruction`s against a list of `kaori.value.Value`s.
`PRINT` writes the value's representation to the given output stream.
`kaori.constant_pool.ConstantPool` deduplicates constants with
`load_const`, and keeps slots for globals with `load_global_const` and
`update_global_const`.

```python
from kaori.constant_pool import ConstantPool
from kaori.instruction import Instruction, Opcode
from kaori.interpreter import Interpreter
from kaori.value import number

pool = ConstantPool()
one = pool.load_const(number(1))
two = pool.load_const(number(2))
program = [
    Instruction(Opcode.LOAD_CONST, one),
    Instruction(Opcode.LOAD_CONST, two),
    Instruction(Opcode.ADD),
    Instruction(Opcode.PRINT),
]
Interpreter(program, pool.constants).execute()  # prints Number(3.0)
```

## What the package does not do

- There is no command-line program; the stages are used as a library.
- There is no type-checking stage: the resolved HIR is not checked for
  type errors.
- Nothing compiles source or HIR into bytecode; the virtual machine runs
  instruction lists that are built directly, as in the example above.