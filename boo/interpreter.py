"""Boo interpreter.

For reference:
- "pure": the language engine (boo/pure) - lexing, parsing, the expression model, substitution and reduction
- "lang": everything hosting the engine (boo/lang) - errors, built-ins, sessions, the shell, the program generator

Basic program flow:
    1. Lexer: turns source text into a flat list of tokens (pure/lexer.py)
    2. Parser: builds one Expression out of the tokens, desugaring infix operators and curried functions
       (pure/parser.py)
    3. Prelude: wraps the expression in `let`s binding the built-in operators (lang/builtins.py)
    4. Reducer: steps the expression, leftmost-outermost and lazily, until it is a primitive or a function
       (pure/reducer.py)
"""

from boo.lang.builtins import prepare
from boo.pure.parser import parse
from boo.pure.reducer import evaluate, steps


def interpret(source, prelude=True):
    """Parses and evaluates source, returning the resulting Expression. Raises a LexError, ParseError or
    EvaluationError on failure.
    """
    expr = parse(source)
    return evaluate(prepare(expr) if prelude else expr)


def trace(source, prelude=True):
    """Like interpret, but lazily yields every intermediate form (and, if evaluation fails, the error)."""
    expr = parse(source)
    return steps(prepare(expr) if prelude else expr)
