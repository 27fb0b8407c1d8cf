"""The built-in bindings every Boo program starts with: `+`, `-` and `*` over integers.

Built-ins are ordinary curried functions (see pure/native.py), installed by wrapping the program in one `let` per
built-in, so they resolve exactly the way a user-defined binding would.
"""

from operator import add, mul, sub

from boo.pure.lexical import Assign
from boo.pure.native import operator

BUILTINS = (
    ("+", operator("+", add)),
    ("-", operator("-", sub)),
    ("*", operator("*", mul)),
)


def prepare(expr, builtins=BUILTINS):
    """Wraps expr so that every built-in is in scope: let + = ... in let - = ... in let * = ... in expr."""
    for name, builtin in reversed(builtins):
        expr = Assign(name, builtin, expr)
    return expr
