"""Random Boo program generator, used as fuzz and benchmark input and by the test suite.

Every generated program is closed (once the built-ins are installed), terminates, and evaluates to an integer: it is
built from integer literals, references to identifiers already in scope, arithmetic, `let`, immediately applied
functions (`(fn x -> ...) arg`), and `match` with a wildcard base case. Names are drawn from a small pool so that
shadowing happens often.
"""

import random

from boo.lang.builtins import BUILTINS
from boo.pure.lexical import Anything, Apply, Assign, Function, Identifier, Literal, Match, function, infix, integer
from boo.pure.primitive import Integer


class ProgramGenerator:
    """Generates random integer-valued programs up to max_depth levels deep. A seed makes generation reproducible."""
    NAMES = ("a", "b", "x", "y", "value", "left", "right")
    MAX_LITERAL = 10 ** 6

    def __init__(self, seed=None, max_depth=4):
        self.random = random.Random(seed)
        self.max_depth = max_depth

    def program(self):
        """Returns one random program."""
        return self.expression(self.max_depth, ())

    def programs(self, count):
        """Yields count random programs."""
        for __ in range(count):
            yield self.program()

    def literal(self):
        return Integer(self.random.randint(-self.MAX_LITERAL, self.MAX_LITERAL))

    def expression(self, depth, scope):
        """Generates an integer-valued expression whose free identifiers are all in scope."""
        choices = [self.primitive]
        if scope:
            choices.append(self.reference)
        if depth > 0:
            choices += [self.arithmetic, self.assignment, self.application, self.match]

        return self.random.choice(choices)(depth - 1, scope)

    def primitive(self, depth, scope):
        return integer(self.literal().value)

    def reference(self, depth, scope):
        return Identifier(self.random.choice(scope))

    def arithmetic(self, depth, scope):
        operator, __ = self.random.choice(BUILTINS)
        return infix(operator, self.expression(depth, scope), self.expression(depth, scope))

    def assignment(self, depth, scope):
        name = self.random.choice(self.NAMES)
        value = self.expression(depth, scope)
        return Assign(name, value, self.expression(depth, scope + (name,)))

    def application(self, depth, scope):
        """(fn p q ... -> body) args..., applied to exactly as many arguments as it has parameters."""
        parameters = self.random.sample(self.NAMES, self.random.randint(1, 2))
        body = self.expression(depth, scope + tuple(parameters))

        expr = function(parameters, body)
        for __ in parameters:
            expr = Apply(expr, self.expression(depth, scope))
        return expr

    def match(self, depth, scope):
        """A match over an integer, with zero or more literal arms and a wildcard base case."""
        arms = [(Literal(self.literal()), self.expression(depth, scope)) for __ in range(self.random.randint(0, 2))]
        if arms and self.random.random() < 0.5:
            value = Apply(Function("n", Identifier("n")), integer(arms[0][0].value.value))
        else:
            value = self.expression(depth, scope)
        arms.append((Anything(), self.expression(depth, scope)))
        return Match(value, arms)
