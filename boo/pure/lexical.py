"""Boo abstract syntax tree, along with capture-avoiding substitution.

The `pure` directory contains the Boo language engine: lexing, parsing, the expression model, and normal-order
reduction. Nothing in it performs I/O.

Every Boo program is a single expression:

```
<expression> ::= <integer>                                    ; Primitive
               | <identifier>                                 ; Identifier
               | "fn" <identifier>+ "->" <expression>         ; Function (curried: fn x y -> b = fn x -> fn y -> b)
               | <expression> <expression>                    ; Apply (left-associative juxtaposition)
               | "let" <identifier> "=" <expression> "in" <expression>   ; Assign
               | "match" <expression> "{" (<pattern> "->" <expression> ";")* "}"   ; Match
               | <expression> ("+" | "-" | "*") <expression>  ; sugar for (op left) right
```

Natives are a seventh kind of expression that cannot be written in source: host-implemented computations embedded as
opaque leaves (see native.py).

Expressions are immutable. Substitution and reduction always build new trees, sharing untouched subtrees with the
original. There is no environment: every binding is resolved by substituting into the binding's scope, so identifiers
left over after substitution are free.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Tuple

from boo.pure.primitive import Integer

logger = logging.getLogger(__name__)

OPERATORS = ("+", "-", "*")
SUBSCRIPT = re.compile(r"^(.*?)_([0-9]+)$")


def split(name):
    """Splits name into its base and numeric subscript (-1 if name has no subscript): 'x_12' -> ('x', 12)."""
    match = SUBSCRIPT.match(name)
    if match:
        return match.group(1), int(match.group(2))
    return name, -1


def fresh(name, avoid):
    """Returns a new identifier like name that isn't in avoid, by bumping the highest subscript already in use."""
    base, __ = split(name)
    max_subscript = 0

    for used in avoid:
        used_base, subscript = split(used)
        if used_base == base and subscript > max_subscript:
            max_subscript = subscript

    return f"{base}_{max_subscript + 1}"


def alpha_convert(parameter, body, avoid):
    """Renames parameter in body to a fresh identifier not in avoid. Returns (new parameter, new body)."""
    renamed = fresh(parameter, avoid | body.free_variables | {parameter})
    logger.debug("renaming '%s' to '%s' to avoid capture", parameter, renamed)
    return renamed, body.sub(parameter, Identifier(renamed))


class Expression(ABC):
    """Superclass of every Boo expression."""

    @property
    @abstractmethod
    def can_progress(self):
        """Whether the reducer can take a step from this expression. Primitives and functions cannot."""

    @property
    @abstractmethod
    def free_variables(self):
        """frozenset of the identifiers that occur free in this expression."""

    @abstractmethod
    def sub(self, var, new_term):
        """Returns this expression with every free occurrence of var replaced with new_term. Binders that would capture
        a free identifier of new_term are renamed first.
        """

    @abstractmethod
    def render(self):
        """Canonical source text of this expression. Reparsing it gives back an equivalent expression, except for
        natives, which render as their display name.
        """

    @abstractmethod
    def alpha_equals(self, other, bound=()):
        """Whether self and other are equal up to renaming of bound identifiers. bound pairs up identifiers bound
        in self with the ones bound at the same place in other, innermost last.
        """

    def mentions(self, var):
        """Whether substituting var into this expression could change it."""
        return var in self.free_variables

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class Primitive(Expression):
    """A fully reduced literal value."""
    value: Integer

    can_progress = False
    free_variables = frozenset()

    def sub(self, var, new_term):
        return self

    def render(self):
        return self.value.render()

    def alpha_equals(self, other, bound=()):
        return isinstance(other, Primitive) and self.value == other.value


@dataclass(frozen=True)
class Identifier(Expression):
    """A reference to a binding. Reaching one during reduction means it was never substituted, so it is unbound."""
    name: str

    can_progress = True

    @cached_property
    def free_variables(self):
        return frozenset([self.name])

    def sub(self, var, new_term):
        if self.name == var:
            return new_term
        return self

    def render(self):
        return self.name

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Identifier):
            return False

        for name, other_name in reversed(bound):
            if name == self.name or other_name == other.name:
                return name == self.name and other_name == other.name
        return self.name == other.name


@dataclass(frozen=True)
class Native(Expression):
    """A host-implemented computation. implementation is called with a NativeContext and returns an Integer; the
    context resolves each of parameters, which the native reads from its enclosing functions.

    Substitution into a native is deferred: instead of rewriting the (opaque) implementation, each substituted
    parameter is recorded in bindings, and the context built at invocation time evaluates it on demand.
    """
    name: str
    implementation: Callable = field(compare=False)
    parameters: Tuple[str, ...] = ()
    bindings: Tuple[Tuple[str, Expression], ...] = ()

    can_progress = True

    @cached_property
    def bound(self):
        return dict(self.bindings)

    @cached_property
    def free_variables(self):
        return frozenset().union(*(self.resolve(parameter).free_variables for parameter in self.parameters))

    def resolve(self, parameter):
        """What parameter stands for: its bound expression, or the parameter itself if it is still unbound."""
        return self.bound.get(parameter, Identifier(parameter))

    def sub(self, var, new_term):
        if not self.mentions(var):
            return self

        bindings = tuple((name, value.sub(var, new_term)) for name, value in self.bindings)
        if var in self.parameters and var not in self.bound:
            bindings += ((var, new_term),)
        return Native(self.name, self.implementation, self.parameters, bindings)

    def render(self):
        return self.name

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Native) or (self.name, self.parameters) != (other.name, other.parameters):
            return False
        return all(self.resolve(parameter).alpha_equals(other.resolve(parameter), bound)
                   for parameter in self.parameters)


@dataclass(frozen=True)
class Function(Expression):
    """A single-parameter function. Multi-parameter functions are curried by the parser."""
    parameter: str
    body: Expression

    can_progress = False

    @cached_property
    def free_variables(self):
        return self.body.free_variables - {self.parameter}

    def sub(self, var, new_term):
        if var == self.parameter or not self.body.mentions(var):
            return self

        parameter, body = self.parameter, self.body
        if parameter in new_term.free_variables:
            parameter, body = alpha_convert(parameter, body, new_term.free_variables | {var})
        return Function(parameter, body.sub(var, new_term))

    def render(self):
        return f"fn {self.parameter} -> ({self.body.render()})"

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Function):
            return False
        return self.body.alpha_equals(other.body, bound + ((self.parameter, other.parameter),))


@dataclass(frozen=True)
class Apply(Expression):
    """Function application. The argument is substituted unevaluated."""
    function: Expression
    argument: Expression

    can_progress = True

    @cached_property
    def free_variables(self):
        return self.function.free_variables | self.argument.free_variables

    def sub(self, var, new_term):
        if not self.mentions(var):
            return self
        return Apply(self.function.sub(var, new_term), self.argument.sub(var, new_term))

    def render(self):
        function = self.function
        if isinstance(function, Apply) and isinstance(function.function, Identifier) \
                and function.function.name in OPERATORS:
            operator = function.function.name
            return f"({function.argument.render()}) {operator} ({self.argument.render()})"
        return f"({function.render()}) ({self.argument.render()})"

    def alpha_equals(self, other, bound=()):
        return isinstance(other, Apply) and self.function.alpha_equals(other.function, bound) \
            and self.argument.alpha_equals(other.argument, bound)


@dataclass(frozen=True)
class Assign(Expression):
    """`let name = value in body`, which is sugar for `(fn name -> body) value`. It is not recursive: name is not in
    scope in value.
    """
    name: str
    value: Expression
    body: Expression

    can_progress = True

    @cached_property
    def free_variables(self):
        return self.value.free_variables | (self.body.free_variables - {self.name})

    def sub(self, var, new_term):
        if not self.mentions(var):
            return self

        value = self.value.sub(var, new_term)
        if var == self.name or not self.body.mentions(var):
            return Assign(self.name, value, self.body)

        name, body = self.name, self.body
        if name in new_term.free_variables:
            name, body = alpha_convert(name, body, new_term.free_variables | {var})
        return Assign(name, value, body.sub(var, new_term))

    def render(self):
        return f"let {self.name} = {self.value.render()} in {self.body.render()}"

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Assign):
            return False
        return self.value.alpha_equals(other.value, bound) \
            and self.body.alpha_equals(other.body, bound + ((self.name, other.name),))


class Pattern(ABC):
    """Superclass of the patterns a Match arm can test its value against. Patterns never bind identifiers."""

    @abstractmethod
    def render(self):
        """Source text of this pattern."""

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class Anything(Pattern):
    """Matches any value, without reducing it."""

    def render(self):
        return "_"


@dataclass(frozen=True)
class Literal(Pattern):
    """Matches only a primitive equal to value."""
    value: Integer

    def render(self):
        return self.value.render()


@dataclass(frozen=True)
class Match(Expression):
    """Ordered pattern dispatch: arms is a sequence of (Pattern, Expression), tried first to last. A match with no
    arms is valid syntax; it only fails when it is reduced.
    """
    value: Expression
    arms: Tuple[Tuple[Pattern, Expression], ...] = ()

    can_progress = True

    def __post_init__(self):
        object.__setattr__(self, "arms", tuple((pattern, result) for pattern, result in self.arms))

    @cached_property
    def free_variables(self):
        return self.value.free_variables.union(*(result.free_variables for __, result in self.arms))

    def sub(self, var, new_term):
        if not self.mentions(var):
            return self
        arms = tuple((pattern, result.sub(var, new_term)) for pattern, result in self.arms)
        return Match(self.value.sub(var, new_term), arms)

    def render(self):
        if not self.arms:
            return f"match {self.value.render()} {{ }}"
        arms = "; ".join(f"{pattern.render()} -> {result.render()}" for pattern, result in self.arms)
        return f"match {self.value.render()} {{ {arms} }}"

    def alpha_equals(self, other, bound=()):
        if not isinstance(other, Match) or len(self.arms) != len(other.arms):
            return False
        if not self.value.alpha_equals(other.value, bound):
            return False
        return all(pattern == other_pattern and result.alpha_equals(other_result, bound)
                   for (pattern, result), (other_pattern, other_result) in zip(self.arms, other.arms))


def function(parameters, body):
    """Curries a multi-parameter function: function(["x", "y"], body) is fn x -> fn y -> body."""
    for parameter in reversed(parameters):
        body = Function(parameter, body)
    return body


def infix(operator, left, right):
    """Desugars `left operator right` into ((operator) left) right."""
    return Apply(Apply(Identifier(operator), left), right)


def integer(value):
    """Shorthand for a primitive integer expression."""
    return Primitive(Integer(value))
