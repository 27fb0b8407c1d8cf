"""Host-implemented ("native") computations and the contexts they read their inputs from.

A native never sees an environment directly. When invoked, it is handed a NativeContext, whose single method resolves an
identifier to a primitive. Contexts are composed by wrapping: each binding recorded on the native (see lexical.Native)
wraps the context built so far, and the innermost context knows nothing at all.

Built-in operators are ordinary curried Boo functions whose innermost body is a native:

    operator("+", add) == fn left -> fn right -> <native +>

so the reducer never special-cases arithmetic: applying `+` is a plain beta reduction, and only the final step invokes
the native, which looks up `left` and `right` in its context.
"""

from abc import ABC, abstractmethod

from boo.lang.error import InvalidPrimitive, NativeUnknownIdentifier
from boo.pure.lexical import Function, Native, Primitive

LEFT = "left"
RIGHT = "right"


class NativeContext(ABC):
    """Resolves identifiers on behalf of a native."""

    @abstractmethod
    def lookup(self, identifier):
        """Returns the Integer bound to identifier, or raises a NativeError."""


class EmptyContext(NativeContext):
    """The outermost context: nothing is bound."""

    def lookup(self, identifier):
        raise NativeUnknownIdentifier(identifier)


class BindingContext(NativeContext):
    """Binds name to an unevaluated expression, delegating every other identifier to rest. The expression is forced
    (reduced with force) each time it is looked up, and must reduce to a primitive.
    """

    def __init__(self, name, value, rest, force):
        self.name = name
        self.value = value
        self.rest = rest
        self.force = force

    def lookup(self, identifier):
        if identifier != self.name:
            return self.rest.lookup(identifier)

        result = self.force(self.value)
        if not isinstance(result, Primitive):
            raise InvalidPrimitive(self.value)
        return result.value


def context(native, force):
    """Builds the context native is invoked with from the bindings recorded on it."""
    built = EmptyContext()
    for name, value in native.bindings:
        built = BindingContext(name, value, built, force)
    return built


def operator(name, op):
    """Wraps a binary operation on Integers as the curried function `fn left -> fn right -> <native name>`."""

    def implementation(values):
        return op(values.lookup(LEFT), values.lookup(RIGHT))

    return Function(LEFT, Function(RIGHT, Native(name, implementation, (LEFT, RIGHT))))
