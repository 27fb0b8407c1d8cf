"""Normal-order (leftmost-outermost) small-step reduction of Boo expressions to weak normal form.

Reduction is lazy and call-by-name: arguments and let-bound values are substituted unevaluated, and are only reduced if
and when something needs their value (a match comparing against a literal, or a native reading its input).

Step rules:
    Identifier                  -> UnknownIdentifier (anything bound has already been substituted away)
    Native                      -> Primitive, by invoking the native with a context built from its bindings
    Apply(f, a), f progresses   -> Apply(step(f), a)
    Apply(fn p -> b, a)         -> b[p := a]
    Apply(primitive, a)         -> InvalidFunctionApplication
    Assign(n, v, b)             -> b[n := v]
    Match(v, [])                -> MatchWithoutBaseCase
    Match(v, (_, r) :: rest)    -> r, without reducing v
    Match(v, (k, r) :: rest)    -> Match(step(v), ...) while v progresses, then r if v == k, else Match(v, rest)

Primitives and functions cannot progress: they are the values evaluation ends on. There is no step budget here;
diverging programs reduce forever unless the host imposes a limit (see lang/session.py).
"""

import logging

from boo.lang.error import (EvaluationError, InvalidFunctionApplication, MatchWithoutBaseCase, NativeError,
                            NativeFailure, UnknownIdentifier, UnknownNativeError)
from boo.pure.lexical import Anything, Apply, Assign, Function, Identifier, Match, Native, Primitive
from boo.pure.native import context
from boo.pure.primitive import Integer

logger = logging.getLogger(__name__)


def step(expr):
    """Takes a single reduction step from expr, which must be able to progress. Raises an EvaluationError if the step
    fails.
    """
    if not expr.can_progress:
        raise ValueError(f"'{expr.render()}' is already in weak normal form")

    if isinstance(expr, Identifier):
        raise UnknownIdentifier(expr.name)
    elif isinstance(expr, Native):
        return invoke(expr)
    elif isinstance(expr, Apply):
        return step_apply(expr)
    elif isinstance(expr, Assign):
        return expr.body.sub(expr.name, expr.value)
    elif isinstance(expr, Match):
        return step_match(expr)

    raise TypeError(f"unhandled expression type '{type(expr).__name__}'")


def step_apply(expr):
    function = expr.function
    if function.can_progress:
        return Apply(step(function), expr.argument)
    elif isinstance(function, Function):
        return function.body.sub(function.parameter, expr.argument)
    raise InvalidFunctionApplication(function)


def step_match(expr):
    if not expr.arms:
        raise MatchWithoutBaseCase(expr)

    (pattern, result), *rest = expr.arms
    if isinstance(pattern, Anything):
        return result

    value = expr.value
    if value.can_progress:
        return Match(step(value), expr.arms)
    elif isinstance(value, Primitive) and value.value == pattern.value:
        return result
    return Match(value, rest)  # the value is already reduced, so the remaining arms compare against it directly


def invoke(native):
    """Runs a native, turning its result into a Primitive and any NativeError into a NativeFailure."""
    logger.debug("invoking native '%s'", native.name)
    try:
        result = native.implementation(context(native, evaluate))
    except NativeError as error:
        raise NativeFailure(error) from error

    if not isinstance(result, Integer):
        raise NativeFailure(UnknownNativeError(native.name))
    return Primitive(result)


def evaluate(expr):
    """Reduces expr until it can no longer progress, returning the resulting Primitive or Function. Raises the first
    EvaluationError encountered.
    """
    while expr.can_progress:
        expr = step(expr)
    return expr


def steps(expr):
    """Lazily yields expr, then every intermediate form of its reduction, ending with its weak normal form. If a step
    fails, the EvaluationError is yielded as the final element instead of being raised. Unbounded if reduction
    diverges.
    """
    yield expr
    while expr.can_progress:
        try:
            expr = step(expr)
        except EvaluationError as error:
            yield error
            return
        yield expr
