"""Error handling for the Boo language. Only GenericExceptions should be encountered while running: if another type of
error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Taxonomy:
    LexError         - unrecognized character in the source
    ParseError       - malformed token sequence
    EvaluationError  - UnknownIdentifier, InvalidFunctionApplication, MatchWithoutBaseCase, NativeFailure, and the
                       host-imposed StepLimitExceeded
    NativeError      - NativeUnknownIdentifier, InvalidPrimitive, UnknownNativeError; never escapes evaluation, since
                       the reducer wraps it in NativeFailure

Every error is terminal for the evaluation it occurred in.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a Boo error. exprs[0] is the
    offending text, and start/end delimit the part of it that gets underlined in the diagnosis.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LexError(GenericException):
    """Raised on a character that cannot start any token."""

    def __init__(self, source, position):
        self.source = source
        self.position = position
        self.char = source[position]
        super().__init__("unrecognized character '{1}'", (source, self.char), start=position, end=position + 1)


class ParseError(GenericException):
    """Raised on the first token that does not fit the grammar. found is the offending Token (END at end of input)."""

    def __init__(self, source, expected, found):
        self.source = source
        self.expected = expected
        self.found = found

        shown = found.text if found.text else "end of input"
        end = found.end if found.end > found.start else found.start + 1
        super().__init__("expected {1}, found '{2}'", (source, expected, shown), start=found.start, end=end)


class EvaluationError(GenericException):
    """Superclass of the errors reduction can fail with. These have no source position to point at."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class UnknownIdentifier(EvaluationError):
    """Raised when reduction reaches an identifier, which is unbound by construction."""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__("unknown identifier '{}'", identifier)


class InvalidFunctionApplication(EvaluationError):
    """Raised when something other than a function is applied to an argument."""

    def __init__(self, function):
        self.function = function
        super().__init__("'{}' cannot be applied as a function", function.render())


class MatchWithoutBaseCase(EvaluationError):
    """Raised when a match runs out of arms before one matched."""

    def __init__(self, match=None):
        self.match = match
        super().__init__("'{}' has no arm matching its value", match.render() if match else "match")


class NativeFailure(EvaluationError):
    """Wraps the NativeError raised by a native, at the boundary between the native and the reducer."""

    def __init__(self, error):
        self.error = error
        super().__init__("native operation failed: {}", error.msg)


class StepLimitExceeded(EvaluationError):
    """Raised by hosts that impose a step budget. The core reducer never raises it."""

    def __init__(self, limit):
        self.limit = limit
        super().__init__("no weak normal form reached within {} steps", str(limit))


class NativeError(GenericException):
    """Superclass of the errors a native implementation or its context can raise."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class NativeUnknownIdentifier(NativeError):
    """Raised when a native looks up an identifier that was never bound."""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__("'{}' is not bound", identifier)


class InvalidPrimitive(NativeError):
    """Raised when a native's input does not reduce to a primitive value."""

    def __init__(self, expr):
        self.value = expr
        super().__init__("'{}' is not a primitive value", expr.render())


class UnknownNativeError(NativeError):
    """Raised when a native fails in an unexpected way, such as returning something that isn't a primitive."""

    def __init__(self, name):
        self.name = name
        super().__init__("'{}' failed", name)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom Boo errors."""
    ERROR = "red"
    STEP = "cyan"

    def __init__(self, fatal=True, out=None):
        self.fatal = fatal
        self.out = out
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session run."""
        self.traceback[path] = (None, None)

    def register_step(self, num, expr):
        """Prints one intermediate form of a reduction, numbered by how many steps it took to get there."""
        print(colored(f"{num:>4} ", ErrorHandler.STEP, attrs=["bold"]) + expr.render(), file=self.out or sys.stdout)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        # only show the line the error starts on
        line_start = error.expr.rfind("\n", 0, error.start) + 1
        line_end = error.expr.find("\n", error.start)
        line = error.expr[line_start:line_end if line_end != -1 else len(error.expr)]

        start = error.start - line_start
        end = min(max(error.end - line_start, start + 1), len(line) + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        out = self.out or sys.stderr

        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=out)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=out)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # if error occurred, reset traceback

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("expression is nested too deeply: maximum recursion depth exceeded"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
