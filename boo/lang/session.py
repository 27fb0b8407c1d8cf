"""Session control for the Boo language. A Session takes source text all the way to a value: it parses it, installs the
built-ins, and reduces it, optionally printing every step and enforcing a step budget. Used by both the interactive
shell and batch mode.
"""

from boo.lang.builtins import prepare
from boo.lang.error import EvaluationError, StepLimitExceeded
from boo.pure.parser import parse
from boo.pure.reducer import evaluate, steps


class Session:
    """Governs the evaluation of Boo programs read from one source (a file, stdin, or the shell)."""
    SH_FILE = "<in>"      # command-line interpreter filename
    STDIN_FILE = "<stdin>"
    MAX_STEPS = None      # no step budget unless one is asked for

    def __init__(self, error_handler, path=SH_FILE, trace=False, max_steps=MAX_STEPS, prelude=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.trace = trace          # whether or not to print every intermediate form
        self.max_steps = max_steps  # host-imposed step budget, None for unbounded
        self.prelude = prelude      # whether or not to install the built-in operators

        self.results = []

    def run(self, source, line_num=1):
        """Parses and evaluates source, which must hold exactly one expression. Returns the resulting value and also
        appends it to self.results. Raises the first error encountered.
        """
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        expr = parse(source)
        if self.prelude:
            expr = prepare(expr)

        if self.trace or self.max_steps is not None:
            result = self.reduce(expr)
        else:
            result = evaluate(expr)

        self.error_handler.remove_line(self.path)  # error was not raised
        self.results.append(result)
        return result

    def reduce(self, expr):
        """Evaluates expr one step at a time, so that steps can be traced and counted."""
        result = expr
        for num, form in enumerate(steps(expr)):
            if isinstance(form, EvaluationError):
                raise form
            if self.max_steps is not None and num > self.max_steps:
                raise StepLimitExceeded(self.max_steps)
            if self.trace:
                self.error_handler.register_step(num, form)
            result = form
        return result

    def pop(self):
        """Removes and returns the rendered text of the oldest result."""
        return self.results.pop(0).render()
