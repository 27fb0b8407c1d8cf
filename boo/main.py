"""Uses the Boo language engine to evaluate a program from a file or a pipe, or to run in command-line mode. Also uses the
error handling context manager. Called from the boo executable script.

    boo                 interactive shell (when stdin is a terminal)
    boo < program.boo   batch mode: reads all of stdin, evaluates it once, prints the result
    boo program.boo     batch mode on a file
"""

import argparse
import sys

from boo.lang.error import ErrorHandler, GenericException
from boo.lang.session import Session
from boo.lang.shell import Shell


def arguments(argv=None):
    """Parses command-line arguments."""
    parser = argparse.ArgumentParser(prog="boo", description="Evaluates Boo programs.")
    parser.add_argument("file", help="file to evaluate (if empty, reads stdin or goes to command-line mode)", nargs="?")
    parser.add_argument("--trace", help="print every intermediate reduction step", action="store_true")
    parser.add_argument("--max-steps", help="give up after this many reduction steps", type=int,
                        default=Session.MAX_STEPS, metavar="N")
    parser.add_argument("--no-prelude", help="do not install the built-in operators", dest="prelude",
                        action="store_false")
    return parser.parse_args(argv)


def read(path):
    """Returns the contents of path."""
    try:
        with open(path, "r") as file:
            return file.read()
    except OSError:
        raise GenericException("'{}' could not be opened", path, diagnosis=False)


def main(argv=None):
    """Runs the Boo interpreter. Called from the boo executable script."""
    with ErrorHandler() as error_handler:
        args = arguments(argv)
        if args.max_steps is not None and args.max_steps < 0:
            raise GenericException("--max-steps must not be negative, got '{}'", str(args.max_steps), diagnosis=False)

        options = {"trace": args.trace, "max_steps": args.max_steps, "prelude": args.prelude}

        if args.file is not None:
            sess = Session(error_handler, args.file, **options)
            sess.run(read(args.file))
            print(sess.pop())

        elif not sys.stdin.isatty():
            sess = Session(error_handler, Session.STDIN_FILE, **options)
            sess.run(sys.stdin.read())
            print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, **options)).cmdloop()


if __name__ == "__main__":
    main()
