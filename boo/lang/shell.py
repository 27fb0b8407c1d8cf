"""Handles interactive/command-line mode for the Boo interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Boo interpreter shell: reads one expression, evaluates it, prints the result or the error, and loops."""
    intro = "Boo interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False  # an error only ends the current line

        self._tmp_line = ""
        self.line_num = 0

    @staticmethod
    def is_open(line):
        """Whether line has unclosed parentheses or braces, and so continues on the next line."""
        return line.count("(") > line.count(")") or line.count("{") > line.count("}")

    def default(self, line):
        """Evaluates an arbitrary Boo expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line = f"{self._tmp_line} {line}" if self._tmp_line else line

            if Shell.is_open(line):
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.run(line, self.line_num)
            print(self.sess.pop(), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Boo interpreter!\n\n"
              "Boo is a small, lazy, purely functional language over arbitrary-precision \n"
              "integers. Each line is one expression: try '9 + 5 * 3 - 4', or \n"
              "'let square = fn x -> x * x in square 12'. Functions are curried \n"
              "('fn x y -> x - y'), and 'match n { 0 -> 1; _ -> n }' picks the first arm \n"
              "whose pattern matches.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
