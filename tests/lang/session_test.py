import io
import unittest

from boo.lang.builtins import BUILTINS, prepare
from boo.lang.error import ErrorHandler, NativeFailure, StepLimitExceeded, UnknownIdentifier
from boo.lang.session import Session
from boo.pure.lexical import Assign, Identifier, integer


class BuiltinsTestCase(unittest.TestCase):

    def test_prepare(self):
        expr = prepare(Identifier("x"))
        names = []
        while isinstance(expr, Assign):
            names.append(expr.name)
            expr = expr.body

        self.assertEqual(["+", "-", "*"], names)
        self.assertEqual(Identifier("x"), expr)
        self.assertEqual(["+", "-", "*"], [name for name, __ in BUILTINS])

    def test_builtins_are_closed(self):
        for name, builtin in BUILTINS:
            self.assertEqual(frozenset(), builtin.free_variables, name)


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(fatal=False, out=self.out)

    def test_run(self):
        sess = Session(self.error_handler)
        self.assertEqual(integer(3), sess.run("1 + 2"))
        self.assertEqual(integer(81), sess.run("let x = 9 in x * x"))

        self.assertEqual("3", sess.pop())
        self.assertEqual("81", sess.pop())
        self.assertEqual("", self.out.getvalue())

    def test_errors(self):
        sess = Session(self.error_handler)
        self.assertRaises(UnknownIdentifier, sess.run, "x")
        self.assertRaises(NativeFailure, sess.run, "1 + (fn x -> x)")
        self.assertEqual([], sess.results)

    def test_trace(self):
        sess = Session(self.error_handler, trace=True)
        self.assertEqual(integer(3), sess.run("(fn x -> x) 3"))

        # three built-in lets, then one beta reduction
        lines = self.out.getvalue().splitlines()
        self.assertEqual(5, len(lines))
        self.assertTrue(lines[-1].endswith("3"))

        self.out.truncate(0)
        self.out.seek(0)
        self.assertRaises(UnknownIdentifier, sess.run, "y")
        self.assertEqual(4, len(self.out.getvalue().splitlines()))

    def test_max_steps(self):
        self.assertEqual(integer(3), Session(self.error_handler, max_steps=4).run("(fn x -> x) 3"))
        self.assertEqual(integer(1), Session(self.error_handler, max_steps=0, prelude=False).run("1"))

        with self.assertRaises(StepLimitExceeded) as error:
            Session(self.error_handler, max_steps=3).run("(fn x -> x) 3")
        self.assertEqual(3, error.exception.limit)

        sess = Session(self.error_handler, max_steps=100)
        self.assertRaises(StepLimitExceeded, sess.run, "(fn x -> x x) (fn x -> x x)")

    def test_prelude(self):
        sess = Session(self.error_handler, prelude=False)
        self.assertEqual(integer(3), sess.run("(fn x -> x) 3"))

        with self.assertRaises(UnknownIdentifier) as error:
            sess.run("1 + 2")
        self.assertEqual("+", error.exception.identifier)

    def test_traceback(self):
        sess = Session(self.error_handler, path="prog.boo")
        sess.run("1")
        self.assertEqual((None, None), self.error_handler.traceback["prog.boo"])

        with self.assertRaises(UnknownIdentifier):
            sess.run("x", line_num=4)
        self.assertEqual(("x", 4), self.error_handler.traceback["prog.boo"])


if __name__ == '__main__':
    unittest.main()
