import unittest
from operator import add

from boo.pure.lexical import (Anything, Apply, Assign, Function, Identifier, Literal, Match, Native, alpha_convert,
                              fresh, function, infix, integer, split)
from boo.pure.native import operator
from boo.pure.primitive import Integer

a, b, n, x, y = Identifier("a"), Identifier("b"), Identifier("n"), Identifier("x"), Identifier("y")


class NamingTestCase(unittest.TestCase):

    def test_split(self):
        cases = {
            "x": ("x", -1),
            "x_12": ("x", 12),
            "x_1_2": ("x_1", 2),
            "_x": ("_x", -1),
            "x_": ("x_", -1),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, split(case), case)

    def test_fresh(self):
        self.assertEqual("x_1", fresh("x", {"x"}))
        self.assertEqual("x_4", fresh("x", {"x", "x_3", "y_7"}))
        self.assertEqual("x_3", fresh("x_2", {"x_2"}))

    def test_alpha_convert(self):
        parameter, body = alpha_convert("x", Apply(x, Identifier("x_1")), frozenset({"y"}))
        self.assertEqual("x_2", parameter)
        self.assertEqual(Apply(Identifier("x_2"), Identifier("x_1")), body)


class RenderTestCase(unittest.TestCase):

    def test_render(self):
        cases = [
            (integer(5), "5"),
            (integer(-14), "-14"),
            (x, "x"),
            (Function("x", infix("+", x, integer(1))), "fn x -> ((x) + (1))"),
            (Apply(Function("x", x), integer(7)), "(fn x -> (x)) (7)"),
            (Apply(Apply(Identifier("f"), x), y), "((f) (x)) (y)"),
            (infix("-", integer(-5), integer(3)), "(-5) - (3)"),
            (Assign("width", integer(9), infix("*", Identifier("width"), Identifier("width"))),
             "let width = 9 in (width) * (width)"),
            (Match(n, [(Literal(Integer(0)), integer(1)), (Anything(), integer(2))]), "match n { 0 -> 1; _ -> 2 }"),
            (Match(n, ()), "match n { }"),
            (operator("+", add), "fn left -> (fn right -> (+))"),
        ]
        for expr, expected in cases:
            self.assertEqual(expected, expr.render())
            self.assertEqual(expected, str(expr))


class FreeVariablesTestCase(unittest.TestCase):

    def test_free_variables(self):
        plus = operator("+", add)
        cases = [
            (integer(1), set()),
            (x, {"x"}),
            (Function("x", Apply(x, y)), {"y"}),
            (Assign("x", x, x), {"x"}),
            (Assign("x", y, x), {"y"}),
            (Match(a, [(Anything(), b)]), {"a", "b"}),
            (plus, set()),
            (plus.body.body, {"left", "right"}),
            (plus.body.body.sub("left", y), {"y", "right"}),
        ]
        for expr, expected in cases:
            self.assertEqual(frozenset(expected), expr.free_variables, expr.render())


class SubstitutionTestCase(unittest.TestCase):

    def test_sub(self):
        one = integer(1)
        cases = [
            (x, x, one, one),
            (y, x, one, y),
            (Function("x", x), x, one, Function("x", x)),
            (Function("y", x), x, one, Function("y", one)),
            (Apply(x, y), x, one, Apply(one, y)),
            (Assign("x", x, x), x, one, Assign("x", one, x)),
            (Assign("y", x, Apply(x, y)), x, one, Assign("y", one, Apply(one, y))),
            (Match(x, [(Literal(Integer(0)), x), (Anything(), y)]), x, one,
             Match(one, [(Literal(Integer(0)), one), (Anything(), y)])),
        ]
        for expr, var, new_term, expected in cases:
            self.assertEqual(expected, expr.sub(var.name, new_term), expr.render())

    def test_sub_unchanged(self):
        expr = Function("x", Apply(x, y))
        self.assertIs(expr, expr.sub("z", integer(1)))
        self.assertIs(expr, expr.sub("x", integer(1)))

        native = operator("+", add).body.body
        self.assertIs(native, native.sub("z", integer(1)))

    def test_capture_avoidance(self):
        # the free x being substituted in must not be captured by the binder
        renamed = Function("x", y).sub("y", x)
        self.assertEqual(Function("x_1", x), renamed)
        self.assertTrue(renamed.alpha_equals(Function("z", x)))
        self.assertFalse(renamed.alpha_equals(Function("x", x)))

        renamed = Function("x", Apply(Identifier("x_1"), y)).sub("y", x)
        self.assertEqual(Function("x_2", Apply(Identifier("x_1"), x)), renamed)

        renamed = Assign("x", integer(1), Apply(x, y)).sub("y", x)
        self.assertEqual(Assign("x_1", integer(1), Apply(Identifier("x_1"), x)), renamed)

        renamed = function(["x", "y"], Apply(Identifier("z"), Apply(x, y))).sub("z", Apply(x, y))
        self.assertTrue(renamed.alpha_equals(function(["p", "q"], Apply(Apply(x, y), Apply(Identifier("p"),
                                                                                             Identifier("q"))))))

    def test_native_bindings(self):
        native = operator("+", add).body.body
        bound = native.sub("left", integer(1))
        self.assertEqual((("left", integer(1)),), bound.bindings)

        # parameters are bound once; later substitutions go into the bound values
        self.assertIs(bound, bound.sub("left", integer(2)))

        bound = native.sub("left", y).sub("y", integer(3)).sub("right", integer(4))
        self.assertEqual((("left", integer(3)), ("right", integer(4))), bound.bindings)
        self.assertEqual(frozenset(), bound.free_variables)

    def test_native_equality(self):
        first = Native("+", add, ("left", "right"))
        second = Native("+", lambda left, right: left, ("left", "right"))
        self.assertEqual(first, second)
        self.assertNotEqual(first, Native("-", add, ("left", "right")))


class AlphaEqualsTestCase(unittest.TestCase):

    def test_alpha_equals(self):
        should_pass = [
            (Function("x", x), Function("y", y)),
            (function(["x", "y"], x), function(["a", "b"], a)),
            (Assign("x", y, x), Assign("a", y, a)),
            (Match(x, [(Anything(), x)]), Match(x, [(Anything(), x)])),
            (operator("+", add), operator("+", add)),
            (integer(3), integer(3)),
        ]
        for expr, other in should_pass:
            self.assertTrue(expr.alpha_equals(other), expr.render())

        should_fail = [
            (Function("x", y), Function("y", y)),
            (function(["x", "y"], x), function(["a", "a"], a)),
            (Assign("x", x, x), Assign("a", a, a)),
            (x, y),
            (integer(3), integer(4)),
            (Match(x, [(Anything(), x)]), Match(x, [(Literal(Integer(0)), x)])),
            (Match(x, [(Anything(), x)]), Match(x, ())),
            (Apply(x, y), Apply(y, x)),
            (operator("+", add), operator("-", add)),
        ]
        for expr, other in should_fail:
            self.assertFalse(expr.alpha_equals(other), expr.render())


if __name__ == '__main__':
    unittest.main()
