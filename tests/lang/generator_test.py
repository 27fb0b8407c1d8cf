import unittest

from boo.lang.builtins import prepare
from boo.lang.generator import ProgramGenerator
from boo.pure.lexical import Primitive
from boo.pure.parser import parse
from boo.pure.reducer import evaluate


class ProgramGeneratorTestCase(unittest.TestCase):

    def test_reproducible(self):
        first = list(ProgramGenerator(seed=7).programs(10))
        second = list(ProgramGenerator(seed=7).programs(10))
        self.assertEqual(first, second)

    def test_closed(self):
        for program in ProgramGenerator(seed=11).programs(50):
            self.assertEqual(frozenset(), prepare(program).free_variables, program.render())

    def test_evaluates_to_integer(self):
        for program in ProgramGenerator(seed=1234, max_depth=3).programs(50):
            self.assertIsInstance(evaluate(prepare(program)), Primitive, program.render())

    def test_round_trip(self):
        # rendering then reparsing a program must not change what it evaluates to
        for program in ProgramGenerator(seed=42, max_depth=3).programs(50):
            reparsed = parse(program.render())
            self.assertTrue(reparsed.alpha_equals(program), program.render())
            self.assertEqual(evaluate(prepare(program)), evaluate(prepare(reparsed)), program.render())

    def test_depth(self):
        for program in ProgramGenerator(seed=3, max_depth=0).programs(20):
            self.assertIsInstance(program, Primitive)


if __name__ == '__main__':
    unittest.main()
