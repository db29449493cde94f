import math
import unittest

import calcparse
from calcparse import productions
from calcparse.ast import Nonterm, Terminal, TerminalTag, Token


def num(value):
    return productions.NUMBER.reduce([Terminal(Token.number(value))])


def op(tag):
    return Terminal(Token(tag))


def power(base, exponent):
    children = [num(base), op(TerminalTag.POWER), num(exponent)]
    return productions.POWER.reduce(children).value


class TestFactorial(unittest.TestCase):
    def test_values(self):
        self.assertEqual(calcparse.factorial(0), 1.0)
        self.assertEqual(calcparse.factorial(1), 1.0)
        self.assertEqual(calcparse.factorial(5), 120.0)
        self.assertEqual(calcparse.factorial(10), 3628800.0)
        self.assertIsInstance(calcparse.factorial(3), float)

    def test_near_integers(self):
        self.assertEqual(calcparse.factorial(5.0000001), 120.0)
        self.assertEqual(calcparse.factorial(4.9999999), 120.0)
        self.assertEqual(calcparse.factorial(-1e-7), 1.0)

    def test_overflow(self):
        self.assertTrue(math.isfinite(calcparse.factorial(170)))
        self.assertEqual(calcparse.factorial(171), math.inf)
        self.assertEqual(calcparse.factorial(1e6), math.inf)

    def test_illegal(self):
        for value in (-1, -3.0, 2.5, 0.001, math.inf, -math.inf, math.nan):
            with self.subTest(value=value):
                self.assertRaises(
                    calcparse.IllegalFactorial, calcparse.factorial, value
                )

    def test_error_has_no_position(self):
        with self.assertRaises(calcparse.SemanticError) as cm:
            calcparse.factorial(2.5)
        self.assertNotIsInstance(cm.exception, calcparse.PositionedError)
        self.assertIn("2.5", str(cm.exception))


class TestSemanticActions(unittest.TestCase):
    def test_number(self):
        result = num(4.5)
        self.assertIsInstance(result, Nonterm)
        self.assertEqual(result.value, 4.5)
        self.assertEqual(result.children, (Terminal(Token.number(4.5)),))

    def test_plus_minus(self):
        plus = productions.PLUS.reduce([num(2), op(TerminalTag.PLUS), num(3)])
        self.assertEqual(plus.value, 5.0)
        minus = productions.MINUS.reduce(
            [num(2), op(TerminalTag.MINUS), num(3)]
        )
        self.assertEqual(minus.value, -1.0)

    def test_power(self):
        self.assertEqual(power(2, 10), 1024.0)
        self.assertEqual(power(4, 0.5), 2.0)
        self.assertEqual(power(2, -1), 0.5)
        self.assertEqual(power(0, 0), 1.0)

    def test_power_special_values(self):
        self.assertEqual(power(0, -1), math.inf)
        self.assertTrue(math.isnan(power(-8, 1 / 3)))
        self.assertEqual(power(10, 400), math.inf)
        self.assertEqual(power(-10, 400), math.inf)
        self.assertEqual(power(-10, 401), -math.inf)
        self.assertEqual(power(math.inf, 2), math.inf)
        self.assertEqual(power(math.nan, 0), 1.0)

    def test_cosine(self):
        result = productions.COSINE.reduce([op(TerminalTag.COSINE), num(0)])
        self.assertEqual(result.value, 1.0)
        result = productions.COSINE.reduce(
            [op(TerminalTag.COSINE), num(math.inf)]
        )
        self.assertTrue(math.isnan(result.value))

    def test_factorial(self):
        result = productions.FACTORIAL.reduce(
            [num(4), op(TerminalTag.FACTORIAL)]
        )
        self.assertEqual(result.value, 24.0)
        self.assertRaises(
            calcparse.IllegalFactorial,
            productions.FACTORIAL.reduce,
            [num(-2), op(TerminalTag.FACTORIAL)],
        )


class TestMalformedReductions(unittest.TestCase):
    def test_wrong_length(self):
        self.assertRaises(
            calcparse.MalformedReduction,
            productions.PLUS.reduce,
            [num(1), num(2)],
        )
        self.assertRaises(
            calcparse.MalformedReduction, productions.NUMBER.reduce, []
        )

    def test_wrong_shape(self):
        cases = [
            (productions.PLUS, [num(1), op(TerminalTag.MINUS), num(2)]),
            (productions.POWER,
             [num(1), op(TerminalTag.POWER), op(TerminalTag.PLUS)]),
            (productions.COSINE, [op(TerminalTag.COSINE),
                                  Terminal(Token.number(1))]),
            (productions.FACTORIAL, [op(TerminalTag.FACTORIAL), num(1)]),
            (productions.NUMBER, [num(1)]),
        ]
        for production, children in cases:
            with self.subTest(production=production):
                self.assertRaises(
                    calcparse.MalformedReduction,
                    production.reduce,
                    children,
                )


class TestProductions(unittest.TestCase):
    def test_table(self):
        self.assertEqual(
            [p.seq for p in calcparse.PRODUCTIONS], [0, 1, 2, 3, 4, 5]
        )
        self.assertEqual(
            [p.length for p in calcparse.PRODUCTIONS], [3, 3, 3, 2, 2, 1]
        )

    def test_repr(self):
        self.assertEqual(
            [repr(p) for p in calcparse.PRODUCTIONS],
            [
                "E ::= E + E.",
                "E ::= E - E.",
                "E ::= E ^ E.",
                "E ::= cos E.",
                "E ::= E !.",
                "E ::= number.",
            ],
        )


if __name__ == "__main__":
    unittest.main()
