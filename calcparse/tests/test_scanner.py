import io
import math
import unittest

import calcparse
from calcparse import TerminalTag, Token


PLUS = Token(TerminalTag.PLUS)
MINUS = Token(TerminalTag.MINUS)
POWER = Token(TerminalTag.POWER)
COSINE = Token(TerminalTag.COSINE)
FACTORIAL = Token(TerminalTag.FACTORIAL)


def N(value):
    return Token.number(value)


class TestNumbers(unittest.TestCase):
    def assertNumber(self, text, expected):
        tokens = calcparse.tokenize(text)
        self.assertEqual(len(tokens), 1, tokens)
        self.assertIs(tokens[0].tag, TerminalTag.NUMBER)
        self.assertTrue(
            tokens[0].fuzzy_eq(N(expected)),
            "%r: %r != %r" % (text, tokens[0].value, expected),
        )

    def test_values(self):
        cases = [
            ("0", 0.0),
            ("7", 7.0),
            ("12345", 12345.0),
            ("+7", 7.0),
            ("-7", -7.0),
            ("2.", 2.0),
            ("0.5", 0.5),
            (".03", 0.03),
            ("3.14159", 3.14159),
            ("67.e-3", 0.067),
            ("-633e-2", -6.33),
            ("1e+2", 100.0),
            ("3.06e+2", 306.0),
            ("-.89", -0.89),
            (".008e+2", 0.8),
            ("0e5", 0.0),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                self.assertNumber(text, expected)

    def test_out_of_range(self):
        self.assertEqual(calcparse.tokenize("1e400"), [N(math.inf)])
        self.assertEqual(calcparse.tokenize("-1e400"), [N(-math.inf)])
        self.assertEqual(calcparse.tokenize("1e-400"), [N(0.0)])

    def test_values_are_floats(self):
        (token,) = calcparse.tokenize("42")
        self.assertIsInstance(token.value, float)


class TestTokenSequences(unittest.TestCase):
    def assertTokens(self, text, expected):
        observed = calcparse.tokenize(text)
        self.assertEqual(len(observed), len(expected), observed)
        for o, e in zip(observed, expected):
            self.assertTrue(o.fuzzy_eq(e), "%r: %r != %r" % (text, o, e))

    def test_whitespace(self):
        self.assertTokens(" cos\r\n4\t^", [COSINE, N(4), POWER])

    def test_sign_after_number_is_operator(self):
        self.assertTokens("30e-1+6", [N(3.0), PLUS, N(6)])
        self.assertTokens("3-3", [N(3), MINUS, N(3)])
        self.assertTokens("3 -3", [N(3), MINUS, N(3)])

    def test_sign_without_number_is_operator(self):
        self.assertTokens("3+^4", [N(3), PLUS, POWER, N(4)])
        self.assertTokens("+", [PLUS])
        self.assertTokens("3--", [N(3), MINUS, MINUS])

    def test_trailing_sign_binds_to_number(self):
        self.assertTokens("10e-1+-2", [N(1.0), PLUS, N(-2)])
        self.assertTokens("3--3", [N(3), MINUS, N(-3)])
        self.assertTokens("-3", [N(-3)])

    def test_sign_after_operator_binds_to_number(self):
        self.assertTokens("cos-3", [COSINE, N(-3)])
        self.assertTokens("2^-1", [N(2), POWER, N(-1)])
        self.assertTokens("3!-2", [N(3), FACTORIAL, N(-2)])

    def test_operators(self):
        self.assertTokens(
            "1+2-3^4!cos5",
            [N(1), PLUS, N(2), MINUS, N(3), POWER, N(4), FACTORIAL, COSINE,
             N(5)],
        )

    def test_adjacent_numbers(self):
        self.assertTokens("1 2", [N(1), N(2)])
        self.assertTokens("39.0+3 .8", [N(39), PLUS, N(3), N(0.8)])

    def test_empty(self):
        self.assertEqual(calcparse.tokenize(""), [])
        self.assertEqual(calcparse.tokenize(" \n\t "), [])


class TestLexer(unittest.TestCase):
    def test_scan(self):
        lexer = calcparse.Lexer("1+2")
        self.assertEqual(lexer.scan(), N(1))
        self.assertEqual(lexer.scan(), PLUS)
        self.assertEqual(lexer.scan(), N(2))
        self.assertIsNone(lexer.scan())
        self.assertIsNone(lexer.scan())

    def test_stream_source(self):
        lexer = calcparse.Lexer(io.StringIO("cos 0 !"))
        self.assertEqual(lexer.complete_scan(), [COSINE, N(0), FACTORIAL])

    def test_iteration(self):
        self.assertEqual(list(calcparse.Lexer("1 ^ 2")), [N(1), POWER, N(2)])

    def test_position(self):
        lexer = calcparse.Lexer("12 +\n 3")
        self.assertEqual(lexer.position, (1, 1))
        lexer.scan()
        self.assertEqual(lexer.position, (1, 3))
        lexer.scan()
        self.assertEqual(lexer.position, (1, 5))
        lexer.scan()
        self.assertEqual(lexer.position, (2, 3))
        self.assertEqual((lexer.line, lexer.character), (2, 3))
        self.assertIsNone(lexer.scan())


class TestLexerErrors(unittest.TestCase):
    cases = [
        (".", calcparse.EmptyNumber, 1, 2),
        ("-.", calcparse.EmptyNumber, 1, 3),
        ("3e", calcparse.MissingInteger, 1, 3),
        ("83.3e-", calcparse.MissingInteger, 1, 7),
        ("01", calcparse.LeadingZero, 1, 2),
        ("1e05", calcparse.LeadingZero, 1, 4),
        ("co4", calcparse.IncompleteCosine, 1, 3),
        ("c", calcparse.IncompleteCosine, 1, 2),
        ("dos", calcparse.IllegalCharacter, 1, 1),
        ("\n\n x", calcparse.IllegalCharacter, 3, 2),
        ("+e", calcparse.IllegalCharacter, 1, 2),
    ]

    def test_errors(self):
        for text, errorType, line, character in self.cases:
            with self.subTest(text=text):
                lexer = calcparse.Lexer(text)
                with self.assertRaises(errorType) as cm:
                    lexer.complete_scan()
                self.assertIsInstance(cm.exception, calcparse.LexError)
                self.assertEqual(cm.exception.line, line)
                self.assertEqual(cm.exception.character, character)
                self.assertEqual(cm.exception.position, (line, character))

    def test_message(self):
        with self.assertRaises(calcparse.LeadingZero) as cm:
            calcparse.tokenize("1+01")
        self.assertEqual(cm.exception.description, "Illegal leading zero.")
        self.assertEqual(str(cm.exception), "[1:4] Illegal leading zero.")

    def test_tokens_before_error(self):
        lexer = calcparse.Lexer("1 + x")
        self.assertEqual(lexer.scan(), N(1))
        self.assertEqual(lexer.scan(), PLUS)
        self.assertRaises(calcparse.IllegalCharacter, lexer.scan)


class TestTokens(unittest.TestCase):
    def test_value_rules(self):
        self.assertRaises(ValueError, Token, TerminalTag.NUMBER)
        self.assertRaises(ValueError, Token, TerminalTag.PLUS, 1.0)

    def test_immutable(self):
        token = N(3)
        with self.assertRaises(AttributeError):
            token.value = 4.0
        with self.assertRaises(AttributeError):
            token.tag = TerminalTag.PLUS
        with self.assertRaises(AttributeError):
            del token.value
        self.assertEqual(token, N(3))

    def test_equality(self):
        self.assertEqual(N(1), N(1.0))
        self.assertNotEqual(N(1), N(1.0000001))
        self.assertNotEqual(PLUS, MINUS)
        self.assertEqual(len({N(2), N(2.0), PLUS, Token(TerminalTag.PLUS)}),
                         2)

    def test_fuzzy_equality(self):
        self.assertTrue(N(1.0000001).fuzzy_eq(N(1)))
        self.assertFalse(N(1.01).fuzzy_eq(N(1)))
        self.assertFalse(N(1).fuzzy_eq(PLUS))
        self.assertTrue(PLUS.fuzzy_eq(Token(TerminalTag.PLUS)))
        self.assertTrue(N(math.nan).fuzzy_eq(N(math.nan)))

    def test_repr(self):
        self.assertEqual(repr(N(3)), "[NUMBER] value=3.0")
        self.assertEqual(repr(COSINE), "[COSINE]")
        self.assertEqual(str(N(2.5)), "2.5")
        self.assertEqual(str(COSINE), "cos")


class TestTokenStream(unittest.TestCase):
    def test_scan(self):
        stream = calcparse.TokenStream([N(1), PLUS])
        self.assertEqual(stream.scan(), N(1))
        self.assertEqual(stream.scan(), PLUS)
        self.assertIsNone(stream.scan())
        self.assertEqual(stream.position, (None, None))


if __name__ == "__main__":
    unittest.main()
