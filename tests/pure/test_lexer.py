import unittest

from lambdamacro.grammar.tokens import Token
from lambdamacro.lang.error import LexicalError
from lambdamacro.pure.lexer import Lexer


def tokens(expr):
    return [token for token, __ in Lexer(expr)]


class LexerTestCase(unittest.TestCase):

    def test_next(self):
        cases = {
            "": [Token.EOF],
            "   ": [Token.EOF],
            "(x y)": [Token.LEFT_PAREN, Token.VARIABLE, Token.VARIABLE, Token.RIGHT_PAREN, Token.EOF],
            "\\x.x": [Token.LAMBDA, Token.VARIABLE, Token.DOT, Token.VARIABLE, Token.EOF],
            "λx.x": [Token.LAMBDA, Token.VARIABLE, Token.DOT, Token.VARIABLE, Token.EOF],
            "_I := \\x.x": [Token.MACRO, Token.ASSIGN, Token.LAMBDA, Token.VARIABLE, Token.DOT, Token.VARIABLE,
                            Token.EOF],
            "xλy.y": [Token.VARIABLE, Token.DOT, Token.VARIABLE, Token.EOF],
            "λxλy.y": [Token.LAMBDA, Token.VARIABLE, Token.DOT, Token.VARIABLE, Token.EOF],
            " \t(_foo\tbar ) ": [Token.LEFT_PAREN, Token.MACRO, Token.VARIABLE, Token.RIGHT_PAREN, Token.EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), case)

    def test_identifiers(self):
        cases = {
            "_foo": (Token.MACRO, "_foo"),
            "foo": (Token.VARIABLE, "foo"),
            "_foo1": (Token.MACRO, "_foo"),
            "abc123": (Token.VARIABLE, "abc"),
            "  xyz)": (Token.VARIABLE, "xyz"),
            "xλy": (Token.VARIABLE, "xλy"),
            "_λ": (Token.MACRO, "_λ"),
        }
        for case, (token, identifier) in cases.items():
            lexer = Lexer(case)
            self.assertEqual(token, lexer.next(), case)
            self.assertEqual(identifier, lexer.get_identifier(), case)
            self.assertEqual(identifier, lexer.get_last_token(), case)

    def test_last_token(self):
        lexer = Lexer("(\\x. _I)")
        expected = ["(", "\\", "x", ".", "_I", ")", "EOF"]
        for text in expected:
            lexer.next()
            self.assertEqual(text, lexer.get_last_token())

    def test_lexical_errors(self):
        should_raise = ["_", "_1", "_ x", ":", ":x", "1", "x + y", "[x]", "\\x.x;"]
        for case in should_raise:
            with self.assertRaises(LexicalError, msg=case):
                list(Lexer(case))

    def test_assign_error_names_expected(self):
        cases = {":": "EOF", ":x": "x", ": =": " "}
        for case, found in cases.items():
            with self.assertRaises(LexicalError, msg=case) as context:
                Lexer(case).next()
            self.assertEqual("=", context.exception.expected, case)
            self.assertEqual(found, context.exception.found, case)

    def test_past_end_of_input(self):
        for case in ["", "x", "x   "]:
            lexer = Lexer(case)
            while lexer.next() is not Token.EOF:
                pass
            self.assertRaises(LexicalError, lexer.next)

    def test_peek(self):
        expr = "(_I \\x.(x x))"
        lexer = Lexer(expr)
        reference = Lexer(expr)

        while True:
            peeked = lexer.peek()
            self.assertEqual(peeked, lexer.peek())
            self.assertEqual(peeked, lexer.next())

            expected = reference.next()
            self.assertEqual(expected, peeked)
            self.assertEqual(reference.index, lexer.index)
            self.assertEqual(reference.get_identifier(), lexer.get_identifier())

            if peeked is Token.EOF:
                break

    def test_peek_does_not_consume_error(self):
        lexer = Lexer("x ?")
        lexer.next()
        self.assertRaises(LexicalError, lexer.peek)
        self.assertEqual(1, lexer.index)

    def test_error_position(self):
        with self.assertRaises(LexicalError) as context:
            list(Lexer("(x #)"))
        self.assertEqual(3, context.exception.start)
        self.assertEqual(4, context.exception.end)
        self.assertEqual("(x #)", context.exception.expr)


if __name__ == '__main__':
    unittest.main()
