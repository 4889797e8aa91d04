import unittest

from lambdamacro.lang.error import LexicalError, ParseError
from lambdamacro.pure.lexer import Lexer
from lambdamacro.pure.lexical import Abstraction, Application, Assignment, Macro, Program, Variable, render
from lambdamacro.pure.parser import parse, parse_expression

x, y, z = Variable("x"), Variable("y"), Variable("z")


class ParseExpressionTestCase(unittest.TestCase):

    def test_parse_expression(self):
        cases = {
            "x": x,
            "  foo ": Variable("foo"),
            "_I": Macro("_I"),
            "(x x)": Application(x, x),
            "(x)": x,
            "((((x))))": x,
            "\\x.x": Abstraction(x, x),
            "λx.x": Abstraction(x, x),
            "\\x.(x y)": Abstraction(x, Application(x, y)),
            "(\\x.x y)": Application(Abstraction(x, x), y),
            "((x y) z)": Application(Application(x, y), z),
            "(x (y z))": Application(x, Application(y, z)),
            "\\x.\\y.(y x)": Abstraction(x, Abstraction(y, Application(y, x))),
            "(_I (\\x.x))": Application(Macro("_I"), Abstraction(x, x)),
            "\\xλy.y": Abstraction(Variable("xλy"), y),
        }
        for case, expected in cases.items():
            self.assertEqual(Program(expected), parse(case), case)

    def test_parse_expression_leaves_rest(self):
        lexer = Lexer("x y")
        self.assertEqual(x, parse_expression(lexer))
        self.assertEqual("x", lexer.get_last_token())

    def test_syntax_errors(self):
        cases = {
            "": ("expression", "EOF"),
            ")": ("expression", ")"),
            "(x": ("expression", "EOF"),
            "(x y": ("')'", "EOF"),
            "(x y z)": ("')'", "z"),
            "\\_I.x": ("variable", "_I"),
            "\\.x": ("variable", "."),
            "\\x x": ("'.'", "x"),
            "\\x.": ("expression", "EOF"),
            "x y": ("end of input", "y"),
            "(\\x.\\y.x) y": ("end of input", "y"),
            "_I x": ("':='", "x"),
            "_I :=": ("expression", "EOF"),
            "x := y": ("end of input", ":="),
            "_I := x)": ("end of input", ")"),
            "λλx.x": ("variable", "λ"),
        }
        for case, (expected, found) in cases.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertEqual(expected, context.exception.expected, case)
            self.assertEqual(found, context.exception.found, case)
            self.assertEqual(f"expected {expected}, found {found}", str(context.exception), case)

    def test_lexical_errors_propagate(self):
        for case in ["(x 1)", "_ := x", "_I : x"]:
            self.assertRaises(LexicalError, parse, case)


class ParseProgramTestCase(unittest.TestCase):

    def test_assignment(self):
        cases = {
            "_I := \\x.x": Assignment(Macro("_I"), Abstraction(x, x)),
            "_K:=λx.λy.x": Assignment(Macro("_K"), Abstraction(x, Abstraction(y, x))),
            "_Self := _Self": Assignment(Macro("_Self"), Macro("_Self")),
            "_A := (x y)": Assignment(Macro("_A"), Application(x, y)),
        }
        for case, expected in cases.items():
            program = parse(case)
            self.assertTrue(program.is_assignment, case)
            self.assertEqual(expected, program.body, case)

    def test_expression(self):
        program = parse("(_I _I)")
        self.assertFalse(program.is_assignment)
        self.assertEqual(Application(Macro("_I"), Macro("_I")), program.body)

    def test_round_trip(self):
        cases = [
            "x",
            "_I",
            "λx.x",
            "(x y)",
            "λf.λx.(f (f x))",
            "((x y) (z λw.w))",
            "λx.(x λy.(y x))",
            "(_S (_K _K))",
            "λxλy.(xλy z)",
            "_I := λx.x",
        ]
        for case in cases:
            self.assertEqual(case, render(parse(case)), case)
            self.assertEqual(case, render(parse(render(parse(case)))), case)

    def test_render_ascii(self):
        self.assertEqual("\\x.(x y)", render(parse("λx.(x y)").body, "\\"))


class NodeTestCase(unittest.TestCase):

    def test_invalid_nodes(self):
        should_raise = {
            ValueError: [lambda: Variable("_x"), lambda: Variable("x1"), lambda: Variable(""),
                         lambda: Variable("λx"),
                         lambda: Macro("x"), lambda: Macro("_"), lambda: Macro("_1")],
            TypeError: [lambda: Abstraction(Macro("_I"), x), lambda: Abstraction(x, "x"),
                        lambda: Application(x, None), lambda: Assignment(x, x)],
        }
        for error, cases in should_raise.items():
            for case in cases:
                self.assertRaises(error, case)

    def test_immutable(self):
        term = Abstraction(x, x)
        with self.assertRaises(AttributeError):
            term.body = y


if __name__ == '__main__':
    unittest.main()
