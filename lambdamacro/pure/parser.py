"""Recursive-descent parser. Each procedure implements one rule of the grammar (see grammar/tokens.py) and consumes
tokens from a Lexer:

```
P -> A | E          ; A is chosen when the first token is a macro
A -> M := E
E -> (E E) | (E) | λV.E | V | M
```

Every mismatch raises a ParseError naming what was expected and the surface text of what was found.
"""

from lambdamacro.grammar.tokens import Token
from lambdamacro.lang.error import ParseError
from lambdamacro.pure.lexer import Lexer
from lambdamacro.pure.lexical import Abstraction, Application, Assignment, Macro, Program, Variable


def _error(lexer, expected):
    return ParseError(expected, lexer.get_last_token(), line=lexer.expr, start=lexer.start, end=lexer.index)


def parse(expr):
    """Parses a whole line into a Program."""
    return parse_program(Lexer(expr))


def parse_program(lexer):
    """P -> A | E, followed by the end of input."""
    if lexer.peek() is Token.MACRO:
        program = Program(parse_assignment(lexer))
    else:
        program = Program(parse_expression(lexer))

    if lexer.next() is not Token.EOF:
        raise _error(lexer, "end of input")
    return program


def parse_assignment(lexer):
    """A -> M := E"""
    if lexer.next() is not Token.MACRO:
        raise _error(lexer, "assignment")
    name = Macro(lexer.get_identifier())

    if lexer.next() is not Token.ASSIGN:
        raise _error(lexer, "':='")

    return Assignment(name, parse_expression(lexer))


def parse_expression(lexer):
    """E -> (E E) | (E) | λV.E | V | M"""
    token = lexer.next()

    if token is Token.LEFT_PAREN:
        left = parse_expression(lexer)

        if lexer.peek() is Token.RIGHT_PAREN:  # (E): parentheses do not make a node
            lexer.next()
            return left

        right = parse_expression(lexer)
        if lexer.next() is not Token.RIGHT_PAREN:
            raise _error(lexer, "')'")
        return Application(left, right)

    elif token is Token.LAMBDA:
        if lexer.next() is not Token.VARIABLE:
            raise _error(lexer, "variable")
        arg = Variable(lexer.get_identifier())

        if lexer.next() is not Token.DOT:
            raise _error(lexer, "'.'")
        return Abstraction(arg, parse_expression(lexer))

    elif token is Token.VARIABLE:
        return Variable(lexer.get_identifier())

    elif token is Token.MACRO:
        return Macro(lexer.get_identifier())

    raise _error(lexer, "expression")
