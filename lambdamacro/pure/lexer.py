"""Lexical scanning of a single input line. Tokens are produced on demand: the lexer keeps a cursor into the line and
has no token buffer, so lookahead is done by saving and restoring the cursor (see peek).
"""

from lambdamacro.grammar.tokens import LAMBDA_MARKS, MACRO_PREFIX, Token
from lambdamacro.lang.error import LexicalError


def is_letter(char):
    """Letters make up identifiers."""
    return char.isalpha()


class Lexer:
    """Converts a line of text into Tokens. A new Lexer should be made for every line."""
    SINGLE_CHARS = {
        "(": Token.LEFT_PAREN,
        ")": Token.RIGHT_PAREN,
        ".": Token.DOT,
        **{mark: Token.LAMBDA for mark in LAMBDA_MARKS}
    }

    def __init__(self, expr):
        self.expr = expr
        self.index = 0           # cursor; len(expr) + 1 once EOF has been produced
        self.start = 0           # where the last produced token begins, used for error messages
        self.identifier = None   # text of the last MACRO/VARIABLE token
        self.last_token = None   # surface text of the last token

    def get_identifier(self):
        """Text of the last scanned MACRO or VARIABLE token. Stale if the last token was neither."""
        return self.identifier

    def get_last_token(self):
        """Surface text of the last produced token ("EOF" for end of input)."""
        return self.last_token

    def peek(self):
        """Returns what next would return without consuming anything. Idempotent."""
        state = self.index, self.start, self.identifier, self.last_token
        try:
            return self.next()
        finally:
            self.index, self.start, self.identifier, self.last_token = state

    def next(self):
        """Scans and returns the next Token, advancing past it."""
        if self.index > len(self.expr):
            raise LexicalError("unexpected end of input", line=self.expr, start=len(self.expr))

        while self.index < len(self.expr) and self.expr[self.index].isspace():
            self.index += 1

        self.start = self.index
        if self.index == len(self.expr):
            self.index += 1
            self.last_token = Token.EOF.value
            return Token.EOF

        char = self.expr[self.index]

        if char in Lexer.SINGLE_CHARS:
            self.index += 1
            self.last_token = char
            return Lexer.SINGLE_CHARS[char]

        elif char == ":":
            self.index += 1
            self._expect("=", "=")
            self.index += 1
            self.last_token = Token.ASSIGN.value
            return Token.ASSIGN

        elif char == MACRO_PREFIX:
            self.index += 1
            self._expect("identifier", is_letter)
            self.identifier = MACRO_PREFIX + self._scan_letters()
            self.last_token = self.identifier
            return Token.MACRO

        elif is_letter(char):  # a leading lambda letter was taken as LAMBDA above
            self.identifier = self._scan_letters()
            self.last_token = self.identifier
            return Token.VARIABLE

        raise LexicalError("unexpected character '{}'", char, found=char, line=self.expr, start=self.index,
                           end=self.index + 1)

    def _expect(self, expected, accept):
        """Raises a LexicalError unless the character under the cursor is accepted. accept is either the wanted
        character or a predicate.
        """
        if self.index == len(self.expr):
            found = Token.EOF.value
        else:
            found = self.expr[self.index]
            if found == accept or (callable(accept) and accept(found)):
                return

        raise LexicalError("expected {}, found {}", (expected, found), expected=expected, found=found,
                           line=self.expr, start=self.start, end=self.index + 1)

    def _scan_letters(self):
        """Consumes and returns the run of letters under the cursor."""
        begin = self.index
        while self.index < len(self.expr) and is_letter(self.expr[self.index]):
            self.index += 1
        return self.expr[begin:self.index]

    def __iter__(self):
        """Yields (token, identifier) pairs up to and including EOF."""
        while True:
            token = self.next()
            yield token, self.identifier if token.carries_identifier else None
            if token is Token.EOF:
                return
