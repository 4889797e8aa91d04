"""Token model for the lambda calculus with macros. The lexer produces these tokens on demand and the parser consumes
them by recursive descent.

Formally, the grammar of one input line can be defined as

```
<program>    ::= <assignment> | <expression>   ; <assignment> is chosen when the line starts with a macro
<assignment> ::= <macro> ":=" <expression>
<expression> ::= "(" <expression> <expression> ")"  ; application
               | "(" <expression> ")"               ; parenthesized expression (no node of its own)
               | "λ" <variable> "." <expression>    ; abstraction ("\" may be used in place of "λ")
               | <variable>
               | <macro>
<variable>   ::= <letter>+
<macro>      ::= "_" <letter>+
```

Source: https://opendsa-server.cs.vt.edu/ODSA/Books/PL/html/Syntax.html
"""

from enum import Enum


LAMBDA_MARKS = ("\\", "λ")  # interchangeable abstraction markers
LAMBDA = "λ"
MACRO_PREFIX = "_"


class Token(Enum):
    """Lexical categories. Fixed tokens carry their surface text as value; MACRO and VARIABLE carry the scanned
    identifier separately (see Lexer.identifier).
    """
    EOF = "EOF"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LAMBDA = LAMBDA
    DOT = "."
    ASSIGN = ":="
    MACRO = "macro"
    VARIABLE = "variable"

    @property
    def carries_identifier(self):
        return self in (Token.MACRO, Token.VARIABLE)
