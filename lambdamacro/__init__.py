"""Untyped lambda calculus interpreter with macros.

Basic program flow for one line of input:
    1. Lexer: scans the line into tokens on demand (see pure/lexer.py, grammar/tokens.py)
    2. Parser: recursive descent over the tokens, producing an AST (see pure/parser.py, pure/lexical.py)
    3. Evaluation: normal-order reduction of the AST, expanding macros from the session's environment as they are
       reached (see pure/reduction.py, lang/environment.py). An assignment binds the normal form of its right-hand
       side to a macro name.

The `lang` directory wraps all of this into sessions, a shell and error reporting.
"""

__version__ = "0.1.0"
