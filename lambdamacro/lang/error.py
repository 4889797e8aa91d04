"""Error handling for the lambda macro interpreter. Only GenericExceptions should be encountered during running: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Error kinds:
- LexicalError: unrecognized character, truncated ':=', or reading past the end of the line
- ParseError: expected token/nonterminal not found, always reported as "expected X, found Y"
- UnboundMacroError: macro referenced but never defined
- ConvergenceError: reduction step budget exhausted before reaching a normal form

All of them abort the current line only.
"""

import sys

from termcolor import colored

from lambdamacro.grammar.tokens import LAMBDA
from lambdamacro.pure.lexical import render


class GenericException(Exception):
    """Templates an error message so that it can be used to throw an interpreter error. The `{}` slots of msg are
    filled with exprs (bolded). line, start and end point at the offending part of the input line, if known.
    """

    def __init__(self, msg, exprs=None, line=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException."""
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.plain_msg = msg.format(*exprs)
        super().__init__(self.plain_msg)

        self.expr = line if line is not None else ""
        self.start = start
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal


class LexicalError(GenericException):
    """Raised by the lexer. If the lexer knows which character it wanted, expected is set."""

    def __init__(self, msg, exprs=None, expected=None, found=None, **kwargs):
        super().__init__(msg, exprs, **kwargs)
        self.expected = expected
        self.found = found


class ParseError(GenericException):
    """Expected token/nonterminal was not found at the current position."""

    def __init__(self, expected, found, **kwargs):
        super().__init__("expected {}, found {}", (expected, found), **kwargs)
        self.expected = expected
        self.found = found


class UnboundMacroError(GenericException):

    def __init__(self, name, **kwargs):
        super().__init__("macro '{}' is not defined", name, diagnosis=False, **kwargs)
        self.name = name


class ConvergenceError(GenericException):

    def __init__(self, steps, **kwargs):
        super().__init__("did not converge: no normal form after {} reduction steps", str(steps), diagnosis=False,
                         **kwargs)
        self.steps = steps


class ErrorHandler:
    """Context manager that will report and suppress interpreter errors. If fatal, reporting an error exits."""
    ERROR = "red"
    WARNING = "magenta"
    TRACE = "cyan"

    def __init__(self, fatal=True, trace=False, lambda_mark=LAMBDA):
        self.fatal = fatal
        self.trace = trace              # whether or not to print every reduction step
        self.lambda_mark = lambda_mark  # used to render traced terms
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session execute."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session execute."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, term):
        """Prints a single rewrite of the reducer if tracing. kind is 'δ' (macro expansion) or 'β'."""
        if self.trace:
            print(colored(f"  {kind} {render(term, self.lambda_mark)}", ErrorHandler.TRACE, attrs=["dark"]))

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args (see GenericException). Does not interrupt anything."""
        warning = GenericException(*args, **kwargs)

        warning_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                warning_msg += colored(f"{file}:{line_num}: ", attrs=["bold"])

        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg
        print(warning_msg)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for file in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(file)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("term is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
