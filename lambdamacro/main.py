"""Runs the lambda macro interpreter on a script file or in command-line mode. Also uses the error handling context
manager. Called from the lambdamacro executable script.
"""

import argparse

from lambdamacro.grammar.tokens import LAMBDA, LAMBDA_MARKS
from lambdamacro.lang.error import ErrorHandler
from lambdamacro.lang.session import Session
from lambdamacro.lang.shell import Shell
from lambdamacro.pure.reduction import NormalOrderReducer


def non_negative_int(text):
    """argparse type for step limits. 0 means no limit."""
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, not {value}")
    return value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Untyped lambda calculus interpreter with macros.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--max-steps", type=non_negative_int, default=NormalOrderReducer.STEP_LIMIT, metavar="N",
                        help="reduction steps before giving up on a term (0 for no limit, default: %(default)s)")
    parser.add_argument("--trace", action="store_true", help="print every macro expansion and β-reduction")
    parser.add_argument("--ascii", action="store_true", help="print abstractions with '\\' instead of 'λ'")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs the interpreter. Called from the lambdamacro executable script."""
    args = parse_args(argv)
    lambda_mark = LAMBDA_MARKS[0] if args.ascii else LAMBDA

    with ErrorHandler(trace=args.trace, lambda_mark=lambda_mark) as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, step_limit=args.max_steps,
                           lambda_mark=lambda_mark)
            for result in sess.run():
                print(result)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, step_limit=args.max_steps,
                           lambda_mark=lambda_mark)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
