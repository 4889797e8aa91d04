"""Session control for the interpreter. A Session owns the macro environment and evaluates lines one at a time, either
from the command line or from a script file.
"""

from lambdamacro.grammar.tokens import LAMBDA
from lambdamacro.lang.environment import Environment
from lambdamacro.lang.error import GenericException
from lambdamacro.pure.lexical import render
from lambdamacro.pure.parser import parse
from lambdamacro.pure.reduction import NormalOrderReducer


class Session:
    """Governs a session, with control over the macro environment."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, step_limit=NormalOrderReducer.STEP_LIMIT,
                 lambda_mark=LAMBDA):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.step_limit = step_limit
        self.lambda_mark = lambda_mark  # marker used when printing abstractions

        self.env = Environment()
        self.lines = []    # list of (line num, line) to run, in script mode
        self.results = []  # rendered results that haven't been popped yet

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        line = self.preprocess_line(line)
                        if line:
                            self.lines.append((line_num + 1, line))
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips comments and trailing whitespace from a line. Returns an empty string if nothing is left."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]
        return line.rstrip()

    def execute(self, line, line_num=None):
        """Parses and evaluates a single line, returning its rendered normal form (None if the line is empty). Errors
        propagate to the caller; the environment is only modified by an assignment that reduced successfully.
        """
        line = self.preprocess_line(line)
        if not line.strip():
            return None

        if line_num is not None:
            self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        program = parse(line)
        reducer = NormalOrderReducer(self.env, self.error_handler, self.step_limit)
        result = render(reducer.evaluate(program), self.lambda_mark)

        if line_num is not None:
            self.error_handler.remove_line(self.path)  # error was not raised

        self.results.append(result)
        return result

    def run(self):
        """Runs every line of this session's script in order, yielding each result as soon as it is computed. Will
        raise any errors that are encountered.
        """
        for line_num, line in self.lines:
            self.execute(line, line_num)
            yield self.pop()

    def pop(self):
        """Pops the oldest result that hasn't been displayed."""
        return self.results.pop(0)
