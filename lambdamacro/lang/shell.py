"""Handles interactive/command-line mode for the interpreter. Uses cmd as backend."""

import cmd

from lambdamacro.pure.lexical import render


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell. Commands start with ':' so that any identifier stays a valid expression."""
    intro = "Lambda calculus interpreter :: macros edition\nType '?' or ':help' for more information."
    prompt = "> "
    COMMAND_PREFIX = ":"

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

    def parseline(self, line):
        """Only ':'-prefixed lines, '?' and the end-of-input sentinel are commands. Everything else goes to default."""
        line = line.strip()
        if line == "EOF":  # cmd.Cmd feeds this line when input runs out
            return "EOF", "", line
        elif line.startswith("?"):
            return super().parseline(line)
        elif line.startswith(Shell.COMMAND_PREFIX):
            command, arg, rest = super().parseline(line[len(Shell.COMMAND_PREFIX):])
            if command and hasattr(self, "do_" + command):
                return command, arg, rest
        return None, None, line  # unknown commands fall through and fail to lex

    def default(self, line):
        """Evaluates an arbitrary line: an expression or a macro assignment."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.execute(line)

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the λ interpreter!\n\n"
              "Terms are variables (x), abstractions (\\x.x or λx.x) and applications, which are \n"
              "always parenthesized: ((\\x.x) y). Names starting with '_' are macros.\n\n"
              "Try it out by typing '_I := \\x.x'. This will bind the λ-term '\\x.x' to the \n"
              "macro '_I'. Next, try typing '(_I y)'. This will apply '_I' to 'y', giving 'y' \n"
              "as the result.\n\n"
              "Commands start with ':'. Type ':env' to list every macro defined so far and ':exit' \n"
              "to leave. Any other line is evaluated, so 'exit' is just a variable. A line reading \n"
              "exactly 'EOF' is reserved and also leaves the interpreter.")

    def do_env(self, arg):
        """Lists macros defined in this session."""
        for name, term in self.sess.env.items():
            print(f"{name} := {render(term, self.sess.lambda_mark)}")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
