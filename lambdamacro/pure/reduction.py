"""Normal-order reduction of λ-terms against a macro environment.

Two rewrites exist:
- δ (macro expansion): _NAME -> the term bound to _NAME in the environment
- β (beta reduction): (λx.M N) -> M[x := N], capture-avoiding

The leftmost outermost rewrite is always done first, which finds the normal form whenever one exists. Reduction is
not guaranteed to terminate (e.g. (λx.(x x) λx.(x x))), so the reducer gives up after a configurable number of steps.

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from itertools import count, product
from string import ascii_lowercase

from lambdamacro.lang.error import ConvergenceError
from lambdamacro.pure.lexical import Abstraction, Application, Assignment, Macro, Program, Variable, render


def free_variables(term, env=None):
    """Names of the variables occurring free in term. If env is given, a macro contributes the free variables of the
    term it is bound to (unbound macros contribute nothing).
    """
    if isinstance(term, Variable):
        return {term.name}
    elif isinstance(term, Macro):
        bound_term = env.get(term.name) if env is not None else None
        return free_variables(bound_term, env) if bound_term is not None else set()
    elif isinstance(term, Abstraction):
        return free_variables(term.body, env) - {term.arg.name}
    elif isinstance(term, Application):
        return free_variables(term.left, env) | free_variables(term.right, env)
    raise TypeError(f"not a λ-term: {type(term).__name__}")


def fresh_variable(name, used):
    """Returns a name that isn't in used, trying letters after the last letter of name first (y -> z, a, b, ...)."""
    last = name[-1].lower()
    offset = ascii_lowercase.index(last) + 1 if last in ascii_lowercase else 0
    letters = ascii_lowercase[offset:] + ascii_lowercase[:offset]

    for length in count(1):
        for chars in product(letters, repeat=length):
            candidate = "".join(chars)
            if candidate not in used:
                return candidate


def substitute(term, name, replacement, env=None):
    """Returns term[name := replacement]. Bound variables of term are renamed where replacement would otherwise be
    captured. A macro stands for its bound term, so it is expanded first if name occurs free in that term (needs env).
    """
    if isinstance(term, Variable):
        return replacement if term.name == name else term

    elif isinstance(term, Macro):
        if name in free_variables(term, env):
            return substitute(env.resolve(term.name), name, replacement, env)
        return term

    elif isinstance(term, Application):
        left = substitute(term.left, name, replacement, env)
        right = substitute(term.right, name, replacement, env)
        if left is term.left and right is term.right:
            return term
        return Application(left, right)

    elif isinstance(term, Abstraction):
        arg, body = term.arg, term.body
        if arg.name == name:  # name is shadowed
            return term

        body_free = free_variables(body, env)
        if name not in body_free:
            return term

        replacement_free = free_variables(replacement, env)
        if arg.name in replacement_free:  # α-conversion
            new_arg = Variable(fresh_variable(arg.name, body_free | replacement_free | {name}))
            body = substitute(body, arg.name, new_arg, env)
            arg = new_arg

        return Abstraction(arg, substitute(body, name, replacement, env))

    raise TypeError(f"not a λ-term: {type(term).__name__}")


def alpha_equals(term, other, mapping=None, other_mapping=None):
    """Whether or not two λ-terms are equal up to renaming of bound variables. mapping maps the bound variables of
    term to those of other, other_mapping is the reverse.
    """
    if mapping is None:
        mapping = {}
    if other_mapping is None:
        other_mapping = {}

    if isinstance(term, Variable):
        if not isinstance(other, Variable):
            return False
        if term.name in mapping or other.name in other_mapping:
            return mapping.get(term.name) == other.name and other_mapping.get(other.name) == term.name
        return term.name == other.name

    elif isinstance(term, Macro):
        return isinstance(other, Macro) and term.name == other.name

    elif isinstance(term, Abstraction):
        if not isinstance(other, Abstraction):
            return False
        mapping = {**mapping, term.arg.name: other.arg.name}
        other_mapping = {**other_mapping, other.arg.name: term.arg.name}
        return alpha_equals(term.body, other.body, mapping, other_mapping)

    elif isinstance(term, Application):
        return (isinstance(other, Application)
                and alpha_equals(term.left, other.left, mapping, other_mapping)
                and alpha_equals(term.right, other.right, mapping, other_mapping))

    raise TypeError(f"not a λ-term: {type(term).__name__}")


class NormalOrderReducer:
    """Implements normal-order reduction of λ-terms, expanding macros from env as they are reached."""
    STEP_LIMIT = 100000  # rewrites before giving up; None or 0 means no limit
    DELTA = "δ"
    BETA = "β"

    def __init__(self, env, error_handler=None, step_limit=STEP_LIMIT):
        self.env = env
        self.error_handler = error_handler  # notified of every rewrite, for tracing
        if step_limit is not None and step_limit < 0:
            raise ValueError(f"step limit must be 0 or more, not {step_limit}")
        self.step_limit = step_limit
        self.steps = 0

    def step(self, term):
        """Performs the leftmost outermost rewrite of term. Returns (kind, new term), or None if term is in normal
        form.
        """
        if isinstance(term, Variable):
            return None

        elif isinstance(term, Macro):
            return NormalOrderReducer.DELTA, self.env.resolve(term.name)

        elif isinstance(term, Application):
            if term.is_redex:
                arg, body = term.left.nodes
                return NormalOrderReducer.BETA, substitute(body, arg.name, term.right, self.env)

            result = self.step(term.left)
            if result is not None:
                kind, left = result
                return kind, Application(left, term.right)

            result = self.step(term.right)
            if result is not None:
                kind, right = result
                return kind, Application(term.left, right)
            return None

        elif isinstance(term, Abstraction):
            result = self.step(term.body)
            if result is not None:
                kind, body = result
                return kind, Abstraction(term.arg, body)
            return None

        raise TypeError(f"not a λ-term: {type(term).__name__}")

    def reduce(self, term):
        """Rewrites term until it is in normal form. Raises ConvergenceError if the step limit is reached first. A term
        that rewrites to itself is reported once through the error handler's warn.
        """
        self.steps = 0
        warned = False
        result = self.step(term)

        while result is not None:
            if self.step_limit and self.steps >= self.step_limit:
                raise ConvergenceError(self.steps)

            previous = term
            kind, term = result
            self.steps += 1
            if self.error_handler is not None:
                self.error_handler.register_step(kind, term)

                if not warned and term == previous:  # a fixed point of rewriting never reaches normal form
                    warned = True
                    expr = render(previous, self.error_handler.lambda_mark)
                    self.error_handler.warn("'{}' does not have a β-normal form", expr)

            result = self.step(term)

        return term

    def evaluate(self, program):
        """Evaluates a Program. An expression is reduced to normal form; an assignment reduces its term first and only
        then binds it, so a failed assignment leaves env unchanged. Either way the normal form is returned.
        """
        body = program.body if isinstance(program, Program) else program

        if isinstance(body, Assignment):
            term = self.reduce(body.term)
            self.env.define(body.name.name, term)
            return term
        return self.reduce(body)
