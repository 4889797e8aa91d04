"""Pure lambda calculus abstract syntax tree, extended with macro references and macro assignments.

Formally, a λ-term can be defined as

```
<λ-term> ::= <variable>                 ; one or more letters
           | <macro>                    ; "_" followed by one or more letters, bound in the environment
           | "λ" <variable> "." <λ-term>  ; "abstraction"
           | "(" <λ-term> <λ-term> ")"    ; "application", always parenthesized
```

Nodes are immutable: reduction builds new nodes instead of rewriting old ones, so a subtree may safely be shared by
several terms at once (which happens every time an argument is substituted more than once).

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from dataclasses import dataclass
from typing import Union

from lambdamacro.grammar.tokens import LAMBDA, MACRO_PREFIX


def is_variable_name(name):
    """Letters only. A leading lambda letter would be read back as the abstraction marker."""
    return isinstance(name, str) and name.isalpha() and not name.startswith(LAMBDA)


def is_macro_name(name):
    return isinstance(name, str) and name.startswith(MACRO_PREFIX) and name[len(MACRO_PREFIX):].isalpha()


class LambdaTerm:
    """Superclass of every evaluable node: Variable, Macro, Abstraction or Application."""

    @property
    def nodes(self):
        """Children of this node, left to right. Leaves have none."""
        return ()

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Bound or free occurrence of a variable."""
    name: str

    def __post_init__(self):
        if not is_variable_name(self.name):
            raise ValueError(f"'{self.name}' is not a valid variable name")


@dataclass(frozen=True)
class Macro(LambdaTerm):
    """Reference to a named term in the environment."""
    name: str

    def __post_init__(self):
        if not is_macro_name(self.name):
            raise ValueError(f"'{self.name}' is not a valid macro name")


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """λarg.body"""
    arg: Variable
    body: LambdaTerm

    def __post_init__(self):
        if not isinstance(self.arg, Variable):
            raise TypeError(f"abstraction must bind a Variable, not {type(self.arg).__name__}")
        if not isinstance(self.body, LambdaTerm):
            raise TypeError(f"abstraction body must be a LambdaTerm, not {type(self.body).__name__}")

    @property
    def nodes(self):
        return self.arg, self.body


@dataclass(frozen=True)
class Application(LambdaTerm):
    """(left right)"""
    left: LambdaTerm
    right: LambdaTerm

    def __post_init__(self):
        for node in (self.left, self.right):
            if not isinstance(node, LambdaTerm):
                raise TypeError(f"application child must be a LambdaTerm, not {type(node).__name__}")

    @property
    def nodes(self):
        return self.left, self.right

    @property
    def is_redex(self):
        """An Application is a redex if its left child is an Abstraction."""
        return isinstance(self.left, Abstraction)


@dataclass(frozen=True)
class Assignment:
    """_NAME := term. Not itself evaluable: it binds name in the environment."""
    name: Macro
    term: LambdaTerm

    def __post_init__(self):
        if not isinstance(self.name, Macro):
            raise TypeError(f"only macros can be assigned, not {type(self.name).__name__}")

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class Program:
    """Root of one parsed input line."""
    body: Union[Assignment, LambdaTerm]

    @property
    def is_assignment(self):
        return isinstance(self.body, Assignment)

    def __str__(self):
        return render(self.body)


def render(term, lambda_mark=LAMBDA):
    """Returns the concrete syntax of term, which the parser accepts back."""
    if isinstance(term, (Variable, Macro)):
        return term.name
    elif isinstance(term, Abstraction):
        return f"{lambda_mark}{term.arg.name}.{render(term.body, lambda_mark)}"
    elif isinstance(term, Application):
        return f"({render(term.left, lambda_mark)} {render(term.right, lambda_mark)})"
    elif isinstance(term, Assignment):
        return f"{term.name.name} := {render(term.term, lambda_mark)}"
    elif isinstance(term, Program):
        return render(term.body, lambda_mark)
    raise TypeError(f"cannot render {type(term).__name__}")
