"""Macro environment. One Environment lives as long as its Session and is shared by every line evaluated in it."""

from lambdamacro.lang.error import UnboundMacroError


class Environment:
    """Mapping of macro name to its bound (already reduced) λ-term. Redefining a name overwrites it."""

    def __init__(self, bindings=None):
        self._bindings = dict(bindings) if bindings else {}

    def define(self, name, term):
        self._bindings[name] = term

    def resolve(self, name):
        """Returns the term bound to name, raising an UnboundMacroError if there is none."""
        try:
            return self._bindings[name]
        except KeyError:
            raise UnboundMacroError(name) from None

    def get(self, name, default=None):
        return self._bindings.get(name, default)

    def items(self):
        return self._bindings.items()

    def __contains__(self, name):
        return name in self._bindings

    def __iter__(self):
        return iter(self._bindings)

    def __len__(self):
        return len(self._bindings)

    def __repr__(self):
        return f"Environment({', '.join(self._bindings)})"
