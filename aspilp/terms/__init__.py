"""Term language shared by directives and clause candidates.

Atoms, literals and typed variables are frozen pydantic models so they can
key the directive stores of a problem. ``parse_atom``/``parse_literal``
turn the source syntax (``q(+int)``, ``not p(a)``) into those models.
"""

from aspilp.terms.schema import (
    PLACEMARKERS,
    Atom,
    Literal,
    Placemarker,
    Variable,
    is_variable_name,
)
from aspilp.terms.parser import parse_atom, parse_literal

__all__ = [
    # Schema
    "Atom",
    "Literal",
    "Variable",
    "Placemarker",
    "PLACEMARKERS",
    "is_variable_name",
    # Parsing
    "parse_atom",
    "parse_literal",
]
