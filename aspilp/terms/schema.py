"""Pydantic models for the term language of mode and example directives.

Everything in a directive is an ``Atom``: a name applied to zero or more
argument atoms. The different roles an atom can play are recognised from
its shape:

- Constants: arity 0, lowercase name, number or quoted string (``a``, ``3``)
- Variables: arity 0, name starting with an uppercase letter or ``_`` (``X``)
- Placemarkers: arity 1, named ``+`` (input), ``-`` (output) or ``$``
  (constant); the single argument is the type atom (``+int``)
- Compounds: any other atom with arguments (``f(X, b)``)

Example:
    >>> head = Atom(name="q", args=(Atom.placemarker(Placemarker.INPUT, "int"),))
    >>> str(head)
    'q(+int)'
    >>> str(Literal(atom=head, negated=True))
    'not q(+int)'

All models are frozen, so atoms and literals can be used as dictionary
keys and set members.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from aspilp.exceptions import InvalidArgumentError

__all__ = [
    "PLACEMARKERS",
    "Atom",
    "Literal",
    "Placemarker",
    "Variable",
    "is_variable_name",
]


class Placemarker(str, Enum):
    """Argument-position roles used in mode directives."""

    INPUT = "+"
    OUTPUT = "-"
    CONSTANT = "$"


PLACEMARKERS = frozenset(p.value for p in Placemarker)


def is_variable_name(name: str) -> bool:
    """Check if a name denotes a variable (uppercase first letter or ``_``)."""
    return bool(name) and (name[0].isupper() or name[0] == "_")


class Atom(BaseModel):
    """A (possibly compound) term.

    Attributes:
        name: Functor, constant or variable name
        args: Argument terms, in order
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Functor, constant or variable name")
    args: tuple[Atom, ...] = Field(default=(), description="Argument terms")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are blank once stripped."""
        v = v.strip()
        if not v:
            raise ValueError("Atom name must not be blank")
        return v

    @model_validator(mode="after")
    def validate_placemarker(self) -> Atom:
        """Placemarkers take exactly one (type) argument."""
        if self.name in PLACEMARKERS and len(self.args) != 1:
            raise ValueError(
                f"Placemarker '{self.name}' needs exactly one type argument, got {len(self.args)}"
            )
        return self

    @classmethod
    def of(cls, name: str, *args: Atom | str) -> Atom:
        """Build an atom, turning plain string arguments into constants/variables."""
        return cls(
            name=name,
            args=tuple(a if isinstance(a, Atom) else cls(name=a) for a in args),
        )

    @classmethod
    def placemarker(cls, role: Placemarker, type_name: str) -> Atom:
        """Build a placemarker atom such as ``+int``."""
        return cls(name=role.value, args=(cls(name=type_name),))

    @property
    def arity(self) -> int:
        return len(self.args)

    def get(self, index: int) -> Atom:
        """Return the argument at ``index`` (0-based)."""
        if index < 0 or index >= len(self.args):
            raise InvalidArgumentError("index", "Atom.get", index)
        return self.args[index]

    def subterms(self) -> Iterator[Atom]:
        """Iterate over the direct arguments of this atom."""
        return iter(self.args)

    def is_variable(self) -> bool:
        return not self.args and is_variable_name(self.name)

    def is_placemarker(self) -> bool:
        return self.name in PLACEMARKERS and len(self.args) == 1

    @property
    def role(self) -> Placemarker | None:
        """Placemarker role, or None if this atom is not a placemarker."""
        if not self.is_placemarker():
            return None
        return Placemarker(self.name)

    @property
    def type_atom(self) -> Atom | None:
        """Type atom of a placemarker, or None."""
        return self.args[0] if self.is_placemarker() else None

    def is_ground(self) -> bool:
        """Check if the term has neither variables nor placemarkers."""
        if self.is_variable() or self.is_placemarker():
            return False
        return all(arg.is_ground() for arg in self.args)

    def variables(self) -> list[str]:
        """Distinct variable names in depth-first, first-occurrence order."""
        seen: list[str] = []
        self._collect_variables(seen)
        return seen

    def _collect_variables(self, seen: list[str]) -> None:
        if self.is_variable():
            if self.name not in seen:
                seen.append(self.name)
            return
        for arg in self.args:
            arg._collect_variables(seen)

    def __str__(self) -> str:
        if self.is_placemarker():
            return f"{self.name}{self.args[0]}"
        if not self.args:
            return self.name
        return f"{self.name}({','.join(str(a) for a in self.args)})"


class Literal(BaseModel):
    """An atom with a polarity.

    Attributes:
        atom: The underlying atom
        negated: Whether this is a default-negated literal (``not atom``)
    """

    model_config = ConfigDict(frozen=True)

    atom: Atom = Field(..., description="The underlying atom")
    negated: bool = Field(default=False, description="Default negation flag")

    def variables(self) -> list[str]:
        return self.atom.variables()

    def positive(self) -> Literal:
        """Return the non-negated version of this literal."""
        if not self.negated:
            return self
        return Literal(atom=self.atom)

    def __str__(self) -> str:
        return f"not {self.atom}" if self.negated else str(self.atom)


class Variable(BaseModel):
    """A clause variable together with its declared type.

    Attributes:
        identifier: Variable name as it appears in the clause (``X``, ``V1``)
        type: Name of the type predicate guarding the variable (``int``)
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="Variable name")
    type: str = Field(..., min_length=1, description="Type predicate name")

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Ensure the identifier is spelled like a variable."""
        if not is_variable_name(v):
            raise ValueError(f"Variable identifier must start uppercase or with '_', got: {v}")
        return v

    def guard(self) -> str:
        """Render the type guard atom, e.g. ``int(X)``."""
        return f"{self.type}({self.identifier})"

    def __str__(self) -> str:
        return self.identifier
