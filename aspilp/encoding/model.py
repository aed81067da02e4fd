"""Sectioned container for generated ASP statements.

A ``Model`` holds statements grouped into fixed sections and renders them
in a canonical order:

    hide/show directives, constants, domains, externals, examples,
    mode heads, mode bodies, computes, maximize objectives,
    minimize objectives, derivation rules, facts, constraints

Within a section statements are deduplicated and sorted
lexicographically, so the rendered text only depends on *which*
statements were added, never on the order in which they were added.
Non-empty sections are separated by a blank line.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from aspilp.exceptions import InvalidArgumentError, InvariantError

__all__ = ["Model", "Section", "SECTION_ORDER"]

logger = logging.getLogger(__name__)


class Section(str, Enum):
    """Named output sections, declared in rendering order."""

    HIDESHOWS = "hideshows"
    CONSTANTS = "constants"
    DOMAINS = "domains"
    EXTERNALS = "externals"
    EXAMPLES = "examples"
    MODEHEADS = "modeheads"
    MODEBODIES = "modebodies"
    COMPUTES = "computes"
    MAXIMIZES = "maximizes"
    MINIMIZES = "minimizes"
    CLAUSES = "clauses"
    FACTS = "facts"
    CONSTRAINTS = "constraints"


SECTION_ORDER: tuple[Section, ...] = tuple(Section)

_DIRECTIVE_SECTIONS = (
    ("#hide", Section.HIDESHOWS),
    ("#show", Section.HIDESHOWS),
    ("#const", Section.CONSTANTS),
    ("#domain", Section.DOMAINS),
    ("#external", Section.EXTERNALS),
    ("#compute", Section.COMPUTES),
    ("#maximize", Section.MAXIMIZES),
    ("#minimize", Section.MINIMIZES),
)


class Model:
    """A set of standard ASP statements organised in sections.

    Every successful addition that changes the content sets the
    ``modified`` flag; subclasses use it to invalidate derived data.
    """

    def __init__(self, source: Model | None = None) -> None:
        """Create an empty model, or a copy of the base statements of ``source``.

        Args:
            source: Model whose statements are copied (only the sections
                stored by ``Model`` itself; subclass data is not copied)
        """
        self._statements: dict[Section, set[str]] = {s: set() for s in SECTION_ORDER}
        if source is not None:
            for section, statements in source._statements.items():
                self._statements[section].update(statements)
        self._modified = False
        self._check_invariant("Model.__init__")

    def _invariant(self) -> bool:
        return self._statements is not None and all(
            self._statements.get(s) is not None for s in SECTION_ORDER
        )

    def _check_invariant(self, operation: str) -> None:
        if not self._invariant():
            raise InvariantError(f"Illegal state in {operation}")

    def _update(self) -> None:
        """Mark this model as changed."""
        self._modified = True

    def _commit(self) -> None:
        """Clear the changed flag."""
        self._modified = False

    def is_modified(self) -> bool:
        return self._modified

    def add(self, section: Section, statement: str) -> bool:
        """Add a statement to a section.

        Args:
            section: Target section
            statement: Statement text (surrounding whitespace is stripped)

        Returns:
            True if the statement was not already present

        Raises:
            InvalidArgumentError: If the statement is missing or blank
        """
        if not isinstance(section, Section):
            raise InvalidArgumentError("section", "Model.add", section)
        if statement is None or not str(statement).strip():
            raise InvalidArgumentError("statement", "Model.add", statement)
        statement = str(statement).strip()
        bucket = self._statements[section]
        result = statement not in bucket
        if result:
            bucket.add(statement)
            self._update()
        self._check_invariant("Model.add")
        return result

    def add_all(self, section: Section, statements: Iterable[str]) -> int:
        """Add several statements to a section, returning how many were new."""
        return sum(1 for statement in statements if self.add(section, statement))

    def add_hide(self, statement: str) -> bool:
        return self.add(Section.HIDESHOWS, statement)

    def add_show(self, statement: str) -> bool:
        return self.add(Section.HIDESHOWS, statement)

    def add_constant(self, statement: str) -> bool:
        return self.add(Section.CONSTANTS, statement)

    def add_domain(self, statement: str) -> bool:
        return self.add(Section.DOMAINS, statement)

    def add_external(self, statement: str) -> bool:
        return self.add(Section.EXTERNALS, statement)

    def add_compute(self, statement: str) -> bool:
        return self.add(Section.COMPUTES, statement)

    def add_maximize(self, statement: str) -> bool:
        return self.add(Section.MAXIMIZES, statement)

    def add_minimize(self, statement: str) -> bool:
        return self.add(Section.MINIMIZES, statement)

    def add_clause(self, statement: str) -> bool:
        return self.add(Section.CLAUSES, statement)

    def add_fact(self, statement: str) -> bool:
        return self.add(Section.FACTS, statement)

    def add_constraint(self, statement: str) -> bool:
        return self.add(Section.CONSTRAINTS, statement)

    def add_statement(self, statement: str) -> bool:
        """Add a background statement to the section its syntax belongs to.

        Directives are recognised by their keyword (``#const``, ``#show``,
        ...), constraints by a leading ``:-``, rules by a ``:-`` anywhere else or
        a choice brace; everything else is a fact.
        """
        if statement is None or not str(statement).strip():
            raise InvalidArgumentError("statement", "Model.add_statement", statement)
        text = str(statement).strip()
        for prefix, section in _DIRECTIVE_SECTIONS:
            if text.startswith(prefix):
                return self.add(section, text)
        if text.startswith(":-"):
            return self.add_constraint(text)
        if ":-" in text or "{" in text:
            return self.add_clause(text)
        return self.add_fact(text)

    def merge(self, other: Model) -> int:
        """Add every base statement of ``other`` to this model.

        Returns:
            Number of statements that were new
        """
        if other is None:
            raise InvalidArgumentError("other", "Model.merge", other)
        return sum(self.add_all(s, other._statements[s]) for s in SECTION_ORDER)

    def statements(self, section: Section) -> list[str]:
        """Sorted statements of a section."""
        return sorted(self._section_statements(section))

    def _section_statements(self, section: Section) -> set[str]:
        """Statements rendered for a section; subclasses may add listings."""
        return self._statements[section]

    def clear(self) -> None:
        """Remove every statement."""
        if any(self._statements.values()):
            for bucket in self._statements.values():
                bucket.clear()
            self._update()
        self._check_invariant("Model.clear")

    def is_empty(self) -> bool:
        return not any(self._statements.values())

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._statements.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self._statements == other._statements

    __hash__ = None  # mutable

    def render(self) -> str:
        """Render all sections as newline-terminated text.

        Returns:
            The encoding text, or an empty string for an empty model
        """
        blocks = []
        for section in SECTION_ORDER:
            lines = self.statements(section)
            if lines:
                blocks.append("\n".join(lines))
        logger.debug(f"Rendered {len(blocks)} non-empty sections")
        return "\n\n".join(blocks) + "\n" if blocks else ""

    def __str__(self) -> str:
        return self.render()
