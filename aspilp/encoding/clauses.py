"""Literal-selection encoding of learned clause candidates.

A clause candidate ``head :- b1, ..., bn`` is compiled into a sub-program
in which the solver chooses which positions to keep. Position 0 is the
head, positions 1..n the body literals. For candidate ``0`` with body
``edge(X,Y)`` at level 0 and ``node(Y)`` at level 1 this yields:

    clause(0).
    literal(0,1..2).
    clause_level(0,0) :- use_clause_literal(0,0).
    clause_level(0,0) :- use_clause_literal(0,1).
    clause_level(0,1) :- use_clause_literal(0,2).
    :- not clause_level(0,0), clause_level(0,1).
    #minimize[ use_clause_literal(0,0) =1 @1 ].
    ...
    path(X,Y) :- use_clause_literal(0,0), try_clause_literal(0,1,X,Y),
                 try_clause_literal(0,2,Y), node(X), node(Y).
    try_clause_literal(0,1,X,Y) :- not use_clause_literal(0,1), node(X), node(Y).
    try_clause_literal(0,1,X,Y) :- use_clause_literal(0,1), node(X), node(Y), edge(X,Y).

A "try" atom holds vacuously when its literal is dropped and requires the
literal when it is kept, so a fixed-size rule represents every sub-body.
Levels must be populated contiguously from 0: a literal at level k+1 is
only usable once some literal at level k is selected, whether or not any
literal was declared at level k.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import BaseModel, Field, model_validator

from aspilp.encoding.model import Model, Section
from aspilp.exceptions import InvalidArgumentError
from aspilp.problem.directives import DEFAULT_PRIORITY, DEFAULT_WEIGHT
from aspilp.terms.schema import Atom, Literal, Variable

__all__ = [
    "ClauseCandidate",
    "ClauseEncoder",
    "ClauseHead",
    "ClauseLiteral",
    "SELECTION_RULES",
    "encode_generalisation",
]

logger = logging.getLogger(__name__)

SELECTION_RULES = (
    "{ use_clause_literal(V1,0) } :- clause(V1).",
    "{ use_clause_literal(V1,V2) } :- clause(V1), literal(V1,V2).",
)


class ClauseHead(BaseModel):
    """Head of a clause candidate with its selection cost."""

    atom: Atom = Field(..., description="Head atom")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Cost of keeping the head")
    priority: int = Field(default=DEFAULT_PRIORITY, description="Optimization tier")


class ClauseLiteral(BaseModel):
    """A body literal of a clause candidate.

    Attributes:
        literal: The body literal
        types: Type name for every variable of the literal
        level: Structural level (0 = no prerequisite)
        weight: Cost of keeping the literal
        priority: Optimization tier
    """

    literal: Literal = Field(..., description="Body literal")
    types: dict[str, str] = Field(
        default_factory=dict, description="Variable name -> type name"
    )
    level: int = Field(default=0, ge=0, description="Structural level")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Cost of keeping the literal")
    priority: int = Field(default=DEFAULT_PRIORITY, description="Optimization tier")

    @model_validator(mode="after")
    def validate_types(self) -> ClauseLiteral:
        """Every variable of the literal needs a declared type."""
        missing = [v for v in self.literal.variables() if v not in self.types]
        if missing:
            raise ValueError(f"Untyped variable(s) {missing} in literal {self.literal}")
        return self

    def variables(self) -> list[Variable]:
        """Typed variables of the literal, in order of first occurrence."""
        return [Variable(identifier=v, type=self.types[v]) for v in self.literal.variables()]


class ClauseCandidate(BaseModel):
    """A clause whose body literals may each be kept or dropped."""

    head: ClauseHead = Field(..., description="Clause head")
    body: tuple[ClauseLiteral, ...] = Field(default=(), description="Body literals in order")

    @property
    def size(self) -> int:
        return len(self.body)

    @property
    def levels(self) -> int:
        """Highest structural level used by the body (0 for an empty body)."""
        return max((literal.level for literal in self.body), default=0)

    def get_body(self, pos: int) -> ClauseLiteral:
        """Body literal at 1-based position ``pos``."""
        if pos < 1 or pos > len(self.body):
            raise InvalidArgumentError("pos", "ClauseCandidate.get_body", pos)
        return self.body[pos - 1]

    def __str__(self) -> str:
        if not self.body:
            return f"{self.head.atom}."
        return f"{self.head.atom} :- {', '.join(str(b.literal) for b in self.body)}."


def _check_id(clause_id: int, operation: str) -> None:
    if isinstance(clause_id, bool) or not isinstance(clause_id, int) or clause_id < 0:
        raise InvalidArgumentError("id", operation, clause_id)


def _try_atom(clause_id: int, pos: int, variables: list[Variable]) -> str:
    args = "".join(f",{v.identifier}" for v in variables)
    return f"try_clause_literal({clause_id},{pos}{args})"


def _guards(variables: Iterable[Variable]) -> list[str]:
    """Type guards without duplicates, in first-occurrence order."""
    return list(dict.fromkeys(v.guard() for v in variables))


class ClauseEncoder:
    """Compiles clause candidates into selection sub-programs.

    Every method validates all of its input before producing any
    statement, so a rejected call never leaves partial output behind.
    """

    def encode_head(self, clause_id: int, head: Atom, body: Iterable[ClauseLiteral]) -> str:
        """Rule deriving the head from position 0 and every try atom.

        Args:
            clause_id: Candidate identifier (>= 0)
            head: Head atom
            body: Body literals, in position order

        Returns:
            The head rule
        """
        operation = "ClauseEncoder.encode_head"
        _check_id(clause_id, operation)
        if head is None:
            raise InvalidArgumentError("head", operation, head)
        if body is None:
            raise InvalidArgumentError("body", operation, body)
        body = list(body)
        if any(literal is None for literal in body):
            raise InvalidArgumentError("body", operation, body)

        parts = [f"use_clause_literal({clause_id},0)"]
        typed: list[Variable] = []
        for pos, literal in enumerate(body, start=1):
            variables = literal.variables()
            parts.append(_try_atom(clause_id, pos, variables))
            typed.extend(variables)
        parts.extend(_guards(typed))
        return f"{head} :- {', '.join(parts)}."

    def encode_literal(self, clause_id: int, pos: int, literal: ClauseLiteral) -> list[str]:
        """The two rules defining the try atom of one body position.

        Args:
            clause_id: Candidate identifier (>= 0)
            pos: 1-based body position
            literal: Body literal at that position

        Returns:
            ``[skip_rule, keep_rule]``
        """
        operation = "ClauseEncoder.encode_literal"
        _check_id(clause_id, operation)
        if isinstance(pos, bool) or not isinstance(pos, int) or pos < 1:
            raise InvalidArgumentError("pos", operation, pos)
        if literal is None:
            raise InvalidArgumentError("literal", operation, literal)

        variables = literal.variables()
        head = _try_atom(clause_id, pos, variables)
        guards = "".join(f", {g}" for g in _guards(variables))
        use = f"use_clause_literal({clause_id},{pos})"
        return [
            f"{head} :- not {use}{guards}.",
            f"{head} :- {use}{guards}, {literal.literal}.",
        ]

    def encode_clause(self, clause_id: int, clause: ClauseCandidate) -> list[tuple[Section, str]]:
        """Full selection sub-program of one candidate.

        Args:
            clause_id: Candidate identifier (>= 0)
            clause: The candidate

        Returns:
            ``(section, statement)`` pairs in emission order
        """
        operation = "ClauseEncoder.encode_clause"
        _check_id(clause_id, operation)
        if clause is None:
            raise InvalidArgumentError("clause", operation, clause)
        if clause.head is None:
            raise InvalidArgumentError("head", operation, clause.head)

        cid = clause_id
        result: list[tuple[Section, str]] = [
            (Section.FACTS, f"clause({cid})."),
            (Section.FACTS, f"literal({cid},1..{clause.size})."),
            (Section.CLAUSES, f"clause_level({cid},0) :- use_clause_literal({cid},0)."),
        ]
        for pos in range(1, clause.size + 1):
            level = clause.get_body(pos).level
            result.append(
                (Section.CLAUSES, f"clause_level({cid},{level}) :- use_clause_literal({cid},{pos}).")
            )
        for lvl in range(clause.levels):
            result.append(
                (
                    Section.CONSTRAINTS,
                    f":- not clause_level({cid},{lvl}), clause_level({cid},{lvl + 1}).",
                )
            )

        head = clause.head
        result.append(
            (Section.MINIMIZES, f"#minimize[ use_clause_literal({cid},0) ={head.weight} @{head.priority} ].")
        )
        for pos in range(1, clause.size + 1):
            literal = clause.get_body(pos)
            result.append(
                (
                    Section.MINIMIZES,
                    f"#minimize[ use_clause_literal({cid},{pos}) ={literal.weight} @{literal.priority} ].",
                )
            )

        result.append((Section.CLAUSES, self.encode_head(cid, head.atom, clause.body)))
        for pos in range(1, clause.size + 1):
            for statement in self.encode_literal(cid, pos, clause.get_body(pos)):
                result.append((Section.CLAUSES, statement))
        return result

    def encode(self, clause_id: int, clause: ClauseCandidate, model: Model) -> int:
        """Add the sub-program of one candidate to ``model``.

        Returns:
            Number of new statements
        """
        if model is None:
            raise InvalidArgumentError("model", "ClauseEncoder.encode", model)
        statements = self.encode_clause(clause_id, clause)
        added = sum(model.add(section, statement) for section, statement in statements)
        logger.debug(f"Clause {clause_id}: {added} new statement(s) from {clause}")
        return added


def encode_generalisation(
    clauses: Iterable[ClauseCandidate], base: Model | None = None
) -> Model:
    """Build the literal-selection program for a list of candidates.

    Candidates get identifiers ``0..k-1`` in input order.

    Args:
        clauses: Clause candidates
        base: Optional model (background, examples, ...) to start from;
            it is copied, not modified

    Returns:
        A new Model with the selection rules and every candidate encoded
    """
    if clauses is None:
        raise InvalidArgumentError("clauses", "encode_generalisation", clauses)
    clauses = list(clauses)
    if any(clause is None for clause in clauses):
        raise InvalidArgumentError("clauses", "encode_generalisation", clauses)

    model = Model(base)
    encoder = ClauseEncoder()
    model.add_hide("#hide.")
    model.add_show("#show use_clause_literal/2.")
    for rule in SELECTION_RULES:
        model.add_clause(rule)
    for clause_id, clause in enumerate(clauses):
        encoder.encode(clause_id, clause, model)
    logger.debug(f"Encoded generalisation of {len(clauses)} clause(s)")
    return model
