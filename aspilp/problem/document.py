"""JSON problem documents.

A problem document describes a learning problem in plain JSON; atoms and
literals are written in the usual source syntax and checked while the
document is validated:

    {
        "background": ["int(1..3).", "p(X) :- q(X)."],
        "displays": [{"name": "q", "arity": 1}],
        "examples": [
            {"fact": "p(1)"},
            {"fact": "not p(2)", "weight": 2, "priority": 1}
        ],
        "modeheads": [{"head": "q(+int)", "lower": 0, "upper": 2}],
        "modebodies": [{"body": "r(+int, -int)", "bound": 2}]
    }

``ProblemDocument.to_problem()`` replays every entry through the
``ProblemSpec.add_*`` operations, so the same validation applies as for
programmatic construction.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from aspilp.encoding.directives import DirectiveEncoder
from aspilp.problem.spec import ProblemSpec
from aspilp.terms.parser import parse_atom, parse_literal

__all__ = [
    "DisplayEntry",
    "ExampleEntry",
    "ModeBodyEntry",
    "ModeHeadEntry",
    "ProblemDocument",
    "load_problem",
]

logger = logging.getLogger(__name__)


class DisplayEntry(BaseModel):
    """A ``name/arity`` pair to display."""

    name: str = Field(..., min_length=1, description="Predicate name")
    arity: int = Field(default=0, ge=0, description="Predicate arity")


class ExampleEntry(BaseModel):
    """An example directive."""

    fact: str = Field(..., description="Example literal, e.g. 'not p(a)'")
    weight: int | None = Field(default=None, description="Optional weight")
    priority: int | None = Field(default=None, description="Optional priority")

    @field_validator("fact")
    @classmethod
    def validate_fact(cls, v: str) -> str:
        parse_literal(v)
        return v


class ModeHeadEntry(BaseModel):
    """A head mode directive."""

    head: str = Field(..., description="Mode atom, e.g. 'q(+int)'")
    lower: int | None = Field(default=None, ge=0, description="Lower cardinality bound")
    upper: int | None = Field(default=None, ge=0, description="Upper cardinality bound")
    weight: int | None = Field(default=None, description="Optional weight")
    priority: int | None = Field(default=None, description="Optional priority")

    @field_validator("head")
    @classmethod
    def validate_head(cls, v: str) -> str:
        parse_atom(v)
        return v


class ModeBodyEntry(BaseModel):
    """A body mode directive."""

    body: str = Field(..., description="Mode literal, e.g. 'not r(+int)'")
    bound: int | None = Field(default=None, ge=0, description="Maximum occurrences")
    weight: int | None = Field(default=None, description="Optional weight")
    priority: int | None = Field(default=None, description="Optional priority")

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        parse_literal(v)
        return v


class ProblemDocument(BaseModel):
    """Complete learning problem as loaded from JSON."""

    background: list[str] = Field(
        default_factory=list, description="Background statements in ASP syntax"
    )
    displays: list[DisplayEntry] = Field(default_factory=list, description="Display pairs")
    display_all: bool = Field(default=False, description="Display every atom")
    examples: list[ExampleEntry] = Field(default_factory=list, description="Examples")
    modeheads: list[ModeHeadEntry] = Field(default_factory=list, description="Head modes")
    modebodies: list[ModeBodyEntry] = Field(default_factory=list, description="Body modes")

    @field_validator("background")
    @classmethod
    def validate_background(cls, v: list[str]) -> list[str]:
        """Background statements must be non-blank and end with a period."""
        for statement in v:
            if not statement.strip().endswith("."):
                raise ValueError(f"Background statement must end with '.', got: {statement!r}")
        return v

    def to_problem(self, encoder: DirectiveEncoder | None = None) -> ProblemSpec:
        """Build a ProblemSpec from this document.

        Args:
            encoder: Directive encoder for the problem (default: no bridging)

        Returns:
            The populated problem
        """
        problem = ProblemSpec(encoder=encoder)
        for statement in self.background:
            problem.add_statement(statement)
        for display in self.displays:
            problem.add_display(display.name, display.arity)
        if self.display_all:
            problem.add_display_all()
        for entry in self.modeheads:
            problem.add_mode_head(
                parse_atom(entry.head), entry.lower, entry.upper, entry.weight, entry.priority
            )
        for entry in self.modebodies:
            problem.add_mode_body(
                parse_literal(entry.body), entry.bound, entry.weight, entry.priority
            )
        for entry in self.examples:
            problem.add_example(parse_literal(entry.fact), entry.weight, entry.priority)
        logger.debug(
            f"Loaded problem: {len(self.examples)} example(s), "
            f"{len(self.modeheads)} head mode(s), {len(self.modebodies)} body mode(s)"
        )
        return problem


def load_problem(path: str | Path, encoder: DirectiveEncoder | None = None) -> ProblemSpec:
    """Load a problem document from a JSON file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If the document does not match the schema
        InvalidArgumentError: If an entry violates a ProblemSpec contract
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return ProblemDocument.model_validate(data).to_problem(encoder=encoder)
