"""The problem aggregate: background model plus learning directives.

A ``ProblemSpec`` is a ``Model`` (the background statements, already in
standard form) that additionally stores

- display directives (``#display name/arity.`` or ``#display.``)
- example directives (``#example p(a) =2 @1.``)
- body mode directives, grouped by ascending priority
- head mode directives
- the type set found in the mode directives

The directives are not standard ASP. ``derive()`` copies the background
into a fresh ``Model`` and appends their encoding; the result is cached
until the next successful mutation:

    problem = ProblemSpec()
    problem.add_mode_head(parse_atom("q(+int)"), 1, 1)
    problem.add_example(parse_literal("q(3)"))
    model = problem.derive()
    assert problem.derive() is model  # no mutation in between
"""

from __future__ import annotations

import logging

from aspilp.encoding.directives import DirectiveEncoder
from aspilp.encoding.model import Model, Section
from aspilp.exceptions import InvalidArgumentError
from aspilp.problem.directives import (
    ExampleDirective,
    ModeBodyDirective,
    ModeHeadDirective,
    check_optional_int,
    normalize_bounds,
)
from aspilp.problem.types import TypeExtractor
from aspilp.terms.schema import Atom, Literal

__all__ = ["ProblemSpec"]

logger = logging.getLogger(__name__)


class ProblemSpec(Model):
    """Learning problem with a lazily derived, cached encoding.

    Every ``add_*`` either extends exactly one collection (and marks the
    problem modified) or changes nothing. Re-adding a directive with the
    same annex data succeeds without a change; re-adding it with
    different annex data is rejected and returns False.
    """

    def __init__(self, encoder: DirectiveEncoder | None = None) -> None:
        """Create an empty problem.

        Args:
            encoder: Directive encoder used by ``derive``/``induce``
                (default: ``DirectiveEncoder()`` without bridging rules)
        """
        self._display_all = False
        self._displays: dict[str, set[int]] = {}
        self._examples: dict[Literal, ExampleDirective] = {}
        self._modebodies: dict[int, dict[Literal, ModeBodyDirective]] = {}
        self._modeheads: dict[Atom, ModeHeadDirective] = {}
        self._types = TypeExtractor()
        self._model: Model | None = None
        self._encoder = encoder or DirectiveEncoder()
        super().__init__()

    def _invariant(self) -> bool:
        return (
            super()._invariant()
            and self._displays is not None
            and self._examples is not None
            and self._modebodies is not None
            and self._modeheads is not None
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add_display(self, name: str, arity: int) -> bool:
        """Record that atoms ``name/arity`` are visible in the output.

        Returns:
            True if the pair was not already recorded
        """
        operation = "ProblemSpec.add_display"
        if name is None or not str(name).strip():
            raise InvalidArgumentError("name", operation, name)
        if isinstance(arity, bool) or not isinstance(arity, int) or arity < 0:
            raise InvalidArgumentError("arity", operation, arity)
        arities = self._displays.setdefault(str(name).strip(), set())
        result = arity not in arities
        if result:
            arities.add(arity)
            self._update()
        self._check_invariant(operation)
        return result

    def add_display_all(self) -> None:
        """Make every atom visible regardless of display pairs."""
        if not self._display_all:
            self._display_all = True
            self._update()
        self._check_invariant("ProblemSpec.add_display_all")

    def add_example(
        self, fact: Literal, weight: int | None = None, priority: int | None = None
    ) -> bool:
        """Add an example directive.

        Args:
            fact: Example literal (negated for a negative example)
            weight: Optional weight (default 1)
            priority: Optional priority (default 1)

        Returns:
            True if added or already present with the same annex data,
            False if present with different annex data (nothing changes)

        Raises:
            InvalidArgumentError: If ``fact`` is missing or an annex value is not an int
        """
        operation = "ProblemSpec.add_example"
        if not isinstance(fact, Literal):
            raise InvalidArgumentError("fact", operation, fact)
        check_optional_int(weight, "weight", operation)
        check_optional_int(priority, "priority", operation)

        directive = ExampleDirective(fact=fact, weight=weight, priority=priority)
        result = self._store(self._examples, fact, directive, operation)
        self._check_invariant(operation)
        return result

    def add_mode_body(
        self,
        body: Literal,
        bound: int | None = None,
        weight: int | None = None,
        priority: int | None = None,
    ) -> bool:
        """Add a body mode directive.

        Args:
            body: Mode literal with placemarkers
            bound: Optional maximum number of occurrences (default 1)
            weight: Optional weight (default 1)
            priority: Optional priority (default 1)

        Returns:
            Same convention as ``add_example``

        Raises:
            InvalidArgumentError: If ``body`` is missing or has a variable
                argument, ``bound`` is negative or an annex value is not an int
        """
        operation = "ProblemSpec.add_mode_body"
        if not isinstance(body, Literal):
            raise InvalidArgumentError("body", operation, body)
        if body.variables():
            raise InvalidArgumentError("body", operation, str(body))
        check_optional_int(bound, "bound", operation, non_negative=True)
        check_optional_int(weight, "weight", operation)
        check_optional_int(priority, "priority", operation)

        self._types.extract(body.atom)
        directive = ModeBodyDirective(body=body, bound=bound, weight=weight, priority=priority)
        for group in self._modebodies.values():
            if body in group:
                result = self._store(group, body, directive, operation)
                break
        else:
            group = self._modebodies.setdefault(directive.effective_priority, {})
            result = self._store(group, body, directive, operation)
        self._check_invariant(operation)
        return result

    def add_mode_head(
        self,
        head: Atom,
        lower: int | None = None,
        upper: int | None = None,
        weight: int | None = None,
        priority: int | None = None,
    ) -> bool:
        """Add a head mode directive.

        Args:
            head: Mode atom with placemarkers
            lower: Optional lower cardinality bound (requires ``upper``)
            upper: Optional upper cardinality bound (requires ``lower``)
            weight: Optional weight (default 1)
            priority: Optional priority (default 1)

        Returns:
            Same convention as ``add_example``

        Raises:
            InvalidArgumentError: If ``head`` is missing or has a variable
                argument, only one bound is given, a bound is negative or an
                annex value is not an int
        """
        operation = "ProblemSpec.add_mode_head"
        if not isinstance(head, Atom):
            raise InvalidArgumentError("head", operation, head)
        if head.variables():
            raise InvalidArgumentError("head", operation, str(head))
        lower, upper = normalize_bounds(lower, upper, operation)
        check_optional_int(weight, "weight", operation)
        check_optional_int(priority, "priority", operation)

        self._types.extract(head)
        directive = ModeHeadDirective(
            head=head, lower=lower, upper=upper, weight=weight, priority=priority
        )
        result = self._store(self._modeheads, head, directive, operation)
        self._check_invariant(operation)
        return result

    def _store(self, store: dict, key: object, directive: object, operation: str) -> bool:
        previous = store.get(key)
        if previous is None:
            store[key] = directive
            self._update()
            return True
        if previous == directive:
            return True
        logger.warning(f"{operation}: '{previous}' already present, rejected '{directive}'")
        return False

    def clear(self) -> None:
        """Remove every statement, directive, display and type."""
        super().clear()
        self._display_all = False
        self._displays.clear()
        self._examples.clear()
        self._modebodies.clear()
        self._modeheads.clear()
        self._types.clear()
        self._model = None
        self._update()
        self._check_invariant("ProblemSpec.clear")

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def derive(self) -> Model:
        """Return the background plus the encoding of heads and examples.

        The result is cached: without an intervening successful mutation
        the same object is returned again.
        """
        if self._model is None or self.is_modified():
            logger.debug("Deriving model (cache miss)")
            model = Model(self)
            self._encoder.encode_mode_heads(self._modeheads.values(), model)
            self._encoder.encode_examples(self._examples.values(), model)
            self._encode_reporting(model)
            self._model = model
            self._commit()
        else:
            logger.debug("Returning cached model")
        self._check_invariant("ProblemSpec.derive")
        return self._model

    def induce(self) -> Model:
        """Return the background plus everything but the head-mode encoding.

        Always recomputed; the cache is neither read nor written.
        """
        model = Model(self)
        self._encoder.encode_examples(self._examples.values(), model)
        self._encode_reporting(model)
        self._check_invariant("ProblemSpec.induce")
        return model

    def _encode_reporting(self, model: Model) -> None:
        self._encoder.encode_displays(self.displays(), model)
        self._encoder.encode_filters(
            self.mode_head_directives(), self.mode_body_directives(), self.types(), model
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_abducible(self) -> bool:
        """True if at least one head directive exists."""
        return bool(self._modeheads)

    def is_displayable(self, candidate: Atom) -> bool:
        if candidate is None:
            raise InvalidArgumentError("candidate", "ProblemSpec.is_displayable", candidate)
        return candidate.arity in self._displays.get(candidate.name, ())

    def is_display_all(self) -> bool:
        return self._display_all

    def is_empty(self) -> bool:
        return (
            not self._display_all
            and not self._displays
            and not self._examples
            and not self._modebodies
            and not self._modeheads
            and (self._model is None or self._model.is_empty())
            and super().is_empty()
        )

    def displays(self) -> list[tuple[str, int]]:
        """Display pairs ordered by name and arity."""
        return sorted(
            (name, arity) for name, arities in self._displays.items() for arity in arities
        )

    def types(self) -> list[Atom]:
        return self._types.types()

    def modes(self) -> dict[int, list[ModeBodyDirective]]:
        """Body directives grouped by priority, in ascending priority order."""
        return {p: list(self._modebodies[p].values()) for p in sorted(self._modebodies)}

    def example_directives(self) -> list[ExampleDirective]:
        return sorted(self._examples.values(), key=lambda e: str(e.fact))

    def mode_head_directives(self) -> list[ModeHeadDirective]:
        return sorted(self._modeheads.values(), key=lambda d: str(d.head))

    def mode_body_directives(self) -> list[ModeBodyDirective]:
        return [d for group in self.modes().values() for d in group]

    def examples(self) -> list[str]:
        """Example directives in source form, sorted."""
        return sorted(str(d) for d in self._examples.values())

    def modeheads(self) -> list[str]:
        """Head directives in source form, sorted."""
        return sorted(str(d) for d in self._modeheads.values())

    def modebodies(self) -> list[str]:
        """Body directives in source form, sorted."""
        return sorted(str(d) for d in self.mode_body_directives())

    def _section_statements(self, section: Section) -> set[str]:
        statements = set(super()._section_statements(section))
        if section is Section.HIDESHOWS:
            statements.update(f"#display {name}/{arity}." for name, arity in self.displays())
            if self._display_all:
                statements.add("#display.")
        elif section is Section.EXAMPLES:
            statements.update(self.examples())
        elif section is Section.MODEHEADS:
            statements.update(self.modeheads())
        elif section is Section.MODEBODIES:
            statements.update(self.modebodies())
        return statements

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProblemSpec):
            return NotImplemented
        return (
            super().__eq__(other)
            and self._display_all == other._display_all
            and self._displays == other._displays
            and self._examples == other._examples
            and self._modebodies == other._modebodies
            and self._modeheads == other._modeheads
        )

    __hash__ = None

    def __len__(self) -> int:
        return (
            super().__len__()
            + len(self._examples)
            + len(self._modeheads)
            + sum(len(group) for group in self._modebodies.values())
        )
