"""Encoding of example and mode-head directives into ASP statements.

Examples become one coverage objective shared by all examples, plus a
hard constraint for every *mute* example (no explicit weight/priority):

    #maximize[ p(a) =1 @1, not p(b) =2 @1 ].
    :- not p(a).

A head directive such as ``#modeh q(+int) :1-1 =1 @1.`` becomes a
bounded choice over an abducible atom, gated by the argument types:

    #hide typ_q/1.
    #minimize[ abd_q_1_1 =1 @1 : typ_q(V1) ].
    1 { abd_q_1_1 : typ_q(V1) } 1.
    q(V1) :- typ_q(V1), abd_q_1_1.
    typ_q(V1) :- int(V1).

The abducible name carries weight and priority so that heads declared at
different tiers never share an abducible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING, Iterable, Iterator

from aspilp.encoding.model import Model
from aspilp.exceptions import InvalidArgumentError
from aspilp.terms.schema import Atom, Placemarker

if TYPE_CHECKING:
    from aspilp.problem.directives import ExampleDirective, ModeBodyDirective, ModeHeadDirective

__all__ = [
    "FILTERS",
    "TAG_ABDUCE",
    "TAG_TYPE",
    "DecodedHead",
    "DirectiveEncoder",
    "decode_head",
]

logger = logging.getLogger(__name__)

TAG_ABDUCE = "abd_"
TAG_TYPE = "typ_"

FILTERS = (
    "#hide.",
    "#show display_fact/1.",
    "#show covered_example/2.",
    "#show uncovered_example/2.",
)


@dataclass
class DecodedHead:
    """Arguments of a mode head split by role.

    Attributes:
        fixes: Arguments indexing the abducible (ground terms and ``$`` placemarkers)
        heads: Arguments of the re-derived head atom
        variables: Fresh variables introduced for placemarkers
        types: Type guards for those variables, aligned with ``variables``
    """

    fixes: list[str] = field(default_factory=list)
    heads: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)


def _guard(type_atom: Atom, variable: str) -> str:
    """Type guard for a variable; compound types get it as last argument."""
    guard = Atom(name=type_atom.name, args=type_atom.args + (Atom(name=variable),))
    return str(guard)


def _decode_term(term: Atom, decoded: DecodedHead, heads: list[str], fresh: Iterator[int]) -> None:
    if term.is_placemarker():
        variable = f"V{next(fresh)}"
        heads.append(variable)
        decoded.variables.append(variable)
        decoded.types.append(_guard(term.type_atom, variable))
        if term.role is Placemarker.CONSTANT:
            decoded.fixes.append(variable)
    elif term.is_ground():
        heads.append(str(term))
        decoded.fixes.append(str(term))
    elif term.args:
        inner: list[str] = []
        for sub in term.subterms():
            _decode_term(sub, decoded, inner, fresh)
        heads.append(f"{term.name}({','.join(inner)})")
    else:
        raise InvalidArgumentError("head", "decode_head", str(term))


def decode_head(head: Atom) -> DecodedHead:
    """Split the arguments of a mode head atom.

    Placemarkers are replaced by fresh variables ``V1, V2, ...`` numbered
    left to right (depth-first). Ground arguments, compound or not, are
    kept whole as fixes. Raw variables have no type and are rejected.
    """
    if head is None:
        raise InvalidArgumentError("head", "decode_head", head)
    decoded = DecodedHead()
    fresh = count(1)
    for term in head.subterms():
        _decode_term(term, decoded, decoded.heads, fresh)
    return decoded


def _call(name: str, args: list[str]) -> str:
    return f"{name}({','.join(args)})" if args else name


class DirectiveEncoder:
    """Converts problem directives into standard statements of a Model."""

    def __init__(self, bridging: bool = False) -> None:
        """Initialize the encoder.

        Args:
            bridging: Also emit ``covered_example``/``uncovered_example`` and
                ``display_fact`` rules so solver output reports per-example
                outcomes and displayed atoms directly, and hide every
                other predicate except modes and types
        """
        self.bridging = bridging

    def encode_examples(self, examples: Iterable[ExampleDirective], model: Model) -> int:
        """Add the coverage objective and hard constraints for ``examples``.

        Args:
            examples: Example directives
            model: Model receiving the statements

        Returns:
            Number of new statements added to ``model``
        """
        if model is None:
            raise InvalidArgumentError("model", "DirectiveEncoder.encode_examples", model)
        ordered = sorted(examples, key=lambda e: str(e.fact))
        if not ordered:
            return 0
        added = 0
        terms = []
        for example in ordered:
            terms.append(f"{example.fact}{example.as_data()}")
            if example.is_mute():
                added += model.add_constraint(self._example_constraint(example))
            if self.bridging:
                added += self._encode_example_bridge(example, model)
        added += model.add_maximize(f"#maximize[ {', '.join(terms)} ].")
        logger.debug(f"Encoded {len(ordered)} example(s) into {added} statement(s)")
        return added

    @staticmethod
    def _example_constraint(example: ExampleDirective) -> str:
        atom = example.fact.atom
        return f":- {atom}." if example.fact.negated else f":- not {atom}."

    @staticmethod
    def _encode_example_bridge(example: ExampleDirective, model: Model) -> int:
        atom = example.fact.atom
        negated = example.fact.negated
        sign = "true" if negated else "false"
        yes = "not " if negated else ""
        no = "" if negated else "not "
        added = model.add_show("#show covered_example/2.")
        added += model.add_show("#show uncovered_example/2.")
        added += model.add_clause(f"covered_example({sign},{atom}) :- {yes}{atom}.")
        added += model.add_clause(f"uncovered_example({sign},{atom}) :- {no}{atom}.")
        return added

    def encode_mode_head(self, directive: ModeHeadDirective, model: Model) -> int:
        """Add the abduction statements for one head directive.

        Args:
            directive: Head directive to encode
            model: Model receiving the statements

        Returns:
            Number of new statements added to ``model``
        """
        if directive is None:
            raise InvalidArgumentError("directive", "DirectiveEncoder.encode_mode_head", directive)
        if model is None:
            raise InvalidArgumentError("model", "DirectiveEncoder.encode_mode_head", model)

        decoded = decode_head(directive.head)
        name = directive.head.name
        head = _call(name, decoded.heads)
        abduce = f"{TAG_ABDUCE}{name}_{directive.effective_weight}_{directive.effective_priority}"
        abduce_head = _call(abduce, decoded.fixes)
        gate = f"{TAG_TYPE}{name}"
        gate_head = _call(gate, decoded.variables)

        added = model.add_hide(f"#hide {gate}/{len(decoded.variables)}.")
        added += model.add_minimize(f"#minimize[ {abduce_head}{directive.as_data()} : {gate_head} ].")
        added += model.add_clause(
            f"{directive.as_lower()}{{ {abduce_head} : {gate_head} }}{directive.as_upper()}."
        )
        added += model.add_clause(f"{head} :- {gate_head}, {abduce_head}.")
        if decoded.variables:
            added += model.add_clause(f"{gate_head} :- {', '.join(decoded.types)}.")
        else:
            added += model.add_clause(f"{gate_head}.")
        return added

    def encode_mode_heads(self, directives: Iterable[ModeHeadDirective], model: Model) -> int:
        """Encode every head directive, in the order of their text."""
        return sum(
            self.encode_mode_head(directive, model)
            for directive in sorted(directives, key=lambda d: str(d.head))
        )

    def encode_displays(self, displays: Iterable[tuple[str, int]], model: Model) -> int:
        """Add ``display_fact`` bridging rules for display pairs (bridging only)."""
        if not self.bridging:
            return 0
        added = 0
        for name, arity in sorted(displays):
            atom = _call(name, [f"V{i}" for i in range(1, arity + 1)])
            added += model.add_show("#show display_fact/1.")
            added += model.add_clause(f"display_fact({atom}) :- {atom}.")
        return added

    def encode_filters(
        self,
        modeheads: Iterable[ModeHeadDirective],
        modebodies: Iterable[ModeBodyDirective],
        types: Iterable[Atom],
        model: Model,
    ) -> int:
        """Restrict solver output to reported predicates (bridging only).

        Hides every atom, then shows the bridging predicates, the predicate
        of every head and body mode and every type.
        """
        if not self.bridging:
            return 0
        if model is None:
            raise InvalidArgumentError("model", "DirectiveEncoder.encode_filters", model)
        added = sum(model.add_show(statement) for statement in FILTERS)
        for atom in [d.head for d in modeheads] + [d.body.atom for d in modebodies]:
            added += model.add_show(f"#show {atom.name}/{atom.arity}.")
        for type_atom in types:
            added += model.add_show(f"#show {type_atom.name}/1.")
        return added
