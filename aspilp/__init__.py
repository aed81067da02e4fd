"""aspilp: compiles inductive/abductive learning problems into ASP encodings.

A problem consists of background statements, examples and mode
directives. The compiler turns it into a logic program whose optimal
answer sets correspond to admissible hypotheses:

    JSON document -> ProblemDocument -> ProblemSpec
                  -> derive() -> Model -> render() -> solver input

    clause candidates -> encode_generalisation() -> Model -> solver input

Grounding and solving are left to an external ASP solver.
"""

from aspilp.exceptions import InvalidArgumentError, InvariantError
from aspilp.terms import Atom, Literal, Placemarker, Variable, parse_atom, parse_literal
from aspilp.encoding import (
    ClauseCandidate,
    ClauseEncoder,
    ClauseHead,
    ClauseLiteral,
    DirectiveEncoder,
    EncodingWriter,
    Model,
    Section,
    encode_generalisation,
)
from aspilp.problem import ProblemDocument, ProblemSpec, TypeExtractor, load_problem

__all__ = [
    # Errors
    "InvalidArgumentError",
    "InvariantError",
    # Terms
    "Atom",
    "Literal",
    "Placemarker",
    "Variable",
    "parse_atom",
    "parse_literal",
    # Encoding
    "Model",
    "Section",
    "DirectiveEncoder",
    "ClauseCandidate",
    "ClauseEncoder",
    "ClauseHead",
    "ClauseLiteral",
    "encode_generalisation",
    "EncodingWriter",
    # Problems
    "ProblemSpec",
    "ProblemDocument",
    "TypeExtractor",
    "load_problem",
]
