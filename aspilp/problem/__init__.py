"""Learning problems: directives, type extraction and the ProblemSpec aggregate."""

from aspilp.problem.directives import (
    DEFAULT_BOUND,
    DEFAULT_PRIORITY,
    DEFAULT_WEIGHT,
    ExampleDirective,
    ModeBodyDirective,
    ModeHeadDirective,
)
from aspilp.problem.types import TypeExtractor, find_types
from aspilp.problem.spec import ProblemSpec
from aspilp.problem.document import (
    DisplayEntry,
    ExampleEntry,
    ModeBodyEntry,
    ModeHeadEntry,
    ProblemDocument,
    load_problem,
)

__all__ = [
    # Directives
    "ExampleDirective",
    "ModeBodyDirective",
    "ModeHeadDirective",
    "DEFAULT_BOUND",
    "DEFAULT_PRIORITY",
    "DEFAULT_WEIGHT",
    # Types
    "TypeExtractor",
    "find_types",
    # Aggregate
    "ProblemSpec",
    # Documents
    "ProblemDocument",
    "DisplayEntry",
    "ExampleEntry",
    "ModeBodyEntry",
    "ModeHeadEntry",
    "load_problem",
]
