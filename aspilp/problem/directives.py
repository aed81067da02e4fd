"""Directive records with their annex data (weight, priority, bounds).

Each directive kind is a small frozen dataclass. Absent annex values are
kept as ``None`` so the source form can be reproduced exactly; the
``effective_*`` properties fill in the defaults used by the encoders:

    weight = 1, priority = 1, bound = 1

Head directives carry an optional cardinality window. ``lower`` and
``upper`` are either both present or both absent; a reversed pair is
stored in ascending order, so ``(5, 2)`` and ``(2, 5)`` are the same
window.
"""

from __future__ import annotations

from dataclasses import dataclass

from aspilp.exceptions import InvalidArgumentError
from aspilp.terms.schema import Atom, Literal

__all__ = [
    "DEFAULT_BOUND",
    "DEFAULT_PRIORITY",
    "DEFAULT_WEIGHT",
    "ExampleDirective",
    "ModeBodyDirective",
    "ModeHeadDirective",
    "check_optional_int",
    "normalize_bounds",
]

DEFAULT_WEIGHT = 1
DEFAULT_PRIORITY = 1
DEFAULT_BOUND = 1


def check_optional_int(
    value: int | None, argument: str, operation: str, non_negative: bool = False
) -> None:
    """Validate an optional integer annex value.

    Raises:
        InvalidArgumentError: If the value is present but not an int, or
            negative when ``non_negative`` is requested
    """
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(argument, operation, value)
    if non_negative and value < 0:
        raise InvalidArgumentError(argument, operation, value)


def normalize_bounds(
    lower: int | None, upper: int | None, operation: str
) -> tuple[int | None, int | None]:
    """Validate a cardinality window and return it in ascending order.

    Raises:
        InvalidArgumentError: If only one bound is given or a bound is negative
    """
    check_optional_int(lower, "lower", operation, non_negative=True)
    check_optional_int(upper, "upper", operation, non_negative=True)
    if lower is None and upper is not None:
        raise InvalidArgumentError("lower", operation, lower)
    if lower is not None and upper is None:
        raise InvalidArgumentError("upper", operation, upper)
    if lower is not None and upper < lower:
        lower, upper = upper, lower
    return lower, upper


def _data(weight: int, priority: int) -> str:
    return f" ={weight} @{priority}"


@dataclass(frozen=True)
class ExampleDirective:
    """An example with optional weight and priority.

    An example is *mute* when neither weight nor priority was given; mute
    examples must hold in every model, the others only count towards the
    coverage objective.

    Attributes:
        fact: The example literal (negated for negative examples)
        weight: Explicit weight, or None
        priority: Explicit priority, or None
    """

    fact: Literal
    weight: int | None = None
    priority: int | None = None

    def __post_init__(self) -> None:
        if self.fact is None:
            raise InvalidArgumentError("fact", "ExampleDirective", self.fact)
        check_optional_int(self.weight, "weight", "ExampleDirective")
        check_optional_int(self.priority, "priority", "ExampleDirective")

    @property
    def effective_weight(self) -> int:
        return DEFAULT_WEIGHT if self.weight is None else self.weight

    @property
    def effective_priority(self) -> int:
        return DEFAULT_PRIORITY if self.priority is None else self.priority

    def is_mute(self) -> bool:
        return self.weight is None and self.priority is None

    def as_data(self) -> str:
        """Objective suffix, e.g. ``" =1 @1"``."""
        return _data(self.effective_weight, self.effective_priority)

    def annex(self) -> str:
        """Explicitly given annex values only, in source syntax."""
        result = ""
        if self.weight is not None:
            result += f" ={self.weight}"
        if self.priority is not None:
            result += f" @{self.priority}"
        return result

    def __str__(self) -> str:
        return f"#example {self.fact}{self.annex()}."


@dataclass(frozen=True)
class ModeBodyDirective:
    """A body mode declaration.

    Attributes:
        body: Mode literal with placemarkers, e.g. ``not edge(+node, -node)``
        bound: Maximum number of occurrences in a clause body, or None
        weight: Explicit weight, or None
        priority: Explicit priority, or None
    """

    body: Literal
    bound: int | None = None
    weight: int | None = None
    priority: int | None = None

    def __post_init__(self) -> None:
        if self.body is None:
            raise InvalidArgumentError("body", "ModeBodyDirective", self.body)
        check_optional_int(self.bound, "bound", "ModeBodyDirective", non_negative=True)
        check_optional_int(self.weight, "weight", "ModeBodyDirective")
        check_optional_int(self.priority, "priority", "ModeBodyDirective")

    @property
    def effective_bound(self) -> int:
        return DEFAULT_BOUND if self.bound is None else self.bound

    @property
    def effective_weight(self) -> int:
        return DEFAULT_WEIGHT if self.weight is None else self.weight

    @property
    def effective_priority(self) -> int:
        return DEFAULT_PRIORITY if self.priority is None else self.priority

    def as_data(self) -> str:
        return _data(self.effective_weight, self.effective_priority)

    def __str__(self) -> str:
        bound = f" :{self.bound}" if self.bound is not None else ""
        return f"#modeb {self.body}{bound}{self.as_data()}."


@dataclass(frozen=True)
class ModeHeadDirective:
    """A head mode declaration with an optional cardinality window.

    Attributes:
        head: Mode atom with placemarkers, e.g. ``q(+int)``
        lower: Smallest number of abduced instances, or None
        upper: Largest number of abduced instances, or None
        weight: Explicit weight, or None
        priority: Explicit priority, or None
    """

    head: Atom
    lower: int | None = None
    upper: int | None = None
    weight: int | None = None
    priority: int | None = None

    def __post_init__(self) -> None:
        if self.head is None:
            raise InvalidArgumentError("head", "ModeHeadDirective", self.head)
        lower, upper = normalize_bounds(self.lower, self.upper, "ModeHeadDirective")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)
        check_optional_int(self.weight, "weight", "ModeHeadDirective")
        check_optional_int(self.priority, "priority", "ModeHeadDirective")

    @property
    def effective_weight(self) -> int:
        return DEFAULT_WEIGHT if self.weight is None else self.weight

    @property
    def effective_priority(self) -> int:
        return DEFAULT_PRIORITY if self.priority is None else self.priority

    def is_bounded(self) -> bool:
        return self.lower is not None and self.upper is not None

    def as_data(self) -> str:
        return _data(self.effective_weight, self.effective_priority)

    def as_lower(self) -> str:
        """Left bound of the choice rule (with trailing space), or ``""``."""
        if not self.is_bounded():
            return ""
        return f"{min(self.lower, self.upper)} "

    def as_upper(self) -> str:
        """Right bound of the choice rule (with leading space), or ``""``."""
        if not self.is_bounded():
            return ""
        return f" {max(self.lower, self.upper)}"

    def __str__(self) -> str:
        window = f" :{self.lower}-{self.upper}" if self.is_bounded() else ""
        return f"#modeh {self.head}{window}{self.as_data()}."
