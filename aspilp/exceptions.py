"""Exception types raised by the aspilp compiler.

Two kinds of failure exist:

- InvalidArgumentError: the caller broke an operation's contract (missing
  argument, negative bound, inconsistent lower/upper pair, malformed term
  text). Raised synchronously, before any state is changed.
- InvariantError: an internal consistency check failed after a mutation.
  This is a bug in the compiler itself, never a user error.

I/O problems are not represented here; they are logged and turned into a
``False`` result at the save boundary (see ``aspilp.encoding.writer``).
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """An operation received an argument that violates its contract."""

    def __init__(self, argument: str, operation: str, value: object = None) -> None:
        self.argument = argument
        self.operation = operation
        self.value = value
        super().__init__(f"Illegal '{argument}' argument in {operation}: {value!r}")


class InvariantError(AssertionError):
    """The internal state of a compiler object is inconsistent."""
