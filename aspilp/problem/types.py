"""Type extraction from mode atoms.

A type is whatever a placemarker points at: in ``q(+int, f(-list))`` the
types are ``int`` and ``list``. The walk is depth-first over compound
arguments; a placemarker's own argument is collected and not descended
into.
"""

from __future__ import annotations

import logging
from typing import Iterator

from aspilp.exceptions import InvalidArgumentError
from aspilp.terms.schema import Atom

__all__ = ["TypeExtractor", "find_types"]

logger = logging.getLogger(__name__)


def find_types(atom: Atom) -> Iterator[Atom]:
    """Yield the type atoms referenced by placemarkers inside ``atom``.

    Args:
        atom: Mode atom to scan

    Yields:
        Type atoms, in depth-first order (duplicates included)
    """
    if atom is None:
        raise InvalidArgumentError("atom", "find_types", atom)
    if atom.is_placemarker():
        yield atom.type_atom
        return
    for term in atom.subterms():
        yield from find_types(term)


class TypeExtractor:
    """Accumulates the type set of a problem.

    The set only grows: ``extract`` adds, and nothing but ``clear``
    removes.
    """

    def __init__(self) -> None:
        self._types: set[Atom] = set()

    def extract(self, atom: Atom) -> int:
        """Add every type referenced by ``atom``.

        Returns:
            Number of types that were not known before
        """
        before = len(self._types)
        self._types.update(find_types(atom))
        added = len(self._types) - before
        if added:
            logger.debug(f"Found {added} new type(s) in {atom}")
        return added

    def types(self) -> list[Atom]:
        """Known types, ordered by their text."""
        return sorted(self._types, key=str)

    def clear(self) -> None:
        self._types.clear()

    def __contains__(self, atom: object) -> bool:
        return atom in self._types

    def __len__(self) -> int:
        return len(self._types)
