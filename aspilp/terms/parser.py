"""Parser for the textual term syntax used by problem documents.

Grammar (whitespace between tokens is ignored):

    literal     := ["not"] term
    term        := placemarker | number | string | name ["(" term {"," term} ")"]
    placemarker := ("+" | "-" | "$") term

Examples:
    parse_atom("q(+int, -list, $const)")
    parse_literal("not reachable(X, f(Y))")
"""

from __future__ import annotations

import re

from aspilp.exceptions import InvalidArgumentError
from aspilp.terms.schema import PLACEMARKERS, Atom, Literal

__all__ = ["parse_atom", "parse_literal"]

_TOKEN = re.compile(
    r"""\s*(?:
        (?P<string>"(?:[^"\\]|\\.)*")
      | (?P<number>-?\d+)
      | (?P<name>[A-Za-z_][A-Za-z0-9_']*)
      | (?P<punct>[(),+\-$])
    )""",
    re.VERBOSE,
)


class _Parser:
    """Recursive-descent parser over a single source string."""

    def __init__(self, text: str, operation: str) -> None:
        self._text = text
        self._operation = operation
        self._tokens = self._tokenize()
        self._index = 0

    def _tokenize(self) -> list[tuple[str, str, int]]:
        tokens = []
        pos = 0
        end = len(self._text.rstrip())
        while pos < end:
            match = _TOKEN.match(self._text, pos)
            if match is None or match.end() == pos:
                self._fail(pos)
            kind = match.lastgroup
            tokens.append((kind, match.group(kind), match.start(kind)))
            pos = match.end()
        return tokens

    def _fail(self, pos: int | None = None) -> None:
        if pos is None:
            pos = self._tokens[self._index][2] if self._index < len(self._tokens) else len(self._text)
        raise InvalidArgumentError("text", self._operation, f"{self._text} (at {pos})")

    def _peek(self) -> tuple[str, str, int] | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _take(self, value: str | None = None) -> str:
        token = self._peek()
        if token is None or (value is not None and token[1] != value):
            self._fail()
        self._index += 1
        return token[1]

    def literal(self) -> Literal:
        negated = False
        token = self._peek()
        following = self._tokens[self._index + 1] if self._index + 1 < len(self._tokens) else None
        # "not" is only a keyword when another term follows it
        if token is not None and token[1] == "not" and following is not None and following[1] != "(":
            self._take()
            negated = True
        return Literal(atom=self.term(), negated=negated)

    def term(self) -> Atom:
        token = self._peek()
        if token is None:
            self._fail()
        kind, value, _ = token
        if kind == "punct" and value in PLACEMARKERS:
            self._take()
            return Atom(name=value, args=(self.term(),))
        if kind in ("number", "string"):
            self._take()
            return Atom(name=value)
        if kind != "name":
            self._fail()
        name = self._take()
        args: list[Atom] = []
        nxt = self._peek()
        if nxt is not None and nxt[1] == "(":
            self._take("(")
            args.append(self.term())
            while self._peek() is not None and self._peek()[1] == ",":
                self._take(",")
                args.append(self.term())
            self._take(")")
        return Atom(name=name, args=tuple(args))

    def finish(self) -> None:
        if self._peek() is not None:
            self._fail()


def parse_atom(text: str) -> Atom:
    """Parse a single atom.

    Args:
        text: Source text, e.g. ``"q(+int)"``

    Returns:
        The parsed Atom

    Raises:
        InvalidArgumentError: If the text is empty or malformed
    """
    if text is None or not text.strip():
        raise InvalidArgumentError("text", "parse_atom", text)
    parser = _Parser(text, "parse_atom")
    atom = parser.term()
    parser.finish()
    return atom


def parse_literal(text: str) -> Literal:
    """Parse a literal, honouring a leading ``not``.

    Args:
        text: Source text, e.g. ``"not p(a)"``

    Returns:
        The parsed Literal

    Raises:
        InvalidArgumentError: If the text is empty or malformed
    """
    if text is None or not text.strip():
        raise InvalidArgumentError("text", "parse_literal", text)
    parser = _Parser(text, "parse_literal")
    literal = parser.literal()
    parser.finish()
    return literal
