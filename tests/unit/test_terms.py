"""Unit tests for the term model and its parser.

Tests cover:
- Atom construction, rendering and role detection
- Literal polarity and variable collection
- Typed variables and their guards
- Parsing of atoms and literals from source text
"""

import pytest
from pydantic import ValidationError

from aspilp.exceptions import InvalidArgumentError
from aspilp.terms import (
    Atom,
    Literal,
    Placemarker,
    Variable,
    is_variable_name,
    parse_atom,
    parse_literal,
)


# ==============================================================================
# Atom Tests
# ==============================================================================


class TestAtom:
    """Tests for the Atom model."""

    def test_constant(self):
        atom = Atom(name="a")
        assert str(atom) == "a"
        assert atom.arity == 0
        assert atom.is_ground()
        assert not atom.is_variable()

    def test_compound_renders_without_spaces(self):
        atom = Atom.of("p", "a", Atom.of("f", "X", "b"))
        assert str(atom) == "p(a,f(X,b))"
        assert atom.arity == 2

    def test_variable(self):
        assert Atom(name="X").is_variable()
        assert Atom(name="_tmp").is_variable()
        assert not Atom(name="x").is_variable()

    def test_placemarker(self):
        atom = Atom.placemarker(Placemarker.INPUT, "int")
        assert str(atom) == "+int"
        assert atom.is_placemarker()
        assert atom.role is Placemarker.INPUT
        assert atom.type_atom == Atom(name="int")
        assert not atom.is_ground()

    def test_non_placemarker_has_no_role(self):
        atom = Atom.of("p", "a")
        assert atom.role is None
        assert atom.type_atom is None

    def test_placemarker_requires_one_argument(self):
        with pytest.raises(ValidationError):
            Atom(name="+")
        with pytest.raises(ValidationError):
            Atom.of("$", "int", "list")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Atom(name="   ")

    def test_get(self):
        atom = Atom.of("p", "a", "b")
        assert atom.get(1) == Atom(name="b")
        with pytest.raises(InvalidArgumentError):
            atom.get(2)

    def test_variables_first_occurrence_order(self):
        atom = Atom.of("p", "Y", Atom.of("f", "X", "Y"), "X")
        assert atom.variables() == ["Y", "X"]

    def test_atoms_are_hashable(self):
        assert len({Atom.of("p", "a"), Atom.of("p", "a"), Atom.of("p", "b")}) == 2

    def test_is_variable_name(self):
        assert is_variable_name("X1")
        assert not is_variable_name("x1")
        assert not is_variable_name("")


# ==============================================================================
# Literal / Variable Tests
# ==============================================================================


class TestLiteral:
    """Tests for literals and typed variables."""

    def test_positive(self):
        literal = Literal(atom=Atom.of("p", "a"))
        assert str(literal) == "p(a)"
        assert literal.positive() is literal

    def test_negated(self):
        literal = Literal(atom=Atom.of("p", "X"), negated=True)
        assert str(literal) == "not p(X)"
        assert literal.positive() == Literal(atom=Atom.of("p", "X"))
        assert literal.variables() == ["X"]

    def test_polarity_distinguishes_keys(self):
        atom = Atom.of("p", "a")
        assert Literal(atom=atom) != Literal(atom=atom, negated=True)

    def test_variable_guard(self):
        variable = Variable(identifier="X", type="node")
        assert variable.guard() == "node(X)"
        assert str(variable) == "X"

    def test_variable_identifier_must_look_like_variable(self):
        with pytest.raises(ValidationError):
            Variable(identifier="x", type="node")


# ==============================================================================
# Parser Tests
# ==============================================================================


class TestParser:
    """Tests for parse_atom and parse_literal."""

    def test_parse_mode_atom(self):
        atom = parse_atom("q(+int, -list, $const)")
        assert str(atom) == "q(+int,-list,$const)"
        assert [a.role for a in atom.args] == [
            Placemarker.INPUT,
            Placemarker.OUTPUT,
            Placemarker.CONSTANT,
        ]

    def test_parse_nested(self):
        atom = parse_atom("reach(X, f(Y, g(a)))")
        assert str(atom) == "reach(X,f(Y,g(a)))"
        assert atom.variables() == ["X", "Y"]

    def test_parse_numbers_and_strings(self):
        atom = parse_atom('p(3, -2, "a b")')
        assert [str(a) for a in atom.args] == ["3", "-2", '"a b"']

    def test_parse_compound_type(self):
        atom = parse_atom("q(+list(int))")
        assert atom.get(0).type_atom == Atom.of("list", "int")

    def test_parse_literal_negated(self):
        literal = parse_literal("not p(a)")
        assert literal.negated
        assert str(literal.atom) == "p(a)"

    def test_not_alone_is_an_atom(self):
        assert parse_literal("not") == Literal(atom=Atom(name="not"))
        assert parse_literal("not(a)") == Literal(atom=Atom.of("not", "a"))

    @pytest.mark.parametrize("text", ["", "   ", "p(a", "p(a))", "p a", "p(a).", "p(,)", "+"])
    def test_malformed(self, text):
        with pytest.raises(InvalidArgumentError):
            parse_atom(text)

    def test_malformed_literal(self):
        with pytest.raises(InvalidArgumentError):
            parse_literal("not p(")

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError):
            parse_atom(None)
