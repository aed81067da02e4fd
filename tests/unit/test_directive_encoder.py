"""Unit tests for example and mode-head encoding.

Tests cover:
- Coverage objective and hard constraints for examples
- Head decoding into fixes, variables and type guards
- Abduction statements for head directives
- Optional bridging rules
"""

import pytest

from aspilp.encoding.directives import DirectiveEncoder, decode_head
from aspilp.encoding.model import Model, Section
from aspilp.exceptions import InvalidArgumentError
from aspilp.problem.directives import ExampleDirective, ModeBodyDirective, ModeHeadDirective
from aspilp.terms import parse_atom, parse_literal


def example(text, weight=None, priority=None):
    return ExampleDirective(fact=parse_literal(text), weight=weight, priority=priority)


# ==============================================================================
# Example Encoding Tests
# ==============================================================================


class TestExampleEncoding:
    """Tests for DirectiveEncoder.encode_examples."""

    def test_weighted_example_is_soft(self):
        model = Model()
        DirectiveEncoder().encode_examples([example("p(a)", 2, 1)], model)
        assert model.statements(Section.MAXIMIZES) == ["#maximize[ p(a) =2 @1 ]."]
        assert model.statements(Section.CONSTRAINTS) == []

    def test_mute_example_is_hard(self):
        model = Model()
        DirectiveEncoder().encode_examples([example("p(a)")], model)
        assert model.statements(Section.MAXIMIZES) == ["#maximize[ p(a) =1 @1 ]."]
        assert model.statements(Section.CONSTRAINTS) == [":- not p(a)."]

    def test_mute_negative_example(self):
        model = Model()
        DirectiveEncoder().encode_examples([example("not p(b)")], model)
        assert model.statements(Section.MAXIMIZES) == ["#maximize[ not p(b) =1 @1 ]."]
        assert model.statements(Section.CONSTRAINTS) == [":- p(b)."]

    def test_single_objective_for_all_examples(self):
        model = Model()
        examples = [example("p(a)"), example("not p(b)", 3, 2), example("p(c)", 1)]
        added = DirectiveEncoder().encode_examples(examples, model)
        assert model.statements(Section.MAXIMIZES) == [
            "#maximize[ not p(b) =3 @2, p(a) =1 @1, p(c) =1 @1 ]."
        ]
        assert model.statements(Section.CONSTRAINTS) == [":- not p(a)."]
        assert added == 2

    def test_no_examples_no_objective(self):
        model = Model()
        assert DirectiveEncoder().encode_examples([], model) == 0
        assert model.is_empty()

    def test_example_bridging(self):
        model = Model()
        DirectiveEncoder(bridging=True).encode_examples(
            [example("p(a)"), example("not p(b)")], model
        )
        clauses = model.statements(Section.CLAUSES)
        assert "covered_example(false,p(a)) :- p(a)." in clauses
        assert "uncovered_example(false,p(a)) :- not p(a)." in clauses
        assert "covered_example(true,p(b)) :- not p(b)." in clauses
        assert "uncovered_example(true,p(b)) :- p(b)." in clauses
        assert model.statements(Section.HIDESHOWS) == [
            "#show covered_example/2.",
            "#show uncovered_example/2.",
        ]

    def test_missing_model(self):
        with pytest.raises(InvalidArgumentError):
            DirectiveEncoder().encode_examples([example("p(a)")], None)


# ==============================================================================
# Head Decoding Tests
# ==============================================================================


class TestDecodeHead:
    """Tests for decode_head."""

    def test_input_placemarker(self):
        decoded = decode_head(parse_atom("q(+int)"))
        assert decoded.heads == ["V1"]
        assert decoded.variables == ["V1"]
        assert decoded.types == ["int(V1)"]
        assert decoded.fixes == []

    def test_constants_and_constant_placemarkers_are_fixes(self):
        decoded = decode_head(parse_atom("q(a, $c, -d)"))
        assert decoded.heads == ["a", "V1", "V2"]
        assert decoded.fixes == ["a", "V1"]
        assert decoded.types == ["c(V1)", "d(V2)"]

    def test_nested_compound(self):
        decoded = decode_head(parse_atom("q(f(+int, b), -list)"))
        assert decoded.heads == ["f(V1,b)", "V2"]
        assert decoded.variables == ["V1", "V2"]
        assert decoded.fixes == ["b"]

    def test_ground_compound_kept_whole(self):
        decoded = decode_head(parse_atom("q(f(a), g(a), +int)"))
        assert decoded.fixes == ["f(a)", "g(a)"]
        assert decoded.heads == ["f(a)", "g(a)", "V1"]

    def test_raw_variable_rejected(self):
        with pytest.raises(InvalidArgumentError):
            decode_head(parse_atom("q(X, +int)"))

    def test_compound_type_gets_variable_last(self):
        decoded = decode_head(parse_atom("q(+list(int))"))
        assert decoded.types == ["list(int,V1)"]

    def test_none(self):
        with pytest.raises(InvalidArgumentError):
            decode_head(None)


# ==============================================================================
# Mode-Head Encoding Tests
# ==============================================================================


class TestModeHeadEncoding:
    """Tests for DirectiveEncoder.encode_mode_head."""

    def test_exactly_one(self):
        model = Model()
        directive = ModeHeadDirective(
            head=parse_atom("q(+int)"), lower=1, upper=1, weight=1, priority=1
        )
        added = DirectiveEncoder().encode_mode_head(directive, model)
        assert added == 5
        assert model.statements(Section.HIDESHOWS) == ["#hide typ_q/1."]
        assert model.statements(Section.MINIMIZES) == [
            "#minimize[ abd_q_1_1 =1 @1 : typ_q(V1) ]."
        ]
        assert model.statements(Section.CLAUSES) == [
            "1 { abd_q_1_1 : typ_q(V1) } 1.",
            "q(V1) :- typ_q(V1), abd_q_1_1.",
            "typ_q(V1) :- int(V1).",
        ]

    def test_unbounded_ground_head(self):
        model = Model()
        directive = ModeHeadDirective(head=parse_atom("p(a)"), weight=2, priority=3)
        DirectiveEncoder().encode_mode_head(directive, model)
        assert model.statements(Section.HIDESHOWS) == ["#hide typ_p/0."]
        assert model.statements(Section.MINIMIZES) == [
            "#minimize[ abd_p_2_3(a) =2 @3 : typ_p ]."
        ]
        assert model.statements(Section.CLAUSES) == [
            "p(a) :- typ_p, abd_p_2_3(a).",
            "typ_p.",
            "{ abd_p_2_3(a) : typ_p }.",
        ]

    def test_tiers_never_share_abducible(self):
        model = Model()
        encoder = DirectiveEncoder()
        encoder.encode_mode_head(ModeHeadDirective(head=parse_atom("q(+int)")), model)
        encoder.encode_mode_head(
            ModeHeadDirective(head=parse_atom("q(-int)"), weight=2, priority=1), model
        )
        minimizes = model.statements(Section.MINIMIZES)
        assert "#minimize[ abd_q_1_1 =1 @1 : typ_q(V1) ]." in minimizes
        assert "#minimize[ abd_q_2_1 =2 @1 : typ_q(V1) ]." in minimizes

    def test_reversed_window(self):
        model = Model()
        directive = ModeHeadDirective(head=parse_atom("q(+int)"), lower=5, upper=2)
        DirectiveEncoder().encode_mode_head(directive, model)
        assert "2 { abd_q_1_1 : typ_q(V1) } 5." in model.statements(Section.CLAUSES)

    def test_encode_mode_heads_is_idempotent(self):
        model = Model()
        directives = [
            ModeHeadDirective(head=parse_atom("q(+int)")),
            ModeHeadDirective(head=parse_atom("r(+int, $c)")),
        ]
        encoder = DirectiveEncoder()
        assert encoder.encode_mode_heads(directives, model) == 10
        assert encoder.encode_mode_heads(directives, model) == 0

    def test_missing_arguments(self):
        encoder = DirectiveEncoder()
        with pytest.raises(InvalidArgumentError):
            encoder.encode_mode_head(None, Model())
        with pytest.raises(InvalidArgumentError):
            encoder.encode_mode_head(ModeHeadDirective(head=parse_atom("q(+int)")), None)


# ==============================================================================
# Display Bridging Tests
# ==============================================================================


class TestDisplayEncoding:
    """Tests for DirectiveEncoder.encode_displays."""

    def test_disabled_without_bridging(self):
        model = Model()
        assert DirectiveEncoder().encode_displays([("q", 1)], model) == 0
        assert model.is_empty()

    def test_display_facts(self):
        model = Model()
        DirectiveEncoder(bridging=True).encode_displays([("q", 2), ("done", 0)], model)
        assert model.statements(Section.CLAUSES) == [
            "display_fact(done) :- done.",
            "display_fact(q(V1,V2)) :- q(V1,V2).",
        ]
        assert model.statements(Section.HIDESHOWS) == ["#show display_fact/1."]


# ==============================================================================
# Output Filter Tests
# ==============================================================================


class TestFilterEncoding:
    """Tests for DirectiveEncoder.encode_filters."""

    def test_disabled_without_bridging(self):
        model = Model()
        heads = [ModeHeadDirective(head=parse_atom("q(+int)"))]
        assert DirectiveEncoder().encode_filters(heads, [], [parse_atom("int")], model) == 0
        assert model.is_empty()

    def test_hide_all_then_show_reported(self):
        model = Model()
        heads = [ModeHeadDirective(head=parse_atom("q(+int, $c)"))]
        bodies = [ModeBodyDirective(body=parse_literal("not r(+int)"))]
        types = [parse_atom("c"), parse_atom("int")]
        DirectiveEncoder(bridging=True).encode_filters(heads, bodies, types, model)
        assert model.statements(Section.HIDESHOWS) == [
            "#hide.",
            "#show c/1.",
            "#show covered_example/2.",
            "#show display_fact/1.",
            "#show int/1.",
            "#show q/2.",
            "#show r/1.",
            "#show uncovered_example/2.",
        ]

    def test_missing_model(self):
        with pytest.raises(InvalidArgumentError):
            DirectiveEncoder(bridging=True).encode_filters([], [], [], None)
