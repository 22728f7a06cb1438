import pytest

from letrule.errors import NoRuleForToken, StreamExhausted, UndefinedRule
from letrule.grammar.let_decl import let_declaration
from letrule.grammar.table import RuleTable, default_rules, match_text
from letrule.stream import TokenStream


def test_default_table_registers_let_declaration() -> None:
    tbl = default_rules()
    assert tbl.names() == ["let_declaration"]
    assert tbl.require("let_declaration") is let_declaration
    assert tbl.triggers() == ("let",)
    assert "let_declaration" in tbl


def test_require_unknown_rule() -> None:
    with pytest.raises(UndefinedRule) as err:
        default_rules().require("fn_declaration")
    assert "undefined rule 'fn_declaration'" in str(err.value)


def test_duplicate_registration_is_rejected() -> None:
    tbl = default_rules()
    with pytest.raises(ValueError):
        tbl.register("let_declaration", let_declaration)


def test_dispatch_runs_triggered_rule_once() -> None:
    stream = TokenStream.from_text("let a = 1\nlet b = 2\n")
    node = default_rules().dispatch(stream)
    assert node.type == "let_declaration"
    assert [t.type for t in stream.remaining()] == ["let", "IDENT", "=", "INT", "\n", "EOF"]


def test_dispatch_with_plain_string_tokens() -> None:
    stream = TokenStream(["let", "IDENT:x", "=", "5", "EOF"])
    assert default_rules().dispatch(stream).to_dict() == {
        "type": "let_declaration", "name": "x", "value": 5,
    }
    assert stream.exhausted


def test_dispatch_without_matching_trigger() -> None:
    stream = TokenStream.from_text("fn main() {}")
    with pytest.raises(NoRuleForToken) as err:
        default_rules().dispatch(stream)
    assert "No rule starts with 'fn' at 1:1, expected one of {let}" == str(err.value)
    assert stream.position == 0


def test_dispatch_on_empty_stream() -> None:
    with pytest.raises(StreamExhausted):
        default_rules().dispatch(TokenStream([]))


def test_decorator_registration_and_trigger_order() -> None:
    tbl = RuleTable()
    seen = []

    @tbl.rule("first", trigger="fn")
    def first(stream):
        seen.append("first")
        return stream.shift()

    @tbl.rule("second", trigger="fn")
    def second(stream):
        seen.append("second")
        return stream.shift()

    tbl.dispatch(TokenStream(["fn", "x"]))
    assert seen == ["first"]
    assert tbl.run("second", TokenStream(["y"])) == "y"
    assert [e.name for e in tbl.entries()] == ["first", "second"]


def test_match_text_returns_node_and_rest() -> None:
    node, rest = match_text("let x = 5\nrest")
    assert node.to_dict()["type"] == "let_declaration"
    assert node.span.line == 1
    assert [t.type for t in rest] == ["IDENT", "EOF"]


def test_match_text_unknown_rule() -> None:
    with pytest.raises(UndefinedRule):
        match_text("let x", rule="nope")
