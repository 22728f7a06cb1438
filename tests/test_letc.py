import json

import pytest

from letrule.letc import main


def test_match_prints_node_and_counts(capsys) -> None:
    assert main(["match", "--text", "let x = 5\nlet y = 6"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert json.loads(out[0]) == {"type": "let_declaration", "name": "x", "value": 5}
    assert out[1] == "[MATCH OK] consumed=5 remaining=5"


def test_match_debug_goes_to_stderr(capsys) -> None:
    assert main(["match", "--text", "let x\n", "-D"]) == 0
    err = capsys.readouterr().err
    assert "[DEBUG] tokens ready | count=4" in err
    assert "[DEBUG] state=Done consumed=['let' 'IDENT' '\\n']" in err


def test_match_from_file(tmp_path, capsys) -> None:
    src = tmp_path / "decl.src"
    src.write_bytes(b"let a = 1\r\nnext")
    assert main(["match", "--input", str(src), "--rule", "let_declaration"]) == 0
    assert capsys.readouterr().out.splitlines()[1] == "[MATCH OK] consumed=5 remaining=2"


def test_match_without_trigger_fails(capsys) -> None:
    assert main(["match", "--text", "fn f() {}"]) == 2
    err = capsys.readouterr().err
    assert "[MATCH ERROR]" in err
    assert "No rule starts with 'fn'" in err


def test_match_unknown_rule(capsys) -> None:
    assert main(["match", "--text", "let", "--rule", "nope"]) == 2
    assert "undefined rule 'nope'" in capsys.readouterr().err


def test_lex_lists_tokens(capsys) -> None:
    assert main(["lex", "--text", "let x = 5"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "000: 'let'        'let'  @1:1"
    assert out[-1].startswith("004: 'EOF'")


def test_lex_error(capsys) -> None:
    assert main(["lex", "--text", "let $"]) == 2
    assert "[LEX ERROR]" in capsys.readouterr().err


def test_rules_lists_registered_rules(capsys) -> None:
    assert main(["rules"]) == 0
    assert capsys.readouterr().out.split() == ["let_declaration", "trigger='let'"]


def test_source_is_required() -> None:
    with pytest.raises(SystemExit):
        main(["match"])
