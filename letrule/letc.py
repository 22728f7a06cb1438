# letrule/letc.py
"""letc – letrule CLI

사용 예)
    $ python -m letrule.letc lex --text "let x = 5"
    $ python -m letrule.letc match --text "let x = 5" -D
    $ python -m letrule.letc match --input examples/decl.src --rule let_declaration
    $ python -m letrule.letc rules

기능
----
- lex   : 입력을 토크나이즈해 토큰 목록 출력
- match : 입력 앞머리에서 규칙을 한 번 실행해 노드(JSON)와 소비/잔여 토큰 수 출력
- rules : 등록된 규칙과 트리거 출력

디버그 모드(-D/--debug)를 켜면 매처 상태/소비 토큰/잔여 스트림을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import json
import pathlib
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _read_input(args) -> str:
    """--text 또는 --input 원문. 줄바꿈은 "\\n"으로 정규화."""
    if args.text is not None:
        return args.text
    text = pathlib.Path(args.input).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _kinds(tokens) -> str:
    from .stream import token_kind
    return " ".join(repr(token_kind(t)) for t in tokens)

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_lex(args) -> int:
    """입력 텍스트를 토크나이즈해 결과를 표준출력으로 보여줍니다."""
    try:
        from .lex import tokenize
        text = _read_input(args)
        for i, tok in enumerate(tokenize(text, trivia=args.trivia)):
            print(f"{i:03d}: {tok.type!r:<12} {tok.text!r}  @{tok.line}:{tok.col}")
        return 0
    except SyntaxError as e:
        _eprint("[LEX ERROR]", str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2


def cmd_match(args) -> int:
    from .grammar.let_decl import DeclarationRuleMatcher
    from .grammar.table import RuleTable, default_rules
    from .stream import TokenStream

    # -D일 때 상태를 볼 수 있도록 let 규칙은 매처 인스턴스로 등록
    matcher = DeclarationRuleMatcher()
    tbl = RuleTable()
    for e in default_rules().entries():
        fn = matcher.match if e.name == matcher.rule_name else e.fn
        tbl.register(e.name, fn, trigger=e.trigger)

    try:
        text = _read_input(args)
        stream = TokenStream.from_text(text)
        if args.debug:
            _eprint(f"[DEBUG] tokens ready | count={len(stream)}")
        if args.rule:
            node = tbl.run(args.rule, stream)
        else:
            node = tbl.dispatch(stream)
    except SyntaxError as e:
        _eprint("[MATCH ERROR]")
        _eprint(str(e))
        if args.debug:
            _eprint(f"[DEBUG] state={matcher.state} consumed=[{_kinds(matcher.consumed)}]")
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _eprint(f"[DEBUG] state={matcher.state} consumed=[{_kinds(matcher.consumed)}]")
        _eprint(f"[DEBUG] remaining={stream!r}")

    print(json.dumps(node.to_dict()))
    print(f"[MATCH OK] consumed={stream.position} remaining={len(stream)}")
    return 0


def cmd_rules(args) -> int:
    from .grammar.table import default_rules
    for e in default_rules().entries():
        trig = repr(e.trigger) if e.trigger is not None else "-"
        print(f"{e.name:<20} trigger={trig}")
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def _add_source_args(p) -> None:
    src_group = p.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 텍스트")
    src_group.add_argument("--input", help="입력 텍스트 파일 경로")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="letc", description="letrule let-declaration rule CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_lex = sub.add_parser("lex", help="입력 텍스트를 토크나이즈합니다")
    _add_source_args(p_lex)
    p_lex.add_argument("--trivia", action="store_true", help="공백/탭/CR/주석 토큰도 출력")
    p_lex.set_defaults(func=cmd_lex)

    p_match = sub.add_parser("match", help="입력 앞머리에서 선언 1개를 인식합니다")
    _add_source_args(p_match)
    p_match.add_argument("--rule", help="실행할 규칙 이름(미지정시 첫 토큰으로 디스패치)")
    p_match.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_match.set_defaults(func=cmd_match)

    p_rules = sub.add_parser("rules", help="등록된 규칙 목록을 출력합니다")
    p_rules.set_defaults(func=cmd_rules)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
