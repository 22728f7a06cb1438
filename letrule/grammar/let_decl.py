# letrule/grammar/let_decl.py
"""let 선언 규칙.

머리 토큰 1개 + 본문 토큰 0개 이상 + 종결자 1개("EOF" 또는 "\\n")를
스트림 앞에서 소비하고 `DeclarationNode`를 돌려준다.

- 머리 토큰이 정말 `let`인지는 검사하지 않는다(디스패처의 몫).
- 본문 토큰의 구조도 검사하지 않는다. 종결자만 찾는다.
- 노드의 name/value는 본문과 무관한 고정값이다.
- 종결자 전에 스트림이 바닥나면 `StreamExhausted`.
"""

from __future__ import annotations
from typing import AbstractSet, Any, List, Union

from ..errors import StreamExhausted
from ..lex import TERMINATORS
from ..stream import TokenStream, token_kind
from .ast import DeclarationNode, Span, LET_DECLARATION


class MatchState:
    CONSUMING_HEAD = "ConsumingHead"
    CONSUMING_BODY = "ConsumingBody"
    DONE           = "Done"
    FAILED         = "Failed"


class DeclarationRuleMatcher:
    """let 선언 한 개를 인식/소비하는 규칙.

    한 번의 `match` 동안 스트림을 독점적으로 빌려 쓴다. 마지막 실행의
    상태(`state`)와 소비한 토큰(`consumed`)은 진단용으로 남겨 둔다.
    """
    rule_name = LET_DECLARATION

    def __init__(self, *, terminators: Union[str, AbstractSet[str]] = TERMINATORS,
                 name: str = "x", value: Any = 5):
        if isinstance(terminators, str):
            terminators = {terminators}  # 문자열 하나는 종류 하나
        self.terminators = frozenset(terminators)
        self.name = name
        self.value = value
        self.state = MatchState.CONSUMING_HEAD
        self.consumed: List[Any] = []

    def _take(self, stream: TokenStream) -> Any:
        if stream.exhausted:
            self.state = MatchState.FAILED
            last = self.consumed[-1] if self.consumed else None
            raise StreamExhausted(self.rule_name, len(self.consumed), last, stream.source)
        tok = stream.shift(self.rule_name)
        self.consumed.append(tok)
        return tok

    def match(self, stream: TokenStream) -> DeclarationNode:
        self.consumed = []

        self.state = MatchState.CONSUMING_HEAD
        head = self._take(stream)

        self.state = MatchState.CONSUMING_BODY
        while True:
            tok = self._take(stream)
            if token_kind(tok) in self.terminators:
                break  # 종결자까지 포함해서 소비

        self.state = MatchState.DONE
        return DeclarationNode(name=self.name, value=self.value, span=Span.of(head))

    __call__ = match


def let_declaration(stream: TokenStream) -> DeclarationNode:
    """호스트 엔진에 `let_declaration` 이름으로 등록되는 규칙 함수."""
    return DeclarationRuleMatcher().match(stream)
