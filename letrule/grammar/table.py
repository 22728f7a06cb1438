# letrule/grammar/table.py
"""호스트 규칙 테이블.

- 규칙 이름 → 규칙 함수(`Callable[[TokenStream], node]`) 등록/조회
- [trigger='x'] 지정 시 현재 토큰 종류가 x일 때 디스패치 대상
- `dispatch`는 **문장 1개**만 처리한다(프로그램 루프 없음)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import NoRuleForToken, StreamExhausted, UndefinedRule
from ..stream import TokenStream, token_kind
from .ast import LET_DECLARATION
from .let_decl import let_declaration

RuleFn = Callable[[TokenStream], Any]


@dataclass(frozen=True)
class RuleEntry:
    name: str
    fn: RuleFn
    trigger: Optional[str] = None  # 첫 토큰 종류 트리거(선택)


class RuleTable:
    def __init__(self):
        self._rules: Dict[str, RuleEntry] = {}

    # ---- 등록 ----
    def register(self, name: str, fn: RuleFn, *, trigger: Optional[str] = None) -> RuleFn:
        if name in self._rules:
            raise ValueError(f"rule '{name}' is already registered")
        self._rules[name] = RuleEntry(name, fn, trigger)
        return fn

    def rule(self, name: str, trigger: Optional[str] = None) -> Callable[[RuleFn], RuleFn]:
        """데코레이터 형태의 `register`."""
        def deco(fn: RuleFn) -> RuleFn:
            return self.register(name, fn, trigger=trigger)
        return deco

    # ---- 조회 ----
    def require(self, name: str) -> RuleFn:
        try:
            return self._rules[name].fn
        except KeyError:
            raise UndefinedRule(name)

    def names(self) -> List[str]:
        return list(self._rules)

    def entries(self) -> List[RuleEntry]:
        return list(self._rules.values())

    def triggers(self) -> Tuple[str, ...]:
        return tuple(e.trigger for e in self._rules.values() if e.trigger is not None)

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    # ---- 실행 ----
    def dispatch(self, stream: TokenStream) -> Any:
        """현재 토큰을 트리거로 가지는 첫 규칙을 한 번 실행."""
        head = stream.peek()
        if head is None:
            raise StreamExhausted("<dispatch>", 0, stream.last, stream.source)
        kind = token_kind(head)
        for e in self._rules.values():
            if e.trigger is not None and e.trigger == kind:
                return e.fn(stream)
        raise NoRuleForToken(head, self.triggers())

    def run(self, name: str, stream: TokenStream) -> Any:
        return self.require(name)(stream)


def default_rules() -> RuleTable:
    """`let_declaration`만 등록된 기본 테이블."""
    tbl = RuleTable()
    tbl.register(LET_DECLARATION, let_declaration, trigger="let")
    return tbl


def match_text(text: str, rule: str = LET_DECLARATION,
               table: Optional[RuleTable] = None) -> Tuple[Any, TokenStream]:
    """원문을 토크나이즈하고 규칙을 한 번 실행해 (노드, 남은 스트림)을 돌려준다."""
    tbl = table or default_rules()
    fn = tbl.require(rule)
    stream = TokenStream.from_text(text)
    return fn(stream), stream
