# letrule/errors.py
"""letrule 오류 타입.

모든 오류는 `SyntaxError` 계열이며, 위치를 알 수 있으면 메시지에
`line:col`과 캐럿(^) 스니펫을 붙인다.
"""

from __future__ import annotations
from typing import Optional, Tuple


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [start, end) 범위를 반환."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def caret_snippet(src: str, pos: int) -> str:
    """절대 오프셋 pos에 캐럿(^)을 찍은 스니펫."""
    pos = max(0, min(pos, len(src)))
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"


class RuleError(SyntaxError):
    """letrule 규칙/호스트 엔진 오류의 공통 부모."""


class StreamExhausted(RuleError):
    """규칙이 토큰을 더 요구했지만 스트림이 비어 있음.

    - rule     : 실패한 규칙 이름
    - consumed : 이번 호출에서 소비한 토큰 수(스트림 단독 실패면 None)
    - last     : 마지막으로 소비한 토큰(없으면 None)
    """

    def __init__(self, rule: str, consumed: Optional[int] = 0, last: object = None,
                 source: Optional[str] = None):
        self.rule = rule
        self.consumed = consumed
        self.last = last
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        if self.consumed is None:
            msg = f"Token stream exhausted in '{self.rule}'"
        elif self.consumed == 0:
            msg = f"Token stream exhausted before '{self.rule}' could start"
        else:
            msg = (f"Token stream exhausted in '{self.rule}' after {self.consumed} token(s): "
                   f"expected a terminator (EOF or newline)")
        line = getattr(self.last, "line", None)
        col = getattr(self.last, "col", None)
        if line is not None and col is not None:
            msg += f" at {line}:{col}"
        pos = getattr(self.last, "pos", None)
        if self.source is not None and pos is not None:
            end = pos + len(getattr(self.last, "text", ""))
            msg += "\n" + caret_snippet(self.source, end)
        return msg


class UndefinedRule(RuleError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined rule '{name}'")


class NoRuleForToken(RuleError):
    """디스패치 시 현재 토큰을 트리거로 가지는 규칙이 없음."""

    def __init__(self, token: object, expected: Tuple[str, ...] = ()):
        self.token = token
        self.expected = expected
        kind = getattr(token, "type", token)
        msg = f"No rule starts with {kind!r}"
        line = getattr(token, "line", None)
        if line is not None:
            msg += f" at {line}:{getattr(token, 'col', '?')}"
        if expected:
            msg += f", expected one of {{{', '.join(sorted(expected))}}}"
        super().__init__(msg)


class LexError(SyntaxError):
    def __init__(self, ch: str, line: int, col: int, pos: int, source: Optional[str] = None):
        self.ch = ch
        self.line = line
        self.col = col
        self.pos = pos
        msg = f"Lexing error: unexpected character {ch!r} at {line}:{col}"
        if source is not None:
            msg += "\n" + caret_snippet(source, pos)
        super().__init__(msg)
