"""letrule 토크나이저 — let 선언 규칙에 토큰을 공급하는 작은 렉서.

특징
----
- 산출 토큰의 `type`은 규칙/디스패처가 비교하는 **종류 이름**과 정확히 일치
  - 키워드/연산자: 해당 리터럴 그대로 (예: "let", "=", "->")
  - 개행: "\\n" (선언 종결자)
  - 입력 끝: "EOF" (항상 마지막에 정확히 1개)
  - 그 외: "INT", "STR", "IDENT"
- 공백/탭/CR/주석(trivia)은 기본적으로 토큰 스트림에서 **제외**
  (`trivia=True`이면 "WS", "TAB", "CR", "COMMENT"로 배출)


매칭 순서:
  1) trivia 패턴 (공백, 탭, CR, // 주석)
  2) 개행
  3) 키워드 — 유니코드 단어경계 검사
  4) 정수/문자열/식별자 정규식 — **최장일치**(동률이면 선언 순서)
  5) 연산자 — 길이 내림차순(최장일치)
  6) 모두 불일치 → LexError


API
---
- `Token(type, text, line, col, pos)` — 토큰 단위
- `Lexer` — `reset(text)`, `peek()`, `next()`
- `tokenize(text, trivia=False) -> List[Token]`
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, Optional, Pattern

import regex as re

from ..errors import LexError

_RE_XID_CONT = re.compile(r"\p{XID_Continue}")

EOF = "EOF"
NEWLINE = "\n"
TERMINATORS = frozenset({EOF, NEWLINE})

KEYWORDS = (
    "let", "fn", "pub", "return", "if", "else", "while", "for", "in",
    "true", "false", "import", "struct", "new", "match", "break",
    "continue", "const",
)

# 길이 내림차순으로 정렬해 두면 앞에서부터 첫 매치가 곧 최장일치
OPERATORS = tuple(sorted((
    "==", "!=", "<=", ">=", "&&", "||", "+=", "-=", "*=", "/=", "->",
    "=", "+", "-", "*", "/", "%", "<", ">", "!",
    "(", ")", "{", "}", "[", "]", ",", ":", ";", ".",
), key=lambda s: -len(s)))

_TRIVIA_SPEC = [
    ("COMMENT", r"//[^\n]*"),
    ("WS",      r" +"),
    ("TAB",     r"\t+"),
    ("CR",      r"\r"),
]

_TOKEN_SPEC = [
    ("INT",   r"0[bB][01](?:_?[01])*|0[oO][0-7](?:_?[0-7])*|0[xX][0-9A-Fa-f](?:_?[0-9A-Fa-f])*|[0-9](?:_?[0-9])*"),
    ("STR",   r'"(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\''),
    ("IDENT", r"[\p{XID_Start}_]\p{XID_Continue}*"),
]


def _is_ident_continue(ch: str) -> bool:
    """유니코드 식별자 이어붙임 문자(XID_Continue) 판정."""
    return bool(_RE_XID_CONT.fullmatch(ch))


# --------- Public datatypes ---------

@dataclass(frozen=True)
class Token:
    type: str   # 종류 이름(키워드/연산자 리터럴, "\n", "EOF", INT/STR/IDENT ...)
    text: str   # 원문 lexeme
    line: int   # 1-based
    col: int    # 1-based
    pos: int    # 0-based 절대 오프셋

    @property
    def len(self) -> int:
        return len(self.text)


class Lexer:
    """
    Lexer
    =====
    입력 텍스트를 한 토큰씩 잘라 주는 참조 구현.
    입력 끝에서는 "EOF" 토큰을 정확히 한 번 돌려주고, 그 뒤로는 None.
    """
    def __init__(self, *, trivia: bool = False):
        self._trivia = trivia
        self._ignores: List[Tuple[str, Pattern[str]]] = [(n, re.compile(p)) for n, p in _TRIVIA_SPEC]
        self._tokens: List[Tuple[str, Pattern[str]]] = [(n, re.compile(p)) for n, p in _TOKEN_SPEC]
        self.reset("")

    # ---- Input binding ----
    def reset(self, text: str, *, line: int = 1, col: int = 1) -> None:
        self._text = text
        self._i = 0
        self._line = line
        self._col = col
        self._eof_sent = False
        self._peek_cache: Optional[Token] = None

    # ---- Public API ----
    def peek(self) -> Optional[Token]:
        if self._peek_cache is None:
            self._peek_cache = self._next_token()
        return self._peek_cache

    def next(self) -> Optional[Token]:
        if self._peek_cache is not None:
            t = self._peek_cache
            self._peek_cache = None
            return t
        return self._next_token()

    def __iter__(self):
        while True:
            t = self.next()
            if t is None:
                return
            yield t

    # ---- Internals ----
    def _make(self, kind: str, text: str) -> Token:
        return Token(type=kind, text=text, line=self._line, col=self._col, pos=self._i)

    def _advance_text(self, consumed: str) -> None:
        """소비된 텍스트 길이만큼 내부 포인터/행렬을 갱신."""
        nl = consumed.count("\n")
        if nl:
            self._line += nl
            self._col = len(consumed) - consumed.rfind("\n")
        else:
            self._col += len(consumed)
        self._i += len(consumed)

    def _match_trivia(self) -> Optional[Token]:
        for name, rgx in self._ignores:
            m = rgx.match(self._text, self._i)
            if m and m.end() > self._i:
                return self._make(name, m.group(0))
        return None

    def _match_keyword(self) -> Optional[Token]:
        s = self._text
        i = self._i
        for kw in KEYWORDS:
            if not s.startswith(kw, i):
                continue
            # 앞 경계는 이전 토큰이 이미 보장하므로 뒤 경계만 검사
            j = i + len(kw)
            if j < len(s) and _is_ident_continue(s[j]):
                continue
            return self._make(kw, kw)
        return None

    def _match_token_regex(self) -> Optional[Token]:
        best_name = None
        best_text = ""
        for name, rgx in self._tokens:
            m = rgx.match(self._text, self._i)
            if not m:
                continue
            txt = m.group(0)
            if len(txt) > len(best_text):
                best_name = name
                best_text = txt
        if best_name is not None:
            return self._make(best_name, best_text)
        return None

    def _match_operator(self) -> Optional[Token]:
        for op in OPERATORS:
            if self._text.startswith(op, self._i):
                return self._make(op, op)
        return None

    def _next_token(self) -> Optional[Token]:
        while self._i < len(self._text):
            # 1) trivia
            tv = self._match_trivia()
            if tv is not None:
                self._advance_text(tv.text)
                if self._trivia:
                    return tv
                continue

            # 2) 개행
            if self._text[self._i] == NEWLINE:
                tk = self._make(NEWLINE, NEWLINE)
                self._advance_text(NEWLINE)
                return tk

            # 3) 키워드 → 4) 정규식 → 5) 연산자
            tk = self._match_keyword() or self._match_token_regex() or self._match_operator()
            if tk is not None:
                self._advance_text(tk.text)
                return tk

            # 실패
            ch = self._text[self._i]
            raise LexError(ch, self._line, self._col, self._i, self._text)

        if self._eof_sent:
            return None
        self._eof_sent = True
        return self._make(EOF, "")


def tokenize(text: str, *, trivia: bool = False) -> List[Token]:
    """텍스트 전체를 토큰 리스트로 변환(마지막은 항상 "EOF")."""
    lx = Lexer(trivia=trivia)
    lx.reset(text)
    return list(lx)
