# letrule/stream.py
"""Token stream owned by the caller and borrowed by a rule for one call.

The buffer is an immutable tuple; consumption only moves a cursor, so a
rule can never disturb tokens that lie beyond the prefix it consumed.
"""

from __future__ import annotations
from typing import Any, Iterable, Iterator, Optional, Tuple

from .errors import StreamExhausted


def token_kind(tok: Any) -> str:
    """Kind of a token: `Token.type`, or the token itself for plain strings."""
    return getattr(tok, "type", tok)


class TokenStream:
    def __init__(self, tokens: Iterable[Any] = (), *, source: Optional[str] = None):
        self._buf: Tuple[Any, ...] = tuple(tokens)
        self._i = 0
        self.source = source

    @classmethod
    def from_text(cls, text: str) -> "TokenStream":
        from .lex import tokenize
        return cls(tokenize(text), source=text)

    # ---- destructive ----
    def shift(self, rule: str = "<stream>") -> Any:
        """Remove and return the front token.

        Raises StreamExhausted when nothing is left; `rule` names the
        caller in the error message.
        """
        if self._i >= len(self._buf):
            raise StreamExhausted(rule, None, self.last, self.source)
        t = self._buf[self._i]
        self._i += 1
        return t

    # ---- non-destructive ----
    def peek(self) -> Optional[Any]:
        if self._i >= len(self._buf):
            return None
        return self._buf[self._i]

    @property
    def position(self) -> int:
        return self._i

    @property
    def exhausted(self) -> bool:
        return self._i >= len(self._buf)

    @property
    def last(self) -> Optional[Any]:
        """Most recently consumed token, if any."""
        return self._buf[self._i - 1] if self._i > 0 else None

    def remaining(self) -> Tuple[Any, ...]:
        return self._buf[self._i:]

    def consumed(self) -> Tuple[Any, ...]:
        return self._buf[:self._i]

    def __len__(self) -> int:
        return len(self._buf) - self._i

    def __bool__(self) -> bool:
        return not self.exhausted

    def __iter__(self) -> Iterator[Any]:
        return iter(self.remaining())

    def __repr__(self) -> str:
        front = ", ".join(repr(token_kind(t)) for t in self._buf[self._i:self._i + 5])
        more = ", ..." if len(self) > 5 else ""
        return f"TokenStream(pos={self._i}, left={len(self)}, front=[{front}{more}])"
