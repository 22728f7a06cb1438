# letrule/grammar/ast.py
"""규칙이 돌려주는 노드
- Span: 선언 머리 토큰 위치
- DeclarationNode: let 선언 한 개 (type/name/value)
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Any, Dict, Optional

LET_DECLARATION = "let_declaration"

@dataclass(frozen=True)
class Span:
    pos: int
    line: int
    col: int

    @classmethod
    def of(cls, tok: Any) -> Optional["Span"]:
        """위치 정보를 가진 토큰이면 Span, 아니면(문자열 토큰 등) None."""
        try:
            return cls(pos=tok.pos, line=tok.line, col=tok.col)
        except AttributeError:
            return None

@dataclass(frozen=True)
class DeclarationNode:
    """
    let 선언 노드.
    - type : 항상 "let_declaration"
    - name : 바인딩 이름 (현재 고정값 "x")
    - value: 바인딩 값 (현재 고정값 5)
    - span : 머리 토큰 위치(비교에서 제외)
    """
    name: str = "x"
    value: Any = 5
    type: str = field(default=LET_DECLARATION, init=False)
    span: Optional[Span] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "name": self.name, "value": self.value}
