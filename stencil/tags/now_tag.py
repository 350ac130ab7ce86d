"""
Тег текущего времени {% now %} / {% now "%d.%m.%Y" %}.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from ..context import Context
from ..errors import TemplateSyntaxError
from ..tokens import Token
from ..nodes import Node

if TYPE_CHECKING:
    from ..parser import TokenParser

DEFAULT_NOW_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class NowNode(Node):
    """Выводит текущее локальное время, вычисленное при рендеринге."""
    format: Optional[str] = None

    @classmethod
    def parse(cls, parser: TokenParser, token: Token) -> NowNode:
        bits = token.components()
        if len(bits) > 2:
            raise TemplateSyntaxError("'now' tag takes at most one argument, the date format", token)
        return cls(format=bits[1] if len(bits) == 2 else None)

    def render(self, context: Context) -> str:
        if self.format is not None:
            fmt = context.resolve(self.format)
        else:
            fmt = context["now_format"]
        return datetime.now().strftime(fmt or DEFAULT_NOW_FORMAT)


__all__ = ["NowNode", "DEFAULT_NOW_FORMAT"]
