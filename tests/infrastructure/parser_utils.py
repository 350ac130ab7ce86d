"""
Вспомогательные теги и фабрики для тестов парсера.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from stencil.context import Context
from stencil.errors import TemplateSyntaxError
from stencil.nodes import Node, render_nodes
from stencil.parser import TokenParser, until
from stencil.tokens import Token


def make_parser(tokens: Sequence[Token], strict: bool = False) -> TokenParser:
    """Создаёт парсер над копией списка токенов."""
    return TokenParser(list(tokens), strict=strict)


@dataclass(frozen=True)
class CompositeNode(Node):
    """Узел-обёртка для тестового тега section."""
    name: str
    nodes: List[Node]

    def render(self, context: Context) -> str:
        return f"<{self.name}>{render_nodes(self.nodes, context)}</{self.name}>"


def section_tag(parser: TokenParser, token: Token) -> Node:
    """
    Тестовый составной тег {% section %}...{% endsection %}.

    Разбирает тело до endsection, поглощает закрывающий тег и
    оборачивает тело в CompositeNode.
    """
    body = parser.parse(until(["endsection"]))
    end = parser.next_token()
    if end is None:
        raise TemplateSyntaxError("`endsection` was not found.", token)
    bits = token.components()
    return CompositeNode(name=bits[1] if len(bits) > 1 else "section", nodes=body)


def failing_tag(parser: TokenParser, token: Token) -> Node:
    """Тег, который всегда завершается ошибкой разбора."""
    raise TemplateSyntaxError(f"bad tag '{token.contents}'", token)
