"""
Тег цикла {% for x in items %}...{% empty %}...{% endfor %}.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, List

from ..context import Context
from ..errors import TemplateRenderError, TemplateSyntaxError
from ..nodes import Node, render_nodes
from ..parser import TokenParser, until
from ..tokens import Token


@dataclass(frozen=True)
class ForNode(Node):
    """
    Цикл по значению переменной.

    Тело рендерится для каждого элемента в отдельной области видимости,
    где определены переменная цикла и словарь forloop. Для пустого
    значения или None рендерится блок empty.
    """
    variable: str
    loop_variable: str
    nodes: List[Node]
    empty_nodes: List[Node] = field(default_factory=list)

    @classmethod
    def parse(cls, parser: TokenParser, token: Token) -> ForNode:
        bits = token.components()
        if len(bits) != 4 or bits[2] != "in":
            raise TemplateSyntaxError(
                f"'for' statements should use the following 'for x in y' `{token.contents}`.",
                token,
            )

        loop_variable = bits[1]
        variable = bits[3]

        nodes = parser.parse(until(["endfor", "empty"]))
        empty_nodes: List[Node] = []

        next_token = parser.next_token()
        if next_token is not None and next_token.tag_name == "empty":
            empty_nodes = parser.parse(until(["endfor"]))
            next_token = parser.next_token()

        if next_token is None:
            raise TemplateSyntaxError("`endfor` was not found.", token)

        return cls(variable=variable, loop_variable=loop_variable, nodes=nodes, empty_nodes=empty_nodes)

    def render(self, context: Context) -> str:
        values = context.resolve(self.variable)
        if not values:
            return render_nodes(self.empty_nodes, context)

        if isinstance(values, Mapping):
            items: List[Any] = list(values.keys())
        elif isinstance(values, Iterable) and not isinstance(values, str):
            items = list(values)
        else:
            raise TemplateRenderError(
                f"'{self.variable}' is not iterable (got {type(values).__name__})"
            )

        length = len(items)
        parts = []
        for index, item in enumerate(items):
            forloop = {
                "counter": index + 1,
                "counter0": index,
                "first": index == 0,
                "last": index == length - 1,
                "length": length,
            }
            with context.scope({self.loop_variable: item, "forloop": forloop}):
                parts.append(render_nodes(self.nodes, context))
        return "".join(parts)


__all__ = ["ForNode"]
