"""
Условные теги {% if var %}...{% else %}...{% endif %} и {% ifnot var %}.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from ..context import Context
from ..errors import TemplateSyntaxError
from ..nodes import Node, render_nodes
from ..parser import TokenParser, until
from ..tokens import Token


@dataclass(frozen=True)
class IfNode(Node):
    """
    Условный блок.

    Истинность - обычная истинность Python для значения переменной:
    None, пустые коллекции, False, 0 и "" ложны.
    """
    variable: str
    true_nodes: List[Node]
    false_nodes: List[Node] = field(default_factory=list)

    @classmethod
    def parse(cls, parser: TokenParser, token: Token) -> IfNode:
        variable, true_nodes, false_nodes = cls._parse_branches(parser, token)
        return cls(variable=variable, true_nodes=true_nodes, false_nodes=false_nodes)

    @classmethod
    def parse_ifnot(cls, parser: TokenParser, token: Token) -> IfNode:
        variable, true_nodes, false_nodes = cls._parse_branches(parser, token)
        return cls(variable=variable, true_nodes=false_nodes, false_nodes=true_nodes)

    @staticmethod
    def _parse_branches(parser: TokenParser, token: Token) -> Tuple[str, List[Node], List[Node]]:
        bits = token.components()
        if len(bits) != 2:
            raise TemplateSyntaxError(f"'{bits[0]}' statements should use the following '{bits[0]} condition'", token)

        true_nodes = parser.parse(until(["endif", "else"]))
        false_nodes: List[Node] = []

        next_token = parser.next_token()
        if next_token is not None and next_token.tag_name == "else":
            false_nodes = parser.parse(until(["endif"]))
            next_token = parser.next_token()

        if next_token is None:
            raise TemplateSyntaxError("`endif` was not found.", token)

        return bits[1], true_nodes, false_nodes

    def render(self, context: Context) -> str:
        if context.resolve(self.variable):
            return render_nodes(self.true_nodes, context)
        return render_nodes(self.false_nodes, context)


__all__ = ["IfNode"]
