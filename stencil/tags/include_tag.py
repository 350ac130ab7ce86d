"""
Тег включения шаблона {% include "name.html" %}.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..context import Context
from ..errors import TemplateRenderError, TemplateSyntaxError
from ..nodes import Node
from ..tokens import Token

if TYPE_CHECKING:
    from ..parser import TokenParser

logger = logging.getLogger(__name__)

# Ключ контекста со стеком имён включаемых шаблонов
INCLUDE_STACK_KEY = "_include_stack"


@dataclass(frozen=True)
class IncludeNode(Node):
    """
    Включение другого шаблона.

    Имя шаблона вычисляется при рендеринге; загрузчик берётся из
    переменной контекста `loader`. Включённый шаблон рендерится в том
    же контексте. Цепочка включений хранится в контексте, повторное
    включение шаблона из этой цепочки - ошибка.
    """
    template_name: str

    @classmethod
    def parse(cls, parser: TokenParser, token: Token) -> IncludeNode:
        bits = token.components()
        if len(bits) != 2:
            raise TemplateSyntaxError("'include' tag takes one argument, the template file to be included", token)
        return cls(template_name=bits[1])

    def render(self, context: Context) -> str:
        loader = context["loader"]
        if loader is None:
            raise TemplateRenderError("Template loader not in context")

        name = context.resolve(self.template_name)
        if not name:
            raise TemplateRenderError(f"Could not resolve template name '{self.template_name}'")

        name = str(name)
        stack = context[INCLUDE_STACK_KEY] or ()
        if name in stack:
            chain = " → ".join([*stack, name])
            raise TemplateRenderError(f"Circular include detected: {chain}")

        logger.debug("Including template '%s'", name)
        template = loader.load_template(name)
        with context.scope({INCLUDE_STACK_KEY: (*stack, name)}):
            return template.render(context)


__all__ = ["IncludeNode"]
