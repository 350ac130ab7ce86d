"""
Базовые узлы шаблона.

Определяет базовую иерархию неизменяемых классов узлов, которые
TokenParser строит из токенов. Узлы встроенных тегов определяются
в пакете stencil.tags.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence

from .context import Context
from .errors import StencilUserError, TemplateRenderError

logger = logging.getLogger(__name__)

# Обработчик простого тега: получает контекст, возвращает выводимое значение
SimpleTagHandler = Callable[[Context], Any]


class Node(ABC):
    """Базовый класс для всех узлов шаблона."""

    @abstractmethod
    def render(self, context: Context) -> str:
        """
        Рендерит узел в текст.

        Raises:
            TemplateRenderError: При ошибке рендеринга
        """
        ...


# Алиас для списка узлов (порядок = порядок вывода)
NodeList = List[Node]


@dataclass(frozen=True)
class TextNode(Node):
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    text: str

    def render(self, context: Context) -> str:
        return self.text


@dataclass(frozen=True)
class VariableNode(Node):
    """Подстановка переменной {{ expr }}."""
    variable: str

    def render(self, context: Context) -> str:
        return to_text(context.resolve(self.variable))


@dataclass(frozen=True)
class SimpleNode(Node):
    """
    Узел простого тега, зарегистрированного через register_simple_tag.

    Вызывает обработчик при рендеринге; ошибки обработчика проявляются
    только на этом этапе.
    """
    handler: SimpleTagHandler

    def render(self, context: Context) -> str:
        try:
            value = self.handler(context)
        except StencilUserError:
            raise
        except Exception as e:
            logger.debug("Simple tag handler %r failed: %s", self.handler, e)
            raise TemplateRenderError(f"Simple tag handler failed: {e}", cause=e) from e
        return to_text(value)


def to_text(value: Any) -> str:
    """Преобразует значение переменной в выводимый текст (None -> "")."""
    if value is None:
        return ""
    return str(value)


def render_nodes(nodes: Sequence[Node], context: Context) -> str:
    """Рендерит список узлов и склеивает результат."""
    return "".join(node.render(context) for node in nodes)


__all__ = [
    "Node",
    "NodeList",
    "TextNode",
    "VariableNode",
    "SimpleNode",
    "SimpleTagHandler",
    "to_text",
    "render_nodes",
]
