"""
Публичный API шаблона.

Объединяет лексер, парсер токенов и рендеринг узлов в удобный
интерфейс: текст шаблона -> список узлов -> итоговый текст.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .context import Context
from .lexer import Lexer
from .nodes import NodeList, SimpleTagHandler, render_nodes
from .parser import TagParser, TokenParser

logger = logging.getLogger(__name__)


class Template:
    """
    Разобранный шаблон.

    Текст токенизируется и разбирается один раз при создании;
    render() можно вызывать многократно с разными контекстами.
    """

    def __init__(
        self,
        text: str,
        name: str = "",
        strict: bool = False,
        tags: Optional[Mapping[str, TagParser]] = None,
        simple_tags: Optional[Mapping[str, SimpleTagHandler]] = None,
    ):
        """
        Args:
            text: Исходный текст шаблона
            name: Имя шаблона для диагностики
            strict: Ошибка на незарегистрированные теги
            tags: Дополнительные теги (имя -> обработчик)
            simple_tags: Дополнительные простые теги (имя -> функция контекста)

        Raises:
            TemplateSyntaxError: При ошибке разбора
        """
        self.name = name
        self.text = text

        parser = TokenParser(Lexer(text).tokenize(), strict=strict)
        for tag_name, tag_parser in (tags or {}).items():
            parser.register_tag(tag_name, tag_parser)
        for tag_name, handler in (simple_tags or {}).items():
            parser.register_simple_tag(tag_name, handler)

        self.nodes: NodeList = parser.parse()
        logger.debug("Parsed template '%s' into %d nodes", name or "<string>", len(self.nodes))

    @classmethod
    def from_path(cls, path: Path, **kwargs: Any) -> Template:
        """Загружает шаблон из файла (UTF-8)."""
        path = Path(path)
        kwargs.setdefault("name", path.name)
        return cls(path.read_text(encoding="utf-8"), **kwargs)

    def render(self, context: Optional[Context] = None, **kwargs: Any) -> str:
        """
        Рендерит шаблон.

        Args:
            context: Контекст рендеринга; если не задан, создаётся из kwargs
            **kwargs: Дополнительные переменные поверх контекста

        Raises:
            TemplateRenderError: При ошибке рендеринга
        """
        if context is None:
            return render_nodes(self.nodes, Context(kwargs))
        if not kwargs:
            return render_nodes(self.nodes, context)
        with context.scope(kwargs):
            return render_nodes(self.nodes, context)

    def __repr__(self) -> str:
        return f"Template({self.name!r}, nodes={len(self.nodes)})"


__all__ = ["Template"]
