"""
Парсер токенов для движка шаблонизации.

Преобразует последовательность токенов в список узлов. Ядро ничего
не знает о семантике тегов: каждый блок {% name ... %} передаётся
зарегистрированному под этим именем обработчику, который может
рекурсивно вызвать parse() для разбора вложенного тела.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Dict, Iterable, Optional, Tuple

from .errors import TemplateSyntaxError
from .nodes import NodeList, Node, SimpleNode, SimpleTagHandler, TextNode, VariableNode
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Обработчик тега: (парсер, токен блока) -> узел; ошибка - TemplateSyntaxError
TagParser = Callable[["TokenParser", Token], Node]

# Условие завершения вложенного разбора
ParseUntil = Callable[["TokenParser", Token], bool]


def until(tags: Iterable[str]) -> ParseUntil:
    """
    Строит условие завершения разбора по именам тегов.

    Условие истинно для блока, имя тега которого входит в tags.
    Пример: parser.parse(until(["endfor", "empty"])).
    """
    names = frozenset(tags)

    def parse_until(parser: TokenParser, token: Token) -> bool:
        return token.tag_name in names

    return parse_until


class TokenParser:
    """
    Рекурсивный парсер потока токенов.

    Владеет очередью оставшихся токенов и реестром тегов. Экземпляр
    создаётся на одно задание разбора и не предназначен для
    использования из нескольких потоков.
    """

    def __init__(self, tokens: Iterable[Token], strict: bool = False):
        """
        Args:
            tokens: Последовательность токенов от лексера
            strict: Выбрасывать ошибку на незарегистрированные теги
                вместо того, чтобы молча их пропускать
        """
        self.tokens: deque[Token] = deque(tokens)
        self.strict = strict
        self.tags: Dict[str, TagParser] = {}
        self._depth = 0     # Глубина вложенных вызовов parse()
        self._register_builtin_tags()

    def _register_builtin_tags(self) -> None:
        """Регистрирует встроенные теги."""
        from .tags import for_tag, if_tag, include_tag, now_tag

        self.register_tag("for", for_tag.ForNode.parse)
        self.register_tag("if", if_tag.IfNode.parse)
        self.register_tag("ifnot", if_tag.IfNode.parse_ifnot)
        self.register_tag("now", now_tag.NowNode.parse)
        self.register_tag("include", include_tag.IncludeNode.parse)

    def register_tag(self, name: str, parser: TagParser) -> None:
        """
        Регистрирует обработчик тега.

        Повторная регистрация под тем же именем заменяет прежний обработчик.
        """
        if name in self.tags:
            logger.debug("Tag '%s' overwrites existing tag parser", name)
        self.tags[name] = parser

    def register_simple_tag(self, name: str, handler: SimpleTagHandler) -> None:
        """
        Регистрирует простой тег без аргументов.

        Args:
            name: Имя тега
            handler: Функция контекст -> значение, вызывается при рендеринге
        """
        def parse_simple(parser: TokenParser, token: Token) -> Node:
            return SimpleNode(handler)

        self.register_tag(name, parse_simple)

    @property
    def registered_tags(self) -> Tuple[str, ...]:
        """Имена зарегистрированных тегов в алфавитном порядке."""
        return tuple(sorted(self.tags))

    def parse(self, parse_until: Optional[ParseUntil] = None) -> NodeList:
        """
        Разбирает токены в список узлов.

        Без условия завершения разбирает всю очередь. С условием -
        останавливается на первом блоке, для которого оно истинно,
        и возвращает этот блок в начало очереди, чтобы его поглотил
        вызывающий обработчик.

        Returns:
            Список узлов в порядке вывода

        Raises:
            TemplateSyntaxError: Первая ошибка любого обработчика тега
            TypeError: Обработчик тега вернул None вместо узла
        """
        self._depth += 1
        try:
            return self._parse_nodes(parse_until)
        finally:
            self._depth -= 1

    def _parse_nodes(self, parse_until: Optional[ParseUntil]) -> NodeList:
        nodes: NodeList = []

        while self.tokens:
            token = self.tokens.popleft()

            if token.type is TokenType.TEXT:
                nodes.append(TextNode(token.contents))
            elif token.type is TokenType.VARIABLE:
                nodes.append(VariableNode(token.contents))
            elif token.type is TokenType.BLOCK:
                if parse_until is not None and parse_until(self, token):
                    self.prepend_token(token)
                    return nodes

                node = self._parse_block(token)
                if node is not None:
                    nodes.append(node)
            # COMMENT: не порождает узлов

        return nodes

    def _parse_block(self, token: Token) -> Optional[Node]:
        """Передаёт блок зарегистрированному обработчику."""
        tag = token.tag_name
        if tag is None:
            if self.strict:
                raise TemplateSyntaxError("Empty block tag", token)
            logger.debug("Dropping empty block tag %r", token)
            return None

        tag_parser = self.tags.get(tag)
        if tag_parser is None:
            if self.strict:
                raise TemplateSyntaxError(f"Unknown template tag '{tag}'", token)
            logger.debug("Dropping unknown template tag '%s'", tag)
            return None

        try:
            node = tag_parser(self, token)
        except TemplateSyntaxError as e:
            # ошибка пишется в лог один раз, на внешнем уровне разбора
            if self._depth == 1:
                logger.debug("Tag '%s' failed to parse: %s", tag, e)
            raise

        if node is None:
            raise TypeError(f"Tag parser for '{tag}' returned None instead of a node")
        return node

    def next_token(self) -> Optional[Token]:
        """Извлекает следующий токен или возвращает None, если очередь пуста."""
        if self.tokens:
            return self.tokens.popleft()
        return None

    def prepend_token(self, token: Token) -> None:
        """Возвращает токен в начало очереди."""
        self.tokens.appendleft(token)


__all__ = ["TokenParser", "TagParser", "ParseUntil", "until"]
