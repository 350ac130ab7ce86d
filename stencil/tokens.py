"""
Лексические типы.

Определяет четыре вида токенов, которые лексер выдаёт парсеру:
текст, переменная {{ ... }}, блок {% ... %} и комментарий {# ... #}.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List

# Слово либо строка в двойных/одинарных кавычках, которая не разбивается по пробелам
_COMPONENT_RE = re.compile(r'''(?:[^\s'"]+|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')+''')


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""
    TEXT = "TEXT"
    VARIABLE = "VARIABLE"
    BLOCK = "BLOCK"
    COMMENT = "COMMENT"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    contents: str
    line: int = 0       # Номер строки (начиная с 1), 0 - неизвестно
    column: int = 0     # Номер колонки (начиная с 1)

    @classmethod
    def text(cls, contents: str) -> Token:
        return cls(TokenType.TEXT, contents)

    @classmethod
    def variable(cls, contents: str) -> Token:
        return cls(TokenType.VARIABLE, contents)

    @classmethod
    def block(cls, contents: str) -> Token:
        return cls(TokenType.BLOCK, contents)

    @classmethod
    def comment(cls, contents: str) -> Token:
        return cls(TokenType.COMMENT, contents)

    def components(self) -> List[str]:
        """
        Разбивает содержимое токена на компоненты по пробелам.

        Строки в кавычках остаются одним компонентом: `now "%H %M"`
        даёт ["now", '"%H %M"']. Если кавычки не сбалансированы,
        используется обычное разбиение по пробелам: ни один символ
        содержимого не теряется. Первый компонент блока - имя тега.
        """
        if _COMPONENT_RE.sub("", self.contents).strip():
            return self.contents.split()
        return _COMPONENT_RE.findall(self.contents)

    @property
    def tag_name(self) -> str | None:
        """Имя тега блока или None для пустого блока и прочих токенов."""
        if self.type is not TokenType.BLOCK:
            return None
        bits = self.components()
        return bits[0] if bits else None

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.contents!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
