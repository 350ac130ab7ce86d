"""
Лексический анализатор шаблонов.

Токенизирует исходный текст шаблона, разбивая его на последовательность
токенов для последующего синтаксического анализа в TokenParser.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .errors import LexerError
from .tokens import Token, TokenType

# Открывающие разделители и соответствующие им закрывающие
_DELIMITERS = {
    "{{": ("}}", TokenType.VARIABLE),
    "{%": ("%}", TokenType.BLOCK),
    "{#": ("#}", TokenType.COMMENT),
}

_OPEN_RE = re.compile(r'\{[{%#]')


class Lexer:
    """
    Лексический анализатор шаблонов.

    Разбивает исходный текст на токены, учитывая различные контексты:
    - обычный текст
    - внутри переменных {{ ... }}
    - внутри блоков {% ... %}
    - внутри комментариев {# ... #}
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь текст.

        Returns:
            Список токенов в порядке следования в исходном тексте

        Raises:
            LexerError: Если разделитель не закрыт
        """
        tokens: List[Token] = []

        while self.position < len(self.text):
            match = _OPEN_RE.search(self.text, self.position)
            if match is None:
                tokens.append(self._take_text(len(self.text)))
                break

            if match.start() > self.position:
                tokens.append(self._take_text(match.start()))

            tokens.append(self._take_tag(match.group(0)))

        return tokens

    def _take_text(self, end: int) -> Token:
        """Создаёт текстовый токен до позиции end."""
        line, column = self.line, self.column
        value = self.text[self.position:end]
        self._advance(end)
        return Token(TokenType.TEXT, value, line, column)

    def _take_tag(self, opener: str) -> Token:
        """Создаёт токен переменной, блока или комментария."""
        closer, token_type = _DELIMITERS[opener]
        line, column = self.line, self.column

        content_start = self.position + len(opener)
        end = self.text.find(closer, content_start)
        if end == -1:
            raise LexerError(f"Unclosed '{opener}', expected '{closer}'", line, column, self.position)

        value = self.text[content_start:end].strip()
        self._advance(end + len(closer))
        return Token(token_type, value, line, column)

    def _advance(self, end: int) -> None:
        """Сдвигает позицию до end, обновляя номер строки и колонки."""
        line, column = _position_after(self.text[self.position:end], self.line, self.column)
        self.position = end
        self.line = line
        self.column = column


def _position_after(chunk: str, line: int, column: int) -> Tuple[int, int]:
    newlines = chunk.count("\n")
    if newlines == 0:
        return line, column + len(chunk)
    return line + newlines, len(chunk) - chunk.rfind("\n")


def tokenize(text: str) -> List[Token]:
    """Удобная обёртка над Lexer(text).tokenize()."""
    return Lexer(text).tokenize()


__all__ = ["Lexer", "tokenize"]
