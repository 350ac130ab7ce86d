"""
Контекст рендеринга для движка шаблонизации.

Хранит стек областей видимости переменных и разрешает выражения
вида `user.name`, `items.first`, `items.0` при рендеринге узлов.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional


class Context:
    """
    Контекст рендеринга шаблона со стеком областей видимости.

    Поиск переменной идёт от самой вложенной области к внешней,
    запись - всегда в самую вложенную область.
    """

    def __init__(self, dictionary: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        base: Dict[str, Any] = dict(dictionary or {})
        base.update(kwargs)
        self.dicts: List[Dict[str, Any]] = [base]

    def __getitem__(self, key: str) -> Any:
        for scope in reversed(self.dicts):
            if key in scope:
                return scope[key]
        return None

    def __setitem__(self, key: str, value: Any) -> None:
        self.dicts[-1][key] = value

    def __contains__(self, key: str) -> bool:
        return any(key in scope for scope in self.dicts)

    def push(self, dictionary: Optional[Mapping[str, Any]] = None) -> None:
        """Открывает новую область видимости."""
        self.dicts.append(dict(dictionary or {}))

    def pop(self) -> Dict[str, Any]:
        """
        Закрывает текущую область видимости.

        Raises:
            RuntimeError: При попытке удалить базовую область
        """
        if len(self.dicts) == 1:
            raise RuntimeError("Cannot pop the base context scope")
        return self.dicts.pop()

    @contextmanager
    def scope(self, dictionary: Optional[Mapping[str, Any]] = None) -> Iterator[Context]:
        """Область видимости на время блока with."""
        self.push(dictionary)
        try:
            yield self
        finally:
            self.pop()

    def flatten(self) -> Dict[str, Any]:
        """Возвращает все видимые переменные одним словарём."""
        result: Dict[str, Any] = {}
        for scope in self.dicts:
            result.update(scope)
        return result

    def resolve(self, expression: str) -> Any:
        """
        Вычисляет выражение переменной в текущем контексте.

        Строковый литерал в кавычках возвращается как есть (без кавычек).
        Иначе выражение разбивается по точкам: первая часть ищется в
        контексте, остальные - в ключах словаря, индексах последовательности
        (а также first/last/count) и атрибутах объекта.

        Returns:
            Значение или None, если выражение не разрешается
        """
        expression = expression.strip()
        if len(expression) >= 2 and expression[0] == expression[-1] and expression[0] in "\"'":
            return expression[1:-1]

        bits = expression.split(".")
        current = self[bits[0]]
        for bit in bits[1:]:
            if current is None:
                return None
            current = _lookup(current, bit)
        return current


def _lookup(value: Any, bit: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(bit)

    if isinstance(value, Sequence) and not isinstance(value, str):
        if bit == "count":
            return len(value)
        if bit == "first":
            return value[0] if value else None
        if bit == "last":
            return value[-1] if value else None
        if bit.lstrip("-").isdigit():
            index = int(bit)
            if -len(value) <= index < len(value):
                return value[index]
            return None

    if bit.startswith("_"):
        return None
    return getattr(value, bit, None)


__all__ = ["Context"]
