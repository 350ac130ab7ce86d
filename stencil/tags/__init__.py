"""
Встроенные теги шаблонизатора.

Каждый тег построен только на публичном контракте TokenParser:
обработчик получает парсер и токен блока и возвращает узел.
"""

from __future__ import annotations

from .for_tag import ForNode
from .if_tag import IfNode
from .include_tag import IncludeNode
from .now_tag import NowNode

__all__ = ["ForNode", "IfNode", "IncludeNode", "NowNode"]
