"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StencilUserError.

Programming errors and bugs should NOT inherit from StencilUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .tokens import Token


class StencilUserError(Exception):
    """
    Base class for all user-facing errors in stencil.

    These errors indicate problems that the user can fix:
    malformed templates, missing templates, configuration issues, etc.
    """
    pass


class TemplateSyntaxError(StencilUserError):
    """Ошибка разбора тега шаблона."""

    def __init__(self, message: str, token: Optional[Token] = None):
        if token is not None and token.line:
            super().__init__(f"{message} at {token.line}:{token.column}")
        else:
            super().__init__(message)
        self.message = message
        self.token = token


class LexerError(TemplateSyntaxError):
    """Ошибка лексического анализа (незакрытый разделитель)."""

    def __init__(self, message: str, line: int, column: int, position: int):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column
        self.position = position


class TemplateRenderError(StencilUserError):
    """Ошибка рендеринга узла шаблона."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class TemplateDoesNotExist(TemplateRenderError):
    """Шаблон не найден ни в одном из путей поиска."""

    def __init__(self, name: str, paths: Sequence[Path] = ()):
        searched = ", ".join(str(p) for p in paths) or "<no paths>"
        super().__init__(f"Template '{name}' not found (searched: {searched})")
        self.name = name
        self.paths = list(paths)


class ConfigLoadError(StencilUserError):
    """Ошибка загрузки stencil.yaml с указанием пути поля."""
    pass


__all__ = [
    "StencilUserError",
    "TemplateSyntaxError",
    "LexerError",
    "TemplateRenderError",
    "TemplateDoesNotExist",
    "ConfigLoadError",
]
