"""
stencil - шаблонизатор с расширяемым набором тегов.

Лексер превращает текст в токены, TokenParser строит из них список
узлов, узлы рендерятся в Context.
"""

from __future__ import annotations

from .config import StencilConfig, load_config
from .context import Context
from .errors import (
    ConfigLoadError,
    LexerError,
    StencilUserError,
    TemplateDoesNotExist,
    TemplateRenderError,
    TemplateSyntaxError,
)
from .lexer import Lexer, tokenize
from .loader import TemplateLoader
from .nodes import Node, NodeList, SimpleNode, TextNode, VariableNode, render_nodes
from .parser import ParseUntil, TagParser, TokenParser, until
from .template import Template
from .tokens import Token, TokenType

__all__ = [
    "ConfigLoadError",
    "Context",
    "Lexer",
    "LexerError",
    "Node",
    "NodeList",
    "ParseUntil",
    "SimpleNode",
    "StencilConfig",
    "StencilUserError",
    "TagParser",
    "Template",
    "TemplateDoesNotExist",
    "TemplateLoader",
    "TemplateRenderError",
    "TemplateSyntaxError",
    "TextNode",
    "Token",
    "TokenParser",
    "TokenType",
    "VariableNode",
    "load_config",
    "render_nodes",
    "tokenize",
    "until",
]
