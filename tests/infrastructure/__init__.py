"""
Unified test infrastructure for stencil.

Modules:
- file_utils: Utilities for creating files and directories
- parser_utils: Token builders and recording tag parsers
"""

from .file_utils import write
from .parser_utils import make_parser, section_tag, failing_tag, CompositeNode

__all__ = [
    "write",
    "make_parser",
    "section_tag",
    "failing_tag",
    "CompositeNode",
]
