from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Директория шаблонов: страница, заголовок и вложенный фрагмент."""
    root = tmp_path / "templates"
    write(root / "header.html", "<h1>{{ title }}</h1>")
    write(root / "page.html", "{% include \"header.html\" %}\n{% for item in items %}- {{ item }}\n{% endfor %}")
    write(root / "partials" / "item.html", "[{{ item }}]")
    return root


@pytest.fixture(autouse=True)
def _stencil_debug_logging(caplog):
    # ловим debug-сообщения парсера независимо от настроек CLI
    caplog.set_level(logging.DEBUG, logger="stencil")
