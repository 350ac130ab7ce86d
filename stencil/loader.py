"""
Загрузчик шаблонов для тега include.

Ищет шаблон по имени в списке директорий и кэширует разобранные шаблоны.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import TemplateDoesNotExist
from .template import Template

logger = logging.getLogger(__name__)


class TemplateLoader:
    """
    Поиск шаблонов в директориях.

    Директории проверяются по порядку; первый найденный файл побеждает.
    Имена, выходящие за пределы директории поиска (`../secret`), отвергаются.
    """

    def __init__(self, paths: Iterable[Path], strict: bool = False):
        self.paths: List[Path] = [Path(p) for p in paths]
        self.strict = strict
        self._cache: Dict[str, Template] = {}

    def find(self, name: str) -> Optional[Path]:
        """Возвращает путь к файлу шаблона или None."""
        for root in self.paths:
            base = root.resolve()
            candidate = (base / name).resolve()
            if not candidate.is_relative_to(base):
                logger.warning("Template name '%s' escapes search path %s", name, root)
                continue
            if candidate.is_file():
                return candidate
        return None

    def load_template(self, name: str) -> Template:
        """
        Загружает шаблон по имени.

        Raises:
            TemplateDoesNotExist: Если шаблон не найден
            TemplateSyntaxError: При ошибке разбора найденного шаблона
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.find(name)
        if path is None:
            raise TemplateDoesNotExist(name, self.paths)

        logger.debug("Loading template '%s' from %s", name, path)
        template = Template.from_path(path, name=name, strict=self.strict)
        self._cache[name] = template
        return template

    def load_template_any(self, names: Sequence[str]) -> Template:
        """Загружает первый найденный шаблон из списка имён."""
        for name in names:
            try:
                return self.load_template(name)
            except TemplateDoesNotExist:
                continue
        raise TemplateDoesNotExist(", ".join(names), self.paths)


__all__ = ["TemplateLoader"]
