"""
Загрузчик конфигурации stencil.yaml.

Пример файла:

    strict: true
    template_paths: [templates, shared]
    now_format: "%d.%m.%Y"
    context:
      site: Example
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

CONFIG_FILENAME = "stencil.yaml"


@dataclass
class StencilConfig:
    """Настройки разбора и рендеринга шаблонов."""
    root: Path = field(default_factory=Path.cwd)
    strict: bool = False
    template_paths: List[Path] = field(default_factory=list)
    now_format: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict, root: Path) -> StencilConfig:
        """Создаёт конфигурацию из разобранного YAML-словаря."""
        strict = data.get("strict", False)
        if not isinstance(strict, bool):
            raise ConfigLoadError(f"strict: expected bool, got {strict!r}")

        raw_paths = data.get("template_paths", ["."])
        if isinstance(raw_paths, str):
            raw_paths = [raw_paths]
        if not isinstance(raw_paths, list) or not all(isinstance(p, str) for p in raw_paths):
            raise ConfigLoadError(f"template_paths: expected list of strings, got {raw_paths!r}")

        now_format = data.get("now_format")
        if now_format is not None and not isinstance(now_format, str):
            raise ConfigLoadError(f"now_format: expected string, got {now_format!r}")

        context = data.get("context") or {}
        if not isinstance(context, dict):
            raise ConfigLoadError(f"context: expected mapping, got {type(context).__name__}")

        return cls(
            root=root,
            strict=strict,
            template_paths=[root / p for p in raw_paths],
            now_format=now_format,
            context=dict(context),
        )


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def load_config(root: Path) -> StencilConfig:
    """
    Загружает stencil.yaml из директории root.

    Отсутствующий файл даёт конфигурацию по умолчанию. Переменная
    окружения STENCIL_STRICT=1 включает строгий режим поверх файла.

    Raises:
        ConfigLoadError: При некорректном содержимом файла
    """
    root = Path(root)
    path = root / CONFIG_FILENAME
    config = StencilConfig.from_dict(_read_yaml_map(path), root)

    if _env_flag("STENCIL_STRICT"):
        config.strict = True

    logger.debug("Loaded config from %s: strict=%s paths=%s", path, config.strict, config.template_paths)
    return config


__all__ = ["StencilConfig", "CONFIG_FILENAME", "load_config"]
