from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import StencilConfig, load_config
from .context import Context
from .errors import StencilUserError
from .lexer import Lexer
from .loader import TemplateLoader
from .parser import TokenParser
from .template import Template
from .version import tool_version

_LOG = logging.getLogger("stencil")

_yaml = YAML(typ="safe")


def _setup_logging(verbose: bool) -> None:
    debug = verbose or bool(os.environ.get("STENCIL_DEBUG"))
    _LOG.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stencil",
        description="stencil template engine",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    sp_render.add_argument("template", help="путь к файлу шаблона или имя в template_paths")
    sp_render.add_argument(
        "--context",
        metavar="FILE.yaml",
        help="YAML/JSON файл с переменными контекста",
    )
    sp_render.add_argument(
        "--var",
        action="append",
        metavar="KEY=VALUE",
        help="переменная контекста (можно указать несколько)",
    )
    sp_render.add_argument("--strict", action="store_true", help="ошибка на неизвестные теги")
    sp_render.add_argument("--root", default=".", help="директория с stencil.yaml (по умолчанию текущая)")

    sp_tokens = sub.add_parser("tokens", help="Токены шаблона (JSON)")
    sp_tokens.add_argument("template", help="путь к файлу шаблона")

    sub.add_parser("tags", help="Встроенные теги (JSON)")

    return p


def _parse_vars(specs: Optional[List[str]]) -> Dict[str, str]:
    """Парсит список 'key=value' в словарь."""
    result: Dict[str, str] = {}
    for spec in specs or []:
        if "=" not in spec:
            raise StencilUserError(f"Invalid variable format '{spec}'. Expected 'key=value'")
        key, value = spec.split("=", 1)
        result[key.strip()] = value
    return result


def _load_context_file(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    file_path = Path(path)
    if not file_path.is_file():
        raise StencilUserError(f"Context file not found: {file_path}")
    try:
        data = _yaml.load(file_path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise StencilUserError(f"Invalid context file {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise StencilUserError(f"Context file must contain a mapping: {file_path}")
    return data


def _resolve_template(name: str, config: StencilConfig, loader: TemplateLoader) -> Template:
    """Файл по пути имеет приоритет над поиском в template_paths."""
    path = Path(name)
    if path.is_file():
        return Template.from_path(path, strict=config.strict)
    return loader.load_template(name)


def _run_render(ns: argparse.Namespace) -> str:
    config = load_config(Path(ns.root))
    if ns.strict:
        config.strict = True

    loader = TemplateLoader(config.template_paths or [config.root], strict=config.strict)
    template = _resolve_template(ns.template, config, loader)

    variables: Dict[str, Any] = dict(config.context)
    variables.update(_load_context_file(ns.context))
    variables.update(_parse_vars(ns.var))
    variables.setdefault("loader", loader)
    if config.now_format:
        variables.setdefault("now_format", config.now_format)

    return template.render(Context(variables))


def _token_dicts(path: Path) -> List[Dict[str, Any]]:
    tokens = Lexer(path.read_text(encoding="utf-8")).tokenize()
    return [
        {"type": t.type.value, "contents": t.contents, "line": t.line, "column": t.column}
        for t in tokens
    ]


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "render":
            sys.stdout.write(_run_render(ns))
            return 0

        if ns.cmd == "tokens":
            path = Path(ns.template)
            if not path.is_file():
                raise StencilUserError(f"Template file not found: {path}")
            sys.stdout.write(json.dumps(_token_dicts(path), ensure_ascii=False, indent=2) + "\n")
            return 0

        if ns.cmd == "tags":
            sys.stdout.write(json.dumps(list(TokenParser([]).registered_tags)) + "\n")
            return 0

    except StencilUserError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
