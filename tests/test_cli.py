"""Тесты командной строки stencil."""
import json
import logging
from pathlib import Path

import pytest

from stencil.cli import main
from tests.infrastructure.file_utils import write


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    yield
    logger = logging.getLogger("stencil")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """Проект с stencil.yaml, шаблонами и файлом контекста."""
    monkeypatch.delenv("STENCIL_STRICT", raising=False)
    write(tmp_path / "stencil.yaml", (
        "template_paths: [templates]\n"
        "context:\n"
        "  site: Example\n"
    ))
    write(tmp_path / "templates" / "header.txt", "== {{ site }} ==\n")
    write(tmp_path / "templates" / "page.txt", (
        "{% include \"header.txt\" %}"
        "{% for user in users %}* {{ user.name }}\n{% endfor %}"
    ))
    write(tmp_path / "templates" / "typo.txt", "a{% tpyo %}b")
    write(tmp_path / "ctx.yaml", "users:\n  - name: Ann\n  - name: Bob\n")
    return tmp_path


class TestRender:

    def test_render_by_name(self, project: Path, capsys):
        rc = main(["render", "page.txt", "--root", str(project), "--context", str(project / "ctx.yaml")])

        assert rc == 0
        assert capsys.readouterr().out == "== Example ==\n* Ann\n* Bob\n"

    def test_render_by_path_with_vars(self, project: Path, capsys):
        write(project / "direct.txt", "{{ greeting }}, {{ site }}")

        rc = main([
            "render", str(project / "direct.txt"),
            "--root", str(project),
            "--var", "greeting=Hello",
            "--var", "site=Override",
        ])

        assert rc == 0
        assert capsys.readouterr().out == "Hello, Override"

    def test_strict_flag(self, project: Path, capsys):
        assert main(["render", "typo.txt", "--root", str(project)]) == 0
        assert capsys.readouterr().out == "ab"

        rc = main(["render", "typo.txt", "--root", str(project), "--strict"])

        assert rc == 2
        assert "Unknown template tag 'tpyo'" in capsys.readouterr().err

    def test_missing_template(self, project: Path, capsys):
        rc = main(["render", "nope.txt", "--root", str(project)])

        assert rc == 2
        assert "Template 'nope.txt' not found" in capsys.readouterr().err

    def test_bad_var(self, project: Path, capsys):
        rc = main(["render", "page.txt", "--root", str(project), "--var", "novalue"])

        assert rc == 2
        assert "Expected 'key=value'" in capsys.readouterr().err

    def test_missing_context_file(self, project: Path, capsys):
        rc = main(["render", "page.txt", "--root", str(project), "--context", str(project / "none.yaml")])

        assert rc == 2
        assert "Context file not found" in capsys.readouterr().err

    def test_circular_include(self, project: Path, capsys):
        write(project / "templates" / "self.txt", "{% include \"self.txt\" %}")

        rc = main(["render", "self.txt", "--root", str(project)])

        assert rc == 2
        assert "Circular include detected: self.txt → self.txt" in capsys.readouterr().err


class TestInspect:

    def test_tokens(self, tmp_path: Path, capsys):
        path = write(tmp_path / "t.txt", "Hi {{ name }}{# c #}")

        rc = main(["tokens", str(path)])

        assert rc == 0
        data = json.loads(capsys.readouterr().out)
        assert data == [
            {"type": "TEXT", "contents": "Hi ", "line": 1, "column": 1},
            {"type": "VARIABLE", "contents": "name", "line": 1, "column": 4},
            {"type": "COMMENT", "contents": "c", "line": 1, "column": 14},
        ]

    def test_tokens_missing_file(self, tmp_path: Path, capsys):
        assert main(["tokens", str(tmp_path / "none.txt")]) == 2

    def test_tags(self, capsys):
        assert main(["tags"]) == 0
        assert json.loads(capsys.readouterr().out) == ["for", "if", "ifnot", "include", "now"]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("stencil ")
