"""Тесты для контекста рендеринга Context."""
from dataclasses import dataclass

import pytest

from stencil.context import Context


@dataclass
class User:
    name: str
    _secret: str = "hidden"


class TestContextScopes:
    """Тесты стека областей видимости."""

    def test_lookup_and_missing(self):
        context = Context({"a": 1}, b=2)

        assert context["a"] == 1
        assert context["b"] == 2
        assert context["missing"] is None
        assert "a" in context
        assert "missing" not in context

    def test_push_shadows_and_pop_restores(self):
        context = Context({"name": "outer"})

        context.push({"name": "inner"})
        assert context["name"] == "inner"

        context.pop()
        assert context["name"] == "outer"

    def test_setitem_writes_innermost_scope(self):
        context = Context({"x": 1})

        with context.scope():
            context["x"] = 2
            assert context["x"] == 2

        assert context["x"] == 1

    def test_cannot_pop_base_scope(self):
        with pytest.raises(RuntimeError):
            Context().pop()

    def test_scope_pops_on_error(self):
        """Область закрывается и при исключении внутри with."""
        context = Context()

        with pytest.raises(ValueError):
            with context.scope({"x": 1}):
                raise ValueError("boom")

        assert len(context.dicts) == 1

    def test_flatten(self):
        context = Context({"a": 1, "b": 1})
        context.push({"b": 2})

        assert context.flatten() == {"a": 1, "b": 2}


class TestResolve:
    """Тесты разрешения выражений переменных."""

    def setup_method(self):
        self.context = Context({
            "user": User(name="Kyle"),
            "profile": {"city": "Berlin", "tags": ["a", "b", "c"]},
            "items": [10, 20, 30],
            "empty": [],
        })

    @pytest.mark.parametrize("expression, expected", [
        ("user.name", "Kyle"),
        ("profile.city", "Berlin"),
        ("profile.tags.1", "b"),
        ("items.first", 10),
        ("items.last", 30),
        ("items.count", 3),
        ("items.-1", 30),
        ("empty.first", None),
        ("items.10", None),
        ("user.missing", None),
        ("missing.anything", None),
        ("user._secret", None),
        ('"literal text"', "literal text"),
        ("'single'", "single"),
    ])
    def test_resolve(self, expression, expected):
        assert self.context.resolve(expression) == expected

    def test_resolve_strips_whitespace(self):
        assert self.context.resolve("  user.name ") == "Kyle"
