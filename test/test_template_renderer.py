"""
Tests for email template renderer.
"""

import pytest

from scoping.email.template_renderer import TemplateRenderer


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestTemplateRenderer:
    """Tests for TemplateRenderer."""

    def test_render_simple_template(self, renderer):
        doc = renderer.render(
            body_html_template="<p>Hello {{name}}</p>",
            body_text_template="Hello {{name}}",
            variables={"name": "Jane"},
        )

        assert doc.html == "<p>Hello Jane</p>"
        assert doc.text == "Hello Jane"

    def test_whitespace_inside_braces(self, renderer):
        doc = renderer.render("<p>{{ name }}</p>", None, {"name": "Jane"})

        assert doc.html == "<p>Jane</p>"
        assert doc.text is None

    def test_missing_variable_renders_empty(self, renderer):
        doc = renderer.render("<p>[{{missing}}]</p>", "[{{missing}}]", {})

        assert doc.html == "<p>[]</p>"
        assert doc.text == "[]"

    def test_none_value_renders_empty(self, renderer):
        doc = renderer.render("<p>{{value}}</p>", None, {"value": None})

        assert doc.html == "<p></p>"

    def test_html_values_escaped(self, renderer):
        doc = renderer.render(
            "<p>{{answer}}</p>",
            "{{answer}}",
            {"answer": "<script>alert('x')</script>"},
        )

        assert "<script>" not in doc.html
        assert "&lt;script&gt;" in doc.html
        # plain text body is not escaped
        assert doc.text == "<script>alert('x')</script>"

    def test_raw_values_not_escaped(self, renderer):
        doc = renderer.render(
            "<div>{{fragment}}{{other}}</div>",
            None,
            {"fragment": "<b>ok</b>", "other": "<i>"},
            raw=("fragment",),
        )

        assert doc.html == "<div><b>ok</b>&lt;i&gt;</div>"

    def test_non_string_values(self, renderer):
        doc = renderer.render("{{count}} {{flag}}", None, {"count": 3, "flag": True})

        assert doc.html == "3 True"

