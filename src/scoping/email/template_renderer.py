"""
Email template rendering with variable substitution.
"""

import html
import re
from typing import Any, Iterable, Optional

from scoping.email.interfaces import NotificationDocument


class TemplateRenderer:
    """
    Renders notification templates with variable substitution.

    Supports {{variable}} syntax. In the HTML body every value is escaped
    unless its name is listed in ``raw``, which is meant for fragments the
    caller has already built and escaped.
    """

    VARIABLE_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")

    def render(
        self,
        body_html_template: str,
        body_text_template: Optional[str],
        variables: dict[str, Any],
        raw: Iterable[str] = (),
    ) -> NotificationDocument:
        """
        Render templates with variable substitution.

        Args:
            body_html_template: HTML body template.
            body_text_template: Optional plain text body template.
            variables: Dictionary of variable names to values.
            raw: Variable names inserted into the HTML body without escaping.

        Returns:
            NotificationDocument with substituted values.
        """
        str_vars = {k: str(v) if v is not None else "" for k, v in variables.items()}
        raw_names = frozenset(raw)

        body_html = self._substitute(body_html_template, str_vars, escape=True, raw=raw_names)

        body_text = None
        if body_text_template:
            body_text = self._substitute(body_text_template, str_vars, escape=False, raw=raw_names)

        return NotificationDocument(html=body_html, text=body_text)

    def _substitute(
        self,
        template: str,
        variables: dict[str, str],
        escape: bool,
        raw: frozenset[str],
    ) -> str:
        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            value = variables.get(var_name, "")
            if escape and var_name not in raw:
                value = html.escape(value)
            return value

        return self.VARIABLE_PATTERN.sub(replacer, template)
