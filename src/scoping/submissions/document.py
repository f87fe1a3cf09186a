"""
Rendering of a stored submission into the notification document.
"""

import html
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from scoping.email.interfaces import NotificationDocument
from scoping.email.template_renderer import TemplateRenderer
from scoping.submissions.schemas import SubmissionRecord

PLACEHOLDER = "N/A"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    default: Optional[str] = None
    suffix: str = ""


@dataclass(frozen=True)
class SectionSpec:
    key: str
    title: str
    fields: tuple[FieldSpec, ...]


SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec("part1", "Business Context", (
        FieldSpec("mission", "Mission"),
        FieldSpec("decisions", "Key Decisions"),
        FieldSpec("painPoints", "Pain Points"),
        FieldSpec("successCriteria", "Success Criteria"),
    )),
    SectionSpec("part2", "The Audience", (
        FieldSpec("primaryAudience", "Primary Audience"),
        FieldSpec("dataLiteracy", "Data Literacy", default="3", suffix="/5"),
        FieldSpec("consumption", "Consumption"),
        FieldSpec("concurrency", "Concurrency"),
    )),
    SectionSpec("part3", "Metrics & Logic", (
        FieldSpec("kpis", "KPIs"),
        FieldSpec("definitions", "Definitions"),
        FieldSpec("granularity", "Granularity"),
        FieldSpec("history", "History"),
        FieldSpec("latency", "Latency", default="Daily"),
    )),
    SectionSpec("part4", "Data Architecture", (
        FieldSpec("sources", "Sources"),
        FieldSpec("quality", "Quality"),
        FieldSpec("security", "Security"),
    )),
    SectionSpec("part5", "UX & Visualization", (
        FieldSpec("vizTypes", "Preferred Viz"),
        FieldSpec("interactivity", "Interactivity"),
        FieldSpec("layout", "Layout"),
    )),
    SectionSpec("part6", "Visual Assets", (
        FieldSpec("assets", "Assets"),
    )),
)

_H2_STYLE = "color: #1e293b; font-size: 18px; margin-top: 24px;"

HTML_TEMPLATE = """\
<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #e2e8f0; border-radius: 12px;">
  <h1 style="color: #1e293b; border-bottom: 2px solid #3b82f6; padding-bottom: 10px;">New Dashboard Scoping Submission</h1>
  <p style="color: #64748b; font-size: 14px;"><strong>Submitted by:</strong> {{submitted_by}}</p>
  <p style="color: #64748b; font-size: 14px;"><strong>Date:</strong> {{submitted_at}}</p>
{{sections_html}}
{{files_html}}
  <div style="margin-top: 30px; padding: 15px; background-color: #f8fafc; border-radius: 8px; font-size: 12px; color: #94a3b8;">
    This submission has been saved to the database with ID: {{submission_id}}
  </div>
</div>
"""

TEXT_TEMPLATE = """\
NEW DASHBOARD SCOPING SUBMISSION
Submitted by: {{submitted_by}}
Date: {{submitted_at}}

{{sections_text}}
{{files_text}}
This submission has been saved to the database with ID: {{submission_id}}
"""

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize(key: str) -> str:
    """``painPoints`` -> ``Pain Points``."""
    words = _CAMEL_BOUNDARY.sub(" ", key).replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def format_value(value: Any, default: Optional[str] = None) -> str:
    """Render one answer; empty answers become the default or the placeholder."""
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value if v not in (None, ""))
    elif isinstance(value, bool):
        value = "Yes" if value else "No"
    elif value is not None and not isinstance(value, str):
        value = str(value)

    if not value:
        return default if default is not None else PLACEHOLDER
    return value


def format_timestamp(timestamp: str) -> str:
    """Human-readable submission time; unparseable input is shown as given."""
    if not timestamp:
        return PLACEHOLDER
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    if parsed.tzinfo is None:
        return parsed.strftime("%d %B %Y, %H:%M:%S")
    return parsed.astimezone(timezone.utc).strftime("%d %B %Y, %H:%M:%S UTC")


def _section_rows(spec: SectionSpec, section: Mapping[str, Any]) -> list[tuple[str, str]]:
    rows = []
    for field in spec.fields:
        raw = section.get(field.key)
        # Falsy answers (0, "", []) on a defaulted field render the default.
        if field.default is not None and not raw:
            raw = None
        value = format_value(raw, field.default)
        if field.suffix and value != PLACEHOLDER:
            value = f"{value}{field.suffix}"
        rows.append((field.label, value))

    known = {field.key for field in spec.fields}
    for key, value in section.items():
        if key not in known:
            rows.append((humanize(key), format_value(value)))
    return rows


class SubmissionDocumentRenderer:
    """Builds the HTML and plain-text notification for a submission."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None):
        self._renderer = renderer or TemplateRenderer()

    def render(self, record: SubmissionRecord, submission_id: str) -> NotificationDocument:
        html_sections = []
        text_sections = []
        for index, spec in enumerate(SECTIONS, 1):
            section = record.form_data.get(spec.key)
            if not isinstance(section, Mapping):
                section = {}
            rows = _section_rows(spec, section)

            html_sections.append(
                f'  <h2 style="{_H2_STYLE}">{html.escape(spec.title)}</h2>\n'
                + "\n".join(
                    f"  <p><strong>{html.escape(label)}:</strong> {html.escape(value)}</p>"
                    for label, value in rows
                )
            )
            text_sections.append(
                f"PART {index}: {spec.title.upper()}\n"
                + "\n".join(f"- {label}: {value}" for label, value in rows)
                + "\n"
            )

        variables = {
            "submitted_by": record.user_email or "Anonymous",
            "submitted_at": format_timestamp(record.timestamp),
            "sections_html": "\n".join(html_sections),
            "files_html": self._files_html(record.file_urls),
            "sections_text": "\n".join(text_sections),
            "files_text": self._files_text(record.file_urls),
            "submission_id": submission_id,
        }
        return self._renderer.render(
            body_html_template=HTML_TEMPLATE,
            body_text_template=TEXT_TEMPLATE,
            variables=variables,
            raw=("sections_html", "files_html"),
        )

    @staticmethod
    def _files_html(file_urls: list[str]) -> str:
        if not file_urls:
            return ""
        items = "\n".join(
            f'    <li style="margin-bottom: 10px;"><a href="{html.escape(url, quote=True)}" '
            f'style="color: #3b82f6; text-decoration: none; font-size: 14px;">View Asset {i}</a></li>'
            for i, url in enumerate(file_urls, 1)
        )
        return (
            f'  <h2 style="{_H2_STYLE}">Uploaded Assets</h2>\n'
            f'  <ul style="list-style-type: none; padding: 0;">\n{items}\n  </ul>'
        )

    @staticmethod
    def _files_text(file_urls: list[str]) -> str:
        if not file_urls:
            return ""
        lines = "\n".join(f"- Asset {i}: {url}" for i, url in enumerate(file_urls, 1))
        return f"UPLOADED ASSETS\n{lines}\n"
