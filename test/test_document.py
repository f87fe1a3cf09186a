"""
Tests for rendering a submission into the notification document.
"""

import pytest

from scoping.submissions.document import (
    PLACEHOLDER,
    SubmissionDocumentRenderer,
    format_timestamp,
    format_value,
    humanize,
)
from scoping.submissions.schemas import SubmissionRecord

SUBMISSION_ID = "submission_1714557600000_0123456789ab"


def make_record(form_data, user_email="jane@example.com", file_urls=None, timestamp="2024-05-01T10:00:00Z"):
    return SubmissionRecord(
        form_data=form_data,
        user_email=user_email,
        timestamp=timestamp,
        file_urls=file_urls or [],
    )


class TestFormatting:

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("painPoints", "Pain Points"),
            ("kpis", "Kpis"),
            ("success_criteria", "Success Criteria"),
            ("vizTypes", "Viz Types"),
        ],
    )
    def test_humanize(self, key, expected):
        assert humanize(key) == expected

    def test_list_joined(self):
        assert format_value(["Desktop", "", "Mobile"]) == "Desktop, Mobile"

    def test_empty_uses_placeholder(self):
        assert format_value(None) == PLACEHOLDER
        assert format_value("") == PLACEHOLDER
        assert format_value([]) == PLACEHOLDER

    def test_empty_uses_default(self):
        assert format_value(None, "Daily") == "Daily"

    def test_scalars(self):
        assert format_value(4) == "4"
        assert format_value(True) == "Yes"
        assert format_value(False) == "No"

    def test_timestamp_utc(self):
        assert format_timestamp("2024-05-01T10:00:00Z") == "01 May 2024, 10:00:00 UTC"

    def test_timestamp_offset_converted(self):
        assert format_timestamp("2024-05-01T12:00:00+02:00") == "01 May 2024, 10:00:00 UTC"

    def test_timestamp_unparseable_kept(self):
        assert format_timestamp("yesterday") == "yesterday"

    def test_timestamp_empty(self):
        assert format_timestamp("") == PLACEHOLDER


class TestSubmissionDocumentRenderer:

    def test_contains_all_sections(self, sample_form_data):
        doc = SubmissionDocumentRenderer().render(make_record(sample_form_data), SUBMISSION_ID)

        for title in (
            "Business Context",
            "The Audience",
            "Metrics &amp; Logic",
            "Data Architecture",
            "UX &amp; Visualization",
            "Visual Assets",
        ):
            assert title in doc.html
        assert "PART 3: METRICS & LOGIC" in doc.text
        assert "PART 6: VISUAL ASSETS" in doc.text

    def test_header_and_footer(self, sample_form_data):
        doc = SubmissionDocumentRenderer().render(make_record(sample_form_data), SUBMISSION_ID)

        assert "New Dashboard Scoping Submission" in doc.html
        assert "jane@example.com" in doc.html
        assert "01 May 2024, 10:00:00 UTC" in doc.html
        assert f"saved to the database with ID: {SUBMISSION_ID}" in doc.html
        assert f"saved to the database with ID: {SUBMISSION_ID}" in doc.text

    def test_answers_rendered(self, sample_form_data):
        doc = SubmissionDocumentRenderer().render(make_record(sample_form_data), SUBMISSION_ID)

        assert "<strong>Mission:</strong> Give ops a single view of fulfilment" in doc.html
        assert "<strong>Data Literacy:</strong> 4/5" in doc.html
        assert "<strong>Consumption:</strong> Desktop, Mobile" in doc.html
        assert "- Latency: Real-time" in doc.text

    def test_defaults_and_placeholders(self):
        doc = SubmissionDocumentRenderer().render(make_record({}), SUBMISSION_ID)

        assert "<strong>Data Literacy:</strong> 3/5" in doc.html
        assert "<strong>Latency:</strong> Daily" in doc.html
        assert f"<strong>Mission:</strong> {PLACEHOLDER}" in doc.html

    def test_zero_rating_uses_default(self):
        doc = SubmissionDocumentRenderer().render(make_record({"part2": {"dataLiteracy": 0}}), SUBMISSION_ID)

        assert "<strong>Data Literacy:</strong> 3/5" in doc.html
        assert "- Data Literacy: 3/5" in doc.text

    def test_anonymous_submitter(self):
        doc = SubmissionDocumentRenderer().render(make_record({}, user_email=None), SUBMISSION_ID)

        assert "<strong>Submitted by:</strong> Anonymous" in doc.html

    def test_unknown_fields_appended(self):
        form_data = {"part1": {"mission": "m", "budgetOwner": "Finance"}}

        doc = SubmissionDocumentRenderer().render(make_record(form_data), SUBMISSION_ID)

        assert "<strong>Budget Owner:</strong> Finance" in doc.html

    def test_non_mapping_section_ignored(self):
        doc = SubmissionDocumentRenderer().render(make_record({"part1": "oops"}), SUBMISSION_ID)

        assert f"<strong>Mission:</strong> {PLACEHOLDER}" in doc.html

    def test_answers_escaped(self):
        form_data = {"part1": {"mission": "<img src=x onerror=alert(1)>"}}

        doc = SubmissionDocumentRenderer().render(
            make_record(form_data, user_email="<b>@example.com"),
            SUBMISSION_ID,
        )

        assert "<img" not in doc.html
        assert "&lt;img src=x onerror=alert(1)&gt;" in doc.html
        assert "&lt;b&gt;@example.com" in doc.html

    def test_file_links(self):
        urls = ["https://files.example.com/a.png", "https://files.example.com/b.png?x=1&y=2"]

        doc = SubmissionDocumentRenderer().render(make_record({}, file_urls=urls), SUBMISSION_ID)

        assert "Uploaded Assets" in doc.html
        assert '<a href="https://files.example.com/a.png"' in doc.html
        assert "View Asset 1" in doc.html
        assert "View Asset 2" in doc.html
        assert "b.png?x=1&amp;y=2" in doc.html
        assert "- Asset 2: https://files.example.com/b.png?x=1&y=2" in doc.text

    def test_no_files_section_without_urls(self, sample_form_data):
        doc = SubmissionDocumentRenderer().render(make_record(sample_form_data), SUBMISSION_ID)

        assert "Uploaded Assets" not in doc.html
        assert "UPLOADED ASSETS" not in doc.text
