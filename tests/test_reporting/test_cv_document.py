"""Tests for the CV outline, terminal rendering and file exports."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest

from career_pathfinder.models.cv import AdditionalSection, Certification, Project
from career_pathfinder.models.profile import UserProfile
from career_pathfinder.reporting.cv_document import (
    contact_line,
    cv_filename,
    cv_sections,
    links_line,
    write_cv_json,
    write_cv_pdf,
)
from career_pathfinder.reporting.formatters import format_cv, format_cv_list, format_profile

from conftest import make_cv

_DAY = date(2026, 10, 19)


class TestOutline:
    def test_section_order_and_content(self):
        sections = dict(cv_sections(make_cv()))
        assert list(sections) == [
            "Professional Summary", "Education", "Experience", "Skills", "Languages",
        ]
        assert sections["Education"] == ["BSc Computer Science, UNILAG", "  2018 - 2022"]
        assert sections["Experience"] == [
            "Backend Intern, Paystack",
            "  2023-01 - Present",
            "  Built payment reconciliation jobs.",
        ]
        assert sections["Skills"] == ["Python (Advanced) • SQL (Intermediate)"]
        assert sections["Languages"] == ["English (Native)"]

    def test_empty_sections_omitted(self):
        cv = make_cv(summary="", education=[], experience=[], skills=[], languages=[])
        assert cv_sections(cv) == []

    def test_optional_sections_follow_languages(self):
        cv = make_cv(
            projects=[Project(name="Pathfinder", technologies="Python, SQLite")],
            certifications=[Certification(name="AWS SAA", issuer="Amazon", credential_id="X1")],
            additional_sections=[AdditionalSection(title="Volunteering", content="Code club")],
        )
        sections = cv_sections(cv)
        assert [h for h, _ in sections] == [
            "Professional Summary", "Education", "Experience", "Skills",
            "Projects", "Certifications", "Languages", "Volunteering",
        ]
        body = dict(sections)
        assert body["Projects"] == ["Pathfinder", "  Technologies: Python, SQLite"]
        assert body["Certifications"] == ["AWS SAA • Amazon • ID: X1"]
        assert body["Volunteering"] == ["Code club"]

    def test_contact_and_links(self):
        cv = make_cv()
        assert contact_line(cv) == "alice@example.com | +234 800 000 0000 | Lagos, Nigeria"
        assert links_line(cv) == "GitHub: https://github.com/alice"
        assert links_line(make_cv(github_url="")) == ""

    def test_filename(self):
        assert cv_filename(make_cv(), "pdf", on=_DAY) == "Alice_Ade_CV_2026-10-19.pdf"
        assert cv_filename(make_cv(full_name=""), "json", on=_DAY) == "alice_CV_2026-10-19.json"


class TestExports:
    def test_json_export(self, tmp_path):
        path = write_cv_json(make_cv(), tmp_path / "cvs", on=_DAY)
        assert path.name == "Alice_Ade_CV_2026-10-19.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["full_name"] == "Alice Ade"
        assert data["experience"][0]["current"] is True
        assert data["skills"][1] == {"name": "SQL", "level": "Intermediate", "category": ""}

    def test_pdf_export(self, tmp_path):
        path = write_cv_pdf(make_cv(template="classic"), tmp_path / "cvs", on=_DAY)
        assert path.name == "Alice_Ade_CV_2026-10-19.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_pdf_escapes_markup(self, tmp_path):
        cv = make_cv(summary="Likes <b>bold</b> & ampersands")
        assert write_cv_pdf(cv, tmp_path, on=_DAY).stat().st_size > 0

    @pytest.mark.parametrize("writer", [write_cv_json, write_cv_pdf])
    def test_export_requires_name(self, tmp_path, writer):
        with pytest.raises(ValueError, match="fill in at least your name"):
            writer(make_cv(full_name=""), tmp_path)
        assert list(tmp_path.iterdir()) == []


class TestFormatters:
    def test_format_cv(self):
        text = format_cv(make_cv())
        assert text.startswith("Alice Ade\n")
        assert "  alice@example.com | +234 800 000 0000 | Lagos, Nigeria" in text
        assert "\nEXPERIENCE\n  Backend Intern, Paystack\n" in text
        assert "PROJECTS" not in text

    def test_format_cv_without_name(self):
        assert format_cv(make_cv(full_name="")).startswith("(no name)")

    def test_format_cv_list(self):
        cvs = [
            make_cv(cv_id=2, title="Data roles", is_default=True,
                    updated_at=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)),
            make_cv(cv_id=1),
        ]
        text = format_cv_list(cvs, "alice")
        assert "CVs for 'alice' (2)" in text
        lines = text.splitlines()
        data_row = next(line for line in lines if "Data roles" in line)
        assert "2026-10-19 08:00" in data_row
        assert data_row.endswith(" *")
        assert not next(line for line in lines if "Backend roles" in line).endswith("*")

    def test_format_cv_list_empty(self):
        assert format_cv_list([], "bob") == "No CVs saved for user 'bob'."

    def test_format_profile(self):
        profile = UserProfile(
            user_id="alice", full_name="Alice Ade", location="Lagos",
            quiz_completion_count=3,
            updated_at=datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc),
        )
        text = format_profile(profile)
        assert "Profile for 'alice'" in text
        assert "Name:            Alice Ade" in text
        assert "Email:           -" in text
        assert "Quizzes taken:   3" in text
        assert "Updated (UTC):   2026-10-19 09:30" in text
