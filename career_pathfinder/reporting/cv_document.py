"""
CV rendering and export.

``cv_sections()`` turns a ``CurriculumVitae`` into an ordered outline of
``(heading, lines)`` pairs. Both the terminal view (``formatters.format_cv``)
and the PDF writer render that same outline, so they never disagree about
what a CV contains. Empty sections are omitted.

Exports:
  - ``write_cv_pdf``: A4 PDF via reportlab's platypus flowables.
  - ``write_cv_json``: the full CV model as JSON (re-importable with
    ``cv-save``).

File names follow ``<Full_Name>_CV_<YYYY-MM-DD>.<ext>``.
"""

from __future__ import annotations

import html
import logging
import re
from datetime import date
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from career_pathfinder.models.cv import CurriculumVitae
from career_pathfinder.reporting.export import export_to_json

logger = logging.getLogger(__name__)

Section = tuple[str, list[str]]

# Accent colour per CV template.
_ACCENTS: dict[str, colors.Color] = {
    "modern":  colors.HexColor("#8B5CF6"),
    "classic": colors.HexColor("#1F2937"),
    "minimal": colors.HexColor("#4B5563"),
}

# Sections whose unindented lines head an entry (set in bold).
_ENTRY_SECTIONS = frozenset({"Education", "Experience", "Projects", "Certifications"})


# ── Outline ───────────────────────────────────────────────────────────────────


def contact_line(cv: CurriculumVitae) -> str:
    return " | ".join(part for part in (cv.email, cv.phone, cv.location) if part)


def links_line(cv: CurriculumVitae) -> str:
    links = [
        ("LinkedIn", cv.linkedin_url),
        ("GitHub", cv.github_url),
        ("Portfolio", cv.portfolio_url),
    ]
    return " | ".join(f"{label}: {url}" for label, url in links if url)


def _join(*parts: str, sep: str = " | ") -> str:
    return sep.join(p for p in parts if p)


def cv_sections(cv: CurriculumVitae) -> list[Section]:
    """Ordered ``(heading, lines)`` outline of the CV body."""
    sections: list[Section] = []

    if cv.summary:
        sections.append(("Professional Summary", [cv.summary]))

    if cv.education:
        lines = []
        for edu in cv.education:
            lines.append(f"{edu.degree}, {edu.institution}")
            meta = _join(edu.location, _join(edu.start_date, edu.end_date, sep=" - "))
            if edu.gpa:
                meta = _join(meta, f"GPA: {edu.gpa}")
            if meta:
                lines.append(f"  {meta}")
            if edu.description:
                lines.append(f"  {edu.description}")
        sections.append(("Education", lines))

    if cv.experience:
        lines = []
        for exp in cv.experience:
            lines.append(f"{exp.title}, {exp.company}")
            meta = _join(exp.location, exp.date_range)
            if meta:
                lines.append(f"  {meta}")
            if exp.description:
                lines.append(f"  {exp.description}")
        sections.append(("Experience", lines))

    if cv.skills:
        sections.append((
            "Skills",
            [" • ".join(f"{s.name} ({s.level})" if s.level else s.name for s in cv.skills)],
        ))

    if cv.projects:
        lines = []
        for proj in cv.projects:
            lines.append(_join(proj.name, proj.url))
            if proj.description:
                lines.append(f"  {proj.description}")
            if proj.technologies:
                lines.append(f"  Technologies: {proj.technologies}")
        sections.append(("Projects", lines))

    if cv.certifications:
        lines = []
        for cert in cv.certifications:
            lines.append(_join(
                cert.name,
                cert.issuer,
                cert.date,
                f"ID: {cert.credential_id}" if cert.credential_id else "",
                sep=" • ",
            ))
        sections.append(("Certifications", lines))

    if cv.languages:
        sections.append((
            "Languages",
            [" • ".join(
                f"{lang.name} ({lang.proficiency})" if lang.proficiency else lang.name
                for lang in cv.languages
            )],
        ))

    for extra in cv.additional_sections:
        sections.append((extra.title, [extra.content] if extra.content else []))

    return sections


def cv_filename(cv: CurriculumVitae, extension: str, on: Optional[date] = None) -> str:
    """``Jane_Doe_CV_2026-10-19.pdf``-style file name."""
    name = re.sub(r"\s+", "_", cv.full_name.strip()) or cv.user_id
    name = re.sub(r"[^\w.-]", "", name)
    return f"{name}_CV_{(on or date.today()).isoformat()}.{extension}"


# ── Writers ───────────────────────────────────────────────────────────────────


def _require_exportable(cv: CurriculumVitae) -> None:
    if not cv.is_exportable:
        raise ValueError("Please fill in at least your name before exporting.")


def write_cv_json(cv: CurriculumVitae, output_dir: Path, on: Optional[date] = None) -> Path:
    """Write the CV as JSON. Returns the written path.

    Raises:
        ValueError: If the CV has no ``full_name``.
    """
    _require_exportable(cv)
    path = output_dir / cv_filename(cv, "json", on)
    export_to_json(cv.model_dump(mode="json"), path)
    logger.info("CV %s exported to %s", cv.cv_id, path)
    return path


def _pdf_styles(accent: colors.Color) -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "name": ParagraphStyle(
            "CvName", parent=base["Title"], fontSize=22, leading=26, textColor=accent,
        ),
        "contact": ParagraphStyle(
            "CvContact", parent=base["Normal"], fontSize=9, leading=12,
            alignment=1, textColor=colors.HexColor("#4B5563"),
        ),
        "section": ParagraphStyle(
            "CvSection", parent=base["Heading2"], fontSize=13, leading=16,
            textColor=accent, spaceBefore=8, spaceAfter=2,
        ),
        "entry": ParagraphStyle(
            "CvEntry", parent=base["Normal"], fontSize=10, leading=13,
            fontName="Helvetica-Bold",
        ),
        "body": ParagraphStyle(
            "CvBody", parent=base["Normal"], fontSize=10, leading=13, leftIndent=8,
        ),
    }


def write_cv_pdf(cv: CurriculumVitae, output_dir: Path, on: Optional[date] = None) -> Path:
    """Render the CV to an A4 PDF. Returns the written path.

    Entry lines of the list sections are set in bold with their indented
    detail lines beneath; page breaks are left to reportlab.

    Raises:
        ValueError: If the CV has no ``full_name``.
    """
    _require_exportable(cv)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / cv_filename(cv, "pdf", on)

    accent = _ACCENTS.get(cv.template, _ACCENTS["modern"])
    styles = _pdf_styles(accent)
    doc = SimpleDocTemplate(
        str(path),
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{cv.full_name} - {cv.title}",
        author=cv.full_name,
    )

    story: list = [Paragraph(html.escape(cv.full_name), styles["name"])]
    for line in (contact_line(cv), links_line(cv)):
        if line:
            story.append(Paragraph(html.escape(line), styles["contact"]))
    story.append(HRFlowable(width="100%", thickness=0.9, color=accent, spaceBefore=4, spaceAfter=6))

    for heading, lines in cv_sections(cv):
        story.append(Paragraph(html.escape(heading.upper()), styles["section"]))
        story.append(HRFlowable(width="100%", thickness=0.4, color=accent, spaceAfter=4))
        for line in lines:
            is_entry = heading in _ENTRY_SECTIONS and not line.startswith("  ")
            style = styles["entry"] if is_entry else styles["body"]
            story.append(Paragraph(html.escape(line.strip()), style))
        story.append(Spacer(1, 3 * mm))

    doc.build(story)
    logger.info("CV %s rendered to %s", cv.cv_id, path)
    return path
