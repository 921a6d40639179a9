from __future__ import annotations

import io
from typing import Mapping, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ..attendance.model import attendance_duration, attendance_status

ACCENT = colors.Color(239 / 255, 157 / 255, 101 / 255)
NAVY = colors.Color(25 / 255, 42 / 255, 57 / 255)
BODY = colors.Color(50 / 255, 50 / 255, 50 / 255)
PANEL = colors.Color(30 / 255, 52 / 255, 67 / 255)

WELCOME_LINE = "A Heartfelt Welcome to the Internship Kickoff"

BOTTOM_MARGIN = 2 * cm


def _centered_lines(p: canvas.Canvas, text: str, *, y: float, font: str, size: int, width: float) -> float:
    p.setFont(font, size)
    for line in simpleSplit(text, font, size, width - 4 * cm):
        p.drawCentredString(width / 2, y, line)
        y -= size + 4
    return y


def render_enrollment_pdf(
    record: Mapping,
    *,
    qr_png: bytes,
    announcement: Optional[str] = None,
    title: str = "INTERNSHIP KICKOFF ENROLLMENT",
    welcome: str = WELCOME_LINE,
) -> bytes:
    """One-page confirmation the applicant brings to the event for check-in."""
    buffer = io.BytesIO()
    p = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    p.setFillColor(NAVY)
    p.rect(0, height - 4 * cm, width, 4 * cm, stroke=0, fill=1)
    p.setFillColor(ACCENT)
    _centered_lines(p, title, y=height - 2.3 * cm, font="Helvetica-Bold", size=20, width=width)

    # welcome box under the header band
    box_top = height - 4.6 * cm
    box_height = 1.4 * cm
    p.setFillColor(PANEL)
    p.setStrokeColor(ACCENT)
    p.setLineWidth(0.5)
    p.roundRect(2 * cm, box_top - box_height, width - 4 * cm, box_height, 6, stroke=1, fill=1)
    p.setFillColor(ACCENT)
    p.setFont("Helvetica-Bold", 14)
    p.drawCentredString(width / 2, box_top - box_height / 2 - 5, welcome)

    y = box_top - box_height - 1 * cm
    p.setFillColor(BODY)
    if announcement and announcement.strip():
        y = _centered_lines(p, announcement.strip(), y=y, font="Helvetica", size=11, width=width)
        y -= 0.5 * cm

    qr_size = 6 * cm
    p.drawImage(ImageReader(io.BytesIO(qr_png)), (width - qr_size) / 2, y - qr_size, qr_size, qr_size)
    y -= qr_size + 1.2 * cm

    for label, value in (
        ("APPLICATION ID", str(record.get("applicationId", ""))),
        ("APPLICANT NAME", str(record.get("applicantName", "")).upper()),
    ):
        p.setFillColor(ACCENT)
        p.setFont("Helvetica-Bold", 10)
        p.drawCentredString(width / 2, y, label)
        p.setFillColor(BODY)
        p.setFont("Helvetica-Bold", 14)
        p.drawCentredString(width / 2, y - 0.7 * cm, value)
        y -= 2 * cm

    p.setFillColor(BODY)
    p.setFont("Helvetica-Oblique", 10)
    p.drawCentredString(width / 2, BOTTOM_MARGIN + 0.6 * cm, "Keep this document for your entry")
    p.setFont("Helvetica", 9)
    p.drawCentredString(width / 2, BOTTOM_MARGIN, "Internship Kickoff Program")

    p.save()
    return buffer.getvalue()


def render_details_pdf(record: Mapping) -> bytes:
    """Full application sheet for admins, including attendance and comments."""
    buffer = io.BytesIO()
    p = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    p.setFillColor(NAVY)
    p.rect(0, height - 3 * cm, width, 3 * cm, stroke=0, fill=1)
    p.setFillColor(ACCENT)
    p.setFont("Helvetica-Bold", 16)
    p.drawCentredString(width / 2, height - 1.8 * cm, "Internship Application Details")

    y = height - 4.2 * cm

    def ensure_room(needed: float) -> None:
        nonlocal y
        if y - needed < BOTTOM_MARGIN:
            p.showPage()
            y = height - 2 * cm

    def section(heading: str) -> None:
        nonlocal y
        ensure_room(1.2 * cm)
        y -= 0.3 * cm
        p.setFillColor(ACCENT)
        p.setFont("Helvetica-Bold", 13)
        p.drawString(2 * cm, y, heading)
        y -= 0.6 * cm

    def line(label: str, value: object) -> None:
        nonlocal y
        if value in (None, ""):
            return
        p.setFillColor(BODY)
        p.setFont("Helvetica", 10)
        for chunk in simpleSplit(f"{label}: {value}", "Helvetica", 10, width - 4 * cm):
            ensure_room(0.5 * cm)
            p.drawString(2 * cm, y, chunk)
            y -= 0.5 * cm

    section("Application")
    line("Application ID", record.get("applicationId"))
    line("Submitted At", record.get("submittedAt"))

    section("Personal Information")
    line("Name", record.get("applicantName"))
    line("Email", record.get("email"))
    line("Phone", record.get("phone"))
    line("LinkedIn", record.get("linkedIn"))

    section("Academic Information")
    line("University", record.get("university"))
    line("Major", record.get("major"))
    line("Minor", record.get("minor"))
    line("Year of Study", record.get("yearOfStudy"))
    line("CGPA", record.get("gpa"))
    line("Expected Graduation", record.get("expectedGraduation"))

    section("Internship Preferences")
    line("Department", record.get("department"))
    line("Position", record.get("position"))
    line("Work Type", record.get("workType"))
    line("Skills", record.get("skills"))
    line("Previous Experience", record.get("previousExperience"))

    section("Reference")
    line("Name", record.get("referenceName"))
    line("Title", record.get("referenceTitle"))
    line("Email", record.get("referenceEmail"))
    line("Phone", record.get("referencePhone"))

    section("Attendance")
    line("Status", attendance_status(record).value)
    line("Checked In", record.get("checkInTime"))
    line("Checked Out", record.get("checkOutTime"))
    duration = attendance_duration(record)
    if duration is not None:
        line("Duration", str(duration))

    if record.get("coverLetter"):
        section("Cover Letter")
        line("Text", record.get("coverLetter"))

    if record.get("comments"):
        section("Admin Comments")
        line("Comments", record.get("comments"))
        line("Last Updated", record.get("lastCommentUpdate"))

    p.save()
    return buffer.getvalue()
