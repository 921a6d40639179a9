from __future__ import annotations

from reportlab.pdfgen import canvas

from src.intern_portal.intern_portal.documents.pdf import WELCOME_LINE, render_details_pdf, render_enrollment_pdf
from src.intern_portal.intern_portal.scanning.payload import build_payload
from src.intern_portal.intern_portal.scanning.qr import render_qr_png

RECORD = {
    "applicationId": "INT-1700000000000-ABC1234",
    "applicantName": "Asha Rao",
    "email": "asha@example.com",
    "phone": "+919800000001",
    "university": "IIT Madras",
    "major": "Computer Science",
    "department": "Engineering",
    "position": "Backend Intern",
    "submittedAt": "2026-01-31T10:00:00.000Z",
    "checkInTime": "2026-02-01T08:30:00.000Z",
    "checkOutTime": "2026-02-01T12:45:00.000Z",
    "coverLetter": "I like building reliable services. " * 40,
    "comments": "Strong candidate",
}


def test_enrollment_pdf():
    pdf = render_enrollment_pdf(
        RECORD,
        qr_png=render_qr_png(build_payload(RECORD)),
        announcement="Kickoff starts at 9:00 in Hall B. Bring a photo ID.",
    )

    assert pdf.startswith(b"%PDF")


def test_enrollment_pdf_without_announcement():
    assert render_enrollment_pdf(RECORD, qr_png=render_qr_png("x")).startswith(b"%PDF")


def test_details_pdf_with_long_cover_letter():
    pdf = render_details_pdf(RECORD)

    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def _record_centred_text(monkeypatch):
    drawn = []
    original = canvas.Canvas.drawCentredString

    def spy(self, x, y, text, *args, **kwargs):
        drawn.append((y, text))
        return original(self, x, y, text, *args, **kwargs)

    monkeypatch.setattr(canvas.Canvas, "drawCentredString", spy)
    return drawn


def test_enrollment_pdf_welcome_line_sits_between_title_and_id(monkeypatch):
    drawn = _record_centred_text(monkeypatch)

    render_enrollment_pdf(RECORD, qr_png=render_qr_png("x"), announcement="Hall B")

    y_of = {text: y for y, text in drawn}
    assert y_of["INTERNSHIP KICKOFF ENROLLMENT"] > y_of[WELCOME_LINE] > y_of["Hall B"] > y_of[RECORD["applicationId"]]


def test_enrollment_pdf_custom_welcome(monkeypatch):
    drawn = _record_centred_text(monkeypatch)

    render_enrollment_pdf(RECORD, qr_png=render_qr_png("x"), welcome="Welcome, Spark 2026 cohort")

    assert "Welcome, Spark 2026 cohort" in [text for _, text in drawn]
    assert WELCOME_LINE not in [text for _, text in drawn]
