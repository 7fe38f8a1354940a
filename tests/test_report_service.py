"""Tests for the Excel and PDF report builder"""

import io
import uuid
from datetime import date, datetime, timezone

import pytest
from openpyxl import load_workbook

from regdesk.models.registration import Registration, RegistrationStatus
from regdesk.models.registration_fields import EXPORT_FIELDS
from regdesk.services.exceptions import EmptyExportError
from regdesk.services.report_service import (
    PDF_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    ExportFormat,
    build_report,
    registration_row,
)


def _registrations(count):
    return [
        Registration(
            id=uuid.uuid4(),
            ticket_no=211550 + i,
            full_name=f"Applicant {i}",
            email=f"applicant{i}@example.com",
            phone_number="555-0100",
            dob=date(1990, 1, i + 1),
            call_date_time=datetime(2025, 3, i + 1, 9, 30, tzinfo=timezone.utc),
            current_profession="Surgeon",
            training_programs=["Laparoscopy", "Suturing"],
            status=RegistrationStatus.COMPLETED if i % 2 else RegistrationStatus.PENDING,
            is_expired=bool(i % 2),
        )
        for i in range(count)
    ]


class TestExcelExport:
    """Test spreadsheet generation"""

    def test_workbook_has_headers_and_rows_in_input_order(self):
        registrations = _registrations(3)

        report = build_report(registrations, ExportFormat.EXCEL)

        wb = load_workbook(io.BytesIO(report.content))
        ws = wb["Registrations"]
        rows = list(ws.iter_rows(values_only=True))

        assert list(rows[0]) == [spec.label for spec in EXPORT_FIELDS]
        assert len(rows) == 1 + len(registrations)

        name_column = [spec.name for spec in EXPORT_FIELDS].index("fullName")
        assert [row[name_column] for row in rows[1:]] == [
            r.full_name for r in registrations
        ]

    def test_row_values_are_human_readable(self):
        registration = _registrations(2)[1]
        row = dict(zip([spec.name for spec in EXPORT_FIELDS], registration_row(registration)))

        assert row["id"] == str(registration.id)
        assert row["ticketNo"] == 211551
        assert row["trainingPrograms"] == "Laparoscopy, Suturing"
        assert row["status"] == "completed"
        assert row["isExpired"] == "Expired"
        assert row["callDateTime"] == "2025-03-02 09:30"
        assert row["dob"] == date(1990, 1, 2)
        assert "createdAt" not in row

    def test_headers_for_excel(self):
        report = build_report(_registrations(1), ExportFormat.EXCEL)

        assert report.media_type == XLSX_MEDIA_TYPE
        assert report.filename == "registrations.xlsx"
        assert report.headers == {
            "Content-Type": XLSX_MEDIA_TYPE,
            "Content-Disposition": 'attachment; filename="registrations.xlsx"',
        }


class TestPdfExport:
    """Test PDF generation"""

    def test_pdf_is_generated(self):
        report = build_report(_registrations(40), ExportFormat.PDF)

        assert report.content.startswith(b"%PDF")
        assert report.media_type == PDF_MEDIA_TYPE
        assert report.headers["Content-Disposition"] == (
            'attachment; filename="registrations.pdf"'
        )

    def test_markup_in_values_is_escaped(self):
        registration = _registrations(1)[0]
        registration.full_name = "Ann <b>& Co"

        report = build_report([registration], ExportFormat.PDF)
        assert report.content.startswith(b"%PDF")

    def test_custom_filename_stem(self):
        report = build_report(_registrations(1), ExportFormat.PDF, filename_stem="march")
        assert report.filename == "march.pdf"


class TestExportFormat:
    """Test format parsing and the empty-export rule"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("pdf", ExportFormat.PDF),
            ("excel", ExportFormat.EXCEL),
            ("EXCEL", ExportFormat.EXCEL),
            ("xlsx", ExportFormat.EXCEL),
        ],
    )
    def test_parse(self, raw, expected):
        assert ExportFormat.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["csv", "", None])
    def test_parse_rejects_unknown_formats(self, raw):
        with pytest.raises(ValueError, match="Invalid format"):
            ExportFormat.parse(raw)

    @pytest.mark.parametrize("export_format", list(ExportFormat))
    def test_empty_export_is_an_error(self, export_format):
        with pytest.raises(EmptyExportError, match="No registrations found"):
            build_report([], export_format)
