"""Report builder for exporting registrations to Excel and PDF"""

import io
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Sequence
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from regdesk.models.registration import Registration
from regdesk.models.registration_fields import EXPORT_FIELDS, FIELDS_BY_NAME, FieldSpec
from regdesk.services.exceptions import EmptyExportError
from regdesk.services.file_service import content_disposition

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

REPORT_TITLE = "Training Registrations Report"
SHEET_TITLE = "Registrations"

# Fields printed in each PDF block, in order
PDF_FIELDS = (
    "ticketNo",
    "fullName",
    "email",
    "phoneNumber",
    "currentProfession",
    "specialization",
    "trainingPrograms",
    "status",
)


class ExportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"

    @classmethod
    def parse(cls, value: str) -> "ExportFormat":
        normalized = (value or "").strip().lower()
        if normalized in ("xlsx", "xls"):
            normalized = cls.EXCEL.value
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Invalid format '{value}'. Expected 'pdf' or 'excel'"
            ) from None

    @property
    def extension(self) -> str:
        return "xlsx" if self is ExportFormat.EXCEL else "pdf"

    @property
    def media_type(self) -> str:
        return XLSX_MEDIA_TYPE if self is ExportFormat.EXCEL else PDF_MEDIA_TYPE


@dataclass
class ExportReport:
    content: bytes
    media_type: str
    filename: str

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": self.media_type,
            "Content-Disposition": content_disposition(self.filename),
        }


def display_value(spec: FieldSpec, value: Any) -> str:
    """Human-readable text for a field value"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return spec.true_text if value else spec.false_text
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _cell_value(spec: FieldSpec, value: Any):
    # Numbers and plain dates keep their native cell types
    if value is None:
        return None
    if isinstance(value, bool):
        return display_value(spec, value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return display_value(spec, value)


def registration_row(registration: Registration) -> List[Any]:
    """Flatten a registration into spreadsheet cells, one per export column"""
    return [
        _cell_value(spec, getattr(registration, spec.attr, None))
        for spec in EXPORT_FIELDS
    ]


def build_excel(registrations: Sequence[Registration]) -> bytes:
    """Serialize registrations into a single-sheet xlsx workbook"""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append([spec.label for spec in EXPORT_FIELDS])
    header_fill = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = header_fill

    for registration in registrations:
        ws.append(registration_row(registration))

    for index, spec in enumerate(EXPORT_FIELDS, start=1):
        width = max(len(spec.label), 12)
        ws.column_dimensions[get_column_letter(index)].width = min(width + 2, 50)
    ws.freeze_panes = "A2"

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_pdf(registrations: Sequence[Registration]) -> bytes:
    """Render registrations as a title followed by one labelled block each"""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=REPORT_TITLE,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=22,
        textColor=colors.HexColor("#1a365d"),
        alignment=1,
        spaceAfter=6,
    )
    meta_style = ParagraphStyle(
        "ReportMeta",
        parent=styles["Normal"],
        fontSize=9,
        textColor=colors.HexColor("#718096"),
        alignment=1,
        spaceAfter=12,
    )
    heading_style = ParagraphStyle(
        "RegistrationHeading",
        parent=styles["Heading3"],
        textColor=colors.HexColor("#2d3748"),
        spaceBefore=8,
        spaceAfter=4,
    )
    body_style = ParagraphStyle(
        "RegistrationBody",
        parent=styles["Normal"],
        fontSize=11,
        leading=14,
    )

    generated_at = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    content = [
        Paragraph(REPORT_TITLE, title_style),
        Paragraph(
            f"Generated {generated_at} - {len(registrations)} registration(s)",
            meta_style,
        ),
    ]

    for index, registration in enumerate(registrations, start=1):
        content.append(Paragraph(f"Registration {index}", heading_style))
        for name in PDF_FIELDS:
            spec = FIELDS_BY_NAME[name]
            value = display_value(spec, getattr(registration, spec.attr, None)) or "N/A"
            content.append(
                Paragraph(f"<b>{escape(spec.label)}:</b> {escape(value)}", body_style)
            )
        content.append(Spacer(1, 0.3 * cm))

    doc.build(content)
    return buffer.getvalue()


def build_report(
    registrations: Sequence[Registration],
    export_format: ExportFormat,
    filename_stem: str = "registrations",
) -> ExportReport:
    """
    Build an export of the given registrations.

    Args:
        registrations: Registrations in the order they should appear
        export_format: Spreadsheet or PDF
        filename_stem: Attachment name without extension

    Returns:
        ExportReport with the file bytes and response headers

    Raises:
        EmptyExportError: If there is nothing to export
    """
    if not registrations:
        raise EmptyExportError("No registrations found for export")

    if export_format is ExportFormat.EXCEL:
        content = build_excel(registrations)
    else:
        content = build_pdf(registrations)

    logger.info(
        f"Built {export_format.value} export of {len(registrations)} registrations "
        f"({len(content)} bytes)"
    )
    return ExportReport(
        content=content,
        media_type=export_format.media_type,
        filename=f"{filename_stem}.{export_format.extension}",
    )
