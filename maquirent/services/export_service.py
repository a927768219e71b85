"""
Export Service
Renders collection records as downloadable CSV, spreadsheet or PDF files.

Handles:
- CSV generation with headers taken from the first record
- "excel" exports (CSV content served with the spreadsheet MIME type)
- PDF reports rendered with ReportLab
- Download filenames and MIME types per format
"""

import csv
import io
import json
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from maquirent.utils.logger import get_logger

logger = get_logger("maquirent.services.export_service")

EMPTY_EXPORT_MESSAGE = 'No hay datos para exportar'
UNSUPPORTED_FORMAT_MESSAGE = 'Formato de exportación no soportado'

EXPORT_FORMATS = {
    'csv': ('csv', 'text/csv; charset=utf-8'),
    'excel': ('xlsx', 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'),
    'pdf': ('pdf', 'application/pdf'),
}

# Longer cell values are shortened in PDF tables
PDF_CELL_LIMIT = 30


@dataclass
class ExportFile:
    filename: str
    mimetype: str
    content: bytes


def _cell(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class ExportService:
    """
    Service for collection exports.

    Provides methods for:
    - Generating CSV, spreadsheet and PDF content
    - Building the download filename for a module
    """

    @staticmethod
    def generate_csv(records: List[Dict[str, Any]]) -> str:
        """
        Render records as CSV.

        Columns are the keys of the first record. Values containing commas,
        quotes or newlines are quoted.

        Args:
            records: Records of one collection

        Returns:
            str: CSV text, or the empty-export message when there are no records
        """
        if not records:
            return EMPTY_EXPORT_MESSAGE

        headers = list(records[0].keys())
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(headers)
        for record in records:
            writer.writerow([_cell(record.get(header)) for header in headers])
        return buffer.getvalue().rstrip('\n')

    @staticmethod
    def generate_excel(records: List[Dict[str, Any]]) -> str:
        return ExportService.generate_csv(records)

    @staticmethod
    def generate_pdf(records: List[Dict[str, Any]], title: str = 'Export') -> bytes:
        """
        Render records as a PDF report: a title, a record count and one
        table row per record.

        Args:
            records: Records of one collection
            title: Report title

        Returns:
            bytes: PDF document
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=landscape(letter), title=title)
        styles = getSampleStyleSheet()
        elements = [Paragraph(title, styles['Title']), Spacer(1, 12)]

        if not records:
            elements.append(Paragraph(EMPTY_EXPORT_MESSAGE, styles['Normal']))
        else:
            elements.append(Paragraph(f"Total de registros: {len(records)}", styles['Normal']))
            elements.append(Spacer(1, 12))

            headers = list(records[0].keys())
            data = [headers]
            for record in records:
                row = []
                for header in headers:
                    text = _cell(record.get(header))
                    if len(text) > PDF_CELL_LIMIT:
                        text = text[:PDF_CELL_LIMIT] + "..."
                    row.append(text)
                data.append(row)

            table = Table(data, repeatRows=1)
            table.setStyle(TableStyle([
                ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
                ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
                ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
                ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
                ('FONTSIZE', (0, 0), (-1, 0), 8),
                ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
                ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
                ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
                ('FONTSIZE', (0, 1), (-1, -1), 7),
            ]))
            elements.append(table)

        doc.build(elements)
        return buffer.getvalue()

    @staticmethod
    def build_filename(module: str, export_format: str, today: Optional[date] = None) -> str:
        """
        Args:
            module: Module name used as the filename prefix
            export_format: One of csv, excel, pdf
            today: Date stamp (defaults to today)

        Returns:
            str: "<module>_<YYYY-MM-DD>.<ext>"
        """
        extension, _ = ExportService._format_info(export_format)
        stamp = (today or date.today()).isoformat()
        return f"{module}_{stamp}.{extension}"

    @staticmethod
    def export(module: str, records: List[Dict[str, Any]], export_format: str,
               title: Optional[str] = None, today: Optional[date] = None) -> ExportFile:
        """
        Build a downloadable export.

        Raises:
            ValueError: If the format is not csv, excel or pdf
        """
        extension, mimetype = ExportService._format_info(export_format)

        if export_format == 'csv':
            content = ExportService.generate_csv(records).encode('utf-8')
        elif export_format == 'excel':
            content = ExportService.generate_excel(records).encode('utf-8')
        else:
            content = ExportService.generate_pdf(records, title or module)

        logger.info(f"Exported {len(records)} {module} records as {export_format}")
        return ExportFile(
            filename=ExportService.build_filename(module, export_format, today),
            mimetype=mimetype,
            content=content,
        )

    @staticmethod
    def _format_info(export_format: str):
        if export_format not in EXPORT_FORMATS:
            raise ValueError(UNSUPPORTED_FORMAT_MESSAGE)
        return EXPORT_FORMATS[export_format]
