# services/weight-balance-service/src/apps/core/services/pdf_service.py
"""
PDF Service

Builds the load sheet PDF from the submitted form markup and chart captures.
"""

import base64
import binascii
import io
import logging
import re
from html import escape
from html.parser import HTMLParser
from typing import List, Optional, Sequence

from django.conf import settings
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    CondPageBreak,
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from ..exceptions import InvalidGraphImage, PDFGenerationFailed
from .chart_service import PNG_DATA_URI_PREFIX

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
DEFAULT_PLACEHOLDER = '-'
PAGE_SIZES = {'A4': A4, 'LETTER': letter}


# =============================================================================
# Markup table extraction
# =============================================================================

class _Cell:
    def __init__(self):
        self.inputs: List[str] = []
        self.spans: List[str] = []
        self.text: List[str] = []

    def value(self, placeholder: str) -> str:
        for parts in (self.inputs, self.spans, self.text):
            joined = ' '.join(p for p in parts if p)
            if joined:
                return joined
        return placeholder


class SheetTableParser(HTMLParser):
    """
    Collects ``<table><tr><td>`` rows from form markup.

    A cell's text is the value of its nested ``<input>`` elements, else the
    text of its ``<span>`` elements, else its own text; empty cells get the
    placeholder.
    """

    def __init__(self, placeholder: str = DEFAULT_PLACEHOLDER):
        super().__init__(convert_charrefs=True)
        self.placeholder = placeholder
        self.rows: List[List[str]] = []
        self._table_depth = 0
        self._row: Optional[List[_Cell]] = None
        self._cell: Optional[_Cell] = None
        self._span_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag == 'table':
            self._table_depth += 1
        elif not self._table_depth:
            return
        elif tag == 'tr':
            self._close_row()
            self._row = []
        elif tag in ('td', 'th'):
            if self._row is None:
                self._row = []
            self._close_cell()
            self._cell = _Cell()
        elif tag == 'input' and self._cell is not None:
            value = dict(attrs).get('value') or ''
            self._cell.inputs.append(value.strip())
        elif tag == 'span' and self._cell is not None:
            self._span_depth += 1

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)
        if tag == 'span':
            self.handle_endtag(tag)

    def handle_endtag(self, tag):
        if not self._table_depth:
            return
        if tag in ('td', 'th'):
            self._close_cell()
        elif tag == 'tr':
            self._close_row()
        elif tag == 'span' and self._span_depth:
            self._span_depth -= 1
        elif tag == 'table':
            self._close_row()
            self._table_depth -= 1

    def handle_data(self, data):
        if self._cell is None:
            return
        text = ' '.join(data.split())
        if not text:
            return
        if self._span_depth:
            self._cell.spans.append(text)
        else:
            self._cell.text.append(text)

    def close(self):
        super().close()
        self._close_row()

    def _close_cell(self):
        if self._cell is not None and self._row is not None:
            self._row.append(self._cell)
        self._cell = None
        self._span_depth = 0

    def _close_row(self):
        self._close_cell()
        if self._row:
            self.rows.append([cell.value(self.placeholder) for cell in self._row])
        self._row = None


def parse_sheet_table(html: str, placeholder: Optional[str] = None) -> List[List[str]]:
    """Rows of the first-level tables in ``html``, padded to equal width."""
    if placeholder is None:
        placeholder = getattr(settings, 'WEIGHT_BALANCE', {}).get('TABLE_PLACEHOLDER', DEFAULT_PLACEHOLDER)
    parser = SheetTableParser(placeholder=placeholder)
    parser.feed(html or '')
    parser.close()

    width = max((len(row) for row in parser.rows), default=0)
    return [row + [placeholder] * (width - len(row)) for row in parser.rows]


# =============================================================================
# Graph images
# =============================================================================

def validate_graph_image(value) -> Optional[bytes]:
    """
    Decode a chart capture.

    Args:
        value: None, or a ``data:image/png;base64,`` URI

    Returns:
        PNG bytes, or None when no image was supplied

    Raises:
        InvalidGraphImage: If the value is not a base64 encoded PNG
    """
    if value is None:
        return None
    if not isinstance(value, str) or not value.startswith(PNG_DATA_URI_PREFIX):
        raise InvalidGraphImage()
    try:
        data = base64.b64decode(value[len(PNG_DATA_URI_PREFIX):], validate=True)
    except (binascii.Error, ValueError):
        raise InvalidGraphImage("Graph image is not valid base64.")
    if not data.startswith(PNG_SIGNATURE):
        raise InvalidGraphImage("Graph image is not a PNG.")
    return data


def build_pdf_filename(aircraft_type: str, date: str) -> str:
    safe_type = re.sub(r'[^A-Za-z0-9-]', '-', str(aircraft_type))
    safe_date = re.sub(r'[^A-Za-z0-9-]', '-', str(date))
    return f"weight_balance_{safe_type}_{safe_date}.pdf"


# =============================================================================
# Document assembly
# =============================================================================

class PDFService:
    """Assembles the load sheet document with ReportLab."""

    TABLE_FALLBACK = "Table failed to render"
    HEADER_FALLBACK = "Header failed to render"

    @classmethod
    def _page_size(cls):
        name = getattr(settings, 'WEIGHT_BALANCE', {}).get('PDF_PAGE_SIZE', 'A4')
        return PAGE_SIZES.get(str(name).upper(), A4)

    @classmethod
    def _styles(cls):
        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            'SheetTitle',
            parent=styles['Heading1'],
            fontSize=16,
            spaceAfter=12,
        )
        return styles, title_style

    @classmethod
    def _header_flowables(cls, aircraft_type, date, pilot_name, route, registration) -> list:
        styles, title_style = cls._styles()
        elements = [
            Paragraph("WEIGHT AND BALANCE SHEET", title_style),
            Paragraph(f"Aircraft Type: {escape(str(aircraft_type))}", styles['Normal']),
            Paragraph(f"Date: {escape(str(date))}", styles['Normal']),
        ]
        for label, value in (('Pilot', pilot_name), ('Route', route), ('Registration', registration)):
            if value:
                elements.append(Paragraph(f"{label}: {escape(str(value))}", styles['Normal']))
        elements.append(Spacer(1, 12))
        return elements

    @classmethod
    def _table_flowables(cls, html: str, width: float) -> list:
        rows = parse_sheet_table(html)
        if not rows:
            raise ValueError("No table rows found in submitted markup")

        table = Table(rows, repeatRows=1, colWidths=[width / len(rows[0])] * len(rows[0]))
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#4472C4')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 8),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F2F2F2')]),
        ]))
        return [table, Spacer(1, 12)]

    @classmethod
    def _image_flowables(cls, png: bytes, max_width: float, max_height: float) -> list:
        img_width, img_height = ImageReader(io.BytesIO(png)).getSize()
        scale = min(max_width / img_width, max_height / img_height)
        width, height = img_width * scale, img_height * scale
        return [
            CondPageBreak(height),
            Image(io.BytesIO(png), width=width, height=height),
            Spacer(1, 12),
        ]

    @classmethod
    def build_flowables(
        cls,
        html: str,
        aircraft_type: str,
        date: str,
        graph_images: Sequence[Optional[bytes]] = (),
        pilot_name: str = '',
        route: str = '',
        registration: str = '',
        frame_width: float = A4[0] - 30 * mm,
        frame_height: float = A4[1] - 30 * mm,
    ) -> list:
        """
        Document content, one stage at a time.

        A stage that fails is replaced by a short notice so the rest of the
        sheet still renders.
        """
        styles, _ = cls._styles()
        elements = []

        try:
            elements.extend(cls._header_flowables(aircraft_type, date, pilot_name, route, registration))
        except Exception:
            logger.exception("PDF header stage failed")
            elements.append(Paragraph(cls.HEADER_FALLBACK, styles['Normal']))

        try:
            elements.extend(cls._table_flowables(html, frame_width))
        except Exception:
            logger.exception("PDF table stage failed")
            elements.append(Paragraph(cls.TABLE_FALLBACK, styles['Normal']))

        for index, png in enumerate(graph_images or (), start=1):
            if png is None:
                continue
            try:
                elements.extend(cls._image_flowables(png, frame_width, frame_height))
            except Exception:
                logger.exception(f"PDF graph {index} stage failed")
                elements.append(Paragraph(f"Graph {index} failed to render", styles['Normal']))

        return elements

    @classmethod
    def build_sheet_pdf(
        cls,
        html: str,
        aircraft_type: str,
        date: str,
        graph_images: Sequence[Optional[bytes]] = (),
        pilot_name: str = '',
        route: str = '',
        registration: str = '',
    ) -> bytes:
        """
        Render the load sheet PDF.

        Args:
            html: Form markup holding the load sheet table
            aircraft_type: Aircraft type shown in the header
            date: Sheet date shown in the header
            graph_images: Decoded PNG chart captures, None entries skipped
            pilot_name: Optional header field
            route: Optional header field
            registration: Optional header field

        Returns:
            PDF bytes

        Raises:
            PDFGenerationFailed: If the document cannot be assembled at all
        """
        output = io.BytesIO()
        doc = SimpleDocTemplate(
            output,
            pagesize=cls._page_size(),
            rightMargin=15 * mm,
            leftMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
            title=f"Weight and Balance Sheet - {aircraft_type}",
        )

        elements = cls.build_flowables(
            html,
            aircraft_type,
            date,
            graph_images=graph_images,
            pilot_name=pilot_name,
            route=route,
            registration=registration,
            # Frame padding is 6pt on every side
            frame_width=doc.width - 12,
            frame_height=doc.height - 24,
        )

        try:
            doc.build(elements)
        except Exception as e:
            logger.exception("PDF build failed")
            raise PDFGenerationFailed() from e

        content = output.getvalue()
        if not content:
            raise PDFGenerationFailed("Generated PDF is empty")

        logger.info(f"Built weight & balance PDF for {aircraft_type} ({len(content)} bytes)")
        return content
