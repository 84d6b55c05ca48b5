# services/weight-balance-service/src/apps/core/services/__init__.py
"""
Weight & Balance Service - Service Layer

Load sheet arithmetic, envelope checks, form state, fuel planning,
chart rendering, PDF assembly and mail delivery.
"""

from .envelope_service import (
    DEFAULT_TOLERANCE,
    EnvelopeCheck,
    EnvelopeStatus,
    check_envelope,
    get_tolerance,
    is_near_vertex,
    is_point_in_polygon,
    is_within_envelope,
)
from .calculator_service import (
    LoadStation,
    SheetResult,
    calculate_moment,
    calculate_sheet,
    center_of_gravity,
    clamp_weight,
    is_numeric_text,
    parse_number,
)
from .form_state_service import (
    EditRejection,
    EditResult,
    FormSession,
    LoadSheetState,
    StationState,
    apply_edit,
)
from .fuel_planning_service import FuelCategory, FuelPlan, FuelPlanningService
from .chart_service import render_charts, render_envelope_chart, render_loading_graph, to_data_uri
from .pdf_service import (
    PDFService,
    SheetTableParser,
    build_pdf_filename,
    parse_sheet_table,
    validate_graph_image,
)
from .mail_service import MailService

__all__ = [
    # Envelope
    'DEFAULT_TOLERANCE',
    'EnvelopeCheck',
    'EnvelopeStatus',
    'check_envelope',
    'get_tolerance',
    'is_near_vertex',
    'is_point_in_polygon',
    'is_within_envelope',
    # Calculator
    'LoadStation',
    'SheetResult',
    'calculate_moment',
    'calculate_sheet',
    'center_of_gravity',
    'clamp_weight',
    'is_numeric_text',
    'parse_number',
    # Form state
    'EditRejection',
    'EditResult',
    'FormSession',
    'LoadSheetState',
    'StationState',
    'apply_edit',
    # Fuel planning
    'FuelCategory',
    'FuelPlan',
    'FuelPlanningService',
    # Charts
    'render_charts',
    'render_envelope_chart',
    'render_loading_graph',
    'to_data_uri',
    # PDF
    'PDFService',
    'SheetTableParser',
    'build_pdf_filename',
    'parse_sheet_table',
    'validate_graph_image',
    # Mail
    'MailService',
]
