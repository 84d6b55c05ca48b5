# services/weight-balance-service/src/apps/api/views/__init__.py
"""
Weight & Balance API Views
"""

from .sheet_views import SheetListView, SheetSaveView
from .calculation_views import AircraftListView, CalculateView, ChartsView, FuelPlanView
from .form_views import FormEditView, FormResetView, FormStateView
from .pdf_views import GeneratePDFView

__all__ = [
    'SheetListView',
    'SheetSaveView',
    'AircraftListView',
    'CalculateView',
    'ChartsView',
    'FuelPlanView',
    'FormEditView',
    'FormResetView',
    'FormStateView',
    'GeneratePDFView',
]
