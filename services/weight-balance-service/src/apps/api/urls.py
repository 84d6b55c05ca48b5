# services/weight-balance-service/src/apps/api/urls.py
"""
Weight & Balance API URL Configuration
"""

from django.urls import path

from apps.api.views import (
    AircraftListView,
    CalculateView,
    ChartsView,
    FormEditView,
    FormResetView,
    FormStateView,
    FuelPlanView,
    GeneratePDFView,
    SheetListView,
    SheetSaveView,
)

app_name = 'api'

urlpatterns = [
    path('weightbalance/', SheetListView.as_view(), name='sheet-list'),
    path('weightbalance/save', SheetSaveView.as_view(), name='sheet-save'),
    path('weightbalance/calculate', CalculateView.as_view(), name='calculate'),
    path('weightbalance/charts', ChartsView.as_view(), name='charts'),
    path('weightbalance/aircraft/', AircraftListView.as_view(), name='aircraft-list'),
    path('weightbalance/fuel-plan', FuelPlanView.as_view(), name='fuel-plan'),
    path('weightbalance/form/', FormStateView.as_view(), name='form-state'),
    path('weightbalance/form/edit', FormEditView.as_view(), name='form-edit'),
    path('weightbalance/form/reset', FormResetView.as_view(), name='form-reset'),
    path('generate-pdf', GeneratePDFView.as_view(), name='generate-pdf'),
]

# =============================================================================
# API Endpoint Summary
# =============================================================================
#
#   GET    /api/weightbalance/             - List stored sheets
#   POST   /api/weightbalance/save         - Store a sheet
#   POST   /api/weightbalance/calculate    - Compute a sheet
#   POST   /api/weightbalance/charts       - Envelope and loading charts
#   GET    /api/weightbalance/aircraft/    - Aircraft configurations
#   POST   /api/weightbalance/fuel-plan    - Minimum legal fuel
#   GET    /api/weightbalance/form/        - Session form state
#   POST   /api/weightbalance/form/edit    - Apply a field edit
#   POST   /api/weightbalance/form/reset   - Restore defaults
#   POST   /api/generate-pdf               - Download or email the PDF
#
# =============================================================================
