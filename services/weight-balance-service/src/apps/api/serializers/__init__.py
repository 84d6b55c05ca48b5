# services/weight-balance-service/src/apps/api/serializers/__init__.py
"""
Weight & Balance API Serializers
"""

from .sheet_serializers import (
    FlexibleDateTimeField,
    LoadStationEntrySerializer,
    WeightBalanceSheetSerializer,
)
from .calculation_serializers import (
    AircraftConfigSerializer,
    AircraftTypeSerializer,
    FormEditSerializer,
    FuelPlanSerializer,
    SheetCalculationSerializer,
    StationInputSerializer,
)
from .pdf_serializers import GeneratePDFSerializer

__all__ = [
    # Sheets
    'FlexibleDateTimeField',
    'LoadStationEntrySerializer',
    'WeightBalanceSheetSerializer',
    # Calculation
    'AircraftConfigSerializer',
    'AircraftTypeSerializer',
    'FormEditSerializer',
    'FuelPlanSerializer',
    'SheetCalculationSerializer',
    'StationInputSerializer',
    # PDF
    'GeneratePDFSerializer',
]
