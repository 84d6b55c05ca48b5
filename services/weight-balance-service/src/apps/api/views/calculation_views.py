# services/weight-balance-service/src/apps/api/views/calculation_views.py
"""
Calculation Views

Stateless sheet calculation, chart rendering, aircraft configuration and
fuel planning.
"""

import logging

from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.aircraft import AIRCRAFT_CONFIGS
from apps.core.services import FuelPlanningService, calculate_sheet, render_charts
from apps.api.serializers import (
    AircraftConfigSerializer,
    FuelPlanSerializer,
    SheetCalculationSerializer,
)

logger = logging.getLogger(__name__)


class CalculateView(APIView):
    """
    Compute a full sheet from station inputs.

    POST /api/weightbalance/calculate
    """

    def post(self, request):
        serializer = SheetCalculationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = calculate_sheet(
            serializer.validated_data['aircraft_type'],
            serializer.validated_data['stations'],
        )
        return Response(result.to_dict())


class ChartsView(APIView):
    """
    Render the envelope plot and loading graph as PNG data URIs.

    POST /api/weightbalance/charts
    """

    def post(self, request):
        serializer = SheetCalculationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = calculate_sheet(
            serializer.validated_data['aircraft_type'],
            serializer.validated_data['stations'],
        )
        charts = render_charts(result)
        return Response({
            'envelope': charts['envelope'],
            'loading': charts['loading'],
            'result': result.to_dict(),
        })


class AircraftListView(APIView):
    """
    Static configuration of every supported aircraft.

    GET /api/weightbalance/aircraft/
    """

    def get(self, request):
        serializer = AircraftConfigSerializer(list(AIRCRAFT_CONFIGS.values()), many=True)
        return Response(serializer.data)


class FuelPlanView(APIView):
    """
    Minimum legal fuel table.

    POST /api/weightbalance/fuel-plan
    """

    def post(self, request):
        serializer = FuelPlanSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        plan = FuelPlanningService.plan(
            serializer.validated_data['aircraft_type'],
            serializer.validated_data['rows'],
            last_edited=serializer.validated_data.get('last_edited'),
        )
        return Response(plan.to_dict())
